"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import (
    Depends,
    FastAPI,
    Header,
    HTTPException,
    Query,
    Request,
    Response,
    status,
)

from vital_track.api.schemas import (
    AuthResponse,
    ChatRequest,
    ChatResponse,
    DailyTotalsModel,
    DashboardModel,
    DashboardSummaryModel,
    ExerciseLogCreate,
    ExerciseLogModel,
    FoodLogCreate,
    FoodLogModel,
    HealthStatsModel,
    InsightResponse,
    LoginRequest,
    ProfileModel,
    RegisterRequest,
    StepLogCreate,
    StepLogModel,
    UserModel,
    WeightLogCreate,
    WeightLogModel,
    activity_model,
)
from vital_track.app_logging import configure_logging
from vital_track.containers import AppContainer
from vital_track.domain.logs import LogKind
from vital_track.domain.stats import DailyTotals
from vital_track.domain.users import AuthSession, User
from vital_track.services.aggregation import MAX_TIMESTAMP_MS
from vital_track.services.assistant import RECENT_ENTRY_LIMIT
from vital_track.services.auth import AuthError

_BEARER_PREFIX = "bearer "


def _get_container(request: Request) -> AppContainer:
    return request.app.state.container


def _bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    return authorization[len(_BEARER_PREFIX) :].strip() or None


async def require_user(
    token: str | None = Depends(_bearer_token),
    container: AppContainer = Depends(_get_container),
) -> User:
    """Resolve the signed-in user from the bearer token."""
    user = container.auth_service.get_current_user(token)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/auth/register", response_model=AuthResponse)
    async def register(payload: RegisterRequest) -> AuthResponse:
        """Create an account and sign it in."""
        try:
            session = container.auth_service.register(
                payload.email, payload.password, payload.name
            )
        except AuthError as exc:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        container.tracker_service.sync_profile_name(session.user.id, session.user.name)
        return _auth_response(session)

    @app.post("/auth/login", response_model=AuthResponse)
    async def login(payload: LoginRequest) -> AuthResponse:
        """Sign in with email and password."""
        try:
            session = container.auth_service.login(payload.email, payload.password)
        except AuthError as exc:
            logger.info("Login rejected: %s", exc)
            raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        container.tracker_service.sync_profile_name(session.user.id, session.user.name)
        return _auth_response(session)

    @app.post("/auth/logout", status_code=status.HTTP_204_NO_CONTENT)
    async def logout(token: str | None = Depends(_bearer_token)) -> Response:
        """End the current session."""
        if token:
            try:
                container.auth_service.logout(token)
            except AuthError:
                logger.exception("Logout failed")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/auth/me", response_model=UserModel)
    async def me(user: User = Depends(require_user)) -> UserModel:
        """Return the signed-in user."""
        return UserModel.model_validate(user)

    @app.get("/me/profile", response_model=ProfileModel)
    async def get_profile(user: User = Depends(require_user)) -> ProfileModel:
        """Return the user's profile."""
        return ProfileModel.model_validate(container.tracker_service.get_profile(user.id))

    @app.put("/me/profile", response_model=ProfileModel)
    async def put_profile(
        payload: ProfileModel, user: User = Depends(require_user)
    ) -> ProfileModel:
        """Replace the user's profile."""
        profile = container.tracker_service.update_profile(user.id, payload.to_domain())
        return ProfileModel.model_validate(profile)

    @app.get("/me/stats", response_model=HealthStatsModel)
    async def get_stats(user: User = Depends(require_user)) -> HealthStatsModel:
        """Return targets derived from the profile."""
        return HealthStatsModel.model_validate(
            container.tracker_service.get_stats(user.id)
        )

    @app.get("/me/today", response_model=DailyTotalsModel)
    async def get_today(
        at: int | None = Query(default=None, ge=0, le=MAX_TIMESTAMP_MS),
        user: User = Depends(require_user),
    ) -> DailyTotalsModel:
        """Return totals for the day containing ``at`` (epoch ms), default now."""
        return _totals_model(container.tracker_service.get_today(user.id, at))

    @app.get("/me/dashboard", response_model=DashboardModel)
    async def get_dashboard(
        at: int | None = Query(default=None, ge=0, le=MAX_TIMESTAMP_MS),
        user: User = Depends(require_user),
    ) -> DashboardModel:
        """Return profile, targets, totals and progress."""
        dashboard = container.tracker_service.get_dashboard(user.id, at)
        return DashboardModel(
            profile=ProfileModel.model_validate(dashboard.profile),
            stats=HealthStatsModel.model_validate(dashboard.stats),
            totals=_totals_model(dashboard.totals),
            summary=DashboardSummaryModel.model_validate(dashboard.summary),
        )

    @app.post(
        "/me/food", response_model=FoodLogModel, status_code=status.HTTP_201_CREATED
    )
    async def add_food(
        payload: FoodLogCreate, user: User = Depends(require_user)
    ) -> FoodLogModel:
        """Log a food entry."""
        log = container.tracker_service.add_food(user.id, **payload.model_dump())
        return FoodLogModel.model_validate(log)

    @app.get("/me/food", response_model=list[FoodLogModel])
    async def list_food(
        limit: int | None = Query(default=None, ge=1),
        user: User = Depends(require_user),
    ) -> list[FoodLogModel]:
        """Return food entries, newest first."""
        logs = container.tracker_service.list_food_logs(user.id, limit)
        return [FoodLogModel.model_validate(log) for log in logs]

    @app.post(
        "/me/exercise",
        response_model=ExerciseLogModel,
        status_code=status.HTTP_201_CREATED,
    )
    async def add_exercise(
        payload: ExerciseLogCreate, user: User = Depends(require_user)
    ) -> ExerciseLogModel:
        """Log an exercise entry."""
        log = container.tracker_service.add_exercise(user.id, **payload.model_dump())
        return ExerciseLogModel.model_validate(log)

    @app.get("/me/exercise", response_model=list[ExerciseLogModel])
    async def list_exercise(
        limit: int | None = Query(default=None, ge=1),
        user: User = Depends(require_user),
    ) -> list[ExerciseLogModel]:
        """Return exercise entries, newest first."""
        logs = container.tracker_service.list_exercise_logs(user.id, limit)
        return [ExerciseLogModel.model_validate(log) for log in logs]

    @app.post(
        "/me/weight", response_model=WeightLogModel, status_code=status.HTTP_201_CREATED
    )
    async def add_weight(
        payload: WeightLogCreate, user: User = Depends(require_user)
    ) -> WeightLogModel:
        """Log a weigh-in; it becomes the profile's current weight."""
        log = container.tracker_service.add_weight(user.id, **payload.model_dump())
        return WeightLogModel.model_validate(log)

    @app.get("/me/weight", response_model=list[WeightLogModel])
    async def weight_history(
        user: User = Depends(require_user),
    ) -> list[WeightLogModel]:
        """Return weigh-ins oldest first."""
        logs = container.tracker_service.get_weight_history(user.id)
        return [WeightLogModel.model_validate(log) for log in logs]

    @app.post(
        "/me/steps", response_model=StepLogModel, status_code=status.HTTP_201_CREATED
    )
    async def add_steps(
        payload: StepLogCreate, user: User = Depends(require_user)
    ) -> StepLogModel:
        """Log a step count."""
        log = container.tracker_service.add_steps(user.id, **payload.model_dump())
        return StepLogModel.model_validate(log)

    @app.delete("/me/{kind}/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_log(
        kind: LogKind, log_id: str, user: User = Depends(require_user)
    ) -> Response:
        """Remove an entry from one of the user's collections."""
        if not container.tracker_service.delete_log(user.id, kind, log_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post("/me/insights", response_model=InsightResponse)
    async def insights(user: User = Depends(require_user)) -> InsightResponse:
        """Ask the assistant for today's insights."""
        tracker = container.tracker_service
        profile = tracker.get_profile(user.id)
        insight = await container.assistant_service.get_insights(
            profile,
            tracker.get_stats(user.id),
            tracker.list_food_logs(user.id, RECENT_ENTRY_LIMIT),
            tracker.list_exercise_logs(user.id, RECENT_ENTRY_LIMIT),
            tracker.get_today(user.id).steps,
        )
        return InsightResponse(insight=insight)

    @app.post("/me/chat", response_model=ChatResponse)
    async def chat(
        payload: ChatRequest, user: User = Depends(require_user)
    ) -> ChatResponse:
        """Ask the assistant a question about the user's data."""
        dashboard = container.tracker_service.get_dashboard(user.id)
        answer = await container.assistant_service.ask(
            payload.question,
            dashboard.profile,
            dashboard.stats,
            dashboard.totals,
            [message.to_domain() for message in payload.history],
        )
        return ChatResponse(answer=answer)

    @app.get("/me/prompts")
    async def prompts(user: User = Depends(require_user)) -> dict[str, list[str]]:
        """Return suggested chat prompts."""
        return {"prompts": container.assistant_service.suggested_prompts()}

    return app


def _auth_response(session: AuthSession) -> AuthResponse:
    return AuthResponse(
        user=UserModel.model_validate(session.user),
        access_token=session.access_token,
    )


def _totals_model(totals: DailyTotals) -> DailyTotalsModel:
    return DailyTotalsModel(
        calories_in=totals.calories_in,
        protein=totals.protein,
        carbs=totals.carbs,
        fat=totals.fat,
        calories_out=totals.calories_out,
        steps=totals.steps,
        recent_activities=[activity_model(log) for log in totals.recent_activities],
    )
