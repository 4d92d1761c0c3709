"""Tests for the local JSON store adapters."""

import json
from dataclasses import replace

import pytest

from vital_track.adapters.local_auth_provider import LocalAuthProvider
from vital_track.adapters.local_store import JsonStore
from vital_track.adapters.local_tracker_repository import LocalTrackerRepository
from vital_track.domain.logs import ExerciseLog, FoodLog, LogKind, StepLog, WeightLog
from vital_track.domain.profile import DEFAULT_PROFILE, Goal
from vital_track.services.auth import AuthError


@pytest.fixture
def store(tmp_path) -> JsonStore:
    return JsonStore(tmp_path / "data" / "store.json")


def test_store_reads_empty_document_when_missing(store: JsonStore) -> None:
    assert store.read() == {}


def test_store_transaction_persists(store: JsonStore) -> None:
    with store.transaction() as data:
        data["answer"] = 42

    assert json.loads(store.path.read_text(encoding="utf-8")) == {"answer": 42}


def test_store_transaction_discards_on_error(store: JsonStore) -> None:
    with pytest.raises(ValueError), store.transaction() as data:
        data["answer"] = 42
        raise ValueError("abort")

    assert store.read() == {}


def test_tracker_repository_round_trips_profile(store: JsonStore) -> None:
    repository = LocalTrackerRepository(store)
    profile = replace(DEFAULT_PROFILE, goal=Goal.GAIN_MUSCLE, name="Ada")

    repository.save_profile("u1", profile)

    assert repository.get_profile("u1") == profile
    assert repository.get_profile("u2") is None


def test_tracker_repository_keeps_collections_per_user(store: JsonStore) -> None:
    repository = LocalTrackerRepository(store)
    food = FoodLog(
        id="f1", name="Oats", calories=350, protein=12, carbs=60, fat=6, timestamp=10
    )
    exercise = ExerciseLog(
        id="e1", type="Row", duration=20, calories_burned=180, timestamp=11
    )
    weight = WeightLog(id="w1", weight=80.5, timestamp=12)
    steps = StepLog(id="s1", steps=1234, timestamp=13)

    repository.append_log("u1", LogKind.FOOD, food)
    repository.append_log("u1", LogKind.EXERCISE, exercise)
    repository.append_log("u1", LogKind.WEIGHT, weight)
    repository.append_log("u1", LogKind.STEPS, steps)

    assert repository.list_logs("u1", LogKind.FOOD) == [food]
    assert repository.list_logs("u1", LogKind.EXERCISE) == [exercise]
    assert repository.list_logs("u1", LogKind.WEIGHT) == [weight]
    assert repository.list_logs("u1", LogKind.STEPS) == [steps]
    assert repository.list_logs("u2", LogKind.FOOD) == []


def test_tracker_repository_deletes_by_id(store: JsonStore) -> None:
    repository = LocalTrackerRepository(store)
    repository.append_log("u1", LogKind.STEPS, StepLog(id="s1", steps=1, timestamp=1))
    repository.append_log("u1", LogKind.STEPS, StepLog(id="s2", steps=2, timestamp=2))

    assert repository.delete_log("u1", LogKind.STEPS, "s1") is True
    assert repository.delete_log("u1", LogKind.STEPS, "missing") is False
    assert [log.id for log in repository.list_logs("u1", LogKind.STEPS)] == ["s2"]


def test_local_auth_register_and_login(store: JsonStore) -> None:
    provider = LocalAuthProvider(store)

    registered = provider.register("ada@example.com", "secret1", "Ada")
    logged_in = provider.login("ada@example.com", "secret1")

    assert registered.user == logged_in.user
    assert registered.user.id.startswith("local-")
    assert registered.access_token != logged_in.access_token
    assert provider.get_user(logged_in.access_token) == logged_in.user
    assert "secret1" not in store.path.read_text(encoding="utf-8")


def test_local_auth_rejects_duplicate_email(store: JsonStore) -> None:
    provider = LocalAuthProvider(store)
    provider.register("ada@example.com", "secret1", "Ada")

    with pytest.raises(AuthError, match="already exists"):
        provider.register("ada@example.com", "other12", "Ada")


def test_local_auth_rejects_bad_password(store: JsonStore) -> None:
    provider = LocalAuthProvider(store)
    provider.register("ada@example.com", "secret1", "Ada")

    with pytest.raises(AuthError, match="Invalid email or password"):
        provider.login("ada@example.com", "wrong")
    with pytest.raises(AuthError):
        provider.login("nobody@example.com", "secret1")


def test_local_auth_logout_forgets_token(store: JsonStore) -> None:
    provider = LocalAuthProvider(store)
    session = provider.register("ada@example.com", "secret1", "Ada")

    provider.logout(session.access_token)

    assert provider.get_user(session.access_token) is None
