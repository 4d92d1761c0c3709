"""Health metrics derived from a user profile."""

import math
from decimal import ROUND_HALF_UP, Decimal

from vital_track.domain.profile import ActivityLevel, Gender, Goal, UserProfile
from vital_track.domain.stats import HealthStats, Macros

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

# goal -> (calorie adjustment in kcal, protein share of calories)
GOAL_PLANS: dict[Goal, tuple[int, float]] = {
    Goal.LOSE_WEIGHT: (-500, 0.35),
    Goal.MAINTAIN: (0, 0.25),
    Goal.GAIN_MUSCLE: (300, 0.35),
}

FAT_RATIO = 0.25
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


def calculate_health_stats(profile: UserProfile) -> HealthStats:
    """Return BMI, BMR, TDEE, calorie target and macro split for a profile.

    Intermediate values stay unrounded; each output field is rounded on its
    own, so the calorie target and macro grams come from the unrounded TDEE.
    """
    height_m = profile.height / 100
    bmi = profile.current_weight / (height_m * height_m)

    bmr = 10 * profile.current_weight + 6.25 * profile.height - 5 * profile.age
    bmr += 5 if profile.gender == Gender.MALE else -161

    tdee = bmr * ACTIVITY_MULTIPLIERS[profile.activity_level]

    adjustment, protein_ratio = GOAL_PLANS[profile.goal]
    target = tdee + adjustment
    carbs_ratio = 1 - protein_ratio - FAT_RATIO

    return HealthStats(
        bmi=_round_to_tenth(bmi),
        bmr=_round_half_up(bmr),
        tdee=_round_half_up(tdee),
        daily_calorie_target=_round_half_up(target),
        macros=Macros(
            protein=_round_half_up(target * protein_ratio / KCAL_PER_GRAM_PROTEIN),
            carbs=_round_half_up(target * carbs_ratio / KCAL_PER_GRAM_CARBS),
            fat=_round_half_up(target * FAT_RATIO / KCAL_PER_GRAM_FAT),
        ),
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _round_to_tenth(value: float) -> float:
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
