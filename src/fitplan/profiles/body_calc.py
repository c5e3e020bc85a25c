"""Daily calorie, macro and water targets from body metrics and goals.

Uses the Mifflin-St Jeor equation for BMR, scales it by an activity
multiplier to get TDEE, then picks one of six calorie scenarios based on
the user's goals and the distance to their target weight.

Missing inputs never raise: weight and height default to 0, age to 25,
activity level to moderately active, and an unknown gender uses the
female formula.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import structlog

from fitplan.data.goal_vocabulary import (
    GAIN_MUSCLE,
    GET_STRONGER,
    IMPROVE_ENDURANCE,
    LOSE_WEIGHT,
)
from fitplan.profiles.models import ActivityLevel, UserProfile

logger = structlog.get_logger(__name__)

DEFAULT_AGE = 25

# Activity level multipliers
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}


class CalorieScenario(Enum):
    """Calorie targets expressed as a fraction of TDEE."""
    MAINTAIN = "maintain"
    MILD_WEIGHT_LOSS = "mild-weight-loss"        # ~0.25 kg/week
    WEIGHT_LOSS = "weight-loss"                  # ~0.5 kg/week
    EXTREME_WEIGHT_LOSS = "extreme-weight-loss"  # ~1 kg/week
    MILD_WEIGHT_GAIN = "mild-weight-gain"        # ~0.25 kg/week
    WEIGHT_GAIN = "weight-gain"                  # ~0.5 kg/week


SCENARIO_FACTORS = {
    CalorieScenario.MAINTAIN: 1.0,
    CalorieScenario.MILD_WEIGHT_LOSS: 0.90,
    CalorieScenario.WEIGHT_LOSS: 0.79,
    CalorieScenario.EXTREME_WEIGHT_LOSS: 0.59,
    CalorieScenario.MILD_WEIGHT_GAIN: 1.10,
    CalorieScenario.WEIGHT_GAIN: 1.21,
}

# Weight-difference thresholds (kg) for scenario selection
EXTREME_LOSS_THRESHOLD_KG = 10
LOSS_THRESHOLD_KG = 5
GAIN_THRESHOLD_KG = 5

MIN_CALORIES_MALE = 1500
MIN_CALORIES_FEMALE = 1200

WATER_ML_PER_KG = 35

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


@dataclass(frozen=True)
class MacroRatios:
    """Share of daily calories from each macronutrient (0.0 to 1.0)."""

    protein: float
    carbs: float
    fat: float


DEFAULT_MACRO_RATIOS = MacroRatios(protein=0.25, carbs=0.45, fat=0.30)

# Checked in order; the first goal present wins
GOAL_MACRO_RATIOS: list[tuple[frozenset[str], MacroRatios]] = [
    (frozenset({GAIN_MUSCLE, GET_STRONGER}), MacroRatios(0.30, 0.45, 0.25)),
    (frozenset({LOSE_WEIGHT}), MacroRatios(0.35, 0.35, 0.30)),
    (frozenset({IMPROVE_ENDURANCE}), MacroRatios(0.20, 0.55, 0.25)),
]


@dataclass(frozen=True)
class TargetSet:
    """Daily targets computed for one profile.

    `calories` is the selected scenario after the safety floor is applied;
    the six scenario values are kept so callers can offer alternatives.
    Macro grams are rounded independently and need not add back up to
    `calories` exactly.
    """

    calories: int
    protein: int  # grams
    carbs: int    # grams
    fat: int      # grams
    water: int    # ml
    bmr: int
    tdee: int
    scenario: CalorieScenario

    maintain_calories: int
    mild_weight_loss: int
    weight_loss: int
    extreme_weight_loss: int
    mild_weight_gain: int
    weight_gain: int

    def scenario_calories(self, scenario: CalorieScenario) -> int:
        """Calories for a given scenario (before the safety floor)."""
        return {
            CalorieScenario.MAINTAIN: self.maintain_calories,
            CalorieScenario.MILD_WEIGHT_LOSS: self.mild_weight_loss,
            CalorieScenario.WEIGHT_LOSS: self.weight_loss,
            CalorieScenario.EXTREME_WEIGHT_LOSS: self.extreme_weight_loss,
            CalorieScenario.MILD_WEIGHT_GAIN: self.mild_weight_gain,
            CalorieScenario.WEIGHT_GAIN: self.weight_gain,
        }[scenario]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounding up."""
    return int(math.floor(value + 0.5))


def calculate_bmr(
    weight_kg: float,
    height_cm: float,
    age: float,
    is_male: bool,
) -> float:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Args:
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters
        age: Age in years
        is_male: Selects the +5 (male) or -161 (female) constant

    Returns:
        BMR in calories per day
    """
    bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age)
    return bmr + 5 if is_male else bmr - 161


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Calculate Total Daily Energy Expenditure."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def calorie_scenarios(tdee: float) -> dict[CalorieScenario, int]:
    """Compute all six calorie scenarios from TDEE, rounded to integers."""
    return {
        scenario: round_half_up(tdee * factor)
        for scenario, factor in SCENARIO_FACTORS.items()
    }


def select_scenario(
    goals: list[str],
    weight_kg: float,
    target_weight_kg: float,
) -> CalorieScenario:
    """Pick the calorie scenario from goals and distance to target weight.

    A weight-loss goal or a target below current weight selects one of the
    loss scenarios; a muscle-gain goal or a target above current weight
    selects one of the gain scenarios; otherwise maintain.
    """
    weight_diff = weight_kg - target_weight_kg

    if LOSE_WEIGHT in goals or weight_diff > 0:
        if weight_diff > EXTREME_LOSS_THRESHOLD_KG:
            return CalorieScenario.EXTREME_WEIGHT_LOSS
        if weight_diff > LOSS_THRESHOLD_KG:
            return CalorieScenario.WEIGHT_LOSS
        return CalorieScenario.MILD_WEIGHT_LOSS

    if GAIN_MUSCLE in goals or weight_diff < 0:
        if abs(weight_diff) > GAIN_THRESHOLD_KG:
            return CalorieScenario.WEIGHT_GAIN
        return CalorieScenario.MILD_WEIGHT_GAIN

    return CalorieScenario.MAINTAIN


def macro_ratios_for(goals: list[str]) -> MacroRatios:
    """Return the macro split for the first matching goal group."""
    for goal_tags, ratios in GOAL_MACRO_RATIOS:
        if goal_tags.intersection(goals):
            return ratios
    return DEFAULT_MACRO_RATIOS


def calculate_targets(profile: UserProfile) -> TargetSet:
    """Calculate calorie, macro and water targets for a profile.

    Args:
        profile: Onboarding profile; missing fields fall back to defaults

    Returns:
        TargetSet with non-negative integer values
    """
    goals = [g.strip().lower() for g in profile.goals]
    weight_kg = profile.weight_kg
    target_weight_kg = profile.target_weight_kg
    height_cm = profile.height_cm or 0.0
    age = profile.age or DEFAULT_AGE
    activity_level = ActivityLevel.parse(profile.activity_level)

    # A near-empty profile can push the formula below zero
    bmr = max(0.0, calculate_bmr(weight_kg, height_cm, age, profile.is_male))
    tdee = calculate_tdee(bmr, activity_level)

    scenarios = calorie_scenarios(tdee)
    scenario = select_scenario(goals, weight_kg, target_weight_kg)

    # Never go below the minimum recommended intake
    min_calories = MIN_CALORIES_MALE if profile.is_male else MIN_CALORIES_FEMALE
    calories = max(scenarios[scenario], min_calories)

    ratios = macro_ratios_for(goals)

    targets = TargetSet(
        calories=calories,
        protein=round_half_up(calories * ratios.protein / KCAL_PER_GRAM_PROTEIN),
        carbs=round_half_up(calories * ratios.carbs / KCAL_PER_GRAM_CARBS),
        fat=round_half_up(calories * ratios.fat / KCAL_PER_GRAM_FAT),
        water=round_half_up(weight_kg * WATER_ML_PER_KG),
        bmr=round_half_up(bmr),
        tdee=round_half_up(tdee),
        scenario=scenario,
        maintain_calories=scenarios[CalorieScenario.MAINTAIN],
        mild_weight_loss=scenarios[CalorieScenario.MILD_WEIGHT_LOSS],
        weight_loss=scenarios[CalorieScenario.WEIGHT_LOSS],
        extreme_weight_loss=scenarios[CalorieScenario.EXTREME_WEIGHT_LOSS],
        mild_weight_gain=scenarios[CalorieScenario.MILD_WEIGHT_GAIN],
        weight_gain=scenarios[CalorieScenario.WEIGHT_GAIN],
    )

    logger.debug(
        "Calculated targets",
        bmr=targets.bmr,
        tdee=targets.tdee,
        scenario=scenario.value,
        calories=targets.calories,
    )
    return targets


def targets_to_dict(targets: TargetSet) -> dict:
    """Convert TargetSet to dict for JSON output and storage."""
    return {
        "calories": targets.calories,
        "protein": targets.protein,
        "carbs": targets.carbs,
        "fat": targets.fat,
        "water": targets.water,
        "reference": {
            "bmr": targets.bmr,
            "tdee": targets.tdee,
            "scenario": targets.scenario.value,
        },
        "scenarios": {
            scenario.value.replace("-", "_"): targets.scenario_calories(scenario)
            for scenario in CalorieScenario
        },
    }


def targets_from_dict(data: dict) -> TargetSet:
    """Rebuild a TargetSet from the output of targets_to_dict."""
    reference = data.get("reference", {})
    scenarios = data.get("scenarios", {})
    return TargetSet(
        calories=int(data["calories"]),
        protein=int(data["protein"]),
        carbs=int(data["carbs"]),
        fat=int(data["fat"]),
        water=int(data["water"]),
        bmr=int(reference.get("bmr", 0)),
        tdee=int(reference.get("tdee", 0)),
        scenario=CalorieScenario(reference.get("scenario", "maintain")),
        maintain_calories=int(scenarios.get("maintain", 0)),
        mild_weight_loss=int(scenarios.get("mild_weight_loss", 0)),
        weight_loss=int(scenarios.get("weight_loss", 0)),
        extreme_weight_loss=int(scenarios.get("extreme_weight_loss", 0)),
        mild_weight_gain=int(scenarios.get("mild_weight_gain", 0)),
        weight_gain=int(scenarios.get("weight_gain", 0)),
    )
