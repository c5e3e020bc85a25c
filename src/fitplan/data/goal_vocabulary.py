"""Goal vocabulary shared by workout matching and meal scoring.

Onboarding goal tags (e.g. "lose-weight") are mapped to the goal tag used
by workout-plan records and to the set of goal tags a meal record may carry.
Keeping both mappings in one table keeps the two matchers in sync.

Usage:
    from fitplan.data.goal_vocabulary import workout_goal_for, meal_goals_for
    workout_goal_for("lose-weight")   # "fat_loss"
    meal_goals_for("lose-weight")     # frozenset({"weight_loss", "fat_loss", "cutting"})
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_WORKOUT_GOAL = "general_fitness"


@dataclass(frozen=True)
class GoalMapping:
    """How one onboarding goal tag translates into catalog vocabularies.

    Attributes:
        tag: Onboarding goal tag
        workout_goal: Goal tag used by workout-plan records
        meal_goals: Goal tags on meal records that support this goal
    """

    tag: str
    workout_goal: str
    meal_goals: frozenset[str] = field(default_factory=frozenset)


GOAL_VOCABULARY: dict[str, GoalMapping] = {
    m.tag: m
    for m in [
        GoalMapping(
            "lose-weight", "fat_loss",
            frozenset({"weight_loss", "fat_loss", "cutting"}),
        ),
        GoalMapping(
            "gain-muscle", "muscle_building",
            frozenset({"muscle_gain", "bulking", "mass_building"}),
        ),
        GoalMapping(
            "get-stronger", "strength",
            frozenset({"strength", "performance"}),
        ),
        GoalMapping(
            "improve-endurance", "endurance",
            frozenset({"endurance", "performance"}),
        ),
        GoalMapping(
            "stay-active", "general_fitness",
            frozenset({"balanced", "general"}),
        ),
        GoalMapping("improve-flexibility", "flexibility"),
        GoalMapping("reduce-stress", "general_fitness"),
        GoalMapping("sport-performance", "sport_performance"),
    ]
}

# Goal tags that drive calorie selection and macro ratios
LOSE_WEIGHT = "lose-weight"
GAIN_MUSCLE = "gain-muscle"
GET_STRONGER = "get-stronger"
IMPROVE_ENDURANCE = "improve-endurance"


def get_goal_mapping(tag: Optional[str]) -> Optional[GoalMapping]:
    """Look up a goal tag (case-insensitive)."""
    if not tag:
        return None
    return GOAL_VOCABULARY.get(tag.strip().lower())


def workout_goal_for(tag: Optional[str]) -> str:
    """Map an onboarding goal tag to a workout-plan goal.

    Unknown or missing tags map to "general_fitness".
    """
    mapping = get_goal_mapping(tag)
    return mapping.workout_goal if mapping else DEFAULT_WORKOUT_GOAL


def meal_goals_for(tag: Optional[str]) -> frozenset[str]:
    """Map an onboarding goal tag to the meal goal tags that support it."""
    mapping = get_goal_mapping(tag)
    return mapping.meal_goals if mapping else frozenset()
