"""Catalog matching for workout plans and daily meal plans.

Both matchers score every candidate on several independent criteria and
keep the highest-scoring one. Catalogs are always passed in explicitly.
"""

from __future__ import annotations

from fitplan.matching.meals import score_meal, select_daily_meal_plan
from fitplan.matching.models import (
    DailyMealPlan,
    MealRecord,
    MealType,
    ScoredCandidate,
    WorkoutPlanRecord,
)
from fitplan.matching.workouts import select_workout_plan

__all__ = [
    "DailyMealPlan",
    "MealRecord",
    "MealType",
    "ScoredCandidate",
    "WorkoutPlanRecord",
    "score_meal",
    "select_daily_meal_plan",
    "select_workout_plan",
]
