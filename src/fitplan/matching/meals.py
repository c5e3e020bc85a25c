"""Meal scoring and daily meal plan assembly.

The daily calorie target is split into breakfast, lunch, dinner and snack
budgets. For each slot, every catalog meal of that type is scored on
calorie proximity, dietary-tag overlap and goal alignment; meals that
contain one of the user's allergens are disqualified. The best remaining
meal fills the slot.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import structlog

from fitplan.data.goal_vocabulary import meal_goals_for
from fitplan.matching.models import (
    DailyMealPlan,
    MealRecord,
    MealType,
    ScoredCandidate,
)
from fitplan.profiles.body_calc import round_half_up
from fitplan.profiles.models import UserProfile

logger = structlog.get_logger(__name__)

DISQUALIFIED_SCORE = -1000

CALORIE_MAX_POINTS = 50
CALORIE_TOLERANCE = 50     # kcal within which a meal gets full points
CALORIE_DECAY_DIVISOR = 10  # one point lost per 10 kcal beyond target

DIETARY_MAX_POINTS = 30
DIETARY_NEUTRAL_POINTS = 15
GOAL_POINTS = 20

# Share of daily calories per meal slot
MEAL_CALORIE_SPLIT: dict[MealType, float] = {
    MealType.BREAKFAST: 0.25,
    MealType.LUNCH: 0.35,
    MealType.DINNER: 0.30,
    MealType.SNACK: 0.10,
}


def _lowered(tags: Iterable[str]) -> set[str]:
    return {t.strip().lower() for t in tags}


def _calorie_points(meal: MealRecord, target_calories: float) -> float:
    if not meal.calories:
        return 0.0
    diff = abs(meal.calories - target_calories)
    if diff <= CALORIE_TOLERANCE:
        return float(CALORIE_MAX_POINTS)
    return max(0.0, CALORIE_MAX_POINTS - diff / CALORIE_DECAY_DIVISOR)


def _dietary_points(meal: MealRecord, dietary_preferences: Sequence[str]) -> float:
    if not dietary_preferences:
        return float(DIETARY_NEUTRAL_POINTS)
    meal_tags = _lowered(meal.dietary_tags)
    matched = sum(1 for pref in dietary_preferences if pref.strip().lower() in meal_tags)
    return DIETARY_MAX_POINTS * matched / len(dietary_preferences)


def _goal_points(meal: MealRecord, goals: Sequence[str]) -> float:
    if not goals or not meal.goals:
        return 0.0
    supported = meal_goals_for(goals[0])
    if _lowered(meal.goals) & supported:
        return float(GOAL_POINTS)
    return 0.0


def has_allergen(meal: MealRecord, allergens: Sequence[str]) -> bool:
    """True if the meal contains any of the given allergens (case-insensitive)."""
    if not allergens or not meal.allergens:
        return False
    return bool(_lowered(meal.allergens) & _lowered(allergens))


def score_meal(
    meal: MealRecord,
    target_calories: float,
    goals: Sequence[str],
    dietary_preferences: Sequence[str],
    allergens: Sequence[str],
) -> float:
    """Score a meal against a calorie budget and the user's preferences.

    Assumes the meal is already of the intended meal type.

    Args:
        meal: Catalog meal
        target_calories: Calorie budget for this meal slot
        goals: User goal tags, primary goal first
        dietary_preferences: Dietary tags the user prefers
        allergens: Allergen tags the user must avoid

    Returns:
        Score between 0 and 100, or -1000 if the meal contains an allergen
    """
    if has_allergen(meal, allergens):
        return DISQUALIFIED_SCORE

    return (
        _calorie_points(meal, target_calories)
        + _dietary_points(meal, dietary_preferences)
        + _goal_points(meal, goals)
    )


def split_calories(calorie_target: float) -> dict[MealType, int]:
    """Split a daily calorie target into per-slot budgets.

    Each budget is rounded on its own, so the budgets may not add up to
    the daily target exactly.
    """
    return {
        meal_type: round_half_up(calorie_target * share)
        for meal_type, share in MEAL_CALORIE_SPLIT.items()
    }


def rank_meals(
    catalog: Sequence[MealRecord],
    meal_type: MealType,
    target_calories: float,
    profile: UserProfile,
) -> list[ScoredCandidate[MealRecord]]:
    """Score all qualifying meals of one type, best first.

    Disqualified meals (negative score) are dropped; ties keep catalog order.
    """
    scored = [
        ScoredCandidate(
            item=meal,
            score=score_meal(
                meal,
                target_calories,
                profile.goals,
                profile.dietary_preferences,
                profile.allergens,
            ),
        )
        for meal in catalog
        if meal.is_type(meal_type)
    ]
    qualified = [c for c in scored if c.score >= 0]
    return sorted(qualified, key=lambda c: c.score, reverse=True)


def select_meal_by_type(
    catalog: Sequence[MealRecord],
    meal_type: MealType,
    target_calories: float,
    profile: UserProfile,
) -> Optional[MealRecord]:
    """Pick the best meal of one type, or None if none qualifies."""
    ranked = rank_meals(catalog, meal_type, target_calories, profile)
    return ranked[0].item if ranked else None


def select_daily_meal_plan(
    catalog: Sequence[MealRecord],
    profile: UserProfile,
) -> Optional[DailyMealPlan]:
    """Assemble a full day of meals for the profile's calorie target.

    Args:
        catalog: Meals to choose from
        profile: Profile with calorie_target set

    Returns:
        DailyMealPlan, or None when no calorie target is set or the catalog
        is empty. Slots with no qualifying meal are left empty.
    """
    if not profile.calorie_target or not catalog:
        return None

    budgets = split_calories(profile.calorie_target)
    plan = DailyMealPlan(target_calories=profile.calorie_target, slot_targets=budgets)

    for meal_type, budget in budgets.items():
        meal = select_meal_by_type(catalog, meal_type, budget, profile)
        setattr(plan, meal_type.value, meal)
        logger.debug(
            "Selected meal",
            meal_type=meal_type.value,
            meal=meal.name if meal else None,
            calories=meal.calories if meal else 0,
            budget=budget,
        )

    logger.debug(
        "Daily meal plan selected",
        total_calories=plan.total_calories,
        target_calories=plan.target_calories,
    )
    return plan


def meal_to_dict(meal: Optional[MealRecord]) -> Optional[dict]:
    """Convert a MealRecord to dict, passing None through."""
    if meal is None:
        return None
    return {
        "id": meal.id,
        "name": meal.name,
        "meal_type": meal.meal_type,
        "calories": meal.calories,
        "dietary_tags": list(meal.dietary_tags),
        "allergens": list(meal.allergens),
        "goals": list(meal.goals),
    }


def daily_plan_to_dict(plan: DailyMealPlan) -> dict:
    """Convert a DailyMealPlan to dict for JSON output and storage."""
    result: dict = {
        meal_type.value: meal_to_dict(meal) for meal_type, meal in plan.meals.items()
    }
    result["total_calories"] = plan.total_calories
    result["target_calories"] = plan.target_calories
    result["slot_targets"] = {
        meal_type.value: budget for meal_type, budget in plan.slot_targets.items()
    }
    return result


def summarize_daily_plan(plan: Optional[DailyMealPlan]) -> Optional[dict]:
    """Collapse a daily plan into a single meal-plan summary record.

    Used by callers that store one selected meal plan per user.
    """
    if plan is None:
        return None
    summary = {"id": "daily-plan", "name": "Your Daily Meal Plan"}
    summary.update(daily_plan_to_dict(plan))
    del summary["slot_targets"]
    return summary
