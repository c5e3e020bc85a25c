"""Workout plan matching.

Derives a matching profile (experience tier, primary goal, equipment and
weekly frequency) from onboarding answers, scores every catalog plan on
those four independent criteria and returns the best one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import structlog

from fitplan.data.goal_vocabulary import workout_goal_for
from fitplan.matching.models import (
    ExperienceTier,
    ScoredCandidate,
    WorkoutPlanRecord,
)
from fitplan.profiles.models import UserProfile

logger = structlog.get_logger(__name__)

DEFAULT_DAYS_PER_WEEK = 3

EXPERIENCE_EXACT_POINTS = 40
EXPERIENCE_ADJACENT_POINTS = 20
GOAL_PRIMARY_POINTS = 30
GOAL_SECONDARY_POINTS = 15
EQUIPMENT_EXACT_POINTS = 15

# (profile equipment, plan equipment) -> partial credit
EQUIPMENT_PARTIAL_POINTS: dict[tuple[str, str], int] = {
    ("none", "minimal"): 10,
    ("gym", "dumbbells"): 8,
}

# Difference in days per week -> points
FREQUENCY_POINTS: dict[int, int] = {0: 15, 1: 10, 2: 5}

# Workout location preferences in priority order
EQUIPMENT_BY_PREFERENCE: list[tuple[str, str]] = [
    ("gym", "gym"),
    ("home", "none"),
    ("yoga", "none"),
    ("outdoor", "minimal"),
]
DEFAULT_EQUIPMENT = "none"


@dataclass(frozen=True)
class WorkoutCriteria:
    """What the user is looking for in a workout plan."""

    experience: ExperienceTier
    primary_goal: str
    secondary_goal: Optional[str]
    equipment: str
    days_per_week: int


def experience_for_fitness_level(fitness_level: Optional[int]) -> ExperienceTier:
    """Map a 0-5 fitness rating to an experience tier."""
    level = fitness_level or 0
    if level <= 1:
        return ExperienceTier.BEGINNER
    if level <= 3:
        return ExperienceTier.INTERMEDIATE
    return ExperienceTier.ADVANCED


def equipment_for_preferences(preferences: Sequence[str]) -> str:
    """Map workout location preferences to an equipment requirement."""
    normalized = {p.strip().lower() for p in preferences}
    for preference, equipment in EQUIPMENT_BY_PREFERENCE:
        if preference in normalized:
            return equipment
    return DEFAULT_EQUIPMENT


def derive_criteria(profile: UserProfile) -> WorkoutCriteria:
    """Build workout matching criteria from a profile."""
    return WorkoutCriteria(
        experience=experience_for_fitness_level(profile.fitness_level),
        primary_goal=workout_goal_for(profile.primary_goal),
        secondary_goal=(
            workout_goal_for(profile.secondary_goal)
            if profile.secondary_goal
            else None
        ),
        equipment=equipment_for_preferences(profile.workout_preferences),
        days_per_week=len(profile.workout_days) or DEFAULT_DAYS_PER_WEEK,
    )


def _experience_points(criteria: WorkoutCriteria, plan: WorkoutPlanRecord) -> int:
    """Exact tier earns full points; partial credit is one-way.

    Only an intermediate plan earns adjacent credit, and only for beginner or
    advanced users. An intermediate user gets nothing for a beginner or
    advanced plan, matching the mobile app's selection rule.
    """
    plan_experience = plan.experience.strip().lower()
    if plan_experience == criteria.experience.value:
        return EXPERIENCE_EXACT_POINTS
    if (
        plan_experience == ExperienceTier.INTERMEDIATE.value
        and criteria.experience in (ExperienceTier.BEGINNER, ExperienceTier.ADVANCED)
    ):
        return EXPERIENCE_ADJACENT_POINTS
    return 0


def _goal_points(criteria: WorkoutCriteria, plan: WorkoutPlanRecord) -> int:
    plan_goal = plan.goal.strip().lower()
    points = 0
    if plan_goal == criteria.primary_goal:
        points += GOAL_PRIMARY_POINTS
    if criteria.secondary_goal is not None and plan_goal == criteria.secondary_goal:
        points += GOAL_SECONDARY_POINTS
    return points


def _equipment_points(criteria: WorkoutCriteria, plan: WorkoutPlanRecord) -> int:
    plan_equipment = plan.equipment.strip().lower()
    if plan_equipment == criteria.equipment:
        return EQUIPMENT_EXACT_POINTS
    return EQUIPMENT_PARTIAL_POINTS.get((criteria.equipment, plan_equipment), 0)


def _frequency_points(criteria: WorkoutCriteria, plan: WorkoutPlanRecord) -> int:
    days_diff = abs(plan.days_per_week - criteria.days_per_week)
    return FREQUENCY_POINTS.get(days_diff, 0)


def score_workout_plan(criteria: WorkoutCriteria, plan: WorkoutPlanRecord) -> int:
    """Score one plan against the criteria (higher is better).

    Args:
        criteria: Derived matching criteria
        plan: Catalog plan to score

    Returns:
        Additive score, at most 115 points
    """
    return (
        _experience_points(criteria, plan)
        + _goal_points(criteria, plan)
        + _equipment_points(criteria, plan)
        + _frequency_points(criteria, plan)
    )


def rank_workout_plans(
    profile: UserProfile,
    catalog: Sequence[WorkoutPlanRecord],
) -> list[ScoredCandidate[WorkoutPlanRecord]]:
    """Score every plan in the catalog, best first.

    Ties keep catalog order. Returns an empty list when the profile has no
    goals or the catalog is empty.
    """
    if not profile.goals or not catalog:
        return []

    criteria = derive_criteria(profile)
    scored = [
        ScoredCandidate(item=plan, score=score_workout_plan(criteria, plan))
        for plan in catalog
    ]
    # sorted() is stable, so the first of equally scored plans stays first
    ranked = sorted(scored, key=lambda c: c.score, reverse=True)

    for position, candidate in enumerate(ranked[:3], start=1):
        logger.debug(
            "Workout plan match",
            rank=position,
            plan=candidate.item.name,
            score=candidate.score,
        )
    return ranked


def select_workout_plan(
    profile: UserProfile,
    catalog: Sequence[WorkoutPlanRecord],
) -> Optional[WorkoutPlanRecord]:
    """Return the best-matching workout plan.

    Args:
        profile: Onboarding profile
        catalog: Workout plans to choose from

    Returns:
        The top-scoring catalog plan, or None when the profile has no goals
        or the catalog is empty. There is no minimum score.
    """
    ranked = rank_workout_plans(profile, catalog)
    if not ranked:
        return None
    return ranked[0].item


def workout_plan_to_dict(plan: WorkoutPlanRecord) -> dict:
    """Convert a WorkoutPlanRecord to dict for JSON output and storage."""
    return {
        "id": plan.id,
        "name": plan.name,
        "goal": plan.goal,
        "experience": plan.experience,
        "equipment": plan.equipment,
        "days_per_week": plan.days_per_week,
        "duration": plan.duration,
        "description": plan.description,
    }
