"""Data models for catalog records and matching results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class MealType(Enum):
    """Meal slots in a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class ExperienceTier(Enum):
    """Training experience tiers used by workout plans."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class WorkoutPlanRecord:
    """A workout plan from the bundled catalog.

    Attributes:
        id: Catalog identifier
        name: Display name
        goal: Workout goal tag (e.g. "fat_loss", "strength")
        experience: Experience tier ("beginner", "intermediate", "advanced")
        equipment: Equipment requirement ("none", "minimal", "dumbbells", "gym")
        days_per_week: Scheduled training days per week
        description: Free-form description
        duration: Optional program length (e.g. "8 weeks")
    """

    id: int
    name: str
    goal: str
    experience: str
    equipment: str
    days_per_week: int
    description: str = ""
    duration: Optional[str] = None


@dataclass(frozen=True)
class MealRecord:
    """A meal from the meal catalog.

    Only the fields used for scoring are modeled.
    """

    name: str
    meal_type: str
    calories: Optional[float] = None
    dietary_tags: tuple[str, ...] = ()
    allergens: tuple[str, ...] = ()
    goals: tuple[str, ...] = ()
    id: Optional[str] = None

    def is_type(self, meal_type: MealType) -> bool:
        return self.meal_type.strip().lower() == meal_type.value


@dataclass(frozen=True)
class ScoredCandidate(Generic[T]):
    """A catalog item paired with its match score."""

    item: T
    score: float


@dataclass
class DailyMealPlan:
    """One meal per slot, chosen against per-slot calorie budgets.

    A slot is None when the catalog has no qualifying meal of that type.
    """

    target_calories: int
    breakfast: Optional[MealRecord] = None
    lunch: Optional[MealRecord] = None
    dinner: Optional[MealRecord] = None
    snack: Optional[MealRecord] = None
    slot_targets: dict[MealType, int] = field(default_factory=dict)

    def get(self, meal_type: MealType) -> Optional[MealRecord]:
        return getattr(self, meal_type.value)

    @property
    def meals(self) -> dict[MealType, Optional[MealRecord]]:
        return {meal_type: self.get(meal_type) for meal_type in MealType}

    @property
    def total_calories(self) -> float:
        """Sum of the chosen meals' calories."""
        return sum(
            meal.calories or 0
            for meal in self.meals.values()
            if meal is not None
        )


# Custom exceptions


class FitPlanError(Exception):
    """Base exception for fitplan errors."""

    pass


class CatalogError(FitPlanError):
    """Raised when a catalog file or entry is malformed."""

    def __init__(self, message: str, entry_index: Optional[int] = None):
        super().__init__(message)
        self.entry_index = entry_index


class StorageError(FitPlanError):
    """Raised when the profile store cannot read or write."""

    pass
