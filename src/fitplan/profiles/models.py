"""User profile model built from onboarding answers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from fitplan.profiles.units import to_kg


class Gender(Enum):
    """Gender used to pick the BMR formula branch."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level tiers for TDEE calculation."""
    SEDENTARY = "sedentary"                  # Little or no exercise
    LIGHTLY_ACTIVE = "lightly-active"        # Exercise 1-3 times/week
    MODERATELY_ACTIVE = "moderately-active"  # Exercise 4-5 times/week
    VERY_ACTIVE = "very-active"              # Daily or intense 3-4 times/week
    EXTRA_ACTIVE = "extra-active"            # Intense exercise 6-7 times/week

    @classmethod
    def parse(cls, value: Optional[str]) -> "ActivityLevel":
        """Parse an activity level, falling back to moderately active."""
        if value:
            normalized = value.strip().lower().replace("_", "-")
            for level in cls:
                if level.value == normalized:
                    return level
        return cls.MODERATELY_ACTIVE


@dataclass
class UserProfile:
    """Body metrics, goals and preferences collected during onboarding.

    Every field is optional. Consumers default missing values instead of
    rejecting the profile.

    Attributes:
        gender: "male" selects the male BMR branch; anything else (or None)
            uses the female branch
        current_weight: Current body weight in `weight_unit`
        weight_unit: "kg" or "lb"
        height_cm: Height, always stored in centimeters
        age: Age in years
        activity_level: One of the ActivityLevel values
        fitness_level: Self-rated fitness from 0 to 5
        goals: Goal tags ordered by priority (e.g. ["lose-weight"])
        target_weight: Goal weight in `target_weight_unit`
        target_weight_unit: Unit of target_weight; defaults to weight_unit
        dietary_preferences: Dietary tags (e.g. "vegan", "gluten-free")
        allergens: Allergen tags to avoid
        workout_preferences: Workout locations ("gym", "home", "outdoor", "yoga")
        workout_days: Selected training days; the count is weekly frequency
        calorie_target: Daily calorie budget used for meal planning
    """

    gender: Optional[str] = None
    current_weight: Optional[float] = None
    weight_unit: str = "kg"
    height_cm: Optional[float] = None
    age: Optional[int] = None
    activity_level: Optional[str] = None
    fitness_level: Optional[int] = None
    goals: list[str] = field(default_factory=list)
    target_weight: Optional[float] = None
    target_weight_unit: Optional[str] = None
    dietary_preferences: list[str] = field(default_factory=list)
    allergens: list[str] = field(default_factory=list)
    workout_preferences: list[str] = field(default_factory=list)
    workout_days: list[str] = field(default_factory=list)
    calorie_target: Optional[int] = None

    @property
    def is_male(self) -> bool:
        return (self.gender or "").strip().lower() == Gender.MALE.value

    @property
    def weight_kg(self) -> float:
        """Current weight in kilograms (0 when unknown)."""
        return to_kg(self.current_weight, self.weight_unit)

    @property
    def target_weight_kg(self) -> float:
        """Target weight in kilograms, or current weight when unset."""
        if not self.target_weight:
            return self.weight_kg
        return to_kg(self.target_weight, self.target_weight_unit or self.weight_unit)

    @property
    def primary_goal(self) -> Optional[str]:
        return self.goals[0] if self.goals else None

    @property
    def secondary_goal(self) -> Optional[str]:
        return self.goals[1] if len(self.goals) > 1 else None
