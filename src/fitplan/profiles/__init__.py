"""User profiles and daily target calculation.

Usage:
    from fitplan.profiles import UserProfile, calculate_targets
    targets = calculate_targets(UserProfile(gender="male", current_weight=70,
                                            height_cm=175, age=30))
"""

from __future__ import annotations

from fitplan.profiles.body_calc import CalorieScenario, TargetSet, calculate_targets
from fitplan.profiles.models import ActivityLevel, Gender, UserProfile

__all__ = [
    "ActivityLevel",
    "CalorieScenario",
    "Gender",
    "TargetSet",
    "UserProfile",
    "calculate_targets",
]
