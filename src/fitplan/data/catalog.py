"""Load workout-plan and meal catalogs and onboarding profiles from files.

Catalog files are YAML or JSON and hold either a list of entries or a
mapping with a `workout_plans` / `meals` key. Both snake_case and the
camelCase keys used by the mobile app's bundled data are accepted.

Usage:
    from fitplan.data.catalog import load_meal_catalog
    meals = load_meal_catalog(Path("meals.yaml"))
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import yaml

from fitplan.matching.models import CatalogError, MealRecord, WorkoutPlanRecord
from fitplan.profiles.models import UserProfile


def _read_file(path: Path) -> Any:
    """Parse a YAML or JSON file."""
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except OSError as e:
        raise CatalogError(f"Could not read {path}: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Could not parse {path}: {e}") from e


def _entries(data: Any, key: str, path: Path) -> list[dict]:
    """Extract the list of entries from parsed catalog data."""
    if isinstance(data, dict):
        data = data.get(key)
    if data is None:
        return []
    if not isinstance(data, list):
        raise CatalogError(f"{path}: expected a list of {key}")
    return data


def _pick(entry: dict, *keys: str, default: Any = None) -> Any:
    """Return the first present key's value."""
    for key in keys:
        if key in entry and entry[key] is not None:
            return entry[key]
    return default


def _require(entry: dict, index: int, *keys: str) -> Any:
    value = _pick(entry, *keys)
    if value is None:
        raise CatalogError(f"Entry {index} is missing '{keys[0]}'", entry_index=index)
    return value


def _tags(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def parse_workout_plan(entry: dict, index: int = 0) -> WorkoutPlanRecord:
    """Build a WorkoutPlanRecord from a catalog entry."""
    if not isinstance(entry, dict):
        raise CatalogError(f"Entry {index} is not a mapping", entry_index=index)
    try:
        days = int(_require(entry, index, "days_per_week", "daysPerWeek"))
        plan_id = int(_require(entry, index, "id"))
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Entry {index} has a non-numeric field: {e}", entry_index=index) from e

    return WorkoutPlanRecord(
        id=plan_id,
        name=str(_require(entry, index, "name")),
        goal=str(_require(entry, index, "goal")),
        experience=str(_require(entry, index, "experience")),
        equipment=str(_pick(entry, "equipment", default="none")),
        days_per_week=days,
        description=str(_pick(entry, "description", default="")),
        duration=_pick(entry, "duration"),
    )


def parse_meal(entry: dict, index: int = 0) -> MealRecord:
    """Build a MealRecord from a catalog entry.

    Calories may be nested under `nutrition` or given at the top level.
    """
    if not isinstance(entry, dict):
        raise CatalogError(f"Entry {index} is not a mapping", entry_index=index)

    nutrition = entry.get("nutrition") or {}
    calories = _pick(nutrition, "calories")
    if calories is None:
        calories = _pick(entry, "calories")
    try:
        calories = float(calories) if calories is not None else None
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Entry {index} has non-numeric calories", entry_index=index) from e

    meal_id = _pick(entry, "id")
    return MealRecord(
        id=str(meal_id) if meal_id is not None else None,
        name=str(_require(entry, index, "name")),
        meal_type=str(_require(entry, index, "meal_type", "mealType")),
        calories=calories,
        dietary_tags=_tags(_pick(entry, "dietary_tags", "dietaryTags")),
        allergens=_tags(_pick(entry, "allergens")),
        goals=_tags(_pick(entry, "goals")),
    )


def load_workout_catalog(path: Path) -> list[WorkoutPlanRecord]:
    """Load workout plans from a YAML or JSON file.

    Raises:
        CatalogError: If the file is missing, unparsable or has bad entries
    """
    data = _read_file(path)
    return [
        parse_workout_plan(entry, i)
        for i, entry in enumerate(_entries(data, "workout_plans", path))
    ]


def load_meal_catalog(path: Path) -> list[MealRecord]:
    """Load meals from a YAML or JSON file.

    Raises:
        CatalogError: If the file is missing, unparsable or has bad entries
    """
    data = _read_file(path)
    return [
        parse_meal(entry, i)
        for i, entry in enumerate(_entries(data, "meals", path))
    ]


def _string_list(value: Any) -> list[str]:
    return list(_tags(value))


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def profile_from_dict(data: dict) -> UserProfile:
    """Build a UserProfile from onboarding answers.

    Accepts snake_case or camelCase keys; unknown keys are ignored.
    """
    try:
        return UserProfile(
            gender=_pick(data, "gender"),
            current_weight=_optional_float(_pick(data, "current_weight", "currentWeight", "weight")),
            weight_unit=str(_pick(data, "weight_unit", "weightUnit", default="kg")),
            height_cm=_optional_float(_pick(data, "height_cm", "heightCm", "height")),
            age=_optional_int(_pick(data, "age")),
            activity_level=_pick(data, "activity_level", "activityLevel"),
            fitness_level=_optional_int(_pick(data, "fitness_level", "fitnessLevel")),
            goals=_string_list(_pick(data, "goals")),
            target_weight=_optional_float(_pick(data, "target_weight", "targetWeight")),
            target_weight_unit=_pick(data, "target_weight_unit", "targetWeightUnit"),
            dietary_preferences=_string_list(
                _pick(data, "dietary_preferences", "dietaryPreferences")
            ),
            allergens=_string_list(_pick(data, "allergens")),
            workout_preferences=_string_list(
                _pick(data, "workout_preferences", "workoutPreferences")
            ),
            workout_days=_string_list(_pick(data, "workout_days", "workoutDays")),
            calorie_target=_optional_int(_pick(data, "calorie_target", "calorieTarget")),
        )
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Invalid profile: {e}") from e


def load_profile(path: Path) -> UserProfile:
    """Load onboarding answers from a YAML or JSON file."""
    data = _read_file(path)
    if not isinstance(data, dict):
        raise CatalogError(f"{path}: expected a mapping of profile fields")
    return profile_from_dict(data)
