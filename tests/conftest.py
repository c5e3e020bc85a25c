"""Pytest fixtures for fitplan tests."""

from __future__ import annotations

import pytest
import structlog

from fitplan.config.settings import DatabaseConfig, Settings, set_settings
from fitplan.db.connection import DatabaseConnection, set_db
from fitplan.matching.models import MealRecord, WorkoutPlanRecord


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path):
    """Use default settings with a temporary database for every test."""
    settings = Settings(database=DatabaseConfig(path=tmp_path / "fitplan.db"))
    set_settings(settings)
    set_db(None)

    yield settings

    set_settings(None)
    set_db(None)
    structlog.reset_defaults()


@pytest.fixture
def temp_db(tmp_path):
    """Create a temporary database with schema."""
    db = DatabaseConnection(tmp_path / "store.db")
    db.initialize_schema()
    return db


@pytest.fixture
def workout_catalog() -> list[WorkoutPlanRecord]:
    """Small workout plan catalog covering each tier."""
    return [
        WorkoutPlanRecord(
            id=1, name="Beginner Fat Burn", goal="fat_loss",
            experience="beginner", equipment="none", days_per_week=3,
        ),
        WorkoutPlanRecord(
            id=2, name="Intermediate Hypertrophy", goal="muscle_building",
            experience="intermediate", equipment="gym", days_per_week=4,
        ),
        WorkoutPlanRecord(
            id=3, name="Advanced Strength", goal="strength",
            experience="advanced", equipment="gym", days_per_week=5,
        ),
        WorkoutPlanRecord(
            id=4, name="Outdoor Endurance", goal="endurance",
            experience="intermediate", equipment="minimal", days_per_week=3,
        ),
    ]


@pytest.fixture
def meal_catalog() -> list[MealRecord]:
    """Meal catalog with two options per slot; one breakfast contains nuts."""
    return [
        MealRecord(
            name="Almond Butter Toast", meal_type="breakfast", calories=500,
            dietary_tags=("vegetarian",), allergens=("nuts",), goals=("balanced",),
        ),
        MealRecord(
            name="Egg White Omelette", meal_type="breakfast", calories=420,
            dietary_tags=("vegetarian", "gluten-free"), goals=("weight_loss",),
        ),
        MealRecord(
            name="Chicken Quinoa Bowl", meal_type="lunch", calories=690,
            dietary_tags=("gluten-free",), goals=("muscle_gain",),
        ),
        MealRecord(
            name="Lentil Soup", meal_type="lunch", calories=450,
            dietary_tags=("vegan", "vegetarian"), goals=("weight_loss",),
        ),
        MealRecord(
            name="Salmon and Greens", meal_type="dinner", calories=610,
            dietary_tags=("gluten-free",), allergens=("fish",), goals=("fat_loss",),
        ),
        MealRecord(
            name="Tofu Stir Fry", meal_type="dinner", calories=560,
            dietary_tags=("vegan", "vegetarian"), allergens=("soy",), goals=("balanced",),
        ),
        MealRecord(
            name="Greek Yogurt", meal_type="snack", calories=180,
            dietary_tags=("vegetarian",), allergens=("dairy",), goals=("cutting",),
        ),
        MealRecord(
            name="Apple Slices", meal_type="snack", calories=95,
            dietary_tags=("vegan", "vegetarian", "gluten-free"),
        ),
    ]
