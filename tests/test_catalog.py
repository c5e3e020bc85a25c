"""Tests for catalog and profile loading."""

from __future__ import annotations

import json

import pytest
import yaml

from fitplan.data.catalog import (
    load_meal_catalog,
    load_profile,
    load_workout_catalog,
    parse_meal,
    profile_from_dict,
)
from fitplan.data.goal_vocabulary import meal_goals_for, workout_goal_for
from fitplan.matching.models import CatalogError


class TestWorkoutCatalog:
    """Tests for load_workout_catalog."""

    def test_load_yaml_list(self, tmp_path):
        path = tmp_path / "plans.yaml"
        path.write_text(yaml.dump([
            {
                "id": 7, "name": "Couch to 5K", "goal": "endurance",
                "experience": "beginner", "equipment": "minimal",
                "days_per_week": 3, "duration": "9 weeks",
            },
        ]))

        plans = load_workout_catalog(path)

        assert len(plans) == 1
        assert plans[0].name == "Couch to 5K"
        assert plans[0].duration == "9 weeks"

    def test_load_json_camel_case(self, tmp_path):
        """App-style JSON with daysPerWeek under a workout_plans key."""
        path = tmp_path / "plans.json"
        path.write_text(json.dumps({"workout_plans": [
            {
                "id": 1, "name": "Full Body", "goal": "general_fitness",
                "experience": "intermediate", "equipment": "dumbbells",
                "daysPerWeek": 4, "description": "Three compound lifts",
            },
        ]}))

        plans = load_workout_catalog(path)
        assert plans[0].days_per_week == 4
        assert plans[0].description == "Three compound lifts"

    def test_missing_field(self, tmp_path):
        path = tmp_path / "plans.yaml"
        path.write_text(yaml.dump([{"id": 1, "name": "No Goal", "experience": "beginner",
                                    "days_per_week": 3}]))

        with pytest.raises(CatalogError) as exc_info:
            load_workout_catalog(path)
        assert exc_info.value.entry_index == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_workout_catalog(tmp_path / "missing.yaml")

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "plans.yaml"
        path.write_text("workout_plans: just a string\n")
        with pytest.raises(CatalogError):
            load_workout_catalog(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "plans.yaml"
        path.write_text("- id: [unclosed\n")
        with pytest.raises(CatalogError):
            load_workout_catalog(path)


class TestMealCatalog:
    """Tests for meal catalog parsing."""

    def test_nested_nutrition(self):
        record = parse_meal({
            "id": 12, "name": "Oatmeal", "mealType": "breakfast",
            "nutrition": {"calories": 350, "protein": 12},
            "dietaryTags": ["vegan"], "allergens": ["gluten"], "goals": ["balanced"],
        })
        assert record.id == "12"
        assert record.calories == 350
        assert record.meal_type == "breakfast"
        assert record.dietary_tags == ("vegan",)
        assert record.allergens == ("gluten",)

    def test_flat_calories(self):
        record = parse_meal({"name": "Banana", "meal_type": "snack", "calories": "105"})
        assert record.calories == 105.0
        assert record.dietary_tags == ()

    def test_missing_calories_allowed(self):
        record = parse_meal({"name": "Water", "meal_type": "snack"})
        assert record.calories is None

    def test_bad_calories(self):
        with pytest.raises(CatalogError):
            parse_meal({"name": "Mystery", "meal_type": "snack", "calories": "lots"})

    def test_load_yaml_mapping(self, tmp_path):
        path = tmp_path / "meals.yaml"
        path.write_text(yaml.dump({"meals": [
            {"name": "Oatmeal", "meal_type": "breakfast", "calories": 350},
            {"name": "Soup", "meal_type": "lunch", "calories": 400},
        ]}))
        meals = load_meal_catalog(path)
        assert [m.name for m in meals] == ["Oatmeal", "Soup"]

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(CatalogError, match="Could not read"):
            load_meal_catalog(tmp_path)

    @pytest.mark.parametrize("name", ["meals.json", "meals.yaml"])
    def test_invalid_utf8(self, tmp_path, name):
        path = tmp_path / name
        path.write_bytes(b"\xff\xfe")
        with pytest.raises(CatalogError):
            load_meal_catalog(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "meals.yaml"
        path.write_text("")
        assert load_meal_catalog(path) == []


class TestProfileLoading:
    """Tests for onboarding profile parsing."""

    def test_camel_case_profile(self):
        profile = profile_from_dict({
            "gender": "female", "currentWeight": 150, "weightUnit": "lb",
            "height": 165, "age": 28, "activityLevel": "lightly-active",
            "fitnessLevel": 2, "goals": ["lose-weight"], "targetWeight": 140,
            "dietaryPreferences": ["vegetarian"], "allergens": ["nuts"],
            "workoutPreferences": ["home"], "workoutDays": ["mon", "thu"],
        })
        assert profile.weight_unit == "lb"
        assert profile.height_cm == 165
        assert profile.fitness_level == 2
        assert profile.workout_days == ["mon", "thu"]
        assert profile.calorie_target is None

    def test_snake_case_profile_file(self, tmp_path):
        path = tmp_path / "me.yaml"
        path.write_text(yaml.dump({
            "gender": "male", "current_weight": 80, "height_cm": 180,
            "age": 40, "calorie_target": 2200,
        }))
        profile = load_profile(path)
        assert profile.is_male
        assert profile.calorie_target == 2200

    def test_bad_number(self):
        with pytest.raises(CatalogError):
            profile_from_dict({"age": "old"})


class TestGoalVocabulary:
    """Tests for the shared goal table."""

    def test_workout_goals(self):
        assert workout_goal_for("lose-weight") == "fat_loss"
        assert workout_goal_for("sport-performance") == "sport_performance"
        assert workout_goal_for("reduce-stress") == "general_fitness"
        assert workout_goal_for(None) == "general_fitness"

    def test_meal_goals(self):
        assert meal_goals_for("gain-muscle") == {"muscle_gain", "bulking", "mass_building"}
        assert meal_goals_for("unknown") == frozenset()
