"""Tests for daily target calculation."""

from __future__ import annotations

import pytest

from fitplan.profiles.body_calc import (
    CalorieScenario,
    MIN_CALORIES_FEMALE,
    MIN_CALORIES_MALE,
    calculate_bmr,
    calculate_targets,
    macro_ratios_for,
    round_half_up,
    select_scenario,
    targets_from_dict,
    targets_to_dict,
)
from fitplan.profiles.models import ActivityLevel, UserProfile


def reference_profile(**overrides) -> UserProfile:
    """70 kg, 175 cm, 30 year old moderately active male."""
    values = dict(
        gender="male",
        current_weight=70,
        weight_unit="kg",
        height_cm=175,
        age=30,
        activity_level="moderately-active",
    )
    values.update(overrides)
    return UserProfile(**values)


class TestBMR:
    """Tests for the Mifflin-St Jeor equation."""

    def test_male_bmr(self):
        """Male formula adds 5."""
        assert calculate_bmr(70, 175, 30, is_male=True) == pytest.approx(1653.75)

    def test_female_bmr(self):
        """Female formula subtracts 161."""
        assert calculate_bmr(70, 175, 30, is_male=False) == pytest.approx(1487.75)

    def test_missing_gender_uses_female_branch(self):
        """No gender selects the female formula."""
        targets = calculate_targets(reference_profile(gender=None))
        assert targets.bmr == 1488


class TestCalculateTargets:
    """Tests for calculate_targets."""

    def test_maintenance_without_goals(self):
        """No goals and no target weight keeps maintenance calories."""
        targets = calculate_targets(reference_profile())

        assert targets.bmr == 1654
        assert targets.tdee == 2563
        assert targets.scenario == CalorieScenario.MAINTAIN
        assert targets.calories == targets.maintain_calories == 2563

    def test_default_macros(self):
        """Balanced 25/45/30 split when no goal matches."""
        targets = calculate_targets(reference_profile())
        assert targets.protein == 160
        assert targets.carbs == 288
        assert targets.fat == 85

    def test_weight_loss_with_ten_kg_to_lose(self):
        """Exactly 10 kg to lose is not extreme; uses the 79% scenario."""
        targets = calculate_targets(
            reference_profile(goals=["lose-weight"], target_weight=60)
        )
        assert targets.scenario == CalorieScenario.WEIGHT_LOSS
        assert targets.calories == 2025

    def test_extreme_weight_loss(self):
        """More than 10 kg to lose selects the 59% scenario."""
        targets = calculate_targets(
            reference_profile(goals=["lose-weight"], target_weight=55)
        )
        assert targets.scenario == CalorieScenario.EXTREME_WEIGHT_LOSS
        assert targets.calories == 1512

    def test_lose_weight_goal_without_target(self):
        """Weight-loss goal alone picks mild loss."""
        targets = calculate_targets(reference_profile(goals=["lose-weight"]))
        assert targets.scenario == CalorieScenario.MILD_WEIGHT_LOSS
        assert targets.calories == 2307

    def test_lower_target_weight_implies_loss(self):
        """A target below current weight selects loss even with no goal."""
        targets = calculate_targets(reference_profile(target_weight=68))
        assert targets.scenario == CalorieScenario.MILD_WEIGHT_LOSS

    def test_gain_muscle_goal(self):
        """Muscle-gain goal with no target picks mild gain."""
        targets = calculate_targets(reference_profile(goals=["gain-muscle"]))
        assert targets.scenario == CalorieScenario.MILD_WEIGHT_GAIN
        assert targets.calories == 2820

    def test_higher_target_weight_implies_gain(self):
        """More than 5 kg to gain selects the 121% scenario."""
        targets = calculate_targets(reference_profile(target_weight=80))
        assert targets.scenario == CalorieScenario.WEIGHT_GAIN
        assert targets.calories == 3102

    def test_pounds_are_converted(self):
        """Weights in pounds are converted to kilograms."""
        targets = calculate_targets(
            reference_profile(current_weight=220.462, weight_unit="lb")
        )
        assert targets.water == 3500
        assert targets.bmr == 1949

    def test_target_weight_uses_weight_unit_by_default(self):
        """Target weight without its own unit shares the current weight's unit."""
        targets = calculate_targets(
            reference_profile(current_weight=154.3, weight_unit="lb", target_weight=154.3)
        )
        assert targets.scenario == CalorieScenario.MAINTAIN

    def test_water_target(self):
        """Water is 35 ml per kg of body weight."""
        targets = calculate_targets(reference_profile())
        assert targets.water == 2450

    def test_unknown_activity_defaults_to_moderate(self):
        """Unknown activity level falls back to 1.55."""
        known = calculate_targets(reference_profile())
        unknown = calculate_targets(reference_profile(activity_level="couch"))
        assert unknown.tdee == known.tdee

    def test_activity_multiplier_applies(self):
        """Sedentary uses 1.2."""
        targets = calculate_targets(reference_profile(activity_level="sedentary"))
        assert targets.tdee == round_half_up(1653.75 * 1.2)


class TestCalorieFloor:
    """Tests for the minimum calorie floor."""

    def test_female_floor(self):
        """Small profiles never drop below 1200 kcal."""
        profile = UserProfile(
            gender="female", current_weight=40, height_cm=150, age=60,
            activity_level="sedentary", goals=["lose-weight"], target_weight=30,
        )
        targets = calculate_targets(profile)
        assert targets.weight_loss < MIN_CALORIES_FEMALE
        assert targets.calories == MIN_CALORIES_FEMALE

    def test_male_floor(self):
        """Male profiles never drop below 1500 kcal."""
        profile = UserProfile(
            gender="male", current_weight=50, height_cm=160, age=70,
            activity_level="sedentary", goals=["lose-weight"], target_weight=35,
        )
        targets = calculate_targets(profile)
        assert targets.scenario == CalorieScenario.EXTREME_WEIGHT_LOSS
        assert targets.calories == MIN_CALORIES_MALE

    def test_empty_profile(self):
        """An empty profile degrades to defaults instead of failing."""
        targets = calculate_targets(UserProfile())

        assert targets.bmr == 0
        assert targets.tdee == 0
        assert targets.calories == MIN_CALORIES_FEMALE
        assert targets.water == 0
        assert (targets.protein, targets.carbs, targets.fat) == (75, 135, 40)


class TestScenarios:
    """Tests for scenario selection and ordering."""

    @pytest.mark.parametrize("weight,height,age,gender,activity", [
        (70, 175, 30, "male", "moderately-active"),
        (55, 160, 45, "female", "sedentary"),
        (110, 190, 22, "male", "extra-active"),
        (62, 168, 35, None, "lightly-active"),
    ])
    def test_scenarios_are_ordered(self, weight, height, age, gender, activity):
        """extreme loss < loss < mild loss < maintain < mild gain < gain."""
        targets = calculate_targets(UserProfile(
            gender=gender, current_weight=weight, height_cm=height,
            age=age, activity_level=activity,
        ))
        assert (
            targets.extreme_weight_loss
            < targets.weight_loss
            < targets.mild_weight_loss
            < targets.maintain_calories
            < targets.mild_weight_gain
            < targets.weight_gain
        )

    def test_loss_goal_takes_priority_over_gain(self):
        """lose-weight is checked before gain-muscle."""
        scenario = select_scenario(["gain-muscle", "lose-weight"], 70, 70)
        assert scenario == CalorieScenario.MILD_WEIGHT_LOSS

    def test_small_gain_is_mild(self):
        """Exactly 5 kg to gain is still mild gain."""
        assert select_scenario([], 70, 75) == CalorieScenario.MILD_WEIGHT_GAIN


class TestMacros:
    """Tests for macro ratio selection and gram conversion."""

    def test_muscle_gain_ratios(self):
        """Muscle gain and strength share the 30/45/25 split."""
        assert macro_ratios_for(["get-stronger"]).protein == 0.30
        assert macro_ratios_for(["gain-muscle"]).fat == 0.25

    def test_strength_wins_over_weight_loss(self):
        """Muscle/strength goals are checked before weight loss."""
        ratios = macro_ratios_for(["lose-weight", "get-stronger"])
        assert ratios.protein == 0.30

    def test_weight_loss_ratios(self):
        """Weight loss uses 35/35/30."""
        ratios = macro_ratios_for(["lose-weight"])
        assert (ratios.protein, ratios.carbs, ratios.fat) == (0.35, 0.35, 0.30)

    def test_endurance_ratios(self):
        """Endurance uses 20/55/25."""
        ratios = macro_ratios_for(["improve-endurance"])
        assert (ratios.protein, ratios.carbs, ratios.fat) == (0.20, 0.55, 0.25)

    @pytest.mark.parametrize("goals", [[], ["lose-weight"], ["gain-muscle"], ["improve-endurance"]])
    def test_macro_calories_approximate_target(self, goals):
        """Rounded grams add back up to roughly the calorie target."""
        targets = calculate_targets(reference_profile(goals=goals))
        macro_calories = targets.protein * 4 + targets.carbs * 4 + targets.fat * 9
        assert all(isinstance(v, int) and v >= 0 for v in (targets.protein, targets.carbs, targets.fat))
        assert abs(macro_calories - targets.calories) <= 10


class TestSerialization:
    """Tests for TargetSet dict conversion."""

    def test_to_dict_layout(self):
        """Dict output carries targets, reference values and scenarios."""
        data = targets_to_dict(calculate_targets(reference_profile()))
        assert data["calories"] == 2563
        assert data["reference"]["scenario"] == "maintain"
        assert data["scenarios"]["weight_loss"] == 2025

    def test_scenario_calories(self):
        """Each scenario's calories match the fixed fractions of TDEE."""
        targets = calculate_targets(reference_profile())
        assert targets.scenario_calories(CalorieScenario.MAINTAIN) == 2563
        assert targets.scenario_calories(CalorieScenario.MILD_WEIGHT_LOSS) == 2307
        assert targets.scenario_calories(CalorieScenario.WEIGHT_LOSS) == 2025
        assert targets.scenario_calories(CalorieScenario.EXTREME_WEIGHT_LOSS) == 1512
        assert targets.scenario_calories(CalorieScenario.MILD_WEIGHT_GAIN) == 2820
        assert targets.scenario_calories(CalorieScenario.WEIGHT_GAIN) == 3102

    def test_active_scenario_matches_calories_above_floor(self):
        targets = calculate_targets(reference_profile(goals=["lose-weight"], target_weight=60))
        assert targets.scenario_calories(targets.scenario) == targets.calories

    def test_from_dict_restores_targets(self):
        """Stored targets can be rebuilt exactly."""
        targets = calculate_targets(reference_profile(goals=["lose-weight"]))
        assert targets_from_dict(targets_to_dict(targets)) == targets


class TestActivityLevel:
    """Tests for ActivityLevel.parse."""

    def test_parse_accepts_underscores(self):
        assert ActivityLevel.parse("very_active") == ActivityLevel.VERY_ACTIVE

    def test_parse_defaults(self):
        assert ActivityLevel.parse(None) == ActivityLevel.MODERATELY_ACTIVE
