"""CLI interface using Typer."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fitplan.config import get_settings
from fitplan.data.catalog import load_meal_catalog, load_profile, load_workout_catalog
from fitplan.db import open_store, persist_selection, persist_targets
from fitplan.db.store import MEAL_PLAN, WORKOUT_PLAN
from fitplan.logging_config import configure_logging
from fitplan.matching.meals import (
    daily_plan_to_dict,
    select_daily_meal_plan,
    summarize_daily_plan,
)
from fitplan.matching.models import DailyMealPlan, FitPlanError, MealType, WorkoutPlanRecord
from fitplan.matching.workouts import (
    rank_workout_plans,
    workout_plan_to_dict,
)
from fitplan.profiles.body_calc import (
    CalorieScenario,
    TargetSet,
    calculate_targets,
    targets_to_dict,
)
from fitplan.profiles.models import UserProfile
from fitplan.profiles.units import feet_inches_to_cm

app = typer.Typer(
    help="Daily nutrition targets and workout/meal plan recommendations",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Show or create the configuration file")
app.add_typer(config_app, name="config")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict) -> None:
    """Print a JSON response to stdout."""
    print(json.dumps(response, indent=2))


def _use_json(json_flag: bool) -> bool:
    return json_flag or get_settings().defaults.output_format == "json"


def _resolve_catalog(path: Optional[Path], configured: Optional[Path], kind: str) -> Path:
    """Pick the --catalog path or the configured default."""
    resolved = path or configured
    if resolved is None:
        console.print(f"[red]No {kind} catalog given.[/red]")
        console.print(f"Pass [cyan]--catalog <file>[/cyan] or set catalogs.{kind} in config.yaml")
        raise typer.Exit(1)
    return resolved


def _fail(error: FitPlanError) -> None:
    console.print(f"[red]{escape(str(error))}[/red]")
    raise typer.Exit(1)


def _save_results(
    user_id: str,
    targets: TargetSet,
    workout_plan: Optional[WorkoutPlanRecord],
    daily_plan: Optional[DailyMealPlan],
) -> bool:
    """Persist everything `plan` computed; True only if every write succeeded."""
    store = open_store()
    if store is None:
        return False

    saved = persist_targets(store, user_id, targets)
    if workout_plan is not None:
        saved = persist_selection(store, user_id, WORKOUT_PLAN, workout_plan.id) and saved
    if daily_plan is not None:
        saved = persist_selection(
            store, user_id, MEAL_PLAN, summarize_daily_plan(daily_plan)
        ) and saved
    return saved


def print_targets(targets: TargetSet) -> None:
    """Render a TargetSet as a rich table."""
    table = Table(title="Daily Targets")
    table.add_column("Target", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Calories", f"{targets.calories} kcal ({targets.scenario.value})")
    table.add_row("Protein", f"{targets.protein} g")
    table.add_row("Carbs", f"{targets.carbs} g")
    table.add_row("Fat", f"{targets.fat} g")
    table.add_row("Water", f"{targets.water} ml")
    table.add_row("BMR", f"{targets.bmr} kcal")
    table.add_row("TDEE", f"{targets.tdee} kcal")
    console.print(table)

    scenarios = Table(title="Calorie Scenarios")
    scenarios.add_column("Scenario", style="cyan")
    scenarios.add_column("kcal/day", justify="right")
    for scenario in CalorieScenario:
        name = scenario.value.replace("-", " ")
        if scenario is targets.scenario:
            name = f"[bold]{name} *[/bold]"
        scenarios.add_row(name, str(targets.scenario_calories(scenario)))
    console.print(scenarios)


def print_daily_plan(plan: DailyMealPlan) -> None:
    """Render a DailyMealPlan as a rich table."""
    table = Table(title="Daily Meal Plan")
    table.add_column("Meal", style="cyan")
    table.add_column("Selection")
    table.add_column("Calories", justify="right")
    table.add_column("Budget", justify="right")

    for meal_type in MealType:
        meal = plan.get(meal_type)
        table.add_row(
            meal_type.value.capitalize(),
            meal.name if meal else "[dim]None[/dim]",
            f"{meal.calories or 0:.0f}" if meal else "0",
            str(plan.slot_targets.get(meal_type, 0)),
        )
    table.add_row(
        "[bold]Total[/bold]", "", f"[bold]{plan.total_calories:.0f}[/bold]",
        str(plan.target_calories),
    )
    console.print(table)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging before any command runs."""
    settings = get_settings()
    level = "DEBUG" if verbose else settings.logging.level
    configure_logging(level, json_output=settings.logging.json)


# ============================================================================
# Commands
# ============================================================================


@app.command()
def targets(
    weight: float = typer.Option(..., "--weight", "-w", help="Current body weight"),
    unit: str = typer.Option("kg", "--unit", help="Weight unit: kg or lb"),
    height: Optional[float] = typer.Option(None, "--height", help="Height in cm"),
    height_ft: Optional[float] = typer.Option(None, "--height-ft", help="Height, feet part"),
    height_in: float = typer.Option(0.0, "--height-in", help="Height, inches part"),
    age: Optional[int] = typer.Option(None, "--age", help="Age in years"),
    gender: Optional[str] = typer.Option(None, "--gender", help="male or female"),
    activity: str = typer.Option(
        "moderately-active",
        "--activity",
        help="sedentary, lightly-active, moderately-active, very-active, extra-active",
    ),
    goal: Optional[list[str]] = typer.Option(None, "--goal", "-g", help="Goal tag (repeatable)"),
    target_weight: Optional[float] = typer.Option(None, "--target-weight", help="Goal weight"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Calculate daily calorie, macro and water targets."""
    height_cm = height
    if height_cm is None and height_ft is not None:
        height_cm = feet_inches_to_cm(height_ft, height_in)

    profile = UserProfile(
        gender=gender,
        current_weight=weight,
        weight_unit=unit,
        height_cm=height_cm,
        age=age,
        activity_level=activity,
        goals=list(goal or []),
        target_weight=target_weight,
    )
    result = calculate_targets(profile)

    if _use_json(json_output):
        output_json(targets_to_dict(result))
    else:
        print_targets(result)


@app.command()
def workout(
    catalog: Optional[Path] = typer.Option(None, "--catalog", "-c", help="Workout plan catalog file"),
    goal: Optional[list[str]] = typer.Option(None, "--goal", "-g", help="Goal tag (repeatable)"),
    fitness_level: int = typer.Option(0, "--fitness-level", "-f", min=0, max=5),
    prefer: Optional[list[str]] = typer.Option(
        None, "--prefer", help="Workout location: gym, home, outdoor, yoga (repeatable)"
    ),
    day: Optional[list[str]] = typer.Option(None, "--day", help="Workout day (repeatable)"),
    top: int = typer.Option(3, "--top", help="Number of ranked plans to show"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Recommend the best-matching workout plan."""
    catalog_path = _resolve_catalog(catalog, get_settings().catalogs.workout_plans, "workout_plans")
    try:
        plans = load_workout_catalog(catalog_path)
    except FitPlanError as e:
        _fail(e)

    profile = UserProfile(
        goals=list(goal or []),
        fitness_level=fitness_level,
        workout_preferences=list(prefer or []),
        workout_days=list(day or []),
    )
    ranked = rank_workout_plans(profile, plans)

    if _use_json(json_output):
        output_json({
            "selected": workout_plan_to_dict(ranked[0].item) if ranked else None,
            "ranking": [
                {"score": c.score, "plan": workout_plan_to_dict(c.item)}
                for c in ranked[:top]
            ],
        })
        return

    if not ranked:
        console.print("[yellow]No workout plan selected (no goals or empty catalog).[/yellow]")
        return

    table = Table(title="Workout Plan Matches")
    table.add_column("#", justify="right")
    table.add_column("Plan", style="cyan")
    table.add_column("Goal")
    table.add_column("Level")
    table.add_column("Equipment")
    table.add_column("Days", justify="right")
    table.add_column("Score", justify="right")
    for position, candidate in enumerate(ranked[:top], start=1):
        plan = candidate.item
        table.add_row(
            str(position), plan.name, plan.goal, plan.experience,
            plan.equipment, str(plan.days_per_week), str(candidate.score),
        )
    console.print(table)


@app.command()
def meals(
    calories: int = typer.Option(..., "--calories", help="Daily calorie target"),
    catalog: Optional[Path] = typer.Option(None, "--catalog", "-c", help="Meal catalog file"),
    goal: Optional[list[str]] = typer.Option(None, "--goal", "-g", help="Goal tag (repeatable)"),
    diet: Optional[list[str]] = typer.Option(None, "--diet", help="Dietary preference (repeatable)"),
    allergen: Optional[list[str]] = typer.Option(None, "--allergen", help="Allergen to avoid (repeatable)"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Assemble a daily meal plan for a calorie target."""
    catalog_path = _resolve_catalog(catalog, get_settings().catalogs.meals, "meals")
    try:
        meal_catalog = load_meal_catalog(catalog_path)
    except FitPlanError as e:
        _fail(e)

    profile = UserProfile(
        goals=list(goal or []),
        dietary_preferences=list(diet or []),
        allergens=list(allergen or []),
        calorie_target=calories,
    )
    plan = select_daily_meal_plan(meal_catalog, profile)

    if _use_json(json_output):
        output_json(daily_plan_to_dict(plan) if plan else {"plan": None})
        return

    if plan is None:
        console.print("[yellow]No meal plan selected (empty catalog or no calorie target).[/yellow]")
        return
    print_daily_plan(plan)


@app.command()
def plan(
    profile_file: Path = typer.Option(..., "--profile", "-p", help="Onboarding answers (YAML/JSON)"),
    workout_catalog: Optional[Path] = typer.Option(None, "--workout-catalog", help="Workout plan catalog"),
    meal_catalog: Optional[Path] = typer.Option(None, "--meal-catalog", help="Meal catalog"),
    user_id: Optional[str] = typer.Option(None, "--user-id", help="Save results for this user"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Compute targets and select workout and meal plans for a profile."""
    settings = get_settings()
    try:
        profile = load_profile(profile_file)
        workout_path = workout_catalog or settings.catalogs.workout_plans
        meal_path = meal_catalog or settings.catalogs.meals
        workout_plans = load_workout_catalog(workout_path) if workout_path else []
        meal_records = load_meal_catalog(meal_path) if meal_path else []
    except FitPlanError as e:
        _fail(e)

    result = calculate_targets(profile)
    if not profile.calorie_target:
        profile = dataclasses.replace(profile, calorie_target=result.calories)

    ranked = rank_workout_plans(profile, workout_plans)
    selected_workout = ranked[0].item if ranked else None
    daily_plan = select_daily_meal_plan(meal_records, profile)

    # Targets are already final; storage outcome only affects the report
    saved: Optional[bool] = None
    if user_id:
        saved = _save_results(user_id, result, selected_workout, daily_plan)

    if _use_json(json_output):
        output_json({
            "targets": targets_to_dict(result),
            "workout_plan": workout_plan_to_dict(selected_workout) if selected_workout else None,
            "meal_plan": daily_plan_to_dict(daily_plan) if daily_plan else None,
            "saved": saved,
        })
        return

    print_targets(result)
    if selected_workout is not None:
        console.print(
            f"\n[bold]Workout plan:[/bold] {selected_workout.name} "
            f"({selected_workout.days_per_week} days/week, {selected_workout.experience})"
        )
    else:
        console.print("\n[yellow]No workout plan selected.[/yellow]")
    if daily_plan is not None:
        print_daily_plan(daily_plan)
    else:
        console.print("[yellow]No meal plan selected.[/yellow]")
    if saved is False:
        console.print("[yellow]Results could not be saved; they are shown above.[/yellow]")
    elif saved:
        console.print(f"[green]Saved results for {user_id}[/green]")


@config_app.command("show")
def config_show() -> None:
    """Show the active configuration."""
    settings = get_settings()
    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("database.path", str(settings.database.path))
    table.add_row("catalogs.workout_plans", str(settings.catalogs.workout_plans or "-"))
    table.add_row("catalogs.meals", str(settings.catalogs.meals or "-"))
    table.add_row("logging.level", settings.logging.level)
    table.add_row("logging.json", str(settings.logging.json))
    table.add_row("defaults.output_format", settings.defaults.output_format)
    console.print(table)


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write config.yaml"),
) -> None:
    """Write the current configuration to a YAML file."""
    get_settings().save(path)
    console.print(f"[green]Configuration written to {path or '~/.fitplan/config.yaml'}[/green]")


if __name__ == "__main__":
    app()
