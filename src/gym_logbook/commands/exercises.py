"""Exercise library commands."""

import click

from ..config import get_settings
from ..errors import GymLogbookError
from ..models.exercise import ExerciseCategory
from ..services.exercises import ExerciseService
from .base import async_command, echo_info, echo_success, ensure_initialized, fail, format_table


@click.group()
def exercises():
    """Manage the exercise library."""
    pass


@exercises.command("list")
@click.option("--user-id", type=int, default=None, help="Only exercises visible to this user")
@click.option(
    "--category",
    type=click.Choice([c.value for c in ExerciseCategory]),
    default=None,
    help="Only this category",
)
@click.pass_context
@async_command
async def list_exercises(ctx: click.Context, user_id: int | None, category: str | None):
    """List exercises with their default targets."""
    ensure_initialized(ctx)

    library = await ExerciseService(get_settings()).list_all(user_id, category)

    if not library:
        echo_info("No exercises found.")
        return

    rows = [
        [
            str(e.id),
            e.name,
            e.category.value,
            f"{e.target_sets}x{e.target_reps}",
            f"{e.target_weight:g}",
            "global" if e.is_global else f"user {e.created_for_user_id}",
        ]
        for e in library
    ]
    click.echo(format_table(["ID", "Name", "Category", "Target", "Weight", "Scope"], rows))


@exercises.command("add")
@click.argument("name")
@click.option(
    "--category",
    type=click.Choice([c.value for c in ExerciseCategory]),
    default=None,
    help="Category (inferred from the name if omitted)",
)
@click.option("--sets", "target_sets", default=3, type=int, show_default=True)
@click.option("--reps", "target_reps", default=12, type=int, show_default=True)
@click.option("--weight", "target_weight", default=0.0, type=float, show_default=True)
@click.option("--for-user", "created_for_user_id", type=int, default=None,
              help="Make the exercise visible to this user only")
@click.pass_context
@async_command
async def add_exercise(
    ctx: click.Context,
    name: str,
    category: str | None,
    target_sets: int,
    target_reps: int,
    target_weight: float,
    created_for_user_id: int | None,
):
    """Add an exercise."""
    ensure_initialized(ctx)

    try:
        exercise = await ExerciseService(get_settings()).create(
            name,
            category=category,
            target_sets=target_sets,
            target_reps=target_reps,
            target_weight=target_weight,
            created_for_user_id=created_for_user_id,
        )
    except GymLogbookError as e:
        fail(ctx, str(e))
        return

    echo_success(f"Added '{exercise.name}' ({exercise.category.value}, ID {exercise.id})")


@exercises.command("remove")
@click.argument("exercise_id", type=int)
@click.pass_context
@async_command
async def remove_exercise(ctx: click.Context, exercise_id: int):
    """Delete an exercise and drop it from every plan."""
    ensure_initialized(ctx)

    try:
        await ExerciseService(get_settings()).delete(exercise_id)
    except GymLogbookError as e:
        fail(ctx, str(e))
        return

    echo_success(f"Deleted exercise {exercise_id}")
