"""Progress tracking commands."""

import click

from ..config import get_settings
from ..errors import GymLogbookError
from ..services.progression import ProgressionService
from ..services.sessions import SessionTracker
from ..services.users import UserService
from .base import async_command, echo_info, echo_success, ensure_initialized, fail


@click.group()
def progress():
    """Inspect and adjust where a user is in their plan."""
    pass


async def _check_user(ctx: click.Context, user_id: int) -> None:
    try:
        await UserService(get_settings()).get(user_id)
    except GymLogbookError as e:
        fail(ctx, str(e))


@progress.command("status")
@click.argument("user_id", type=int)
@click.pass_context
@async_command
async def status(ctx: click.Context, user_id: int):
    """Show the current day and today's exercises."""
    ensure_initialized(ctx)
    await _check_user(ctx, user_id)

    plan = await SessionTracker(get_settings()).todays_plan(user_id)
    prog = plan.progress

    click.echo()
    click.echo(click.style(f"User {user_id}", bold=True))
    click.echo("=" * 40)
    if plan.max_day:
        click.echo(f"Position: {prog.get_position_display()} of {plan.max_day}")
    else:
        click.echo(f"Position: {prog.get_position_display()} (no sequence yet)")
    click.echo(f"Workouts completed: {prog.total_workouts_completed}")
    if prog.last_workout_date:
        click.echo(f"Last workout: {prog.last_workout_date.isoformat()}")
    click.echo(f"State: {plan.state.value}")

    if not plan.exercises:
        return

    click.echo()
    click.echo(click.style("Today:", bold=True))
    for exercise in plan.exercises:
        done = exercise.id in plan.completed_ids
        mark = click.style("[x]", fg="green") if done else "[ ]"
        click.echo(f"  {mark} {exercise.name} ({exercise.target_sets}x{exercise.target_reps})")


@progress.command("advance")
@click.argument("user_id", type=int)
@click.pass_context
@async_command
async def advance(ctx: click.Context, user_id: int):
    """Move a user to the next day."""
    ensure_initialized(ctx)
    await _check_user(ctx, user_id)

    service = ProgressionService(get_settings())
    before = await service.get_or_create(user_id)
    prog = await service.advance(user_id)

    if prog.total_workouts_completed == before.total_workouts_completed:
        echo_info("User has no sequence; nothing to advance.")
        return
    echo_success(f"Day {before.current_day_number} -> Day {prog.current_day_number}")


@progress.command("set")
@click.argument("user_id", type=int)
@click.argument("day_number", type=int)
@click.pass_context
@async_command
async def set_day(ctx: click.Context, user_id: int, day_number: int):
    """Jump a user to a specific day."""
    ensure_initialized(ctx)
    await _check_user(ctx, user_id)

    try:
        prog = await ProgressionService(get_settings()).set_day(user_id, day_number)
    except GymLogbookError as e:
        fail(ctx, str(e))
        return

    echo_success(f"User {user_id} is now on {prog.get_position_display()}")


@progress.command("reset")
@click.argument("user_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def reset(ctx: click.Context, user_id: int, yes: bool):
    """Back to day 1 and clear the workout count."""
    ensure_initialized(ctx)
    await _check_user(ctx, user_id)

    if not yes and not click.confirm(f"Reset progress for user {user_id}?"):
        echo_info("Cancelled.")
        return

    await ProgressionService(get_settings()).reset(user_id)
    echo_success(f"User {user_id} reset to Day 1")
