"""Workout sequence commands."""

import click

from ..config import get_settings
from ..errors import GymLogbookError
from ..services.sequence import SequenceService
from .base import async_command, echo_info, echo_success, ensure_initialized, fail


@click.group()
def sequence():
    """Build and edit a user's rolling day plan."""
    pass


@sequence.command("show")
@click.argument("user_id", type=int)
@click.pass_context
@async_command
async def show(ctx: click.Context, user_id: int):
    """Show a user's plan, day by day."""
    ensure_initialized(ctx)

    days = await SequenceService(get_settings()).get_days(user_id)
    if not days:
        echo_info(f"User {user_id} has no sequence yet.")
        return

    for day in days:
        click.echo(click.style(f"Day {day.day_number}", bold=True))
        for entry in day.entries:
            name = entry.exercise.name if entry.exercise else f"(missing exercise {entry.exercise_id})"
            click.echo(f"  {entry.sort_order}. {name}  [entry {entry.id}]")


@sequence.command("add")
@click.argument("user_id", type=int)
@click.argument("exercise_id", type=int)
@click.argument("day_number", type=int)
@click.pass_context
@async_command
async def add(ctx: click.Context, user_id: int, exercise_id: int, day_number: int):
    """Append an exercise to a day."""
    ensure_initialized(ctx)

    try:
        entry = await SequenceService(get_settings()).add_entry(user_id, exercise_id, day_number)
    except GymLogbookError as e:
        fail(ctx, str(e))
        return

    echo_success(
        f"Added {entry.exercise.name} to day {day_number} at position {entry.sort_order}"
    )


@sequence.command("remove")
@click.argument("entry_id", type=int)
@click.pass_context
@async_command
async def remove(ctx: click.Context, entry_id: int):
    """Remove an entry from a plan."""
    ensure_initialized(ctx)

    try:
        await SequenceService(get_settings()).remove_entry(entry_id)
    except GymLogbookError as e:
        fail(ctx, str(e))
        return

    echo_success(f"Removed entry {entry_id}")


@sequence.command("reorder")
@click.argument("user_id", type=int)
@click.argument("day_number", type=int)
@click.argument("entry_ids", type=int, nargs=-1, required=True)
@click.pass_context
@async_command
async def reorder(ctx: click.Context, user_id: int, day_number: int, entry_ids: tuple[int, ...]):
    """Set the order of a day's entries (list every entry ID once)."""
    ensure_initialized(ctx)

    try:
        entries = await SequenceService(get_settings()).reorder(
            user_id, day_number, list(entry_ids)
        )
    except GymLogbookError as e:
        fail(ctx, str(e))
        return

    echo_success(f"Day {day_number} reordered")
    for entry in entries:
        click.echo(f"  {entry.sort_order}. {entry.exercise.name if entry.exercise else entry.exercise_id}")
