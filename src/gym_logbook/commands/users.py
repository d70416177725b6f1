"""User management commands."""

import click

from ..config import get_settings
from ..errors import GymLogbookError
from ..models.user import UserRole
from ..services.users import UserService
from .base import async_command, echo_info, echo_success, ensure_initialized, fail, format_table


@click.group()
def users():
    """Manage gym members and owners."""
    pass


@users.command("list")
@click.option("--role", type=click.Choice([r.value for r in UserRole]), help="Only this role")
@click.pass_context
@async_command
async def list_users(ctx: click.Context, role: str | None):
    """List accounts."""
    ensure_initialized(ctx)

    accounts = await UserService(get_settings()).list_all(UserRole(role) if role else None)
    if not accounts:
        echo_info("No users yet. Add one with 'gym-logbook users add'.")
        return

    rows = [
        [str(u.id), u.name, u.role.value, u.created_at.strftime("%Y-%m-%d") if u.created_at else ""]
        for u in accounts
    ]
    click.echo(format_table(["ID", "Name", "Role", "Created"], rows))


@users.command("add")
@click.argument("name")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--owner", is_flag=True, help="Create an owner (admin) account")
@click.option("--color", default=None, help="Avatar color, e.g. #4ECDC4")
@click.pass_context
@async_command
async def add_user(ctx: click.Context, name: str, password: str, owner: bool, color: str | None):
    """Create an account."""
    ensure_initialized(ctx)

    role = UserRole.OWNER if owner else UserRole.USER
    try:
        user = await UserService(get_settings()).create(name, password, role, color)
    except GymLogbookError as e:
        fail(ctx, str(e))
        return

    echo_success(f"Created {role.value} '{user.name}' (ID {user.id})")


@users.command("remove")
@click.argument("user_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def remove_user(ctx: click.Context, user_id: int, yes: bool):
    """Delete an account and all of its data."""
    ensure_initialized(ctx)

    service = UserService(get_settings())
    try:
        user = await service.get(user_id)
        if not yes and not click.confirm(f"Delete '{user.name}' and all their workouts?"):
            echo_info("Cancelled.")
            return
        await service.delete(user_id)
    except GymLogbookError as e:
        fail(ctx, str(e))
        return

    echo_success(f"Deleted '{user.name}'")
