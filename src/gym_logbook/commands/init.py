"""Initialize project command."""

import click

from ..config import get_settings
from ..db import init_db, seed_exercises
from ..services.users import UserService
from .base import async_command, echo_info, echo_success, echo_warning


@click.command()
@click.option("--no-seed", is_flag=True, help="Skip loading the default exercise library")
@async_command
async def init(no_seed: bool):
    """Initialize the gym-logbook database.

    Creates the data directory and SQLite schema, loads the default
    exercise library, and creates the owner account from the
    GYM_LOGBOOK_OWNER_NAME / GYM_LOGBOOK_OWNER_PASSWORD settings.
    """
    settings = get_settings()
    echo_info(f"Initializing gym-logbook in {settings.data_dir}")

    await init_db(settings.db_path)
    echo_success("Database initialized")

    if not no_seed:
        count = await seed_exercises(settings.db_path)
        if count:
            echo_success(f"Exercise library populated ({count} exercises)")
        else:
            echo_info("Exercise library already populated")

    owner, created = await UserService(settings).ensure_owner(
        settings.owner_name, settings.owner_password
    )
    if created:
        echo_success(f"Owner account '{owner.name}' created")
        if owner.check_password("admin"):
            echo_warning("Owner password is the default; set GYM_LOGBOOK_OWNER_PASSWORD")
    else:
        echo_info(f"Owner account '{owner.name}' already exists")

    click.echo()
    click.echo("gym-logbook is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  gym-logbook users add <name>              # Add a member")
    click.echo("  gym-logbook sequence add <user> <ex> <day> # Build their plan")
    click.echo("  gym-logbook serve                          # Start the API")
