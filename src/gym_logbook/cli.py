"""CLI entry point for gym-logbook."""

import click

from . import __version__
from .commands import exercises, init, progress, sequence, serve, users
from .config import get_settings
from .logs import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="gym-logbook")
@click.option("--log-level", default=None, help="Override GYM_LOGBOOK_LOG_LEVEL")
def main(log_level: str | None):
    """gym-logbook: multi-tenant gym logbook with rolling workout plans.

    Example usage:

        # Create the database and owner account
        gym-logbook init

        # Add a member and give them a two-day plan
        gym-logbook users add alex
        gym-logbook sequence add 2 5 1
        gym-logbook sequence add 2 13 2

        # Serve the JSON API
        gym-logbook serve
    """
    configure_logging(log_level or get_settings().log_level)


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(users)
main.add_command(exercises)
main.add_command(sequence)
main.add_command(progress)


def run():
    """Run the CLI (handles async event loop)."""
    main()


if __name__ == "__main__":
    run()
