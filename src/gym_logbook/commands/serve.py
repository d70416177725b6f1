"""API server command."""

import click

from ..config import get_settings
from .base import ensure_initialized


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the JSON API server.

    Settings (data directory, advancement policy, completion rule) come
    from GYM_LOGBOOK_* environment variables or a .env file.

    Examples:

        gym-logbook serve

        # Members' phones on the gym network
        gym-logbook serve --host 0.0.0.0

        # Session completion only, no advance on check-out
        GYM_LOGBOOK_CHECKOUT_ADVANCE=never gym-logbook serve
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    settings = get_settings()

    click.echo()
    click.echo(click.style("gym-logbook API", fg="green", bold=True))
    click.echo(f"  Database:   {settings.db_path}")
    click.echo(f"  Check-out:  {settings.checkout_advance.value}")
    click.echo(f"  Completion: {settings.completion_rule.value}")
    click.echo(f"  Listening:  http://{host}:{port}  (docs at /docs)")
    click.echo()

    # The reloader re-imports the app, so it can only use the factory path
    target = "gym_logbook.web:create_app" if reload else create_app(settings)
    uvicorn.run(
        target,
        host=host,
        port=port,
        reload=reload,
        factory=reload,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
