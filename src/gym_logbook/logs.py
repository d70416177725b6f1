"""Logging setup shared by the CLI and the web app."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Calling it again only adjusts the level, so the app factory and the CLI
    can both call it without stacking handlers.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    root.setLevel(level.upper())
    # Keep aiosqlite's per-statement debug chatter out of DEBUG runs
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
