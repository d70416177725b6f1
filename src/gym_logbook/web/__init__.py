"""HTTP API for gym-logbook."""

from .app import create_app

__all__ = ["create_app"]
