"""CLI commands for gym-logbook."""

from .exercises import exercises
from .init import init
from .progress import progress
from .sequence import sequence
from .serve import serve
from .users import users

__all__ = [
    "exercises",
    "init",
    "progress",
    "sequence",
    "serve",
    "users",
]
