"""Utility helpers for gym-logbook."""

from .exercise_utils import (
    asset_for_exercise,
    assets_for_category,
    classify,
    normalize_exercise_name,
)

__all__ = [
    "asset_for_exercise",
    "assets_for_category",
    "classify",
    "normalize_exercise_name",
]
