"""Utilities for exercise name normalization, categorization and images."""

import re
from typing import Protocol

from ..models.exercise import ExerciseCategory


def normalize_exercise_name(name: str) -> str:
    """Normalize an exercise name for comparison.

    Converts to lowercase, removes extra whitespace, and standardizes common variations.
    """
    # Lowercase and strip
    normalized = name.lower().strip()

    # Remove extra whitespace and hyphens
    normalized = re.sub(r"[\s\-_]+", " ", normalized)

    # Common abbreviation expansions
    abbreviations = {
        "bb": "barbell",
        "db": "dumbbell",
        "kb": "kettlebell",
        "ohp": "overhead press",
        "rdl": "romanian deadlift",
    }

    # Check if the entire name is an abbreviation
    if normalized in abbreviations:
        return abbreviations[normalized]

    # Replace abbreviations at word boundaries
    for abbrev, full in abbreviations.items():
        normalized = re.sub(rf"\b{abbrev}\b", full, normalized)

    return normalized


class Classifier(Protocol):
    """Anything that can guess an exercise's category from its name."""

    def classify(self, name: str) -> ExerciseCategory | None: ...


# Checked in order; the first category with a matching keyword wins.
# Leg comes before back so "romanian deadlift" isn't caught by "row"-style
# back keywords, and arm before chest so "tricep dips" lands on arm.
CATEGORY_KEYWORDS: list[tuple[ExerciseCategory, tuple[str, ...]]] = [
    (ExerciseCategory.LEG, (
        "squat", "deadlift", "leg", "lunge", "calf", "hamstring", "glute",
        "hip thrust", "step up",
    )),
    (ExerciseCategory.ARM, (
        "curl", "bicep", "tricep", "skull crusher", "pushdown", "wrist",
        "forearm", "hammer",
    )),
    (ExerciseCategory.SHOULDER, (
        "shoulder", "lateral raise", "front raise", "face pull", "overhead press",
        "military press", "arnold", "rear delt", "shrug",
    )),
    (ExerciseCategory.CHEST, (
        "bench", "chest", "incline", "decline", "fly", "pec", "push up", "dip",
    )),
    (ExerciseCategory.BACK, (
        "row", "pull up", "pullup", "chin up", "chinup", "pulldown", "lat ",
        "back", "pullover",
    )),
]


class KeywordClassifier:
    """Categorize exercises by keyword substring match on the normalized name."""

    def __init__(
        self,
        keywords: list[tuple[ExerciseCategory, tuple[str, ...]]] | None = None,
    ):
        self.keywords = keywords if keywords is not None else CATEGORY_KEYWORDS

    def classify(self, name: str) -> ExerciseCategory | None:
        # Pad so keywords with a trailing space ("lat ") still match at the end
        normalized = normalize_exercise_name(name) + " "
        for category, words in self.keywords:
            if any(word in normalized for word in words):
                return category
        return None


default_classifier = KeywordClassifier()


def classify(name: str, classifier: Classifier | None = None) -> ExerciseCategory | None:
    """Guess the category for an exercise name, or None if nothing matches."""
    return (classifier or default_classifier).classify(name)


# Bundled demo images, keyed by normalized exercise name
ASSET_MAPPING: dict[str, str] = {
    # Arm exercises
    "barbell reverse wrist curl": "/assets/arm/barbell-reverse-wrist-curl.gif",
    "bicep curl": "/assets/arm/bicep-curl-cable.gif",
    "dumbbell curl": "/assets/arm/dumbell-curl.gif",
    "tricep extension": "/assets/arm/seated-dumbbell-triceps-extension.gif",
    # Back exercises
    "chin up": "/assets/back/chin-up.gif",
    "pull up": "/assets/back/pull-up.gif",
    "row": "/assets/back/machine-rowing.gif",
    "lat pulldown": "/assets/back/rope-pullover.gif",
    # Chest exercises
    "bench press": "/assets/chest/barbell-bench-press.gif",
    "incline press": "/assets/chest/incline-dumbell-press.gif",
    "dips": "/assets/chest/dips-bodyweight.gif",
    "chest press": "/assets/chest/machine-chest-press.gif",
    # Leg exercises
    "squat": "/assets/leg/hack-squat.gif",
    "deadlift": "/assets/leg/barbell-deadlift.gif",
    "leg press": "/assets/leg/leg-press.gif",
    "leg extension": "/assets/leg/leg-extension.gif",
    "hamstring curl": "/assets/leg/seated-hamstring-curl.gif",
    # Shoulder exercises
    "shoulder press": "/assets/shoulder/dumbbell-shoulder-press.gif",
    "lateral raise": "/assets/shoulder/dumbbell-side-lateral-raise.gif",
    "front raise": "/assets/shoulder/dumbell-front-raise.gif",
    "face pull": "/assets/shoulder/cable-face-pull.gif",
}


def asset_for_exercise(name: str) -> str | None:
    """Find a bundled image for an exercise name.

    Tries an exact match first, then a substring match in either direction.
    """
    normalized = normalize_exercise_name(name)
    if not normalized:
        return None

    if normalized in ASSET_MAPPING:
        return ASSET_MAPPING[normalized]

    for key, path in ASSET_MAPPING.items():
        if key in normalized or normalized in key:
            return path

    return None


def assets_for_category(category: ExerciseCategory) -> list[str]:
    """All bundled image paths for a category."""
    return [path for path in ASSET_MAPPING.values() if f"/{category.value}/" in path]
