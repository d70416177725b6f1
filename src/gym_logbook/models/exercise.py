"""Exercise definitions and metadata."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ExerciseCategory(str, Enum):
    """Body-part categories used to group exercises."""

    BACK = "back"
    CHEST = "chest"
    SHOULDER = "shoulder"
    LEG = "leg"
    ARM = "arm"

    @classmethod
    def parse(cls, value: "str | ExerciseCategory") -> "ExerciseCategory":
        """Parse a category, accepting the plural spellings older rows used."""
        if isinstance(value, cls):
            return value
        normalized = value.strip().lower()
        return cls(CATEGORY_ALIASES.get(normalized, normalized))


CATEGORY_ALIASES = {
    "legs": "leg",
    "arms": "arm",
    "shoulders": "shoulder",
}

# Display order on the home page
CATEGORY_ORDER = [
    ExerciseCategory.BACK,
    ExerciseCategory.CHEST,
    ExerciseCategory.SHOULDER,
    ExerciseCategory.LEG,
    ExerciseCategory.ARM,
]


@dataclass
class Exercise:
    """An owner-defined exercise with its default targets."""

    name: str
    category: ExerciseCategory
    target_sets: int = 3
    target_reps: int = 12
    target_weight: float = 0.0
    gif_url: str = ""
    created_for_user_id: int | None = None  # None = visible to everyone
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_global(self) -> bool:
        return self.created_for_user_id is None

    def is_visible_to(self, user_id: int) -> bool:
        """Global exercises are visible to all; scoped ones to their user only."""
        return self.is_global or self.created_for_user_id == user_id

    @property
    def target_volume(self) -> float:
        """Planned sets x reps x weight."""
        return self.target_sets * self.target_reps * self.target_weight

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "target_sets": self.target_sets,
            "target_reps": self.target_reps,
            "target_weight": self.target_weight,
            "gif_url": self.gif_url,
            "created_for_user_id": self.created_for_user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Exercise":
        """Create from dictionary."""
        created_at = None
        if data.get("created_at"):
            created_at = datetime.fromisoformat(data["created_at"])

        updated_at = None
        if data.get("updated_at"):
            updated_at = datetime.fromisoformat(data["updated_at"])

        return cls(
            id=id if id is not None else data.get("id"),
            name=data["name"],
            category=ExerciseCategory.parse(data["category"]),
            target_sets=data.get("target_sets", 3),
            target_reps=data.get("target_reps", 12),
            target_weight=data.get("target_weight") or 0.0,
            gif_url=data.get("gif_url") or "",
            created_for_user_id=data.get("created_for_user_id"),
            created_at=created_at,
            updated_at=updated_at,
        )


# Seed library, loaded by `gym-logbook init`
DEFAULT_EXERCISES = [
    # Back
    Exercise(name="Pull Up", category=ExerciseCategory.BACK, target_sets=3, target_reps=8),
    Exercise(name="Chin Up", category=ExerciseCategory.BACK, target_sets=3, target_reps=8),
    Exercise(name="Lat Pulldown", category=ExerciseCategory.BACK, target_weight=40),
    Exercise(name="Machine Row", category=ExerciseCategory.BACK, target_weight=35),
    # Chest
    Exercise(name="Bench Press", category=ExerciseCategory.CHEST, target_reps=10, target_weight=40),
    Exercise(name="Incline Press", category=ExerciseCategory.CHEST, target_reps=10, target_weight=16),
    Exercise(name="Chest Press", category=ExerciseCategory.CHEST, target_weight=30),
    Exercise(name="Dips", category=ExerciseCategory.CHEST, target_reps=10),
    # Shoulder
    Exercise(name="Shoulder Press", category=ExerciseCategory.SHOULDER, target_reps=10, target_weight=12),
    Exercise(name="Lateral Raise", category=ExerciseCategory.SHOULDER, target_weight=6),
    Exercise(name="Front Raise", category=ExerciseCategory.SHOULDER, target_weight=6),
    Exercise(name="Face Pull", category=ExerciseCategory.SHOULDER, target_reps=15, target_weight=15),
    # Leg
    Exercise(name="Squat", category=ExerciseCategory.LEG, target_reps=8, target_weight=60),
    Exercise(name="Deadlift", category=ExerciseCategory.LEG, target_reps=5, target_weight=80),
    Exercise(name="Leg Press", category=ExerciseCategory.LEG, target_reps=10, target_weight=100),
    Exercise(name="Leg Extension", category=ExerciseCategory.LEG, target_weight=30),
    Exercise(name="Hamstring Curl", category=ExerciseCategory.LEG, target_weight=25),
    # Arm
    Exercise(name="Bicep Curl", category=ExerciseCategory.ARM, target_weight=10),
    Exercise(name="Dumbbell Curl", category=ExerciseCategory.ARM, target_weight=10),
    Exercise(name="Tricep Extension", category=ExerciseCategory.ARM, target_weight=10),
]
