"""Gym attendance (check-in / check-out) model."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class CheckoutAdvance(str, Enum):
    """Whether checking out moves the user to the next plan day."""

    ALWAYS = "always"  # Every check-out advances, logged or not
    NEVER = "never"  # Only session completion advances


@dataclass
class CheckIn:
    """One visit to the gym."""

    user_id: int
    check_in_time: datetime = field(default_factory=datetime.now)
    check_out_time: datetime | None = None
    duration_minutes: int | None = None
    id: int | None = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None

    def elapsed_minutes(self, now: datetime | None = None) -> int:
        """Whole minutes since check-in."""
        now = now or datetime.now()
        return max(0, int((now - self.check_in_time).total_seconds() // 60))

    def close(self, now: datetime | None = None) -> int:
        """Record check-out and the visit duration in whole minutes."""
        now = now or datetime.now()
        self.duration_minutes = self.elapsed_minutes(now)
        self.check_out_time = now
        return self.duration_minutes

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "check_in_time": self.check_in_time.isoformat(),
            "check_out_time": self.check_out_time.isoformat() if self.check_out_time else None,
            "duration_minutes": self.duration_minutes,
            "duration": (
                format_duration(self.duration_minutes)
                if self.duration_minutes is not None
                else None
            ),
        }


def format_duration(minutes: int) -> str:
    """Format minutes as ``1h 5m`` or ``45m``."""
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"
