"""User account model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_AVATAR_COLOR = "#FF6B6B"


class UserRole(str, Enum):
    """Account role."""

    OWNER = "owner"  # Gym admin, manages users/exercises/sequences
    USER = "user"


@dataclass
class User:
    """A gym member or owner."""

    name: str
    role: UserRole = UserRole.USER
    avatar_color: str = DEFAULT_AVATAR_COLOR
    password_hash: str = ""
    id: int | None = None
    created_at: datetime | None = None

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER

    def set_password(self, password: str) -> None:
        """Hash and store a new password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a candidate password against the stored hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict:
        """Public representation. Never includes the password hash."""
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "avatar_color": self.avatar_color,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "User":
        """Create from dictionary."""
        created_at = None
        if data.get("created_at"):
            created_at = datetime.fromisoformat(data["created_at"])

        return cls(
            id=id if id is not None else data.get("id"),
            name=data["name"],
            role=UserRole(data.get("role", "user")),
            avatar_color=data.get("avatar_color") or DEFAULT_AVATAR_COLOR,
            password_hash=data.get("password_hash", ""),
            created_at=created_at,
        )
