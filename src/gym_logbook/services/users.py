"""User accounts and login."""

import logging

from ..config import Settings, get_settings
from ..db.repositories import UserRepository
from ..errors import AuthenticationError, NotFoundError, PermissionDenied, ValidationError
from ..models.user import DEFAULT_AVATAR_COLOR, User, UserRole

logger = logging.getLogger(__name__)


class UserService:
    """Owner-managed accounts."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.users = UserRepository(self.settings.db_path)

    async def authenticate(self, name: str, password: str) -> User:
        """Return the user for a name/password pair.

        Raises:
            AuthenticationError: On unknown name or wrong password
        """
        user = await self.users.get_by_name(name)
        if user is None or not user.check_password(password):
            logger.info("Failed login for %r", name)
            raise AuthenticationError("Invalid name or password")
        return user

    async def get(self, user_id: int) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def require_owner(self, user_id: int | None) -> User:
        """The acting user, provided they are an owner."""
        if user_id is None:
            raise AuthenticationError("Missing acting user")
        user = await self.users.get(user_id)
        if user is None:
            raise AuthenticationError(f"Unknown user {user_id}")
        if not user.is_owner:
            raise PermissionDenied("Owner access required")
        return user

    async def list_all(self, role: UserRole | None = None) -> list[User]:
        return await self.users.list_all(role)

    async def create(
        self,
        name: str,
        password: str,
        role: UserRole = UserRole.USER,
        avatar_color: str | None = None,
    ) -> User:
        name = (name or "").strip()
        if not name:
            raise ValidationError("name is required")
        if not password:
            raise ValidationError("password is required")

        user = User(name=name, role=role, avatar_color=avatar_color or DEFAULT_AVATAR_COLOR)
        user.set_password(password)
        user.id = await self.users.create(user)

        logger.info("Created %s account %r (id %s)", role.value, name, user.id)
        return user

    async def update(
        self,
        user_id: int,
        name: str | None = None,
        password: str | None = None,
        role: UserRole | None = None,
        avatar_color: str | None = None,
    ) -> User:
        user = await self.get(user_id)

        if name is not None:
            if not name.strip():
                raise ValidationError("name must not be empty")
            user.name = name.strip()
        if password:
            user.set_password(password)
        if role is not None and role != user.role:
            if user.is_owner and await self.users.count_owners() <= 1:
                raise ValidationError("Cannot demote the last owner")
            user.role = role
        if avatar_color is not None:
            user.avatar_color = avatar_color

        await self.users.update(user)
        return user

    async def delete(self, user_id: int) -> None:
        """Delete a user with all of their data."""
        user = await self.get(user_id)
        if user.is_owner and await self.users.count_owners() <= 1:
            raise ValidationError("Cannot delete the last owner")

        await self.users.delete(user_id)
        logger.info("Deleted user %r (id %s)", user.name, user_id)

    async def ensure_owner(self, name: str, password: str) -> tuple[User, bool]:
        """Create the owner account unless one already exists.

        Returns:
            The owner and whether it was created by this call
        """
        owners = await self.users.list_all(UserRole.OWNER)
        if owners:
            return owners[0], False
        return await self.create(name, password, role=UserRole.OWNER), True
