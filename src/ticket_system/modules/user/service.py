"""User module service: business rules for user accounts."""

from typing import Iterable, List, Optional, Union

from ...config import UserSettings
from ...core.exceptions import InvalidOperationError, NotFoundError, ValidationError
from ...core.identity import UserId
from ...utils.logging_config import get_logger
from .models import UserAggregate
from .repository import UserRepository


class UserService:
    """Creates, renames, (de)activates and looks up users.

    Never commits; the caller's unit of work owns the transaction.
    """

    def __init__(self, repository: UserRepository, settings: Optional[UserSettings] = None):
        self.repository = repository
        self.settings = settings or UserSettings()
        self.logger = get_logger(__name__)

    def _validate_email(self, email: str) -> str:
        email = (email or "").strip()
        if not email:
            raise ValidationError("Email cannot be empty.", field="email")
        if "@" not in email:
            raise ValidationError(f"'{email}' is not a valid email address.", field="email")

        allowed = self.settings.allowed_domains
        if allowed:
            domain = email.rsplit("@", 1)[1].lower()
            if domain not in allowed:
                raise ValidationError(
                    f"Email domain '{domain}' is not allowed.", field="email"
                )
        return email

    def _validate_names(self, first_name: str, last_name: str) -> None:
        s = self.settings
        first = (first_name or "").strip()
        last = (last_name or "").strip()
        if not s.min_first_name_length <= len(first) <= s.max_first_name_length:
            raise ValidationError(
                f"First name must be between {s.min_first_name_length} and "
                f"{s.max_first_name_length} characters.",
                field="first_name",
            )
        if not s.min_last_name_length <= len(last) <= s.max_last_name_length:
            raise ValidationError(
                f"Last name must be between {s.min_last_name_length} and "
                f"{s.max_last_name_length} characters.",
                field="last_name",
            )

    async def _load(self, user_id: UserId) -> UserAggregate:
        user = await self.repository.get_by_id(user_id)
        if user is None:
            self.logger.warning(f"User {user_id} not found")
            raise NotFoundError("User", user_id)
        return user

    async def create_user(self, email: str, first_name: str, last_name: str) -> UserId:
        """Create a user and return its new identity."""
        self.logger.info(f"Creating user with email '{email}'")
        email = self._validate_email(email)
        self._validate_names(first_name, last_name)

        if await self.repository.get_by_email(email) is not None:
            self.logger.warning(f"Rejected duplicate email '{email}'")
            raise InvalidOperationError(
                f"User with email '{email}' already exists.", field="email"
            )

        user = UserAggregate(email, first_name, last_name)
        await self.repository.add(user)
        self.logger.info(f"Created user {user.id} ({user.display_name})")
        return user.id

    async def get_user(self, user_id: Union[UserId, int, str]) -> UserAggregate:
        """Get a user. Raises NotFoundError when absent."""
        return await self._load(UserId.coerce(user_id))

    async def get_all_users(self) -> List[UserAggregate]:
        return await self.repository.get_all()

    async def get_users_by_ids(
        self, user_ids: Iterable[Union[UserId, int, str]]
    ) -> List[UserAggregate]:
        ids = [UserId.coerce(user_id) for user_id in user_ids]
        return await self.repository.get_by_ids(ids)

    async def update_user(
        self, user_id: Union[UserId, int, str], first_name: str, last_name: str
    ) -> None:
        user_id = UserId.coerce(user_id)
        self.logger.info(f"Updating user {user_id}")
        self._validate_names(first_name, last_name)

        user = await self._load(user_id)
        user.update(first_name, last_name)
        await self.repository.update(user)
        self.logger.info(f"Updated user {user_id}")

    async def deactivate_user(self, user_id: Union[UserId, int, str]) -> None:
        user_id = UserId.coerce(user_id)
        self.logger.info(f"Deactivating user {user_id}")
        user = await self._load(user_id)
        user.deactivate()
        await self.repository.update(user)
        self.logger.info(f"Deactivated user {user_id}")

    async def activate_user(self, user_id: Union[UserId, int, str]) -> None:
        user_id = UserId.coerce(user_id)
        self.logger.info(f"Activating user {user_id}")
        user = await self._load(user_id)
        user.activate()
        await self.repository.update(user)
        self.logger.info(f"Activated user {user_id}")

    async def find_user_by_email(self, email: str) -> Optional[UserAggregate]:
        """Case-insensitive email lookup."""
        if not email or not email.strip():
            return None
        return await self.repository.get_by_email(email)

    async def user_exists(self, user_id: Union[UserId, int, str]) -> bool:
        user_id = UserId.coerce(user_id)
        exists = await self.repository.exists(user_id)
        self.logger.debug(f"User {user_id} exists: {exists}")
        return exists

    async def delete_user(self, user_id: Union[UserId, int, str]) -> None:
        """Permanently delete a user, if the configuration allows it."""
        user_id = UserId.coerce(user_id)
        self.logger.info(f"Deleting user {user_id}")
        if not self.settings.allow_permanent_delete:
            self.logger.warning(f"Permanent delete of user {user_id} is disabled")
            raise InvalidOperationError(
                "Permanent deletion of users is disabled; deactivate the user instead."
            )

        user = await self._load(user_id)
        await self.repository.delete(user)
        self.logger.info(f"Deleted user {user_id}")
