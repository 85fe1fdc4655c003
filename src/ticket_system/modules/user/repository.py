"""Repository port for the User module."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ...core.identity import UserId
from .models import UserAggregate


class UserRepository(ABC):
    """Persistence operations for users. Absence is returned as ``None``."""

    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[UserAggregate]:
        """Get a user by ID."""
        pass

    @abstractmethod
    async def get_all(self) -> List[UserAggregate]:
        """Get all users ordered by ID."""
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: Iterable[UserId]) -> List[UserAggregate]:
        """Get the users with the given IDs, skipping unknown ones."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserAggregate]:
        """Get a user by email (case-insensitive)."""
        pass

    @abstractmethod
    async def exists(self, user_id: UserId) -> bool:
        """Check whether a user exists."""
        pass

    @abstractmethod
    async def add(self, user: UserAggregate) -> UserAggregate:
        """Persist a new user and assign its identity."""
        pass

    @abstractmethod
    async def update(self, user: UserAggregate) -> None:
        """Persist changes made to a user."""
        pass

    @abstractmethod
    async def delete(self, user: UserAggregate) -> None:
        """Remove a user."""
        pass
