"""In-memory User repository for testing."""

from typing import Dict, Iterable, List, Optional

from ...core.exceptions import InvalidOperationError
from ...core.identity import UserId, raw_id
from .models import UserAggregate
from .repository import UserRepository


class MemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository."""

    def __init__(self):
        self._users: Dict[int, UserAggregate] = {}
        self._next_id = 1

    async def get_by_id(self, user_id: UserId) -> Optional[UserAggregate]:
        return self._users.get(raw_id(user_id))

    async def get_all(self) -> List[UserAggregate]:
        return [self._users[key] for key in sorted(self._users)]

    async def get_by_ids(self, user_ids: Iterable[UserId]) -> List[UserAggregate]:
        ids = sorted({raw_id(user_id) for user_id in user_ids})
        return [self._users[key] for key in ids if key in self._users]

    async def get_by_email(self, email: str) -> Optional[UserAggregate]:
        wanted = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return user
        return None

    async def exists(self, user_id: UserId) -> bool:
        return raw_id(user_id) in self._users

    async def add(self, user: UserAggregate) -> UserAggregate:
        # Mirrors the unique email constraint of the users table
        if any(u.email == user.email for u in self._users.values()):
            raise InvalidOperationError(
                f"User with email '{user.email}' already exists.", field="email"
            )
        user._id = self._next_id
        self._next_id += 1
        self._users[user._id] = user
        return user

    async def update(self, user: UserAggregate) -> None:
        self._users[user._id] = user

    async def delete(self, user: UserAggregate) -> None:
        self._users.pop(user._id, None)
