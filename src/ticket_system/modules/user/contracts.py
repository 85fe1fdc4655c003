"""Public contracts of the User module.

Other modules and the HTTP layer only see these types, never the
``UserAggregate`` itself.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Union

from pydantic import BaseModel, ConfigDict, Field

from ...core.identity import UserId


class UserDataContract(BaseModel):
    """Read model of a user."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    first_name: str
    last_name: str
    display_name: str
    created_date: datetime
    is_active: bool

    @classmethod
    def from_aggregate(cls, user) -> "UserDataContract":
        return cls(
            id=int(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            display_name=user.display_name,
            created_date=user.created_date,
            is_active=user.is_active,
        )


class CreateUserRequest(BaseModel):
    """Request to create a user."""

    email: str = Field(..., description="Unique email address")
    first_name: str
    last_name: str


class UpdateUserRequest(BaseModel):
    """Request to rename a user."""

    first_name: str
    last_name: str


class UserLookup(ABC):
    """Read-only capability other modules use to validate user references."""

    @abstractmethod
    async def user_exists(self, user_id: Union[UserId, int, str]) -> bool:
        """Return True when the user exists."""

    @abstractmethod
    async def get_users_by_ids(
        self, user_ids: Iterable[Union[UserId, int, str]]
    ) -> List[UserDataContract]:
        """Batch lookup; unknown IDs are skipped."""
