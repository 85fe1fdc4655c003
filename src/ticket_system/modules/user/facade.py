"""Public API of the User module."""

from typing import Iterable, List, Optional, Union

from ...core.exceptions import NotFoundError, ValidationError
from ...core.identity import UserId
from .contracts import (
    CreateUserRequest,
    UpdateUserRequest,
    UserDataContract,
    UserLookup,
)
from .service import UserService

IdLike = Union[UserId, int, str]


class UserModuleApi(UserLookup):
    """Facade used by the HTTP layer and by the Team and Issue modules."""

    def __init__(self, service: UserService):
        self._service = service

    async def create_user(self, request: CreateUserRequest) -> int:
        user_id = await self._service.create_user(
            request.email, request.first_name, request.last_name
        )
        return int(user_id)

    async def get_user(self, user_id: IdLike) -> Optional[UserDataContract]:
        try:
            user = await self._service.get_user(user_id)
        except NotFoundError:
            return None
        return UserDataContract.from_aggregate(user)

    async def get_all_users(self) -> List[UserDataContract]:
        users = await self._service.get_all_users()
        return [UserDataContract.from_aggregate(u) for u in users]

    async def get_users_by_ids(self, user_ids: Iterable[IdLike]) -> List[UserDataContract]:
        users = await self._service.get_users_by_ids(user_ids)
        return [UserDataContract.from_aggregate(u) for u in users]

    async def update_user(self, user_id: IdLike, request: UpdateUserRequest) -> None:
        await self._service.update_user(user_id, request.first_name, request.last_name)

    async def deactivate_user(self, user_id: IdLike) -> None:
        await self._service.deactivate_user(user_id)

    async def activate_user(self, user_id: IdLike) -> None:
        await self._service.activate_user(user_id)

    async def find_user_by_email(self, email: str) -> Optional[UserDataContract]:
        user = await self._service.find_user_by_email(email)
        return None if user is None else UserDataContract.from_aggregate(user)

    async def user_exists(self, user_id: IdLike) -> bool:
        try:
            return await self._service.user_exists(user_id)
        except ValidationError:
            # An id that can never be valid cannot exist
            return False

    async def delete_user(self, user_id: IdLike) -> None:
        await self._service.delete_user(user_id)
