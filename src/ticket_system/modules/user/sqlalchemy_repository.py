"""SQLAlchemy implementation of the User repository."""

from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...core.exceptions import InvalidOperationError
from ...core.identity import UserId, raw_id
from .models import UserAggregate
from .repository import UserRepository


class SQLAlchemyUserRepository(UserRepository):
    """User repository on the request's session. Never commits."""

    def __init__(self, session: Session):
        self._session = session

    async def get_by_id(self, user_id: UserId) -> Optional[UserAggregate]:
        return self._session.get(UserAggregate, raw_id(user_id))

    async def get_all(self) -> List[UserAggregate]:
        return self._session.query(UserAggregate).order_by(UserAggregate._id).all()

    async def get_by_ids(self, user_ids: Iterable[UserId]) -> List[UserAggregate]:
        ids = sorted({raw_id(user_id) for user_id in user_ids})
        if not ids:
            return []
        return (
            self._session.query(UserAggregate)
            .filter(UserAggregate._id.in_(ids))
            .order_by(UserAggregate._id)
            .all()
        )

    async def get_by_email(self, email: str) -> Optional[UserAggregate]:
        return (
            self._session.query(UserAggregate)
            .filter(func.lower(UserAggregate._email) == email.strip().lower())
            .first()
        )

    async def exists(self, user_id: UserId) -> bool:
        return (
            self._session.query(UserAggregate._id)
            .filter(UserAggregate._id == raw_id(user_id))
            .first()
            is not None
        )

    async def add(self, user: UserAggregate) -> UserAggregate:
        self._session.add(user)
        try:
            self._session.flush()
        except IntegrityError as e:
            raise InvalidOperationError(
                f"User with email '{user.email}' already exists.", field="email"
            ) from e
        return user

    async def update(self, user: UserAggregate) -> None:
        if user not in self._session:
            self._session.add(user)
        self._session.flush()

    async def delete(self, user: UserAggregate) -> None:
        self._session.delete(user)
        self._session.flush()
