"""User aggregate."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Column, String, UniqueConstraint

from ...core.clock import utcnow
from ...core.exceptions import ValidationError
from ...core.identity import UserId
from ...db.database import Base
from ...db.types import IdentityColumn, UTCDateTime


def _require_text(value: str, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} cannot be empty.", field=field)
    return str(value).strip()


class UserAggregate(Base):
    """A person who can be assigned issues and join teams.

    State is only changed through ``update``, ``activate`` and
    ``deactivate``. Email uniqueness is enforced by the repository and
    service, not here.
    """

    __tablename__ = "users"

    _id = Column("id", IdentityColumn, primary_key=True, autoincrement=True)
    _email = Column("email", String(320), nullable=False)
    _first_name = Column("first_name", String(100), nullable=False)
    _last_name = Column("last_name", String(100), nullable=False)
    _created_date = Column("created_date", UTCDateTime(), nullable=False)
    _is_active = Column("is_active", Boolean, nullable=False, default=True)

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    def __init__(self, email: str, first_name: str, last_name: str):
        email = _require_text(email, "email")
        first_name = _require_text(first_name, "first_name")
        last_name = _require_text(last_name, "last_name")

        self._email = email
        self._first_name = first_name
        self._last_name = last_name
        self._created_date = utcnow()
        self._is_active = True

    @property
    def id(self) -> Optional[UserId]:
        return None if self._id is None else UserId(self._id)

    @property
    def email(self) -> str:
        return self._email

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def created_date(self) -> datetime:
        return self._created_date

    @property
    def is_active(self) -> bool:
        return bool(self._is_active)

    @property
    def display_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    def update(self, first_name: str, last_name: str) -> None:
        first_name = _require_text(first_name, "first_name")
        last_name = _require_text(last_name, "last_name")
        self._first_name = first_name
        self._last_name = last_name

    def activate(self) -> None:
        self._is_active = True

    def deactivate(self) -> None:
        self._is_active = False

    def __repr__(self) -> str:
        return f"<UserAggregate(id={self._id}, email='{self._email}')>"
