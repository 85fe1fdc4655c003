"""Typed integer identities for the Issue, Team and User aggregates.

Each module references the others by identity value only. The identity
types make sure a team id is never mistaken for a user id at a service
boundary, while the persistence layer keeps storing plain integers.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from .exceptions import ValidationError

MAX_IDENTITY_VALUE = 2**63 - 1

_DIGITS = re.compile(r"^\+?\d+$", re.ASCII)


@dataclass(frozen=True, order=True)
class EntityId:
    """Validated, immutable, positive 64-bit integer identity."""

    value: int

    def __post_init__(self):
        name = type(self).__name__
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"{name} must be an integer, got {type(self.value).__name__}.",
                field="id",
            )
        if self.value <= 0:
            raise ValidationError(
                f"{name} must be a positive integer, got {self.value}.", field="id"
            )
        if self.value > MAX_IDENTITY_VALUE:
            raise ValidationError(f"{name} exceeds the 64-bit range.", field="id")

    @classmethod
    def parse(cls, text: str):
        """Parse the decimal string form produced by ``str()``."""
        if not isinstance(text, str) or not _DIGITS.match(text.strip()):
            raise ValidationError(
                f"'{text}' is not a valid {cls.__name__}.", field="id"
            )
        return cls(int(text.strip()))

    @classmethod
    def coerce(cls, value: Union["EntityId", int, str]):
        """Convert a boundary value (identity, int or str) into this identity type."""
        if isinstance(value, cls):
            return value
        if isinstance(value, EntityId):
            raise ValidationError(
                f"Expected {cls.__name__}, got {type(value).__name__}.", field="id"
            )
        if isinstance(value, str):
            return cls.parse(value)
        return cls(value)

    @classmethod
    def coerce_optional(cls, value):
        """Like ``coerce`` but passes ``None`` through (used for unassignment)."""
        if value is None:
            return None
        return cls.coerce(value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class IssueId(EntityId):
    """Identity of an Issue aggregate."""


class TeamId(EntityId):
    """Identity of a Team aggregate."""


class UserId(EntityId):
    """Identity of a User aggregate."""


def raw_id(identity: Optional[EntityId]) -> Optional[int]:
    """Unwrap an identity to the integer stored in the database."""
    return None if identity is None else identity.value
