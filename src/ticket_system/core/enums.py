"""Enums for the ticket system."""

from enum import Enum, IntEnum
from typing import Type, TypeVar

from .exceptions import ValidationError

E = TypeVar("E", bound=Enum)


class IssueStatus(str, Enum):
    """Lifecycle status of an issue."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    RESOLVED = "resolved"
    CLOSED = "closed"


class IssuePriority(IntEnum):
    """Issue priority. Lower number means more urgent."""

    CRITICAL = 0
    HIGH = 1
    MEDIUM = 2
    LOW = 3

    @classmethod
    def from_name(cls, name: str) -> "IssuePriority":
        """Look up a priority by case-insensitive name (e.g. "Medium")."""
        if not isinstance(name, str):
            raise ValueError(f"Unknown issue priority: {name!r}")
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown issue priority: {name!r}") from None


class TeamRole(IntEnum):
    """Permission level of a member within a team."""

    MEMBER = 0
    LEAD = 1
    ADMIN = 2


def coerce_enum(enum_class: Type[E], value, field: str) -> E:
    """Convert ``value`` to ``enum_class`` or raise ``ValidationError`` naming ``field``."""
    try:
        return enum_class(value)
    except ValueError:
        allowed = ", ".join(repr(member.value) for member in enum_class)
        raise ValidationError(
            f"{value!r} is not a valid {enum_class.__name__}; expected one of {allowed}.",
            field=field,
        ) from None
