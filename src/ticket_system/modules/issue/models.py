"""Issue aggregate."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Index, String, Text

from ...core.clock import ensure_utc, utcnow
from ...core.enums import IssuePriority, IssueStatus, coerce_enum
from ...core.exceptions import ValidationError
from ...core.identity import IssueId, TeamId, UserId, raw_id
from ...db.database import Base
from ...db.types import IdentityColumn, IntEnumType, UTCDateTime


def _require_title(title: str) -> str:
    if title is None or not title.strip():
        raise ValidationError("Issue title cannot be empty.", field="title")
    return title.strip()


class IssueAggregate(Base):
    """A tracked unit of work.

    Assignment columns hold IDs owned by the User and Team modules; they
    are plain integers without foreign keys. Every mutator stamps
    ``last_modified_date``.
    """

    __tablename__ = "issues"

    _id = Column("id", IdentityColumn, primary_key=True, autoincrement=True)
    _title = Column("title", String(500), nullable=False)
    _description = Column("description", Text, nullable=True)
    _status = Column("status", String(20), nullable=False, default=IssueStatus.OPEN.value)
    _priority = Column(
        "priority", IntEnumType(IssuePriority), nullable=False, default=IssuePriority.MEDIUM
    )
    _assigned_user_id = Column("assigned_user_id", IdentityColumn, nullable=True)
    _assigned_team_id = Column("assigned_team_id", IdentityColumn, nullable=True)
    _created_date = Column("created_date", UTCDateTime(), nullable=False)
    _due_date = Column("due_date", UTCDateTime(), nullable=True)
    _resolved_date = Column("resolved_date", UTCDateTime(), nullable=True)
    _last_modified_date = Column("last_modified_date", UTCDateTime(), nullable=False)

    __table_args__ = (
        Index("ix_issues_assigned_user_id", "assigned_user_id"),
        Index("ix_issues_assigned_team_id", "assigned_team_id"),
        Index("ix_issues_created_date", "created_date"),
    )

    def __init__(
        self,
        title: str,
        description: Optional[str] = None,
        priority: IssuePriority = IssuePriority.MEDIUM,
        due_date: Optional[datetime] = None,
    ):
        title = _require_title(title)
        priority = coerce_enum(IssuePriority, priority, "priority")
        now = utcnow()

        self._title = title
        self._description = description
        self._priority = priority
        self._due_date = ensure_utc(due_date)
        self._status = IssueStatus.OPEN.value
        self._assigned_user_id = None
        self._assigned_team_id = None
        self._resolved_date = None
        self._created_date = now
        self._last_modified_date = now

    @property
    def id(self) -> Optional[IssueId]:
        return None if self._id is None else IssueId(self._id)

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def status(self) -> IssueStatus:
        return IssueStatus(self._status)

    @property
    def priority(self) -> IssuePriority:
        return IssuePriority(self._priority)

    @property
    def assigned_user_id(self) -> Optional[UserId]:
        return None if self._assigned_user_id is None else UserId(self._assigned_user_id)

    @property
    def assigned_team_id(self) -> Optional[TeamId]:
        return None if self._assigned_team_id is None else TeamId(self._assigned_team_id)

    @property
    def created_date(self) -> datetime:
        return self._created_date

    @property
    def due_date(self) -> Optional[datetime]:
        return self._due_date

    @property
    def resolved_date(self) -> Optional[datetime]:
        return self._resolved_date

    @property
    def last_modified_date(self) -> datetime:
        return self._last_modified_date

    def _touch(self) -> None:
        self._last_modified_date = utcnow()

    def update(
        self,
        title: str,
        description: Optional[str],
        priority: IssuePriority,
        due_date: Optional[datetime],
    ) -> None:
        title = _require_title(title)
        priority = coerce_enum(IssuePriority, priority, "priority")
        self._title = title
        self._description = description
        self._priority = priority
        self._due_date = ensure_utc(due_date)
        self._touch()

    def assign_to_user(self, user_id: Optional[UserId]) -> None:
        self._assigned_user_id = raw_id(user_id)
        self._touch()

    def assign_to_team(self, team_id: Optional[TeamId]) -> None:
        self._assigned_team_id = raw_id(team_id)
        self._touch()

    def update_status(self, status: IssueStatus) -> None:
        status = coerce_enum(IssueStatus, status, "status")
        previous = self.status

        if status == IssueStatus.RESOLVED and previous != IssueStatus.RESOLVED:
            self._resolved_date = utcnow()
        elif status != IssueStatus.RESOLVED:
            self._resolved_date = None

        self._status = status.value
        self._touch()

    def __repr__(self) -> str:
        return f"<IssueAggregate(id={self._id}, title='{self._title}', status={self._status})>"
