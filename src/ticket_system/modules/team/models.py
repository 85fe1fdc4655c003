"""Team aggregate and its owned members."""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import Column, ForeignKey, String, Text, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from ...core.clock import utcnow
from ...core.enums import TeamRole, coerce_enum
from ...core.exceptions import ReferentialIntegrityError, ValidationError
from ...core.identity import TeamId, UserId, raw_id
from ...db.database import Base
from ...db.types import IdentityColumn, IntEnumType, UTCDateTime


class TeamMember(Base):
    """Membership of one user in one team. Owned by ``TeamAggregate``."""

    __tablename__ = "team_members"

    _id = Column("id", IdentityColumn, primary_key=True, autoincrement=True)
    _team_id = Column(
        "team_id",
        IdentityColumn,
        ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Owned by the User module: no foreign key
    _user_id = Column("user_id", IdentityColumn, nullable=False)
    _joined_date = Column("joined_date", UTCDateTime(), nullable=False)
    _role = Column("role", IntEnumType(TeamRole), nullable=False, default=TeamRole.MEMBER)

    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_members_team_user"),
        Index("ix_team_members_user_id", "user_id"),
    )

    def __init__(self, user_id: UserId, role: TeamRole = TeamRole.MEMBER):
        self._user_id = raw_id(user_id)
        self._role = coerce_enum(TeamRole, role, "role")
        self._joined_date = utcnow()

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def team_id(self) -> Optional[TeamId]:
        return None if self._team_id is None else TeamId(self._team_id)

    @property
    def user_id(self) -> UserId:
        return UserId(self._user_id)

    @property
    def joined_date(self) -> datetime:
        return self._joined_date

    @property
    def role(self) -> TeamRole:
        return TeamRole(self._role)

    def __repr__(self) -> str:
        return f"<TeamMember(team_id={self._team_id}, user_id={self._user_id}, role={self._role!r})>"


def _require_name(name: str) -> str:
    if name is None or not name.strip():
        raise ValidationError("Team name cannot be empty.", field="name")
    return name.strip()


class TeamAggregate(Base):
    """A named group of users.

    Members live in an ordered list owned by the team; adding or removing
    a member is only possible through the team so that user IDs stay
    unique within it.
    """

    __tablename__ = "teams"

    _id = Column("id", IdentityColumn, primary_key=True, autoincrement=True)
    _name = Column("name", String(200), nullable=False)
    _description = Column("description", Text, nullable=True)
    _created_date = Column("created_date", UTCDateTime(), nullable=False)

    _members = relationship(
        TeamMember,
        cascade="all, delete-orphan",
        order_by=TeamMember._id,
        lazy="selectin",
        passive_deletes=True,
    )

    def __init__(self, name: str, description: Optional[str] = None):
        name = _require_name(name)
        self._name = name
        self._description = description
        self._created_date = utcnow()

    @property
    def id(self) -> Optional[TeamId]:
        return None if self._id is None else TeamId(self._id)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def created_date(self) -> datetime:
        return self._created_date

    @property
    def members(self) -> Tuple[TeamMember, ...]:
        return tuple(self._members)

    @property
    def member_ids(self) -> List[UserId]:
        return [member.user_id for member in self._members]

    def update(self, name: str, description: Optional[str] = None) -> None:
        name = _require_name(name)
        self._name = name
        self._description = description

    def has_member(self, user_id: UserId) -> bool:
        raw = raw_id(user_id)
        return any(member._user_id == raw for member in self._members)

    def add_member(self, user_id: UserId, role: TeamRole = TeamRole.MEMBER) -> TeamMember:
        if self.has_member(user_id):
            raise ReferentialIntegrityError(
                f"User {user_id} is already a member of this team.", field="user_id"
            )
        member = TeamMember(user_id, role)
        self._members.append(member)
        return member

    def remove_member(self, user_id: UserId) -> None:
        raw = raw_id(user_id)
        for member in self._members:
            if member._user_id == raw:
                self._members.remove(member)
                return
        raise ReferentialIntegrityError(
            f"User {user_id} is not a member of this team.", field="user_id"
        )

    def __repr__(self) -> str:
        return f"<TeamAggregate(id={self._id}, name='{self._name}')>"
