"""Public contracts of the Team module."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ...core.enums import TeamRole
from ...core.identity import TeamId


class TeamMemberDataContract(BaseModel):
    """Read model of a team membership."""

    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    role: TeamRole
    joined_date: datetime

    @classmethod
    def from_member(cls, member) -> "TeamMemberDataContract":
        return cls(
            id=member.id,
            user_id=int(member.user_id),
            role=member.role,
            joined_date=member.joined_date,
        )


class TeamDataContract(BaseModel):
    """Read model of a team, including its members."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: Optional[str] = None
    created_date: datetime
    members: List[TeamMemberDataContract] = Field(default_factory=list)

    @classmethod
    def from_aggregate(cls, team) -> "TeamDataContract":
        return cls(
            id=int(team.id),
            name=team.name,
            description=team.description,
            created_date=team.created_date,
            members=[TeamMemberDataContract.from_member(m) for m in team.members],
        )


class CreateTeamRequest(BaseModel):
    """Request to create a team."""

    name: str
    description: Optional[str] = None


class UpdateTeamRequest(BaseModel):
    """Request to rename or re-describe a team."""

    name: str
    description: Optional[str] = None


class AddTeamMemberRequest(BaseModel):
    """Request to add a user to a team."""

    user_id: int
    role: TeamRole = TeamRole.MEMBER


class TeamLookup(ABC):
    """Read-only capability other modules use to validate team references."""

    @abstractmethod
    async def team_exists(self, team_id: Union[TeamId, int, str]) -> bool:
        """Return True when the team exists."""

    @abstractmethod
    async def get_team_member_ids(self, team_id: Union[TeamId, int, str]) -> List[int]:
        """User IDs of the team's members, in joining order."""
