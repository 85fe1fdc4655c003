"""In-memory Team repository for testing."""

from typing import Dict, List, Optional

from ...core.identity import TeamId, raw_id
from .models import TeamAggregate
from .repository import TeamRepository


class MemoryTeamRepository(TeamRepository):
    """In-memory implementation of TeamRepository."""

    def __init__(self):
        self._teams: Dict[int, TeamAggregate] = {}
        self._next_id = 1
        self._next_member_id = 1

    def _number_members(self, team: TeamAggregate) -> None:
        # Members get an id and team id the way a flush would give them one
        for member in team._members:
            if member._id is None:
                member._id = self._next_member_id
                self._next_member_id += 1
            member._team_id = team._id

    async def get_by_id(self, team_id: TeamId) -> Optional[TeamAggregate]:
        return self._teams.get(raw_id(team_id))

    async def get_all(self) -> List[TeamAggregate]:
        return [self._teams[key] for key in sorted(self._teams)]

    async def exists(self, team_id: TeamId) -> bool:
        return raw_id(team_id) in self._teams

    async def add(self, team: TeamAggregate) -> TeamAggregate:
        team._id = self._next_id
        self._next_id += 1
        self._teams[team._id] = team
        self._number_members(team)
        return team

    async def update(self, team: TeamAggregate) -> None:
        self._teams[team._id] = team
        self._number_members(team)
