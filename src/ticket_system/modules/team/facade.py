"""Public API of the Team module."""

from typing import List, Optional, Union

from ...core.exceptions import NotFoundError, ValidationError
from ...core.identity import TeamId
from .contracts import (
    AddTeamMemberRequest,
    CreateTeamRequest,
    TeamDataContract,
    TeamLookup,
    TeamMemberDataContract,
    UpdateTeamRequest,
)
from .service import TeamService

IdLike = Union[TeamId, int, str]


class TeamModuleApi(TeamLookup):
    """Facade used by the HTTP layer and by the Issue module."""

    def __init__(self, service: TeamService):
        self._service = service

    async def create_team(self, request: CreateTeamRequest) -> int:
        team_id = await self._service.create_team(request.name, request.description)
        return int(team_id)

    async def get_team(self, team_id: IdLike) -> Optional[TeamDataContract]:
        try:
            team = await self._service.get_team(team_id)
        except NotFoundError:
            return None
        return TeamDataContract.from_aggregate(team)

    async def get_all_teams(self) -> List[TeamDataContract]:
        teams = await self._service.get_all_teams()
        return [TeamDataContract.from_aggregate(t) for t in teams]

    async def update_team(self, team_id: IdLike, request: UpdateTeamRequest) -> None:
        await self._service.update_team(team_id, request.name, request.description)

    async def add_member_to_team(self, team_id: IdLike, request: AddTeamMemberRequest) -> None:
        await self._service.add_member_to_team(team_id, request.user_id, request.role)

    async def remove_member_from_team(self, team_id: IdLike, user_id: Union[int, str]) -> None:
        await self._service.remove_member_from_team(team_id, user_id)

    async def get_team_members(self, team_id: IdLike) -> List[TeamMemberDataContract]:
        members = await self._service.get_team_members(team_id)
        return [TeamMemberDataContract.from_member(m) for m in members]

    async def team_exists(self, team_id: IdLike) -> bool:
        try:
            return await self._service.team_exists(team_id)
        except ValidationError:
            return False

    async def get_team_member_ids(self, team_id: IdLike) -> List[int]:
        member_ids = await self._service.get_team_member_ids(team_id)
        return [int(user_id) for user_id in member_ids]
