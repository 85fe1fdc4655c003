"""Team API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..dependencies import get_team_api
from ..modules.team.contracts import (
    AddTeamMemberRequest,
    CreateTeamRequest,
    TeamDataContract,
    TeamMemberDataContract,
    UpdateTeamRequest,
)
from ..modules.team.facade import TeamModuleApi
from .middleware import ProblemDetailsException
from .schemas import CreatedResponse, ProblemDetails

router = APIRouter(tags=["teams"])

_NOT_FOUND = {404: {"model": ProblemDetails, "description": "Team not found"}}


@router.post(
    "/v1/teams",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ProblemDetails, "description": "Invalid team data"}},
)
async def create_team(
    request: CreateTeamRequest, teams: TeamModuleApi = Depends(get_team_api)
) -> CreatedResponse:
    team_id = await teams.create_team(request)
    return CreatedResponse(id=team_id)


@router.get("/v1/teams", response_model=List[TeamDataContract])
async def list_teams(teams: TeamModuleApi = Depends(get_team_api)):
    return await teams.get_all_teams()


@router.get("/v1/teams/{team_id}", response_model=TeamDataContract, responses=_NOT_FOUND)
async def get_team(team_id: int, teams: TeamModuleApi = Depends(get_team_api)):
    team = await teams.get_team(team_id)
    if team is None:
        raise ProblemDetailsException(
            status_code=status.HTTP_404_NOT_FOUND,
            title="Team Not Found",
            detail=f"Team with ID '{team_id}' not found.",
        )
    return team


@router.put(
    "/v1/teams/{team_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def update_team(
    team_id: int, request: UpdateTeamRequest, teams: TeamModuleApi = Depends(get_team_api)
):
    await teams.update_team(team_id, request)


@router.get(
    "/v1/teams/{team_id}/members",
    response_model=List[TeamMemberDataContract],
    responses=_NOT_FOUND,
)
async def list_team_members(team_id: int, teams: TeamModuleApi = Depends(get_team_api)):
    """Members in joining order."""
    return await teams.get_team_members(team_id)


@router.post(
    "/v1/teams/{team_id}/members",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        **_NOT_FOUND,
        409: {
            "model": ProblemDetails,
            "description": "User does not exist, is already a member, or the team is full",
        },
    },
)
async def add_team_member(
    team_id: int, request: AddTeamMemberRequest, teams: TeamModuleApi = Depends(get_team_api)
):
    await teams.add_member_to_team(team_id, request)


@router.delete(
    "/v1/teams/{team_id}/members/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        **_NOT_FOUND,
        409: {"model": ProblemDetails, "description": "User is not a member of this team"},
    },
)
async def remove_team_member(
    team_id: int, user_id: int, teams: TeamModuleApi = Depends(get_team_api)
):
    await teams.remove_member_from_team(team_id, user_id)


@router.get("/v1/teams/{team_id}/member-ids", response_model=List[int], responses=_NOT_FOUND)
async def list_team_member_ids(team_id: int, teams: TeamModuleApi = Depends(get_team_api)):
    return await teams.get_team_member_ids(team_id)
