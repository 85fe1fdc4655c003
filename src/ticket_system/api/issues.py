"""Issue API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..dependencies import get_issue_api
from ..modules.issue.contracts import (
    CreateIssueRequest,
    IssueDataContract,
    UpdateIssueRequest,
)
from ..modules.issue.facade import IssueModuleApi
from .middleware import ProblemDetailsException
from .schemas import (
    AssignTeamRequest,
    AssignUserRequest,
    CreatedResponse,
    ProblemDetails,
    UpdateStatusRequest,
)

router = APIRouter(tags=["issues"])

_NOT_FOUND = {404: {"model": ProblemDetails, "description": "Issue not found"}}
_CONFLICT = {409: {"model": ProblemDetails, "description": "Referenced entity does not exist"}}


@router.post(
    "/v1/issues",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ProblemDetails, "description": "Invalid issue data"}},
)
async def create_issue(
    request: CreateIssueRequest, issues: IssueModuleApi = Depends(get_issue_api)
) -> CreatedResponse:
    """Create a new open, unassigned issue."""
    issue_id = await issues.create_issue(request)
    return CreatedResponse(id=issue_id)


@router.get("/v1/issues", response_model=List[IssueDataContract])
async def list_issues(issues: IssueModuleApi = Depends(get_issue_api)):
    """List all issues, newest first."""
    return await issues.get_all_issues()


@router.get("/v1/issues/{issue_id}", response_model=IssueDataContract, responses=_NOT_FOUND)
async def get_issue(issue_id: int, issues: IssueModuleApi = Depends(get_issue_api)):
    issue = await issues.get_issue(issue_id)
    if issue is None:
        raise ProblemDetailsException(
            status_code=status.HTTP_404_NOT_FOUND,
            title="Issue Not Found",
            detail=f"Issue with ID '{issue_id}' not found.",
        )
    return issue


@router.put(
    "/v1/issues/{issue_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def update_issue(
    issue_id: int,
    request: UpdateIssueRequest,
    issues: IssueModuleApi = Depends(get_issue_api),
):
    await issues.update_issue(issue_id, request)


@router.put(
    "/v1/issues/{issue_id}/assignee",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_CONFLICT},
)
async def assign_issue_to_user(
    issue_id: int,
    request: AssignUserRequest,
    issues: IssueModuleApi = Depends(get_issue_api),
):
    """Assign the issue to a user (checked against the User module), or unassign with null."""
    await issues.assign_issue_to_user(issue_id, request.user_id)


@router.put(
    "/v1/issues/{issue_id}/team",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_CONFLICT},
)
async def assign_issue_to_team(
    issue_id: int,
    request: AssignTeamRequest,
    issues: IssueModuleApi = Depends(get_issue_api),
):
    """Assign the issue to a team (checked against the Team module), or unassign with null."""
    await issues.assign_issue_to_team(issue_id, request.team_id)


@router.put(
    "/v1/issues/{issue_id}/status",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def update_issue_status(
    issue_id: int,
    request: UpdateStatusRequest,
    issues: IssueModuleApi = Depends(get_issue_api),
):
    await issues.update_issue_status(issue_id, request.status)


@router.delete(
    "/v1/issues/{issue_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def delete_issue(issue_id: int, issues: IssueModuleApi = Depends(get_issue_api)):
    await issues.delete_issue(issue_id)


@router.get("/v1/users/{user_id}/issues", response_model=List[IssueDataContract])
async def list_issues_for_user(user_id: int, issues: IssueModuleApi = Depends(get_issue_api)):
    """Issues assigned to a user, newest first."""
    return await issues.get_issues_by_user(user_id)


@router.get("/v1/teams/{team_id}/issues", response_model=List[IssueDataContract])
async def list_issues_for_team(team_id: int, issues: IssueModuleApi = Depends(get_issue_api)):
    """Issues assigned to a team, newest first."""
    return await issues.get_issues_by_team(team_id)
