"""Public API of the Issue module."""

from typing import List, Optional, Union

from ...core.enums import IssueStatus
from ...core.exceptions import NotFoundError, ValidationError
from ...core.identity import IssueId
from .contracts import CreateIssueRequest, IssueDataContract, UpdateIssueRequest
from .service import IssueService

IdLike = Union[IssueId, int, str]


class IssueModuleApi:
    """Facade used by the HTTP layer."""

    def __init__(self, service: IssueService):
        self._service = service

    async def create_issue(self, request: CreateIssueRequest) -> int:
        issue_id = await self._service.create_issue(
            request.title, request.description, request.priority, request.due_date
        )
        return int(issue_id)

    async def get_issue(self, issue_id: IdLike) -> Optional[IssueDataContract]:
        try:
            issue = await self._service.get_issue(issue_id)
        except NotFoundError:
            return None
        return IssueDataContract.from_aggregate(issue)

    async def get_all_issues(self) -> List[IssueDataContract]:
        issues = await self._service.get_all_issues()
        return [IssueDataContract.from_aggregate(i) for i in issues]

    async def update_issue(self, issue_id: IdLike, request: UpdateIssueRequest) -> None:
        await self._service.update_issue(
            issue_id, request.title, request.description, request.priority, request.due_date
        )

    async def assign_issue_to_user(
        self, issue_id: IdLike, user_id: Optional[Union[int, str]]
    ) -> None:
        await self._service.assign_issue_to_user(issue_id, user_id)

    async def assign_issue_to_team(
        self, issue_id: IdLike, team_id: Optional[Union[int, str]]
    ) -> None:
        await self._service.assign_issue_to_team(issue_id, team_id)

    async def update_issue_status(self, issue_id: IdLike, status: IssueStatus) -> None:
        await self._service.update_issue_status(issue_id, status)

    async def get_issues_by_user(self, user_id: Union[int, str]) -> List[IssueDataContract]:
        issues = await self._service.get_issues_by_user(user_id)
        return [IssueDataContract.from_aggregate(i) for i in issues]

    async def get_issues_by_team(self, team_id: Union[int, str]) -> List[IssueDataContract]:
        issues = await self._service.get_issues_by_team(team_id)
        return [IssueDataContract.from_aggregate(i) for i in issues]

    async def delete_issue(self, issue_id: IdLike) -> None:
        await self._service.delete_issue(issue_id)

    async def issue_exists(self, issue_id: IdLike) -> bool:
        try:
            return await self._service.issue_exists(issue_id)
        except ValidationError:
            return False
