"""In-memory Issue repository for testing."""

from typing import Dict, List, Optional

from ...core.identity import IssueId, TeamId, UserId, raw_id
from .models import IssueAggregate
from .repository import IssueRepository


def _newest_first(issues) -> List[IssueAggregate]:
    return sorted(issues, key=lambda i: (i.created_date, i._id), reverse=True)


class MemoryIssueRepository(IssueRepository):
    """In-memory implementation of IssueRepository."""

    def __init__(self):
        self._issues: Dict[int, IssueAggregate] = {}
        self._next_id = 1

    async def get_by_id(self, issue_id: IssueId) -> Optional[IssueAggregate]:
        return self._issues.get(raw_id(issue_id))

    async def get_all(self) -> List[IssueAggregate]:
        return _newest_first(self._issues.values())

    async def get_by_user_id(self, user_id: UserId) -> List[IssueAggregate]:
        raw = raw_id(user_id)
        return _newest_first(i for i in self._issues.values() if i._assigned_user_id == raw)

    async def get_by_team_id(self, team_id: TeamId) -> List[IssueAggregate]:
        raw = raw_id(team_id)
        return _newest_first(i for i in self._issues.values() if i._assigned_team_id == raw)

    async def exists(self, issue_id: IssueId) -> bool:
        return raw_id(issue_id) in self._issues

    async def add(self, issue: IssueAggregate) -> IssueAggregate:
        issue._id = self._next_id
        self._next_id += 1
        self._issues[issue._id] = issue
        return issue

    async def update(self, issue: IssueAggregate) -> None:
        self._issues[issue._id] = issue

    async def delete(self, issue: IssueAggregate) -> None:
        self._issues.pop(issue._id, None)
