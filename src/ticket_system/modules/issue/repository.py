"""Repository port for the Issue module."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ...core.identity import IssueId, TeamId, UserId
from .models import IssueAggregate


class IssueRepository(ABC):
    """Persistence operations for issues. Lists are newest first."""

    @abstractmethod
    async def get_by_id(self, issue_id: IssueId) -> Optional[IssueAggregate]:
        """Get an issue by ID."""
        pass

    @abstractmethod
    async def get_all(self) -> List[IssueAggregate]:
        """Get all issues, newest created first."""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UserId) -> List[IssueAggregate]:
        """Get the issues assigned to a user."""
        pass

    @abstractmethod
    async def get_by_team_id(self, team_id: TeamId) -> List[IssueAggregate]:
        """Get the issues assigned to a team."""
        pass

    @abstractmethod
    async def exists(self, issue_id: IssueId) -> bool:
        """Check whether an issue exists."""
        pass

    @abstractmethod
    async def add(self, issue: IssueAggregate) -> IssueAggregate:
        """Persist a new issue and assign its identity."""
        pass

    @abstractmethod
    async def update(self, issue: IssueAggregate) -> None:
        """Persist changes made to an issue."""
        pass

    @abstractmethod
    async def delete(self, issue: IssueAggregate) -> None:
        """Remove an issue."""
        pass
