"""Issue module service.

Assignments reference users and teams owned by other modules. Before an
assignment is stored the owning module is asked, through its lookup
capability, whether the referenced entity exists. The check runs inside
the caller's unit of work, so a failure leaves nothing behind.
"""

from datetime import datetime
from typing import List, Optional, Union

from ...config import IssueSettings
from ...core.enums import IssuePriority, IssueStatus, coerce_enum
from ...core.exceptions import NotFoundError, ReferentialIntegrityError, ValidationError
from ...core.identity import IssueId, TeamId, UserId
from ...utils.logging_config import get_logger
from ..team.contracts import TeamLookup
from ..user.contracts import UserLookup
from .models import IssueAggregate
from .repository import IssueRepository


class IssueService:
    """Issue operations with cross-module reference validation."""

    def __init__(
        self,
        repository: IssueRepository,
        users: UserLookup,
        teams: TeamLookup,
        settings: Optional[IssueSettings] = None,
    ):
        self.repository = repository
        self.users = users
        self.teams = teams
        self.settings = settings or IssueSettings()
        self.logger = get_logger(__name__)

    def _validate(
        self, title: str, description: Optional[str], due_date: Optional[datetime]
    ) -> None:
        s = self.settings
        length = len((title or "").strip())
        if length == 0:
            raise ValidationError("Issue title cannot be empty.", field="title")
        if not s.min_title_length <= length <= s.max_title_length:
            raise ValidationError(
                f"Issue title must be between {s.min_title_length} and "
                f"{s.max_title_length} characters.",
                field="title",
            )
        if description is not None and len(description) > s.max_description_length:
            raise ValidationError(
                f"Issue description cannot exceed {s.max_description_length} characters.",
                field="description",
            )
        if due_date is None and not s.allow_no_due_date:
            raise ValidationError("A due date is required.", field="due_date")

    def _default_priority(self) -> IssuePriority:
        try:
            return IssuePriority.from_name(self.settings.default_priority)
        except ValueError:
            self.logger.warning(
                f"Unknown default priority '{self.settings.default_priority}', using MEDIUM"
            )
            return IssuePriority.MEDIUM

    async def _load(self, issue_id: IssueId) -> IssueAggregate:
        issue = await self.repository.get_by_id(issue_id)
        if issue is None:
            self.logger.warning(f"Issue {issue_id} not found")
            raise NotFoundError("Issue", issue_id)
        return issue

    async def create_issue(
        self,
        title: str,
        description: Optional[str] = None,
        priority: Optional[IssuePriority] = None,
        due_date: Optional[datetime] = None,
    ) -> IssueId:
        """Create an open, unassigned issue and return its identity."""
        self.logger.info(f"Creating issue '{title}'")
        self._validate(title, description, due_date)
        if priority is None:
            priority = self._default_priority()

        issue = IssueAggregate(title, description, priority, due_date)
        await self.repository.add(issue)
        self.logger.info(f"Created issue {issue.id} with priority {issue.priority.name}")
        return issue.id

    async def get_issue(self, issue_id: Union[IssueId, int, str]) -> IssueAggregate:
        """Get an issue. Raises NotFoundError when absent."""
        return await self._load(IssueId.coerce(issue_id))

    async def get_all_issues(self) -> List[IssueAggregate]:
        return await self.repository.get_all()

    async def update_issue(
        self,
        issue_id: Union[IssueId, int, str],
        title: str,
        description: Optional[str],
        priority: IssuePriority,
        due_date: Optional[datetime],
    ) -> None:
        issue_id = IssueId.coerce(issue_id)
        self.logger.info(f"Updating issue {issue_id}")
        self._validate(title, description, due_date)

        issue = await self._load(issue_id)
        issue.update(title, description, priority, due_date)
        await self.repository.update(issue)
        self.logger.info(f"Updated issue {issue_id}")

    async def assign_issue_to_user(
        self,
        issue_id: Union[IssueId, int, str],
        user_id: Optional[Union[UserId, int, str]],
    ) -> None:
        """Assign an issue to a user, or unassign it with ``None``."""
        issue_id = IssueId.coerce(issue_id)
        user_id = UserId.coerce_optional(user_id)
        self.logger.info(f"Assigning issue {issue_id} to user {user_id}")

        issue = await self._load(issue_id)

        if user_id is not None:
            self.logger.debug(f"Validating that user {user_id} exists")
            if not await self.users.user_exists(user_id):
                self.logger.warning(
                    f"Cannot assign issue {issue_id}: user {user_id} does not exist"
                )
                raise ReferentialIntegrityError(
                    f"User with ID '{user_id}' does not exist.", field="user_id"
                )

        issue.assign_to_user(user_id)
        await self.repository.update(issue)
        self.logger.info(f"Assigned issue {issue_id} to user {user_id}")

    async def assign_issue_to_team(
        self,
        issue_id: Union[IssueId, int, str],
        team_id: Optional[Union[TeamId, int, str]],
    ) -> None:
        """Assign an issue to a team, or unassign it with ``None``."""
        issue_id = IssueId.coerce(issue_id)
        team_id = TeamId.coerce_optional(team_id)
        self.logger.info(f"Assigning issue {issue_id} to team {team_id}")

        issue = await self._load(issue_id)

        if team_id is not None:
            self.logger.debug(f"Validating that team {team_id} exists")
            if not await self.teams.team_exists(team_id):
                self.logger.warning(
                    f"Cannot assign issue {issue_id}: team {team_id} does not exist"
                )
                raise ReferentialIntegrityError(
                    f"Team with ID '{team_id}' does not exist.", field="team_id"
                )

        issue.assign_to_team(team_id)
        await self.repository.update(issue)
        self.logger.info(f"Assigned issue {issue_id} to team {team_id}")

    async def update_issue_status(
        self, issue_id: Union[IssueId, int, str], status: IssueStatus
    ) -> None:
        issue_id = IssueId.coerce(issue_id)
        status = coerce_enum(IssueStatus, status, "status")
        self.logger.info(f"Changing status of issue {issue_id} to {status.value}")

        issue = await self._load(issue_id)
        issue.update_status(status)
        await self.repository.update(issue)
        self.logger.info(f"Issue {issue_id} is now {status.value}")

    async def get_issues_by_user(self, user_id: Union[UserId, int, str]) -> List[IssueAggregate]:
        return await self.repository.get_by_user_id(UserId.coerce(user_id))

    async def get_issues_by_team(self, team_id: Union[TeamId, int, str]) -> List[IssueAggregate]:
        return await self.repository.get_by_team_id(TeamId.coerce(team_id))

    async def delete_issue(self, issue_id: Union[IssueId, int, str]) -> None:
        issue_id = IssueId.coerce(issue_id)
        self.logger.info(f"Deleting issue {issue_id}")
        issue = await self._load(issue_id)
        await self.repository.delete(issue)
        self.logger.info(f"Deleted issue {issue_id}")

    async def issue_exists(self, issue_id: Union[IssueId, int, str]) -> bool:
        issue_id = IssueId.coerce(issue_id)
        exists = await self.repository.exists(issue_id)
        self.logger.debug(f"Issue {issue_id} exists: {exists}")
        return exists
