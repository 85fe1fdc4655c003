"""Public contracts of the Issue module."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...core.enums import IssuePriority, IssueStatus


class IssueDataContract(BaseModel):
    """Read model of an issue."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: Optional[str] = None
    status: IssueStatus
    priority: IssuePriority
    assigned_user_id: Optional[int] = None
    assigned_team_id: Optional[int] = None
    created_date: datetime
    due_date: Optional[datetime] = None
    resolved_date: Optional[datetime] = None
    last_modified_date: datetime

    @classmethod
    def from_aggregate(cls, issue) -> "IssueDataContract":
        return cls(
            id=int(issue.id),
            title=issue.title,
            description=issue.description,
            status=issue.status,
            priority=issue.priority,
            assigned_user_id=None if issue.assigned_user_id is None else int(issue.assigned_user_id),
            assigned_team_id=None if issue.assigned_team_id is None else int(issue.assigned_team_id),
            created_date=issue.created_date,
            due_date=issue.due_date,
            resolved_date=issue.resolved_date,
            last_modified_date=issue.last_modified_date,
        )


class CreateIssueRequest(BaseModel):
    """Request to create an issue. A missing priority uses the configured default."""

    title: str
    description: Optional[str] = None
    priority: Optional[IssuePriority] = Field(
        None, description="0=Critical, 1=High, 2=Medium, 3=Low"
    )
    due_date: Optional[datetime] = None


class UpdateIssueRequest(BaseModel):
    """Request to replace an issue's editable fields."""

    title: str
    description: Optional[str] = None
    priority: IssuePriority = IssuePriority.MEDIUM
    due_date: Optional[datetime] = None
