"""Import every module's mapped classes so ``Base.metadata`` knows all tables."""

from ..modules.issue.models import IssueAggregate
from ..modules.team.models import TeamAggregate, TeamMember
from ..modules.user.models import UserAggregate

__all__ = ["IssueAggregate", "TeamAggregate", "TeamMember", "UserAggregate"]
