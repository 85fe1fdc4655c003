"""Unit tests for enum lookup and conversion."""

import pytest

from ticket_system.core.enums import IssuePriority, IssueStatus, TeamRole, coerce_enum
from ticket_system.core.exceptions import ValidationError
from ticket_system.core.identity import UserId
from ticket_system.modules.issue.models import IssueAggregate
from ticket_system.modules.team.models import TeamAggregate


@pytest.mark.unit
class TestPriorityFromName:
    """Configured priority names."""

    @pytest.mark.parametrize("name", ["Medium", "medium", "  MEDIUM "])
    def test_names_are_case_insensitive(self, name):
        assert IssuePriority.from_name(name) is IssuePriority.MEDIUM

    @pytest.mark.parametrize("name", ["Urgent", "", None, 2])
    def test_unknown_names_raise_value_error(self, name):
        with pytest.raises(ValueError):
            IssuePriority.from_name(name)


@pytest.mark.unit
class TestCoerceEnum:
    """Boundary conversion into the error taxonomy."""

    def test_members_and_values_are_accepted(self):
        assert coerce_enum(IssueStatus, IssueStatus.BLOCKED, "status") is IssueStatus.BLOCKED
        assert coerce_enum(IssueStatus, "closed", "status") is IssueStatus.CLOSED
        assert coerce_enum(TeamRole, 1, "role") is TeamRole.LEAD

    @pytest.mark.parametrize(
        "enum_class,value,field",
        [
            (IssueStatus, "bogus", "status"),
            (IssuePriority, 9, "priority"),
            (TeamRole, 7, "role"),
        ],
    )
    def test_bad_values_raise_validation_error(self, enum_class, value, field):
        with pytest.raises(ValidationError) as exc_info:
            coerce_enum(enum_class, value, field)
        assert exc_info.value.field == field


@pytest.mark.unit
class TestAggregatesRejectBadEnumValues:
    """Aggregate constructors and mutators."""

    def test_issue_priority_on_create_and_update(self):
        with pytest.raises(ValidationError):
            IssueAggregate("Bug", priority=9)

        issue = IssueAggregate("Bug")
        with pytest.raises(ValidationError):
            issue.update("Bug", None, 42, None)
        assert issue.priority is IssuePriority.MEDIUM

    def test_issue_status(self):
        issue = IssueAggregate("Bug")
        with pytest.raises(ValidationError):
            issue.update_status("done")
        assert issue.status is IssueStatus.OPEN

    def test_team_role(self):
        team = TeamAggregate("Dev")
        with pytest.raises(ValidationError):
            team.add_member(UserId(1), 7)
        assert team.members == ()
