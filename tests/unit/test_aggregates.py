"""Unit tests for the Issue, Team and User aggregates."""

from datetime import datetime, timezone, timedelta

import pytest

from ticket_system.core.enums import IssuePriority, IssueStatus, TeamRole
from ticket_system.core.exceptions import ReferentialIntegrityError, ValidationError
from ticket_system.core.identity import TeamId, UserId
from ticket_system.modules.issue.models import IssueAggregate
from ticket_system.modules.team.models import TeamAggregate
from ticket_system.modules.user.models import UserAggregate


@pytest.mark.unit
class TestIssueAggregate:
    """Test the Issue aggregate."""

    def test_new_issue_defaults(self):
        issue = IssueAggregate("Bug", "desc", IssuePriority.HIGH)

        assert issue.id is None
        assert issue.title == "Bug"
        assert issue.description == "desc"
        assert issue.priority is IssuePriority.HIGH
        assert issue.status is IssueStatus.OPEN
        assert issue.resolved_date is None
        assert issue.assigned_user_id is None
        assert issue.assigned_team_id is None
        assert issue.created_date == issue.last_modified_date
        assert issue.created_date.tzinfo is not None

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title_is_rejected(self, title):
        with pytest.raises(ValidationError):
            IssueAggregate(title)

    def test_update_stamps_last_modified(self):
        issue = IssueAggregate("Bug")
        before = issue.last_modified_date
        due = datetime(2030, 1, 1, tzinfo=timezone.utc)

        issue.update("Bug 2", None, IssuePriority.LOW, due)

        assert issue.title == "Bug 2"
        assert issue.priority is IssuePriority.LOW
        assert issue.due_date == due
        assert issue.last_modified_date >= before

    def test_update_with_blank_title_leaves_issue_untouched(self):
        issue = IssueAggregate("Bug", "desc")
        with pytest.raises(ValidationError):
            issue.update(" ", "other", IssuePriority.LOW, None)
        assert issue.title == "Bug"
        assert issue.description == "desc"

    def test_naive_due_date_is_treated_as_utc(self):
        issue = IssueAggregate("Bug", due_date=datetime(2030, 5, 1, 12, 0))
        assert issue.due_date == datetime(2030, 5, 1, 12, 0, tzinfo=timezone.utc)

    def test_assignment_and_unassignment(self):
        issue = IssueAggregate("Bug")

        issue.assign_to_user(UserId(7))
        issue.assign_to_team(TeamId(3))
        assert issue.assigned_user_id == UserId(7)
        assert issue.assigned_team_id == TeamId(3)

        issue.assign_to_user(None)
        issue.assign_to_team(None)
        assert issue.assigned_user_id is None
        assert issue.assigned_team_id is None

    def test_entering_resolved_stamps_resolved_date(self):
        issue = IssueAggregate("Bug")
        issue.update_status(IssueStatus.RESOLVED)
        assert issue.status is IssueStatus.RESOLVED
        assert issue.resolved_date is not None

    def test_leaving_resolved_clears_resolved_date(self):
        issue = IssueAggregate("Bug")
        issue.update_status(IssueStatus.RESOLVED)
        issue.update_status(IssueStatus.IN_PROGRESS)
        assert issue.resolved_date is None

    def test_resolving_twice_keeps_first_resolved_date(self):
        issue = IssueAggregate("Bug")
        issue.update_status(IssueStatus.RESOLVED)
        first = issue.resolved_date

        issue.update_status(IssueStatus.RESOLVED)

        assert issue.resolved_date == first

    def test_re_entering_resolved_from_another_status_restamps(self):
        issue = IssueAggregate("Bug")
        issue.update_status(IssueStatus.RESOLVED)
        issue._resolved_date = issue.resolved_date - timedelta(days=1)
        stale = issue.resolved_date

        issue.update_status(IssueStatus.CLOSED)
        issue.update_status(IssueStatus.RESOLVED)

        assert issue.resolved_date is not None
        assert issue.resolved_date > stale

    def test_any_status_may_follow_any_other(self):
        issue = IssueAggregate("Bug")
        for status in [IssueStatus.CLOSED, IssueStatus.OPEN, IssueStatus.BLOCKED, IssueStatus.OPEN]:
            issue.update_status(status)
            assert issue.status is status


@pytest.mark.unit
class TestTeamAggregate:
    """Test the Team aggregate and its member list."""

    def test_new_team(self):
        team = TeamAggregate("Dev")
        assert team.name == "Dev"
        assert team.description is None
        assert team.members == ()
        assert team.member_ids == []

    def test_blank_name_is_rejected(self):
        with pytest.raises(ValidationError):
            TeamAggregate("  ")

    def test_add_member(self):
        team = TeamAggregate("Dev")
        member = team.add_member(UserId(7))

        assert member.user_id == UserId(7)
        assert member.role is TeamRole.MEMBER
        assert member.joined_date is not None
        assert team.has_member(UserId(7))
        assert team.member_ids == [UserId(7)]

    def test_members_keep_insertion_order(self):
        team = TeamAggregate("Dev")
        team.add_member(UserId(5), TeamRole.LEAD)
        team.add_member(UserId(2))
        team.add_member(UserId(9), TeamRole.ADMIN)

        assert team.member_ids == [UserId(5), UserId(2), UserId(9)]
        assert [m.role for m in team.members] == [TeamRole.LEAD, TeamRole.MEMBER, TeamRole.ADMIN]

    def test_duplicate_member_is_rejected(self):
        team = TeamAggregate("Dev")
        team.add_member(UserId(7))
        with pytest.raises(ReferentialIntegrityError, match="already a member"):
            team.add_member(UserId(7), TeamRole.LEAD)
        assert len(team.members) == 1

    def test_remove_member(self):
        team = TeamAggregate("Dev")
        team.add_member(UserId(7))
        team.add_member(UserId(8))

        team.remove_member(UserId(7))

        assert team.member_ids == [UserId(8)]
        assert not team.has_member(UserId(7))

    def test_removing_non_member_is_rejected(self):
        team = TeamAggregate("Dev")
        with pytest.raises(ReferentialIntegrityError, match="not a member"):
            team.remove_member(UserId(7))

    def test_members_tuple_is_a_snapshot(self):
        team = TeamAggregate("Dev")
        members = team.members
        team.add_member(UserId(1))
        assert members == ()


@pytest.mark.unit
class TestUserAggregate:
    """Test the User aggregate."""

    def test_new_user(self):
        user = UserAggregate("ada@example.com", "Ada", "Lovelace")
        assert user.is_active is True
        assert user.display_name == "Ada Lovelace"
        assert user.created_date.tzinfo is not None

    def test_display_name_follows_updates(self):
        user = UserAggregate("ada@example.com", "Ada", "Lovelace")
        user.update("Augusta", "King")
        assert user.display_name == "Augusta King"

    def test_activation(self):
        user = UserAggregate("ada@example.com", "Ada", "Lovelace")
        user.deactivate()
        assert user.is_active is False
        user.activate()
        assert user.is_active is True

    @pytest.mark.parametrize(
        "email,first,last",
        [("", "Ada", "Lovelace"), ("ada@example.com", " ", "Lovelace"), ("ada@example.com", "Ada", "")],
    )
    def test_blank_fields_are_rejected(self, email, first, last):
        with pytest.raises(ValidationError):
            UserAggregate(email, first, last)
