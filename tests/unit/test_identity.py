"""Unit tests for the typed identities."""

import pytest

from ticket_system.core.exceptions import ValidationError
from ticket_system.core.identity import (
    MAX_IDENTITY_VALUE,
    IssueId,
    TeamId,
    UserId,
    raw_id,
)


@pytest.mark.unit
class TestIdentityConstruction:
    """Construction-time validation."""

    @pytest.mark.parametrize("value", [0, -1, -5])
    def test_non_positive_values_are_rejected(self, value):
        with pytest.raises(ValidationError):
            IssueId(value)

    @pytest.mark.parametrize("value", [True, False, "3", 1.0, None])
    def test_non_integers_are_rejected(self, value):
        with pytest.raises(ValidationError):
            IssueId(value)

    def test_upper_bound(self):
        assert IssueId(MAX_IDENTITY_VALUE).value == MAX_IDENTITY_VALUE
        with pytest.raises(ValidationError):
            IssueId(MAX_IDENTITY_VALUE + 1)

    def test_conversions(self):
        issue_id = IssueId(42)
        assert int(issue_id) == 42
        assert str(issue_id) == "42"
        assert raw_id(issue_id) == 42
        assert raw_id(None) is None


@pytest.mark.unit
class TestIdentityParsing:
    """String round-trips and boundary coercion."""

    @pytest.mark.parametrize("value", [1, 7, 123456789, MAX_IDENTITY_VALUE])
    def test_string_round_trip(self, value):
        identity = TeamId(value)
        assert TeamId.parse(str(identity)) == identity

    def test_parse_tolerates_whitespace(self):
        assert IssueId.parse("  42 ") == IssueId(42)

    @pytest.mark.parametrize("text", ["abc", "0", "-1", "", "4.2", "１２"])
    def test_parse_rejects_invalid_text(self, text):
        with pytest.raises(ValidationError):
            IssueId.parse(text)

    def test_coerce_accepts_boundary_forms(self):
        assert UserId.coerce(UserId(3)) == UserId(3)
        assert UserId.coerce(3) == UserId(3)
        assert UserId.coerce("3") == UserId(3)

    def test_coerce_rejects_other_identity_types(self):
        with pytest.raises(ValidationError):
            UserId.coerce(TeamId(3))

    def test_coerce_optional_passes_none_through(self):
        assert UserId.coerce_optional(None) is None
        assert UserId.coerce_optional("5") == UserId(5)


@pytest.mark.unit
class TestIdentitySemantics:
    """Equality, ordering and hashing."""

    def test_different_identity_types_never_compare_equal(self):
        assert IssueId(1) != UserId(1)
        assert TeamId(1) != UserId(1)

    def test_usable_as_dict_key(self):
        lookup = {UserId(1): "a", UserId(2): "b"}
        assert lookup[UserId(2)] == "b"

    def test_ordering_within_a_type(self):
        assert sorted([IssueId(3), IssueId(1), IssueId(2)]) == [
            IssueId(1),
            IssueId(2),
            IssueId(3),
        ]

    def test_identities_are_immutable(self):
        identity = IssueId(1)
        with pytest.raises(AttributeError):
            identity.value = 2
