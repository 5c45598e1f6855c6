"""Tests for field identifiers and ranges."""

import pytest

from formwork.core.ids import (
    FieldId,
    FieldRange,
    InvalidFieldIdError,
    errors_for_range,
    errors_for_range_and_children,
    increment,
    is_in_range,
    is_sub_range,
    union,
)


def rng(start: int, end: int, prefix: str = "f") -> FieldRange:
    return FieldRange(FieldId(prefix, start), FieldId(prefix, end))


class TestFieldId:
    """Tests for FieldId."""

    def test_increment_keeps_prefix(self) -> None:
        """Test increment bumps the sequence only."""
        assert increment(FieldId("signup", 3)) == FieldId("signup", 4)

    def test_ordering_by_sequence(self) -> None:
        """Test ordering compares sequence numbers."""
        assert FieldId("f", 1) < FieldId("f", 2)
        assert FieldId("f", 2) >= FieldId("f", 2)
        assert max(FieldId("f", 5), FieldId("f", 2)) == FieldId("f", 5)

    def test_encoding_round_trip(self) -> None:
        """Test str() and parse() round-trip, including dashed prefixes."""
        for field_id in (FieldId("signup", 0), FieldId("my-form-f2", 17)):
            assert FieldId.parse(str(field_id)) == field_id

    def test_encoding_format(self) -> None:
        """Test the textual encoding."""
        assert str(FieldId("signup", 2)) == "signup-f2"

    @pytest.mark.parametrize(
        "text", ["signup", "signup-f", "signup-fx", "-", "f2", "signup-f03", "signup-f\u0663"]
    )
    def test_parse_rejects_malformed(self, text: str) -> None:
        """Test malformed names raise InvalidFieldIdError."""
        with pytest.raises(InvalidFieldIdError):
            FieldId.parse(text)

    def test_negative_sequence_rejected(self) -> None:
        """Test sequences are non-negative."""
        with pytest.raises(ValueError):
            FieldId("f", -1)

    def test_hashable(self) -> None:
        """Test ids can key a dict."""
        table = {FieldId("f", 1): "a"}
        assert table[FieldId("f", 1)] == "a"


class TestRanges:
    """Tests for range membership and containment."""

    def test_is_in_range_half_open(self) -> None:
        """Test the end of a range is excluded."""
        field_range = rng(2, 4)
        assert not is_in_range(FieldId("f", 1), field_range)
        assert is_in_range(FieldId("f", 2), field_range)
        assert is_in_range(FieldId("f", 3), field_range)
        assert not is_in_range(FieldId("f", 4), field_range)

    def test_is_sub_range_reflexive(self) -> None:
        """Test a range is a sub-range of itself."""
        assert is_sub_range(rng(1, 3), rng(1, 3))

    def test_is_sub_range_transitive(self) -> None:
        """Test containment is transitive."""
        a, b, c = rng(2, 3), rng(1, 4), rng(0, 5)
        assert is_sub_range(a, b) and is_sub_range(b, c)
        assert is_sub_range(a, c)

    def test_is_sub_range_rejects_overlap(self) -> None:
        """Test a partially overlapping range is not contained."""
        assert not is_sub_range(rng(2, 5), rng(0, 4))
        assert not is_sub_range(rng(0, 4), rng(1, 4))

    def test_union_widens(self) -> None:
        """Test union covers both ranges."""
        assert union(rng(2, 3), rng(0, 1)) == rng(0, 3)
        assert union(rng(1, 4), rng(2, 3)) == rng(1, 4)

    def test_fresh_and_width(self) -> None:
        """Test a fresh range holds one id."""
        field_range = FieldRange.fresh(FieldId("f", 7))
        assert field_range == rng(7, 8)
        assert field_range.width == 1


class TestErrorSelection:
    """Tests for errors_for_range and errors_for_range_and_children."""

    @pytest.fixture
    def errors(self) -> list[tuple[FieldRange, str]]:
        return [
            (rng(0, 1), "name required"),
            (rng(1, 2), "age invalid"),
            (rng(0, 2), "group invalid"),
            (rng(3, 4), "other"),
        ]

    def test_exact_match_only(self, errors: list) -> None:
        """Test errors_for_range ignores children."""
        assert errors_for_range(rng(0, 2), errors) == ["group invalid"]
        assert errors_for_range(rng(1, 2), errors) == ["age invalid"]

    def test_children_included_in_order(self, errors: list) -> None:
        """Test errors_for_range_and_children includes sub-ranges in order."""
        assert errors_for_range_and_children(rng(0, 2), errors) == [
            "name required",
            "age invalid",
            "group invalid",
        ]

    def test_top_range_returns_everything(self, errors: list) -> None:
        """Test the widest range selects every error."""
        assert errors_for_range_and_children(rng(0, 4), errors) == [e for _, e in errors]

    def test_no_match(self, errors: list) -> None:
        """Test an unrelated range selects nothing."""
        assert errors_for_range(rng(5, 6), errors) == []
        assert errors_for_range_and_children(rng(5, 6), errors) == []
