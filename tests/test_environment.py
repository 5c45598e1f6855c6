"""Tests for input environments."""

import asyncio

import pytest

from formwork.core.environment import (
    ABSENT,
    EnvironmentTimeoutError,
    Present,
    from_mapping,
    from_submission,
    has_input,
    lookup,
    merge,
)
from formwork.core.ids import FieldId

F0 = FieldId("f", 0)
F1 = FieldId("f", 1)


class TestFromMapping:
    """Tests for mapping-backed environments."""

    @pytest.mark.asyncio
    async def test_lookup_present_value(self) -> None:
        """Test a mapped id yields its value."""
        env = from_mapping([(F0, "Alice")])
        assert await lookup(env, F0) == "Alice"

    @pytest.mark.asyncio
    async def test_lookup_missing_value(self) -> None:
        """Test an unmapped id yields None."""
        env = from_mapping({F0: "Alice"})
        assert await lookup(env, F1) is None

    @pytest.mark.asyncio
    async def test_first_pair_wins(self) -> None:
        """Test duplicate ids keep the first value."""
        env = from_mapping([(F0, "first"), (F0, "second")])
        assert await lookup(env, F0) == "first"

    @pytest.mark.asyncio
    async def test_absent_always_none(self) -> None:
        """Test the absent environment has no input."""
        assert await lookup(ABSENT, F0) is None


class TestFromSubmission:
    """Tests for submissions keyed by encoded names."""

    @pytest.mark.asyncio
    async def test_decodes_names(self) -> None:
        """Test encoded names map back to field ids."""
        env = from_submission({"f-f0": "Alice", "f-f1": "30"})
        assert await lookup(env, F0) == "Alice"
        assert await lookup(env, F1) == "30"

    @pytest.mark.asyncio
    async def test_ignores_foreign_keys(self) -> None:
        """Test keys that are not field ids are skipped."""
        env = from_submission({"csrf_token": "abc", "f-f1": "x"})
        assert await lookup(env, F0) is None
        assert await lookup(env, F1) == "x"


class TestMerge:
    """Tests for first-match-wins merging."""

    def test_absent_is_identity(self) -> None:
        """Test merging with absent returns the other side."""
        env = from_mapping([(F0, "a")])
        assert merge(ABSENT, env) is env
        assert merge(env, ABSENT) is env
        assert merge(ABSENT, ABSENT) is ABSENT

    @pytest.mark.asyncio
    async def test_left_wins(self) -> None:
        """Test the left environment is preferred."""
        env = merge(from_mapping([(F0, "left")]), from_mapping([(F0, "right"), (F1, "fallback")]))
        assert await lookup(env, F0) == "left"
        assert await lookup(env, F1) == "fallback"

    @pytest.mark.asyncio
    async def test_empty_string_is_a_match(self) -> None:
        """Test a falsy but present left value still wins."""
        env = merge(from_mapping([(F0, "")]), from_mapping([(F0, "right")]))
        assert await lookup(env, F0) == ""

    @pytest.mark.asyncio
    async def test_lookups_are_sequential(self) -> None:
        """Test the right lookup only starts after the left one answered."""
        calls: list[str] = []

        async def left_lookup(field_id: FieldId) -> None:
            calls.append("left-start")
            await asyncio.sleep(0)
            calls.append("left-end")
            return None

        async def right_lookup(field_id: FieldId) -> str:
            calls.append("right")
            return "r"

        env = merge(Present(left_lookup), Present(right_lookup))
        assert await lookup(env, F0) == "r"
        assert calls == ["left-start", "left-end", "right"]


class TestHasInput:
    """Tests for has_input."""

    def test_present_and_absent(self) -> None:
        """Test only present environments have input."""
        assert has_input(from_mapping([]))
        assert not has_input(ABSENT)


class TestTimeout:
    """Tests for lookup timeouts."""

    @pytest.mark.asyncio
    async def test_slow_lookup_times_out(self) -> None:
        """Test a lookup exceeding the timeout raises."""

        async def slow(field_id: FieldId) -> str:
            await asyncio.sleep(5)
            return "late"

        with pytest.raises(EnvironmentTimeoutError) as exc_info:
            await lookup(Present(slow), F0, timeout=0.01)
        assert exc_info.value.field_id == F0

    @pytest.mark.asyncio
    async def test_fast_lookup_within_timeout(self) -> None:
        """Test a quick lookup is unaffected by the timeout."""
        assert await lookup(from_mapping([(F0, "a")]), F0, timeout=1.0) == "a"
