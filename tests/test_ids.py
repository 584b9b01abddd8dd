"""Tests for id counter."""

from __future__ import annotations

import pytest

from tree_editor.ids import IdCounter, numeric_part


class TestNumericPart:
    """Tests for numeric_part function."""

    @pytest.mark.parametrize(
        "node_id,expected",
        [
            ("n0", 0),
            ("n12", 12),
            ("node-7", 7),
            ("42", 42),
            ("root", None),
            ("n1x", None),
            ("", None),
        ],
    )
    def test_strips_prefix(self, node_id: str, expected: object) -> None:
        """Strips the non-numeric prefix; ids without a numeric tail are ignored."""
        assert numeric_part(node_id) == expected


class TestIdCounter:
    """Tests for IdCounter."""

    def test_mint_is_monotonic(self) -> None:
        """Each mint returns the next integer."""
        counter = IdCounter()
        assert [counter.mint() for _ in range(3)] == [1, 2, 3]
        assert counter.next_value == 4

    def test_format_id(self) -> None:
        assert IdCounter().format_id(5) == "n5"

    def test_seeded_from_max(self) -> None:
        """Seed is one greater than the largest numeric id."""
        counter = IdCounter.seeded_from(["n0", "n4", "n2", "custom"])
        assert counter.next_value == 5

    def test_seeded_from_no_numeric_ids(self) -> None:
        """Without numeric ids the counter starts at 1."""
        assert IdCounter.seeded_from(["root", "abc"]).next_value == 1
