"""Alignment padding: blank rows that keep both documents row-aligned.

Whenever one side of a change spans fewer physical lines than the other,
the shorter document displays blank rows so that the unchanged text below
the change lines up again.  The classifier reports each imbalance to a
:class:`PaddingLedger`, which accumulates rows per anchor line.
"""

from __future__ import annotations

from collections import defaultdict

from filediff.models import Padding, Side


def count_lines(text: str) -> int:
    """Number of physical lines *text* spans (newlines plus one).

    Examples
    --------
    >>> count_lines("abc")
    1
    >>> count_lines("a\\nb\\n")
    3
    """
    return text.count("\n") + 1


class PaddingLedger:
    """Accumulates padding rows per side and anchor line."""

    def __init__(self) -> None:
        self._rows: dict[Side, dict[int, int]] = {
            Side.LEFT: defaultdict(int),
            Side.RIGHT: defaultdict(int),
        }

    def add(self, side: Side, line: int, rows: int) -> None:
        """Add *rows* blank rows below *line* of *side*."""
        if rows <= 0:
            return
        self._rows[side][max(line, 0)] += rows

    def rows_at(self, side: Side, line: int) -> int:
        return self._rows[side].get(line, 0)

    def total(self, side: Side) -> int:
        return sum(self._rows[side].values())

    def by_line(self, side: Side) -> dict[int, int]:
        return dict(self._rows[side])

    def paddings(self) -> list[Padding]:
        """All accumulated padding, left document first, in line order."""
        return [
            Padding(side, line, rows)
            for side in (Side.LEFT, Side.RIGHT)
            for line, rows in sorted(self._rows[side].items())
        ]
