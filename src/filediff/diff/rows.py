"""Visual rows: document lines as laid out on screen with padding applied.

A document line occupies one visual row, followed by the padding rows
anchored to it.  Padding anchored to line ``0`` is laid out above the first
line.  Translating a line from one document to the other goes through the
visual row both share, which keeps navigation and merging correct when the
two documents' line numbers drift apart.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable

from filediff.models import Padding


class RowMap:
    """Bidirectional visual-row ↔ document-line mapping for one document.

    Parameters
    ----------
    line_count:
        Number of lines in the document.
    padding:
        Padding rows keyed by anchor line.
    """

    def __init__(self, line_count: int, padding: dict[int, int] | None = None) -> None:
        self.line_count = max(line_count, 1)
        self._padding = {
            line: rows
            for line, rows in (padding or {}).items()
            if rows > 0 and 0 <= line <= self.line_count
        }
        # _starts[i] is the visual row of line i + 1.
        self._starts: list[int] = []
        offset = self._padding.get(0, 0)
        for line in range(1, self.line_count + 1):
            self._starts.append(line + offset)
            offset += self._padding.get(line, 0)
        self.total_rows = self.line_count + offset

    @classmethod
    def from_paddings(cls, line_count: int, paddings: Iterable[Padding]) -> RowMap:
        padding: dict[int, int] = {}
        for p in paddings:
            padding[p.line] = padding.get(p.line, 0) + p.rows
        return cls(line_count, padding)

    def padding_at(self, line: int) -> int:
        return self._padding.get(line, 0)

    def visible_from_doc_line(self, line: int) -> int:
        """Visual row of *line*.

        Lines past the end continue one row each after the last row.
        """
        if line < 1:
            return 0
        if line > self.line_count:
            return self.total_rows + (line - self.line_count)
        return self._starts[line - 1]

    def doc_line_from_visible(self, row: int) -> int:
        """Line occupying visual *row*.

        Padding rows belong to their anchor line (rows above the first line
        belong to line 1); rows past the end continue one line each.
        """
        if row > self.total_rows:
            return self.line_count + (row - self.total_rows)
        return max(bisect_right(self._starts, row), 1)

    def is_padding_row(self, row: int) -> bool:
        """Whether visual *row* is a padding row rather than a line."""
        if row < 1 or row > self.total_rows:
            return False
        return self.visible_from_doc_line(self.doc_line_from_visible(row)) != row


def synchronized_line(source: RowMap, target: RowMap, line: int) -> int:
    """Translate *line* of the source document to the line of the target
    document displayed on the same visual row."""
    return target.doc_line_from_visible(source.visible_from_doc_line(line))
