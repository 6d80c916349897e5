"""Per-line classification tags for one document.

Each line carries at most one :class:`ChangeKind`.  Besides the line → tag
mapping, :class:`LineTags` keeps a sorted index of tagged lines so that
"next/previous tagged line" scans and block extraction never walk untagged
lines.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right, insort

from filediff.models import ChangeBlock, ChangeKind, Side


class LineTags:
    """Line tags of one document.

    Parameters
    ----------
    side:
        The document the tags belong to.
    line_count:
        Number of lines in the document; tags outside ``1..line_count``
        are ignored.
    """

    def __init__(self, side: Side, line_count: int) -> None:
        self.side = side
        self.line_count = line_count
        self._tags: dict[int, ChangeKind] = {}
        self._by_kind: dict[ChangeKind, set[int]] = {kind: set() for kind in ChangeKind}
        self._sorted: list[int] = []

    def __len__(self) -> int:
        return len(self._tags)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineTags):
            return NotImplemented
        return (
            self.side is other.side
            and self.line_count == other.line_count
            and self._tags == other._tags
        )

    def __repr__(self) -> str:
        return f"LineTags(side={self.side.value!r}, tags={self._tags!r})"

    def tag(self, line: int, kind: ChangeKind) -> None:
        """Tag *line* with *kind*.

        A ``MODIFICATION`` tag replaces an ``ADDITION``/``DELETION`` tag;
        the reverse never happens.
        """
        if not 1 <= line <= self.line_count:
            return
        current = self._tags.get(line)
        if current is kind or current is ChangeKind.MODIFICATION:
            return
        if current is None:
            insort(self._sorted, line)
        else:
            self._by_kind[current].discard(line)
        self._tags[line] = kind
        self._by_kind[kind].add(line)

    def tag_range(self, start: int, end: int, kind: ChangeKind) -> None:
        """Tag every line in ``start..end`` (inclusive)."""
        for line in range(start, end + 1):
            self.tag(line, kind)

    def kind_at(self, line: int) -> ChangeKind | None:
        return self._tags.get(line)

    def lines_with(self, kind: ChangeKind) -> list[int]:
        return sorted(self._by_kind[kind])

    def items(self) -> list[tuple[int, ChangeKind]]:
        return [(line, self._tags[line]) for line in self._sorted]

    def next_tagged(self, line: int) -> int | None:
        """First tagged line at or after *line*."""
        i = bisect_left(self._sorted, line)
        return self._sorted[i] if i < len(self._sorted) else None

    def previous_tagged(self, line: int) -> int | None:
        """Last tagged line at or before *line*."""
        i = bisect_right(self._sorted, line)
        return self._sorted[i - 1] if i else None

    def block_at(self, line: int, generation: int = 0) -> ChangeBlock | None:
        """Return the block containing *line*, or ``None`` if it is untagged."""
        kind = self._tags.get(line)
        if kind is None:
            return None
        start = line
        while self._tags.get(start - 1) is kind:
            start -= 1
        end = line
        while self._tags.get(end + 1) is kind:
            end += 1
        return ChangeBlock(self.side, start, end, kind, generation)

    def blocks(self, generation: int = 0) -> list[ChangeBlock]:
        """Split the tagged lines into maximal same-kind runs."""
        blocks: list[ChangeBlock] = []
        start = prev = None
        kind = None
        for line in self._sorted:
            tag = self._tags[line]
            if start is not None and line == prev + 1 and tag is kind:
                prev = line
                continue
            if start is not None:
                blocks.append(ChangeBlock(self.side, start, prev, kind, generation))
            start = prev = line
            kind = tag
        if start is not None:
            blocks.append(ChangeBlock(self.side, start, prev, kind, generation))
        return blocks
