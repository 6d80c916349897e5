"""Public data models for filediff.

This module contains every enum, result type and supporting dataclass
referenced by the public API surface.  Apart from a few derived
properties, all types are plain dataclasses; the frozen ones are hashable
so they can be collected in sets and compared structurally.

Line numbers are 1-based and character offsets 0-based throughout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from filediff.diff.lines import LineTags


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class DiffOpKind(str, Enum):
    """Operation kinds in a character-level diff script."""

    DELETE = "delete"
    """Text present only in the left document."""

    INSERT = "insert"
    """Text present only in the right document."""

    EQUAL = "equal"
    """Text common to both documents."""


class ChangeKind(str, Enum):
    """Classification tag carried by a changed line."""

    ADDITION = "addition"
    """Whole line(s) present only in the right document."""

    DELETION = "deletion"
    """Whole line(s) present only in the left document."""

    MODIFICATION = "modification"
    """Line(s) whose text differs between the two documents."""


class HighlightKind(str, Enum):
    """Style of an inline (sub-line) highlight."""

    ADDITION = "addition"
    DELETION = "deletion"


class Side(str, Enum):
    """One of the two compared documents."""

    LEFT = "left"
    """Document A."""

    RIGHT = "right"
    """Document B."""

    @property
    def other(self) -> Side:
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class Direction(str, Enum):
    """Navigation direction."""

    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def step(self) -> int:
        return 1 if self is Direction.FORWARD else -1


class MergeDirection(str, Enum):
    """Which way a change is copied between the documents."""

    LEFT_TO_RIGHT = "left_to_right"
    """The left document is the source, the right one is changed."""

    RIGHT_TO_LEFT = "right_to_left"
    """The right document is the source, the left one is changed."""

    @property
    def source(self) -> Side:
        return Side.LEFT if self is MergeDirection.LEFT_TO_RIGHT else Side.RIGHT

    @property
    def target(self) -> Side:
        return self.source.other


class NavigationStatus(str, Enum):
    """Outcome of a change navigation request."""

    MOVED = "moved"
    NO_MORE_DIFFERENCES = "no_more_differences"
    INACTIVE_SESSION = "inactive_session"


class MergeStatus(str, Enum):
    """Outcome of a merge request."""

    MERGED = "merged"
    NOTHING_TO_MERGE = "nothing_to_merge"
    INACTIVE_SESSION = "inactive_session"


# ---------------------------------------------------------------------------
# Diff script
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DiffOp:
    """A single operation of a diff script.

    Attributes
    ----------
    kind:
        Whether the text is deleted, inserted or shared.
    text:
        The text the operation covers.
    """

    kind: DiffOpKind
    text: str


DiffScript = list[DiffOp]
"""Ordered diff operations.  Delete and equal texts rebuild the left
document; insert and equal texts rebuild the right one."""


# ---------------------------------------------------------------------------
# Classification output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChangeBlock:
    """A maximal run of lines in one document sharing the same tag.

    Attributes
    ----------
    side:
        The document the block lives in.
    start_line:
        First line of the block.
    end_line:
        Last line of the block (inclusive).
    kind:
        The tag shared by every line of the block.
    generation:
        Classification pass that produced the block.  Blocks from an
        older pass must not be merged.
    """

    side: Side
    start_line: int
    end_line: int
    kind: ChangeKind
    generation: int = 0

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


@dataclass(frozen=True)
class InlineHighlight:
    """A character span changed within a line.

    Attributes
    ----------
    side:
        The document the span lives in.
    start:
        Offset of the first highlighted character.
    end:
        Offset one past the last highlighted character.
    kind:
        ``DELETION`` spans live in the left document, ``ADDITION`` spans
        in the right one.
    """

    side: Side
    start: int
    end: int
    kind: HighlightKind


@dataclass(frozen=True)
class Padding:
    """Blank display rows shown below a line to keep both documents aligned.

    Attributes
    ----------
    side:
        The document that displays the rows.
    line:
        Anchor line; the rows appear directly below it.  ``0`` places them
        above the first line.
    rows:
        Number of blank rows.  Never counted as document lines.
    """

    side: Side
    line: int
    rows: int

    @property
    def before_line(self) -> int:
        """The line displayed directly below the padding rows."""
        return self.line + 1


@dataclass
class ClassificationResult:
    """Everything one classification pass derived from a diff script.

    Attributes
    ----------
    generation:
        Monotonic pass number assigned by the session.
    tags:
        Per-side line tags.
    highlights:
        Inline highlight spans for partially changed lines.
    paddings:
        Padding rows per side and anchor line.
    blocks:
        Change blocks of both documents, left document first, each in line
        order.
    """

    generation: int
    tags: dict[Side, LineTags]
    highlights: list[InlineHighlight] = field(default_factory=list)
    paddings: list[Padding] = field(default_factory=list)
    blocks: list[ChangeBlock] = field(default_factory=list)

    def tags_for(self, side: Side) -> LineTags:
        return self.tags[side]

    def blocks_for(self, side: Side) -> list[ChangeBlock]:
        return [b for b in self.blocks if b.side is side]

    def paddings_for(self, side: Side) -> list[Padding]:
        return [p for p in self.paddings if p.side is side]

    def highlights_for(self, side: Side) -> list[InlineHighlight]:
        return [h for h in self.highlights if h.side is side]

    @property
    def has_differences(self) -> bool:
        return bool(self.blocks)


# ---------------------------------------------------------------------------
# Operation results
# ---------------------------------------------------------------------------

@dataclass
class NavigationResult:
    """Result of a next/previous change request.

    Attributes
    ----------
    status:
        ``MOVED`` when a change was found.
    line_a:
        Line in the left document at the change (``None`` unless moved).
    line_b:
        Synchronized line in the right document.
    wrapped:
        The change was found only after wrapping around the documents.
    """

    status: NavigationStatus
    line_a: int | None = None
    line_b: int | None = None
    wrapped: bool = False

    @property
    def moved(self) -> bool:
        return self.status is NavigationStatus.MOVED


@dataclass
class MergeResult:
    """Result of a merge request.

    Attributes
    ----------
    status:
        ``MERGED`` when a document was changed.
    direction:
        The requested merge direction.
    block:
        The change block the merge acted on.
    target_side:
        The document that was changed.
    start:
        Offset in the target document where the change was applied.
    end:
        Offset one past the replaced text, before the change.
    inserted_text:
        Text written into the target document.
    removed_text:
        Text removed from the target document.
    """

    status: MergeStatus
    direction: MergeDirection | None = None
    block: ChangeBlock | None = None
    target_side: Side | None = None
    start: int = 0
    end: int = 0
    inserted_text: str = ""
    removed_text: str = ""

    @property
    def merged(self) -> bool:
        return self.status is MergeStatus.MERGED
