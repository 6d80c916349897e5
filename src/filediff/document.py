"""Document abstraction consumed by the comparison engine.

:class:`Document` is the protocol an editor buffer has to satisfy for the
engine to classify, navigate and merge it: line/offset conversion, text
retrieval and replacement, per-line markers, inline highlights, padding
annotations, a caret line and change listeners.

:class:`TextDocument` is the in-memory implementation shipped with the
package.  Lines are separated by ``"\\n"`` only; a document always has
``text.count("\\n") + 1`` lines, so a trailing newline yields a final empty
line.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from filediff.errors import FileDiffDocumentRangeError
from filediff.models import ChangeKind, HighlightKind

ChangeListener = Callable[["Document"], None]


@runtime_checkable
class Document(Protocol):
    """Protocol for a mutable, line-addressable text buffer."""

    name: str

    def text(self) -> str: ...

    def line_count(self) -> int: ...

    def line_from_position(self, pos: int) -> int: ...

    def position_from_line(self, line: int) -> int: ...

    def line_end_position(self, line: int) -> int: ...

    def text_range(self, start: int, end: int) -> str: ...

    def replace_range(self, start: int, end: int, new_text: str) -> None: ...

    def insert_text(self, pos: int, text: str) -> None: ...

    def marker_add(self, line: int, kind: ChangeKind) -> None: ...

    def marker_get(self, line: int) -> ChangeKind | None: ...

    def marker_clear_all(self) -> None: ...

    def highlight_add(self, start: int, end: int, kind: HighlightKind) -> None: ...

    def highlight_clear_all(self) -> None: ...

    def set_padding(self, line: int, rows: int) -> None: ...

    def padding_at(self, line: int) -> int: ...

    def padding_clear_all(self) -> None: ...

    @property
    def caret_line(self) -> int: ...

    def goto_line(self, line: int) -> None: ...

    def add_listener(self, listener: ChangeListener) -> None: ...

    def remove_listener(self, listener: ChangeListener) -> None: ...


def _line_starts(text: str) -> list[int]:
    starts = [0]
    pos = text.find("\n")
    while pos != -1:
        starts.append(pos + 1)
        pos = text.find("\n", pos + 1)
    return starts


class TextDocument:
    """In-memory :class:`Document` implementation.

    Parameters
    ----------
    text:
        Initial content.
    name:
        Display name, used in logs and error context.
    """

    def __init__(self, text: str = "", name: str = "untitled") -> None:
        self.name = name
        self._text = text
        self._starts = _line_starts(text)
        self._markers: dict[int, ChangeKind] = {}
        self._highlights: list[tuple[int, int, HighlightKind]] = []
        self._padding: dict[int, int] = {}
        self._caret_line = 1
        self._listeners: list[ChangeListener] = []

    @classmethod
    def from_file(cls, path: str | Path, encoding: str = "utf-8") -> TextDocument:
        """Load *path* into a new document named after the file."""
        path = Path(path)
        return cls(path.read_text(encoding=encoding), name=str(path))

    def __repr__(self) -> str:
        return f"TextDocument(name={self.name!r}, lines={self.line_count()})"

    # ── Text and geometry ───────────────────────────────────────────────

    def text(self) -> str:
        return self._text

    @property
    def length(self) -> int:
        return len(self._text)

    def line_count(self) -> int:
        return len(self._starts)

    def line_from_position(self, pos: int) -> int:
        """Return the line containing offset *pos* (clamped to the text)."""
        pos = min(max(pos, 0), len(self._text))
        return bisect_right(self._starts, pos)

    def position_from_line(self, line: int) -> int:
        """Return the offset where *line* starts.

        Lines past the end map to the end of the text, lines before the
        first one to ``0``.
        """
        if line < 1:
            return 0
        if line > len(self._starts):
            return len(self._text)
        return self._starts[line - 1]

    def line_end_position(self, line: int) -> int:
        """Return the offset of the end of *line*, excluding its newline."""
        line = max(line, 1)
        if line >= len(self._starts):
            return len(self._text)
        return self._starts[line] - 1

    def line_text(self, line: int) -> str:
        return self._text[self.position_from_line(line):self.line_end_position(line)]

    def text_range(self, start: int, end: int) -> str:
        return self._text[start:end]

    # ── Mutation ────────────────────────────────────────────────────────

    def replace_range(self, start: int, end: int, new_text: str) -> None:
        """Replace ``text[start:end]`` with *new_text* and notify listeners.

        Raises
        ------
        FileDiffDocumentRangeError
            If the range is not within the document.
        """
        if not 0 <= start <= end <= len(self._text):
            raise FileDiffDocumentRangeError(
                f"Range {start}..{end} is outside document {self.name!r}",
                context={
                    "document": self.name,
                    "start": start,
                    "end": end,
                    "length": len(self._text),
                },
            )
        self._text = self._text[:start] + new_text + self._text[end:]
        self._starts = _line_starts(self._text)
        self._caret_line = min(self._caret_line, len(self._starts))
        for listener in list(self._listeners):
            listener(self)

    def insert_text(self, pos: int, text: str) -> None:
        self.replace_range(pos, pos, text)

    def set_text(self, text: str) -> None:
        self.replace_range(0, len(self._text), text)

    # ── Markers ─────────────────────────────────────────────────────────

    def marker_add(self, line: int, kind: ChangeKind) -> None:
        self._markers[line] = kind

    def marker_get(self, line: int) -> ChangeKind | None:
        return self._markers.get(line)

    def markers(self) -> dict[int, ChangeKind]:
        return dict(self._markers)

    def marker_clear_all(self) -> None:
        self._markers.clear()

    # ── Inline highlights ───────────────────────────────────────────────

    def highlight_add(self, start: int, end: int, kind: HighlightKind) -> None:
        self._highlights.append((start, end, kind))

    def highlights(self) -> list[tuple[int, int, HighlightKind]]:
        return list(self._highlights)

    def highlight_clear_all(self) -> None:
        self._highlights.clear()

    # ── Padding annotations ─────────────────────────────────────────────

    def set_padding(self, line: int, rows: int) -> None:
        """Attach *rows* blank display rows below *line* (0 removes them)."""
        if rows < 0:
            raise ValueError(f"rows must be >= 0, got {rows}")
        if rows:
            self._padding[line] = rows
        else:
            self._padding.pop(line, None)

    def padding_at(self, line: int) -> int:
        return self._padding.get(line, 0)

    def paddings(self) -> dict[int, int]:
        return dict(self._padding)

    def padding_clear_all(self) -> None:
        self._padding.clear()

    # ── Caret ───────────────────────────────────────────────────────────

    @property
    def caret_line(self) -> int:
        return self._caret_line

    def goto_line(self, line: int) -> None:
        self._caret_line = min(max(line, 1), len(self._starts))

    # ── Listeners ───────────────────────────────────────────────────────

    def add_listener(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
