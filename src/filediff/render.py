"""Side-by-side rendering of a comparison.

Lays both documents out row by row with their padding applied, so that the
unchanged text around every change lines up.  Each row carries a gutter
glyph for its line's tag:

* ``+`` addition, ``-`` deletion, ``~`` modification, blank otherwise.

Padding rows render empty, without a line number.  With ``color=True`` the
tagged rows are wrapped in ANSI colour codes picked from the configured
theme.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import zip_longest

from filediff.diff.lines import LineTags
from filediff.diff.rows import RowMap
from filediff.document import Document
from filediff.models import ChangeKind, Side
from filediff.session import DiffSession

GLYPHS: dict[ChangeKind | None, str] = {
    ChangeKind.ADDITION: "+",
    ChangeKind.DELETION: "-",
    ChangeKind.MODIFICATION: "~",
    None: " ",
}

_ANSI: dict[str, str] = {
    "light_green": "\x1b[32m",
    "light_red": "\x1b[31m",
    "light_yellow": "\x1b[33m",
    "dark_green": "\x1b[92m",
    "dark_red": "\x1b[91m",
    "dark_yellow": "\x1b[93m",
}
_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Row:
    """One visual row of a document.

    ``line`` is ``None`` for padding rows.
    """

    line: int | None
    text: str
    kind: ChangeKind | None = None

    @property
    def is_padding(self) -> bool:
        return self.line is None


def aligned_rows(doc: Document, tags: LineTags | None, row_map: RowMap) -> list[Row]:
    """Lay *doc* out as visual rows, padding included."""
    rows = [Row(None, "") for _ in range(row_map.padding_at(0))]
    text = doc.text()
    for line in range(1, doc.line_count() + 1):
        content = text[doc.position_from_line(line):doc.line_end_position(line)]
        kind = tags.kind_at(line) if tags is not None else None
        rows.append(Row(line, content, kind))
        rows.extend(Row(None, "") for _ in range(row_map.padding_at(line)))
    return rows


def _cell(row: Row | None, width: int, color: bool, colors: dict[str, str]) -> str:
    if row is None or row.is_padding:
        return " " * (width + 7)
    text = row.text.expandtabs(4)
    if len(text) > width:
        text = text[: width - 1] + "…"
    cell = f"{row.line:>4} {GLYPHS[row.kind]} {text:<{width}}"
    if color and row.kind is not None:
        cell = f"{_ANSI[colors[row.kind.value]]}{cell}{_RESET}"
    return cell


def render_side_by_side(session: DiffSession, width: int = 40, color: bool = False) -> str:
    """Render both documents of *session* next to each other.

    Parameters
    ----------
    session:
        An active session; it is classified first if needed.
    width:
        Text columns per document (line numbers and gutter excluded).
    color:
        Wrap tagged rows in ANSI colour codes.

    Returns
    -------
    str
        One output line per visual row, without a trailing newline.
    """
    if width < 2:
        raise ValueError(f"width must be >= 2, got {width}")
    result = session.result if session.result is not None else session.refresh()
    colors = session.config.colors
    columns = []
    for side in Side:
        tags = result.tags_for(side) if result is not None else None
        columns.append(aligned_rows(session.document(side), tags, session.row_map(side)))
    lines = [
        f"{_cell(left, width, color, colors)} | {_cell(right, width, color, colors)}".rstrip()
        for left, right in zip_longest(*columns)
    ]
    return "\n".join(lines)
