"""filediff: side-by-side two-way comparison and merging of text documents.

Public re-exports
-----------------

* **Front end:** :class:`FileDiff`, :class:`DiffSession`
* **Documents:** :class:`Document`, :class:`TextDocument`
* **Configuration:** :class:`FileDiffConfig`
* **Errors:** Every :class:`FileDiffError` subclass and :class:`ErrorCode`
* **Models:** All result dataclasses, enums, and supporting types
* **Rendering:** :func:`render_side_by_side`

Usage::

    from filediff import FileDiff, TextDocument, render_side_by_side

    fd = FileDiff()
    session = fd.start(TextDocument("a\\nb\\nc\\n"), TextDocument("a\\nc\\n"))
    print(render_side_by_side(session))
"""

from __future__ import annotations

# ── Front end ───────────────────────────────────────────────────────────
from filediff.client import FileDiff
from filediff.session import DiffSession

# ── Configuration ───────────────────────────────────────────────────────
from filediff.config import THEME_COLORS, FileDiffConfig

# ── Documents ───────────────────────────────────────────────────────────
from filediff.document import Document, TextDocument

# ── Errors ──────────────────────────────────────────────────────────────
from filediff.errors import (
    ErrorCode,
    FileDiffDocumentRangeError,
    FileDiffError,
    FileDiffMalformedScriptError,
    FileDiffSessionError,
    FileDiffStaleBlockError,
)

# ── Models ──────────────────────────────────────────────────────────────
from filediff.models import (
    ChangeBlock,
    ChangeKind,
    ClassificationResult,
    DiffOp,
    DiffOpKind,
    DiffScript,
    Direction,
    HighlightKind,
    InlineHighlight,
    MergeDirection,
    MergeResult,
    MergeStatus,
    NavigationResult,
    NavigationStatus,
    Padding,
    Side,
)

# ── Rendering ───────────────────────────────────────────────────────────
from filediff.render import render_side_by_side

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Front end
    "FileDiff",
    "DiffSession",
    # Documents
    "Document",
    "TextDocument",
    # Configuration
    "FileDiffConfig",
    "THEME_COLORS",
    # Error base + code enum
    "FileDiffError",
    "ErrorCode",
    # Classification errors
    "FileDiffMalformedScriptError",
    "FileDiffStaleBlockError",
    # Document / session errors
    "FileDiffDocumentRangeError",
    "FileDiffSessionError",
    # Models, enums
    "DiffOpKind",
    "ChangeKind",
    "HighlightKind",
    "Side",
    "Direction",
    "MergeDirection",
    "NavigationStatus",
    "MergeStatus",
    # Models, diff and classification types
    "DiffOp",
    "DiffScript",
    "ChangeBlock",
    "InlineHighlight",
    "Padding",
    "ClassificationResult",
    # Models, result types
    "NavigationResult",
    "MergeResult",
    # Rendering
    "render_side_by_side",
]
