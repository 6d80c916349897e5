"""Comparison front end.

:class:`FileDiff` is the surface an editor integrates with.  It owns at
most one active :class:`~filediff.session.DiffSession`: starting a new
comparison tears the previous one down first, and closing either compared
document ends the comparison.

Usage::

    from filediff import Direction, FileDiff, MergeDirection

    with FileDiff() as fd:
        session = fd.compare_files("old.txt", "new.txt")
        fd.goto_change(Direction.FORWARD)
        fd.merge(MergeDirection.RIGHT_TO_LEFT)
        print(session.doc_a.text())
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from filediff.config import FileDiffConfig
from filediff.document import Document, TextDocument
from filediff.models import (
    Direction,
    MergeDirection,
    MergeResult,
    MergeStatus,
    NavigationResult,
    NavigationStatus,
    Side,
)
from filediff.observability import get_logger
from filediff.session import DiffSession, Differ

log = get_logger("filediff.client")


class FileDiff:
    """Two-way document comparison.

    Parameters
    ----------
    config:
        Engine configuration.  When omitted, one is built from *kwargs*.
    differ:
        Diff primitive forwarded to every session.
    **kwargs:
        Forwarded to :class:`FileDiffConfig` when *config* is omitted.
    """

    def __init__(
        self,
        config: FileDiffConfig | None = None,
        differ: Differ | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = config or FileDiffConfig(**kwargs)
        self._differ = differ
        self._session: DiffSession | None = None

    @property
    def config(self) -> FileDiffConfig:
        return self._config

    @property
    def session(self) -> DiffSession | None:
        """The active session, if any."""
        return self._session

    # ── Lifecycle ───────────────────────────────────────────────────────

    def start(self, doc_a: Document, doc_b: Document) -> DiffSession:
        """Start comparing *doc_a* (left) with *doc_b* (right).

        Any active comparison is stopped first.  The caret is placed in the
        left document.
        """
        self.stop()
        session = DiffSession(doc_a, doc_b, self._config, self._differ)
        self._session = session
        session.focus = Side.LEFT
        session.refresh()
        log.info(
            "comparison started",
            extra={"extra_fields": {"op": "start", "left": doc_a.name, "right": doc_b.name}},
        )
        return session

    def compare_files(
        self,
        path_a: str | Path,
        path_b: str | Path,
        encoding: str = "utf-8",
    ) -> DiffSession:
        """Load two files and start comparing them."""
        return self.start(
            TextDocument.from_file(path_a, encoding=encoding),
            TextDocument.from_file(path_b, encoding=encoding),
        )

    def stop(self) -> None:
        """Stop comparing and clear all overlays.  No-op when inactive."""
        if self._session is None:
            return
        session, self._session = self._session, None
        session.close()
        log.info(
            "comparison stopped",
            extra={
                "extra_fields": {
                    "op": "stop",
                    "left": session.doc_a.name,
                    "right": session.doc_b.name,
                }
            },
        )

    def __enter__(self) -> FileDiff:
        return self

    def __exit__(self, *args: Any) -> None:
        self.stop()

    # ── Editor events ───────────────────────────────────────────────────

    def on_document_changed(self, doc: Document) -> None:
        """Reclassify if *doc* is being compared."""
        if self._session is not None:
            self._session.on_document_changed(doc)

    def on_document_closed(self, doc: Document) -> None:
        """Stop comparing if *doc* is one of the compared documents."""
        if self._session is not None and self._session.side_of(doc) is not None:
            self.stop()

    def focus(self, doc: Document) -> None:
        """Record that the caret moved into *doc*."""
        if self._session is None:
            return
        side = self._session.side_of(doc)
        if side is not None:
            self._session.focus = side

    # ── Commands ────────────────────────────────────────────────────────

    def goto_change(self, direction: Direction = Direction.FORWARD) -> NavigationResult:
        """Jump to the next or previous change."""
        if self._session is None:
            return NavigationResult(NavigationStatus.INACTIVE_SESSION)
        return self._session.goto_change(direction)

    def merge(self, direction: MergeDirection) -> MergeResult:
        """Merge the change under the caret in *direction*."""
        if self._session is None:
            return MergeResult(MergeStatus.INACTIVE_SESSION, direction)
        return self._session.merge(direction)
