"""Diff session: one pair of documents under comparison.

A :class:`DiffSession` owns the derived comparison state for two documents:
the current classification, the row maps built from its padding, the
classification generation and the document holding the focus.  The state
is never updated incrementally.  Every relevant mutation recomputes the
diff, reclassifies both documents and replaces their overlays.

Sessions are created and torn down by :class:`~filediff.client.FileDiff`,
which keeps at most one of them active.
"""

from __future__ import annotations

from collections.abc import Callable

from filediff.config import FileDiffConfig
from filediff.diff.classifier import LineClassifier
from filediff.diff.engine import compute_diff
from filediff.diff.merger import MergeExecutor
from filediff.diff.navigator import ChangeNavigator, row_maps
from filediff.diff.rows import RowMap, synchronized_line
from filediff.document import Document
from filediff.errors import FileDiffMalformedScriptError, FileDiffSessionError
from filediff.models import (
    ChangeBlock,
    ClassificationResult,
    Direction,
    DiffScript,
    MergeDirection,
    MergeResult,
    MergeStatus,
    NavigationResult,
    NavigationStatus,
    Side,
)
from filediff.observability import get_logger, resolve_metrics

log = get_logger("filediff.session")

Differ = Callable[[str, str, FileDiffConfig], DiffScript]


class DiffSession:
    """Comparison state for one pair of documents.

    Parameters
    ----------
    doc_a:
        The left document.
    doc_b:
        The right document.
    config:
        Engine configuration.
    differ:
        Diff primitive; defaults to :func:`~filediff.diff.engine.compute_diff`.

    Raises
    ------
    FileDiffSessionError
        If both sides are the same document.
    """

    def __init__(
        self,
        doc_a: Document,
        doc_b: Document,
        config: FileDiffConfig | None = None,
        differ: Differ | None = None,
    ) -> None:
        if doc_a is doc_b:
            raise FileDiffSessionError(
                "Cannot compare a document with itself",
                context={"document": doc_a.name},
            )
        self._config = config or FileDiffConfig()
        self._metrics = resolve_metrics(self._config.metrics)
        self._differ: Differ = differ or compute_diff
        self._docs: dict[Side, Document] = {Side.LEFT: doc_a, Side.RIGHT: doc_b}
        self._classifier = LineClassifier(self._config)
        self._navigator = ChangeNavigator(self._config)
        self._merger = MergeExecutor(self._config)
        self._result: ClassificationResult | None = None
        self._maps: dict[Side, RowMap] | None = None
        self._generation = 0
        self._merging = False
        self._stale = False
        self._active = True
        self.focus = Side.LEFT
        for doc in self._docs.values():
            doc.add_listener(self.on_document_changed)

    def __repr__(self) -> str:
        return (
            f"DiffSession(left={self.doc_a.name!r}, right={self.doc_b.name!r}, "
            f"active={self._active}, generation={self._generation})"
        )

    # ── Accessors ───────────────────────────────────────────────────────

    @property
    def doc_a(self) -> Document:
        return self._docs[Side.LEFT]

    @property
    def doc_b(self) -> Document:
        return self._docs[Side.RIGHT]

    @property
    def config(self) -> FileDiffConfig:
        return self._config

    @property
    def active(self) -> bool:
        return self._active

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def stale(self) -> bool:
        """Whether the documents changed since the last successful
        classification."""
        return self._stale

    @property
    def result(self) -> ClassificationResult | None:
        """The latest successful classification."""
        return self._result

    @property
    def blocks(self) -> list[ChangeBlock]:
        return list(self._result.blocks) if self._result is not None else []

    def document(self, side: Side) -> Document:
        return self._docs[side]

    def side_of(self, doc: Document) -> Side | None:
        for side, candidate in self._docs.items():
            if candidate is doc:
                return side
        return None

    def row_map(self, side: Side) -> RowMap:
        self._ensure_classified()
        if self._maps is None:
            return RowMap(self._docs[side].line_count())
        return self._maps[side]

    # ── Classification ──────────────────────────────────────────────────

    def refresh(self) -> ClassificationResult | None:
        """Recompute the diff and reclassify both documents.

        Returns
        -------
        ClassificationResult | None
            The new classification, or ``None`` if the session is closed or
            the diff script was malformed.  In the latter case the previous
            classification and overlays stay in place.
        """
        if not self._active:
            return None
        doc_a, doc_b = self.doc_a, self.doc_b
        script = self._differ(doc_a.text(), doc_b.text(), self._config)
        try:
            result = self._classifier.classify(script, doc_a, doc_b, self._generation + 1)
        except FileDiffMalformedScriptError as exc:
            self._metrics.increment("filediff.classify_failures_total")
            log.warning(
                "Classification aborted: malformed diff script",
                extra={
                    "extra_fields": {
                        "op": "refresh",
                        "left": doc_a.name,
                        "right": doc_b.name,
                        "error": exc.message,
                        **exc.context,
                    }
                },
            )
            return None

        self._classifier.apply(result, doc_a, doc_b)
        self._generation = result.generation
        self._stale = False
        self._result = result
        self._maps = row_maps(
            result, {side: doc.line_count() for side, doc in self._docs.items()},
        )
        log.debug(
            "classification applied",
            extra={
                "extra_fields": {
                    "op": "refresh",
                    "generation": result.generation,
                    "blocks": len(result.blocks),
                    "padding_rows": sum(p.rows for p in result.paddings),
                }
            },
        )
        return result

    def on_document_changed(self, doc: Document) -> None:
        """Reclassify after *doc* changed.

        Changes made by a merge in progress are ignored; the merge
        reclassifies once it has finished.
        """
        if not self._active or self._merging or self.side_of(doc) is None:
            return
        self._stale = True
        self.refresh()

    def _ensure_classified(self) -> ClassificationResult | None:
        if self._result is None or self._stale:
            self.refresh()
        return self._result

    def _current(self, op: str) -> ClassificationResult | None:
        """The classification if it still describes the documents."""
        result = self._ensure_classified()
        if self._stale:
            log.warning(
                "Documents changed since the last classification",
                extra={"extra_fields": {"op": op, "generation": self._generation}},
            )
            return None
        return result

    # ── Synchronization ─────────────────────────────────────────────────

    def synchronized_line(self, side: Side, line: int) -> int:
        """Line of the other document shown on the same row as *line*."""
        return synchronized_line(self.row_map(side), self.row_map(side.other), line)

    def synchronize(self, side: Side | None = None) -> int:
        """Move the other document's caret level with *side*'s caret.

        Returns the other document's new caret line.
        """
        side = side or self.focus
        line = self.synchronized_line(side, self._docs[side].caret_line)
        self._docs[side.other].goto_line(line)
        return line

    # ── Navigation ──────────────────────────────────────────────────────

    def goto_change(self, direction: Direction, side: Side | None = None) -> NavigationResult:
        """Move both carets to the next change in *direction*.

        Nothing moves while the documents have changed since the last
        successful classification and reclassifying them still fails.

        Parameters
        ----------
        direction:
            ``FORWARD`` or ``BACKWARD``.
        side:
            Document holding the caret; defaults to the focused one.
        """
        if not self._active:
            return NavigationResult(NavigationStatus.INACTIVE_SESSION)
        result = self._current("goto_change")
        if result is None:
            return NavigationResult(NavigationStatus.NO_MORE_DIFFERENCES)
        side = side or self.focus
        self.focus = side
        nav = self._navigator.next_change(
            result, self._maps, side, self._docs[side].caret_line, direction,
        )
        if nav.moved:
            self.doc_a.goto_line(nav.line_a)
            self.doc_b.goto_line(nav.line_b)
        else:
            log.info(
                "No more differences",
                extra={"extra_fields": {"op": "goto_change", "direction": direction.value}},
            )
        return nav

    # ── Merging ─────────────────────────────────────────────────────────

    def merge(
        self,
        direction: MergeDirection,
        side: Side | None = None,
        line: int | None = None,
    ) -> MergeResult:
        """Merge the change under the caret in *direction*.

        The documents are mutated first and reclassified exactly once
        afterwards.  Nothing is merged while the documents have changed
        since the last successful classification and reclassifying them
        still fails.

        Parameters
        ----------
        direction:
            ``LEFT_TO_RIGHT`` or ``RIGHT_TO_LEFT``.
        side:
            Document holding the caret; defaults to the focused one.
        line:
            Line to merge at; defaults to that document's caret line.
        """
        if not self._active:
            return MergeResult(MergeStatus.INACTIVE_SESSION, direction)
        result = self._current("merge")
        if result is None:
            return MergeResult(MergeStatus.NOTHING_TO_MERGE, direction)
        side = side or self.focus
        line = line if line is not None else self._docs[side].caret_line

        block = self._merger.block_under(result, self._maps, side, line)
        if block is None:
            return MergeResult(MergeStatus.NOTHING_TO_MERGE, direction)

        self._merging = True
        try:
            merged = self._merger.merge(block, direction, self._docs, result, self._maps)
        finally:
            self._merging = False
            self._stale = True
        self.refresh()
        return merged

    # ── Teardown ────────────────────────────────────────────────────────

    def close(self) -> None:
        """End the session and clear every overlay from both documents."""
        if not self._active:
            return
        self._active = False
        for doc in self._docs.values():
            doc.remove_listener(self.on_document_changed)
            LineClassifier.clear(doc)
        self._result = None
        self._maps = None
        log.debug(
            "session closed",
            extra={"extra_fields": {"op": "close", "left": self.doc_a.name, "right": self.doc_b.name}},
        )
