"""Line classifier: tag changed lines, inline spans and alignment padding.

Walks a diff script against absolute offsets in both documents.  Deletions
are classified in the left document and insertions in the right one:

- A change that covers whole lines and has no counterpart on the other side
  tags those lines ``DELETION`` (left) or ``ADDITION`` (right) and pads the
  other document with as many blank rows.
- Anything else tags the touched lines ``MODIFICATION``, records an inline
  highlight over the exact span and tags the line at the same position in
  the other document ``MODIFICATION`` too.
- A delete immediately followed by an insert is one modification; the side
  spanning fewer physical lines is padded by the difference.

:meth:`LineClassifier.classify` is a pure computation over the documents'
current text.  :meth:`LineClassifier.apply` writes the result onto the
documents as markers, highlights and padding annotations.
"""

from __future__ import annotations

import json
import sys
import time
from dataclasses import dataclass

from filediff.config import FileDiffConfig
from filediff.document import Document
from filediff.models import (
    ChangeKind,
    ClassificationResult,
    DiffOpKind,
    DiffScript,
    HighlightKind,
    InlineHighlight,
    Side,
)
from filediff.observability import get_logger, resolve_metrics

from .engine import validate_script
from .lines import LineTags
from .padding import PaddingLedger, count_lines

log = get_logger("filediff.classifier")


@dataclass
class _Track:
    """One document's view of the walk."""

    side: Side
    doc: Document
    tags: LineTags
    whole_line_kind: ChangeKind
    highlight_kind: HighlightKind


class LineClassifier:
    """Classifies the lines of two documents from a diff script.

    Parameters
    ----------
    config:
        Engine configuration (metrics hook, debug flags).
    """

    def __init__(self, config: FileDiffConfig | None = None) -> None:
        self._config = config or FileDiffConfig()
        self._metrics = resolve_metrics(self._config.metrics)

    def classify(
        self,
        script: DiffScript,
        doc_a: Document,
        doc_b: Document,
        generation: int = 0,
    ) -> ClassificationResult:
        """Classify both documents against *script*.

        Zero-length operations are ignored entirely: they neither advance
        the walk nor pair with their neighbours.

        Parameters
        ----------
        script:
            Diff script from the left document's text to the right one's.
        doc_a:
            The left document.
        doc_b:
            The right document.
        generation:
            Pass number stamped on every produced :class:`ChangeBlock`.

        Returns
        -------
        ClassificationResult

        Raises
        ------
        FileDiffMalformedScriptError
            If *script* does not reconstruct the documents' current text.
            Nothing is classified in that case.
        """
        ops = [op for op in script if op.text]
        validate_script(ops, doc_a.text(), doc_b.text())

        started = time.perf_counter()
        left = _Track(
            Side.LEFT,
            doc_a,
            LineTags(Side.LEFT, doc_a.line_count()),
            ChangeKind.DELETION,
            HighlightKind.DELETION,
        )
        right = _Track(
            Side.RIGHT,
            doc_b,
            LineTags(Side.RIGHT, doc_b.line_count()),
            ChangeKind.ADDITION,
            HighlightKind.ADDITION,
        )
        highlights: list[InlineHighlight] = []
        ledger = PaddingLedger()

        pos_a = pos_b = 0
        for i, op in enumerate(ops):
            if op.kind is DiffOpKind.DELETE:
                nxt = ops[i + 1] if i + 1 < len(ops) else None
                paired = nxt.text if nxt is not None and nxt.kind is DiffOpKind.INSERT else None
                _classify_change(op.text, left, right, pos_a, pos_b, paired, ledger, highlights)
                pos_a += len(op.text)
            elif op.kind is DiffOpKind.INSERT:
                prev = ops[i - 1] if i > 0 else None
                paired = prev.text if prev is not None and prev.kind is DiffOpKind.DELETE else None
                _classify_change(op.text, right, left, pos_b, pos_a, paired, ledger, highlights)
                pos_b += len(op.text)
            else:
                pos_a += len(op.text)
                pos_b += len(op.text)

        result = ClassificationResult(
            generation=generation,
            tags={Side.LEFT: left.tags, Side.RIGHT: right.tags},
            highlights=highlights,
            paddings=ledger.paddings(),
            blocks=left.tags.blocks(generation) + right.tags.blocks(generation),
        )

        self._metrics.timing(
            "filediff.classify_duration_ms", (time.perf_counter() - started) * 1000.0,
        )
        for side in Side:
            self._metrics.gauge(
                "filediff.change_blocks_total",
                len(result.blocks_for(side)),
                tags={"side": side.value},
            )
            self._metrics.gauge(
                "filediff.padding_rows_total", ledger.total(side), tags={"side": side.value},
            )
        log.debug(
            "classified documents",
            extra={
                "extra_fields": {
                    "op": "classify",
                    "generation": generation,
                    "ops": len(ops),
                    "blocks": len(result.blocks),
                    "paddings": len(result.paddings),
                }
            },
        )
        if self._config.debug_dump_classification:
            _dump_classification(result)

        return result

    def apply(self, result: ClassificationResult, doc_a: Document, doc_b: Document) -> None:
        """Replace the overlays of both documents with *result*."""
        for side, doc in ((Side.LEFT, doc_a), (Side.RIGHT, doc_b)):
            self.clear(doc)
            for line, kind in result.tags_for(side).items():
                doc.marker_add(line, kind)
            for span in result.highlights_for(side):
                doc.highlight_add(span.start, span.end, span.kind)
            for padding in result.paddings_for(side):
                doc.set_padding(padding.line, padding.rows)

    @staticmethod
    def clear(doc: Document) -> None:
        """Remove every classification-derived overlay from *doc*."""
        doc.marker_clear_all()
        doc.highlight_clear_all()
        doc.padding_clear_all()


def _classify_change(
    text: str,
    this: _Track,
    other: _Track,
    pos: int,
    other_pos: int,
    paired: str | None,
    ledger: PaddingLedger,
    highlights: list[InlineHighlight],
) -> None:
    """Classify one delete (left) or insert (right) operation.

    *paired* is the text of the adjacent opposite operation when the two
    form a modification pair.
    """
    doc = this.doc
    end = pos + len(text)
    start_line = doc.line_from_position(pos)
    end_line = doc.line_from_position(end)
    kind = ChangeKind.MODIFICATION
    # Padding for a whole-line change goes below the line preceding the
    # change in the other document when the change starts at a line start.
    offset = 0

    if paired is None:
        if pos == doc.position_from_line(start_line) and end == doc.position_from_line(end_line):
            kind = this.whole_line_kind
            end_line -= 1
            offset = 1
        elif pos == doc.line_end_position(start_line) and end == doc.line_end_position(end_line):
            kind = this.whole_line_kind
            start_line += 1

    this.tags.tag_range(start_line, end_line, kind)

    if kind is ChangeKind.MODIFICATION:
        highlights.append(InlineHighlight(this.side, pos, end, this.highlight_kind))
        other.tags.tag(other.doc.line_from_position(other_pos), ChangeKind.MODIFICATION)

    if paired is not None:
        surplus = count_lines(paired) - count_lines(text)
        if surplus > 0:
            ledger.add(this.side, end_line, surplus)
    elif kind is not ChangeKind.MODIFICATION:
        anchor = other.doc.line_from_position(other_pos) - offset
        ledger.add(other.side, anchor, end_line - start_line + 1)
    else:
        extra = count_lines(text) - 1
        if extra > 0:
            ledger.add(other.side, other.doc.line_from_position(other_pos), extra)


def _dump_classification(result: ClassificationResult) -> None:
    print(
        "[filediff] Classification:",
        json.dumps(
            {
                "generation": result.generation,
                "blocks": [
                    [b.side.value, b.kind.value, b.start_line, b.end_line]
                    for b in result.blocks
                ],
                "paddings": [[p.side.value, p.line, p.rows] for p in result.paddings],
            },
        ),
        file=sys.stderr,
    )
