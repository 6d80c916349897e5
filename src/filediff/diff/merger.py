"""Merge executor: copy one change block from one document to the other.

The merge direction names the source document: ``LEFT_TO_RIGHT`` copies
from the left document into the right one, ``RIGHT_TO_LEFT`` the reverse.
What gets copied depends on the block's kind:

* ``ADDITION`` (right document only): right-to-left inserts the added lines
  into the left document; left-to-right removes them from the right one.
* ``DELETION`` (left document only): left-to-right inserts the lines into
  the right document; right-to-left removes them from the left one.
* ``MODIFICATION``: the source side's text replaces the target side's text
  over the visually corresponding line range.

The executor only mutates; re-classifying afterwards is the caller's job.
"""

from __future__ import annotations

from filediff.config import FileDiffConfig
from filediff.document import Document
from filediff.errors import FileDiffStaleBlockError
from filediff.models import (
    ChangeBlock,
    ChangeKind,
    ClassificationResult,
    MergeDirection,
    MergeResult,
    MergeStatus,
    Side,
)
from filediff.observability import get_logger, resolve_metrics

from .rows import RowMap, synchronized_line

log = get_logger("filediff.merger")


def block_range(doc: Document, block: ChangeBlock) -> tuple[int, int]:
    """Offsets ``[start, end)`` covering the lines of *block* in *doc*."""
    return doc.position_from_line(block.start_line), doc.position_from_line(block.end_line + 1)


def _is_unterminated_tail(doc: Document, block: ChangeBlock) -> bool:
    """Whether *block* ends on a last line that has no trailing newline."""
    return (
        block.start_line > 1
        and block.end_line >= doc.line_count()
        and not doc.text().endswith("\n")
    )


class MergeExecutor:
    """Applies a single change block to the other document.

    Parameters
    ----------
    config:
        Engine configuration (metrics hook).
    """

    def __init__(self, config: FileDiffConfig | None = None) -> None:
        self._config = config or FileDiffConfig()
        self._metrics = resolve_metrics(self._config.metrics)

    def block_under(
        self,
        result: ClassificationResult,
        maps: dict[Side, RowMap],
        side: Side,
        line: int,
    ) -> ChangeBlock | None:
        """Resolve the change block a merge at *line* of *side* acts on.

        An untagged line may sit on the row just above an addition or
        deletion that exists only in the other document; the line one row
        below its translation is tried there.
        """
        block = result.tags_for(side).block_at(line, result.generation)
        if block is not None:
            return block
        other = side.other
        below = synchronized_line(maps[side], maps[other], line) + 1
        return result.tags_for(other).block_at(below, result.generation)

    def merge(
        self,
        block: ChangeBlock,
        direction: MergeDirection,
        docs: dict[Side, Document],
        result: ClassificationResult,
        maps: dict[Side, RowMap],
    ) -> MergeResult:
        """Merge *block* in *direction*.

        Parameters
        ----------
        block:
            A block of the current classification.
        direction:
            Which document is the source.
        docs:
            Both documents, keyed by side.
        result:
            The classification *block* was taken from.
        maps:
            Row maps of both documents, built from *result*.

        Returns
        -------
        MergeResult

        Raises
        ------
        FileDiffStaleBlockError
            If *block* comes from a different classification pass than
            *result*.
        """
        if block.generation != result.generation:
            raise FileDiffStaleBlockError(
                "Change block belongs to an outdated classification",
                context={
                    "block_generation": block.generation,
                    "current_generation": result.generation,
                },
            )

        here = block.side
        doc = docs[here]
        start, end = block_range(doc, block)

        if block.kind is ChangeKind.MODIFICATION:
            merged = self._merge_modification(block, direction, docs, maps, start, end)
            self._record(block, direction, merged)
            return merged

        # One-sided lines at the very end of an unterminated document take
        # the newline in front of them, so that neither copying nor removing
        # them leaves a dangling empty line.
        tail = _is_unterminated_tail(doc, block)
        if tail:
            start = doc.line_end_position(block.start_line - 1)
        text = doc.text_range(start, end)

        if here is direction.source:
            target = here.other
            line = synchronized_line(maps[here], maps[target], block.end_line + 1)
            if tail:
                pos = docs[target].line_end_position(line - 1) if line > 1 else 0
            else:
                pos = docs[target].position_from_line(line)
            docs[target].insert_text(pos, text)
            merged = MergeResult(
                MergeStatus.MERGED, direction, block, target, pos, pos, text, "",
            )
        else:
            # The block's own document is the target: drop the lines.
            doc.replace_range(start, end, "")
            merged = MergeResult(
                MergeStatus.MERGED, direction, block, here, start, end, "", text,
            )

        self._record(block, direction, merged)
        return merged

    def _record(self, block: ChangeBlock, direction: MergeDirection, merged: MergeResult) -> None:
        self._metrics.increment(
            "filediff.merges_total",
            tags={"kind": block.kind.value, "direction": direction.value},
        )
        log.debug(
            "merged change block",
            extra={
                "extra_fields": {
                    "op": "merge",
                    "kind": block.kind.value,
                    "side": block.side.value,
                    "start_line": block.start_line,
                    "end_line": block.end_line,
                    "direction": direction.value,
                    "target": merged.target_side.value if merged.target_side else None,
                }
            },
        )

    def _merge_modification(
        self,
        block: ChangeBlock,
        direction: MergeDirection,
        docs: dict[Side, Document],
        maps: dict[Side, RowMap],
        start: int,
        end: int,
    ) -> MergeResult:
        here = block.side
        there = here.other
        first = synchronized_line(maps[here], maps[there], block.start_line)
        end_row = maps[here].visible_from_doc_line(block.end_line + 1)
        after = maps[there].doc_line_from_visible(end_row)
        # The end row is a padding row of `after`: that line still belongs
        # to the modified range.
        if maps[there].is_padding_row(end_row):
            after += 1
        other_doc = docs[there]
        other_start = other_doc.position_from_line(first)
        other_end = max(other_doc.position_from_line(after), other_start)

        source, target = direction.source, direction.target
        ranges = {here: (start, end), there: (other_start, other_end)}
        src_start, src_end = ranges[source]
        tgt_start, tgt_end = ranges[target]
        text = docs[source].text_range(src_start, src_end)
        removed = docs[target].text_range(tgt_start, tgt_end)
        docs[target].replace_range(tgt_start, tgt_end, text)
        return MergeResult(
            MergeStatus.MERGED, direction, block, target, tgt_start, tgt_end, text, removed,
        )
