"""Change navigator: find the next or previous change block.

Both documents are scanned independently, starting from the caret line in
the caret's document and from the line on the same visual row in the other
document.  A scan skips the interior of the block it starts in and stops on
the first line of the next distinct block in scan direction.  When both
scans hit, the boundary closer to the caret (after translating it into the
caret's document) wins: a change can exist in one document only, such as
an addition that logically comes before a modification further down.
Only hits that land strictly past the caret line count, so repeated
steps always make progress until the wrap-around.
"""

from __future__ import annotations

from collections.abc import Callable

from filediff.config import FileDiffConfig
from filediff.models import (
    ClassificationResult,
    Direction,
    NavigationResult,
    NavigationStatus,
    Side,
)
from filediff.observability import get_logger, resolve_metrics

from .lines import LineTags
from .rows import RowMap, synchronized_line

log = get_logger("filediff.navigator")


def row_maps(result: ClassificationResult, line_counts: dict[Side, int]) -> dict[Side, RowMap]:
    """Build the row map of each document from *result*'s padding."""
    return {
        side: RowMap.from_paddings(line_counts[side], result.paddings_for(side))
        for side in Side
    }


def scan(tags: LineTags, line: int, direction: Direction) -> int | None:
    """Return the first line at or beyond *line* (in *direction*) that starts
    a new block, or ``None`` if there is none."""
    step = direction.step
    find = tags.next_tagged if direction is Direction.FORWARD else tags.previous_tagged
    found = find(line)
    while found is not None and tags.kind_at(found) is tags.kind_at(found - step):
        found = find(found + step)
    return found


def scan_beyond(
    tags: LineTags,
    line: int,
    direction: Direction,
    current_line: int,
    translate: Callable[[int], int] | None = None,
) -> int | None:
    """Like :func:`scan`, but skip blocks that do not lie strictly past
    *current_line* once translated into the caret's document."""
    found = scan(tags, line, direction)
    while found is not None:
        where = translate(found) if translate is not None else found
        if (where - current_line) * direction.step > 0:
            return found
        found = scan(tags, found + direction.step, direction)
    return None


class ChangeNavigator:
    """Locates change blocks relative to a caret line.

    Parameters
    ----------
    config:
        Engine configuration (wrap-around, metrics hook).
    """

    def __init__(self, config: FileDiffConfig | None = None) -> None:
        self._config = config or FileDiffConfig()
        self._metrics = resolve_metrics(self._config.metrics)

    def next_change(
        self,
        result: ClassificationResult,
        maps: dict[Side, RowMap],
        side: Side,
        current_line: int,
        direction: Direction,
    ) -> NavigationResult:
        """Find the change after (or before) *current_line* of *side*.

        Parameters
        ----------
        result:
            The current classification.
        maps:
            Row maps of both documents, built from *result*.
        side:
            The document holding the caret.
        current_line:
            The caret line; the search starts one step beyond it.
        direction:
            ``FORWARD`` for the next change, ``BACKWARD`` for the previous.

        Returns
        -------
        NavigationResult
            The synchronized line pair of the change, or
            ``NO_MORE_DIFFERENCES``.
        """
        other = side.other
        here_tags = result.tags_for(side)
        there_tags = result.tags_for(other)

        def translate(line: int) -> int:
            return synchronized_line(maps[other], maps[side], line)

        here_start = max(current_line + direction.step, 1)
        there_start = synchronized_line(maps[side], maps[other], here_start)

        # A line of the other document can sit on a padding row whose anchor
        # is at or behind the caret; such hits are not past the caret.
        here = scan_beyond(here_tags, here_start, direction, current_line)
        there = scan_beyond(there_tags, there_start, direction, current_line, translate)

        wrapped = False
        if here is None and there is None and self._config.wrap_navigation:
            # Wrap around.  The boundary line is taken as-is, without
            # skipping the interior of the block it lands in.
            wrapped = True
            if direction is Direction.FORWARD:
                here = here_tags.next_tagged(1)
                there = there_tags.next_tagged(1)
            else:
                here = here_tags.previous_tagged(here_tags.line_count)
                there = there_tags.previous_tagged(there_tags.line_count)

        if here is None and there is None:
            self._metrics.increment(
                "filediff.navigations_total",
                tags={"status": NavigationStatus.NO_MORE_DIFFERENCES.value},
            )
            return NavigationResult(NavigationStatus.NO_MORE_DIFFERENCES)

        candidates = [line for line in (here, there and translate(there)) if line is not None]
        target = min(candidates) if direction is Direction.FORWARD else max(candidates)

        other_line = synchronized_line(maps[side], maps[other], target)
        line_a, line_b = (target, other_line) if side is Side.LEFT else (other_line, target)

        self._metrics.increment(
            "filediff.navigations_total", tags={"status": NavigationStatus.MOVED.value},
        )
        log.debug(
            "moved to change",
            extra={
                "extra_fields": {
                    "op": "next_change",
                    "side": side.value,
                    "direction": direction.value,
                    "line_a": line_a,
                    "line_b": line_b,
                    "wrapped": wrapped,
                }
            },
        )
        return NavigationResult(NavigationStatus.MOVED, line_a, line_b, wrapped)
