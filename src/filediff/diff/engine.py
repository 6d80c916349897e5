"""Diff engine adapter: turn two strings into a character-level diff script.

Wraps :mod:`diff_match_patch`, the same primitive editors use for live
comparison: ``diff_main`` without the line-mode speed-up, followed by the
semantic cleanup pass so that changes snap to word and line boundaries
instead of the minimal (and visually noisy) edit script.

The returned script is normalised: zero-length operations are dropped and
adjacent operations of the same kind are collapsed.
"""

from __future__ import annotations

import json
import sys
import time
from collections.abc import Iterable

from diff_match_patch import diff_match_patch

from filediff.config import FileDiffConfig
from filediff.errors import FileDiffMalformedScriptError
from filediff.models import DiffOp, DiffOpKind, DiffScript
from filediff.observability import resolve_metrics

_OP_KINDS: dict[int, DiffOpKind] = {
    diff_match_patch.DIFF_DELETE: DiffOpKind.DELETE,
    diff_match_patch.DIFF_INSERT: DiffOpKind.INSERT,
    diff_match_patch.DIFF_EQUAL: DiffOpKind.EQUAL,
}


def compute_diff(
    text_a: str,
    text_b: str,
    config: FileDiffConfig | None = None,
) -> DiffScript:
    """Compute the diff script transforming *text_a* into *text_b*.

    Parameters
    ----------
    text_a:
        Content of the left document.
    text_b:
        Content of the right document.
    config:
        Engine configuration (cleanup toggle, timeout, metrics, debug
        flags).  Defaults to ``FileDiffConfig()``.

    Returns
    -------
    DiffScript
        Normalised operations; delete and equal texts rebuild *text_a*,
        insert and equal texts rebuild *text_b*.
    """
    config = config or FileDiffConfig()
    metrics = resolve_metrics(config.metrics)

    dmp = diff_match_patch()
    dmp.Diff_Timeout = config.diff_timeout

    started = time.perf_counter()
    raw = dmp.diff_main(text_a, text_b, False)
    if config.semantic_cleanup:
        dmp.diff_cleanupSemantic(raw)
    elapsed_ms = (time.perf_counter() - started) * 1000.0

    script = normalize_script(DiffOp(_OP_KINDS[op], text) for op, text in raw)

    metrics.timing("filediff.diff_duration_ms", elapsed_ms)
    for kind in DiffOpKind:
        count = sum(1 for op in script if op.kind is kind)
        if count:
            metrics.increment("filediff.diff_ops_total", count, tags={"kind": kind.value})

    if config.debug_dump_diff:
        print(
            "[filediff] Diff script:",
            json.dumps([[op.kind.value, op.text] for op in script], ensure_ascii=False),
            file=sys.stderr,
        )

    return script


def normalize_script(ops: Iterable[DiffOp]) -> DiffScript:
    """Drop zero-length operations and collapse runs of the same kind.

    Examples
    --------
    >>> normalize_script([DiffOp(DiffOpKind.EQUAL, "a"), DiffOp(DiffOpKind.EQUAL, "b")])
    [DiffOp(kind=<DiffOpKind.EQUAL: 'equal'>, text='ab')]
    """
    script: DiffScript = []
    for op in ops:
        if not op.text:
            continue
        if script and script[-1].kind is op.kind:
            script[-1] = DiffOp(op.kind, script[-1].text + op.text)
        else:
            script.append(op)
    return script


def source_text(script: DiffScript) -> str:
    """Rebuild the left document's text from *script*."""
    return "".join(op.text for op in script if op.kind is not DiffOpKind.INSERT)


def target_text(script: DiffScript) -> str:
    """Rebuild the right document's text from *script*."""
    return "".join(op.text for op in script if op.kind is not DiffOpKind.DELETE)


def validate_script(script: DiffScript, text_a: str, text_b: str) -> None:
    """Check that *script* reconstructs both texts.

    Raises
    ------
    FileDiffMalformedScriptError
        If the delete/equal texts do not rebuild *text_a* or the
        insert/equal texts do not rebuild *text_b*.
    """
    for side, expected, actual in (
        ("left", text_a, source_text(script)),
        ("right", text_b, target_text(script)),
    ):
        if actual != expected:
            raise FileDiffMalformedScriptError(
                f"Diff script does not reconstruct the {side} document",
                context={
                    "side": side,
                    "expected_length": len(expected),
                    "actual_length": len(actual),
                },
            )
