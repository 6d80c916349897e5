"""Comparison engine: diff, classification, navigation and merging.

Exports
-------
compute_diff
    Compute the character-level diff script between two texts.
LineClassifier
    Tags changed lines, inline spans and alignment padding.
ChangeNavigator
    Finds the next or previous change block relative to a caret.
MergeExecutor
    Copies one change block from one document to the other.
LineTags
    Per-line change tags of one document.
PaddingLedger
    Accumulates padding rows per document and anchor line.
RowMap
    Maps document lines to visual rows and back.
synchronized_line
    Translates a line to the other document's line on the same row.
"""

from .classifier import LineClassifier
from .engine import compute_diff, normalize_script, source_text, target_text, validate_script
from .lines import LineTags
from .merger import MergeExecutor, block_range
from .navigator import ChangeNavigator, row_maps, scan, scan_beyond
from .padding import PaddingLedger, count_lines
from .rows import RowMap, synchronized_line

__all__ = [
    "ChangeNavigator",
    "LineClassifier",
    "LineTags",
    "MergeExecutor",
    "PaddingLedger",
    "RowMap",
    "block_range",
    "compute_diff",
    "count_lines",
    "normalize_script",
    "row_maps",
    "scan",
    "scan_beyond",
    "source_text",
    "synchronized_line",
    "target_text",
    "validate_script",
]
