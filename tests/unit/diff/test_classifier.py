"""Tests for the line classifier (diff/classifier.py).

Hand-built scripts pin down each classification rule independently of the
diff primitive; the end-to-end cases go through ``compute_diff``.
"""

from __future__ import annotations

import json

import pytest

from filediff.config import FileDiffConfig
from filediff.diff.classifier import LineClassifier
from filediff.diff.engine import compute_diff
from filediff.document import TextDocument
from filediff.errors import FileDiffMalformedScriptError
from filediff.models import (
    ChangeBlock,
    ChangeKind,
    DiffOp,
    DiffOpKind,
    HighlightKind,
    InlineHighlight,
    Padding,
    Side,
)

EQ, DEL, INS = DiffOpKind.EQUAL, DiffOpKind.DELETE, DiffOpKind.INSERT
ADD, REM, MOD = ChangeKind.ADDITION, ChangeKind.DELETION, ChangeKind.MODIFICATION


def classify(a, b, script=None, generation=0, config=None):
    doc_a, doc_b = TextDocument(a, "a"), TextDocument(b, "b")
    if script is None:
        script = compute_diff(a, b)
    else:
        script = [DiffOp(kind, text) for kind, text in script]
    return LineClassifier(config).classify(script, doc_a, doc_b, generation)


def tag_map(result, side):
    return dict(result.tags_for(side).items())


class TestWholeLineChanges:
    def test_deleted_line(self):
        result = classify("a\nb\nc\n", "a\nc\n")
        assert tag_map(result, Side.LEFT) == {2: REM}
        assert tag_map(result, Side.RIGHT) == {}
        assert result.paddings == [Padding(Side.RIGHT, 1, 1)]
        assert result.highlights == []

    def test_deleted_line_padding_shows_before_following_line(self):
        result = classify("a\nb\nc\n", "a\nc\n")
        assert result.paddings_for(Side.RIGHT)[0].before_line == 2

    def test_added_lines(self):
        result = classify("x\n", "x\ny\nz\n")
        assert tag_map(result, Side.RIGHT) == {2: ADD, 3: ADD}
        assert tag_map(result, Side.LEFT) == {}
        assert result.paddings == [Padding(Side.LEFT, 1, 2)]

    def test_added_first_line_pads_above_first_line(self):
        result = classify("b\n", "a\nb\n", [(INS, "a\n"), (EQ, "b\n")])
        assert tag_map(result, Side.RIGHT) == {1: ADD}
        assert result.paddings == [Padding(Side.LEFT, 0, 1)]

    def test_deleted_blank_line(self):
        result = classify("a\n\nb\n", "a\nb\n")
        assert tag_map(result, Side.LEFT) == {2: REM}
        assert result.paddings == [Padding(Side.RIGHT, 1, 1)]

    def test_deleted_unterminated_last_line(self):
        # "\nb" runs from the end of line 1 to the end of line 2.
        result = classify("a\nb", "a", [(EQ, "a"), (DEL, "\nb")])
        assert tag_map(result, Side.LEFT) == {2: REM}
        assert result.paddings == [Padding(Side.RIGHT, 1, 1)]

    def test_added_unterminated_last_line(self):
        result = classify("a", "a\nb", [(EQ, "a"), (INS, "\nb")])
        assert tag_map(result, Side.RIGHT) == {2: ADD}
        assert result.paddings == [Padding(Side.LEFT, 1, 1)]


class TestModifications:
    def test_in_line_pair(self):
        result = classify("foo\nbar\nbaz\n", "foo\nBAR\nbaz\n")
        assert tag_map(result, Side.LEFT) == {2: MOD}
        assert tag_map(result, Side.RIGHT) == {2: MOD}
        assert result.highlights == [
            InlineHighlight(Side.LEFT, 4, 7, HighlightKind.DELETION),
            InlineHighlight(Side.RIGHT, 4, 7, HighlightKind.ADDITION),
        ]
        assert result.paddings == []

    def test_pair_pads_shorter_side(self):
        result = classify(
            "a\nb\nc\n", "a\nX\nY\nc\n", [(EQ, "a\n"), (DEL, "b"), (INS, "X\nY"), (EQ, "\nc\n")],
        )
        assert tag_map(result, Side.LEFT) == {2: MOD}
        assert tag_map(result, Side.RIGHT) == {2: MOD, 3: MOD}
        assert result.paddings == [Padding(Side.LEFT, 2, 1)]

    def test_pair_pads_right_when_left_is_longer(self):
        result = classify(
            "a\nX\nY\nc\n", "a\nb\nc\n", [(EQ, "a\n"), (DEL, "X\nY"), (INS, "b"), (EQ, "\nc\n")],
        )
        assert tag_map(result, Side.LEFT) == {2: MOD, 3: MOD}
        assert tag_map(result, Side.RIGHT) == {2: MOD}
        assert result.paddings == [Padding(Side.RIGHT, 2, 1)]

    def test_unpaired_insertion_inside_line(self):
        result = classify("ab\n", "aXb\n", [(EQ, "a"), (INS, "X"), (EQ, "b\n")])
        assert tag_map(result, Side.RIGHT) == {1: MOD}
        assert tag_map(result, Side.LEFT) == {1: MOD}
        assert result.highlights == [InlineHighlight(Side.RIGHT, 1, 2, HighlightKind.ADDITION)]
        assert result.paddings == []

    def test_unpaired_partial_change_pads_surplus_lines(self):
        result = classify("ab\n", "aX\nYb\n", [(EQ, "a"), (INS, "X\nY"), (EQ, "b\n")])
        assert tag_map(result, Side.RIGHT) == {1: MOD, 2: MOD}
        assert tag_map(result, Side.LEFT) == {1: MOD}
        assert result.paddings == [Padding(Side.LEFT, 1, 1)]

    def test_modification_wins_over_whole_line_tag(self):
        # The in-line deletion on line 1 of the left document tags the
        # right document's line 2, which the insertion tagged as added.
        result = classify(
            "ab\n", "a\nX\n", [(EQ, "a"), (INS, "\nX"), (DEL, "b"), (EQ, "\n")],
        )
        assert tag_map(result, Side.RIGHT) == {2: MOD}
        assert tag_map(result, Side.LEFT) == {1: MOD}
        assert result.paddings == [Padding(Side.LEFT, 1, 1)]


class TestClassificationResult:
    def test_blocks_carry_generation(self):
        result = classify("a\nb\nc\nd\ne\n", "a\nB\nc\nd\nE\n", generation=7)
        assert result.generation == 7
        assert result.blocks == [
            ChangeBlock(Side.LEFT, 2, 2, MOD, 7),
            ChangeBlock(Side.LEFT, 5, 5, MOD, 7),
            ChangeBlock(Side.RIGHT, 2, 2, MOD, 7),
            ChangeBlock(Side.RIGHT, 5, 5, MOD, 7),
        ]
        assert result.has_differences

    def test_identical_documents(self):
        result = classify("same\ntext\n", "same\ntext\n")
        assert not result.has_differences
        assert result.paddings == []
        assert result.highlights == []

    def test_empty_ops_are_ignored(self):
        script = [(EQ, "a\n"), (DEL, "b\n"), (EQ, ""), (INS, ""), (EQ, "c\n")]
        assert classify("a\nb\nc\n", "a\nc\n", script).tags == classify("a\nb\nc\n", "a\nc\n").tags

    def test_malformed_script_raises(self):
        with pytest.raises(FileDiffMalformedScriptError):
            classify("a\n", "b\n", [(EQ, "a\n")])

    def test_emits_metrics(self, metrics, metrics_config):
        classify("a\nb\nc\n", "a\nc\n", config=metrics_config)
        assert "filediff.classify_duration_ms" in metrics.names()
        gauges = {(g["name"], g["tags"]["side"]): g["value"] for g in metrics.gauges}
        assert gauges[("filediff.change_blocks_total", "left")] == 1
        assert gauges[("filediff.padding_rows_total", "right")] == 1

    def test_debug_dump(self, capsys):
        classify("a\nb\nc\n", "a\nc\n", config=FileDiffConfig(debug_dump_classification=True))
        err = capsys.readouterr().err
        assert err.startswith("[filediff] Classification:")
        payload = json.loads(err.split(":", 1)[1])
        assert payload["blocks"] == [["left", "deletion", 2, 2]]
        assert payload["paddings"] == [["right", 1, 1]]


class TestApply:
    def test_writes_overlays(self):
        doc_a, doc_b = TextDocument("foo\nbar\n"), TextDocument("foo\nBAR\nbaz\n")
        classifier = LineClassifier()
        result = classifier.classify(compute_diff(doc_a.text(), doc_b.text()), doc_a, doc_b)
        classifier.apply(result, doc_a, doc_b)
        assert doc_a.markers() == dict(result.tags_for(Side.LEFT).items())
        assert doc_b.markers() == dict(result.tags_for(Side.RIGHT).items())
        assert len(doc_a.highlights()) == len(result.highlights_for(Side.LEFT))
        assert doc_a.paddings() == {p.line: p.rows for p in result.paddings_for(Side.LEFT)}

    def test_replaces_previous_overlays(self):
        doc_a, doc_b = TextDocument("a\nb\n"), TextDocument("a\nb\n")
        doc_a.marker_add(1, MOD)
        doc_a.highlight_add(0, 1, HighlightKind.DELETION)
        doc_b.set_padding(2, 4)
        classifier = LineClassifier()
        result = classifier.classify(compute_diff(doc_a.text(), doc_b.text()), doc_a, doc_b)
        classifier.apply(result, doc_a, doc_b)
        assert doc_a.markers() == {}
        assert doc_a.highlights() == []
        assert doc_b.paddings() == {}
