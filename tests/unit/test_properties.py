"""Property-based tests for filediff using Hypothesis.

These tests check invariants of the diff script, the classification and
merging over a wide range of generated document pairs.  They complement
the example-based unit tests.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from filediff.diff.classifier import LineClassifier
from filediff.diff.engine import compute_diff, source_text, target_text
from filediff.diff.navigator import row_maps
from filediff.document import TextDocument
from filediff.models import ChangeKind, Direction, MergeDirection, MergeStatus, Side
from filediff.session import DiffSession

# ---------------------------------------------------------------------------
# Reusable strategies
# ---------------------------------------------------------------------------

# A small alphabet with plenty of newlines produces many whole-line and
# partial-line changes in short documents.
documents = st.text(alphabet="ab \n", max_size=40)

# Documents made of whole lines drawn from a tiny vocabulary.
line_documents = st.lists(st.sampled_from(["alpha", "beta", "gamma", ""]), max_size=8).map(
    lambda lines: "".join(line + "\n" for line in lines)
)

# Whole lines whose first characters all differ, so an inserted run of them
# always lines up with line boundaries.
merge_lines = st.lists(st.sampled_from(["alpha", "beta", "gamma"]), max_size=4)


def joined(lines):
    return "".join(line + "\n" for line in lines)


def classify(a, b):
    doc_a, doc_b = TextDocument(a), TextDocument(b)
    result = LineClassifier().classify(compute_diff(a, b), doc_a, doc_b)
    return result, doc_a, doc_b


@given(documents, documents)
def test_script_reconstructs_both_documents(a, b):
    script = compute_diff(a, b)
    assert source_text(script) == a
    assert target_text(script) == b
    assert all(op.text for op in script)


@given(documents, documents)
def test_classification_is_deterministic(a, b):
    first, _, _ = classify(a, b)
    second, _, _ = classify(a, b)
    assert first.tags == second.tags
    assert first.paddings == second.paddings
    assert first.highlights == second.highlights


@given(documents, documents)
def test_padding_balances_visual_rows(a, b):
    result, doc_a, doc_b = classify(a, b)
    rows = {
        side: doc.line_count() + sum(p.rows for p in result.paddings_for(side))
        for side, doc in ((Side.LEFT, doc_a), (Side.RIGHT, doc_b))
    }
    assert rows[Side.LEFT] == rows[Side.RIGHT]


@given(documents, documents)
def test_differences_are_reported(a, b):
    result, _, _ = classify(a, b)
    assert result.has_differences == (a != b)


@given(documents, documents)
def test_tags_and_padding_stay_in_range(a, b):
    result, doc_a, doc_b = classify(a, b)
    for side, doc in ((Side.LEFT, doc_a), (Side.RIGHT, doc_b)):
        assert all(1 <= line <= doc.line_count() for line, _ in result.tags_for(side).items())
        assert all(0 <= p.line <= doc.line_count() for p in result.paddings_for(side))
        assert all(b.start_line <= b.end_line for b in result.blocks_for(side))


@given(documents, documents)
def test_row_maps_align_document_ends(a, b):
    result, doc_a, doc_b = classify(a, b)
    maps = row_maps(result, {Side.LEFT: doc_a.line_count(), Side.RIGHT: doc_b.line_count()})
    assert maps[Side.LEFT].total_rows == maps[Side.RIGHT].total_rows


@settings(max_examples=50)
@given(line_documents, line_documents)
def test_highlights_accompany_modifications(a, b):
    result, _, _ = classify(a, b)
    has_modifications = any(block.kind is ChangeKind.MODIFICATION for block in result.blocks)
    assert bool(result.highlights) == has_modifications


@settings(max_examples=50)
@given(documents, documents)
def test_refresh_after_edit_matches_fresh_session(a, b):
    session = DiffSession(TextDocument(a), TextDocument(""))
    session.refresh()
    session.doc_b.set_text(b)
    fresh, _, _ = classify(a, b)
    assert session.result.tags == fresh.tags
    assert session.result.paddings == fresh.paddings


@settings(max_examples=50)
@given(documents, documents)
def test_forward_steps_advance_until_wrap(a, b):
    session = DiffSession(TextDocument(a), TextDocument(b))
    session.refresh()
    visited = []
    for _ in range(session.doc_a.line_count() + 2):
        nav = session.goto_change(Direction.FORWARD, side=Side.LEFT)
        if not nav.moved or nav.wrapped:
            break
        visited.append(nav.line_a)
    else:
        raise AssertionError(f"navigation kept revisiting lines: {visited}")
    assert visited == sorted(set(visited))


@settings(max_examples=50)
@given(
    merge_lines,
    st.lists(st.sampled_from(["alpha", "beta", "gamma"]), min_size=1, max_size=4),
    merge_lines,
    st.booleans(),
)
def test_merging_one_sided_block_makes_documents_equal(prefix, middle, suffix, added):
    short, long = joined(prefix + suffix), joined(prefix + middle + suffix)
    a, b = (short, long) if added else (long, short)
    block_side = Side.RIGHT if added else Side.LEFT
    for direction in MergeDirection:
        session = DiffSession(TextDocument(a), TextDocument(b))
        session.refresh()
        [block] = session.result.blocks_for(block_side)
        merged = session.merge(direction, side=block_side, line=block.start_line)
        assert merged.status is MergeStatus.MERGED
        expected = b if direction is MergeDirection.RIGHT_TO_LEFT else a
        assert session.doc_a.text() == session.doc_b.text() == expected
        assert session.blocks == []
