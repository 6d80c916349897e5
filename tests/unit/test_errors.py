"""Tests for the error hierarchy (errors.py)."""

from __future__ import annotations

import pytest

from filediff.errors import (
    ErrorCode,
    FileDiffDocumentRangeError,
    FileDiffError,
    FileDiffMalformedScriptError,
    FileDiffSessionError,
    FileDiffStaleBlockError,
)

SUBCLASSES = [
    (FileDiffMalformedScriptError, ErrorCode.MALFORMED_DIFF_SCRIPT),
    (FileDiffStaleBlockError, ErrorCode.STALE_BLOCK),
    (FileDiffDocumentRangeError, ErrorCode.DOCUMENT_RANGE),
    (FileDiffSessionError, ErrorCode.SESSION_ERROR),
]


class TestErrorHierarchy:
    @pytest.mark.parametrize(("cls", "code"), SUBCLASSES)
    def test_code_and_base(self, cls, code):
        err = cls("boom")
        assert isinstance(err, FileDiffError)
        assert err.code == code
        assert err.message == "boom"
        assert err.context == {}
        assert str(err) == "boom"

    def test_cause_is_chained(self):
        cause = KeyError("x")
        err = FileDiffSessionError("wrapped", cause=cause)
        assert err.cause is cause
        assert err.__cause__ is cause

    def test_repr_includes_context(self):
        err = FileDiffStaleBlockError("old", context={"block_generation": 1})
        text = repr(err)
        assert text.startswith("FileDiffStaleBlockError(")
        assert "'block_generation': 1" in text

    def test_repr_without_context(self):
        assert "context" not in repr(FileDiffError("CUSTOM", "msg"))

    def test_error_code_is_str(self):
        assert ErrorCode.STALE_BLOCK == "STALE_BLOCK"
