"""Full error hierarchy for filediff.

Every public error class inherits from FileDiffError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Conditions that are reported as statuses rather than raised (an inactive
session, no further differences) have no error class; see
:class:`~filediff.models.NavigationStatus` and
:class:`~filediff.models.MergeStatus`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error filediff can raise."""

    MALFORMED_DIFF_SCRIPT = "MALFORMED_DIFF_SCRIPT"
    STALE_BLOCK = "STALE_BLOCK"
    DOCUMENT_RANGE = "DOCUMENT_RANGE"
    SESSION_ERROR = "SESSION_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class FileDiffError(Exception):
    """Base exception for all filediff errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Classification errors
# ---------------------------------------------------------------------------

class FileDiffMalformedScriptError(FileDiffError):
    """The diff primitive returned a script that does not reconstruct the
    compared texts.

    Raised before any line is classified, so the caller can keep the
    overlays of the previous classification pass.

    Context keys: ``side``, ``expected_length``, ``actual_length``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_DIFF_SCRIPT,
            message=message,
            context=context,
            cause=cause,
        )


class FileDiffStaleBlockError(FileDiffError):
    """A merge addressed a change block computed by an earlier
    classification pass.

    Context keys: ``block_generation``, ``current_generation``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.STALE_BLOCK,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Document / session errors
# ---------------------------------------------------------------------------

class FileDiffDocumentRangeError(FileDiffError):
    """A mutation addressed characters outside the document.

    Context keys: ``document``, ``start``, ``end``, ``length``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DOCUMENT_RANGE,
            message=message,
            context=context,
            cause=cause,
        )


class FileDiffSessionError(FileDiffError):
    """A comparison could not be started with the given documents.

    Context keys: ``document``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.SESSION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
