"""Metrics hook protocol and no-op default implementation.

The comparison engine reports how long diffs and classifications take, how
many change blocks and padding rows they produce, and how often users
navigate and merge.  Without a configured hook a :class:`NoopMetricsHook`
swallows everything.

Emitted metric names:

* ``filediff.diff_duration_ms``          -- timing
* ``filediff.diff_ops_total``            -- counter (tag ``kind``)
* ``filediff.classify_duration_ms``      -- timing
* ``filediff.change_blocks_total``       -- gauge (tag ``side``)
* ``filediff.padding_rows_total``        -- gauge (tag ``side``)
* ``filediff.classify_failures_total``   -- counter
* ``filediff.navigations_total``         -- counter (tag ``status``)
* ``filediff.merges_total``              -- counter (tags ``kind``, ``direction``)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* are string key/value pairs; backends map them onto their own
    labelling scheme.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Metrics implementation that discards every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass


def resolve_metrics(metrics: MetricsHook | None) -> MetricsHook:
    """Return *metrics*, or a :class:`NoopMetricsHook` when it is ``None``."""
    return metrics if metrics is not None else NoopMetricsHook()
