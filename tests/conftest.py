"""Shared test fixtures for the filediff test suite."""

from __future__ import annotations

from typing import Any

import pytest

from filediff.config import FileDiffConfig
from filediff.document import TextDocument


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []
        self.gauges: list[dict[str, Any]] = []

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.gauges.append({"name": name, "value": value, "tags": tags})

    def names(self) -> set[str]:
        return {
            call["name"]
            for calls in (self.increments, self.timings, self.gauges)
            for call in calls
        }


@pytest.fixture
def config() -> FileDiffConfig:
    """Default engine configuration."""
    return FileDiffConfig()


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()


@pytest.fixture
def metrics_config(metrics: RecordingMetricsHook) -> FileDiffConfig:
    """Configuration wired to a recording metrics hook."""
    return FileDiffConfig(metrics=metrics)


@pytest.fixture
def modified_pair() -> tuple[TextDocument, TextDocument]:
    """One line changed in place."""
    return TextDocument("foo\nbar\nbaz\n", "a.txt"), TextDocument("foo\nBAR\nbaz\n", "b.txt")


@pytest.fixture
def deleted_pair() -> tuple[TextDocument, TextDocument]:
    """The left document has one line the right one lacks."""
    return TextDocument("a\nb\nc\n", "a.txt"), TextDocument("a\nc\n", "b.txt")


@pytest.fixture
def added_pair() -> tuple[TextDocument, TextDocument]:
    """The right document has two lines the left one lacks."""
    return TextDocument("x\n", "a.txt"), TextDocument("x\ny\nz\n", "b.txt")
