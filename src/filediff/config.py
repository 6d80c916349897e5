"""Configuration for filediff.

:class:`FileDiffConfig` is a plain dataclass that captures every tuneable
knob of the comparison engine.  Instances are passed to :class:`FileDiff`,
:class:`DiffSession` and the individual engine components.

The module-level :data:`THEME_COLORS` table maps each theme to the colour
names used for additions, deletions and modifications.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

# ---------------------------------------------------------------------------
# Theme constants
# ---------------------------------------------------------------------------

THEME_COLORS: dict[str, dict[str, str]] = {
    "light": {
        "addition": "light_green",
        "deletion": "light_red",
        "modification": "light_yellow",
    },
    "dark": {
        "addition": "dark_green",
        "deletion": "dark_red",
        "modification": "dark_yellow",
    },
}
"""Colour names per theme, keyed by change kind value."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class FileDiffConfig:
    """Complete configuration for a comparison engine.

    Every parameter has a sensible default, so ``FileDiffConfig()`` is a
    valid configuration.

    Parameters
    ----------
    semantic_cleanup:
        Run the diff primitive's semantic cleanup pass, which aligns
        changes to human-readable boundaries (whitespace, line breaks)
        instead of the minimal edit script.
    diff_timeout:
        Seconds the diff primitive may spend before returning a coarser
        script.  ``0`` disables the limit, which keeps the output
        deterministic for identical inputs.
    wrap_navigation:
        When no change exists past the caret, retry once from the opposite
        end of the documents.
    theme:
        Colour theme used by the side-by-side renderer.

        * ``"light"``: light backgrounds.
        * ``"dark"``: dark backgrounds.
    metrics:
        A :class:`~filediff.observability.MetricsHook` implementation.
        ``None`` uses the no-op hook.
    debug_dump_diff:
        Write every diff script to *stderr* before classification.
    debug_dump_classification:
        Write the computed change blocks and padding to *stderr*.
    """

    # ── Diff primitive ──────────────────────────────────────────────────
    semantic_cleanup: bool = True

    diff_timeout: float = 0.0

    # ── Navigation ──────────────────────────────────────────────────────
    wrap_navigation: bool = True

    # ── Display ─────────────────────────────────────────────────────────
    theme: Literal["light", "dark"] = "light"

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_diff: bool = False

    debug_dump_classification: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.diff_timeout < 0:
            raise ValueError(f"diff_timeout must be >= 0, got {self.diff_timeout}")
        if self.theme not in THEME_COLORS:
            raise ValueError(
                f"theme must be one of {sorted(THEME_COLORS)}, got {self.theme!r}"
            )

    @property
    def colors(self) -> dict[str, str]:
        """Colour names for the configured theme."""
        return THEME_COLORS[self.theme]
