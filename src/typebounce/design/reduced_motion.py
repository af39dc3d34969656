"""Reduced motion preference for the baseline bounce.

Single source of truth for whether the bounce should be skipped (users who
prefer reduced motion, or constrained environments). When enabled, the
animator snaps the last glyph to its baseline instead of registering a tick.

Patterns:
- Module level state guarded by a plain setter/getter. All access happens on
  the UI thread.
- Environment variable bootstrap: ``TYPEBOUNCE_PREFER_REDUCED_MOTION=1``
  (also "true", "yes", "on") enables reduced motion at import time.

Public API:
- set_reduced_motion(enabled: bool) -> None
- is_reduced_motion() -> bool
- temporarily_reduced_motion(force: bool = True) -> context manager
"""

from __future__ import annotations

import contextlib
import os
from typing import Iterator

__all__ = [
    "set_reduced_motion",
    "is_reduced_motion",
    "temporarily_reduced_motion",
]

ENV_VAR = "TYPEBOUNCE_PREFER_REDUCED_MOTION"

_reduced_motion_enabled: bool = os.getenv(ENV_VAR, "").strip().lower() in {
    "1",
    "true",
    "yes",
    "on",
}


def set_reduced_motion(enabled: bool) -> None:
    global _reduced_motion_enabled
    _reduced_motion_enabled = bool(enabled)


def is_reduced_motion() -> bool:
    return _reduced_motion_enabled


@contextlib.contextmanager
def temporarily_reduced_motion(force: bool = True) -> Iterator[None]:
    """Override the preference inside the block, restoring it on any exit."""
    prev = _reduced_motion_enabled
    try:
        set_reduced_motion(force)
        yield
    finally:
        set_reduced_motion(prev)
