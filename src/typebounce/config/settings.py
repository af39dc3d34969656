"""Global configuration and defaults for the baseline bounce."""

from __future__ import annotations

import os
from typing import Final

# Motion used when a widget is created without an explicit profile
DEFAULT_MOTION: Final = os.environ.get("TYPEBOUNCE_MOTION", "spring(0.3, 0.1)")
FALLBACK_REFRESH_RATE_HZ: Final = 60.0
DEFAULT_FONT_POINT_SIZE: Final = 45
LOG_LEVEL: Final = os.environ.get("TYPEBOUNCE_LOG_LEVEL", "WARNING")


def default_motion_profile():
    """Return the configured default motion profile (``DEFAULT_MOTION`` parsed)."""
    from typebounce.design.motion_profile import parse_motion_profile

    return parse_motion_profile(DEFAULT_MOTION)
