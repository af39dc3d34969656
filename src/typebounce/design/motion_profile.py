"""Motion profiles for the baseline bounce: linear ease-out or damped spring.

A profile maps elapsed time (seconds since the run started) to a signed
offset fraction in ``[-1, 0]``: ``-1`` means the glyph is fully displaced
below its baseline, ``0`` means it rests on the baseline. The animator
multiplies the fraction by the subject's maximum vertical displacement.

Profiles are immutable values. Two variants exist:

 - ``LinearMotion(duration)``: ``fraction = clamp(t / duration, 0, 1) - 1``
 - ``SpringMotion(damping_ratio, response_time)``: total duration is
   ``2 * response_time``. The spring is sampled in *frames* rather than
   seconds so the number of visible oscillation frames is fixed by the
   display refresh rate. Positions below rest are clamped to 0.

Profiles can also be written as text, mirroring the design token easing
format (``cubic-bezier(...)``)::

    linear(0.2)
    spring(0.3, 0.1)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple, Union

from .spring import DampedSpring

__all__ = [
    "LinearMotion",
    "SpringMotion",
    "MotionProfile",
    "frame_counts",
    "displacement_at",
    "parse_motion_profile",
]

# Tolerance for floor() against float representation error (60 * 0.2 etc.)
_FRAME_EPSILON = 1e-9


def _floor_frames(value: float) -> int:
    return int(math.floor(value + _FRAME_EPSILON))


@dataclass(frozen=True)
class LinearMotion:
    duration: float = 0.2

    def __post_init__(self) -> None:
        if not (math.isfinite(self.duration) and self.duration > 0):
            raise ValueError("duration must be finite and > 0")

    def offset_fraction(self, elapsed: float, refresh_interval: float) -> float:
        ratio = max(0.0, min(1.0, elapsed / self.duration))
        return ratio - 1.0


@dataclass(frozen=True)
class SpringMotion:
    damping_ratio: float = 0.3
    response_time: float = 0.1

    def __post_init__(self) -> None:
        if not (math.isfinite(self.damping_ratio) and self.damping_ratio >= 0):
            raise ValueError("damping_ratio must be finite and >= 0")
        if not (math.isfinite(self.response_time) and self.response_time > 0):
            raise ValueError("response_time must be finite and > 0")

    @property
    def duration(self) -> float:
        return 2.0 * self.response_time

    def offset_fraction(self, elapsed: float, refresh_interval: float) -> float:
        total_frames, current_frame = frame_counts(self, elapsed, refresh_interval)
        if total_frames <= 0:
            return 0.0
        spring = DampedSpring(frequency_response=total_frames / 2.0, damping_ratio=self.damping_ratio)
        ratio = spring.calculate_position(current_frame, initial_position=1.0)
        return -max(0.0, ratio)


MotionProfile = Union[LinearMotion, SpringMotion]


def frame_counts(profile: MotionProfile, elapsed: float, refresh_interval: float) -> Tuple[int, int]:
    """Return ``(total_frames, current_frame)`` for a run at the given refresh interval.

    A non-positive refresh interval yields ``(0, 0)``.
    """
    if not refresh_interval > 0:
        return 0, 0
    refresh_frequency = 1.0 / refresh_interval
    total = _floor_frames(refresh_frequency * profile.duration)
    current = _floor_frames(refresh_frequency * max(0.0, elapsed))
    return total, current


def displacement_at(
    profile: MotionProfile,
    elapsed: float,
    max_displacement: float,
    refresh_interval: float,
) -> float:
    """Return the baseline offset for ``elapsed`` seconds into a run.

    Result lies in ``[-max_displacement, 0]``.
    """
    if isinstance(profile, (LinearMotion, SpringMotion)):
        return profile.offset_fraction(elapsed, refresh_interval) * max_displacement
    raise TypeError(f"Unsupported motion profile: {profile!r}")


def parse_motion_profile(spec: str) -> MotionProfile:
    """Parse ``'linear(duration)'`` or ``'spring(damping, response)'``.

    Whitespace and case are tolerated. Raises ``ValueError`` on malformed
    input or out-of-range values.
    """
    s = spec.strip().lower()
    name, sep, rest = s.partition("(")
    if not sep or not rest.endswith(")"):
        raise ValueError(f"Invalid motion profile format: {spec}")
    name = name.strip()
    parts = [p.strip() for p in rest[:-1].split(",")]
    try:
        values = [float(p) for p in parts]
    except ValueError as e:
        raise ValueError(f"Non-numeric motion profile value in {spec}") from e
    if name == "linear":
        if len(values) != 1:
            raise ValueError(f"linear requires 1 component, got {len(values)}: {spec}")
        return LinearMotion(duration=values[0])
    if name == "spring":
        if len(values) != 2:
            raise ValueError(f"spring requires 2 components, got {len(values)}: {spec}")
        return SpringMotion(damping_ratio=values[0], response_time=values[1])
    raise ValueError(f"Unknown motion profile: {name}")
