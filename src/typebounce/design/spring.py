"""Damped spring model used by the spring motion profile.

Closed-form position of a damped harmonic oscillator with unit mass. The
"frequency response" parameter is a timescale: the spring stiffness is
derived from it as ``(2*pi / frequency_response) ** 2 * mass``. Time is
expressed in whatever unit the caller samples with; the spring motion
profile samples in frames, not seconds.

Design Goals:
 - Headless/test friendly (no Qt imports)
 - Deterministic, side-effect free (safe to call with any sampled ``t``)
 - Derived quantities are properties recomputed on access, never cached

Regimes handled by ``calculate_position``:
 - underdamped (ratio < 1): ``e^(-a t) * (d cos(b t) + c sin(b t))``
 - critically damped (b ~ 0): ``e^(-a t) * (d + (v0 + a d) t)``
 - overdamped (ratio > 1): ``e^(-a t) * (d cosh(b t) + c sinh(b t))``

where ``a`` is the decay constant, ``b`` the damped natural frequency,
``d`` the initial position and ``c = (v0 + a d) / b``.

Public API:
 - DampedSpring dataclass
"""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = ["DampedSpring", "CRITICAL_EPSILON"]

# Below this the trigonometric/hyperbolic forms divide by ~0.
CRITICAL_EPSILON = 1e-9


@dataclass(frozen=True)
class DampedSpring:
    frequency_response: float
    damping_ratio: float = 0.5
    mass: float = 1.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not (math.isfinite(self.frequency_response) and self.frequency_response > 0):
            raise ValueError("frequency_response must be finite and > 0")
        if not (math.isfinite(self.damping_ratio) and self.damping_ratio >= 0):
            raise ValueError("damping_ratio must be finite and >= 0")
        if not (math.isfinite(self.mass) and self.mass > 0):
            raise ValueError("mass must be finite and > 0")

    @property
    def stiffness(self) -> float:
        return (2.0 * math.pi / self.frequency_response) ** 2 * self.mass

    @property
    def damping_coefficient(self) -> float:
        return 4.0 * math.pi * self.damping_ratio * self.mass / self.frequency_response

    @property
    def undamped_natural_frequency(self) -> float:
        return math.sqrt(self.stiffness / self.mass)

    @property
    def damped_natural_frequency(self) -> float:
        # abs() keeps the overdamped branch real; there it is the hyperbolic rate.
        return self.undamped_natural_frequency * math.sqrt(abs(1.0 - self.damping_ratio**2))

    @property
    def decay_constant(self) -> float:
        return self.undamped_natural_frequency * self.damping_ratio

    def calculate_position(
        self, t: float, initial_position: float, initial_velocity: float = 0.0
    ) -> float:
        """Return the oscillator position at time ``t``.

        ``calculate_position(0, p)`` is ``p`` in every regime.
        """
        a = self.decay_constant
        b = self.damped_natural_frequency
        d = initial_position
        if b < CRITICAL_EPSILON:
            return math.exp(-a * t) * (d + (initial_velocity + a * d) * t)
        c = (initial_velocity + a * d) / b
        if self.damping_ratio > 1.0:
            # cosh/sinh expanded into exponentials so large b*t cannot overflow
            return 0.5 * (d + c) * math.exp((b - a) * t) + 0.5 * (d - c) * math.exp(
                -(a + b) * t
            )
        return math.exp(-a * t) * (d * math.cos(b * t) + c * math.sin(b * t))
