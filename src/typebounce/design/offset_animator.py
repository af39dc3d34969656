"""Frame-clocked baseline offset animator.

Drives the "typing bounce": the last glyph of a text subject starts fully
displaced below its baseline (half a line height) and is eased back to rest
by a motion profile, one offset per display frame.

Lifecycle::

    Idle --start()--> Running --elapsed > duration--> Idle
                         |  \\--teardown()-----------> Idle
                         \\--start()--> Running (previous tick replaced)

Invariants:
 - At most one live tick registration per animator. ``start()`` cancels the
   previous one before registering, ``teardown()`` is idempotent.
 - The subject is held through a weak reference. A subject that is collected
   (or whose Qt object was deleted) turns every apply into a no-op; the run
   still ends on its own once the profile duration has elapsed.
 - Tick handlers never raise into the event loop. Unexpected errors are
   logged and the run is torn down.

Usage::

    animator = OffsetAnimator(SpringMotion(0.3, 0.1))
    animator.bind(text_field)
    animator.animate()
"""

from __future__ import annotations

import logging
import time
import weakref
from typing import Callable, Optional, Protocol

from .motion_profile import MotionProfile, displacement_at
from .reduced_motion import is_reduced_motion
from .tick_source import TickHandle, default_tick_source

__all__ = ["OffsetSubject", "OffsetAnimator", "REST_OFFSET"]

logger = logging.getLogger(__name__)

REST_OFFSET = 0.0


class OffsetSubject(Protocol):
    """Text-bearing collaborator rendering a baseline offset on its last glyph."""

    def text(self) -> str: ...  # pragma: no cover - structural

    def line_height(self) -> float: ...  # pragma: no cover - structural

    def refresh_interval(self) -> float: ...  # pragma: no cover - structural

    def apply_offset(self, value: float) -> None: ...  # pragma: no cover - structural


class OffsetAnimator:
    """Animate a subject's last-glyph baseline offset back to rest.

    Parameters
    ----------
    profile: MotionProfile | None
        Motion used for runs. Defaults to ``settings.DEFAULT_MOTION``.
    tick_source:
        Object with ``register(callback) -> TickHandle`` and ``interval()``.
        Defaults to the process-wide Qt frame tick source, resolved on the
        first ``start()``.
    clock: Callable[[], float]
        Monotonic clock in seconds.
    """

    def __init__(
        self,
        profile: Optional[MotionProfile] = None,
        *,
        tick_source=None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if profile is None:
            from typebounce.config.settings import default_motion_profile

            profile = default_motion_profile()
        self._profile: MotionProfile = profile
        self._run_profile: MotionProfile = profile
        self._tick_source = tick_source
        self._clock = clock
        self._subject_ref: Optional[weakref.ReferenceType] = None
        self._max_vertical_displacement = 0.0
        self._has_text = False
        self._start_time: Optional[float] = None
        self._handle: Optional[TickHandle] = None
        self._subject_lost_reported = False

    # Properties -------------------------------------------------------
    @property
    def profile(self) -> MotionProfile:
        return self._profile

    @profile.setter
    def profile(self, value: MotionProfile) -> None:
        # takes effect on the next start()
        self._profile = value

    @property
    def subject(self) -> Optional[OffsetSubject]:
        return self._subject_ref() if self._subject_ref is not None else None

    @property
    def max_vertical_displacement(self) -> float:
        return self._max_vertical_displacement

    @property
    def start_time(self) -> Optional[float]:
        return self._start_time

    @property
    def is_running(self) -> bool:
        return self._handle is not None and self._handle.active

    # Binding ----------------------------------------------------------
    def bind(self, subject: Optional[OffsetSubject]) -> None:
        """Attach (or replace) the subject and render the fully displaced frame.

        Works whether or not a run is active. Passing ``None`` unbinds.
        Subjects must support weak references; ``TypeError`` otherwise.
        """
        self._max_vertical_displacement = 0.0
        self._has_text = False
        self._subject_lost_reported = False
        if subject is None:
            self._subject_ref = None
            return
        try:
            self._subject_ref = weakref.ref(subject)
        except TypeError:
            self._subject_ref = None
            raise TypeError(
                f"{type(subject).__name__} cannot be bound: subjects must support weak references"
            ) from None
        try:
            text = subject.text()
            if not text:
                return
            self._has_text = True
            self._max_vertical_displacement = self._half_line_height(subject)
        except RuntimeError:
            self._forget_subject("bind")
            return
        self._apply(-self._max_vertical_displacement)

    @staticmethod
    def _half_line_height(subject: OffsetSubject) -> float:
        height = subject.line_height()
        if height is None or not height > 0:
            return 0.0
        return float(height) / 2.0

    # Lifecycle --------------------------------------------------------
    def start(self) -> None:
        """Begin a run, replacing any tick registration still alive."""
        self.teardown()
        self._subject_lost_reported = False
        if is_reduced_motion():
            logger.debug("Reduced motion active; snapping to rest")
            self._apply_rest()
            return
        if self._tick_source is None:
            self._tick_source = default_tick_source()
        self._run_profile = self._profile
        self._start_time = self._clock()
        self._handle = self._tick_source.register(self._on_tick)
        logger.debug(
            "Offset animation started (profile=%r, displacement=%s)",
            self._run_profile,
            self._max_vertical_displacement,
        )

    animate = start

    def teardown(self) -> None:
        """Release the tick registration. Safe to call when idle."""
        handle, self._handle = self._handle, None
        self._start_time = None
        if handle is not None:
            handle.cancel()
            logger.debug("Offset animation tick released")

    def __enter__(self) -> "OffsetAnimator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    # Tick -------------------------------------------------------------
    def _on_tick(self) -> None:
        if self._start_time is None:
            return
        try:
            elapsed = self._clock() - self._start_time
            if elapsed > self._run_profile.duration:
                self._apply_rest()
                self.teardown()
                logger.debug("Offset animation settled after %.3fs", elapsed)
                return
            self._render(elapsed)
        except Exception:
            logger.exception("Offset animation tick failed; stopping")
            self.teardown()

    def _render(self, elapsed: float) -> None:
        if not self._has_text:
            return
        subject = self.subject
        if subject is None:
            self._report_subject_lost()
            return
        try:
            interval = subject.refresh_interval()
        except RuntimeError:
            self._forget_subject("tick")
            return
        if not interval or not interval > 0:
            interval = self._tick_source.interval()
        offset = displacement_at(
            self._run_profile, elapsed, self._max_vertical_displacement, interval
        )
        self._apply(offset)

    # Subject access ---------------------------------------------------
    def _apply_rest(self) -> None:
        if self._has_text:
            self._apply(REST_OFFSET)

    def _apply(self, value: float) -> None:
        subject = self.subject
        if subject is None:
            self._report_subject_lost()
            return
        try:
            subject.apply_offset(value)
        except RuntimeError:
            self._forget_subject("apply")

    def _forget_subject(self, stage: str) -> None:
        # wrapped C++ object already deleted
        self._subject_ref = None
        logger.debug("Subject deleted during %s", stage)
        self._report_subject_lost()

    def _report_subject_lost(self) -> None:
        if self._subject_lost_reported or not self._has_text:
            return
        self._subject_lost_reported = True
        logger.warning("Offset animation subject is gone; skipping offsets")
