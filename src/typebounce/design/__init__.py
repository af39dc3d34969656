"""Motion design package.

Contains the spring model, motion profiles, tick sources and the baseline
offset animator. Nothing here imports Qt at module import time.
"""

from .spring import DampedSpring  # noqa: F401
from .motion_profile import (  # noqa: F401
    LinearMotion,
    SpringMotion,
    MotionProfile,
    displacement_at,
    frame_counts,
    parse_motion_profile,
)
from .reduced_motion import (  # noqa: F401
    is_reduced_motion,
    set_reduced_motion,
    temporarily_reduced_motion,
)
from .tick_source import (  # noqa: F401
    TickHandle,
    ManualTickSource,
    QtFrameTickSource,
    default_tick_source,
)
from .offset_animator import OffsetAnimator, OffsetSubject  # noqa: F401
