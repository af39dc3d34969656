"""Module entrypoint for `python -m typebounce`.

Opens a small window with a single ``BounceTextField`` using the configured
motion (``TYPEBOUNCE_MOTION``, default ``spring(0.3, 0.1)``). A status line
below the field shows the latest animator lifecycle event captured by
``LoggingService``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from typebounce.config import settings
from typebounce.design.motion_profile import parse_motion_profile
from typebounce.services.logging_service import LoggingService, configure_logging

log = logging.getLogger(__name__)

STATUS_REFRESH_MS = 100


def _parse_args(argv):
    parser = argparse.ArgumentParser(prog="typebounce", description="Baseline bounce demo")
    parser.add_argument(
        "--motion",
        default=settings.DEFAULT_MOTION,
        help="motion profile, e.g. 'linear(0.2)' or 'spring(0.3, 0.1)'",
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    return parser.parse_args(argv)


def status_text(svc: LoggingService) -> str:
    """Text for the demo status line: newest animator event, or a hint."""
    return svc.latest_message(name_contains="offset_animator") or "idle"


def main(argv=None):  # pragma: no cover - runtime
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level)
    try:
        profile = parse_motion_profile(args.motion)
    except ValueError as e:
        print(f"typebounce: {e}", file=sys.stderr)  # noqa: T201
        return 2

    from PyQt6.QtCore import QTimer
    from PyQt6.QtWidgets import QApplication, QLabel, QVBoxLayout, QWidget

    from typebounce.components.bounce_text_field import BounceTextField

    app = QApplication.instance() or QApplication(sys.argv)
    win = QWidget()
    win.setWindowTitle("typebounce")
    layout = QVBoxLayout(win)
    field = BounceTextField(win, profile=profile)
    field.setPlaceholderText("type...")
    layout.addWidget(field)
    status = QLabel(win)
    status.setObjectName("bounceStatus")
    layout.addWidget(status)

    with LoggingService(capacity=50) as svc:
        status.setText(status_text(svc))
        refresh = QTimer(win)
        refresh.timeout.connect(lambda: status.setText(status_text(svc)))  # type: ignore[attr-defined]
        refresh.start(STATUS_REFRESH_MS)
        win.resize(480, field.sizeHint().height() + 70)
        win.show()
        field.setFocus()
        log.info("Demo window shown (motion=%r)", profile)
        return app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
