"""Bounce Text Field widget.

Single-line text entry whose most recently typed glyph drops below the
baseline and springs back (or eases back linearly) on every edit.

Design Goals:
 - Owns its text buffer and paints it directly so the last glyph can be
   drawn at an independent baseline offset.
 - Implements the ``OffsetSubject`` protocol (``text``, ``line_height``,
   ``refresh_interval``, ``apply_offset``) consumed by ``OffsetAnimator``.
 - Testable: expose current baseline offset and the animator instance;
   tests inject an animator driven by a ``ManualTickSource``.

Usage::
    field = BounceTextField(profile=SpringMotion(0.3, 0.1))
    field.setPlaceholderText("type...")
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QPointF, QSize, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QFontMetricsF, QPainter
from PyQt6.QtWidgets import QWidget

from typebounce.config import settings
from typebounce.design.motion_profile import MotionProfile
from typebounce.design.offset_animator import OffsetAnimator

__all__ = ["BounceTextField"]

_PADDING = 4


class BounceTextField(QWidget):
    """Text field rendering a baseline offset on its final glyph.

    Signals
    -------
    textEdited(str)
        Emitted after user edits (typing, backspace). Programmatic
        ``setText`` does not emit and does not animate.
    """

    textEdited = pyqtSignal(str)

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        profile: Optional[MotionProfile] = None,
        animator: Optional[OffsetAnimator] = None,
    ):
        super().__init__(parent)
        self.setObjectName("bounceTextField")
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        font = self.font()
        font.setPointSize(settings.DEFAULT_FONT_POINT_SIZE)
        font.setBold(True)
        self.setFont(font)
        self._text = ""
        self._placeholder = ""
        self._baseline_offset = 0.0
        self._animator = animator if animator is not None else OffsetAnimator(profile)
        if animator is not None and profile is not None:
            self._animator.profile = profile
        self.textEdited.connect(self._on_text_edited)  # type: ignore[attr-defined]

    # Text buffer ---------------------------------------------------------
    def text(self) -> str:
        return self._text

    def setText(self, text: str) -> None:
        self._text = text or ""
        self._baseline_offset = 0.0
        self.update()

    def placeholderText(self) -> str:
        return self._placeholder

    def setPlaceholderText(self, text: str) -> None:
        self._placeholder = text or ""
        self.update()

    # Animation -----------------------------------------------------------
    def animator(self) -> OffsetAnimator:
        return self._animator

    def animation_profile(self) -> MotionProfile:
        return self._animator.profile

    def set_animation_profile(self, profile: MotionProfile) -> None:
        self._animator.profile = profile

    def animate(self) -> None:
        """Rebind to the current text and start a fresh bounce run."""
        self._animator.bind(self)
        self._animator.animate()

    def _on_text_edited(self, _text: str) -> None:
        self.animate()

    # OffsetSubject -------------------------------------------------------
    def line_height(self) -> float:
        return QFontMetricsF(self.font()).lineSpacing()

    def refresh_interval(self) -> float:
        screen = self.screen()
        rate = screen.refreshRate() if screen is not None else 0.0
        if not rate > 0:
            rate = settings.FALLBACK_REFRESH_RATE_HZ
        return 1.0 / rate

    def apply_offset(self, value: float) -> None:
        self._baseline_offset = float(value)
        self.update()

    def baseline_offset(self) -> float:
        return self._baseline_offset

    # Events --------------------------------------------------------------
    def keyPressEvent(self, event):  # type: ignore[override]
        key = event.key()
        if key == Qt.Key.Key_Backspace:
            if self._text:
                self._text = self._text[:-1]
                self.update()
                self.textEdited.emit(self._text)
            return
        typed = event.text()
        if typed and typed.isprintable():
            self._text += typed
            self.update()
            self.textEdited.emit(self._text)
            return
        super().keyPressEvent(event)

    def hideEvent(self, event):  # type: ignore[override]
        self._animator.teardown()
        self.apply_offset(0.0)
        super().hideEvent(event)

    def sizeHint(self) -> QSize:  # type: ignore[override]
        fm = QFontMetricsF(self.font())
        return QSize(int(fm.averageCharWidth() * 16) + 2 * _PADDING, int(fm.lineSpacing()) + 2 * _PADDING)

    def paintEvent(self, event):  # type: ignore[override]
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
        p.setFont(self.font())
        fm = QFontMetricsF(self.font())
        rect = self.rect()
        baseline = (rect.height() + fm.ascent() - fm.descent()) / 2.0
        x = float(_PADDING)
        if not self._text:
            if self._placeholder:
                p.setPen(QColor(140, 140, 140))
                p.drawText(QPointF(x, baseline), self._placeholder)
            return
        p.setPen(self.palette().color(self.foregroundRole()))
        head, last = self._text[:-1], self._text[-1]
        if head:
            p.drawText(QPointF(x, baseline), head)
            x += fm.horizontalAdvance(head)
        # positive offset raises the glyph; Qt's y axis points down
        p.drawText(QPointF(x, baseline - self._baseline_offset), last)
