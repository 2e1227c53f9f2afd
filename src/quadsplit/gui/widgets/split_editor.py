"""Image view with three draggable cut handles."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QEvent, QPointF, QRectF, QSize, Qt, Signal
from PySide6.QtGui import QColor, QFont, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from ...config import HANDLE_HIT_PADDING, HANDLE_LINE_WIDTH, SEGMENT_LABEL_RADIUS
from ...core.cuts import Axis
from ...core.drag import PointerDragController, PointerSource
from ...core.session import SplitSession

_LOGGER = logging.getLogger(__name__)

_ACTIVE_COLOR = QColor("#2563EB")
_HANDLE_COLOR = QColor("white")
_GUIDE_COLOR = QColor(31, 41, 55, 110)
_OVERLAY_COLOR = QColor(0, 0, 0, 13)
_LABEL_FILL = QColor(0, 0, 0, 128)
_LABEL_BORDER = QColor(255, 255, 255, 80)
_BACKGROUND = QColor("#F3F4F6")


class SplitEditor(QWidget):
    """Displays the source image and lets the user drag the cut lines.

    Pressing on a handle starts a drag session on the controller.  Qt keeps
    delivering move events to the pressed widget until release, even outside
    its bounds, so the pointer stream only flows while a drag is active.
    Touch input arrives as synthesized mouse events.
    """

    dragStarted = Signal(int)
    dragEnded = Signal()

    def __init__(self, session: SplitSession, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._session = session
        self._pointer_source = PointerSource()
        self._controller = PointerDragController(
            model=session.model,
            container_rect_provider=self.image_rect,
            pointer_source=self._pointer_source,
        )
        self._hover_index: Optional[int] = None

        self.setMouseTracking(True)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(240, 180)

        session.model.changed.connect(self.update)
        session.model.axisChanged.connect(self._on_axis_changed)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def controller(self) -> PointerDragController:
        return self._controller

    def sizeHint(self) -> QSize:  # type: ignore[override]
        return QSize(800, 560)

    def image_rect(self) -> QRectF:
        """Return the on-screen rectangle the image is drawn into."""
        source = self._session.source
        if source is None or not source.is_ready:
            return QRectF()
        img_w, img_h = source.width, source.height
        if img_w <= 0 or img_h <= 0 or self.width() <= 0 or self.height() <= 0:
            return QRectF()
        scale = min(self.width() / img_w, self.height() / img_h)
        draw_w = img_w * scale
        draw_h = img_h * scale
        return QRectF(
            (self.width() - draw_w) / 2.0,
            (self.height() - draw_h) / 2.0,
            draw_w,
            draw_h,
        )

    def handle_position(self, index: int) -> float:
        """Return the widget coordinate of cut *index* along the active axis."""
        rect = self.image_rect()
        cut = self._session.cuts[index]
        if self._session.axis is Axis.ACROSS:
            return rect.left() + cut * rect.width()
        return rect.top() + cut * rect.height()

    def handle_at(self, pos: QPointF) -> Optional[int]:
        """Return the index of the cut handle under *pos*, if any."""
        rect = self.image_rect()
        if rect.isEmpty():
            return None
        across = self._session.axis is Axis.ACROSS
        along = pos.x() if across else pos.y()
        cross = pos.y() if across else pos.x()
        cross_min = rect.top() if across else rect.left()
        cross_max = rect.bottom() if across else rect.right()
        if not cross_min - HANDLE_HIT_PADDING <= cross <= cross_max + HANDLE_HIT_PADDING:
            return None
        best: Optional[int] = None
        best_distance = HANDLE_HIT_PADDING
        for index in range(len(self._session.cuts)):
            distance = abs(along - self.handle_position(index))
            if distance <= best_distance:
                best, best_distance = index, distance
        return best

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        index = self.handle_at(event.position())
        if index is None or not self._controller.begin_drag(index):
            super().mousePressEvent(event)
            return
        self.dragStarted.emit(index)
        self._update_cursor(index)
        self.update()
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        pos = event.position()
        if self._controller.is_dragging():
            self._pointer_source.moved.emit(pos.x(), pos.y())
            event.accept()
            return
        hover = self.handle_at(pos)
        if hover != self._hover_index:
            self._hover_index = hover
            self._update_cursor(hover)
            self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if self._controller.is_dragging():
            self._pointer_source.released.emit()
            self._finish_drag()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def event(self, event: QEvent) -> bool:  # type: ignore[override]
        # Another widget (a popup, a modal dialog) stole the pointer mid-drag.
        if event.type() == QEvent.Type.UngrabMouse and self._controller.is_dragging():
            self._finish_drag()
        return super().event(event)

    def hideEvent(self, event) -> None:  # type: ignore[override]
        if self._controller.is_dragging():
            self._finish_drag()
        super().hideEvent(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        if not self._controller.is_dragging() and self._hover_index is not None:
            self._hover_index = None
            self._update_cursor(None)
            self.update()
        super().leaveEvent(event)

    def _finish_drag(self) -> None:
        # The released signal already ended the session when the controller
        # was subscribed; end_drag() is idempotent for the other exit paths.
        self._controller.end_drag()
        self._update_cursor(self._hover_index)
        self.dragEnded.emit()
        self.update()

    def _on_axis_changed(self, _axis: Axis) -> None:
        if self._controller.is_dragging():
            self._finish_drag()
        self._hover_index = None
        self._update_cursor(None)
        self.update()

    def _update_cursor(self, index: Optional[int]) -> None:
        if index is None:
            self.unsetCursor()
            return
        if self._session.axis is Axis.ACROSS:
            self.setCursor(Qt.CursorShape.SplitHCursor)
        else:
            self.setCursor(Qt.CursorShape.SplitVCursor)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.fillRect(self.rect(), _BACKGROUND)

        rect = self.image_rect()
        source = self._session.source
        if rect.isEmpty() or source is None or source.image is None:
            painter.end()
            return

        painter.drawImage(rect, source.image)
        painter.fillRect(rect, _OVERLAY_COLOR)
        for index in range(len(self._session.cuts)):
            self._draw_handle(painter, rect, index)
        self._draw_labels(painter, rect)
        painter.end()

    def _draw_handle(self, painter: QPainter, rect: QRectF, index: int) -> None:
        across = self._session.axis is Axis.ACROSS
        pos = self.handle_position(index)
        active = self._controller.active_index == index
        highlighted = active or self._hover_index == index
        color = _ACTIVE_COLOR if highlighted else _HANDLE_COLOR

        if across:
            start, end = QPointF(pos, rect.top()), QPointF(pos, rect.bottom())
        else:
            start, end = QPointF(rect.left(), pos), QPointF(rect.right(), pos)

        painter.setPen(QPen(color, HANDLE_LINE_WIDTH))
        painter.drawLine(start, end)
        guide = QPen(_GUIDE_COLOR, 2, Qt.PenStyle.DashLine)
        painter.setPen(guide)
        painter.drawLine(start, end)

        # Grip in the middle of the line.
        knob_long, knob_short = (32.0, 24.0) if active else (26.0, 20.0)
        centre = (start + end) / 2.0
        if across:
            knob = QRectF(0, 0, knob_short, knob_long)
        else:
            knob = QRectF(0, 0, knob_long, knob_short)
        knob.moveCenter(centre)
        painter.setPen(QPen(_ACTIVE_COLOR if active else QColor("#E5E7EB"), 1))
        painter.setBrush(QColor("white"))
        painter.drawRoundedRect(knob, knob_short / 2.0, knob_short / 2.0)
        painter.setBrush(Qt.BrushStyle.NoBrush)

    def _draw_labels(self, painter: QPainter, rect: QRectF) -> None:
        across = self._session.axis is Axis.ACROSS
        font = QFont(painter.font())
        font.setBold(True)
        font.setPointSize(12)
        painter.setFont(font)
        radius = float(SEGMENT_LABEL_RADIUS)
        for number, (start, end) in enumerate(self._session.model.segments(), start=1):
            middle = (start + end) / 2.0
            if across:
                centre = QPointF(rect.left() + middle * rect.width(), rect.center().y())
            else:
                centre = QPointF(rect.center().x(), rect.top() + middle * rect.height())
            badge = QRectF(0, 0, radius * 2, radius * 2)
            badge.moveCenter(centre)
            painter.setPen(QPen(_LABEL_BORDER, 1))
            painter.setBrush(_LABEL_FILL)
            painter.drawEllipse(badge)
            painter.setPen(QColor("white"))
            painter.drawText(badge, Qt.AlignmentFlag.AlignCenter, str(number))
        painter.setBrush(Qt.BrushStyle.NoBrush)


__all__ = ["SplitEditor"]
