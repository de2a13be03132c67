"""Page Surface - one page image with its hotspot indicators and draw feedback."""

import base64
import logging
from typing import List, Optional

from PySide6.QtCore import QPointF, QRect, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QSizePolicy, QWidget

from hotspot_reader.core import PixelRect
from hotspot_reader.services.render_projection import IndicatorLayout, PageView
from hotspot_reader.ui.hotspot_indicator import HotspotIndicator

logger = logging.getLogger(__name__)


def load_pixmap(source: str) -> QPixmap:
    """Load a page image from a file path or a base64 data URI."""
    pixmap = QPixmap()
    if source.startswith("data:"):
        _, _, payload = source.partition(",")
        try:
            pixmap.loadFromData(base64.b64decode(payload))
        except ValueError as e:
            logger.warning("Invalid data URI for page image: %s", e)
        return pixmap
    if not pixmap.load(source):
        logger.warning("Could not load page image %s", source)
    return pixmap


class PageSurface(QWidget):
    """
    Displays a page image scaled to fit, with indicators laid over the
    displayed image box. Pointer coordinates are reported relative to
    that box, together with its current size.
    """

    hotspot_clicked = Signal(str, int, object)  # image_id, index, indicator handle
    pointer_pressed = Signal(str, float, float, float, float)  # image_id, x, y, width, height
    pointer_moved = Signal(float, float)
    pointer_released = Signal(float, float)

    def __init__(self, view: PageView, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.view = view
        self._pixmap = load_pixmap(view.source)
        self._indicators: List[HotspotIndicator] = []
        self._feedback: Optional[PixelRect] = None
        self._authoring = False
        self._drawing = False
        self._pressed: Optional[HotspotIndicator] = None

        self.setMouseTracking(True)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(120, 160)
        self.view.projection.subscribe(self._apply_layouts)

    @property
    def image_id(self) -> str:
        return self.view.image_id

    def set_authoring(self, enabled: bool) -> None:
        self._authoring = enabled
        self._pressed = None
        self._update_hover(None)

    def set_feedback(self, rect: Optional[PixelRect]) -> None:
        """Show (or with None, remove) the in-progress drawing rectangle."""
        self._feedback = rect
        self.update()

    def image_box(self) -> QRect:
        """Where the scaled image is drawn inside this widget."""
        if self._pixmap.isNull():
            return QRect(0, 0, self.width(), self.height())
        scaled = self._pixmap.size().scaled(self.size(), Qt.AspectRatioMode.KeepAspectRatio)
        left = (self.width() - scaled.width()) // 2
        top = (self.height() - scaled.height()) // 2
        return QRect(left, top, scaled.width(), scaled.height())

    def resizeEvent(self, event):
        super().resizeEvent(event)
        box = self.image_box()
        self.view.projection.surface_resized(box.width(), box.height())

    def _apply_layouts(self, layouts: List[IndicatorLayout]) -> None:
        box = self.image_box()
        while len(self._indicators) > len(layouts):
            self._indicators.pop().deleteLater()
        for layout in layouts:
            if layout.index < len(self._indicators):
                indicator = self._indicators[layout.index]
            else:
                indicator = HotspotIndicator(layout, self)
                indicator.show()
                self._indicators.append(indicator)
            indicator.apply_layout(layout, box.left(), box.top())

    def indicator_at(self, position: QPointF) -> Optional[HotspotIndicator]:
        """The indicator drawn on top at a widget position, if any."""
        box = self.image_box()
        layout = self.view.projection.hit_test(position.x() - box.left(), position.y() - box.top())
        if layout is None or layout.index >= len(self._indicators):
            return None
        return self._indicators[layout.index]

    def _update_hover(self, indicator: Optional[HotspotIndicator]) -> None:
        if indicator is None:
            self.unsetCursor()
            self.setToolTip("")
            return
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setToolTip(self.view.projection.layouts[indicator.index].hotspot.text or "Hotspot")

    def paintEvent(self, event):
        painter = QPainter(self)
        box = self.image_box()
        if not self._pixmap.isNull():
            painter.drawPixmap(box, self._pixmap)
        else:
            painter.fillRect(box, QColor("#f3f3f3"))
            painter.drawText(box, Qt.AlignmentFlag.AlignCenter, self.image_id)

        if self._feedback is not None:
            pen = QPen(QColor(30, 120, 220), 2, Qt.PenStyle.DashLine)
            painter.setPen(pen)
            painter.setBrush(QColor(30, 120, 220, 40))
            painter.drawRect(
                QRectF(
                    box.left() + self._feedback.left,
                    box.top() + self._feedback.top,
                    self._feedback.width,
                    self._feedback.height,
                )
            )
        painter.end()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        point = event.position()
        if not self._authoring:
            self._pressed = self.indicator_at(point)
            if self._pressed is None:
                super().mousePressEvent(event)
                return
            event.accept()
            return
        box = self.image_box()
        self._drawing = True
        self.pointer_pressed.emit(
            self.image_id, point.x() - box.left(), point.y() - box.top(), float(box.width()), float(box.height())
        )
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        if not self._drawing:
            if not self._authoring:
                self._update_hover(self.indicator_at(event.position()))
            super().mouseMoveEvent(event)
            return
        box = self.image_box()
        point = event.position()
        self.pointer_moved.emit(point.x() - box.left(), point.y() - box.top())

    def mouseReleaseEvent(self, event: QMouseEvent):
        if not self._drawing:
            # A click reads the hotspot it started on, if released over it still.
            pressed, self._pressed = self._pressed, None
            if pressed is not None and self.indicator_at(event.position()) is pressed:
                self.hotspot_clicked.emit(self.image_id, pressed.index, pressed.handle)
                event.accept()
                return
            super().mouseReleaseEvent(event)
            return
        self._drawing = False
        box = self.image_box()
        point = event.position()
        self.pointer_released.emit(point.x() - box.left(), point.y() - box.top())
