"""Hotspot Indicator - the rectangle drawn over a page image for one hotspot."""

import shiboken6
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QWidget

from hotspot_reader.services.render_projection import IndicatorLayout

_OUTLINE_STYLE = "border: 2px solid rgba(30, 120, 220, 200); background: rgba(30, 120, 220, 40);"
_READING_STYLE = "border: 2px solid rgba(240, 160, 20, 230); background: rgba(240, 160, 20, 60);"
_HIDDEN_STYLE = "border: none; background: transparent;"


class HotspotIndicator(QFrame):
    """
    Shows one hotspot's area and reading state. Its geometry always matches
    the stored rect; clicks are hit-tested by the page surface underneath.
    """

    def __init__(self, layout: IndicatorLayout, parent: QWidget | None = None):
        super().__init__(parent)
        self.index = layout.index
        self._outline_visible = layout.outline_visible
        self._reading = False
        self.handle = IndicatorHandle(self)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.apply_layout(layout)

    def apply_layout(self, layout: IndicatorLayout, offset_x: int = 0, offset_y: int = 0) -> None:
        rect = layout.rect
        self.setGeometry(
            offset_x + round(rect.left),
            offset_y + round(rect.top),
            max(1, round(rect.width)),
            max(1, round(rect.height)),
        )
        self._outline_visible = layout.outline_visible
        self._refresh_style()

    def set_reading(self, active: bool) -> None:
        self._reading = active
        self._refresh_style()

    def _refresh_style(self) -> None:
        if self._reading:
            self.setStyleSheet(_READING_STYLE)
        elif self._outline_visible:
            self.setStyleSheet(_OUTLINE_STYLE)
        else:
            self.setStyleSheet(_HIDDEN_STYLE)


class IndicatorHandle:
    """
    What playback holds on to instead of the widget.

    Pages are rebuilt on every render, so a session may outlive its widget;
    marking a deleted widget is a no-op.
    """

    def __init__(self, widget: HotspotIndicator):
        self._widget = widget

    @property
    def index(self) -> int:
        return self._widget.index if shiboken6.isValid(self._widget) else -1

    def set_reading(self, active: bool) -> None:
        if shiboken6.isValid(self._widget):
            self._widget.set_reading(active)
