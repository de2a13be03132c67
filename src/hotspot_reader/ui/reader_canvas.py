"""Reader Canvas - Renders the current page or spread as page surfaces."""

from typing import List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from hotspot_reader.core import PixelRect
from hotspot_reader.services.render_projection import PageView
from hotspot_reader.ui.page_surface import PageSurface


class ReaderCanvas(QWidget):
    """Lays out one surface per displayed page and relays their signals."""

    hotspot_clicked = Signal(str, int, object)  # image_id, index, indicator handle
    pointer_pressed = Signal(str, float, float, float, float)
    pointer_moved = Signal(float, float)
    pointer_released = Signal(float, float)

    def __init__(self):
        super().__init__()

        self.layout_ = QHBoxLayout(self)
        self.layout_.setContentsMargins(8, 8, 8, 8)
        self.layout_.setSpacing(12)

        self.surfaces: List[PageSurface] = []
        self._authoring = False
        # Surface that received the current pointer-down; feedback is drawn there.
        self._drawing_surface: Optional[PageSurface] = None

    def render_pages(self, views: List[PageView]):
        """
        Replace the displayed pages.

        Args:
            views: Pages to show side by side, in reading order
        """
        self.clear()
        if not views:
            placeholder = QLabel("No pages to display.")
            placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self.layout_.addWidget(placeholder)
            return

        for view in views:
            surface = PageSurface(view, self)
            surface.set_authoring(self._authoring)
            surface.hotspot_clicked.connect(self.hotspot_clicked)
            surface.pointer_pressed.connect(
                lambda *args, s=surface: self._on_pointer_pressed(s, *args)
            )
            surface.pointer_moved.connect(self.pointer_moved)
            surface.pointer_released.connect(self.pointer_released)
            self.layout_.addWidget(surface)
            self.surfaces.append(surface)

    def set_authoring(self, enabled: bool) -> None:
        self._authoring = enabled
        for surface in self.surfaces:
            surface.set_authoring(enabled)

    def show_draw_feedback(self, rect: Optional[PixelRect]) -> None:
        """Draw (or with None, clear) the transient rectangle on the active surface."""
        surface = self._drawing_surface
        if surface is None:
            return
        surface.set_feedback(rect)
        if rect is None:
            self._drawing_surface = None

    def _on_pointer_pressed(self, surface: PageSurface, image_id: str, x: float, y: float,
                            width: float, height: float) -> None:
        if self._drawing_surface is not None and self._drawing_surface is not surface:
            self._drawing_surface.set_feedback(None)
        self._drawing_surface = surface
        self.pointer_pressed.emit(image_id, x, y, width, height)

    def clear(self):
        """Clear the canvas."""
        self._drawing_surface = None
        self.surfaces = []
        while self.layout_.count():
            item = self.layout_.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
