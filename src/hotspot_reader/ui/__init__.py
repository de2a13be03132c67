"""UI layer - PySide6 presentation components."""

from .hotspot_indicator import HotspotIndicator, IndicatorHandle
from .main_window import MainWindow
from .page_surface import PageSurface
from .reader_canvas import ReaderCanvas

__all__ = ["HotspotIndicator", "IndicatorHandle", "MainWindow", "PageSurface", "ReaderCanvas"]
