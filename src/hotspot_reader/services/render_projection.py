"""Render Projection - maps stored hotspots onto a displayed image's pixels."""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from hotspot_reader.core import Hotspot, PixelRect, to_pixel

LayoutListener = Callable[[List["IndicatorLayout"]], None]


@dataclass(frozen=True)
class IndicatorLayout:
    """Where and how to draw the indicator for one hotspot.

    ``rect`` is also the clickable area; ``outline_visible`` is cosmetic.
    """

    index: int
    hotspot: Hotspot
    rect: PixelRect
    outline_visible: bool


@dataclass(frozen=True)
class PageView:
    """A page ready to display: its id, loadable image source, and projection."""

    image_id: str
    source: str
    projection: "RenderProjection"


class RenderProjection:
    """Projects one image's hotspots onto the current surface size.

    Recomputes only when told the surface was resized; never polls layout.
    """

    def __init__(self, image_id: str, hotspots: Sequence[Hotspot], show_outlines: bool = False):
        self.image_id = image_id
        self._hotspots = list(hotspots)
        self._show_outlines = show_outlines
        self._size = (0.0, 0.0)
        self._layouts: List[IndicatorLayout] = []
        self._listeners: List[LayoutListener] = []

    @property
    def layouts(self) -> List[IndicatorLayout]:
        return list(self._layouts)

    def subscribe(self, listener: LayoutListener) -> None:
        self._listeners.append(listener)

    def layout(self, surface_width: float, surface_height: float) -> List[IndicatorLayout]:
        return [
            IndicatorLayout(
                index=index,
                hotspot=hotspot,
                rect=to_pixel(hotspot.x, hotspot.y, hotspot.w, hotspot.h, surface_width, surface_height),
                outline_visible=self._show_outlines,
            )
            for index, hotspot in enumerate(self._hotspots)
        ]

    def surface_resized(self, width: float, height: float) -> List[IndicatorLayout]:
        """Recompute pixel rectangles for the new size and notify listeners."""
        self._size = (width, height)
        self._layouts = self.layout(width, height)
        for listener in self._listeners:
            listener(self.layouts)
        return self.layouts

    def set_show_outlines(self, show: bool) -> None:
        if show == self._show_outlines:
            return
        self._show_outlines = show
        self.surface_resized(*self._size)

    def hit_test(self, x: float, y: float) -> Optional[IndicatorLayout]:
        """The topmost (last drawn) indicator containing the point."""
        for layout in reversed(self._layouts):
            if layout.rect.contains(x, y):
                return layout
        return None
