"""Coordinate normalization between display pixels and the unit square."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PixelRect:
    """Axis-aligned rectangle in display-surface pixel space."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float) -> bool:
        """Check if a point is within this rectangle (edges included)."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(value, high))


def to_unit(
    pixel_x: float, pixel_y: float, surface_width: float, surface_height: float
) -> tuple[float, float]:
    """
    Convert a pixel position on a surface into unit-square coordinates.

    The point is clamped to the surface before dividing, so the result is
    always within [0, 1] x [0, 1]. A degenerate surface maps to 0.
    """
    x = clamp(pixel_x, 0, surface_width) / surface_width if surface_width > 0 else 0.0
    y = clamp(pixel_y, 0, surface_height) / surface_height if surface_height > 0 else 0.0
    return x, y


def to_pixel(
    x: float,
    y: float,
    w: float,
    h: float,
    surface_width: float,
    surface_height: float,
) -> PixelRect:
    """Project a unit-square rectangle onto a surface of the given size."""
    return PixelRect(
        left=x * surface_width,
        top=y * surface_height,
        width=w * surface_width,
        height=h * surface_height,
    )


def rect_from_corners(
    ax: float,
    ay: float,
    bx: float,
    by: float,
    surface_width: float,
    surface_height: float,
) -> PixelRect:
    """Build the min/max rectangle spanned by two points, clamped to the surface."""
    ax = clamp(ax, 0, surface_width)
    bx = clamp(bx, 0, surface_width)
    ay = clamp(ay, 0, surface_height)
    by = clamp(by, 0, surface_height)
    left, top = min(ax, bx), min(ay, by)
    return PixelRect(left=left, top=top, width=max(ax, bx) - left, height=max(ay, by) - top)
