"""Domain layer - Pure entities for hotspot geometry and documents."""

from .audio_manifest import AudioManifest, ManifestEntry
from .geometry import PixelRect, rect_from_corners, to_pixel, to_unit
from .hotspot import DocumentFormatError, Hotspot, HotspotDocument, PageRef, default_pages

__all__ = [
    "AudioManifest",
    "ManifestEntry",
    "PixelRect",
    "rect_from_corners",
    "to_pixel",
    "to_unit",
    "DocumentFormatError",
    "Hotspot",
    "HotspotDocument",
    "PageRef",
    "default_pages",
]
