"""
Hotspot Reader - A page-image reader with read-aloud hotspots.

This package provides a desktop application for:
- Showing page images singly or as spreads
- Playing recorded audio or synthesized speech for clicked regions
- Drawing new hotspots on a page and exporting them as JSON
"""

__version__ = "0.1.0"

# Make key components available at package level
from hotspot_reader.core import Hotspot, HotspotDocument, PageRef
from hotspot_reader.io import DocumentRepository

__all__ = [
    "Hotspot",
    "HotspotDocument",
    "PageRef",
    "DocumentRepository",
]
