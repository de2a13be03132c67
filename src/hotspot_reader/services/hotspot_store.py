"""Hotspot Store - in-memory source of truth for hotspots per page image."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from hotspot_reader.core import Hotspot, HotspotDocument, PageRef

logger = logging.getLogger(__name__)


class HotspotSink(ABC):
    """
    Persistence boundary notified after every store mutation.

    Implementations receive the full current document, not a delta.
    """

    @abstractmethod
    def save(self, document: HotspotDocument) -> None:
        """Persist the document. May raise; the store logs and continues."""
        pass


class HotspotStore:
    """
    Owns the mapping from page-image identifier to its ordered hotspot list.

    A hotspot's identity is its position in that list, so the store only
    ever appends or swaps the whole collection.
    """

    def __init__(self, pages: Optional[List[PageRef]] = None, sink: Optional[HotspotSink] = None):
        self._pages: List[PageRef] = list(pages or [])
        self._hotspots: Dict[str, List[Hotspot]] = {}
        self._sink = sink

    @property
    def pages(self) -> List[PageRef]:
        return list(self._pages)

    def get(self, image_id: str) -> List[Hotspot]:
        """Return the hotspots for an image in render order (empty if none)."""
        return list(self._hotspots.get(image_id, []))

    def is_empty(self) -> bool:
        """True when no image has any hotspot."""
        return not any(self._hotspots.values())

    def append(self, image_id: str, hotspot: Hotspot) -> int:
        """Add a hotspot at the end of the image's list and return its index."""
        hotspots = self._hotspots.setdefault(image_id, [])
        hotspots.append(hotspot)
        self._notify()
        return len(hotspots) - 1

    def replace_all(self, document: HotspotDocument, persist: bool = True) -> None:
        """
        Swap the entire collection for the document's.

        Never merges: images absent from the new document lose their
        hotspots. The pages list is only replaced when the document has one.
        """
        self._hotspots = {image_id: list(items) for image_id, items in document.hotspots.items()}
        if document.pages:
            self._pages = list(document.pages)
        if persist:
            self._notify()

    def document(self) -> HotspotDocument:
        """Snapshot of the current state, safe to serialize or export."""
        return HotspotDocument(
            pages=list(self._pages),
            hotspots={image_id: list(items) for image_id, items in self._hotspots.items()},
        )

    def _notify(self) -> None:
        if self._sink is None:
            return
        try:
            self._sink.save(self.document())
        except Exception as e:
            logger.warning("Failed to persist hotspots: %s", e)
