"""I/O layer - Document files and local persistence."""

from .document_repository import DocumentRepository, KeyValueHotspotSink
from .key_value_store import KeyValueStore

__all__ = ["DocumentRepository", "KeyValueHotspotSink", "KeyValueStore"]
