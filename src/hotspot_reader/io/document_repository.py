"""Document Repository - reads and writes hotspot documents and audio manifests."""

import json
import logging
from pathlib import Path
from typing import Optional

from hotspot_reader.core import AudioManifest, DocumentFormatError, HotspotDocument
from hotspot_reader.io.key_value_store import KeyValueStore
from hotspot_reader.services.hotspot_store import HotspotSink

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Loads the bundled document and audio manifest that ship next to the pages.

    Load failures are not fatal: the caller keeps whatever state it has.
    """

    DOCUMENT_FILENAME = "hotspots.json"
    MANIFEST_FILENAME = "hotspot_audio_manifest.json"

    def __init__(self, app_root: Path):
        self.app_root = Path(app_root)

    def load_bundled(self) -> Optional[HotspotDocument]:
        """
        Load ``hotspots.json`` from the app root.

        Returns:
            The parsed document, or None when missing or unreadable.
        """
        path = self.app_root / self.DOCUMENT_FILENAME
        if not path.exists():
            return None

        try:
            document = HotspotDocument.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, OSError, DocumentFormatError) as e:
            logger.warning("Could not load %s: %s", path, e)
            return None

        logger.info("Loaded hotspots from %s", path)
        return document

    def load_manifest(self) -> AudioManifest:
        """Load the audio manifest; any failure yields an empty manifest."""
        path = self.app_root / self.MANIFEST_FILENAME
        if not path.exists():
            return AudioManifest()

        try:
            manifest = AudioManifest.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load %s: %s", path, e)
            return AudioManifest()

        logger.info("Loaded audio manifest from %s (%d entries)", path, len(manifest))
        return manifest

    def import_document(self, path: Path) -> HotspotDocument:
        """
        Read a user-supplied document.

        Raises:
            DocumentFormatError: if the file cannot be read, is not JSON, or has
                neither ``pages`` nor ``hotspots``.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            raise DocumentFormatError(f"Failed to read JSON: {e}") from e
        return HotspotDocument.from_dict(data)

    def export_document(self, document: HotspotDocument, path: Path) -> Path:
        """Write the document as pretty-printed JSON and return the path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        return path


class KeyValueHotspotSink(HotspotSink):
    """Persists the hotspot collection into the key-value store."""

    KEY = "hotspots"

    def __init__(self, store: KeyValueStore):
        self.store = store

    def save(self, document: HotspotDocument) -> None:
        self.store.set(self.KEY, json.dumps(document.to_dict()["hotspots"], ensure_ascii=False))

    def load(self) -> Optional[HotspotDocument]:
        """Return the saved hotspots as a document without pages, or None."""
        raw = self.store.get(self.KEY)
        if not raw:
            return None

        try:
            return HotspotDocument.from_dict({"hotspots": json.loads(raw)})
        except (json.JSONDecodeError, DocumentFormatError) as e:
            logger.warning("Failed to load saved hotspots: %s", e)
            return None
