"""Audio manifest entity - maps hotspots to pre-rendered audio clips."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ManifestEntry:
    """A pre-rendered clip for the hotspot at ``index`` on one page image."""

    index: int
    audio: str


@dataclass
class AudioManifest:
    """Read-only lookup from (image id, positional index) to an audio path."""

    entries: Dict[str, List[ManifestEntry]] = field(default_factory=dict)

    def find(self, image_id: str, index: int) -> Optional[ManifestEntry]:
        """Return the first entry for this image whose index matches, if any."""
        for entry in self.entries.get(image_id, []):
            if entry.index == index:
                return entry
        return None

    def __len__(self) -> int:
        return sum(len(items) for items in self.entries.values())

    @classmethod
    def from_dict(cls, data: Any) -> "AudioManifest":
        """Build a manifest from JSON, skipping entries that are not well formed."""
        manifest = cls()
        if not isinstance(data, dict):
            return manifest

        for image_id, items in data.items():
            if not isinstance(items, list):
                continue
            parsed = []
            for item in items:
                if not isinstance(item, dict):
                    continue
                index = item.get("index")
                # bool is an int subclass; reject it explicitly
                if not isinstance(index, int) or isinstance(index, bool):
                    continue
                parsed.append(ManifestEntry(index=index, audio=str(item.get("audio") or "")))
            manifest.entries[str(image_id)] = parsed
        return manifest
