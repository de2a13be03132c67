"""Ordered playback candidate lists for a hotspot's pre-rendered audio."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from hotspot_reader.core.asset_paths import image_base_name, join_location, normalize_slashes
from hotspot_reader.core.audio_manifest import ManifestEntry


def _unique(locations: Sequence[str]) -> List[str]:
    seen = set()
    ordered = []
    for location in locations:
        if location and location not in seen:
            seen.add(location)
            ordered.append(location)
    return ordered


@dataclass(frozen=True)
class CandidateBuilder:
    """
    Builds the locations tried for a hotspot, most specific first.

    Attributes:
        asset_root: Folder holding ``pages/`` and ``hotspot_audio/``.
        app_root: Folder manifest paths are relative to.
        extensions: Audio file extensions tried for conventional names.
    """

    asset_root: str
    app_root: str
    extensions: Sequence[str] = ("wav",)

    def conventional_name(self, image_id: str, index: int, extension: str) -> str:
        return f"{image_base_name(image_id)}_{index}.{extension}"

    def primary(self, image_id: str, index: int) -> List[str]:
        """``<asset_root>/hotspot_audio/<imageBase>_<index>.<ext>`` per extension."""
        return [
            join_location(self.asset_root, "hotspot_audio", self.conventional_name(image_id, index, ext))
            for ext in self.extensions
        ]

    def manifest_candidates(self, image_id: str, index: int, entry: ManifestEntry) -> List[str]:
        """Candidates when the manifest has an entry for this hotspot."""
        relative = normalize_slashes(entry.audio)
        file_name = relative.split("/")[-1]
        return _unique(
            [
                join_location(self.app_root, relative) if relative else "",
                *self.primary(image_id, index),
                join_location(self.asset_root, "hotspot_audio", file_name) if file_name else "",
                entry.audio,
            ]
        )

    def fallback_candidates(self, image_id: str, index: int) -> List[str]:
        """Conventional locations tried without (or after) a manifest entry."""
        return _unique(
            [
                *self.primary(image_id, index),
                *(
                    join_location(self.app_root, "hotspot_audio", self.conventional_name(image_id, index, ext))
                    for ext in self.extensions
                ),
            ]
        )

    def all_candidates(self, image_id: str, index: int, entry: Optional[ManifestEntry]) -> List[str]:
        """Every location this hotspot could be playing from."""
        manifest = self.manifest_candidates(image_id, index, entry) if entry else []
        return _unique([*manifest, *self.fallback_candidates(image_id, index)])
