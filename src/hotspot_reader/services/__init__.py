"""Services layer - hotspot state, playback resolution and configuration."""

from hotspot_reader.services.hotspot_store import HotspotSink, HotspotStore
from hotspot_reader.services.render_projection import IndicatorLayout, RenderProjection
from hotspot_reader.services.settings_manager import SettingsManager
from hotspot_reader.services.voice_catalog import VoiceCatalog

# Playback
from hotspot_reader.services.playback import (
    CandidateBuilder,
    PlaybackKind,
    PlaybackRequest,
    PlaybackResolver,
    PlaybackSession,
    SpeechSettings,
)

__all__ = [
    "HotspotSink",
    "HotspotStore",
    "IndicatorLayout",
    "RenderProjection",
    "SettingsManager",
    "VoiceCatalog",
    "CandidateBuilder",
    "PlaybackKind",
    "PlaybackRequest",
    "PlaybackResolver",
    "PlaybackSession",
    "SpeechSettings",
]
