"""Playback - candidate resolution, the active session, and backend interfaces.

Qt implementations live in ``qt_backends`` and are imported explicitly.
"""

from .backends import (
    AudioBackend,
    AudioHandle,
    ReadingIndicator,
    SpeechEngine,
    SpeechRequest,
    Voice,
)
from .candidates import CandidateBuilder
from .resolver import (
    PlaybackKind,
    PlaybackRequest,
    PlaybackResolver,
    PlaybackSession,
    SpeechSettings,
    speech_number,
)

__all__ = [
    "AudioBackend",
    "AudioHandle",
    "ReadingIndicator",
    "SpeechEngine",
    "SpeechRequest",
    "Voice",
    "CandidateBuilder",
    "PlaybackKind",
    "PlaybackRequest",
    "PlaybackResolver",
    "PlaybackSession",
    "SpeechSettings",
    "speech_number",
]
