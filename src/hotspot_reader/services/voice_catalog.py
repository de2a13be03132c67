"""Voice Catalog - speech voice listing and the user's persisted choice."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Callable, List, Optional

from hotspot_reader.services.playback.backends import SpeechEngine, Voice

if TYPE_CHECKING:
    from hotspot_reader.io.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class VoiceCatalog:
    """
    Lists the speech engine's voices and remembers which one the user picked.

    The voice list may be empty until the engine has finished loading; use
    ``watch`` to hear when it reports new voices, then ``refresh``.
    """

    PREFERENCE_KEY = "voice_uri"

    def __init__(self, engine: SpeechEngine, preferences: Optional[KeyValueStore] = None,
                 default_voice_id: Optional[str] = None):
        self._engine = engine
        self._preferences = preferences
        self._voices: List[Voice] = []
        stored = preferences.get(self.PREFERENCE_KEY) if preferences is not None else None
        self._selected_id: Optional[str] = stored or default_voice_id

    def refresh(self) -> List[Voice]:
        self._voices = self._engine.voices() if self._engine.is_available() else []
        return list(self._voices)

    def watch(self, callback: Callable[[], None]) -> None:
        self._engine.set_voices_changed_callback(callback)

    def voices(self) -> List[Voice]:
        return list(self._voices)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def selected_voice(self) -> Optional[Voice]:
        """The chosen voice, else the first voice, else None."""
        if not self._voices:
            return None
        for voice in self._voices:
            if voice.id == self._selected_id or voice.name == self._selected_id:
                return voice
        return self._voices[0]

    def select(self, voice_id: str) -> None:
        self._selected_id = voice_id
        if self._preferences is None:
            return
        try:
            self._preferences.set(self.PREFERENCE_KEY, voice_id)
        except OSError as e:
            logger.warning("Failed to save voice preference: %s", e)

    def auto_select_language(self, language_prefix: str = "vi", name_pattern: str = "viet") -> bool:
        """
        Select the first voice whose language starts with ``language_prefix``
        or whose name matches ``name_pattern`` (case-insensitive).

        Returns:
            True if a voice was selected.
        """
        pattern = re.compile(name_pattern, re.IGNORECASE)
        prefix = language_prefix.lower()
        for voice in self._voices:
            if voice.language.lower().startswith(prefix) or pattern.search(voice.name):
                self.select(voice.id)
                return True
        return False
