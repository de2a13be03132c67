"""Playback Resolver - decides what a hotspot click plays and owns the active session."""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

from hotspot_reader.core import AudioManifest, Hotspot
from hotspot_reader.services.playback.backends import (
    AudioBackend,
    AudioHandle,
    ReadingIndicator,
    SpeechEngine,
    SpeechRequest,
    Voice,
)
from hotspot_reader.services.playback.candidates import CandidateBuilder

logger = logging.getLogger(__name__)


class PlaybackKind(Enum):
    AUDIO = "audio"
    SPEECH = "speech"


@dataclass(eq=False)
class PlaybackSession:
    """The single audible output. Compared by identity, never by value."""

    kind: PlaybackKind
    source: str
    indicator: Optional[ReadingIndicator]
    handle: Optional[AudioHandle] = None


@dataclass(frozen=True)
class PlaybackRequest:
    """A click on the hotspot at ``index`` of ``image_id``."""

    hotspot: Hotspot
    image_id: str
    index: int
    indicator: Optional[ReadingIndicator] = None


def speech_number(value: Any, default: float = 1.0) -> float:
    """Parse a rate/pitch control value; unparsable, absent or zero gives the default."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number == 0:
        return default
    return number


@dataclass
class SpeechSettings:
    """Caller-configured synthesis parameters, read at the moment speech starts."""

    rate: Any = 1.0
    pitch: Any = 1.0


class PlaybackResolver:
    """
    Resolves hotspot clicks into audio or speech playback.

    Candidates are tried strictly one after another: manifest locations first,
    then conventional fallback locations, then speech synthesis. At most one
    session is active; every new click stops the previous one first, and a
    click on the indicator that is currently playing just stops it.
    """

    SPEECH_UNSUPPORTED_MESSAGE = "Speech synthesis not supported."

    def __init__(
        self,
        audio_backend: AudioBackend,
        speech_engine: SpeechEngine,
        candidates: CandidateBuilder,
        manifest: Optional[AudioManifest] = None,
        speech_settings: Optional[SpeechSettings] = None,
        voice_provider: Optional[Callable[[], Optional[Voice]]] = None,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        self._audio = audio_backend
        self._speech = speech_engine
        self._candidates = candidates
        self.manifest = manifest or AudioManifest()
        self.speech_settings = speech_settings or SpeechSettings()
        self._voice_provider = voice_provider
        self.on_error = on_error

        self._active: Optional[PlaybackSession] = None
        # Bumped on every stop; attempts started under an older value are stale.
        self._generation = 0

    @property
    def active(self) -> Optional[PlaybackSession]:
        return self._active

    def set_manifest(self, manifest: AudioManifest) -> None:
        self.manifest = manifest

    async def resolve(self, request: PlaybackRequest) -> Optional[PlaybackSession]:
        """
        Play the best available resource for a clicked hotspot.

        Returns:
            The started session, or None when the click stopped playback,
            was superseded, or nothing could be played.
        """
        entry = self.manifest.find(request.image_id, request.index)
        known_sources = self._candidates.all_candidates(request.image_id, request.index, entry)

        if self._is_toggle(request, known_sources):
            self.stop()
            return None

        self.stop()
        generation = self._generation

        attempted: List[str] = []
        if entry is not None:
            manifest_candidates = self._candidates.manifest_candidates(request.image_id, request.index, entry)
            attempted.extend(manifest_candidates)
            session = await self._attempt_in_order(manifest_candidates, request.indicator, generation)
            if session is not None or generation != self._generation:
                return session

        fallback = [
            source
            for source in self._candidates.fallback_candidates(request.image_id, request.index)
            if source not in attempted
        ]
        session = await self._attempt_in_order(fallback, request.indicator, generation)
        if session is not None or generation != self._generation:
            return session

        logger.warning(
            "No playable audio candidate found for %s #%d, using speech",
            request.image_id,
            request.index,
        )
        return self._speak(request)

    def stop(self) -> None:
        """Stop whatever is playing. Idempotent; also invalidates in-flight attempts."""
        self._generation += 1
        session, self._active = self._active, None

        if session is not None:
            if session.handle is not None:
                self._release(session.handle)
            if session.indicator is not None:
                session.indicator.set_reading(False)

        if (session is not None and session.kind is PlaybackKind.SPEECH) or self._speech.is_speaking():
            self._speech.cancel()

    def _is_toggle(self, request: PlaybackRequest, known_sources: Sequence[str]) -> bool:
        active = self._active
        if active is None or active.indicator is None or active.indicator is not request.indicator:
            return False
        if active.kind is PlaybackKind.SPEECH:
            return True
        # Exact string match; both stages share one CandidateBuilder.
        return active.source in known_sources

    async def _attempt_in_order(
        self,
        candidates: Sequence[str],
        indicator: Optional[ReadingIndicator],
        generation: int,
    ) -> Optional[PlaybackSession]:
        for source in candidates:
            if generation != self._generation:
                return None

            try:
                handle = self._audio.create(source)
            except Exception as e:
                logger.warning("Could not create audio for %s: %s", source, e)
                continue

            session = PlaybackSession(PlaybackKind.AUDIO, source, indicator, handle)
            handle.set_finished_callback(lambda s=session: self._finish(s))
            # Marked before start so a stop() during the await can cancel it.
            self._activate(session)

            try:
                started = await handle.start()
            except Exception as e:
                logger.warning("Audio play failed for %s: %s", source, e)
                started = False

            if generation != self._generation:
                # Stopped or superseded while starting; never resurrect.
                self._release(handle)
                return None

            if started and self._active is session:
                logger.info("Playing audio %s", source)
                return session

            self._deactivate(session)
            logger.warning("Audio play failed for %s", source)
        return None

    def _speak(self, request: PlaybackRequest) -> Optional[PlaybackSession]:
        active = self._active
        if (
            active is not None
            and active.kind is PlaybackKind.SPEECH
            and active.indicator is request.indicator
            and self._speech.is_speaking()
        ):
            self.stop()
            return None

        if not request.hotspot.text.strip():
            # Some engines never leave Ready for an empty utterance.
            logger.info("Nothing to read for %s #%d", request.image_id, request.index)
            return None

        if not self._speech.is_available():
            logger.warning("Speech synthesis unavailable")
            if self.on_error is not None:
                self.on_error(self.SPEECH_UNSUPPORTED_MESSAGE)
            return None

        speech_request = SpeechRequest(
            text=request.hotspot.text,
            rate=speech_number(self.speech_settings.rate),
            pitch=speech_number(self.speech_settings.pitch),
            voice=self._voice_provider() if self._voice_provider else None,
        )
        session = PlaybackSession(PlaybackKind.SPEECH, request.hotspot.text, request.indicator)
        self._activate(session)

        try:
            self._speech.speak(
                speech_request,
                on_end=lambda: self._finish(session),
                on_error=lambda: self._finish(session),
            )
        except Exception as e:
            logger.warning("Speech synthesis failed: %s", e)
            self._finish(session)
            return None
        return session

    def _activate(self, session: PlaybackSession) -> None:
        self._active = session
        if session.indicator is not None:
            session.indicator.set_reading(True)

    def _deactivate(self, session: PlaybackSession) -> None:
        if self._active is session:
            self._active = None
            if session.indicator is not None:
                session.indicator.set_reading(False)
        if session.handle is not None:
            self._release(session.handle)

    def _finish(self, session: PlaybackSession) -> None:
        """Natural completion or error of a session that may no longer be active."""
        if self._active is not session:
            return
        self._deactivate(session)

    @staticmethod
    def _release(handle: AudioHandle) -> None:
        handle.set_finished_callback(None)
        try:
            handle.stop()
        except Exception as e:
            logger.warning("Failed to stop audio %s: %s", handle.source, e)
