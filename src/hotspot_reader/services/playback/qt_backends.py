"""Qt Multimedia and Qt TextToSpeech implementations of the playback backends."""

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from PySide6.QtCore import QLocale, QUrl
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtTextToSpeech import QTextToSpeech, QVoice

from hotspot_reader.core.geometry import clamp
from hotspot_reader.services.playback.backends import (
    AudioBackend,
    AudioHandle,
    FinishedCallback,
    SpeechEngine,
    SpeechRequest,
    Voice,
)

logger = logging.getLogger(__name__)


def to_qurl(source: str) -> QUrl:
    """URLs are used as-is; anything else is a local file path."""
    if "://" in source:
        return QUrl(source)
    return QUrl.fromLocalFile(str(Path(source).resolve()))


class QtAudioHandle(AudioHandle):
    """A QMediaPlayer whose start resolves once playback is really running."""

    def __init__(self, source: str, start_timeout: float = 5.0):
        super().__init__(source)
        self._start_timeout = start_timeout
        self._player: Optional[QMediaPlayer] = None
        self._output: Optional[QAudioOutput] = None
        self._pending: Optional[asyncio.Future] = None

    async def start(self) -> bool:
        if "://" not in self.source and not Path(self.source).exists():
            logger.debug("Audio file does not exist: %s", self.source)
            return False

        self._pending = asyncio.get_running_loop().create_future()
        self._output = QAudioOutput()
        self._player = QMediaPlayer()
        self._player.setAudioOutput(self._output)
        self._player.playbackStateChanged.connect(self._on_playback_state)
        self._player.mediaStatusChanged.connect(self._on_media_status)
        self._player.errorOccurred.connect(self._on_error)
        self._player.setSource(to_qurl(self.source))
        self._player.play()

        try:
            return await asyncio.wait_for(self._pending, self._start_timeout)
        except asyncio.TimeoutError:
            logger.warning("Timed out starting audio %s", self.source)
            return False
        finally:
            self._pending = None

    def stop(self) -> None:
        self._resolve_start(False)
        player, self._player = self._player, None
        if player is None:
            return
        player.stop()
        player.setPosition(0)
        player.setSource(QUrl())
        player.deleteLater()
        self._output = None

    def _resolve_start(self, started: bool) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.set_result(started)

    def _on_playback_state(self, state: QMediaPlayer.PlaybackState) -> None:
        if state == QMediaPlayer.PlaybackState.PlayingState:
            self._resolve_start(True)

    def _on_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if status == QMediaPlayer.MediaStatus.InvalidMedia:
            self._on_failure("invalid media")
        elif status == QMediaPlayer.MediaStatus.EndOfMedia:
            self._emit_finished()

    def _on_error(self, error: QMediaPlayer.Error, message: str) -> None:
        self._on_failure(message or str(error))

    def _on_failure(self, reason: str) -> None:
        logger.debug("Audio error for %s: %s", self.source, reason)
        if self._pending is not None and not self._pending.done():
            self._pending.set_result(False)
        else:
            self._emit_finished()


class QtAudioBackend(AudioBackend):
    def __init__(self, start_timeout: float = 5.0):
        self.start_timeout = start_timeout

    def create(self, source: str) -> AudioHandle:
        return QtAudioHandle(source, start_timeout=self.start_timeout)


class QtSpeechEngine(SpeechEngine):
    """
    QTextToSpeech wrapper.

    Qt rate and pitch range over [-1, 1] with 0 as normal, while callers use
    1.0 as normal; values are shifted and clamped.
    """

    def __init__(self, engine_name: Optional[str] = None):
        self._tts: Optional[QTextToSpeech] = None
        self._callbacks: Optional[Tuple[FinishedCallback, FinishedCallback]] = None
        self._speaking_seen = False
        self._voice_index: Dict[str, Tuple[QLocale, QVoice]] = {}
        self._voices_loaded = False

        engines = QTextToSpeech.availableEngines()
        if not engines:
            logger.warning("No text-to-speech engine available")
            return

        self._tts = QTextToSpeech(engine_name) if engine_name else QTextToSpeech()
        self._tts.stateChanged.connect(self._on_state_changed)
        self._tts.engineChanged.connect(self._on_engine_changed)

    def is_available(self) -> bool:
        return self._tts is not None and self._tts.state() != QTextToSpeech.State.Error

    def voices(self) -> List[Voice]:
        if not self.is_available():
            return []

        current_locale = self._tts.locale()
        current_voice = self._tts.voice().name()
        voices = []
        self._voice_index.clear()
        for locale in self._tts.availableLocales():
            self._tts.setLocale(locale)
            for qvoice in self._tts.availableVoices():
                voice_id = f"{locale.name()}:{qvoice.name()}"
                self._voice_index[voice_id] = (locale, qvoice)
                voices.append(
                    Voice(
                        id=voice_id,
                        name=qvoice.name(),
                        language=locale.bcp47Name(),
                        is_default=locale == current_locale and qvoice.name() == current_voice,
                    )
                )
        self._tts.setLocale(current_locale)
        self._voices_loaded = bool(voices)
        return voices

    def speak(
        self,
        request: SpeechRequest,
        on_end: FinishedCallback,
        on_error: FinishedCallback,
    ) -> None:
        if self._tts is None:
            raise RuntimeError("Speech synthesis not supported.")

        if request.voice is not None:
            if not self._voice_index:
                self.voices()
            match = self._voice_index.get(request.voice.id)
            if match is not None:
                locale, qvoice = match
                self._tts.setLocale(locale)
                self._tts.setVoice(qvoice)

        self._tts.setRate(clamp(request.rate - 1.0, -1.0, 1.0))
        self._tts.setPitch(clamp(request.pitch - 1.0, -1.0, 1.0))
        self._callbacks = (on_end, on_error)
        self._speaking_seen = False
        self._tts.say(request.text)

    def is_speaking(self) -> bool:
        return (
            self._tts is not None
            and self._callbacks is not None
            and self._tts.state() == QTextToSpeech.State.Speaking
        )

    def cancel(self) -> None:
        # Drop callbacks first: stop() emits a Ready state for the old utterance.
        self._callbacks = None
        if self._tts is not None:
            self._tts.stop()

    def _on_engine_changed(self, engine: str) -> None:
        logger.info("Speech engine changed to %s", engine)
        self._voice_index.clear()
        self._voices_loaded = False
        self._emit_voices_changed()

    def _on_state_changed(self, state: QTextToSpeech.State) -> None:
        if self._callbacks is not None:
            self._dispatch(state)
        # Some engines only list voices once they have finished initializing.
        if state == QTextToSpeech.State.Ready and not self._voices_loaded:
            self._emit_voices_changed()

    def _dispatch(self, state: QTextToSpeech.State) -> None:
        on_end, on_error = self._callbacks
        if state == QTextToSpeech.State.Speaking:
            self._speaking_seen = True
        elif state == QTextToSpeech.State.Ready and self._speaking_seen:
            self._callbacks = None
            on_end()
        elif state == QTextToSpeech.State.Error:
            logger.warning("Speech synthesis error")
            self._callbacks = None
            on_error()
