"""Playback backend abstractions - audio clips, speech synthesis and indicators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

FinishedCallback = Callable[[], None]


class ReadingIndicator(Protocol):
    """Visual element of a hotspot that shows whether it is being read aloud."""

    def set_reading(self, active: bool) -> None: ...


class AudioHandle(ABC):
    """
    One playable audio resource.

    ``start`` is awaited: it resolves to True once playback has actually begun
    and False if the resource cannot be played.
    """

    def __init__(self, source: str):
        self.source = source
        self._on_finished: Optional[FinishedCallback] = None

    def set_finished_callback(self, callback: Optional[FinishedCallback]) -> None:
        """Called once on natural end of playback or on a playback error."""
        self._on_finished = callback

    def _emit_finished(self) -> None:
        callback, self._on_finished = self._on_finished, None
        if callback is not None:
            callback()

    @abstractmethod
    async def start(self) -> bool:
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop playback, rewind, and release the resource. Safe to repeat."""
        pass


class AudioBackend(ABC):
    """Factory for audio handles."""

    @abstractmethod
    def create(self, source: str) -> AudioHandle:
        pass


@dataclass(frozen=True)
class Voice:
    """A synthesis voice; ``id`` is stable across runs."""

    id: str
    name: str
    language: str
    is_default: bool = False

    @property
    def label(self) -> str:
        suffix = " (default)" if self.is_default else ""
        return f"{self.name} ({self.language}){suffix}"


@dataclass(frozen=True)
class SpeechRequest:
    text: str
    rate: float = 1.0
    pitch: float = 1.0
    voice: Optional[Voice] = None


class SpeechEngine(ABC):
    """Speech synthesis runtime. Speaking is fire-and-forget with callbacks."""

    _on_voices_changed: Optional[FinishedCallback] = None

    def set_voices_changed_callback(self, callback: Optional[FinishedCallback]) -> None:
        """Called whenever the engine's voice list may have changed, e.g. once it finishes loading."""
        self._on_voices_changed = callback

    def _emit_voices_changed(self) -> None:
        if self._on_voices_changed is not None:
            self._on_voices_changed()

    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    def voices(self) -> List[Voice]:
        pass

    @abstractmethod
    def speak(
        self,
        request: SpeechRequest,
        on_end: FinishedCallback,
        on_error: FinishedCallback,
    ) -> None:
        pass

    @abstractmethod
    def is_speaking(self) -> bool:
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Stop any speech in progress or pending."""
        pass
