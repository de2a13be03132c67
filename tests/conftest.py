"""Shared fakes for playback tests."""

import asyncio
from typing import Dict, List, Set

import pytest

from hotspot_reader.services.playback import AudioBackend, AudioHandle, SpeechEngine, Voice


class FakeIndicator:
    """Records every reading-state change."""

    def __init__(self, name: str = "indicator"):
        self.name = name
        self.states: List[bool] = []

    @property
    def reading(self) -> bool:
        return bool(self.states) and self.states[-1]

    def set_reading(self, active: bool) -> None:
        self.states.append(active)


class FakeAudioHandle(AudioHandle):
    def __init__(self, source: str, backend: "FakeAudioBackend"):
        super().__init__(source)
        self.backend = backend
        self.stopped = False

    async def start(self) -> bool:
        self.backend.events.append(f"start:{self.source}")
        gate = self.backend.gates.get(self.source)
        if gate is not None:
            await gate.wait()
        if self.source in self.backend.raising:
            raise RuntimeError("decoder crashed")
        return self.source in self.backend.playable

    def stop(self) -> None:
        self.stopped = True
        self.backend.events.append(f"stop:{self.source}")

    def finish(self) -> None:
        self._emit_finished()


class FakeAudioBackend(AudioBackend):
    """Sources in ``playable`` start; a source with a gate waits for it first."""

    def __init__(self):
        self.playable: Set[str] = set()
        self.raising: Set[str] = set()
        self.gates: Dict[str, asyncio.Event] = {}
        self.events: List[str] = []
        self.handles: List[FakeAudioHandle] = []

    @property
    def started(self) -> List[str]:
        return [event.split(":", 1)[1] for event in self.events if event.startswith("start:")]

    def create(self, source: str) -> AudioHandle:
        handle = FakeAudioHandle(source, self)
        self.handles.append(handle)
        return handle


class FakeSpeechEngine(SpeechEngine):
    def __init__(self, available: bool = True):
        self.available = available
        self.available_voices: List[Voice] = []
        self.requests = []
        self.callbacks = None
        self.cancel_count = 0

    def is_available(self) -> bool:
        return self.available

    def voices(self) -> List[Voice]:
        return list(self.available_voices)

    def speak(self, request, on_end, on_error) -> None:
        self.requests.append(request)
        self.callbacks = (on_end, on_error)

    def is_speaking(self) -> bool:
        return self.callbacks is not None

    def cancel(self) -> None:
        self.cancel_count += 1
        self.callbacks = None

    def end(self) -> None:
        on_end, _ = self.callbacks
        self.callbacks = None
        on_end()

    def fail(self) -> None:
        _, on_error = self.callbacks
        self.callbacks = None
        on_error()

    def publish_voices(self, voices: List[Voice]) -> None:
        """Voices finished loading after construction."""
        self.available_voices = list(voices)
        self._emit_voices_changed()


@pytest.fixture
def audio_backend():
    return FakeAudioBackend()


@pytest.fixture
def speech_engine():
    return FakeSpeechEngine()


@pytest.fixture
def make_indicator():
    return FakeIndicator
