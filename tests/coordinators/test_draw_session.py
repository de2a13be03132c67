"""Unit tests for DrawSession."""

from unittest.mock import MagicMock

import pytest

from hotspot_reader.coordinators import DrawSession, DrawState
from hotspot_reader.core import PixelRect
from hotspot_reader.services import HotspotStore


@pytest.fixture
def store():
    return HotspotStore()


@pytest.fixture
def prompt():
    return MagicMock(return_value="intro passage")


@pytest.fixture
def session(store, prompt):
    session = DrawSession(store, prompt, on_committed=MagicMock(), on_feedback=MagicMock())
    session.set_authoring(True)
    return session


def draw(session, start, end, image_id="1.png", size=(800, 600)):
    session.pointer_down(image_id, start[0], start[1], *size)
    session.pointer_move(*end)
    return session.pointer_up(*end)


class TestCommit:
    def test_draw_scenario_normalizes_rectangle(self, session, store, prompt):
        hotspot = draw(session, (100, 100), (300, 250))

        assert hotspot.x == pytest.approx(0.125, abs=0.001)
        assert hotspot.y == pytest.approx(0.1667, abs=0.001)
        assert hotspot.w == pytest.approx(0.25, abs=0.001)
        assert hotspot.h == pytest.approx(0.25, abs=0.001)
        assert hotspot.text == "intro passage"
        assert store.get("1.png") == [hotspot]
        prompt.assert_called_once_with(PixelRect(left=100, top=100, width=200, height=150))
        session.on_committed.assert_called_once_with("1.png", hotspot)
        assert session.state is DrawState.IDLE

    def test_drawing_backwards_gives_same_rectangle(self, session):
        hotspot = draw(session, (300, 250), (100, 100))

        assert (hotspot.x, hotspot.w) == pytest.approx((0.125, 0.25))

    def test_corners_outside_surface_are_clamped(self, session):
        hotspot = draw(session, (-100, -100), (1000, 300))

        assert (hotspot.x, hotspot.y, hotspot.w, hotspot.h) == pytest.approx((0.0, 0.0, 1.0, 0.5))

    def test_prompt_runs_in_committing_state(self, session, prompt):
        states = []
        prompt.side_effect = lambda rect: states.append(session.state) or "text"

        draw(session, (0, 0), (100, 100))

        assert states == [DrawState.COMMITTING]


class TestRejection:
    def test_tiny_rectangle_is_discarded(self, session, store, prompt):
        assert draw(session, (100, 100), (104, 300)) is None

        prompt.assert_not_called()
        assert store.is_empty()
        assert session.state is DrawState.IDLE

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_text_is_discarded(self, session, store, prompt, text):
        prompt.return_value = text

        assert draw(session, (100, 100), (300, 250)) is None
        assert store.is_empty()
        session.on_committed.assert_not_called()

    def test_pointer_down_ignored_when_not_authoring(self, store, prompt):
        session = DrawSession(store, prompt)

        assert not session.pointer_down("1.png", 10, 10, 800, 600)
        assert session.state is DrawState.IDLE
        assert session.pointer_up(100, 100) is None


class TestFeedback:
    def test_move_publishes_rectangle(self, session):
        session.pointer_down("1.png", 100, 100, 800, 600)

        rect = session.pointer_move(50, 150)

        assert rect == PixelRect(left=50, top=100, width=50, height=50)
        session.on_feedback.assert_called_with(rect)

    def test_pointer_up_clears_feedback(self, session):
        draw(session, (100, 100), (300, 250))

        session.on_feedback.assert_called_with(None)

    def test_move_without_gesture_is_ignored(self, session):
        assert session.pointer_move(10, 10) is None


class TestCancel:
    def test_disabling_authoring_cancels_gesture(self, session, store):
        session.pointer_down("1.png", 100, 100, 800, 600)
        session.pointer_move(300, 300)

        session.set_authoring(False)

        assert session.state is DrawState.IDLE
        session.on_feedback.assert_called_with(None)
        assert session.pointer_up(300, 300) is None
        assert store.is_empty()

    def test_second_pointer_down_restarts(self, session):
        session.pointer_down("1.png", 100, 100, 800, 600)
        session.pointer_down("2.png", 400, 300, 800, 600)

        hotspot = session.pointer_up(600, 450)

        assert session.on_committed.call_args.args[0] == "2.png"
        assert hotspot.x == pytest.approx(0.5)

    def test_cancel_is_idempotent(self, session):
        session.cancel()
        session.cancel()

        assert session.state is DrawState.IDLE
        session.on_feedback.assert_not_called()
