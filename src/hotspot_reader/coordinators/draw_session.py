"""Draw Session - the pointer gesture that authors a new hotspot."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from hotspot_reader.core import Hotspot, PixelRect, rect_from_corners, to_unit
from hotspot_reader.services.hotspot_store import HotspotStore

logger = logging.getLogger(__name__)

TextPrompt = Callable[[PixelRect], Optional[str]]
FeedbackListener = Callable[[Optional[PixelRect]], None]
CommitListener = Callable[[str, Hotspot], None]


class DrawState(Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    COMMITTING = "committing"


@dataclass
class _Gesture:
    image_id: str
    anchor_x: float
    anchor_y: float
    current_x: float
    current_y: float
    surface_width: float
    surface_height: float

    def rect(self) -> PixelRect:
        return rect_from_corners(
            self.anchor_x,
            self.anchor_y,
            self.current_x,
            self.current_y,
            self.surface_width,
            self.surface_height,
        )


class DrawSession:
    """
    State machine for drawing a hotspot: pointer down, move, up, then text.

    Holds at most one gesture. Rectangles smaller than ``MIN_SIZE`` of the
    surface in either direction, and empty text, are discarded silently.
    """

    MIN_SIZE = 0.01

    def __init__(
        self,
        store: HotspotStore,
        prompt: TextPrompt,
        on_committed: Optional[CommitListener] = None,
        on_feedback: Optional[FeedbackListener] = None,
    ):
        self.store = store
        self.prompt = prompt
        self.on_committed = on_committed
        self.on_feedback = on_feedback
        self._authoring = False
        self._state = DrawState.IDLE
        self._gesture: Optional[_Gesture] = None

    @property
    def state(self) -> DrawState:
        return self._state

    @property
    def authoring(self) -> bool:
        return self._authoring

    def set_authoring(self, enabled: bool) -> None:
        """Enable or disable authoring; disabling drops any gesture in progress."""
        self._authoring = enabled
        if not enabled:
            self.cancel()

    def pointer_down(
        self,
        image_id: str,
        x: float,
        y: float,
        surface_width: float,
        surface_height: float,
    ) -> bool:
        """Start a gesture at (x, y). Returns False when not authoring."""
        if not self._authoring:
            return False
        if self._gesture is not None:
            self.cancel()

        gesture = _Gesture(
            image_id=image_id,
            anchor_x=x,
            anchor_y=y,
            current_x=x,
            current_y=y,
            surface_width=surface_width,
            surface_height=surface_height,
        )
        anchor = gesture.rect()
        gesture.anchor_x, gesture.anchor_y = anchor.left, anchor.top
        gesture.current_x, gesture.current_y = anchor.left, anchor.top

        self._gesture = gesture
        self._state = DrawState.DRAWING
        self._publish(gesture.rect())
        return True

    def pointer_move(self, x: float, y: float) -> Optional[PixelRect]:
        """Update the transient rectangle while drawing."""
        if self._gesture is None:
            return None
        self._gesture.current_x, self._gesture.current_y = x, y
        rect = self._gesture.rect()
        self._publish(rect)
        return rect

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None) -> Optional[Hotspot]:
        """
        Finish the gesture and commit a hotspot if it is large enough and
        the prompt returns text.

        Returns:
            The committed hotspot, or None if nothing was added.
        """
        gesture = self._gesture
        if gesture is None:
            return None
        if x is not None and y is not None:
            gesture.current_x, gesture.current_y = x, y

        rect = gesture.rect()
        self._gesture = None
        self._publish(None)

        left, top = to_unit(rect.left, rect.top, gesture.surface_width, gesture.surface_height)
        right, bottom = to_unit(rect.right, rect.bottom, gesture.surface_width, gesture.surface_height)
        width, height = right - left, bottom - top

        if width < self.MIN_SIZE or height < self.MIN_SIZE:
            self._state = DrawState.IDLE
            return None

        self._state = DrawState.COMMITTING
        try:
            text = self.prompt(rect)
        finally:
            self._state = DrawState.IDLE

        if not text or not text.strip():
            return None

        hotspot = Hotspot(x=left, y=top, w=width, h=height, text=text)
        index = self.store.append(gesture.image_id, hotspot)
        logger.info("Added hotspot #%d on %s", index, gesture.image_id)
        if self.on_committed is not None:
            self.on_committed(gesture.image_id, hotspot)
        return hotspot

    def cancel(self) -> None:
        """Discard any gesture and remove its rectangle. Safe when idle."""
        had_gesture = self._gesture is not None
        self._gesture = None
        self._state = DrawState.IDLE
        if had_gesture:
            self._publish(None)

    def _publish(self, rect: Optional[PixelRect]) -> None:
        if self.on_feedback is not None:
            self.on_feedback(rect)
