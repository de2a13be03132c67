"""Coordinators - Orchestration layer connecting UI with the hotspot core."""

from .draw_session import DrawSession, DrawState
from .reader_controller import ReaderController
from .view_modes import SINGLE_PAGE_MODE, SPREAD_MODE, ViewMode, create_view_mode

__all__ = [
    "DrawSession",
    "DrawState",
    "ReaderController",
    "SINGLE_PAGE_MODE",
    "SPREAD_MODE",
    "ViewMode",
    "create_view_mode",
]
