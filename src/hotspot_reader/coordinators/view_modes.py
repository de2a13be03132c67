"""View mode state objects for page rendering and navigation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from hotspot_reader.core import PageRef


class ViewMode(ABC):
    """State interface for view modes (single page vs cover-then-spreads)."""

    name: str

    @abstractmethod
    def pages_to_render(self, pages: Sequence[PageRef], current_page_number: int) -> List[PageRef]:
        """Return the list of pages to render for the current index."""

    @abstractmethod
    def next_page_number(self, pages: Sequence[PageRef], current_page_number: int) -> int:
        """Return the page index to navigate to when moving forward."""

    @abstractmethod
    def previous_page_number(self, pages: Sequence[PageRef], current_page_number: int) -> int:
        """Return the page index to navigate to when moving backward."""

    def can_go_next(self, pages: Sequence[PageRef], current_page_number: int) -> bool:
        return current_page_number < len(pages) - 1

    def can_go_previous(self, current_page_number: int) -> bool:
        return current_page_number > 0


class SinglePageMode(ViewMode):
    name = "single"

    def pages_to_render(self, pages: Sequence[PageRef], current_page_number: int) -> List[PageRef]:
        if 0 <= current_page_number < len(pages):
            return [pages[current_page_number]]
        return []

    def next_page_number(self, pages: Sequence[PageRef], current_page_number: int) -> int:
        if current_page_number + 1 < len(pages):
            return current_page_number + 1
        return current_page_number

    def previous_page_number(self, pages: Sequence[PageRef], current_page_number: int) -> int:
        if current_page_number > 0:
            return current_page_number - 1
        return current_page_number


class SpreadMode(ViewMode):
    """The cover (page 0) renders alone; after it, pages pair up as n, n+1."""

    name = "spread"

    def pages_to_render(self, pages: Sequence[PageRef], current_page_number: int) -> List[PageRef]:
        if not 0 <= current_page_number < len(pages):
            return []
        if current_page_number == 0:
            return [pages[0]]
        return list(pages[current_page_number:current_page_number + 2])

    def next_page_number(self, pages: Sequence[PageRef], current_page_number: int) -> int:
        if not pages:
            return current_page_number
        if current_page_number == 0:
            return min(1, len(pages) - 1)
        return min(len(pages) - 1, current_page_number + 2)

    def previous_page_number(self, pages: Sequence[PageRef], current_page_number: int) -> int:
        if current_page_number == 0:
            return 0
        if current_page_number == 1:
            return 0
        return max(1, current_page_number - 2)


SINGLE_PAGE_MODE = SinglePageMode()
SPREAD_MODE = SpreadMode()


def create_view_mode(mode: str) -> ViewMode:
    """Factory returning the appropriate view mode state.

    Raises:
        ValueError: If an unknown mode name is provided.
    """
    if mode == "spread":
        return SPREAD_MODE
    if mode == "single":
        return SINGLE_PAGE_MODE
    raise ValueError(f"Unknown view mode: {mode}")
