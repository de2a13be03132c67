"""Reader Controller - Central coordinator for the reading and authoring session."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Set

from PySide6.QtCore import QObject, Slot

from hotspot_reader.coordinators.draw_session import DrawSession
from hotspot_reader.coordinators.view_modes import SPREAD_MODE, ViewMode, create_view_mode
from hotspot_reader.core import DocumentFormatError, Hotspot
from hotspot_reader.core.asset_paths import resolve_image_source
from hotspot_reader.io import DocumentRepository, KeyValueHotspotSink
from hotspot_reader.services import (
    HotspotStore,
    PlaybackRequest,
    PlaybackResolver,
    RenderProjection,
    VoiceCatalog,
)
from hotspot_reader.services.playback import ReadingIndicator
from hotspot_reader.services.render_projection import PageView

logger = logging.getLogger(__name__)

Scheduler = Callable[[Awaitable[Any]], Any]


class ReaderController(QObject):
    """
    Manages live session state and routes UI events to the core.

    Owns the current page index, view mode and outline visibility. Playback
    state belongs to the resolver and gesture state to the draw session;
    the controller only calls their operations.
    """

    def __init__(
        self,
        main_window,
        canvas,
        store: HotspotStore,
        repository: DocumentRepository,
        resolver: PlaybackResolver,
        draw_session: DrawSession,
        asset_root: Path,
        saved_hotspots: Optional[KeyValueHotspotSink] = None,
        voice_catalog: Optional[VoiceCatalog] = None,
        view_mode: ViewMode = SPREAD_MODE,
        show_outlines: bool = False,
        scheduler: Optional[Scheduler] = None,
    ):
        super().__init__()

        self.main_window = main_window
        self.canvas = canvas
        self.store = store
        self.repository = repository
        self.resolver = resolver
        self.draw_session = draw_session
        self.asset_root = Path(asset_root)
        self.saved_hotspots = saved_hotspots
        self.voice_catalog = voice_catalog
        self.view_mode = view_mode
        self.show_outlines = show_outlines
        self._schedule = scheduler or asyncio.ensure_future
        self._pending: Set[Any] = set()

        # Session state
        self.current_page_number: int = 0
        self._views: List[PageView] = []

        self.draw_session.on_committed = self.handle_hotspot_committed
        self.draw_session.on_feedback = self.canvas.show_draw_feedback
        self.resolver.on_error = self.handle_playback_error
        if self.voice_catalog is not None:
            self.voice_catalog.watch(self.refresh_voices)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load_initial_state(self) -> None:
        """Load manifest and bundled document, fall back to saved hotspots, render."""
        self.refresh_voices()
        self.resolver.set_manifest(self.repository.load_manifest())

        document = self.repository.load_bundled()
        if document is not None:
            self.store.replace_all(document, persist=False)

        if self.store.is_empty() and self.saved_hotspots is not None:
            saved = self.saved_hotspots.load()
            if saved is not None:
                self.store.replace_all(saved, persist=False)
                logger.info("Loaded saved hotspots")

        self.render()

    # ------------------------------------------------------------------
    # Rendering and navigation
    # ------------------------------------------------------------------
    def render(self) -> None:
        """Render the current page or spread with its hotspot projections."""
        pages = self.store.pages
        outlines = self.show_outlines or self.draw_session.authoring
        views = [
            PageView(
                image_id=page.img,
                source=resolve_image_source(page.img, str(self.asset_root), str(self.repository.app_root)),
                projection=RenderProjection(page.img, self.store.get(page.img), show_outlines=outlines),
            )
            for page in self.view_mode.pages_to_render(pages, self.current_page_number)
        ]
        self._views = views
        self.canvas.render_pages(views)
        self.main_window.set_page_status(
            self.current_page_number + 1,
            len(pages),
            self.view_mode.can_go_previous(self.current_page_number),
            self.view_mode.can_go_next(pages, self.current_page_number),
        )

    @Slot()
    def next_page(self) -> None:
        self._go_to(self.view_mode.next_page_number(self.store.pages, self.current_page_number))

    @Slot()
    def previous_page(self) -> None:
        self._go_to(self.view_mode.previous_page_number(self.store.pages, self.current_page_number))

    @Slot(int)
    def jump_to_page(self, page_number: int) -> None:
        """Show the view containing ``page_number`` (0-based). Out of range is ignored."""
        if 0 <= page_number < len(self.store.pages):
            self._go_to(page_number)

    def _go_to(self, page_number: int) -> None:
        if page_number == self.current_page_number:
            return
        self.current_page_number = page_number
        self.resolver.stop()
        self.draw_session.cancel()
        self.render()

    @Slot(str)
    def handle_view_mode_changed(self, mode_name: str) -> None:
        try:
            self.view_mode = create_view_mode(mode_name)
        except ValueError as e:
            self.main_window.show_error("View Mode", str(e))
            return
        self.render()

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    def handle_hotspot_clicked(self, image_id: str, index: int, indicator: Optional[ReadingIndicator]) -> None:
        """Resolve a click on a hotspot indicator. Ignored while authoring."""
        if self.draw_session.authoring:
            return

        hotspots = self.store.get(image_id)
        if not 0 <= index < len(hotspots):
            logger.warning("Click on unknown hotspot %s #%d", image_id, index)
            return

        request = PlaybackRequest(hotspot=hotspots[index], image_id=image_id, index=index, indicator=indicator)
        task = self._schedule(self.resolver.resolve(request))
        if task is not None and hasattr(task, "add_done_callback"):
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    @Slot()
    def stop_playback(self) -> None:
        self.resolver.stop()

    def handle_playback_error(self, message: str) -> None:
        self.main_window.show_error("Read Aloud", message)

    def set_speech_rate(self, value: Any) -> None:
        self.resolver.speech_settings.rate = value

    def set_speech_pitch(self, value: Any) -> None:
        self.resolver.speech_settings.pitch = value

    @Slot()
    def refresh_voices(self) -> None:
        """Re-read the engine's voices and show them in the voice picker."""
        if self.voice_catalog is None:
            return
        voices = self.voice_catalog.refresh()
        logger.info("Speech engine reports %d voices", len(voices))
        self.main_window.populate_voices(voices, self.voice_catalog.selected_id)

    def handle_voice_selected(self, voice_id: str) -> None:
        if self.voice_catalog is not None:
            self.voice_catalog.select(voice_id)

    def handle_auto_select_vietnamese(self) -> bool:
        if self.voice_catalog is None or not self.voice_catalog.auto_select_language("vi", "viet"):
            self.main_window.show_error(
                "Voice Not Found",
                "No Vietnamese voice found. Try installing or enabling Vietnamese voices in system settings.",
            )
            return False
        self.main_window.set_selected_voice(self.voice_catalog.selected_id)
        return True

    # ------------------------------------------------------------------
    # Authoring
    # ------------------------------------------------------------------
    @Slot()
    def toggle_authoring(self) -> bool:
        enabled = not self.draw_session.authoring
        self.draw_session.set_authoring(enabled)
        if enabled:
            self.resolver.stop()
        self.canvas.set_authoring(enabled)
        self.main_window.set_authoring(enabled)
        self._apply_outlines()
        return enabled

    @Slot(bool)
    def set_show_outlines(self, show: bool) -> None:
        self.show_outlines = show
        self._apply_outlines()

    def _apply_outlines(self) -> None:
        outlines = self.show_outlines or self.draw_session.authoring
        for view in self._views:
            view.projection.set_show_outlines(outlines)

    def handle_pointer_pressed(self, image_id: str, x: float, y: float, width: float, height: float) -> None:
        self.draw_session.pointer_down(image_id, x, y, width, height)

    def handle_pointer_moved(self, x: float, y: float) -> None:
        self.draw_session.pointer_move(x, y)

    def handle_pointer_released(self, x: float, y: float) -> None:
        self.draw_session.pointer_up(x, y)

    def handle_hotspot_committed(self, image_id: str, hotspot: Hotspot) -> None:
        self.render()

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------
    @Slot(Path)
    def handle_import(self, path: Path) -> None:
        try:
            document = self.repository.import_document(path)
        except DocumentFormatError as e:
            self.main_window.show_error("Import Failed", str(e))
            return

        self.resolver.stop()
        self.draw_session.cancel()
        self.store.replace_all(document)
        if self.current_page_number >= len(self.store.pages):
            self.current_page_number = 0
        self.render()
        self.main_window.show_info("Hotspots Imported", f"Imported hotspots from:\n{path}")

    @Slot(Path)
    def handle_export(self, path: Path) -> None:
        try:
            written = self.repository.export_document(self.store.document(), path)
        except OSError as e:
            self.main_window.show_error("Export Failed", f"Could not write {path}:\n{e}")
            return
        logger.info("Exported hotspots to %s", written)
