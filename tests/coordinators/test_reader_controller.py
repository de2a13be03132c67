"""Unit tests for ReaderController coordinator."""

import json
from unittest.mock import MagicMock

import pytest

from hotspot_reader.coordinators import SINGLE_PAGE_MODE, DrawSession, ReaderController
from hotspot_reader.core import AudioManifest, Hotspot, HotspotDocument, PageRef, default_pages
from hotspot_reader.io import DocumentRepository, KeyValueHotspotSink, KeyValueStore
from hotspot_reader.services import HotspotStore, PlaybackResolver, VoiceCatalog
from hotspot_reader.services.playback import Voice


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_main_window():
    """Mock MainWindow for testing."""
    window = MagicMock()
    window.show_info = MagicMock()
    window.show_error = MagicMock()
    return window


@pytest.fixture
def mock_canvas():
    """Mock ReaderCanvas for testing."""
    canvas = MagicMock()
    canvas.render_pages = MagicMock()
    return canvas


@pytest.fixture
def mock_resolver():
    resolver = MagicMock(spec=PlaybackResolver)
    resolver.speech_settings = MagicMock()
    return resolver


@pytest.fixture
def app_root(tmp_path):
    root = tmp_path / "book"
    root.mkdir()
    return root


@pytest.fixture
def saved_hotspots(tmp_path):
    return KeyValueHotspotSink(KeyValueStore(tmp_path / "data"))


@pytest.fixture
def store(saved_hotspots):
    return HotspotStore(pages=default_pages(6), sink=saved_hotspots)


@pytest.fixture
def draw_session(store):
    return DrawSession(store, prompt=MagicMock(return_value="new passage"))


@pytest.fixture
def scheduled():
    """Awaitables handed to the scheduler; coroutines are closed unrun."""
    return []


@pytest.fixture
def scheduler(scheduled):
    def schedule(awaitable):
        scheduled.append(awaitable)
        if hasattr(awaitable, "close"):
            awaitable.close()

    return schedule


@pytest.fixture
def controller(mock_main_window, mock_canvas, mock_resolver, app_root, store, draw_session, saved_hotspots, scheduler):
    """Create a ReaderController with mocked UI and playback."""
    return ReaderController(
        main_window=mock_main_window,
        canvas=mock_canvas,
        store=store,
        repository=DocumentRepository(app_root),
        resolver=mock_resolver,
        draw_session=draw_session,
        asset_root=app_root / "public",
        saved_hotspots=saved_hotspots,
        scheduler=scheduler,
    )


def rendered_ids(mock_canvas):
    views = mock_canvas.render_pages.call_args.args[0]
    return [view.image_id for view in views]


def write_document(path, document):
    path.write_text(json.dumps(document.to_dict()), encoding="utf-8")


# ============================================================================
# Loading
# ============================================================================


class TestLoadInitialState:
    def test_bundled_document_wins(self, controller, app_root, store, mock_canvas, mock_resolver):
        write_document(
            app_root / "hotspots.json",
            HotspotDocument(pages=[PageRef("a.png"), PageRef("b.png")], hotspots={"a.png": [Hotspot(0, 0, 1, 1, "A")]}),
        )

        controller.load_initial_state()

        assert [page.img for page in store.pages] == ["a.png", "b.png"]
        assert rendered_ids(mock_canvas) == ["a.png"]
        mock_resolver.set_manifest.assert_called_once()
        assert isinstance(mock_resolver.set_manifest.call_args.args[0], AudioManifest)

    def test_falls_back_to_saved_hotspots(self, controller, saved_hotspots, store):
        saved_hotspots.save(HotspotDocument(hotspots={"1.png": [Hotspot(0.1, 0.1, 0.2, 0.2, "saved")]}))

        controller.load_initial_state()

        assert store.get("1.png")[0].text == "saved"
        assert len(store.pages) == 6

    def test_bundled_load_does_not_persist(self, controller, app_root, saved_hotspots):
        write_document(app_root / "hotspots.json", HotspotDocument(hotspots={"1.png": [Hotspot(0, 0, 1, 1, "A")]}))

        controller.load_initial_state()

        assert saved_hotspots.load() is None

    def test_render_resolves_image_sources(self, controller, mock_canvas, app_root, mock_main_window):
        controller.load_initial_state()

        views = mock_canvas.render_pages.call_args.args[0]
        assert views[0].source == f"{app_root.as_posix()}/public/pages/1.png"
        mock_main_window.set_page_status.assert_called_with(1, 6, False, True)


# ============================================================================
# Navigation
# ============================================================================


class TestNavigation:
    def test_next_and_previous_follow_spreads(self, controller, mock_canvas, mock_resolver):
        controller.next_page()
        assert rendered_ids(mock_canvas) == ["2.png", "3.png"]

        controller.next_page()
        assert controller.current_page_number == 3

        controller.previous_page()
        assert controller.current_page_number == 1
        assert mock_resolver.stop.call_count == 3

    def test_navigation_cancels_drawing(self, controller, draw_session, mock_canvas):
        draw_session.set_authoring(True)
        draw_session.pointer_down("1.png", 10, 10, 100, 100)

        controller.next_page()

        assert draw_session.pointer_up(90, 90) is None
        mock_canvas.show_draw_feedback.assert_called_with(None)

    def test_jump_to_page_ignores_out_of_range(self, controller):
        controller.jump_to_page(4)
        controller.jump_to_page(40)

        assert controller.current_page_number == 4

    def test_jump_to_page_renders_target_spread(self, controller, mock_canvas, mock_resolver):
        controller.jump_to_page(3)

        assert rendered_ids(mock_canvas) == ["4.png", "5.png"]
        mock_resolver.stop.assert_called_once()

    def test_view_mode_change(self, controller, mock_canvas):
        controller.handle_view_mode_changed("single")

        assert controller.view_mode is SINGLE_PAGE_MODE
        assert rendered_ids(mock_canvas) == ["1.png"]

    def test_unknown_view_mode_reports(self, controller, mock_main_window):
        controller.handle_view_mode_changed("double")

        mock_main_window.show_error.assert_called_once()


# ============================================================================
# Playback
# ============================================================================


class TestHotspotClicked:
    def test_schedules_resolution(self, controller, store, mock_resolver, scheduled):
        store.append("1.png", Hotspot(0.1, 0.1, 0.2, 0.2, "hello"))
        indicator = MagicMock()

        controller.handle_hotspot_clicked("1.png", 0, indicator)

        assert len(scheduled) == 1
        request = mock_resolver.resolve.call_args.args[0]
        assert request.hotspot.text == "hello"
        assert request.index == 0
        assert request.indicator is indicator

    def test_ignored_while_authoring(self, controller, store, scheduled):
        store.append("1.png", Hotspot(0.1, 0.1, 0.2, 0.2, "hello"))
        controller.toggle_authoring()

        controller.handle_hotspot_clicked("1.png", 0, MagicMock())

        assert scheduled == []

    def test_unknown_index_ignored(self, controller, scheduled):
        controller.handle_hotspot_clicked("1.png", 3, MagicMock())

        assert scheduled == []

    def test_playback_error_is_shown(self, controller, mock_resolver, mock_main_window):
        mock_resolver.on_error("Speech synthesis not supported.")

        mock_main_window.show_error.assert_called_once_with("Read Aloud", "Speech synthesis not supported.")

    def test_speech_controls_update_settings(self, controller, mock_resolver):
        controller.set_speech_rate("1.4")
        controller.set_speech_pitch("0.9")

        assert mock_resolver.speech_settings.rate == "1.4"
        assert mock_resolver.speech_settings.pitch == "0.9"


class TestVoices:
    def test_auto_select_without_match_reports(self, controller, mock_main_window):
        controller.voice_catalog = MagicMock()
        controller.voice_catalog.auto_select_language.return_value = False

        assert not controller.handle_auto_select_vietnamese()
        assert mock_main_window.show_error.call_args.args[0] == "Voice Not Found"

    def test_auto_select_updates_window(self, controller, mock_main_window):
        controller.voice_catalog = MagicMock()
        controller.voice_catalog.auto_select_language.return_value = True
        controller.voice_catalog.selected_id = "vi_VN:Linh"

        assert controller.handle_auto_select_vietnamese()
        mock_main_window.set_selected_voice.assert_called_once_with("vi_VN:Linh")

    def test_voice_selected(self, controller):
        controller.voice_catalog = MagicMock()

        controller.handle_voice_selected("en_US:Samantha")

        controller.voice_catalog.select.assert_called_once_with("en_US:Samantha")

    def test_late_voices_repopulate_picker(
        self, mock_main_window, mock_canvas, mock_resolver, app_root, store, draw_session, speech_engine
    ):
        linh = Voice("vi_VN:Linh", "Linh", "vi-VN")
        controller = ReaderController(
            main_window=mock_main_window,
            canvas=mock_canvas,
            store=store,
            repository=DocumentRepository(app_root),
            resolver=mock_resolver,
            draw_session=draw_session,
            asset_root=app_root / "public",
            voice_catalog=VoiceCatalog(speech_engine),
        )
        controller.load_initial_state()
        mock_main_window.populate_voices.assert_called_once_with([], None)

        speech_engine.publish_voices([linh])

        mock_main_window.populate_voices.assert_called_with([linh], None)
        assert controller.handle_auto_select_vietnamese()
        mock_main_window.set_selected_voice.assert_called_once_with("vi_VN:Linh")



# ============================================================================
# Authoring
# ============================================================================


class TestAuthoring:
    def test_toggle_authoring(self, controller, draw_session, mock_resolver, mock_canvas, mock_main_window):
        controller.render()

        assert controller.toggle_authoring()

        assert draw_session.authoring
        mock_resolver.stop.assert_called_once()
        mock_canvas.set_authoring.assert_called_with(True)
        mock_main_window.set_authoring.assert_called_with(True)
        views = mock_canvas.render_pages.call_args.args[0]
        assert views[0].projection.layout(100, 100) == []

        assert not controller.toggle_authoring()
        assert not draw_session.authoring

    def test_authoring_shows_outlines_without_rerender(self, controller, store, mock_canvas):
        store.append("1.png", Hotspot(0.1, 0.1, 0.2, 0.2, "x"))
        controller.render()
        projection = mock_canvas.render_pages.call_args.args[0][0].projection
        projection.surface_resized(100, 100)

        controller.toggle_authoring()

        mock_canvas.render_pages.assert_called_once()
        assert projection.layouts[0].outline_visible

        controller.toggle_authoring()

        assert not projection.layouts[0].outline_visible

    def test_drawn_hotspot_is_committed_and_rendered(self, controller, store, mock_canvas, saved_hotspots):
        controller.toggle_authoring()
        mock_canvas.render_pages.reset_mock()

        controller.handle_pointer_pressed("1.png", 100, 100, 800, 600)
        controller.handle_pointer_moved(200, 200)
        controller.handle_pointer_released(300, 250)

        assert store.get("1.png")[0].text == "new passage"
        mock_canvas.render_pages.assert_called_once()
        assert saved_hotspots.load().hotspots["1.png"][0].text == "new passage"

    def test_show_outlines_updates_displayed_projections(self, controller, store, mock_canvas):
        store.append("1.png", Hotspot(0.1, 0.1, 0.2, 0.2, "x"))
        controller.render()
        projection = mock_canvas.render_pages.call_args.args[0][0].projection
        projection.surface_resized(10, 10)

        controller.set_show_outlines(True)

        mock_canvas.render_pages.assert_called_once()
        assert projection.layouts[0].outline_visible

        controller.render()

        assert mock_canvas.render_pages.call_args.args[0][0].projection.layout(10, 10)[0].outline_visible


# ============================================================================
# Import / export
# ============================================================================


class TestImportExport:
    def test_import_replaces_and_persists(self, controller, store, tmp_path, mock_main_window, saved_hotspots):
        store.append("1.png", Hotspot(0.1, 0.1, 0.2, 0.2, "old"))
        path = tmp_path / "import.json"
        write_document(path, HotspotDocument(hotspots={"2.png": [Hotspot(0.3, 0.3, 0.1, 0.1, "new")]}))

        controller.handle_import(path)

        assert store.get("1.png") == []
        assert store.get("2.png")[0].text == "new"
        assert "2.png" in saved_hotspots.load().hotspots
        mock_main_window.show_info.assert_called_once()

    def test_import_resets_page_beyond_new_pages(self, controller, tmp_path):
        controller.jump_to_page(5)
        path = tmp_path / "import.json"
        write_document(path, HotspotDocument(pages=[PageRef("x.png")], hotspots={}))

        controller.handle_import(path)

        assert controller.current_page_number == 0

    def test_malformed_import_keeps_state(self, controller, store, tmp_path, mock_main_window):
        store.append("1.png", Hotspot(0.1, 0.1, 0.2, 0.2, "keep"))
        path = tmp_path / "bad.json"
        path.write_text('{"foo": 1}', encoding="utf-8")

        controller.handle_import(path)

        assert store.get("1.png")[0].text == "keep"
        assert mock_main_window.show_error.call_args.args[0] == "Import Failed"
        mock_main_window.show_info.assert_not_called()

    def test_export_writes_snapshot(self, controller, store, tmp_path):
        store.append("1.png", Hotspot(0.1, 0.1, 0.2, 0.2, "x"))
        path = tmp_path / "export.json"

        controller.handle_export(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["hotspots"]["1.png"][0]["text"] == "x"
        assert len(data["pages"]) == 6

    def test_export_failure_reports(self, controller, tmp_path, mock_main_window):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")

        controller.handle_export(blocker / "export.json")

        assert mock_main_window.show_error.call_args.args[0] == "Export Failed"
