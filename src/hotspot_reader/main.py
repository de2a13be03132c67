"""Main entry point for the hotspot reader application."""

import logging
import sys

from PySide6 import QtAsyncio
from PySide6.QtWidgets import QApplication

from hotspot_reader.coordinators import DrawSession, ReaderController, create_view_mode
from hotspot_reader.core import default_pages
from hotspot_reader.io import DocumentRepository, KeyValueHotspotSink, KeyValueStore
from hotspot_reader.logging_setup import setup_logging
from hotspot_reader.services import (
    CandidateBuilder,
    HotspotStore,
    PlaybackResolver,
    SettingsManager,
    SpeechSettings,
    VoiceCatalog,
)
from hotspot_reader.services.playback.qt_backends import QtAudioBackend, QtSpeechEngine
from hotspot_reader.ui import MainWindow, ReaderCanvas

logger = logging.getLogger(__name__)


def main():
    """
    Bootstrap the application following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    # 1. Configuration and logging
    settings = SettingsManager()
    data_dir = settings.get_data_dir()
    setup_logging(data_dir / "logs" / "hotspot_reader.log", settings.get_log_level())
    app_root = settings.get_app_root()
    asset_root = settings.get_asset_root()
    logger.info("Starting with app root %s and asset root %s", app_root, asset_root)

    # 2. Initialize Application
    app = QApplication(sys.argv)
    app.setApplicationName("Hotspot Reader")
    app.setOrganizationName("HotspotReader")

    # 3. Initialize Infrastructure
    preferences = KeyValueStore(data_dir)
    saved_hotspots = KeyValueHotspotSink(preferences)
    repository = DocumentRepository(app_root)
    store = HotspotStore(pages=default_pages(settings.get_total_pages()), sink=saved_hotspots)

    speech_engine = QtSpeechEngine()
    voice_catalog = VoiceCatalog(speech_engine, preferences, default_voice_id=settings.get_voice_id())

    resolver = PlaybackResolver(
        audio_backend=QtAudioBackend(start_timeout=settings.get_audio_start_timeout()),
        speech_engine=speech_engine,
        candidates=CandidateBuilder(
            asset_root=str(asset_root),
            app_root=str(app_root),
            extensions=tuple(settings.get_audio_extensions()),
        ),
        speech_settings=SpeechSettings(
            rate=settings.get_speech_rate() or 1.0,
            pitch=settings.get_speech_pitch() or 1.0,
        ),
        voice_provider=voice_catalog.selected_voice,
    )

    # 4. Construct UI
    canvas = ReaderCanvas()
    main_window = MainWindow()
    main_window.set_canvas(canvas)
    main_window.set_view_mode(settings.get_view_mode())
    main_window.set_show_outlines(settings.get_show_outlines())
    main_window.set_speech_values(settings.get_speech_rate(), settings.get_speech_pitch())

    draw_session = DrawSession(store, prompt=main_window.prompt_text)

    try:
        view_mode = create_view_mode(settings.get_view_mode())
    except ValueError as e:
        logger.warning("%s; using spread view", e)
        view_mode = create_view_mode("spread")

    # 5. Instantiate Coordinator (Dependency Injection)
    controller = ReaderController(
        main_window=main_window,
        canvas=canvas,
        store=store,
        repository=repository,
        resolver=resolver,
        draw_session=draw_session,
        asset_root=asset_root,
        saved_hotspots=saved_hotspots,
        voice_catalog=voice_catalog,
        view_mode=view_mode,
        show_outlines=settings.get_show_outlines(),
    )

    # 6. Signal Wiring (Connect UI signals to Controller slots)
    main_window.set_controller(controller)
    canvas.hotspot_clicked.connect(controller.handle_hotspot_clicked)
    canvas.pointer_pressed.connect(controller.handle_pointer_pressed)
    canvas.pointer_moved.connect(controller.handle_pointer_moved)
    canvas.pointer_released.connect(controller.handle_pointer_released)
    app.aboutToQuit.connect(resolver.stop)

    # 7. Show UI, load hotspots and run the Qt event loop with asyncio support
    main_window.show()
    controller.load_initial_state()

    QtAsyncio.run(handle_sigint=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
