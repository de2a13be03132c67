"""Main Window - Application shell with menus, reading controls and prompts."""

from pathlib import Path
from typing import List, Optional, override

from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtGui import QAction, QActionGroup
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from hotspot_reader.core import PixelRect
from hotspot_reader.services.playback import Voice

JSON_FILTER = "JSON files (*.json);;All files (*)"


class MainWindow(QMainWindow):
    """Provides the application shell, reading toolbar, and keyboard navigation."""

    # Page navigation
    next_page = Signal()
    previous_page = Signal()
    page_jump_requested = Signal(int)  # 0-based page index
    view_mode_changed = Signal(str)  # "single" or "spread"
    # Hotspot file actions
    import_requested = Signal(Path)
    export_requested = Signal(Path)
    # Authoring and display
    authoring_toggled = Signal()
    outlines_toggled = Signal(bool)
    # Read aloud controls
    stop_requested = Signal()
    voice_selected = Signal(str)
    auto_voice_requested = Signal()
    rate_changed = Signal(str)
    pitch_changed = Signal(str)

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Hotspot Reader")
        self.setGeometry(100, 100, 1200, 800)

        self._page_number = 0
        self._page_count = 0

        self._setup_ui()
        self._create_menu_bar()

        # Arrow keys turn pages even when a toolbar field has focus.
        QApplication.instance().installEventFilter(self)

    def _setup_ui(self):
        """Initialize the toolbar row and the main layout."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        self.main_layout = QVBoxLayout(central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

        controls = QWidget()
        row = QHBoxLayout(controls)
        row.setContentsMargins(8, 6, 8, 0)

        self.prev_button = QPushButton("◀ Prev")
        self.prev_button.clicked.connect(self.previous_page.emit)
        self.next_button = QPushButton("Next ▶")
        self.next_button.clicked.connect(self.next_page.emit)
        self.page_label = QLabel()

        self.authoring_button = QPushButton("Draw Hotspots")
        self.authoring_button.setCheckable(True)
        self.authoring_button.clicked.connect(lambda _checked: self.authoring_toggled.emit())

        self.voice_combo = QComboBox()
        self.voice_combo.setMinimumWidth(220)
        self.voice_combo.activated.connect(self._on_voice_activated)

        self.rate_input = QLineEdit("1.0")
        self.rate_input.setFixedWidth(48)
        self.rate_input.editingFinished.connect(lambda: self.rate_changed.emit(self.rate_input.text()))
        self.pitch_input = QLineEdit("1.0")
        self.pitch_input.setFixedWidth(48)
        self.pitch_input.editingFinished.connect(lambda: self.pitch_changed.emit(self.pitch_input.text()))

        stop_button = QPushButton("Stop")
        stop_button.clicked.connect(self.stop_requested.emit)

        for widget in (self.prev_button, self.page_label, self.next_button, self.authoring_button):
            row.addWidget(widget)
        row.addStretch(1)
        row.addWidget(QLabel("Voice:"))
        row.addWidget(self.voice_combo)
        row.addWidget(QLabel("Rate:"))
        row.addWidget(self.rate_input)
        row.addWidget(QLabel("Pitch:"))
        row.addWidget(self.pitch_input)
        row.addWidget(stop_button)

        self.main_layout.addWidget(controls)

    def _create_menu_bar(self):
        """Create the application menu bar."""
        menu_bar = self.menuBar()

        # File menu
        file_menu = menu_bar.addMenu("&File")

        import_action = QAction("&Import Hotspots...", self)
        import_action.setShortcut("Ctrl+O")
        import_action.triggered.connect(self._on_import)
        file_menu.addAction(import_action)

        export_action = QAction("&Export Hotspots...", self)
        export_action.setShortcut("Ctrl+S")
        export_action.triggered.connect(self._on_export)
        file_menu.addAction(export_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Edit menu
        edit_menu = menu_bar.addMenu("&Edit")
        self.authoring_action = QAction("&Draw Hotspots", self)
        self.authoring_action.setCheckable(True)
        self.authoring_action.setShortcut("Ctrl+D")
        self.authoring_action.triggered.connect(lambda _checked: self.authoring_toggled.emit())
        edit_menu.addAction(self.authoring_action)

        # View menu
        view_menu = menu_bar.addMenu("&View")

        view_mode_group = QActionGroup(self)
        view_mode_group.setExclusive(True)

        self.single_page_action = QAction("&Single Page", self)
        self.single_page_action.setCheckable(True)
        self.single_page_action.triggered.connect(lambda: self._on_view_mode_changed("single"))
        view_mode_group.addAction(self.single_page_action)
        view_menu.addAction(self.single_page_action)

        self.spread_action = QAction("S&pread", self)
        self.spread_action.setCheckable(True)
        self.spread_action.setChecked(True)  # Default
        self.spread_action.triggered.connect(lambda: self._on_view_mode_changed("spread"))
        view_mode_group.addAction(self.spread_action)
        view_menu.addAction(self.spread_action)

        view_menu.addSeparator()

        self.outlines_action = QAction("Show Hotspot &Outlines", self)
        self.outlines_action.setCheckable(True)
        self.outlines_action.toggled.connect(self.outlines_toggled.emit)
        go_to_action = QAction("&Go to Page...", self)
        go_to_action.setShortcut("Ctrl+G")
        go_to_action.triggered.connect(self._on_go_to_page)
        view_menu.addAction(go_to_action)

        view_menu.addAction(self.outlines_action)

        # Audio menu
        audio_menu = menu_bar.addMenu("&Audio")

        stop_action = QAction("&Stop Reading", self)
        stop_action.setShortcut("Esc")
        stop_action.triggered.connect(self.stop_requested.emit)
        audio_menu.addAction(stop_action)

        auto_voice_action = QAction("Use &Vietnamese Voice", self)
        auto_voice_action.triggered.connect(self.auto_voice_requested.emit)
        audio_menu.addAction(auto_voice_action)

    def _on_view_mode_changed(self, mode: str):
        """Handle view mode change."""
        self.view_mode_changed.emit(mode)

    def _on_go_to_page(self):
        """Ask for a page number and request a jump to it."""
        if not self._page_count:
            return
        page, ok = QInputDialog.getInt(
            self, "Go to Page", f"Page number (1-{self._page_count}):", self._page_number, 1, self._page_count
        )
        if ok:
            self.page_jump_requested.emit(page - 1)

    def _on_voice_activated(self, row: int):
        voice_id = self.voice_combo.itemData(row)
        if voice_id:
            self.voice_selected.emit(voice_id)

    def _on_import(self):
        """Handle the Import Hotspots menu action."""
        file_path, _ = QFileDialog.getOpenFileName(self, "Import Hotspots", str(Path.home()), JSON_FILTER)
        if file_path:
            self.import_requested.emit(Path(file_path))

    def _on_export(self):
        """Handle the Export Hotspots menu action."""
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Export Hotspots", str(Path.home() / "hotspots.json"), JSON_FILTER
        )
        if file_path:
            self.export_requested.emit(Path(file_path))

    def set_canvas(self, canvas):
        """Set the reader canvas widget in the main layout."""
        self.main_layout.addWidget(canvas, 1)

    def set_controller(self, controller):
        """Inject the controller and wire UI signals to its slots."""
        self._controller = controller
        self.next_page.connect(controller.next_page)
        self.previous_page.connect(controller.previous_page)
        self.page_jump_requested.connect(controller.jump_to_page)
        self.view_mode_changed.connect(controller.handle_view_mode_changed)
        self.import_requested.connect(controller.handle_import)
        self.export_requested.connect(controller.handle_export)
        self.authoring_toggled.connect(controller.toggle_authoring)
        self.outlines_toggled.connect(controller.set_show_outlines)
        self.stop_requested.connect(controller.stop_playback)
        self.voice_selected.connect(controller.handle_voice_selected)
        self.auto_voice_requested.connect(controller.handle_auto_select_vietnamese)
        self.rate_changed.connect(controller.set_speech_rate)
        self.pitch_changed.connect(controller.set_speech_pitch)

    def set_view_mode(self, mode: str):
        """Check the menu entry for ``mode`` without emitting a change."""
        action = self.single_page_action if mode == "single" else self.spread_action
        action.setChecked(True)

    def set_show_outlines(self, show: bool):
        self.outlines_action.blockSignals(True)
        self.outlines_action.setChecked(show)
        self.outlines_action.blockSignals(False)

    def set_speech_values(self, rate: Optional[str], pitch: Optional[str]):
        self.rate_input.setText(rate or "1.0")
        self.pitch_input.setText(pitch or "1.0")

    def set_page_status(self, page: int, total: int, can_go_previous: bool, can_go_next: bool):
        self._page_number = page
        self._page_count = total
        self.page_label.setText(f"Page {page} / {total}" if total else "No pages")
        self.prev_button.setEnabled(can_go_previous)
        self.next_button.setEnabled(can_go_next)

    def set_authoring(self, enabled: bool):
        self.authoring_action.setChecked(enabled)
        self.authoring_button.setChecked(enabled)
        self.authoring_button.setText("Drawing: ON" if enabled else "Draw Hotspots")

    def populate_voices(self, voices: List[Voice], selected_id: Optional[str] = None):
        self.voice_combo.clear()
        if not voices:
            self.voice_combo.addItem("No voices available", None)
            self.voice_combo.setEnabled(False)
            return
        self.voice_combo.setEnabled(True)
        for voice in voices:
            self.voice_combo.addItem(voice.label, voice.id)
        self.set_selected_voice(selected_id)

    def set_selected_voice(self, voice_id: Optional[str]):
        row = self.voice_combo.findData(voice_id) if voice_id else -1
        self.voice_combo.setCurrentIndex(row if row >= 0 else 0)

    def prompt_text(self, rect: PixelRect) -> Optional[str]:
        """Ask for the passage text of a freshly drawn hotspot."""
        text, ok = QInputDialog.getText(self, "New Hotspot", "Enter passage text for this hotspot:")
        return text if ok else None

    def show_error(self, title: str, message: str):
        """Display an error message to the user."""
        QMessageBox.critical(self, title, message)

    def show_info(self, title: str, message: str):
        """Display an information message to the user."""
        QMessageBox.information(self, title, message)

    @override
    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        """Handle arrow keys for navigation anywhere in this window.

        Left-to-right reading order:
        - Right arrow: Next page
        - Left arrow: Previous page
        """
        if (
            event.type() == QEvent.Type.KeyPress
            and isinstance(watched, QWidget)
            and watched.window() is self
            and event.key() in (Qt.Key.Key_Right, Qt.Key.Key_Left)
            and not event.modifiers() & ~Qt.KeyboardModifier.KeypadModifier
        ):
            if event.key() == Qt.Key.Key_Right:
                self.next_page.emit()
            else:
                self.previous_page.emit()
            return True
        return super().eventFilter(watched, event)
