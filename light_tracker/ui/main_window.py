"""Main window for Light Tracker."""

from PyQt5 import QtWidgets, QtCore
from typing import Optional
import logging

from ..core.brightness_localizer import BrightnessLocalizer, DEFAULT_GRID_SIZE, FINE_GRID_SIZE
from ..core.detection_session import DetectionSession
from ..core.frame_scheduler import QtFrameScheduler
from ..core.frame_source import CameraFrameSource
from ..core.history_exporter import export_history
from ..core.overlay_renderer import OverlayRenderer, OVERLAY_STYLES
from ..core.settings_manager import SettingsManager
from ..models.analysis_result import AnalysisResult
from ..models.frame_data import FrameData
from ..models.result_history import ResultHistory
from .video_widget import VideoDisplayLabel
from .styles.theme import apply_theme

APP_WINDOW_TITLE = "Light Tracker"
START_BUTTON_TEXT = "Start Detection"
STOP_BUTTON_TEXT = "Stop Detection"
GRID_SIZE_CHOICES = [5, DEFAULT_GRID_SIZE, 20, FINE_GRID_SIZE]


class MainWindow(QtWidgets.QMainWindow):
    """Main application window."""

    def __init__(self, settings_manager: Optional[SettingsManager] = None,
                 session: Optional[DetectionSession] = None):
        super().__init__()

        self.settings_manager = settings_manager or SettingsManager()
        settings = self.settings_manager.settings

        self.renderer = OverlayRenderer(
            style=settings.overlay_style,
            show_angle_label=settings.show_angle_label,
            show_grid=settings.show_grid
        )
        self.session = session or self._create_session()

        self._setup_ui()
        self._setup_menus()
        self._connect_signals()
        self._load_settings()

        self.session.register_ui_callback('started', self._on_detection_started)
        self.session.register_ui_callback('result', self._on_result)
        self.session.register_ui_callback('status', self._on_status)
        self.session.register_ui_callback('acquisition_failed', self._on_acquisition_failed)
        self.session.register_ui_callback('stopped', self._on_detection_stopped)

        logging.info("Main window initialized")

    def _create_session(self) -> DetectionSession:
        """Build a detection session from the current settings."""
        settings = self.settings_manager.settings
        capture = self.settings_manager.get_capture_settings()
        return DetectionSession(
            source=CameraFrameSource(capture['video_source'], mirror=capture['mirror']),
            localizer=BrightnessLocalizer(settings.grid_size),
            scheduler=QtFrameScheduler(capture['frame_interval_ms'], parent=self),
            history=ResultHistory(settings.history_size)
        )

    def _setup_ui(self):
        """Setup the main UI layout."""
        self.setWindowTitle(APP_WINDOW_TITLE)
        self.setMinimumSize(800, 600)

        central_widget = QtWidgets.QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QtWidgets.QVBoxLayout(central_widget)
        main_layout.setContentsMargins(4, 4, 4, 4)

        self.video_label = VideoDisplayLabel()
        main_layout.addWidget(self.video_label, 1)

        self.status_label = QtWidgets.QLabel("Ready")
        self.status_label.setObjectName("statusLabel")
        self.status_label.setAlignment(QtCore.Qt.AlignCenter)
        main_layout.addWidget(self.status_label)

        controls_layout = QtWidgets.QHBoxLayout()

        self.start_button = QtWidgets.QPushButton(START_BUTTON_TEXT)
        controls_layout.addWidget(self.start_button)

        controls_layout.addWidget(QtWidgets.QLabel("Grid:"))
        self.grid_combo = QtWidgets.QComboBox()
        choices = sorted(set(GRID_SIZE_CHOICES + [self.session.localizer.grid_size]))
        for size in choices:
            self.grid_combo.addItem(f"{size} x {size}", size)
        self.grid_combo.setCurrentIndex(choices.index(self.session.localizer.grid_size))
        controls_layout.addWidget(self.grid_combo)

        controls_layout.addWidget(QtWidgets.QLabel("Overlay:"))
        self.style_combo = QtWidgets.QComboBox()
        for style in OVERLAY_STYLES:
            self.style_combo.addItem(style.capitalize(), style)
        self.style_combo.setCurrentIndex(OVERLAY_STYLES.index(self.renderer.style))
        controls_layout.addWidget(self.style_combo)

        self.grid_checkbox = QtWidgets.QCheckBox("Show grid")
        self.grid_checkbox.setChecked(self.renderer.show_grid)
        controls_layout.addWidget(self.grid_checkbox)

        controls_layout.addStretch(1)

        self.export_button = QtWidgets.QPushButton("Export Results...")
        controls_layout.addWidget(self.export_button)

        main_layout.addLayout(controls_layout)

        self.status_bar = self.statusBar()
        self.status_bar.showMessage("Ready - press Start Detection to open the camera")

    def _setup_menus(self):
        """Setup application menus."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu('&File')

        export_action = QtWidgets.QAction('&Export Results...', self)
        export_action.setShortcut('Ctrl+E')
        export_action.setStatusTip('Save recorded directions as CSV and plot')
        export_action.triggered.connect(self._export_results_dialog)
        file_menu.addAction(export_action)

        file_menu.addSeparator()

        exit_action = QtWidgets.QAction('E&xit', self)
        exit_action.setShortcut('Ctrl+Q')
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        detection_menu = menubar.addMenu('&Detection')

        toggle_action = QtWidgets.QAction('&Start/Stop', self)
        toggle_action.setShortcut('Space')
        toggle_action.triggered.connect(self._toggle_detection)
        detection_menu.addAction(toggle_action)

        view_menu = menubar.addMenu('&View')
        theme_menu = view_menu.addMenu('Theme')

        dark_theme_action = QtWidgets.QAction('Dark', self)
        dark_theme_action.triggered.connect(lambda: self._set_theme('dark'))
        theme_menu.addAction(dark_theme_action)

        light_theme_action = QtWidgets.QAction('Light', self)
        light_theme_action.triggered.connect(lambda: self._set_theme('light'))
        theme_menu.addAction(light_theme_action)

        view_menu.addSeparator()

        reset_action = QtWidgets.QAction('&Reset Settings', self)
        reset_action.setStatusTip('Restore default grid, overlay and theme settings')
        reset_action.triggered.connect(self.reset_settings)
        view_menu.addAction(reset_action)

        help_menu = menubar.addMenu('&Help')
        about_action = QtWidgets.QAction('&About', self)
        about_action.triggered.connect(self._show_about_dialog)
        help_menu.addAction(about_action)

    def _connect_signals(self):
        """Connect widget signals."""
        self.start_button.clicked.connect(self._toggle_detection)
        self.grid_combo.currentIndexChanged.connect(self._on_grid_size_changed)
        self.style_combo.currentIndexChanged.connect(self._on_overlay_style_changed)
        self.grid_checkbox.toggled.connect(self._on_show_grid_toggled)
        self.export_button.clicked.connect(self._export_results_dialog)

    def _load_settings(self):
        """Restore window geometry and theme."""
        geometry = self.settings_manager.get_window_geometry()
        if geometry:
            self.setGeometry(geometry['x'], geometry['y'], geometry['width'], geometry['height'])

        app = QtWidgets.QApplication.instance()
        if app is not None:
            apply_theme(app, self.settings_manager.get_setting('theme', 'dark'))

    def _save_settings(self):
        """Persist window geometry and current choices."""
        rect = self.geometry()
        self.settings_manager.set_window_geometry(rect.x(), rect.y(), rect.width(), rect.height())
        self.settings_manager.settings.grid_size = self.session.localizer.grid_size
        self.settings_manager.save_settings()

    def reset_settings(self):
        """Restore default settings and apply them to the running window."""
        self.settings_manager.reset_to_defaults()
        settings = self.settings_manager.settings

        self.grid_combo.setCurrentIndex(self.grid_combo.findData(settings.grid_size))
        self.style_combo.setCurrentIndex(self.style_combo.findData(settings.overlay_style))
        self.grid_checkbox.setChecked(settings.show_grid)
        self.renderer.set_rendering_options(show_angle_label=settings.show_angle_label)
        apply_theme(QtWidgets.QApplication.instance(), settings.theme)
        self.status_bar.showMessage("Settings reset to defaults", 2000)

    def _set_theme(self, theme_name: str):
        apply_theme(QtWidgets.QApplication.instance(), theme_name)
        self.settings_manager.set_setting('theme', theme_name)

    # Detection control

    def _toggle_detection(self):
        """Start or stop detection from the button."""
        self.session.toggle()

    def _on_detection_started(self):
        self.start_button.setText(STOP_BUTTON_TEXT)
        self.status_bar.showMessage("Detecting", 2000)

    def _on_detection_stopped(self):
        self.start_button.setText(START_BUTTON_TEXT)
        self.video_label.show_placeholder()

    def _on_result(self, result: AnalysisResult, frame: FrameData):
        """Draw the overlay for a freshly analysed frame."""
        rendered = self.renderer.render(frame.bgr, result, self.session.localizer.grid_size)
        self.video_label.set_frame(rendered)

    def _on_status(self, message: str):
        self.status_label.setText(message)

    def _on_acquisition_failed(self, message: str):
        self.start_button.setText(START_BUTTON_TEXT)
        self.status_bar.showMessage(message, 5000)

    # Option changes

    def _on_grid_size_changed(self, index: int):
        grid_size = self.grid_combo.itemData(index)
        if grid_size is None:
            return
        self.session.localizer.set_grid_size(grid_size)
        self.settings_manager.settings.grid_size = grid_size
        self.status_bar.showMessage(f"Grid size set to {grid_size} x {grid_size}", 2000)

    def _on_overlay_style_changed(self, index: int):
        style = self.style_combo.itemData(index)
        if style is None:
            return
        self.renderer.set_rendering_options(style=style)
        self.settings_manager.set_overlay_preferences(style=style)

    def _on_show_grid_toggled(self, checked: bool):
        self.renderer.set_rendering_options(show_grid=checked)
        self.settings_manager.set_overlay_preferences(show_grid=checked)

    # Export

    def _export_results_dialog(self):
        """Ask for a directory and export the recorded history."""
        history = self.session.history
        if history is None or len(history) == 0:
            QtWidgets.QMessageBox.information(
                self, "No Results", "Run detection first to record light directions."
            )
            return

        start_dir = self.settings_manager.get_setting('last_export_directory', '')
        output_dir = QtWidgets.QFileDialog.getExistingDirectory(
            self, "Select Export Directory", start_dir
        )
        if output_dir:
            self.export_results(output_dir)

    def export_results(self, output_dir: str) -> bool:
        """Export the recorded history to output_dir and report the outcome."""
        result = export_history(self.session.history, output_dir)
        if result.is_error():
            QtWidgets.QMessageBox.critical(self, "Export Error", str(result.error))
            return False

        self.settings_manager.settings.last_export_directory = output_dir
        paths = result.unwrap()
        self.status_bar.showMessage(f"Exported {len(self.session.history)} results to {paths['csv']}", 5000)
        return True

    def _show_about_dialog(self):
        """Show about dialog."""
        about_text = """
        <h2>Light Tracker</h2>
        <p>Estimates the direction of the dominant light source seen by the camera.</p>

        <p>Each frame is split into a grid; the cell with the highest average
        perceptual brightness (0.299 R + 0.587 G + 0.114 B) marks the light,
        and its direction from the frame center is shown in degrees.</p>

        <p><b>Built with:</b> Python, PyQt5, OpenCV, NumPy, pandas, Matplotlib</p>
        """

        dialog = QtWidgets.QMessageBox(self)
        dialog.setWindowTitle("About Light Tracker")
        dialog.setTextFormat(QtCore.Qt.RichText)
        dialog.setText(about_text)
        dialog.exec_()

    def closeEvent(self, event):
        """Handle window close event."""
        self.session.cleanup()
        self._save_settings()
        event.accept()
