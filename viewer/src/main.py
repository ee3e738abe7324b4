import sys
import os
import argparse
import logging
from dataclasses import replace

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Output to console
    ]
)

# Add viewer/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QStatusBar, QLabel
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPalette, QColor

# Component imports
from components.layer_canvas import LayerCanvas
from components.breadcrumb_bar import BreadcrumbBar
from components.navigation_sidebar import NavigationSidebar

# Service imports
from services.animator import Animator
from services.auto_navigation import AutoNavigator, AutoNavigationSettings
from services.frame_scheduler import QtFrameScheduler
from services.navigation_engine import NavigationEngine
from services.sample_data import water_cycle_config

# Utility imports
from utils.logger import set_main_window

from constants import CONFIG_DIR_NAME, CONFIG_FILE_NAME, MAX_RECENT_FILES

# Action imports
from actions.file_actions import FileActions

# Mixin imports
from window.menu_mixin import MenuMixin
from window.config_mixin import ConfigMixin

logger = logging.getLogger(__name__)


class LayerViewerWindow(MenuMixin, ConfigMixin, QMainWindow):
    """Main window: breadcrumb bar on top, navigation sidebar left, canvas filling the rest.

    Args:
        content_path: Optional content file to open on start (the built-in
            sample is shown otherwise, or if the file is rejected)
        auto_navigation: False to start with auto drill-in/out switched off
            for this session
    """

    def __init__(self, content_path=None, auto_navigation=True):
        super().__init__()
        self.setWindowTitle("Layer Zoom Viewer")
        self.resize(1280, 800)
        self.setMinimumSize(800, 600)

        # Track current content file
        self.current_file_path = None

        # Recent files and settings
        self.recent_files = []
        self.max_recent_files = MAX_RECENT_FILES
        self.auto_settings = AutoNavigationSettings()
        self.config_dir = os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
        self.config_file = os.path.join(self.config_dir, CONFIG_FILE_NAME)
        self._load_config()
        # --no-auto applies to this session only and is never saved
        self.session_auto_enabled = self.auto_settings.enabled and auto_navigation

        # Navigation model, driven by the Qt event loop
        self.scheduler = QtFrameScheduler(parent=self)
        self.animator = Animator(self.scheduler)
        self.engine = NavigationEngine(self.animator)

        # Initialize global logger with main window reference
        set_main_window(self)

        # Initialize action handlers (composition pattern)
        self.file_actions = FileActions(self)

        self.setup_ui()

        self.auto_navigator = AutoNavigator(
            self.engine, self.canvas.viewport_size, self.scheduler.now,
            replace(self.auto_settings, enabled=self.session_auto_enabled),
        )

        if content_path is None or not self.file_actions.load_file(content_path):
            self.load_content(water_cycle_config(), None)

    # ============= UI Setup =============

    def setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        root_layout = QHBoxLayout(central_widget)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)

        self.sidebar = NavigationSidebar(self.engine)
        root_layout.addWidget(self.sidebar)

        main_column = QVBoxLayout()
        main_column.setContentsMargins(0, 0, 0, 0)
        main_column.setSpacing(0)

        self.breadcrumb_bar = BreadcrumbBar(self.engine)
        main_column.addWidget(self.breadcrumb_bar)

        self.canvas = LayerCanvas(self.engine)
        self.canvas.view_changed.connect(self._on_view_changed)
        main_column.addWidget(self.canvas, 1)

        root_layout.addLayout(main_column, 1)

        # Create menu bar (includes zoom controls)
        self._create_menu_bar()

        # Status bar
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_left = QLabel("")
        self.status_right = QLabel("")
        self.status_bar.addWidget(self.status_left, 1)
        self.status_bar.addPermanentWidget(self.status_right)

    # ========================================
    # Core Application Methods
    # ========================================

    def load_content(self, config, path):
        """Show new content from its root layer

        Args:
            config: VisualizationConfig
            path: File it came from, or None for the built-in sample
        """
        self.engine.initialize(config)
        self.current_file_path = path
        self._update_window_title()
        self.canvas.setFocus()
        logger.info("Showing %s", path or "built-in sample")

    def _on_view_changed(self):
        """Reflect the live navigation state in the chrome"""
        layer = self.engine.get_current_layer()
        scale = self.engine.transform.scale
        self.status_left.setText(layer.name if layer else "")
        self.status_right.setText(f"{scale * 100:.0f}%")
        self.zoom_toolbar.set_zoom_percent(scale * 100)
        self._update_menu_actions()

    def closeEvent(self, event):
        """Stop animations and listeners before the widgets go away"""
        self.animator.cancel_all()
        self.auto_navigator.detach()
        self.canvas.detach()
        self.breadcrumb_bar.detach()
        self.sidebar.detach()
        super().closeEvent(event)


def apply_dark_palette(app):
    """Fusion style with a dark palette"""
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ToolTipBase, Qt.white)
    dark_palette.setColor(QPalette.ToolTipText, Qt.white)
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.BrightText, Qt.red)
    dark_palette.setColor(QPalette.Link, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)

    app.setPalette(dark_palette)


def main(argv=None):
    """Main entry point for the Layer Zoom Viewer application"""
    parser = argparse.ArgumentParser(description='Explore nested layer diagrams by zooming.')
    parser.add_argument('content', nargs='?', help='JSON layer content file (default: water cycle sample)')
    parser.add_argument('--no-auto', action='store_true', help='Start with auto navigation off')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    app = QtWidgets.QApplication(sys.argv[:1])
    apply_dark_palette(app)

    window = LayerViewerWindow(args.content, auto_navigation=not args.no_auto)
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
