"""Menu bar creation and menu action handlers for LayerViewerWindow"""

from PyQt5.QtWidgets import QMessageBox
from PyQt5.QtGui import QKeySequence
from PyQt5.QtCore import Qt

from constants import WHEEL_ZOOM_FACTOR, ANIMATE_ZOOM_DURATION_MS


class MenuMixin:
    """Menu bar and menu action handlers"""
    
    def _create_menu_bar(self):
        """Create the menu bar with File, Navigate, Help menus"""
        menubar = self.menuBar()
        
        # Add zoom controls to the right of menu bar
        from components.zoom_toolbar import ZoomToolbar
        self.zoom_toolbar = ZoomToolbar(self)
        self.zoom_toolbar.zoom_changed.connect(self._on_zoom_changed)
        menubar.setCornerWidget(self.zoom_toolbar, Qt.TopRightCorner)
        
        # File Menu
        file_menu = menubar.addMenu("&File")
        
        open_action = file_menu.addAction("&Open...")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.file_actions.open_content)
        
        # Recent Files submenu
        self.recent_menu = file_menu.addMenu("Recent Files")
        self._update_recent_files_menu()
        
        file_menu.addSeparator()
        
        export_png_action = file_menu.addAction("Export View as &PNG...")
        export_png_action.setShortcut("Ctrl+E")
        export_png_action.triggered.connect(self.file_actions.export_png)
        
        file_menu.addSeparator()
        
        exit_action = file_menu.addAction("E&xit")
        exit_action.setShortcut("Alt+F4")
        exit_action.triggered.connect(self.close)
        
        # Navigate Menu
        navigate_menu = menubar.addMenu("&Navigate")
        
        self.home_action = navigate_menu.addAction("&Home")
        self.home_action.setShortcut("H")
        self.home_action.triggered.connect(self._go_home)
        
        self.zoom_out_layer_action = navigate_menu.addAction("Zoom Out to &Parent")
        self.zoom_out_layer_action.setShortcuts([QKeySequence(Qt.Key_Escape), QKeySequence(Qt.Key_Up)])
        self.zoom_out_layer_action.triggered.connect(self._zoom_out_layer)
        
        navigate_menu.addSeparator()
        
        zoom_in_action = navigate_menu.addAction("Zoom &In")
        zoom_in_action.setShortcut("Ctrl++")
        zoom_in_action.triggered.connect(self._zoom_in)
        
        zoom_out_action = navigate_menu.addAction("Zoom &Out")
        zoom_out_action.setShortcut("Ctrl+-")
        zoom_out_action.triggered.connect(self._zoom_out)
        
        zoom_reset_action = navigate_menu.addAction("&Reset View")
        zoom_reset_action.setShortcut("Ctrl+0")
        zoom_reset_action.triggered.connect(self._zoom_reset)
        
        navigate_menu.addSeparator()
        
        self.auto_nav_action = navigate_menu.addAction("&Auto Navigation")
        self.auto_nav_action.setCheckable(True)
        self.auto_nav_action.setChecked(self.session_auto_enabled)
        self.auto_nav_action.toggled.connect(self._set_auto_navigation_enabled)
        
        # Help Menu
        help_menu = menubar.addMenu("&Help")
        
        shortcuts_action = help_menu.addAction("&Keyboard Shortcuts")
        shortcuts_action.setShortcut("F1")
        shortcuts_action.triggered.connect(self._show_shortcuts)
        
        about_action = help_menu.addAction("&About")
        about_action.triggered.connect(self._show_about)
    
    def _show_shortcuts(self):
        """Show keyboard shortcuts help dialog"""
        from components.shortcuts_dialog import ShortcutsDialog
        dialog = ShortcutsDialog(self)
        dialog.exec_()
    
    def _show_about(self):
        """Show about dialog"""
        from version import get_version
        QMessageBox.about(self, "About Layer Zoom Viewer",
            "<h3>Layer Zoom Viewer</h3>"
            "<p>Explore nested diagrams by zooming into nodes.</p>"
            f"<p>Version {get_version()}</p>")
    
    # ========================================
    # Navigation
    # ========================================
    
    def _go_home(self):
        self.engine.go_home()
    
    def _zoom_out_layer(self):
        """Return to the parent layer (Esc / Up)"""
        if self.engine.can_zoom_out():
            width, height = self.canvas.viewport_size()
            self.engine.zoom_out(width, height)
    
    def _zoom_around_center(self, scale):
        width, height = self.canvas.viewport_size()
        self.engine.animate_zoom(scale, width / 2, height / 2, ANIMATE_ZOOM_DURATION_MS)
    
    def _zoom_in(self):
        """Zoom in on canvas around the viewport center"""
        self._zoom_around_center(self.engine.transform.scale * WHEEL_ZOOM_FACTOR)
    
    def _zoom_out(self):
        """Zoom out on canvas around the viewport center"""
        self._zoom_around_center(self.engine.transform.scale / WHEEL_ZOOM_FACTOR)
    
    def _zoom_reset(self):
        """Snap the view back to identity when idle"""
        if self.engine.is_loaded and not self.engine.is_animating:
            self.engine.reset_transform()
    
    def _on_zoom_changed(self, zoom_percent):
        """Handle zoom level request from toolbar"""
        self._zoom_around_center(zoom_percent / 100.0)
    
    def _update_menu_actions(self):
        """Enable navigation actions that can currently run"""
        idle = self.engine.is_loaded and not self.engine.is_animating
        self.home_action.setEnabled(idle)
        self.zoom_out_layer_action.setEnabled(self.engine.can_zoom_out())
