"""Breadcrumb bar showing the path from the root layer to the current one."""

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QPushButton, QLabel
from PyQt5.QtCore import Qt


class BreadcrumbBar(QWidget):
    """One button per history entry, root first.

    Clicking an entry calls navigate_to_layer(index). The last entry is the
    current layer and stays disabled; every entry is disabled while a
    transition is running.
    """

    SEPARATOR = "›"

    def __init__(self, engine, parent=None):
        super().__init__(parent)
        self.engine = engine
        self.buttons = []
        self._shown = None

        self.setObjectName("breadcrumbBar")
        self._layout = QHBoxLayout(self)
        self._layout.setContentsMargins(12, 6, 12, 6)
        self._layout.setSpacing(4)

        self.engine.add_listener(self._on_state_changed)
        self.refresh()

    def detach(self):
        self.engine.remove_listener(self._on_state_changed)

    def _on_state_changed(self, state):
        key = (state.navigation_history, state.is_animating)
        if key != self._shown:
            self.refresh()

    def _clear(self):
        while self._layout.count():
            item = self._layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self.buttons = []

    def refresh(self):
        """Rebuild the buttons from the engine's history"""
        self._clear()
        breadcrumbs = self.engine.get_layer_breadcrumb()
        animating = self.engine.is_animating
        last = len(breadcrumbs) - 1

        for index, entry in enumerate(breadcrumbs):
            button = QPushButton(entry.name)
            button.setFlat(index != last)
            button.setCursor(Qt.PointingHandCursor)
            button.setToolTip(entry.name)
            button.setEnabled(not animating and index != last)
            if index == last:
                font = button.font()
                font.setBold(True)
                button.setFont(font)
            button.clicked.connect(lambda checked, i=index: self.engine.navigate_to_layer(i))
            self._layout.addWidget(button)
            self.buttons.append(button)

            if index < last:
                separator = QLabel(self.SEPARATOR)
                separator.setEnabled(False)
                self._layout.addWidget(separator)

        self._layout.addStretch()
        self._shown = (self.engine.navigation_history, animating)
