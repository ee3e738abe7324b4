"""Navigation sidebar: home button, one bubble per history entry, depth counter."""

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QToolButton, QLabel, QFrame
from PyQt5.QtCore import Qt


class NavigationSidebar(QWidget):
    """Vertical strip of navigation controls.

    All buttons are disabled while a transition is running. The bubble for
    the current layer is checked.
    """

    BUBBLE_SIZE = 40

    def __init__(self, engine, parent=None):
        super().__init__(parent)
        self.engine = engine
        self.bubbles = []
        self._shown = None

        self.setObjectName("navigationSidebar")
        self.setFixedWidth(80)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 16, 8, 16)
        layout.setSpacing(12)

        self.home_btn = QToolButton()
        self.home_btn.setText("⌂")
        self.home_btn.setToolTip("Go to home layer (H)")
        self.home_btn.setFixedSize(48, 48)
        self.home_btn.clicked.connect(self.engine.go_home)
        layout.addWidget(self.home_btn, 0, Qt.AlignHCenter)

        divider = QFrame()
        divider.setFrameShape(QFrame.HLine)
        divider.setFrameShadow(QFrame.Sunken)
        layout.addWidget(divider)

        self._bubble_layout = QVBoxLayout()
        self._bubble_layout.setSpacing(12)
        layout.addLayout(self._bubble_layout)

        layout.addStretch()

        self.depth_label = QLabel()
        self.depth_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.depth_label)

        self.engine.add_listener(self._on_state_changed)
        self.refresh()

    def detach(self):
        self.engine.remove_listener(self._on_state_changed)

    def _on_state_changed(self, state):
        key = (state.navigation_history, state.current_layer_id, state.is_animating)
        if key != self._shown:
            self.refresh()

    def refresh(self):
        """Rebuild bubbles and counters from the engine state"""
        while self._bubble_layout.count():
            widget = self._bubble_layout.takeAt(0).widget()
            if widget is not None:
                widget.deleteLater()
        self.bubbles = []

        state = self.engine.state
        animating = state.is_animating
        registry = self.engine.registry

        for index, layer_id in enumerate(state.navigation_history):
            name = registry.layer_name(layer_id, f"Layer {index}") if registry else f"Layer {index}"
            bubble = QToolButton()
            bubble.setText(str(index + 1))
            bubble.setToolTip(f"{name} ({index + 1})")
            bubble.setFixedSize(self.BUBBLE_SIZE, self.BUBBLE_SIZE)
            bubble.setCheckable(True)
            bubble.setChecked(layer_id == state.current_layer_id)
            bubble.setEnabled(not animating)
            bubble.clicked.connect(lambda checked, i=index: self.engine.navigate_to_layer(i))
            self._bubble_layout.addWidget(bubble, 0, Qt.AlignHCenter)
            self.bubbles.append(bubble)

        self.home_btn.setEnabled(not animating and self.engine.is_loaded)
        depth = state.depth
        self.depth_label.setText(f"<b>{depth}</b><br>{'layer' if depth == 1 else 'layers'}")
        self._shown = (state.navigation_history, state.current_layer_id, animating)
