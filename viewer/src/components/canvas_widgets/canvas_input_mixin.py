"""Mixin for pointer and touch input on the layer canvas.

Translates raw Qt input into navigation engine calls:
- Wheel: eased zoom anchored at the cursor
- Middle-drag: pan
- Left click: drill into the topmost drillable node under the cursor
- Right click: zoom out to the parent layer
- Pinch gesture: immediate zoom anchored at the pinch center
- Single-finger drag: pan
"""

from PyQt5.QtCore import Qt, QEvent
from PyQt5.QtWidgets import QPinchGesture

from utils.hit_testing import find_drillable_node_at
from constants import WHEEL_ZOOM_FACTOR, WHEEL_ZOOM_DURATION_MS


class CanvasInputMixin:
    """Mixin providing navigation input handling for the canvas."""

    # Expected state variables (initialized in main class):
    # - engine: NavigationEngine
    # - is_panning: bool
    # - last_mouse_pos: QPoint
    # - last_touch_pos: QPointF

    def _setup_input(self):
        """Enable mouse tracking, touch events and the pinch gesture."""
        self.setMouseTracking(True)
        self.setAttribute(Qt.WA_AcceptTouchEvents, True)
        self.grabGesture(Qt.PinchGesture)
        self.setContextMenuPolicy(Qt.PreventContextMenu)

    def drillable_node_at(self, pos):
        """Topmost drillable node under a widget position, or None."""
        layer = self.engine.get_current_layer()
        if layer is None:
            return None
        return find_drillable_node_at(
            layer.nodes, (pos.x(), pos.y()), self.viewport_size(), self.engine.transform
        )

    # ========================================
    # Mouse Event Handlers
    # ========================================

    def wheelEvent(self, event):
        """Handle mouse wheel for cursor-anchored zoom."""
        delta = event.angleDelta().y()
        if delta == 0:
            return
        scale = self.engine.transform.scale
        target = scale * WHEEL_ZOOM_FACTOR if delta > 0 else scale / WHEEL_ZOOM_FACTOR
        pos = event.pos()
        self.engine.animate_zoom(target, pos.x(), pos.y(), WHEEL_ZOOM_DURATION_MS)
        event.accept()

    def mousePressEvent(self, event):
        """Middle button starts a pan, left drills in, right zooms out."""
        button = event.button()
        if button == Qt.MiddleButton:
            self.is_panning = True
            self.last_mouse_pos = event.pos()
            self.setCursor(Qt.ClosedHandCursor)
            event.accept()
        elif button == Qt.LeftButton:
            node = self.drillable_node_at(event.pos())
            if node is not None:
                width, height = self.viewport_size()
                self.engine.zoom_in(node, width, height)
            event.accept()
        elif button == Qt.RightButton:
            width, height = self.viewport_size()
            self.engine.zoom_out(width, height)
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        """Pan while the middle button is held, otherwise update the hover cursor."""
        if self.is_panning and self.last_mouse_pos is not None:
            delta = event.pos() - self.last_mouse_pos
            self.last_mouse_pos = event.pos()
            self.engine.pan(delta.x(), delta.y())
            event.accept()
            return

        if self.drillable_node_at(event.pos()) is not None:
            self.setCursor(Qt.PointingHandCursor)
        else:
            self.setCursor(Qt.ArrowCursor)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        """End a middle-button pan."""
        if event.button() == Qt.MiddleButton and self.is_panning:
            self.is_panning = False
            self.last_mouse_pos = None
            self.setCursor(Qt.ArrowCursor)
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    # ========================================
    # Touch and Gesture Handlers
    # ========================================

    def event(self, event):
        """Route gesture and touch events before normal dispatch."""
        event_type = event.type()
        if event_type == QEvent.Gesture:
            return self._handle_gesture(event)
        if event_type in (QEvent.TouchBegin, QEvent.TouchUpdate, QEvent.TouchEnd, QEvent.TouchCancel):
            return self._handle_touch(event)
        return super().event(event)

    def _handle_gesture(self, event):
        pinch = event.gesture(Qt.PinchGesture)
        if pinch is None:
            return False
        if pinch.changeFlags() & QPinchGesture.ScaleFactorChanged:
            center = self.mapFromGlobal(pinch.centerPoint().toPoint())
            self.engine.set_zoom(
                self.engine.transform.scale * pinch.scaleFactor(), center.x(), center.y()
            )
        event.accept()
        return True

    def _handle_touch(self, event):
        """Single-finger drag pans; more fingers are left to the pinch gesture."""
        points = event.touchPoints()
        if event.type() in (QEvent.TouchEnd, QEvent.TouchCancel) or len(points) != 1:
            self.last_touch_pos = None
            event.accept()
            return True

        pos = points[0].pos()
        if event.type() == QEvent.TouchUpdate and self.last_touch_pos is not None:
            delta = pos - self.last_touch_pos
            self.engine.pan(delta.x(), delta.y())
        self.last_touch_pos = pos
        event.accept()
        return True
