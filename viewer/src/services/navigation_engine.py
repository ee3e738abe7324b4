"""
Layer Zoom Viewer - Navigation Engine

THE MODEL in the MVC architecture for navigation. Owns the navigation state
and every operation that changes it.

This class handles:
- Current layer and the root-to-current history stack
- Per-layer saved view transforms (restored on zoom-out)
- Animated drill-in / drill-out / go-home / breadcrumb jumps
- Immediate pan and pointer-anchored zoom, plus animated wheel zoom

The engine is INDEPENDENT of UI:
- No Qt imports
- No notion of viewport size (callers pass it per operation)
- No rendering logic

States:
    IDLE           no animation in flight
    TRANSITIONING  one animated transform in flight; drill operations,
                   pan and manual zoom are rejected

Every operation is a silent no-op when its preconditions fail.

Usage:
    engine = NavigationEngine(Animator(QtFrameScheduler()))
    engine.add_listener(lambda state: canvas.update())
    engine.initialize(config)

    engine.zoom_in(node, 800, 600)
    engine.zoom_out(800, 600)
    engine.go_home()
"""

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Callable, List, Optional

from models.layer import Layer, Node
from models.navigation_state import BreadcrumbEntry, NavigationPhase, NavigationState
from models.transform import Transform
from services.layer_registry import LayerRegistry
from utils.transform_math import clamp_scale, frame_to_node, lerp_transform, zoom_around
from constants import (
    ZOOM_IN_DURATION_MS, ZOOM_OUT_DURATION_MS, GO_HOME_DURATION_MS,
    NAVIGATE_TO_LAYER_DURATION_MS, ANIMATE_ZOOM_DURATION_MS,
    TRANSFORM_CHANNEL, ZOOM_CHANNEL,
)

logger = logging.getLogger(__name__)


class NavigationEngine:
    """State machine for layered zoom navigation.

    Args:
        animator: Animator used for every animated transition
    """

    def __init__(self, animator):
        self._animator = animator
        self._registry: Optional[LayerRegistry] = None
        self._state = NavigationState.empty()
        self._listeners: List[Callable[[NavigationState], None]] = []

    # ========================================
    # State access
    # ========================================

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def registry(self) -> Optional[LayerRegistry]:
        return self._registry

    @property
    def animator(self):
        return self._animator

    @property
    def current_layer_id(self) -> str:
        return self._state.current_layer_id

    @property
    def navigation_history(self):
        return self._state.navigation_history

    @property
    def layer_transforms(self):
        return self._state.layer_transforms

    @property
    def transform(self) -> Transform:
        return self._state.transform

    @property
    def is_animating(self) -> bool:
        return self._state.is_animating

    @property
    def phase(self) -> NavigationPhase:
        return self._state.phase

    @property
    def background_color(self) -> str:
        return self._state.background_color

    @property
    def is_loaded(self) -> bool:
        return self._registry is not None

    def get_current_layer(self) -> Optional[Layer]:
        if self._registry is None:
            return None
        return self._registry.get(self._state.current_layer_id)

    def get_layer_breadcrumb(self) -> List[BreadcrumbEntry]:
        """History as (id, name) entries, root first"""
        if self._registry is None:
            return []
        return [
            BreadcrumbEntry(layer_id, self._registry.layer_name(layer_id))
            for layer_id in self._state.navigation_history
        ]

    def can_zoom_out(self) -> bool:
        return not self._state.is_animating and self._state.depth > 1

    # ========================================
    # Listeners
    # ========================================

    def add_listener(self, callback: Callable[[NavigationState], None]):
        """Call callback(state) after every state change"""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self):
        for callback in list(self._listeners):
            # Read the state at call time: an earlier listener may have navigated
            callback(self._state)

    def _set(self, **changes):
        """Single update entry point: install a new snapshot, then notify"""
        if 'layer_transforms' in changes:
            changes['layer_transforms'] = MappingProxyType(dict(changes['layer_transforms']))
        self._state = replace(self._state, **changes)
        self._notify_listeners()

    # ========================================
    # Loading
    # ========================================

    def initialize(self, config):
        """Replace all navigation state with freshly loaded content.

        Args:
            config: VisualizationConfig or an already built LayerRegistry

        Raises:
            LayerDataError: If the content fails validation
        """
        registry = config if isinstance(config, LayerRegistry) else LayerRegistry(config)

        self._animator.cancel(TRANSFORM_CHANNEL)
        self._animator.cancel(ZOOM_CHANNEL)
        self._registry = registry

        root = registry.root
        logger.info("Initialized with %d layer(s), root %r", len(registry), root.id)
        self._set(
            current_layer_id=root.id,
            navigation_history=(root.id,),
            layer_transforms={},
            transform=Transform.identity(),
            background_color=root.background_color,
            is_animating=False,
        )

    # ========================================
    # Drill navigation
    # ========================================

    def _reject(self, operation, reason):
        logger.debug("%s ignored: %s", operation, reason)

    def _check_ready(self, operation) -> bool:
        if self._registry is None:
            self._reject(operation, "no content loaded")
            return False
        if self._state.is_animating:
            self._reject(operation, "transition in progress")
            return False
        return True

    def zoom_in(self, node: Node, viewport_width: float, viewport_height: float):
        """Drill into node's child layer.

        Saves the current view for the layer being left, animates the view to
        frame the node, then swaps to the child layer at identity.
        """
        if not self._check_ready("zoom_in"):
            return
        if not node.child_layer_id:
            self._reject("zoom_in", f"node {node.id!r} has no child layer")
            return
        if viewport_width <= 0 or viewport_height <= 0:
            self._reject("zoom_in", "empty viewport")
            return

        current = self.get_current_layer()
        if current is None or current.get_node(node.id) is None:
            logger.warning("zoom_in: node %r is not in layer %r", node.id, self._state.current_layer_id)
            return
        child = self._registry.get(node.child_layer_id)
        if child is None:
            logger.warning("zoom_in: child layer %r of node %r not found", node.child_layer_id, node.id)
            return

        saved = dict(self._state.layer_transforms)
        saved[self._state.current_layer_id] = self._state.transform
        target = frame_to_node(node, viewport_width, viewport_height)

        logger.info("Zooming into %r -> layer %r", node.id, child.id)
        self._set(layer_transforms=saved, is_animating=True)
        self._animate_transform(target, ZOOM_IN_DURATION_MS, on_complete=lambda: self._finish_zoom_in(child))

    def _finish_zoom_in(self, child: Layer):
        self._animator.cancel(TRANSFORM_CHANNEL)
        self._set(
            current_layer_id=child.id,
            navigation_history=self._state.navigation_history + (child.id,),
            background_color=child.background_color,
            transform=Transform.identity(),
            is_animating=False,
        )

    def zoom_out(self, viewport_width: float, viewport_height: float):
        """Return to the parent layer.

        Jumps straight to the parent node's framing (where zoom_in ended),
        then animates to the view saved when the parent was left.
        """
        if not self._check_ready("zoom_out"):
            return
        history = self._state.navigation_history
        if len(history) <= 1:
            self._reject("zoom_out", "already at root")
            return
        if viewport_width <= 0 or viewport_height <= 0:
            self._reject("zoom_out", "empty viewport")
            return

        current_id = self._state.current_layer_id
        parent_id = history[-2]
        parent_layer = self._registry.get(parent_id)
        parent_node = self._registry.find_parent_node(current_id, parent_id)
        if parent_layer is None or parent_node is None:
            logger.warning("zoom_out: no node in %r owns layer %r", parent_id, current_id)
            return

        start = frame_to_node(parent_node, viewport_width, viewport_height)
        target = self._state.layer_transforms.get(parent_id, Transform.identity())

        logger.info("Zooming out of %r -> layer %r", current_id, parent_id)
        self._set(
            current_layer_id=parent_id,
            navigation_history=history[:-1],
            background_color=parent_layer.background_color,
            transform=start,
            is_animating=True,
        )
        self._animate_transform(target, ZOOM_OUT_DURATION_MS, on_complete=self._finish_transition)

    def go_home(self):
        """Animate to identity, then discard all drill history"""
        if not self._check_ready("go_home"):
            return
        root = self._registry.root

        logger.info("Going home to %r", root.id)
        self._set(is_animating=True)

        def finish():
            self._set(
                current_layer_id=root.id,
                navigation_history=(root.id,),
                layer_transforms={},
                background_color=root.background_color,
                transform=Transform.identity(),
                is_animating=False,
            )

        self._animate_transform(Transform.identity(), GO_HOME_DURATION_MS, on_complete=finish)

    def navigate_to_layer(self, history_index: int):
        """Jump to an entry of the history stack (breadcrumb navigation).

        The destination is treated as freshly entered: the view animates to
        identity and no saved transform is restored.
        """
        if not self._check_ready("navigate_to_layer"):
            return
        history = self._state.navigation_history
        if not 0 <= history_index < len(history):
            self._reject("navigate_to_layer", f"index {history_index} outside history of {len(history)}")
            return

        new_history = history[:history_index + 1]
        target_layer = self._registry.get(new_history[-1])
        if target_layer is None:
            logger.warning("navigate_to_layer: layer %r not found", new_history[-1])
            return

        logger.info("Navigating to history[%d] = %r", history_index, target_layer.id)
        self._set(
            current_layer_id=target_layer.id,
            navigation_history=new_history,
            background_color=target_layer.background_color,
            is_animating=True,
        )
        self._animate_transform(Transform.identity(), NAVIGATE_TO_LAYER_DURATION_MS,
                                on_complete=self._finish_transition)

    def _finish_transition(self):
        self._set(is_animating=False)

    # ========================================
    # Pan / zoom
    # ========================================

    def pan(self, dx: float, dy: float):
        """Shift the view by (dx, dy) screen pixels, immediately"""
        if not self._check_ready("pan"):
            return
        t = self._state.transform
        self._set(transform=t.with_offset(t.x + dx, t.y + dy))

    def set_zoom(self, scale: float, center_x: float = 0, center_y: float = 0):
        """Immediate pointer-anchored zoom (pinch gestures)"""
        if not self._check_ready("set_zoom"):
            return
        self._set(transform=zoom_around(self._state.transform, scale, center_x, center_y))

    def animate_zoom(self, target_scale: float, center_x: float = 0, center_y: float = 0,
                     duration_ms: float = ANIMATE_ZOOM_DURATION_MS):
        """Eased pointer-anchored zoom (mouse wheel).

        Each frame re-anchors against the live transform so successive wheel
        zooms compose.
        """
        if not self._check_ready("animate_zoom"):
            return
        start_scale = self._state.transform.scale
        end_scale = clamp_scale(target_scale)

        def on_frame(scale):
            self._set(transform=zoom_around(self._state.transform, scale, center_x, center_y))

        self._set(is_animating=True)
        self._animator.start(ZOOM_CHANNEL, start_scale, end_scale, duration_ms, on_frame,
                             self._finish_transition)

    def animate_transform(self, target: Transform, duration_ms: float,
                          on_complete: Optional[Callable[[], None]] = None):
        """Eased move of the live transform to target, holding the animating
        flag until it lands. on_complete runs after the flag clears.
        """
        if not self._check_ready("animate_transform"):
            return

        def finish():
            self._finish_transition()
            if on_complete is not None:
                on_complete()

        self._set(is_animating=True)
        self._animate_transform(target, duration_ms, on_complete=finish)

    def _animate_transform(self, target: Transform, duration_ms: float,
                           on_complete: Optional[Callable[[], None]] = None):
        """Interpolate the live transform to target on the transform channel.

        Leaves the animating flag to the caller.
        """
        start = self._state.transform

        def on_frame(t):
            self._set(transform=target if t >= 1.0 else lerp_transform(start, target, t))

        self._animator.start(TRANSFORM_CHANNEL, 0.0, 1.0, duration_ms, on_frame, on_complete)

    def reset_transform(self):
        """Cancel any transform animation and snap to identity"""
        self._animator.cancel(TRANSFORM_CHANNEL)
        self._set(transform=Transform.identity(), is_animating=False)

    def save_layer_transform(self):
        """Record the live transform for the current layer"""
        saved = dict(self._state.layer_transforms)
        saved[self._state.current_layer_id] = self._state.transform
        self._set(layer_transforms=saved)
