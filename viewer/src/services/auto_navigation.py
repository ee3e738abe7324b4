"""Automatic drill-in / drill-out driven by the live view.

Re-evaluated whenever the engine publishes a new state (no timer):

- Drill in: among drillable nodes whose on-screen diameter reaches
  auto_in_fraction of the viewport width, pick the one closest to the
  viewport center (first listed wins ties) and zoom into it.
- Drill out: below auto_out_scale inside a child layer, zoom out.

Any drop in history depth stamps a cooldown clock. Auto drill-in and
drill-out wait until cooldown_ms has passed since the stamp, so a zoom-out
that lands on a large node does not bounce straight back in.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Callable, Optional, Tuple

import numpy as np

from models.layer import Node
from utils.transform_math import node_screen_diameter, node_screen_position
from constants import (
    AUTO_IN_FRACTION, AUTO_IN_FRACTION_MIN, AUTO_IN_FRACTION_MAX,
    AUTO_OUT_SCALE, AUTO_COOLDOWN_MS, MIN_SCALE,
)

logger = logging.getLogger(__name__)


class AutoAction(Enum):
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"


@dataclass
class AutoNavigationSettings:
    """Thresholds for the auto-navigation heuristics.

    auto_in_fraction is kept inside [AUTO_IN_FRACTION_MIN, AUTO_IN_FRACTION_MAX];
    auto_out_scale and cooldown_ms are floored at sensible minimums.
    """
    enabled: bool = True
    auto_in_fraction: float = AUTO_IN_FRACTION
    auto_out_scale: float = AUTO_OUT_SCALE
    cooldown_ms: float = AUTO_COOLDOWN_MS

    def __post_init__(self):
        self.enabled = bool(self.enabled)
        self.auto_in_fraction = max(AUTO_IN_FRACTION_MIN, min(float(self.auto_in_fraction), AUTO_IN_FRACTION_MAX))
        self.auto_out_scale = max(MIN_SCALE, float(self.auto_out_scale))
        self.cooldown_ms = max(0.0, float(self.cooldown_ms))

    @classmethod
    def from_dict(cls, data) -> 'AutoNavigationSettings':
        """Build settings from a config dict, ignoring unknown keys"""
        data = data or {}
        known = {k: data[k] for k in ('enabled', 'auto_in_fraction', 'auto_out_scale', 'cooldown_ms') if k in data}
        return cls(**known)

    def to_dict(self) -> dict:
        return asdict(self)


class AutoNavigator:
    """Watches a NavigationEngine and triggers zoom_in / zoom_out on its own.

    Args:
        engine: NavigationEngine to observe and drive
        viewport_size: Callable returning the current (width, height) in pixels
        clock: Callable returning the current time in milliseconds
        settings: AutoNavigationSettings (defaults if None)
    """

    def __init__(self, engine, viewport_size: Callable[[], Tuple[float, float]],
                 clock: Callable[[], float], settings: Optional[AutoNavigationSettings] = None):
        self._engine = engine
        self._viewport_size = viewport_size
        self._clock = clock
        self.settings = settings or AutoNavigationSettings()
        self._last_zoom_out: Optional[float] = None
        self._prev_depth = engine.state.depth
        engine.add_listener(self._on_state_changed)

    def detach(self):
        """Stop observing the engine"""
        self._engine.remove_listener(self._on_state_changed)

    # ========================================
    # Cooldown
    # ========================================

    @property
    def last_zoom_out(self) -> Optional[float]:
        return self._last_zoom_out

    def stamp_cooldown(self):
        self._last_zoom_out = self._clock()

    def cooldown_elapsed(self) -> bool:
        if self._last_zoom_out is None:
            return True
        return self._clock() - self._last_zoom_out > self.settings.cooldown_ms

    # ========================================
    # Evaluation
    # ========================================

    def _on_state_changed(self, state):
        depth = state.depth
        if depth < self._prev_depth:
            self.stamp_cooldown()
        self._prev_depth = depth
        self.evaluate()

    def find_drill_in_candidate(self, viewport_width: float, viewport_height: float) -> Optional[Node]:
        """Drillable node large enough to enter, closest to the viewport center.

        Returns:
            Node or None
        """
        layer = self._engine.get_current_layer()
        if layer is None:
            return None
        transform = self._engine.transform
        candidates = layer.drillable_nodes()
        if not candidates:
            return None

        diameters = np.array([
            node_screen_diameter(n, viewport_width, viewport_height, transform) for n in candidates
        ])
        big_enough = diameters >= viewport_width * self.settings.auto_in_fraction
        if not big_enough.any():
            return None

        positions = np.array([
            tuple(node_screen_position(n, viewport_width, viewport_height, transform)) for n in candidates
        ])
        distances = np.hypot(positions[:, 0] - viewport_width / 2, positions[:, 1] - viewport_height / 2)
        distances[~big_enough] = np.inf
        # argmin returns the first index on ties
        return candidates[int(np.argmin(distances))]

    def evaluate(self) -> Optional[AutoAction]:
        """Check both heuristics against the current state and act on at most one.

        Returns:
            The AutoAction taken, or None
        """
        engine = self._engine
        if not self.settings.enabled or not engine.is_loaded or engine.is_animating:
            return None
        width, height = self._viewport_size()
        if width <= 0 or height <= 0:
            return None

        candidate = self.find_drill_in_candidate(width, height)
        if candidate is not None and self.cooldown_elapsed():
            logger.info("Auto zoom-in on %r", candidate.id)
            engine.zoom_in(candidate, width, height)
            return AutoAction.ZOOM_IN

        if (engine.state.depth > 1
                and engine.transform.scale < self.settings.auto_out_scale
                and self.cooldown_elapsed()):
            logger.info("Auto zoom-out from %r (scale %.3f)", engine.current_layer_id, engine.transform.scale)
            engine.zoom_out(width, height)
            self.stamp_cooldown()
            return AutoAction.ZOOM_OUT

        return None
