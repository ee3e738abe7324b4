"""
Tests for automatic drill-in / drill-out.

Viewport is 800x600, so water cycle nodes (radius 0.1) are 120px across at
identity and auto drill-in needs 360px (0.45 * 800).
"""
import pytest

from models.transform import Transform
from services.auto_navigation import AutoAction, AutoNavigationSettings, AutoNavigator
from services.navigation_engine import NavigationEngine
from constants import AUTO_IN_FRACTION, AUTO_IN_FRACTION_MAX, AUTO_IN_FRACTION_MIN, AUTO_COOLDOWN_MS

from conftest import VIEWPORT, make_config, node, layer

W, H = VIEWPORT


def zoom_onto_evaporation(engine):
    """Scale 4 anchored on evaporation's center: 480px wide, 200px from center"""
    engine.set_zoom(4, 200, 300)


# ══════════════════════════════════════════════════════════════════════════
# Settings
# ══════════════════════════════════════════════════════════════════════════

class TestAutoNavigationSettings:

    def test_defaults(self):
        settings = AutoNavigationSettings()
        assert settings.enabled
        assert settings.auto_in_fraction == AUTO_IN_FRACTION
        assert settings.auto_out_scale == 0.6
        assert settings.cooldown_ms == AUTO_COOLDOWN_MS

    @pytest.mark.parametrize("requested, expected", [
        (0.1, AUTO_IN_FRACTION_MIN),
        (0.6, 0.6),
        (5.0, AUTO_IN_FRACTION_MAX),
    ])
    def test_fraction_clamped(self, requested, expected):
        assert AutoNavigationSettings(auto_in_fraction=requested).auto_in_fraction == expected

    def test_negative_cooldown_floored(self):
        assert AutoNavigationSettings(cooldown_ms=-5).cooldown_ms == 0.0

    def test_from_dict_ignores_unknown_keys(self):
        settings = AutoNavigationSettings.from_dict({'enabled': False, 'cooldown_ms': 300, 'colour': 'red'})
        assert not settings.enabled
        assert settings.cooldown_ms == 300.0
        assert settings.auto_in_fraction == AUTO_IN_FRACTION

    def test_from_dict_none(self):
        assert AutoNavigationSettings.from_dict(None) == AutoNavigationSettings()

    def test_to_dict(self):
        data = AutoNavigationSettings(auto_in_fraction=0.5).to_dict()
        assert data['auto_in_fraction'] == 0.5
        assert AutoNavigationSettings.from_dict(data) == AutoNavigationSettings(auto_in_fraction=0.5)


# ══════════════════════════════════════════════════════════════════════════
# Drill in / drill out
# ══════════════════════════════════════════════════════════════════════════

class TestAutoDrill:

    def test_nothing_at_identity(self, engine, navigator, scheduler):
        engine.pan(0, 0)
        assert not engine.is_animating
        assert navigator.evaluate() is None

    def test_drill_in_when_node_fills_viewport(self, engine, navigator, scheduler):
        zoom_onto_evaporation(engine)
        assert engine.is_animating
        scheduler.run_until_idle()
        assert engine.current_layer_id == 'evaporation-details'
        assert engine.transform == Transform.identity()

    def test_small_nodes_in_child_layer_do_not_chain(self, engine, navigator, scheduler):
        zoom_onto_evaporation(engine)
        scheduler.run_until_idle()
        assert engine.navigation_history == ('water-cycle', 'evaporation-details')
        assert not engine.is_animating

    def test_candidate_closest_to_center(self, engine, navigator):
        navigator.settings.enabled = False
        zoom_onto_evaporation(engine)
        # Condensation is as large but 600px from center
        assert navigator.find_drill_in_candidate(W, H).id == 'evaporation'

    def test_drill_out_below_threshold(self, engine, navigator, scheduler):
        zoom_onto_evaporation(engine)
        scheduler.run_until_idle()
        engine.set_zoom(0.5, 400, 300)
        assert engine.current_layer_id == 'water-cycle'
        assert engine.is_animating
        assert navigator.last_zoom_out is not None
        scheduler.run_until_idle()
        assert engine.navigation_history == ('water-cycle',)

    def test_no_drill_out_at_root(self, engine, navigator, scheduler):
        engine.set_zoom(0.5, 400, 300)
        assert not engine.is_animating
        assert navigator.last_zoom_out is None

    def test_disabled(self, engine, navigator, scheduler):
        navigator.settings.enabled = False
        zoom_onto_evaporation(engine)
        assert not engine.is_animating
        assert navigator.evaluate() is None

        navigator.settings.enabled = True
        assert navigator.evaluate() is AutoAction.ZOOM_IN
        scheduler.run_until_idle()
        assert engine.current_layer_id == 'evaporation-details'

    def test_empty_viewport_does_nothing(self, engine, scheduler):
        navigator = AutoNavigator(engine, lambda: (0, 0), scheduler.now)
        try:
            zoom_onto_evaporation(engine)
            assert not engine.is_animating
        finally:
            navigator.detach()

    def test_detach(self, engine, navigator):
        navigator.detach()
        zoom_onto_evaporation(engine)
        assert not engine.is_animating

    def test_tie_goes_to_first_listed(self, animator, scheduler):
        config = make_config({
            'root': layer('root', [
                node('left', 0.4, 0.5, radius=0.2, child='left-layer'),
                node('right', 0.6, 0.5, radius=0.2, child='right-layer'),
            ]),
            'left-layer': layer('left-layer', [], parent='left'),
            'right-layer': layer('right-layer', [], parent='right'),
        }, root='root')
        engine = NavigationEngine(animator)
        engine.initialize(config)
        navigator = AutoNavigator(engine, lambda: VIEWPORT, scheduler.now,
                                  AutoNavigationSettings(enabled=False))
        # Both 480px wide, both 160px from center
        engine.set_zoom(2, 400, 300)
        assert navigator.find_drill_in_candidate(W, H).id == 'left'
        navigator.detach()


# ══════════════════════════════════════════════════════════════════════════
# Cooldown
# ══════════════════════════════════════════════════════════════════════════

class TestCooldown:

    def test_never_stamped_counts_as_elapsed(self, navigator):
        assert navigator.last_zoom_out is None
        assert navigator.cooldown_elapsed()

    def test_strictly_greater_than_window(self, navigator, scheduler):
        navigator.stamp_cooldown()
        scheduler.advance(AUTO_COOLDOWN_MS)
        assert not navigator.cooldown_elapsed()
        scheduler.advance(1)
        assert navigator.cooldown_elapsed()

    def test_manual_zoom_out_stamps(self, engine, navigator, scheduler):
        engine.zoom_in(engine.registry.root.get_node('precipitation'), W, H)
        scheduler.run_until_idle()
        assert navigator.last_zoom_out is None
        engine.zoom_out(W, H)
        assert navigator.last_zoom_out == scheduler.now()

    def test_breadcrumb_jump_stamps(self, engine, navigator, scheduler):
        engine.zoom_in(engine.registry.root.get_node('condensation'), W, H)
        scheduler.run_until_idle()
        engine.navigate_to_layer(0)
        assert navigator.last_zoom_out == scheduler.now()

    def test_cooldown_suppresses_bounce(self, engine, navigator, scheduler):
        zoom_onto_evaporation(engine)
        scheduler.run_until_idle()
        assert engine.current_layer_id == 'evaporation-details'

        # Auto drill-out restores the scale-4 view that triggered the drill-in
        engine.set_zoom(0.5, 400, 300)
        scheduler.run_until_idle()
        assert engine.current_layer_id == 'water-cycle'
        assert engine.transform.scale == pytest.approx(4)
        assert not engine.is_animating

        # Still inside the cooldown window: no bounce back in
        zoom_onto_evaporation(engine)
        assert not engine.is_animating
        assert engine.current_layer_id == 'water-cycle'

        scheduler.advance(500)
        engine.pan(0, 0)
        assert engine.is_animating
        scheduler.run_until_idle()
        assert engine.current_layer_id == 'evaporation-details'
