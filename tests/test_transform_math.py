"""
Tests for the Transform model and coordinate-space helpers.

Covers:
- Transform value semantics (identity, overrides, immutability)
- Scale clamping, including NaN
- to_screen / to_layer_space inverse pair
- Fixed point of zoom_around
- Node framing and interpolation
"""
import math
import dataclasses
import pytest

from models.layer import Node
from models.transform import Transform, Vec2
from utils.transform_math import (
    clamp_scale, to_screen, to_layer_space, to_normalized, zoom_around,
    frame_to_node, lerp_transform, node_screen_diameter, node_screen_position,
    node_screen_radius,
)
from constants import MIN_SCALE, MAX_SCALE, FRAME_MARGIN_FACTOR


VIEWPORT = (800, 600)


# ══════════════════════════════════════════════════════════════════════════
# Transform model
# ══════════════════════════════════════════════════════════════════════════

class TestTransform:

    def test_identity(self):
        t = Transform.identity()
        assert (t.scale_x, t.scale_y, t.x, t.y) == (1.0, 1.0, 0.0, 0.0)
        assert t == Transform()

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Transform.identity().x = 5

    def test_with_overrides(self):
        t = Transform.identity().with_overrides(x=10, y=-4)
        assert t.offset == Vec2(10, -4)
        assert t.scale == 1.0

    def test_with_overrides_rejects_unknown(self):
        with pytest.raises(TypeError):
            Transform.identity().with_overrides(rotation=45)

    def test_with_scale_keeps_offset(self):
        t = Transform(1, 1, 3, 4).with_scale(2.5)
        assert (t.scale_x, t.scale_y, t.x, t.y) == (2.5, 2.5, 3, 4)

    def test_is_close(self):
        assert Transform(1, 1, 0, 0).is_close(Transform(1 + 1e-12, 1, 0, 1e-12))
        assert not Transform(1, 1, 0, 0).is_close(Transform(1, 1, 0, 0.01))

    def test_vec2_unpacks(self):
        x, y = Vec2(1.5, 2.5)
        assert (x, y) == (1.5, 2.5)


# ══════════════════════════════════════════════════════════════════════════
# Clamping
# ══════════════════════════════════════════════════════════════════════════

class TestClampScale:

    @pytest.mark.parametrize("requested,expected", [
        (0.0, MIN_SCALE),
        (-3.0, MIN_SCALE),
        (0.05, MIN_SCALE),
        (0.1, 0.1),
        (1.0, 1.0),
        (10.0, 10.0),
        (11.0, MAX_SCALE),
        (math.inf, MAX_SCALE),
    ])
    def test_clamp(self, requested, expected):
        assert clamp_scale(requested) == expected

    def test_nan_becomes_minimum(self):
        assert clamp_scale(math.nan) == MIN_SCALE

    @pytest.mark.parametrize("requested", [1e-9, 0.5, 3.0, 42.0, 1e9])
    def test_zoom_around_always_in_range(self, requested):
        t = zoom_around(Transform(2, 2, 40, -30), requested, 123, 456)
        assert MIN_SCALE <= t.scale_x <= MAX_SCALE
        assert t.scale_x == t.scale_y


# ══════════════════════════════════════════════════════════════════════════
# Coordinate spaces
# ══════════════════════════════════════════════════════════════════════════

class TestCoordinateSpaces:

    def test_to_screen_identity(self):
        assert to_screen(Vec2(0.25, 0.5), VIEWPORT, Transform.identity()) == Vec2(200, 300)

    def test_to_screen_applies_scale_then_offset(self):
        t = Transform(2, 2, 10, 20)
        assert to_screen((0.5, 0.5), VIEWPORT, t) == Vec2(810, 620)

    @pytest.mark.parametrize("transform", [
        Transform.identity(),
        Transform(2.5, 2.5, -300, 125),
        Transform(0.1, 0.1, 400, 300),
    ])
    def test_layer_space_inverts_screen(self, transform):
        screen = to_screen((0.3, 0.7), VIEWPORT, transform)
        normalized = to_normalized(screen, VIEWPORT, transform)
        assert normalized.x == pytest.approx(0.3)
        assert normalized.y == pytest.approx(0.7)

    def test_to_layer_space(self):
        assert to_layer_space((110, 220), Transform(2, 2, 10, 20)) == Vec2(50, 100)


# ══════════════════════════════════════════════════════════════════════════
# zoom_around
# ══════════════════════════════════════════════════════════════════════════

class TestZoomAround:

    @pytest.mark.parametrize("start,new_scale,center", [
        (Transform.identity(), 2.0, (400, 300)),
        (Transform.identity(), 0.5, (0, 0)),
        (Transform(3, 3, -120, 75), 1.3, (250, 410)),
        (Transform(0.4, 0.4, 200, 100), 9.0, (799, 1)),
    ])
    def test_center_is_fixed_point(self, start, new_scale, center):
        before = to_layer_space(center, start)
        after = to_layer_space(center, zoom_around(start, new_scale, *center))
        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)

    def test_formula(self):
        t = zoom_around(Transform(1, 1, 10, 20), 2, 110, 220)
        # offset_new = center - (center - offset_old) * ratio
        assert (t.x, t.y) == (110 - 100 * 2, 220 - 200 * 2)


# ══════════════════════════════════════════════════════════════════════════
# Framing and interpolation
# ══════════════════════════════════════════════════════════════════════════

class TestFrameToNode:

    def test_centers_node(self):
        node = Node('n', 'N', 0.25, 0.5, 0.1, '#fff', 'child')
        t = frame_to_node(node, *VIEWPORT)
        center = node_screen_position(node, *VIEWPORT, t)
        assert center.x == pytest.approx(400)
        assert center.y == pytest.approx(300)

    def test_node_radius_fills_width_over_margin(self):
        node = Node('n', 'N', 0.5, 0.5, 0.1, '#fff')
        t = frame_to_node(node, *VIEWPORT)
        assert node_screen_diameter(node, *VIEWPORT, t) == pytest.approx(2 * 800 / FRAME_MARGIN_FACTOR)
        assert node_screen_radius(node, *VIEWPORT, t) == pytest.approx(800 / FRAME_MARGIN_FACTOR)

    def test_scale_is_clamped_for_tiny_nodes(self):
        node = Node('n', 'N', 0.5, 0.5, 0.001, '#fff')
        assert frame_to_node(node, *VIEWPORT).scale == MAX_SCALE


class TestLerpTransform:

    def test_endpoints(self):
        a, b = Transform(1, 1, 0, 0), Transform(3, 3, -100, 50)
        assert lerp_transform(a, b, 0) == a
        assert lerp_transform(a, b, 1) == b

    def test_midpoint(self):
        mid = lerp_transform(Transform(1, 1, 0, 0), Transform(3, 3, -100, 50), 0.5)
        assert mid == Transform(2, 2, -50, 25)
