"""
Layer Zoom Viewer - Transform Math Utilities

This module provides the pure functions that map between coordinate spaces:
- Normalized layer space: node positions in [0, 1] on each axis
- Layer pixel space: normalized * viewport size
- Screen space: layer pixels through the pan/zoom transform

These functions have no UI dependencies and hold no state.
"""

import math

from models.transform import Transform, Vec2
from constants import MIN_SCALE, MAX_SCALE, FRAME_MARGIN_FACTOR


def clamp_scale(scale):
    """Clamp a requested scale into [MIN_SCALE, MAX_SCALE].

    NaN is treated as the minimum so it can never leak into a transform.
    """
    if math.isnan(scale):
        return MIN_SCALE
    return max(MIN_SCALE, min(scale, MAX_SCALE))


def to_screen(point, viewport_size, transform):
    """Convert a normalized layer point to screen pixels.

    Args:
        point: Vec2 (or x, y pair) in normalized [0, 1] layer space
        viewport_size: (width, height) in pixels
        transform: Live view Transform

    Returns:
        Vec2 screen position
    """
    px, py = point
    width, height = viewport_size
    return Vec2(
        px * width * transform.scale_x + transform.x,
        py * height * transform.scale_y + transform.y,
    )


def to_layer_space(screen_point, transform):
    """Inverse affine map from screen pixels to layer pixel space"""
    sx, sy = screen_point
    return Vec2(
        (sx - transform.x) / transform.scale_x,
        (sy - transform.y) / transform.scale_y,
    )


def to_normalized(screen_point, viewport_size, transform):
    """Convert screen pixels all the way back to normalized layer space"""
    width, height = viewport_size
    layer_point = to_layer_space(screen_point, transform)
    return Vec2(layer_point.x / width, layer_point.y / height)


def zoom_around(transform, new_scale, center_x, center_y):
    """Zoom to new_scale keeping the screen point (center_x, center_y) fixed.

    The layer point under the center maps to the same screen position before
    and after: offset_new = center - (center - offset_old) * (s_new / s_old)

    Args:
        transform: Current Transform
        new_scale: Requested scale (clamped to [MIN_SCALE, MAX_SCALE])
        center_x: Anchor X in screen pixels
        center_y: Anchor Y in screen pixels

    Returns:
        New Transform
    """
    scale = clamp_scale(new_scale)
    x = center_x - (center_x - transform.x) * scale / transform.scale_x
    y = center_y - (center_y - transform.y) * scale / transform.scale_y
    return Transform(scale, scale, x, y)


def frame_to_node(node, viewport_width, viewport_height, margin_factor=FRAME_MARGIN_FACTOR):
    """Transform that centers node with its radius filling width / margin_factor.

    Args:
        node: Node with normalized x, y and radius
        viewport_width: Viewport width in pixels
        viewport_height: Viewport height in pixels
        margin_factor: Viewport width divided by the framed node radius

    Returns:
        Transform with clamped scale
    """
    min_dim = min(viewport_width, viewport_height)
    scale = clamp_scale(viewport_width / (node.radius * min_dim * margin_factor))
    x = viewport_width / 2 - node.x * viewport_width * scale
    y = viewport_height / 2 - node.y * viewport_height * scale
    return Transform(scale, scale, x, y)


def lerp_transform(start, end, t):
    """Per-field linear interpolation between two transforms"""
    return Transform(
        start.scale_x + (end.scale_x - start.scale_x) * t,
        start.scale_y + (end.scale_y - start.scale_y) * t,
        start.x + (end.x - start.x) * t,
        start.y + (end.y - start.y) * t,
    )


def node_screen_diameter(node, viewport_width, viewport_height, transform):
    """Apparent on-screen diameter of a node in pixels"""
    return node.radius * min(viewport_width, viewport_height) * 2 * transform.scale


def node_screen_radius(node, viewport_width, viewport_height, transform):
    return node_screen_diameter(node, viewport_width, viewport_height, transform) / 2


def node_screen_position(node, viewport_width, viewport_height, transform):
    return to_screen(node.position, (viewport_width, viewport_height), transform)
