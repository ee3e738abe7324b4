"""Hit testing of layer nodes against screen positions.

Clicks are inverse-mapped into layer pixel space and tested against each
node's circle. Nodes are tested in reverse paint order so the topmost
drawn node wins.
"""

import numpy as np

from utils.transform_math import to_layer_space


def _node_arrays(nodes, viewport_width, viewport_height):
    """Node centers and radii in layer pixel space as numpy arrays"""
    min_dim = min(viewport_width, viewport_height)
    centers = np.array([(n.x * viewport_width, n.y * viewport_height) for n in nodes], dtype=float)
    radii = np.array([n.radius * min_dim for n in nodes], dtype=float)
    return centers.reshape(-1, 2), radii


def nodes_at(nodes, screen_point, viewport_size, transform):
    """All nodes whose circle contains screen_point, topmost first.

    Args:
        nodes: Sequence of Node in paint order
        screen_point: (x, y) in screen pixels
        viewport_size: (width, height) in pixels
        transform: Live view Transform

    Returns:
        List of Node, last-painted first
    """
    nodes = list(nodes)
    if not nodes:
        return []
    width, height = viewport_size
    point = to_layer_space(screen_point, transform)
    centers, radii = _node_arrays(nodes, width, height)
    distances = np.hypot(centers[:, 0] - point.x, centers[:, 1] - point.y)
    hit = distances <= radii
    return [nodes[i] for i in reversed(range(len(nodes))) if hit[i]]


def node_at(nodes, screen_point, viewport_size, transform):
    """Topmost node under screen_point, or None"""
    hits = nodes_at(nodes, screen_point, viewport_size, transform)
    return hits[0] if hits else None


def find_drillable_node_at(nodes, screen_point, viewport_size, transform):
    """Topmost node under screen_point that owns a child layer, or None.

    A childless node painted above a drillable one does not block it.
    """
    for node in nodes_at(nodes, screen_point, viewport_size, transform):
        if node.child_layer_id:
            return node
    return None
