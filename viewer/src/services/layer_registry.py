"""
Layer Zoom Viewer - Layer Registry Service

Immutable lookup from layer id to Layer, built once from a
VisualizationConfig and validated at load time.

The way back out of a layer is found by lookup, not a stored back-pointer:
a child layer names its parent_node_id, and that node is located by scanning
the parent layer's node list.
"""

import logging
from types import MappingProxyType
from typing import Iterator, List, Optional

from models.layer import Layer, LayerDataError, Node, VisualizationConfig

logger = logging.getLogger(__name__)

__all__ = ['LayerRegistry', 'LayerDataError', 'validate_config']


def validate_config(config: VisualizationConfig) -> List[str]:
    """Collect every integrity problem in config.

    Args:
        config: Loaded content

    Returns:
        List of problem descriptions (empty when the content is consistent)
    """
    problems = []
    layers = config.layers

    if config.root_layer_id not in layers:
        problems.append(f"Root layer {config.root_layer_id!r} is not defined")

    # node id -> child layer id, per layer, for parent linkage checks
    owners = {}

    for key, layer in layers.items():
        if key != layer.id:
            problems.append(f"Layer key {key!r} does not match its id {layer.id!r}")

        seen = set()
        for node in layer.nodes:
            where = f"Node {node.id!r} in layer {key!r}"
            if node.id in seen:
                problems.append(f"{where} is defined more than once")
            seen.add(node.id)

            if not 0 < node.radius <= 0.5:
                problems.append(f"{where} has radius {node.radius} outside (0, 0.5]")
            if not (0 <= node.x <= 1 and 0 <= node.y <= 1):
                problems.append(f"{where} has position ({node.x}, {node.y}) outside [0, 1]")

            if node.child_layer_id is None:
                continue
            child = layers.get(node.child_layer_id)
            if child is None:
                problems.append(f"{where} references missing child layer {node.child_layer_id!r}")
                continue
            owners.setdefault(node.child_layer_id, []).append((key, node.id))
            if child.parent_node_id != node.id:
                problems.append(
                    f"{where} owns layer {child.id!r} but that layer names "
                    f"parent node {child.parent_node_id!r}"
                )

    for key, layer in layers.items():
        if layer.parent_node_id is None:
            continue
        if not any(node_id == layer.parent_node_id for _, node_id in owners.get(key, [])):
            problems.append(
                f"Layer {key!r} names parent node {layer.parent_node_id!r}, "
                f"but no node with that id owns it"
            )

    return problems


class LayerRegistry:
    """Read-only mapping LayerId -> Layer plus parent-node lookup.

    Raises:
        LayerDataError: On construction, if the content fails validation
    """

    def __init__(self, config: VisualizationConfig):
        problems = validate_config(config)
        if problems:
            for problem in problems:
                logger.error("Layer data: %s", problem)
            raise LayerDataError(problems)

        self._root_layer_id = config.root_layer_id
        self._layers = MappingProxyType(dict(config.layers))
        logger.debug("Loaded %d layer(s), root %r", len(self._layers), self._root_layer_id)

    @property
    def root_layer_id(self) -> str:
        return self._root_layer_id

    @property
    def root(self) -> Layer:
        return self._layers[self._root_layer_id]

    @property
    def layers(self):
        return self._layers

    def get(self, layer_id: str) -> Optional[Layer]:
        return self._layers.get(layer_id)

    def layer_ids(self) -> List[str]:
        return list(self._layers)

    def __contains__(self, layer_id) -> bool:
        return layer_id in self._layers

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._layers)

    def find_parent_node(self, layer_id: str, parent_layer_id: str) -> Optional[Node]:
        """Find the node in parent_layer_id that owns layer_id.

        Args:
            layer_id: The child layer being left
            parent_layer_id: The layer to return to

        Returns:
            The owning Node, or None if either layer or the node is missing
        """
        layer = self._layers.get(layer_id)
        parent = self._layers.get(parent_layer_id)
        if layer is None or parent is None or layer.parent_node_id is None:
            return None
        return parent.get_node(layer.parent_node_id)

    def layer_name(self, layer_id: str, default: str = "Unknown") -> str:
        layer = self._layers.get(layer_id)
        return layer.name if layer else default
