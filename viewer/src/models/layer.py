"""
Layer Zoom Viewer - Layer Content Model

Immutable description of the diagram hierarchy:
- Node: circular hotspot in normalized layer space, optionally owning a child layer
- Layer: background plus an ordered list of nodes
- VisualizationConfig: every layer keyed by id, plus the root layer id

Content files use camelCase JSON keys (rootLayerId, backgroundColor,
childLayerId, parentNodeId).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from models.transform import Vec2
from constants import DEFAULT_BACKGROUND_COLOR, DEFAULT_NODE_COLOR


class LayerDataError(ValueError):
    """Raised when loaded layer content is malformed or inconsistent.

    Attributes:
        problems: Every integrity problem found, one message per entry
    """

    def __init__(self, problems):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        summary = self.problems[0] if len(self.problems) == 1 else (
            f"{len(self.problems)} problems in layer data: " + "; ".join(self.problems)
        )
        super().__init__(summary)


@dataclass(frozen=True)
class Node:
    """A circular, labeled hotspot within a layer.

    x, y and radius are normalized: position is relative to the viewport
    (0-1 on each axis) and radius is a fraction of min(width, height).
    """
    id: str
    name: str
    x: float
    y: float
    radius: float
    color: str
    child_layer_id: Optional[str] = None

    @property
    def position(self) -> Vec2:
        return Vec2(self.x, self.y)

    @property
    def is_drillable(self) -> bool:
        return bool(self.child_layer_id)

    @classmethod
    def from_dict(cls, data: Mapping) -> 'Node':
        if not isinstance(data, Mapping):
            raise LayerDataError(f"Node entry must be an object, got {data!r}")
        try:
            return cls(
                id=str(data['id']),
                name=str(data.get('name', data['id'])),
                x=float(data['x']),
                y=float(data['y']),
                radius=float(data['radius']),
                color=str(data.get('color', DEFAULT_NODE_COLOR)),
                child_layer_id=data.get('childLayerId') or None,
            )
        except KeyError as e:
            raise LayerDataError(f"Node is missing required field {e.args[0]!r}: {dict(data)!r}") from e
        except (TypeError, ValueError) as e:
            raise LayerDataError(f"Node {data.get('id', '?')!r} has an invalid value: {e}") from e

    def to_dict(self) -> dict:
        data = {
            'id': self.id,
            'name': self.name,
            'x': self.x,
            'y': self.y,
            'radius': self.radius,
            'color': self.color,
        }
        if self.child_layer_id:
            data['childLayerId'] = self.child_layer_id
        return data


@dataclass(frozen=True)
class Layer:
    """One screen's worth of diagram content.

    nodes is in paint order: the last node is drawn on top and is the
    first one hit-tested.
    """
    id: str
    name: str
    background_color: str = DEFAULT_BACKGROUND_COLOR
    nodes: Tuple[Node, ...] = ()
    parent_node_id: Optional[str] = None

    def get_node(self, node_id: str) -> Optional[Node]:
        """Scan the node list for node_id (None if absent)"""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def drillable_nodes(self) -> List[Node]:
        return [node for node in self.nodes if node.is_drillable]

    @classmethod
    def from_dict(cls, data: Mapping, layer_id: Optional[str] = None) -> 'Layer':
        if not isinstance(data, Mapping):
            raise LayerDataError(f"Layer {layer_id!r} must be an object, got {data!r}")
        if 'id' not in data and layer_id is None:
            raise LayerDataError(f"Layer is missing required field 'id': {dict(data)!r}")
        lid = str(data.get('id', layer_id))
        nodes = data.get('nodes', [])
        if not isinstance(nodes, (list, tuple)):
            raise LayerDataError(f"Layer {lid!r}: 'nodes' must be a list")
        return cls(
            id=lid,
            name=str(data.get('name', lid)),
            background_color=str(data.get('backgroundColor') or DEFAULT_BACKGROUND_COLOR),
            nodes=tuple(Node.from_dict(n) for n in nodes),
            parent_node_id=data.get('parentNodeId') or None,
        )

    def to_dict(self) -> dict:
        data = {
            'id': self.id,
            'name': self.name,
            'backgroundColor': self.background_color,
            'nodes': [node.to_dict() for node in self.nodes],
        }
        if self.parent_node_id:
            data['parentNodeId'] = self.parent_node_id
        return data


@dataclass(frozen=True)
class VisualizationConfig:
    """Complete content set supplied to the navigation engine at startup"""
    root_layer_id: str
    layers: Dict[str, Layer] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping) -> 'VisualizationConfig':
        """Build a config from the JSON content structure.

        Args:
            data: Dict with 'rootLayerId' and 'layers' (id -> layer dict)

        Raises:
            LayerDataError: If required keys are missing or values are invalid
        """
        if not isinstance(data, Mapping):
            raise LayerDataError("Content must be a JSON object")
        if 'rootLayerId' not in data:
            raise LayerDataError("Content is missing 'rootLayerId'")
        raw_layers = data.get('layers')
        if not isinstance(raw_layers, Mapping):
            raise LayerDataError("Content 'layers' must be an object keyed by layer id")

        layers = {
            str(key): Layer.from_dict(value, layer_id=str(key))
            for key, value in raw_layers.items()
        }
        return cls(root_layer_id=str(data['rootLayerId']), layers=layers)

    def to_dict(self) -> dict:
        return {
            'rootLayerId': self.root_layer_id,
            'layers': {key: layer.to_dict() for key, layer in self.layers.items()},
        }
