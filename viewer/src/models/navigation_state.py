"""Navigation state snapshot owned by the navigation engine."""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

from models.transform import Transform
from constants import DEFAULT_BACKGROUND_COLOR


class NavigationPhase(Enum):
    IDLE = "idle"
    TRANSITIONING = "transitioning"


@dataclass(frozen=True)
class BreadcrumbEntry:
    id: str
    name: str


@dataclass(frozen=True)
class NavigationState:
    """Immutable snapshot of everything the engine tracks.

    current_layer_id is always navigation_history[-1] once content is loaded.
    layer_transforms holds the view a layer had when the user drilled away
    from it; it is written on zoom-in, read on zoom-out, cleared on go-home.
    """
    current_layer_id: str = ""
    navigation_history: Tuple[str, ...] = ()
    layer_transforms: Mapping[str, Transform] = field(default_factory=lambda: MappingProxyType({}))
    transform: Transform = field(default_factory=Transform.identity)
    background_color: str = DEFAULT_BACKGROUND_COLOR
    is_animating: bool = False

    @classmethod
    def empty(cls) -> 'NavigationState':
        return cls()

    @property
    def phase(self) -> NavigationPhase:
        return NavigationPhase.TRANSITIONING if self.is_animating else NavigationPhase.IDLE

    @property
    def depth(self) -> int:
        return len(self.navigation_history)
