"""Transform data structures for coordinate and view state representation."""
import math
from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Normalized layer coordinates (0-1)
    - Layer pixel space (normalized * viewport size)
    - Screen pixels (after the view transform)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


@dataclass(frozen=True)
class Transform:
    """Uniform pan/zoom view transform.

    Maps layer pixel space to screen pixels:
        screen = layer_point * scale + offset

    scale_x and scale_y are stored separately but always kept equal.
    """
    scale_x: float = 1.0
    scale_y: float = 1.0
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def identity(cls) -> 'Transform':
        return cls(1.0, 1.0, 0.0, 0.0)

    @property
    def scale(self) -> float:
        return self.scale_x

    @property
    def offset(self) -> Vec2:
        return Vec2(self.x, self.y)

    def with_overrides(self, **changes) -> 'Transform':
        """Return a copy with the named fields replaced.

        Args:
            **changes: Any of scale_x, scale_y, x, y

        Raises:
            TypeError: If an unknown field name is given
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise TypeError(f"Unknown transform field(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    def with_scale(self, scale: float) -> 'Transform':
        """Copy with a new uniform scale, offset unchanged."""
        return replace(self, scale_x=scale, scale_y=scale)

    def with_offset(self, x: float, y: float) -> 'Transform':
        return replace(self, x=x, y=y)

    def is_close(self, other: 'Transform', tol: float = 1e-9) -> bool:
        """Field-wise comparison within an absolute tolerance."""
        return all(
            math.isclose(getattr(self, f.name), getattr(other, f.name), rel_tol=tol, abs_tol=tol)
            for f in fields(self)
        )

    def to_dict(self) -> dict:
        return {'scaleX': self.scale_x, 'scaleY': self.scale_y, 'x': self.x, 'y': self.y}
