from dataclasses import dataclass, field
from typing import Tuple

from refractor.constants import GEOMETRY_CUBE
from refractor.material import Material


class Geometry:
    """Base for scene primitives.

    Subclasses set ``kind`` to the tag the kernels dispatch on and provide
    ``center``, ``size``, ``material`` and ``is_light``.
    """
    kind = None

    @property
    def half_size(self):
        return self.size * 0.5

    def bounds(self):
        """Axis-aligned (min, max) corners"""
        h = self.half_size
        lo = tuple(c - h for c in self.center)
        hi = tuple(c + h for c in self.center)
        return lo, hi


@dataclass(frozen=True)
class Cube(Geometry):
    """Axis-aligned cube; ``size`` is the edge length"""
    center: Tuple[float, float, float]
    size: float
    material: Material = field(default_factory=Material.black)
    is_light: bool = False

    kind = GEOMETRY_CUBE

    def __post_init__(self):
        if self.size <= 0.0:
            raise ValueError(f"Cube size must be positive, got {self.size}")
        object.__setattr__(self, 'center', tuple(float(c) for c in self.center))
