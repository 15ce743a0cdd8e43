from dataclasses import dataclass, field
from typing import Tuple

from refractor.color import Color


@dataclass(frozen=True)
class Material:
    """Surface shading parameters.

    albedo weights are (diffuse, specular, reflect, refract); only the first
    two take part in shading.
    """
    diffuse: Color = field(default_factory=Color.black)
    specular: float = 0.0
    albedo: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    refractive_index: float = 0.0
    emission: Color = field(default_factory=Color.black)
    is_emissive: bool = False

    def __post_init__(self):
        if len(self.albedo) != 4:
            raise ValueError(f"albedo needs 4 weights, got {len(self.albedo)}")
        object.__setattr__(self, 'albedo', tuple(float(a) for a in self.albedo))
        if self.specular < 0.0:
            raise ValueError(f"specular exponent must be >= 0, got {self.specular}")

    @classmethod
    def black(cls):
        return cls()


def _matte(r, g, b):
    return Material(diffuse=Color(r, g, b), specular=1.0, albedo=(0.9, 0.1, 0.0, 0.0))


SAND = _matte(237, 201, 175)
TRUNK = _matte(139, 69, 19)
LEAF = _matte(34, 139, 34)
WATER = _matte(0, 191, 255)
LIGHT_CUBE = Material(emission=Color(255, 223, 0), is_emissive=True)
