from dataclasses import dataclass, field
from typing import Tuple

import taichi as ti

from refractor.constants import (
    WIDTH, HEIGHT, ORIGIN_BIAS, SKYBOX_COLOR, FRAME_DELAY_MS,
    MOVE_STEP, ROTATION_SPEED,
)

ARCHS = ('cpu', 'gpu', 'cuda', 'vulkan', 'metal', 'opengl')


@dataclass
class RenderSettings:
    """Settings shared by the renderer and the game engine."""
    width: int = WIDTH
    height: int = HEIGHT
    arch: str = 'cpu'
    origin_bias: float = ORIGIN_BIAS
    skybox_color: Tuple[int, int, int] = field(default=SKYBOX_COLOR)
    frame_delay_ms: int = FRAME_DELAY_MS
    move_step: float = MOVE_STEP
    rotation_speed: float = ROTATION_SPEED

    def __post_init__(self):
        if self.arch not in ARCHS:
            raise ValueError(f"Unknown taichi arch '{self.arch}', expected one of {ARCHS}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid resolution {self.width}x{self.height}")

    def taichi_arch(self):
        """Resolve the taichi backend for this configuration"""
        return getattr(ti, self.arch)
