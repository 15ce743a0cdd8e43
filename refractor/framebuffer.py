import numpy as np
import taichi as ti

from refractor.color import Color


class Framebuffer:
    """Pixel storage written by the render kernel.

    The field is indexed [x, y] to match pygame.surfarray; ``to_buffer``
    gives the row-major packed 0xRRGGBB layout.
    """

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.pixels = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

    def clear(self):
        self.pixels.fill(0.0)

    def to_numpy(self):
        """(width, height, 3) uint8 array ready for pygame.surfarray"""
        return np.clip(self.pixels.to_numpy(), 0, 255).astype(np.uint8)

    def to_buffer(self):
        """Row-major array of packed 0xRRGGBB values, length width * height"""
        rgb = self.to_numpy().astype(np.uint32)
        packed = (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]
        return packed.T.reshape(-1)

    def get_pixel(self, x, y):
        value = self.pixels[x, y]
        return Color(value[0], value[1], value[2])
