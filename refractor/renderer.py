import logging

import taichi as ti

from refractor.color import Color
from refractor.config import RenderSettings
from refractor.gpu_kernels import render_kernel, shade_kernel, shadow_kernel

logger = logging.getLogger(__name__)


def _vec3(values):
    return ti.math.vec3(*[float(c) for c in values])


class Renderer:
    """Launches the ray tracing kernels.

    ``origin_bias`` and ``skybox_color`` come from the settings and are
    passed to every launch rather than read from globals.
    """

    def __init__(self, settings=None):
        self.settings = settings or RenderSettings()
        self.origin_bias = self.settings.origin_bias
        self.skybox_color = Color(*self.settings.skybox_color)

        self._color = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._shadow = ti.field(dtype=ti.f32, shape=())

    def render(self, framebuffer, scene, camera, light_positions, ambient_light_intensity):
        """Render one full frame into the framebuffer"""
        scene.set_lights(light_positions)
        render_kernel(framebuffer.pixels, scene.objects, scene.materials, scene.num_objects,
                      scene.lights, scene.num_lights,
                      _vec3(camera.eye), _vec3(camera.right), _vec3(camera.true_up),
                      _vec3(camera.forward),
                      ambient_light_intensity, self.origin_bias, _vec3(self.skybox_color))
        ti.sync()
        logger.debug("Rendered %dx%d frame, %d objects, %d lights",
                     framebuffer.width, framebuffer.height, scene.object_count,
                     len(light_positions))

    def trace(self, scene, origin, direction, ambient_light_intensity, depth=0):
        """Shade a single ray against the scene's current objects and lights"""
        shade_kernel(self._color, scene.objects, scene.materials, scene.num_objects,
                     scene.lights, scene.num_lights,
                     _vec3(origin), _vec3(direction), depth,
                     ambient_light_intensity, self.origin_bias, _vec3(self.skybox_color))
        r, g, b = self._color.to_numpy()
        return Color(r, g, b)

    def shadow(self, scene, origin, direction, light_position):
        """Shadow intensity at the nearest hit of a ray, 0 on a miss"""
        shadow_kernel(self._shadow, scene.objects, scene.num_objects,
                      _vec3(origin), _vec3(direction), _vec3(light_position),
                      self.origin_bias)
        return float(self._shadow[None])
