from .constants import *
from .color import Color
from .material import Material
from .geometry import Geometry, Cube
from .gpu_structs import *
from .lighting import ambient_light_intensity, sun_position, is_night
from .config import RenderSettings
from .framebuffer import Framebuffer
from .scene_manager import SceneManager, SceneCapacityError, HitInfo
from .renderer import Renderer

__all__ = [
    'WIDTH', 'HEIGHT', 'FOV', 'MAX_DEPTH', 'ORIGIN_BIAS', 'SKYBOX_COLOR',
    'MAX_OBJECTS', 'MAX_MATERIALS', 'MAX_LIGHTS',
    'Color', 'Material', 'Geometry', 'Cube',
    'MaterialData', 'SceneObject', 'Intersect',
    'ambient_light_intensity', 'sun_position', 'is_night',
    'RenderSettings', 'Framebuffer', 'SceneManager', 'SceneCapacityError', 'HitInfo',
    'Renderer',
]
