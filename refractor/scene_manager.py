import logging

import numpy as np
import taichi as ti

from refractor.constants import MAX_OBJECTS, MAX_MATERIALS, MAX_LIGHTS
from refractor.gpu_structs import MaterialData, SceneObject, Intersect
from refractor.gpu_kernels import probe_kernel

logger = logging.getLogger(__name__)


class SceneCapacityError(RuntimeError):
    """Raised when a scene does not fit in the preallocated fields"""


class HitInfo:
    """Host-side copy of an Intersect record"""

    __slots__ = ('point', 'normal', 'distance', 'material', 'is_intersecting')

    def __init__(self, point, normal, distance, material, is_intersecting):
        self.point = point
        self.normal = normal
        self.distance = distance
        self.material = material
        self.is_intersecting = is_intersecting

    def __repr__(self):
        return (f"HitInfo(is_intersecting={self.is_intersecting}, distance={self.distance:.4f}, "
                f"point={self.point.tolist()}, normal={self.normal.tolist()})")


class SceneManager:
    """Manages the scene on both Python and GPU sides.

    Objects live in one struct field. The static part occupies the head of
    the field and is written once; the dynamic part is appended after it and
    replaced every frame, so intersection order is static-then-dynamic.
    """

    def __init__(self, max_objects=MAX_OBJECTS, max_materials=MAX_MATERIALS,
                 max_lights=MAX_LIGHTS):
        self.max_objects = max_objects
        self.max_materials = max_materials
        self.max_lights = max_lights

        # GPU storage
        self.objects = SceneObject.field()
        ti.root.dense(ti.i, max_objects).place(self.objects)
        self.materials = MaterialData.field()
        ti.root.dense(ti.i, max_materials).place(self.materials)
        self.lights = ti.Vector.field(3, dtype=ti.f32)
        ti.root.dense(ti.i, max_lights).place(self.lights)
        self._probe = Intersect.field(shape=())

        # Scene counters
        self.num_objects = ti.field(dtype=ti.i32, shape=())
        self.num_lights = ti.field(dtype=ti.i32, shape=())

        # Host mirror of the object field
        self._kind = np.zeros(max_objects, dtype=np.int32)
        self._center = np.zeros((max_objects, 3), dtype=np.float32)
        self._size = np.zeros(max_objects, dtype=np.float32)
        self._material_idx = np.zeros(max_objects, dtype=np.int32)
        self._is_light = np.zeros(max_objects, dtype=np.int32)

        self._material_table = {}
        self._material_list = []
        self.static_objects = []
        self.dynamic_objects = []

        self.reset_scene()

    def reset_scene(self):
        """Reset the scene to initial state"""
        self.num_objects[None] = 0
        self.num_lights[None] = 0
        self._material_table.clear()
        self._material_list.clear()
        self.static_objects = []
        self.dynamic_objects = []

    @property
    def object_count(self):
        return len(self.static_objects) + len(self.dynamic_objects)

    def material(self, idx):
        return self._material_list[idx]

    def add_material(self, material):
        """Add material to GPU memory, reusing the slot of an equal material"""
        idx = self._material_table.get(material)
        if idx is not None:
            return idx
        idx = len(self._material_list)
        if idx >= self.max_materials:
            raise SceneCapacityError(f"Maximum number of materials ({self.max_materials}) exceeded")
        self.materials[idx] = MaterialData(
            diffuse=ti.math.vec3(*material.diffuse),
            specular=material.specular,
            albedo=ti.math.vec4(*material.albedo),
            refractive_index=material.refractive_index,
            emission=ti.math.vec3(*material.emission),
            is_emissive=int(material.is_emissive),
        )
        self._material_table[material] = idx
        self._material_list.append(material)
        return idx

    def _write_objects(self, objects, offset):
        for i, obj in enumerate(objects, start=offset):
            self._kind[i] = obj.kind
            self._center[i] = obj.center
            self._size[i] = obj.size
            self._material_idx[i] = self.add_material(obj.material)
            self._is_light[i] = int(obj.is_light)

    def _upload(self):
        self.objects.from_numpy({
            'kind': self._kind,
            'center': self._center,
            'size': self._size,
            'material_idx': self._material_idx,
            'is_light': self._is_light,
        })
        self.num_objects[None] = self.object_count

    def _check_capacity(self, count):
        if count > self.max_objects:
            raise SceneCapacityError(f"Maximum number of objects ({self.max_objects}) exceeded: {count}")

    def set_static_objects(self, objects):
        """Replace the static head of the object list; drops dynamic objects"""
        objects = list(objects)
        self._check_capacity(len(objects))
        self.static_objects = objects
        self.dynamic_objects = []
        self._write_objects(objects, 0)
        self._upload()
        logger.debug("Uploaded %d static objects", len(objects))

    def set_dynamic_objects(self, objects):
        """Replace the per-frame objects appended after the static ones"""
        objects = list(objects)
        self._check_capacity(len(self.static_objects) + len(objects))
        self.dynamic_objects = objects
        self._write_objects(objects, len(self.static_objects))
        self._upload()

    def set_objects(self, objects):
        """Load a complete object list, all of it treated as static"""
        self.set_static_objects(objects)

    def set_lights(self, positions):
        """Replace the light positions for the current frame"""
        positions = list(positions)
        if len(positions) > self.max_lights:
            raise SceneCapacityError(f"Maximum number of lights ({self.max_lights}) exceeded: {len(positions)}")
        for i, position in enumerate(positions):
            self.lights[i] = ti.math.vec3(*[float(c) for c in position])
        self.num_lights[None] = len(positions)

    def light_positions(self):
        """Centers of the static objects flagged as light sources"""
        return [obj.center for obj in self.static_objects if obj.is_light]

    def probe(self, origin, direction):
        """Nearest intersection along a single ray"""
        probe_kernel(self._probe, self.objects, self.num_objects,
                     ti.math.vec3(*[float(c) for c in origin]),
                     ti.math.vec3(*[float(c) for c in direction]))
        data = self._probe.to_numpy()
        is_intersecting = bool(data['is_intersecting'])
        idx = int(data['material_idx'])
        return HitInfo(
            point=np.asarray(data['point'], dtype=np.float64),
            normal=np.asarray(data['normal'], dtype=np.float64),
            distance=float(data['distance']),
            material=self.material(idx) if is_intersecting else None,
            is_intersecting=is_intersecting,
        )
