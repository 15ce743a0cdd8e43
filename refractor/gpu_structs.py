import taichi as ti

@ti.dataclass
class MaterialData:
    diffuse: ti.math.vec3
    specular: ti.f32
    albedo: ti.math.vec4
    refractive_index: ti.f32
    emission: ti.math.vec3
    is_emissive: ti.i32

@ti.dataclass
class SceneObject:
    kind: ti.i32
    center: ti.math.vec3
    size: ti.f32
    material_idx: ti.i32
    is_light: ti.i32

@ti.dataclass
class Intersect:
    point: ti.math.vec3
    normal: ti.math.vec3
    distance: ti.f32
    material_idx: ti.i32
    is_intersecting: ti.i32
