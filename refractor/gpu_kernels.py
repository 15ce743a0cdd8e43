import taichi as ti
import taichi.math as tm

from refractor.gpu_structs import Intersect, SceneObject
from refractor.constants import (
    FOV, MAX_DEPTH, INF, LIGHT_GAIN, GEOMETRY_CUBE,
    SKY_DAY, GROUND_DAY, SKY_NIGHT, GROUND_NIGHT,
)

_SKY_DAY = ti.Vector([float(c) for c in SKY_DAY])
_GROUND_DAY = ti.Vector([float(c) for c in GROUND_DAY])
_SKY_NIGHT = ti.Vector([float(c) for c in SKY_NIGHT])
_GROUND_NIGHT = ti.Vector([float(c) for c in GROUND_NIGHT])
_WHITE = ti.Vector([255.0, 255.0, 255.0])

@ti.func
def normalize_vec(v: tm.vec3) -> tm.vec3:
    """Safe vector normalization, a zero vector stays zero"""
    length = ti.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)
    result = tm.vec3(0.0, 0.0, 0.0)
    if length > 0.0:
        result = v / length
    return result

@ti.func
def reflect(incident: tm.vec3, normal: tm.vec3) -> tm.vec3:
    return incident - 2.0 * tm.dot(incident, normal) * normal

@ti.func
def saturate(color: tm.vec3) -> tm.vec3:
    """Clamp to the 8-bit range and drop the fraction"""
    return ti.floor(tm.clamp(color, 0.0, 255.0))

@ti.func
def lerp_color(a: tm.vec3, b: tm.vec3, factor: ti.f32) -> tm.vec3:
    return saturate(a * (1.0 - factor) + b * factor)

@ti.func
def base_change(direction: tm.vec3, right: tm.vec3, up: tm.vec3,
                forward: tm.vec3) -> tm.vec3:
    """Camera-local direction to world space, camera looks down -z"""
    return normalize_vec(direction.x * right + direction.y * up - direction.z * forward)

@ti.func
def empty_intersect() -> Intersect:
    return Intersect(
        point=tm.vec3(0.0, 0.0, 0.0),
        normal=tm.vec3(0.0, 0.0, 0.0),
        distance=0.0,
        material_idx=-1,
        is_intersecting=0,
    )

@ti.func
def ray_cube_intersect(ray_origin: tm.vec3, ray_dir: tm.vec3, center: tm.vec3,
                       size: ti.f32, material_idx: ti.i32) -> Intersect:
    """Ray-cube intersection using slab method"""
    half_size = size * 0.5
    min_bounds = center - half_size
    max_bounds = center + half_size

    t_enter = -INF
    t_exit = INF
    enter_axis = 0
    exit_axis = 0

    for k in ti.static(range(3)):
        t_lo = -INF
        t_hi = INF
        if ray_dir[k] != 0.0:
            t0 = (min_bounds[k] - ray_origin[k]) / ray_dir[k]
            t1 = (max_bounds[k] - ray_origin[k]) / ray_dir[k]
            t_lo = ti.min(t0, t1)
            t_hi = ti.max(t0, t1)
        elif ray_origin[k] < min_bounds[k] or ray_origin[k] > max_bounds[k]:
            # Parallel and outside the slab: empty interval
            t_lo = INF
            t_hi = -INF

        if t_lo > t_enter:
            t_enter = t_lo
            enter_axis = k
        if t_hi < t_exit:
            t_exit = t_hi
            exit_axis = k

    result = empty_intersect()
    if t_enter <= t_exit and t_exit >= 0.0 and t_exit < INF:
        inside = t_enter < 0.0
        distance = t_enter
        axis = enter_axis
        if inside:
            # Origin inside the cube, report the exit face
            distance = t_exit
            axis = exit_axis

        normal = tm.vec3(0.0, 0.0, 0.0)
        for k in ti.static(range(3)):
            if axis == k:
                face = 1.0
                if ray_dir[k] > 0.0:
                    face = -1.0
                if inside:
                    face = -face
                normal[k] = face

        result = Intersect(
            point=ray_origin + ray_dir * distance,
            normal=normal,
            distance=distance,
            material_idx=material_idx,
            is_intersecting=1,
        )
    return result

@ti.func
def intersect_object(obj: SceneObject, ray_origin: tm.vec3, ray_dir: tm.vec3) -> Intersect:
    """Dispatch on the geometry kind"""
    result = empty_intersect()
    if obj.kind == GEOMETRY_CUBE:
        result = ray_cube_intersect(ray_origin, ray_dir, obj.center, obj.size, obj.material_idx)
    return result

@ti.func
def scene_intersect(ray_origin: tm.vec3, ray_dir: tm.vec3,
                    objects, num_objects) -> Intersect:
    """Nearest hit over every object (z-buffer scan)"""
    nearest = empty_intersect()
    zbuffer = INF
    for i in range(num_objects[None]):
        hit = intersect_object(objects[i], ray_origin, ray_dir)
        if hit.is_intersecting == 1 and hit.distance < zbuffer:
            zbuffer = hit.distance
            nearest = hit
    return nearest

@ti.func
def offset_origin(hit: Intersect, direction: tm.vec3, origin_bias: ti.f32) -> tm.vec3:
    offset = hit.normal * origin_bias
    result = hit.point + offset
    if tm.dot(direction, hit.normal) < 0.0:
        result = hit.point - offset
    return result

@ti.func
def cast_shadow(hit: Intersect, light_position: tm.vec3, objects, num_objects,
                origin_bias: ti.f32) -> ti.f32:
    """Shadow attenuation from the first occluder found in object order"""
    to_light = light_position - hit.point
    light_distance = to_light.norm()
    light_dir = normalize_vec(to_light)
    shadow_origin = offset_origin(hit, light_dir, origin_bias)

    shadow_intensity = 0.0
    if light_distance > 0.0:
        for i in range(num_objects[None]):
            occluder = intersect_object(objects[i], shadow_origin, light_dir)
            if occluder.is_intersecting == 1 and occluder.distance < light_distance:
                distance_ratio = occluder.distance / light_distance
                shadow_intensity = 1.0 - ti.min(distance_ratio * distance_ratio, 1.0)
                break
    return shadow_intensity

@ti.func
def fresnel(cos_theta: ti.f32, refractive_index: ti.f32) -> ti.f32:
    """Schlick's approximation, 0 for a degenerate index of -1"""
    reflectance = 0.0
    denominator = 1.0 + refractive_index
    if denominator != 0.0:
        r0 = ((1.0 - refractive_index) / denominator) ** 2
        reflectance = r0 + (1.0 - r0) * (1.0 - cos_theta) ** 5
    return reflectance

@ti.func
def skybox_color(ray_dir: tm.vec3, ambient_intensity: ti.f32) -> tm.vec3:
    """Ground to sky gradient, each end blended from night to day"""
    t = 0.5 * (ray_dir.y + 1.0)
    sky = lerp_color(_SKY_NIGHT, _SKY_DAY, ambient_intensity)
    ground = lerp_color(_GROUND_NIGHT, _GROUND_DAY, ambient_intensity)
    return saturate((1.0 - t) * ground + t * sky)

@ti.func
def cast_ray(ray_origin: tm.vec3, ray_dir: tm.vec3,
             objects, materials, num_objects, lights, num_lights,
             depth: ti.i32, ambient_intensity: ti.f32,
             origin_bias: ti.f32, skybox: tm.vec3) -> tm.vec3:
    """Shade one ray: nearest hit, per-light diffuse/specular, emission"""
    color = skybox
    if depth <= MAX_DEPTH:
        hit = scene_intersect(ray_origin, ray_dir, objects, num_objects)
        if hit.is_intersecting == 0:
            color = skybox_color(ray_dir, ambient_intensity)
        else:
            material = materials[hit.material_idx]
            view_dir = normalize_vec(ray_origin - hit.point)
            cos_theta = ti.max(0.0, -tm.dot(ray_dir, hit.normal))
            reflectance = fresnel(cos_theta, material.refractive_index)

            total_diffuse = tm.vec3(0.0, 0.0, 0.0)
            total_specular = tm.vec3(0.0, 0.0, 0.0)
            for l in range(num_lights[None]):
                light_position = lights[l]
                light_dir = normalize_vec(light_position - hit.point)
                reflect_dir = normalize_vec(reflect(-light_dir, hit.normal))

                shadow_intensity = cast_shadow(hit, light_position, objects, num_objects, origin_bias)
                light_intensity = LIGHT_GAIN * (1.0 - shadow_intensity)

                diffuse_intensity = tm.clamp(tm.dot(hit.normal, light_dir), 0.0, 1.0)
                diffuse = saturate(material.diffuse * material.albedo[0]
                                   * diffuse_intensity * light_intensity)
                total_diffuse = saturate(total_diffuse + diffuse)

                specular_intensity = ti.max(0.0, tm.dot(view_dir, reflect_dir)) ** material.specular
                specular = saturate(_WHITE * material.albedo[1] * specular_intensity
                                    * light_intensity * reflectance)
                total_specular = saturate(total_specular + specular)

            emission = tm.vec3(0.0, 0.0, 0.0)
            if material.is_emissive == 1:
                emission = material.emission

            color = saturate(total_diffuse + total_specular + emission)
    return color

@ti.kernel
def render_kernel(pixels: ti.template(), objects: ti.template(), materials: ti.template(),
                  num_objects: ti.template(), lights: ti.template(), num_lights: ti.template(),
                  eye: tm.vec3, right: tm.vec3, up: tm.vec3, forward: tm.vec3,
                  ambient_intensity: ti.f32, origin_bias: ti.f32, skybox: tm.vec3):
    """Trace one primary ray per pixel into the framebuffer"""
    width = pixels.shape[0]
    height = pixels.shape[1]
    aspect_ratio = width / height
    perspective_scale = ti.tan(FOV * 0.5)

    for x, y in pixels:
        screen_x = (2.0 * x) / width - 1.0
        screen_y = -(2.0 * y) / height + 1.0
        screen_x = screen_x * aspect_ratio * perspective_scale
        screen_y = screen_y * perspective_scale

        ray_dir = normalize_vec(tm.vec3(screen_x, screen_y, -1.0))
        world_dir = base_change(ray_dir, right, up, forward)

        pixels[x, y] = cast_ray(eye, world_dir, objects, materials, num_objects,
                                lights, num_lights, 0, ambient_intensity,
                                origin_bias, skybox)

@ti.kernel
def probe_kernel(result: ti.template(), objects: ti.template(), num_objects: ti.template(),
                 ray_origin: tm.vec3, ray_dir: tm.vec3):
    result[None] = scene_intersect(ray_origin, ray_dir, objects, num_objects)

@ti.kernel
def shade_kernel(result: ti.template(), objects: ti.template(), materials: ti.template(),
                 num_objects: ti.template(), lights: ti.template(), num_lights: ti.template(),
                 ray_origin: tm.vec3, ray_dir: tm.vec3, depth: ti.i32,
                 ambient_intensity: ti.f32, origin_bias: ti.f32, skybox: tm.vec3):
    result[None] = cast_ray(ray_origin, ray_dir, objects, materials, num_objects,
                            lights, num_lights, depth, ambient_intensity,
                            origin_bias, skybox)

@ti.kernel
def shadow_kernel(result: ti.template(), objects: ti.template(), num_objects: ti.template(),
                  ray_origin: tm.vec3, ray_dir: tm.vec3, light_position: tm.vec3,
                  origin_bias: ti.f32):
    hit = scene_intersect(ray_origin, ray_dir, objects, num_objects)
    shadow_intensity = 0.0
    if hit.is_intersecting == 1:
        shadow_intensity = cast_shadow(hit, light_position, objects, num_objects, origin_bias)
    result[None] = shadow_intensity
