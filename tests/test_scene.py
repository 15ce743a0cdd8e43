import pytest

from refractor.color import Color
from refractor.geometry import Cube
from refractor.material import Material, SAND, WATER, LIGHT_CUBE
from refractor.scene_manager import SceneManager, SceneCapacityError
from oasis.scene_builder import (
    build_static_scene, build_dynamic_scene, generate_wave_grid, generate_sand_border,
    generate_sand_house, frame_light_positions, LIGHT_CUBE_CENTERS,
)


class TestGeometry:
    def test_cube_bounds_use_half_edge(self):
        lo, hi = Cube((1.0, 2.0, 3.0), 4.0).bounds()
        assert lo == (-1.0, 0.0, 1.0)
        assert hi == (3.0, 4.0, 5.0)

    def test_cube_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            Cube((0.0, 0.0, 0.0), 0.0)

    def test_material_requires_four_albedo_weights(self):
        with pytest.raises(ValueError):
            Material(albedo=(1.0, 0.0))

    def test_black_material(self):
        black = Material.black()
        assert black.diffuse == Color.black()
        assert not black.is_emissive


class TestSceneManager:
    def test_static_then_dynamic_order(self, scene):
        static = [Cube((0.0, 0.0, 0.0), 1.0, SAND)]
        scene.set_static_objects(static)
        scene.set_dynamic_objects([Cube((5.0, 0.0, 0.0), 1.0, WATER)] * 3)
        assert scene.num_objects[None] == 4
        assert scene.object_count == 4
        material_idx = scene.objects.to_numpy()["material_idx"]
        assert material_idx[0] == scene.add_material(SAND)
        assert material_idx[3] == scene.add_material(WATER)

        scene.set_dynamic_objects([])
        assert scene.num_objects[None] == 1
        assert scene.static_objects == static

    def test_dynamic_objects_are_intersected(self, scene):
        scene.set_static_objects([Cube((0.0, 0.0, 0.0), 1.0, SAND)])
        scene.set_dynamic_objects([Cube((0.0, 0.0, -5.0), 1.0, WATER)])
        hit = scene.probe((0.0, 0.0, -10.0), (0.0, 0.0, 1.0))
        assert hit.material == WATER

    def test_materials_are_deduplicated(self, scene):
        scene.set_objects([Cube((float(i), 0.0, 0.0), 1.0, SAND) for i in range(5)])
        assert scene.add_material(Material(diffuse=Color(237, 201, 175), specular=1.0,
                                           albedo=(0.9, 0.1, 0.0, 0.0))) == 0
        assert scene.add_material(WATER) == 1

    def test_list_albedo_material_uploads(self, scene):
        material = Material(diffuse=Color(10, 10, 10), albedo=[1.0, 0.0, 0.0, 0.0])
        assert material.albedo == (1.0, 0.0, 0.0, 0.0)
        scene.set_objects([Cube((0.0, 0.0, 0.0), 1.0, material)])
        hit = scene.probe((0.0, 0.0, -5.0), (0.0, 0.0, 1.0))
        assert hit.material == material
        assert scene.add_material(Material(diffuse=Color(10, 10, 10), albedo=(1, 0, 0, 0))) == 0

    def test_material_upload(self, scene):
        idx = scene.add_material(LIGHT_CUBE)
        data = scene.materials.to_numpy()
        assert data["is_emissive"][idx] == 1
        assert list(data["emission"][idx]) == pytest.approx([255.0, 223.0, 0.0])

    def test_light_positions_from_flagged_objects(self, scene):
        scene.set_objects([
            Cube((0.0, 0.0, 0.0), 1.0, SAND),
            Cube((1.0, 2.0, 3.0), 0.5, LIGHT_CUBE, is_light=True),
        ])
        assert scene.light_positions() == [(1.0, 2.0, 3.0)]

    def test_object_capacity(self, taichi_cpu):
        small = SceneManager(max_objects=2, max_materials=2, max_lights=1)
        small.set_static_objects([Cube((0.0, 0.0, 0.0), 1.0)])
        with pytest.raises(SceneCapacityError):
            small.set_dynamic_objects([Cube((1.0, 0.0, 0.0), 1.0)] * 2)
        with pytest.raises(SceneCapacityError):
            small.set_lights([(0, 0, 0), (1, 1, 1)])
        small.add_material(SAND)
        with pytest.raises(SceneCapacityError):
            small.add_material(WATER)


class TestSceneBuilder:
    def test_static_scene(self):
        objects = build_static_scene()
        assert len(objects) == 13
        assert objects[0].size == 10.0
        lights = [obj for obj in objects if obj.is_light]
        assert [obj.center for obj in lights] == LIGHT_CUBE_CENTERS
        assert all(obj.material.is_emissive for obj in lights)

    def test_wave_grid_heights(self):
        cubes = generate_wave_grid(elapsed_time=1.3)
        assert len(cubes) == 36
        assert all(4.7 - 1e-9 <= c.center[1] <= 5.1 + 1e-9 for c in cubes)
        assert generate_wave_grid(elapsed_time=0.0)[0].center == (0.0, 4.9, 0.0)

    def test_wave_grid_moves_with_time(self):
        a = generate_wave_grid(elapsed_time=0.0)
        b = generate_wave_grid(elapsed_time=0.5)
        assert [c.center for c in a] != [c.center for c in b]

    def test_sand_border_is_grid_outline(self):
        cubes = generate_sand_border()
        assert len(cubes) == 20
        assert (1.0, 4.9, 1.0) not in [c.center for c in cubes]

    def test_sand_house_has_door_and_windows(self):
        cubes = generate_sand_house()
        centers = {c.center for c in cubes}
        assert len(cubes) == 69 + 25
        # Door at x=2, z=0 on the two bottom layers
        assert (-3.5, 5.2, -4.0) not in centers
        assert (-3.5, 5.7, -4.0) not in centers
        assert (-3.5, 6.2, -4.0) in centers
        # Window at x=1, y=1, z=0
        assert (-4.0, 5.7, -4.0) not in centers

    def test_dynamic_scene_composition(self):
        assert len(build_dynamic_scene(0.0)) == 36 + 20 + 94

    def test_frame_lights_end_with_sun(self, scene):
        scene.set_static_objects(build_static_scene())
        lights = frame_light_positions(scene, (15.0, 0.0, 0.0))
        assert lights == LIGHT_CUBE_CENTERS + [(15.0, 0.0, 0.0)]
