import numpy as np
import pytest

from refractor.color import Color
from refractor.geometry import Cube
from refractor.material import Material

RED = Material(diffuse=Color(255, 0, 0), albedo=(1.0, 0.0, 0.0, 0.0))
BLUE = Material(diffuse=Color(0, 0, 255), albedo=(1.0, 0.0, 0.0, 0.0))

AXES = [
    (1.0, 0.0, 0.0), (-1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0), (0.0, -1.0, 0.0),
    (0.0, 0.0, 1.0), (0.0, 0.0, -1.0),
]


@pytest.fixture
def unit_cube(scene):
    scene.set_objects([Cube((0.0, 0.0, 0.0), 2.0, RED)])
    return scene


class TestCubeIntersection:
    @pytest.mark.parametrize("axis", AXES)
    def test_hit_from_every_side(self, unit_cube, axis):
        axis = np.array(axis)
        hit = unit_cube.probe(5.0 * axis, -axis)
        assert hit.is_intersecting
        assert hit.distance == pytest.approx(4.0)
        assert np.allclose(hit.normal, axis)
        assert np.allclose(hit.point, axis)
        assert hit.material == RED

    def test_miss_outside_slab(self, unit_cube):
        hit = unit_cube.probe((0.0, 3.0, 5.0), (0.0, 0.0, -1.0))
        assert not hit.is_intersecting

    def test_miss_returns_empty_record(self, unit_cube):
        hit = unit_cube.probe((4.0, 4.0, 4.0), (1.0, 0.0, 0.0))
        assert not hit.is_intersecting
        assert hit.distance == 0.0
        assert np.allclose(hit.normal, np.zeros(3))
        assert hit.material is None

    def test_cube_behind_ray_is_missed(self, unit_cube):
        hit = unit_cube.probe((0.0, 0.0, 5.0), (0.0, 0.0, 1.0))
        assert not hit.is_intersecting

    def test_oblique_ray_misses_past_corner(self, unit_cube):
        direction = np.array([1.0, 1.0, 0.0]) / np.sqrt(2.0)
        hit = unit_cube.probe((-3.0, 0.0, 0.0), direction)
        assert not hit.is_intersecting

    def test_oblique_ray_enters_through_first_face(self, unit_cube):
        direction = np.array([1.0, 0.25, 0.0])
        direction /= np.linalg.norm(direction)
        hit = unit_cube.probe((-3.0, 0.0, 0.0), direction)
        assert hit.is_intersecting
        assert np.allclose(hit.normal, [-1.0, 0.0, 0.0])
        assert hit.point[0] == pytest.approx(-1.0, abs=1e-5)
        assert hit.point[1] == pytest.approx(0.5, abs=1e-5)

    def test_parallel_ray_inside_slab(self, unit_cube):
        hit = unit_cube.probe((0.5, 0.5, 5.0), (0.0, 0.0, -1.0))
        assert hit.is_intersecting
        assert np.all(np.isfinite(hit.point))
        assert np.all(np.isfinite(hit.normal))
        assert hit.distance == pytest.approx(4.0)
        assert np.allclose(hit.normal, [0.0, 0.0, 1.0])
        assert np.allclose(hit.point, [0.5, 0.5, 1.0])

    def test_parallel_ray_on_slab_boundary(self, unit_cube):
        hit = unit_cube.probe((1.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert hit.is_intersecting
        assert hit.distance == pytest.approx(4.0)

    def test_origin_inside_reports_exit_face(self, unit_cube):
        hit = unit_cube.probe((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
        assert hit.is_intersecting
        assert hit.distance == pytest.approx(1.0)
        assert np.allclose(hit.normal, [1.0, 0.0, 0.0])
        assert np.allclose(hit.point, [1.0, 0.0, 0.0])

    def test_offset_cube(self, scene):
        scene.set_objects([Cube((3.0, -2.0, 1.0), 1.0, RED)])
        hit = scene.probe((3.0, 5.0, 1.0), (0.0, -1.0, 0.0))
        assert hit.distance == pytest.approx(6.5)
        assert np.allclose(hit.normal, [0.0, 1.0, 0.0])


class TestNearestHit:
    @pytest.mark.parametrize("order", [0, 1])
    def test_nearest_hit_wins_regardless_of_order(self, scene, order):
        near = Cube((0.0, 0.0, 0.0), 2.0, RED)
        far = Cube((0.0, 0.0, -5.0), 2.0, BLUE)
        scene.set_objects([near, far] if order == 0 else [far, near])
        hit = scene.probe((0.0, 0.0, 10.0), (0.0, 0.0, -1.0))
        assert hit.distance == pytest.approx(9.0)
        assert hit.material == RED

    def test_empty_scene_misses(self, scene):
        scene.set_objects([])
        assert not scene.probe((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)).is_intersecting
