import math

from refractor.geometry import Cube
from refractor.material import SAND, TRUNK, LEAF, WATER, LIGHT_CUBE

GRID_SIZE = 6
GRID_CUBE_SIZE = 0.5
WATER_LEVEL = 4.9
HOUSE_ORIGIN = (-4.5, 5.2, -4.0)
HOUSE_WIDTH, HOUSE_HEIGHT, HOUSE_DEPTH = 5, 3, 5
LIGHT_CUBE_CENTERS = [(1.0, 5.2, -4.0), (4.5, 5.2, 2.0)]


def build_static_scene():
    """Terrain, light cubes and the palm tree"""
    objects = [Cube((0.0, 0.0, 0.0), 10.0, SAND)]
    for center in LIGHT_CUBE_CENTERS:
        objects.append(Cube(center, 0.5, LIGHT_CUBE, is_light=True))

    # Trunk starts on top of the terrain cube
    trunk_start_y = 5.0
    trunk_cube_size = 0.4
    num_trunk_cubes = 5
    for i in range(num_trunk_cubes):
        objects.append(Cube((0.0, trunk_start_y + i * trunk_cube_size, 0.0), trunk_cube_size, TRUNK))

    leaf_y = trunk_start_y + num_trunk_cubes * trunk_cube_size
    for dx, dz in [(0.0, 0.0), (0.5, 0.5), (-0.5, 0.5), (0.5, -0.5), (-0.5, -0.5)]:
        objects.append(Cube((dx, leaf_y, dz), 0.5, LEAF))
    return objects


def generate_wave_grid(material=WATER, grid_size=GRID_SIZE, cube_size=GRID_CUBE_SIZE, elapsed_time=0.0):
    """Water cubes bobbing on a sine wave"""
    water_cubes = []
    for x in range(grid_size):
        for z in range(grid_size):
            wave_height = math.sin(elapsed_time * 2.0 + (x + z) * 0.5) * 0.2
            water_cubes.append(Cube((x * cube_size, WATER_LEVEL + wave_height, z * cube_size),
                                    cube_size, material))
    return water_cubes


def generate_sand_border(material=SAND, grid_size=GRID_SIZE, cube_size=GRID_CUBE_SIZE):
    """Sand cubes on the outline of the water grid"""
    sand_cubes = []
    for x in range(grid_size):
        for z in range(grid_size):
            if x == 0 or x == grid_size - 1 or z == 0 or z == grid_size - 1:
                sand_cubes.append(Cube((x * cube_size, WATER_LEVEL, z * cube_size), cube_size, material))
    return sand_cubes


def generate_sand_house(material=SAND, start_position=HOUSE_ORIGIN, cube_size=GRID_CUBE_SIZE):
    """Block house with a door, four windows and a flat roof"""
    sx, sy, sz = start_position
    house_cubes = []
    for x in range(HOUSE_WIDTH):
        for y in range(HOUSE_HEIGHT):
            for z in range(HOUSE_DEPTH):
                is_door = x == 2 and z == 0 and y < 2
                is_window = y == 1 and x in (1, 3) and z in (0, HOUSE_DEPTH - 1)
                if is_door or is_window:
                    continue
                house_cubes.append(Cube((sx + x * cube_size, sy + y * cube_size, sz + z * cube_size),
                                        cube_size, material))

    # Roof
    for x in range(HOUSE_WIDTH):
        for z in range(HOUSE_DEPTH):
            house_cubes.append(Cube((sx + x * cube_size, sy + HOUSE_HEIGHT * cube_size, sz + z * cube_size),
                                    cube_size, material))
    return house_cubes


def build_dynamic_scene(elapsed_time):
    """Per-frame geometry, appended after the static scene"""
    return generate_wave_grid(elapsed_time=elapsed_time) + generate_sand_border() + generate_sand_house()


def frame_light_positions(scene, sun):
    """Light cube centers followed by the sun"""
    return scene.light_positions() + [tuple(sun)]
