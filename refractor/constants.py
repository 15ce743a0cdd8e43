import math

# Constants
WIDTH, HEIGHT = 800, 600
FOV = math.pi / 3  # 60 degrees
MAX_DEPTH = 3
ORIGIN_BIAS = 1e-4
SKYBOX_COLOR = (68, 142, 228)
INF = 1e30

# Shading
LIGHT_GAIN = 1.5
MIN_AMBIENT = 0.2
MAX_AMBIENT = 1.0
NIGHT_THRESHOLD = 0.3

# Sky palettes
SKY_DAY = (135, 206, 235)
GROUND_DAY = (222, 184, 135)
SKY_NIGHT = (25, 25, 112)
GROUND_NIGHT = (50, 50, 50)

# Geometry kinds
GEOMETRY_CUBE = 0

# Scene limits
MAX_OBJECTS = 1024
MAX_MATERIALS = 64
MAX_LIGHTS = 16

# Movement
MOVE_STEP = 0.5
ROTATION_SPEED = 0.05
MAX_PITCH = math.radians(89.0)
SUN_ORBIT_RADIUS = 15.0
FRAME_DELAY_MS = 16
