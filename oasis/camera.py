import math

import numpy as np

from refractor.constants import MOVE_STEP, MAX_PITCH


def normalize(v):
    """Normalize, leaving a zero vector as zero"""
    length = np.linalg.norm(v)
    if length > 0:
        return v / length
    return np.zeros(3)


class Camera:
    """Manages camera position and orientation"""

    COMMANDS = ('forward', 'backward', 'left', 'right')

    def __init__(self, eye, center, up=(0.0, 1.0, 0.0), move_step=MOVE_STEP):
        self.eye = np.array(eye, dtype=np.float64)
        self.center = np.array(center, dtype=np.float64)
        self.up = np.array(up, dtype=np.float64)
        self.move_step = move_step
        self.update_vectors()

    def update_vectors(self):
        """Update camera basis vectors from eye, center and up"""
        self.forward = normalize(self.center - self.eye)
        self.right = normalize(np.cross(self.forward, self.up))
        self.true_up = np.cross(self.right, self.forward)

    def base_change(self, direction):
        """Map a camera-space direction (looking down -z) to world space"""
        x, y, z = direction
        rotated = x * self.right + y * self.true_up - z * self.forward
        return normalize(rotated)

    def _translate(self, offset):
        self.eye = self.eye + offset
        self.center = self.center + offset
        self.update_vectors()

    def move_forward(self, amount):
        self._translate(self.forward * amount)

    def move_backward(self, amount):
        self._translate(-self.forward * amount)

    def strafe_left(self, amount):
        self._translate(-self.right * amount)

    def strafe_right(self, amount):
        self._translate(self.right * amount)

    def move(self, command):
        """Move eye and center together by one step"""
        if command == 'forward':
            self.move_forward(self.move_step)
        elif command == 'backward':
            self.move_backward(self.move_step)
        elif command == 'left':
            self.strafe_left(self.move_step)
        elif command == 'right':
            self.strafe_right(self.move_step)
        else:
            raise ValueError(f"Unknown camera command '{command}', expected one of {self.COMMANDS}")

    def orbit(self, yaw_delta, pitch_delta):
        """Rotate the eye around the center at constant distance"""
        offset = self.eye - self.center
        radius = np.linalg.norm(offset)
        if radius == 0:
            return

        yaw = math.atan2(offset[2], offset[0])
        pitch = math.asin(max(-1.0, min(1.0, offset[1] / radius)))

        yaw += yaw_delta
        # Keep away from the poles where forward and up become parallel
        pitch = max(-MAX_PITCH, min(MAX_PITCH, pitch + pitch_delta))

        offset = radius * np.array([
            math.cos(pitch) * math.cos(yaw),
            math.sin(pitch),
            math.cos(pitch) * math.sin(yaw),
        ])
        self.eye = self.center + offset
        self.update_vectors()
