import math

from refractor.constants import MIN_AMBIENT, MAX_AMBIENT, NIGHT_THRESHOLD, SUN_ORBIT_RADIUS


def ambient_light_intensity(light_position, min_intensity=MIN_AMBIENT, max_intensity=MAX_AMBIENT):
    """Time-of-day intensity from the sun height.

    The sun is brightest ten units above y=-1; below that the factor is
    clamped so night never drops under ``min_intensity``.
    """
    height_factor = (light_position[1] + 1.0) / 10.0
    height_factor = max(0.0, min(1.0, height_factor))
    return min_intensity + (max_intensity - min_intensity) * height_factor


def sun_position(angle, radius=SUN_ORBIT_RADIUS):
    """Sun on a circle in the xy plane"""
    return (radius * math.cos(angle), radius * math.sin(angle), 0.0)


def is_night(intensity, threshold=NIGHT_THRESHOLD):
    return intensity < threshold
