"""Radius and angle between the two palm centers in pixel space."""

import math
from dataclasses import dataclass

from .math_utils import Point2, dist2, wrap_deg


@dataclass
class GeometrySample:
    """Instantaneous two-hand measurement for one frame."""
    radius: float
    angle_deg: float
    angle_rad: float


def to_pixels(point: Point2, width: int, height: int) -> Point2:
    """
    Map a normalized point to pixels.

    No horizontal flip here: when mirroring is on, the detector was already
    fed the mirrored frame.
    """
    return (point[0] * width, point[1] * height)


def measure(a: Point2, b: Point2) -> GeometrySample:
    """
    Measure the vector from the left palm `a` to the right palm `b`.

    The angle is 0 when the hands are level and positive when the right hand
    is lower (image y grows downward). Coincident points give the neutral
    sample (radius 0, angle 0).
    """
    vx = b[0] - a[0]
    vy = b[1] - a[1]
    radius = dist2(a, b)
    angle_deg = wrap_deg(math.degrees(math.atan2(vy, vx)))
    return GeometrySample(radius=radius, angle_deg=angle_deg, angle_rad=math.radians(angle_deg))
