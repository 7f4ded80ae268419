"""
Pixel → NDC → world conversion and the screen-size scale solve.

The camera follows the usual WebGL/three.js conventions: right-handed world,
camera looking down its local -Z axis, column vectors, NDC in [-1, 1]^3.
"""

import math
from dataclasses import dataclass, field

import numpy as np

from .math_utils import (
    Point2, Vec3, Quat, Mat4,
    midpoint2, vec3, quat_identity, quat_rotate, normalize3,
    compose_matrix, apply_matrix4,
)
from .config import (
    CAMERA_FOV_DEG, CAMERA_NEAR, CAMERA_FAR, CAMERA_Z,
    REFERENCE_DISTANCE,
    MIN_PIXEL_RADIUS, PIXEL_RADIUS_FRACTION, MIN_SCALE, SCALE_EPS,
)


@dataclass
class PerspectiveCamera:
    """Perspective camera model shared by the mapper and the renderer."""
    fov_deg: float = CAMERA_FOV_DEG
    aspect: float = 1.0
    near: float = CAMERA_NEAR
    far: float = CAMERA_FAR
    position: Vec3 = field(default_factory=lambda: vec3(0.0, 0.0, CAMERA_Z))
    quaternion: Quat = field(default_factory=quat_identity)

    def set_viewport(self, width: int, height: int) -> None:
        """Match the aspect ratio to the canvas size."""
        if width > 0 and height > 0:
            self.aspect = width / height

    @property
    def projection_matrix(self) -> Mat4:
        f = 1.0 / math.tan(math.radians(self.fov_deg) / 2.0)
        n, fa = self.near, self.far
        return np.array([
            [f / self.aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, -(fa + n) / (fa - n), -2.0 * fa * n / (fa - n)],
            [0.0, 0.0, -1.0, 0.0],
        ])

    @property
    def world_matrix(self) -> Mat4:
        return compose_matrix(self.position, self.quaternion)

    @property
    def view_matrix(self) -> Mat4:
        return np.linalg.inv(self.world_matrix)

    def world_direction(self) -> Vec3:
        """Unit forward vector in world space."""
        return normalize3(quat_rotate(self.quaternion, vec3(0.0, 0.0, -1.0)))

    def ndc_depth_at(self, distance: float) -> float:
        """NDC z of a point `distance` units in front of the camera."""
        n, fa = self.near, self.far
        return ((fa + n) * distance - 2.0 * fa * n) / ((fa - n) * distance)

    def unproject(self, ndc_x: float, ndc_y: float, ndc_z: float) -> Vec3:
        """NDC point → world point (inverse projection, then camera pose)."""
        view_pt = apply_matrix4(np.linalg.inv(self.projection_matrix), vec3(ndc_x, ndc_y, ndc_z))
        return apply_matrix4(self.world_matrix, view_pt)

    def project(self, point: Vec3) -> Vec3:
        """World point → NDC point."""
        return apply_matrix4(self.projection_matrix @ self.view_matrix, point)


# =============================================================================
# POSITION
# =============================================================================

def pixel_to_ndc(point: Point2, width: int, height: int) -> Point2:
    """Pixel coordinates (y down) → NDC (y up)."""
    ndc_x = (point[0] / width) * 2.0 - 1.0
    ndc_y = -((point[1] / height) * 2.0 - 1.0)
    return ndc_x, ndc_y


def ndc_to_pixel(ndc: Vec3, width: int, height: int) -> Point2:
    return ((ndc[0] + 1.0) / 2.0 * width, (1.0 - ndc[1]) / 2.0 * height)


def target_position(
    a: Point2,
    b: Point2,
    width: int,
    height: int,
    camera: PerspectiveCamera,
    reference_distance: float = REFERENCE_DISTANCE,
) -> Vec3:
    """World-space point under the pixel midpoint of a and b, on the reference plane."""
    ndc_x, ndc_y = pixel_to_ndc(midpoint2(a, b), width, height)
    return camera.unproject(ndc_x, ndc_y, camera.ndc_depth_at(reference_distance))


# =============================================================================
# SCALE
# =============================================================================

def pixels_per_world_unit(fov_deg: float, viewport_height: float) -> float:
    """Pixels covered by one world unit at distance 1 from the camera."""
    return viewport_height / (2.0 * math.tan(math.radians(fov_deg) / 2.0))


def desired_pixel_radius(
    radius: float,
    fraction: float = PIXEL_RADIUS_FRACTION,
    floor: float = MIN_PIXEL_RADIUS,
) -> float:
    return max(floor, radius * fraction)


def solve_target_scale(
    radius: float,
    intrinsic_radius: float,
    fov_deg: float,
    viewport_height: float,
    fraction: float = PIXEL_RADIUS_FRACTION,
    pixel_floor: float = MIN_PIXEL_RADIUS,
    min_scale: float = MIN_SCALE,
) -> float | None:
    """
    Scale that makes an object of `intrinsic_radius` (world units at scale 1)
    span the desired pixel radius.

    The object's actual depth is ignored: the solve assumes distance 1, so
    apparent size follows the hand spread rather than the 3D distance.

    Returns:
        Target scale (>= min_scale), or None if a denominator is negligible
    """
    ppwu = pixels_per_world_unit(fov_deg, viewport_height)
    if abs(intrinsic_radius) < SCALE_EPS or abs(ppwu) < SCALE_EPS:
        return None

    target = desired_pixel_radius(radius, fraction, pixel_floor) / (intrinsic_radius * ppwu)
    return max(min_scale, target)
