"""Vector, quaternion and matrix helpers."""

import math

import numpy as np
from numpy.typing import NDArray

Point2 = tuple[float, float]
Vec3 = NDArray[np.float64]
Quat = NDArray[np.float64]  # (w, x, y, z)
Mat4 = NDArray[np.float64]


def dist2(a: Point2, b: Point2) -> float:
    """Euclidean distance between 2D points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def midpoint2(a: Point2, b: Point2) -> Point2:
    return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0)


def clamp(v: float, lo: float, hi: float) -> float:
    """Clamp value to range [lo, hi]."""
    return max(lo, min(hi, v))


def wrap_deg(angle: float) -> float:
    """Wrap angle to the half-open range (-180, 180]."""
    wrapped = math.fmod(angle, 360.0)
    if wrapped <= -180.0:
        wrapped += 360.0
    elif wrapped > 180.0:
        wrapped -= 360.0
    return wrapped


def vec3(x: float, y: float, z: float) -> Vec3:
    return np.array([x, y, z], dtype=np.float64)


def normalize3(v: Vec3) -> Vec3:
    """Normalize 3D vector to unit length (with epsilon to avoid division by zero)."""
    return v / (np.linalg.norm(v) + 1e-12)


def lerp(a, b, t: float):
    """Linear interpolation, works for scalars and numpy arrays."""
    return a + (b - a) * t


# =============================================================================
# QUATERNIONS
# =============================================================================

def quat_identity() -> Quat:
    return np.array([1.0, 0.0, 0.0, 0.0])


def quat_from_axis_angle(axis: Vec3, angle: float) -> Quat:
    """Rotation of `angle` radians about `axis` (right-hand rule)."""
    ax = normalize3(np.asarray(axis, dtype=np.float64))
    half = angle / 2.0
    s = math.sin(half)
    return np.array([math.cos(half), ax[0] * s, ax[1] * s, ax[2] * s])


def quat_multiply(a: Quat, b: Quat) -> Quat:
    """Hamilton product a * b (apply b first, then a)."""
    aw, ax, ay, az = a
    bw, bx, by, bz = b
    return np.array([
        aw * bw - ax * bx - ay * by - az * bz,
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
    ])


def quat_conjugate(q: Quat) -> Quat:
    return np.array([q[0], -q[1], -q[2], -q[3]])


def quat_normalize(q: Quat) -> Quat:
    n = np.linalg.norm(q)
    if n < 1e-12:
        return quat_identity()
    return q / n


def quat_rotate(q: Quat, v: Vec3) -> Vec3:
    """Rotate vector v by unit quaternion q."""
    p = np.array([0.0, v[0], v[1], v[2]])
    r = quat_multiply(quat_multiply(q, p), quat_conjugate(q))
    return r[1:]


def quat_angle_between(a: Quat, b: Quat) -> float:
    """Smallest rotation angle (radians) taking a to b."""
    d = abs(float(np.dot(quat_normalize(a), quat_normalize(b))))
    return 2.0 * math.acos(clamp(d, -1.0, 1.0))


def quat_slerp(a: Quat, b: Quat, t: float) -> Quat:
    """Spherical interpolation along the shortest arc."""
    a = quat_normalize(a)
    b = quat_normalize(b)
    cos_half = float(np.dot(a, b))
    if cos_half < 0.0:
        b = -b
        cos_half = -cos_half

    if cos_half > 0.9995:
        return quat_normalize(lerp(a, b, t))

    half = math.acos(clamp(cos_half, -1.0, 1.0))
    sin_half = math.sin(half)
    wa = math.sin((1.0 - t) * half) / sin_half
    wb = math.sin(t * half) / sin_half
    return quat_normalize(wa * a + wb * b)


def quat_to_matrix3(q: Quat) -> NDArray[np.float64]:
    w, x, y, z = quat_normalize(q)
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ])


# =============================================================================
# MATRICES
# =============================================================================

def compose_matrix(position: Vec3, orientation: Quat, scale: float = 1.0) -> Mat4:
    """4x4 affine matrix T * R * S (column-vector convention)."""
    m = np.eye(4)
    m[:3, :3] = quat_to_matrix3(orientation) * scale
    m[:3, 3] = position
    return m


def apply_matrix4(m: Mat4, v: Vec3) -> Vec3:
    """Transform a point by a 4x4 matrix, with perspective divide."""
    h = m @ np.array([v[0], v[1], v[2], 1.0])
    w = h[3] if abs(h[3]) > 1e-12 else 1e-12
    return h[:3] / w
