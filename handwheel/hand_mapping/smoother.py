"""Per-frame exponential smoothing of the wheel's transform."""

from dataclasses import dataclass, field

import numpy as np

from .math_utils import (
    Vec3, Quat,
    vec3, lerp, quat_identity, quat_from_axis_angle, quat_multiply, quat_slerp,
)
from .space import PerspectiveCamera
from .config import (
    POSITION_ALPHA, ROTATION_ALPHA, SCALE_ALPHA,
    SMOOTHING_REFERENCE_FPS, MAX_STEP_ALPHA, WHEEL_BASE_SCALE,
)


@dataclass
class ObjectTransform:
    """Current pose of the rendered object."""
    position: Vec3 = field(default_factory=lambda: vec3(0.0, 0.0, 0.0))
    orientation: Quat = field(default_factory=quat_identity)
    scale: float = WHEEL_BASE_SCALE

    def copy(self) -> "ObjectTransform":
        return ObjectTransform(self.position.copy(), self.orientation.copy(), self.scale)


def steering_orientation(camera: PerspectiveCamera, angle_rad: float, mirror: bool) -> Quat:
    """
    Face the camera, then turn about the camera's forward axis.

    With a mirrored feed the wheel turns by +angle, otherwise by -angle, so
    it follows the hands on screen either way.
    """
    rot_angle = angle_rad if mirror else -angle_rad
    q_rot = quat_from_axis_angle(camera.world_direction(), rot_angle)
    return quat_multiply(camera.quaternion, q_rot)


def alpha_for_elapsed(
    alpha: float, elapsed_s: float, reference_fps: float = SMOOTHING_REFERENCE_FPS
) -> float:
    """
    Convert a per-frame factor into one for an arbitrary frame interval.

    Equal to `alpha` when elapsed_s == 1 / reference_fps. Never reaches 1,
    however long the gap.
    """
    if elapsed_s <= 0.0:
        return 0.0
    return min(1.0 - (1.0 - alpha) ** (elapsed_s * reference_fps), MAX_STEP_ALPHA)


class TransformSmoother:
    """
    Owns an ObjectTransform and moves it a fixed fraction toward each target.

    The factors apply per processed frame, so perceived responsiveness
    depends on the frame rate unless `elapsed_s` is passed to `step`.
    """

    def __init__(
        self,
        transform: ObjectTransform | None = None,
        position_alpha: float = POSITION_ALPHA,
        rotation_alpha: float = ROTATION_ALPHA,
        scale_alpha: float = SCALE_ALPHA,
        reference_fps: float = SMOOTHING_REFERENCE_FPS,
    ):
        self._transform = transform if transform is not None else ObjectTransform()
        self.position_alpha = position_alpha
        self.rotation_alpha = rotation_alpha
        self.scale_alpha = scale_alpha
        self.reference_fps = reference_fps

    @property
    def transform(self) -> ObjectTransform:
        """Snapshot of the current transform."""
        return self._transform.copy()

    def reset(self, transform: ObjectTransform) -> None:
        """Replace the transform, e.g. when the object is recreated."""
        self._transform = transform.copy()

    def _alpha(self, alpha: float, elapsed_s: float | None) -> float:
        if elapsed_s is None:
            return alpha
        return alpha_for_elapsed(alpha, elapsed_s, self.reference_fps)

    def step(
        self,
        position: Vec3 | None = None,
        orientation: Quat | None = None,
        scale: float | None = None,
        elapsed_s: float | None = None,
    ) -> ObjectTransform:
        """Advance toward whichever targets are given; withheld ones stay put."""
        t = self._transform
        if position is not None:
            t.position = lerp(t.position, np.asarray(position, dtype=np.float64),
                              self._alpha(self.position_alpha, elapsed_s))
        if orientation is not None:
            t.orientation = quat_slerp(t.orientation, orientation,
                                       self._alpha(self.rotation_alpha, elapsed_s))
        if scale is not None:
            t.scale = float(lerp(t.scale, scale, self._alpha(self.scale_alpha, elapsed_s)))
        return self.transform
