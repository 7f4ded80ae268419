"""Per-frame pipeline: detections → geometry → targets → smoothed transform."""

from dataclasses import dataclass

from .geometry import GeometrySample, measure, to_pixels
from .landmarks import HandDetection, HandPair, resolve_hand_pair
from .math_utils import Point2, Vec3, Quat
from .session import SessionContext
from .smoother import ObjectTransform, steering_orientation
from .space import PerspectiveCamera, solve_target_scale, target_position


@dataclass
class FrameResult:
    """What one processed frame measured and produced."""
    pair: HandPair
    left_px: Point2
    right_px: Point2
    sample: GeometrySample
    mirror: bool
    target_position: Vec3
    target_orientation: Quat
    target_scale: float | None
    transform: ObjectTransform


def process_frame(
    session: SessionContext,
    detections: list[HandDetection],
    width: int,
    height: int,
    camera: PerspectiveCamera,
    elapsed_s: float | None = None,
) -> FrameResult | None:
    """
    Run one detection frame through the mapping pipeline.

    Returns:
        FrameResult, or None when fewer than two hands were found (the
        transform and history are left untouched)
    """
    session.check_auto_mirror(detections)
    mirror = session.mirror_mode

    pair = resolve_hand_pair(detections, session.handedness_min_score)
    if pair is None or width <= 0 or height <= 0:
        session.set_tracking(False)
        return None
    session.set_tracking(True)

    a = to_pixels(pair.left, width, height)
    b = to_pixels(pair.right, width, height)
    sample = measure(a, b)

    position = target_position(a, b, width, height, camera, session.reference_distance)
    orientation = steering_orientation(camera, sample.angle_rad, mirror)
    scale = solve_target_scale(
        sample.radius,
        session.intrinsic_radius,
        camera.fov_deg,
        height,
        fraction=session.pixel_radius_fraction,
        pixel_floor=session.min_pixel_radius,
    )

    transform = session.smoother.step(
        position=position,
        orientation=orientation,
        scale=scale,
        elapsed_s=elapsed_s if session.time_based_smoothing else None,
    )
    session.history.push(sample.radius, sample.angle_deg)

    return FrameResult(
        pair=pair,
        left_px=a,
        right_px=b,
        sample=sample,
        mirror=mirror,
        target_position=position,
        target_orientation=orientation,
        target_scale=scale,
        transform=transform,
    )
