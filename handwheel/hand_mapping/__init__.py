"""Two-hand gesture to wheel transform mapping."""

from .config import HandSide, MAX_HISTORY
from .landmarks import HandDetection, HandPair, palm_center, resolve_hand_pair, infer_mirror
from .geometry import GeometrySample, measure, to_pixels
from .space import (
    PerspectiveCamera,
    pixel_to_ndc,
    target_position,
    pixels_per_world_unit,
    solve_target_scale,
)
from .smoother import ObjectTransform, TransformSmoother, steering_orientation
from .history import HistoryBuffer
from .session import SessionContext
from .status import StatusLog
from .pipeline import FrameResult, process_frame

__all__ = [
    "HandSide",
    "MAX_HISTORY",
    "HandDetection",
    "HandPair",
    "palm_center",
    "resolve_hand_pair",
    "infer_mirror",
    "GeometrySample",
    "measure",
    "to_pixels",
    "PerspectiveCamera",
    "pixel_to_ndc",
    "target_position",
    "pixels_per_world_unit",
    "solve_target_scale",
    "ObjectTransform",
    "TransformSmoother",
    "steering_orientation",
    "HistoryBuffer",
    "SessionContext",
    "StatusLog",
    "FrameResult",
    "process_frame",
]
