"""Camera, detector and drawing adapters around the mapping core."""

from .hand_tracker import (
    HandTracker,
    UpstreamUnavailable,
    detections_from_results,
    mirror_frame,
    open_camera,
)
from .visualization import TrackerDisplay, draw_hand_vector, draw_history, draw_status
from .wheel_renderer import WheelModel, draw_wheel

__all__ = [
    "HandTracker",
    "UpstreamUnavailable",
    "detections_from_results",
    "mirror_frame",
    "open_camera",
    "TrackerDisplay",
    "draw_hand_vector",
    "draw_history",
    "draw_status",
    "WheelModel",
    "draw_wheel",
]
