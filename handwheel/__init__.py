"""Two-hand steering wheel: gesture mapping core plus tracking adapters."""

from .hand_mapping import (
    HandDetection,
    GeometrySample,
    PerspectiveCamera,
    ObjectTransform,
    TransformSmoother,
    HistoryBuffer,
    SessionContext,
    StatusLog,
    FrameResult,
    process_frame,
)

from .hand_tracks import (
    HandTracker,
    UpstreamUnavailable,
    TrackerDisplay,
    WheelModel,
    draw_wheel,
)

__all__ = [
    # Mapping
    "HandDetection",
    "GeometrySample",
    "PerspectiveCamera",
    "ObjectTransform",
    "TransformSmoother",
    "HistoryBuffer",
    "SessionContext",
    "StatusLog",
    "FrameResult",
    "process_frame",
    # Tracking
    "HandTracker",
    "UpstreamUnavailable",
    "TrackerDisplay",
    "WheelModel",
    "draw_wheel",
]
