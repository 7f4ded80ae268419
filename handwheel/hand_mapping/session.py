"""Mutable per-session state passed into every frame."""

from dataclasses import dataclass, field
from typing import Callable

from .history import HistoryBuffer
from .landmarks import HandDetection, has_handedness, infer_mirror
from .smoother import TransformSmoother
from .status import StatusLog
from .config import (
    MIRROR_DEFAULT, HANDEDNESS_MIN_SCORE, REFERENCE_DISTANCE,
    PIXEL_RADIUS_FRACTION, MIN_PIXEL_RADIUS, RIM_RADIUS, RIM_TUBE,
    TIME_BASED_SMOOTHING,
)


@dataclass
class SessionContext:
    """
    Everything the frame pipeline mutates: mirror mode, the one-shot
    auto-mirror latch, the smoothed transform and the chart history.
    """
    mirror_mode: bool = MIRROR_DEFAULT
    auto_mirror_checked: bool = False
    smoother: TransformSmoother = field(default_factory=TransformSmoother)
    history: HistoryBuffer = field(default_factory=HistoryBuffer)
    on_status: Callable[[str], None] = field(default_factory=StatusLog)

    intrinsic_radius: float = RIM_RADIUS + RIM_TUBE
    reference_distance: float = REFERENCE_DISTANCE
    pixel_radius_fraction: float = PIXEL_RADIUS_FRACTION
    min_pixel_radius: float = MIN_PIXEL_RADIUS
    handedness_min_score: float = HANDEDNESS_MIN_SCORE
    time_based_smoothing: bool = TIME_BASED_SMOOTHING

    tracking: bool = False

    def set_mirror(self, value: bool) -> None:
        """Explicit user choice; also disables automatic inference."""
        self.mirror_mode = value
        self.auto_mirror_checked = True
        self.on_status(f"mirror={value}")

    def check_auto_mirror(self, detections: list[HandDetection]) -> None:
        """Infer mirror mode once, from the first frame carrying reliable handedness labels."""
        if self.auto_mirror_checked or not has_handedness(detections, self.handedness_min_score):
            return

        if infer_mirror(detections, self.handedness_min_score):
            self.mirror_mode = True
        self.auto_mirror_checked = True
        self.on_status(f"Auto mirror set to {self.mirror_mode}")

    def set_tracking(self, tracking: bool) -> None:
        if tracking == self.tracking:
            return
        self.tracking = tracking
        self.on_status("Tracking two hands" if tracking else "Show both hands to steer")
