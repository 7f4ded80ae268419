"""MediaPipe hand tracking wrapper producing HandDetection lists."""

import cv2
import numpy as np
from numpy.typing import NDArray

from handwheel.hand_mapping.landmarks import HandDetection
from handwheel.hand_mapping.config import (
    MAX_NUM_HANDS,
    MODEL_COMPLEXITY,
    MIN_DETECTION_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
)


class UpstreamUnavailable(RuntimeError):
    """Camera or detector could not be started."""


def get_handedness(handedness) -> tuple[str | None, float | None]:
    """Extract (label, score) from a MediaPipe handedness entry."""
    try:
        cls = handedness.classification[0]
    except (AttributeError, IndexError, TypeError):
        return None, None
    return getattr(cls, "label", None), getattr(cls, "score", None)


def detections_from_results(results) -> list[HandDetection]:
    """Convert MediaPipe Hands results into HandDetection objects."""
    if not results or not results.multi_hand_landmarks:
        return []

    handedness = results.multi_handedness or []
    detections = []
    for i, hand in enumerate(results.multi_hand_landmarks):
        label, score = get_handedness(handedness[i]) if i < len(handedness) else (None, None)
        points = [(lm.x, lm.y) for lm in hand.landmark]
        detections.append(HandDetection(landmarks=points, label=label, score=score))
    return detections


def mirror_frame(frame: NDArray[np.uint8], mirror: bool) -> NDArray[np.uint8]:
    """Flip horizontally when mirror mode is on, so the detector sees what is displayed."""
    return cv2.flip(frame, 1) if mirror else frame


class HandTracker:
    """Wrapper for MediaPipe hand tracking."""

    def __init__(
        self,
        max_num_hands: int = MAX_NUM_HANDS,
        model_complexity: int = MODEL_COMPLEXITY,
        min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
    ):
        try:
            import mediapipe as mp

            self._mp_hands = mp.solutions.hands
            self._mp_draw = mp.solutions.drawing_utils
            self._hands = self._mp_hands.Hands(
                static_image_mode=False,
                max_num_hands=max_num_hands,
                model_complexity=model_complexity,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
            )
        except (ImportError, AttributeError, RuntimeError) as e:
            raise UpstreamUnavailable(f"Hand detector unavailable: {e}") from e
        self._last_results = None

    def process(self, frame: NDArray[np.uint8]) -> None:
        """Process frame for hand detection."""
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb.flags.writeable = False
        self._last_results = self._hands.process(rgb)

    def detect(self, frame: NDArray[np.uint8]) -> list[HandDetection]:
        """Detect hands in an already mirrored (or not) BGR frame."""
        self.process(frame)
        return detections_from_results(self._last_results)

    def draw_landmarks(self, frame: NDArray[np.uint8]) -> None:
        """Draw hand landmarks on frame."""
        if not self._last_results or not self._last_results.multi_hand_landmarks:
            return

        for hand in self._last_results.multi_hand_landmarks:
            self._mp_draw.draw_landmarks(
                frame, hand, self._mp_hands.HAND_CONNECTIONS
            )

    def close(self) -> None:
        """Release resources."""
        self._hands.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def open_camera(camera_index: int, width: int, height: int) -> cv2.VideoCapture:
    """Open a capture device or raise UpstreamUnavailable."""
    cap = cv2.VideoCapture(camera_index)
    if not cap.isOpened():
        cap.release()
        raise UpstreamUnavailable(f"Cannot open camera {camera_index}")

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    return cap
