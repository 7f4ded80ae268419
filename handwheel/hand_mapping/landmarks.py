"""Hand disambiguation and palm-center extraction from detector landmarks."""

from dataclasses import dataclass

from .math_utils import Point2, midpoint2
from .config import (
    HandSide,
    WRIST, MIDDLE_MCP, MIN_LANDMARKS,
    HANDEDNESS_MIN_SCORE, MIRROR_SPLIT_X,
)


@dataclass
class HandDetection:
    """One detected hand for the current frame (normalized coordinates)."""
    landmarks: list[Point2]
    label: str | None = None
    score: float | None = None


@dataclass
class HandPair:
    """Resolved left/right palm centers for one frame."""
    left: Point2
    right: Point2
    from_labels: bool


def palm_center(landmarks: list[Point2]) -> Point2:
    """Rough palm center: mean of the wrist and middle-finger MCP."""
    return midpoint2(landmarks[WRIST], landmarks[MIDDLE_MCP])


def is_valid_detection(det: HandDetection) -> bool:
    return det.landmarks is not None and len(det.landmarks) >= MIN_LANDMARKS


def hand_side(det: HandDetection, min_score: float = HANDEDNESS_MIN_SCORE) -> HandSide | None:
    """
    Classify a detection's handedness label by prefix, case-insensitively.

    Returns None for missing, unrecognized or low-confidence labels.
    """
    if not det.label:
        return None
    if det.score is not None and det.score < min_score:
        return None

    lbl = det.label.strip().lower()
    if lbl.startswith(HandSide.LEFT.value):
        return HandSide.LEFT
    if lbl.startswith(HandSide.RIGHT.value):
        return HandSide.RIGHT
    return None


def resolve_hand_pair(
    detections: list[HandDetection], min_score: float = HANDEDNESS_MIN_SCORE
) -> HandPair | None:
    """
    Pick the left and right hand for this frame.

    Labeled hands win when both sides are present. Otherwise, with at least
    two valid detections, the first is taken as left and the second as right.
    That positional fallback is best-effort and may swap the hands.

    Returns:
        HandPair, or None if fewer than two valid detections are present
    """
    valid = [d for d in detections if is_valid_detection(d)]

    left = right = None
    for det in valid:
        side = hand_side(det, min_score)
        if side is HandSide.LEFT and left is None:
            left = det
        elif side is HandSide.RIGHT and right is None:
            right = det

    if left is not None and right is not None:
        return HandPair(palm_center(left.landmarks), palm_center(right.landmarks), True)

    if len(valid) < 2:
        return None

    return HandPair(palm_center(valid[0].landmarks), palm_center(valid[1].landmarks), False)


def has_handedness(
    detections: list[HandDetection], min_score: float = HANDEDNESS_MIN_SCORE
) -> bool:
    """True if any detection carries a recognized label scoring at least min_score."""
    return any(hand_side(d, min_score) is not None for d in detections)


def infer_mirror(
    detections: list[HandDetection], min_score: float = HANDEDNESS_MIN_SCORE
) -> bool | None:
    """
    Guess whether the frame is mirrored from where labeled hands appear.

    A left hand on the right half, or a right hand on the left half, means
    the image is mirrored.

    Returns:
        True if any labeled hand says so, otherwise None (no evidence)
    """
    for det in detections:
        if not det.landmarks:
            continue
        side = hand_side(det, min_score)
        if side is None:
            continue
        avg_x = sum(p[0] for p in det.landmarks) / len(det.landmarks)
        if side is HandSide.LEFT and avg_x > MIRROR_SPLIT_X:
            return True
        if side is HandSide.RIGHT and avg_x < MIRROR_SPLIT_X:
            return True
    return None
