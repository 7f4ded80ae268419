"""Configuration constants for gesture-to-wheel mapping."""

from enum import Enum


class HandSide(Enum):
    LEFT = "left"
    RIGHT = "right"


# =============================================================================
# LANDMARKS / HANDEDNESS
# =============================================================================
WRIST = 0
MIDDLE_MCP = 9
MIN_LANDMARKS = MIDDLE_MCP + 1

# Handedness labels scoring below this are treated as missing.
HANDEDNESS_MIN_SCORE = 0.0

MIRROR_DEFAULT = True
MIRROR_SPLIT_X = 0.5


# =============================================================================
# HISTORY
# =============================================================================
MAX_HISTORY = 200


# =============================================================================
# SMOOTHING (per processed frame)
# =============================================================================
POSITION_ALPHA = 0.4
ROTATION_ALPHA = 0.4
SCALE_ALPHA = 0.25

# Frame rate at which the alphas above apply when time-based smoothing is on.
SMOOTHING_REFERENCE_FPS = 30.0
TIME_BASED_SMOOTHING = False
# Upper bound on a time-scaled factor; a long frame gap must not snap.
MAX_STEP_ALPHA = 1.0 - 1e-6


# =============================================================================
# SCALE SOLVE
# =============================================================================
MIN_PIXEL_RADIUS = 10.0
PIXEL_RADIUS_FRACTION = 0.5
MIN_SCALE = 1e-3
SCALE_EPS = 1e-4


# =============================================================================
# CAMERA / PROJECTION
# =============================================================================
CAMERA_FOV_DEG = 50.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 1000.0
CAMERA_Z = 1.5

# View-space distance of the plane the wheel is placed on.
REFERENCE_DISTANCE = 1.0


# =============================================================================
# WHEEL MODEL
# =============================================================================
RIM_RADIUS = 0.5
RIM_TUBE = 0.07
INNER_RADIUS = 0.32
SPOKE_COUNT = 3
WHEEL_BASE_SCALE = 1.1


# =============================================================================
# CAPTURE / DETECTOR
# =============================================================================
CAMERA_WIDTH = 1280
CAMERA_HEIGHT = 720
MAX_NUM_HANDS = 2
MODEL_COMPLEXITY = 1
MIN_DETECTION_CONFIDENCE = 0.7
MIN_TRACKING_CONFIDENCE = 0.7

# Wait between failed frame reads (ms); give up after this many in a row.
READ_RETRY_MS = 30
MAX_FAILED_READS = 100
