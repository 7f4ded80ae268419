"""Overlay drawing: palm markers, status box and radius/angle strip charts."""

import cv2
import numpy as np
from numpy.typing import NDArray

from handwheel.hand_mapping.history import HistoryBuffer
from handwheel.hand_mapping.pipeline import FrameResult

COLOR_RED = (0, 0, 255)
COLOR_BLUE = (255, 0, 0)
COLOR_LIME = (0, 255, 0)
COLOR_ORANGE = (0, 165, 255)
COLOR_CYAN = (255, 255, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_GRAY = (128, 128, 128)
FONT = cv2.FONT_HERSHEY_SIMPLEX

MARKER_RADIUS = 8
VECTOR_THICKNESS = 4
CHART_SIZE = (260, 90)


def _pt(p) -> tuple[int, int]:
    return int(round(p[0])), int(round(p[1]))


def draw_hand_vector(frame: NDArray[np.uint8], result: FrameResult) -> None:
    """Left palm in red, right palm in blue, and the vector between them."""
    a, b = _pt(result.left_px), _pt(result.right_px)
    cv2.line(frame, a, b, COLOR_LIME, VECTOR_THICKNESS)
    cv2.circle(frame, a, MARKER_RADIUS, COLOR_RED, -1)
    cv2.circle(frame, b, MARKER_RADIUS, COLOR_BLUE, -1)


def draw_status(frame: NDArray[np.uint8], text: str) -> None:
    """Status box in the top-left corner."""
    if not text:
        return
    (tw, _), _ = cv2.getTextSize(text, FONT, 0.6, 2)
    cv2.rectangle(frame, (10, 10), (10 + max(240, tw + 12), 46), (0, 0, 0), -1)
    cv2.putText(frame, text, (16, 34), FONT, 0.6, COLOR_WHITE, 2, cv2.LINE_AA)


def chart_points(
    values: tuple[float, ...], capacity: int, origin: tuple[int, int], size: tuple[int, int]
) -> NDArray[np.int32] | None:
    """Scale a series into polyline points inside the chart rectangle."""
    if len(values) < 2:
        return None

    x0, y0 = origin
    cw, ch = size
    data = np.asarray(values, dtype=np.float64)
    lo, hi = float(data.min()), float(data.max())
    span = hi - lo if hi - lo > 1e-9 else 1.0

    xs = x0 + np.arange(len(data)) * (cw / max(capacity - 1, 1))
    ys = y0 + ch - (data - lo) / span * ch
    return np.stack([xs, ys], axis=1).astype(np.int32)


def draw_chart(
    frame: NDArray[np.uint8],
    values: tuple[float, ...],
    capacity: int,
    origin: tuple[int, int],
    label: str,
    color: tuple[int, int, int],
    size: tuple[int, int] = CHART_SIZE,
) -> None:
    x0, y0 = origin
    cw, ch = size
    cv2.rectangle(frame, (x0, y0), (x0 + cw, y0 + ch), (0, 0, 0), -1)
    cv2.rectangle(frame, (x0, y0), (x0 + cw, y0 + ch), COLOR_GRAY, 1)

    pts = chart_points(values, capacity, origin, size)
    if pts is not None:
        cv2.polylines(frame, [pts], False, color, 2, cv2.LINE_AA)

    text = f"{label}: {values[-1]:.1f}" if values else label
    cv2.putText(frame, text, (x0 + 6, y0 + 18), FONT, 0.5, color, 1, cv2.LINE_AA)


def draw_history(frame: NDArray[np.uint8], history: HistoryBuffer) -> None:
    """Radius and angle charts stacked in the bottom-right corner."""
    h, w = frame.shape[:2]
    cw, ch = CHART_SIZE
    x0 = max(0, w - cw - 10)
    draw_chart(frame, history.radius, history.max_history, (x0, max(0, h - 2 * ch - 20)),
               "r (px)", COLOR_ORANGE)
    draw_chart(frame, history.angle, history.max_history, (x0, max(0, h - ch - 10)),
               "theta (deg)", COLOR_CYAN)


class TrackerDisplay:
    """Manages OpenCV window and visualization."""

    def __init__(self, window_name: str = "Hand Steering Wheel"):
        self.window_name = window_name
        cv2.namedWindow(window_name, cv2.WINDOW_NORMAL)

    def render(
        self,
        frame: NDArray[np.uint8],
        result: FrameResult | None,
        history: HistoryBuffer,
        status: str,
        mirror: bool,
    ) -> None:
        """Draw all visualizations on frame."""
        if result is not None:
            draw_hand_vector(frame, result)
        draw_history(frame, history)
        draw_status(frame, status)
        cv2.putText(frame, f"mirror={mirror}  [m] on  [n] off  [q] quit",
                    (10, frame.shape[0] - 12), FONT, 0.5, COLOR_GRAY, 1, cv2.LINE_AA)

    def show(self, frame: NDArray[np.uint8]) -> int:
        """Display frame and return key press."""
        cv2.imshow(self.window_name, frame)
        return cv2.waitKey(1) & 0xFF

    def close(self) -> None:
        """Close display window."""
        cv2.destroyWindow(self.window_name)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
