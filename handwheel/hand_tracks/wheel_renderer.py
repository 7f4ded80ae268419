"""Draws the steering wheel by projecting its rings and spokes through the camera."""

import math
from dataclasses import dataclass

import cv2
import numpy as np
from numpy.typing import NDArray

from handwheel.hand_mapping.math_utils import compose_matrix, apply_matrix4
from handwheel.hand_mapping.smoother import ObjectTransform
from handwheel.hand_mapping.space import PerspectiveCamera, ndc_to_pixel
from handwheel.hand_mapping.config import (
    RIM_RADIUS, RIM_TUBE, INNER_RADIUS, SPOKE_COUNT, WHEEL_BASE_SCALE,
)

COLOR_RIM = (60, 60, 60)
COLOR_INNER = (30, 30, 30)
COLOR_SPOKE = (110, 110, 110)
COLOR_MARK = (0, 200, 255)


@dataclass
class WheelModel:
    """Wheel geometry at unit scale, in the wheel's local XY plane (face along +Z)."""
    rim_radius: float = RIM_RADIUS
    rim_tube: float = RIM_TUBE
    inner_radius: float = INNER_RADIUS
    spoke_count: int = SPOKE_COUNT
    base_scale: float = WHEEL_BASE_SCALE

    @property
    def intrinsic_radius(self) -> float:
        """Bounding radius at scale 1."""
        return self.rim_radius + self.rim_tube


def _ring(radius: float, segments: int = 64) -> NDArray[np.float64]:
    t = np.linspace(0.0, 2.0 * math.pi, segments, endpoint=False)
    return np.stack([radius * np.cos(t), radius * np.sin(t), np.zeros_like(t)], axis=1)


def _pt(p) -> tuple[int, int]:
    return int(p[0]), int(p[1])


def _to_pixels(
    points: NDArray[np.float64], mvp_model: NDArray[np.float64], width: int, height: int
) -> NDArray[np.int32] | None:
    px = []
    for p in points:
        ndc = apply_matrix4(mvp_model, p)
        if not -1.0 <= ndc[2] <= 1.0:
            return None
        px.append(ndc_to_pixel(ndc, width, height))
    return np.array(px, dtype=np.int32)


def draw_wheel(
    frame: NDArray[np.uint8],
    transform: ObjectTransform,
    camera: PerspectiveCamera,
    model: WheelModel,
) -> None:
    """Render the wheel wireframe onto the frame; parts behind the camera are skipped."""
    h, w = frame.shape[:2]
    model_matrix = compose_matrix(transform.position, transform.orientation, transform.scale)
    mvp = camera.projection_matrix @ camera.view_matrix @ model_matrix

    thickness = max(2, int(model.rim_tube * transform.scale * 40))
    for radius, color, thick in (
        (model.rim_radius, COLOR_RIM, thickness),
        (model.inner_radius, COLOR_INNER, max(1, thickness // 2)),
    ):
        pts = _to_pixels(_ring(radius), mvp, w, h)
        if pts is not None:
            cv2.polylines(frame, [pts], True, color, thick, cv2.LINE_AA)

    for i in range(model.spoke_count):
        a = math.pi / 2 + i * 2.0 * math.pi / model.spoke_count
        spoke = np.array([
            [0.0, 0.0, 0.0],
            [model.rim_radius * math.cos(a), model.rim_radius * math.sin(a), 0.0],
        ])
        pts = _to_pixels(spoke, mvp, w, h)
        if pts is not None:
            cv2.line(frame, _pt(pts[0]), _pt(pts[1]), COLOR_SPOKE, max(1, thickness // 2), cv2.LINE_AA)

    # top-of-wheel marker makes the rotation readable
    mark = _to_pixels(np.array([[0.0, model.rim_radius, 0.0]]), mvp, w, h)
    if mark is not None:
        cv2.circle(frame, _pt(mark[0]), max(3, thickness), COLOR_MARK, -1)
