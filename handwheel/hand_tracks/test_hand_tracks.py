"""
Tests for the tracking and drawing adapters.

MediaPipe and the capture device are mocked; OpenCV drawing runs on
blank numpy frames.
"""

import sys
import unittest
from unittest.mock import MagicMock, patch

import numpy as np

from handwheel.hand_mapping.config import MAX_FAILED_READS, READ_RETRY_MS
from handwheel.hand_mapping.history import HistoryBuffer
from handwheel.hand_mapping.smoother import ObjectTransform
from handwheel.hand_mapping.space import PerspectiveCamera
from handwheel.hand_tracks.hand_tracker import (
    HandTracker,
    UpstreamUnavailable,
    detections_from_results,
    get_handedness,
    mirror_frame,
    open_camera,
)
from handwheel.hand_tracks.visualization import chart_points, draw_history, draw_status
from handwheel.hand_tracks.wheel_renderer import WheelModel, draw_wheel
from steering_wheel import run_steering_wheel


def fake_landmark(x: float, y: float) -> MagicMock:
    lm = MagicMock()
    lm.x, lm.y = x, y
    return lm


def fake_hand(x: float, y: float) -> MagicMock:
    hand = MagicMock()
    hand.landmark = [fake_landmark(x, y) for _ in range(21)]
    return hand


def fake_handedness(label: str, score: float = 0.95) -> MagicMock:
    cls = MagicMock()
    cls.label, cls.score = label, score
    entry = MagicMock()
    entry.classification = [cls]
    return entry


class TestDetectionsFromResults(unittest.TestCase):
    """MediaPipe results → HandDetection conversion."""

    def test_empty_results(self):
        results = MagicMock()
        results.multi_hand_landmarks = None
        self.assertEqual(detections_from_results(results), [])
        self.assertEqual(detections_from_results(None), [])

    def test_two_labeled_hands(self):
        results = MagicMock()
        results.multi_hand_landmarks = [fake_hand(0.2, 0.5), fake_hand(0.8, 0.4)]
        results.multi_handedness = [fake_handedness("Left"), fake_handedness("Right", 0.8)]

        dets = detections_from_results(results)
        self.assertEqual(len(dets), 2)
        self.assertEqual(dets[0].label, "Left")
        self.assertEqual(dets[1].label, "Right")
        self.assertAlmostEqual(dets[1].score, 0.8)
        self.assertEqual(len(dets[0].landmarks), 21)
        self.assertEqual(dets[1].landmarks[9], (0.8, 0.4))

    def test_missing_handedness(self):
        results = MagicMock()
        results.multi_hand_landmarks = [fake_hand(0.2, 0.5), fake_hand(0.8, 0.4)]
        results.multi_handedness = [fake_handedness("Left")]

        dets = detections_from_results(results)
        self.assertEqual(dets[0].label, "Left")
        self.assertIsNone(dets[1].label)

    def test_malformed_handedness(self):
        entry = MagicMock()
        entry.classification = []
        self.assertEqual(get_handedness(entry), (None, None))


class TestUpstream(unittest.TestCase):
    """Camera and detector start-up failures."""

    def test_detector_import_failure(self):
        with patch.dict(sys.modules, {"mediapipe": None}):
            with self.assertRaises(UpstreamUnavailable):
                HandTracker()

    def test_camera_not_opened(self):
        cap = MagicMock()
        cap.isOpened.return_value = False
        with patch("cv2.VideoCapture", return_value=cap):
            with self.assertRaises(UpstreamUnavailable):
                open_camera(3, 1280, 720)
        cap.release.assert_called_once()

    def test_camera_opened(self):
        cap = MagicMock()
        cap.isOpened.return_value = True
        with patch("cv2.VideoCapture", return_value=cap):
            self.assertIs(open_camera(0, 1280, 720), cap)
        self.assertEqual(cap.set.call_count, 2)


class TestMirrorFrame(unittest.TestCase):

    def setUp(self):
        self.frame = np.zeros((4, 6, 3), dtype=np.uint8)
        self.frame[:, 0] = 255

    def test_flips_when_mirrored(self):
        out = mirror_frame(self.frame, True)
        self.assertTrue((out[:, -1] == 255).all())
        self.assertTrue((out[:, 0] == 0).all())

    def test_passthrough_otherwise(self):
        self.assertIs(mirror_frame(self.frame, False), self.frame)


class TestDrawing(unittest.TestCase):

    def setUp(self):
        self.frame = np.zeros((480, 640, 3), dtype=np.uint8)

    def test_wheel_model_radius(self):
        self.assertAlmostEqual(WheelModel().intrinsic_radius, 0.57)

    def test_draw_wheel_in_view(self):
        camera = PerspectiveCamera()
        camera.set_viewport(640, 480)
        draw_wheel(self.frame, ObjectTransform(scale=0.5), camera, WheelModel())
        self.assertGreater(int(self.frame.sum()), 0)

    def test_draw_wheel_behind_camera_is_skipped(self):
        camera = PerspectiveCamera()
        transform = ObjectTransform(position=np.array([0.0, 0.0, 5.0]), scale=0.5)
        draw_wheel(self.frame, transform, camera, WheelModel())
        self.assertEqual(int(self.frame.sum()), 0)

    def test_chart_points_span_rectangle(self):
        pts = chart_points((0.0, 5.0, 10.0), 3, (10, 20), (100, 50))
        self.assertEqual(pts.tolist(), [[10, 70], [60, 45], [110, 20]])

    def test_chart_needs_two_samples(self):
        self.assertIsNone(chart_points((1.0,), 200, (0, 0), (100, 50)))

    def test_draw_history_and_status(self):
        history = HistoryBuffer()
        for i in range(10):
            history.push(100.0 + i, float(i))
        draw_history(self.frame, history)
        draw_status(self.frame, "Tracking two hands")
        self.assertGreater(int(self.frame.sum()), 0)


class TestCaptureLoop(unittest.TestCase):
    """Capture loop behaviour when the camera stops delivering frames."""

    def setUp(self):
        self.cap = MagicMock()
        self.cap.read.return_value = (False, None)
        patchers = [
            patch("steering_wheel.open_camera", return_value=self.cap),
            patch("steering_wheel.HandTracker"),
            patch("steering_wheel.TrackerDisplay"),
            patch("steering_wheel.cv2"),
        ]
        mocks = [p.start() for p in patchers]
        for p in patchers:
            self.addCleanup(p.stop)
        self.display_cls, self.cv2 = mocks[2], mocks[3]
        self.cv2.waitKey.return_value = -1

    def test_gives_up_after_repeated_failed_reads(self):
        run_steering_wheel()
        self.assertEqual(self.cap.read.call_count, MAX_FAILED_READS)
        self.cap.release.assert_called_once()

    def test_waits_between_failed_reads(self):
        run_steering_wheel()
        self.cv2.waitKey.assert_called_with(READ_RETRY_MS)
        self.assertEqual(self.cv2.waitKey.call_count, MAX_FAILED_READS - 1)
        self.display_cls.return_value.__enter__.return_value.show.assert_not_called()

    def test_quit_key_while_waiting(self):
        self.cv2.waitKey.return_value = ord("q")
        run_steering_wheel()
        self.assertEqual(self.cap.read.call_count, 1)
        self.cap.release.assert_called_once()


if __name__ == "__main__":
    unittest.main()
