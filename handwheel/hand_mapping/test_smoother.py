"""Tests for the transform smoother and steering orientation."""

import math
import unittest

import numpy as np

from handwheel.hand_mapping.math_utils import (
    quat_angle_between,
    quat_conjugate,
    quat_from_axis_angle,
    quat_identity,
    quat_multiply,
    vec3,
)
from handwheel.hand_mapping.smoother import (
    ObjectTransform,
    TransformSmoother,
    alpha_for_elapsed,
    steering_orientation,
)
from handwheel.hand_mapping.space import PerspectiveCamera


class TestTransformSmoother(unittest.TestCase):
    """Exponential approach toward targets."""

    def setUp(self):
        self.smoother = TransformSmoother(ObjectTransform(scale=1.0))
        self.target_pos = vec3(0.3, -0.2, 0.5)
        self.target_rot = quat_from_axis_angle(vec3(0, 0, -1), 0.8)
        self.target_scale = 2.5

    def test_first_step_moves_fixed_fraction(self):
        t = self.smoother.step(self.target_pos, self.target_rot, self.target_scale)
        np.testing.assert_allclose(t.position, self.target_pos * 0.4)
        self.assertAlmostEqual(t.scale, 1.0 + 1.5 * 0.25)
        self.assertAlmostEqual(quat_angle_between(t.orientation, self.target_rot), 0.8 * 0.6, places=6)

    def test_converges_without_snapping(self):
        """Distance to a fixed target strictly decreases and never hits zero early."""
        prev = self.smoother.transform
        prev_d = (np.linalg.norm(prev.position - self.target_pos),
                  quat_angle_between(prev.orientation, self.target_rot),
                  abs(prev.scale - self.target_scale))
        for _ in range(25):
            t = self.smoother.step(self.target_pos, self.target_rot, self.target_scale)
            d = (np.linalg.norm(t.position - self.target_pos),
                 quat_angle_between(t.orientation, self.target_rot),
                 abs(t.scale - self.target_scale))
            for now, before in zip(d, prev_d):
                self.assertLess(now, before)
                self.assertGreater(now, 0.0)
            prev_d = d

        self.assertLess(prev_d[0], 1e-4)
        self.assertLess(prev_d[1], 1e-4)
        self.assertLess(prev_d[2], 0.01)

    def test_withheld_targets_leave_state(self):
        before = self.smoother.transform
        t = self.smoother.step(position=self.target_pos)
        np.testing.assert_allclose(t.orientation, before.orientation)
        self.assertEqual(t.scale, before.scale)

    def test_no_targets_is_noop(self):
        before = self.smoother.transform
        t = self.smoother.step()
        np.testing.assert_allclose(t.position, before.position)
        self.assertEqual(t.scale, before.scale)

    def test_transform_is_a_snapshot(self):
        snap = self.smoother.transform
        snap.position[0] = 99.0
        self.assertEqual(self.smoother.transform.position[0], 0.0)

    def test_long_frame_gap_does_not_snap(self):
        t = self.smoother.step(self.target_pos, self.target_rot, self.target_scale, elapsed_s=10.0)
        self.assertNotEqual(t.scale, self.target_scale)
        self.assertGreater(np.linalg.norm(t.position - self.target_pos), 0.0)
        self.assertAlmostEqual(t.scale, self.target_scale, places=4)

    def test_elapsed_time_at_reference_rate_matches_per_frame(self):
        a = TransformSmoother(ObjectTransform(scale=1.0))
        b = TransformSmoother(ObjectTransform(scale=1.0))
        ta = a.step(scale=3.0)
        tb = b.step(scale=3.0, elapsed_s=1.0 / 30.0)
        self.assertAlmostEqual(ta.scale, tb.scale)


class TestAlphaForElapsed(unittest.TestCase):

    def test_reference_interval(self):
        self.assertAlmostEqual(alpha_for_elapsed(0.4, 1.0 / 30.0, 30.0), 0.4)

    def test_two_frames_compound(self):
        self.assertAlmostEqual(alpha_for_elapsed(0.4, 2.0 / 30.0, 30.0), 1.0 - 0.6 ** 2)

    def test_zero_elapsed(self):
        self.assertEqual(alpha_for_elapsed(0.4, 0.0), 0.0)

    def test_long_gap_never_reaches_one(self):
        alpha = alpha_for_elapsed(0.4, 10.0, 30.0)
        self.assertLess(alpha, 1.0)
        self.assertGreater(alpha, 0.99)


class TestSteeringOrientation(unittest.TestCase):
    """Mirror sign convention."""

    def setUp(self):
        self.camera = PerspectiveCamera()

    def test_mirror_negates_rotation(self):
        for theta in (0.3, -1.2, math.pi / 2):
            with self.subTest(theta=theta):
                q_on = steering_orientation(self.camera, theta, mirror=True)
                q_off = steering_orientation(self.camera, theta, mirror=False)
                cam_inv = quat_conjugate(self.camera.quaternion)
                rel_on = quat_multiply(cam_inv, q_on)
                rel_off = quat_multiply(cam_inv, q_off)
                np.testing.assert_allclose(rel_on, quat_conjugate(rel_off), atol=1e-9)

    def test_level_hands_face_camera(self):
        q = steering_orientation(self.camera, 0.0, mirror=True)
        np.testing.assert_allclose(q, quat_identity(), atol=1e-9)

    def test_rotation_about_camera_forward(self):
        q = steering_orientation(self.camera, 0.5, mirror=True)
        expected = quat_from_axis_angle(vec3(0, 0, -1), 0.5)
        np.testing.assert_allclose(q, expected, atol=1e-9)

    def test_composes_with_camera_orientation(self):
        cam = PerspectiveCamera(quaternion=quat_from_axis_angle(vec3(1, 0, 0), 0.4))
        q = steering_orientation(cam, 0.0, mirror=False)
        np.testing.assert_allclose(q, cam.quaternion, atol=1e-9)


if __name__ == "__main__":
    unittest.main()
