"""
Two-Hand Steering Wheel

Tracks both palms with MediaPipe and drives a 3D steering wheel overlay:
the wheel sits between the hands, turns with the line joining them and
grows with their spread. Radius and angle are charted live.
"""

import time

import cv2

from handwheel.hand_mapping import (
    ObjectTransform,
    PerspectiveCamera,
    SessionContext,
    StatusLog,
    TransformSmoother,
    process_frame,
)
from handwheel.hand_mapping.config import (
    CAMERA_WIDTH, CAMERA_HEIGHT, SCALE_ALPHA, READ_RETRY_MS, MAX_FAILED_READS,
)
from handwheel.hand_tracks import (
    HandTracker,
    TrackerDisplay,
    UpstreamUnavailable,
    WheelModel,
    draw_wheel,
    mirror_frame,
    open_camera,
)


INSTRUCTIONS = """
==================================================
Two-Hand Steering Wheel
==================================================

Hold both hands up to the camera as if gripping a wheel.
  Tilt the line between your palms to steer.
  Move your hands apart to enlarge the wheel.

Controls:
  'm'        - Mirror on
  'n'        - Mirror off
  'q' or ESC - Quit
"""


def run_steering_wheel(
    camera_index: int = 0,
    mirror: bool | None = None,
    scale_alpha: float = SCALE_ALPHA,
    time_based_smoothing: bool = False,
) -> None:
    """Run the capture → mapping → overlay loop until the user quits."""
    print(INSTRUCTIONS)

    status = StatusLog()
    model = WheelModel()
    camera = PerspectiveCamera()
    session = SessionContext(
        smoother=TransformSmoother(
            ObjectTransform(orientation=camera.quaternion.copy(), scale=model.base_scale),
            scale_alpha=scale_alpha,
        ),
        on_status=status,
        intrinsic_radius=model.intrinsic_radius,
        time_based_smoothing=time_based_smoothing,
    )
    if mirror is not None:
        session.set_mirror(mirror)

    status("Initializing...")
    try:
        cap = open_camera(camera_index, CAMERA_WIDTH, CAMERA_HEIGHT)
    except UpstreamUnavailable as e:
        status(f"Camera access denied or unavailable ({e})")
        return

    try:
        tracker = HandTracker()
    except UpstreamUnavailable as e:
        cap.release()
        status(str(e))
        return

    status("Camera started")
    last_t = None
    failed_reads = 0
    try:
        with tracker, TrackerDisplay() as display:
            while True:
                ret, frame = cap.read()
                if not ret:
                    failed_reads += 1
                    if failed_reads >= MAX_FAILED_READS:
                        status("Camera stopped delivering frames")
                        break
                    if status.last != "Waiting for camera frames...":
                        status("Waiting for camera frames...")
                    # Keep the window responsive while the camera catches up
                    if (cv2.waitKey(READ_RETRY_MS) & 0xFF) in (ord("q"), 27):
                        break
                    continue
                failed_reads = 0

                frame = mirror_frame(frame, session.mirror_mode)
                h, w = frame.shape[:2]
                camera.set_viewport(w, h)

                now = time.time()
                elapsed = None if last_t is None else now - last_t
                last_t = now

                detections = tracker.detect(frame)
                result = process_frame(session, detections, w, h, camera, elapsed_s=elapsed)

                tracker.draw_landmarks(frame)
                draw_wheel(frame, session.smoother.transform, camera, model)
                display.render(frame, result, session.history, status.last, session.mirror_mode)

                key = display.show(frame)
                if key in (ord("q"), 27):
                    break
                if key == ord("m"):
                    session.set_mirror(True)
                elif key == ord("n"):
                    session.set_mirror(False)
    finally:
        cap.release()
        cv2.destroyAllWindows()


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Two-Hand Steering Wheel")
    parser.add_argument("-c", "--camera", type=int, default=0, help="Camera index")
    mirror_group = parser.add_mutually_exclusive_group()
    mirror_group.add_argument("--mirror", dest="mirror", action="store_true", default=None,
                              help="Force mirror mode on (skips auto-detection)")
    mirror_group.add_argument("--no-mirror", dest="mirror", action="store_false",
                              help="Force mirror mode off (skips auto-detection)")
    parser.add_argument("--scale-alpha", type=float, default=SCALE_ALPHA,
                        help="Per-frame scale smoothing factor (0-1)")
    parser.add_argument("--time-based-smoothing", action="store_true",
                        help="Scale smoothing factors by elapsed time instead of per frame")
    args = parser.parse_args()

    run_steering_wheel(
        camera_index=args.camera,
        mirror=args.mirror,
        scale_alpha=args.scale_alpha,
        time_based_smoothing=args.time_based_smoothing,
    )


if __name__ == "__main__":
    main()
