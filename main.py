"""
Keybrot - Dive Keyboard Engine

Entry point: a headless autopilot that types words by steering the
camera toward each letter and holding until it is selected.
"""
import argparse
import logging
import math
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

FRAME_TIME = 1.0 / 60.0
AUTOPILOT_GAIN = 400.0     # Pixels of drag per radian of aiming error
MAX_DRAG_STEP = 40.0       # Pixels per frame


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Keybrot - Dive Keyboard Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "words",
        nargs="*",
        default=["hello"],
        help="Words for the autopilot to type (default: hello)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--density",
        choices=["minimal", "standard", "full"],
        default=None,
        help="Visible node density (overrides config)",
    )

    parser.add_argument(
        "--max-frames",
        type=int,
        default=600,
        help="Frames allowed per letter before giving up",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging and per-frame output",
    )

    return parser.parse_args()


def _aim_error(physics, position):
    """Angular error (theta, phi) between the camera and a candidate."""
    x, y, z = position
    length = math.sqrt(x * x + y * y + z * z)
    target_phi = math.acos(max(-1.0, min(1.0, y / length)))
    target_theta = math.atan2(z, x)

    d_theta = target_theta - physics.camera_theta
    d_theta = (d_theta + math.pi) % (2 * math.pi) - math.pi
    d_phi = target_phi - physics.camera_phi
    return d_theta, d_phi


def dive_to(session, key, clock, max_frames, debug=False):
    """
    Steer toward the candidate with the given key and linger on it.
    Returns True once the session reports it selected.
    """
    from gesture import PointerAction

    finger = [500.0, 500.0]
    session.on_touch_event(PointerAction.DOWN, finger[0], finger[1], clock[0])

    try:
        frame = session.step(FRAME_TIME)
        for i in range(max_frames):
            keys = [node.key for node in frame.nodes]
            if key not in keys:
                return False
            target = frame.positions[keys.index(key)]

            d_theta, d_phi = _aim_error(session.physics, target)
            # Drag right turns theta up, drag down turns phi down
            dx = max(-MAX_DRAG_STEP, min(MAX_DRAG_STEP, d_theta * AUTOPILOT_GAIN))
            dy = max(-MAX_DRAG_STEP, min(MAX_DRAG_STEP, -d_phi * AUTOPILOT_GAIN))
            finger[0] += dx
            finger[1] += dy

            clock[0] += FRAME_TIME
            session.on_touch_event(PointerAction.MOVE, finger[0], finger[1], clock[0])
            frame = session.step(FRAME_TIME)

            if debug:
                p = session.physics
                print(f"[{i:4d}] focus={frame.focused_index:3d} "
                      f"zoom={p.zoom_progress:.2f} mag={p.magnetism:.2f} "
                      f"err=({d_theta:+.2f}, {d_phi:+.2f})")

            if frame.selected_key == key:
                return True
        return False
    finally:
        clock[0] += FRAME_TIME
        session.on_touch_event(PointerAction.UP, finger[0], finger[1], clock[0])


def swipe_up(session, clock):
    """Quick upward flick: accept the current word."""
    from gesture import PointerAction

    session.on_touch_event(PointerAction.DOWN, 500.0, 800.0, clock[0])
    clock[0] += 0.1
    session.on_touch_event(PointerAction.MOVE, 505.0, 650.0, clock[0])
    clock[0] += 0.05
    session.on_touch_event(PointerAction.UP, 505.0, 600.0, clock[0])


def main():
    """Main entry point."""
    args = parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    from settings import load_config
    from session import DiveSession

    config = load_config(args.config)
    if args.density:
        config.prediction.node_density = args.density

    committed = []
    clock = [0.0]
    session = DiveSession(
        config,
        on_commit=committed.append,
        clock=lambda: clock[0],
    )
    session.start_input()

    print("Keybrot starting...")
    print(f"  Density: {config.prediction.node_density}")
    print(f"  Words: {' '.join(args.words)}")
    print()

    for word in args.words:
        for letter in word.lower():
            if not dive_to(session, letter, clock, args.max_frames, args.debug):
                print(f"FAILURE: could not reach '{letter}' after '{session.composing_text}'")
                return 1
            print(f"Selected '{letter}' -> composing '{session.composing_text}'")
            # Let the zoom settle before the next dive
            for _ in range(10):
                clock[0] += FRAME_TIME
                session.step(FRAME_TIME)

        swipe_up(session, clock)
        print(f"Action: Committed '{committed[-1] if committed else ''}'")

    print()
    print(f"Text: {' '.join(committed)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
