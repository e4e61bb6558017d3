"""
GestureTree - Hand-gesture driven holiday scene controller

Entry point for the application.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="GestureTree - Gesture-driven interaction engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show the camera preview with landmarks, gesture, mode and cursor",
    )

    parser.add_argument(
        "--no-passcode",
        action="store_true",
        help="Skip the passcode gate",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine transitions",
    )

    return parser.parse_args(argv)


def button_rect(viewport):
    """Centered action button, the same place the overlay draws it."""
    from interaction.hit_test import Rect

    w, h = viewport
    bw, bh = w * 0.25, h * 0.1
    return Rect.from_size((w - bw) / 2, h * 0.7, bw, bh)


def layout_targets(engine):
    """Show the lottery/passcode buttons whenever the engine can take a press."""
    rect = button_rect(engine.viewport)
    lottery_target = engine.lottery.action_target
    if engine.lottery.finished and not lottery_target.visible:
        lottery_target.layout(rect)

    submit_target = engine.passcode.submit_target
    if not engine.unlocked and not submit_target.visible:
        submit_target.layout(rect)


def draw_state(frame, state, engine):
    """Overlay engine output on the preview frame."""
    import cv2

    h, w = frame.shape[:2]
    lines = [
        f"Gesture: {state.gesture.name} (raw {state.raw_gesture.name})",
        f"Mode: {state.mode.name}",
        f"Hand size: {state.hand_size:.3f}",
    ]
    if not state.unlocked:
        code = engine.passcode.code.ljust(engine.passcode.code_length, "_")
        lines.append(f"Passcode: {code}" + ("  WRONG" if state.passcode_error else ""))
    elif state.lottery_active:
        lottery = state.lottery
        lines.append(f"Lottery: {lottery.phase.name} -> {lottery.display.label}")
        lines.append(f"Wishes left: {lottery.attempts_remaining}")
    elif state.intro:
        lines.append("Intro...")

    for i, line in enumerate(lines):
        cv2.putText(
            frame, line, (10, 30 + i * 25),
            cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
        )

    target = engine.lottery.action_target if state.unlocked else engine.passcode.submit_target
    if target.visible:
        r = target.rect
        color = (255, 255, 255) if target.hovering else (128, 128, 128)
        cv2.rectangle(frame, (int(r.left), int(r.top)), (int(r.right), int(r.bottom)), color, 2)
        label = state.lottery.action_label if state.unlocked else "SUBMIT"
        if label:
            cv2.putText(
                frame, label, (int(r.left) + 10, int(r.bottom) - 10),
                cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 1
            )

    cx, cy = int(state.cursor[0] * w), int(state.cursor[1] * h)
    cv2.circle(frame, (cx, cy), 10, (255, 255, 255), 2)
    return frame


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with engine output.

    Keys: digits type the passcode, Enter submits, Esc closes the lottery,
    'q' quits.
    """
    import time
    import cv2
    from interaction import InteractionEngine
    from webcam import HandTracker

    tracker = HandTracker(config)
    engine = InteractionEngine(config)
    engine.set_viewport(config.camera.width, config.camera.height)
    engine.on_lottery_open_requested = lambda: print("Action: Lottery requested")
    engine.on_lottery_completed = lambda prize: print(f"Action: Lottery completed -> {prize}")

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not open camera")
        return 1

    last_mode = None
    try:
        while True:
            hands = tracker.get_hands()
            now = time.monotonic()
            if hands is not None:
                state = engine.process_frame(hands, now)
            else:
                state = engine.tick(now)
            layout_targets(engine)

            if state.mode != last_mode:
                print(f"[{tracker.frame_count:5d}] Mode {state.mode.name}")
                last_mode = state.mode

            frame = tracker.get_frame_with_landmarks(hands)
            if frame is not None:
                engine.set_viewport(frame.shape[1], frame.shape[0])
                cv2.imshow("GestureTree Debug", draw_state(frame, state, engine))

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if ord('0') <= key <= ord('9'):
                engine.passcode.type_digit(chr(key))
            elif key == 8:
                engine.passcode.backspace()
            elif key in (10, 13):
                if engine.unlocked:
                    engine.confirm_lottery()
                else:
                    engine.submit_passcode(now)
            elif key == 27:
                engine.close_lottery()

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_worker_mode(config):
    """Run the engine on a background Qt worker and print lottery events."""
    import signal
    import atexit
    from PyQt5.QtCore import QCoreApplication, QThread, Qt
    from webcam import WebcamWorker

    app = QCoreApplication(sys.argv)

    # No on-screen keypad here
    config.passcode.enabled = False

    thread = QThread()
    worker = WebcamWorker(config)
    worker.engine.set_viewport(config.camera.width, config.camera.height)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    last_mode = [None]  # Use list for mutability in closure

    def handle_state(state):
        """Print mode changes and keep the action button laid out."""
        if state.mode != last_mode[0]:
            print(f"Mode: {state.mode.name} (gesture {state.gesture.name})")
            last_mode[0] = state.mode
        if state.lottery.finished:
            worker.post(layout_targets)

    thread.started.connect(worker.start_process)
    worker.state_updated.connect(handle_state, Qt.QueuedConnection)
    worker.lottery_open_requested.connect(
        lambda: print("Action: Lottery requested"), Qt.QueuedConnection
    )
    worker.lottery_completed.connect(
        lambda prize: print(f"Action: Lottery completed -> {prize}"), Qt.QueuedConnection
    )
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    # Load config
    from interaction import load_config
    from interaction.errors import ConfigError
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"ERROR: Invalid config: {e}")
        return 2

    # Apply CLI overrides
    if args.no_passcode:
        config.passcode.enabled = False
    if args.debug:
        config.ui.debug_overlay = True

    print("GestureTree starting...")
    print(f"  Profile: {config.gestures.profile}")
    print(f"  Passcode: {'on' if config.passcode.enabled else 'off'}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_worker_mode(config)


if __name__ == "__main__":
    sys.exit(main())
