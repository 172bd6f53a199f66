"""
Fingerspell - Fingerspelling to Text from a Webcam

Entry point for the application.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Fingerspell - Sign Language to Text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--console",
        action="store_true",
        help="Run without a window, printing symbols and text to the terminal",
    )

    parser.add_argument(
        "--position",
        choices=["left", "right"],
        default=None,
        help="Window position (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args()


def run_console(config):
    """
    Run the pipeline on a fixed-interval loop without Qt.
    Useful for tuning thresholds from a terminal.
    """
    import time
    from webcam import HandTracker
    from fingerspell import SignTyper

    tracker = HandTracker(config)
    typer = SignTyper(config)
    interval = config.ui.tick_interval_ms / 1000.0

    print("Starting console mode...")
    print("Press Ctrl+C to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracker")
        return 1

    last_status = None
    try:
        while True:
            loop_start = time.perf_counter()

            ok, hand = tracker.get_landmarks()
            if ok:
                result = typer.step(hand)
                if result.status != last_status:
                    last_status = result.status
                    print(f"[{tracker.frame_count:5d}] {result.status}")
                if result.committed:
                    print(f"Text: {typer.text!r}")

            elapsed = time.perf_counter() - loop_start
            if interval > elapsed:
                time.sleep(interval - elapsed)
    except KeyboardInterrupt:
        print()
    finally:
        tracker.stop()

    print(f"Final text: {typer.text!r}")
    return 0


def run_window(config):
    """Run Fingerspell with the Qt window."""
    import signal
    from PyQt5.QtWidgets import QApplication
    from webcam import WebcamWorker
    from ui import SignWindow

    app = QApplication(sys.argv)

    window = SignWindow(position=config.ui.position, stay_on_top=config.ui.stay_on_top)
    window.show()

    worker = WebcamWorker(config)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    worker.status_changed.connect(window.set_status)
    worker.text_changed.connect(window.set_text)
    worker.error.connect(window.show_error)
    window.backspace_requested.connect(worker.backspace)
    window.clear_requested.connect(worker.clear)
    window.space_requested.connect(worker.space)

    if not worker.start():
        print("ERROR: Could not start hand tracker")

    try:
        result = app.exec_()
    finally:
        print("\nCleaning up camera resources...")
        worker.stop()

    return result


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from fingerspell import load_config, ConfigError
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 2

    if args.position:
        config.ui.position = args.position

    print("Fingerspell starting...")
    print(f"  Mode: {'console' if args.console else 'window'}")
    print(f"  Stable threshold: {config.typing.stable_threshold} frames")
    print(f"  Smoothing window: {config.typing.window_size} frames")
    print()

    if args.console:
        return run_console(config)
    return run_window(config)


if __name__ == "__main__":
    sys.exit(main())
