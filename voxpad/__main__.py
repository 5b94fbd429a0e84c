"""Main entry point for Voxpad."""
import argparse
import sys
import warnings
from pathlib import Path

# Suppress transformers FutureWarning about TRANSFORMERS_CACHE
warnings.filterwarnings("ignore", category=FutureWarning, module="transformers.utils.hub")

from .config import load_config
from .recorder import AudioRecorder
from .backends import create_transcriber
from .controller import RecorderController
from .console import run_console
from .audio import decode_file, to_mono
from .progress import STATUS_DOWNLOADING, stream_model_load
from .setup_wizard import run_wizard


def _transcribe_file(transcriber, path: Path, target_rate: int) -> int:
    """Transcribe one audio file and print the text. Returns an exit code."""
    try:
        for event in stream_model_load(transcriber):
            if event.status == STATUS_DOWNLOADING and event.percent is not None:
                print(f"\r[INFO] Downloading model... {event.percent}%", end="", flush=True)
        print()
        audio = to_mono(decode_file(path, target_rate))
        text = transcriber.transcribe(audio)
    except Exception as e:
        print(f"[ERR] Could not transcribe {path}: {e}")
        return 1

    print(text)
    return 0


def _run_gui(controller: RecorderController, theme: str) -> int:
    """Run the Qt window. Raises ImportError when PySide6 is missing."""
    from PySide6.QtWidgets import QApplication
    from PySide6.QtCore import QTimer
    from .ui.main_window import MainWindow
    from .ui.theme import build_stylesheet
    import signal

    app = QApplication(sys.argv)
    app.setApplicationName("Voxpad")
    app.setStyleSheet(build_stylesheet(theme))

    window = MainWindow(controller, theme=theme)
    window.show()
    window.start_model_loading()

    # Keep terminal Ctrl+C usable while Qt event loop is running.
    def _handle_signal(*_args):
        app.quit()

    signal.signal(signal.SIGINT, _handle_signal)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, _handle_signal)

    signal_pump = QTimer()
    signal_pump.timeout.connect(lambda: None)
    signal_pump.start(200)

    app.aboutToQuit.connect(controller.shutdown)
    return app.exec()


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Voxpad - record your voice and transcribe it with Whisper"
    )
    parser.add_argument(
        "--setup",
        action="store_true",
        help="Run interactive setup wizard"
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without GUI (console commands only)"
    )
    parser.add_argument(
        "--file",
        type=Path,
        help="Transcribe an audio file and exit"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.toml"
    )

    args = parser.parse_args()

    # Run setup wizard if requested
    if args.setup:
        run_wizard()
        return

    config = load_config(path=args.config)
    target_rate = config["audio"]["target_sample_rate"]

    print("\n[INFO] Initializing Voxpad...")

    try:
        transcriber = create_transcriber(config)

        if args.file is not None:
            sys.exit(_transcribe_file(transcriber, args.file, target_rate))

        recorder = AudioRecorder(
            sample_rate=config["audio"]["sample_rate"],
            input_device=config["audio"]["input_device"],
            channels=config["audio"]["channels"],
        )
        controller = RecorderController(
            recorder=recorder,
            transcriber=transcriber,
            target_sample_rate=target_rate,
        )

        if args.headless:
            print("[INFO] Running in headless mode (no GUI)")
            if not controller.load_model():
                sys.exit(1)
            run_console(controller)
            return

        try:
            sys.exit(_run_gui(controller, config["ui"]["theme"]))
        except ImportError:
            print("[WARN] PySide6 not installed, falling back to headless mode")
            if not controller.load_model():
                sys.exit(1)
            run_console(controller)

    except KeyboardInterrupt:
        print("\n[INFO] Interrupted by user")
    except Exception as e:
        print(f"\n[ERR] Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
