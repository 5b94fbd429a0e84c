"""Headless console front end."""
import threading
from typing import Callable

from .controller import ICON_ERROR, ICON_READY, RecorderController, StatusMessage

STATUS_TAGS = {
    ICON_READY: "OK",
    ICON_ERROR: "ERR",
}

HELP = (
    "[INFO] Commands: [Enter] record/stop, c = copy, x = clear, "
    "p = print transcript, q = quit"
)


def _ask_yes_no(prompt: str, read: Callable[[str], str]) -> bool:
    return read(prompt).strip().lower() in ("y", "yes")


def run_console(
    controller: RecorderController,
    read: Callable[[str], str] = input,
) -> None:
    """Drive the controller from typed commands until quit or EOF."""
    idle = threading.Event()
    idle.set()

    def _on_status(status: StatusMessage) -> None:
        print(f"[{STATUS_TAGS.get(status.icon, 'INFO')}] {status.text}")

    def _on_state(state) -> None:
        if state.record_enabled or not state.stop_visible:
            idle.set()

    controller.status_changed.connect(_on_status)
    controller.state_changed.connect(_on_state)
    print(HELP)

    try:
        while True:
            # Wait for the previous recording to finish transcribing
            idle.wait()
            prompt = "[REC] Press Enter to stop > " if controller.recorder.is_recording else "> "
            try:
                command = read(prompt).strip().lower()
            except EOFError:
                break

            if command == "":
                if controller.recorder.is_recording:
                    elapsed = controller.elapsed_text()
                    idle.clear()
                    if controller.stop_recording():
                        print(f"[INFO] Recorded {elapsed}")
                    else:
                        idle.set()
                else:
                    controller.start_recording()
            elif command == "c":
                controller.copy_transcript()
            elif command == "x":
                if controller.clear_transcript(
                    lambda: _ask_yes_no(
                        "Are you sure you want to clear all transcription text? [y/N]: ",
                        read,
                    )
                ):
                    print("[OK] Transcript cleared")
            elif command == "p":
                text = controller.transcript.text
                print(text if text else "[INFO] Transcript is empty")
            elif command == "q":
                break
            else:
                print(HELP)
    except KeyboardInterrupt:
        print("\n[INFO] Interrupted by user")
    finally:
        controller.status_changed.disconnect(_on_status)
        controller.state_changed.disconnect(_on_state)
        controller.shutdown()
