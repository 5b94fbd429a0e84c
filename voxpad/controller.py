"""Recording workflow shared by the window and the console front end."""
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, List, Optional

import pyperclip

from .pipeline import TranscriptionPipeline
from .progress import STATUS_DOWNLOADING, STATUS_LOADING, ProgressEvent, stream_model_load
from .session import RecordingSession, format_elapsed
from .transcript import TranscriptBuffer

if TYPE_CHECKING:
    from .recorder import AudioRecorder
    from .backends import TranscriberBackend

ICON_LOADING = "loading"
ICON_READY = "ready"
ICON_PROCESSING = "processing"
ICON_ERROR = "error"


class CallbackSignal:
    """Minimal Signal replacement: register callbacks, emit fires them all."""

    def __init__(self):
        self._callbacks: List[Callable] = []

    def connect(self, fn: Callable) -> None:
        self._callbacks.append(fn)

    def disconnect(self, fn: Callable | None = None) -> None:
        if fn is None:
            self._callbacks.clear()
        else:
            self._callbacks = [cb for cb in self._callbacks if cb is not fn]

    def emit(self, *args) -> None:
        for cb in list(self._callbacks):
            cb(*args)


@dataclass(frozen=True)
class ControlState:
    """What the front end should show for each control."""

    record_visible: bool = True
    record_enabled: bool = False
    stop_visible: bool = False
    stop_enabled: bool = False
    recording: bool = False
    copy_enabled: bool = False
    clear_enabled: bool = False


@dataclass(frozen=True)
class StatusMessage:
    text: str
    icon: str = ICON_READY


class RecorderController:
    """Owns the recording session and transcript; emits UI updates.

    Signals may fire from the model-loading or pipeline worker threads.
    GUI front ends must marshal them onto their own thread.
    """

    def __init__(
        self,
        recorder: "AudioRecorder",
        transcriber: "TranscriberBackend",
        pipeline: Optional[TranscriptionPipeline] = None,
        transcript: Optional[TranscriptBuffer] = None,
        target_sample_rate: int = 16000,
    ):
        self.recorder = recorder
        self.transcriber = transcriber
        self.transcript = transcript if transcript is not None else TranscriptBuffer()
        self.pipeline = pipeline or TranscriptionPipeline(transcriber, target_sample_rate)
        self.pipeline.transcription_started = self._on_transcription_started
        self.pipeline.transcription_completed = self._on_transcription_completed
        self.pipeline.error_occurred = self._on_transcription_error

        self.model_ready = False
        self.session: Optional[RecordingSession] = None
        self.state = ControlState()
        self.status = StatusMessage("Waiting for model...", ICON_LOADING)

        self.state_changed = CallbackSignal()
        self.status_changed = CallbackSignal()
        self.progress_changed = CallbackSignal()
        self.transcript_changed = CallbackSignal()
        self.copied = CallbackSignal()

    # -- state helpers -----------------------------------------------------

    def _set_state(self, state: ControlState) -> None:
        self.state = state
        self.state_changed.emit(state)

    def _set_status(self, text: str, icon: str) -> None:
        self.status = StatusMessage(text, icon)
        self.status_changed.emit(self.status)

    def _idle_state(self) -> ControlState:
        has_text = self.transcript.has_text
        return ControlState(
            record_visible=True,
            record_enabled=self.model_ready,
            stop_visible=False,
            stop_enabled=False,
            recording=False,
            copy_enabled=has_text,
            clear_enabled=has_text,
        )

    def _reset_to_idle(self) -> None:
        self.session = None
        self._set_state(self._idle_state())

    # -- model ---------------------------------------------------------------

    def load_model(self) -> bool:
        """Load the model, forwarding its progress events. Blocks until done."""
        self._set_status(
            "Loading Whisper model... This may take a few minutes on first load.",
            ICON_LOADING,
        )
        try:
            for event in stream_model_load(self.transcriber):
                self._on_progress(event)
        except Exception as e:
            print(f"[ERR] Error loading model: {e}")
            self._set_status(f"Error: {e}", ICON_ERROR)
            self._set_state(self._idle_state())
            return False

        self.model_ready = True
        self.pipeline.start()
        self._set_status("Model loaded! Ready to record.", ICON_READY)
        self._set_state(self._idle_state())
        return True

    def _on_progress(self, event: ProgressEvent) -> None:
        self.progress_changed.emit(event)
        if event.status == STATUS_DOWNLOADING:
            self._set_status(f"Downloading model... {event.file}", ICON_LOADING)
        elif event.status == STATUS_LOADING:
            self._set_status(f"Loading model... {event.file}", ICON_LOADING)

    # -- recording -----------------------------------------------------------

    def start_recording(self) -> bool:
        """Open the microphone and begin a new session."""
        if not self.model_ready or self.recorder.is_recording:
            return False

        try:
            self.session = self.recorder.start()
        except Exception as e:
            print(f"[ERR] Error accessing microphone: {e}")
            self._set_status(
                "Could not access microphone. Please ensure you have granted "
                "microphone permissions.",
                ICON_ERROR,
            )
            self._reset_to_idle()
            return False

        self._set_state(replace(
            self.state,
            record_visible=False,
            record_enabled=False,
            stop_visible=True,
            stop_enabled=True,
            recording=True,
        ))
        return True

    def stop_recording(self) -> bool:
        """Release the microphone and hand the session to the pipeline."""
        if not self.recorder.is_recording:
            return False

        try:
            session = self.recorder.stop()
        except Exception as e:
            print(f"[ERR] Error stopping recording: {e}")
            self._set_status(f"Error: {e}", ICON_ERROR)
            self._reset_to_idle()
            return False

        if session is None:
            self._reset_to_idle()
            return False

        self.session = session
        self._set_state(replace(self.state, stop_enabled=False, recording=False))
        self._set_status("Processing audio...", ICON_PROCESSING)
        self.pipeline.enqueue(session)
        return True

    def elapsed_text(self) -> str:
        """Elapsed time of the current session as m:ss."""
        session = self.session
        if session is None:
            return format_elapsed(0)
        return format_elapsed(session.elapsed_seconds())

    # -- pipeline callbacks (worker thread) ------------------------------------

    def _on_transcription_started(self) -> None:
        self._set_status("Transcribing...", ICON_PROCESSING)

    def _on_transcription_completed(self, text: str) -> None:
        if self.transcript.append(text):
            self.transcript_changed.emit(self.transcript.text)
            self._set_status("Transcription complete! Ready to record again.", ICON_READY)
        else:
            self._set_status("No speech detected. Ready to record again.", ICON_READY)
        self._reset_to_idle()

    def _on_transcription_error(self, message: str) -> None:
        self._set_status(f"Error: {message}", ICON_ERROR)
        self._reset_to_idle()

    # -- transcript actions --------------------------------------------------

    def copy_transcript(self) -> bool:
        """Copy the transcript to the clipboard without touching it."""
        if not self.transcript.has_text:
            return False
        try:
            self.transcript.copy_to_clipboard()
        except pyperclip.PyperclipException as e:
            print(f"[ERR] Error copying to clipboard: {e}")
            self._set_status("Could not copy to clipboard", ICON_ERROR)
            return False

        print("[OK] Text copied to clipboard")
        self.copied.emit()
        return True

    def clear_transcript(self, confirm: Callable[[], bool]) -> bool:
        """Clear the transcript after confirm() returns True."""
        if not self.transcript.has_text:
            return False
        if not self.transcript.clear(confirm):
            return False

        self.transcript_changed.emit("")
        self._set_state(replace(self.state, copy_enabled=False, clear_enabled=False))
        return True

    def shutdown(self) -> None:
        """Release the microphone and stop the worker thread."""
        if self.recorder.is_recording:
            try:
                self.recorder.stop()
            except Exception as e:
                print(f"[WARN] Failed to release microphone: {e}")
        self.pipeline.stop()
