"""Transcription worker pipeline: keeps decoding and inference off the UI thread."""
import queue
import threading
from typing import Callable, Optional

from .audio import session_waveform
from .session import RecordingSession


class TranscriptionPipeline:
    """Worker thread that owns the inference pipeline.

    The UI thread calls enqueue(session) and returns immediately.
    The worker decodes the session to a mono waveform, transcribes it and
    reports through the callbacks below. A job cannot be cancelled once
    inference has started.
    """

    def __init__(self, transcriber, target_sample_rate: int = 16000):
        """
        Args:
            transcriber: Backend with .transcribe(audio) -> str
            target_sample_rate: Rate the backend expects
        """
        self._transcriber = transcriber
        self._target_sample_rate = target_sample_rate
        self._queue: queue.Queue = queue.Queue()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        # Callbacks wired by caller (all called from worker thread)
        self.transcription_started: Optional[Callable[[], None]] = None
        self.transcription_completed: Optional[Callable[[str], None]] = None
        self.error_occurred: Optional[Callable[[str], None]] = None

    def start(self) -> None:
        """Start the worker thread. No-op while it is already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._worker, daemon=True, name="voxpad-pipeline"
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal stop and join the worker thread (timeout=5s)."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    def enqueue(self, session: RecordingSession) -> None:
        """Submit a finished recording for transcription. Returns immediately."""
        self._queue.put(session)

    def process(self, session: RecordingSession) -> None:
        """Decode and transcribe one session on the calling thread."""
        try:
            audio = session_waveform(session, self._target_sample_rate)

            if self.transcription_started:
                self.transcription_started()

            text = self._transcriber.transcribe(audio)

            if self.transcription_completed:
                self.transcription_completed(text or "")

        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            print(f"[ERR] Transcription failed: {message}")
            if self.error_occurred:
                self.error_occurred(message)

    def _worker(self) -> None:
        """Worker loop, runs on the dedicated thread."""
        while not self._stop.is_set():
            try:
                session = self._queue.get(timeout=0.1)
            except queue.Empty:
                continue
            self.process(session)
