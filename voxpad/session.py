"""Recording session state."""
import threading
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds as m:ss for the recording timer."""
    elapsed = max(0, int(seconds))
    minutes, secs = divmod(elapsed, 60)
    return f"{minutes}:{secs:02d}"


@dataclass
class RecordingSession:
    """One start-to-stop recording.

    Holds the binary PCM chunks delivered by the input stream together with
    the stream handle, so nothing about an in-flight recording lives in
    module globals.
    """

    sample_rate: int
    channels: int
    sample_width: int = 2  # bytes per sample (int16)
    started_at: float = field(default_factory=time.monotonic)
    stopped_at: Optional[float] = None
    chunks: List[bytes] = field(default_factory=list)
    active: bool = True
    stream: Any = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add_chunk(self, data: bytes) -> None:
        """Append a chunk; ignored once the session is stopped or empty."""
        if not data:
            return
        with self._lock:
            if self.active:
                self.chunks.append(bytes(data))

    def close(self) -> None:
        """Mark the session inactive and drop the stream handle."""
        with self._lock:
            self.active = False
            self.stream = None
            if self.stopped_at is None:
                self.stopped_at = time.monotonic()

    def audio_bytes(self) -> bytes:
        """Concatenate captured chunks in arrival order."""
        with self._lock:
            return b"".join(self.chunks)

    @property
    def frame_count(self) -> int:
        total = sum(len(chunk) for chunk in self.chunks)
        return total // (self.sample_width * self.channels)

    def elapsed_seconds(self, now: Optional[float] = None) -> float:
        if now is None:
            now = self.stopped_at if self.stopped_at is not None else time.monotonic()
        return max(0.0, now - self.started_at)
