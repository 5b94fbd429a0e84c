"""Audio recording module."""
import sounddevice as sd
from typing import Optional, Union

from .session import RecordingSession


def _resolve_input_device(input_device) -> Optional[Union[int, str]]:
    """Map config values to a sounddevice device: None, an index, or a name."""
    if input_device is None:
        return None
    text = str(input_device).strip()
    if text in ("", "default"):
        return None
    if text.isdigit():
        return int(text)
    return text


class AudioRecorder:
    """Manages audio recording from microphone.

    Each start() opens a fresh raw int16 input stream and hands back the
    RecordingSession that collects its chunks. Only one session is active
    at a time.
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        input_device: str = "default",
        channels: int = 1,
    ):
        self.sample_rate = sample_rate
        self.channels = channels
        self.input_device = _resolve_input_device(input_device)
        self.session: Optional[RecordingSession] = None

    @property
    def is_recording(self) -> bool:
        return self.session is not None and self.session.active

    def _audio_callback(self, indata, frames, time, status):
        """Callback for audio stream."""
        if status:
            print(f"[WARN] Audio stream status: {status}")
        session = self.session
        if session is not None:
            session.add_chunk(bytes(indata))

    def start(self) -> RecordingSession:
        """Start recording audio and return the active session."""
        if self.is_recording:
            return self.session  # Already recording

        session = RecordingSession(sample_rate=self.sample_rate, channels=self.channels)
        self.session = session

        stream = None
        try:
            stream = sd.RawInputStream(
                samplerate=self.sample_rate,
                channels=self.channels,
                dtype="int16",
                callback=self._audio_callback,
                device=self.input_device,
            )
            stream.start()
        except Exception as e:
            self.session = None
            session.close()
            if stream is not None:
                try:
                    stream.close()
                except Exception as close_error:
                    print(f"[WARN] Failed to close input stream: {close_error}")
            print(f"[ERR] Could not open microphone: {e}")
            print("[INFO] Available audio devices:")
            print(sd.query_devices())
            print("[INFO] Pick a device with: voxpad --setup")
            raise

        session.stream = stream
        print("[REC] Recording...")
        return session

    def stop(self) -> Optional[RecordingSession]:
        """Stop recording, release the microphone and return the session.

        The stream is stopped before the session is closed so chunks that
        PortAudio flushes during stop() still land in it. Errors from
        stop() propagate after the stream has been closed.
        """
        session = self.session
        if session is None or not session.active:
            return None

        stream = session.stream
        try:
            if stream is not None:
                try:
                    stream.stop()
                finally:
                    stream.close()
        finally:
            session.close()
            self.session = None

        if not session.chunks:
            print("[WARN] No audio recorded")
        else:
            print(f"[INFO] Stopped after {session.elapsed_seconds():.1f}s, processing...")
        return session
