"""Base protocol for transcriber backends."""
from typing import Callable, Protocol

import numpy as np

from ..progress import ProgressEvent


class TranscriberBackend(Protocol):
    """Protocol for ASR model backends.

    Construction is cheap; the model is fetched and loaded by load(), which
    reports progress through emit. transcribe() takes mono float32 audio at
    16kHz and returns text. Inference errors propagate to the caller.
    """

    model_name: str

    def load(self, emit: Callable[[ProgressEvent], None]) -> None:
        """Download (if needed) and load the model."""
        ...

    def transcribe(self, audio_array: np.ndarray) -> str:
        """Transcribe audio to text.

        Args:
            audio_array: Audio samples as numpy array (float32, 16kHz assumed)

        Returns:
            Transcribed text string
        """
        ...
