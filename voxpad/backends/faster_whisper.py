"""Faster Whisper backend (CTranslate2) - fastest on NVIDIA GPUs."""
import os
import numpy as np
from typing import Callable, Optional

from ..progress import STATUS_INITIATE, STATUS_LOADING, STATUS_READY, ProgressEvent

# faster-whisper takes ISO codes; config uses Whisper language names.
LANGUAGE_CODES = {
    "english": "en",
    "german": "de",
    "french": "fr",
    "spanish": "es",
    "italian": "it",
    "portuguese": "pt",
    "dutch": "nl",
    "polish": "pl",
    "russian": "ru",
    "japanese": "ja",
    "chinese": "zh",
    "korean": "ko",
}


def _language_code(language: str) -> Optional[str]:
    if not language:
        return None
    language = language.lower()
    return LANGUAGE_CODES.get(language, language)


class FasterWhisperBackend:
    """NVIDIA GPU backend using faster-whisper (CTranslate2).

    Best for: NVIDIA GPUs with CUDA support
    Pros: Fastest inference on NVIDIA, excellent quality
    Cons: No download progress, stride length is not configurable
    """

    def __init__(
        self,
        model_name: str = "small.en",
        device: str = "auto",
        compute_type: str = "auto",
        model_cache: str = "",
        language: str = "english",
        task: str = "transcribe",
        chunk_length_s: float = 30,
        stride_length_s: float = 5,
    ):
        self.model_name = model_name
        self.device = device
        self.compute_type = "default" if compute_type == "auto" else compute_type
        self.model_cache = model_cache
        self.language = language
        self.task = task
        self.chunk_length_s = chunk_length_s
        self.model = None

    def load(self, emit: Callable[[ProgressEvent], None]) -> None:
        """Load (downloading on first use) the CTranslate2 model."""
        # Set cache paths BEFORE importing faster_whisper
        if self.model_cache:
            os.environ['HF_HOME'] = self.model_cache
            os.environ['HF_HUB_CACHE'] = os.path.join(self.model_cache, 'hub')

        emit(ProgressEvent(STATUS_INITIATE, file=self.model_name))
        from faster_whisper import WhisperModel

        emit(ProgressEvent(STATUS_LOADING, file=self.model_name))
        print(f"[INFO] Loading Faster Whisper model: {self.model_name} on {self.device}...")
        try:
            self.model = WhisperModel(
                self.model_name, device=self.device, compute_type=self.compute_type
            )
        except Exception as e:
            msg = str(e).lower()
            if any(kw in msg for kw in ("corrupt", "model", "load", "download")):
                print(f"[ERR] Failed to load model '{self.model_name}': {e}")
                print("      The model cache may be corrupt. Delete the model from your")
                print("      cache directory, then restart voxpad.")
            raise
        print("[OK] Model loaded and ready")
        emit(ProgressEvent(STATUS_READY, file=self.model_name))

    def transcribe(self, audio_array: Optional[np.ndarray]) -> str:
        """Transcribe audio to text."""
        if audio_array is None or len(audio_array) == 0:
            return ""
        if self.model is None:
            raise RuntimeError("Model is not loaded")

        segments, _ = self.model.transcribe(
            audio_array,
            language=_language_code(self.language),
            task=self.task,
            chunk_length=int(self.chunk_length_s),
            vad_filter=False,
        )

        text = " ".join(seg.text.strip() for seg in segments).strip()

        if text:
            print(f'[TEXT] "{text}"')
        else:
            print("[WARN] No speech detected")

        return text
