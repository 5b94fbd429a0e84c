"""Whisper backend on the Hugging Face transformers ASR pipeline."""
import os

import numpy as np
from typing import Callable, Optional

from ..hardware import resolve_compute_type, resolve_device
from ..progress import (
    STATUS_INITIATE,
    STATUS_LOADING,
    STATUS_READY,
    ProgressEvent,
    progress_tqdm,
)

SAMPLE_RATE = 16000


class TransformersWhisperBackend:
    """Default backend using transformers.pipeline("automatic-speech-recognition").

    Best for: any device PyTorch supports (CPU, CUDA, MPS)
    Pros: any Whisper checkpoint on the Hub, long-form chunking built in
    Cons: slower than CTranslate2 on NVIDIA
    """

    def __init__(
        self,
        model_name: str = "openai/whisper-small.en",
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
        self.compute_type = compute_type
        self.model_cache = model_cache
        self.language = language
        self.task = task
        self.chunk_length_s = chunk_length_s
        self.stride_length_s = stride_length_s
        self.pipe = None

    @property
    def english_only(self) -> bool:
        """English-only checkpoints reject language/task generation kwargs."""
        return self.model_name.endswith(".en")

    def _cache_dir(self) -> Optional[str]:
        if not self.model_cache:
            return None
        return os.path.join(self.model_cache, "hub")

    def load(self, emit: Callable[[ProgressEvent], None]) -> None:
        """Fetch the model snapshot and build the ASR pipeline."""
        from huggingface_hub import snapshot_download

        emit(ProgressEvent(STATUS_INITIATE, file=self.model_name))
        local_dir = snapshot_download(
            repo_id=self.model_name,
            cache_dir=self._cache_dir(),
            tqdm_class=progress_tqdm(emit, self.model_name),
        )

        emit(ProgressEvent(STATUS_LOADING, file=self.model_name))
        import torch
        from transformers import pipeline

        device = resolve_device(self.device)
        compute_type = resolve_compute_type(self.compute_type, device)
        dtype_map = {
            "float16": torch.float16,
            "bfloat16": torch.bfloat16,
            "float32": torch.float32,
        }
        dtype = dtype_map.get(compute_type, torch.float32)

        print(f"[INFO] Loading Whisper model: {self.model_name} on {device} ({compute_type})...")
        self.pipe = pipeline(
            "automatic-speech-recognition",
            model=local_dir,
            torch_dtype=dtype,
            device=device,
        )
        print("[OK] Model loaded and ready")
        emit(ProgressEvent(STATUS_READY, file=self.model_name))

    def transcribe(self, audio_array: Optional[np.ndarray]) -> str:
        """Transcribe audio to text."""
        if audio_array is None or len(audio_array) == 0:
            return ""
        if self.pipe is None:
            raise RuntimeError("Model is not loaded")

        kwargs = {
            "chunk_length_s": self.chunk_length_s,
            "stride_length_s": self.stride_length_s,
        }
        if not self.english_only:
            kwargs["generate_kwargs"] = {"language": self.language, "task": self.task}

        result = self.pipe(
            {"raw": np.asarray(audio_array, dtype=np.float32), "sampling_rate": SAMPLE_RATE},
            **kwargs,
        )
        text = result["text"].strip()

        if text:
            print(f'[TEXT] "{text}"')
        else:
            print("[WARN] No speech detected")
        return text
