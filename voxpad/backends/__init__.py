"""Backend factory for model-agnostic transcription."""
from typing import Dict, Any
from .base import TranscriberBackend
from ..storage import resolve_model_cache_root

OPENAI_PREFIX = "openai/whisper-"


def _detect_best_backend() -> str:
    """Auto-detect the best available backend based on hardware."""
    try:
        import torch
        if torch.cuda.is_available():
            import faster_whisper  # noqa: F401
            # NVIDIA GPU detected - faster-whisper is fastest
            return "faster-whisper"
    except ImportError:
        pass

    return "transformers"


def _faster_whisper_model_name(model_name: str) -> str:
    """Map openai/whisper-<size> Hub ids to faster-whisper size names."""
    if model_name.startswith(OPENAI_PREFIX):
        return model_name[len(OPENAI_PREFIX):]
    return model_name


def create_transcriber(config: Dict[str, Any]) -> TranscriberBackend:
    """Factory function to create the appropriate transcriber backend.

    The returned backend is not loaded yet; see voxpad.progress.stream_model_load.

    Args:
        config: Configuration dictionary with model settings

    Returns:
        TranscriberBackend instance

    Raises:
        ValueError: If backend is invalid or dependencies missing
    """
    model = config["model"]
    backend = model.get("backend", "auto")

    # Auto-detect if requested
    if backend == "auto":
        backend = _detect_best_backend()
        print(f"[INFO] Auto-detected backend: {backend}")

    model_cache = config.get("paths", {}).get("model_cache", "")
    if model_cache:
        model_cache = str(resolve_model_cache_root(config))

    options = {
        "device": model.get("device", "auto"),
        "compute_type": model.get("compute_type", "auto"),
        "model_cache": model_cache,
        "language": model.get("language", "english"),
        "task": model.get("task", "transcribe"),
        "chunk_length_s": model.get("chunk_length_s", 30),
        "stride_length_s": model.get("stride_length_s", 5),
    }

    if backend == "transformers":
        try:
            from .transformers_whisper import TransformersWhisperBackend
            return TransformersWhisperBackend(model_name=model["name"], **options)
        except ImportError as e:
            raise ValueError(
                f"transformers backend requires transformers and torch. "
                f"Install with: pip install transformers torch\n"
                f"Error: {e}"
            )

    elif backend == "faster-whisper":
        try:
            from .faster_whisper import FasterWhisperBackend
            return FasterWhisperBackend(
                model_name=_faster_whisper_model_name(model["name"]),
                **options
            )
        except ImportError as e:
            raise ValueError(
                f"faster-whisper backend requires faster-whisper package. "
                f"Install with: pip install faster-whisper\n"
                f"Error: {e}"
            )

    else:
        raise ValueError(
            f"Unknown backend: {backend}. "
            f"Valid options: 'auto', 'transformers', 'faster-whisper'"
        )


__all__ = ["TranscriberBackend", "create_transcriber"]
