"""Hardware detection for device selection and model recommendations."""
from typing import Dict, Any


def detect_hardware() -> Dict[str, Any]:
    """Detect GPU capabilities and VRAM."""
    try:
        import torch

        if not torch.cuda.is_available():
            return {
                "gpu_available": False,
                "gpu_name": "No GPU detected",
                "gpu_vram_gb": 0,
                "cuda_version": None,
            }

        device_name = torch.cuda.get_device_name(0)
        try:
            vram_gb = torch.cuda.get_device_properties(0).total_memory / (1024 ** 3)
        except Exception:
            vram_gb = 0

        return {
            "gpu_available": True,
            "gpu_name": device_name,
            "gpu_vram_gb": vram_gb,
            "cuda_version": torch.version.cuda,
        }
    except ImportError:
        return {
            "gpu_available": False,
            "gpu_name": "PyTorch not installed",
            "gpu_vram_gb": 0,
            "cuda_version": None,
        }


def resolve_device(device: str) -> str:
    """Map "auto" to cuda when a GPU is usable, else cpu."""
    if device != "auto":
        return device
    return "cuda" if detect_hardware()["gpu_available"] else "cpu"


def resolve_compute_type(compute_type: str, device: str) -> str:
    if compute_type != "auto":
        return compute_type
    return "float16" if device.startswith("cuda") else "float32"


def recommend_model_config(hw: Dict[str, Any]) -> Dict[str, Any]:
    """Recommend a Whisper checkpoint based on hardware."""
    if hw["gpu_available"]:
        vram_gb = hw["gpu_vram_gb"]
        if vram_gb >= 6:
            model_name = "openai/whisper-large-v3-turbo"
        elif vram_gb >= 4:
            model_name = "openai/whisper-medium.en"
        else:
            model_name = "openai/whisper-small.en"

        return {
            "backend": "transformers",
            "name": model_name,
            "device": "cuda",
            "compute_type": "float16",
            "reason": f"{hw['gpu_name']} ({vram_gb:.1f}GB) - GPU inference",
        }

    return {
        "backend": "transformers",
        "name": "openai/whisper-small.en",
        "device": "cpu",
        "compute_type": "float32",
        "reason": "No GPU detected - CPU-friendly configuration",
    }
