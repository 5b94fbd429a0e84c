"""Model cache path resolution."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict


def _expanded_path(value: str) -> Path:
    return Path(value).expanduser()


def _default_hf_hub_cache_path() -> Path:
    try:
        from huggingface_hub.constants import HF_HUB_CACHE

        return Path(HF_HUB_CACHE).expanduser()
    except Exception:
        return Path.home() / ".cache" / "huggingface" / "hub"


def _normalize_model_cache_root(path: Path) -> Path:
    return path.parent if path.name.lower() == "hub" else path


def resolve_model_cache_root(config: Dict[str, Any]) -> Path:
    """Root of the Hugging Face cache used for model downloads."""
    configured = config.get("paths", {}).get("model_cache", "")
    if isinstance(configured, str) and configured.strip():
        return _normalize_model_cache_root(_expanded_path(configured.strip()))

    # Keep compatibility with default Hugging Face cache behavior.
    return _default_hf_hub_cache_path().parent


def resolve_model_hub_cache_dir(config: Dict[str, Any]) -> Path:
    """Hub cache directory, honouring HF_HUB_CACHE/HF_HOME when no path is configured."""
    configured = config.get("paths", {}).get("model_cache", "")
    if not (isinstance(configured, str) and configured.strip()):
        if "HF_HUB_CACHE" in os.environ:
            return Path(os.environ["HF_HUB_CACHE"])
        if "HF_HOME" in os.environ:
            return Path(os.environ["HF_HOME"]) / "hub"
    return resolve_model_cache_root(config) / "hub"


def is_model_cached(repo_id: str, config: Dict[str, Any]) -> bool:
    """Return True when a snapshot of repo_id exists in the hub cache."""
    repo_dir_name = "models--" + repo_id.replace("/", "--")
    snapshots_dir = resolve_model_hub_cache_dir(config) / repo_dir_name / "snapshots"
    if not snapshots_dir.exists():
        return False
    return any(snapshot.is_dir() and any(snapshot.iterdir()) for snapshot in snapshots_dir.iterdir())
