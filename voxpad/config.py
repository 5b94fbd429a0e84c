"""Configuration loading for Voxpad (config.toml)."""
import copy
import os
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

CONFIG_FILENAME = "config.toml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "model": {
        "backend": "transformers",
        "name": "openai/whisper-small.en",
        "device": "auto",
        "compute_type": "auto",
        "language": "english",
        "task": "transcribe",
        "chunk_length_s": 30,
        "stride_length_s": 5,
    },
    "audio": {
        "input_device": "default",
        "sample_rate": 16000,
        "channels": 1,
        "target_sample_rate": 16000,
    },
    "paths": {
        "model_cache": "",
    },
    "ui": {
        "theme": "dark",
    },
}


def get_platform_config_dir() -> Path:
    """Return the per-user config directory for this platform."""
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "voxpad"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "voxpad"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "voxpad"


def _config_dirs() -> List[Path]:
    """Directories searched for config.toml, in priority order."""
    return [Path.cwd(), get_platform_config_dir()]


def _find_config_path() -> Optional[Path]:
    for directory in _config_dirs():
        candidate = directory / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None


def get_config_path() -> Optional[Path]:
    """Return the config file that load_config() would read, if any."""
    return _find_config_path()


def _merge_configs(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: Optional[Path] = None,
    quiet: bool = False,
    raise_on_error: bool = False,
) -> Dict[str, Any]:
    """Load config.toml merged over defaults.

    Args:
        path: Explicit config file. Searched for when omitted.
        quiet: Suppress console notices.
        raise_on_error: Re-raise parse errors instead of using defaults.
    """
    if path is None:
        path = _find_config_path()

    if path is None:
        if not quiet:
            print("[INFO] No config.toml found, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(path, "rb") as f:
            user_config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if raise_on_error:
            raise
        if not quiet:
            print(f"[WARN] Failed to read {path}: {e}")
            print("[INFO] Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not quiet:
        print(f"[OK] Loaded config from {path}")
    return _merge_configs(DEFAULT_CONFIG, user_config)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def save_config(path: Path, config: Dict[str, Any]) -> None:
    """Write a two-level config dict as TOML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Top-level scalars must precede the first table header
    lines: List[str] = [
        f"{key} = {_format_value(value)}"
        for key, value in config.items()
        if not isinstance(value, dict)
    ]
    for section, values in config.items():
        if not isinstance(values, dict):
            continue
        if lines:
            lines.append("")
        lines.append(f"[{section}]")
        for key, value in values.items():
            lines.append(f"{key} = {_format_value(value)}")

    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    print(f"[OK] Configuration saved to {path}")
