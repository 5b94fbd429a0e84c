"""Setup wizard for initial configuration."""
import sounddevice as sd
from .config import DEFAULT_CONFIG, get_platform_config_dir, save_config
from .hardware import detect_hardware, recommend_model_config
from .storage import is_model_cached


def _list_microphones() -> None:
    """List available input devices."""
    print("\n[INFO] Available microphones:")
    devices = sd.query_devices()

    for idx, device in enumerate(devices):
        if device['max_input_channels'] > 0:
            name = device['name']
            channels = device['max_input_channels']
            print(f"  [{idx}] {name} ({channels} ch)")

    print("  [default] System default microphone")


def _ask(prompt: str, default: str) -> str:
    answer = input(f"{prompt} [default: {default}]: ").strip()
    return answer if answer else default


def _ask_int(prompt: str, default: int, allowed: tuple) -> int:
    answer = _ask(prompt, str(default))
    try:
        value = int(answer)
    except ValueError:
        print(f"[WARN] '{answer}' is not a number, using {default}")
        return default
    if value not in allowed:
        print(f"[WARN] {value} is not one of {allowed}, using {default}")
        return default
    return value


def run_wizard() -> None:
    """Run interactive setup wizard."""
    print("=" * 60)
    print("Voxpad Setup Wizard")
    print("=" * 60)

    hw_info = detect_hardware()
    recommendation = recommend_model_config(hw_info)

    if hw_info["gpu_available"]:
        cuda_ver = hw_info.get("cuda_version") or "unknown"
        print(f"[OK] GPU detected: {hw_info['gpu_name']}")
        print(f"[INFO] VRAM: {hw_info['gpu_vram_gb']:.1f} GB  |  CUDA {cuda_ver}")
    else:
        print(f"[INFO] {hw_info['gpu_name']}")

    print(f"\n[INFO] Recommended: {recommendation['reason']}")
    model_name = _ask("Model name", recommendation["name"])
    default_language = DEFAULT_CONFIG["model"]["language"]
    if model_name.endswith(".en"):
        language = default_language
        print("[INFO] English-only model selected, language fixed to english")
    else:
        language = _ask("Spoken language", default_language)

    # Microphone selection
    _list_microphones()
    input_device = _ask("\nMicrophone device", "default")
    channels = _ask_int("Input channels (1 = mono, 2 = stereo)", 1, (1, 2))

    # Model cache path
    print("\n[INFO] Model cache stores downloaded Whisper models")
    print("[INFO] Leave empty to use default HuggingFace cache (~/.cache/huggingface)")
    cache_input = input("Cache directory [default: HuggingFace default]: ").strip()

    theme = _ask("\nWindow theme (dark/light)", "dark")
    if theme not in ("dark", "light"):
        print(f"[WARN] Unknown theme '{theme}', using dark")
        theme = "dark"

    config = {
        "model": {
            "backend": recommendation["backend"],
            "name": model_name,
            "device": recommendation["device"],
            "compute_type": recommendation["compute_type"],
            "language": language,
        },
        "audio": {
            "input_device": input_device,
            "sample_rate": DEFAULT_CONFIG["audio"]["sample_rate"],
            "channels": channels,
        },
        "paths": {
            "model_cache": cache_input,
        },
        "ui": {
            "theme": theme,
        },
    }

    # Save config to platform config dir so it's found from any working directory
    print("\n[INFO] Saving configuration...")
    config_path = get_platform_config_dir() / "config.toml"
    save_config(config_path, config)

    if is_model_cached(model_name, config):
        print(f"\n[OK] Model '{model_name}' already cached")
    else:
        print(f"\n[INFO] Model '{model_name}' will be downloaded on first run")

    print("\n" + "=" * 60)
    print("[OK] Setup complete!")
    print("Run 'voxpad' to start the application")
    print("=" * 60)
