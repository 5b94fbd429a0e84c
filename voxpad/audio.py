"""Decoding of captured audio into model-ready waveforms."""
from math import gcd
from pathlib import Path
from typing import Union

import numpy as np
import soundfile as sf
from scipy import signal

from .session import RecordingSession

INT16_SCALE = 32768.0


def resample(samples: np.ndarray, orig_rate: int, target_rate: int) -> np.ndarray:
    """Resample along the last axis with a polyphase filter."""
    if orig_rate == target_rate or samples.shape[-1] == 0:
        return samples.astype(np.float32, copy=False)

    divisor = gcd(int(orig_rate), int(target_rate))
    up = int(target_rate) // divisor
    down = int(orig_rate) // divisor
    resampled = signal.resample_poly(samples, up, down, axis=-1)
    return resampled.astype(np.float32)


def decode_pcm(
    data: bytes,
    channels: int,
    sample_rate: int,
    target_rate: int,
) -> np.ndarray:
    """Decode interleaved int16 PCM bytes.

    Returns:
        float32 array shaped (channels, samples) at target_rate
    """
    if channels < 1:
        raise ValueError(f"Invalid channel count: {channels}")

    frame_bytes = 2 * channels
    usable = len(data) - (len(data) % frame_bytes)
    pcm = np.frombuffer(data[:usable], dtype="<i2")
    samples = (pcm.astype(np.float32) / INT16_SCALE).reshape(-1, channels).T
    return resample(samples, sample_rate, target_rate)


def decode_file(path: Union[str, Path], target_rate: int) -> np.ndarray:
    """Decode an audio file into a (channels, samples) float32 array."""
    data, rate = sf.read(str(path), dtype="float32", always_2d=True)
    return resample(data.T, rate, target_rate)


def to_mono(samples: np.ndarray) -> np.ndarray:
    """Collapse a (channels, samples) array into one channel.

    Stereo is averaged sample-wise; otherwise the first channel is used.
    """
    if samples.ndim == 1:
        return samples.astype(np.float32, copy=False)
    if samples.shape[0] == 2:
        return ((samples[0] + samples[1]) / 2).astype(np.float32)
    return samples[0].astype(np.float32, copy=False)


def session_waveform(session: RecordingSession, target_rate: int) -> np.ndarray:
    """Concatenate a session's chunks into a mono waveform at target_rate."""
    decoded = decode_pcm(
        session.audio_bytes(),
        channels=session.channels,
        sample_rate=session.sample_rate,
        target_rate=target_rate,
    )
    return to_mono(decoded)
