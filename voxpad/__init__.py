"""Voxpad - record your voice and transcribe it locally with Whisper."""

__version__ = "0.1.0"
