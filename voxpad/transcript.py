"""Transcript buffer shown in the text area."""
from typing import Callable

import pyperclip

SEPARATOR = "\n\n"


class TranscriptBuffer:
    """Accumulates transcriptions for the lifetime of the process."""

    def __init__(self, text: str = ""):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    @property
    def has_text(self) -> bool:
        return bool(self._text)

    def append(self, text: str) -> bool:
        """Append a transcription, separated from prior text by a blank line.

        Returns:
            True when something was appended
        """
        new_text = (text or "").strip()
        if not new_text:
            return False

        if self._text:
            self._text = self._text + SEPARATOR + new_text
        else:
            self._text = new_text
        return True

    def copy_to_clipboard(self) -> None:
        """Copy the whole transcript. Raises pyperclip.PyperclipException."""
        pyperclip.copy(self._text)

    def clear(self, confirm: Callable[[], bool]) -> bool:
        """Empty the buffer if confirm() agrees."""
        if not confirm():
            return False
        self._text = ""
        return True
