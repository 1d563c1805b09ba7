"""System clipboard access."""

from __future__ import annotations

from typing import Protocol

import pyperclip

from lf.errors import ClipboardError


class Clipboard(Protocol):
    def set_text(self, text: str) -> None:
        """Put `text` on the clipboard, or raise `ClipboardError`."""
        ...


class SystemClipboard:
    def set_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e
