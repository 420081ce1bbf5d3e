"""Exceptions raised by :mod:`poem_prosody`.

Analysis functions never raise for degraded input; they return empty or
neutral results. The only failure surfaced to callers is a strict dictionary
load against a file that cannot be read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class PoemProsodyError(Exception):
    """Base class for package errors."""


class DictionaryLoadError(PoemProsodyError):
    """Raised by ``CMUDictLoader.load(strict=True)`` when no entries are available."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = ["PoemProsodyError", "DictionaryLoadError"]
