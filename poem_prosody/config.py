"""Runtime settings resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .utils.logging_config import LOG_LEVEL_ENV_VAR

CMUDICT_PATH_ENV_VAR = "POEM_PROSODY_CMUDICT_PATH"


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration.

    ``cmudict_path`` points at a plain-text CMU dictionary; when ``None`` the
    copy bundled with :mod:`pronouncing` is used.
    """

    log_level: Optional[str] = None
    cmudict_path: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_path = (env.get(CMUDICT_PATH_ENV_VAR) or "").strip()
        raw_level = (env.get(LOG_LEVEL_ENV_VAR) or "").strip()
        return cls(
            log_level=raw_level or None,
            cmudict_path=Path(raw_path).expanduser() if raw_path else None,
        )


__all__ = ["Settings", "CMUDICT_PATH_ENV_VAR"]
