from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_STORE_DIR = ".gitlet/commits"


@dataclass(frozen=True)
class Settings:
    store_dir: Path
    log_level: int


def _parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"GITLET_LOG_LEVEL must be a logging level name, got {value!r}")
    return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    store_dir = Path(os.getenv("GITLET_DIR", DEFAULT_STORE_DIR))
    log_level = _parse_log_level(os.getenv("GITLET_LOG_LEVEL", "WARNING"))

    return Settings(store_dir=store_dir, log_level=log_level)
