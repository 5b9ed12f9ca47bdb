from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache


_LOG_LEVEL_ENV = "LOG_LEVEL"
_DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    log_level: str


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip().upper()
    if not candidate:
        return default
    if not isinstance(logging.getLevelName(candidate), int):
        return default
    return candidate


@lru_cache
def get_settings() -> Settings:
    return Settings(log_level=_read_log_level(_DEFAULT_LOG_LEVEL))
