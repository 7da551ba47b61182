"""
Configuration for the LRU cache
Copyright 2025 Jurden Bruce

Settings come from environment variables, with keyword overrides on top.
"""

import os
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger("lrucache.config")

DEFAULT_CAPACITY = 128
DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


def load_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build the cache configuration dict

    Args:
        overrides: values that replace the environment settings; None entries are ignored

    Returns:
        Dict with capacity, copy_on_read and log_level keys
    """
    config = {
        "capacity": _env_int("LRU_CACHE_CAPACITY", DEFAULT_CAPACITY),
        "copy_on_read": _env_bool("LRU_CACHE_COPY_ON_READ", True),
        "log_level": os.getenv("LRU_CACHE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    }

    if overrides:
        for key, value in overrides.items():
            if value is not None:
                config[key] = value

    logger.debug(f"Loaded config: {config}")
    return config
