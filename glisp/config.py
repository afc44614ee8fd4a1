from __future__ import annotations
import logging
import os
from typing import Optional


_TRUTHY = {'1', 'true', 'yes', 'on'}

# Defaults
_DEFAULT_LOG_LEVEL = 'WARNING'


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def int_from_env(var: str) -> Optional[int]:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def get_show_vals() -> bool:
    return flag_from_env('GLISP_SHOW_VALS')


def get_log_level() -> int:
    raw = os.environ.get('GLISP_LOG_LEVEL') or _DEFAULT_LOG_LEVEL
    level = logging.getLevelName(raw.strip().upper())
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def get_recursion_limit() -> Optional[int]:
    limit = int_from_env('GLISP_RECURSION_LIMIT')
    return limit if limit is not None and limit > 0 else None
