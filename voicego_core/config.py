from __future__ import annotations

import logging
import os
from typing import Optional

from .ai import DEFAULT_STRATEGY, STRATEGIES

_TRUTHY = ('1', 'true', 'yes', 'on')


def _flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


def debug_enabled() -> bool:
    return _flag('VOICEGO_DEBUG')


def seed() -> Optional[int]:
    """VOICEGO_SEED pins the opponent's random choices for reproducible games."""
    raw = os.getenv('VOICEGO_SEED')
    if raw is None or raw.strip() == '':
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"VOICEGO_SEED must be an integer, got {raw!r}") from None


def strategy() -> str:
    name = os.getenv('VOICEGO_STRATEGY', DEFAULT_STRATEGY).strip().lower()
    if name not in STRATEGIES:
        raise ValueError(f"VOICEGO_STRATEGY must be one of {sorted(STRATEGIES)}, got {name!r}")
    return name


def log_level() -> int:
    if debug_enabled():
        return logging.DEBUG
    name = os.getenv('VOICEGO_LOG_LEVEL', 'WARNING').strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"VOICEGO_LOG_LEVEL is not a logging level: {name!r}")
    return level


def port() -> int:
    return int(os.getenv('PORT', '5000'))


def flask_debug() -> bool:
    return _flag('FLASK_DEBUG', os.getenv('DEBUG', '0'))


def configure_logging() -> None:
    """Installs a root handler for entry points; library modules only create loggers."""
    logging.basicConfig(
        level=log_level(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
