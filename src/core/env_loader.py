#!/usr/bin/env python3
"""
.env support for local runs.

Values already present in the process environment always win over the file,
so CI and shell overrides keep working.
"""

import os
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_QUOTES = ('"', "'")
_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})


def _unquote(raw: str) -> str:
    raw = raw.strip()
    if len(raw) >= 2 and raw[0] in _QUOTES and raw[-1] == raw[0]:
        return raw[1:-1]
    return raw


def parse_env_lines(lines: Iterable[str], source: str = ".env") -> Iterator[Tuple[str, str]]:
    """Yield ``(key, value)`` pairs, skipping comments and malformed lines."""
    for number, raw_line in enumerate(lines, 1):
        entry = raw_line.strip()
        if not entry or entry.startswith('#'):
            continue

        name, sep, raw_value = entry.partition('=')
        name = name.strip()
        if not sep or not name:
            logger.warning(f"Ignoring malformed line {number} in {source}: {entry}")
            continue

        yield name, _unquote(raw_value)


def load_env_file(env_file_path: str = ".env", root: Optional[Path] = None) -> int:
    """
    Copy variables from a .env file into ``os.environ``.

    Args:
        env_file_path: File name, relative to ``root``
        root: Base directory (defaults to the project root)

    Returns:
        How many variables were newly set
    """
    env_path = (root or PROJECT_ROOT) / env_file_path
    if not env_path.is_file():
        logger.debug(f"No env file at {env_path}")
        return 0

    try:
        content = env_path.read_text(encoding='utf-8')
    except OSError as e:
        logger.error(f"Could not read {env_path}: {e}")
        return 0

    applied = 0
    for name, value in parse_env_lines(content.splitlines(), source=str(env_path)):
        if name in os.environ:
            logger.debug(f"Keeping {name} from the process environment")
            continue
        os.environ[name] = value
        applied += 1

    logger.info(f"Applied {applied} settings from {env_path}")
    return applied


def get_env_var(key: str, default: Optional[str] = None) -> Optional[str]:
    """Plain string lookup; empty values count as unset."""
    value = os.environ.get(key)
    return value if value else default


def get_env_bool(key: str, default: bool = False) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def get_env_list(key: str, default: Iterable[str] = ()) -> List[str]:
    """Comma separated list, lowercased, blanks dropped."""
    raw = os.environ.get(key)
    if raw is None:
        return list(default)
    return [item.strip().lower() for item in raw.split(',') if item.strip()]
