"""
Environment configuration for Calcamabob.

Settings are read from environment variables so the CLI and library callers
share one place to look them up. A command-line flag, when given, always
wins over the environment.

Variables:
    - CALCAMABOB_STRICT: truthy (1, true, yes, on) rejects unrecognized
      characters instead of dropping them. Default: lenient.
    - CALCAMABOB_LOG_LEVEL: logging level name for the CLI. Default: WARNING.

Usage:
    from calcamabob.core.environment import get_log_level, is_strict

    if is_strict():
        ...
"""

from __future__ import annotations

import logging
import os

STRICT_ENV_VAR = "CALCAMABOB_STRICT"
LOG_LEVEL_ENV_VAR = "CALCAMABOB_LOG_LEVEL"

_DEFAULT_LOG_LEVEL = logging.WARNING

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

logger = logging.getLogger(__name__)


def is_strict(override: bool | None = None) -> bool:
    """Determine whether tokenizing should reject unrecognized characters.

    Resolution order:
    1. If override is explicitly set (True/False), use it
    2. Otherwise, read CALCAMABOB_STRICT; unknown values fall back to lenient

    Examples:
        >>> is_strict(True)
        True

        >>> import os; os.environ["CALCAMABOB_STRICT"] = "yes"
        >>> is_strict()
        True
    """
    if override is not None:
        return override

    env_value = os.environ.get(STRICT_ENV_VAR, "").lower().strip()
    if env_value in _TRUTHY:
        return True
    if env_value not in _FALSY:
        logger.warning(
            "Unknown %s value '%s'. Valid values: 1, true, yes, on, 0, false, no, off. "
            "Defaulting to lenient.",
            STRICT_ENV_VAR,
            env_value,
        )
    return False


def get_log_level(override: str | None = None) -> int:
    """Get the logging level from ``override`` or CALCAMABOB_LOG_LEVEL.

    Accepts level names in any case (``debug``, ``INFO``). Unknown names log
    a warning and fall back to WARNING.
    """
    name = override if override is not None else os.environ.get(LOG_LEVEL_ENV_VAR, "")
    name = name.upper().strip()
    if not name:
        return _DEFAULT_LOG_LEVEL

    level = logging.getLevelNamesMapping().get(name)
    if level is None:
        logger.warning(
            "Unknown %s value '%s'. Defaulting to WARNING.", LOG_LEVEL_ENV_VAR, name
        )
        return _DEFAULT_LOG_LEVEL
    return level
