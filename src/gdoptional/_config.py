"""Library configuration: Config dataclass, environment detection and init()."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from gdoptional._logging import configure_logging

__all__ = [
    'Config',
    'get_config',
    'init',
]

_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class Config:
    """Configuration for gdoptional's diagnostics.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_output: Render log lines as JSON (True) or colored console text (False).
        warn_on_unwrap: Emit the discouraging warning before an unwrap panics.
    """

    log_level: str | None = None
    json_output: bool = True
    warn_on_unwrap: bool = True


_DEFAULT = Config()

# Global configuration (set by init())
_config: Config | None = None


def _detect_log_level() -> str | None:
    """Read GDOPTIONAL_LOG_LEVEL, ignoring unknown values."""
    env_level = os.environ.get('GDOPTIONAL_LOG_LEVEL', '').upper()
    if not env_level:
        return None
    if env_level not in _LEVELS:
        logging.warning("Unknown GDOPTIONAL_LOG_LEVEL value '%s', ignoring", env_level)
        return None
    return env_level


def _detect_json_output() -> bool:
    """Read GDOPTIONAL_LOG_FORMAT ("json" or "console"); JSON by default."""
    env_format = os.environ.get('GDOPTIONAL_LOG_FORMAT', '').lower()
    if env_format == 'console':
        return False
    if env_format and env_format != 'json':
        logging.warning("Unknown GDOPTIONAL_LOG_FORMAT value '%s', defaulting to json", env_format)
    return True


def init(
    log_level: str | None = None,
    *,
    json_output: bool | None = None,
    warn_on_unwrap: bool = True,
) -> Config:
    """Initialize gdoptional with the given configuration.

    Args:
        log_level: Logging level. Read from GDOPTIONAL_LOG_LEVEL if None.
        json_output: Output format. Read from GDOPTIONAL_LOG_FORMAT if None.
        warn_on_unwrap: Whether unwrap-family panics log a warning first.

    Returns:
        The Config that was set.

    Example:
        ```python
        from gdoptional import init

        init(log_level="DEBUG", json_output=False)
        ```
    """
    global _config  # noqa: PLW0603

    resolved_level = log_level.upper() if log_level is not None else _detect_log_level()
    resolved_json = json_output if json_output is not None else _detect_json_output()

    _config = Config(
        log_level=resolved_level,
        json_output=resolved_json,
        warn_on_unwrap=warn_on_unwrap,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=resolved_json)

    return _config


def get_config() -> Config:
    """Get the current configuration.

    Raises:
        RuntimeError: If init() has not been called.
    """
    if _config is None:
        msg = 'gdoptional not initialized. Call gdoptional.init() first.'
        raise RuntimeError(msg)
    return _config


def active_config() -> Config:
    """Return the configuration set by init(), or the defaults."""
    return _config if _config is not None else _DEFAULT
