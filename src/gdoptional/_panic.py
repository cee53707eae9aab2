"""Panic: the always-active termination primitive.

Contract violations (``Some`` callbacks returning the wrong type and the like)
are plain ``assert`` statements and disappear under ``python -O``. Unwrapping
the wrong branch and fatal reports are different: they always log and then
raise ``Panic``.
"""

from __future__ import annotations

from typing import Any, NoReturn

from gdoptional._logging import get_logger

__all__ = ['Panic', 'discourage_unwrap', 'expect_failed', 'panic']


class Panic(BaseException):  # noqa: N818
    """Raised when a value is unwrapped on the wrong branch or a fatal report fires.

    Derives from ``BaseException`` like ``SystemExit``: a bare
    ``except Exception`` does not stop it, so an uncaught panic ends the
    process. The name intentionally doesn't end with "Error" since it is
    not meant to be recovered from.
    """

    __slots__ = ('_context',)

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._context = context or {}
        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Structured context that was logged alongside the panic."""
        return self._context


def panic(message: str, **context: Any) -> NoReturn:
    """Log ``message`` at critical level, then raise ``Panic``.

    Args:
        message: Human-readable reason for terminating.
        **context: Extra key/value pairs bound to the log entry.

    Raises:
        Panic: Always.
    """
    get_logger().critical(message, **context)
    raise Panic(message, context)


def discourage_unwrap(method: str) -> None:
    """Log the warning that precedes an unwrap panic, unless disabled in Config."""
    from gdoptional._config import active_config

    if active_config().warn_on_unwrap:
        get_logger().warning(
            f'{method} hit the empty branch; prefer unwrap_or, unwrap_or_else or a match outside of prototypes',
            method=method,
        )


def expect_failed(message: str) -> None:
    """Fail an ``expect`` call with debug-assertion semantics.

    Raises ``AssertionError`` while assertions are enabled; under ``python -O``
    the message is only logged and the caller carries on.
    """
    if __debug__:
        raise AssertionError(message)
    get_logger().error(message)
