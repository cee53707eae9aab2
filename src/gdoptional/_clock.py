"""Monotonic millisecond clock used by TimedVar."""

from __future__ import annotations

import time
from collections.abc import Callable

__all__ = ['Clock', 'monotonic_ms']

type Clock = Callable[[], int]


def monotonic_ms() -> int:
    """Milliseconds from a monotonic, non-decreasing clock."""
    return time.monotonic_ns() // 1_000_000
