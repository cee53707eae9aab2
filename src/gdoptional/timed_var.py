"""TimedVar: a value that expires after a configurable lifespan.

A TimedVar is either fresh (it holds a value) or expired (the value is gone
and the epoch timer is reset to zero). Expiry is evaluated lazily: every
query first compares the clock against ``created_at + lifespan`` and expires
the variable if that moment has strictly passed. There is no background timer.

A lifespan of 0 means "never expires". ``set_value`` starts a new epoch;
``mut_value`` swaps the value but keeps the running timer.

Example:
    ```python
    from gdoptional import TimedVar

    last_input = TimedVar.with_lifespan('punch', 300)
    ...
    combo = last_input.take()  # Some('punch') if within 300 ms, else Nothing
    ```
"""

from __future__ import annotations

from typing import Self

from gdoptional._clock import Clock, monotonic_ms
from gdoptional.option import Nothing, Option, Some

__all__ = ['TimedVar']


class TimedVar[T]:
    """Time-boxed value container with lazy expiry.

    None of the methods raise; absence is reported through Option.
    """

    __slots__ = ('_clock', '_created_at', '_expired', '_lifespan', '_value')

    def __init__(self, value: T, *, clock: Clock = monotonic_ms) -> None:
        self._clock = clock
        self._value: T | None = value
        self._created_at: int = clock()
        self._lifespan: int = 0
        self._expired: bool = False

    @classmethod
    def with_lifespan(cls, value: T, lifespan_ms: int, *, clock: Clock = monotonic_ms) -> TimedVar[T]:
        """Create a fresh TimedVar that expires ``lifespan_ms`` after now."""
        return cls(value, clock=clock).set_lifespan(lifespan_ms)

    @property
    def lifespan(self) -> int:
        """Lifespan in milliseconds; 0 means the value never expires."""
        return self._lifespan

    @property
    def created_at(self) -> int:
        """Clock reading at the start of the current epoch (0 once expired)."""
        return self._created_at

    def _expire(self) -> None:
        self._expired = True
        self._value = None
        self._created_at = 0

    def _check_expiry(self, lifespan: int | None = None) -> None:
        if self._expired:
            return
        if lifespan is None:
            lifespan = self._lifespan
        if lifespan > 0 and self._clock() - self._created_at > lifespan:
            self._expire()

    # --- mutation ---

    def set_lifespan(self, lifespan_ms: int) -> Self:
        """Set the lifespan and restart the epoch timer from now.

        An already expired variable stays expired; only ``set_value`` brings a
        value back.
        """
        assert lifespan_ms >= 0, f'lifespan must be non-negative, got {lifespan_ms}'
        self._lifespan = lifespan_ms
        if not self._expired:
            self._created_at = self._clock()
        return self

    def set_value(self, value: T) -> Self:
        """Store ``value`` and start a new epoch (timer reset, expiry cleared)."""
        self._value = value
        self._created_at = self._clock()
        self._expired = False
        return self

    def mut_value(self, value: T) -> Self:
        """Replace the value without restarting the timer.

        Does nothing once the variable has expired.
        """
        self._check_expiry()
        if not self._expired:
            self._value = value
        return self

    def force_expiration(self) -> Self:
        """Expire immediately, whatever the timer says."""
        self._expire()
        return self

    # --- queries ---

    def is_expired(self) -> bool:
        """Return True once the value has expired in the current epoch."""
        self._check_expiry()
        return self._expired

    def get_value(self) -> Option[T]:
        """Some(value) while fresh, Nothing once expired."""
        self._check_expiry()
        if self._expired:
            return Nothing()
        return Some(self._value)  # type: ignore[arg-type]

    def take(self) -> Option[T]:
        """Read the value and expire the variable.

        Returns Some(value) if the variable was fresh at read time, else
        Nothing. A second ``take()`` in the same epoch always returns Nothing.
        """
        return self.take_timed(self._lifespan)

    def take_timed(self, lifespan_ms: int) -> Option[T]:
        """Like ``take()``, but judge freshness against ``lifespan_ms`` for this call only."""
        self._check_expiry(lifespan_ms)
        out = Nothing() if self._expired else Some(self._value)
        self._expire()
        return out

    def time_ms_until_expiration(self) -> Option[int]:
        """Milliseconds left before expiry.

        Some(0) once expired, even with a lifespan of 0; otherwise Nothing when
        the lifespan is 0 (never expires).
        """
        self._check_expiry()
        if self._expired:
            return Some(0)
        if self._lifespan == 0:
            return Nothing()
        return Some(max(0, self._created_at + self._lifespan - self._clock()))

    def __repr__(self) -> str:
        self._check_expiry()
        if self._expired:
            return f'TimedVar(<expired>, lifespan={self._lifespan}ms)'
        return f'TimedVar({self._value!r}, lifespan={self._lifespan}ms)'
