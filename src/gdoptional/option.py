"""Option type: Some(value) | Nothing() for optional values.

Unlike a nullable value, an Option carries an explicit discriminant, so
``Some(None)`` is a present value and never equal to ``Nothing()``.

Options are small mutable holders: ``take()`` and ``replace()`` move the
contents out of the holder in place, which makes an Option usable as a
"consume exactly once" slot. Every other combinator returns a new Option.

Examples:
    >>> Some(21).map(lambda x: x * 2)
    Some(42)
    >>> Nothing().unwrap_or(0)
    0
    >>> slot = Some('jump')
    >>> slot.take()
    Some('jump')
    >>> slot
    Nothing
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import msgspec

from gdoptional._panic import discourage_unwrap, expect_failed, panic
from gdoptional.error import Error, HostError

if TYPE_CHECKING:
    from gdoptional.result import Result

__all__ = ['Nothing', 'Option', 'Some']

_SOME_KEY = 'Some'
_NONE_KEY = 'None'


class Option[T](msgspec.Struct):
    """A value that is either present (``Some``) or absent (``Nothing``).

    Construct through ``Some(value)`` / ``Nothing()`` rather than the raw
    fields.

    Attributes:
        present: Discriminant; True for Some.
        value: The payload. Always None while the option is empty.
    """

    present: bool = False
    value: T | None = None

    @classmethod
    def some(cls, value: T) -> Option[T]:
        """Construct a present Option."""
        return cls(True, value)

    @classmethod
    def none(cls) -> Option[Any]:
        """Construct an empty Option."""
        return cls()

    @classmethod
    def from_nullable(cls, value: T | None) -> Option[T]:
        """Some(value) unless value is None."""
        if value is None:
            return cls()
        return cls(True, value)

    @classmethod
    def arr_get(cls, seq: Sequence[T], idx: int) -> Option[T]:
        """Index ``seq`` without raising; Nothing when ``idx`` is out of range.

        Negative indices count from the end like normal indexing.
        """
        if -len(seq) <= idx < len(seq):
            return cls(True, seq[idx])
        return cls()

    @classmethod
    def dict_get(cls, mapping: Mapping[Any, T], key: Any) -> Option[T]:
        """Look up ``key`` without raising; Nothing when the key is missing."""
        if key in mapping:
            return cls(True, mapping[key])
        return cls()

    # --- querying ---

    def is_some(self) -> bool:
        """Return True if a value is present."""
        return self.present

    def is_none(self) -> bool:
        """Return True if no value is present."""
        return not self.present

    def is_some_and(self, pred: Callable[[T], bool]) -> bool:
        """Return True if a value is present and satisfies ``pred``.

        ``pred`` is not called on Nothing.
        """
        return self.present and bool(pred(self.value))  # type: ignore[arg-type]

    # --- extracting ---

    def unwrap(self) -> T:
        """Return the contained value.

        Meant for prototypes and tests only.

        Raises:
            Panic: If the option is Nothing.
        """
        if self.present:
            return self.value  # type: ignore[return-value]
        discourage_unwrap('Option.unwrap')
        panic('Called unwrap on Nothing')

    def expect(self, msg: str) -> T | None:
        """Return the contained value, failing with ``msg`` on Nothing.

        The failure is a debug assertion: under ``python -O`` the message is
        logged and None is returned.
        """
        if not self.present:
            expect_failed(msg)
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the contained value or ``default``."""
        if self.present:
            return self.value  # type: ignore[return-value]
        return default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Return the contained value or compute one with ``f``."""
        if self.present:
            return self.value  # type: ignore[return-value]
        return f()

    # --- transforming ---

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """Apply ``f`` to the contained value.

        Whatever ``f`` returns becomes the payload, None included. Nothing is
        returned unchanged and ``f`` is not called.
        """
        if self.present:
            return Option(True, f(self.value))  # type: ignore[arg-type]
        return Option()

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:
        """Apply ``f`` to the contained value, or return ``default``."""
        if self.present:
            return f(self.value)  # type: ignore[arg-type]
        return default

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Chain an Option-returning function (flatmap / bind)."""
        if not self.present:
            return Option()
        out = f(self.value)  # type: ignore[arg-type]
        assert isinstance(out, Option), f'and_then callback must return an Option, got {type(out).__name__}'
        return out

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        """Return a copy of self if Some, else the Option produced by ``f``."""
        if self.present:
            return self._copy()
        out = f()
        assert isinstance(out, Option), f'or_else callback must return an Option, got {type(out).__name__}'
        return out

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Keep the value only if ``predicate`` holds."""
        if self.present and predicate(self.value):  # type: ignore[arg-type]
            return Option(True, self.value)
        return Option()

    def and_[U](self, other: Option[U]) -> Option[U]:
        """Return ``other`` if self is Some, else Nothing."""
        if self.present:
            return other._copy()
        return Option()

    def or_(self, other: Option[T]) -> Option[T]:
        """Return self if Some, else ``other``."""
        if self.present:
            return self._copy()
        return other._copy()

    def xor(self, other: Option[T]) -> Option[T]:
        """Return whichever side is Some when exactly one is, else Nothing."""
        if self.present and not other.present:
            return self._copy()
        if other.present and not self.present:
            return other._copy()
        return Option()

    def zip[U](self, other: Option[U]) -> Option[tuple[T, U]]:
        """Pair two Some values; Nothing if either side is Nothing."""
        if self.present and other.present:
            return Option(True, (self.value, other.value))  # type: ignore[arg-type]
        return Option()

    def flatten(self) -> Option[Any]:
        """Collapse ``Some(Some(x))`` to ``Some(x)``."""
        if self.present and isinstance(self.value, Option):
            return self.value._copy()
        if self.present:
            return self._copy()
        return Option()

    # --- in-place slot operations ---

    def _copy(self) -> Option[T]:
        return Option(self.present, self.value)

    def take(self) -> Option[T]:
        """Move the contents out, leaving this holder empty."""
        taken = self._copy()
        self.present = False
        self.value = None
        return taken

    def replace(self, value: T) -> Option[T]:
        """Store ``value`` in this holder and return the previous contents."""
        old = self._copy()
        self.present = True
        self.value = value
        return old

    def get_or_insert_with(self, f: Callable[[], T]) -> T:
        """Fill an empty holder with ``f()`` and return the contained value."""
        if not self.present:
            self.present = True
            self.value = f()
        return self.value  # type: ignore[return-value]

    # --- conversion ---

    def ok_or[E](self, err: E) -> Result[T, E]:
        """Convert to a Result: Ok(value) or Err(err)."""
        from gdoptional.result import Err, Ok

        if self.present:
            return Ok(self.value)
        return Err(err)

    def ok_or_else[E](self, f: Callable[[], E]) -> Result[T, E]:
        """Convert to a Result, computing the error only for Nothing."""
        from gdoptional.result import Err, Ok

        if self.present:
            return Ok(self.value)
        return Err(f())

    def to_dict(self) -> dict[str, Any]:
        """Tagged form: ``{'Some': value}`` or ``{'None': True}``."""
        if self.present:
            return {_SOME_KEY: self.value}
        return {_NONE_KEY: True}

    @classmethod
    def from_dict(cls, data: object) -> Result[Option[Any], Error]:
        """Parse the tagged form produced by ``to_dict``.

        Exactly one of the ``Some``/``None`` keys must be present and nothing
        else; anything else is an ``ERR_INVALID_DATA`` error.
        """
        from gdoptional.result import Err, Ok

        if not isinstance(data, Mapping):
            return Err(
                Error.new(HostError.ERR_INVALID_DATA, {'type': type(data).__name__})
                .msg('Option.from_dict expects a mapping')
                .build()
            )
        keys = list(data)
        if keys == [_SOME_KEY]:
            return Ok(cls(True, data[_SOME_KEY]))
        if keys == [_NONE_KEY]:
            return Ok(cls())
        return Err(
            Error.new(HostError.ERR_INVALID_DATA, {'keys': [str(k) for k in keys]})
            .msg('Option.from_dict expects exactly one of "Some" or "None"')
            .build()
        )

    def __repr__(self) -> str:
        if self.present:
            return f'Some({self.value!r})'
        return 'Nothing'


def Some[T](value: T) -> Option[T]:  # noqa: N802
    """Construct a present Option holding ``value``."""
    return Option(True, value)


def Nothing() -> Option[Any]:  # noqa: N802
    """Construct an empty Option."""
    return Option()
