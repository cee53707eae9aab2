"""Result type: Ok[T] | Err[E] for explicit error handling.

Both variants are frozen msgspec structs: the discriminant never changes, and
every combinator returns a new Result. Err payloads are usually ``Error``
values but may be anything comparable (a host error code, a string).

Example:
    ```python
    from gdoptional import Err, HostError, Ok, ReportLevel

    def load_level(name: str):
        if not name:
            return Err(HostError.ERR_INVALID_PARAMETER)
        return Ok(name.upper())

    load_level('').report(ReportLevel.WARNING)
    # logs "ERR_INVALID_PARAMETER {}" at warning level
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import msgspec

from gdoptional._logging import get_logger
from gdoptional._panic import discourage_unwrap, expect_failed, panic
from gdoptional.error import Error, ErrorKind, HostError, ReportLevel, is_gderror
from gdoptional.option import Nothing, Option, Some

__all__ = ['Err', 'Ok', 'Result', 'collect']


def _payload_matches(payload: object, v: object) -> bool:
    """Equality against a payload, looking one level into an Error's kind."""
    if payload == v:
        return True
    return isinstance(payload, Error) and payload.kind == v


def _to_error(payload: object) -> Error:
    """Upgrade a raw Err payload into a structured Error."""
    if isinstance(payload, int) and not isinstance(payload, bool):
        return Error(kind=payload)
    if isinstance(payload, str):
        return Error(kind=ErrorKind.OTHER, message=payload)
    return Error(kind=ErrorKind.OTHER, details={'value': payload})


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> Ok(42).map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    def is_ok(self) -> bool:
        """Return True since this is Ok."""
        return True

    def is_err(self) -> bool:
        """Return False since this is Ok."""
        return False

    def is_ok_and(self, pred: Callable[[T], bool]) -> bool:
        """Test the value against ``pred``."""
        return pred(self.value)

    def is_err_and(self, pred: Callable[[Any], bool]) -> bool:  # noqa: ARG002
        """Return False without calling ``pred``."""
        return False

    def ok(self) -> Option[T]:
        """Convert to Option, returning Some(value)."""
        return Some(self.value)

    def err(self) -> Option[Any]:
        """Convert to Option, returning Nothing since this is Ok."""
        return Nothing()

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value."""
        return Ok(f(self.value))

    def map_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Apply ``f`` to the value, ignoring the default."""
        return f(self.value)

    def inspect(self, f: Callable[[T], Any]) -> Ok[T]:
        """Call ``f`` with the value for side effects and return self."""
        f(self.value)
        return self

    def inspect_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Apply a function that returns a Result to the contained value.

        Also known as flatmap or bind.
        """
        out = f(self.value)
        assert isinstance(out, Ok | Err), f'and_then callback must return a Result, got {type(out).__name__}'
        return out

    def or_else(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def and_[U, E](self, other: Ok[U] | Err[E]) -> Ok[U] | Err[E]:
        """Return ``other`` since this is Ok."""
        return other

    def or_(self, _other: Ok[T] | Err[Any]) -> Ok[T]:
        """Return self since this is Ok."""
        return self

    def flatten(self) -> Ok[Any] | Err[Any]:
        """Collapse ``Ok(Ok(x))`` / ``Ok(Err(e))`` by one level."""
        if isinstance(self.value, Ok | Err):
            return self.value
        return self

    def unwrap(self) -> T:
        """Return the contained Ok value."""
        return self.value

    def unwrap_err(self) -> Any:
        """Panic, since there is no error to unwrap.

        Raises:
            Panic: Always.
        """
        discourage_unwrap('Result.unwrap_err')
        panic(f'Called unwrap_err on Ok: {self.value!r}')

    def expect(self, _msg: str) -> T:
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def expect_err(self, msg: str) -> None:
        """Fail with ``msg`` (a debug assertion; logged and None under -O)."""
        expect_failed(f'{msg}: {self.value!r}')

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:  # noqa: ARG002
        """Return the contained Ok value, not calling ``f``."""
        return self.value

    def matches(self, v: object) -> bool:
        """Return True if the value equals ``v`` (or is an Error of kind ``v``)."""
        return _payload_matches(self.value, v)

    def matches_err(self, v: object) -> bool:  # noqa: ARG002
        """Return False since this is Ok."""
        return False

    def as_report(self, ctor: Callable[[Any], Error] | None = None) -> Ok[T]:  # noqa: ARG002
        """Return self unchanged since there is no error to upgrade."""
        return self

    def report(self, level: ReportLevel | int = ReportLevel.ERROR) -> Ok[T]:  # noqa: ARG002
        """Nothing to report for Ok; return self."""
        return self

    def stringify_err(self) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    gderror_to_string = stringify_err


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    Examples:
        >>> Err('boom').unwrap_or(0)
        0
        >>> Err(7).stringify_err()
        Err(error='File not found')
    """

    error: E

    def is_ok(self) -> bool:
        """Return False since this is Err."""
        return False

    def is_err(self) -> bool:
        """Return True since this is Err."""
        return True

    def is_ok_and(self, pred: Callable[[Any], bool]) -> bool:  # noqa: ARG002
        """Return False without calling ``pred``."""
        return False

    def is_err_and(self, pred: Callable[[E], bool]) -> bool:
        """Test the error against ``pred``."""
        return pred(self.error)

    def ok(self) -> Option[Any]:
        """Convert to Option, returning Nothing since this is Err."""
        return Nothing()

    def err(self) -> Option[E]:
        """Convert to Option, returning Some(error)."""
        return Some(self.error)

    def map(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error."""
        return Err(f(self.error))

    def map_or[U](self, default: U, _f: Callable[[Any], U]) -> U:
        """Return ``default`` since this is Err."""
        return default

    def inspect(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def inspect_err(self, f: Callable[[E], Any]) -> Err[E]:
        """Call ``f`` with the error for side effects and return self."""
        f(self.error)
        return self

    def and_then(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Apply a recovery function to the error."""
        out = f(self.error)
        assert isinstance(out, Ok | Err), f'or_else callback must return a Result, got {type(out).__name__}'
        return out

    def and_(self, _other: Ok[Any] | Err[Any]) -> Err[E]:
        """Return self since this is Err."""
        return self

    def or_[T, F](self, other: Ok[T] | Err[F]) -> Ok[T] | Err[F]:
        """Return ``other`` since this is Err."""
        return other

    def flatten(self) -> Err[E]:
        """Return self since this is Err (nothing to flatten)."""
        return self

    def unwrap(self) -> Any:
        """Panic, since there is no Ok value to unwrap.

        Raises:
            Panic: Always.
        """
        discourage_unwrap('Result.unwrap')
        panic(f'Called unwrap on Err: {self.error}')

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def expect(self, msg: str) -> None:
        """Fail with ``msg`` (a debug assertion; logged and None under -O)."""
        expect_failed(f'{msg}: {self.error}')

    def expect_err(self, _msg: str) -> E:
        """Return the contained error, ignoring the message."""
        return self.error

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        """Compute a fallback from the error."""
        return f(self.error)

    def matches(self, v: object) -> bool:  # noqa: ARG002
        """Return False since this is Err."""
        return False

    def matches_err(self, v: object) -> bool:
        """Return True if the error equals ``v`` (or is an Error of kind ``v``)."""
        return _payload_matches(self.error, v)

    def as_report(self, ctor: Callable[[E], Error] | None = None) -> Err[Error]:
        """Upgrade the payload to an Error, once.

        An Error payload is returned as is. Otherwise ``ctor`` builds the
        Error when given; without it an int becomes the kind, a string becomes
        the message of an ``ErrorKind.OTHER`` error, and anything else is kept
        under the ``value`` detail.
        """
        if isinstance(self.error, Error):
            return self  # type: ignore[return-value]
        if ctor is None:
            return Err(_to_error(self.error))
        built = ctor(self.error)
        assert isinstance(built, Error), f'as_report constructor must return an Error, got {type(built).__name__}'
        return Err(built)

    def report(self, level: ReportLevel | int = ReportLevel.ERROR) -> Err[Error]:
        """Upgrade with ``as_report`` and emit the Error at ``level``.

        Raises:
            Panic: When ``level`` is ``ReportLevel.FATAL``.
        """
        reported = self.as_report()
        reported.error.report(level)
        return reported

    def stringify_err(self) -> Err[Any]:
        """Replace a host error code with its description.

        Any other payload is left alone and a warning is logged.
        """
        if is_gderror(self.error):
            return Err(HostError(self.error).description)
        get_logger().warning(
            'stringify_err: payload is not a host error code', payload=repr(self.error)
        )
        return self

    gderror_to_string = stringify_err


type Result[T, E] = Ok[T] | Err[E]


def collect[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[E]:
    """Collect an iterable of Results into a Result of list.

    Short-circuits on the first Err encountered.

    Examples:
        >>> collect([Ok(1), Ok(2), Ok(3)])
        Ok(value=[1, 2, 3])
        >>> collect([Ok(1), Err('fail'), Ok(3)])
        Err(error='fail')
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
