"""Structured error values: kind codes, ErrorBuilder and the frozen Error.

An error is accumulated at the failure site with an ``ErrorBuilder``
(``msg``, ``cause`` and ``info`` chain on the same builder) and frozen with
``build()``. The resulting ``Error`` is an immutable msgspec struct that can
be carried inside ``Err`` and surfaced through ``report()``.

Example:
    ```python
    from gdoptional import Error, HostError, ReportLevel

    err = (
        Error.new(HostError.ERR_FILE_NOT_FOUND, {'path': 'user://save.json'})
        .msg('Could not load save')
        .info('slot', 2)
        .build()
    )
    err.report(ReportLevel.WARNING)
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from typing import Any, Self

import msgspec

from gdoptional._logging import get_logger
from gdoptional._panic import panic

__all__ = [
    'CUSTOM_KIND_START',
    'Error',
    'ErrorBuilder',
    'ErrorKind',
    'HostError',
    'ReportLevel',
    'is_gderror',
    'kind_name',
]


class HostError(IntEnum):
    """Error codes reserved by the host engine (0..48)."""

    OK = 0
    FAILED = 1
    ERR_UNAVAILABLE = 2
    ERR_UNCONFIGURED = 3
    ERR_UNAUTHORIZED = 4
    ERR_PARAMETER_RANGE_ERROR = 5
    ERR_OUT_OF_MEMORY = 6
    ERR_FILE_NOT_FOUND = 7
    ERR_FILE_BAD_DRIVE = 8
    ERR_FILE_BAD_PATH = 9
    ERR_FILE_NO_PERMISSION = 10
    ERR_FILE_ALREADY_IN_USE = 11
    ERR_FILE_CANT_OPEN = 12
    ERR_FILE_CANT_WRITE = 13
    ERR_FILE_CANT_READ = 14
    ERR_FILE_UNRECOGNIZED = 15
    ERR_FILE_CORRUPT = 16
    ERR_FILE_MISSING_DEPENDENCIES = 17
    ERR_FILE_EOF = 18
    ERR_CANT_OPEN = 19
    ERR_CANT_CREATE = 20
    ERR_QUERY_FAILED = 21
    ERR_ALREADY_IN_USE = 22
    ERR_LOCKED = 23
    ERR_TIMEOUT = 24
    ERR_CANT_CONNECT = 25
    ERR_CANT_RESOLVE = 26
    ERR_CONNECTION_ERROR = 27
    ERR_CANT_ACQUIRE_RESOURCE = 28
    ERR_CANT_FORK = 29
    ERR_INVALID_DATA = 30
    ERR_INVALID_PARAMETER = 31
    ERR_ALREADY_EXISTS = 32
    ERR_DOES_NOT_EXIST = 33
    ERR_DATABASE_CANT_READ = 34
    ERR_DATABASE_CANT_WRITE = 35
    ERR_COMPILATION_FAILED = 36
    ERR_METHOD_NOT_FOUND = 37
    ERR_LINK_FAILED = 38
    ERR_SCRIPT_FAILED = 39
    ERR_CYCLIC_LINK = 40
    ERR_INVALID_DECLARATION = 41
    ERR_DUPLICATE_SYMBOL = 42
    ERR_PARSE_ERROR = 43
    ERR_BUSY = 44
    ERR_SKIP = 45
    ERR_HELP = 46
    ERR_BUG = 47
    ERR_PRINTER_ON_FIRE = 48

    @property
    def description(self) -> str:
        """Human-readable text for the code, as the engine prints it."""
        return _DESCRIPTIONS[self.value]


_DESCRIPTIONS = (
    'OK',
    'Failed',
    'Unavailable',
    'Unconfigured',
    'Unauthorized',
    'Parameter out of range',
    'Out of memory',
    'File not found',
    'File: Bad drive',
    'File: Bad path',
    'File: Permission denied',
    'File already in use',
    "Can't open file",
    "Can't write file",
    "Can't read file",
    'File unrecognized',
    'File corrupt',
    'Missing dependencies for file',
    'End of file',
    "Can't open",
    "Can't create",
    'Query failed',
    'Already in use',
    'Locked',
    'Timeout',
    "Can't connect",
    "Can't resolve",
    'Connection error',
    "Can't acquire resource",
    "Can't fork",
    'Invalid data',
    'Invalid parameter',
    'Already exists',
    'Does not exist',
    "Can't read database",
    "Can't write database",
    'Compilation failed',
    'Method not found',
    'Link failed',
    'Script failed',
    'Cyclic link detected',
    'Invalid declaration',
    'Duplicate symbol',
    'Parse error',
    'Resource is busy',
    'Skip error',
    'Help error',
    'Bug',
    'Printer on fire',
)

CUSTOM_KIND_START = len(_DESCRIPTIONS)
"""First kind value outside the host-reserved range; user kinds start here."""


class ErrorKind(IntEnum):
    """Custom kinds used by gdoptional itself.

    Applications extend the custom range with their own ints above these.
    """

    OTHER = CUSTOM_KIND_START
    NOT_CONTAINED = CUSTOM_KIND_START + 1
    MISSING_FIELDS = CUSTOM_KIND_START + 2


class ReportLevel(IntEnum):
    """Severity sinks an Error can be reported to."""

    INFO = 0
    WARNING = 1
    ERROR = 2
    FATAL = 3


def is_gderror(kind: object) -> bool:
    """Return True if ``kind`` is an int in the host-reserved range."""
    return isinstance(kind, int) and not isinstance(kind, bool) and 0 <= kind < CUSTOM_KIND_START


def kind_name(kind: int) -> str:
    """Name of a kind code: the enum member name when known, else the number."""
    if is_gderror(kind):
        return HostError(kind).name
    try:
        return ErrorKind(kind).name
    except ValueError:
        return str(kind)


class Error(msgspec.Struct, frozen=True, gc=False):
    """Immutable structured error.

    Attributes:
        kind: Host error code (see ``HostError``) or a custom kind.
        details: Ordered key/value context gathered at the failure site.
        message: Optional display message.
        cause: Optional underlying cause, usually another Error.
    """

    kind: int
    details: dict[str, Any] = {}
    message: str | None = None
    cause: Any = None

    @classmethod
    def new(cls, kind: int, details: Mapping[str, Any] | None = None) -> ErrorBuilder:
        """Start building an Error of ``kind``."""
        return ErrorBuilder(kind, details)

    @property
    def kind_name(self) -> str:
        """Display name of ``kind``."""
        return kind_name(self.kind)

    def is_gderror(self) -> bool:
        """Return True if this error carries a host-reserved code."""
        return is_gderror(self.kind)

    def report(self, level: ReportLevel | int = ReportLevel.ERROR) -> Self:
        """Emit this error to the log sink matching ``level``.

        INFO, WARNING and ERROR log and return self. FATAL logs and then
        panics. Any other level is reported as a warning and the error
        falls through to the error sink.

        Raises:
            Panic: When ``level`` is ``ReportLevel.FATAL``.
        """
        log = get_logger()
        text = str(self)
        try:
            resolved = ReportLevel(level)
        except ValueError:
            log.warning('Unknown report level, falling back to error', report_level=level)
            resolved = ReportLevel.ERROR

        match resolved:
            case ReportLevel.INFO:
                log.info(text, kind=self.kind)
            case ReportLevel.WARNING:
                log.warning(text, kind=self.kind)
            case ReportLevel.ERROR:
                log.error(text, kind=self.kind)
            case ReportLevel.FATAL:
                panic(text, kind=self.kind)
        return self

    def __str__(self) -> str:
        text = f'{self.kind_name} {self.details}'
        if self.message:
            text = f'{self.message}: {text}'
        if self.cause is not None:
            text = f'{text}\nCaused by: {self.cause}'
        return text


class ErrorBuilder:
    """Mutable accumulator for an Error.

    Each builder call mutates in place and returns the builder so calls can be
    chained; ``build()`` takes an immutable snapshot.
    """

    __slots__ = ('_cause', '_details', '_kind', '_message')

    def __init__(self, kind: int, details: Mapping[str, Any] | None = None) -> None:
        self._kind = kind
        self._details: dict[str, Any] = dict(details) if details else {}
        self._message: str | None = None
        self._cause: Any = None

    def msg(self, message: str) -> Self:
        """Set the display message."""
        self._message = message
        return self

    def cause(self, cause: object) -> Self:
        """Set the underlying cause.

        A builder given as a cause is built immediately, so later changes to it
        do not leak into this error.

        Raises:
            ValueError: If ``cause`` is this builder.
        """
        if cause is self:
            msg = 'An error cannot be its own cause'
            raise ValueError(msg)
        if isinstance(cause, ErrorBuilder):
            cause = cause.build()
        self._cause = cause
        return self

    def info(self, key: str, value: Any) -> Self:
        """Add or overwrite one detail entry."""
        self._details[key] = value
        return self

    def build(self) -> Error:
        """Freeze the accumulated state into an Error."""
        return Error(
            kind=self._kind,
            details=dict(self._details),
            message=self._message,
            cause=self._cause,
        )

    def report(self, level: ReportLevel | int = ReportLevel.ERROR) -> Error:
        """Build and report in one step; returns the built Error."""
        return self.build().report(level)
