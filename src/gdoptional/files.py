"""File helpers that report failures as ``Err(Error)`` instead of raising."""

from __future__ import annotations

import re
from pathlib import Path
from typing import IO, Any

import msgspec

from gdoptional.error import Error, HostError
from gdoptional.result import Err, Ok, Result

__all__ = ['open_file', 'parse_json_file']

_BYTE_OFFSET = re.compile(r'\(byte (\d+)\)')


def _open_error_kind(exc: OSError) -> HostError:
    if isinstance(exc, FileNotFoundError):
        return HostError.ERR_FILE_NOT_FOUND
    if isinstance(exc, PermissionError):
        return HostError.ERR_FILE_NO_PERMISSION
    return HostError.ERR_FILE_CANT_OPEN


def open_file(path: str | Path, mode: str = 'r') -> Result[IO[Any], Error]:
    """Open ``path`` with ``mode``.

    Returns:
        Ok(file object) on success. On failure, Err(Error) whose kind is
        ERR_FILE_NOT_FOUND, ERR_FILE_NO_PERMISSION or ERR_FILE_CANT_OPEN, with
        the path under the ``path`` detail.
    """
    try:
        handle = Path(path).open(mode)  # noqa: SIM115
    except OSError as exc:
        return Err(
            Error.new(_open_error_kind(exc), {'path': str(path)})
            .msg(exc.strerror or str(exc))
            .build()
        )
    return Ok(handle)


def _line_of(data: bytes, message: str) -> int:
    """1-based line of the byte offset msgspec names in ``message`` (0 if none)."""
    match = _BYTE_OFFSET.search(message)
    if match is None:
        return 0
    return data.count(b'\n', 0, int(match.group(1))) + 1


def parse_json_file(path: str | Path) -> Result[Any, Error]:
    """Read ``path`` and decode it as JSON.

    Returns:
        Ok(decoded value), the open failure from ``open_file``, an
        ERR_FILE_CANT_READ error if reading fails, or an ERR_PARSE_ERROR error
        with ``line`` and ``message`` details if the content is not valid JSON.
    """
    opened = open_file(path, 'rb')
    if opened.is_err():
        return opened

    with opened.value as handle:
        try:
            data = handle.read()
        except OSError as exc:
            return Err(
                Error.new(HostError.ERR_FILE_CANT_READ, {'path': str(path)})
                .msg(exc.strerror or str(exc))
                .build()
            )

    try:
        return Ok(msgspec.json.decode(data))
    except msgspec.DecodeError as exc:
        message = str(exc)
        return Err(
            Error.new(
                HostError.ERR_PARSE_ERROR,
                {'path': str(path), 'line': _line_of(data, message), 'message': message},
            ).build()
        )
