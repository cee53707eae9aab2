"""Sealed tagged-variant catalogues: EnumStruct, EnumVariant and EnumDict.

A catalogue is declared with a builder and sealed by ``build()``; the built
object exposes read-only views only, so the set of variants cannot change
afterwards.

Example:
    ```python
    from gdoptional import EnumStruct

    Action = (
        EnumStruct.builder()
        .add('Idle')
        .add('Move', {'x': 0, 'y': 0})
        .add('Attack', {'target': None, 'combo': {'hits': 1}})
        .build()
    )

    move = Action.variant('Move', {'x': 3})
    Action.contains(move)  # Ok(EnumVariant(tag='Move', fields={'x': 3, 'y': 0}))
    ```
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Self

import msgspec

from gdoptional.error import Error, ErrorKind
from gdoptional.option import Option
from gdoptional.result import Err, Ok, Result

__all__ = [
    'EnumDict',
    'EnumDictBuilder',
    'EnumStruct',
    'EnumStructBuilder',
    'EnumVariant',
]


def _deep_merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``overrides`` into ``base`` in place, recursing into nested mappings."""
    for key, value in overrides.items():
        current = base.get(key)
        if isinstance(value, Mapping):
            if not isinstance(current, dict):
                current = base[key] = {}
            _deep_merge(current, value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def _freeze(value: Any) -> Any:
    """Read-only view of a schema default: mappings become proxies, lists tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list | tuple):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, set):
        return frozenset(value)
    return value


class EnumVariant(msgspec.Struct, frozen=True):
    """An instance of one EnumStruct variant: a tag plus its field values."""

    tag: str
    fields: dict[str, Any] = {}

    def is_variant(self, tag: str) -> bool:
        return self.tag == tag

    def get(self, name: str) -> Option[Any]:
        """Field value as an Option; Nothing if the field is absent."""
        return Option.dict_get(self.fields, name)

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]


class EnumStructBuilder:
    """Collects variant declarations until ``build()`` seals them."""

    __slots__ = ('_built', '_variants')

    def __init__(self) -> None:
        self._variants: dict[str, dict[str, Any]] = {}
        self._built = False

    def _ensure_open(self) -> None:
        if self._built:
            msg = 'EnumStruct already built; start a new builder'
            raise RuntimeError(msg)

    def add(self, name: str, fields: Mapping[str, Any] | None = None) -> Self:
        """Declare variant ``name`` with a schema of field defaults.

        Raises:
            ValueError: If ``name`` was already declared.
            RuntimeError: If the builder was already built.
        """
        self._ensure_open()
        if name in self._variants:
            msg = f'Variant {name!r} is already declared'
            raise ValueError(msg)
        self._variants[name] = copy.deepcopy(dict(fields or {}))
        return self

    def build(self) -> EnumStruct:
        """Seal the catalogue. The builder cannot be used afterwards."""
        self._ensure_open()
        self._built = True
        return EnumStruct(self._variants)


class EnumStruct:
    """A sealed catalogue of named variants and their field schemas."""

    __slots__ = ('_defaults', '_variants')

    def __init__(self, variants: Mapping[str, Mapping[str, Any]]) -> None:
        # Private copies feed variant(); callers only ever see the frozen views.
        self._defaults = {name: copy.deepcopy(dict(schema)) for name, schema in variants.items()}
        self._variants: Mapping[str, Mapping[str, Any]] = MappingProxyType(
            {name: _freeze(schema) for name, schema in self._defaults.items()}
        )

    @staticmethod
    def builder() -> EnumStructBuilder:
        """Start declaring a new catalogue."""
        return EnumStructBuilder()

    def names(self) -> tuple[str, ...]:
        """Variant names in declaration order."""
        return tuple(self._variants)

    def fields(self, name: str) -> Option[Mapping[str, Any]]:
        """Read-only schema of variant ``name``, frozen all the way down."""
        return Option.dict_get(self._variants, name)

    def variant(self, name: str, overrides: Mapping[str, Any] | None = None) -> EnumVariant:
        """Instantiate variant ``name``: schema defaults deep-merged with ``overrides``.

        Raises:
            KeyError: If ``name`` is not a declared variant.
        """
        schema = self._defaults.get(name)
        if schema is None:
            msg = f'Unknown variant {name!r}'
            raise KeyError(msg)
        fields = copy.deepcopy(schema)
        return EnumVariant(name, _deep_merge(fields, overrides or {}))

    def contains(self, instance: EnumVariant) -> Result[EnumVariant, Error]:
        """Check that ``instance`` belongs to this catalogue.

        Returns:
            Ok(instance) when its tag is declared and every schema field is
            present; Err(ErrorKind.NOT_CONTAINED) for an unknown tag;
            Err(ErrorKind.MISSING_FIELDS) listing absent fields otherwise.
        """
        if not isinstance(instance, EnumVariant):
            return Err(
                Error.new(ErrorKind.NOT_CONTAINED, {'type': type(instance).__name__})
                .msg('Not an enum variant')
                .build()
            )
        schema = self._variants.get(instance.tag)
        if schema is None:
            return Err(
                Error.new(ErrorKind.NOT_CONTAINED, {'variant': instance.tag})
                .msg('Variant is not part of this enum')
                .build()
            )
        missing = [name for name in schema if name not in instance.fields]
        if missing:
            return Err(
                Error.new(ErrorKind.MISSING_FIELDS, {'variant': instance.tag, 'missing': missing})
                .msg('Variant is missing declared fields')
                .build()
            )
        return Ok(instance)

    def __contains__(self, name: object) -> bool:
        return name in self._variants

    def __iter__(self) -> Iterator[str]:
        return iter(self._variants)

    def __len__(self) -> int:
        return len(self._variants)

    def __repr__(self) -> str:
        return f'EnumStruct({", ".join(self._variants)})'


class EnumDictBuilder:
    """Collects name/value pairs until ``build()`` seals them.

    Names added without a value are numbered like a plain enum: one more than
    the previous int value, starting at 0.
    """

    __slots__ = ('_built', '_entries', '_next')

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}
        self._next = 0
        self._built = False

    def add(self, name: str, value: Any = None) -> Self:
        """Declare ``name``; ``value`` defaults to the next auto number.

        Raises:
            ValueError: If ``name`` was already declared.
            RuntimeError: If the builder was already built.
        """
        if self._built:
            msg = 'EnumDict already built; start a new builder'
            raise RuntimeError(msg)
        if name in self._entries:
            msg = f'Key {name!r} is already declared'
            raise ValueError(msg)
        if value is None:
            value = self._next
        if isinstance(value, int) and not isinstance(value, bool):
            self._next = value + 1
        self._entries[name] = value
        return self

    def build(self) -> EnumDict:
        """Seal the catalogue. The builder cannot be used afterwards."""
        if self._built:
            msg = 'EnumDict already built; start a new builder'
            raise RuntimeError(msg)
        self._built = True
        return EnumDict(self._entries)


class EnumDict:
    """A sealed, ordered name to value catalogue."""

    __slots__ = ('_entries',)

    def __init__(self, entries: Mapping[str, Any]) -> None:
        self._entries: Mapping[str, Any] = MappingProxyType(dict(entries))

    @staticmethod
    def builder() -> EnumDictBuilder:
        """Start declaring a new catalogue."""
        return EnumDictBuilder()

    @classmethod
    def from_names(cls, *names: str) -> EnumDict:
        """Catalogue numbering ``names`` 0, 1, 2, ..."""
        builder = EnumDictBuilder()
        for name in names:
            builder.add(name)
        return builder.build()

    def get(self, name: str) -> Option[Any]:
        return Option.dict_get(self._entries, name)

    def find_key(self, value: Any) -> Option[str]:
        """First name whose value equals ``value``."""
        for name, candidate in self._entries.items():
            if candidate == value:
                return Option.some(name)
        return Option.none()

    def keys(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def values(self) -> tuple[Any, ...]:
        return tuple(self._entries.values())

    def items(self) -> tuple[tuple[str, Any], ...]:
        return tuple(self._entries.items())

    def __getitem__(self, name: str) -> Any:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f'EnumDict({dict(self._entries)!r})'
