from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, TypeAlias

from stackwire.exceptions import StackwireInvalidArgumentError

PropertyInput: TypeAlias = Any
"""A property value or a plain Python value convertible to one."""


class PropertyKind(str, Enum):
    """Defines the variant held by a property value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    MAP = "map"


class PropertyValue:
    """Base class for immutable resource input values.

    Concrete values are ``String``, ``Number``, ``Boolean`` and ``Map``. Instances
    are write-once, hashable and compared by value.
    """

    __slots__ = ()

    kind: ClassVar[PropertyKind]

    def to_python(self) -> Any:
        """Return the plain Python equivalent of this value."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class String(PropertyValue):
    """A string property value. Empty strings are allowed."""

    kind: ClassVar[PropertyKind] = PropertyKind.STRING

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            msg = f"String value must be a str, got {type(self.value).__name__}."
            raise StackwireInvalidArgumentError(msg)

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Number(PropertyValue):
    """A finite number property value with float64 semantics."""

    kind: ClassVar[PropertyKind] = PropertyKind.NUMBER

    value: float

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            msg = f"Number value must be an int or float, got {type(value).__name__}."
            raise StackwireInvalidArgumentError(msg)
        try:
            number = float(value)
        except OverflowError:
            msg = f"Number value must be finite, got an int too large for float64 ({value.bit_length()} bits)."
            raise StackwireInvalidArgumentError(msg) from None
        if not math.isfinite(number):
            msg = f"Number value must be finite, got {value!r}."
            raise StackwireInvalidArgumentError(msg)
        object.__setattr__(self, "value", number)

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class Boolean(PropertyValue):
    """A boolean property value."""

    kind: ClassVar[PropertyKind] = PropertyKind.BOOLEAN

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            msg = f"Boolean value must be a bool, got {type(self.value).__name__}."
            raise StackwireInvalidArgumentError(msg)

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class Map(PropertyValue):
    """A string-keyed map of property values.

    ``entries`` may be a mapping or an iterable of ``(key, value)`` pairs. Keys
    must be non-empty strings and unique; plain values are converted with
    ``to_property_value``. After construction ``entries`` is a read-only view.
    """

    kind: ClassVar[PropertyKind] = PropertyKind.MAP

    entries: Mapping[str, PropertyValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        raw_entries = self.entries
        if isinstance(raw_entries, Map):
            raw_entries = raw_entries.entries
        pairs = raw_entries.items() if isinstance(raw_entries, Mapping) else raw_entries

        converted: dict[str, PropertyValue] = {}
        try:
            iterator = iter(pairs)
        except TypeError:
            msg = f"Map entries must be a mapping or (key, value) pairs, got {type(raw_entries).__name__}."
            raise StackwireInvalidArgumentError(msg) from None

        for pair in iterator:
            if not isinstance(pair, tuple) or len(pair) != 2:  # noqa: PLR2004
                msg = f"Map entries must be (key, value) pairs, got {pair!r}."
                raise StackwireInvalidArgumentError(msg)
            key, value = pair
            if not isinstance(key, str) or not key:
                msg = f"Map keys must be non-empty strings, got {key!r}."
                raise StackwireInvalidArgumentError(msg)
            if key in converted:
                msg = f"Duplicate map key {key!r}."
                raise StackwireInvalidArgumentError(msg, field=key)
            converted[key] = self._convert_entry(key, value)

        object.__setattr__(self, "entries", MappingProxyType(converted))

    def _convert_entry(self, key: str, value: PropertyInput) -> PropertyValue:
        try:
            return to_property_value(value)
        except StackwireInvalidArgumentError as error:
            raise StackwireInvalidArgumentError(
                f"Invalid value for map key {key!r}: {error}",
                field=_join_field(key, error.field),
            ) from error

    def __hash__(self) -> int:
        return hash((type(self), frozenset(self.entries.items())))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return type(self) is type(other) and dict(self.entries) == dict(other.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, key: str) -> PropertyValue:
        return self.entries[key]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.entries)!r})"

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.entries.items()}


class StringMap(Map):
    """A map whose values are all strings."""

    __slots__ = ()

    def _convert_entry(self, key: str, value: PropertyInput) -> PropertyValue:
        if isinstance(value, str):
            return String(value)
        if isinstance(value, String):
            return value
        msg = f"StringMap value for key {key!r} must be a string, got {type(value).__name__}."
        raise StackwireInvalidArgumentError(msg, field=key)


def to_property_value(value: PropertyInput) -> PropertyValue:
    """Convert a plain Python value into a property value.

    Args:
        value: A ``PropertyValue`` (returned unchanged), ``bool``, ``int``,
            ``float``, ``str`` or a string-keyed mapping.

    Returns:
        The matching immutable property value.

    Raises:
        StackwireInvalidArgumentError: If the value has no property value
            counterpart or fails value validation.

    """
    if isinstance(value, PropertyValue):
        return value
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, (int, float)):
        return Number(value)
    if isinstance(value, str):
        return String(value)
    if isinstance(value, Mapping):
        return Map(value)
    msg = f"Cannot convert {type(value).__name__} to a property value."
    raise StackwireInvalidArgumentError(msg)


def _join_field(prefix: str, suffix: str | None) -> str:
    if not suffix:
        return prefix
    return f"{prefix}.{suffix}"
