from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TypeVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stackwire.exceptions import StackwireConfigMissingError, StackwireConfigTypeError

T = TypeVar("T")

_TRUE_VALUES = frozenset({"true"})
_FALSE_VALUES = frozenset({"false"})


class RunSettings(BaseSettings):
    """Run-scoped settings read from keyword arguments or ``STACKWIRE_*`` variables.

    ``config`` holds configuration values keyed ``<namespace>:<key>``; from the
    environment it is given as a JSON object in ``STACKWIRE_CONFIG``.
    """

    model_config = SettingsConfigDict(env_prefix="STACKWIRE_", frozen=True, extra="ignore")

    project: str = Field(default="project", min_length=1)
    stack: str = Field(default="dev", min_length=1)
    config: dict[str, str] = Field(default_factory=dict)

    @field_validator("project", "stack")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return value


class Config:
    """Read-only view over run configuration values within one namespace.

    Bare keys are looked up as ``<namespace>:<key>``; keys that already contain
    ``:`` are used as is.
    """

    def __init__(self, values: Mapping[str, str], namespace: str) -> None:
        self._values = MappingProxyType(dict(values))
        self.namespace = namespace

    def full_key(self, key: str) -> str:
        if ":" in key:
            return key
        return f"{self.namespace}:{key}"

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(self.full_key(key), default)

    def require(self, key: str) -> str:
        """Return the value for key or raise ``StackwireConfigMissingError``."""
        full_key = self.full_key(key)
        value = self._values.get(full_key)
        if value is None:
            msg = f"Missing required configuration value {full_key!r}."
            raise StackwireConfigMissingError(msg, key=full_key)
        return value

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        return self._get_typed(key, default, _parse_bool, "bool")

    def get_int(self, key: str, default: int | None = None) -> int | None:
        return self._get_typed(key, default, int, "int")

    def get_float(self, key: str, default: float | None = None) -> float | None:
        return self._get_typed(key, default, float, "float")

    def require_bool(self, key: str) -> bool:
        return self._convert(key, self.require(key), _parse_bool, "bool")

    def require_int(self, key: str) -> int:
        return self._convert(key, self.require(key), int, "int")

    def require_float(self, key: str) -> float:
        return self._convert(key, self.require(key), float, "float")

    def _get_typed(
        self,
        key: str,
        default: T | None,
        parse: Callable[[str], T],
        expected: str,
    ) -> T | None:
        raw = self.get(key)
        if raw is None:
            return default
        return self._convert(key, raw, parse, expected)

    def _convert(self, key: str, raw: str, parse: Callable[[str], T], expected: str) -> T:
        try:
            return parse(raw)
        except ValueError:
            full_key = self.full_key(key)
            msg = f"Configuration value {full_key!r} is not a valid {expected}: {raw!r}."
            raise StackwireConfigTypeError(msg, key=full_key, expected=expected) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.full_key(key) in self._values

    def __repr__(self) -> str:
        return f"Config(namespace={self.namespace!r}, keys={sorted(self._values)!r})"


def _parse_bool(raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    msg = f"invalid boolean literal {raw!r}"
    raise ValueError(msg)
