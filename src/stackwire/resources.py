from __future__ import annotations

import dataclasses
import types
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, Union, get_args, get_origin, get_type_hints

from stackwire._internal.naming import is_valid_type_token, to_input_name
from stackwire.exceptions import (
    StackwireInvalidArgumentError,
    StackwireInvalidResourceTypeError,
)
from stackwire.values import Boolean, Map, Number, PropertyValue, String, to_property_value

if TYPE_CHECKING:
    from stackwire.context import ExecutionContext

INPUT_NAME_METADATA_KEY = "stackwire_input_name"
"""Dataclass field metadata key overriding the derived camelCase input name."""

_PLAIN_VALUE_TYPES: dict[type, type[PropertyValue]] = {
    str: String,
    bool: Boolean,
    int: Number,
    float: Number,
    dict: Map,
}


@dataclass(frozen=True, kw_only=True)
class ResourceArgs:
    """Base class for typed resource argument records.

    Generated SDKs declare one keyword-only dataclass per resource type. Every
    field is optional by omission: a field left as ``None`` is absent from the
    descriptor inputs. Field names are converted to camelCase input names
    (``object_prop`` -> ``objectProp``) unless the field metadata sets
    ``INPUT_NAME_METADATA_KEY``.

    A field annotation fixes the property value type of its input. Plain Python
    values are converted to that type; a value of another kind is rejected.
    """

    def to_inputs(self) -> dict[str, PropertyValue]:
        """Convert provided fields to named property values in declaration order.

        Raises:
            StackwireInvalidArgumentError: If a field value cannot be converted
                or does not match the field's declared property value type.

        """
        inputs: dict[str, PropertyValue] = {}
        for spec in input_specs(type(self)):
            value = getattr(self, spec.field_name)
            if value is None:
                continue
            inputs[spec.input_name] = spec.convert(value)
        return inputs


@dataclass(frozen=True, slots=True)
class InputSpec:
    """How one args record field maps to a descriptor input."""

    field_name: str
    input_name: str
    accepted: tuple[type[PropertyValue], ...]
    """Property value types the input accepts. Empty means any property value."""

    def convert(self, value: Any) -> PropertyValue:
        map_types = [value_type for value_type in self.accepted if issubclass(value_type, Map)]
        if len(map_types) == 1 and isinstance(value, Mapping) and not isinstance(value, PropertyValue):
            return convert_input(self.input_name, value, value_type=map_types[0])

        converted = convert_input(self.input_name, value)
        if self.accepted and not isinstance(converted, self.accepted):
            expected = " | ".join(value_type.__name__ for value_type in self.accepted)
            msg = f"Input {self.input_name!r} expects {expected}, got {type(converted).__name__}."
            raise StackwireInvalidArgumentError(msg, field=self.input_name)
        return converted


@lru_cache(maxsize=None)
def input_specs(args_type: type[ResourceArgs]) -> tuple[InputSpec, ...]:
    """Resolve the input specs of an args record type, in field order.

    Raises:
        StackwireInvalidResourceTypeError: If the field annotations cannot be
            resolved or two fields map to the same input name.

    """
    try:
        hints = get_type_hints(args_type)
    except (AttributeError, NameError, TypeError) as error:
        msg = f"Cannot resolve field annotations of {args_type.__qualname__}: {error}"
        raise StackwireInvalidResourceTypeError(msg) from error

    specs: list[InputSpec] = []
    owners: dict[str, str] = {}
    for args_field in dataclasses.fields(args_type):
        input_name = args_field.metadata.get(INPUT_NAME_METADATA_KEY) or to_input_name(args_field.name)
        if input_name in owners:
            msg = (
                f"Args record {args_type.__qualname__} maps fields {owners[input_name]!r} and "
                f"{args_field.name!r} to the same input name {input_name!r}."
            )
            raise StackwireInvalidResourceTypeError(msg)
        owners[input_name] = args_field.name
        specs.append(
            InputSpec(
                field_name=args_field.name,
                input_name=input_name,
                accepted=_accepted_value_types(hints.get(args_field.name, Any)),
            ),
        )
    return tuple(specs)


def _accepted_value_types(annotation: Any) -> tuple[type[PropertyValue], ...]:
    if get_origin(annotation) in (Union, types.UnionType):
        members = get_args(annotation)
    else:
        members = (annotation,)

    accepted: list[type[PropertyValue]] = []
    for member in members:
        if member is type(None):
            continue
        origin = get_origin(member) or member
        if not isinstance(origin, type):
            return ()
        if issubclass(origin, PropertyValue):
            value_type = origin
        elif issubclass(origin, Mapping):
            value_type = Map
        elif origin in _PLAIN_VALUE_TYPES:
            value_type = _PLAIN_VALUE_TYPES[origin]
        else:
            return ()
        if value_type not in accepted:
            accepted.append(value_type)
    return tuple(accepted)


@dataclass(frozen=True)
class ResourceOptions:
    """Relations of a declaration to other resources of the same run.

    ``parent`` and ``depends_on`` accept any resource, ``provider`` only a
    ``ProviderResource``. All of them must have been declared in the same
    execution context.
    """

    parent: Resource | None = None
    provider: ProviderResource | None = None
    depends_on: tuple[Resource, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "depends_on", tuple(self.depends_on))


@dataclass(frozen=True)
class ResourceDescriptor:
    """An immutable record of one resource declaration.

    Created exactly once when a resource constructor succeeds and appended to the
    declaration registry of the owning context.
    """

    name: str
    """The logical name, unique within one run."""
    type_token: str
    """The ``<package>:<module>:<Type>`` token of the constructor that produced it."""
    inputs: Mapping[str, PropertyValue]
    """Read-only mapping of input name to property value. Omitted fields are absent."""
    urn: str
    """The unique resource name combining stack, project, type token and name."""
    parent: str | None = None
    """Logical name of the parent resource, if any."""
    provider: str | None = None
    """Logical name of the explicit provider resource, if any."""
    depends_on: tuple[str, ...] = field(default=())
    """Logical names of explicit dependencies, in declaration order."""

    def to_python(self) -> dict[str, Any]:
        """Return a plain dictionary form suitable for serialization."""
        return {
            "name": self.name,
            "type": self.type_token,
            "urn": self.urn,
            "inputs": {key: value.to_python() for key, value in self.inputs.items()},
            "parent": self.parent,
            "provider": self.provider,
            "dependsOn": list(self.depends_on),
        }


class Resource:
    """Base class for typed resource constructors emitted by SDK generators.

    Subclasses set ``TYPE_TOKEN`` and ``ARGS_TYPE``. Instantiating a subclass
    registers a ``ResourceDescriptor`` in the given execution context or raises
    without registering anything.

    Usage:
        @dataclass(frozen=True, kw_only=True)
        class ThingArgs(ResourceArgs):
            idea: String | str | None = None

        class Thing(Resource):
            TYPE_TOKEN = "thirdparty:index:Thing"
            ARGS_TYPE = ThingArgs

        thing = Thing(ctx, "Other", ThingArgs(idea=String("Support Third Party")))
    """

    TYPE_TOKEN: ClassVar[str]
    ARGS_TYPE: ClassVar[type[ResourceArgs]] = ResourceArgs

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        token = cls.__dict__.get("TYPE_TOKEN")
        if token is not None and not is_valid_type_token(token):
            msg = (
                f"Resource class '{cls.__qualname__}' has invalid TYPE_TOKEN {token!r}; "
                "expected '<package>:<module>:<Type>'."
            )
            raise StackwireInvalidResourceTypeError(msg)

        args_type = cls.ARGS_TYPE
        if not (
            isinstance(args_type, type)
            and issubclass(args_type, ResourceArgs)
            and dataclasses.is_dataclass(args_type)
        ):
            msg = f"Resource class '{cls.__qualname__}' ARGS_TYPE must be a ResourceArgs dataclass, got {args_type!r}."
            raise StackwireInvalidResourceTypeError(msg)

        input_specs(args_type)

    def __init__(
        self,
        ctx: ExecutionContext,
        name: str,
        args: ResourceArgs | Mapping[str, Any] | None = None,
        opts: ResourceOptions | None = None,
    ) -> None:
        token = getattr(type(self), "TYPE_TOKEN", None)
        if token is None:
            msg = f"Resource class '{type(self).__qualname__}' does not define TYPE_TOKEN."
            raise StackwireInvalidResourceTypeError(msg)

        self._descriptor = ctx.register_resource(
            token,
            name,
            args,
            opts,
            args_type=type(self).ARGS_TYPE,
        )

    @property
    def descriptor(self) -> ResourceDescriptor:
        return self._descriptor

    @property
    def name(self) -> str:
        return self._descriptor.name

    @property
    def type_token(self) -> str:
        return self._descriptor.type_token

    @property
    def inputs(self) -> Mapping[str, PropertyValue]:
        return self._descriptor.inputs

    @property
    def urn(self) -> str:
        return self._descriptor.urn

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, type_token={self.type_token!r})"


class ProviderResource(Resource):
    """Base class for provider resources.

    A provider is a pluggable backend that realizes other declarations. Only
    instances of this class are accepted as ``ResourceOptions.provider``.
    """


def convert_input(
    input_name: str,
    value: Any,
    *,
    value_type: type[Map] | None = None,
) -> PropertyValue:
    """Convert one named input, prefixing error field paths with the input name.

    When value_type is given the value is built with that map type instead of
    ``to_property_value``.
    """
    try:
        if value_type is not None:
            return value_type(value)
        return to_property_value(value)
    except StackwireInvalidArgumentError as error:
        field_path = input_name if not error.field else f"{input_name}.{error.field}"
        raise StackwireInvalidArgumentError(
            f"Invalid value for input {input_name!r}: {error}",
            field=field_path,
        ) from error
