from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from typing_extensions import Self

from stackwire._internal.naming import build_urn
from stackwire.config import Config, RunSettings
from stackwire.exceptions import (
    StackwireContextClosedError,
    StackwireDuplicateNameError,
    StackwireInvalidArgumentError,
)
from stackwire.registry import DeclarationRegistry
from stackwire.resources import (
    ProviderResource,
    Resource,
    ResourceArgs,
    ResourceDescriptor,
    ResourceOptions,
)
from stackwire.values import PropertyValue, to_property_value

logger = logging.getLogger(__name__)


class ExecutionContext:
    """Handle passed to a program for the lifetime of one run.

    The context owns the declaration registry, the exported stack outputs and the
    run settings. It is created by ``RunDriver`` and closed when the run ends;
    a closed context rejects new declarations and exports.

    The context is never stored globally. Programs receive it explicitly and pass
    it to every resource constructor.
    """

    def __init__(self, settings: RunSettings | None = None) -> None:
        self.settings = settings if settings is not None else RunSettings()
        self.registry = DeclarationRegistry()
        self._outputs: dict[str, PropertyValue] = {}
        self._closed = False

    @property
    def project(self) -> str:
        return self.settings.project

    @property
    def stack(self) -> str:
        return self.settings.stack

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def outputs(self) -> Mapping[str, PropertyValue]:
        """Return a read-only view of exported outputs in export order."""
        return MappingProxyType(self._outputs)

    def config(self, namespace: str | None = None) -> Config:
        """Return configuration scoped to namespace, defaulting to the project name."""
        return Config(self.settings.config, namespace or self.project)

    def register_resource(
        self,
        type_token: str,
        name: str,
        args: ResourceArgs | Mapping[str, Any] | None = None,
        opts: ResourceOptions | None = None,
        *,
        args_type: type[ResourceArgs] = ResourceArgs,
    ) -> ResourceDescriptor:
        """Validate and append one resource declaration.

        Checks run in order and the first failure wins: the logical name must be
        a non-empty string, it must not be registered yet, and every provided
        argument and option must be valid. The registry is unchanged on failure.

        Args:
            type_token: Type token of the constructor producing the declaration.
            name: Logical name, unique within this context.
            args: An ``args_type`` instance, a plain mapping of input names to
                values, or ``None`` for no inputs.
            opts: Optional relations to resources already declared in this context.
            args_type: The args record type the constructor declares.

        Returns:
            The registered descriptor.

        Raises:
            StackwireContextClosedError: If the run owning this context ended.
            StackwireInvalidArgumentError: If the name is empty or an argument or
                option is invalid.
            StackwireDuplicateNameError: If the name is already registered.

        """
        self._ensure_open()

        if not isinstance(name, str) or not name:
            msg = f"Resource name must be a non-empty string, got {name!r}."
            raise StackwireInvalidArgumentError(msg)
        self.registry.ensure_available(name)

        inputs = self._build_inputs(type_token, args, args_type)
        parent, provider, depends_on = self._resolve_options(opts)

        descriptor = ResourceDescriptor(
            name=name,
            type_token=type_token,
            inputs=MappingProxyType(inputs),
            urn=build_urn(
                stack=self.stack,
                project=self.project,
                type_token=type_token,
                name=name,
            ),
            parent=parent,
            provider=provider,
            depends_on=depends_on,
        )
        self.registry.add(descriptor)
        logger.debug("Registered resource %r of type %s", name, type_token)
        return descriptor

    def export(self, name: str, value: Any) -> PropertyValue:
        """Record a named stack output and return it as a property value."""
        self._ensure_open()
        if not isinstance(name, str) or not name:
            msg = f"Output name must be a non-empty string, got {name!r}."
            raise StackwireInvalidArgumentError(msg)
        if name in self._outputs:
            msg = f"Output {name!r} is already exported in this run."
            raise StackwireDuplicateNameError(msg, name=name)

        try:
            property_value = to_property_value(value)
        except StackwireInvalidArgumentError as error:
            raise StackwireInvalidArgumentError(
                f"Invalid value for output {name!r}: {error}",
                field=name,
            ) from error

        self._outputs[name] = property_value
        logger.debug("Exported output %r", name)
        return property_value

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            msg = "Execution context is closed; declare resources only while the run is active."
            raise StackwireContextClosedError(msg)

    def _build_inputs(
        self,
        type_token: str,
        args: ResourceArgs | Mapping[str, Any] | None,
        args_type: type[ResourceArgs],
    ) -> dict[str, PropertyValue]:
        if args is None:
            return {}
        if isinstance(args, Mapping):
            args = _args_from_mapping(type_token, args, args_type)
        if isinstance(args, ResourceArgs):
            if not isinstance(args, args_type):
                msg = (
                    f"Resource type {type_token} expects {args_type.__name__}, "
                    f"got {type(args).__name__}."
                )
                raise StackwireInvalidArgumentError(msg)
            return args.to_inputs()

        msg = f"Resource args must be a ResourceArgs record or a mapping, got {type(args).__name__}."
        raise StackwireInvalidArgumentError(msg)

    def _resolve_options(
        self,
        opts: ResourceOptions | None,
    ) -> tuple[str | None, str | None, tuple[str, ...]]:
        if opts is None:
            return None, None, ()
        if not isinstance(opts, ResourceOptions):
            msg = f"Resource options must be ResourceOptions, got {type(opts).__name__}."
            raise StackwireInvalidArgumentError(msg)

        parent = self._owned_name(opts.parent, "parent") if opts.parent is not None else None

        provider = None
        if opts.provider is not None:
            if not isinstance(opts.provider, ProviderResource):
                msg = f"Option 'provider' must be a provider resource, got {opts.provider!r}."
                raise StackwireInvalidArgumentError(msg, field="provider")
            provider = self._owned_name(opts.provider, "provider")

        depends_on = tuple(self._owned_name(dependency, "depends_on") for dependency in opts.depends_on)
        return parent, provider, depends_on

    def _owned_name(self, resource: Resource, option: str) -> str:
        if not isinstance(resource, Resource):
            msg = f"Option {option!r} must reference a resource, got {resource!r}."
            raise StackwireInvalidArgumentError(msg, field=option)
        if self.registry.get(resource.name) is not resource.descriptor:
            msg = f"Option {option!r} references {resource.name!r}, which is not declared in this run."
            raise StackwireInvalidArgumentError(msg, field=option)
        return resource.name


def _args_from_mapping(
    type_token: str,
    args: Mapping[str, Any],
    args_type: type[ResourceArgs],
) -> ResourceArgs:
    field_names = {args_field.name for args_field in dataclasses.fields(args_type)}
    for key in args:
        if key not in field_names:
            msg = f"Resource type {type_token} has no input field {key!r}; expected one of {sorted(field_names)}."
            raise StackwireInvalidArgumentError(msg, field=key if isinstance(key, str) else None)
    return args_type(**args)
