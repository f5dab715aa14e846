from stackwire.config import Config, RunSettings
from stackwire.context import ExecutionContext
from stackwire.exceptions import (
    StackwireConfigError,
    StackwireConfigMissingError,
    StackwireConfigTypeError,
    StackwireContextClosedError,
    StackwireDuplicateNameError,
    StackwireError,
    StackwireInvalidArgumentError,
    StackwireInvalidResourceTypeError,
    StackwireRunStateError,
)
from stackwire.registry import DeclarationRegistry
from stackwire.resources import (
    ProviderResource,
    Resource,
    ResourceArgs,
    ResourceDescriptor,
    ResourceOptions,
)
from stackwire.run import Program, RunDriver, RunOutcome, RunState, run
from stackwire.values import (
    Boolean,
    Map,
    Number,
    PropertyKind,
    PropertyValue,
    String,
    StringMap,
    to_property_value,
)

__all__ = [
    "Boolean",
    "Config",
    "DeclarationRegistry",
    "ExecutionContext",
    "Map",
    "Number",
    "Program",
    "PropertyKind",
    "PropertyValue",
    "ProviderResource",
    "Resource",
    "ResourceArgs",
    "ResourceDescriptor",
    "ResourceOptions",
    "RunDriver",
    "RunOutcome",
    "RunSettings",
    "RunState",
    "StackwireConfigError",
    "StackwireConfigMissingError",
    "StackwireConfigTypeError",
    "StackwireContextClosedError",
    "StackwireDuplicateNameError",
    "StackwireError",
    "StackwireInvalidArgumentError",
    "StackwireInvalidResourceTypeError",
    "StackwireRunStateError",
    "String",
    "StringMap",
    "run",
    "to_property_value",
]
