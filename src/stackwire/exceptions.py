from __future__ import annotations


class StackwireError(Exception):
    """Represent a base class for all stackwire-specific failures.

    Catch this type when you want to handle any stackwire error path without
    matching each concrete exception class individually.
    """


class StackwireInvalidArgumentError(StackwireError):
    """Signal a malformed or out-of-range property value or resource argument.

    Raised by property value constructors (``String``, ``Number``, ``Boolean``,
    ``Map``, ``StringMap``), by ``to_property_value`` and by
    ``ExecutionContext.register_resource`` when a logical name is empty, when an
    args field cannot be converted, or when resource options reference a
    resource that does not belong to the same context.

    Typical fixes include passing finite numbers, string map keys, and args
    records of the type the resource class declares.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class StackwireDuplicateNameError(StackwireError):
    """Signal a logical name collision within one execution context.

    Raised by ``ExecutionContext.register_resource`` when a resource with the
    same logical name was already declared in the run, and by
    ``ExecutionContext.export`` for a repeated output name.

    Typical fix is choosing a unique logical name per declaration.
    """

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name


class StackwireInvalidResourceTypeError(StackwireError):
    """Signal an invalid resource class definition.

    Raised when a ``Resource`` subclass is defined with a malformed
    ``TYPE_TOKEN`` (expected ``<package>:<module>:<Type>``) or an ``ARGS_TYPE``
    that is not a ``ResourceArgs`` dataclass.
    """


class StackwireContextClosedError(StackwireError):
    """Signal use of an execution context after its run has ended.

    Raised by ``register_resource`` and ``export`` when the owning run already
    finished. Typical fix is declaring resources only from inside the program
    passed to ``RunDriver.run``.
    """


class StackwireRunStateError(StackwireError):
    """Signal an invalid run driver state transition.

    Raised by ``RunDriver.run`` when the driver already left ``NOT_STARTED``.
    Typical fix is creating a fresh ``RunDriver`` for every run.
    """


class StackwireConfigError(StackwireError):
    """Represent a base class for configuration lookup failures."""


class StackwireConfigMissingError(StackwireConfigError):
    """Signal that a required configuration key has no value.

    Raised by ``Config.require`` and the typed ``require_*`` helpers.

    Typical fix is providing the value through ``RunSettings(config=...)`` or
    the ``STACKWIRE_CONFIG`` environment variable.
    """

    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message)
        self.key = key


class StackwireConfigTypeError(StackwireConfigError):
    """Signal that a configuration value cannot be parsed as the requested type.

    Raised by ``Config.get_bool``, ``Config.get_int``, ``Config.get_float`` and
    their ``require_*`` variants.
    """

    def __init__(self, message: str, *, key: str, expected: str) -> None:
        super().__init__(message)
        self.key = key
        self.expected = expected
