from __future__ import annotations

from collections.abc import Iterator

from stackwire.exceptions import StackwireDuplicateNameError
from stackwire.resources import ResourceDescriptor


class DeclarationRegistry:
    """Ordered collection of resource descriptors keyed by logical name.

    Insertion order is the declaration order of the program and is preserved by
    iteration and ``descriptors``. A registry is owned by one execution context.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, ResourceDescriptor] = {}

    def add(self, descriptor: ResourceDescriptor) -> None:
        """Append a descriptor, rejecting a logical name that is already present."""
        if descriptor.name in self._descriptors:
            raise _duplicate_name_error(descriptor.name)
        self._descriptors[descriptor.name] = descriptor

    def ensure_available(self, name: str) -> None:
        """Raise ``StackwireDuplicateNameError`` when name is already registered."""
        if name in self._descriptors:
            raise _duplicate_name_error(name)

    def get(self, name: str) -> ResourceDescriptor | None:
        return self._descriptors.get(name)

    def descriptors(self) -> tuple[ResourceDescriptor, ...]:
        """Return a snapshot of all descriptors in insertion order."""
        return tuple(self._descriptors.values())

    def names(self) -> tuple[str, ...]:
        return tuple(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[ResourceDescriptor]:
        return iter(self.descriptors())

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"DeclarationRegistry(names={list(self._descriptors)!r})"


def _duplicate_name_error(name: str) -> StackwireDuplicateNameError:
    msg = f"Resource name {name!r} is already declared in this run."
    return StackwireDuplicateNameError(msg, name=name)
