"""Tests for the declaration registry."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from stackwire.exceptions import StackwireDuplicateNameError
from stackwire.registry import DeclarationRegistry
from stackwire.resources import ResourceDescriptor


def _descriptor(name: str) -> ResourceDescriptor:
    return ResourceDescriptor(
        name=name,
        type_token="demo:index:Thing",
        inputs=MappingProxyType({}),
        urn=f"urn:stackwire:dev::demo::demo:index:Thing::{name}",
    )


def test_preserves_insertion_order() -> None:
    registry = DeclarationRegistry()
    names = ["zeta", "alpha", "mid"]

    for name in names:
        registry.add(_descriptor(name))

    assert registry.names() == ("zeta", "alpha", "mid")
    assert [descriptor.name for descriptor in registry] == names
    assert len(registry) == 3


def test_add_rejects_duplicate_name() -> None:
    registry = DeclarationRegistry()
    first = _descriptor("Question")
    registry.add(first)

    with pytest.raises(StackwireDuplicateNameError) as exc_info:
        registry.add(_descriptor("Question"))

    assert exc_info.value.name == "Question"
    assert registry.descriptors() == (first,)


def test_ensure_available() -> None:
    registry = DeclarationRegistry()
    registry.ensure_available("Question")
    registry.add(_descriptor("Question"))

    with pytest.raises(StackwireDuplicateNameError):
        registry.ensure_available("Question")


def test_lookup_and_membership() -> None:
    registry = DeclarationRegistry()
    descriptor = _descriptor("Other")
    registry.add(descriptor)

    assert "Other" in registry
    assert "Missing" not in registry
    assert registry.get("Other") is descriptor
    assert registry.get("Missing") is None


def test_descriptors_is_a_snapshot() -> None:
    registry = DeclarationRegistry()
    registry.add(_descriptor("a"))
    snapshot = registry.descriptors()

    registry.add(_descriptor("b"))

    assert len(snapshot) == 1
    assert len(registry.descriptors()) == 2
