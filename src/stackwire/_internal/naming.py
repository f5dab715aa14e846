from __future__ import annotations

import re

_TYPE_TOKEN_PATTERN = re.compile(r"^[A-Za-z][\w\-]*:[A-Za-z0-9_/\-]+:[A-Za-z_]\w*$")


def is_valid_type_token(token: object) -> bool:
    """Return true when token looks like ``<package>:<module>:<Type>``.

    Args:
        token: Candidate type token taken from a resource class.

    """
    return isinstance(token, str) and _TYPE_TOKEN_PATTERN.match(token) is not None


def to_input_name(field_name: str) -> str:
    """Return the camelCase input name for a snake_case args field.

    Leading and trailing underscores are dropped, so ``type_`` maps to ``type``.
    """
    head, *tail = field_name.strip("_").split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def build_urn(*, stack: str, project: str, type_token: str, name: str) -> str:
    """Return the unique resource name for a declaration within one stack."""
    return f"urn:stackwire:{stack}::{project}::{type_token}::{name}"


__all__ = ["build_urn", "is_valid_type_token", "to_input_name"]
