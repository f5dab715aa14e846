"""Shared pytest fixtures for stackwire tests."""

from __future__ import annotations

import pytest

from stackwire import ExecutionContext, RunSettings


@pytest.fixture()
def settings() -> RunSettings:
    """Settings with a fixed project and stack."""
    return RunSettings(project="demo", stack="dev", config={})


@pytest.fixture()
def context(settings: RunSettings) -> ExecutionContext:
    """Open execution context bound to ``settings``."""
    return ExecutionContext(settings)
