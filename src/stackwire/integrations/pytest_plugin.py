"""Pytest fixtures for testing stackwire programs.

Enable with ``-p stackwire.integrations.pytest_plugin`` (for example in
``addopts``) and override ``stackwire_settings`` to change project, stack or
configuration values for a test module.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from stackwire.config import RunSettings
from stackwire.context import ExecutionContext
from stackwire.run import RunDriver


@pytest.fixture()
def stackwire_settings() -> RunSettings:
    """Provide settings for the plugin-managed context and driver.

    Returns:
        Settings with project and stack ``"test"`` and no configuration values.

    """
    return RunSettings(project="test", stack="test", config={})


@pytest.fixture()
def stackwire_context(stackwire_settings: RunSettings) -> Iterator[ExecutionContext]:
    """Provide a fresh execution context, closed when the test finishes.

    Yields:
        An open ``ExecutionContext`` bound to ``stackwire_settings``.

    """
    with ExecutionContext(stackwire_settings) as context:
        yield context


@pytest.fixture()
def stackwire_driver(stackwire_settings: RunSettings) -> RunDriver:
    """Provide a run driver that has not run yet.

    Returns:
        A ``RunDriver`` bound to ``stackwire_settings``.

    """
    return RunDriver(stackwire_settings)
