from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TypeAlias

from stackwire.config import RunSettings
from stackwire.context import ExecutionContext
from stackwire.exceptions import StackwireRunStateError
from stackwire.resources import ResourceDescriptor
from stackwire.values import PropertyValue

logger = logging.getLogger(__name__)

Program: TypeAlias = Callable[[ExecutionContext], BaseException | None]
"""A user program: declares resources through the context, returns ``None`` or an error."""


class RunState(str, Enum):
    """Lifecycle states of a run driver."""

    NOT_STARTED = "not_started"
    """The driver was created and ``run`` was not called yet."""

    RUNNING = "running"
    """The program is executing."""

    SUCCEEDED = "succeeded"
    """The program returned without error. Terminal."""

    FAILED = "failed"
    """The program raised or returned an error. Terminal."""


@dataclass(frozen=True)
class RunOutcome:
    """Terminal result of one run.

    A succeeded outcome carries every declared resource in declaration order and
    the exported outputs. A failed outcome carries exactly one error, the first
    one raised by the program, and no declarations.
    """

    state: RunState
    resources: tuple[ResourceDescriptor, ...] = ()
    outputs: Mapping[str, PropertyValue] = field(default_factory=lambda: MappingProxyType({}))
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is RunState.SUCCEEDED

    @property
    def exit_code(self) -> int:
        """Return the process exit status for this outcome: 0 on success, 1 otherwise."""
        return 0 if self.succeeded else 1


class RunDriver:
    """Execute one program against a fresh execution context.

    The driver runs the program synchronously and does not reorder, retry or
    resume anything. The first exception raised by the program, or an exception
    instance it returns, ends the run as ``FAILED``. A driver runs exactly once.
    """

    def __init__(self, settings: RunSettings | None = None) -> None:
        self._settings = settings
        self._state = RunState.NOT_STARTED

    @property
    def state(self) -> RunState:
        return self._state

    def run(self, program: Program) -> RunOutcome:
        """Run program and return its terminal outcome.

        Args:
            program: Callable receiving the execution context.

        Returns:
            The terminal outcome. Exceptions derived from ``Exception`` are
            captured into the outcome rather than raised.

        Raises:
            StackwireRunStateError: If this driver already ran.

        """
        if self._state is not RunState.NOT_STARTED:
            msg = f"RunDriver can run only once; current state is {self._state.value}."
            raise StackwireRunStateError(msg)

        self._state = RunState.RUNNING
        context = ExecutionContext(self._settings)
        logger.debug("Starting run for %s/%s", context.project, context.stack)

        try:
            returned = program(context)
        except Exception as error:  # noqa: BLE001
            return self._fail(error)
        except BaseException:
            self._state = RunState.FAILED
            raise
        finally:
            context.close()

        if isinstance(returned, BaseException):
            return self._fail(returned)

        self._state = RunState.SUCCEEDED
        resources = context.registry.descriptors()
        logger.debug("Run succeeded with %d resources", len(resources))
        return RunOutcome(
            state=RunState.SUCCEEDED,
            resources=resources,
            outputs=MappingProxyType(dict(context.outputs)),
        )

    def _fail(self, error: BaseException) -> RunOutcome:
        self._state = RunState.FAILED
        logger.info("Run failed: %s: %s", type(error).__name__, error)
        return RunOutcome(state=RunState.FAILED, error=error)


def run(program: Program, *, settings: RunSettings | None = None) -> RunOutcome:
    """Run program as the process entry point.

    Returns the outcome when the run succeeds. On failure the error is logged and
    ``SystemExit`` with a non-zero status is raised, chained to the error.

    Usage:
        def main(ctx: ExecutionContext) -> None:
            Thing(ctx, "Other", ThingArgs(idea=String("Support Third Party")))

        if __name__ == "__main__":
            stackwire.run(main)
    """
    outcome = RunDriver(settings).run(program)
    if outcome.error is not None:
        logger.error("Program failed", exc_info=outcome.error)
        raise SystemExit(outcome.exit_code) from outcome.error
    return outcome
