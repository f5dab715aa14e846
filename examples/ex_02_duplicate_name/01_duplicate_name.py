"""Duplicate logical names stop the run at the first failing declaration.

The third declaration reuses ``Question``. The driver captures that error as the
run outcome and the provider declaration after it never executes.
"""

from __future__ import annotations

from thirdparty import Provider, ProviderArgs, Thing, ThingArgs
from thirdparty.module import Object, ObjectArgs

from stackwire import ExecutionContext, Number, RunDriver, StackwireDuplicateNameError, StringMap


def main() -> None:
    contexts: list[ExecutionContext] = []

    def program(ctx: ExecutionContext) -> None:
        contexts.append(ctx)
        Thing(ctx, "Other", ThingArgs(idea="Support Third Party"))
        Object(ctx, "Question", ObjectArgs(answer=Number(42)))
        Object(ctx, "Question", ObjectArgs(answer=Number(24)))
        Provider(ctx, "Provider", ProviderArgs(object_prop=StringMap({"prop1": "foo"})))

    driver = RunDriver()
    outcome = driver.run(program)

    print(f"state={outcome.state.value}")  # => state=failed
    print(f"duplicate={isinstance(outcome.error, StackwireDuplicateNameError)}")  # => duplicate=True
    print(f"name={outcome.error.name}")  # => name=Question
    print(f"declared_before_error={len(contexts[0].registry)}")  # => declared_before_error=2
    print(f"exit_code={outcome.exit_code}")  # => exit_code=1


if __name__ == "__main__":
    main()
