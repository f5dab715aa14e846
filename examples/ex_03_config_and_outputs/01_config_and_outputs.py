"""Run configuration and stack outputs.

Configuration values are keyed ``<namespace>:<key>`` and read through
``ctx.config()``, which defaults to the project namespace. Exported outputs are
returned with a successful outcome.
"""

from __future__ import annotations

from thirdparty import Thing, ThingArgs
from thirdparty.module import Object, ObjectArgs

from stackwire import ExecutionContext, RunDriver, RunSettings


def program(ctx: ExecutionContext) -> None:
    config = ctx.config()
    question = Object(ctx, "Question", ObjectArgs(answer=config.require_float("answer")))
    Thing(ctx, "Other", ThingArgs(idea=config.get("idea", "Support Third Party")))

    ctx.export("questionUrn", question.urn)
    ctx.export("verbose", config.get_bool("verbose", default=False))


def main() -> None:
    settings = RunSettings(
        project="example",
        stack="prod",
        config={"example:answer": "42", "example:verbose": "true"},
    )
    outcome = RunDriver(settings).run(program)

    print(f"state={outcome.state.value}")  # => state=succeeded
    print(f"answer={outcome.resources[0].inputs['answer'].to_python()}")  # => answer=42.0
    print(f"idea={outcome.resources[1].inputs['idea'].to_python()}")  # => idea=Support Third Party
    print(f"outputs={sorted(outcome.outputs)}")  # => outputs=['questionUrn', 'verbose']
    print(f"verbose={outcome.outputs['verbose'].to_python()}")  # => verbose=True


if __name__ == "__main__":
    main()
