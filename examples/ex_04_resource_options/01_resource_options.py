"""Resource options relate a declaration to resources declared earlier.

``provider`` accepts only provider resources; ``parent`` and ``depends_on``
accept any resource of the same run. The descriptor records them by logical name.
"""

from __future__ import annotations

from thirdparty import Provider, ProviderArgs, Thing, ThingArgs
from thirdparty.module import Object, ObjectArgs

from stackwire import ExecutionContext, ResourceOptions, RunDriver, StackwireInvalidArgumentError


def main() -> None:
    def program(ctx: ExecutionContext) -> None:
        provider = Provider(ctx, "Provider", ProviderArgs())
        other = Thing(ctx, "Other", ThingArgs(idea="Support Third Party"))
        Object(
            ctx,
            "Question",
            ObjectArgs(answer=42),
            ResourceOptions(parent=other, provider=provider, depends_on=[other]),
        )

    outcome = RunDriver().run(program)
    question = outcome.resources[-1]
    print(f"parent={question.parent}")  # => parent=Other
    print(f"provider={question.provider}")  # => provider=Provider
    print(f"depends_on={list(question.depends_on)}")  # => depends_on=['Other']

    def bad_provider(ctx: ExecutionContext) -> None:
        other = Thing(ctx, "Other")
        Object(ctx, "Question", opts=ResourceOptions(provider=other))  # type: ignore[arg-type]

    failed = RunDriver().run(bad_provider)
    print(f"rejected={isinstance(failed.error, StackwireInvalidArgumentError)}")  # => rejected=True
    print(f"field={failed.error.field}")  # => field=provider


if __name__ == "__main__":
    main()
