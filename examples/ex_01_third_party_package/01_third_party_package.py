"""Third-party package: declare resources from a generated SDK.

The program declares a thing, two objects from a sub-module and a provider with
a string map property. ``stackwire.run`` is the process entry point: it exits
non-zero when the program fails.
"""

from __future__ import annotations

from thirdparty import Provider, ProviderArgs, Thing, ThingArgs
from thirdparty.module import Object, ObjectArgs

import stackwire
from stackwire import ExecutionContext, Number, RunSettings, String, StringMap


def program(ctx: ExecutionContext) -> None:
    Thing(ctx, "Other", ThingArgs(idea=String("Support Third Party")))
    Object(ctx, "Question", ObjectArgs(answer=Number(42)))
    Object(ctx, "Question2", ObjectArgs(answer=Number(24)))
    Provider(
        ctx,
        "Provider",
        ProviderArgs(
            object_prop=StringMap(
                {
                    "prop1": String("foo"),
                    "prop2": String("bar"),
                    "prop3": String("fizz"),
                },
            ),
        ),
    )


def main() -> None:
    outcome = stackwire.run(program, settings=RunSettings(project="example", stack="dev"))

    print(f"state={outcome.state.value}")  # => state=succeeded
    names = ",".join(resource.name for resource in outcome.resources)
    print(f"declared={names}")  # => declared=Other,Question,Question2,Provider

    other, question, _, provider = outcome.resources
    print(f"urn={other.urn}")  # => urn=urn:stackwire:dev::example::thirdparty:index:Thing::Other
    print(f"answer={question.inputs['answer'].to_python()}")  # => answer=42.0
    print(f"props={provider.inputs['objectProp'].to_python()}")  # => props={'prop1': 'foo', 'prop2': 'bar', 'prop3': 'fizz'}


if __name__ == "__main__":
    main()
