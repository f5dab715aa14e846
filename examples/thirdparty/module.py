from __future__ import annotations

from dataclasses import dataclass

from stackwire import Number, Resource, ResourceArgs


@dataclass(frozen=True, kw_only=True)
class ObjectArgs(ResourceArgs):
    answer: Number | float | None = None


class Object(Resource):
    TYPE_TOKEN = "thirdparty:module:Object"
    ARGS_TYPE = ObjectArgs


__all__ = ["Object", "ObjectArgs"]
