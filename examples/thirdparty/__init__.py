"""Sample generated SDK for the ``thirdparty`` package.

Mirrors what an SDK generator emits for a third-party provider schema: one args
record and one resource class per resource type, plus the package provider.
"""

from __future__ import annotations

from dataclasses import dataclass

from stackwire import ProviderResource, Resource, ResourceArgs, String, StringMap


@dataclass(frozen=True, kw_only=True)
class ThingArgs(ResourceArgs):
    idea: String | str | None = None


class Thing(Resource):
    TYPE_TOKEN = "thirdparty:index:Thing"
    ARGS_TYPE = ThingArgs


@dataclass(frozen=True, kw_only=True)
class ProviderArgs(ResourceArgs):
    object_prop: StringMap | None = None


class Provider(ProviderResource):
    TYPE_TOKEN = "stackwire:providers:thirdparty"
    ARGS_TYPE = ProviderArgs


__all__ = ["Provider", "ProviderArgs", "Thing", "ThingArgs"]
