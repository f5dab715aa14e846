"""Tests for run settings and the configuration accessor."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from stackwire.config import Config, RunSettings
from stackwire.exceptions import (
    StackwireConfigError,
    StackwireConfigMissingError,
    StackwireConfigTypeError,
)


@pytest.fixture()
def config() -> Config:
    return Config(
        {
            "demo:name": "web",
            "demo:replicas": "3",
            "demo:ratio": "0.5",
            "demo:enabled": "TRUE",
            "demo:broken": "maybe",
            "aws:region": "us-west-2",
        },
        namespace="demo",
    )


class TestRunSettings:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACKWIRE_PROJECT", "envproject")
        monkeypatch.setenv("STACKWIRE_STACK", "staging")
        monkeypatch.setenv("STACKWIRE_CONFIG", '{"envproject:size": "large"}')

        settings = RunSettings()

        assert settings.project == "envproject"
        assert settings.stack == "staging"
        assert settings.config == {"envproject:size": "large"}

    def test_keyword_arguments_override_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACKWIRE_STACK", "staging")

        settings = RunSettings(stack="prod")

        assert settings.stack == "prod"

    @pytest.mark.parametrize("field_name", ["project", "stack"])
    @pytest.mark.parametrize("value", ["", "   "])
    def test_rejects_blank_names(self, field_name: str, value: str) -> None:
        with pytest.raises(ValidationError):
            RunSettings(**{field_name: value})

    def test_is_frozen(self) -> None:
        settings = RunSettings(project="demo")

        with pytest.raises(ValidationError):
            settings.project = "other"


class TestConfig:
    def test_get_uses_namespace(self, config: Config) -> None:
        assert config.get("name") == "web"
        assert config.get("missing") is None
        assert config.get("missing", "fallback") == "fallback"

    def test_qualified_keys_bypass_namespace(self, config: Config) -> None:
        assert config.get("aws:region") == "us-west-2"
        assert "aws:region" in config
        assert "region" not in config

    def test_require_raises_for_missing_key(self, config: Config) -> None:
        with pytest.raises(StackwireConfigMissingError, match="demo:missing") as exc_info:
            config.require("missing")

        assert exc_info.value.key == "demo:missing"
        assert isinstance(exc_info.value, StackwireConfigError)

    def test_typed_getters(self, config: Config) -> None:
        assert config.get_int("replicas") == 3
        assert config.get_float("ratio") == 0.5
        assert config.get_bool("enabled") is True
        assert config.get_bool("missing", default=False) is False
        assert config.get_int("missing") is None

    def test_typed_require(self, config: Config) -> None:
        assert config.require_int("replicas") == 3
        assert config.require_float("replicas") == 3.0
        assert config.require_bool("enabled") is True

        with pytest.raises(StackwireConfigMissingError):
            config.require_int("missing")

    @pytest.mark.parametrize(
        ("method", "expected"),
        [("get_bool", "bool"), ("get_int", "int"), ("get_float", "float")],
    )
    def test_unparseable_values_raise_type_error(self, config: Config, method: str, expected: str) -> None:
        with pytest.raises(StackwireConfigTypeError, match="demo:broken") as exc_info:
            getattr(config, method)("broken")

        assert exc_info.value.key == "demo:broken"
        assert exc_info.value.expected == expected

    def test_values_are_copied(self) -> None:
        values = {"demo:name": "web"}
        config = Config(values, namespace="demo")

        values["demo:name"] = "changed"

        assert config.get("name") == "web"
