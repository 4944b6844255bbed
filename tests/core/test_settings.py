"""Tests for loading settings from the repository's config directory."""

from __future__ import annotations

from pathlib import Path

import pydantic as p
import pytest

import toadus
from toadus.core import Settings
from toadus.core.config.logging import ExtraFormatterSettings
from toadus.model import DeploymentEnvironment, FeedbackStrategy, ThoroughnessMode

CONFIG_ROOT = p.FileUrl(f"file://{Path(toadus.__file__).resolve().parent.parent}/config")


def load(env: DeploymentEnvironment, *override: str) -> Settings:
    return Settings(env=env, root=CONFIG_ROOT, override=override)


class TestSettings(object):
    def test_local_defaults(self) -> None:
        settings = load(DeploymentEnvironment.Local)

        assert settings.feedback.strategy is FeedbackStrategy.Comprehensive
        assert settings.feedback.thoroughness is ThoroughnessMode.Off
        assert settings.feedback.timeout_ms == 120000
        assert settings.feedback.max_hints == 3
        assert settings.feedback.evaluator.command == ("racket",)
        assert str(settings.feedback.store.url).startswith("https://csci1710.github.io/")
        assert settings.logging.handlers["console"].level == "WARNING"

    def test_environment_files_merge_over_root(self) -> None:
        settings = load(DeploymentEnvironment.Test)

        assert settings.feedback.timeout_ms == 30000
        assert settings.feedback.evaluator.termination_grace == 1.0
        assert settings.feedback.evaluator.command == ("racket",)
        assert settings.feedback.store.timeout == 30.0

    def test_development_logging(self) -> None:
        settings = load(DeploymentEnvironment.Development)
        formatter = settings.logging.formatters["console"]

        assert settings.logging.handlers["console"].level == "DEBUG"
        assert isinstance(formatter, ExtraFormatterSettings)
        assert formatter.indent is True
        assert formatter.base == "ext://colorlog.ColoredFormatter"

    def test_overrides_are_partial(self) -> None:
        settings = load(
            DeploymentEnvironment.Test,
            "feedback.store.timeout=2.5",
            "feedback.max_hints=1",
            "feedback.strategy=Per Test",
        )

        assert settings.feedback.store.timeout == 2.5
        assert str(settings.feedback.store.url).startswith("https://csci1710.github.io/")
        assert settings.feedback.max_hints == 1
        assert settings.feedback.strategy is FeedbackStrategy.PerTest
        assert settings.feedback.timeout_ms == 30000

    def test_invalid_override(self) -> None:
        with pytest.raises(p.ValidationError):
            load(DeploymentEnvironment.Local, "feedback.max_hints=0")

    def test_logging_dumps_for_dict_config(self) -> None:
        dumped = load(DeploymentEnvironment.Local).logging.model_dump()

        assert dumped["formatters"]["console"]["()"] == "toadus.lib.logging.ExtraFormatter"
        assert dumped["handlers"]["console"]["class"] == "colorlog.StreamHandler"
        assert dumped["handlers"]["console"]["stream"] == "ext://sys.stderr"

    def test_rejects_unsupported_handler(self) -> None:
        with pytest.raises(p.ValidationError):
            load(
                DeploymentEnvironment.Local,
                "logging.handlers.console.class=logging.handlers.TimedRotatingFileHandler",
            )
