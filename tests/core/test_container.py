"""Tests for booting the DI container."""

from __future__ import annotations

import typing as t
from pathlib import Path

import pydantic as p
import pytest

import toadus
from toadus.core import ToadusContainer
from toadus.evaluator import EvaluatorGateway
from toadus.feedback import ArtifactStore, HintGenerator
from toadus.model import DeploymentEnvironment, FeedbackStrategy, ThoroughnessMode

CONFIG_ROOT = p.FileUrl(f"file://{Path(toadus.__file__).resolve().parent.parent}/config")


@pytest.fixture
def container() -> t.Generator[ToadusContainer]:
    ct = ToadusContainer()
    ToadusContainer.boot(
        ct,
        debug=False,
        env=DeploymentEnvironment.Test,
        config_root=CONFIG_ROOT,
        override=("feedback.thoroughness=\"On\"",),
    )
    yield ct
    ct.shutdown_resources()


class TestToadusContainer(object):
    def test_builds_hint_generator(self, container: ToadusContainer) -> None:
        generator = container.feedback.generator()

        assert isinstance(generator, HintGenerator)
        assert generator.strategy is FeedbackStrategy.Comprehensive
        assert generator.thoroughness is ThoroughnessMode.On
        assert generator.timeout_ms == 30000
        assert generator.max_hints == 3

    def test_shares_one_gateway(self, container: ToadusContainer) -> None:
        gateway = container.feedback.gateway()

        assert isinstance(gateway, EvaluatorGateway)
        assert container.feedback.generator().gateway is gateway
        assert gateway.command == ("racket",)
        assert gateway.termination_grace == 1.0

    def test_store_location(self, container: ToadusContainer) -> None:
        store = container.feedback.store()

        assert isinstance(store, ArtifactStore)
        assert store.url == "https://csci1710.github.io/2025/toadusponensfiles"
        assert store.timeout == 30.0

    def test_environment(self, container: ToadusContainer) -> None:
        assert container.env() is DeploymentEnvironment.Test
        assert container.debug() is False

    def test_rejects_non_file_root(self) -> None:
        with pytest.raises(ValueError):
            ToadusContainer.boot(
                ToadusContainer(),
                debug=False,
                env=DeploymentEnvironment.Test,
                config_root=t.cast(p.FileUrl, p.AnyUrl("https://example.com/config")),
            )
