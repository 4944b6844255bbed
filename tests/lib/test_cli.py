"""Tests for the shared click parameter types."""

from __future__ import annotations

from pathlib import Path

import click
import pydantic as p
import pytest

from toadus.lib.cli import EnumType, URIParamType
from toadus.model import DeploymentEnvironment, FeedbackStrategy, ThoroughnessMode


class TestEnumType(object):
    @pytest.mark.parametrize("value", ["Per Test", "per-test", "PerTest", "per_test", "PER TEST"])
    def test_strategy_spellings(self, value: str) -> None:
        assert EnumType(FeedbackStrategy).convert(value, None, None) is FeedbackStrategy.PerTest

    def test_by_value(self) -> None:
        assert EnumType(DeploymentEnvironment).convert("test", None, None) is DeploymentEnvironment.Test
        assert EnumType(ThoroughnessMode).convert("on", None, None) is ThoroughnessMode.On

    def test_members_pass_through(self) -> None:
        assert EnumType(ThoroughnessMode).convert(ThoroughnessMode.Off, None, None) is ThoroughnessMode.Off
        assert EnumType(ThoroughnessMode).convert(None, None, None) is None

    def test_unknown_value(self) -> None:
        with pytest.raises(click.BadParameter, match="Comprehensive"):
            EnumType(FeedbackStrategy).convert("sometimes", None, None)


class TestURIParamType(object):
    def test_directory_path(self, tmp_path: Path) -> None:
        url = URIParamType(dir_ok=True).convert(str(tmp_path), None, None)

        assert isinstance(url, p.FileUrl)
        assert url.path == str(tmp_path)

    def test_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(click.BadParameter, match="directory"):
            URIParamType().convert(str(tmp_path), None, None)

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(click.BadParameter, match="no such file"):
            URIParamType().convert(str(tmp_path / "absent"), None, None)

    def test_remote_url(self) -> None:
        url = URIParamType().convert("https://example.com/config", None, None)
        assert str(url) == "https://example.com/config"
