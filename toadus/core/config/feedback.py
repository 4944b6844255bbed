"""Feedback engine configuration settings."""

from __future__ import annotations

import typing as t

import annotated_types as ant
import pydantic as p

from toadus.model import FeedbackStrategy, ThoroughnessMode

from .base import BaseSettings

DEFAULT_STORE_URL: t.Final[str] = "https://csci1710.github.io/2025/toadusponensfiles"


class EvaluatorSettings(BaseSettings):
    """How the Forge evaluator process is launched and stopped."""

    command: tuple[str, ...] = ("racket",)
    termination_grace: t.Annotated[float, ant.Gt(0)] = 5.0


class StoreSettings(BaseSettings):
    """Location of the wheat, grader and hint table artifacts."""

    url: p.HttpUrl = p.HttpUrl(DEFAULT_STORE_URL)
    timeout: t.Annotated[float, ant.Gt(0)] = 30.0


class FeedbackSettings(BaseSettings):
    strategy: FeedbackStrategy = FeedbackStrategy.Comprehensive
    thoroughness: ThoroughnessMode = ThoroughnessMode.Off
    timeout_ms: t.Annotated[int, ant.Gt(0)] = 120000
    max_hints: t.Annotated[int, ant.Ge(1)] = 3
    evaluator: EvaluatorSettings = EvaluatorSettings()
    store: StoreSettings = StoreSettings()
