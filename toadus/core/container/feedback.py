"""Feedback engine container for dependency injection."""

from __future__ import annotations

from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Provider, Singleton

from toadus.evaluator import EvaluatorGateway
from toadus.feedback import ArtifactStore, FeedbackEventLog, FeedbackReporter, HintGenerator, LoggingReporter, \
    PlainTextDecryptor
from toadus.model import FeedbackStrategy, ThoroughnessMode


class FeedbackContainer(DeclarativeContainer):
    """Container for the evaluator gateway and the hint pipeline built on it."""

    config: Configuration = Configuration()

    # a single gateway owns the evaluator process for the whole run
    gateway: Provider[EvaluatorGateway] = Singleton(
        EvaluatorGateway,
        command=config.evaluator.command,
        termination_grace=config.evaluator.termination_grace,
    )
    events: Provider[FeedbackEventLog] = Singleton(FeedbackEventLog)
    reporter: Provider[FeedbackReporter] = Singleton(LoggingReporter)
    decryptor: Provider[PlainTextDecryptor] = Singleton(PlainTextDecryptor)

    store: Provider[ArtifactStore] = Singleton(
        ArtifactStore,
        url=config.store.url,
        timeout=config.store.timeout,
        decryptor=decryptor,
        events=events,
    )

    generator: Provider[HintGenerator] = Singleton(
        HintGenerator,
        gateway=gateway,
        store=store,
        reporter=reporter,
        strategy=config.strategy.as_(FeedbackStrategy),
        thoroughness=config.thoroughness.as_(ThoroughnessMode),
        timeout_ms=config.timeout_ms,
        max_hints=config.max_hints,
        events=events,
    )
