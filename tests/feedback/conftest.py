"""Doubles for the evaluator and artifact store used by the feedback tests."""

from __future__ import annotations

import typing as t
from unittest.mock import AsyncMock, MagicMock

import pytest

from toadus.evaluator import EvaluatorGateway
from toadus.feedback import ArtifactStore, LoggingReporter
from toadus.model import EvaluationRun, HintTable, TIMEOUT_MESSAGE

GRADER = """test expect {
    g1: {some n: Node | n in n.edges and wellformed} is unsat
    g2: {some edges and wellformed} is sat
    g3: {no Node and wellformed} is sat
}
"""

HINTS = {"g1": "What about self loops?", "g2": "Can a graph have edges?", "g3": "Is the empty graph allowed?"}


def _scripted(stderrs: t.Sequence[str]) -> AsyncMock:
    queue = list(stderrs)

    async def run_with_timeout(program_text: str, timeout_ms: int = 0) -> EvaluationRun:
        stderr = queue.pop(0)
        if stderr == TIMEOUT_MESSAGE:
            return EvaluationRun.timed_out(program_text)
        return EvaluationRun(stderr=stderr, source=program_text)

    return AsyncMock(side_effect=run_with_timeout)


@pytest.fixture
def hints() -> dict[str, str]:
    return dict(HINTS)


@pytest.fixture
def reporter() -> MagicMock:
    return MagicMock(spec=LoggingReporter)


@pytest.fixture
def gateway() -> MagicMock:
    gw = MagicMock(spec=EvaluatorGateway)
    gw.run_with_timeout = _scripted([])
    return gw


@pytest.fixture
def script(gateway: MagicMock) -> t.Callable[..., None]:
    """Answer each evaluator run, in order, with the given stderr text."""

    def set_runs(*stderrs: str) -> None:
        gateway.run_with_timeout = _scripted(stderrs)

    return set_runs


@pytest.fixture
def store(wheat: str) -> MagicMock:
    s = MagicMock(spec=ArtifactStore)
    s.fetch_wheat = AsyncMock(return_value=wheat)
    s.fetch_grader = AsyncMock(return_value=GRADER)
    s.fetch_hint_table = AsyncMock(return_value=HintTable(HINTS))
    return s


@pytest.fixture
def grader_failures() -> t.Callable[..., str]:
    """Evaluator output for a mutant that fails the named grader tests."""

    def make(*names: str) -> str:
        return "\n".join(f"[/tmp/toadus-g.frg:{40 + i}:5 (span 30)] Failed test {n}." for i, n in enumerate(names))

    return make
