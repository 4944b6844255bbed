"""Run a conceptual mutant against the grader and turn the outcome into hint candidates."""

from __future__ import annotations

import logging

from toadus.evaluator import EvaluatorGateway, failing_test_names
from toadus.forge import assignment_name, combine_tests_with_model
from toadus.model import EvaluationRun, FeedbackEvent, HintTable, TIMEOUT_MESSAGE

from . import messages
from .reporter import FeedbackEventLog, FeedbackReporter
from .store import ArtifactStore

logger = logging.getLogger(__name__)


class HintResolver(object):
    def __init__(
        self,
        gateway: EvaluatorGateway,
        store: ArtifactStore,
        reporter: FeedbackReporter,
        timeout_ms: int = 120000,
        events: FeedbackEventLog | None = None,
    ) -> None:
        self.gateway = gateway
        self.store = store
        self.reporter = reporter
        self.timeout_ms = timeout_ms
        self.events = events or FeedbackEventLog()

    async def resolve_failure_hints(
        self, test_file_name: str, mutant_text: str, student_predicates: str, trace: str = ""
    ) -> list[str]:
        """Hints attached to the grader tests the mutant fails.

        A failing grader test with no hint is reported once as a warning and
        otherwise ignored.
        """
        self.events.mutant(
            FeedbackEvent.ConceptualMutant,
            test_file_name=test_file_name,
            assignment=assignment_name(test_file_name),
            student_preds=student_predicates,
            mutant=mutant_text,
            test_failure_message=trace,
        )
        run = await self._run_grader(test_file_name, mutant_text)
        if run.is_timed_out:
            return [TIMEOUT_MESSAGE]
        if not run.stderr:
            return []

        names = failing_test_names(run.stderr)
        table = await self.store.fetch_hint_table(test_file_name)
        if missing := [n for n in names if n not in table]:
            logger.warning("grader tests missing from hint table", extra={"missing": missing})
            self.reporter.warn(messages.MISSING_HINT_WARNING)
        return table.hints_for(names)

    async def resolve_coverage_hints(self, test_file_name: str, mutant_text: str, student_predicates: str) -> list[str]:
        """Hints attached to the grader tests the mutant does not fail."""
        self.events.mutant(
            FeedbackEvent.ThoroughnessMutant,
            test_file_name=test_file_name,
            assignment=assignment_name(test_file_name),
            student_preds=student_predicates,
            mutant=mutant_text,
        )
        run = await self._run_grader(test_file_name, mutant_text)
        if run.is_timed_out:
            return [TIMEOUT_MESSAGE]

        failed = set(failing_test_names(run.stderr))
        table: HintTable = await self.store.fetch_hint_table(test_file_name)
        return table.hints_for(n for n in table.names() if n not in failed)

    async def _run_grader(self, test_file_name: str, mutant_text: str) -> EvaluationRun:
        grader = await self.store.fetch_grader(test_file_name)
        return await self.gateway.run_with_timeout(combine_tests_with_model(mutant_text, grader), self.timeout_ms)
