"""Find grader behaviours that a consistent test suite does not pin down."""

from __future__ import annotations

import logging

from toadus.lib.util import unique
from toadus.model import TIMEOUT_MESSAGE

from . import messages
from .errors import ArtifactError
from .hints import hint_difference
from .mutator import ConceptualMutator
from .reporter import FeedbackReporter, StepCounter
from .resolver import HintResolver

logger = logging.getLogger(__name__)


class ThoroughnessAnalyzer(object):
    """Compares three mutants against the grader.

    - inclusion: the reference model minus every instance the student's
      inclusion tests witness
    - exclusion: tested predicates reduced to the student's exclusion tests
    - vacuous: tested predicates reduced to `{}`

    Hints the inclusion mutant still earns are behaviours the inclusion tests
    miss, unless the exclusion tests already cover them (hints the exclusion
    mutant earns but the vacuous one does not).
    """

    def __init__(self, resolver: HintResolver, reporter: FeedbackReporter) -> None:
        self.resolver = resolver
        self.reporter = reporter

    async def analyze(
        self,
        wheat: str,
        student_tests: str,
        trace: str,
        test_file_name: str,
        source_text: str,
        step: StepCounter | None = None,
    ) -> list[str]:
        step = step or StepCounter(self.reporter)
        step("Assessing the thoroughness of your test-suite.")
        try:
            return await self._analyze(wheat, student_tests, trace, test_file_name, source_text, step)
        except ArtifactError:
            raise
        except Exception as e:
            logger.exception("thoroughness analysis failed", extra={"test_file_name": test_file_name})
            self.reporter.error(messages.SOMETHING_WENT_WRONG)
            self.reporter.error(str(e))
            return [messages.SOMETHING_WENT_WRONG]

    async def _analyze(
        self, wheat: str, student_tests: str, trace: str, test_file_name: str, source_text: str, step: StepCounter
    ) -> list[str]:
        def mutator() -> ConceptualMutator:
            return ConceptualMutator(wheat, student_tests, trace, test_file_name, source_text)

        inclusion, exclusion, vacuous = mutator(), mutator(), mutator()
        analyzed = inclusion.mutate_to_exclude_inclusion_tests()
        analyzed += exclusion.mutate_from_exclusion_test_intersection()
        vacuous.mutate_to_vacuity()

        self.reporter.progress(messages.SKIPPED_TEST_MESSAGE)
        if inclusion.skipped_tests or exclusion.skipped_tests:
            text = f"{inclusion.skipped_tests_text()}\n{exclusion.skipped_tests_text()}"
            skipped = "\n".join(unique(line for line in text.split("\n") if line))
            self.reporter.progress(f"{messages.SKIPPED_ADDITIONAL}{skipped}")

        step(f"Here are some ideas for scenarios NOT covered by the {analyzed} tests analyzed. ⌛\n")

        candidates: list[list[str]] = []
        for m in (inclusion, exclusion, vacuous):
            hints = await self.resolver.resolve_coverage_hints(
                test_file_name, m.as_program_text(), m.student_predicates
            )
            if TIMEOUT_MESSAGE in hints:
                return [TIMEOUT_MESSAGE]
            candidates.append(hints)

        included, excluded, vacuous_hints = candidates
        return hint_difference(included, excluded, vacuous_hints)
