"""Turn a student's test file into hint text."""

from __future__ import annotations

import logging
import random

from toadus.evaluator import EvaluatorError, EvaluatorGateway, failing_test_names, is_consistent, \
    parse_diagnostic_line
from toadus.forge import combine_tests_with_model, normalize_newlines
from toadus.model import EvaluationRun, FeedbackStrategy, ThoroughnessMode, TIMEOUT_MESSAGE

from . import messages
from .errors import ArtifactError, ArtifactNotEnabledError
from .hints import format_failure_hints, format_thoroughness_hints, is_meaningful, MAX_HINTS, only_ambiguous
from .mutator import ConceptualMutator
from .reporter import FeedbackEventLog, FeedbackReporter, StepCounter
from .resolver import HintResolver
from .store import ArtifactStore
from .thoroughness import ThoroughnessAnalyzer

logger = logging.getLogger(__name__)


class _Request(object):
    """State for one `generate_hints` call."""

    def __init__(self, test_file_name: str, student_tests: str, wheat: str, run: EvaluationRun, step: StepCounter):
        self.test_file_name = test_file_name
        self.student_tests = student_tests
        self.wheat = wheat
        self.source_text = run.source
        self.trace = run.stderr
        self.step = step

    def mutator(self, trace: str | None = None, max_tests: int | None = None) -> ConceptualMutator:
        return ConceptualMutator(
            self.wheat,
            self.student_tests,
            self.trace if trace is None else trace,
            self.test_file_name,
            self.source_text,
            max_tests=max_tests,
        )


class HintGenerator(object):
    """Runs the student's tests against the reference model and explains the outcome.

    Every path ends in a string for the student: `generate_hints` does not
    raise. Progress along the way is sent to the reporter.
    """

    def __init__(
        self,
        gateway: EvaluatorGateway,
        store: ArtifactStore,
        reporter: FeedbackReporter,
        strategy: FeedbackStrategy = FeedbackStrategy.Comprehensive,
        thoroughness: ThoroughnessMode = ThoroughnessMode.Off,
        timeout_ms: int = 120000,
        max_hints: int = MAX_HINTS,
        events: FeedbackEventLog | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.gateway = gateway
        self.store = store
        self.reporter = reporter
        self.strategy = strategy
        self.thoroughness = thoroughness
        self.timeout_ms = timeout_ms
        self.max_hints = max_hints
        self.events = events or FeedbackEventLog()
        self.rng = rng
        self.resolver = HintResolver(gateway, store, reporter, timeout_ms=timeout_ms, events=self.events)
        self.analyzer = ThoroughnessAnalyzer(self.resolver, reporter)

    @property
    def wants_thoroughness(self) -> bool:
        return self.thoroughness is ThoroughnessMode.On

    async def generate_hints(self, student_tests: str, test_file_name: str) -> str:
        self.events.assistance_request(self.strategy.value, self.thoroughness.value)
        try:
            return await self._generate(normalize_newlines(student_tests), test_file_name)
        except Exception as e:
            logger.exception("feedback generation failed", extra={"test_file_name": test_file_name})
            self.reporter.error(messages.SOMETHING_WENT_WRONG)
            self.reporter.error(str(e))
            return messages.SOMETHING_WENT_WRONG

    async def _generate(self, student_tests: str, test_file_name: str) -> str:
        try:
            wheat = await self.store.fetch_wheat(test_file_name)
        except ArtifactError as e:
            return self._artifact_failure(e)

        step = StepCounter(self.reporter)
        step("Analyzing your tests for validity.")
        try:
            run = await self.gateway.run_with_timeout(combine_tests_with_model(wheat, student_tests), self.timeout_ms)
        except EvaluatorError as e:
            logger.error("could not evaluate student tests", extra={"error": str(e)})
            self.reporter.error(str(e))
            return messages.LAUNCH_FAILURE_MESSAGE
        if run.is_timed_out:
            self.reporter.error(TIMEOUT_MESSAGE)
            return TIMEOUT_MESSAGE

        request = _Request(test_file_name, student_tests, wheat, run, step)
        if is_consistent(request.trace):
            if not self.wants_thoroughness:
                return messages.CONSISTENCY_MESSAGE
            self.reporter.progress(messages.CONSISTENCY_MESSAGE)
            try:
                return await self._thoroughness(request)
            except ArtifactError as e:
                return self._artifact_failure(e)

        if not failing_test_names(request.trace):
            return messages.runtime_error_message(request.trace)

        try:
            match self.strategy:
                case FeedbackStrategy.PerTest:
                    return await self._per_test(request)
                case FeedbackStrategy.Comprehensive:
                    return await self._comprehensive(request)
        except ArtifactError as e:
            return self._artifact_failure(e)
        except Exception as e:
            logger.exception("mutation strategy failed", extra={"strategy": self.strategy.value})
            self.reporter.error(messages.SOMETHING_WENT_WRONG)
            self.reporter.error(str(e))
            return messages.SOMETHING_WENT_WRONG

    def _artifact_failure(self, e: ArtifactError) -> str:
        if isinstance(e, ArtifactNotEnabledError):
            self.reporter.error(messages.NOT_ENABLED_MESSAGE)
            return messages.NOT_ENABLED_MESSAGE
        logger.error("could not fetch assignment artifact", extra={"url": e.url, "error": str(e)})
        self.reporter.error(str(e))
        return messages.NETWORK_ERROR_MESSAGE

    async def _comprehensive(self, request: _Request) -> str:
        hints = await self._comprehensive_candidates(request)
        if is_meaningful(hints) or not self.wants_thoroughness:
            return format_failure_hints(hints, self.max_hints, self.rng) or messages.ANALYZED_CONSISTENCY_MESSAGE

        if only_ambiguous(hints):
            self.reporter.progress(messages.AMBIGUOUS_TEST_MESSAGE)
        else:
            self.reporter.progress(messages.ANALYZED_CONSISTENCY_MESSAGE)
        return await self._thoroughness(request)

    async def _comprehensive_candidates(self, request: _Request) -> list[str]:
        mutator = request.mutator()
        mutator.mutate_to_failing_tests()
        if mutator.skipped_tests:
            self.reporter.progress(f"{messages.SKIPPED_ADDITIONAL}{mutator.skipped_tests_text()}")

        if not mutator.reconciled_tests:
            self.reporter.progress(messages.NO_INCONSISTENT_TESTS_MESSAGE)
            return []

        names = "\n".join(tc.name for tc in mutator.reconciled_tests)
        request.step(
            f"The following {len(mutator.reconciled_tests)} test(s) MAY be inconsistent "
            f"with the assignment specification:\n {names}\n\nAnalyzing these tests further ⌛\n"
        )
        hints = await self.resolver.resolve_failure_hints(
            request.test_file_name, mutator.as_program_text(), mutator.student_predicates, request.trace
        )
        if not hints:
            # which of the reconciled tests is ambiguous is not recoverable here
            return [self._record_ambiguous(request, request.trace)]
        return hints

    async def _per_test(self, request: _Request) -> str:
        per_test: dict[str, list[str]] = {}
        for line in request.trace.split("\n"):
            record = parse_diagnostic_line(line)
            if record is None or not record.name or record.name in per_test:
                continue
            mutator = request.mutator(trace=line, max_tests=1)
            mutator.mutate_to_failing_tests()
            per_test[record.name] = await self.resolver.resolve_failure_hints(
                request.test_file_name, mutator.as_program_text(), mutator.student_predicates, line
            )

        request.step("I suspect that the following test(s) may be inconsistent with the problem specification.")
        self.reporter.progress("Generating feedback around these tests ⌛")

        composite = ""
        concrete = ambiguous = 0
        for name, hints in per_test.items():
            hint = format_failure_hints(hints, self.max_hints, self.rng)
            if hint:
                concrete += 1
            else:
                ambiguous += 1
                hint = self._record_ambiguous(request, request.trace)
            composite += f"\n{name} : {hint}\n"

        if concrete == 0 and self.wants_thoroughness:
            if ambiguous:
                self.reporter.warn(messages.UNSPECIFIED_BEHAVIOR_WARNING)
            self.reporter.progress(
                "🐸 Since none of the analyzed tests are obviously inconsistent with the problem specification, "
                "I will now analyze the thoroughness of your test-suite. ⌛"
            )
            return await self._thoroughness(request)
        return composite

    async def _thoroughness(self, request: _Request) -> str:
        candidates = await self.analyzer.analyze(
            request.wheat,
            request.student_tests,
            request.trace,
            request.test_file_name,
            request.source_text,
            step=request.step,
        )
        return format_thoroughness_hints(candidates, self.max_hints, self.rng)

    def _record_ambiguous(self, request: _Request, trace: str) -> str:
        self.events.ambiguous_test(request.test_file_name, request.student_tests, trace)
        return messages.AMBIGUOUS_TEST_MESSAGE
