"""Conceptual mutants: variations of the reference model that agree with a student.

A mutant is built by rewriting the zero-argument predicates the student's
tests target. The reference body of a predicate `T` is kept under the name
`T__wheat` and a new `T` is appended that widens or narrows it:

    pred T {
        (T__wheat or (<inclusion witness>) ...)
        (<exclusion constraint>)
        ...
    }

Positive examples and sufficiency assertions are inclusion witnesses;
negative examples and necessity assertions are exclusion constraints.
"""

from __future__ import annotations

import logging
import re as regex
import typing as t

from toadus.evaluator import parse_failing_tests
from toadus.forge import InstanceError, instance_formula, normalize_newlines, scan_tests, ScanError, \
    sig_names, strip_comments
from toadus.lib.util import unique
from toadus.model import StudentTest, TestKind, TestOutcomeRecord, TestPolarity

from .errors import MutationError

logger = logging.getLogger(__name__)

WHEAT_SUFFIX: t.Final[str] = "__wheat"

_PRED_DECL = regex.compile(r"\bpred\s+(?P<name>[A-Za-z_][\w']*)\s*(?P<params>\[[^\]]*\])?\s*\{")


def wheat_predicates(wheat: str) -> list[str]:
    """Names of the zero-argument predicates a model declares."""
    names: list[str] = []
    for m in _PRED_DECL.finditer(wheat):
        params = m.group("params")
        if params is None or params[1:-1].strip() == "":
            names.append(m.group("name"))
    return unique(names)


class _Rewrite(object):
    def __init__(self, target: str) -> None:
        self.target = target
        self.keep_wheat = True
        self.additions: list[str] = []
        self.constraints: list[str] = []

    def render(self) -> str:
        lines: list[str] = []
        if self.keep_wheat:
            base = [f"{self.target}{WHEAT_SUFFIX}"] + [f"({a})" for a in self.additions]
            lines.append(f"({' or '.join(base)})" if len(base) > 1 else base[0])
        lines.extend(f"({c})" for c in self.constraints)
        body = "\n".join(f"    {line}" for line in lines)
        return f"pred {self.target} {{\n{body}\n}}" if body else f"pred {self.target} {{}}"


class ConceptualMutator(object):
    """Builds one conceptual mutant of `wheat` from a student's tests.

    Arguments:

        - `wheat`: the comment-stripped reference model
        - `student_tests`: the raw text of the student's test file
        - `trace`: what the evaluator wrote to stderr for the student's tests
        - `source_text`: the combined program the trace was produced from
        - `max_tests`: cap on how many failing tests are reconciled

    Each `mutate_*` call starts from the unmodified wheat. Callers build a
    fresh mutator per operation.
    """

    def __init__(
        self,
        wheat: str,
        student_tests: str,
        trace: str,
        test_file_name: str,
        source_text: str,
        max_tests: int | None = None,
    ) -> None:
        self.wheat = wheat
        self.student_tests = normalize_newlines(student_tests)
        self.trace = trace
        self.test_file_name = test_file_name
        self.source_text = source_text
        self.max_tests = max_tests

        try:
            self.suite = scan_tests(strip_comments(self.student_tests))
        except ScanError as e:
            raise MutationError(f"could not read the tests in {test_file_name}: {e}") from e

        self.predicates = wheat_predicates(wheat)
        self.sigs = sig_names(wheat)
        self.reconciled_tests: list[StudentTest] = []
        self.skipped_tests: list[StudentTest] = []
        self._rewrites: dict[str, _Rewrite] = {}

    @property
    def student_predicates(self) -> str:
        return self.suite.helpers

    @property
    def line_offset(self) -> int:
        """0-based line in `source_text` where the student's tests begin."""
        return max(0, self.source_text.count("\n") - self.student_tests.count("\n"))

    def mutate_to_failing_tests(self) -> int:
        """Rewrite each tested predicate so that the failing tests would pass."""
        self._reset()
        failing = self.failing_tests()
        if self.max_tests is not None:
            failing = failing[: self.max_tests]

        for tc in failing:
            if (witness := self._characterize(tc)) is None:
                continue
            rewrite = self._rewrite(tc.target)
            if tc.polarity is TestPolarity.Inclusion:
                rewrite.additions.append(witness)
            else:
                rewrite.constraints.append(witness)
            self.reconciled_tests.append(tc)

        logger.debug(
            "mutated to failing tests",
            extra={"reconciled": [tc.name for tc in self.reconciled_tests], "skipped": len(self.skipped_tests)},
        )
        return len(self.reconciled_tests)

    def mutate_to_exclude_inclusion_tests(self) -> int:
        """Remove every instance the passing inclusion tests witness from their predicate."""
        self._reset()
        for tc in self.passing_tests():
            if tc.polarity is not TestPolarity.Inclusion:
                if not tc.is_analyzable:
                    self.skipped_tests.append(tc)
                continue
            if (witness := self._characterize(tc)) is None:
                continue
            self._rewrite(tc.target).constraints.append(f"not ({witness})")
            self.reconciled_tests.append(tc)
        return len(self.reconciled_tests)

    def mutate_from_exclusion_test_intersection(self) -> int:
        """Replace every tested predicate by the conjunction of its exclusion constraints."""
        self._reset()
        for tc in self.passing_tests():
            if tc.polarity is not TestPolarity.Exclusion:
                if tc.polarity is TestPolarity.Inclusion and self._is_rewritable(tc):
                    self._rewrite(tc.target, keep_wheat=False)
                elif not tc.is_analyzable:
                    self.skipped_tests.append(tc)
                continue
            if (witness := self._characterize(tc)) is None:
                continue
            self._rewrite(tc.target, keep_wheat=False).constraints.append(witness)
            self.reconciled_tests.append(tc)
        return len(self.reconciled_tests)

    def mutate_to_vacuity(self) -> int:
        """Replace every tested predicate by `{}`."""
        self._reset()
        for tc in self.passing_tests():
            if self._is_rewritable(tc):
                self._rewrite(tc.target, keep_wheat=False)
                self.reconciled_tests.append(tc)
            elif not tc.is_analyzable:
                self.skipped_tests.append(tc)
        return len(self.reconciled_tests)

    def failing_records(self) -> list[TestOutcomeRecord]:
        return [r for r in parse_failing_tests(self.trace) if r.name]

    def failing_tests(self) -> list[StudentTest]:
        """The student tests the trace reports as failing, in report order."""
        found: list[StudentTest] = []
        for record in self.failing_records():
            if (tc := self._attribute(record)) is not None and tc not in found:
                found.append(tc)
        return found

    def passing_tests(self) -> list[StudentTest]:
        failing = self.failing_tests()
        return [tc for tc in self.suite.tests if tc not in failing]

    def as_program_text(self) -> str:
        """The reference model with this mutant's rewrites, followed by the student's helpers."""
        text = self.wheat
        for target, rewrite in self._rewrites.items():
            pattern = regex.compile(rf"\bpred(\s+){regex.escape(target)}(?![\w'])")
            text = pattern.sub(lambda m: f"pred{m.group(1)}{target}{WHEAT_SUFFIX}", text, count=1)
            text = f"{text.rstrip()}\n\n{rewrite.render()}\n"
        if self.student_predicates:
            text = f"{text}\n{self.student_predicates}\n"
        return text

    def skipped_tests_text(self) -> str:
        return "\n".join(" ".join(tc.text.split()) for tc in self.skipped_tests)

    def _reset(self) -> None:
        self.reconciled_tests = []
        self.skipped_tests = []
        self._rewrites = {}

    def _attribute(self, record: TestOutcomeRecord) -> StudentTest | None:
        if record.location is not None:
            line = record.location.line - self.line_offset
            for tc in self.suite.tests:
                if tc.covers_line(line):
                    return tc
        for tc in self.suite.tests:
            if tc.name == record.name:
                return tc
        return None

    def _is_rewritable(self, tc: StudentTest) -> bool:
        return tc.is_analyzable and tc.target in self.predicates

    def _characterize(self, tc: StudentTest) -> str | None:
        """The formula a test pins its target to, or None after marking it skipped."""
        if not self._is_rewritable(tc):
            self.skipped_tests.append(tc)
            return None

        if tc.kind is TestKind.Assertion:
            assert tc.formula is not None
            return tc.formula

        try:
            instance = instance_formula(tc.body or "", self.sigs)
        except InstanceError:
            logger.debug("could not characterize example", extra={"test": tc.name})
            self.skipped_tests.append(tc)
            return None
        return instance if tc.polarity is TestPolarity.Inclusion else f"not {instance}"

    def _rewrite(self, target: str | None, keep_wheat: bool = True) -> _Rewrite:
        assert target is not None
        if target not in self._rewrites:
            self._rewrites[target] = _Rewrite(target)
        rewrite = self._rewrites[target]
        rewrite.keep_wheat = rewrite.keep_wheat and keep_wheat
        return rewrite
