"""Tests for scanning Forge test files into statements."""

from __future__ import annotations

import pytest

from toadus.forge import scan_tests, ScanError, strip_comments
from toadus.forge.suite import find_top_level, matching, unwrap
from toadus.model import StudentTest, TestKind, TestPolarity


def by_name(tests: list[StudentTest]) -> dict[str, StudentTest]:
    return {tc.name: tc for tc in tests}


class TestScanSuite(object):
    @pytest.fixture
    def scanned(self, student_tests: str) -> dict[str, StudentTest]:
        return by_name(scan_tests(strip_comments(student_tests)).tests)

    def test_finds_every_statement(self, student_tests: str) -> None:
        suite = scan_tests(strip_comments(student_tests))

        assert [tc.kind for tc in suite.tests] == [
            TestKind.Example,
            TestKind.Example,
            TestKind.Assertion,
            TestKind.Assertion,
            TestKind.TestExpect,
        ]
        assert suite.targets() == ["wellformed"]

    def test_examples(self, scanned: dict[str, StudentTest]) -> None:
        negative, positive = scanned["selfLoop"], scanned["line"]

        assert negative.polarity is TestPolarity.Exclusion
        assert positive.polarity is TestPolarity.Inclusion
        assert negative.target == positive.target == "wellformed"
        assert (negative.start_line, negative.end_line) == (10, 13)
        assert (positive.start_line, positive.end_line) == (14, 17)
        assert positive.body is not None and "edges = `N0->`N1" in positive.body

    def test_assertions(self, scanned: dict[str, StudentTest]) -> None:
        sufficient = next(tc for tc in scanned.values() if tc.start_line == 18)
        necessary = next(tc for tc in scanned.values() if tc.start_line == 19)

        assert sufficient.formula == "twoNodes"
        assert sufficient.polarity is TestPolarity.Inclusion
        assert necessary.formula == "no edges"
        assert necessary.polarity is TestPolarity.Exclusion
        assert necessary.end_line == 19

    def test_expect_items_are_separate_tests(self, scanned: dict[str, StudentTest]) -> None:
        vacuous = scanned["vacuous"]

        assert vacuous.kind is TestKind.TestExpect
        assert vacuous.covers_line(23)
        assert not vacuous.is_analyzable

    def test_helpers_exclude_tests_and_headers(self, student_tests: str) -> None:
        helpers = scan_tests(strip_comments(student_tests)).helpers

        assert helpers == "pred twoNodes {\n    #Node = 2\n}"


class TestScanShapes(object):
    def test_satisfiability_assertions_have_no_target(self) -> None:
        suite = scan_tests("assert {some edges} is sat for 3 Node\nassert wellformed is theorem")

        assert [tc.kind for tc in suite.tests] == [TestKind.Satisfiability, TestKind.Satisfiability]
        assert all(tc.target is None for tc in suite.tests)
        assert suite.tests[0].formula == "some edges"

    def test_parameterized_target_is_not_analyzable(self) -> None:
        suite = scan_tests("assert {a = b} is necessary for reachable[a, b] for 3 Node")
        tc = suite.tests[0]

        assert tc.kind is TestKind.Assertion
        assert tc.target is None
        assert tc.polarity is TestPolarity.Unknown

    def test_bang_negation(self) -> None:
        suite = scan_tests("example e is {!wellformed} for {\n  Node = `A\n}")
        assert suite.tests[0].polarity is TestPolarity.Exclusion

    def test_identifier_starting_with_not_is_not_negation(self) -> None:
        suite = scan_tests("example e is {nothingWrong} for {\n  Node = `A\n}")
        tc = suite.tests[0]

        assert tc.target == "nothingWrong"
        assert tc.polarity is TestPolarity.Inclusion

    def test_compound_example_target_is_not_analyzable(self) -> None:
        suite = scan_tests("example e is {wellformed and connected} for {\n  Node = `A\n}")
        assert suite.tests[0].target is None

    def test_unbalanced_braces(self) -> None:
        with pytest.raises(ScanError):
            scan_tests("example e is {wellformed} for {\n  Node = `A\n")


class TestBrackets(object):
    def test_matching(self) -> None:
        text = "{ a [ b ] ( c ) }"
        assert matching(text, 0) == len(text) - 1

    def test_mismatched_bracket(self) -> None:
        with pytest.raises(ScanError):
            matching("{ ( }", 0)

    def test_find_top_level_skips_nested(self) -> None:
        import re

        text = "{x is y} is sat"
        m = find_top_level(text, re.compile(r"is\b"))

        assert m is not None and m.start() == 9

    def test_unwrap(self) -> None:
        assert unwrap(" {a and b} ") == "a and b"
        assert unwrap("{a} and {b}") == "{a} and {b}"
