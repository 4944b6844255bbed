"""Tests for classifying evaluator diagnostics."""

from __future__ import annotations

import pytest

from toadus.evaluator import failing_test_names, is_consistent, parse_diagnostic_line, parse_failing_tests
from toadus.evaluator.diagnostics import extract_test_name, GRAMMARS


class TestGrammars(object):
    def test_span_annotated_failure(self) -> None:
        record = parse_diagnostic_line("[/tmp/toadus-abc.frg:25:5 (span 80)] Failed test selfLoop.")

        assert record is not None
        assert record.name == "selfLoop"
        assert record.location is not None
        assert record.location.filename == "toadus-abc.frg"
        assert (record.location.line, record.location.column, record.location.span) == (24, 4, 80)

    def test_bare_syntax_error_has_no_name(self) -> None:
        record = parse_diagnostic_line("/tmp/toadus-abc.frg:3:10: read-syntax: expected a `}`")

        assert record is not None
        assert record.name == ""
        assert record.location is not None
        assert (record.location.line, record.location.column, record.location.span) == (2, 9, 1)

    def test_structured_error_with_path(self) -> None:
        record = parse_diagnostic_line("bad join #<path:/tmp/toadus-abc.frg> [line=7, column=3, offset=120]")

        assert record is not None
        assert record.location is not None
        assert record.location.filename == "/tmp/toadus-abc.frg"
        assert (record.location.line, record.location.column) == (6, 2)

    def test_structured_error_without_path(self) -> None:
        record = parse_diagnostic_line("unbound identifier [line=12, column=1, offset=300]")

        assert record is not None
        assert record.location is not None
        assert record.location.filename is None
        assert (record.location.line, record.location.column) == (11, 0)

    def test_at_loc_reduces_span(self) -> None:
        record = parse_diagnostic_line("arity mismatch at loc: line 4, col 2, span: 9")

        assert record is not None
        assert record.location is not None
        assert (record.location.line, record.location.column, record.location.span) == (3, 1, 8)

    def test_srcloc_names_test(self) -> None:
        record = parse_diagnostic_line("Theorem acyclic failed (srcloc #<path:/tmp/toadus-abc.frg> 40 4 900 21)")

        assert record is not None
        assert record.name == "acyclic"
        assert record.location is not None
        assert (record.location.line, record.location.column, record.location.span) == (39, 3, 20)

    def test_first_matching_grammar_wins(self) -> None:
        line = "[/tmp/x.frg:5:1 (span 4)] Failed test t1 (srcloc #<path:/tmp/x.frg> 9 9 9 9)"
        record = parse_diagnostic_line(line)

        assert record is not None
        assert record.location is not None
        assert record.location.span == 4
        assert GRAMMARS[0].match(line) == record

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "Warning: unused sig",
            "Sterling running. Hit enter to stop service.",
            "#vars: (size-variables 120); #primary: (size-primary 40)",
            "test suite for wellformed passed",
        ],
    )
    def test_unrecognized_lines(self, line: str) -> None:
        assert parse_diagnostic_line(line) is None


class TestNormalization(object):
    def test_line_and_column_one_become_zero(self) -> None:
        record = parse_diagnostic_line("[/tmp/x.frg:1:1 (span 3)] Failed test t1.")

        assert record is not None and record.location is not None
        assert (record.location.line, record.location.column) == (0, 0)

    def test_line_zero_floors_at_zero(self) -> None:
        record = parse_diagnostic_line("oops [line=0, column=0, offset=0]")

        assert record is not None and record.location is not None
        assert (record.location.line, record.location.column) == (0, 0)

    def test_span_floors_at_one(self) -> None:
        record = parse_diagnostic_line("at loc: line 2, col 2, span: 0")

        assert record is not None and record.location is not None
        assert record.location.span == 1


class TestTestNames(object):
    @pytest.mark.parametrize(
        "line, name",
        [
            ("Failed example 'e1'", "e1"),
            ("Failed test selfLoop.", "selfLoop"),
            ("THEOREM acyclic failed", "acyclic"),
            ("assertion nec_1 failed", "nec_1"),
            ("nothing to see", ""),
        ],
    )
    def test_extract_test_name(self, line: str, name: str) -> None:
        assert extract_test_name(line) == name

    def test_failing_test_names_are_deduplicated_in_order(self) -> None:
        text = "\n".join([
            "[/tmp/x.frg:5:1 (span 4)] Failed test b.",
            "/tmp/x.frg:3:10: read-syntax",
            "[/tmp/x.frg:9:1 (span 4)] Failed test a.",
            "[/tmp/x.frg:5:1 (span 4)] Failed test b.",
        ])

        assert failing_test_names(text) == ["b", "a"]
        assert len(parse_failing_tests(text)) == 4

    def test_unrecognized_text_has_no_failures(self) -> None:
        text = "Warning: something\nall tests passed\r\nSterling running."
        assert parse_failing_tests(text) == []


class TestIsConsistent(object):
    @pytest.mark.parametrize("text", ["", "   \n", "Warning: unused variable\nWarning: slow"])
    def test_consistent(self, text: str) -> None:
        assert is_consistent(text) is True

    @pytest.mark.parametrize("text", ["Failed test t1.", "Warning: x\nerror", "  Warning: indented is not a warning"])
    def test_inconsistent(self, text: str) -> None:
        assert is_consistent(text) is False
