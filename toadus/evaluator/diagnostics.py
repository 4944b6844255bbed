"""Classify the free-text diagnostics Forge writes to standard error.

Forge reports problems in several shapes depending on which layer raised
them. Each shape is an independent `DiagnosticGrammar`; a line is classified
by the first grammar, in `GRAMMARS` order, that matches it.
"""

from __future__ import annotations

import re as regex
import typing as t

from toadus.lib.util import unique
from toadus.model import SourceLocation, TestOutcomeRecord

WARNING_MARKER: t.Final[str] = "Warning:"

_TEST_NAME = regex.compile(
    r"'(?P<quoted>[^'\s]+)'|\b(?:test|example|theorem|assertion)\s+(?P<bare>[A-Za-z_][\w]*)",
    regex.IGNORECASE,
)
_NOT_NAMES = {"failed", "passed", "is", "for", "at", "in"}


class DiagnosticGrammar(object):
    """One line-level diagnostic shape.

    Arguments:

        - `pattern`: searched anywhere in the line
        - `line`, `column`: 1-based group names
        - `span`: group holding the span, if the shape carries one
        - `span_adjust`: added to the reported span before flooring at 1
        - `filename`: group holding the file path, if any
        - `names_tests`: whether the shape reports a failing test
    """

    def __init__(
        self,
        name: str,
        pattern: str,
        *,
        line: str = "line",
        column: str = "column",
        span: str | None = None,
        span_adjust: int = 0,
        filename: str | None = None,
        names_tests: bool = False,
    ) -> None:
        self.name = name
        self.pattern = regex.compile(pattern)
        self.line = line
        self.column = column
        self.span = span
        self.span_adjust = span_adjust
        self.filename = filename
        self.names_tests = names_tests

    def match(self, text: str) -> TestOutcomeRecord | None:
        m = self.pattern.search(text)
        if m is None:
            return None

        span = int(m.group(self.span)) + self.span_adjust if self.span else -1
        location = SourceLocation(
            filename=m.group(self.filename) if self.filename else None,
            line=max(0, int(m.group(self.line)) - 1),
            column=max(0, int(m.group(self.column)) - 1),
            span=max(1, span),
        )
        name = extract_test_name(text) if self.names_tests else ""
        return TestOutcomeRecord(name=name, location=location, text=text)

    def __repr__(self) -> str:
        return f"<DiagnosticGrammar {self.name}>"


TEST_FAILURE = DiagnosticGrammar(
    "test-failure",
    r"[\\/]*?(?P<file>[^\\/\n\s]*\.frg):(?P<line>\d+):(?P<column>\d+) \(span (?P<span>\d+)\)\]",
    span="span",
    filename="file",
    names_tests=True,
)
SYNTAX_ERROR = DiagnosticGrammar(
    "syntax-error",
    r"[\\/]*?(?P<file>[^\\/\n\s]*\.frg):(?P<line>\d+):(?P<column>\d+):?",
    filename="file",
)
FORGE_ERROR_WITH_PATH = DiagnosticGrammar(
    "forge-error-with-path",
    r"#<path:(?P<file>.*?)> \[line=(?P<line>\d+), column=(?P<column>\d+), offset=(?P<offset>\d+)\]",
    filename="file",
)
FORGE_ERROR = DiagnosticGrammar(
    "forge-error",
    r".*\[line=(?P<line>\d+), column=(?P<column>\d+), offset=(?P<offset>\d+)\]",
)
GENERAL_LOC = DiagnosticGrammar(
    "general-loc",
    r"at loc: line (?P<line>\d+), col (?P<column>\d+), span: (?P<span>\d+)",
    span="span",
    span_adjust=-1,
)
GENERAL_SRCLOC = DiagnosticGrammar(
    "general-srcloc",
    r".*\(srcloc #<path:(?P<file>.*?)> (?P<line>\d+) (?P<column>\d+) (?P<offset>\d+) (?P<span>\d+)\)",
    span="span",
    span_adjust=-1,
    filename="file",
    names_tests=True,
)

GRAMMARS: t.Final[tuple[DiagnosticGrammar, ...]] = (
    TEST_FAILURE,
    SYNTAX_ERROR,
    FORGE_ERROR_WITH_PATH,
    FORGE_ERROR,
    GENERAL_LOC,
    GENERAL_SRCLOC,
)


def extract_test_name(line: str) -> str:
    """Name of the test a diagnostic line reports on, or `""`."""
    for m in _TEST_NAME.finditer(line):
        name = m.group("quoted") or m.group("bare")
        if name and name.lower() not in _NOT_NAMES:
            return name
    return ""


def parse_diagnostic_line(line: str) -> TestOutcomeRecord | None:
    for grammar in GRAMMARS:
        if (record := grammar.match(line)) is not None:
            return record
    return None


def parse_failing_tests(text: str) -> list[TestOutcomeRecord]:
    """Records for every recognisable line; informational lines are skipped."""
    records: list[TestOutcomeRecord] = []
    for line in regex.split(r"[\n\r]", text):
        if (record := parse_diagnostic_line(line)) is not None:
            records.append(record)
    return records


def failing_test_names(text: str) -> list[str]:
    return unique(r.name for r in parse_failing_tests(text) if r.name)


def is_consistent(text: str) -> bool:
    """True when, warnings aside, the evaluator wrote nothing to standard error."""
    lines = [line for line in text.split("\n") if not line.startswith(WARNING_MARKER)]
    return "".join(lines).strip() == ""
