"""Scan a Forge test file into individual test statements.

This is not a Forge parser. It recognises the statement shapes the feedback
engine reasons about and treats everything else as opaque text:

    test suite for target { ... }
    example name is {target} for { ... }
    example name is {not target} for { ... }
    assert {formula} is necessary for target
    assert {formula} is sufficient for target
    assert {formula} is sat|unsat|theorem
    test expect name { t1: {formula} is sat ... }

Input is expected to be comment-stripped with line numbering preserved.
"""

from __future__ import annotations

import re as regex
import typing as t

from toadus.model import FrozenModel, StudentTest, TestKind, TestPolarity

from .program import blank_headers

_OPENERS = {"{": "}", "[": "]", "(": ")"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}

_SUITE = regex.compile(r"\btest\s+suite\s+for\s+(?P<target>[A-Za-z_][\w']*)\s*\{")
_STATEMENT = regex.compile(r"\b(?P<keyword>example|assert|test\s+expect)\b")
_EXAMPLE_HEAD = regex.compile(r"example\s+(?P<name>[A-Za-z_][\w']*)\s+is\s+")
_EXPECT_HEAD = regex.compile(r"test\s+expect\s*(?P<name>[A-Za-z_][\w']*)?\s*\{")
_EXPECT_ITEM = regex.compile(r"(?P<name>[A-Za-z_][\w']*)\s*:")
_IDENT = regex.compile(r"^[A-Za-z_][\w']*$")
_NEGATED = regex.compile(r"^(?:not\b|!)\s*(?P<rest>.+)$", regex.DOTALL)
_TARGET = regex.compile(r"\s*(?P<target>[A-Za-z_][\w']*)(?P<args>\s*\[)?")
_VERDICT = regex.compile(r"\s*(?P<verdict>necessary|sufficient|sat|unsat|theorem|checked|forge_error)\b")


class ScannedSuite(FrozenModel):
    tests: list[StudentTest]
    helpers: str

    def targets(self) -> list[str]:
        return list(dict.fromkeys(tc.target for tc in self.tests if tc.target is not None))


class ScanError(ValueError):
    pass


def matching(text: str, open_idx: int) -> int:
    """Index of the bracket closing the one at `open_idx`."""
    stack: list[str] = []
    for i in range(open_idx, len(text)):
        c = text[i]
        if c in _OPENERS:
            stack.append(c)
        elif c in _CLOSERS:
            if not stack or stack[-1] != _CLOSERS[c]:
                raise ScanError(f"unbalanced {c!r} at offset {i}")
            stack.pop()
            if not stack:
                return i
    raise ScanError(f"unclosed {text[open_idx]!r} at offset {open_idx}")


def find_top_level(text: str, pattern: regex.Pattern[str], start: int = 0, end: int | None = None) -> regex.Match[str] | None:
    """First match of `pattern` in `text[start:end]` outside any bracket pair."""
    end = len(text) if end is None else end
    depth = 0
    i = start
    while i < end:
        c = text[i]
        if c in _OPENERS:
            depth += 1
        elif c in _CLOSERS:
            depth -= 1
        elif depth == 0:
            m = pattern.match(text, i, end)
            if m is not None and (i == 0 or not (text[i - 1].isalnum() or text[i - 1] == "_")):
                return m
        i += 1
    return None


def unwrap(expr: str) -> str:
    """Strip one pair of braces that encloses the whole expression."""
    expr = expr.strip()
    if expr.startswith("{"):
        try:
            if matching(expr, 0) == len(expr) - 1:
                return expr[1:-1].strip()
        except ScanError:
            return expr
    return expr


def line_of(text: str, idx: int) -> int:
    return text.count("\n", 0, idx)


def _end_of_line(text: str, idx: int) -> int:
    nl = text.find("\n", idx)
    return len(text) if nl == -1 else nl


def _skip_scope(text: str, idx: int) -> int:
    """Consume an optional trailing `for <scope>` or `for {bounds}` clause."""
    m = regex.compile(r"\s*for\b\s*").match(text, idx)
    if m is None:
        return idx
    if m.end() < len(text) and text[m.end()] == "{":
        return matching(text, m.end()) + 1
    return _end_of_line(text, m.end())


class _Scanner(object):
    def __init__(self, text: str):
        self.text = text
        self.tests: list[StudentTest] = []
        self.spans: list[tuple[int, int]] = []

    def scan(self) -> ScannedSuite:
        pos = 0
        while (m := _STATEMENT.search(self.text, pos)) is not None:
            if self._inside_span(m.start()):
                pos = m.end()
                continue
            keyword = regex.sub(r"\s+", " ", m.group("keyword"))
            match keyword:
                case "example":
                    end = self._example(m.start())
                case "assert":
                    end = self._assertion(m.start())
                case _:
                    end = self._expect(m.start())
            pos = max(end, m.end())

        chars = list(self.text)
        for start, end in self._suite_spans() + self.spans:
            for i in range(start, end):
                if chars[i] != "\n":
                    chars[i] = " "
        helpers = regex.sub(r"\n[ \t]*(?=\n)", "\n", blank_headers("".join(chars)))
        return ScannedSuite(tests=self.tests, helpers=regex.sub(r"\n{3,}", "\n\n", helpers).strip())

    def _suite_spans(self) -> list[tuple[int, int]]:
        spans: list[tuple[int, int]] = []
        for m in _SUITE.finditer(self.text):
            spans.append((m.start(), matching(self.text, m.end() - 1) + 1))
        return spans

    def _inside_span(self, idx: int) -> bool:
        return any(start <= idx < end for start, end in self.spans)

    def _add(self, start: int, end: int, **fields: t.Any) -> int:
        text = self.text[start:end].strip()
        self.spans.append((start, end))
        self.tests.append(
            StudentTest(
                text=text,
                start_line=line_of(self.text, start),
                end_line=line_of(self.text, max(start, end - 1)),
                **fields,
            )
        )
        return end

    def _example(self, start: int) -> int:
        head = _EXAMPLE_HEAD.match(self.text, start)
        if head is None:
            return start + len("example")
        for_kw = find_top_level(self.text, regex.compile(r"for\b"), head.end())
        if for_kw is None:
            return self._add(start, _end_of_line(self.text, head.end()), kind=TestKind.Example, name=head.group("name"))

        expr = unwrap(self.text[head.end() : for_kw.start()])
        after_for = regex.compile(r"\s*\{").match(self.text, for_kw.end())
        body_start = after_for.end() - 1 if after_for else -1
        end = matching(self.text, body_start) + 1 if body_start != -1 else _end_of_line(self.text, for_kw.end())
        body = self.text[body_start + 1 : end - 1] if body_start != -1 else ""

        polarity = TestPolarity.Inclusion
        if (negated := _NEGATED.match(expr)) is not None:
            polarity = TestPolarity.Exclusion
            expr = unwrap(negated.group("rest"))
        target = expr if _IDENT.match(expr) else None
        return self._add(
            start,
            end,
            kind=TestKind.Example,
            name=head.group("name"),
            target=target,
            polarity=polarity if target else TestPolarity.Unknown,
            body=body,
        )

    def _assertion(self, start: int) -> int:
        formula_start = start + len("assert")
        is_kw = find_top_level(self.text, regex.compile(r"is\b"), formula_start)
        if is_kw is None:
            end = _end_of_line(self.text, formula_start)
            return self._add(start, end, kind=TestKind.Satisfiability, name=self._label(start, end))
        formula = unwrap(self.text[formula_start : is_kw.start()])
        verdict = _VERDICT.match(self.text, is_kw.end())
        if verdict is None or verdict.group("verdict") not in ("necessary", "sufficient"):
            end = _skip_scope(self.text, verdict.end() if verdict else is_kw.end())
            end = max(end, _end_of_line(self.text, is_kw.end()))
            return self._add(start, end, kind=TestKind.Satisfiability, name=self._label(start, end), formula=formula)

        for_kw = regex.compile(r"\s*for\b").match(self.text, verdict.end())
        tgt = _TARGET.match(self.text, for_kw.end()) if for_kw else None
        if tgt is None:
            end = _end_of_line(self.text, verdict.end())
            return self._add(start, end, kind=TestKind.Assertion, name=self._label(start, end), formula=formula)
        end = matching(self.text, tgt.end() - 1) + 1 if tgt.group("args") else tgt.end()
        end = _skip_scope(self.text, end)
        necessary = verdict.group("verdict") == "necessary"
        # parameterized targets would need their arguments bound inside the formula
        target = None if tgt.group("args") else tgt.group("target")
        return self._add(
            start,
            end,
            kind=TestKind.Assertion,
            name=self._label(start, end),
            target=target,
            polarity=(TestPolarity.Exclusion if necessary else TestPolarity.Inclusion) if target else TestPolarity.Unknown,
            formula=formula,
        )

    def _expect(self, start: int) -> int:
        head = _EXPECT_HEAD.match(self.text, start)
        if head is None:
            return start + len("test")
        close = matching(self.text, head.end() - 1)
        items: list[regex.Match[str]] = []
        pos = head.end()
        while (item := find_top_level(self.text, _EXPECT_ITEM, pos, close)) is not None:
            items.append(item)
            pos = item.end()
        if not items:
            self._add(start, close + 1, kind=TestKind.TestExpect, name=head.group("name") or self._label(start, close))
            return close + 1
        for i, item in enumerate(items):
            item_end = items[i + 1].start() if i + 1 < len(items) else close
            self._add(item.start(), item_end, kind=TestKind.TestExpect, name=item.group("name"))
        # the block delimiters belong to no single item
        self.spans.append((start, close + 1))
        return close + 1

    def _label(self, start: int, end: int) -> str:
        return " ".join(self.text[start:end].split())


def scan_tests(text: str) -> ScannedSuite:
    """Split a (comment-stripped) test file into test statements and helper text."""
    return _Scanner(text).scan()
