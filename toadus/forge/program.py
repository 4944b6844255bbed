"""Helpers for assembling Forge programs out of models and test files."""

from __future__ import annotations

import re as regex
import typing as t
from pathlib import PurePath

TEST_FILE_SUFFIX: t.Final[str] = ".test.frg"

_BLOCK_COMMENT = regex.compile(r"/\*.*?\*/", regex.DOTALL)
_LINE_COMMENT = regex.compile(r"(--|//).*$", regex.MULTILINE)
_HEADER_LINE = regex.compile(r"^[ \t]*(#lang\b.*|open[ \t]+\".*\".*)$", regex.MULTILINE)


def strip_comments(text: str) -> str:
    """Remove `/* */`, `--` and `//` comments, keeping line numbering intact."""

    def blank(m: regex.Match[str]) -> str:
        return "\n" * m.group(0).count("\n")

    text = _BLOCK_COMMENT.sub(blank, text)
    return _LINE_COMMENT.sub("", text)


def blank_headers(text: str) -> str:
    """Blank out `#lang` and `open "..."` lines so a test file can be appended to a model."""
    return _HEADER_LINE.sub("", text)


def combine_tests_with_model(model: str, tests: str) -> str:
    """Build the program the evaluator runs: the model followed by the tests.

    The tests start on the line after the model's last line; `first_appended_line`
    recovers that position from the model alone.
    """
    return f"{model}\n{blank_headers(tests)}"


def first_appended_line(model: str) -> int:
    """0-based line in a combined program where the test text begins."""
    return model.count("\n") + 1


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def assignment_name(test_file_name: str) -> str:
    """`/home/s/hw/ttt.test.frg` -> `ttt`, the key under which artifacts are published."""
    base = PurePath(test_file_name).name
    if base.endswith(TEST_FILE_SUFFIX):
        return base[: -len(TEST_FILE_SUFFIX)]
    return PurePath(base).stem
