"""Shared Forge fixtures.

`student_tests` is laid out so that tests can address statements by line
(0-based, relative to the test file):

    10  example selfLoop is {not wellformed} for { ...
    14  example line is {wellformed} for { ...
    18  assert twoNodes is sufficient for wellformed
    19  assert {no edges} is necessary for wellformed
    23  vacuous: {wellformed} is sat
"""

from __future__ import annotations

import typing as t

import pytest

from toadus.forge import combine_tests_with_model, first_appended_line

WHEAT = """#lang forge

sig Node {
    edges: set Node
}

pred wellformed {
    all n: Node | n not in n.edges
}

pred reachable[a, b: Node] {
    b in a.^edges
}
"""

STUDENT_TESTS = """#lang forge

open "graph.frg"

-- helper
pred twoNodes {
    #Node = 2
}

test suite for wellformed {
    example selfLoop is {not wellformed} for {
        Node = `N0
        edges = `N0->`N0
    }
    example line is {wellformed} for {
        Node = `N0 + `N1
        edges = `N0->`N1
    }
    assert twoNodes is sufficient for wellformed
    assert {no edges} is necessary for wellformed
}

test expect {
    vacuous: {wellformed} is sat
}
"""

LINES = {"selfLoop": 10, "line": 14, "sufficient": 18, "necessary": 19, "vacuous": 23}


@pytest.fixture
def anyio_backend() -> str:
    # the evaluator gateway is built on asyncio subprocesses
    return "asyncio"


@pytest.fixture
def wheat() -> str:
    return WHEAT


@pytest.fixture
def student_tests() -> str:
    return STUDENT_TESTS


@pytest.fixture
def source_text() -> str:
    return combine_tests_with_model(WHEAT, STUDENT_TESTS)


@pytest.fixture
def failure_line() -> t.Callable[[str, str], str]:
    """A span-annotated failure report for the student test at `LINES[key]`."""

    def make(key: str, name: str) -> str:
        line = first_appended_line(WHEAT) + LINES[key] + 1
        return f"[/tmp/toadus-x.frg:{line}:5 (span 80)] Failed test {name}."

    return make
