from .base import FrozenModel
from .enum import TestKind, TestPolarity


class StudentTest(FrozenModel):
    """A single test statement scanned out of a student's test file.

    `start_line` and `end_line` are 0-based and relative to the test file.
    `formula` holds the property of an assertion; `body` holds the instance
    bindings of an example.
    """

    kind: TestKind
    name: str
    text: str
    start_line: int
    end_line: int
    target: str | None = None
    polarity: TestPolarity = TestPolarity.Unknown
    formula: str | None = None
    body: str | None = None

    @property
    def is_analyzable(self) -> bool:
        return self.kind in (TestKind.Example, TestKind.Assertion) and self.target is not None

    def covers_line(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line
