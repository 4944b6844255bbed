"""Choosing and presenting hint candidates."""

from __future__ import annotations

import random
import typing as t

from . import messages

MAX_HINTS: t.Final[int] = 3

T = t.TypeVar("T")


def choose_n(candidates: t.Sequence[T], n: int = MAX_HINTS, rng: random.Random | None = None) -> list[T]:
    """Up to `n` distinct candidates in random order; `candidates` is left untouched."""
    pool = list(candidates)
    (rng or random).shuffle(pool)
    return pool[: max(0, n)]


def format_failure_hints(
    candidates: t.Sequence[str], n: int = MAX_HINTS, rng: random.Random | None = None
) -> str:
    if not candidates:
        return ""
    return "\n".join(f"{messages.FAILURE_HINT_PREFIX}{h}" for h in choose_n(candidates, n, rng))


def format_thoroughness_hints(
    candidates: t.Sequence[str], n: int = MAX_HINTS, rng: random.Random | None = None
) -> str:
    if not candidates:
        return messages.NO_THOROUGHNESS_HINT_MESSAGE
    return "\n".join(f"{messages.THOROUGHNESS_HINT_PREFIX}{h}" for h in choose_n(candidates, n, rng))


def hint_difference(inclusion: t.Sequence[str], exclusion: t.Sequence[str], vacuous: t.Sequence[str]) -> list[str]:
    """`inclusion \\ (exclusion \\ vacuous)`, keeping the order of `inclusion`.

    Hints the exclusion mutant passes but the vacuous one does not are
    behaviours the student's exclusion tests already cover.
    """
    covered = {h for h in exclusion if h not in set(vacuous)}
    return [h for h in inclusion if h not in covered]


def only_ambiguous(candidates: t.Sequence[str]) -> bool:
    return set(candidates) == {messages.AMBIGUOUS_TEST_MESSAGE}


def is_meaningful(candidates: t.Sequence[str]) -> bool:
    return bool(candidates) and not only_ambiguous(candidates)
