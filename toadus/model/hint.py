from __future__ import annotations

import typing as t

import pydantic as p


class HintTable(p.RootModel[dict[str, str]]):
    """Grader test name to pre-authored hint, as published in `<name>.grader.json`."""

    root: dict[str, str] = {}

    def __contains__(self, name: object) -> bool:
        return name in self.root

    def __len__(self) -> int:
        return len(self.root)

    def hint_for(self, name: str) -> str | None:
        return self.root.get(name)

    def names(self) -> list[str]:
        return list(self.root)

    def hints_for(self, names: t.Iterable[str]) -> list[str]:
        return [self.root[n] for n in names if n in self.root]
