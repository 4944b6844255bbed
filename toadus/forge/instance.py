"""Turn the bindings of a Forge `example` into an equivalent formula.

An example such as

    example line is {wellformed} for {
        Node = `N0 + `N1
        edges = `N0->`N1
    }

describes exactly one instance. A mutant can only talk about that instance in
formula form, so atoms become existentially quantified, pairwise distinct
variables and each binding becomes an equality:

    (some ex_N0: Node, ex_N1: Node | {
        ex_N0 != ex_N1
        (Node = ex_N0 + ex_N1)
        (edges = ex_N0->ex_N1)
    })
"""

from __future__ import annotations

import re as regex

_ATOM = regex.compile(r"`(?P<atom>[A-Za-z_][\w]*)")
_SIG_DECL = regex.compile(
    r"\b(?:(?:abstract|one|lone|some|var)\s+)*sig\s+(?P<names>[A-Za-z_][\w']*(?:\s*,\s*[A-Za-z_][\w']*)*)"
)
_BINDING = regex.compile(r"^(?P<lhs>[A-Za-z_][\w']*)\s*(?:=|in)\s*(?P<rhs>.+)$")


class InstanceError(ValueError):
    pass


def sig_names(model: str) -> list[str]:
    """Names of every sig declared in a (comment-stripped) model."""
    names: list[str] = []
    for m in _SIG_DECL.finditer(model):
        names.extend(n.strip() for n in m.group("names").split(","))
    return list(dict.fromkeys(names))


def variable(atom: str) -> str:
    return f"ex_{atom}"


def instance_formula(body: str, sigs: list[str]) -> str:
    """Formula satisfied by exactly the instance an example's bindings describe."""
    statements = [s.strip() for s in body.splitlines()]
    statements = [s for s in statements if s]
    if not statements:
        raise InstanceError("example has no bindings")

    atom_sig: dict[str, str] = {}
    for stmt in statements:
        if (m := _BINDING.match(stmt)) is not None and m.group("lhs") in sigs:
            for atom in _ATOM.findall(m.group("rhs")):
                atom_sig.setdefault(atom, m.group("lhs"))
    atoms = list(dict.fromkeys(a for stmt in statements for a in _ATOM.findall(stmt)))

    conjuncts = [f"({_ATOM.sub(lambda m: variable(m.group('atom')), stmt)})" for stmt in statements]
    if not atoms:
        return "{ " + " and ".join(conjuncts) + " }"

    distinct = [f"{variable(a)} != {variable(b)}" for i, a in enumerate(atoms) for b in atoms[i + 1 :]]
    decls = ", ".join(f"{variable(a)}: {atom_sig.get(a, 'univ')}" for a in atoms)
    lines = "\n".join(f"        {c}" for c in distinct + conjuncts)
    return f"(some {decls} | {{\n{lines}\n    }})"
