"""Tests for translating example bindings into formulas."""

from __future__ import annotations

import pytest

from toadus.forge import instance_formula, InstanceError, sig_names


class TestSigNames(object):
    def test_collects_declared_sigs(self) -> None:
        model = "abstract sig Player {}\none sig X, O extends Player {}\nsig Board { places: set Int }"
        assert sig_names(model) == ["Player", "X", "O", "Board"]


class TestInstanceFormula(object):
    def test_atoms_become_distinct_variables(self) -> None:
        body = "\n    Node = `N0 + `N1\n    edges = `N0->`N1\n"
        formula = instance_formula(body, ["Node"])

        assert formula.startswith("(some ex_N0: Node, ex_N1: Node | {")
        assert "ex_N0 != ex_N1" in formula
        assert "(Node = ex_N0 + ex_N1)" in formula
        assert "(edges = ex_N0->ex_N1)" in formula
        assert "`" not in formula
        assert formula.endswith("})")

    def test_atoms_without_a_sig_range_over_univ(self) -> None:
        formula = instance_formula("edges = `A->`B", ["Node"])
        assert "ex_A: univ, ex_B: univ" in formula

    def test_bindings_without_atoms(self) -> None:
        assert instance_formula("no edges\n#Node = 2", ["Node"]) == "{ (no edges) and (#Node = 2) }"

    def test_empty_body_is_rejected(self) -> None:
        with pytest.raises(InstanceError):
            instance_formula("  \n\n", ["Node"])
