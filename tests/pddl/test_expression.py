import pytest

from goal_lowering.pddl.connector import Connector, SymbolKind
from goal_lowering.pddl.expression import (
    Expression, Symbol, AtomKey,
    atom, and_, equal, fn_head, forall, ground_atom, not_, task,
)
from goal_lowering.pddl.types import type_label


class TestBuilders:
    def test_question_mark_marks_variables(self):
        exp = atom("on", "?x", "b")
        assert exp.arguments[0] == Symbol(SymbolKind.VARIABLE, "?x")
        assert exp.arguments[1] == Symbol(SymbolKind.CONSTANT, "b")

    def test_equal_atom_has_no_symbol(self):
        exp = equal("?x", "a")
        assert exp.connector is Connector.EQUAL_ATOM
        assert exp.symbol is None

    def test_forall_accepts_either_types(self):
        exp = forall([("?v", ["truck", "plane"])], atom("clear", "?v"))
        assert [t.value for t in exp.quantified_variables[0].types] == ["truck", "plane"]

    def test_task_label(self):
        exp = task("deliver", "a", task_id="T3")
        assert exp.task_id == Symbol(SymbolKind.TASK_ID, "T3")

    def test_depth(self):
        assert atom("clear", "a").depth() == 1
        assert and_(not_(atom("clear", "a")), atom("clear", "b")).depth() == 3

    def test_depth_counts_each_quantified_variable(self):
        exp = forall([("?x", "block"), ("?y", "block")], atom("on", "?x", "?y"))
        assert exp.depth() == 3

    def test_depth_of_deep_chain(self):
        exp = atom("clear", "a")
        for _ in range(5000):
            exp = not_(exp)
        assert exp.depth() == 5001


class TestAtomKey:
    def test_structurally_equal_atoms_share_a_key(self):
        assert ground_atom(0, 1, 2).key() == ground_atom(0, 1, 2).key()
        assert hash(ground_atom(0, 1, 2).key()) == hash(ground_atom(0, 1, 2).key())

    def test_argument_order_matters(self):
        assert ground_atom(0, 1, 2).key() != ground_atom(0, 2, 1).key()

    def test_key_of_zero_arity_atom(self):
        key = ground_atom(4).key()
        assert key == AtomKey(Connector.ATOM, (SymbolKind.PREDICATE, 4), ())
        assert str(key) == "(4)"

    def test_key_usable_in_dict(self):
        index = {ground_atom(0, 1).key(): 7}
        assert index[ground_atom(0, 1).key()] == 7

    def test_non_atom_has_no_key(self):
        with pytest.raises(TypeError):
            and_(ground_atom(0)).key()

    def test_function_head_key_differs_from_atom(self):
        head = Expression(Connector.FN_HEAD, symbol=Symbol(SymbolKind.FUNCTOR, 0))
        assert head.key() != ground_atom(0).key()


class TestStr:
    def test_renders_nested(self):
        exp = and_(atom("on", "a", "b"), not_(atom("clear", "?x")))
        assert str(exp) == "(and (on a b) (not (clear ?x)))"

    def test_renders_function_head(self):
        assert str(fn_head("fuel", "a")) == "(fuel a)"


class TestTypeLabel:
    def test_single_type(self):
        assert type_label(["block"]) == "block"

    def test_either_type(self):
        assert type_label(["truck", "plane"]) == "either~truck~plane"

    def test_accepts_symbols(self):
        assert type_label([Symbol(SymbolKind.TYPE, "a"), Symbol(SymbolKind.TYPE, "b")]) == "either~a~b"

    def test_no_type_is_an_error(self):
        with pytest.raises(ValueError):
            type_label([])
