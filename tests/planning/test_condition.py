import pytest

from goal_lowering.pddl.connector import Connector
from goal_lowering.pddl.expression import number
from goal_lowering.planning.condition import (
    Action, BitVector, Condition, ConditionalEffect, Effect, Goal, NumericConstraint,
)


class TestBitVector:
    def test_set_grows_width(self):
        bits = BitVector(2)
        bits.set(5)
        assert bits.width == 6
        assert bits.get(5)
        assert not bits.get(4)

    def test_get_out_of_range_is_false(self):
        assert not BitVector(3).get(10)

    def test_negative_index(self):
        with pytest.raises(IndexError):
            BitVector().set(-1)

    def test_ior_in_place(self):
        bits = BitVector(1, [0])
        bits.ior(BitVector(4, [3]))
        assert list(bits) == [0, 3]
        assert bits.cardinality() == 2

    def test_equality_ignores_trailing_width(self):
        assert BitVector(3, [1]) == BitVector(10, [1])
        assert BitVector(3, [1]) != BitVector(3, [2])

    def test_and(self):
        assert list(BitVector(5, [1, 3]) & BitVector(4, [3])) == [3]


class TestCondition:
    def test_union(self):
        c = Condition(BitVector(1, [0]))
        c.union(Condition(BitVector(), BitVector(3, [2])))
        assert list(c.positive_fluents) == [0]
        assert list(c.negative_fluents) == [2]

    def test_consistency(self):
        assert Condition(BitVector(2, [0]), BitVector(2, [1])).is_consistent()
        assert not Condition(BitVector(2, [1]), BitVector(2, [1])).is_consistent()

    def test_goal_of_keeps_fluents(self):
        goal = Goal.of(Condition(BitVector(3, [2])))
        assert isinstance(goal, Condition)
        assert list(goal.positive_fluents) == [2]


class TestAction:
    def test_unconditional_effect(self):
        effect = Effect(BitVector(1, [0]))
        op = Action("dummy-operator", conditional_effects=[ConditionalEffect(effect)])
        assert op.unconditional_effect is effect

    def test_no_unconditional_effect(self):
        op = Action("op", conditional_effects=[
            ConditionalEffect(Effect(), Condition(BitVector(1, [0])))])
        assert op.unconditional_effect is None


class TestNumericConstraint:
    def test_str(self):
        constraint = NumericConstraint(Connector.LESS, number(1), number(2))
        assert str(constraint) == "(< 1 2)"

    def test_negated_str(self):
        constraint = NumericConstraint(Connector.EQUAL_COMPARISON, number(1), number(2), negated=True)
        assert str(constraint) == "(not (== 1 2))"
