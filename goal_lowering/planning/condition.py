"""
探索側に渡すビット集合表現。

    Condition:  正の fluent 集合 + 負の fluent 集合 + 数値制約のリスト (連言)
    Goal:       最終目標として使う Condition (フィールドの追加なし)
    Action:     前提 Condition と条件付き効果を持つ基底オペレータ
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

import numpy as np

from ..pddl.connector import Connector
from ..pddl.expression import Expression


class BitVector:
    """numpy の bool 配列による固定幅ビット列。幅を超えて set すると伸びる"""

    def __init__(self, width: int = 0, bits: Iterable[int] = ()):
        self._bits = np.zeros(width, dtype=bool)
        for i in bits:
            self.set(i)

    @property
    def width(self) -> int:
        return int(self._bits.shape[0])

    def _grow(self, width: int) -> None:
        if width > self.width:
            self._bits = np.concatenate([self._bits, np.zeros(width - self.width, dtype=bool)])

    def set(self, index: int) -> None:
        if index < 0:
            raise IndexError(f"Negative bit index {index}")
        self._grow(index + 1)
        self._bits[index] = True

    def get(self, index: int) -> bool:
        return 0 <= index < self.width and bool(self._bits[index])

    def ior(self, other: "BitVector") -> "BitVector":
        self._grow(other.width)
        self._bits[:other.width] |= other._bits
        return self

    def __and__(self, other: "BitVector") -> "BitVector":
        width = min(self.width, other.width)
        result = BitVector(width)
        result._bits = self._bits[:width] & other._bits[:width]
        return result

    def cardinality(self) -> int:
        return int(np.count_nonzero(self._bits))

    def is_empty(self) -> bool:
        return not self._bits.any()

    def __iter__(self) -> Iterator[int]:
        return (int(i) for i in np.flatnonzero(self._bits))

    def __eq__(self, other):
        # 末尾の 0 は幅に関係なく同一視する
        return isinstance(other, BitVector) and list(self) == list(other)

    def __repr__(self):
        return f"BitVector({list(self)})"


@dataclass
class NumericConstraint:
    comparator: Connector
    left: Expression
    right: Expression
    negated: bool = False   # (not (= a b)) のように反転できない比較の否定

    def __str__(self):
        text = f"({self.comparator.value} {self.left} {self.right})"
        return f"(not {text})" if self.negated else text


@dataclass
class Condition:
    positive_fluents: BitVector = field(default_factory=BitVector)
    negative_fluents: BitVector = field(default_factory=BitVector)
    numeric_constraints: List[NumericConstraint] = field(default_factory=list)

    def union(self, other: "Condition") -> None:
        self.positive_fluents.ior(other.positive_fluents)
        self.negative_fluents.ior(other.negative_fluents)
        self.numeric_constraints.extend(other.numeric_constraints)

    def is_consistent(self) -> bool:
        """同じ fluent が正負両方に立っていないか"""
        return (self.positive_fluents & self.negative_fluents).is_empty()

    def is_empty(self) -> bool:
        return (self.positive_fluents.is_empty() and self.negative_fluents.is_empty()
                and not self.numeric_constraints)


@dataclass
class Goal(Condition):
    @staticmethod
    def of(condition: Condition) -> "Goal":
        return Goal(condition.positive_fluents,
                    condition.negative_fluents,
                    condition.numeric_constraints)


@dataclass
class Effect:
    positive_fluents: BitVector = field(default_factory=BitVector)
    negative_fluents: BitVector = field(default_factory=BitVector)


@dataclass
class ConditionalEffect:
    effect: Effect
    condition: Condition = field(default_factory=Condition)


@dataclass
class Action:
    name: str
    arity: int = 0
    cost: float = 0.0
    dummy: bool = False
    precondition: Condition = field(default_factory=Condition)
    conditional_effects: List[ConditionalEffect] = field(default_factory=list)

    @property
    def unconditional_effect(self) -> Optional[Effect]:
        for ce in self.conditional_effects:
            if ce.condition.is_empty():
                return ce.effect
        return None
