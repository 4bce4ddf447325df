from enum import Enum
from typing import Dict, FrozenSet


class SymbolKind(Enum):
    PREDICATE = "predicate"
    FUNCTOR = "functor"
    TASK = "task"
    TASK_ID = "task-id"
    VARIABLE = "variable"
    CONSTANT = "constant"
    TYPE = "type"


class Connector(Enum):
    # アトム
    ATOM = "atom"
    FN_HEAD = "fn-head"
    EQUAL_ATOM = "="
    # 論理結合子
    AND = "and"
    OR = "or"
    NOT = "not"
    IMPLY = "imply"
    FORALL = "forall"
    EXISTS = "exists"
    TRUE = "true"
    FALSE = "false"
    # 比較
    LESS = "<"
    LESS_OR_EQUAL = "<="
    EQUAL_COMPARISON = "=="
    GREATER_OR_EQUAL = ">="
    GREATER = ">"
    # 算術
    PLUS = "+"
    MINUS = "-"
    MULTIPLICATION = "*"
    DIVISION = "/"
    UMINUS = "uminus"
    NUMBER = "number"
    # 数値効果
    ASSIGN = "assign"
    INCREASE = "increase"
    DECREASE = "decrease"
    SCALE_UP = "scale-up"
    SCALE_DOWN = "scale-down"
    FN_ATOM = "fn-atom"
    WHEN = "when"
    TIMED_LITERAL = "at"
    # 時間
    AT_START = "at start"
    AT_END = "at end"
    OVER_ALL = "over all"
    F_EXP = "f-exp"
    F_EXP_T = "f-exp-t"
    TIME_VAR = "?t"
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"
    IS_VIOLATED = "is-violated"
    # 状態軌道制約
    ALWAYS = "always"
    SOMETIME = "sometime"
    AT_MOST_ONCE = "at-most-once"
    SOMETIME_AFTER = "sometime-after"
    SOMETIME_BEFORE = "sometime-before"
    WITHIN = "within"
    HOLD_AFTER = "hold-after"
    ALWAYS_WITHIN = "always-within"
    HOLD_DURING = "hold-during"
    # HTN
    TASK = "task"
    TASK_ID = "task-id"
    TIMED_TASK_ID = "timed-task-id"
    LESS_ORDERING = "< ordering"
    LESS_OR_EQUAL_ORDERING = "<= ordering"
    GREATER_ORDERING = "> ordering"
    GREATER_OR_EQUAL_ORDERING = ">= ordering"
    EQUAL_ORDERING = "= ordering"
    HOLD_BEFORE_METHOD = "hold-before"
    HOLD_AFTER_METHOD = "hold-after-method"
    HOLD_BETWEEN_METHOD = "hold-between"
    # 下位工程で扱わないもの
    PREFERENCE = "preference"
    DURATION_ATTRIBUTE = "?duration"

    def __str__(self):
        return self.name


ATOMIC: FrozenSet[Connector] = frozenset({
    Connector.ATOM, Connector.FN_HEAD, Connector.EQUAL_ATOM,
})

QUANTIFIERS: FrozenSet[Connector] = frozenset({Connector.FORALL, Connector.EXISTS})

COMPARISONS: FrozenSet[Connector] = frozenset({
    Connector.LESS, Connector.LESS_OR_EQUAL, Connector.EQUAL_COMPARISON,
    Connector.GREATER_OR_EQUAL, Connector.GREATER,
})

BINARY: FrozenSet[Connector] = COMPARISONS | frozenset({
    Connector.IMPLY, Connector.FN_ATOM, Connector.WHEN, Connector.TIMED_LITERAL,
    Connector.ASSIGN, Connector.INCREASE, Connector.DECREASE,
    Connector.SCALE_UP, Connector.SCALE_DOWN,
    Connector.MULTIPLICATION, Connector.DIVISION, Connector.MINUS, Connector.PLUS,
    Connector.SOMETIME_AFTER, Connector.SOMETIME_BEFORE, Connector.WITHIN,
    Connector.HOLD_AFTER,
})

UNARY: FrozenSet[Connector] = frozenset({
    Connector.AT_START, Connector.AT_END, Connector.OVER_ALL,
    Connector.MINIMIZE, Connector.MAXIMIZE, Connector.UMINUS, Connector.NOT,
    Connector.ALWAYS, Connector.SOMETIME, Connector.AT_MOST_ONCE,
    Connector.F_EXP, Connector.F_EXP_T,
})

TERNARY: FrozenSet[Connector] = frozenset({
    Connector.ALWAYS_WITHIN, Connector.HOLD_DURING,
})

# 子も引数も持たず、そのまま通してよい葉
INERT: FrozenSet[Connector] = frozenset({
    Connector.TIME_VAR, Connector.IS_VIOLATED, Connector.TRUE, Connector.FALSE,
})

ORDERINGS: FrozenSet[Connector] = frozenset({
    Connector.LESS_ORDERING, Connector.LESS_OR_EQUAL_ORDERING,
    Connector.GREATER_ORDERING, Connector.GREATER_OR_EQUAL_ORDERING,
    Connector.EQUAL_ORDERING,
})

# 否定をリテラルまで押し込むときの比較の反転
NEGATED_COMPARISON: Dict[Connector, Connector] = {
    Connector.LESS: Connector.GREATER_OR_EQUAL,
    Connector.LESS_OR_EQUAL: Connector.GREATER,
    Connector.GREATER: Connector.LESS_OR_EQUAL,
    Connector.GREATER_OR_EQUAL: Connector.LESS,
}
