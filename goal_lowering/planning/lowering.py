"""
名前ベースの式木を添字ベースの式木に変換する (lowering)。

変数の符号化:
    scope は外側の量化子から順に束縛された変数名のタプル。
    k 番目 (1始まり) に束縛された変数は -k になる。
    量化子は scope のコピーを伸ばして子に渡すので、兄弟の部分木には見えない。

擬似コード:
  lower(exp, scope):
    match exp.connector:
      ATOM / FN_HEAD / EQUAL_ATOM -> 記号を表で引き、引数を変数なら -k、定数なら添字に
      AND / OR                    -> 全ての子を同じ scope で lower
      FORALL / EXISTS             -> 先頭の変数を scope に足し、残りの変数は入れ子の量化子に
      二項 / 単項 / 三項          -> 決まった数の子を同じ scope で lower
      TASK                        -> タスク表を引き、primitive か判定、ラベル "T3" -> 3
      順序制約                    -> 2つの子を TASK_ID / TIMED_TASK_ID の葉に
      hold-before/after/between   -> タスクは TASK_ID の葉、残りの式は空の scope で lower
      それ以外                    -> UnsupportedConnectorError
"""

import re
from typing import List, Optional, Sequence, Tuple

from ..config.schema import LoweringConfig
from ..pddl.connector import (
    Connector, SymbolKind,
    ATOMIC, BINARY, UNARY, TERNARY, INERT, ORDERINGS, QUANTIFIERS,
)
from ..pddl.expression import Expression, Symbol, TypedSymbol
from ..pddl.types import type_label
from .errors import (
    ExpressionDepthError, MalformedTaskIdError, UnboundVariableError,
    UnexpectedExpressionError, UnsupportedConnectorError,
)
from .problem import ProblemView

Scope = Tuple[str, ...]

_TASK_ID_LABEL = re.compile(r".([0-9]+)")


def lower_expression(exp: Expression,
                     scope: Sequence[str],
                     problem: ProblemView,
                     config: Optional[LoweringConfig] = None) -> Expression:
    """exp を添字ベースの新しい式木に変換する。exp 自体は変更しない"""
    config = config or LoweringConfig()
    ExpressionDepthError.check(exp, config.max_depth)
    return _lower(exp, tuple(scope), problem)


def _lower(exp: Expression, scope: Scope, problem: ProblemView) -> Expression:
    def recurse(child: Expression, child_scope: Scope = scope) -> Expression:
        return _lower(child, child_scope, problem)

    connector = exp.connector
    int_exp = Expression(connector)

    if connector in ATOMIC:
        if connector is Connector.ATOM:
            int_exp.symbol = Symbol(SymbolKind.PREDICATE, problem.predicates.index(exp.symbol.value))
        elif connector is Connector.FN_HEAD:
            int_exp.symbol = Symbol(SymbolKind.FUNCTOR, problem.functions.index(exp.symbol.value))
        # EQUAL_ATOM は記号を持たない
        int_exp.arguments = lower_arguments(exp.arguments, scope, problem)

    elif connector in (Connector.AND, Connector.OR):
        int_exp.children = [recurse(child) for child in exp.children]

    elif connector in QUANTIFIERS:
        int_exp.quantified_variables, int_exp.children = _lower_quantifier(exp, scope, recurse, problem)

    elif connector in BINARY:
        _expect_children(exp, 2)
        int_exp.children = [recurse(exp.children[0]), recurse(exp.children[1])]

    elif connector in UNARY:
        _expect_children(exp, 1)
        int_exp.children = [recurse(exp.children[0])]

    elif connector is Connector.NUMBER:
        int_exp.value = exp.value

    elif connector in TERNARY:
        _expect_children(exp, 3)
        int_exp.children = [recurse(child) for child in exp.children]

    elif connector in INERT:
        pass

    elif connector is Connector.TASK:
        name = exp.symbol.value
        int_exp.symbol = Symbol(SymbolKind.TASK, problem.tasks.index(name))
        int_exp.is_primitive = name in problem.primitive_tasks
        int_exp.arguments = lower_arguments(exp.arguments, scope, problem)
        # メソッド本体を符号化しているときはラベルがない
        if exp.task_id is not None:
            int_exp.task_id = Symbol(SymbolKind.TASK_ID, parse_task_id(exp.task_id.value))

    elif connector in ORDERINGS:
        _expect_children(exp, 2)
        int_exp.children = [_task_id_node(child, timed=child.time_specifier is not None)
                            for child in exp.children]

    elif connector in (Connector.HOLD_BEFORE_METHOD, Connector.HOLD_AFTER_METHOD):
        _expect_children(exp, 2)
        int_exp.children = [_task_id_node(exp.children[0]),
                            recurse(exp.children[1], ())]

    elif connector is Connector.HOLD_BETWEEN_METHOD:
        _expect_children(exp, 3)
        int_exp.children = [_task_id_node(exp.children[0]),
                            _task_id_node(exp.children[1]),
                            recurse(exp.children[2], ())]

    else:
        raise UnsupportedConnectorError(connector)

    return int_exp


def lower_arguments(arguments: Sequence[Symbol], scope: Scope, problem: ProblemView) -> List[Symbol]:
    args = []
    for arg in arguments:
        if arg.kind is SymbolKind.VARIABLE:
            args.append(Symbol(SymbolKind.VARIABLE, variable_index(arg.value, scope)))
        else:
            args.append(Symbol(SymbolKind.CONSTANT, problem.constants.index(arg.value)))
    return args


def variable_index(name: str, scope: Scope) -> int:
    """scope の先頭から探して -(位置+1) を返す"""
    try:
        return -scope.index(name) - 1
    except ValueError:
        raise UnboundVariableError(name) from None


def parse_task_id(label: str) -> int:
    """"T12" のような出現ラベルから整数部を取り出す"""
    m = _TASK_ID_LABEL.fullmatch(label)
    if m is None:
        raise MalformedTaskIdError(label)
    return int(m.group(1))


def _lower_quantifier(exp: Expression, scope: Scope, recurse, problem: ProblemView):
    if not exp.quantified_variables:
        raise UnexpectedExpressionError(exp.connector, "quantifier without variables")
    _expect_children(exp, 1)

    first, rest = exp.quantified_variables[0], exp.quantified_variables[1:]
    type_index = problem.types.index(type_label(first.types))
    int_qvar = TypedSymbol(SymbolKind.VARIABLE, -len(scope) - 1,
                           [Symbol(SymbolKind.TYPE, type_index)])
    new_scope = scope + (first.value,)

    if rest:
        # 残りの変数は同じ種類の量化子を1段ずつ入れ子にする
        body = Expression(exp.connector, children=exp.children, quantified_variables=list(rest))
    else:
        body = exp.children[0]
    return [int_qvar], [recurse(body, new_scope)]


def _task_id_node(exp: Expression, timed: bool = False) -> Expression:
    if exp.task_id is None:
        raise UnexpectedExpressionError(exp.connector, "constraint operand has no task id")
    connector = Connector.TIMED_TASK_ID if timed else Connector.TASK_ID
    return Expression(connector, task_id=Symbol(SymbolKind.TASK_ID, parse_task_id(exp.task_id.value)))


def _expect_children(exp: Expression, n: int) -> None:
    if len(exp.children) != n:
        raise UnexpectedExpressionError(
            exp.connector, f"expected {n} children, got {len(exp.children)}")
