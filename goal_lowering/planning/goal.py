"""
ゴール式を探索側で使える Goal に変換する。

    goal_from_problem(exp, ctx):
      int_exp = lower_expression(exp, (), ctx)      # 名前 -> 添字
      dnf     = to_dnf(int_exp)                      # 選言標準形
      return finalize_goal(dnf, ctx)                 # ビット集合へ

選言肢が複数ある場合は、0引数の述語 dummy-goal とその fluent を追加し、
選言肢ごとに「前提 = その選言肢、効果 = dummy-goal」の補助アクションを
ctx.actions に足す。Goal は dummy-goal の1ビットだけになる。
"""

import logging
from typing import List, Optional

from ..config.schema import LoweringConfig
from ..pddl.connector import Connector, SymbolKind, COMPARISONS, NEGATED_COMPARISON
from ..pddl.dnf import to_dnf
from ..pddl.expression import Expression, Symbol
from .condition import Action, BitVector, Condition, ConditionalEffect, Effect, Goal, NumericConstraint
from .errors import ExpressionDepthError, MissingFluentIndexError, UnexpectedExpressionError
from .lowering import lower_expression
from .problem import ProblemContext, ProblemView

logger = logging.getLogger(__name__)


def goal_from_problem(goal_expression: Expression,
                      context: ProblemContext,
                      config: Optional[LoweringConfig] = None) -> Goal:
    config = config or LoweringConfig()
    return finalize_goal(lower_goal(goal_expression, context, config), context, config)


def lower_goal(goal_expression: Expression,
               context: ProblemView,
               config: Optional[LoweringConfig] = None) -> Expression:
    """lowering と DNF 化まで"""
    config = config or LoweringConfig()
    int_goal = lower_expression(goal_expression, (), context, config)
    dnf = to_dnf(int_goal, config.max_depth)
    logger.debug("Lowered goal %s -> %s", goal_expression.connector, dnf)
    return dnf


def finalize_goal(int_goal: Expression,
                  context: ProblemContext,
                  config: Optional[LoweringConfig] = None) -> Goal:
    config = config or LoweringConfig()
    ExpressionDepthError.check(int_goal, config.max_depth)

    if int_goal.connector is Connector.OR:
        disjuncts = int_goal.children
    else:
        disjuncts = [int_goal]
    if not disjuncts:
        raise UnexpectedExpressionError(Connector.OR, "empty disjunction")

    goals: List[Goal] = []
    for exp in disjuncts:
        if exp.connector is not Connector.AND:
            exp = Expression(Connector.AND, children=[exp])
        goal = Goal.of(_finalize_condition(exp, context, config))
        if not goal.is_consistent():
            logger.warning("Disjunct %s requires a fluent both true and false", exp)
        goals.append(goal)

    logger.debug("Goal has %d disjunct(s)", len(goals))
    if len(goals) == 1:
        return goals[0]
    return _encode_disjunctive_goal(goals, context, config)


def _encode_disjunctive_goal(goals: List[Goal],
                             context: ProblemContext,
                             config: LoweringConfig) -> Goal:
    # dummy-goal 述語と fluent を追加
    name = _fresh_predicate_name(config.dummy_goal_name, context)
    predicate_index = context.predicates.add(name)
    context.predicate_signatures.append([])
    dummy_goal = Expression(Connector.ATOM, symbol=Symbol(SymbolKind.PREDICATE, predicate_index))
    fluent_index = context.register_fluent(dummy_goal)

    # 選言肢ごとに補助アクションを作る。効果はアクションごとに別のインスタンス
    for dis in goals:
        effect = Effect()
        effect.positive_fluents.set(fluent_index)
        op = Action(config.dummy_operator_name, arity=0, cost=0.0, dummy=True)
        op.precondition = dis
        op.conditional_effects.append(ConditionalEffect(effect))
        context.actions.append(op)

    logger.info("Encoded disjunctive goal with %d helper actions on fluent %d (%s)",
                len(goals), fluent_index, name)
    return Goal(positive_fluents=BitVector(fluent_index + 1, [fluent_index]))


def _fresh_predicate_name(base: str, context: ProblemView) -> str:
    name = base
    suffix = 1
    while name in context.predicates:
        name = f"{base}-{suffix}"
        suffix += 1
    return name


def finalize_condition(exp: Expression,
                       context: ProblemView,
                       config: Optional[LoweringConfig] = None) -> Condition:
    """
    連言かつ否定がリテラルまで押し込まれた式を Condition にする。
    - ATOM         -> 正のビット
    - NOT(ATOM)    -> 負のビット
    - AND          -> 子の和集合
    - 比較 / NOT(比較) / TRUE  -> 何もしない (keep_numeric_constraints なら比較を数値制約に残す)
    """
    config = config or LoweringConfig()
    ExpressionDepthError.check(exp, config.max_depth)
    return _finalize_condition(exp, context, config)


def _finalize_condition(exp: Expression, context: ProblemView, config: LoweringConfig) -> Condition:
    condition = Condition()
    connector = exp.connector

    if connector is Connector.ATOM:
        condition.positive_fluents.set(_fluent_index(exp, context))
    elif connector is Connector.NOT:
        child = exp.children[0]
        if child.connector in COMPARISONS:
            _add_comparison(condition, child, config, negated=True)
        elif child.connector is Connector.ATOM:
            condition.negative_fluents.set(_fluent_index(child, context))
        else:
            raise UnexpectedExpressionError(child.connector, "negation of a non-atom")
    elif connector is Connector.AND:
        for e in exp.children:
            condition.union(_finalize_condition(e, context, config))
    elif connector in COMPARISONS:
        _add_comparison(condition, exp, config)
    elif connector is Connector.TRUE:
        pass
    else:
        raise UnexpectedExpressionError(connector)
    return condition


def _add_comparison(condition: Condition, exp: Expression, config: LoweringConfig,
                    negated: bool = False) -> None:
    if not config.keep_numeric_constraints:
        return
    comparator = exp.connector
    # (not (< a b)) は (>= a b) で表せる。= だけは否定のまま残す
    if negated and comparator in NEGATED_COMPARISON:
        comparator, negated = NEGATED_COMPARISON[comparator], False
    condition.numeric_constraints.append(
        NumericConstraint(comparator, exp.children[0], exp.children[1], negated=negated))


def _fluent_index(atom: Expression, context: ProblemView) -> int:
    key = atom.key()
    index = context.fluent_index.get(key)
    if index is None:
        raise MissingFluentIndexError(key)
    return index
