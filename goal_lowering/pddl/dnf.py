"""
選言標準形 (DNF) への変換。

[1] 否定をリテラルまで押し込む (NNF)
    imply(a, b)       ==  or(not a, b)
    not and / not or  ->  De Morgan
    not not a         ==  a
    not forall(v, a)  ==  exists(v, not a)   (exists も同様)
    not (< a b)       ==  (>= a b)           (<=, >, >= も同様。= はそのまま否定を残す)

[2] 選言を根まで引き上げる
    or(a, or(b, c))        ==  or(a, b, c)
    and(a, or(b, c))       ==  or(and(a, b), and(a, c))
    exists(v, or(a, b))    ==  or(exists(v, a), exists(v, b))
    forall は中身だけ正規化し、それ自体はリテラル扱い

結果は「OR 以外の1ノード」か「子がリテラルまたはリテラルの AND である OR」。
"""

from typing import List

from .connector import Connector, NEGATED_COMPARISON
from .expression import Expression
from ..config.schema import LoweringConfig
from ..planning.errors import ExpressionDepthError

Clause = List[Expression]

DEFAULT_MAX_DEPTH = LoweringConfig.max_depth


def to_nnf(exp: Expression, max_depth: int = DEFAULT_MAX_DEPTH) -> Expression:
    ExpressionDepthError.check(exp, max_depth)
    return _nnf(exp, False)


def _nnf(exp: Expression, negated: bool) -> Expression:
    # NNF は元の式より深くならないので、to_nnf での深さ検査が _clauses にも効く
    def recurse(child: Expression, neg: bool) -> Expression:
        return _nnf(child, neg)

    connector = exp.connector

    if connector is Connector.NOT:
        return recurse(exp.children[0], not negated)

    if connector is Connector.IMPLY:
        antecedent, consequent = exp.children
        if negated:
            return Expression(Connector.AND, children=[recurse(antecedent, False),
                                                       recurse(consequent, True)])
        return Expression(Connector.OR, children=[recurse(antecedent, True),
                                                  recurse(consequent, False)])

    if connector in (Connector.AND, Connector.OR):
        if negated:
            connector = Connector.OR if connector is Connector.AND else Connector.AND
        return Expression(connector, children=[recurse(c, negated) for c in exp.children])

    if connector in (Connector.FORALL, Connector.EXISTS):
        if negated:
            connector = Connector.EXISTS if connector is Connector.FORALL else Connector.FORALL
        return Expression(connector,
                          children=[recurse(exp.children[0], negated)],
                          quantified_variables=list(exp.quantified_variables))

    if connector in (Connector.TRUE, Connector.FALSE):
        if negated:
            connector = Connector.FALSE if connector is Connector.TRUE else Connector.TRUE
        return Expression(connector)

    if negated and connector in NEGATED_COMPARISON:
        flipped = exp.copy()
        flipped.connector = NEGATED_COMPARISON[connector]
        return flipped

    literal = exp.copy()
    if negated:
        return Expression(Connector.NOT, children=[literal])
    return literal


def to_dnf(exp: Expression, max_depth: int = DEFAULT_MAX_DEPTH) -> Expression:
    """exp を DNF にした新しい式木を返す。exp は変更しない"""
    return _build(_clauses(to_nnf(exp, max_depth)))


def _clauses(exp: Expression) -> List[Clause]:
    """NNF の式を連言節のリスト (選言) にする。[] は偽、[[]] は真"""
    connector = exp.connector

    if connector is Connector.TRUE:
        return [[]]
    if connector is Connector.FALSE:
        return []

    if connector is Connector.OR:
        result: List[Clause] = []
        for child in exp.children:
            result.extend(_clauses(child))
        return _absorb_true(result)

    if connector is Connector.AND:
        result = [[]]
        for child in exp.children:
            parts = _clauses(child)
            result = [left + right for left in result for right in parts]
        return _absorb_true(result)

    if connector is Connector.EXISTS:
        body = _clauses(exp.children[0])
        if not body:
            return []
        if len(body) > 1:
            return [[Expression(Connector.EXISTS,
                                children=[_build([clause])],
                                quantified_variables=list(exp.quantified_variables))]
                    for clause in body]
        return [[Expression(Connector.EXISTS,
                            children=[_build(body)],
                            quantified_variables=list(exp.quantified_variables))]]

    if connector is Connector.FORALL:
        return [[Expression(Connector.FORALL,
                            children=[_build(_clauses(exp.children[0]))],
                            quantified_variables=list(exp.quantified_variables))]]

    return [[exp]]


def _absorb_true(clauses: List[Clause]) -> List[Clause]:
    # 空の節 (真) が1つでもあれば選言全体が真
    if any(not clause for clause in clauses):
        return [[]]
    return clauses


def _build(clauses: List[Clause]) -> Expression:
    if not clauses:
        return Expression(Connector.FALSE)
    disjuncts = []
    for clause in clauses:
        if not clause:
            disjuncts.append(Expression(Connector.TRUE))
        elif len(clause) == 1:
            disjuncts.append(clause[0])
        else:
            disjuncts.append(Expression(Connector.AND, children=list(clause)))
    if len(disjuncts) == 1:
        return disjuncts[0]
    return Expression(Connector.OR, children=disjuncts)
