"""
式木。

パース直後は記号が名前 (str)、lowering 後は表の添字 (int) を持つ。
同じ Expression クラスで両方を表す。

    変数:   SymbolKind.VARIABLE  名前は "?x"、lowering 後は負の整数 (-1, -2, ...)
    定数:   SymbolKind.CONSTANT  名前、lowering 後は定数表の添字 (>= 0)
"""

from dataclasses import dataclass, field
from typing import Generic, List, Optional, Tuple, TypeVar, Union
import copy

from .connector import Connector, SymbolKind, ATOMIC

V = TypeVar("V", str, int)


@dataclass(frozen=True)
class Symbol(Generic[V]):
    kind: SymbolKind
    value: V

    def __str__(self):
        return str(self.value)


@dataclass
class TypedSymbol(Generic[V]):
    """量化変数の宣言。types が複数なら either 型。"""
    kind: SymbolKind
    value: V
    types: List[Symbol] = field(default_factory=list)


@dataclass(frozen=True)
class AtomKey:
    """fluent 表のキー。構造で比較・ハッシュする。"""
    connector: Connector
    symbol: Optional[Tuple[SymbolKind, int]]
    arguments: Tuple[int, ...]

    def __str__(self):
        head = "=" if self.symbol is None else str(self.symbol[1])
        return f"({' '.join([head] + [str(a) for a in self.arguments])})"


@dataclass
class Expression(Generic[V]):
    connector: Connector
    symbol: Optional[Symbol] = None
    arguments: List[Symbol] = field(default_factory=list)
    children: List["Expression"] = field(default_factory=list)
    value: Optional[float] = None
    quantified_variables: List[TypedSymbol] = field(default_factory=list)
    task_id: Optional[Symbol] = None
    is_primitive: bool = False
    time_specifier: Optional[str] = None

    def is_atomic(self) -> bool:
        return self.connector in ATOMIC

    def key(self) -> AtomKey:
        if not self.is_atomic():
            raise TypeError(f"Only atoms have a fluent key, got {self.connector}")
        symbol = None if self.symbol is None else (self.symbol.kind, self.symbol.value)
        return AtomKey(self.connector, symbol, tuple(arg.value for arg in self.arguments))

    def copy(self) -> "Expression":
        return copy.deepcopy(self)

    def depth(self) -> int:
        """入れ子の深さ。複数変数の量化子は1変数ずつの段として数える。再帰しない"""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            exp, d = stack.pop()
            if len(exp.quantified_variables) > 1:
                d += len(exp.quantified_variables) - 1
            deepest = max(deepest, d)
            stack.extend((child, d + 1) for child in exp.children)
        return deepest

    def __str__(self):
        if self.connector is Connector.NUMBER:
            return str(self.value)
        if self.is_atomic() or self.connector is Connector.TASK:
            head = "=" if self.symbol is None else str(self.symbol)
            parts = [head] + [str(arg) for arg in self.arguments]
            return f"({' '.join(parts)})"
        if self.connector in (Connector.TASK_ID, Connector.TIMED_TASK_ID):
            return f"({self.connector.value} {self.task_id})"
        parts = [self.connector.value]
        if self.quantified_variables:
            decl = " ".join(f"{q.value} - {'|'.join(str(t) for t in q.types)}"
                            for q in self.quantified_variables)
            parts.append(f"({decl})")
        parts.extend(str(child) for child in self.children)
        return f"({' '.join(parts)})"


# --- 名前ベースの式を組み立てるヘルパ ---

Arg = Union[str, int]


def _argument(arg: Arg) -> Symbol:
    # PDDL の慣習どおり "?" で始まるものを変数とみなす
    if isinstance(arg, str) and arg.startswith("?"):
        return Symbol(SymbolKind.VARIABLE, arg)
    return Symbol(SymbolKind.CONSTANT, arg)


def atom(predicate: str, *args: Arg) -> Expression:
    return Expression(Connector.ATOM,
                      symbol=Symbol(SymbolKind.PREDICATE, predicate),
                      arguments=[_argument(a) for a in args])


def fn_head(functor: str, *args: Arg) -> Expression:
    return Expression(Connector.FN_HEAD,
                      symbol=Symbol(SymbolKind.FUNCTOR, functor),
                      arguments=[_argument(a) for a in args])


def equal(left: Arg, right: Arg) -> Expression:
    return Expression(Connector.EQUAL_ATOM, arguments=[_argument(left), _argument(right)])


def and_(*children: Expression) -> Expression:
    return Expression(Connector.AND, children=list(children))


def or_(*children: Expression) -> Expression:
    return Expression(Connector.OR, children=list(children))


def not_(child: Expression) -> Expression:
    return Expression(Connector.NOT, children=[child])


def imply(antecedent: Expression, consequent: Expression) -> Expression:
    return Expression(Connector.IMPLY, children=[antecedent, consequent])


def _quantifier(connector: Connector,
                variables: List[Tuple[str, Union[str, List[str]]]],
                body: Expression) -> Expression:
    decls = []
    for name, types in variables:
        if isinstance(types, str):
            types = [types]
        decls.append(TypedSymbol(SymbolKind.VARIABLE, name,
                                 [Symbol(SymbolKind.TYPE, t) for t in types]))
    return Expression(connector, children=[body], quantified_variables=decls)


def forall(variables, body: Expression) -> Expression:
    """variables: [("?x", "block"), ("?y", ["truck", "plane"])]"""
    return _quantifier(Connector.FORALL, variables, body)


def exists(variables, body: Expression) -> Expression:
    return _quantifier(Connector.EXISTS, variables, body)


def number(value: float) -> Expression:
    return Expression(Connector.NUMBER, value=value)


def compare(connector: Connector, left: Expression, right: Expression) -> Expression:
    return Expression(connector, children=[left, right])


def true() -> Expression:
    return Expression(Connector.TRUE)


def false() -> Expression:
    return Expression(Connector.FALSE)


def task(name: str, *args: Arg, task_id: Optional[str] = None,
         time_specifier: Optional[str] = None) -> Expression:
    """task_id はソース上のラベル ("T3" など)。"""
    return Expression(Connector.TASK,
                      symbol=Symbol(SymbolKind.TASK, name),
                      arguments=[_argument(a) for a in args],
                      task_id=None if task_id is None else Symbol(SymbolKind.TASK_ID, task_id),
                      time_specifier=time_specifier)


def ground_atom(predicate: int, *constants: int) -> Expression:
    """lowering 後の形をした基底アトム。grounding 側で fluent を登録するときに使う。"""
    return Expression(Connector.ATOM,
                      symbol=Symbol(SymbolKind.PREDICATE, predicate),
                      arguments=[Symbol(SymbolKind.CONSTANT, c) for c in constants])
