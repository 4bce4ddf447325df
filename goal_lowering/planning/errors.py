from typing import Optional

from ..pddl.connector import Connector
from ..pddl.expression import AtomKey, Expression


class LoweringError(ValueError):
    """式の lowering / finalize で発生するエラーの基底クラス"""


class UnexpectedExpressionError(LoweringError):
    def __init__(self, connector: Optional[Connector], detail: str = ""):
        self.connector = connector
        message = f"Unexpected expression: {connector}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnsupportedConnectorError(LoweringError):
    def __init__(self, connector: Connector):
        self.connector = connector
        super().__init__(f"Connector {connector} cannot be lowered")


class UnboundVariableError(LoweringError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable {name} is not bound by any enclosing quantifier")


class UnknownSymbolError(LoweringError):
    def __init__(self, table: str, name: str):
        self.table = table
        self.name = name
        super().__init__(f"Unknown {table} symbol '{name}'")


class MissingFluentIndexError(LoweringError):
    def __init__(self, key: AtomKey):
        self.key = key
        super().__init__(f"No fluent index for atom {key}")


class MalformedTaskIdError(LoweringError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Malformed task id label '{label}'")


class ExpressionDepthError(LoweringError):
    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Expression nesting exceeds max_depth={max_depth}")

    @classmethod
    def check(cls, exp: Expression, max_depth: int) -> None:
        """再帰で処理する前に深さを調べる"""
        if exp.depth() > max_depth:
            raise cls(max_depth)
