from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Protocol, Sequence, Set, AbstractSet

from ..pddl.expression import AtomKey, Expression
from .condition import Action
from .errors import UnknownSymbolError


class SymbolTable:
    """名前 -> 添字の表。追加のみで、一度振った添字は変わらない"""

    def __init__(self, kind: str, names: Sequence[str] = ()):
        self.kind = kind
        self._names: List[str] = []
        self._index: Dict[str, int] = {}
        for name in names:
            self.add(name)

    def add(self, name: str) -> int:
        if name in self._index:
            raise ValueError(f"Duplicate {self.kind} symbol '{name}'")
        self._index[name] = len(self._names)
        self._names.append(name)
        return self._index[name]

    def index(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise UnknownSymbolError(self.kind, name) from None

    def __contains__(self, name) -> bool:
        return name in self._index

    def __getitem__(self, index: int) -> str:
        return self._names[index]

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self):
        return f"SymbolTable({self.kind!r}, {self._names!r})"


class ProblemView(Protocol):
    """lowering と condition の finalize が読むだけの部分"""

    @property
    def constants(self) -> SymbolTable: ...

    @property
    def predicates(self) -> SymbolTable: ...

    @property
    def functions(self) -> SymbolTable: ...

    @property
    def types(self) -> SymbolTable: ...

    @property
    def tasks(self) -> SymbolTable: ...

    @property
    def primitive_tasks(self) -> AbstractSet[str]: ...

    @property
    def fluent_index(self) -> Mapping[AtomKey, int]: ...


@dataclass
class ProblemContext:
    """
    問題全体で共有する表。
    goal の finalize だけが predicates / fluents / actions に追記する。
    """
    constants: SymbolTable = field(default_factory=lambda: SymbolTable("constant"))
    predicates: SymbolTable = field(default_factory=lambda: SymbolTable("predicate"))
    functions: SymbolTable = field(default_factory=lambda: SymbolTable("function"))
    types: SymbolTable = field(default_factory=lambda: SymbolTable("type"))
    tasks: SymbolTable = field(default_factory=lambda: SymbolTable("task"))
    primitive_tasks: Set[str] = field(default_factory=set)
    predicate_signatures: List[List[int]] = field(default_factory=list)
    fluents: List[Expression] = field(default_factory=list)
    fluent_index: Dict[AtomKey, int] = field(default_factory=dict)
    actions: List[Action] = field(default_factory=list)

    @staticmethod
    def from_names(constants: Sequence[str] = (),
                   predicates: Sequence[str] = (),
                   functions: Sequence[str] = (),
                   types: Sequence[str] = (),
                   tasks: Sequence[str] = (),
                   primitive_tasks: Sequence[str] = ()) -> "ProblemContext":
        """名前のリストから表を作る。述語のシグネチャは空で埋める"""
        context = ProblemContext(
            constants=SymbolTable("constant", constants),
            predicates=SymbolTable("predicate", predicates),
            functions=SymbolTable("function", functions),
            types=SymbolTable("type", types),
            tasks=SymbolTable("task", tasks),
            primitive_tasks=set(primitive_tasks),
        )
        context.predicate_signatures = [[] for _ in predicates]
        return context

    def register_fluent(self, fluent: Expression) -> int:
        key = fluent.key()
        if key in self.fluent_index:
            return self.fluent_index[key]
        index = len(self.fluents)
        self.fluents.append(fluent)
        self.fluent_index[key] = index
        return index
