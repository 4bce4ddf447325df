from typing import Sequence, Union

from .expression import Symbol

EITHER = "either"
SEPARATOR = "~"


def type_label(types: Sequence[Union[Symbol, str]]) -> str:
    """
    型リストを型表のキーに変換する。
    - 1つなら型名そのまま
    - 複数なら "either~t1~t2..." (宣言順)
    """
    names = [t.value if isinstance(t, Symbol) else t for t in types]
    if not names:
        raise ValueError("Quantified variable has no declared type")
    if len(names) > 1:
        return SEPARATOR.join([EITHER] + names)
    return names[0]

