import pytest

from goal_lowering.pddl.expression import ground_atom
from goal_lowering.planning.problem import ProblemContext


@pytest.fixture
def problem():
    """
    blocks 風の小さな問題。fluent は
        0: (on a b)   1: (on b c)   2: (clear a)   3: (clear b)   4: (holding c)
    """
    ctx = ProblemContext.from_names(
        constants=["a", "b", "c"],
        predicates=["on", "clear", "holding"],
        functions=["fuel", "distance"],
        types=["object", "block", "truck", "plane", "either~truck~plane"],
        tasks=["deliver", "drive", "load"],
        primitive_tasks=["drive", "load"],
    )
    on, clear, holding = 0, 1, 2
    a, b, c = 0, 1, 2
    ctx.register_fluent(ground_atom(on, a, b))
    ctx.register_fluent(ground_atom(on, b, c))
    ctx.register_fluent(ground_atom(clear, a))
    ctx.register_fluent(ground_atom(clear, b))
    ctx.register_fluent(ground_atom(holding, c))
    return ctx
