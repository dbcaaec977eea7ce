"""
generator.py — Step Generator
===============================
    generate(identity, operation, value) -> List[Step]

Dispatches on the algorithm's category, then on whether that family has
a specialised generator for the identity.  Everything else gets a single
generic step, so every (identity, operation) pair yields a valid,
non-empty sequence.

Every sequence leaving this module has passed validate_sequence().
"""

import logging
import random
from typing import List, Optional, Union

from algorithms import AlgoInfo, Category, Operation, get_algorithm
from algorithms import dp, graph_search, sorting, tree
from algorithms.step import AlgorithmState, CodeView, Step
from engine.errors import GenerationFailure, StructuralViolation

logger = logging.getLogger(__name__)


FALLBACK_CODE = "// Algorithm code would be shown here"


def generate(
    identity: Union[AlgoInfo, str],
    operation: Union[Operation, str],
    value: float,
    rng: Optional[random.Random] = None,
) -> List[Step]:
    """
    Args:
        identity  : AlgoInfo or registry key.  Unknown keys fall back.
        operation : Operation or its wire string.
        value     : The user's operation input.
        rng       : Source for presentation-only randomness (sorting bars).
    """
    info = identity if isinstance(identity, AlgoInfo) else get_algorithm(identity)
    key = info.key if info else str(identity)
    if isinstance(operation, str):
        operation = Operation.parse(operation)

    try:
        if info is None:
            steps = fallback(key, operation)
        elif info.category == Category.TREE and key in tree.SUPPORTED:
            steps = tree.generate(operation, value)
        elif info.category == Category.GRAPH and key in graph_search.SUPPORTED:
            steps = graph_search.generate(key, value)
        elif info.category == Category.DP and key in dp.SUPPORTED:
            steps = dp.generate(operation, value)
        elif info.category == Category.SORTING and key in sorting.SUPPORTED:
            steps = sorting.generate(key, rng)
        else:
            steps = fallback(key, operation)
    except (ValueError, OverflowError) as e:
        # nan / inf / out-of-range input values
        raise GenerationFailure(f"cannot run {key} {operation.value}({value}): {e}") from e

    validate_sequence(steps)
    logger.debug("generated %d steps for %s/%s(%s)", len(steps), key, operation.value, value)
    return steps


def fallback(key: str, operation: Operation) -> List[Step]:
    """One generic step for identities without a specialised generator."""
    return [
        Step(
            state=AlgorithmState(
                step=1,
                total_steps=1,
                message=f"Step 1: {key} {operation.value} operation",
            ),
            code=CodeView(FALLBACK_CODE, (1,), "cpp"),
            description=f"{key} {operation.value} step 1",
        )
    ]


# ---------------------------------------------------------------------------
# Structural checks
# ---------------------------------------------------------------------------
def validate_sequence(steps: List[Step]) -> None:
    """
    Raises StructuralViolation unless:
      • the sequence is non-empty
      • step i reports step == i + 1 and totalSteps == len(steps)
      • node ids are unique within each snapshot
      • every edge endpoint names a node of the same snapshot
      • every highlighted code line lies inside the code text
    """
    if not steps:
        raise StructuralViolation("empty execution sequence")

    total = len(steps)
    for i, step in enumerate(steps):
        state = step.state
        if state.step != i + 1:
            raise StructuralViolation(f"step {i}: numbered {state.step}, expected {i + 1}")
        if state.total_steps != total:
            raise StructuralViolation(
                f"step {i + 1}: reports {state.total_steps} total steps, sequence has {total}"
            )

        ids = state.node_ids()
        known = set(ids)
        if len(known) != len(ids):
            raise StructuralViolation(f"step {i + 1}: duplicate node ids")
        for edge in state.edges:
            if edge.source not in known or edge.target not in known:
                raise StructuralViolation(
                    f"step {i + 1}: dangling edge {edge.source}->{edge.target}"
                )

        line_count = step.code.line_count
        for line in step.code.highlight_lines:
            if not 1 <= line <= line_count:
                raise StructuralViolation(
                    f"step {i + 1}: highlight line {line} outside 1..{line_count}"
                )
