"""Tests for step generation: dispatch, fallback, per-family content, validation."""
import random

import pytest

from algorithms import REGISTRY, Category, Operation, get_algorithm, list_algorithms
from algorithms import dp, graph_search, sorting, tree
from algorithms.generator import FALLBACK_CODE, fallback, generate, validate_sequence
from algorithms.step import AlgorithmState, CodeView, Step, VisualEdge, VisualNode
from engine.errors import GenerationFailure, StructuralViolation


def _node_values(step):
    return {n.id: n.value for n in step.state.nodes}


class TestCatalog:
    def test_fourteen_algorithms_in_four_categories(self):
        assert len(REGISTRY) == 14
        assert {a.category for a in list_algorithms()} == set(Category)

    def test_to_dict_shape(self):
        d = get_algorithm("bst").to_dict()
        assert d["type"] == "bst"
        assert d["category"] == "tree"
        assert d["complexity"] == {"time": "O(log n)", "space": "O(h)"}
        assert d["operations"] == ["insert", "delete", "search"]

    def test_unknown_key(self):
        assert get_algorithm("splay") is None

    def test_operation_parse(self):
        assert Operation.parse("findPath") is Operation.FIND_PATH
        with pytest.raises(ValueError):
            Operation.parse("explode")


class TestEverySequenceIsValid:
    @pytest.mark.parametrize("key", sorted(REGISTRY))
    def test_all_catalog_operations(self, key):
        info = get_algorithm(key)
        for op in info.operations:
            steps = generate(info, op, 42, rng=random.Random(1))
            assert steps
            validate_sequence(steps)
            for i, step in enumerate(steps):
                assert step.state.step == i + 1
                assert step.state.total_steps == len(steps)


class TestFallback:
    @pytest.mark.parametrize("key", ["avl", "heap", "dijkstra", "kruskal", "prim", "knapsack", "lcs"])
    def test_unspecialised_identities_get_one_step(self, key):
        steps = generate(key, get_algorithm(key).operations[0], 5)
        assert len(steps) == 1
        assert steps[0].code.content == FALLBACK_CODE
        assert steps[0].code.highlight_lines == (1,)

    def test_unknown_identity_falls_back(self):
        steps = generate("splay", "insert", 3)
        assert len(steps) == 1
        assert steps[0].state.message == "Step 1: splay insert operation"
        assert steps[0].state.nodes == ()

    def test_fallback_message(self):
        [step] = fallback("lcs", Operation.OPTIMIZE)
        assert step.state.message == "Step 1: lcs optimize operation"


class TestTree:
    def test_eight_steps_with_numbered_messages(self):
        steps = generate("bst", Operation.INSERT, 42)
        assert len(steps) == tree.STEP_COUNT
        for i, step in enumerate(steps):
            assert step.state.message.startswith(f"Step {i + 1}:")
            assert step.description == "Inserting value 42 into the tree"

    def test_insert_adds_node_under_25(self):
        steps = generate("bst", Operation.INSERT, 42)
        first, last = steps[0], steps[-1]
        assert sorted(_node_values(first).values()) == [15, 25, 50, 75]
        assert sorted(_node_values(last).values()) == [15, 25, 42, 50, 75]
        new = next(n for n in last.state.nodes if n.value == 42)
        assert new.highlighted
        assert any(e.target == new.id and e.highlighted for e in last.state.edges)

    def test_insert_duplicate_keeps_tree(self):
        steps = generate("bst", Operation.INSERT, 25)
        assert sorted(_node_values(steps[-1]).values()) == [15, 25, 50, 75]
        assert "already" in steps[-1].state.message

    def test_search_found(self):
        last = generate("bst", Operation.SEARCH, 15)[-1]
        found = next(n for n in last.state.nodes if n.value == 15)
        assert found.color == tree.FOUND_COLOR
        assert "Found 15" in last.state.message

    def test_search_missing(self):
        last = generate("bst", Operation.SEARCH, 99)[-1]
        assert "not in the tree" in last.state.message
        assert last.code.highlight_lines == (tree.LINE_SEARCH_MISS,)

    def test_delete_node_with_two_children(self):
        last = generate("bst", Operation.DELETE, 50)[-1]
        assert sorted(_node_values(last).values()) == [15, 25, 75]
        root = min(last.state.nodes, key=lambda n: n.y)
        assert root.value == 75

    def test_traverse_in_order(self):
        last = generate("bst", Operation.TRAVERSE, 1)[-1]
        assert last.state.aux_data["visited"] == [15, 25, 50, 75]

    def test_highlight_lines_are_inside_code(self):
        for op in (Operation.INSERT, Operation.DELETE, Operation.SEARCH):
            for step in generate("bst", op, 60):
                for line in step.code.highlight_lines:
                    assert 1 <= line <= step.code.line_count


class TestGraphSearch:
    def test_bfs_order_from_corner(self):
        order = [n for n, _ in graph_search.discovery_order("bfs", "0-0")]
        assert order[:3] == ["0-0", "0-1", "1-0"]
        assert len(order) == 16

    def test_dfs_goes_deep_first(self):
        order = [n for n, _ in graph_search.discovery_order("dfs", "0-0")]
        assert order[:4] == ["0-0", "0-1", "0-2", "0-3"]

    def test_start_from_value(self):
        steps = generate("dfs", Operation.FIND_PATH, 21)
        assert steps[0].state.aux_data["start"] == "1-1"

    def test_reveal_grows_to_whole_grid(self):
        steps = generate("bfs", Operation.FIND_PATH, 0)
        revealed = [sum(n.highlighted for n in s.state.nodes) for s in steps]
        assert revealed == sorted(revealed)
        assert revealed[-1] == 16
        # a spanning tree of 16 nodes
        assert sum(e.highlighted for e in steps[-1].state.edges) == 15


class TestDynamicProgramming:
    def test_table_values(self):
        assert dp.fibonacci_table(10) == [0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55]

    def test_final_step_has_result(self):
        steps = generate("fibonacci", Operation.CALCULATE, 12)
        last = steps[-1]
        assert last.state.aux_data["result"] == 144
        assert len(last.state.nodes) == dp.MAX_CELLS + 1
        assert all(n.value != "?" for n in last.state.nodes)
        assert last.state.aux_data["headers"][0] == "F(0)"

    def test_unfilled_cells_show_question_mark(self):
        first = generate("fibonacci", Operation.CALCULATE, 8)[0]
        assert first.state.nodes[-1].value == "?"

    def test_zero(self):
        steps = generate("fibonacci", Operation.CALCULATE, 0)
        assert steps[-1].state.aux_data["result"] == 0
        validate_sequence(steps)


class TestSorting:
    def test_heights_fixed_within_a_run(self):
        steps = generate("quicksort", Operation.SORT, 0, rng=random.Random(3))
        first = sorted(n.value for n in steps[0].state.nodes)
        for step in steps:
            assert sorted(n.value for n in step.state.nodes) == first
            assert step.state.aux_data["initial"] == steps[0].state.aux_data["initial"]

    def test_last_step_sorted(self):
        last = generate("heapsort", Operation.SORT, 0, rng=random.Random(5))[-1]
        values = [n.value for n in last.state.nodes]
        assert values == sorted(values)
        assert all(n.color == sorting.SORTED_COLOR for n in last.state.nodes)

    def test_heights_in_range(self):
        heights = sorting.random_heights(random.Random(0))
        assert len(heights) == sorting.ARRAY_SIZE
        assert all(10 <= h <= 89 for h in heights)

    def test_arrangement(self):
        assert sorting.arrangement([5, 1, 4, 2], 2) == [1, 2, 5, 4]


class TestBadInputValues:
    @pytest.mark.parametrize("key,op", [("bst", "insert"), ("dfs", "findPath"), ("fibonacci", "calculate")])
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_value_is_a_generation_failure(self, key, op, value):
        with pytest.raises(GenerationFailure):
            generate(key, op, value)

    def test_fibonacci_index_above_limit(self):
        with pytest.raises(GenerationFailure, match=str(dp.MAX_N)):
            generate("fibonacci", Operation.CALCULATE, 100000)

    def test_fibonacci_at_limit(self):
        steps = generate("fibonacci", Operation.CALCULATE, dp.MAX_N)
        assert steps[-1].state.aux_data["result"] == dp.fibonacci_table(dp.MAX_N)[-1]
        assert len(steps[-1].state.nodes) == dp.MAX_CELLS + 1


class TestValidateSequence:
    def _step(self, step=1, total=1, nodes=(), edges=(), lines=(1,)):
        return Step(
            state=AlgorithmState(nodes=tuple(nodes), edges=tuple(edges), step=step, total_steps=total),
            code=CodeView("one\ntwo", tuple(lines)),
        )

    def test_empty(self):
        with pytest.raises(StructuralViolation):
            validate_sequence([])

    def test_bad_numbering(self):
        with pytest.raises(StructuralViolation):
            validate_sequence([self._step(step=2)])

    def test_bad_total(self):
        with pytest.raises(StructuralViolation):
            validate_sequence([self._step(total=3)])

    def test_duplicate_ids(self):
        nodes = [VisualNode("a", 1, 0, 0), VisualNode("a", 2, 0, 0)]
        with pytest.raises(StructuralViolation):
            validate_sequence([self._step(nodes=nodes)])

    def test_dangling_edge(self):
        nodes = [VisualNode("a", 1, 0, 0)]
        with pytest.raises(StructuralViolation):
            validate_sequence([self._step(nodes=nodes, edges=[VisualEdge("a", "b")])])

    def test_highlight_out_of_range(self):
        with pytest.raises(StructuralViolation):
            validate_sequence([self._step(lines=(3,))])
