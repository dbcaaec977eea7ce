"""
algorithms/__init__.py — Algorithm Catalog
============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bst": AlgoInfo(key, name, category, description, complexity_time, …),
        …
    }

AlgoInfo is a lightweight, read-only dataclass.  The session, the HTTP
layer and the UI all consume it.  Step generation lives in
algorithms.generator and dispatches on AlgoInfo.category.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Category(Enum):
    TREE    = "tree"
    GRAPH   = "graph"
    DP      = "dp"
    SORTING = "sorting"


class Operation(Enum):
    # tree
    INSERT      = "insert"
    DELETE      = "delete"
    SEARCH      = "search"
    TRAVERSE    = "traverse"
    # graph
    ADD_NODE    = "addNode"
    ADD_EDGE    = "addEdge"
    REMOVE_NODE = "removeNode"
    REMOVE_EDGE = "removeEdge"
    FIND_PATH   = "findPath"
    # dp
    CALCULATE   = "calculate"
    OPTIMIZE    = "optimize"
    # sorting
    SORT        = "sort"
    PARTITION   = "partition"

    @classmethod
    def parse(cls, raw: str) -> "Operation":
        """Wire string → Operation.  Raises ValueError for unknown names."""
        return cls(raw)


# Operations the UI offers per category
CATEGORY_OPERATIONS: Dict[Category, Tuple[Operation, ...]] = {
    Category.TREE:    (Operation.INSERT, Operation.DELETE, Operation.SEARCH),
    Category.GRAPH:   (Operation.ADD_NODE, Operation.ADD_EDGE, Operation.FIND_PATH),
    Category.DP:      (Operation.CALCULATE, Operation.OPTIMIZE),
    Category.SORTING: (Operation.SORT,),
}


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:              str         # registry key, e.g. "bst"
    name:             str         # display name, e.g. "Binary Search Tree"
    category:         Category
    description:      str
    complexity_time:  str         # e.g. "O(log n)"
    complexity_space: str         # e.g. "O(h)"

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return CATEGORY_OPERATIONS[self.category]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.key,
            "category": self.category.value,
            "description": self.description,
            "complexity": {"time": self.complexity_time, "space": self.complexity_space},
            "operations": [op.value for op in self.operations],
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # -- trees --
    "bst": AlgoInfo(
        key="bst", name="Binary Search Tree", category=Category.TREE,
        complexity_time="O(log n)", complexity_space="O(h)",
        description=(
            "A binary search tree is a node-based binary tree data structure where each node "
            "has a value and the left subtree contains only nodes with values less than the "
            "node's value, while the right subtree only contains nodes with values greater "
            "than the node's value."
        ),
    ),

    "avl": AlgoInfo(
        key="avl", name="AVL Tree", category=Category.TREE,
        complexity_time="O(log n)", complexity_space="O(h)",
        description=(
            "An AVL tree is a self-balancing binary search tree where the heights of the two "
            "child subtrees of any node differ by at most one."
        ),
    ),

    "heap": AlgoInfo(
        key="heap", name="Heap", category=Category.TREE,
        complexity_time="O(log n)", complexity_space="O(1)",
        description=(
            "A heap is a specialized tree-based data structure that satisfies the heap "
            "property: if P is a parent node of C, then the key of P is ordered with respect "
            "to the key of C for all nodes."
        ),
    ),

    # -- graphs --
    "dfs": AlgoInfo(
        key="dfs", name="Depth-First Search", category=Category.GRAPH,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description=(
            "Depth-First Search is an algorithm for traversing or searching tree or graph data "
            "structures that explores as far as possible along each branch before backtracking."
        ),
    ),

    "bfs": AlgoInfo(
        key="bfs", name="Breadth-First Search", category=Category.GRAPH,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description=(
            "Breadth-First Search is an algorithm for traversing or searching tree or graph "
            "data structures that explores all neighbor nodes at the present depth before "
            "moving on to nodes at the next depth level."
        ),
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", name="Dijkstra's Algorithm", category=Category.GRAPH,
        complexity_time="O(E log V)", complexity_space="O(V)",
        description=(
            "Dijkstra's Algorithm finds the shortest paths between nodes in a graph, which may "
            "represent, for example, road networks."
        ),
    ),

    "kruskal": AlgoInfo(
        key="kruskal", name="Kruskal's Algorithm", category=Category.GRAPH,
        complexity_time="O(E log E)", complexity_space="O(V)",
        description=(
            "Kruskal's Algorithm finds a minimum spanning tree for a connected weighted graph, "
            "adding increasing cost edges at each step."
        ),
    ),

    "prim": AlgoInfo(
        key="prim", name="Prim's Algorithm", category=Category.GRAPH,
        complexity_time="O(E log V)", complexity_space="O(V)",
        description=(
            "Prim's Algorithm finds a minimum spanning tree for a weighted undirected graph, "
            "growing a tree one edge at a time."
        ),
    ),

    # -- dynamic programming --
    "fibonacci": AlgoInfo(
        key="fibonacci", name="Fibonacci", category=Category.DP,
        complexity_time="O(n)", complexity_space="O(n)",
        description=(
            "The Fibonacci sequence is a sequence where each number is the sum of the two "
            "preceding ones, starting from 0 and 1."
        ),
    ),

    "knapsack": AlgoInfo(
        key="knapsack", name="Knapsack Problem", category=Category.DP,
        complexity_time="O(nW)", complexity_space="O(nW)",
        description=(
            "The Knapsack Problem is a problem in combinatorial optimization where we need to "
            "maximize the value of items in a knapsack without exceeding its weight capacity."
        ),
    ),

    "lcs": AlgoInfo(
        key="lcs", name="Longest Common Subsequence", category=Category.DP,
        complexity_time="O(m*n)", complexity_space="O(m*n)",
        description=(
            "The Longest Common Subsequence problem finds the longest subsequence common to "
            "all sequences in a set of sequences."
        ),
    ),

    # -- sorting --
    "quicksort": AlgoInfo(
        key="quicksort", name="QuickSort", category=Category.SORTING,
        complexity_time="O(n log n)", complexity_space="O(log n)",
        description=(
            "QuickSort is an efficient sorting algorithm that uses a divide-and-conquer "
            "strategy with a pivot element to partition the array."
        ),
    ),

    "mergesort": AlgoInfo(
        key="mergesort", name="MergeSort", category=Category.SORTING,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description=(
            "MergeSort is a divide and conquer algorithm that divides the input array into two "
            "halves, sorts them separately, and then merges the sorted halves."
        ),
    ),

    "heapsort": AlgoInfo(
        key="heapsort", name="HeapSort", category=Category.SORTING,
        complexity_time="O(n log n)", complexity_space="O(1)",
        description=(
            "HeapSort is a comparison-based sorting algorithm that uses a binary heap data "
            "structure to build a heap and then repeatedly extracts the maximum element."
        ),
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: Category) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.category == category]


def operations_for(category: Category) -> Tuple[Operation, ...]:
    return CATEGORY_OPERATIONS[category]


__all__ = [
    "AlgoInfo",
    "Category",
    "Operation",
    "CATEGORY_OPERATIONS",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
    "operations_for",
]
