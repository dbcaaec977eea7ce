"""
graph_search.py — BFS / DFS exploration steps
===============================================
A 4×4 grid graph.  The start cell is picked from the operation value,
the true BFS or DFS discovery order is computed once, and each step
reveals the next slice of it.  Discovery edges of revealed nodes are
highlighted so the search tree is visible as it grows.
"""

import math
from collections import deque
from typing import Dict, List, Optional, Tuple

from algorithms.step import Step, StepBuilder, line_of


SUPPORTED = {"dfs", "bfs"}

STEP_COUNT = 8
GRID_SIZE  = 4

START_COLOR = "#0ea5e9"


DFS_CODE = """void depthFirstSearch(const Graph& graph, int startVertex) {
  std::vector<bool> visited(graph.numVertices(), false);
  DFSUtil(graph, startVertex, visited);
}

void DFSUtil(const Graph& graph, int vertex, std::vector<bool>& visited) {
  visited[vertex] = true;
  for (int adjacent : graph.getAdjacencyList(vertex)) {
    if (!visited[adjacent]) {
      DFSUtil(graph, adjacent, visited);
    }
  }
}"""

BFS_CODE = """void breadthFirstSearch(const Graph& graph, int startVertex) {
  std::vector<bool> visited(graph.numVertices(), false);
  std::queue<int> queue;
  visited[startVertex] = true;
  queue.push(startVertex);

  while (!queue.empty()) {
    int vertex = queue.front();
    queue.pop();
    for (int adjacent : graph.getAdjacencyList(vertex)) {
      if (!visited[adjacent]) {
        visited[adjacent] = true;
        queue.push(adjacent);
      }
    }
  }
}"""

# (start line, per-step cycle, last line)
_LINES: Dict[str, Tuple[int, List[int], int]] = {
    "dfs": (
        line_of(DFS_CODE, "DFSUtil(graph, startVertex, visited);"),
        [line_of(DFS_CODE, "visited[vertex] = true;"),
         line_of(DFS_CODE, "DFSUtil(graph, adjacent, visited);")],
        line_of(DFS_CODE, "void depthFirstSearch"),
    ),
    "bfs": (
        line_of(BFS_CODE, "queue.push(startVertex);"),
        [line_of(BFS_CODE, "int vertex = queue.front();"),
         line_of(BFS_CODE, "queue.push(adjacent);")],
        line_of(BFS_CODE, "while (!queue.empty())"),
    ),
}

_LABELS = {"dfs": ("Depth-First Search", "depth-first"),
           "bfs": ("Breadth-First Search", "breadth-first")}


def cell_id(row: int, col: int) -> str:
    return f"{row}-{col}"


def grid_edges(size: int = GRID_SIZE) -> List[Tuple[str, str]]:
    """Right and down neighbours, in row-major order."""
    edges = []
    for r in range(size):
        for c in range(size):
            if c < size - 1:
                edges.append((cell_id(r, c), cell_id(r, c + 1)))
            if r < size - 1:
                edges.append((cell_id(r, c), cell_id(r + 1, c)))
    return edges


def _neighbours(node: str, size: int) -> List[str]:
    r, c = (int(p) for p in node.split("-"))
    out = []
    for dr, dc in ((0, 1), (1, 0), (0, -1), (-1, 0)):
        nr, nc = r + dr, c + dc
        if 0 <= nr < size and 0 <= nc < size:
            out.append(cell_id(nr, nc))
    return out


def discovery_order(kind: str, start: str, size: int = GRID_SIZE) -> List[Tuple[str, Optional[str]]]:
    """[(node, parent)] in the order the search marks nodes visited."""
    order: List[Tuple[str, Optional[str]]] = []
    seen = set()

    if kind == "bfs":
        seen.add(start)
        queue = deque([(start, None)])
        while queue:
            node, parent = queue.popleft()
            order.append((node, parent))
            for nbr in _neighbours(node, size):
                if nbr not in seen:
                    seen.add(nbr)
                    queue.append((nbr, node))
        return order

    stack: List[Tuple[str, Optional[str]]] = [(start, None)]
    while stack:
        node, parent = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        order.append((node, parent))
        for nbr in reversed(_neighbours(node, size)):
            if nbr not in seen:
                stack.append((nbr, node))
    return order


def generate(kind: str, value: float, total: int = STEP_COUNT) -> List[Step]:
    size = GRID_SIZE
    cells = size * size
    start_idx = int(value) % cells
    start = cell_id(start_idx // size, start_idx % size)

    order = discovery_order(kind, start, size)
    edges = grid_edges(size)
    title, adjective = _LABELS[kind]
    code = DFS_CODE if kind == "dfs" else BFS_CODE
    first_line, cycle, last_line = _LINES[kind]

    steps = []
    for s in range(total):
        revealed = order[: math.ceil(cells * (s + 1) / total)]
        revealed_ids = {n for n, _ in revealed}
        tree_edges = {frozenset((n, p)) for n, p in revealed if p is not None}

        sb = StepBuilder(code=code)
        for r in range(size):
            for c in range(size):
                nid = cell_id(r, c)
                sb.add_node(
                    nid, r * size + c, 100 + c * 100, 100 + r * 100,
                    color=START_COLOR if nid == start else None,
                    highlighted=nid in revealed_ids,
                )
        for src, tgt in edges:
            sb.add_edge(src, tgt, highlighted=frozenset((src, tgt)) in tree_edges)

        current = revealed[-1][0]
        sb.aux_data["order"] = [n for n, _ in revealed]
        sb.aux_data["start"] = start
        sb.message = f"Step {s + 1}: {title} exploration"
        sb.description = f"Exploring node {current} in {adjective} order"
        if s == 0:
            sb.highlight_lines = [first_line]
        elif s == total - 1:
            sb.highlight_lines = [last_line]
        else:
            sb.highlight_lines = [cycle[s % len(cycle)]]
        steps.append(sb.build(step=s + 1, total_steps=total))
    return steps
