"""
tree.py — Binary Search Tree steps
====================================
Works on a small fixed tree:

            50
          /    \\
        25      75
       /
     15

insert / search / delete walk the real descent path for the requested
value, one node per step, then show the outcome.  traverse visits the
nodes in-order.  Any other operation just shows the tree.

Node positions are recomputed from the structure on every frame, so a
delete that splices a subtree upward still draws a tidy tree.
"""

import copy
from typing import Dict, List, Optional, Tuple

from algorithms import Operation
from algorithms.step import Step, StepBuilder, line_of


SUPPORTED = {"bst"}

STEP_COUNT = 8

ROOT_X      = 400
ROOT_Y      = 60
LEVEL_GAP   = 120
ROOT_SPREAD = 200

FOUND_COLOR    = "#10b981"
REMOVE_COLOR   = "#ef4444"
DUPLICATE_COLOR = "#f59e0b"


# ---------------------------------------------------------------------------
# Source shown in the code panel
# ---------------------------------------------------------------------------
BST_CODE = """template <typename T>
class BinarySearchTree {
  struct Node {
    T data;
    Node* left;
    Node* right;
    Node(T value) : data(value), left(nullptr), right(nullptr) {}
  };
  Node* root = nullptr;

  Node* insert(Node* current, T value) {
    if (current == nullptr) {
      return new Node(value);
    }
    if (value < current->data) {
      current->left = insert(current->left, value);
    } else if (value > current->data) {
      current->right = insert(current->right, value);
    }
    return current;
  }

  bool search(T value) {
    Node* current = root;
    while (current != nullptr) {
      if (current->data == value) return true;
      current = value < current->data ? current->left : current->right;
    }
    return false;
  }

  Node* remove(Node* current, T value) {
    if (current == nullptr) return nullptr;
    if (value < current->data) {
      current->left = remove(current->left, value);
    } else if (value > current->data) {
      current->right = remove(current->right, value);
    } else {
      if (current->left == nullptr) return current->right;
      if (current->right == nullptr) return current->left;
      Node* successor = minNode(current->right);
      current->data = successor->data;
      current->right = remove(current->right, successor->data);
    }
    return current;
  }

  void inorder(Node* current, std::vector<T>& out) {
    if (current == nullptr) return;
    inorder(current->left, out);
    out.push_back(current->data);
    inorder(current->right, out);
  }
};"""

LINE_CLASS         = line_of(BST_CODE, "class BinarySearchTree")
LINE_INSERT_NULL   = line_of(BST_CODE, "if (current == nullptr) {")
LINE_INSERT_NEW    = line_of(BST_CODE, "return new Node(value);")
LINE_INSERT_LEFT   = line_of(BST_CODE, "current->left = insert(")
LINE_INSERT_RIGHT  = line_of(BST_CODE, "current->right = insert(")
LINE_INSERT_RETURN = line_of(BST_CODE, "return current;")
LINE_SEARCH_CMP    = line_of(BST_CODE, "if (current->data == value) return true;")
LINE_SEARCH_MOVE   = line_of(BST_CODE, "current = value < current->data")
LINE_SEARCH_MISS   = line_of(BST_CODE, "return false;")
LINE_REMOVE_NULL   = line_of(BST_CODE, "if (current == nullptr) return nullptr;")
LINE_REMOVE_LEFT   = line_of(BST_CODE, "current->left = remove(")
LINE_REMOVE_RIGHT  = line_of(BST_CODE, "current->right = remove(current->right, value);")
LINE_REMOVE_NOLEFT = line_of(BST_CODE, "if (current->left == nullptr) return current->right;")
LINE_REMOVE_NORIGHT = line_of(BST_CODE, "if (current->right == nullptr) return current->left;")
LINE_REMOVE_SUCC   = line_of(BST_CODE, "Node* successor = minNode")
LINE_VISIT         = line_of(BST_CODE, "out.push_back(current->data);")


def describe(operation: Operation, value: int) -> str:
    if operation == Operation.INSERT:
        return f"Inserting value {value} into the tree"
    if operation == Operation.DELETE:
        return f"Deleting value {value} from the tree"
    if operation == Operation.SEARCH:
        return f"Searching for value {value} in the tree"
    if operation == Operation.TRAVERSE:
        return "Traversing the tree"
    return f"Performing {operation.value} operation"


# ---------------------------------------------------------------------------
# A tiny mutable BST used only to script the frames
# ---------------------------------------------------------------------------
class _Tree:
    def __init__(self):
        self.values:   Dict[str, int]                    = {}
        self.children: Dict[str, List[Optional[str]]]    = {}
        self.root:     Optional[str]                     = None
        self._next_id = 1

    def add(self, value: int, parent: Optional[str] = None, side: int = 0) -> str:
        node_id = str(self._next_id)
        self._next_id += 1
        self.values[node_id] = value
        self.children[node_id] = [None, None]
        if parent is None:
            self.root = node_id
        else:
            self.children[parent][side] = node_id
        return node_id

    def next_id(self) -> str:
        return str(self._next_id)

    def descend(self, value: int) -> Tuple[List[str], Optional[str], int]:
        """Returns (path, found_id, side); side is where a new node would hang."""
        path: List[str] = []
        cur = self.root
        side = 0
        while cur is not None:
            path.append(cur)
            if value == self.values[cur]:
                return path, cur, side
            side = 0 if value < self.values[cur] else 1
            cur = self.children[cur][side]
        return path, None, side

    def parent_of(self, node_id: str) -> Optional[str]:
        for pid, kids in self.children.items():
            if node_id in kids:
                return pid
        return None

    def inorder(self) -> List[str]:
        out: List[str] = []

        def walk(nid: Optional[str]):
            if nid is None:
                return
            walk(self.children[nid][0])
            out.append(nid)
            walk(self.children[nid][1])

        walk(self.root)
        return out

    def remove(self, node_id: str) -> None:
        left, right = self.children[node_id]
        if left is not None and right is not None:
            succ = right
            while self.children[succ][0] is not None:
                succ = self.children[succ][0]
            self.values[node_id] = self.values[succ]
            self.remove(succ)
            return
        self._replace(node_id, left if left is not None else right)

    def _replace(self, node_id: str, child: Optional[str]) -> None:
        parent = self.parent_of(node_id)
        if parent is None:
            self.root = child
        else:
            kids = self.children[parent]
            kids[kids.index(node_id)] = child
        del self.values[node_id]
        del self.children[node_id]

    def layout(self) -> Dict[str, Tuple[float, float]]:
        pos: Dict[str, Tuple[float, float]] = {}

        def place(nid: Optional[str], x: float, y: float, spread: float):
            if nid is None:
                return
            pos[nid] = (x, y)
            left, right = self.children[nid]
            place(left, x - spread, y + LEVEL_GAP, spread / 2)
            place(right, x + spread, y + LEVEL_GAP, spread / 2)

        place(self.root, ROOT_X, ROOT_Y, ROOT_SPREAD)
        return pos

    def draw(self, sb: StepBuilder) -> None:
        pos = self.layout()
        for nid in sorted(pos, key=int):
            x, y = pos[nid]
            sb.add_node(nid, self.values[nid], x, y)
        for nid in sorted(pos, key=int):
            for kid in self.children[nid]:
                if kid is not None:
                    sb.add_edge(nid, kid)


def _base_tree() -> _Tree:
    t = _Tree()
    root = t.add(50)
    left = t.add(25, root, 0)
    t.add(75, root, 1)
    t.add(15, left, 0)
    return t


def _highlight_path(sb: StepBuilder, path: List[str], upto: int) -> None:
    upto = min(upto, len(path) - 1)
    for i in range(1, upto + 1):
        sb.highlight_edge(path[i - 1], path[i])
    if path:
        sb.highlight_node(path[upto])


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def generate(operation: Operation, value: float, total: int = STEP_COUNT) -> List[Step]:
    value = int(value)
    tree = _base_tree()
    path, found, side = tree.descend(value)
    description = describe(operation, value)

    steps = []
    for s in range(total):
        sb = StepBuilder(code=BST_CODE)
        sb.description = description

        if operation == Operation.INSERT:
            _insert_frame(sb, tree, path, found, side, value, s, total)
        elif operation == Operation.SEARCH:
            _search_frame(sb, tree, path, found, value, s)
        elif operation == Operation.DELETE:
            _delete_frame(sb, tree, path, found, value, s, total)
        elif operation == Operation.TRAVERSE:
            _traverse_frame(sb, tree, s)
        else:
            tree.draw(sb)
            sb.highlight_lines = [LINE_CLASS]

        sb.message = f"Step {s + 1}: {sb.message or description}"
        steps.append(sb.build(step=s + 1, total_steps=total))
    return steps


def _compare_message(tree: _Tree, path: List[str], i: int, value: int) -> str:
    here = tree.values[path[i]]
    if value == here:
        return f"{value} equals {here}"
    direction = "left" if value < here else "right"
    return f"Compare {value} with {here}: go {direction}"


def _insert_frame(sb, tree, path, found, side, value, s, total):
    half = total // 2
    if found is not None:
        tree.draw(sb)
        if s < len(path):
            _highlight_path(sb, path, s)
            sb.message = _compare_message(tree, path, s, value)
            sb.highlight_lines = [LINE_INSERT_LEFT if value < tree.values[path[s]] else LINE_INSERT_RIGHT]
        else:
            _highlight_path(sb, path, len(path) - 1)
            sb.highlight_node(found, DUPLICATE_COLOR)
            sb.message = f"{value} is already in the tree, nothing inserted"
            sb.highlight_lines = [LINE_INSERT_RETURN]
        return

    if s < half:
        tree.draw(sb)
        _highlight_path(sb, path, s)
        if s < len(path):
            sb.message = _compare_message(tree, path, s, value)
            sb.highlight_lines = [LINE_INSERT_LEFT if value < tree.values[path[s]] else LINE_INSERT_RIGHT]
        else:
            where = "left" if side == 0 else "right"
            sb.message = f"Empty {where} child of {tree.values[path[-1]]}: insert here"
            sb.highlight_lines = [LINE_INSERT_NULL]
        return

    grown = copy.deepcopy(tree)
    new_id = grown.add(value, path[-1], side)
    grown.draw(sb)
    sb.highlight_node(new_id)
    sb.highlight_edge(path[-1], new_id)
    if s == total - 1:
        sb.message = f"Inserted {value}"
        sb.highlight_lines = [LINE_INSERT_RETURN]
    else:
        sb.message = f"Create node {value} under {tree.values[path[-1]]}"
        sb.highlight_lines = [LINE_INSERT_NEW]


def _search_frame(sb, tree, path, found, value, s):
    tree.draw(sb)
    if s < len(path):
        _highlight_path(sb, path, s)
        sb.message = _compare_message(tree, path, s, value)
        sb.highlight_lines = [LINE_SEARCH_CMP if found == path[s] else LINE_SEARCH_MOVE]
        if found == path[s]:
            sb.highlight_node(found, FOUND_COLOR)
        return

    _highlight_path(sb, path, len(path) - 1)
    if found is not None:
        sb.highlight_node(found, FOUND_COLOR)
        sb.message = f"Found {value}"
        sb.highlight_lines = [LINE_SEARCH_CMP]
    else:
        sb.message = f"{value} is not in the tree"
        sb.highlight_lines = [LINE_SEARCH_MISS]


def _delete_frame(sb, tree, path, found, value, s, total):
    if found is None:
        tree.draw(sb)
        _highlight_path(sb, path, s)
        if s < len(path):
            sb.message = _compare_message(tree, path, s, value)
            sb.highlight_lines = [LINE_REMOVE_LEFT if value < tree.values[path[s]] else LINE_REMOVE_RIGHT]
        else:
            sb.message = f"{value} is not in the tree, nothing deleted"
            sb.highlight_lines = [LINE_REMOVE_NULL]
        return

    if s == total - 1:
        pruned = copy.deepcopy(tree)
        pruned.remove(found)
        pruned.draw(sb)
        sb.message = f"Deleted {value}"
        sb.highlight_lines = [LINE_INSERT_RETURN]
        return

    tree.draw(sb)
    _highlight_path(sb, path, s)
    if s < len(path) - 1:
        sb.message = _compare_message(tree, path, s, value)
        sb.highlight_lines = [LINE_REMOVE_LEFT if value < tree.values[path[s]] else LINE_REMOVE_RIGHT]
        return

    sb.highlight_node(found, REMOVE_COLOR)
    left, right = tree.children[found]
    if left is None:
        sb.highlight_lines = [LINE_REMOVE_NOLEFT]
    elif right is None:
        sb.highlight_lines = [LINE_REMOVE_NORIGHT]
    else:
        sb.highlight_lines = [LINE_REMOVE_SUCC]
    sb.message = f"Found {value}: removing it"


def _traverse_frame(sb, tree, s):
    order = tree.inorder()
    tree.draw(sb)
    upto = min(s, len(order) - 1)
    for nid in order[:upto]:
        sb.highlight_node(nid, FOUND_COLOR)
    sb.highlight_node(order[upto])
    visited = [tree.values[n] for n in order[:upto + 1]]
    sb.aux_data["visited"] = visited
    if s >= len(order) - 1:
        sb.message = "In-order traversal: " + ", ".join(str(v) for v in visited)
    else:
        sb.message = f"Visit {tree.values[order[upto]]}"
    sb.highlight_lines = [LINE_VISIT]
