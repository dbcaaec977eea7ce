"""
step.py — Execution Step Snapshot
==================================
Every operation produces an ordered list of Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • The nodes on the canvas (tree nodes, graph vertices, DP cells, bars)
    • The edges between them
    • Free-form auxiliary data for category-specific extras
    • Which source lines are executing right now
    • A plain-English description of the step

Design decisions:
  - Step, AlgorithmState, VisualNode, VisualEdge and CodeView are frozen
    dataclasses.  Generators are the only writers; the stepper and the
    renderers are pure readers.
  - One node shape serves every category.  A sorting bar is a VisualNode
    whose `value` is its height.
  - to_dict() / from_dict() speak the camelCase wire format used by the
    HTTP backend.  Optional fields are omitted when unset.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


Value = Union[int, float, str]


@dataclass(frozen=True)
class VisualNode:
    """
    Attributes:
        id          : Unique key within one snapshot.
        value       : Number or string drawn on / as the node.
        x, y        : Canvas coordinates.
        color       : Optional fill override.
        highlighted : Drawn with the highlight stroke.
    """

    id:          str
    value:       Value
    x:           float
    y:           float
    color:       Optional[str]  = None
    highlighted: bool           = False

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"id": self.id, "value": self.value, "x": self.x, "y": self.y}
        if self.color is not None:
            d["color"] = self.color
        if self.highlighted:
            d["highlighted"] = True
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "VisualNode":
        return cls(
            id=str(d["id"]),
            value=d["value"],
            x=float(d["x"]),
            y=float(d["y"]),
            color=d.get("color"),
            highlighted=bool(d.get("highlighted", False)),
        )


@dataclass(frozen=True)
class VisualEdge:
    source:      str
    target:      str
    value:       Optional[float] = None   # weight label
    color:       Optional[str]   = None
    highlighted: bool            = False

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"source": self.source, "target": self.target}
        if self.value is not None:
            d["value"] = self.value
        if self.color is not None:
            d["color"] = self.color
        if self.highlighted:
            d["highlighted"] = True
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "VisualEdge":
        return cls(
            source=str(d["source"]),
            target=str(d["target"]),
            value=float(d["value"]) if d.get("value") is not None else None,
            color=d.get("color"),
            highlighted=bool(d.get("highlighted", False)),
        )


@dataclass(frozen=True)
class AlgorithmState:
    """
    Attributes:
        nodes       : Ordered nodes of this snapshot.
        edges       : Ordered edges; endpoints must name nodes in `nodes`.
        aux_data    : Presentation extras (e.g. DP table headers).
        step        : 1-based position of this snapshot in its sequence.
        total_steps : Length of the sequence.
        message     : Optional status line.
    """

    nodes:       Tuple[VisualNode, ...] = ()
    edges:       Tuple[VisualEdge, ...] = ()
    aux_data:    Dict[str, Any]         = field(default_factory=dict)
    step:        int                    = 1
    total_steps: int                    = 1
    message:     Optional[str]          = None

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "step": self.step,
            "totalSteps": self.total_steps,
        }
        if self.aux_data:
            d["auxData"] = dict(self.aux_data)
        if self.message is not None:
            d["message"] = self.message
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AlgorithmState":
        return cls(
            nodes=tuple(VisualNode.from_dict(n) for n in d.get("nodes", [])),
            edges=tuple(VisualEdge.from_dict(e) for e in d.get("edges", [])),
            aux_data=dict(d.get("auxData") or {}),
            step=int(d["step"]),
            total_steps=int(d["totalSteps"]),
            message=d.get("message"),
        )


@dataclass(frozen=True)
class CodeView:
    content:         str
    highlight_lines: Tuple[int, ...] = ()   # 1-based
    language:        str             = "cpp"

    @property
    def line_count(self) -> int:
        return len(self.content.split("\n"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "highlightLines": list(self.highlight_lines),
            "language": self.language,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CodeView":
        return cls(
            content=d["content"],
            highlight_lines=tuple(int(n) for n in d.get("highlightLines", [])),
            language=d.get("language", "cpp"),
        )


@dataclass(frozen=True)
class Step:
    state:       AlgorithmState
    code:        CodeView
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.to_dict(),
            "code": self.code.to_dict(),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Step":
        return cls(
            state=AlgorithmState.from_dict(d["state"]),
            code=CodeView.from_dict(d["code"]),
            description=d.get("description", ""),
        )


def line_of(code: str, needle: str) -> int:
    """1-based number of the first line of `code` containing `needle`."""
    for i, line in enumerate(code.split("\n"), start=1):
        if needle in line:
            return i
    raise KeyError(needle)


# ---------------------------------------------------------------------------
# Convenience builder so generators don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that generators use to construct Steps cleanly.

    Usage inside a generator:
        sb = StepBuilder(code=BST_CODE)
        sb.add_node("1", 50, 400, 60)
        sb.highlight_node("1")
        sb.highlight_lines = [14]
        sb.message = "Compare 42 with 50"
        steps.append(sb.build(step=3, total_steps=8))
    """

    def __init__(self, code: str = "", language: str = "cpp"):
        self.code = code
        self.language = language
        self.reset()

    def reset(self):
        self.nodes:           List[VisualNode]   = []
        self.edges:           List[VisualEdge]   = []
        self.aux_data:        Dict[str, Any]     = {}
        self.highlight_lines: List[int]          = []
        self.message:         Optional[str]      = None
        self.description:     str                = ""

    # -- helpers --
    def add_node(self, node_id: str, value: Value, x: float, y: float,
                 color: Optional[str] = None, highlighted: bool = False):
        self.nodes.append(VisualNode(node_id, value, x, y, color, highlighted))

    def add_edge(self, source: str, target: str, value: Optional[float] = None,
                 color: Optional[str] = None, highlighted: bool = False):
        self.edges.append(VisualEdge(source, target, value, color, highlighted))

    def highlight_node(self, node_id: str, color: Optional[str] = None):
        self.nodes = [
            VisualNode(n.id, n.value, n.x, n.y, color or n.color, True) if n.id == node_id else n
            for n in self.nodes
        ]

    def highlight_edge(self, source: str, target: str):
        self.edges = [
            VisualEdge(e.source, e.target, e.value, e.color, True)
            if (e.source, e.target) == (source, target) else e
            for e in self.edges
        ]

    def build(self, step: int, total_steps: int) -> Step:
        return Step(
            state=AlgorithmState(
                nodes=tuple(self.nodes),
                edges=tuple(self.edges),
                aux_data=dict(self.aux_data),
                step=step,
                total_steps=total_steps,
                message=self.message,
            ),
            code=CodeView(self.code, tuple(self.highlight_lines), self.language),
            description=self.description,
        )
