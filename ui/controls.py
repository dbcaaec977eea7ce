"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – prev/play/next/reset + speed slider
  • algorithm_selector  – grouped dropdown of the catalog
  • algorithm_card      – name, description, complexity
  • operation_panel     – one button per operation + value input
  • code_panel          – source text with highlighted lines
  • notification_panel  – errors reported by the session

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

import html
from typing import List, Optional

from algorithms import AlgoInfo, Category
from algorithms.step import Step


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    cursor: int = 0,
    total_steps: int = 0,
    speed: int = 3,
    can_step_backward: bool = False,
    can_step_forward: bool = False,
) -> str:
    play_icon = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"
    shown = cursor + 1 if total_steps else 0
    no_steps = "disabled" if not total_steps else ""

    return f"""
    <div class="panel playback-controls">
      <div class="button-row">
        <button id="btn-reset" title="Reset" {no_steps}>⏮</button>
        <button id="btn-prev" title="Previous step" {'' if can_step_backward else 'disabled'}>◀</button>
        <button id="btn-play" title="{play_label}" {no_steps}>{play_icon}</button>
        <button id="btn-next" title="Next step" {'' if can_step_forward else 'disabled'}>▶</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{shown}</span> / <span id="total-steps">{total_steps}</span>
      </div>
      <div class="speed-control">
        <label for="speed-slider">Speed:</label>
        <input id="speed-slider" type="range" min="1" max="5" step="1" value="{speed}">
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: Optional[str] = None) -> str:
    groups = []
    for category in Category:
        options = []
        for algo in algorithms:
            if algo.category != category:
                continue
            sel = 'selected' if algo.key == selected_key else ''
            options.append(f'<option value="{algo.key}" {sel}>{html.escape(algo.name)}</option>')
        if options:
            groups.append(f'<optgroup label="{category.value}">{"".join(options)}</optgroup>')

    placeholder = '' if selected_key else '<option value="" selected disabled>Choose…</option>'
    return f"""
    <div class="panel algorithm-selector">
      <h3>Algorithm</h3>
      <select id="algo-selector">
        {placeholder}{''.join(groups)}
      </select>
    </div>
    """


def algorithm_card(info: Optional[AlgoInfo]) -> str:
    if info is None:
        return '<div class="panel algorithm-card muted">No algorithm selected</div>'
    return f"""
    <div class="panel algorithm-card">
      <h2>{html.escape(info.name)}</h2>
      <p>{html.escape(info.description)}</p>
      <div class="complexity">
        <span>Time: {html.escape(info.complexity_time)}</span>
        <span>Space: {html.escape(info.complexity_space)}</span>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------
_OPERATION_LABELS = {
    "insert": "Insert", "delete": "Delete", "search": "Search", "traverse": "Traverse",
    "addNode": "Add Node", "addEdge": "Add Edge", "removeNode": "Remove Node",
    "removeEdge": "Remove Edge", "findPath": "Find Path",
    "calculate": "Calculate", "optimize": "Optimize",
    "sort": "Sort", "partition": "Partition",
}


def operation_panel(info: Optional[AlgoInfo], value: int, min_value: int = 1, max_value: int = 100) -> str:
    if info is None:
        return '<div class="panel operation-panel"></div>'

    buttons = [
        f'<button class="btn-op" data-op="{op.value}">{_OPERATION_LABELS[op.value]}</button>'
        for op in info.operations
    ]
    return f"""
    <div class="panel operation-panel">
      {''.join(buttons)}
      <label for="op-value">Value:</label>
      <input id="op-value" type="number" min="{min_value}" max="{max_value}" value="{value}">
    </div>
    """


# ---------------------------------------------------------------------------
# Code
# ---------------------------------------------------------------------------
def code_panel(step: Optional[Step]) -> str:
    if step is None:
        return """
        <div class="code-block">
          <div class="code-line muted">// Select an algorithm to view the code implementation</div>
        </div>
        """

    highlighted = set(step.code.highlight_lines)
    lines_html = []
    for number, line in enumerate(step.code.content.split("\n"), start=1):
        cls = "code-line highlight" if number in highlighted else "code-line"
        lines_html.append(
            f'<div class="{cls}" data-line="{number}">'
            f'<span class="line-no">{number}</span>{html.escape(line) or "&nbsp;"}</div>'
        )

    return f"""
    <div class="code-block" data-language="{html.escape(step.code.language)}">
      {''.join(lines_html)}
    </div>
    <div class="step-description">{html.escape(step.description)}</div>
    """


# ---------------------------------------------------------------------------
def notification_panel(messages: List[str]) -> str:
    if not messages:
        return ""
    items = "".join(f'<div class="notice error">{html.escape(m)}</div>' for m in messages)
    return f'<div class="notifications">{items}</div>'
