"""
canvas.py — SVG Step Renderer
===============================
Pure rendering function: Step + Category → SVG string.

    • tree / graph – circles joined by lines
    • dp           – a row of table cells, headers from auxData["headers"]
    • sorting      – bars whose height is the node value

Design decisions:
  - NO mutation.  The caller passes the current step (always the
    Stepper's current_step) and gets back a string.
  - Node colour is the node's own override if it has one, else the
    palette's highlight / default colour.
  - Edges whose endpoints are missing are skipped (generators are
    validated, but the renderer never trusts a payload).
"""

import html
from typing import Dict, Optional

from algorithms import Category
from algorithms.step import Step, VisualNode


# ---------------------------------------------------------------------------
# Visual Config: palette and dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 560
    bg:     str = "#0d1117"

    # nodes
    node_fill:          str = "#1c2128"
    node_highlight:     str = "#06b6d4"
    node_radius:        int = 22
    node_stroke:        str = "#30363d"
    node_stroke_hl:     str = "#e6edf3"
    node_label_color:   str = "#e6edf3"
    node_label_size:    int = 13

    # edges
    edge_color:         str = "#30363d"
    edge_highlight:     str = "#a855f7"
    edge_width:         int = 2
    edge_width_hl:      int = 4
    edge_weight_color:  str = "#7d8590"

    # dp cells
    cell_width:         int = 54
    cell_height:        int = 40
    header_color:       str = "#7d8590"

    # sorting bars
    bar_width:          int = 40
    bar_scale:          float = 3.0
    bar_baseline:       int = 420

    # message line
    message_color:      str = "#7d8590"
    message_size:       int = 14


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    step: Optional[Step],
    category: Optional[Category],
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        step     : The Stepper's current step (or None before any run).
        category : Category of the selected algorithm.
        config   : Visual config.
    """
    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    if step is None:
        svg_parts.append(_text(config.width / 2, config.height / 2,
                               "Select an algorithm and run an operation", config, anchor="middle"))
    elif category == Category.DP:
        svg_parts.append(_render_dp(step, config))
    elif category == Category.SORTING:
        svg_parts.append(_render_bars(step, config))
    else:
        svg_parts.append(_render_graph(step, config))

    if step is not None and step.state.message:
        svg_parts.append(_text(20, config.height - 20, step.state.message, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Tree / Graph
# ---------------------------------------------------------------------------
def _render_graph(step: Step, config: CanvasConfig) -> str:
    nodes: Dict[str, VisualNode] = {n.id: n for n in step.state.nodes}
    parts = []

    # edges first so nodes sit on top
    for edge in step.state.edges:
        src, tgt = nodes.get(edge.source), nodes.get(edge.target)
        if src is None or tgt is None:
            continue
        stroke = _color(edge.color, config.edge_highlight if edge.highlighted else config.edge_color)
        width = config.edge_width_hl if edge.highlighted else config.edge_width
        parts.append(
            f'<line x1="{src.x}" y1="{src.y}" x2="{tgt.x}" y2="{tgt.y}" '
            f'stroke="{stroke}" stroke-width="{width}"/>'
        )
        if edge.value is not None:
            mx, my = (src.x + tgt.x) / 2, (src.y + tgt.y) / 2
            parts.append(
                f'<text x="{mx}" y="{my - 6}" text-anchor="middle" font-size="12" '
                f'fill="{config.edge_weight_color}">{edge.value:g}</text>'
            )

    for node in step.state.nodes:
        fill = _color(node.color, config.node_highlight if node.highlighted else config.node_fill)
        stroke = config.node_stroke_hl if node.highlighted else config.node_stroke
        parts.append(
            f'<g class="node" data-id="{html.escape(node.id)}">'
            f'<circle cx="{node.x}" cy="{node.y}" r="{config.node_radius}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="2"/>'
            f'<text x="{node.x}" y="{node.y + 5}" text-anchor="middle" '
            f'font-size="{config.node_label_size}" fill="{config.node_label_color}" '
            f'font-weight="600">{html.escape(str(node.value))}</text>'
            f'</g>'
        )
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# DP table
# ---------------------------------------------------------------------------
def _render_dp(step: Step, config: CanvasConfig) -> str:
    headers = step.state.aux_data.get("headers", [])
    nodes = {n.id: n for n in step.state.nodes}
    parts = []
    w, h = config.cell_width, config.cell_height

    for i, node in enumerate(step.state.nodes):
        x, y = node.x - w / 2, node.y - h / 2
        fill = _color(node.color, config.node_highlight if node.highlighted else config.node_fill)
        if i < len(headers):
            parts.append(
                f'<text x="{node.x}" y="{y - 8}" text-anchor="middle" font-size="12" '
                f'fill="{config.header_color}">{html.escape(str(headers[i]))}</text>'
            )
        parts.append(
            f'<rect x="{x}" y="{y}" width="{w}" height="{h}" rx="4" '
            f'fill="{fill}" stroke="{config.node_stroke}"/>'
            f'<text x="{node.x}" y="{node.y + 5}" text-anchor="middle" '
            f'font-size="{config.node_label_size}" fill="{config.node_label_color}">'
            f'{html.escape(str(node.value))}</text>'
        )

    # dependency arcs below the row
    for edge in step.state.edges:
        src, tgt = nodes.get(edge.source), nodes.get(edge.target)
        if src is None or tgt is None:
            continue
        stroke = _color(edge.color, config.edge_highlight if edge.highlighted else config.edge_color)
        base = src.y + h / 2
        depth = 20 + abs(tgt.x - src.x) / 4
        parts.append(
            f'<path d="M {src.x} {base} Q {(src.x + tgt.x) / 2} {base + depth} {tgt.x} {base}" '
            f'fill="none" stroke="{stroke}" stroke-width="{config.edge_width}"/>'
        )
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Sorting bars
# ---------------------------------------------------------------------------
def _render_bars(step: Step, config: CanvasConfig) -> str:
    parts = []
    for node in step.state.nodes:
        try:
            height = float(node.value) * config.bar_scale
        except (TypeError, ValueError):
            height = 0.0
        x = node.x - config.bar_width / 2
        y = config.bar_baseline - height
        fill = _color(node.color, config.node_fill)
        stroke = config.node_highlight if node.highlighted else config.node_stroke
        parts.append(
            f'<rect x="{x}" y="{y}" width="{config.bar_width}" height="{height}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="{3 if node.highlighted else 1}"/>'
            f'<text x="{node.x}" y="{config.bar_baseline + 18}" text-anchor="middle" '
            f'font-size="12" fill="{config.node_label_color}">{html.escape(str(node.value))}</text>'
        )
    return "\n".join(parts)


def _text(x: float, y: float, text: str, config: CanvasConfig, anchor: str = "start") -> str:
    return (
        f'<text x="{x}" y="{y}" text-anchor="{anchor}" font-size="{config.message_size}" '
        f'fill="{config.message_color}">{html.escape(text)}</text>'
    )


def _color(override: Optional[str], default: str) -> str:
    """Payload colours land inside SVG attributes."""
    return html.escape(str(override), quote=True) if override else default
