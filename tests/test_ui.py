"""Tests for the SVG canvas and the HTML panels."""
import random

from algorithms import Category, Operation, get_algorithm, list_algorithms
from algorithms.generator import generate
from algorithms.step import Step
from ui import (
    algorithm_card,
    algorithm_selector,
    code_panel,
    notification_panel,
    operation_panel,
    playback_controls,
    render_canvas,
)


class TestCanvas:
    def test_empty(self):
        svg = render_canvas(None, None)
        assert svg.startswith("<svg")
        assert "Select an algorithm" in svg

    def test_tree_nodes_and_message(self):
        step = generate("bst", Operation.INSERT, 42)[0]
        svg = render_canvas(step, Category.TREE)
        assert svg.count("<circle") == len(step.state.nodes)
        assert svg.count("<line") == len(step.state.edges)
        assert "Step 1:" in svg

    def test_dp_headers(self):
        step = generate("fibonacci", Operation.CALCULATE, 5)[-1]
        svg = render_canvas(step, Category.DP)
        assert "F(5)" in svg
        assert svg.count("<rect") == len(step.state.nodes) + 1  # plus background

    def test_sorting_bars(self):
        step = generate("mergesort", Operation.SORT, 0, rng=random.Random(2))[0]
        svg = render_canvas(step, Category.SORTING)
        assert svg.count("<rect") == len(step.state.nodes) + 1

    def test_message_escaped(self):
        [step] = generate("<script>", Operation.INSERT, 1)
        svg = render_canvas(step, Category.TREE)
        assert "<script>" not in svg
        assert "&lt;script&gt;" in svg


class TestPanels:
    def test_controls_disabled_without_sequence(self):
        html = playback_controls()
        assert 'id="btn-play" title="Play" disabled' in html
        assert "Step <span id=\"current-step\">0</span>" in html

    def test_controls_while_playing(self):
        html = playback_controls(is_playing=True, cursor=2, total_steps=8, speed=4,
                                 can_step_backward=True, can_step_forward=True)
        assert 'title="Pause"' in html
        assert '<span id="current-step">3</span>' in html
        assert 'value="4"' in html

    def test_selector_groups(self):
        html = algorithm_selector(list_algorithms(), "lcs")
        for category in Category:
            assert f'label="{category.value}"' in html
        assert '<option value="lcs" selected>' in html

    def test_card(self):
        assert "O(V + E)" in algorithm_card(get_algorithm("bfs"))
        assert "No algorithm selected" in algorithm_card(None)

    def test_operation_buttons(self):
        html = operation_panel(get_algorithm("dfs"), 42)
        assert html.count('class="btn-op"') == 3
        assert 'data-op="findPath"' in html
        assert 'value="42"' in html

    def test_code_panel_highlights(self):
        step = generate("bst", Operation.SEARCH, 15)[0]
        html = code_panel(step)
        [line] = step.code.highlight_lines
        assert f'class="code-line highlight" data-line="{line}"' in html
        assert html.count("code-line highlight") == 1

    def test_code_panel_empty(self):
        assert "Select an algorithm" in code_panel(None)

    def test_notifications(self):
        assert notification_panel([]) == ""
        assert "a &amp; b" in notification_panel(["a & b"])


class TestRemotePayloadRendering:
    def _remote_step(self, weight, color):
        return Step.from_dict({
            "state": {"nodes": [{"id": "a", "value": 1, "x": 10, "y": 10, "color": color},
                                {"id": "b", "value": 2, "x": 90, "y": 10}],
                      "edges": [{"source": "a", "target": "b", "value": weight, "color": color}],
                      "step": 1, "totalSteps": 1},
            "code": {"content": "x", "highlightLines": [1], "language": "cpp"},
            "description": "",
        })

    def test_string_weight_renders(self):
        svg = render_canvas(self._remote_step("5", None), Category.GRAPH)
        assert ">5</text>" in svg

    def test_colours_escaped(self):
        hostile = '"/><script>alert(1)</script>'
        step = self._remote_step(1, hostile)
        for category in (Category.GRAPH, Category.DP, Category.SORTING):
            svg = render_canvas(step, category)
            assert "<script>" not in svg
            assert "&quot;/&gt;&lt;script&gt;" in svg
