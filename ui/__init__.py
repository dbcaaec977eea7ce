"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import playback_controls, code_panel, …
"""

from ui.canvas import render_canvas, CanvasConfig

from ui.controls import (
    playback_controls,
    algorithm_selector,
    algorithm_card,
    operation_panel,
    code_panel,
    notification_panel,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "playback_controls",
    "algorithm_selector",
    "algorithm_card",
    "operation_panel",
    "code_panel",
    "notification_panel",
]
