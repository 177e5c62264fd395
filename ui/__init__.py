"""
ui/
---
Presentation layer.

    from ui import render_table
    from ui import playback_controls, progress_bar, …
"""

from ui.canvas import render_table, TableConfig

from ui.controls import (
    sequence_inputs,
    playback_controls,
    progress_bar,
    result_panel,
    legend,
    analytics_panel,
    pseudocode_viewer,
    explanation_panel,
)

__all__ = [
    "render_table",
    "TableConfig",
    "sequence_inputs",
    "playback_controls",
    "progress_bar",
    "result_panel",
    "legend",
    "analytics_panel",
    "pseudocode_viewer",
    "explanation_panel",
]
