"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • sequence_inputs     – the two input fields + random / reset buttons
  • playback_controls   – prev/play/next + delay slider
  • progress_bar        – "Step 3 of 42" + bar
  • result_panel        – LCS string and its length
  • legend              – what each cell colour means
  • analytics_panel     – match / extend counts, compute time, …
  • pseudocode_viewer   – with live line highlighting
  • explanation_panel   – "why this cell has this value"

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import List, Optional

from engine import (
    Progress,
    RunMetrics,
    DELAY_MIN_MS,
    DELAY_MAX_MS,
    DELAY_STEP_MS,
    DEFAULT_DELAY_MS,
)
from sequences import MAX_LENGTH
from ui.canvas import TableConfig, CONFIG


# ---------------------------------------------------------------------------
# Sequence Inputs
# ---------------------------------------------------------------------------
def sequence_inputs(a: str = "", b: str = "", max_length: int = MAX_LENGTH) -> str:
    return f"""
    <div class="panel sequence-inputs">
      <h3>🔤 Sequences</h3>
      <label>String 1:
        <input type="text" id="seq-a" value="{escape(a, quote=True)}" maxlength="{max_length}">
      </label>
      <label>String 2:
        <input type="text" id="seq-b" value="{escape(b, quote=True)}" maxlength="{max_length}">
      </label>
      <div class="button-row">
        <button id="btn-random" class="btn-secondary">Generate Random Strings</button>
        <button id="btn-reset" class="btn-secondary">Reset</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    can_prev: bool = False,
    can_next: bool = False,
    delay_ms: int = DEFAULT_DELAY_MS,
) -> str:
    play_icon = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-prev" title="Previous step" {'' if can_prev else 'disabled'}>← Previous</button>
        <button id="btn-play" title="{play_label}">{play_icon} {play_label}</button>
        <button id="btn-next" title="Next step" {'' if can_next else 'disabled'}>Next →</button>
      </div>
      <div class="speed-control">
        <label>Delay: <span id="delay-val">{delay_ms}</span> ms</label>
        <input type="range" id="delay-slider" min="{DELAY_MIN_MS}" max="{DELAY_MAX_MS}"
               step="{DELAY_STEP_MS}" value="{delay_ms}">
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Progress Bar
# ---------------------------------------------------------------------------
def progress_bar(progress: Progress) -> str:
    suffix = " (Showing LCS Path)" if progress.show_path else ""
    return f"""
    <div class="step-info">
      Step <span id="current-step">{progress.current}</span> of
      <span id="total-steps">{progress.total}</span>{suffix}
    </div>
    <div class="progress-track">
      <div class="progress-fill" style="width: {progress.percent}%;"></div>
    </div>
    """


# ---------------------------------------------------------------------------
# Result Panel
# ---------------------------------------------------------------------------
def result_panel(lcs: str, length: int) -> str:
    return f"""
    <div class="result">
      <strong>LCS Result:</strong> <span id="lcs-result">{escape(lcs)}</span>
      (Length: <span id="lcs-length">{length}</span>)
    </div>
    """


# ---------------------------------------------------------------------------
# Legend
# ---------------------------------------------------------------------------
def legend(config: TableConfig = CONFIG) -> str:
    items = []
    for mode, label in config.legend_labels.items():
        items.append(
            f'<div class="legend-item"><span class="swatch" '
            f'style="background: {config.cell_colors[mode]};"></span>{label}</div>'
        )
    return f"""<div class="legend">{''.join(items)}</div>"""


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Enter two strings to see metrics.</p>
        </div>
        """

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics</h3>
      <table>
        <tr><td>Table Size:</td><td><strong>{metrics.len_a + 1} × {metrics.len_b + 1}</strong></td></tr>
        <tr><td>Fill Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Matches:</td><td><strong>{metrics.match_steps}</strong></td></tr>
        <tr><td>Max Steps:</td><td><strong>{metrics.extend_steps}</strong></td></tr>
        <tr><td>LCS Length:</td><td><strong>{metrics.lcs_length}</strong></td></tr>
        <tr><td>Compute Time:</td><td><strong>{metrics.wall_time_ms:.3f} ms</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "") -> str:
    if not explanation:
        explanation = "Enter two strings, then press <strong>Next</strong> or <strong>Play</strong>."
    else:
        explanation = escape(explanation)
    return f"""<div class="explanation-text">{explanation}</div>"""
