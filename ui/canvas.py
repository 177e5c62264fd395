"""
canvas.py — SVG DP-Table Renderer
===================================
Pure rendering function: LCSResult + Highlight → SVG string.

The renderer consumes:
  • result     – the LCSResult (inputs, table)
  • highlight  – which cells to colour right now, and how
  • config     – visual config (cell size, colors, fonts, …)

And produces an SVG string ready to inject into the DOM.

Layout (for A = "AB", B = "CAB"):

          ·   C   A   B        ← header row: B's characters
      ·   0   0   0   0        ← border row, always zero
      A   0   .   .   .
      B   0   .   .   .
      ↑
      header column: A's characters

Design decisions:
  - NO mutation.  The caller passes in everything it needs and gets back
    a string.
  - Colouring is a simple dict lookup: highlight mode → hex color.
    "match" / "extend" colour the single current cell, "path" colours
    every cell on the backtrack path, everything else is the default.
"""

from html import escape
from typing import Dict, Optional

from algorithms import LCSResult
from engine import Highlight


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class TableConfig:
    bg: str = "#0d1117"

    # cell fill by highlight mode
    cell_colors: Dict[str, str] = {
        "default": "#1c2128",   # dark grey
        "border":  "#161b22",   # row 0 / column 0
        "match":   "#0ea5e9",   # cyan blue — character match
        "extend":  "#f59e0b",   # amber — max(up, left)
        "path":    "#10b981",   # emerald — backtrack path
    }

    legend_labels: Dict[str, str] = {
        "match":  "Character Match",
        "extend": "Max Value",
        "path":   "LCS Path",
    }

    # cells
    cell_size:         int = 40
    cell_gap:          int = 3
    cell_radius:       int = 4
    cell_stroke:       str = "#30363d"
    value_color:       str = "#e6edf3"
    value_size:        int = 14
    header_bg:         str = "#161b22"
    header_color:      str = "#0ea5e9"
    header_size:       int = 14
    font_family:       str = "'JetBrains Mono', monospace"
    margin:            int = 12


CONFIG = TableConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_table(
    result: LCSResult,
    highlight: Optional[Highlight] = None,
    config: TableConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        result    : The computed LCS result.
        highlight : Current highlight (or None for an unlit table).
        config    : Visual config.
    """
    highlight = highlight or Highlight()
    m, n = len(result.a), len(result.b)

    pitch  = config.cell_size + config.cell_gap
    width  = 2 * config.margin + (n + 2) * pitch
    height = 2 * config.margin + (m + 2) * pitch

    parts = [
        f'<svg class="dp-table" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    ]

    # -- header row: blank, blank (border column), then B --
    for j, ch in enumerate(result.b, start=2):
        parts.append(_render_header(ch, 0, j, config))

    # -- header column: blank (header row), blank (border row), then A --
    for i, ch in enumerate(result.a, start=2):
        parts.append(_render_header(ch, i, 0, config))

    # -- table body, including the zero border --
    for i in range(m + 1):
        for j in range(n + 1):
            parts.append(_render_cell(result, i, j, _cell_mode(i, j, highlight), config))

    parts.append("</svg>")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Cell Rendering
# ---------------------------------------------------------------------------
def _cell_mode(i: int, j: int, highlight: Highlight) -> str:
    if i == 0 or j == 0:
        return "border"
    if (i, j) in highlight and highlight.mode in ("match", "extend", "path"):
        return highlight.mode
    return "default"


def _render_cell(result: LCSResult, i: int, j: int, mode: str, config: TableConfig) -> str:
    x, y = _origin(i + 1, j + 1, config)
    fill = config.cell_colors.get(mode, config.cell_colors["default"])
    half = config.cell_size // 2
    return (
        f'<g class="cell cell-{mode}" data-i="{i}" data-j="{j}">'
        f'<rect x="{x}" y="{y}" width="{config.cell_size}" height="{config.cell_size}" '
        f'rx="{config.cell_radius}" fill="{fill}" stroke="{config.cell_stroke}" stroke-width="1"/>'
        f'<text x="{x + half}" y="{y + half + 5}" text-anchor="middle" '
        f'font-size="{config.value_size}" font-family="{config.font_family}" '
        f'fill="{config.value_color}">{result.table[i][j]}</text>'
        f'</g>'
    )


def _render_header(ch: str, row: int, col: int, config: TableConfig) -> str:
    x, y = _origin(row, col, config)
    half = config.cell_size // 2
    return (
        f'<g class="header">'
        f'<rect x="{x}" y="{y}" width="{config.cell_size}" height="{config.cell_size}" '
        f'rx="{config.cell_radius}" fill="{config.header_bg}"/>'
        f'<text x="{x + half}" y="{y + half + 5}" text-anchor="middle" font-weight="700" '
        f'font-size="{config.header_size}" font-family="{config.font_family}" '
        f'fill="{config.header_color}">{escape(ch)}</text>'
        f'</g>'
    )


def _origin(row: int, col: int, config: TableConfig):
    pitch = config.cell_size + config.cell_gap
    return config.margin + col * pitch, config.margin + row * pitch
