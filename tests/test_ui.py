from algorithms import compute, PSEUDOCODE
from engine import Highlight, Progress, RunMetrics
from ui import (
    render_table,
    TableConfig,
    sequence_inputs,
    playback_controls,
    progress_bar,
    result_panel,
    legend,
    analytics_panel,
    pseudocode_viewer,
    explanation_panel,
)


def test_table_has_one_cell_per_entry():
    svg = render_table(compute("ABC", "AB"))
    assert svg.startswith("<svg")
    assert svg.count('class="cell ') == 4 * 3
    # border row + border column share the corner
    assert svg.count("cell-border") == 4 + 3 - 1
    assert svg.count('class="header"') == 3 + 2


def test_table_colours_current_cell():
    result = compute("AAA", "AAA")
    svg = render_table(result, Highlight(mode="match", cells=((2, 2),)))
    assert svg.count("cell-match") == 1
    assert 'class="cell cell-match" data-i="2" data-j="2"' in svg
    assert TableConfig.cell_colors["match"] in svg


def test_table_colours_path():
    result = compute("ABCBDAB", "BDCABA")
    svg = render_table(result, Highlight(mode="path", cells=tuple(result.path_cells())))
    assert svg.count("cell-path") == 4
    assert "cell-match" not in svg and "cell-extend" not in svg


def test_table_escapes_characters():
    svg = render_table(compute("<&", "&"))
    assert "&lt;" in svg and "&amp;" in svg
    assert "<&" not in svg


def test_empty_table():
    svg = render_table(compute("", ""))
    assert svg.count('class="cell ') == 1


def test_playback_controls():
    html = playback_controls(is_playing=True, can_prev=False, can_next=True, delay_ms=300)
    assert "Pause" in html
    assert 'id="btn-prev" title="Previous step" disabled' in html
    assert 'min="100" max="1000"' in html
    assert 'value="300"' in html


def test_progress_bar():
    html = progress_bar(Progress(current=3, total=42, percent=4.8, show_path=False))
    assert '<span id="current-step">3</span>' in html
    assert "width: 4.8%" in html
    assert "Showing LCS Path" in progress_bar(Progress(current=42, total=42, percent=97.6, show_path=True))


def test_result_panel_and_legend():
    assert "BDAB" in result_panel("BDAB", 4)
    html = legend()
    for label in ("Character Match", "Max Value", "LCS Path"):
        assert label in html


def test_inputs_escape_values():
    html = sequence_inputs('A"B', "C", 15)
    assert 'value="A&quot;B"' in html
    assert 'maxlength="15"' in html


def test_analytics_panel():
    assert "Enter two strings" in analytics_panel(None)
    html = analytics_panel(RunMetrics(len_a=7, len_b=6, lcs="BDAB", lcs_length=4, total_steps=42))
    assert "8 × 7" in html
    assert "42" in html


def test_pseudocode_and_explanation():
    html = pseudocode_viewer(PSEUDOCODE, current_line=5)
    assert html.count("code-line highlight") == 1
    assert 'data-line="5"' in html
    assert "Next" in explanation_panel("")
    assert "&#x27;A&#x27;" in explanation_panel("'A' matches")
