from algorithms import compute
from algorithms.lcs import LINE_BACKTRACK, LINE_MATCH
from engine import Visualization, Highlight, Stepper


def test_default_session_is_empty():
    viz = Visualization()
    assert viz.result.total_steps == 0
    assert viz.highlight() == Highlight()
    assert viz.progress().total == 0
    assert viz.current_event is None
    assert viz.pseudocode_line() == -1
    assert not viz.stepper.step_forward()


def test_set_sequences_recomputes_and_rewinds(scheduler):
    viz = Visualization("ABC", "AC", stepper=Stepper(scheduler=scheduler))
    viz.stepper.step_forward()
    viz.stepper.play()
    assert scheduler.pending

    assert viz.set_sequences("AAA", "AAA")
    assert viz.result.lcs == "AAA"
    assert viz.stepper.total_steps == 9
    assert (viz.stepper.current_idx, viz.stepper.show_path, viz.stepper.is_playing) == (0, False, False)
    assert scheduler.pending == []


def test_unchanged_sequences_keep_cached_result():
    calls = []

    def counting_compute(a, b):
        calls.append((a, b))
        return compute(a, b)

    viz = Visualization("AB", "BA", compute_fn=counting_compute)
    viz.stepper.step_forward()
    cached = viz.result
    assert not viz.set_sequences("AB", "BA")
    assert viz.result is cached
    assert viz.stepper.current_idx == 1
    for _ in range(5):
        viz.stepper.step_forward()
        viz.highlight()
    assert calls == [("AB", "BA")]


def test_highlight_follows_current_event():
    viz = Visualization("AB", "AC")
    assert viz.highlight() == Highlight(mode="match", cells=((1, 1),))
    assert (1, 1) in viz.highlight()
    viz.stepper.step_forward()
    assert viz.highlight() == Highlight(mode="extend", cells=((1, 2),))


def test_highlight_switches_to_path_at_the_end():
    viz = Visualization("ABCBDAB", "BDCABA")
    for _ in range(41):
        viz.stepper.step_forward()
    assert viz.highlight().mode in ("match", "extend")
    viz.stepper.step_forward()
    hl = viz.highlight()
    assert hl.mode == "path"
    assert hl.cells == ((4, 1), (5, 2), (6, 4), (7, 5))
    viz.stepper.step_backward()
    assert viz.highlight().cells == ((7, 6),)


def test_progress():
    viz = Visualization("AB", "CD")
    p = viz.progress()
    assert (p.current, p.total, p.percent, p.show_path) == (1, 4, 0.0, False)
    viz.stepper.step_forward()
    assert viz.progress().percent == 25.0
    for _ in range(3):
        viz.stepper.step_forward()
    p = viz.progress()
    assert (p.current, p.show_path) == (4, True)


def test_explanation_and_pseudocode_line():
    viz = Visualization("A", "A")
    assert viz.pseudocode_line() == LINE_MATCH
    assert "matches" in viz.explanation()
    viz.stepper.step_forward()
    assert viz.pseudocode_line() == LINE_BACKTRACK
    assert "LCS = 'A'" in viz.explanation()


def test_explanation_for_empty_lcs():
    viz = Visualization("A", "B")
    viz.stepper.step_forward()
    assert "empty" in viz.explanation()


def test_metrics():
    m = Visualization("ABCBDAB", "BDCABA").metrics()
    assert (m.len_a, m.len_b, m.lcs, m.lcs_length) == (7, 6, "BDAB", 4)
    assert m.total_steps == 42
    assert m.match_steps + m.extend_steps == 42
    assert m.match_steps == sum(1 for x in "ABCBDAB" for y in "BDCABA" if x == y)
    assert m.wall_time_ms >= 0


def test_export_is_serialisable():
    import json

    viz = Visualization("AB", "B")
    data = viz.export(include_events=True)
    json.dumps(data)
    assert data["a"] == "AB"
    assert data["lcs"] == "B"
    assert data["state"] == "paused"
    assert data["current_event"]["kind"] == "extend"
    assert len(data["events"]) == 2
    assert data["progress"]["total"] == 2


def test_restore_from_session_state():
    viz = Visualization("ABC", "ABC")
    for _ in range(4):
        viz.stepper.step_forward()
    stored = viz.stepper.to_dict()

    again = Visualization.restore("ABC", "ABC", stepper_state=stored)
    assert again.stepper.current_idx == 4
    assert again.highlight() == viz.highlight()


def test_restore_discards_stale_stepper():
    viz = Visualization("ABC", "ABC")
    for _ in range(8):
        viz.stepper.step_forward()
    stored = viz.stepper.to_dict()

    again = Visualization.restore("AB", "AB", stepper_state=stored)
    assert again.stepper.total_steps == 4
    assert again.stepper.current_idx == 0


def test_close_cancels_timer(scheduler):
    viz = Visualization("AB", "AB", stepper=Stepper(scheduler=scheduler))
    viz.stepper.play()
    viz.close()
    assert scheduler.pending == []
