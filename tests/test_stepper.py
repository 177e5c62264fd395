import pytest

from engine import Stepper, StepperState, DEFAULT_DELAY_MS, DELAY_MIN_MS, DELAY_MAX_MS


def walk_to_end(stepper):
    while stepper.step_forward():
        pass


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------
def test_initial_state():
    s = Stepper(total_steps=6)
    assert (s.current_idx, s.show_path, s.is_playing) == (0, False, False)
    assert s.delay_ms == DEFAULT_DELAY_MS
    assert s.state is StepperState.PAUSED


def test_forward_reveals_path_exactly_once():
    s = Stepper(total_steps=6)
    reveals = 0
    for _ in range(6):
        before = s.show_path
        assert s.step_forward()
        if s.show_path and not before:
            reveals += 1
    assert reveals == 1
    assert s.current_idx == 5
    assert s.is_finished
    assert s.state is StepperState.FINISHED
    assert not s.step_forward()
    assert (s.current_idx, s.show_path) == (5, True)


def test_backward_hides_path_before_moving():
    s = Stepper(total_steps=3)
    walk_to_end(s)
    assert s.step_backward()
    assert (s.current_idx, s.show_path) == (2, False)
    assert s.step_backward()
    assert s.current_idx == 1
    assert s.step_backward()
    assert s.current_idx == 0
    assert not s.step_backward()
    assert s.current_idx == 0


def test_cursor_stays_in_bounds():
    s = Stepper(total_steps=4)
    for op in ["f", "f", "b", "f", "f", "f", "f", "f", "b", "b", "b", "b", "b", "b", "f"]:
        s.step_forward() if op == "f" else s.step_backward()
        assert 0 <= s.current_idx <= 3
        if s.show_path:
            assert s.current_idx == 3


def test_single_step_timeline():
    s = Stepper(total_steps=1)
    assert s.step_forward()
    assert s.show_path
    assert not s.step_forward()


def test_empty_timeline_is_all_noops(scheduler):
    s = Stepper(total_steps=0, scheduler=scheduler)
    assert s.state is StepperState.IDLE
    assert not s.step_forward()
    assert not s.step_backward()
    s.toggle_play()
    assert not s.is_playing
    assert scheduler.pending == []
    assert not s.tick(now=10.0)
    s.reset()
    assert (s.current_idx, s.show_path) == (0, False)


def test_reset_and_load():
    s = Stepper(total_steps=5)
    walk_to_end(s)
    s.play()
    s.reset()
    assert (s.current_idx, s.show_path, s.is_playing) == (0, False, False)
    s.step_forward()
    s.load(2)
    assert s.total_steps == 2
    assert (s.current_idx, s.show_path) == (0, False)


def test_on_step_callback():
    seen = []
    s = Stepper(total_steps=2, on_step=lambda st: seen.append((st.current_idx, st.show_path)))
    s.step_forward()
    s.step_forward()
    s.step_forward()          # no-op, no callback
    s.step_backward()
    assert seen == [(1, False), (1, True), (1, False)]


# ---------------------------------------------------------------------------
# Play / Pause
# ---------------------------------------------------------------------------
def test_toggle_play_flips():
    s = Stepper(total_steps=3)
    s.toggle_play()
    assert s.is_playing
    assert s.state is StepperState.PLAYING
    s.toggle_play()
    assert not s.is_playing


def test_toggle_play_at_end_restarts():
    s = Stepper(total_steps=3)
    walk_to_end(s)
    s.toggle_play()
    assert (s.current_idx, s.show_path, s.is_playing) == (0, False, True)


def test_play_is_noop_when_finished():
    s = Stepper(total_steps=2)
    walk_to_end(s)
    s.play()
    assert not s.is_playing


def test_advance_stops_at_end():
    s = Stepper(total_steps=2)
    s.play()
    assert s.advance()            # 0 -> 1
    assert s.advance()            # reveal path
    assert s.is_playing
    assert not s.advance()        # nothing left
    assert not s.is_playing
    assert s.is_finished


def test_advance_requires_playing():
    s = Stepper(total_steps=3)
    assert not s.advance()
    assert s.current_idx == 0


# ---------------------------------------------------------------------------
# Tick mode
# ---------------------------------------------------------------------------
def test_tick_respects_delay():
    now = [100.0]
    s = Stepper(total_steps=5, delay_ms=200, clock=lambda: now[0])
    s.play()
    assert not s.tick(now=100.1)
    assert s.tick(now=100.2)
    assert s.current_idx == 1
    assert not s.tick(now=100.3)
    assert s.tick(now=100.45)
    assert s.current_idx == 2


def test_tick_uses_clock_and_stops_at_end():
    now = [0.0]
    s = Stepper(total_steps=1, delay_ms=100, clock=lambda: now[0])
    s.play()
    now[0] = 0.1
    assert s.tick()
    assert s.show_path
    now[0] = 0.25
    assert not s.tick()
    assert not s.is_playing


# ---------------------------------------------------------------------------
# Scheduler mode
# ---------------------------------------------------------------------------
def test_scheduler_plays_through_and_disarms(scheduler):
    s = Stepper(total_steps=3, scheduler=scheduler, delay_ms=300)
    s.play()
    assert len(scheduler.pending) == 1
    assert scheduler.pending[0].delay == pytest.approx(0.3)

    scheduler.fire()   # 0 -> 1
    scheduler.fire()   # 1 -> 2
    scheduler.fire()   # reveal path
    assert s.show_path and s.is_playing
    scheduler.fire()   # nothing left: auto-play switches itself off
    assert not s.is_playing
    assert scheduler.pending == []
    assert not s.has_pending_timer


def test_at_most_one_outstanding_timer(scheduler):
    s = Stepper(total_steps=10, scheduler=scheduler)
    for _ in range(5):
        s.toggle_play()
        s.toggle_play()
        s.play()
        assert len(scheduler.pending) == 1
        s.pause()
        assert scheduler.pending == []


def test_set_delay_rearms_running_timer(scheduler):
    s = Stepper(total_steps=10, scheduler=scheduler)
    s.play()
    first = scheduler.pending[0]
    s.set_delay(800)
    assert first.cancelled
    assert len(scheduler.pending) == 1
    assert scheduler.pending[0].delay == pytest.approx(0.8)


def test_load_and_close_cancel_timer(scheduler):
    s = Stepper(total_steps=10, scheduler=scheduler)
    s.play()
    s.load(4)
    assert scheduler.pending == []
    assert not s.is_playing
    s.play()
    s.close()
    assert scheduler.pending == []


def test_toggle_at_end_rearms_once(scheduler):
    s = Stepper(total_steps=2, scheduler=scheduler)
    walk_to_end(s)
    s.toggle_play()
    assert len(scheduler.pending) == 1
    assert s.current_idx == 0


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("value,expected", [
    (50, DELAY_MIN_MS),
    (100, 100),
    (450.4, 450),
    ("700", 700),
    (5000, DELAY_MAX_MS),
])
def test_set_delay_clamps(value, expected):
    s = Stepper()
    s.set_delay(value)
    assert s.delay_ms == expected


@pytest.mark.parametrize("bad", [None, "fast", float("inf"), [100]])
def test_set_delay_rejects_non_numbers(bad):
    with pytest.raises(ValueError):
        Stepper().set_delay(bad)


def test_set_speed_presets():
    s = Stepper()
    s.set_speed("slow")
    assert s.delay_ms == 1000
    s.set_speed("turbo")
    assert s.delay_ms == 100
    with pytest.raises(ValueError):
        s.set_speed("warp")


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------
def test_dict_round_trip():
    s = Stepper(total_steps=4, delay_ms=300)
    walk_to_end(s)
    restored = Stepper.from_dict(s.to_dict())
    assert restored.to_dict() == s.to_dict()
    assert restored.is_finished


def test_from_dict_clamps_invalid_state():
    s = Stepper.from_dict({"total_steps": 3, "current_idx": 9, "show_path": True, "is_playing": True})
    assert s.current_idx == 2
    assert s.show_path
    assert not s.is_playing     # finished timelines never play

    s = Stepper.from_dict({"total_steps": 3, "current_idx": 1, "show_path": True})
    assert not s.show_path


def test_from_dict_playing_arms_scheduler(scheduler):
    s = Stepper.from_dict({"total_steps": 3, "current_idx": 0, "is_playing": True}, scheduler=scheduler)
    assert s.is_playing
    assert len(scheduler.pending) == 1
