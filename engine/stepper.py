"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object the UI drives during playback.  It owns
the cursor into the fill timeline, the "show backtrack path" flag and
the auto-play timer, and exposes a clean play/pause/next/prev/speed API.
It never touches the table itself.  The Visualization pairs it with an
LCSResult to work out what to highlight.

State machine:
    IDLE     (empty timeline, every operation is a no-op)
    PAUSED   →  play()          →  PLAYING
    PLAYING  →  pause()         →  PAUSED
    PLAYING  →  (path revealed, next beat is a no-op) → FINISHED
    FINISHED →  toggle_play()   →  PLAYING from step 0
    any      →  reset()/load()  →  PAUSED at step 0

Auto-play can be driven two ways:
  • Scheduler mode — pass anything with `call_later(seconds, callback)`
    returning a handle with `cancel()` (an asyncio event loop works).
    The Stepper keeps AT MOST ONE outstanding handle and cancels it on
    pause, reset, load, close and before arming a new one.
  • Tick mode — no scheduler; the host calls tick() periodically
    (e.g. every 50 ms) and a step is taken once `delay_ms` has elapsed.

Thread safety:
  This class is NOT thread-safe.  Call it from a single thread or from
  one event loop.
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Delay bounds & presets (milliseconds per step, smaller = faster)
# ---------------------------------------------------------------------------
DELAY_MIN_MS:     int = 100
DELAY_MAX_MS:     int = 1000
DELAY_STEP_MS:    int = 100
DEFAULT_DELAY_MS: int = 500

SPEED_PRESETS = {
    "slow":   1000,   # teaching mode
    "medium": 500,
    "fast":   200,    # demo mode
    "turbo":  100,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        total_steps : Number of fill events in the loaded timeline.
        current_idx : 0-based cursor into the timeline.
        show_path   : True once the backtrack path has been revealed.
        is_playing  : Auto-play enabled.
        delay_ms    : Milliseconds between auto-play steps.
        on_step     : Optional callback(Stepper) fired whenever the cursor or
                      show_path changes.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        total_steps: int = 0,
        on_step: Optional[Callable[["Stepper"], None]] = None,
        scheduler: Any = None,
        delay_ms: int = DEFAULT_DELAY_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.total_steps: int  = max(0, total_steps)
        self.current_idx: int  = 0
        self.show_path:   bool = False
        self.is_playing:  bool = False
        self.delay_ms:    int  = _clamp_delay(delay_ms)
        self.on_step:     Optional[Callable[["Stepper"], None]] = on_step

        self._scheduler = scheduler
        self._timer     = None          # outstanding scheduler handle
        self._clock     = clock
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, total_steps: int) -> None:
        """Attach a fresh timeline of `total_steps` events and rewind."""
        self.total_steps = max(0, total_steps)
        logger.debug("stepper loaded with %d steps", self.total_steps)
        self.reset()

    def reset(self) -> None:
        """Back to step 0, path hidden, auto-play off."""
        self.pause()
        self.current_idx = 0
        self.show_path   = False
        self._notify()

    def close(self) -> None:
        """Cancel any outstanding timer.  Call before dropping the Stepper."""
        self.pause()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """
        Advance one step.  From the last event, the next call reveals the
        backtrack path.  Returns False if already at the very end.
        """
        if self.total_steps == 0:
            return False
        if self.current_idx < self.last_index:
            self.current_idx += 1
        elif not self.show_path:
            self.show_path = True
            logger.debug("backtrack path revealed")
        else:
            return False
        self._notify()
        return True

    def step_backward(self) -> bool:
        """
        Mirror of step_forward: hides the path first (cursor stays put),
        then rewinds one event.  Returns False if already at the start.
        """
        if self.total_steps == 0:
            return False
        if self.show_path:
            self.show_path = False
        elif self.current_idx > 0:
            self.current_idx -= 1
        else:
            return False
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.total_steps == 0 or self.is_finished or self.is_playing:
            return
        self.is_playing = True
        self._last_tick = self._clock()
        self._arm()

    def pause(self) -> None:
        self.is_playing = False
        self._cancel_timer()

    def toggle_play(self) -> None:
        """At the very end, restart from step 0 and play; otherwise flip."""
        if self.is_finished:
            self.current_idx = 0
            self.show_path   = False
            self._notify()
            self.play()
        elif self.is_playing:
            self.pause()
        else:
            self.play()

    def advance(self) -> bool:
        """
        One auto-play beat.  Steps forward, or switches auto-play off when
        there is nothing left to show.  Returns True if a step was taken.
        """
        if not self.is_playing:
            return False
        if self.step_forward():
            return True
        logger.debug("end of timeline, auto-play stopped")
        self.pause()
        return False

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Tick-mode driver.  If playing and `delay_ms` has elapsed since the
        last beat, advances one step.  Returns True if a step was taken.
        """
        if not self.is_playing:
            return False
        now = self._clock() if now is None else now
        if (now - self._last_tick) * 1000 >= self.delay_ms:
            self._last_tick = now
            return self.advance()
        return False

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if not isinstance(preset, str) or preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {preset}")
        self.set_delay(SPEED_PRESETS[preset])

    def set_delay(self, delay_ms) -> None:
        """Clamp to [DELAY_MIN_MS, DELAY_MAX_MS]; re-arms a running timer."""
        self.delay_ms = _clamp_delay(delay_ms)
        if self.is_playing:
            self._arm()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def last_index(self) -> int:
        return self.total_steps - 1

    @property
    def is_finished(self) -> bool:
        return self.total_steps > 0 and self.current_idx == self.last_index and self.show_path

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    @property
    def state(self) -> StepperState:
        if self.total_steps == 0:
            return StepperState.IDLE
        if self.is_playing:
            return StepperState.PLAYING
        if self.is_finished:
            return StepperState.FINISHED
        return StepperState.PAUSED

    # ------------------------------------------------------------------
    # Serialisation (for the Flask session)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_steps": self.total_steps,
            "current_idx": self.current_idx,
            "show_path":   self.show_path,
            "is_playing":  self.is_playing,
            "delay_ms":    self.delay_ms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **kwargs) -> "Stepper":
        """Rebuild a Stepper, clamping anything that would break its invariants."""
        s = cls(
            total_steps=int(data.get("total_steps", 0)),
            delay_ms=data.get("delay_ms", DEFAULT_DELAY_MS),
            **kwargs,
        )
        if s.total_steps == 0:
            return s
        s.current_idx = min(max(0, int(data.get("current_idx", 0))), s.last_index)
        s.show_path   = bool(data.get("show_path", False)) and s.current_idx == s.last_index
        s.is_playing  = bool(data.get("is_playing", False)) and not s.is_finished
        if s.is_playing:
            s._last_tick = s._clock()
            s._arm()
        return s

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _arm(self) -> None:
        self._cancel_timer()
        if self._scheduler is None:
            return
        self._timer = self._scheduler.call_later(self.delay_ms / 1000.0, self._on_timer)
        logger.debug("auto-play timer armed (%d ms)", self.delay_ms)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.debug("auto-play timer cancelled")

    def _on_timer(self) -> None:
        self._timer = None
        if self.advance() and self.is_playing:
            self._arm()

    def _notify(self) -> None:
        if self.on_step:
            self.on_step(self)


def _clamp_delay(delay_ms) -> int:
    try:
        value = int(round(float(delay_ms)))
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Delay must be a number of milliseconds, got {delay_ms!r}")
    return max(DELAY_MIN_MS, min(DELAY_MAX_MS, value))
