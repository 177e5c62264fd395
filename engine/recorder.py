"""
recorder.py — Visualization Session & Run Analytics
=====================================================
Pairs one LCSResult with one Stepper and answers every question the
renderer asks:  what is the table, which cells are lit, how far along
are we, what did the run cost.

Usage:
    viz = Visualization()
    viz.set_sequences("ABCBDAB", "BDCABA")   # recompute + rewind
    viz.stepper.step_forward()
    viz.highlight()                          # cells to colour right now
    viz.progress()                           # "Step 2 of 42"
    viz.export()                             # serialisable snapshot for the API

Recompute-on-change:
    set_sequences() is the ONLY place the engine runs.  The result is
    cached until the inputs change, and the stepper is reloaded at the
    same time, so a stale timeline can never be shown against new inputs.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from algorithms import compute, FillEvent, LCSResult
from algorithms.lcs import LINE_BACKTRACK
from engine.stepper import Stepper


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Highlight — the set of cells to colour right now
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Highlight:
    """
    mode is one of:
        "path"   – backtrack path revealed; `cells` are the path cells
        "match"  – current fill event came from a character match
        "extend" – current fill event came from max(up, left)
        "none"   – empty timeline, nothing to colour
    """

    mode:  str                         = "none"
    cells: Tuple[Tuple[int, int], ...] = field(default_factory=tuple)

    def __contains__(self, cell) -> bool:
        return tuple(cell) in self.cells

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode, "cells": [list(c) for c in self.cells]}


# ---------------------------------------------------------------------------
# Progress — what the progress bar renders
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Progress:
    current:   int   = 0        # 1-based for display, 0 when there are no steps
    total:     int   = 0
    percent:   float = 0.0
    show_path: bool  = False

    def to_dict(self) -> Dict[str, Any]:
        return self.__dict__.copy()


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    len_a:         int   = 0
    len_b:         int   = 0
    lcs:           str   = ""
    lcs_length:    int   = 0
    total_steps:   int   = 0      # number of fill events
    match_steps:   int   = 0
    extend_steps:  int   = 0
    wall_time_ms:  float = 0.0    # time spent in compute()


# ---------------------------------------------------------------------------
# Visualization
# ---------------------------------------------------------------------------
class Visualization:
    """
    Attributes:
        a, b     : Current input sequences.
        result   : Cached LCSResult for (a, b).
        stepper  : Playback state over result.events.
    """

    def __init__(
        self,
        a: str = "",
        b: str = "",
        stepper: Optional[Stepper] = None,
        compute_fn: Callable[[str, str], LCSResult] = compute,
    ):
        self._compute = compute_fn
        self.stepper: Stepper = stepper or Stepper()
        self.a:       str     = a
        self.b:       str     = b
        self._wall_ms: float  = 0.0
        self.result:  LCSResult = self._run(a, b)
        self.stepper.load(self.result.total_steps)

    # ------------------------------------------------------------------
    # Input changes
    # ------------------------------------------------------------------
    def set_sequences(self, a: str, b: str) -> bool:
        """
        Recompute for new inputs and rewind the stepper.
        Returns False (and keeps everything) if nothing changed.
        """
        if a == self.a and b == self.b:
            return False
        logger.info("sequences changed: %r / %r", a, b)
        self.result = self._run(a, b)
        self.a, self.b = a, b
        self.stepper.load(self.result.total_steps)
        return True

    # ------------------------------------------------------------------
    # Derived views (no side effects)
    # ------------------------------------------------------------------
    @property
    def current_event(self) -> Optional[FillEvent]:
        events = self.result.events
        idx = self.stepper.current_idx
        if 0 <= idx < len(events):
            return events[idx]
        return None

    def highlight(self) -> Highlight:
        if self.stepper.show_path:
            return Highlight(mode="path", cells=tuple(self.result.path_cells()))
        event = self.current_event
        if event is None:
            return Highlight()
        return Highlight(mode=event.kind.value, cells=(event.cell,))

    def progress(self) -> Progress:
        total = self.result.total_steps
        if total == 0:
            return Progress()
        idx = self.stepper.current_idx
        return Progress(
            current=idx + 1,
            total=total,
            percent=round(100.0 * idx / total, 1),
            show_path=self.stepper.show_path,
        )

    def explanation(self) -> str:
        if self.stepper.show_path:
            if not self.result.path:
                return "No common characters: the LCS is empty."
            return (
                f"Backtracked from dp[{len(self.a)}][{len(self.b)}]: "
                f"LCS = '{self.result.lcs}' (length {self.result.length})."
            )
        event = self.current_event
        return event.explanation if event else ""

    def pseudocode_line(self) -> int:
        if self.stepper.show_path:
            return LINE_BACKTRACK
        event = self.current_event
        return event.pseudocode_line if event else -1

    def metrics(self) -> RunMetrics:
        events = self.result.events
        matches = sum(1 for e in events if e.is_match)
        return RunMetrics(
            len_a=len(self.a),
            len_b=len(self.b),
            lcs=self.result.lcs,
            lcs_length=self.result.length,
            total_steps=len(events),
            match_steps=matches,
            extend_steps=len(events) - matches,
            wall_time_ms=round(self._wall_ms, 3),
        )

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self, include_events: bool = False) -> Dict[str, Any]:
        event = self.current_event
        data = {
            "a":             self.a,
            "b":             self.b,
            "table":         [list(row) for row in self.result.table],
            "lcs":           self.result.lcs,
            "length":        self.result.length,
            "path":          [p.to_dict() for p in self.result.path],
            "stepper":       self.stepper.to_dict(),
            "state":         self.stepper.state.value,
            "current_event": event.to_dict() if event else None,
            "highlight":     self.highlight().to_dict(),
            "progress":      self.progress().to_dict(),
            "metrics":       self.metrics().__dict__.copy(),
        }
        if include_events:
            data["events"] = [e.to_dict() for e in self.result.events]
        return data

    @classmethod
    def restore(
        cls,
        a: str,
        b: str,
        stepper_state: Optional[Dict[str, Any]] = None,
        compute_fn: Callable[[str, str], LCSResult] = compute,
        **stepper_kwargs,
    ) -> "Visualization":
        """
        Rebuild a session from stored sequences + stepper state.  A stored
        stepper for a timeline of a different length is discarded.
        """
        viz = cls(a, b, stepper=Stepper(**stepper_kwargs), compute_fn=compute_fn)
        if stepper_state and int(stepper_state.get("total_steps", -1)) == viz.result.total_steps:
            viz.stepper.close()
            viz.stepper = Stepper.from_dict(stepper_state, **stepper_kwargs)
        return viz

    def close(self) -> None:
        self.stepper.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _run(self, a: str, b: str) -> LCSResult:
        start = time.perf_counter()
        result = self._compute(a, b)
        self._wall_ms = (time.perf_counter() - start) * 1000
        return result

