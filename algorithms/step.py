"""
step.py — LCS Fill Events, Path Entries & Results
===================================================
The LCS generator yields one FillEvent per DP cell it computes.
A FillEvent is a frozen-in-time record of everything the visualizer
needs to render one frame of the table fill:

    • Which cell (i, j) was just computed
    • The value written into it
    • Whether it came from a character match (diagonal + 1)
      or from extending the best neighbour (max of up / left)
    • Which line of pseudocode is executing right now
    • A plain-English explanation of *why* the cell has that value

After the table is complete, backtracking produces one PathEntry per
matched character of the LCS, and everything is bundled into an LCSResult.

Design decisions:
  - All records are frozen dataclasses.  They are SNAPSHOTS.  The
    generator is the only writer; the stepper / renderer are pure readers.
  - The table is a tuple of tuples.  A result never changes once built.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple, Any


# ---------------------------------------------------------------------------
# Fill kind — maps 1-to-1 with the cell colour palette
# ---------------------------------------------------------------------------
class FillKind(Enum):
    MATCH  = "match"    # blue — A[i-1] == B[j-1], diagonal + 1
    EXTEND = "extend"   # yellow — max(up, left)


# ---------------------------------------------------------------------------
# Fill Event
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FillEvent:
    """
    Attributes:
        i, j            : Cell coordinates in the (m+1) x (n+1) table (both >= 1).
        value           : Value written into table[i][j].
        kind            : FillKind.MATCH or FillKind.EXTEND.
        step_number     : 0-based position of this event in the fill timeline.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        explanation     : Human-readable "why" text for the explanation panel.
    """

    i:               int
    j:               int
    value:           int
    kind:            FillKind
    step_number:     int = 0
    pseudocode_line: int = 0
    explanation:     str = ""

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.i, self.j)

    @property
    def is_match(self) -> bool:
        return self.kind is FillKind.MATCH

    def to_dict(self) -> Dict[str, Any]:
        return {
            "i":               self.i,
            "j":               self.j,
            "value":           self.value,
            "kind":            self.kind.value,
            "step_number":     self.step_number,
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
        }


# ---------------------------------------------------------------------------
# Path Entry
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PathEntry:
    """One matched character recovered while backtracking from (m, n)."""

    i:    int
    j:    int
    char: str

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.i, self.j)

    def to_dict(self) -> Dict[str, Any]:
        return {"i": self.i, "j": self.j, "char": self.char}


# ---------------------------------------------------------------------------
# LCS Result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LCSResult:
    """
    Attributes:
        a, b   : The two input sequences, exactly as given.
        table  : (m+1) x (n+1) DP table; row 0 and column 0 are all zero.
        events : Fill timeline, row-major, exactly len(a) * len(b) entries.
        path   : Path entries head-to-tail (leftmost LCS character first).
    """

    a:      str
    b:      str
    table:  Tuple[Tuple[int, ...], ...]
    events: Tuple[FillEvent, ...] = field(default_factory=tuple)
    path:   Tuple[PathEntry, ...] = field(default_factory=tuple)

    @property
    def lcs(self) -> str:
        return "".join(entry.char for entry in self.path)

    @property
    def length(self) -> int:
        return self.table[len(self.a)][len(self.b)]

    @property
    def total_steps(self) -> int:
        return len(self.events)

    def path_cells(self) -> List[Tuple[int, int]]:
        return [entry.cell for entry in self.path]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "a":           self.a,
            "b":           self.b,
            "table":       [list(row) for row in self.table],
            "events":      [e.to_dict() for e in self.events],
            "path":        [p.to_dict() for p in self.path],
            "lcs":         self.lcs,
            "length":      self.length,
            "total_steps": self.total_steps,
        }
