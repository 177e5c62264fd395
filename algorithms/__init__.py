"""
algorithms/
-----------
The LCS engine plus the metadata card the UI shows next to it.

    from algorithms import compute, LCSResult, FillEvent, PathEntry
    from algorithms import LCS_INFO

AlgoInfo is a lightweight dataclass consumed by the pseudocode viewer
and the page header.
"""

from dataclasses import dataclass, field
from typing import Callable, List

from algorithms.step import FillEvent, FillKind, PathEntry, LCSResult
from algorithms.lcs  import compute, fill_events, lcs_length, PSEUDOCODE


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # e.g. "lcs"
    label:            str                    # human label
    fn:               Callable               # the compute function
    pseudocode:       List[str]              # lines for the side-panel
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str      = ""
    complexity_space: str      = ""
    description:      str      = ""


LCS_INFO = AlgoInfo(
    key="lcs", label="Longest Common Subsequence", fn=compute, pseudocode=PSEUDOCODE,
    tags=["dynamic-programming", "strings"],
    complexity_time="O(m · n)", complexity_space="O(m · n)",
    description=(
        "Fills a table of prefix LCS lengths, then backtracks from the "
        "bottom-right corner to recover the characters."
    ),
)


__all__ = [
    "AlgoInfo",
    "LCS_INFO",
    "FillEvent",
    "FillKind",
    "PathEntry",
    "LCSResult",
    "compute",
    "fill_events",
    "lcs_length",
    "PSEUDOCODE",
]
