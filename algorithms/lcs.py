"""
lcs.py — Longest Common Subsequence (Dynamic Programming)
===========================================================
The signature "table algorithm".  Every cell of the (m+1) x (n+1) table
is one step of the visualization, so the fill order IS the timeline the
stepper plays back.

Structure:
  for i in 1 … m:                  ← rows, A's characters
      for j in 1 … n:              ← columns, B's characters
          if A[i-1] == B[j-1]:
              dp[i][j] = dp[i-1][j-1] + 1
          else:
              dp[i][j] = max(dp[i-1][j], dp[i][j-1])

Then backtrack from (m, n) to recover the characters.  When the up and
left neighbours tie, the walk moves LEFT (j - 1).  Any tie rule gives a
correct LCS; this one is kept fixed so the same inputs always produce
the same answer.

The engine is case-sensitive and does no normalisation.  Uppercasing /
truncation belongs to the caller (see sequences.normalize).
"""

from typing import Generator, List, Tuple

from algorithms.step import FillEvent, FillKind, PathEntry, LCSResult


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def LCS(A, B):",                                   # 0
    "    dp ← (m+1) × (n+1) table of zeros",            # 1
    "    for i in 1 … m:",                              # 2
    "        for j in 1 … n:",                          # 3
    "            if A[i-1] == B[j-1]:",                 # 4
    "                dp[i][j] = dp[i-1][j-1] + 1",      # 5
    "            else:",                                # 6
    "                dp[i][j] = max(dp[i-1][j],",       # 7
    "                               dp[i][j-1])",       # 8
    "    backtrack from dp[m][n]",                      # 9
    "    return LCS string",                            # 10
]

LINE_MATCH     = 5
LINE_EXTEND    = 7
LINE_BACKTRACK = 9


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def fill_events(a: str, b: str) -> Generator[FillEvent, None, None]:
    """Yield one FillEvent per cell, row-major, on a fresh table."""
    _check_sequence("a", a)
    _check_sequence("b", b)
    dp = _zero_table(len(a), len(b))
    yield from _fill(a, b, dp)


def _fill(a: str, b: str, dp: List[List[int]]) -> Generator[FillEvent, None, None]:
    m, n    = len(a), len(b)
    step_no = 0

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
                yield FillEvent(
                    i=i, j=j, value=dp[i][j], kind=FillKind.MATCH,
                    step_number=step_no,
                    pseudocode_line=LINE_MATCH,
                    explanation=(
                        f"A[{i}] = '{a[i - 1]}' matches B[{j}] = '{b[j - 1]}': "
                        f"take the diagonal {dp[i - 1][j - 1]} + 1 = {dp[i][j]}."
                    ),
                )
            else:
                up, left = dp[i - 1][j], dp[i][j - 1]
                dp[i][j] = max(up, left)
                yield FillEvent(
                    i=i, j=j, value=dp[i][j], kind=FillKind.EXTEND,
                    step_number=step_no,
                    pseudocode_line=LINE_EXTEND,
                    explanation=(
                        f"'{a[i - 1]}' ≠ '{b[j - 1]}': "
                        f"take max(up = {up}, left = {left}) = {dp[i][j]}."
                    ),
                )
            step_no += 1


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def compute(a: str, b: str) -> LCSResult:
    """
    Build the table, the fill timeline and the backtrack path for (a, b).

    Pure: recomputes from scratch on every call.  Callers that want a
    stable result across steps should keep the returned object.
    """
    _check_sequence("a", a)
    _check_sequence("b", b)

    dp     = _zero_table(len(a), len(b))
    events = tuple(_fill(a, b, dp))
    path   = _backtrack(a, b, dp)

    return LCSResult(
        a=a,
        b=b,
        table=tuple(tuple(row) for row in dp),
        events=events,
        path=path,
    )


def lcs_length(a: str, b: str) -> int:
    """Length of the LCS only: fills the table without recording events."""
    _check_sequence("a", a)
    _check_sequence("b", b)

    dp = _zero_table(len(a), len(b))
    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])
    return dp[len(a)][len(b)]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _backtrack(a: str, b: str, dp: List[List[int]]) -> Tuple[PathEntry, ...]:
    i, j = len(a), len(b)
    path: List[PathEntry] = []

    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            path.append(PathEntry(i=i, j=j, char=a[i - 1]))
            i -= 1
            j -= 1
        elif dp[i - 1][j] > dp[i][j - 1]:
            i -= 1
        else:
            # ties go left
            j -= 1

    path.reverse()
    return tuple(path)


def _zero_table(m: int, n: int) -> List[List[int]]:
    return [[0] * (n + 1) for _ in range(m + 1)]


def _check_sequence(name: str, value) -> None:
    if not isinstance(value, str):
        raise TypeError(f"Sequence '{name}' must be a str, got {type(value).__name__}")
