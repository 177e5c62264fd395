"""
sequence.py — Input Sequences
==============================
Everything the input fields do to a sequence before the engine sees it.

Responsibilities:
  1. Normalisation                 (strip, uppercase, truncate)
  2. Random sequence generation    (the "Generate Random Strings" button)

The LCS engine itself is case-sensitive and accepts any characters;
normalisation is a convention of the input fields, so it lives here and
nothing in algorithms/ calls it.
"""

import random
import string
from typing import Optional, Tuple


MAX_LENGTH:   int             = 15
ALPHABET:     str             = string.ascii_uppercase
DEFAULT_PAIR: Tuple[str, str] = ("ABCBDAB", "BDCABA")


def normalize(text: Optional[str], max_length: int = MAX_LENGTH, uppercase: bool = True) -> str:
    """Optionally uppercase, then truncate to `max_length` characters.  Spaces are kept."""
    if text is None:
        return ""
    if not isinstance(text, str):
        raise TypeError(f"Sequence must be a str, got {type(text).__name__}")
    if uppercase:
        text = text.upper()
    return text[:max(0, max_length)]


def random_sequence(
    length: int = 8,
    alphabet: str = ALPHABET,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Uniformly random sequence drawn from `alphabet`.
    Pass a seeded random.Random for reproducible output.
    """
    if not alphabet:
        raise ValueError("alphabet must not be empty")
    rng = rng or random.Random()
    length = max(0, min(length, MAX_LENGTH))
    return "".join(rng.choice(alphabet) for _ in range(length))


def random_pair(length: int = 8, rng: Optional[random.Random] = None) -> Tuple[str, str]:
    rng = rng or random.Random()
    return random_sequence(length, rng=rng), random_sequence(length, rng=rng)
