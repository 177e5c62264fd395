"""
sequences/
----------
Input layer.  Public API:

    from sequences import normalize, random_sequence, random_pair
    from sequences import MAX_LENGTH, DEFAULT_PAIR
"""

from sequences.sequence import (
    ALPHABET,
    DEFAULT_PAIR,
    MAX_LENGTH,
    normalize,
    random_pair,
    random_sequence,
)

__all__ = [
    "ALPHABET",
    "DEFAULT_PAIR",
    "MAX_LENGTH",
    "normalize",
    "random_pair",
    "random_sequence",
]
