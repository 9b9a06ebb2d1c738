"""
Compact <-> expanded polynomial codec

A compact polynomial stores `lanes` coefficients per 256-bit word.
Coefficient i lives in word i // lanes at bit offset (i % lanes) * bits,
so the first coefficient of a word is its least significant lane.
"""

from typing import List, Sequence

from ..errors import MalformedInputError
from .params import WORD_BITS


def compact(coeffs: Sequence[int], bits: int) -> List[int]:
    """
    Pack coefficients into 256-bit words

    Input: coeffs, each in [0, 2^bits); len(coeffs) a multiple of 256 / bits
    Output: list of len(coeffs) * bits / 256 words
    """
    lanes = WORD_BITS // bits
    if len(coeffs) % lanes != 0:
        raise MalformedInputError(
            f"{len(coeffs)} coefficients do not fill whole {lanes}-lane words"
        )
    limit = 1 << bits
    words = [0] * (len(coeffs) // lanes)
    for i, c in enumerate(coeffs):
        if c < 0 or c >= limit:
            raise MalformedInputError(f"Coefficient {i} = {c} does not fit in {bits} bits")
        words[i // lanes] |= c << ((i % lanes) * bits)
    return words


def expand(words: Sequence[int], bits: int) -> List[int]:
    """
    Unpack 256-bit words into one integer per coefficient

    Input: words, each in [0, 2^256)
    Output: list of len(words) * 256 / bits coefficients
    """
    lanes = WORD_BITS // bits
    mask = (1 << bits) - 1
    coeffs = []
    for i, word in enumerate(words):
        if word < 0 or word >> WORD_BITS:
            raise MalformedInputError(f"Word {i} is not a {WORD_BITS}-bit unsigned integer")
        for lane in range(lanes):
            coeffs.append((word >> (lane * bits)) & mask)
    return coeffs
