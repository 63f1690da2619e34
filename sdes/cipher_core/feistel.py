"""
Feistel Primitive

This module implements the per-round mixing of Simplified DES: the 6-to-8
bit expansion, the S-box substitution that brings the value back to 6
bits, and one full swap-and-mix round on a 12-bit block.

Every function works element-wise, so it accepts either a Python int or
a numpy array of unsigned integers.
"""

from ..config import HALF_MASK, HALF_SIZE
from ..sbox.tables import S1, S2


def expand(value):
    """
    Expand a 6-bit value to 8 bits.

    With the input bits numbered 123456 (most significant first), the
    result is 12434356: bits 3 and 4 are duplicated into adjacent
    positions.

    Args:
        value: The 6-bit value(s) to expand

    Returns:
        The expanded 8-bit value(s)
    """
    return (((value & 48) << 2) | ((value & 4) << 3) | ((value & 12) << 1)
            | ((value & 8) >> 1) | (value & 3))


def confuse(value):
    """
    Substitute an 8-bit value down to 6 bits.

    The high nibble is looked up in S1 and the low nibble in S2; the two
    3-bit results are concatenated in the same order.

    Args:
        value: The 8-bit value(s) to substitute

    Returns:
        The 6-bit result(s)
    """
    return (S1[value >> 4] << 3) | S2[value & 15]


def feistel(half, round_key):
    """Feistel function: confuse(expand(half) XOR round_key)."""
    return confuse(expand(half) ^ round_key)


def feistel_round(block, round_key):
    """
    Apply one round to a 12-bit block.

    The right half moves to the left, and the new right half is the
    Feistel function of the old right half XOR the old left half. The
    halves are swapped on every round, including the last.

    Args:
        block: The 12-bit block(s)
        round_key: The 8-bit key for this round

    Returns:
        The 12-bit block(s) after the round
    """
    right = block & HALF_MASK
    return (right << HALF_SIZE) | (feistel(right, round_key) ^ (block >> HALF_SIZE))
