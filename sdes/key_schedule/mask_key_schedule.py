"""
Mask-based Key Schedule Implementation

This module derives the 8-bit round keys of Simplified DES from the 9-bit
master key. Two masks slide one bit to the right per round over a
conceptually doubled copy of the key, so each round exposes a different
window of 8 key bits.
"""

import logging
import re
from typing import Tuple

from ..config import KEY_LENGTH, MAX_KEY, MAX_ROUNDS, SUBKEY_SIZE
from ..errors import InvalidKeyError, KeyScheduleError

logger = logging.getLogger(__name__)

SUBKEY_MASK = (1 << SUBKEY_SIZE) - 1

_KEY_PATTERN = re.compile(r'0[xX]([0-9a-fA-F]{1,3})')


def check_key(master_key: int) -> int:
    """
    Make sure a master key fits in 9 bits.

    Args:
        master_key: The candidate key

    Returns:
        The key, unchanged

    Raises:
        InvalidKeyError: If the key is negative or larger than 0x1FF
    """
    if not isinstance(master_key, int) or isinstance(master_key, bool):
        raise InvalidKeyError(f"Key must be an integer, got {type(master_key).__name__}")
    if not 0 <= master_key <= MAX_KEY:
        raise InvalidKeyError(f"Invalid key value 0x{master_key:X} (must be 0x0 - 0x{MAX_KEY:X})")
    return master_key


def parse_key(text: str) -> int:
    """
    Parse a key written in hex notation, e.g. ``0x1C0``.

    Args:
        text: Key string with a ``0x`` prefix and at most 3 hex digits

    Returns:
        The key as an integer

    Raises:
        InvalidKeyError: If the text is not a hex key or is out of range
    """
    match = _KEY_PATTERN.fullmatch(text.strip())
    if match is None:
        raise InvalidKeyError(f"Invalid key {text!r} (expected hex such as 0x1C0)")
    return check_key(int(match.group(1), 16))


def generate_round_keys(master_key: int, num_rounds: int) -> Tuple[int, ...]:
    """
    Derive the round keys for the requested number of rounds.

    Args:
        master_key: The 9-bit master key
        num_rounds: Number of rounds (1 to 9)

    Returns:
        A tuple of num_rounds 8-bit round keys

    Raises:
        InvalidKeyError: If the key does not fit in 9 bits
        KeyScheduleError: If no schedule exists for num_rounds
    """
    check_key(master_key)
    if num_rounds > MAX_ROUNDS:
        raise KeyScheduleError(
            f"Cannot derive {num_rounds} round keys from a {KEY_LENGTH}-bit key "
            f"(at most {MAX_ROUNDS})"
        )
    if num_rounds < 1:
        raise KeyScheduleError(f"Number of rounds must be at least 1, got {num_rounds}")

    # Left mask covers the top 8 key bits, right mask the same bits of the
    # copy that sits KEY_LENGTH positions higher
    l_mask = ((1 << (KEY_LENGTH - 1)) - 1) << 1
    r_mask = l_mask << KEY_LENGTH

    round_keys = []
    for i in range(num_rounds):
        l_key = (master_key & l_mask) << (KEY_LENGTH + i)
        r_key = (master_key & r_mask) << i

        round_keys.append(((l_key | r_key) >> (KEY_LENGTH + 1)) & SUBKEY_MASK)

        l_mask >>= 1
        r_mask >>= 1

    logger.debug("Derived %d round keys from key 0x%03X", num_rounds, master_key)
    return tuple(round_keys)
