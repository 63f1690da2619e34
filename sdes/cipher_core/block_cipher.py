"""
Block Cipher Implementation

This module provides the Simplified DES block operations on 12-bit
blocks: the round sequence in forward order for encryption and reverse
order for decryption, each followed by a corrective half swap.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from ..config import BLOCK_MASK, HALF_MASK, HALF_SIZE
from ..errors import KeyScheduleError
from ..key_schedule.mask_key_schedule import generate_round_keys
from .feistel import feistel_round

logger = logging.getLogger(__name__)


def _rounds_to_run(round_keys: Sequence[int], num_rounds: Optional[int]) -> int:
    if not round_keys:
        raise KeyScheduleError("Round-key schedule is empty")
    if num_rounds is None:
        return len(round_keys)
    if not 1 <= num_rounds <= len(round_keys):
        raise KeyScheduleError(
            f"Cannot run {num_rounds} rounds with a schedule of {len(round_keys)} keys"
        )
    return num_rounds


def _check_block(block: int) -> None:
    if not 0 <= block <= BLOCK_MASK:
        raise ValueError(f"Block must be a 12-bit value, got 0x{block:X}")


def _swap_halves(state):
    # Undo the swap performed by the final round
    return ((state & HALF_MASK) << HALF_SIZE) | ((state & (HALF_MASK << HALF_SIZE)) >> HALF_SIZE)


def _run(state, round_keys: Sequence[int]):
    for round_key in round_keys:
        state = feistel_round(state, round_key)
    return _swap_halves(state)


def encrypt_blocks(blocks: np.ndarray, round_keys: Sequence[int],
                   num_rounds: Optional[int] = None) -> np.ndarray:
    """
    Encrypt an array of 12-bit blocks.

    Args:
        blocks: Array of 12-bit values
        round_keys: The round-key schedule
        num_rounds: Number of rounds to run (default: len(round_keys))

    Returns:
        A uint32 array of encrypted blocks, same shape as the input
    """
    n = _rounds_to_run(round_keys, num_rounds)
    state = np.asarray(blocks, dtype=np.uint32) & BLOCK_MASK
    return _run(state, round_keys[:n])


def decrypt_blocks(blocks: np.ndarray, round_keys: Sequence[int],
                   num_rounds: Optional[int] = None) -> np.ndarray:
    """
    Decrypt an array of 12-bit blocks.

    Args:
        blocks: Array of 12-bit values
        round_keys: The round-key schedule used for encryption
        num_rounds: Number of rounds to run (default: len(round_keys))

    Returns:
        A uint32 array of decrypted blocks, same shape as the input
    """
    n = _rounds_to_run(round_keys, num_rounds)
    state = np.asarray(blocks, dtype=np.uint32) & BLOCK_MASK
    return _run(state, round_keys[n - 1::-1])


def encrypt_block(block: int, round_keys: Sequence[int],
                  num_rounds: Optional[int] = None) -> int:
    """
    Encrypt a single 12-bit block.

    Args:
        block: The 12-bit plaintext block
        round_keys: The round-key schedule
        num_rounds: Number of rounds to run (default: len(round_keys))

    Returns:
        The 12-bit ciphertext block
    """
    _check_block(block)
    n = _rounds_to_run(round_keys, num_rounds)
    return int(_run(block, round_keys[:n]))


def decrypt_block(block: int, round_keys: Sequence[int],
                  num_rounds: Optional[int] = None) -> int:
    """
    Decrypt a single 12-bit block.

    Args:
        block: The 12-bit ciphertext block
        round_keys: The round-key schedule used for encryption
        num_rounds: Number of rounds to run (default: len(round_keys))

    Returns:
        The 12-bit plaintext block
    """
    _check_block(block)
    n = _rounds_to_run(round_keys, num_rounds)
    return int(_run(block, round_keys[n - 1::-1]))


class SimplifiedDES:
    """
    Simplified DES with a 12-bit block, 9-bit key and 1 to 9 rounds.

    The round-key schedule is derived once at construction and reused for
    every block.
    """

    def __init__(self, key: int, num_rounds: int = 2):
        """
        Initialize the cipher.

        Args:
            key: The 9-bit master key
            num_rounds: Number of rounds (1 to 9)

        Raises:
            InvalidKeyError: If the key does not fit in 9 bits
            KeyScheduleError: If num_rounds is outside 1 to 9
        """
        self.key = key
        self.num_rounds = num_rounds
        self.round_keys = generate_round_keys(key, num_rounds)

    def encrypt_block(self, block: int) -> int:
        return encrypt_block(block, self.round_keys)

    def decrypt_block(self, block: int) -> int:
        return decrypt_block(block, self.round_keys)

    def encrypt_blocks(self, blocks: np.ndarray) -> np.ndarray:
        return encrypt_blocks(blocks, self.round_keys)

    def decrypt_blocks(self, blocks: np.ndarray) -> np.ndarray:
        return decrypt_blocks(blocks, self.round_keys)

    def __repr__(self) -> str:
        return f"SimplifiedDES(key=0x{self.key:03X}, num_rounds={self.num_rounds})"
