"""
Substitution Tables

This module holds the two fixed 4-bit to 3-bit S-boxes of Simplified DES
and a small evaluator that reports their differential and linear
properties.
"""

import logging
from typing import Dict, Sequence

import numpy as np

logger = logging.getLogger(__name__)

SBOX_INPUT_BITS = 4
SBOX_OUTPUT_BITS = 3


def _frozen_table(values: Sequence[int]) -> np.ndarray:
    # uint32 so lookups mix with 12/24-bit block arithmetic without overflow
    table = np.array(values, dtype=np.uint32)
    table.setflags(write=False)
    return table


# High nibble of the expanded half goes through S1, low nibble through S2
S1 = _frozen_table([5, 2, 1, 6, 3, 4, 7, 0, 1, 4, 6, 2, 0, 7, 5, 3])
S2 = _frozen_table([4, 0, 6, 5, 7, 1, 3, 2, 5, 3, 0, 7, 6, 2, 1, 4])


def calculate_differential_uniformity(sbox: Sequence[int]) -> int:
    """
    Calculate the differential uniformity of an S-box.

    Args:
        sbox: The S-box to evaluate (16 entries)

    Returns:
        The largest entry of the difference distribution table, dx != 0
    """
    size = len(sbox)
    table = np.asarray(sbox, dtype=np.int64)
    ddt = np.zeros((size, 1 << SBOX_OUTPUT_BITS), dtype=np.int32)

    x = np.arange(size)
    for dx in range(1, size):
        dy = table[x] ^ table[x ^ dx]
        np.add.at(ddt[dx], dy, 1)

    return int(np.max(ddt[1:, :]))


def calculate_linear_bias(sbox: Sequence[int]) -> float:
    """
    Calculate the largest linear bias of an S-box.

    Args:
        sbox: The S-box to evaluate

    Returns:
        max |count - size/2| / (size/2) over nonzero input and output masks
    """
    size = len(sbox)
    table = np.asarray(sbox, dtype=np.int64)
    x = np.arange(size)
    half = size // 2

    def parity(values: np.ndarray) -> np.ndarray:
        bits = np.zeros_like(values)
        for shift in range(SBOX_INPUT_BITS):
            bits ^= (values >> shift) & 1
        return bits

    max_bias = 0
    for input_mask in range(1, size):
        input_parity = parity(x & input_mask)
        for output_mask in range(1, 1 << SBOX_OUTPUT_BITS):
            output_parity = parity(table & output_mask)
            count = int(np.count_nonzero(input_parity == output_parity))
            max_bias = max(max_bias, abs(count - half))

    return max_bias / half


def is_balanced(sbox: Sequence[int]) -> bool:
    """Every 3-bit output value appears equally often."""
    counts = np.bincount(np.asarray(sbox, dtype=np.int64), minlength=1 << SBOX_OUTPUT_BITS)
    return bool(np.all(counts == counts[0]))


def evaluate_sbox(sbox: Sequence[int]) -> Dict[str, float]:
    """
    Evaluate an S-box for cryptographic properties.

    Args:
        sbox: The S-box to evaluate

    Returns:
        A dictionary with 'differential', 'linear' and 'balanced' entries
    """
    if len(sbox) != 1 << SBOX_INPUT_BITS:
        raise ValueError(f"S-box must have {1 << SBOX_INPUT_BITS} entries")
    if any(not 0 <= v < (1 << SBOX_OUTPUT_BITS) for v in sbox):
        raise ValueError(f"S-box outputs must fit in {SBOX_OUTPUT_BITS} bits")

    metrics = {
        'differential': calculate_differential_uniformity(sbox),
        'linear': calculate_linear_bias(sbox),
        'balanced': is_balanced(sbox),
    }
    logger.debug("S-box metrics: %s", metrics)
    return metrics


if __name__ == "__main__":
    for name, table in (('S1', S1), ('S2', S2)):
        metrics = evaluate_sbox([int(v) for v in table])
        print(f"{name} differential uniformity: {metrics['differential']}")
        print(f"{name} linear bias: {metrics['linear']:.3f}")
        print(f"{name} balanced: {metrics['balanced']}")
