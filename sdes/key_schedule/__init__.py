"""
Key Schedule Package

This package implements the key expansion that turns the 9-bit master
key into the 8-bit round keys used by the block cipher.
"""

from .mask_key_schedule import generate_round_keys, parse_key, check_key

__all__ = ['generate_round_keys', 'parse_key', 'check_key']
