"""
Cipher Core Package

This package implements the core of Simplified DES: the Feistel
primitive (expand, confuse, round) and the block encrypt/decrypt
operations on 12-bit blocks.
"""

from .feistel import expand, confuse, feistel, feistel_round
from .block_cipher import (SimplifiedDES, encrypt_block, decrypt_block,
                           encrypt_blocks, decrypt_blocks)

__all__ = [
    'SimplifiedDES', 'encrypt_block', 'decrypt_block',
    'encrypt_blocks', 'decrypt_blocks',
    'expand', 'confuse', 'feistel', 'feistel_round',
]
