"""
sdes - Simplified DES File Cipher

This library implements Simplified DES, a reduced teaching variant of
DES, together with a codec that encrypts and decrypts whole files.

Key Features:
- 12-bit blocks split into two 6-bit Feistel halves
- 9-bit master key, 1 to 9 rounds
- Mask-rotation key schedule producing 8-bit round keys
- Fixed 4-bit to 3-bit S-boxes
- File format: one padding byte followed by 3-byte groups

The cipher is intentionally small and offers no real security.
"""

__version__ = '0.1.0'
__author__ = 'sdes contributors'

from .errors import (SDESError, InvalidKeyError, KeyScheduleError, FormatError,
                     TruncatedStreamError, StreamReadError)
from .key_schedule import generate_round_keys, parse_key
from .cipher_core import SimplifiedDES, encrypt_block, decrypt_block
from .file_mode import (FileCodec, CodecResult, encrypt_file, decrypt_file,
                        encrypt_bytes, decrypt_bytes)

__all__ = [
    'SDESError', 'InvalidKeyError', 'KeyScheduleError', 'FormatError',
    'TruncatedStreamError', 'StreamReadError',
    'generate_round_keys', 'parse_key',
    'SimplifiedDES', 'encrypt_block', 'decrypt_block',
    'FileCodec', 'CodecResult', 'encrypt_file', 'decrypt_file',
    'encrypt_bytes', 'decrypt_bytes',
]
