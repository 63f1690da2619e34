"""
File Mode Package

This package applies the block cipher to whole files and byte streams,
framing the data as a padding byte followed by 3-byte groups.
"""

from .stream_codec import (FileCodec, CodecResult, encrypt_file, decrypt_file,
                           encrypt_stream, decrypt_stream, encrypt_bytes,
                           decrypt_bytes, padding_for)

__all__ = [
    'FileCodec', 'CodecResult', 'encrypt_file', 'decrypt_file',
    'encrypt_stream', 'decrypt_stream', 'encrypt_bytes', 'decrypt_bytes',
    'padding_for',
]
