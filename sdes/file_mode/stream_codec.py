"""
File Stream Codec

This module applies the Simplified DES block cipher to arbitrary-length
byte streams. Input is consumed in 3-byte groups, each holding two
12-bit blocks. The encrypted stream starts with one unencrypted byte
giving the number of zero bytes (0, 1 or 2) appended to the final group.
"""

import io
import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Dict, Optional, Union

import numpy as np

from ..cipher_core.block_cipher import SimplifiedDES
from ..config import BLOCK_MASK, BLOCK_SIZE, CODEC_DEFAULT_PARAMS, GROUP_SIZE
from ..errors import FormatError, StreamReadError, TruncatedStreamError

logger = logging.getLogger(__name__)

PathLike = Union[str, bytes, os.PathLike]


@dataclass(frozen=True)
class CodecResult:
    """Summary of one encrypt or decrypt operation."""
    bytes_read: int
    bytes_written: int
    padding: int
    groups: int


def padding_for(length: int) -> int:
    """Number of zero bytes that bring length up to a multiple of 3."""
    return (GROUP_SIZE - length % GROUP_SIZE) % GROUP_SIZE


def _unpack_groups(data: bytes) -> np.ndarray:
    # Each 3-byte group is a little-endian 24-bit value
    groups = np.frombuffer(data, dtype=np.uint8).reshape(-1, GROUP_SIZE).astype(np.uint32)
    return groups[:, 0] | (groups[:, 1] << 8) | (groups[:, 2] << 16)


def _pack_groups(values: np.ndarray) -> bytes:
    columns = np.stack([values & 0xFF, (values >> 8) & 0xFF, (values >> 16) & 0xFF], axis=1)
    return columns.astype(np.uint8).tobytes()


def _read(stream: BinaryIO, size: int) -> bytes:
    try:
        return stream.read(size)
    except OSError as e:
        raise StreamReadError(f"Error reading input: {e}") from e


def _stream_length(stream: BinaryIO) -> int:
    """Bytes remaining from the current position of a seekable stream."""
    try:
        start = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        stream.seek(start, io.SEEK_SET)
    except (OSError, ValueError) as e:
        raise StreamReadError(f"Cannot determine input length: {e}") from e
    return end - start


def check_encrypted_length(length: int) -> None:
    """
    Make sure an encrypted input has the padding byte + 3-byte group layout.

    Raises:
        FormatError: If length is not congruent to 1 mod 3
    """
    if length % GROUP_SIZE != 1:
        raise FormatError(
            f"Input does not appear to be in the correct format "
            f"(size {length} is not 1 more than a multiple of {GROUP_SIZE})"
        )


class FileCodec:
    """
    Encrypts and decrypts byte streams with Simplified DES.
    """

    def __init__(self, key: int, num_rounds: Optional[int] = None,
                 params: Optional[Dict[str, int]] = None,
                 cipher: Optional[SimplifiedDES] = None):
        """
        Initialize the codec.

        Args:
            key: The 9-bit master key
            num_rounds: Number of rounds (default from params)
            params: Codec parameters (default: CODEC_DEFAULT_PARAMS)
            cipher: Optional pre-initialized block cipher

        Raises:
            InvalidKeyError: If the key does not fit in 9 bits
            KeyScheduleError: If num_rounds is outside 1 to 9
        """
        if params is None:
            params = CODEC_DEFAULT_PARAMS
        if num_rounds is None:
            num_rounds = params.get('num_rounds', CODEC_DEFAULT_PARAMS['num_rounds'])

        chunk_groups = params.get('chunk_groups', CODEC_DEFAULT_PARAMS['chunk_groups'])
        if chunk_groups < 1:
            raise ValueError("chunk_groups must be a positive integer")
        self.chunk_size = chunk_groups * GROUP_SIZE

        if cipher is None:
            cipher = SimplifiedDES(key, num_rounds)
        self.cipher = cipher

    def _encrypt_groups(self, data: bytes) -> bytes:
        values = _unpack_groups(data)
        block1 = self.cipher.encrypt_blocks(values & BLOCK_MASK)
        block2 = self.cipher.encrypt_blocks(values >> BLOCK_SIZE)
        return _pack_groups(block1 | (block2 << BLOCK_SIZE))

    def _decrypt_groups(self, data: bytes) -> bytes:
        values = _unpack_groups(data)
        left = self.cipher.decrypt_blocks(values >> BLOCK_SIZE)
        right = self.cipher.decrypt_blocks(values & BLOCK_MASK)
        return _pack_groups((left << BLOCK_SIZE) | right)

    def encrypt_stream(self, src: BinaryIO, dst: BinaryIO,
                       length: Optional[int] = None) -> CodecResult:
        """
        Encrypt everything left in src and write the result to dst.

        Args:
            src: Binary input stream
            dst: Binary output stream
            length: Bytes remaining in src (measured by seeking if None)

        Returns:
            A CodecResult describing the operation

        Raises:
            StreamReadError: If reading src fails, or src does not hold
                exactly length bytes
        """
        if length is None:
            length = _stream_length(src)

        padding = padding_for(length)
        dst.write(bytes([padding]))
        bytes_written = 1
        bytes_read = 0
        groups = 0

        pending = b''
        while True:
            chunk = _read(src, self.chunk_size)
            if not chunk:
                break
            bytes_read += len(chunk)

            data = pending + chunk
            usable = len(data) - len(data) % GROUP_SIZE
            if usable:
                bytes_written += dst.write(self._encrypt_groups(data[:usable]))
                groups += usable // GROUP_SIZE
            pending = data[usable:]

        if pending:
            # Final short group, zero-padded
            bytes_written += dst.write(self._encrypt_groups(pending + bytes(GROUP_SIZE - len(pending))))
            groups += 1

        if bytes_read != length:
            raise StreamReadError(f"Expected {length} bytes of input, read {bytes_read}")

        logger.debug("Encrypted %d bytes into %d groups (padding %d)", bytes_read, groups, padding)
        return CodecResult(bytes_read, bytes_written, padding, groups)

    def decrypt_stream(self, src: BinaryIO, dst: BinaryIO,
                       length: Optional[int] = None) -> CodecResult:
        """
        Decrypt everything left in src and write the plaintext to dst.

        Args:
            src: Binary input stream holding an encrypted file
            dst: Binary output stream
            length: Bytes remaining in src (measured by seeking if None)

        Returns:
            A CodecResult describing the operation

        Raises:
            FormatError: If the input is not a well-formed encrypted file
            TruncatedStreamError: If src ends before every group is read
            StreamReadError: If reading src fails
        """
        if length is None:
            length = _stream_length(src)
        check_encrypted_length(length)

        header = _read(src, 1)
        if len(header) != 1:
            raise TruncatedStreamError("Input ended before the padding byte")
        padding = header[0]

        total_groups = (length - 1) // GROUP_SIZE
        if padding >= GROUP_SIZE:
            raise FormatError(f"Invalid padding byte {padding} (must be 0, 1 or 2)")
        if padding and total_groups == 0:
            raise FormatError(f"Padding byte is {padding} but the input holds no data")

        bytes_read = 1
        bytes_written = 0
        remaining = total_groups

        pending = b''
        while remaining:
            want = min(self.chunk_size, remaining * GROUP_SIZE) - len(pending)
            chunk = _read(src, want)
            if not chunk:
                raise TruncatedStreamError(
                    f"Input ended with {remaining} of {total_groups} groups unread"
                )
            bytes_read += len(chunk)

            data = pending + chunk
            usable = len(data) - len(data) % GROUP_SIZE
            if not usable:
                pending = data
                continue

            plaintext = self._decrypt_groups(data[:usable])
            remaining -= usable // GROUP_SIZE
            if remaining == 0 and padding:
                # Last group only carries 3 - padding real bytes
                plaintext = plaintext[:-padding]
            bytes_written += dst.write(plaintext)
            pending = data[usable:]

        logger.debug("Decrypted %d groups into %d bytes", total_groups, bytes_written)
        return CodecResult(bytes_read, bytes_written, padding, total_groups)

    def encrypt_file(self, input_path: PathLike, output_path: PathLike) -> CodecResult:
        """
        Encrypt a file.

        Raises:
            OSError: If either file cannot be opened
            StreamReadError: If reading the input fails part way through
        """
        logger.info("Encrypting file: %s -> %s", input_path, output_path)
        with open(input_path, 'rb') as src:
            length = os.fstat(src.fileno()).st_size
            with open(output_path, 'wb') as dst:
                result = self.encrypt_stream(src, dst, length)
        logger.info("Wrote %d bytes to %s", result.bytes_written, output_path)
        return result

    def decrypt_file(self, input_path: PathLike, output_path: PathLike) -> CodecResult:
        """
        Decrypt a file.

        The input size is checked before the output file is created, so a
        format error leaves no output behind.

        Raises:
            OSError: If either file cannot be opened
            FormatError: If the input is not a well-formed encrypted file
            StreamReadError: If reading the input fails part way through
        """
        logger.info("Decrypting file: %s -> %s", input_path, output_path)
        with open(input_path, 'rb') as src:
            length = os.fstat(src.fileno()).st_size
            check_encrypted_length(length)
            with open(output_path, 'wb') as dst:
                result = self.decrypt_stream(src, dst, length)
        logger.info("Wrote %d bytes to %s", result.bytes_written, output_path)
        return result

    def encrypt_bytes(self, data: bytes) -> bytes:
        out = io.BytesIO()
        self.encrypt_stream(io.BytesIO(data), out, len(data))
        return out.getvalue()

    def decrypt_bytes(self, data: bytes) -> bytes:
        out = io.BytesIO()
        self.decrypt_stream(io.BytesIO(data), out, len(data))
        return out.getvalue()


def encrypt_file(input_path: PathLike, output_path: PathLike,
                 key: int, num_rounds: int = 2) -> CodecResult:
    """
    Encrypt a file with Simplified DES.

    Args:
        input_path: File to encrypt
        output_path: Where to write the encrypted file
        key: The 9-bit master key
        num_rounds: Number of rounds (1 to 9)

    Returns:
        A CodecResult describing the operation
    """
    return FileCodec(key, num_rounds).encrypt_file(input_path, output_path)


def decrypt_file(input_path: PathLike, output_path: PathLike,
                 key: int, num_rounds: int = 2) -> CodecResult:
    """
    Decrypt a file produced by encrypt_file.

    Args:
        input_path: Encrypted file
        output_path: Where to write the plaintext
        key: The 9-bit master key used for encryption
        num_rounds: Number of rounds used for encryption

    Returns:
        A CodecResult describing the operation
    """
    return FileCodec(key, num_rounds).decrypt_file(input_path, output_path)


def encrypt_stream(src: BinaryIO, dst: BinaryIO, key: int, num_rounds: int = 2,
                   length: Optional[int] = None) -> CodecResult:
    """Encrypt the rest of src into dst."""
    return FileCodec(key, num_rounds).encrypt_stream(src, dst, length)


def decrypt_stream(src: BinaryIO, dst: BinaryIO, key: int, num_rounds: int = 2,
                   length: Optional[int] = None) -> CodecResult:
    """Decrypt the rest of src into dst."""
    return FileCodec(key, num_rounds).decrypt_stream(src, dst, length)


def encrypt_bytes(data: bytes, key: int, num_rounds: int = 2) -> bytes:
    """Encrypt a byte string, returning padding byte + groups."""
    return FileCodec(key, num_rounds).encrypt_bytes(data)


def decrypt_bytes(data: bytes, key: int, num_rounds: int = 2) -> bytes:
    """Decrypt a byte string produced by encrypt_bytes."""
    return FileCodec(key, num_rounds).decrypt_bytes(data)
