import io
import os

import pytest

from sdes.errors import (FormatError, KeyScheduleError, StreamReadError,
                         TruncatedStreamError)
from sdes.file_mode import (CodecResult, FileCodec, decrypt_bytes, decrypt_file,
                            decrypt_stream, encrypt_bytes, encrypt_file,
                            encrypt_stream, padding_for)


class TrickleStream(io.RawIOBase):
    """Returns at most one byte per read."""

    def __init__(self, data):
        self._data = io.BytesIO(data)

    def readable(self):
        return True

    def read(self, size=-1):
        return self._data.read(min(size, 1) if size and size > 0 else 1)


class FailingStream(io.RawIOBase):
    """Serves some bytes, then fails with an I/O error."""

    def __init__(self, data, fail_after):
        self._data = io.BytesIO(data)
        self._reads = 0
        self._fail_after = fail_after

    def readable(self):
        return True

    def read(self, size=-1):
        self._reads += 1
        if self._reads > self._fail_after:
            raise OSError(5, "Input/output error")
        return self._data.read(size)


def test_known_vector():
    assert encrypt_bytes(b"\x01\x02\x03", 0x1C0, 2) == b"\x00\x60\xc7\xb8"
    assert decrypt_bytes(b"\x00\x60\xc7\xb8", 0x1C0, 2) == b"\x01\x02\x03"


def test_empty_input():
    encrypted = encrypt_bytes(b"", 0x1C0, 2)
    assert encrypted == b"\x00"
    assert decrypt_bytes(encrypted, 0x1C0, 2) == b""


def test_single_byte_input():
    encrypted = encrypt_bytes(b"\x7f", 0x1C0, 2)
    assert len(encrypted) == 4
    assert encrypted[0] == 2
    assert decrypt_bytes(encrypted, 0x1C0, 2) == b"\x7f"


@pytest.mark.parametrize("length", range(0, 13))
def test_padding_and_length(length):
    data = bytes(range(length))
    encrypted = encrypt_bytes(data, 0x0AB, 3)
    padding = (3 - length % 3) % 3
    assert padding_for(length) == padding
    assert encrypted[0] == padding
    assert len(encrypted) == 1 + length + padding
    assert len(encrypted) % 3 == 1
    assert decrypt_bytes(encrypted, 0x0AB, 3) == data


@pytest.mark.parametrize("num_rounds", range(1, 10))
@pytest.mark.parametrize("key", [0x000, 0x1C0, 0x1FF])
def test_round_trip(key, num_rounds):
    data = os.urandom(1000)
    assert decrypt_bytes(encrypt_bytes(data, key, num_rounds), key, num_rounds) == data


def test_groups_are_independent():
    # Identical plaintext groups give identical ciphertext groups
    encrypted = encrypt_bytes(b"abcabcabc", 0x123, 4)
    assert encrypted[1:4] == encrypted[4:7] == encrypted[7:10]


def test_wrong_key_does_not_decrypt():
    data = b"attack at dawn!"
    assert decrypt_bytes(encrypt_bytes(data, 0x1C0, 2), 0x1C1, 2) != data


@pytest.mark.parametrize("chunk_groups", [1, 2, 5, 4096])
def test_chunk_size_does_not_change_output(chunk_groups):
    data = os.urandom(301)
    expected = encrypt_bytes(data, 0x0F0, 5)
    codec = FileCodec(0x0F0, 5, params={'chunk_groups': chunk_groups})
    assert codec.encrypt_bytes(data) == expected
    assert codec.decrypt_bytes(expected) == data


def test_invalid_chunk_size():
    with pytest.raises(ValueError):
        FileCodec(0x0F0, 5, params={'chunk_groups': 0})


def test_short_reads_are_buffered():
    data = os.urandom(50)
    out = io.BytesIO()
    encrypt_stream(TrickleStream(data), out, 0x1C0, 2, length=len(data))
    assert out.getvalue() == encrypt_bytes(data, 0x1C0, 2)

    plain = io.BytesIO()
    encrypted = out.getvalue()
    decrypt_stream(TrickleStream(encrypted), plain, 0x1C0, 2, length=len(encrypted))
    assert plain.getvalue() == data


def test_stream_length_measured_from_position():
    src = io.BytesIO(b"skip" + b"payload")
    src.seek(4)
    out = io.BytesIO()
    result = encrypt_stream(src, out, 0x1C0, 2)
    assert result == CodecResult(bytes_read=7, bytes_written=10, padding=2, groups=3)
    assert decrypt_bytes(out.getvalue(), 0x1C0, 2) == b"payload"


def test_decrypt_result():
    encrypted = encrypt_bytes(b"hello", 0x1C0, 2)
    out = io.BytesIO()
    result = decrypt_stream(io.BytesIO(encrypted), out, 0x1C0, 2)
    assert result == CodecResult(bytes_read=7, bytes_written=5, padding=1, groups=2)


@pytest.mark.parametrize("length", [0, 2, 3, 5, 6, 9])
def test_decrypt_rejects_bad_length(length):
    out = io.BytesIO()
    with pytest.raises(FormatError):
        decrypt_stream(io.BytesIO(bytes(length)), out, 0x1C0, 2)
    assert out.getvalue() == b""


@pytest.mark.parametrize("data", [b"\x03\x00\x00\x00", b"\xff\x00\x00\x00", b"\x01", b"\x02"])
def test_decrypt_rejects_bad_padding(data):
    with pytest.raises(FormatError):
        decrypt_bytes(data, 0x1C0, 2)


def test_decrypt_truncated_stream():
    encrypted = encrypt_bytes(b"abcdef", 0x1C0, 2)
    with pytest.raises(TruncatedStreamError):
        decrypt_stream(io.BytesIO(encrypted[:4]), io.BytesIO(), 0x1C0, 2, length=len(encrypted))


def test_encrypt_read_error():
    src = FailingStream(os.urandom(30), fail_after=1)
    with pytest.raises(StreamReadError) as excinfo:
        FileCodec(0x1C0, 2, params={'chunk_groups': 2}).encrypt_stream(src, io.BytesIO(), 30)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_decrypt_read_error():
    encrypted = encrypt_bytes(os.urandom(30), 0x1C0, 2)
    src = FailingStream(encrypted, fail_after=2)
    with pytest.raises(StreamReadError):
        FileCodec(0x1C0, 2, params={'chunk_groups': 2}).decrypt_stream(src, io.BytesIO(), len(encrypted))


def test_encrypt_length_mismatch():
    with pytest.raises(StreamReadError):
        encrypt_stream(io.BytesIO(b"abcd"), io.BytesIO(), 0x1C0, 2, length=7)


def test_ten_rounds_writes_nothing():
    out = io.BytesIO()
    with pytest.raises(KeyScheduleError):
        encrypt_stream(io.BytesIO(b"abc"), out, 0x1C0, 10)
    assert out.getvalue() == b""


def test_file_round_trip(tmp_path, plaintext_file):
    encrypted = tmp_path / "plain.enc"
    decrypted = tmp_path / "plain.dec"

    result = encrypt_file(plaintext_file, encrypted, 0x1C0, 4)
    size = plaintext_file.stat().st_size
    assert result.bytes_read == size
    assert encrypted.stat().st_size == 1 + size + padding_for(size)

    decrypt_file(encrypted, decrypted, 0x1C0, 4)
    assert decrypted.read_bytes() == plaintext_file.read_bytes()


def test_file_matches_bytes_api(tmp_path, plaintext_file):
    encrypted = tmp_path / "plain.enc"
    encrypt_file(str(plaintext_file), str(encrypted), 0x055, 7)
    assert encrypted.read_bytes() == encrypt_bytes(plaintext_file.read_bytes(), 0x055, 7)


def test_empty_file(tmp_path):
    plain = tmp_path / "empty"
    plain.write_bytes(b"")
    encrypted = tmp_path / "empty.enc"
    decrypted = tmp_path / "empty.dec"
    encrypt_file(plain, encrypted, 0x1C0, 2)
    assert encrypted.read_bytes() == b"\x00"
    decrypt_file(encrypted, decrypted, 0x1C0, 2)
    assert decrypted.read_bytes() == b""


def test_decrypt_file_format_error_leaves_no_output(tmp_path):
    bad = tmp_path / "bad.enc"
    bad.write_bytes(b"\x00\x01\x02")
    output = tmp_path / "out"
    with pytest.raises(FormatError):
        decrypt_file(bad, output, 0x1C0, 2)
    assert not output.exists()


def test_missing_input_file(tmp_path):
    output = tmp_path / "out"
    with pytest.raises(FileNotFoundError):
        encrypt_file(tmp_path / "missing", output, 0x1C0, 2)
    assert not output.exists()


def test_unwritable_output(tmp_path, plaintext_file):
    with pytest.raises(OSError):
        encrypt_file(plaintext_file, tmp_path / "no" / "such" / "dir" / "out", 0x1C0, 2)
