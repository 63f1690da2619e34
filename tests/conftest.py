import pytest

from sdes.key_schedule import generate_round_keys


@pytest.fixture
def round_keys():
    return generate_round_keys(0x1C0, 2)


@pytest.fixture
def plaintext_file(tmp_path):
    path = tmp_path / "plain.bin"
    path.write_bytes(b"The quick brown fox jumps over the lazy dog.")
    return path
