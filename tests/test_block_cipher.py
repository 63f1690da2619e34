import numpy as np
import pytest

from sdes.cipher_core import (SimplifiedDES, decrypt_block, decrypt_blocks,
                              encrypt_block, encrypt_blocks)
from sdes.errors import KeyScheduleError
from sdes.key_schedule import generate_round_keys

ALL_BLOCKS = np.arange(4096, dtype=np.uint32)


def test_known_vectors(round_keys):
    assert encrypt_block(0x201, round_keys) == 0x760
    assert encrypt_block(0x030, round_keys) == 0xB8C
    assert decrypt_block(0x760, round_keys) == 0x201
    assert decrypt_block(0xB8C, round_keys) == 0x030


def test_returns_plain_int(round_keys):
    assert type(encrypt_block(0x123, round_keys)) is int
    assert type(decrypt_block(0x123, round_keys)) is int


@pytest.mark.parametrize("num_rounds", range(1, 10))
@pytest.mark.parametrize("key", [0x000, 0x001, 0x0AA, 0x155, 0x1C0, 0x1FF])
def test_round_trip_every_block(key, num_rounds):
    keys = generate_round_keys(key, num_rounds)
    encrypted = encrypt_blocks(ALL_BLOCKS, keys, num_rounds)
    assert encrypted.max() <= 0xFFF
    assert len(np.unique(encrypted)) == 4096
    np.testing.assert_array_equal(decrypt_blocks(encrypted, keys, num_rounds), ALL_BLOCKS)


@pytest.mark.parametrize("num_rounds", [1, 2, 9])
def test_round_trip_every_key(num_rounds):
    for key in range(0x200):
        keys = generate_round_keys(key, num_rounds)
        encrypted = encrypt_blocks(ALL_BLOCKS, keys)
        np.testing.assert_array_equal(decrypt_blocks(encrypted, keys), ALL_BLOCKS)


def test_scalar_matches_array():
    keys = generate_round_keys(0x0F3, 4)
    encrypted = encrypt_blocks(ALL_BLOCKS, keys)
    for block in (0x000, 0x001, 0x7FF, 0x800, 0xABC, 0xFFF):
        assert encrypt_block(block, keys) == encrypted[block]
        assert decrypt_block(int(encrypted[block]), keys) == block


def test_fewer_rounds_than_schedule():
    keys = generate_round_keys(0x1C0, 9)
    short = generate_round_keys(0x1C0, 3)
    assert encrypt_block(0x5A5, keys, 3) == encrypt_block(0x5A5, short)
    assert decrypt_block(encrypt_block(0x5A5, keys, 3), keys, 3) == 0x5A5


def test_too_many_rounds_for_schedule(round_keys):
    with pytest.raises(KeyScheduleError):
        encrypt_block(0x123, round_keys, 3)
    with pytest.raises(KeyScheduleError):
        decrypt_blocks(ALL_BLOCKS, round_keys, 0)


def test_empty_schedule_rejected():
    with pytest.raises(KeyScheduleError):
        encrypt_block(0x123, ())


@pytest.mark.parametrize("block", [-1, 0x1000])
def test_block_out_of_range(round_keys, block):
    with pytest.raises(ValueError):
        encrypt_block(block, round_keys)


def test_cipher_object():
    cipher = SimplifiedDES(0x1C0, 2)
    assert cipher.round_keys == (0xE0, 0xC0)
    assert cipher.encrypt_block(0x201) == 0x760
    assert cipher.decrypt_block(0x760) == 0x201
    np.testing.assert_array_equal(cipher.decrypt_blocks(cipher.encrypt_blocks(ALL_BLOCKS)), ALL_BLOCKS)
    assert repr(cipher) == "SimplifiedDES(key=0x1C0, num_rounds=2)"


def test_cipher_object_rejects_ten_rounds():
    with pytest.raises(KeyScheduleError):
        SimplifiedDES(0x1C0, 10)
