"""
Configuration

Scheme constants and the tunable defaults used by the file codec and the
command line tool. Defaults can be overridden through environment
variables.
"""

import os
from typing import Dict, Mapping, Optional

# Scheme constants (fixed, not configurable)
BLOCK_SIZE = 12       # bits per block
HALF_SIZE = 6         # bits per Feistel half
HALF_MASK = 0x3F
BLOCK_MASK = 0xFFF
KEY_LENGTH = 9        # bits in the master key
MAX_KEY = 0x1FF
SUBKEY_SIZE = 8       # bits per round key
MAX_ROUNDS = KEY_LENGTH
GROUP_SIZE = 3        # bytes holding two 12-bit blocks

# Default parameters for the file codec
CODEC_DEFAULT_PARAMS = {
    'num_rounds': 2,       # Rounds used when the caller does not choose
    'chunk_groups': 4096,  # 3-byte groups read per I/O call
}

ENV_NUM_ROUNDS = 'SDES_NUM_ROUNDS'
ENV_CHUNK_GROUPS = 'SDES_CHUNK_GROUPS'


def _read_int(environ: Mapping[str, str], name: str) -> Optional[int]:
    value = environ.get(name)
    if value is None or value.strip() == '':
        return None
    try:
        return int(value, 10)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {value!r}")


def load_params(environ: Optional[Mapping[str, str]] = None) -> Dict[str, int]:
    """
    Build the codec parameters, applying environment overrides.

    Args:
        environ: Mapping to read overrides from (default: os.environ)

    Returns:
        A new dict with the same keys as CODEC_DEFAULT_PARAMS

    Raises:
        ValueError: If an override is not a valid value
    """
    if environ is None:
        environ = os.environ

    params = dict(CODEC_DEFAULT_PARAMS)

    num_rounds = _read_int(environ, ENV_NUM_ROUNDS)
    if num_rounds is not None:
        if not 1 <= num_rounds <= MAX_ROUNDS:
            raise ValueError(f"{ENV_NUM_ROUNDS} must be between 1 and {MAX_ROUNDS}")
        params['num_rounds'] = num_rounds

    chunk_groups = _read_int(environ, ENV_CHUNK_GROUPS)
    if chunk_groups is not None:
        if chunk_groups < 1:
            raise ValueError(f"{ENV_CHUNK_GROUPS} must be a positive integer")
        params['chunk_groups'] = chunk_groups

    return params
