"""
Error Taxonomy

This module defines the exceptions raised by the cipher core and the
file codec. Each failure kind has its own class so callers can report it
and pick an exit code without inspecting messages.
"""


class SDESError(Exception):
    """Base class for all errors raised by the sdes package."""


class InvalidKeyError(SDESError, ValueError):
    """The master key is outside 0x000-0x1FF or could not be parsed."""


class KeyScheduleError(SDESError, ValueError):
    """No round-key schedule exists for the requested round count."""


class FormatError(SDESError, ValueError):
    """The encrypted input is not laid out as padding byte + 3-byte groups."""


class TruncatedStreamError(FormatError):
    """The encrypted input ended before every announced group was read."""


class StreamReadError(SDESError, OSError):
    """Reading the input failed part way through an operation."""
