"""
Key Schedule Package

This package implements the key expansion algorithm that transforms
a 128-bit master key into the 52 round subkeys of the cipher, the
inversion that yields the decryption schedule, and the password folding
used to build master keys from text.
"""

from .idea_key_schedule import (
    KEY_SIZE,
    NUM_ROUNDS,
    NUM_SUBKEYS,
    InvalidKeyLengthError,
    expand_key,
    invert_subkeys,
    generate_key,
    derive_key_from_password,
)

__all__ = [
    'KEY_SIZE', 'NUM_ROUNDS', 'NUM_SUBKEYS', 'InvalidKeyLengthError',
    'expand_key', 'invert_subkeys', 'generate_key', 'derive_key_from_password',
]
