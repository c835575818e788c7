"""
IDEA Key Schedule Implementation

This module expands a 128-bit master key into the 52 16-bit subkeys used
by the eight rounds and the output transformation, and derives the
inverted schedule that turns the same round function into decryption.
"""

import logging
import secrets
from typing import Sequence, Tuple

from ..arithmetic.modular import add_inverse, combine_bytes, mul_inverse

logger = logging.getLogger(__name__)

KEY_SIZE = 16     # Master key size in bytes
NUM_ROUNDS = 8    # Full rounds, followed by one output half-round
NUM_SUBKEYS = NUM_ROUNDS * 6 + 4


class InvalidKeyLengthError(ValueError):
    """Raised when a master key is not exactly KEY_SIZE bytes."""


def generate_key() -> bytes:
    """
    Generate a random master key.

    Returns:
        KEY_SIZE random bytes
    """
    return secrets.token_bytes(KEY_SIZE)


def derive_key_from_password(password: str, length: int = KEY_SIZE) -> bytes:
    """
    Fold a password into a fixed-size key by XOR.

    Each UTF-16 code unit of the password is truncated to its low byte and
    XORed into the key at its position modulo the key length. This is a
    compatibility transform, not a key derivation function: there is no
    salt and no work factor.

    Args:
        password: The password to fold
        length: Size of the resulting key in bytes

    Returns:
        The folded key
    """
    key = bytearray(length)
    # Every second byte of the big-endian encoding is a code unit's low byte;
    # lone surrogates (e.g. from surrogateescape) are code units too
    low_bytes = password.encode('utf-16-be', 'surrogatepass')[1::2]
    for position, value in enumerate(low_bytes):
        key[position % length] ^= value
    return bytes(key)


def expand_key(master_key: bytes) -> Tuple[int, ...]:
    """
    Expand a master key into the encryption subkey schedule.

    The first eight subkeys are the key's big-endian byte pairs. Every
    following group of eight is the previous group's 128 bits rotated left
    by 25, assembled from two earlier subkeys at a time.

    Args:
        master_key: The master key (16 bytes)

    Returns:
        A tuple of NUM_SUBKEYS 16-bit subkeys

    Raises:
        InvalidKeyLengthError: If the key is not 16 bytes
    """
    if len(master_key) != KEY_SIZE:
        raise InvalidKeyLengthError(
            f"Key must be exactly {KEY_SIZE} bytes, got {len(master_key)}")

    subkeys = [0] * NUM_SUBKEYS

    for i in range(8):
        subkeys[i] = combine_bytes(master_key[2 * i], master_key[2 * i + 1])

    for i in range(8, NUM_SUBKEYS):
        part1 = subkeys[i - 7 if (i + 1) % 8 != 0 else i - 15] << 9
        part2 = subkeys[i - 14 if (i + 2) % 8 < 2 else i - 6] >> 7
        subkeys[i] = (part1 | part2) & 0xFFFF

    logger.debug("Expanded %d-byte key into %d subkeys", KEY_SIZE, NUM_SUBKEYS)
    return tuple(subkeys)


def invert_subkeys(subkeys: Sequence[int]) -> Tuple[int, ...]:
    """
    Derive the decryption schedule from an encryption schedule.

    Rounds are visited in reverse. Multiplicative subkeys are replaced by
    their inverses modulo 2^16 + 1, additive ones by their inverses modulo
    2^16, and the two MA-structure subkeys move across unchanged. Inside
    the middle rounds the additive pair is swapped to undo the register
    exchange; the two boundary half-rounds keep it in place.

    Args:
        subkeys: The encryption schedule (52 subkeys)

    Returns:
        A tuple with the decryption schedule
    """
    if len(subkeys) != NUM_SUBKEYS:
        raise ValueError(
            f"Subkey schedule must hold {NUM_SUBKEYS} entries, got {len(subkeys)}")

    inverted = [0] * NUM_SUBKEYS
    source = iter(subkeys)

    # Output transformation becomes the first input layer
    i = NUM_ROUNDS * 6
    inverted[i] = mul_inverse(next(source))
    inverted[i + 1] = add_inverse(next(source))
    inverted[i + 2] = add_inverse(next(source))
    inverted[i + 3] = mul_inverse(next(source))

    for round_index in range(NUM_ROUNDS - 1, 0, -1):
        i = round_index * 6
        inverted[i + 4] = next(source)
        inverted[i + 5] = next(source)
        inverted[i] = mul_inverse(next(source))
        inverted[i + 2] = add_inverse(next(source))
        inverted[i + 1] = add_inverse(next(source))
        inverted[i + 3] = mul_inverse(next(source))

    inverted[4] = next(source)
    inverted[5] = next(source)
    inverted[0] = mul_inverse(next(source))
    inverted[1] = add_inverse(next(source))
    inverted[2] = add_inverse(next(source))
    inverted[3] = mul_inverse(next(source))

    return tuple(inverted)
