"""
Block Cipher Implementation

This module provides the core of the IDEA block cipher: the round
function that mixes four 16-bit words through XOR, addition modulo 2^16
and multiplication modulo 2^16 + 1, applied for eight rounds and a final
output half-round to a 64-bit block.

Encryption and decryption run the same transform; only the subkey
schedule differs.
"""

import logging
from enum import Enum
from typing import Sequence, Union

import numpy as np

from ..arithmetic.modular import add, mul, add_array, mul_array
from ..key_schedule.idea_key_schedule import (
    NUM_ROUNDS,
    expand_key,
    invert_subkeys,
    derive_key_from_password,
)

logger = logging.getLogger(__name__)

BLOCK_SIZE = 8  # 64-bit block

BytesLike = Union[bytes, bytearray, memoryview]


class BlockSizeError(ValueError):
    """Raised when input is not a whole number of 8-byte blocks."""


class Direction(Enum):
    ENCRYPT = 'encrypt'
    DECRYPT = 'decrypt'


def transform_block(block: BytesLike, subkeys: Sequence[int]) -> bytes:
    """
    Run one 8-byte block through the eight rounds and the output half-round.

    Args:
        block: The input block (8 bytes)
        subkeys: A 52-entry schedule, forward or inverted

    Returns:
        The transformed block as a new bytes object

    Raises:
        BlockSizeError: If the block is not 8 bytes
    """
    if len(block) != BLOCK_SIZE:
        raise BlockSizeError(f"Block must be exactly {BLOCK_SIZE} bytes, got {len(block)}")

    x1 = int.from_bytes(block[0:2], byteorder='big')
    x2 = int.from_bytes(block[2:4], byteorder='big')
    x3 = int.from_bytes(block[4:6], byteorder='big')
    x4 = int.from_bytes(block[6:8], byteorder='big')

    k = 0
    for _ in range(NUM_ROUNDS):
        y1 = mul(x1, subkeys[k])
        y2 = add(x2, subkeys[k + 1])
        y3 = add(x3, subkeys[k + 2])
        y4 = mul(x4, subkeys[k + 3])

        # MA structure
        y5 = y1 ^ y3
        y6 = y2 ^ y4
        y7 = mul(y5, subkeys[k + 4])
        y8 = add(y6, y7)
        y9 = mul(y8, subkeys[k + 5])
        y10 = add(y7, y9)

        x1 = y1 ^ y9
        x2 = y3 ^ y9
        x3 = y2 ^ y10
        x4 = y4 ^ y10
        k += 6

    # Output transformation undoes the last round's swap of x2 and x3
    out = (
        mul(x1, subkeys[k]),
        add(x3, subkeys[k + 1]),
        add(x2, subkeys[k + 2]),
        mul(x4, subkeys[k + 3]),
    )

    return b''.join(word.to_bytes(2, byteorder='big') for word in out)


def transform_blocks(data: BytesLike, subkeys: Sequence[int]) -> bytes:
    """
    Transform every 8-byte block of a buffer at once.

    Blocks do not depend on each other, so the whole buffer is loaded as
    a (blocks, 4) word matrix and each round is applied column-wise. The
    output equals calling transform_block() on each block in turn.

    Args:
        data: The input buffer, a multiple of 8 bytes long
        subkeys: A 52-entry schedule, forward or inverted

    Returns:
        The transformed buffer

    Raises:
        BlockSizeError: If the length is not a multiple of 8
    """
    if len(data) % BLOCK_SIZE != 0:
        raise BlockSizeError(
            f"Data length must be a multiple of {BLOCK_SIZE} bytes, got {len(data)}")

    words = np.frombuffer(bytes(data), dtype='>u2').astype(np.int64).reshape(-1, 4)
    x1, x2, x3, x4 = words[:, 0], words[:, 1], words[:, 2], words[:, 3]

    k = 0
    for _ in range(NUM_ROUNDS):
        y1 = mul_array(x1, subkeys[k])
        y2 = add_array(x2, subkeys[k + 1])
        y3 = add_array(x3, subkeys[k + 2])
        y4 = mul_array(x4, subkeys[k + 3])

        y5 = y1 ^ y3
        y6 = y2 ^ y4
        y7 = mul_array(y5, subkeys[k + 4])
        y8 = add_array(y6, y7)
        y9 = mul_array(y8, subkeys[k + 5])
        y10 = add_array(y7, y9)

        x1 = y1 ^ y9
        x2 = y3 ^ y9
        x3 = y2 ^ y10
        x4 = y4 ^ y10
        k += 6

    out = np.stack([
        mul_array(x1, subkeys[k]),
        add_array(x3, subkeys[k + 1]),
        add_array(x2, subkeys[k + 2]),
        mul_array(x4, subkeys[k + 3]),
    ], axis=1)

    return out.astype('>u2').tobytes()


class IdeaCipher:
    """
    IDEA cipher bound to one key and one direction.

    The subkey schedule is computed once and kept as an immutable tuple,
    so an instance holds no per-call state and can be shared between
    threads.
    """

    def __init__(self, key: bytes, direction: Union[Direction, str] = Direction.ENCRYPT):
        """
        Initialize the cipher and build its subkey schedule.

        Args:
            key: The master key (16 bytes)
            direction: A Direction, or its value 'encrypt' / 'decrypt'

        Raises:
            ValueError: If direction is not a valid Direction
        """
        direction = Direction(direction)
        self.direction = direction

        subkeys = expand_key(key)
        if direction is Direction.DECRYPT:
            subkeys = invert_subkeys(subkeys)
        self._subkeys = subkeys

        logger.debug("Initialized IDEA cipher for %s", direction.value)

    @classmethod
    def from_password(cls, password: str,
                      direction: Union[Direction, str] = Direction.ENCRYPT) -> 'IdeaCipher':
        """Build a cipher from a password folded into a 16-byte key."""
        return cls(derive_key_from_password(password), direction)

    @property
    def subkeys(self):
        return self._subkeys

    def process_block(self, block: BytesLike) -> bytes:
        """
        Encrypt or decrypt a single block, depending on the direction.

        Args:
            block: The input block (8 bytes)

        Returns:
            The output block
        """
        return transform_block(block, self._subkeys)

    def process_blocks(self, data: BytesLike) -> bytes:
        """
        Encrypt or decrypt a buffer of whole blocks in one vectorised pass.

        Args:
            data: The input buffer, a multiple of 8 bytes long

        Returns:
            The output buffer
        """
        return transform_blocks(data, self._subkeys)


def encrypt_block(plaintext: BytesLike, key: bytes) -> bytes:
    """
    Convenience function to encrypt a single block.

    Args:
        plaintext: The plaintext block (8 bytes)
        key: The master key (16 bytes)

    Returns:
        The encrypted ciphertext block
    """
    return IdeaCipher(key, Direction.ENCRYPT).process_block(plaintext)


def decrypt_block(ciphertext: BytesLike, key: bytes) -> bytes:
    """
    Convenience function to decrypt a single block.

    Args:
        ciphertext: The ciphertext block (8 bytes)
        key: The master key (16 bytes)

    Returns:
        The decrypted plaintext block
    """
    return IdeaCipher(key, Direction.DECRYPT).process_block(ciphertext)
