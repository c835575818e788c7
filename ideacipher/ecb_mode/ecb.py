"""
ECB Block Mode

This module drives the IDEA block cipher over whole messages. Each
8-byte block is transformed on its own, with no chaining between
blocks, and messages are padded with trailing zero bytes.

Zero padding is not reversible for messages that themselves end in zero
bytes: decryption strips every trailing zero, padding or not.
"""

import logging
import os
from typing import Optional

from ..cipher_core.block_cipher import (
    BLOCK_SIZE,
    BlockSizeError,
    BytesLike,
    Direction,
    IdeaCipher,
)
from ..key_schedule.idea_key_schedule import derive_key_from_password

logger = logging.getLogger(__name__)

# Default parameters for the ECB driver
ECB_DEFAULT_PARAMS = {
    'vectorize_threshold': 64,   # Blocks per call before switching to numpy
}


def _check_threshold(value: int) -> int:
    if value < 1:
        raise ValueError(f"vectorize_threshold must be at least 1, got {value}")
    return value


def _default_vectorize_threshold() -> int:
    env_value = os.environ.get('IDEACIPHER_VECTORIZE_THRESHOLD')
    if env_value is None:
        return ECB_DEFAULT_PARAMS['vectorize_threshold']
    try:
        value = int(env_value)
    except ValueError:
        raise ValueError(
            f"IDEACIPHER_VECTORIZE_THRESHOLD must be an integer, got {env_value!r}") from None
    return _check_threshold(value)


def zero_pad(data: BytesLike, block_size: int = BLOCK_SIZE) -> bytes:
    """
    Pad data with zero bytes up to the next multiple of the block size.

    Args:
        data: The data to pad
        block_size: Block size in bytes

    Returns:
        The padded data; unchanged if already a multiple of block_size
    """
    padded_length = (len(data) + block_size - 1) // block_size * block_size
    return bytes(data) + b'\x00' * (padded_length - len(data))


def strip_zero_padding(data: BytesLike) -> bytes:
    """Remove every trailing zero byte."""
    return bytes(data).rstrip(b'\x00')


class IdeaECB:
    """
    Electronic codebook mode for the IDEA cipher.

    Holds an encrypting and a decrypting cipher for one key. Neither
    keeps state between calls.
    """

    def __init__(self, key: bytes, vectorize_threshold: Optional[int] = None):
        """
        Initialize the mode with a master key.

        Args:
            key: The master key (16 bytes)
            vectorize_threshold: Minimum number of blocks processed with
                the numpy batch path (defaults to ECB_DEFAULT_PARAMS or
                IDEACIPHER_VECTORIZE_THRESHOLD)

        Raises:
            InvalidKeyLengthError: If the key is not 16 bytes
            ValueError: If the threshold is below 1
        """
        if vectorize_threshold is None:
            vectorize_threshold = _default_vectorize_threshold()
        self.vectorize_threshold = _check_threshold(vectorize_threshold)

        self.encryptor = IdeaCipher(key, Direction.ENCRYPT)
        self.decryptor = IdeaCipher(key, Direction.DECRYPT)

    @classmethod
    def from_password(cls, password: str,
                      vectorize_threshold: Optional[int] = None) -> 'IdeaECB':
        """Build the mode from a password folded into a 16-byte key."""
        return cls(derive_key_from_password(password), vectorize_threshold)

    def _process(self, cipher: IdeaCipher, data: bytes) -> bytes:
        num_blocks = len(data) // BLOCK_SIZE

        if num_blocks >= self.vectorize_threshold:
            logger.debug("Processing %d blocks in one batch", num_blocks)
            return cipher.process_blocks(data)

        logger.debug("Processing %d blocks one at a time", num_blocks)
        result = bytearray()
        for i in range(0, len(data), BLOCK_SIZE):
            result.extend(cipher.process_block(data[i:i + BLOCK_SIZE]))
        return bytes(result)

    def encrypt(self, plaintext: BytesLike) -> bytes:
        """
        Encrypt a message.

        Args:
            plaintext: The message to encrypt

        Returns:
            The ciphertext, including the zero padding
        """
        padded = zero_pad(plaintext)
        return self._process(self.encryptor, padded)

    def decrypt(self, ciphertext: BytesLike) -> bytes:
        """
        Decrypt a message and strip its zero padding.

        Args:
            ciphertext: The ciphertext, a multiple of 8 bytes long

        Returns:
            The plaintext without trailing zero bytes

        Raises:
            BlockSizeError: If the ciphertext length is not a multiple of 8
        """
        if len(ciphertext) % BLOCK_SIZE != 0:
            raise BlockSizeError(
                f"Ciphertext length must be a multiple of {BLOCK_SIZE} bytes, "
                f"got {len(ciphertext)}")

        decrypted = self._process(self.decryptor, bytes(ciphertext))
        return strip_zero_padding(decrypted)


def encrypt(plaintext: BytesLike, password: str) -> bytes:
    """
    Encrypt data with a password using IdeaECB.

    Args:
        plaintext: The plaintext to encrypt
        password: The password

    Returns:
        The zero-padded ciphertext
    """
    return IdeaECB.from_password(password).encrypt(plaintext)


def decrypt(ciphertext: BytesLike, password: str) -> bytes:
    """
    Decrypt data with a password using IdeaECB.

    Args:
        ciphertext: The ciphertext to decrypt
        password: The password

    Returns:
        The decrypted plaintext with trailing zeros removed

    Raises:
        BlockSizeError: If the ciphertext length is not a multiple of 8
    """
    return IdeaECB.from_password(password).decrypt(ciphertext)


def format_signed(data: BytesLike) -> str:
    """Render bytes as a list of signed values, e.g. b'\\xff\\x01' -> '[-1, 1]'."""
    return str([b - 256 if b > 127 else b for b in bytes(data)])


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    password = "key"
    plaintext = "zółć".encode('utf-8')
    print(f"Plaintext: {format_signed(plaintext)}")

    encrypted = encrypt(plaintext, password)
    print(f"Encrypted: {format_signed(encrypted)}")

    decrypted = decrypt(encrypted, password)
    print(f"Decrypted: {format_signed(decrypted)}")
    print(f"Decrypted (as string): {decrypted.decode('utf-8')}")
