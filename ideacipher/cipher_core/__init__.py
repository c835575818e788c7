"""
Cipher Core Package

This package implements the core components of the block cipher,
including the round function, the output transformation and the
direction-bound cipher instance used by the block modes.
"""

from .block_cipher import (
    BLOCK_SIZE,
    BlockSizeError,
    Direction,
    IdeaCipher,
    transform_block,
    transform_blocks,
    encrypt_block,
    decrypt_block,
)

__all__ = [
    'BLOCK_SIZE', 'BlockSizeError', 'Direction', 'IdeaCipher',
    'transform_block', 'transform_blocks', 'encrypt_block', 'decrypt_block',
]
