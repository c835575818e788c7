"""
Modular Arithmetic Primitives

This module implements the three group operations the cipher mixes:
XOR, addition modulo 2^16 and multiplication modulo 2^16 + 1, together
with the inverses needed to build a decryption key schedule.

In the multiplicative group the 16-bit value 0 stands for 2^16, so every
word is a valid operand and results always fit back into 16 bits.
"""

from typing import Tuple

import numpy as np

MASK16 = 0xFFFF
ADD_MODULUS = 0x10000
MUL_MODULUS = 0x10001


def add(x: int, y: int) -> int:
    """Addition modulo 2^16."""
    return (x + y) & MASK16


def add_inverse(x: int) -> int:
    """Additive inverse modulo 2^16."""
    return (ADD_MODULUS - x) & MASK16


def mul(x: int, y: int) -> int:
    """
    Multiply two words modulo 2^16 + 1.

    A zero product can only come from a zero operand, i.e. from 2^16.
    Since 2^16 is -1 modulo 2^16 + 1, the product then reduces to
    1 - x - y.

    Args:
        x: First operand (0..65535, 0 encodes 65536)
        y: Second operand (0..65535, 0 encodes 65536)

    Returns:
        The product as a 16-bit word
    """
    product = x * y
    if product != 0:
        return (product % MUL_MODULUS) & MASK16
    return (1 - x - y) & MASK16


def mul_inverse(x: int) -> int:
    """
    Compute the multiplicative inverse modulo 2^16 + 1.

    Runs the extended Euclidean algorithm iteratively, stepping x and the
    modulus down in turn until one of them reaches 1. The values 0 and 1
    are their own inverses.

    Args:
        x: The word to invert

    Returns:
        The inverse as a 16-bit word
    """
    if x <= 1:
        return x

    t0, t1, y = 1, 0, MUL_MODULUS
    while True:
        t1 += (y // x) * t0
        y %= x
        if y == 1:
            return (1 - t1) & MASK16
        t0 += (x // y) * t1
        x %= y
        if x == 1:
            return t0


def combine_bytes(high: int, low: int) -> int:
    """Join two bytes into a big-endian 16-bit word."""
    return ((high & 0xFF) << 8) | (low & 0xFF)


def split_word(word: int) -> Tuple[int, int]:
    """Split a 16-bit word into its (high, low) bytes."""
    return (word >> 8) & 0xFF, word & 0xFF


def add_array(x: np.ndarray, y) -> np.ndarray:
    """Element-wise addition modulo 2^16 over int64 arrays."""
    return (x + y) & MASK16


def mul_array(x: np.ndarray, y) -> np.ndarray:
    """
    Element-wise version of mul() over int64 arrays.

    Args:
        x: Array of words
        y: Array of words, or a single subkey broadcast over x

    Returns:
        Array of 16-bit products
    """
    product = x * y
    reduced = (product % MUL_MODULUS) & MASK16
    fallback = (1 - x - y) & MASK16
    return np.where(product != 0, reduced, fallback)
