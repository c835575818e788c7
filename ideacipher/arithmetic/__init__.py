"""
Modular Arithmetic Package

This package implements the word-level operations of the cipher:
addition modulo 2^16, multiplication modulo 2^16 + 1 and their inverses,
in scalar form and vectorised over numpy arrays.
"""

from .modular import (
    add,
    add_inverse,
    mul,
    mul_inverse,
    combine_bytes,
    split_word,
    add_array,
    mul_array,
)

__all__ = [
    'add', 'add_inverse', 'mul', 'mul_inverse',
    'combine_bytes', 'split_word', 'add_array', 'mul_array',
]
