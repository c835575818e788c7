"""
Block Mode Package

This package drives the block cipher over messages of any length
using independent per-block processing (ECB) with zero-byte padding.
"""

from .ecb import (
    IdeaECB,
    encrypt,
    decrypt,
    zero_pad,
    strip_zero_padding,
    format_signed,
    ECB_DEFAULT_PARAMS,
)

__all__ = [
    'IdeaECB', 'encrypt', 'decrypt', 'zero_pad', 'strip_zero_padding',
    'format_signed', 'ECB_DEFAULT_PARAMS',
]
