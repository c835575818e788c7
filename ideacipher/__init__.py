"""
IDEACipher - IDEA Block Cipher Library

This library implements the IDEA block cipher with a 64-bit block and
a 128-bit key, together with a simple password-based ECB driver.

Key Features:
- Modular arithmetic over 2^16 and 2^16 + 1
- Key schedule expansion and inversion (52 subkeys)
- Eight rounds plus output transformation per block
- ECB mode with zero-byte padding, vectorised with numpy for large inputs

The password folding and zero padding are kept for compatibility with
existing ciphertexts. Neither is suitable where real security matters.
"""

from .cipher_core import Direction, IdeaCipher, BlockSizeError
from .key_schedule import InvalidKeyLengthError, derive_key_from_password
from .ecb_mode import IdeaECB, encrypt, decrypt

__version__ = '0.1.0'
__author__ = 'IDEACipher Team'

__all__ = [
    'Direction', 'IdeaCipher', 'BlockSizeError',
    'InvalidKeyLengthError', 'derive_key_from_password',
    'IdeaECB', 'encrypt', 'decrypt',
]
