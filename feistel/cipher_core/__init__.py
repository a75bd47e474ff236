"""
Cipher Core Package

This package implements the generic Feistel round engine, the cipher and
decipher operations that drive it, and a ready-made FeistelCipher.
"""

from .feistel_network import (
    execute_rounds, cipher, decipher, FeistelCipher, encrypt, decrypt
)

__all__ = ['execute_rounds', 'cipher', 'decipher', 'FeistelCipher', 'encrypt', 'decrypt']
