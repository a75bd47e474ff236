"""
Padding Package

This package implements reversible padding schemes that extend a message
to a whole number of blocks before it enters the round engine, and strip
that padding again after decryption.
"""

from .errors import PaddingError
from .pkcs7 import add_padding, remove_padding

__all__ = ['PaddingError', 'add_padding', 'remove_padding']
