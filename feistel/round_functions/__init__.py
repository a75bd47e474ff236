"""
Round Functions Package

This package provides reference round functions with the
(half_block, key) -> half_block shape the round engine expects.
"""

from .builtin import bitwise_or, keyed_xor, hmac_round

__all__ = ['bitwise_or', 'keyed_xor', 'hmac_round']
