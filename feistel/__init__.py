"""
Feistel - Pluggable Feistel Network Library

This library implements a generic Feistel network: the caller supplies the
round function, the per-round key source and the padding scheme, and the
library runs the rounds over fixed-size blocks of a message.

Key Features:
- Any even block size, any number of rounds
- Round functions and key sources as plain callables or KeySource objects
- PKCS#7 padding with validation on removal
- Per-block or global key sequencing, chosen by the key schedule
- ARX key expansion and Argon2id password derivation for ready-made use

"""

from .cipher_core import execute_rounds, cipher, decipher, FeistelCipher, encrypt, decrypt
from .padding import PaddingError, add_padding, remove_padding
from .key_schedule import KeySource, CallableKeySource, CounterKeySource, RoundKeySchedule

__version__ = '0.1.0'
__author__ = 'Feistel Team'

__all__ = [
    'execute_rounds', 'cipher', 'decipher', 'FeistelCipher', 'encrypt', 'decrypt',
    'PaddingError', 'add_padding', 'remove_padding',
    'KeySource', 'CallableKeySource', 'CounterKeySource', 'RoundKeySchedule',
]
