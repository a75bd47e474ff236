"""
Feistel Network Implementation

This module provides the generic Feistel round engine and the cipher and
decipher entry points built on top of it. The round function, the key
source and the padding scheme are all supplied by the caller; the engine
only splits blocks, runs the rounds and swaps the halves.
"""

import logging
from typing import Callable, Union

import numpy as np

from ..key_schedule import KeySource
from ..padding import add_padding, remove_padding
from ..round_functions import hmac_round
from ..key_schedule.arx_key_schedule import schedule_from_key

logger = logging.getLogger(__name__)

KeyStream = Callable[[], bytes]
RoundFunction = Callable[[bytes, bytes], bytes]
Padder = Callable[[bytes, int], bytes]
PaddingRemover = Callable[[bytearray], None]

DEFAULT_BLOCK_SIZE = 16
DEFAULT_ROUNDS = 16
DEFAULT_ROUND_KEY_SIZE = 32


def _check_block_size(block_size: int) -> None:
    if block_size <= 0:
        raise ValueError("Block size was 0 or negative")
    if block_size % 2 != 0:
        raise ValueError("Block size was not a multiple of 2")


def _check_rounds(rounds: int) -> None:
    if rounds < 0:
        raise ValueError("Number of rounds cannot be negative")
    if rounds == 0:
        logger.warning("Running the Feistel network with 0 rounds only swaps block halves")


def _check_key_source(key_source: KeyStream, rounds: int, blocks: int) -> None:
    if isinstance(key_source, KeySource):
        key_source.check_usage(rounds, blocks)


def execute_rounds(buffer: bytearray,
                   block_size: int,
                   key_source: KeyStream,
                   round_function: RoundFunction,
                   rounds: int) -> None:
    """
    Run the Feistel rounds over every block of the buffer, in place.

    Each round draws one key, replaces the right half with
    left XOR F(right, key) and moves the old right half to the left. A final
    swap after the last round undoes the swap of the last round, so the same
    code decrypts when fed the same keys in reverse order.

    Args:
        buffer: The data to transform; its length must be a multiple of block_size
        block_size: Block size in bytes (even)
        key_source: Zero-argument callable returning the next round key
        round_function: Maps (half_block, key) to a new half_block
        rounds: Number of rounds applied to each block
    """
    logger.debug("Processing %d blocks of %d bytes with %d rounds",
                 len(buffer) // block_size, block_size, rounds)
    if not buffer:
        return

    half = block_size // 2
    view = np.frombuffer(buffer, dtype=np.uint8)

    for start in range(0, len(buffer), block_size):
        left = view[start:start + half].copy()
        right = view[start + half:start + block_size].copy()

        for _ in range(rounds):
            key = key_source()
            mixed = round_function(right.tobytes(), key)
            if len(mixed) != half:
                raise ValueError(
                    f"Round function returned {len(mixed)} bytes, expected {half}")
            left, right = right, np.bitwise_xor(left, np.frombuffer(mixed, dtype=np.uint8))

        view[start:start + half] = right
        view[start + half:start + block_size] = left


def cipher(message: Union[bytes, bytearray],
           block_size: int,
           padder: Padder,
           key_source: KeyStream,
           round_function: RoundFunction,
           rounds: int) -> bytes:
    """
    Encrypt a message.

    Args:
        message: The original message
        block_size: Block size in bytes; must be a positive multiple of 2
        padder: Extends the message to a multiple of block_size
        key_source: Provides the key for each round
        round_function: Maps (half_block, key) to a half_block of the same size
        rounds: Number of rounds per block

    Returns:
        The encrypted message

    Raises:
        ValueError: If the block size or round count is invalid, or the key
            source cannot serve that many rounds and blocks
    """
    _check_block_size(block_size)
    _check_rounds(rounds)

    result = bytearray(padder(message, block_size))
    _check_key_source(key_source, rounds, len(result) // block_size)
    execute_rounds(result, block_size, key_source, round_function, rounds)

    return bytes(result)


def decipher(message: Union[bytes, bytearray],
             block_size: int,
             key_source: KeyStream,
             round_function: RoundFunction,
             rounds: int,
             padding_remover: PaddingRemover) -> bytes:
    """
    Decrypt a message.

    The key source must yield, for every block, the keys used to encrypt
    that block in reverse order.

    Args:
        message: The encrypted message; its length must be a multiple of block_size
        block_size: Block size in bytes; must be a positive multiple of 2
        key_source: Provides the key for each round
        round_function: The round function used for encryption
        rounds: Number of rounds per block
        padding_remover: Strips the padding from the decrypted buffer in place

    Returns:
        The decrypted message

    Raises:
        ValueError: If the block size or round count is invalid, or the key
            source cannot serve that many rounds and blocks
        PaddingError: If the decrypted message is not correctly padded
    """
    _check_block_size(block_size)
    _check_rounds(rounds)

    result = bytearray(message)
    _check_key_source(key_source, rounds, len(result) // block_size)
    execute_rounds(result, block_size, key_source, round_function, rounds)
    padding_remover(result)

    return bytes(result)


class FeistelCipher:
    """
    Feistel cipher with PKCS#7 padding and an ARX key schedule expanded
    from a 32-byte master key.
    """

    def __init__(self,
                 block_size: int = DEFAULT_BLOCK_SIZE,
                 rounds: int = DEFAULT_ROUNDS,
                 round_function: RoundFunction = hmac_round,
                 round_key_size: int = DEFAULT_ROUND_KEY_SIZE):
        """
        Initialize the cipher with the specified parameters.

        Args:
            block_size: Block size in bytes (even, at most 254)
            rounds: Number of rounds per block (at least 1)
            round_function: Maps (half_block, key) to a half_block of the same size
            round_key_size: Size of each round key in bytes
        """
        _check_block_size(block_size)
        # A full 256-byte PKCS#7 pad stores its tag as 0 and cannot be removed
        if block_size > 255:
            raise ValueError("FeistelCipher only allows block sizes up to 254")
        if rounds < 1:
            raise ValueError("At least one round is required")

        self.block_size = block_size
        self.rounds = rounds
        self.round_function = round_function
        self.round_key_size = round_key_size

    def encrypt(self, message: bytes, key: bytes) -> bytes:
        schedule = schedule_from_key(key, self.rounds, self.round_key_size)
        return cipher(message, self.block_size, add_padding,
                      schedule.encryption_source(), self.round_function, self.rounds)

    def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
        if len(ciphertext) % self.block_size != 0:
            raise ValueError(
                f"Ciphertext length must be a multiple of {self.block_size} bytes")
        schedule = schedule_from_key(key, self.rounds, self.round_key_size)
        return decipher(ciphertext, self.block_size, schedule.decryption_source(),
                        self.round_function, self.rounds, remove_padding)


def encrypt(message: bytes, key: bytes,
            block_size: int = DEFAULT_BLOCK_SIZE,
            rounds: int = DEFAULT_ROUNDS) -> bytes:
    """
    Convenience function to encrypt a message.

    Args:
        message: The message to encrypt
        key: The master key (32 bytes)
        block_size: Block size in bytes (default: 16)
        rounds: Number of rounds (default: 16)

    Returns:
        The encrypted message
    """
    return FeistelCipher(block_size=block_size, rounds=rounds).encrypt(message, key)


def decrypt(ciphertext: bytes, key: bytes,
            block_size: int = DEFAULT_BLOCK_SIZE,
            rounds: int = DEFAULT_ROUNDS) -> bytes:
    """
    Convenience function to decrypt a message.

    Args:
        ciphertext: The message to decrypt
        key: The master key (32 bytes)
        block_size: Block size in bytes (default: 16)
        rounds: Number of rounds (default: 16)

    Returns:
        The decrypted message
    """
    return FeistelCipher(block_size=block_size, rounds=rounds).decrypt(ciphertext, key)


if __name__ == "__main__":
    from ..key_schedule import CounterKeySource
    from ..round_functions import bitwise_or

    logging.basicConfig(level=logging.DEBUG)

    message = b"Hello, World!"
    encrypting = CounterKeySource(b"Password")
    ciphered = cipher(message, 16, add_padding, encrypting, bitwise_or, 50)
    print(f"Ciphertext: {ciphered.hex()}")

    deciphered = decipher(ciphered, 16, CounterKeySource.reverse_of(encrypting),
                          bitwise_or, 50, remove_padding)
    print(f"Plaintext: {deciphered!r}")
    assert deciphered == message

    print("Feistel network tests completed successfully!")
