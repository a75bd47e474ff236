"""
ARX-based Key Schedule

This module expands a master key into per-round keys using ARX (Addition,
Rotation, XOR) operations, and derives master keys from passwords with
Argon2id. The expanded keys are wrapped in a RoundKeySchedule so they can be
fed straight to the round engine.
"""

import secrets
from typing import List, Optional, Tuple, Union

import argon2
from argon2.low_level import Type

from .key_source import RoundKeySchedule

MASTER_KEY_SIZE = 32

# Default parameters for Argon2id
KDF_DEFAULT_PARAMS = {
    'time_cost': 4,       # Number of iterations
    'memory_cost': 65536, # 64 MB
    'parallelism': 4,     # Number of threads
    'hash_len': 32,       # Output size in bytes
    'salt_len': 16        # Salt size in bytes
}

# Golden ratio, e, and the leading hex digits of pi
ARX_CONSTANTS = [
    0x9e3779b9, 0x243f6a88, 0xb7e15162, 0x3707344a,
    0xa4093822, 0x299f31d0, 0x082efa98, 0xec4e6c89,
    0x452821e6, 0x38d01377, 0xbe5466cf, 0x34e90c6c,
    0xc0ac29b7, 0xc97c50dd, 0x3f84d5b5, 0xb5470917
]


def rotate_left(value: int, shift: int, size: int = 32) -> int:
    """
    Rotate a value left by the specified number of bits.

    Args:
        value: The value to rotate
        shift: The number of bits to rotate by
        size: The bit size of the value

    Returns:
        The rotated value
    """
    shift %= size
    return ((value << shift) | (value >> (size - shift))) & ((1 << size) - 1)


def rotate_right(value: int, shift: int, size: int = 32) -> int:
    """
    Rotate a value right by the specified number of bits.

    Args:
        value: The value to rotate
        shift: The number of bits to rotate by
        size: The bit size of the value

    Returns:
        The rotated value
    """
    shift %= size
    return ((value >> shift) | (value << (size - shift))) & ((1 << size) - 1)


def generate_key(key_size: int = MASTER_KEY_SIZE) -> bytes:
    """Generate a random master key."""
    return secrets.token_bytes(key_size)


def derive_key_from_password(password: Union[str, bytes],
                             salt: Optional[bytes] = None) -> Tuple[bytes, bytes]:
    """
    Derive a master key from a password using Argon2id.

    Args:
        password: The password to derive the key from
        salt: Optional salt (will be generated if not provided)

    Returns:
        A tuple of (key, salt)
    """
    if salt is None:
        salt = secrets.token_bytes(KDF_DEFAULT_PARAMS['salt_len'])
    if isinstance(password, str):
        password = password.encode('utf-8')

    key = argon2.low_level.hash_secret_raw(
        secret=password,
        salt=salt,
        time_cost=KDF_DEFAULT_PARAMS['time_cost'],
        memory_cost=KDF_DEFAULT_PARAMS['memory_cost'],
        parallelism=KDF_DEFAULT_PARAMS['parallelism'],
        hash_len=KDF_DEFAULT_PARAMS['hash_len'],
        type=Type.ID
    )

    return key, salt


def expand_key(master_key: bytes, num_rounds: int, round_key_size: int) -> List[bytes]:
    """
    Expand a master key into one key per round using ARX operations.

    Args:
        master_key: The master key (32 bytes)
        num_rounds: Number of round keys to produce
        round_key_size: Size of each round key in bytes

    Returns:
        A list of num_rounds round keys
    """
    if len(master_key) != MASTER_KEY_SIZE:
        raise ValueError(f"Master key must be {MASTER_KEY_SIZE} bytes")
    if num_rounds < 1:
        raise ValueError("At least one round key is required")
    if round_key_size < 1:
        raise ValueError("Round key size must be positive")

    state = [int.from_bytes(master_key[i:i+4], byteorder='big')
             for i in range(0, MASTER_KEY_SIZE, 4)]
    words_per_round_key = -(-round_key_size // 4)
    round_keys = []

    for r in range(num_rounds):
        for i in range(8):
            state[i] = (state[i] + ARX_CONSTANTS[(r + i) % 16]) & 0xFFFFFFFF
            state[i] = rotate_left(state[i], (i + r) % 31 + 1)
            state[i] ^= state[(i + 4) % 8]
            state[i] = rotate_right(state[i], (i + r + 2) % 29 + 1)

        round_key = bytearray()
        for i in range(words_per_round_key):
            round_key.extend(state[i % 8].to_bytes(4, byteorder='big'))
        round_keys.append(bytes(round_key[:round_key_size]))

    return round_keys


def schedule_from_key(master_key: bytes, rounds: int, round_key_size: int,
                      per_block: bool = True) -> RoundKeySchedule:
    """
    Expand a master key and wrap the round keys in a RoundKeySchedule.

    Args:
        master_key: The master key (32 bytes)
        rounds: Number of rounds the cipher runs per block
        round_key_size: Size of each round key in bytes
        per_block: Whether the schedule restarts for every block

    Returns:
        The key schedule
    """
    return RoundKeySchedule(expand_key(master_key, rounds, round_key_size), per_block=per_block)


if __name__ == "__main__":
    master_key = generate_key()
    round_keys = expand_key(master_key, 16, 32)
    assert len(round_keys) == 16
    assert all(len(rk) == 32 for rk in round_keys)

    modified_key = bytearray(master_key)
    modified_key[0] ^= 0x01
    modified_round_keys = expand_key(bytes(modified_key), 16, 32)

    different_bits = sum(bin(b1 ^ b2).count('1')
                         for rk1, rk2 in zip(round_keys, modified_round_keys)
                         for b1, b2 in zip(rk1, rk2))
    total_bits = 16 * 32 * 8
    print(f"Avalanche effect: {different_bits / total_bits * 100:.2f}% of bits changed")

    print("Key schedule test passed!")
