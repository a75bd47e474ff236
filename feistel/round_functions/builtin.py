"""
Reference Round Functions

A Feistel round function never has to be inverted, so any deterministic
mapping that preserves the half-block length will do. The functions here
range from the trivial (useful in tests) to an HMAC-based mixer.
"""

import hashlib
import hmac

import numpy as np

SUPPORTED_HASHES = ('sha256', 'sha384', 'sha512')


def _fit_key(key: bytes, length: int) -> np.ndarray:
    """Repeat or truncate the key to exactly `length` bytes."""
    if not key:
        raise ValueError("Round key cannot be empty")
    k = np.frombuffer(key, dtype=np.uint8)
    return np.resize(k, length)


def bitwise_or(half_block: bytes, key: bytes) -> bytes:
    """
    OR the half-block with the key byte by byte.
    
    Bytes of the half-block past the end of the key are kept as they are;
    key bytes past the end of the half-block are dropped.
    """
    overlap = min(len(half_block), len(key))
    if overlap == 0:
        return bytes(half_block)
    result = np.frombuffer(half_block, dtype=np.uint8).copy()
    result[:overlap] |= np.frombuffer(key, dtype=np.uint8)[:overlap]
    return result.tobytes()


def keyed_xor(half_block: bytes, key: bytes) -> bytes:
    """XOR the half-block with the key, cycling the key as needed."""
    h = np.frombuffer(half_block, dtype=np.uint8)
    return np.bitwise_xor(h, _fit_key(key, len(half_block))).tobytes()


def hmac_round(half_block: bytes, key: bytes, hash_algo: str = 'sha256') -> bytes:
    """
    Mix the half-block under the key with HMAC.
    
    The output is stretched to the half-block length by HMAC-ing the
    half-block together with a block counter, the same way counter-mode
    KDFs extend a digest.
    
    Args:
        half_block: The half-block to transform
        key: The round key
        hash_algo: Hash algorithm to use ('sha256', 'sha384', or 'sha512')
        
    Returns:
        A pseudo-random value of the same length as half_block
    """
    if hash_algo not in SUPPORTED_HASHES:
        raise ValueError("Hash algorithm must be sha256, sha384, or sha512")
    
    hash_func = getattr(hashlib, hash_algo)
    output = bytearray()
    counter = 0
    while len(output) < len(half_block):
        data = counter.to_bytes(4, byteorder='big') + bytes(half_block)
        output.extend(hmac.new(key, data, hash_func).digest())
        counter += 1
    
    return bytes(output[:len(half_block)])
