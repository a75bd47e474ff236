"""
PKCS#7 Padding

This module implements PKCS#7 padding: a message is extended with N bytes
of value N, where N is the distance to the next block boundary. A message
that already ends on a boundary receives a full block of padding, so the
padding can always be removed without ambiguity.
"""

from typing import Union

from .errors import PaddingError

MAX_BLOCK_SIZE = 256


def add_padding(message: Union[bytes, bytearray], block_size: int) -> bytes:
    """
    Produce a padded copy of the message that fits the given block size.
    
    Args:
        message: The message to pad
        block_size: Block size in bytes (1 to 256)
        
    Returns:
        The message followed by its padding
        
    Raises:
        ValueError: If the block size is outside 1..256
    """
    if not 1 <= block_size <= MAX_BLOCK_SIZE:
        raise ValueError(f"Only block sizes from 1 up to {MAX_BLOCK_SIZE} are allowed")
    
    needed_padding = block_size - len(message) % block_size
    # A 256-byte pad stores its tag as 0, just like a single byte would truncate it
    return bytes(message) + bytes([needed_padding & 0xFF]) * needed_padding


def remove_padding(message: bytearray) -> None:
    """
    Delete PKCS#7 padding from a message, truncating it in place.
    
    Bytes are popped from the end one at a time; on failure the ones
    already popped are not restored.
    
    Args:
        message: The padded message
        
    Raises:
        PaddingError: If no valid padding is found
    """
    if not message:
        raise PaddingError("empty message")
    
    padding = message[-1]
    if padding == 0:
        raise PaddingError("padding number cannot be 0")
    
    for _ in range(padding):
        if not message or message.pop() != padding:
            raise PaddingError("malformed padding")


if __name__ == "__main__":
    msg = b"Hello, World!"
    
    padded = add_padding(msg, 15)
    print(f"Padded message: {padded!r}")
    assert padded == msg + b"\x02\x02"
    
    buffer = bytearray(padded)
    remove_padding(buffer)
    print(f"Unpadded message: {bytes(buffer)!r}")
    assert bytes(buffer) == msg
    
    try:
        remove_padding(bytearray(b"abc\x03\x05"))
    except PaddingError as e:
        print(f"Rejected bad padding: {e}")
    
    print("Padding tests completed successfully!")
