"""
Padding Errors

Removing padding from a decrypted message is the only step of the cipher
that can fail on well-formed calls, so it gets its own exception type.
"""


class PaddingError(Exception):
    """Raised when a message does not carry valid padding."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return self.reason
