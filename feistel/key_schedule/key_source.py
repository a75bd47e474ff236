"""
Key Sources

This module implements the stateful objects that hand the round engine one
key per round. The engine draws keys blindly; for decryption to invert
encryption, the source used for decryption has to replay the keys of each
block in reverse order.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

logger = logging.getLogger(__name__)


class KeyScheduleExhausted(RuntimeError):
    """Raised when a finite key stream is drawn past its end."""


class KeySource(ABC):
    """
    Produces the next round key on every call.
    
    Instances are callable, so they can be handed to the engine anywhere a
    plain zero-argument function is accepted.
    """
    
    @abstractmethod
    def next_key(self) -> bytes:
        ...
    
    def check_usage(self, rounds: int, blocks: int) -> None:
        """
        Check that this source can serve `blocks` blocks of `rounds` rounds.
        
        Sources that cannot tell accept any usage.
        
        Raises:
            ValueError: If drawing that many keys would break the reversal
        """
    
    def __call__(self) -> bytes:
        return self.next_key()


class CallableKeySource(KeySource):
    """Adapts a zero-argument function (typically a closure) into a KeySource."""
    
    def __init__(self, func: Callable[[], bytes]):
        self.func = func
        self.drawn = 0
    
    def next_key(self) -> bytes:
        self.drawn += 1
        return bytes(self.func())


class CounterKeySource(KeySource):
    """
    XORs a fixed key with a running one-byte counter.
    
    A forward source (step > 0) produces a key from the current counter and
    then advances it. A reverse source (step < 0) moves the counter first and
    then produces the key, so that a reverse source started where a forward
    source stopped replays the forward keys backwards.
    """
    
    def __init__(self, key: bytes, start: int = 0, step: int = 1):
        if step == 0:
            raise ValueError("Counter step cannot be 0")
        self.key = bytes(key)
        self.counter = start
        self.step = step
    
    def _derive(self) -> bytes:
        value = self.counter & 0xFF
        return bytes(b ^ value for b in self.key)
    
    def next_key(self) -> bytes:
        if self.step > 0:
            key = self._derive()
            self.counter += self.step
            return key
        self.counter += self.step
        return self._derive()
    
    @classmethod
    def reverse_of(cls, source: 'CounterKeySource') -> 'CounterKeySource':
        """
        Build the source that undoes everything drawn from `source` so far.
        
        Args:
            source: A forward counter source that has been used for encryption
            
        Returns:
            A source yielding the same keys in reverse order
        """
        return cls(source.key, start=source.counter, step=-source.step)


class _ListKeySource(KeySource):
    def __init__(self, keys: Sequence[bytes], cycle: bool):
        self.keys = keys
        self.cycle = cycle
        self.position = 0
    
    def check_usage(self, rounds: int, blocks: int) -> None:
        if self.cycle and len(self.keys) != rounds:
            raise ValueError(
                f"Per-block key schedule holds {len(self.keys)} keys but {rounds} rounds are run")
        if not self.cycle:
            # Blocks are processed left to right in both directions
            if blocks != 1:
                raise ValueError(
                    f"Global key schedule can only invert one block, got {blocks}")
            if len(self.keys) != rounds:
                raise ValueError(
                    f"Global key schedule holds {len(self.keys)} keys but {rounds} rounds are run")
    
    def next_key(self) -> bytes:
        if self.position == len(self.keys):
            if not self.cycle:
                raise KeyScheduleExhausted(
                    f"Key schedule of {len(self.keys)} keys is exhausted")
            self.position = 0
        key = self.keys[self.position]
        self.position += 1
        return key


class RoundKeySchedule:
    """
    A fixed list of round keys and the policy for walking it.
    
    With per_block=True the list restarts for every block and must hold
    exactly one key per round. With per_block=False the list is a single
    stream, so it can only invert a single block and must hold exactly one
    key per round. cipher and decipher reject either mismatch with ValueError before drawing any key.
    """
    
    def __init__(self, round_keys: Sequence[bytes], per_block: bool = True):
        if not round_keys:
            raise ValueError("A key schedule needs at least one round key")
        self.round_keys: List[bytes] = [bytes(k) for k in round_keys]
        self.per_block = per_block
        self.rounds = len(self.round_keys)
        logger.debug("Built %s key schedule with %d round keys",
                     "per-block" if per_block else "global", len(self.round_keys))
    
    def __len__(self) -> int:
        return len(self.round_keys)
    
    def encryption_source(self) -> KeySource:
        return _ListKeySource(self.round_keys, cycle=self.per_block)
    
    def decryption_source(self) -> KeySource:
        return _ListKeySource(self.round_keys[::-1], cycle=self.per_block)
