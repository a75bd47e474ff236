"""
Key Schedule Package

This package implements the key sources that feed the round engine one key
per round, and a reference ARX expansion that turns a master key into a
list of round keys.
"""

from .key_source import (
    KeySource, CallableKeySource, CounterKeySource, RoundKeySchedule, KeyScheduleExhausted
)
from .arx_key_schedule import (
    expand_key, generate_key, derive_key_from_password, schedule_from_key, KDF_DEFAULT_PARAMS
)

__all__ = [
    'KeySource', 'CallableKeySource', 'CounterKeySource', 'RoundKeySchedule',
    'KeyScheduleExhausted', 'expand_key', 'generate_key', 'derive_key_from_password',
    'schedule_from_key', 'KDF_DEFAULT_PARAMS'
]
