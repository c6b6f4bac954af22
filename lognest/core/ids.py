"""
Time-ordered identifiers for new entities.

Services call :func:`new_id` when they construct an entity, so primary keys
sort by creation time (UUID version 7, RFC 9562).
"""

import os
import threading
import time
import uuid

_lock = threading.Lock()
_last_timestamp_ms = 0
_counter = 0

# 12 bits of rand_a are used as a per-millisecond counter
_COUNTER_MAX = 0xFFF


def new_id() -> uuid.UUID:
    """Return a new UUIDv7, monotonic within this process."""
    global _last_timestamp_ms, _counter

    with _lock:
        timestamp_ms = time.time_ns() // 1_000_000
        if timestamp_ms > _last_timestamp_ms:
            _last_timestamp_ms = timestamp_ms
            _counter = int.from_bytes(os.urandom(2), "big") & 0x7FF
        else:
            _counter += 1
            if _counter > _COUNTER_MAX:
                # Counter exhausted: borrow the next millisecond
                _last_timestamp_ms += 1
                _counter = 0
        timestamp_ms = _last_timestamp_ms
        counter = _counter

    rand_b = int.from_bytes(os.urandom(8), "big") & ((1 << 62) - 1)

    value = (timestamp_ms & ((1 << 48) - 1)) << 80
    value |= 0x7 << 76
    value |= counter << 64
    value |= 0b10 << 62
    value |= rand_b
    return uuid.UUID(int=value)
