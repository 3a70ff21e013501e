"""Farcaster time: seconds since 2021-01-01T00:00:00Z, stored as uint32."""

from __future__ import annotations

import time
from typing import Optional

from hubsend.errors import InvalidTimestamp

FARCASTER_EPOCH = 1609459200  # 2021-01-01T00:00:00Z in Unix seconds
MAX_FARCASTER_TIME = 2**32 - 1


def to_farcaster_time(unix_seconds: float) -> int:
    offset = int(unix_seconds) - FARCASTER_EPOCH
    if offset < 0:
        raise InvalidTimestamp(f"time {int(unix_seconds)} is before the farcaster epoch", reason="time_before_epoch")
    if offset > MAX_FARCASTER_TIME:
        raise InvalidTimestamp(f"offset {offset} does not fit in uint32", reason="time_too_far_in_future")
    return offset


def from_farcaster_time(ts: int) -> int:
    if ts < 0 or ts > MAX_FARCASTER_TIME:
        raise InvalidTimestamp(f"farcaster time {ts} out of range")
    return int(ts) + FARCASTER_EPOCH


def get_farcaster_time(now: Optional[float] = None) -> int:
    """Current Farcaster time, or the Farcaster time of ``now`` (Unix seconds)."""
    return to_farcaster_time(time.time() if now is None else now)
