"""Logical block clock.

Every timestamp the registry writes (issue dates, credit dates, balance
updates) and every expiry decision reads block_time from here, never the
wall clock.  The clock only moves forward, one mined block at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BlockInfo:
    block_height: int
    block_time: int


class ChainClock:
    def __init__(self, *, block_height: int, block_time: int, block_interval: int) -> None:
        if block_interval <= 0:
            raise ValueError("block_interval must be positive")
        self._height = block_height
        self._time = block_time
        self._interval = block_interval

    @property
    def block_height(self) -> int:
        return self._height

    @property
    def block_time(self) -> int:
        return self._time

    def info(self) -> BlockInfo:
        return BlockInfo(block_height=self._height, block_time=self._time)

    def mine(self, count: int = 1, *, interval: int | None = None) -> BlockInfo:
        """Advance the chain by `count` blocks of `interval` seconds each."""
        step = self._interval if interval is None else interval
        if count < 1:
            raise ValueError("count must be >= 1")
        if step <= 0:
            raise ValueError("interval must be positive")

        self._height += count
        self._time += count * step
        logger.debug(
            "Mined %d block(s) height=%d time=%d", count, self._height, self._time
        )
        return self.info()

    def advance_to(self, block_time: int) -> BlockInfo:
        """Mine a single block stamped with an explicit time.

        Used to jump past an expiry without mining thousands of blocks.
        """
        if block_time < self._time:
            raise ValueError(
                f"block_time cannot move backwards ({block_time} < {self._time})"
            )
        self._height += 1
        self._time = block_time
        return self.info()
