"""Counter-disambiguated ID allocation.

Within one millisecond tick IDs take consecutive counter values. Once the
counter reaches the disambiguation space the allocator waits for the clock to
move to the next tick. Not safe for unsynchronized use from several threads;
use one Sequence per thread or guard it with a lock.
"""

import asyncio
import time

from internal.logging import get_logger

# Delay between clock polls for the async variant (100 microseconds)
ASYNC_POLL_DELAY = 0.0001


def spin():
    """Re-poll immediately."""


def yield_thread():
    """Release the GIL to other threads before re-polling."""
    time.sleep(0)


class Sequence:
    __slots__ = ("codec", "current_tick", "counter", "wait", "_behind")

    def __init__(self, codec, wait=yield_thread):
        self.codec = codec
        self.current_tick = None
        self.counter = 0
        self.wait = wait
        self._behind = False

    def _poll(self):
        """Issue the next ID for the current tick, or None if the tick is exhausted."""
        tick = self.codec.elapsed_millis()
        if self.current_tick is None or tick > self.current_tick:
            self.current_tick = tick
            self.counter = 0
            self._behind = False
        elif tick < self.current_tick and not self._behind:
            # Clock went back: keep issuing from the last tick so IDs never decrease
            self._behind = True
            get_logger().warn("clock moved backwards", tick=tick, current_tick=self.current_tick)

        if self.counter >= self.codec.disambiguation_space:
            return None

        id_value = self.codec.encode(self.current_tick, self.counter)
        self.counter += 1
        return id_value

    def next(self):
        """Next ID, blocking the calling thread while the tick is exhausted."""
        id_value = self._poll()
        while id_value is None:
            self.wait()
            id_value = self._poll()
        return id_value

    async def next_async(self):
        """Next ID, suspending the calling task while the tick is exhausted."""
        id_value = self._poll()
        while id_value is None:
            await asyncio.sleep(ASYNC_POLL_DELAY)
            id_value = self._poll()
        return id_value

    def reset(self):
        self.current_tick = None
        self.counter = 0
        self._behind = False
