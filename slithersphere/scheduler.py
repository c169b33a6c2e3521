"""Frame-driven tick scheduler."""

import asyncio
import inspect
import logging
import time
from typing import Awaitable, Callable, Optional, Union

from .constants import FRAME_RATE

logger = logging.getLogger(__name__)

Callback = Callable[[float], Union[None, object, Awaitable]]


async def _call(fn: Callback, now: float):
    result = fn(now)
    if inspect.isawaitable(result):
        result = await result
    return result


class TickScheduler:
    """Runs ``tick_fn`` whenever the interval reported by ``interval_provider``
    (milliseconds) has elapsed, and ``frame_fn`` on every frame.

    Ticks fire at most once per frame; frames run at ``frame_rate`` Hz.
    """

    def __init__(self, frame_rate: int = FRAME_RATE, clock: Callable[[], float] = time.time):
        self.frame_rate = frame_rate
        self.clock = clock
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, tick_fn: Callback, interval_provider: Callable[[], float],
              frame_fn: Optional[Callback] = None):
        if self.running:
            raise RuntimeError("scheduler already running")
        self._task = asyncio.create_task(self._run(tick_fn, interval_provider, frame_fn))
        logger.debug("scheduler started at %d fps", self.frame_rate)

    def stop(self):
        task, self._task = self._task, None
        if task is None or task.done():
            return
        logger.debug("scheduler stopped")
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # Stopping from inside a callback lets the loop exit on its own.
        if task is not current:
            task.cancel()

    async def _run(self, tick_fn, interval_provider, frame_fn):
        me = asyncio.current_task()
        last_tick = self.clock()
        while self._task is me:
            now = self.clock()
            if (now - last_tick) * 1000 > interval_provider():
                last_tick = now
                await _call(tick_fn, now)
                if self._task is not me:
                    break
            if frame_fn is not None:
                await _call(frame_fn, now)
            await asyncio.sleep(1 / self.frame_rate)
