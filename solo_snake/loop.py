"""Tick driver: advances the engine on its level-dependent cadence."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .game import GameEngine
from .models import GameSnapshot

logger = logging.getLogger(__name__)

IDLE_POLL_SECONDS = 0.5


class TickDriver:
    """Runs ``engine.tick()`` while the game is playing and unpaused.

    The driver sleeps for the current tick interval and then checks the engine
    again before ticking. If the game stopped being runnable, or any transition
    happened during the wait (tracked by ``engine.epoch``), the wait is thrown
    away and no tick is applied.
    """

    def __init__(self, engine: GameEngine, publish: Callable[[GameSnapshot], Awaitable[None]],
                 sleep=asyncio.sleep, idle_poll: float = IDLE_POLL_SECONDS):
        self.engine = engine
        self.publish = publish
        self.sleep = sleep
        self.idle_poll = idle_poll
        self.ticks = 0
        self._wakeup = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    def wake(self):
        """Called after every intent so an idle driver notices a new game at once."""
        self._wakeup.set()

    async def _wait_until_runnable(self):
        while not self.engine.runnable:
            self._wakeup.clear()
            try:
                await asyncio.wait_for(self._wakeup.wait(), timeout=self.idle_poll)
            except asyncio.TimeoutError:
                pass

    async def step(self) -> bool:
        """Wait one interval and tick if still allowed. Returns True if it ticked."""
        epoch = self.engine.epoch
        await self.sleep(self.engine.tick_interval_ms / 1000)

        if not self.engine.runnable or self.engine.epoch != epoch:
            return False

        try:
            self.engine.tick()
        except Exception:
            logger.exception("Tick failed")
            raise
        self.ticks += 1
        await self.publish(self.engine.snapshot())
        return True

    async def run(self):
        while True:
            await self._wait_until_runnable()
            await self.step()

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
