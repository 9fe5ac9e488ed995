"""Tests for the tick driver."""

import asyncio
import random

from solo_snake.game import GameEngine
from solo_snake.loop import TickDriver
from solo_snake.models import Lifecycle
from solo_snake.score_store import MemoryScoreStore


def make_playing_engine():
    engine = GameEngine(MemoryScoreStore(), rng=random.Random(5))
    engine.start()
    engine.food = (0, 0)
    return engine


class Recorder:
    def __init__(self):
        self.snapshots = []

    async def __call__(self, snapshot):
        self.snapshots.append(snapshot)


class TestStep:
    def test_waits_level_interval_then_ticks(self):
        engine = make_playing_engine()
        publish = Recorder()
        sleeps = []

        async def sleep(seconds):
            sleeps.append(seconds)

        async def scenario():
            driver = TickDriver(engine, publish, sleep=sleep)
            return await driver.step()

        assert asyncio.run(scenario()) is True
        assert sleeps == [0.14]
        assert [s.snake[0] for s in publish.snapshots] == [(6, 10)]

    def test_pause_during_wait_skips_tick(self):
        engine = make_playing_engine()
        publish = Recorder()

        async def sleep(seconds):
            engine.toggle_pause()

        async def scenario():
            return await TickDriver(engine, publish, sleep=sleep).step()

        assert asyncio.run(scenario()) is False
        assert engine.snake[0] == (5, 10)
        assert publish.snapshots == []

    def test_pause_and_resume_during_wait_skips_tick(self):
        """The game is runnable again after the wait, but a transition happened."""
        engine = make_playing_engine()
        publish = Recorder()

        async def sleep(seconds):
            engine.toggle_pause()
            engine.toggle_pause()

        async def scenario():
            return await TickDriver(engine, publish, sleep=sleep).step()

        assert asyncio.run(scenario()) is False
        assert engine.runnable is True
        assert engine.snake[0] == (5, 10)

    def test_reset_during_wait_skips_tick(self):
        engine = make_playing_engine()

        async def sleep(seconds):
            engine.reset()

        async def scenario():
            return await TickDriver(engine, Recorder(), sleep=sleep).step()

        assert asyncio.run(scenario()) is False
        assert engine.state is Lifecycle.NOT_STARTED


class TestRun:
    def test_runs_until_paused_then_idles(self):
        engine = make_playing_engine()

        async def fast_sleep(seconds):
            await asyncio.sleep(0)

        async def scenario():
            done = asyncio.Event()
            published = []

            async def publish(snapshot):
                published.append(snapshot)
                if len(published) == 3:
                    engine.toggle_pause()
                    done.set()

            driver = TickDriver(engine, publish, sleep=fast_sleep, idle_poll=0.01)
            driver.start()
            await asyncio.wait_for(done.wait(), timeout=2)
            await asyncio.sleep(0.05)
            await driver.stop()
            return driver.ticks

        assert asyncio.run(scenario()) == 3
        assert engine.snake[0] == (8, 10)

    def test_wake_starts_ticking_without_waiting_for_poll(self):
        engine = GameEngine(MemoryScoreStore(), rng=random.Random(5))

        async def fast_sleep(seconds):
            await asyncio.sleep(0)

        async def scenario():
            ticked = asyncio.Event()

            async def publish(snapshot):
                engine.toggle_pause()
                ticked.set()

            driver = TickDriver(engine, publish, sleep=fast_sleep, idle_poll=60)
            driver.start()
            await asyncio.sleep(0)
            engine.start()
            engine.food = (0, 0)
            driver.wake()
            await asyncio.wait_for(ticked.wait(), timeout=2)
            await driver.stop()
            return driver.ticks

        assert asyncio.run(scenario()) == 1

    def test_stop_without_start(self):
        engine = make_playing_engine()

        async def scenario():
            await TickDriver(engine, Recorder()).stop()

        asyncio.run(scenario())
