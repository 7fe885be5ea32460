from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from types import TracebackType

import structlog
from portal.domain.services.entry_gate import EntryGate, GateReading

logger = structlog.get_logger()

Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[object]]


def utc_now() -> datetime:
    return datetime.now(UTC)


class CountdownTicker:
    """Periodically reads an ``EntryGate`` and hands each reading to ``on_tick``.

    The interval is chosen again after every reading, so a ticker started more than
    an hour out moves from minute to second ticks on its own. Owners must ``stop()``
    the ticker when the view that consumes the readings goes away.

    An exception from ``on_tick`` ends the ticker. It is logged when it happens and
    raised again from ``stop()``.
    """

    def __init__(
        self,
        gate: EntryGate,
        on_tick: Callable[[GateReading], None],
        *,
        clock: Clock = utc_now,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.gate = gate
        self.on_tick = on_tick
        self._clock = clock
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None
        self._stopped = False
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self._task is not None:
            return
        self._stopped = False
        self._task = asyncio.create_task(self._run(), name="countdown-ticker")
        logger.info(
            "countdown_ticker_started",
            scheduled_at=self.gate.scheduled_at.isoformat() if self.gate.scheduled_at else None,
        )

    async def stop(self) -> None:
        self._stopped = True
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("countdown_ticker_stopped", ticks=self.ticks)

    async def _run(self) -> None:
        while not self._stopped:
            reading = self.gate.read(self._clock())
            self.ticks += 1
            try:
                self.on_tick(reading)
            except Exception:
                logger.exception("countdown_tick_failed", ticks=self.ticks)
                raise
            if reading.tick_seconds is None:
                # Nothing scheduled: a single zeroed reading is all there is to show.
                return
            await self._sleep(reading.tick_seconds)

    async def __aenter__(self) -> CountdownTicker:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()
