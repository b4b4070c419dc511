import asyncio
import logging
from typing import Callable, Optional

from config import Config


class Ticker:
    """Recurring callback on an asyncio loop with one owned pending handle.

    ``arm`` always cancels the pending handle before scheduling a new one
    and ``cancel`` takes effect immediately, so at most one tick is ever
    pending and none fires after cancellation. Must be used from the loop's
    own thread.
    """

    def __init__(self, callback: Callable[[], None],
                 interval: float = Config.TICK_INTERVAL_SECONDS,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.callback = callback
        self.interval = interval
        self.loop = loop or asyncio.get_running_loop()
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def arm(self):
        self.cancel()
        self._handle = self.loop.call_later(self.interval, self._fire)

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self):
        # Schedule the next tick first; the callback may cancel it
        self._handle = self.loop.call_later(self.interval, self._fire)
        self.callback()


class TimerDriver:
    """Runs a timer's commands and keeps its ticker in step with its state."""

    def __init__(self, timer, interval: float = Config.TICK_INTERVAL_SECONDS,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.timer = timer
        self.ticker = Ticker(self._on_tick, interval=interval, loop=loop)

    @property
    def ticking(self) -> bool:
        return self.ticker.active

    def dispatch(self, command: str, *args, **kwargs) -> bool:
        if command not in self.timer.commands:
            raise ValueError(f"Unknown command for {type(self.timer).__name__}: {command}")

        accepted = getattr(self.timer, command)(*args, **kwargs)
        if accepted and self.timer.is_running:
            # An accepted command that leaves the timer running starts a fresh second
            self.ticker.arm()
        else:
            self._sync()
        logging.info(f"{type(self.timer).__name__} {command} -> accepted={accepted}, ticking={self.ticking}")
        return accepted

    def close(self):
        self.ticker.cancel()

    def _on_tick(self):
        self.timer.tick()
        self._sync()

    def _sync(self):
        if not self.timer.is_running:
            self.ticker.cancel()
        elif not self.ticker.active:
            self.ticker.arm()
