"""Cooperative tick drivers and re-armable timeouts, advanced by the frame loop"""
from typing import Callable, Optional


class Driver:
    """
    Calls `callback` while running.

    interval_ms=None => once per advance() (per frame); otherwise a fixed
    timestep, firing as many times as the accumulated time allows.
    start() and stop() are both idempotent.
    """
    def __init__(self, callback: Callable[[], None], interval_ms: Optional[float] = None):
        self.callback = callback
        self.interval_ms = interval_ms
        self.running = False
        self.acc = 0.0

    def start(self):
        if not self.running:
            self.running = True
            self.acc = 0.0

    def stop(self):
        self.running = False
        self.acc = 0.0

    def advance(self, dt_ms: float) -> int:
        if not self.running:
            return 0
        if self.interval_ms is None:
            self.callback()
            return 1
        fired = 0
        self.acc += dt_ms
        while self.running and self.acc >= self.interval_ms:
            self.acc -= self.interval_ms
            self.callback()
            fired += 1
        return fired


class Timeout:
    """One-shot delayed callback; arming again replaces the pending one."""
    def __init__(self):
        self.remaining: Optional[float] = None
        self.callback: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return self.remaining is not None

    def arm(self, delay_ms: float, callback: Callable[[], None]):
        self.remaining = float(delay_ms)
        self.callback = callback

    def cancel(self):
        self.remaining = None
        self.callback = None

    def advance(self, dt_ms: float):
        if self.remaining is None:
            return
        self.remaining -= dt_ms
        if self.remaining <= 0:
            cb = self.callback
            self.cancel()
            cb()
