from __future__ import annotations

from dataclasses import dataclass, field
from time import monotonic
from typing import Callable, Hashable, Optional


def _monotonic_ms() -> float:
    return monotonic() * 1000.0


@dataclass
class RepeatTimer:
    """Fixed-interval timer polled from the event loop.

    ``poll()`` fires ``callback`` at most once, when the interval has elapsed,
    and schedules the next firing one interval after that poll. Intervals
    missed during a stall are dropped. A cancelled timer never fires until
    started again.
    """

    interval_ms: float
    callback: Callable[[], object]
    clock: Optional[Callable[[], float]] = field(default=None, repr=False)

    _clock: Callable[[], float] = field(init=False, repr=False)
    _due: Optional[float] = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        if self.interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._clock = self.clock or _monotonic_ms

    @property
    def active(self) -> bool:
        return self._due is not None

    def start(self) -> None:
        self._due = self._clock() + self.interval_ms

    def cancel(self) -> None:
        self._due = None

    def rearm(self, interval_ms: float) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.interval_ms = float(interval_ms)
        if self.active:
            self.start()

    def poll(self) -> int:
        if self._due is None:
            return 0
        now = self._clock()
        if now < self._due:
            return 0
        self._due = now + self.interval_ms
        self.callback()
        return 1


@dataclass
class KeyRepeater:
    """Runs an action once on key-down, then every ``interval_ms`` while held.

    One key repeats at a time; pressing another key takes over. Releasing a
    key only stops the repeat it owns.
    """

    interval_ms: float
    clock: Optional[Callable[[], float]] = field(default=None, repr=False)

    _timer: Optional[RepeatTimer] = field(init=False, default=None, repr=False)
    _key: Optional[Hashable] = field(init=False, default=None, repr=False)

    @property
    def held_key(self) -> Optional[Hashable]:
        return self._key

    def press(self, key: Hashable, action: Callable[[], object]) -> None:
        self.stop()
        action()
        self._key = key
        self._timer = RepeatTimer(self.interval_ms, action, clock=self.clock)
        self._timer.start()

    def release(self, key: Hashable) -> None:
        if key == self._key:
            self.stop()

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._key = None

    def poll(self) -> int:
        if self._timer is None:
            return 0
        return self._timer.poll()
