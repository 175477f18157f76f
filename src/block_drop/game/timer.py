from __future__ import annotations

from time import monotonic
from typing import Callable, Optional


def _monotonic_ms() -> int:
    return int(monotonic() * 1000)


class DropTimer:
    """Recurring, cancellable action polled from the host loop.

    At most one schedule exists at a time: ``start`` on a running timer keeps
    the existing schedule, ``stop`` cancels it so no further tick fires.
    ``update`` fires the callback once per elapsed period, in order.
    """

    def __init__(
        self,
        period_ms: int,
        callback: Callable[[], None],
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        self.period_ms = int(period_ms)
        self.callback = callback
        self.clock = clock or _monotonic_ms
        self._next_due: Optional[int] = None

    @property
    def active(self) -> bool:
        return self._next_due is not None

    def start(self) -> None:
        if self._next_due is None:
            self._next_due = self.clock() + self.period_ms

    def stop(self) -> None:
        self._next_due = None

    def update(self) -> int:
        """Fire every tick that has come due. Returns the number fired."""
        fired = 0
        now = self.clock()
        while self._next_due is not None and now >= self._next_due:
            self._next_due += self.period_ms
            fired += 1
            self.callback()
        return fired
