"""Tick sources supplying the ledger's monotonic time value."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TickSource(Protocol):
    """Protocol for anything that reports the current block height."""

    def current_tick(self) -> int: ...


class ManualClock:
    """Host-driven monotonic tick counter.

    The registry only stamps the value it reads; advancing it is the
    host's job.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"Start tick must be non-negative, got {start}")
        self._tick = start

    def current_tick(self) -> int:
        return self._tick

    def advance(self, ticks: int = 1) -> int:
        if ticks < 0:
            raise ValueError(f"Cannot advance by a negative amount ({ticks})")
        self._tick += ticks
        return self._tick

    def set(self, tick: int) -> None:
        if tick < self._tick:
            raise ValueError(
                f"Tick {tick} is behind the current tick {self._tick}; "
                "time is monotonic"
            )
        self._tick = tick
