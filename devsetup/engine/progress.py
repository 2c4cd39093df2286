"""Progress reporter - a cosmetic heartbeat while an action runs."""

import sys
from concurrent import futures
from typing import IO, Optional


class ProgressReporter:
    """
    Redraws a fixed-width bar in place until the watched future completes.

    The percentage is a heartbeat, not a measurement: it climbs to 99 and
    wraps while the action is alive, and shows 100 exactly once, after the
    action is observed to have finished (successfully or not).
    """

    def __init__(self, stream: Optional[IO[str]] = None, width: int = 50,
                 interval: float = 0.1, label_width: int = 30,
                 fill: str = '#', empty: str = '.'):
        self.stream = stream
        self.width = width
        self.interval = interval
        self.label_width = label_width
        self.fill = fill
        self.empty = empty

    def render(self, label: str, percent: int) -> str:
        """Return one frame of the bar (without the leading carriage return)."""
        filled = percent * self.width // 100
        bar = self.fill * filled + self.empty * (self.width - filled)
        return f"{label:<{self.label_width}} [{bar}] {percent:3d}%"

    def report(self, handle: futures.Future, label: str) -> None:
        """Render until ``handle`` is done, then draw the final 100% frame."""
        percent = 0
        while not handle.done():
            percent = percent % 99 + 1
            self._write('\r' + self.render(label, percent))
            # Returns early as soon as the action finishes
            futures.wait([handle], timeout=self.interval)
        self._write('\r' + self.render(label, 100) + '\n')

    def _write(self, text: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(text)
        stream.flush()


class NullProgressReporter:
    """Waits for the action without drawing anything."""

    def report(self, handle: futures.Future, label: str) -> None:
        futures.wait([handle])
