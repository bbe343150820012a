"""
Clock capability used to turn a SAS token lifetime into an absolute expiry.
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Source of the current time in whole seconds since the Unix epoch."""

    @abstractmethod
    def now_seconds(self) -> int:
        pass


class SystemClock(Clock):
    """Wall-clock time."""

    def now_seconds(self) -> int:
        return int(time.time())


class FixedClock(Clock):
    """Clock frozen at a given epoch second."""

    def __init__(self, seconds: int):
        self.seconds = int(seconds)

    def now_seconds(self) -> int:
        return self.seconds
