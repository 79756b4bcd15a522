"""
Clock

Source of "now" for every time-dependent decision. Production code uses
SystemClock; tests inject a FixedClock to make temporal classification
reproducible.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from django.utils import timezone


class Clock(ABC):
    """Supplies the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(Clock):
    """Wall clock, timezone-aware when USE_TZ is enabled."""

    def now(self) -> datetime:
        return timezone.now()


class FixedClock(Clock):
    """Clock frozen at a given instant until moved explicitly."""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> None:
        self._instant = self._instant + delta
