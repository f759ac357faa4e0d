"""
Publishing Time — Reference Clock
===================================
Every publication check needs a reference instant. When the caller
does not pass one, it comes from the default clock below, never from a
direct datetime.now() call, so tests can pin "now".

SystemClock follows Django's USE_TZ setting through
django.utils.timezone.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Protocol

from django.utils import timezone


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Source of the default reference instant."""

    def now(self) -> datetime:
        ...  # pragma: no cover

    def today(self) -> date:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Wall-clock time, aware or naive depending on settings.USE_TZ."""

    def now(self) -> datetime:
        return timezone.now()

    def today(self) -> date:
        now = self.now()
        if timezone.is_aware(now):
            return timezone.localdate(now)
        return now.date()


class FixedClock:
    """
    Clock pinned to a single instant.

    Usage:
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        set_default_clock(clock)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if not isinstance(fixed_dt, datetime):
            raise TypeError("FixedClock requires a datetime instance.")
        self._fixed_dt = fixed_dt

    def now(self) -> datetime:
        return self._fixed_dt

    def today(self) -> date:
        if timezone.is_aware(self._fixed_dt):
            return timezone.localdate(self._fixed_dt)
        return self._fixed_dt.date()

    def advance(self, **delta) -> None:
        """Move the pinned instant, e.g. ``clock.advance(minutes=5)``."""
        self._fixed_dt = self._fixed_dt + timedelta(**delta)


# ══════════════════════════════════════════════════════════════
# DEFAULT CLOCK
# ══════════════════════════════════════════════════════════════

_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    """Replace the process-wide default clock (tests only)."""
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock
