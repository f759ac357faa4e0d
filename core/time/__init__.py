"""
Publishing Time — Public API
==============================
Reference clock and the publication window value object.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    set_default_clock,
)
from core.time.window import PublicationWindow

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "PublicationWindow",
]
