"""
Publishing Time — Publication Window
======================================
Pure value object for the [start, end] publication interval.
Both bounds are optional: no start means never published, no end
means published indefinitely once started.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class PublicationWindow:
    """
    Interval [start, end], inclusive on both ends.

    start <= end is expected when both are set but not enforced;
    callers own that ordering.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, at: date) -> bool:
        """True if ``at`` falls inside the window."""
        if self.start is None or self.start > at:
            return False
        return self.end is None or self.end >= at

    def excludes(self, at: date) -> bool:
        return not self.contains(at)
