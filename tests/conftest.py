from datetime import datetime, timezone

import pytest

from core.time.clock import FixedClock, get_default_clock, set_default_clock

NOW = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    original = get_default_clock()
    clock = FixedClock(NOW)
    set_default_clock(clock)
    try:
        yield clock
    finally:
        set_default_clock(original)
