from __future__ import annotations

import time
from typing import Optional


def monotonic_now() -> float:
    """Monotonic seconds.

    Note: Wrapped so tests can inject a fake clock instead.
    """
    return time.monotonic()


def format_countdown(seconds: Optional[int]) -> str:
    """Render remaining seconds the way the presenter card shows them."""
    if seconds is None:
        return "—"
    if seconds <= 0:
        return "0s remaining"
    minutes, secs = divmod(int(seconds), 60)
    if minutes >= 1:
        if secs == 0:
            return f"{minutes}m remaining"
        return f"{minutes}m {secs}s remaining"
    return f"{secs}s remaining"
