from __future__ import annotations

from typing import Literal

from timer_relay.constants import COUNTDOWN_SECONDS, URGENT_SECONDS, WARNING_SECONDS

Urgency = Literal["normal", "warning", "urgent"]


def format_time(seconds: int) -> str:
    """Render a countdown as MM:SS. Minutes are not wrapped at the hour."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def calculate_progress(seconds: float, total: int = COUNTDOWN_SECONDS) -> float:
    """Percentage of the countdown still remaining, clamped to [0, 100]."""
    if seconds <= 0:
        return 0.0
    if seconds >= total:
        return 100.0
    return 100.0 * seconds / total


def urgency(seconds: int) -> Urgency:
    # Same thresholds the firmware uses for its warning LED
    if seconds <= URGENT_SECONDS:
        return "urgent"
    if seconds <= WARNING_SECONDS:
        return "warning"
    return "normal"
