from __future__ import annotations

import pytest

from timer_relay.formatting import calculate_progress, format_time, urgency


@pytest.mark.unit
@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00"), (5, "00:05"), (65, "01:05"), (125, "02:05"), (2400, "40:00"), (3599, "59:59")],
)
def test_format_time_zero_pads_minutes_and_seconds(seconds: int, expected: str):
    assert format_time(seconds) == expected


@pytest.mark.unit
def test_format_time_does_not_wrap_at_the_hour_and_floors_negatives():
    assert format_time(3600) == "60:00"
    assert format_time(-7) == "00:00"


@pytest.mark.unit
def test_format_time_always_mm_ss_below_one_hour():
    for s in range(0, 3600, 7):
        text = format_time(s)
        mm, ss = text.split(":")
        assert len(mm) == 2 and len(ss) == 2
        assert int(mm) * 60 + int(ss) == s


@pytest.mark.unit
def test_calculate_progress_bounds():
    assert calculate_progress(0) == 0.0
    assert calculate_progress(-30) == 0.0
    assert calculate_progress(2400) == 100.0
    assert calculate_progress(9999) == 100.0
    assert calculate_progress(1200) == pytest.approx(50.0)
    assert calculate_progress(125) == pytest.approx(100 * 125 / 2400)


@pytest.mark.unit
def test_calculate_progress_is_monotonic():
    values = [calculate_progress(s) for s in range(-10, 2500)]
    assert all(a <= b for a, b in zip(values, values[1:]))
    assert all(0.0 <= v <= 100.0 for v in values)


@pytest.mark.unit
def test_urgency_thresholds_follow_firmware_led():
    assert urgency(2400) == "normal"
    assert urgency(181) == "normal"
    assert urgency(180) == "warning"
    assert urgency(31) == "warning"
    assert urgency(30) == "urgent"
    assert urgency(0) == "urgent"
