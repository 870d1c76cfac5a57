from datetime import datetime, timezone

import pytest

from zoneclock.config.timezones import fallback_subtitle, fallback_title
from zoneclock.utils import formatting
from zoneclock.utils.formatting import compact_time, formatted_hour_label, is_day_hour, short_time
from zoneclock.utils.time_utils import anchor_for, civil_hour, civil_minute, is_recognized_zone

SUMMER_NOON = datetime(2026, 7, 15, 12, 0, tzinfo=timezone.utc)

ZONES = ["Europe/Warsaw", "America/New_York", "Asia/Kolkata", "Australia/Lord_Howe", "Pacific/Chatham", "UTC"]


@pytest.mark.parametrize("zone_id", ZONES)
def test_anchor_reads_back_as_requested_hour(zone_id):
    for hour in range(24):
        anchor = anchor_for(zone_id, hour, SUMMER_NOON)
        assert anchor is not None
        assert civil_hour(zone_id, anchor) == hour
        assert civil_minute(zone_id, anchor) == 0


def test_anchor_uses_civil_date_of_reference_in_zone():
    # 23:30 UTC on July 15 is already July 16 in Tokyo.
    reference = datetime(2026, 7, 15, 23, 30, tzinfo=timezone.utc)
    anchor = anchor_for("Asia/Tokyo", 9, reference)
    assert anchor == datetime(2026, 7, 16, 0, 0, tzinfo=timezone.utc)


def test_anchor_for_unknown_zone_returns_none():
    assert anchor_for("Not/AZone", 9, SUMMER_NOON) is None
    assert anchor_for("", 9, SUMMER_NOON) is None


def test_anchor_rejects_hour_out_of_range():
    assert anchor_for("Europe/Warsaw", 24, SUMMER_NOON) is None
    assert anchor_for("Europe/Warsaw", -1, SUMMER_NOON) is None


def test_spring_forward_gap_resolves_to_transition_instant():
    # 02:00 does not exist in New York on 2026-03-08; the clocks jump to 03:00 EDT at 07:00 UTC.
    reference = datetime(2026, 3, 8, 15, 0, tzinfo=timezone.utc)
    anchor = anchor_for("America/New_York", 2, reference)
    assert anchor == datetime(2026, 3, 8, 7, 0, tzinfo=timezone.utc)
    assert civil_hour("America/New_York", anchor) == 3


def test_fall_back_overlap_resolves_to_earlier_instant():
    # 01:00 happens twice in New York on 2026-11-01; the EDT occurrence comes first.
    reference = datetime(2026, 11, 1, 15, 0, tzinfo=timezone.utc)
    anchor = anchor_for("America/New_York", 1, reference)
    assert anchor == datetime(2026, 11, 1, 5, 0, tzinfo=timezone.utc)
    assert civil_hour("America/New_York", anchor) == 1


def test_naive_reference_is_treated_as_utc():
    naive = datetime(2026, 7, 15, 12, 0)
    assert civil_hour("Europe/Warsaw", naive) == 14


def test_civil_hour_for_unknown_zone_is_zero():
    assert civil_hour("Mars/Olympus_Mons", SUMMER_NOON) == 0


def test_is_recognized_zone():
    assert is_recognized_zone("Europe/Warsaw")
    assert not is_recognized_zone("Not/AZone")
    assert not is_recognized_zone("   ")
    assert not is_recognized_zone(None)


def test_fallback_labels_from_zone_identifier():
    assert fallback_title("America/Argentina/Buenos_Aires") == "Buenos Aires"
    assert fallback_subtitle("America/Argentina/Buenos_Aires") == "America / Argentina"
    assert fallback_title("UTC") == "UTC"
    assert fallback_subtitle("UTC") == ""


def test_time_formatting_in_both_clock_styles():
    instant = datetime(2026, 7, 15, 7, 5, tzinfo=timezone.utc)  # 09:05 in Warsaw
    assert short_time("Europe/Warsaw", instant, uses_24_hour_clock=True) == "09:05"
    assert short_time("Europe/Warsaw", instant, uses_24_hour_clock=False) == "9:05 AM"
    assert compact_time("Europe/Warsaw", instant, uses_24_hour_clock=False) == "9:05AM"
    assert compact_time("America/New_York", instant, uses_24_hour_clock=False) == "3:05AM"


def test_hour_labels():
    assert formatted_hour_label(9, uses_24_hour_clock=True) == "09"
    assert formatted_hour_label(0, uses_24_hour_clock=False) == "12  AM"
    assert formatted_hour_label(9, uses_24_hour_clock=False) == "9  AM"
    assert formatted_hour_label(12, uses_24_hour_clock=False) == "12 PM"
    assert formatted_hour_label(23, uses_24_hour_clock=False) == "11 PM"


def test_day_hours():
    assert is_day_hour(6)
    assert is_day_hour(21)
    assert not is_day_hour(5)
    assert not is_day_hour(22)


def test_locale_clock_detection_runs_once_and_restores_lc_time(monkeypatch):
    calls = []

    def fake_setlocale(category, value=None):
        calls.append(value)
        return "C" if value is None else value

    monkeypatch.setattr(formatting.locale, "setlocale", fake_setlocale)
    monkeypatch.setattr(formatting.locale, "nl_langinfo", lambda item: "%I:%M:%S %p", raising=False)
    formatting.locale_uses_24_hour_clock.cache_clear()
    try:
        assert formatting.locale_uses_24_hour_clock() is False
        assert formatting.locale_uses_24_hour_clock() is False
    finally:
        formatting.locale_uses_24_hour_clock.cache_clear()
    assert calls == [None, "", "C"]
