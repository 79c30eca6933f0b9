from datetime import datetime, timedelta, timezone

import pytest

from epic_free_games.utils.timezones import FALLBACK_TIMEZONE, resolve_timezone

REFERENCE = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def _offset(tz) -> timedelta:
    return REFERENCE.astimezone(tz).utcoffset()


def test_iana_name_resolves_to_zone():
    tz = resolve_timezone("America/New_York")
    assert _offset(tz) == timedelta(hours=-5)


def test_utc_name_resolves_to_zero_offset():
    assert _offset(resolve_timezone("UTC")) == timedelta(0)


def test_empty_string_is_utc():
    assert _offset(resolve_timezone("")) == timedelta(0)


@pytest.mark.parametrize("name, hours", [
    ("UTC+3", 3),
    ("UTC-5", -5),
    ("GMT+10", 10),
    ("UTC+0", 0),
])
def test_utc_gmt_offsets_become_fixed_zones(name, hours):
    tz = resolve_timezone(name)
    assert _offset(tz) == timedelta(hours=hours)
    assert tz.tzname(None) == name


@pytest.mark.parametrize("name", ["Mars/Phobos", "not a zone", "UTC+3:30", "UTC+5:30", "GMTfoo"])
def test_unrecognized_names_fall_back_to_utc_plus_8(name):
    tz = resolve_timezone(name)
    assert tz is FALLBACK_TIMEZONE
    assert _offset(tz) == timedelta(hours=8)
    assert tz.tzname(None) == "UTC+8"


def test_out_of_range_offset_falls_back():
    assert resolve_timezone("UTC+30") is FALLBACK_TIMEZONE
