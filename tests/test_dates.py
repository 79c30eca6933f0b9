from datetime import datetime, timedelta, timezone

from epic_free_games.utils.dates import format_date, parse_timestamp, system_now
from epic_free_games.utils.timezones import resolve_timezone


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_parses_zulu_with_milliseconds(self):
        parsed = parse_timestamp("2025-04-03T15:00:00.000Z")
        assert parsed == datetime(2025, 4, 3, 15, 0, tzinfo=timezone.utc)

    def test_parses_explicit_offset(self):
        parsed = parse_timestamp("2025-04-03T15:00:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_rejects_naive_timestamp(self):
        assert parse_timestamp("2025-04-03T15:00:00") is None

    def test_rejects_garbage(self):
        assert parse_timestamp("next thursday") is None


class TestFormatDate:
    """Tests for format_date."""

    def test_formats_in_utc(self):
        assert format_date("2025-04-03T15:00:00.000Z", resolve_timezone("UTC")) == "2025-04-03 15:00:00 UTC"

    def test_converts_to_fixed_offset_zone(self):
        assert format_date("2025-04-03T15:00:00.000Z", resolve_timezone("UTC+3")) == "2025-04-03 18:00:00 UTC+3"

    def test_converts_to_fallback_zone(self):
        assert format_date("2025-04-03T15:00:00.000Z", resolve_timezone("Mars/Phobos")) == "2025-04-03 23:00:00 UTC+8"

    def test_converts_to_iana_zone_with_abbreviation(self):
        assert format_date("2025-04-03T15:00:00.000Z", resolve_timezone("America/New_York")) == "2025-04-03 11:00:00 EDT"

    def test_unparseable_value_returned_unchanged(self):
        assert format_date("soon", resolve_timezone("UTC")) == "soon"

    def test_empty_value_returned_unchanged(self):
        assert format_date("", resolve_timezone("UTC")) == ""


def test_system_now_is_aware():
    assert system_now().tzinfo is not None
