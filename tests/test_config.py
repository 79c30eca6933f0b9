import pytest

from epic_free_games.config import get_env_bool, get_env_int, get_env_str, parse_bool


@pytest.mark.parametrize("value, expected", [
    ("1", True), ("t", True), ("T", True), ("TRUE", True), ("true", True), ("True", True),
    ("0", False), ("f", False), ("F", False), ("FALSE", False), ("false", False), ("False", False),
])
def test_parse_bool_accepts_common_spellings(value, expected):
    assert parse_bool(value) is expected


@pytest.mark.parametrize("value", ["sure", "yes", "no", "on", "off", "y", "tRuE", " true"])
def test_parse_bool_rejects_other_spellings(value):
    with pytest.raises(ValueError):
        parse_bool(value)


def test_env_str_empty_uses_default(monkeypatch):
    monkeypatch.setenv("EPIC_TEST_COUNTRY", "")
    assert get_env_str("EPIC_TEST_COUNTRY", "PH") == "PH"
    monkeypatch.setenv("EPIC_TEST_COUNTRY", "US")
    assert get_env_str("EPIC_TEST_COUNTRY", "PH") == "US"


def test_env_int_parses_and_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("EPIC_TEST_PORT", "9000")
    assert get_env_int("EPIC_TEST_PORT", 8080) == 9000
    monkeypatch.setenv("EPIC_TEST_PORT", "ninety")
    assert get_env_int("EPIC_TEST_PORT", 8080) == 8080
    assert "not a valid integer" in caplog.text


def test_env_bool_parses_and_falls_back(monkeypatch):
    monkeypatch.delenv("EPIC_TEST_CRON", raising=False)
    assert get_env_bool("EPIC_TEST_CRON", False) is False
    monkeypatch.setenv("EPIC_TEST_CRON", "true")
    assert get_env_bool("EPIC_TEST_CRON", False) is True
    monkeypatch.setenv("EPIC_TEST_CRON", "perhaps")
    assert get_env_bool("EPIC_TEST_CRON", True) is True
