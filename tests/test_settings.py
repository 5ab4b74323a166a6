import pytest

from config.settings import ApiSettings, ExtractionSettings, LoggingSettings


def test_extraction_defaults():
    settings = ExtractionSettings()

    assert settings.room_max_length == 15
    assert settings.problem_max_length == 60
    assert settings.critical_lab_display_limit == 3
    assert settings.acuity_problem_threshold == 4
    assert settings.key_lab_limit == 2


def test_extraction_env_override(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SIGNOUT_CRITICAL_LAB_DISPLAY_LIMIT", "5")
    monkeypatch.setenv("SIGNOUT_ROOM_MAX_LENGTH", "20")

    settings = ExtractionSettings()

    assert settings.critical_lab_display_limit == 5
    assert settings.room_max_length == 20


def test_api_env_override(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SIGNOUT_API_MAX_DOCUMENT_CHARS", "1000")
    monkeypatch.setenv("SIGNOUT_API_CORS_ORIGINS", '["https://census.example.org"]')

    settings = ApiSettings()

    assert settings.max_document_chars == 1000
    assert settings.cors_origins == ["https://census.example.org"]


def test_logging_level_is_normalized(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SIGNOUT_LOG_LEVEL", " debug ")
    monkeypatch.setenv("SIGNOUT_LOG_STRUCTURED", "false")

    settings = LoggingSettings()

    assert settings.level == "DEBUG"
    assert settings.structured is False
