"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from lentgreen.config import (
    AppSettings,
    ReminderSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:

    def test_app_defaults(self):
        settings = AppSettings(_env_file=None)
        assert settings.default_currency == "₽"
        assert settings.seed_demo_data is True
        assert settings.recent_people_window == 50
        assert settings.due_soon_days == 7

    def test_reminders_fire_day_before_at_nine(self):
        settings = ReminderSettings()
        assert (settings.hour, settings.minute, settings.days_before) == (9, 0, 1)
        assert settings.enabled is False

    def test_storage_keys(self):
        settings = StorageSettings()
        assert (settings.debts_key, settings.people_key, settings.templates_key) == (
            "lentgreen_debts",
            "lentgreen_people",
            "lentgreen_templates",
        )


class TestEnvironment:

    def test_prefixed_variables_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LENTGREEN_DEFAULT_CURRENCY", "€")
        monkeypatch.setenv("LENTGREEN_REMINDERS_ENABLED", "true")
        monkeypatch.setenv("LENTGREEN_STORAGE_DATA_DIR", str(tmp_path))

        settings = get_settings()
        assert settings.app.default_currency == "€"
        assert settings.reminders.enabled is True
        assert settings.storage.data_dir == tmp_path

    def test_log_level_is_normalized(self):
        assert AppSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_is_rejected(self):
        with pytest.raises(ValidationError):
            AppSettings(log_level="loud")

    def test_unknown_backend_is_rejected(self):
        with pytest.raises(ValidationError):
            StorageSettings(backend="sqlite")

    def test_validate_all_settings_reports_bad_section(self, monkeypatch):
        monkeypatch.setenv("LENTGREEN_REMINDERS_HOUR", "25")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["reminders"] is False
        assert "reminders_error" in results
