"""Tests for configuration and the audit logger."""

import pytest
from pathlib import Path

from pydantic import ValidationError

from src.audit import AuditLogger
from src.config import AppSettings, StorageSettings, get_settings, validate_all_settings
from src.models.audit import AuditEventType, AuditSeverity


class TestSettings:

    def test_storage_defaults(self, monkeypatch):
        monkeypatch.delenv("EXPENSE_TRACKER_STORAGE_DATA_DIR", raising=False)
        settings = StorageSettings()
        assert settings.budget_key == "expense-tracker-data"
        assert settings.theme_key == "expense-tracker-theme"
        assert settings.max_bytes is None
        assert settings.data_dir == Path.home() / ".expense_tracker"

    def test_storage_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("EXPENSE_TRACKER_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("EXPENSE_TRACKER_STORAGE_MAX_BYTES", "2048")
        settings = StorageSettings()
        assert settings.data_dir == tmp_path
        assert settings.max_bytes == 2048

    def test_rejects_unsafe_key(self):
        with pytest.raises(ValidationError):
            StorageSettings(budget_key="../data")

    def test_log_level_normalized(self):
        assert AppSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            AppSettings(log_level="chatty")

    def test_app_settings_only_carry_log_level(self):
        assert list(AppSettings.model_fields) == ["log_level"]

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_TRACKER_STORAGE_BUDGET_KEY", "bad key")
        get_settings.cache_clear()
        try:
            results = validate_all_settings()
        finally:
            get_settings.cache_clear()
        assert results["app"] is True
        assert results["storage"] is False
        assert "storage_error" in results


class TestAuditLogger:

    def test_history_is_bounded(self):
        audit = AuditLogger(history_size=3)
        for i in range(5):
            audit.log_budget_set(str(i), str(i + 1))
        assert len(audit.history) == 3
        assert audit.history[-1].details["current"] == "5"

    def test_severity_follows_event(self):
        audit = AuditLogger()
        audit.log_save_failed("expense-tracker-data", "quota")
        audit.log_data_reset(4)
        assert audit.history[0].severity == AuditSeverity.ERROR
        assert audit.history[1].event_type == AuditEventType.DATA_RESET
        assert audit.history[1].severity == AuditSeverity.WARNING
