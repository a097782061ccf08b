"""Tests for the JSON settings store."""

import json

from intervaltrainer.settings import (
    Settings, load_settings, save_settings, settings_path, SETTINGS_PATH,
)


class TestSettingsDefaults:
    def test_workout_defaults(self):
        s = Settings()
        assert (s.rounds, s.work_duration, s.rest_duration) == (6, 4, 8)

    def test_feedback_defaults(self):
        s = Settings()
        assert s.sound_enabled is True
        assert s.vibration_enabled is True
        assert s.work_vibration_count == 1
        assert s.rest_vibration_count == 1
        assert s.sound_volume == 70

    def test_color_defaults(self):
        s = Settings()
        assert s.work_color_hex == "#FF0000"
        assert s.rest_color_hex == "#00FF00"


class TestSettingsPersistence:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "settings.json"
        save_settings(Settings(rounds=10, work_duration=45), path)
        loaded = load_settings(path)
        assert loaded.rounds == 10
        assert loaded.work_duration == 45

    def test_env_var_selects_file(self, isolated_settings):
        assert settings_path() == isolated_settings
        save_settings(Settings(rest_duration=99))
        assert isolated_settings.exists()
        assert load_settings().rest_duration == 99

    def test_default_path_without_env(self, monkeypatch):
        monkeypatch.delenv("INTERVALTRAINER_SETTINGS", raising=False)
        assert settings_path() == SETTINGS_PATH

    def test_missing_file_returns_defaults(self, tmp_path):
        s = load_settings(tmp_path / "nonexistent.json")
        assert s.rounds == 6

    def test_invalid_json_returns_defaults(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text("NOT VALID JSON", encoding="utf-8")
        s = load_settings(path)
        assert s.rounds == 6
        assert "ignoring unreadable settings" in caplog.text

    def test_non_object_json_returns_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings(path).rounds == 6

    def test_extra_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        data = {"rounds": 12, "unknown_future_key": True}
        path.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings(path)
        assert s.rounds == 12
        assert not hasattr(s, "unknown_future_key")

    def test_save_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "deeper" / "settings.json"
        save_settings(Settings(), path)
        assert json.loads(path.read_text(encoding="utf-8"))["rounds"] == 6
