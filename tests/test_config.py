"""Tests for settings loading."""

import logging

from roomtalk.config import RoomtalkSettings, load_settings


class TestSettings:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        settings = RoomtalkSettings()
        assert settings.base_url == "https://localhost/"
        assert settings.max_message_length == 300
        assert settings.max_rooms == 10
        assert settings.max_files == 5
        assert settings.max_motd_length == 500
        assert settings.room_lookup_url is None
        assert settings.resolver_timeout is None

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ROOMTALK_MAX_ROOMS", "3")
        monkeypatch.setenv("ROOMTALK_ROOM_LOOKUP_URL", "https://files.example/api/rooms/{key}")
        settings = RoomtalkSettings()
        assert settings.max_rooms == 3
        assert settings.room_lookup_url == "https://files.example/api/rooms/{key}"

    def test_env_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("ROOMTALK_MAX_FILES=2\n")
        assert RoomtalkSettings().max_files == 2

    def test_insecure_base_warns(self, monkeypatch, tmp_path, caplog):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ROOMTALK_BASE_URL", "http://chat.example/")
        with caplog.at_level(logging.WARNING, logger="roomtalk.config"):
            settings = load_settings()
        assert settings.base_url == "http://chat.example/"
        assert "not https" in caplog.text
