"""Tests for application settings."""

import os
from pathlib import Path
from typing import Any

import pytest
from mpdsonic_api.settings import Settings
from pydantic import ValidationError

TEST_MUSIC = Path("/srv/music")


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from .env file and shell environment."""
    for key in list(os.environ.keys()):
        if key.startswith("MPDSONIC_"):
            monkeypatch.delenv(key, raising=False)
    # Change to temp dir so Settings won't find .env file
    monkeypatch.chdir(tmp_path)


def _create_settings(**kwargs: Any) -> Settings:
    """Helper to create Settings with defaults for required fields."""
    defaults: dict[str, Any] = {
        "user": "admin",
        "password": "secret",
        "music_directory": TEST_MUSIC,
    }
    defaults.update(kwargs)
    return Settings(**defaults)


class TestLogLevel:
    """Tests for LogLevel type validation."""

    @pytest.mark.parametrize(
        ("input_level", "expected"),
        [("debug", "DEBUG"), ("Info", "INFO"), ("WARNING", "WARNING")],
    )
    def test_case_insensitive(self, input_level: str, expected: str) -> None:
        """Should normalize log levels to uppercase."""
        assert _create_settings(log_level=input_level).log_level == expected

    def test_rejects_unknown_level(self) -> None:
        """Should reject unknown log levels."""
        with pytest.raises(ValidationError):
            _create_settings(log_level="verbose")


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self) -> None:
        """Should apply documented defaults."""
        settings = _create_settings()

        assert settings.mpd_host == "localhost"
        assert settings.mpd_port == 6600
        assert settings.mpd_password is None
        assert settings.mpd_timeout == 10.0
        assert settings.keepalive_seconds == 0
        assert settings.host == "0.0.0.0"
        assert settings.port == 4040
        assert settings.verbose is False
        assert settings.log_level == "INFO"


class TestRequiredFields:
    """Tests for required configuration."""

    @pytest.mark.parametrize("missing", ["user", "password", "music_directory"])
    def test_required(self, missing: str) -> None:
        """Should refuse to start without credentials and music directory."""
        values: dict[str, Any] = {
            "user": "admin",
            "password": "secret",
            "music_directory": TEST_MUSIC,
        }
        del values[missing]

        with pytest.raises(ValidationError):
            Settings(**values)

    def test_empty_password(self) -> None:
        """Should reject an empty password."""
        with pytest.raises(ValidationError):
            _create_settings(password="")


class TestEnvironment:
    """Tests for loading from environment variables."""

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read MPDSONIC_* variables."""
        monkeypatch.setenv("MPDSONIC_USER", "env-user")
        monkeypatch.setenv("MPDSONIC_PASSWORD", "env-pass")
        monkeypatch.setenv("MPDSONIC_MUSIC_DIRECTORY", "/data/music")
        monkeypatch.setenv("MPDSONIC_MPD_HOST", "/run/mpd/socket")
        monkeypatch.setenv("MPDSONIC_KEEPALIVE_SECONDS", "30")

        settings = Settings()  # type: ignore[call-arg]

        assert settings.user == "env-user"
        assert settings.music_directory == Path("/data/music")
        assert settings.mpd_host == "/run/mpd/socket"
        assert settings.keepalive_seconds == 30

    def test_reads_env_file(self, tmp_path: Path) -> None:
        """Should read a .env file in the working directory."""
        (tmp_path / ".env").write_text(
            "MPDSONIC_USER=file-user\n"
            "MPDSONIC_PASSWORD=file-pass\n"
            "MPDSONIC_MUSIC_DIRECTORY=/music\n"
            "MPDSONIC_PORT=4533\n"
        )

        settings = Settings()  # type: ignore[call-arg]

        assert settings.user == "file-user"
        assert settings.port == 4533

    def test_negative_keepalive(self) -> None:
        """Should reject a negative keepalive interval."""
        with pytest.raises(ValidationError):
            _create_settings(keepalive_seconds=-1)
