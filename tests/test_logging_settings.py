"""Tests for logging settings parsing."""

from pathlib import Path

from taskmanager.logging_settings import parse_logging_settings


def test_parse_logging_settings_with_retention(tmp_path: Path) -> None:
    """Test parsing every supported key."""
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text(
        """
# Task manager logging
terminal = warning
file = debug
retention_hours = 72
"""
    )

    settings = parse_logging_settings(config_file)

    assert settings.terminal_level == 30  # WARNING
    assert settings.file_level == 10  # DEBUG
    assert settings.retention_hours == 72


def test_parse_logging_settings_defaults(tmp_path: Path) -> None:
    """Test default values when config file doesn't exist."""
    settings = parse_logging_settings(tmp_path / "nonexistent.conf")

    assert settings.terminal_level == 20  # INFO
    assert settings.file_level is None  # file logging off
    assert settings.retention_hours == 48


def test_parse_logging_settings_unknown_level_falls_back(tmp_path: Path) -> None:
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text("terminal = loud\nfile = chatty\n")

    settings = parse_logging_settings(config_file)

    assert settings.terminal_level == 20
    assert settings.file_level is None


def test_parse_logging_settings_off_and_noise(tmp_path: Path) -> None:
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text(
        """
terminal = OFF
not a setting
colour = blue
retention_hours = -10
"""
    )

    settings = parse_logging_settings(config_file)

    assert settings.terminal_level is None
    assert settings.retention_hours == 0  # Clamped to 0


def test_parse_logging_settings_invalid_retention(tmp_path: Path) -> None:
    """Test parsing with invalid retention value falls back to default."""
    config_file = tmp_path / "logging_settings.conf"
    config_file.write_text("retention_hours = invalid\n")

    settings = parse_logging_settings(config_file)

    assert settings.retention_hours == 48
