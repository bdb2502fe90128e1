"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from sermon_art.config import DEFAULT_JPEG_QUALITY, is_debug, load_settings

ENV_VARS = (
    "SERMON_ART_PUBLIC_ROOT",
    "SERMON_ART_OUTPUT_DIR",
    "SERMON_ART_JPEG_QUALITY",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # set first so teardown also removes values a .env file loaded
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


class TestIsDebug:

    @pytest.mark.parametrize("value,expected", [
        ("1", True),
        ("true", True),
        ("TRUE", True),
        ("0", False),
        ("yes", False),
    ])
    def test_values(self, monkeypatch, value, expected):
        monkeypatch.setenv("DEBUG", value)
        assert is_debug() is expected

    def test_unset(self):
        assert is_debug() is False


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings()
        assert settings.public_root == Path("public")
        assert settings.output_dir == Path("output")
        assert settings.jpeg_quality == DEFAULT_JPEG_QUALITY
        assert settings.debug is False

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SERMON_ART_PUBLIC_ROOT", "/srv/public")
        monkeypatch.setenv("SERMON_ART_OUTPUT_DIR", "exports")
        monkeypatch.setenv("SERMON_ART_JPEG_QUALITY", "80")
        monkeypatch.setenv("DEBUG", "1")
        settings = load_settings()
        assert settings.public_root == Path("/srv/public")
        assert settings.output_dir == Path("exports")
        assert settings.jpeg_quality == 80
        assert settings.debug is True

    @pytest.mark.parametrize("raw,expected", [
        ("200", 95),
        ("0", 1),
        ("high", DEFAULT_JPEG_QUALITY),
    ])
    def test_jpeg_quality_clamped(self, monkeypatch, raw, expected):
        monkeypatch.setenv("SERMON_ART_JPEG_QUALITY", raw)
        assert load_settings().jpeg_quality == expected

    def test_env_file(self, tmp_path):
        env_file = tmp_path / "art.env"
        env_file.write_text("SERMON_ART_OUTPUT_DIR=from-file\n", encoding="utf-8")
        assert load_settings(env_file).output_dir == Path("from-file")

    def test_real_environment_wins_over_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("SERMON_ART_OUTPUT_DIR=from-file\n", encoding="utf-8")
        monkeypatch.setenv("SERMON_ART_OUTPUT_DIR", "from-env")
        assert load_settings(env_file).output_dir == Path("from-env")
