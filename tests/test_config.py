# Copyright (c) Syntropy Systems
"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from jenkins_api.config import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    JenkinsConfig,
    find_config_dir,
    load_config,
)


def write_config(directory: Path, text: str) -> Path:
    """Write a config.yaml under ``directory/.jenkins-api``."""
    config_dir = directory / CONFIG_DIR_NAME
    config_dir.mkdir(parents=True)
    (config_dir / CONFIG_FILE_NAME).write_text(text)
    return config_dir


class TestFindConfigDir:
    """Tests for locating the config directory."""

    def test_found_in_parent(self, isolated_env: Path) -> None:
        """Test that the nearest directory walking up is found."""
        config_dir = write_config(isolated_env, "url: http://ci\n")
        nested = isolated_env / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_dir(nested) == config_dir.resolve()

    def test_found_in_start_dir(self, isolated_env: Path) -> None:
        """Test that the start directory itself is checked first."""
        config_dir = write_config(isolated_env, "url: http://ci\n")

        assert find_config_dir(isolated_env) == config_dir.resolve()

    def test_not_found(self, isolated_env: Path) -> None:
        """Test that None is returned when there is no config directory."""
        assert find_config_dir(isolated_env) is None


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, isolated_env: Path) -> None:
        """Test defaults without config file or environment."""
        config = load_config()

        assert config == JenkinsConfig()
        assert config.url is None
        assert config.timeout == 30.0
        assert config.log_level == "WARNING"

    def test_project_file(self, isolated_env: Path) -> None:
        """Test values read from the project config file."""
        write_config(
            isolated_env,
            "url: http://ci:8080\n"
            "user: alice\n"
            "token: secret\n"
            "timeout: 5\n"
            "log_level: DEBUG\n"
            "log_format: json\n",
        )

        config = load_config()

        assert config.url == "http://ci:8080"
        assert config.user == "alice"
        assert config.token == "secret"
        assert config.timeout == 5.0
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_global_file(
        self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that ~/.jenkins-api is used when no project config exists."""
        write_config(isolated_env / "home", "url: http://global\n")
        work = isolated_env / "work"
        work.mkdir()
        monkeypatch.chdir(work)

        config = load_config()

        assert config.url == "http://global"

    def test_explicit_dir(self, temp_dir: Path, isolated_env: Path) -> None:
        """Test loading from an explicit directory."""
        config_dir = write_config(temp_dir / "elsewhere", "url: http://explicit\n")

        assert load_config(config_dir).url == "http://explicit"

    def test_invalid_values_ignored(self, isolated_env: Path) -> None:
        """Test that values of the wrong type keep their defaults."""
        write_config(isolated_env, "url: [1, 2]\ntimeout: fast\n")

        config = load_config()

        assert config.url is None
        assert config.timeout == 30.0

    def test_empty_file(self, isolated_env: Path) -> None:
        """Test that an empty config file gives defaults."""
        write_config(isolated_env, "")

        assert load_config() == JenkinsConfig()

    def test_environment_overrides_file(
        self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that JENKINS_* variables win over the file."""
        write_config(isolated_env, "url: http://file\nuser: alice\n")
        monkeypatch.setenv("JENKINS_URL", "http://env")
        monkeypatch.setenv("JENKINS_TOKEN", "t0ken")

        config = load_config()

        assert config.url == "http://env"
        assert config.user == "alice"
        assert config.token == "t0ken"
