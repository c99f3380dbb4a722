# Copyright (c) Syntropy Systems
"""Configuration management for jenkins_api."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import cast

import yaml

CONFIG_DIR_NAME = ".jenkins-api"
CONFIG_FILE_NAME = "config.yaml"


@dataclass
class JenkinsConfig:
    """Configuration for jenkins_api."""

    # Base URL of the Jenkins server
    url: str | None = None

    # Basic auth user and API token
    user: str | None = None
    token: str | None = None

    # Request timeout (seconds)
    timeout: float = 30.0

    # Log level and renderer (console or json)
    log_level: str = "WARNING"
    log_format: str = "console"


def find_config_dir(start_path: Path | None = None) -> Path | None:
    """Find the nearest .jenkins-api directory by walking up from start_path.

    Returns None if no .jenkins-api directory is found.
    """
    start = (start_path or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_DIR_NAME
        if candidate.is_dir():
            return candidate
    return None


def get_global_config_dir() -> Path:
    """Get the global config directory (~/.jenkins-api)."""
    return Path.home() / CONFIG_DIR_NAME


def load_config(config_dir: Path | None = None) -> JenkinsConfig:
    """Load configuration from .jenkins-api/config.yaml or defaults.

    Looks for config in:
    1. Provided config_dir
    2. Nearest .jenkins-api directory walking up
    3. ~/.jenkins-api/config.yaml
    4. Defaults

    JENKINS_URL, JENKINS_USER and JENKINS_TOKEN override the file.
    """
    config = JenkinsConfig()

    # Find config file
    config_path = None

    if config_dir is not None:
        config_path = config_dir / CONFIG_FILE_NAME
    else:
        found_dir = find_config_dir()
        if found_dir is not None:
            config_path = found_dir / CONFIG_FILE_NAME
        else:
            global_config = get_global_config_dir() / CONFIG_FILE_NAME
            if global_config.exists():
                config_path = global_config

    if config_path is not None and config_path.exists():
        with config_path.open() as f:
            data = cast("dict[str, object]", yaml.safe_load(f) or {})

        for key in ("url", "user", "token", "log_level", "log_format"):
            value = data.get(key)
            if isinstance(value, str):
                setattr(config, key, value)
        timeout = data.get("timeout")
        if isinstance(timeout, (int, float)) and not isinstance(timeout, bool):
            config.timeout = float(timeout)

    for key, env_var in (
        ("url", "JENKINS_URL"),
        ("user", "JENKINS_USER"),
        ("token", "JENKINS_TOKEN"),
    ):
        value = os.environ.get(env_var)
        if value:
            setattr(config, key, value)

    return config
