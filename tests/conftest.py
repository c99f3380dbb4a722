# Copyright (c) Syntropy Systems
"""Pytest fixtures for jenkins_api tests."""

import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

SERVER_URL = "http://jenkins.local"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_env(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no config file and no JENKINS_* env."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("HOME", str(temp_dir / "home"))
    for var in ("JENKINS_URL", "JENKINS_USER", "JENKINS_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    return temp_dir


@pytest.fixture
def git_change_set_payload() -> dict[str, Any]:
    """A change set entry recorded by the git plugin."""
    return {
        "_class": "hudson.plugins.git.GitChangeSet",
        "affectedPaths": ["src/app.py"],
        "commitId": "4f2a9c1",
        "timestamp": 1700000000000,
        "author": {
            "absoluteUrl": f"{SERVER_URL}/user/alice",
            "fullName": "Alice",
        },
        "authorEmail": "alice@example.com",
        "comment": "Fix the parser\n",
        "date": "2023-11-14 22:13:20 +0000",
        "id": "4f2a9c1",
        "msg": "Fix the parser",
        "paths": [{"editType": "edit", "file": "src/app.py"}],
    }


@pytest.fixture
def freestyle_payload(git_change_set_payload: dict[str, Any]) -> dict[str, Any]:
    """A finished freestyle build with one git change."""
    return {
        "_class": "hudson.model.FreeStyleBuild",
        "actions": [
            {
                "_class": "hudson.model.CauseAction",
                "causes": [{"shortDescription": "Started by user Alice"}],
            },
            {},
        ],
        "artifacts": [
            {
                "displayPath": "app.tar.gz",
                "fileName": "app.tar.gz",
                "relativePath": "dist/app.tar.gz",
            },
        ],
        "building": False,
        "description": None,
        "displayName": "#12",
        "duration": 42000,
        "estimatedDuration": 40000,
        "fullDisplayName": "app #12",
        "id": "12",
        "keepLog": False,
        "number": 12,
        "queueId": 7,
        "result": "SUCCESS",
        "timestamp": 1700000000000,
        "url": f"{SERVER_URL}/job/app/12/",
        "builtOn": "agent-1",
        "changeSet": {
            "_class": "hudson.plugins.git.GitChangeSetList",
            "kind": "git",
            "items": [git_change_set_payload],
        },
    }


@pytest.fixture
def matrix_payload() -> dict[str, Any]:
    """A multi-configuration build with two runs and a culprit."""
    return {
        "_class": "hudson.matrix.MatrixBuild",
        "actions": [],
        "building": False,
        "displayName": "#3",
        "duration": 1000,
        "fullDisplayName": "matrix #3",
        "id": "3",
        "number": 3,
        "result": "UNSTABLE",
        "timestamp": 1700000000000,
        "url": f"{SERVER_URL}/job/matrix/3/",
        "changeSet": {
            "_class": "hudson.scm.EmptyChangeLogSet",
            "kind": None,
            "items": [],
        },
        "runs": [
            {"number": 3, "url": f"{SERVER_URL}/job/matrix/os=linux/3/"},
            {"number": 3, "url": f"{SERVER_URL}/job/matrix/os=windows/3/"},
        ],
        "culprits": [
            {"absoluteUrl": f"{SERVER_URL}/user/bob", "fullName": "Bob"},
        ],
    }


@pytest.fixture
def unknown_build_payload() -> dict[str, Any]:
    """A build of a job type no shape models."""
    return {
        "_class": "some.future.PluginBuild",
        "url": f"{SERVER_URL}/job/future/2/",
        "number": 2,
        "pluginState": {"stage": "deploy"},
    }
