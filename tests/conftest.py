from __future__ import annotations

import os

import pytest

from ecs_run_task import log


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Fake credentials and a clean Actions environment for every test."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for key in list(os.environ):
        if key.startswith("INPUT_") or key in ("GITHUB_ACTIONS", "GITHUB_WORKSPACE", "RUNNER_DEBUG"):
            monkeypatch.delenv(key, raising=False)
    yield
    log.configure(verbose=False)
