"""Shared fixtures for CLI tests."""

import json

import pytest

from completion_guide import cli


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch):
    """Keep the CLI from reconfiguring loguru or sending analytics."""
    monkeypatch.setattr(cli, "setup_logger", lambda **kwargs: None)
    monkeypatch.setattr(cli.settings, "xapi_endpoint", "")


@pytest.fixture
def catalog_file(tmp_path):
    """Four 30-minute tasks in module 1."""
    path = tmp_path / "tasks.json"
    records = [
        {"id": i, "module": 1, "unit": "Foundations", "page": str(i), "activity_type": "read", "weight": 30}
        for i in range(1, 5)
    ]
    path.write_text(json.dumps({"Tasks": records}), encoding="utf-8")
    return path


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state.json"
