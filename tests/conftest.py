"""Shared fixtures for ghsponsors tests."""

import io
from unittest.mock import patch

import pytest

from ghsponsors.core.terminal import Terminal

ENV_VARS = [
    "GH_HOST",
    "GH_TOKEN",
    "GITHUB_TOKEN",
    "GH_ENTERPRISE_TOKEN",
    "GITHUB_ENTERPRISE_TOKEN",
    "GH_TIMEOUT",
    "GHSPONSORS_LIMIT",
    "GH_FORCE_TTY",
    "NO_COLOR",
]


class FakeClient:
    """Records queries and answers them with a canned ``data`` payload."""

    def __init__(self, data=None, error=None):
        self.data = data if data is not None else {}
        self.error = error
        self.calls = []

    def query(self, name, query, variables=None):
        self.calls.append((name, query, variables))
        if self.error is not None:
            raise self.error
        return self.data


def sponsors_data(*nodes):
    """Build a ``data`` payload holding the given sponsor nodes."""
    return {"user": {"sponsors": {"edges": [{"node": n} for n in nodes]}}}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment, .env file and gh login out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("ghsponsors.core.config.load_dotenv"), \
            patch("ghsponsors.core.config.subprocess.run", side_effect=FileNotFoundError("gh")):
        yield


@pytest.fixture
def make_terminal():
    def _make(tty=False, stdin=""):
        return Terminal(
            stdin=io.StringIO(stdin),
            stdout=io.StringIO(),
            stderr=io.StringIO(),
            is_tty=tty,
            width=80,
            color=False,
        )
    return _make


@pytest.fixture
def default_data():
    return sponsors_data(
        {"__typename": "User", "login": "foo", "name": "Foo"},
        {"__typename": "User", "login": "bar", "name": "Bar"},
    )


@pytest.fixture
def missing_config(tmp_path):
    return str(tmp_path / "missing.toml")
