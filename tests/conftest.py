"""Pytest configuration and fixtures."""
import os
import sys
from datetime import datetime, timezone

import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gh_archiver.domain.repository import Repository

BASE_URL = "https://api.github.test"


def repo_payload(name, archived=False, pushed_at="2023-01-01T00:00:00Z", owner="alice"):
    return {
        "name": name,
        "full_name": f"{owner}/{name}",
        "pushed_at": pushed_at,
        "archived": archived,
    }


def make_repository(name, archived=False):
    return Repository(
        name=name,
        full_name=f"alice/{name}",
        pushed_at=datetime(2023, 1, 1, tzinfo=timezone.utc),
        archived=archived,
    )


@pytest.fixture
def authenticated(requests_mock):
    """Identity endpoint answering as alice."""
    requests_mock.get(f"{BASE_URL}/user", json={"login": "alice"})
    return requests_mock
