"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and
provides a stand-in for the psycopg2 connection so no database is needed.
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

# Add project root to sys.path so we can import db, repositories, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def fake_db(monkeypatch):
    """
    Fake connection/cursor pair.

    Call ``fake_db.patch(module)`` to route a repository module's
    get_connection/release_connection to the fake.
    """
    conn = MagicMock(name="connection")
    cur = MagicMock(name="cursor")
    conn.cursor.return_value.__enter__.return_value = cur
    released = []

    def patch(module):
        monkeypatch.setattr(module, "get_connection", lambda: conn)
        monkeypatch.setattr(module, "release_connection", released.append)

    return SimpleNamespace(conn=conn, cur=cur, released=released, patch=patch)


@pytest.fixture
def feed_input(monkeypatch):
    """Replace ``input`` with a scripted sequence of answers."""
    def feed(*answers):
        remaining = list(answers)

        def fake_input(prompt=""):
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)

    return feed


@pytest.fixture(autouse=True)
def _clear_login_failures():
    from security import login_limiter
    login_limiter._failed_attempts.clear()
    yield
    login_limiter._failed_attempts.clear()
