from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass

import pytest


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Re-read settings from the environment for every test.

    Tests that change ACTIONKIT_* variables with monkeypatch see the new values,
    and nothing leaks into the next test.
    """

    from actionkit.settings import reset_settings_for_tests

    reset_settings_for_tests()
    yield
    reset_settings_for_tests()


@dataclass(frozen=True, slots=True)
class User:
    id: str
    email: str


@pytest.fixture()
def mock_user() -> User:
    return User(id="1", email="test@mail.com")
