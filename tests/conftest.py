from collections.abc import Iterator

import pytest

from righttypes.config import KeyPolicy, settings

# Pytest only picks up fixtures from conftest.py files. Fixtures defined in other
# modules (like tests/seeds.py) are invisible unless we register them here.
pytest_plugins = ["tests.seeds"]


@pytest.fixture(autouse=True)
def default_unknown_keys_policy(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Pin the settings default so RIGHTTYPES_UNKNOWN_KEYS in the environment can't leak in."""
    monkeypatch.setattr(settings, "unknown_keys", KeyPolicy.ALLOW)
    yield
