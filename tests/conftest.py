import pytest

from fondue.config import get_settings


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from FONDUE_* variables in the environment."""
    import os

    for name in list(os.environ):
        if name.startswith("FONDUE_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
