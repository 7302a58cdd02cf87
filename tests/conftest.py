import pytest

from tests.utils import SoapServer


@pytest.fixture
def server():
    with SoapServer() as srv:
        yield srv


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch):
    """Verbosity comes from the environment; tests must not inherit it."""
    monkeypatch.delenv("SOAPPOST_VERBOSE", raising=False)
