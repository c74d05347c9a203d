# tests/conftest.py
import pytest
from fakes import FakeProbe, FakeProvider, FakeStore

from uiauto_appstore.client import AppStore
from uiauto_appstore.config import TimeConfig
from uiauto_appstore.context import ActionContextManager
from uiauto_appstore.session import StoreSession
from uiauto_appstore.timings import TIMEOUT_FIELDS


@pytest.fixture(autouse=True)
def short_timeouts():
    """Shrink every wait budget so timeouts are exercised in milliseconds."""
    short = {name: {"timeout": 0.3, "interval": 0.01} for name in TIMEOUT_FIELDS}
    with TimeConfig.override(**short) as config:
        yield config
    ActionContextManager.clear()


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def provider(store):
    return FakeProvider(store)


@pytest.fixture
def session(store, provider):
    return StoreSession(provider, probe=FakeProbe(store))


@pytest.fixture
def appstore(session):
    return AppStore(session)


@pytest.fixture
def signed_in_store(store):
    store.user = "alice@example.com"
    return store
