import os

import pytest


@pytest.fixture(scope="session")
def _stockroom_domain(request):
    """Initialize the stockroom domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from stockroom.domain import stockroom

    stockroom.init()
    return stockroom


@pytest.fixture(scope="session", autouse=True)
def setup_db(_stockroom_domain):
    from stockroom.utils.db import drop_db, setup_db

    setup_db(_stockroom_domain)

    yield

    drop_db(_stockroom_domain)


@pytest.fixture
def memory_cache():
    from stockroom.cache.backends import MemoryCache

    return MemoryCache()


@pytest.fixture(autouse=True)
def run_around_tests(_stockroom_domain, memory_cache):
    """Push domain context and a fresh cache before each test, cleanup after."""
    from stockroom.cache.query_cache import configure_query_cache

    configure_query_cache(memory_cache)

    ctx = _stockroom_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
