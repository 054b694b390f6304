import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttling history and token activity live in the cache
    cache.clear()
    yield
    cache.clear()
