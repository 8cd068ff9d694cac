# tests/conftest.py

import pytest

from exactwigner import runtime
from exactwigner.cache import CACHES, KINDS, cache_capacity, clear_caches, set_cache_capacity


@pytest.fixture(autouse=True)
def fresh_state():
    """Empty caches and a default runtime for every test; capacities restored afterwards."""
    saved = {kind: cache_capacity(kind) for kind in KINDS}
    token = runtime._current_runtime.set(runtime.Runtime())
    clear_caches()
    yield
    runtime._current_runtime.reset(token)
    for kind, size in saved.items():
        set_cache_capacity(kind, size)
    clear_caches()


@pytest.fixture
def no_cache():
    """Run with every cache disabled."""
    for kind in KINDS:
        set_cache_capacity(kind, 0)
    return CACHES
