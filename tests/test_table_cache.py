"""
Tests for the per-table style cache.
"""

import threading
import time

import pytest

from featurestyle.style.cache import ICONS, NOT_LOADED, STYLES, TableStyleCache

pytestmark = pytest.mark.fast


class CountingLoader:
    """Loader that records how often it ran."""

    def __init__(self, value, delay=0.0):
        self.value = value
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return self.value


def test_loads_once():
    cache = TableStyleCache("roads")
    loader = CountingLoader("styles")

    assert cache.get_or_load(STYLES, loader) == "styles"
    assert cache.get_or_load(STYLES, loader) == "styles"
    assert loader.calls == 1


def test_slots_are_independent():
    cache = TableStyleCache("roads")
    styles, icons = CountingLoader("s"), CountingLoader("i")

    cache.get_or_load(STYLES, styles)
    cache.get_or_load(ICONS, icons)
    cache.clear(STYLES)

    assert cache.get_or_load(STYLES, styles) == "s"
    assert cache.get_or_load(ICONS, icons) == "i"
    assert styles.calls == 2
    assert icons.calls == 1


def test_clear_all():
    cache = TableStyleCache("roads")
    loader = CountingLoader("x")
    cache.get_or_load(STYLES, loader)
    cache.get_or_load(ICONS, loader)

    cache.clear()

    cache.get_or_load(STYLES, loader)
    cache.get_or_load(ICONS, loader)
    assert loader.calls == 4


def test_loaded_none_stays_cached():
    """A loaded empty value is distinct from not loaded."""
    cache = TableStyleCache("roads")
    loader = CountingLoader(None)

    assert cache.get_or_load(STYLES, loader) is None
    assert cache.get_or_load(STYLES, loader) is None
    assert loader.calls == 1


def test_unknown_slot():
    cache = TableStyleCache("roads")
    with pytest.raises(KeyError):
        cache.clear("colors")
    with pytest.raises(KeyError):
        cache.get_or_load("colors", CountingLoader(1))


def test_concurrent_population_loads_once():
    cache = TableStyleCache("roads")
    loader = CountingLoader("styles", delay=0.05)
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(cache.get_or_load(STYLES, loader))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results == ["styles"] * 8
    assert loader.calls == 1


def test_clear_during_population_is_not_lost():
    """A clear issued while a load is in flight leaves the slot unloaded afterwards."""
    cache = TableStyleCache("roads")
    started = threading.Event()

    def slow_loader():
        started.set()
        time.sleep(0.05)
        return "stale"

    loading = threading.Thread(target=cache.get_or_load, args=(STYLES, slow_loader))
    loading.start()
    started.wait()
    cache.clear(STYLES)
    loading.join()

    assert cache.get_or_load(STYLES, CountingLoader("fresh")) == "fresh"


def test_not_loaded_repr():
    assert repr(NOT_LOADED) == "NOT_LOADED"
