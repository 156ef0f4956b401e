import pytest

from modules.custom_digits.core.cache import MISSING, InsertionOrderedCache


def test_trims_oldest_chunk_when_over_capacity():
    cache = InsertionOrderedCache(max_entries=100, trim_chunk=10)
    for key in range(100):
        cache.store(key, key * 2)
    assert len(cache) == 100

    cache.store(100, 200)
    assert len(cache) == 91
    assert list(cache)[:2] == [10, 11]
    assert 9 not in cache
    assert cache.get(100) == 200


def test_reads_do_not_refresh_entries():
    cache = InsertionOrderedCache(max_entries=3, trim_chunk=1)
    cache.store("a", 1)
    cache.store("b", 2)
    cache.store("c", 3)
    assert cache.get("a") == 1

    cache.store("d", 4)
    assert "a" not in cache
    assert list(cache) == ["b", "c", "d"]


def test_lookup_distinguishes_cached_none():
    cache = InsertionOrderedCache()
    assert cache.lookup("range") is MISSING
    cache.store("range", None)
    assert cache.lookup("range") is None


def test_clear_empties_cache():
    cache = InsertionOrderedCache()
    cache.store(1, 1)
    cache.clear()
    assert len(cache) == 0


@pytest.mark.parametrize("max_entries, trim_chunk", [(0, 1), (10, 0)])
def test_rejects_bad_limits(max_entries, trim_chunk):
    with pytest.raises(ValueError):
        InsertionOrderedCache(max_entries, trim_chunk)
