"""
Unit tests for the quote store
"""

import random
from collections import Counter

import pytest

from store import QuoteStore, StoreSnapshot


@pytest.mark.unit
class TestQuoteStoreSelection:
    """Selection with caching disabled"""

    def test_select_returns_member(self, store, sample_quotes):
        for _ in range(200):
            assert store.select() in sample_quotes

    def test_select_is_uniform(self):
        quotes = ("alpha", "beta", "gamma")
        quote_store = QuoteStore(rng=random.Random(7))
        quote_store.reload(quotes)

        counts = Counter(quote_store.select() for _ in range(3000))

        # 每条语录都可达，且大致均匀
        assert set(counts) == set(quotes)
        for quote in quotes:
            assert 800 < counts[quote] < 1200

    def test_select_draws_independently(self, store):
        selections = {store.select() for _ in range(200)}
        assert len(selections) > 1

    def test_select_empty_store_returns_none(self):
        quote_store = QuoteStore()
        assert quote_store.select() is None

    def test_select_after_reload_with_empty_set(self, store):
        store.reload([])
        assert store.select() is None
        assert store.has_quotes() is False

    def test_single_quote(self):
        quote_store = QuoteStore()
        quote_store.reload(["only one"])
        assert {quote_store.select() for _ in range(20)} == {"only one"}


@pytest.mark.unit
class TestQuoteStoreCaching:
    """Selection with caching enabled"""

    def test_cached_selection_is_stable(self, cached_store, sample_quotes):
        first = cached_store.select()
        assert first in sample_quotes
        assert all(cached_store.select() == first for _ in range(50))

    def test_reload_reselects_from_new_set(self, cached_store, sample_quotes):
        new_quotes = ("new one", "new two")
        cached_store.reload(new_quotes)

        selection = cached_store.select()
        assert selection in new_quotes
        assert selection not in sample_quotes

    def test_reload_empty_set_clears_cached_selection(self, cached_store):
        cached_store.reload(())
        assert cached_store.select() is None
        assert cached_store.snapshot().cached is None

    def test_rotate_cache_picks_from_current_set(self, cached_store, sample_quotes):
        seen = set()
        for _ in range(100):
            rotated = cached_store.rotate_cache()
            assert rotated in sample_quotes
            assert cached_store.select() == rotated
            seen.add(rotated)
        assert seen == set(sample_quotes)

    def test_rotate_cache_on_empty_set(self):
        quote_store = QuoteStore(cache_enabled=True)
        assert quote_store.rotate_cache() is None
        assert quote_store.select() is None

    def test_rotate_cache_without_caching_does_not_pin(self, rng):
        quotes = ("a", "b", "c", "d")
        quote_store = QuoteStore(cache_enabled=False, rng=rng)
        quote_store.reload(quotes)

        quote_store.rotate_cache()

        # 未启用缓存时 select 仍然每次独立抽取
        assert len({quote_store.select() for _ in range(200)}) > 1

    def test_cached_selection_is_owned_copy(self, cached_store):
        selection = cached_store.select()
        cached_store.reload(["replacement"])
        # 旧的选择值不受新集合影响
        assert isinstance(selection, str)
        assert cached_store.select() == "replacement"


@pytest.mark.unit
class TestQuoteStoreState:
    """Snapshot and bookkeeping"""

    def test_initial_state(self):
        quote_store = QuoteStore(cache_enabled=True)
        snapshot = quote_store.snapshot()

        assert isinstance(snapshot, StoreSnapshot)
        assert snapshot.quotes == ()
        assert snapshot.cached is None
        assert snapshot.version == 0
        assert snapshot.loaded_at is None
        assert quote_store.cache_enabled is True

    def test_reload_materialises_iterables(self):
        quote_store = QuoteStore()
        quote_store.reload(q for q in ["x", "y"])

        assert quote_store.snapshot().quotes == ("x", "y")
        assert quote_store.count() == 2

    def test_reload_does_not_alias_caller_list(self):
        source = ["x", "y"]
        quote_store = QuoteStore()
        quote_store.reload(source)
        source.append("z")

        assert quote_store.count() == 2

    def test_version_increments_on_every_mutation(self, cached_store):
        start = cached_store.snapshot().version
        cached_store.rotate_cache()
        cached_store.reload(["a"])
        cached_store.rotate_cache()

        assert cached_store.snapshot().version == start + 3

    def test_loaded_at_set_by_reload_only(self, cached_store):
        loaded_at = cached_store.snapshot().loaded_at
        assert loaded_at is not None

        cached_store.rotate_cache()
        assert cached_store.snapshot().loaded_at == loaded_at

    def test_has_quotes(self, store):
        assert store.has_quotes() is True
        assert QuoteStore().has_quotes() is False
