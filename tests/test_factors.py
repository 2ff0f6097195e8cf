"""Unit tests for factors.py - Divisor computation and caching."""

import threading

import pytest
from factors import FactorCache, compute_factors, get_factors, DEFAULT_CACHE


class TestComputeFactors:
    """Tests for the raw divisor computation."""

    def test_one(self):
        """Test 1 has only itself as a divisor."""
        assert compute_factors(1) == (1,)

    def test_prime(self):
        """Test primes have exactly two divisors."""
        assert compute_factors(7) == (7, 1)

    def test_perfect_square_no_duplicates(self):
        """Test the square root of a square appears once."""
        assert compute_factors(36) == (36, 18, 12, 9, 6, 4, 3, 2, 1)

    def test_sorted_descending(self):
        """Test divisors come largest first."""
        factors = compute_factors(3087)
        assert list(factors) == sorted(factors, reverse=True)

    def test_matches_brute_force(self):
        """Test against naive divisor enumeration."""
        for n in range(1, 400):
            expected = {d for d in range(1, n + 1) if n % d == 0}
            factors = compute_factors(n)
            assert set(factors) == expected
            assert len(factors) == len(expected)
            assert 1 in factors
            assert n in factors

    def test_rejects_non_positive(self):
        """Test zero and negatives raise."""
        with pytest.raises(ValueError):
            compute_factors(0)
        with pytest.raises(ValueError):
            compute_factors(-4)


class TestFactorCache:
    """Tests for FactorCache memoization."""

    def test_memoizes(self):
        """Test repeated lookups return the stored tuple."""
        cache = FactorCache()
        first = cache.get_factors(48)
        assert 48 in cache
        assert cache.get_factors(48) is first
        assert len(cache) == 1

    def test_clear(self):
        """Test clear empties the cache."""
        cache = FactorCache()
        cache.get_factors(12)
        cache.get_factors(13)
        cache.clear()
        assert len(cache) == 0
        assert 12 not in cache

    def test_separate_instances(self):
        """Test caches do not share entries."""
        a = FactorCache()
        b = FactorCache()
        a.get_factors(10)
        assert 10 not in b

    def test_concurrent_writers_agree(self):
        """Test racing threads all see the same divisors."""
        cache = FactorCache()
        results = []

        def worker():
            for n in range(1, 200):
                results.append((n, cache.get_factors(n)))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 199
        for n, factors in results:
            assert factors == compute_factors(n)

    def test_module_level_helper(self):
        """Test get_factors uses the default cache."""
        assert get_factors(225) == compute_factors(225)
        assert 225 in DEFAULT_CACHE
