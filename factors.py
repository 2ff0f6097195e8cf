"""
Divisor lookup for beam move sets.

A beam may only step a distance that divides its remaining value, so every
node creation and every move needs the divisors of some number. Values repeat
constantly during the search, so results are memoized per cache instance.
"""

import threading
from math import isqrt
from typing import Dict, Tuple


def compute_factors(n: int) -> Tuple[int, ...]:
    """
    Compute the divisors of n, largest first.

    Args:
        n: Positive integer

    Returns:
        Tuple of divisors including 1 and n, without duplicates
    """
    if n < 1:
        raise ValueError(f"Cannot factor non-positive value: {n}")

    result = [1]
    if n > 1:
        result.append(n)

    for i in range(2, isqrt(n) + 1):
        if n % i == 0:
            result.append(i)
            if i != n // i:
                result.append(n // i)

    # Larger steps first so beams shed their value quickly
    result.sort(reverse=True)
    return tuple(result)


class FactorCache:
    """
    Memoized divisor table.

    Lookups read the dict without locking. Inserts are insert-if-absent under
    a lock; two threads racing on the same key compute the same tuple, so
    whichever lands first wins and the other is discarded.
    """

    def __init__(self):
        self._table: Dict[int, Tuple[int, ...]] = {}
        self._lock = threading.Lock()

    def get_factors(self, n: int) -> Tuple[int, ...]:
        """Return the divisors of n, largest first."""
        factors = self._table.get(n)
        if factors is not None:
            return factors

        factors = compute_factors(n)
        with self._lock:
            return self._table.setdefault(n, factors)

    def clear(self) -> None:
        """Forget all memoized values."""
        with self._lock:
            self._table.clear()

    def __contains__(self, n: int) -> bool:
        return n in self._table

    def __len__(self) -> int:
        return len(self._table)


DEFAULT_CACHE = FactorCache()


def get_factors(n: int) -> Tuple[int, ...]:
    """Divisors of n from the shared default cache."""
    return DEFAULT_CACHE.get_factors(n)
