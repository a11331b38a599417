from __future__ import annotations

import threading
from typing import Iterator

# Ascending primes found so far; extended on demand and shared by all callers
_primes: list[int] = [2, 3]
_lock = threading.Lock()


def _has_divisor(n: int) -> bool:
    for p in _primes:
        if p * p > n:
            return False
        if n % p == 0:
            return True
    return False


def _extend() -> int:
    with _lock:
        candidate = _primes[-1] + 2
        while _has_divisor(candidate):
            candidate += 2
        _primes.append(candidate)
        return candidate


def iter_primes() -> Iterator[int]:
    """Yield 2, 3, 5, 7, ... without end.

    Known primes come from the shared table; new ones are computed lazily and appended to it.
    """
    index = 0
    while True:
        if index < len(_primes):
            yield _primes[index]
        else:
            _extend()
            continue
        index += 1


def next_prime_after(n: int) -> int:
    """Return the smallest prime strictly greater than $n."""
    return next(p for p in iter_primes() if p > n)
