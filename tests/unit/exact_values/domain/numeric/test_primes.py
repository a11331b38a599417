from itertools import islice

from exact_values.domain.numeric.primes import iter_primes, next_prime_after


def test_iter_primes_ascending():
    assert list(islice(iter_primes(), 10)) == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]


def test_iter_primes_is_repeatable():
    first = list(islice(iter_primes(), 50))
    second = list(islice(iter_primes(), 50))
    assert first == second
    assert first[-1] == 229


def test_next_prime_after():
    assert next_prime_after(-5) == 2
    assert next_prime_after(2) == 3
    assert next_prime_after(29) == 31
    assert next_prime_after(7919) == 7927
