"""Arbitrary-precision integer helpers used by the primality test.

Python ints already are arbitrary precision; this module names the handful
of operations the test relies on so the witness evaluator reads in terms of
them and keeps every big-integer primitive in one place.
"""

from __future__ import annotations

from dataclasses import dataclass

from millerrabin.errors import InvalidCandidateError


def absolute(n: int) -> int:
    return -n if n < 0 else n


def bit_length(n: int) -> int:
    return n.bit_length()


def is_odd(n: int) -> bool:
    return n & 1 == 1


def lowest_set_bit(n: int) -> int:
    """Index of the lowest one bit, -1 for zero."""
    if n == 0:
        return -1
    return (n & -n).bit_length() - 1


def shift_right(n: int, bits: int) -> int:
    return n >> bits


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    return pow(base, exponent, modulus)


@dataclass(frozen=True)
class Decomposition:
    """``n - 1 == 2**a * m`` with ``m`` odd."""

    n: int
    n_minus_one: int
    a: int
    m: int


def decompose(n: int) -> Decomposition:
    """Split ``n - 1`` of an odd ``n > 2`` into ``2**a * m``."""
    if n <= 2 or not is_odd(n):
        raise InvalidCandidateError("decomposition requires an odd integer greater than 2", n)

    n_minus_one = n - 1
    a = lowest_set_bit(n_minus_one)
    m = shift_right(n_minus_one, a)
    return Decomposition(n=n, n_minus_one=n_minus_one, a=a, m=m)
