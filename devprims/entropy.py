# Copyright (c) 2026 Signer — MIT License

"""Entropy estimates, crack-time text and strength ratings.

Crack time assumes an offline attacker at GUESSES_PER_SECOND (a GPU
cluster) who finds the secret after searching half the space on
average. Seconds are kept as an exact fraction, so a 256-bit key is
rated as precisely as an 8-character password.

Usage:
    bits = password_entropy(16, 62)      # 95
    estimate_crack_time(bits)            # "6.3e+1 billion years"
    strength_label(bits)                 # "Strong"
"""

import math
from decimal import Decimal
from fractions import Fraction

from .password import PASSPHRASE_WORDLIST_SIZE

GUESSES_PER_SECOND = 10 ** 10
SECONDS_PER_YEAR = 365 * 86400
STRENGTH_MAX_BITS = 128

_MINUTE = 60
_HOUR = 3600
_DAY = 86400

# (upper bound in bits, label, variant)
_STRENGTH_BANDS = (
    (28, "Very Weak", "error"),
    (36, "Weak", "warning"),
    (60, "Moderate", "default"),
    (128, "Strong", "success"),
)


def password_entropy(length, pool_size):
    """floor(length * log2(pool_size)); 0 for an empty pool."""
    if pool_size == 0:
        return 0
    return math.floor(length * math.log2(pool_size))


def passphrase_entropy(word_count, include_number=False):
    bits = word_count * math.log2(PASSPHRASE_WORDLIST_SIZE)
    if include_number:
        bits += math.log2(100)
    return math.floor(bits)


def _keyspace(bits):
    if isinstance(bits, int):
        return Fraction(2) ** bits
    return Fraction(2.0 ** bits)


def _count(n, unit):
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def estimate_crack_time(bits):
    """Average time to brute-force `bits` of entropy, as human text.

    Returns "Instant" under a second, then floored seconds, minutes,
    hours, days, years, thousand years and million years. Anything
    longer is shown in scientific notation, e.g. "1.2e+3 billion years".
    """
    seconds = _keyspace(bits) / GUESSES_PER_SECOND / 2
    if seconds < 1:
        return "Instant"
    if seconds < _MINUTE:
        return _count(math.floor(seconds), "second")
    if seconds < _HOUR:
        return _count(math.floor(seconds / _MINUTE), "minute")
    if seconds < _DAY:
        return _count(math.floor(seconds / _HOUR), "hour")

    years = seconds / SECONDS_PER_YEAR
    if years < 1:
        return _count(math.floor(seconds / _DAY), "day")
    if years < 1000:
        return _count(math.floor(years), "year")
    if years < 10 ** 6:
        return f"{math.floor(years / 1000)} thousand years"
    if years < 10 ** 9:
        return f"{math.floor(years / 10 ** 6)} million years"

    billions = years / 10 ** 9
    value = Decimal(billions.numerator) / Decimal(billions.denominator)
    return f"{value:.1e} billion years"


def strength_label(bits):
    for bound, label, _ in _STRENGTH_BANDS:
        if bits < bound:
            return label
    return "Very Strong"


def strength_variant(bits):
    """UI badge variant: error, warning, default or success."""
    for bound, _, variant in _STRENGTH_BANDS:
        if bits < bound:
            return variant
    return "success"


def strength_percentage(bits):
    """Share of STRENGTH_MAX_BITS as 0..100, halves rounded up."""
    ratio = Fraction(bits) * 100 / STRENGTH_MAX_BITS
    return min(100, math.floor(ratio + Fraction(1, 2)))
