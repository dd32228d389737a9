# Copyright (c) 2026 Signer — MIT License

"""Uniform random integers from a cryptographically secure source.

The source is an injectable RandomnessProvider; the default draws from
the OS CSPRNG via `secrets`. A non-crypto PRNG (the `random` module) is
never used.

Bias: next_below() uses rejection sampling. A 32-bit draw is discarded
when it falls in the incomplete top block of 2**32 that would favour
low results under a plain modulo, so every value in [0, max) is exactly
equally likely.

Usage:
    from devprims.secure_random import SecureRandom, next_below
    n   = next_below(10)                    # 0..9
    rng = SecureRandom(my_provider)         # injected source
    rng.self_test()                         # raises WeakRandomnessError
"""

import logging
import math
import secrets
import struct
import time
from typing import Protocol

from .errors import WeakRandomnessError

logger = logging.getLogger(__name__)

_U32_RANGE = 1 << 32
_U32_MAX = _U32_RANGE - 1

# Statistical test thresholds (two-sided, alpha = 0.01)
_MONOBIT_Z = 2.576
_CHI2_LIMIT = 310.5        # 255 degrees of freedom
_RUNS_Z = 2.576
_AUTOCORR_Z = 3.42         # Bonferroni over 16 offsets
_AUTOCORR_OFFSETS = 16

_TEST_NAMES = ("monobit", "chi_squared", "runs", "autocorrelation")


class RandomnessProvider(Protocol):
    """Anything that can hand out cryptographically secure bytes."""

    def token_bytes(self, n: int) -> bytes:
        ...


class SystemRandomness:
    """Default provider: the OS CSPRNG (getrandom / CryptGenRandom)."""

    def token_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


class SecureRandom:
    """Uniform integer source over an injected RandomnessProvider."""

    def __init__(self, provider=None):
        self.provider = provider if provider is not None else SystemRandomness()

    def token_bytes(self, n):
        return self.provider.token_bytes(n)

    def next_below(self, max_value):
        """Return a uniformly distributed integer in [0, max_value).

        max_value == 0 returns 0. max_value must fit in an unsigned
        32-bit integer. Provider failures propagate to the caller.
        """
        if max_value < 0 or max_value > _U32_MAX:
            raise ValueError(f"max_value must be in 0..{_U32_MAX}, got {max_value}")
        if max_value == 0:
            return 0

        # Largest multiple of max_value that fits in 32 bits
        limit = _U32_RANGE - (_U32_RANGE % max_value)
        while True:
            (draw,) = struct.unpack(">I", self.provider.token_bytes(4))
            if draw < limit:
                return draw % max_value

    def self_test(self, sample_size=1024, num_samples=5):
        """Validate this source with verify_randomness().

        Returns the verification report. Raises WeakRandomnessError if
        the majority of samples fail any test.
        """
        report = verify_randomness(self.provider, sample_size, num_samples)
        if not report["pass"]:
            raise WeakRandomnessError(
                "Randomness source failed validation; do NOT use it for secrets.\n"
                + report["summary"]
            )
        return report


_DEFAULT = SecureRandom()


def next_below(max_value):
    """next_below() on the process-wide default SecureRandom."""
    return _DEFAULT.next_below(max_value)


def default_random():
    return _DEFAULT


# ── Randomness self-test ──────────────────────────────────────────

def _bits_of(data):
    return [(byte >> pos) & 1 for byte in data for pos in range(7, -1, -1)]


def check_randomness(data):
    """Run four statistical tests on raw bytes.

    Based on NIST SP 800-22 methodology:
        1. Monobit: proportion of 1-bits should be ~50%
        2. Chi-squared: all 256 byte values roughly uniform
        3. Runs: transitions between 0/1 bits (detects stuck patterns)
        4. Autocorrelation: bit correlations at offsets 1-16

    Returns {test_name: {"pass": bool, "detail": str, ...}}.
    """
    if len(data) < 2:
        raise ValueError("need at least 2 bytes to test")

    bits = _bits_of(data)
    n_bits = len(bits)
    results = {}

    ones = sum(bits)
    z = abs(2 * ones - n_bits) / math.sqrt(n_bits)
    results["monobit"] = {
        "pass": z < _MONOBIT_Z,
        "z_score": round(z, 4),
        "detail": f"{ones}/{n_bits} ones ({ones / n_bits:.4f}), z={z:.4f}",
    }

    observed = [0] * 256
    for byte in data:
        observed[byte] += 1
    expected = len(data) / 256.0
    chi2 = sum((o - expected) ** 2 / expected for o in observed)
    results["chi_squared"] = {
        "pass": chi2 < _CHI2_LIMIT,
        "chi2": round(chi2, 2),
        "detail": f"chi2={chi2:.2f} (limit {_CHI2_LIMIT}), expected/bin={expected:.2f}",
    }

    # The runs test is only meaningful when the monobit ratio is sane
    pi = ones / n_bits
    runs_z = math.inf
    if abs(pi - 0.5) < 2.0 / math.sqrt(n_bits):
        runs = 1 + sum(1 for i in range(1, n_bits) if bits[i] != bits[i - 1])
        expected_runs = 2.0 * n_bits * pi * (1 - pi) + 1
        std_runs = 2.0 * math.sqrt(2.0 * n_bits) * pi * (1 - pi)
        if std_runs:
            runs_z = abs(runs - expected_runs) / std_runs
    results["runs"] = {
        "pass": runs_z < _RUNS_Z,
        "z_score": round(runs_z, 4) if runs_z != math.inf else "inf",
        "detail": f"z={runs_z:.4f}" if runs_z != math.inf else "z=inf (degenerate)",
    }

    worst_z, worst_offset = 0.0, 0
    for d in range(1, _AUTOCORR_OFFSETS + 1):
        total = n_bits - d
        matches = sum(1 for i in range(total) if bits[i] == bits[i + d])
        z = abs(2 * matches - total) / math.sqrt(total)
        if z > worst_z:
            worst_z, worst_offset = z, d
    results["autocorrelation"] = {
        "pass": worst_z < _AUTOCORR_Z,
        "worst_z": round(worst_z, 4),
        "worst_offset": worst_offset,
        "detail": f"worst z={worst_z:.4f} at offset {worst_offset}",
    }

    return results


def verify_randomness(provider=None, sample_size=1024, num_samples=5):
    """Test a provider's output and aggregate with majority voting.

    A test is only marked failed if more than half the samples fail it,
    which filters out the ~1% per-test false positive rate of a healthy
    source while still catching a stuck or biased one.

    Returns:
        dict with "pass" (bool), "tests" (per-test status list),
        "samples" (raw per-sample results) and "summary" (text).
    """
    if provider is None:
        provider = SystemRandomness()

    t0 = time.perf_counter()
    samples = [check_randomness(provider.token_bytes(sample_size)) for _ in range(num_samples)]

    overall = True
    tests = []
    for name in _TEST_NAMES:
        failed = sum(1 for s in samples if not s[name]["pass"])
        ok = failed <= num_samples / 2
        overall = overall and ok
        status = "PASS" if ok else f"FAIL ({failed}/{num_samples} samples)"
        tests.append({"test": name, "pass": ok, "status": status})

    lines = [
        f"Randomness verification: {'PASS' if overall else 'FAIL'}",
        f"Samples: {num_samples}, Size: {sample_size} bytes each",
        "",
    ]
    for t in tests:
        mark = "+" if t["pass"] else "!"
        lines.append(f"  [{mark}] {t['test']:<20s} {t['status']}")

    logger.debug(
        "[randomness] %s over %d samples (%.2fms)",
        "PASS" if overall else "FAIL", num_samples, (time.perf_counter() - t0) * 1000,
    )
    return {"pass": overall, "tests": tests, "samples": samples, "summary": "\n".join(lines)}
