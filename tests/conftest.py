# Copyright (c) 2026 Signer — MIT License

import struct

import pytest

from devprims.secure_random import SecureRandom


class ReplayRandomness:
    """RandomnessProvider that hands out a fixed byte stream in order."""

    def __init__(self, data):
        self.data = bytes(data)
        self.pos = 0

    def token_bytes(self, n):
        if self.pos + n > len(self.data):
            raise RuntimeError("replay stream exhausted")
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk


class ZeroRandomness:
    """A stuck source: every byte is 0x00."""

    def token_bytes(self, n):
        return bytes(n)


def u32s(*values):
    """Pack draws as the big-endian u32 words next_below() reads."""
    return b"".join(struct.pack(">I", v) for v in values)


@pytest.fixture
def replay():
    """Factory: replay(*u32_draws) -> (SecureRandom, provider)."""
    def make(*draws):
        provider = ReplayRandomness(u32s(*draws))
        return SecureRandom(provider), provider
    return make


@pytest.fixture
def zero_provider():
    return ZeroRandomness()
