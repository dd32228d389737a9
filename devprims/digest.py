# Copyright (c) 2026 Signer — MIT License

"""Digest and HMAC primitives behind an awaitable provider interface.

Hashing itself is CPU-bound and short, but callers treat it as an async
boundary: the default provider hands the work to a worker thread and
the coroutine resolves once the digest is ready. Tests and alternative
backends inject their own DigestProvider.

Usage:
    provider = HashlibDigestProvider()
    raw = await provider.digest("SHA-256", b"hello")
    mac = await provider.hmac("SHA-256", b"key", b"data")
"""

import asyncio
import hashlib
import hmac as _hmac
from typing import Protocol

from .errors import UnsupportedAlgorithmError

# Algorithm name -> hashlib constructor name
_HASHLIB_NAMES = {
    "SHA-1": "sha1",
    "SHA-256": "sha256",
    "SHA-384": "sha384",
    "SHA-512": "sha512",
}

DIGEST_ALGORITHMS = tuple(_HASHLIB_NAMES)


class DigestProvider(Protocol):
    async def digest(self, algorithm: str, data: bytes) -> bytes:
        ...

    async def hmac(self, algorithm: str, key: bytes, data: bytes) -> bytes:
        ...


def _hashlib_name(algorithm):
    try:
        return _HASHLIB_NAMES[algorithm]
    except KeyError:
        raise UnsupportedAlgorithmError(
            f"Unsupported algorithm: {algorithm!r} "
            f"(expected one of {', '.join(DIGEST_ALGORITHMS)})"
        ) from None


class HashlibDigestProvider:
    """DigestProvider backed by hashlib/hmac, run off the event loop."""

    async def digest(self, algorithm, data):
        name = _hashlib_name(algorithm)
        return await asyncio.to_thread(lambda: hashlib.new(name, bytes(data)).digest())

    async def hmac(self, algorithm, key, data):
        name = _hashlib_name(algorithm)
        return await asyncio.to_thread(_hmac.digest, bytes(key), bytes(data), name)


_DEFAULT = HashlibDigestProvider()


def default_provider():
    return _DEFAULT
