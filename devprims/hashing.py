# Copyright (c) 2026 Signer — MIT License

"""Message digests rendered as hex, plus a constant-time string compare.

Usage:
    from devprims.hashing import compute_hash, secure_compare
    hex_digest = asyncio.run(compute_hash("hello"))           # SHA-256
    hex_digest = asyncio.run(compute_hash("hello", "SHA-512"))
    secure_compare(hex_digest, expected)
"""

import logging
import time

from .digest import default_provider

logger = logging.getLogger(__name__)


def buffer_to_hex(data) -> str:
    """Render bytes as lowercase hex, two digits per byte."""
    return bytes(data).hex()


async def compute_hash_from_bytes(data, algorithm="SHA-256", provider=None) -> str:
    """Digest raw bytes and return lowercase hex.

    Args:
        data: bytes-like input (file contents, encoded text).
        algorithm: "SHA-1", "SHA-256", "SHA-384" or "SHA-512".
        provider: DigestProvider to use; defaults to the hashlib backend.

    Raises:
        UnsupportedAlgorithmError: for any other algorithm name.
    """
    provider = provider or default_provider()
    t0 = time.perf_counter()
    hex_digest = buffer_to_hex(await provider.digest(algorithm, data))
    logger.debug(
        "[hash] %s -> %d hex chars (%.2fms)",
        algorithm, len(hex_digest), (time.perf_counter() - t0) * 1000,
    )
    return hex_digest


async def compute_hash(text, algorithm="SHA-256", provider=None) -> str:
    """Digest the UTF-8 encoding of text and return lowercase hex."""
    return await compute_hash_from_bytes(text.encode("utf-8"), algorithm, provider)


def secure_compare(a: str, b: str) -> bool:
    """Compare two strings without an early exit on the first mismatch.

    Lengths are not secret: differing lengths return False immediately.
    """
    if len(a) != len(b):
        return False
    acc = 0
    for x, y in zip(a, b):
        acc |= ord(x) ^ ord(y)
    return acc == 0
