# Copyright (c) 2026 Signer — MIT License

"""HMAC signatures encoded as base64url, the JWS HS256/384/512 primitive.

Usage:
    sig = await sign("header.payload", "secret", "SHA-256")
    ok  = await verify("header.payload", sig, "secret", "SHA-256")
"""

import hmac
import logging

from . import b64url
from .digest import default_provider
from .errors import UnsupportedAlgorithmError

logger = logging.getLogger(__name__)

HMAC_ALGORITHMS = ("SHA-256", "SHA-384", "SHA-512")


def _check_hash(hash):
    if hash not in HMAC_ALGORITHMS:
        raise UnsupportedAlgorithmError(
            f"Unsupported HMAC hash: {hash!r} (expected one of {', '.join(HMAC_ALGORITHMS)})"
        )


async def sign(data, secret, hash="SHA-256", provider=None) -> str:
    """HMAC of the UTF-8 data keyed by the UTF-8 secret, as base64url.

    Raises:
        UnsupportedAlgorithmError: if hash is not SHA-256/384/512.
    """
    _check_hash(hash)
    provider = provider or default_provider()
    mac = await provider.hmac(hash, secret.encode("utf-8"), data.encode("utf-8"))
    return b64url.encode(mac)


async def verify(data, signature, secret, hash="SHA-256", provider=None) -> bool:
    """Check a base64url HMAC signature in constant time.

    Malformed signatures, tampered data and wrong secrets all return
    False. An unsupported hash name is a caller error and raises.
    """
    _check_hash(hash)
    provider = provider or default_provider()
    try:
        expected = await provider.hmac(hash, secret.encode("utf-8"), data.encode("utf-8"))
        actual = b64url.decode(signature)
    except ValueError as exc:
        logger.warning("[verify] %s signature check failed: %s", hash, type(exc).__name__)
        return False
    return hmac.compare_digest(expected, actual)
