# Copyright (c) 2026 Signer — MIT License

"""JSON Web Token parsing, expiry text, and HMAC generation/verification.

Only the HS256/HS384/HS512 family is handled. Parsing does not verify:
parse_parts() splits and decodes the segments so a caller can inspect
them, and verify_token() checks the signature separately.

Usage:
    token = await sign_token({"typ": "JWT"}, {"sub": "42"}, "secret", "HS256", expires_in=3600)
    await verify_token(token, "secret")      # True
    parts = parse_parts(token)
    expiry_info(parts.payload_claims()).text # "Expires in 59m"
"""

import json
import logging
import math
import time
from dataclasses import dataclass
from fractions import Fraction

from . import b64url
from .errors import UnsupportedAlgorithmError
from .signing import sign, verify

logger = logging.getLogger(__name__)

JWT_ALGORITHMS = {
    "HS256": "SHA-256",
    "HS384": "SHA-384",
    "HS512": "SHA-512",
}

_UNSIGNED_SIGNATURE = "signature"

_SECOND_MS = 1000
_MINUTE_MS = 60 * _SECOND_MS
_HOUR_MS = 60 * _MINUTE_MS
_DAY_MS = 24 * _HOUR_MS


@dataclass(frozen=True)
class JwtToken:
    header: str             # decoded JSON text
    payload: str            # decoded JSON text
    signature: str          # raw base64url, not decoded
    raw_header: str
    raw_payload: str

    @property
    def signing_input(self):
        return f"{self.raw_header}.{self.raw_payload}"

    def header_claims(self):
        return json.loads(self.header)

    def payload_claims(self):
        return json.loads(self.payload)


@dataclass(frozen=True)
class ExpiryInfo:
    text: str
    is_expired: bool


def parse_parts(token):
    """Split a compact JWT into its three segments.

    Returns:
        JwtToken, or None if the token does not have exactly three
        non-empty segments or a header/payload is not valid base64url.
    """
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        return None
    raw_header, raw_payload, signature = parts
    try:
        header = _decode_segment(raw_header)
        payload = _decode_segment(raw_payload)
    except ValueError:
        return None
    return JwtToken(header, payload, signature, raw_header, raw_payload)


def _decode_segment(segment):
    # A lone trailing character carries fewer than 8 bits; drop it
    if len(segment) % 4 == 1:
        segment = segment[:-1]
    return b64url.decode_text(segment)


def _duration(ms):
    """Bucket a non-negative integer millisecond span as s/m/h/d."""
    if ms < _MINUTE_MS:
        return f"{ms // _SECOND_MS}s"
    if ms < _HOUR_MS:
        return f"{ms // _MINUTE_MS}m"
    if ms < _DAY_MS:
        return f"{ms // _HOUR_MS}h"
    return f"{ms // _DAY_MS}d"


def expiry_info(payload, now=None):
    """Describe the `exp` claim relative to `now` (epoch seconds).

    The difference is taken exactly, so any finite `exp` works. A
    non-finite `exp` (NaN or an overflowed 1e400) counts as no expiry.
    """
    exp = payload.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return ExpiryInfo("No expiry", False)
    if isinstance(exp, float) and not math.isfinite(exp):
        return ExpiryInfo("No expiry", False)

    if now is None:
        now = time.time()
    diff_ms = (Fraction(exp) - Fraction(now)) * 1000
    if diff_ms < 0:
        return ExpiryInfo(f"Expired {_duration(math.floor(-diff_ms))} ago", True)
    return ExpiryInfo(f"Expires in {_duration(math.floor(diff_ms))}", False)


def _hash_for(alg):
    try:
        return JWT_ALGORITHMS[alg]
    except KeyError:
        raise UnsupportedAlgorithmError(
            f"Unsupported JWT algorithm: {alg!r} (expected one of {', '.join(JWT_ALGORITHMS)})"
        ) from None


def _compact_json(obj):
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


async def sign_token(header, payload, secret, algorithm="HS256", expires_in=0, now=None, provider=None):
    """Build a compact HMAC-signed JWT.

    Args:
        header: extra header claims; "alg" is always overwritten.
        payload: claims to carry.
        secret: HMAC key. An empty secret yields an unsigned token whose
            signature segment is the literal "signature".
        algorithm: "HS256", "HS384" or "HS512".
        expires_in: seconds until expiry; > 0 sets payload["exp"].
        now: epoch seconds used for "exp"; defaults to time.time().

    Raises:
        UnsupportedAlgorithmError: for any non-HMAC algorithm.
    """
    hash = _hash_for(algorithm)
    header = {**header, "alg": algorithm}
    payload = dict(payload)
    if expires_in > 0:
        if now is None:
            now = time.time()
        payload["exp"] = math.floor(now) + expires_in

    signing_input = f"{b64url.encode(_compact_json(header))}.{b64url.encode(_compact_json(payload))}"
    if not secret:
        return f"{signing_input}.{_UNSIGNED_SIGNATURE}"
    signature = await sign(signing_input, secret, hash, provider)
    return f"{signing_input}.{signature}"


async def verify_token(token, secret, provider=None):
    """Check a compact JWT's HMAC signature against `secret`.

    A malformed token or header (including one without "alg") returns
    False. A header naming a non-HMAC algorithm raises
    UnsupportedAlgorithmError.
    """
    parts = parse_parts(token)
    if parts is None:
        logger.warning("[jwt] malformed token")
        return False
    try:
        alg = parts.header_claims().get("alg")
    except (ValueError, AttributeError):
        logger.warning("[jwt] malformed header")
        return False
    if alg is None:
        logger.warning("[jwt] header has no alg")
        return False
    return await verify(parts.signing_input, parts.signature, secret, _hash_for(alg), provider)
