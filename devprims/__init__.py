# Copyright (c) 2026 Signer — MIT License

"""Cryptographic and encoding primitives for developer converter tools.

Modules:
- secure_random: CSPRNG-backed uniform integers and randomness self-test
- password: passwords, diceware passphrases, bundled 7776-word list
- entropy: entropy bits, crack-time text, strength rating
- digest / hashing: SHA-1/256/384/512 digests, constant-time compare
- b64url: unpadded base64url codec
- signing: HMAC-SHA256/384/512 signatures
- tokens: JWT parsing, expiry text, HS256/384/512 generation and verification
- crc16: CRC-16/CCITT-FALSE
- vietqr: VietQR (EMVCo) payload encoder and TLV reader
"""

__version__ = "1.0.0"

from .errors import (
    DevprimsError,
    EmptyPoolError,
    PayloadFieldError,
    UnsupportedAlgorithmError,
    WeakRandomnessError,
)
from .secure_random import RandomnessProvider, SecureRandom, SystemRandomness, next_below, verify_randomness
from .password import (
    LOWERCASE, UPPERCASE, NUMBERS, SYMBOLS, WORDS,
    PasswordOptions, PassphraseOptions,
    build_char_pool, generate_password, generate_passphrase,
    generate_passwords, generate_passphrases,
)
from .entropy import (
    password_entropy, passphrase_entropy, estimate_crack_time,
    strength_label, strength_percentage, strength_variant,
)
from .digest import DigestProvider, HashlibDigestProvider
from .hashing import buffer_to_hex, compute_hash, compute_hash_from_bytes, secure_compare
from .signing import HMAC_ALGORITHMS, sign, verify
from .tokens import JWT_ALGORITHMS, ExpiryInfo, JwtToken, expiry_info, parse_parts, sign_token, verify_token
from .crc16 import crc16
from .vietqr import VietQRParams, generate_vietqr_content, parse_tlv, tlv, verify_vietqr_crc

__all__ = [
    "__version__",
    # errors
    "DevprimsError", "EmptyPoolError", "PayloadFieldError",
    "UnsupportedAlgorithmError", "WeakRandomnessError",
    # randomness
    "RandomnessProvider", "SecureRandom", "SystemRandomness", "next_below", "verify_randomness",
    # passwords
    "LOWERCASE", "UPPERCASE", "NUMBERS", "SYMBOLS", "WORDS",
    "PasswordOptions", "PassphraseOptions",
    "build_char_pool", "generate_password", "generate_passphrase",
    "generate_passwords", "generate_passphrases",
    # entropy
    "password_entropy", "passphrase_entropy", "estimate_crack_time",
    "strength_label", "strength_percentage", "strength_variant",
    # hashing
    "DigestProvider", "HashlibDigestProvider",
    "buffer_to_hex", "compute_hash", "compute_hash_from_bytes", "secure_compare",
    # signing / JWT
    "HMAC_ALGORITHMS", "sign", "verify",
    "JWT_ALGORITHMS", "ExpiryInfo", "JwtToken",
    "expiry_info", "parse_parts", "sign_token", "verify_token",
    # VietQR
    "crc16", "VietQRParams", "generate_vietqr_content", "parse_tlv", "tlv", "verify_vietqr_crc",
]
