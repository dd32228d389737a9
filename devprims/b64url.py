# Copyright (c) 2026 Signer — MIT License

"""Base64url (RFC 4648 §5) without padding, as used by JWT segments."""

import base64


def encode(data) -> str:
    """Encode bytes (or UTF-8 text) to unpadded base64url."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b64encode(data).decode("ascii").replace("+", "-").replace("/", "_").rstrip("=")


def decode(text: str) -> bytes:
    """Decode base64url, restoring padding first.

    Raises:
        ValueError: (binascii.Error) if the input is not valid base64.
    """
    std = text.replace("-", "+").replace("_", "/")
    std += "=" * ((4 - len(std) % 4) % 4)
    return base64.b64decode(std, validate=True)


def decode_text(text: str) -> str:
    raw = decode(text)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        # Binary-string reading, one char per byte
        return raw.decode("latin-1")
