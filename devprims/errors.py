# Copyright (c) 2026 Signer — MIT License

"""Exception hierarchy for devprims.

Every error derives from a built-in type as well, so callers that only
catch ValueError / RuntimeError keep working.
"""


class DevprimsError(Exception):
    """Base class for all devprims errors."""


class UnsupportedAlgorithmError(DevprimsError, ValueError):
    """Raised when a digest or HMAC algorithm name is not supported."""


class EmptyPoolError(DevprimsError, ValueError):
    """Raised when a password is requested from an empty character pool."""


class PayloadFieldError(DevprimsError, ValueError):
    """Raised when a TLV field cannot be encoded or read."""


class WeakRandomnessError(DevprimsError, RuntimeError):
    """Raised when the randomness source fails statistical validation."""
