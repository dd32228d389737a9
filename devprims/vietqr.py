# Copyright (c) 2026 Signer — MIT License

"""VietQR bank-transfer payloads (EMVCo merchant-presented QR format).

A payload is a flat sequence of TLV fields: a 2-digit tag, a 2-digit
decimal length and the value. Some values (tags 38 and 62) nest further
TLV fields. The payload ends with tag 63, a CRC-16/CCITT-FALSE over
everything before the checksum digits, "6304" included.

Usage:
    from devprims.vietqr import VietQRParams, generate_vietqr_content
    payload = generate_vietqr_content(VietQRParams(
        bank_bin="970415", account_number="123456789",
        amount=50000, description="Payment test",
    ))
    verify_vietqr_crc(payload)      # True
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Optional, Union

from .crc16 import crc16
from .errors import PayloadFieldError

logger = logging.getLogger(__name__)

# ── Protocol constants ────────────────────────────────────────────

VIETQR_GUID = "A000000727"          # NAPAS application id
VIETQR_SERVICE_CODE = "QRIBFTTA"    # transfer to account
CURRENCY_VND = "704"                # ISO 4217
COUNTRY_CODE = "VN"

MAX_NAME_LENGTH = 25
MAX_DESCRIPTION_LENGTH = 50
MAX_FIELD_LENGTH = 99               # 2-digit length prefix

_PAYLOAD_FORMAT = "000201"
_DYNAMIC_QR = "010212"
_CRC_TAG = "6304"
_CRC_DIGITS = 4

_DECIMAL_AMOUNT = re.compile(r"^\s*[0-9]+(\.[0-9]+)?\s*$")


@dataclass(frozen=True)
class VietQRParams:
    bank_bin: str
    account_number: str
    amount: Optional[Union[str, int, float]] = None
    description: Optional[str] = None
    account_name: Optional[str] = None


def tlv(tag, value):
    """Encode one field as tag + 2-digit length + value.

    Raises:
        PayloadFieldError: if the tag is not 2 digits or the value is
            longer than MAX_FIELD_LENGTH characters.
    """
    if len(tag) != 2 or not (tag.isascii() and tag.isdigit()):
        raise PayloadFieldError(f"TLV tag must be 2 digits, got {tag!r}")
    if len(value) > MAX_FIELD_LENGTH:
        raise PayloadFieldError(
            f"Field {tag} is {len(value)} characters, max is {MAX_FIELD_LENGTH}"
        )
    return f"{tag}{len(value):02d}{value}"


def _amount_text(amount):
    """The amount as it goes on the wire, or None when absent or not > 0."""
    if amount is None or isinstance(amount, bool):
        return None
    if isinstance(amount, str):
        # Plain decimal digits only: no "1_000", "inf" or exponents
        if not _DECIMAL_AMOUNT.match(amount):
            return None
        number = float(amount)
        text = amount
    else:
        number = amount
        if isinstance(amount, float) and amount.is_integer():
            text = str(int(amount))
        else:
            text = str(amount)
    if not math.isfinite(number) or number <= 0:
        return None
    return text


def generate_vietqr_content(params):
    """Build the full VietQR payload string, CRC included.

    The account name is upper-cased and cut to MAX_NAME_LENGTH, the
    description cut to MAX_DESCRIPTION_LENGTH. A missing, zero or
    non-numeric amount leaves tag 54 out, so the payer types it in.
    """
    beneficiary = tlv("00", params.bank_bin) + tlv("01", params.account_number)
    merchant = (
        tlv("00", VIETQR_GUID)
        + tlv("01", beneficiary)
        + tlv("02", VIETQR_SERVICE_CODE)
    )

    fields = [_PAYLOAD_FORMAT, _DYNAMIC_QR, tlv("38", merchant), tlv("53", CURRENCY_VND)]

    amount = _amount_text(params.amount)
    if amount is not None:
        fields.append(tlv("54", amount))

    fields.append(tlv("58", COUNTRY_CODE))

    if params.account_name:
        fields.append(tlv("59", params.account_name.upper()[:MAX_NAME_LENGTH]))

    if params.description:
        fields.append(tlv("62", tlv("08", params.description[:MAX_DESCRIPTION_LENGTH])))

    body = "".join(fields) + _CRC_TAG
    payload = body + crc16(body)
    logger.debug("[vietqr] bin=%s -> %d chars", params.bank_bin, len(payload))
    return payload


# ── Reading ───────────────────────────────────────────────────────

def parse_tlv(payload):
    """Split a flat TLV sequence into (tag, value) pairs.

    Nested templates come back as their raw value; call parse_tlv() on
    that value to descend.

    Raises:
        PayloadFieldError: on a non-digit header or a value that runs
            past the end of the payload.
    """
    fields = []
    pos = 0
    while pos < len(payload):
        header = payload[pos:pos + 4]
        if len(header) < 4 or not (header.isascii() and header.isdigit()):
            raise PayloadFieldError(f"Bad TLV header {header!r} at offset {pos}")
        length = int(header[2:])
        end = pos + 4 + length
        if end > len(payload):
            raise PayloadFieldError(
                f"Field {header[:2]} at offset {pos} needs {length} characters, "
                f"only {len(payload) - pos - 4} left"
            )
        fields.append((header[:2], payload[pos + 4:end]))
        pos = end
    return fields


def verify_vietqr_crc(payload):
    """True if the trailing tag 63 matches the CRC of the rest."""
    if len(payload) < len(_CRC_TAG) + _CRC_DIGITS:
        return False
    body, checksum = payload[:-_CRC_DIGITS], payload[-_CRC_DIGITS:]
    if not body.endswith(_CRC_TAG):
        return False
    return crc16(body) == checksum.upper()
