# Copyright (c) 2026 Signer — MIT License

"""CRC-16/CCITT-FALSE checksum (poly 0x1021, init 0xFFFF, no final XOR).

This is the checksum EMVCo QR payloads carry in their trailing tag 63.

Usage:
    from devprims.crc16 import crc16
    crc16("123456789")      # "29B1"
"""

_POLY = 0x1021
_INIT = 0xFFFF


def crc16_bytes(data):
    """Bitwise CRC-16/CCITT-FALSE over raw bytes, MSB first."""
    reg = _INIT
    for byte in data:
        for j in range(8):
            bit = (byte >> (7 - j)) & 1
            c15 = (reg >> 15) & 1
            reg = (reg << 1) & 0xFFFF
            if c15 != bit:
                reg ^= _POLY
    return reg


def crc16(text: str) -> str:
    """CRC of the UTF-8 encoded text as 4 uppercase hex digits."""
    return f"{crc16_bytes(text.encode('utf-8')):04X}"
