"""Conversions between inverter serial numbers and radio addresses."""

from __future__ import annotations

ADDRESS_WIDTH = 5


def serial_to_radio_id(serial: int) -> int:
    """Return the 40-bit radio id: the serial's low four bytes reversed, followed by 0x01."""
    low = (serial & 0xFFFFFFFF).to_bytes(4, "little")
    return (int.from_bytes(low, "big") << 8) | 0x01


def format_serial(serial: int) -> str:
    """Return the serial as upper-case hex, the low 32 bits always eight digits wide."""
    serial &= 0xFFFFFFFFFFFFFFFF
    return f"{serial >> 32:X}{serial & 0xFFFFFFFF:08X}"


def serial_to_shockburst_address(serial: int) -> bytes:
    """Return the 5-byte radio address for a decimal serial number.

    The last eight decimal digits are packed as BCD, most significant pair
    first, and followed by 0x01.
    """
    if serial < 0:
        raise ValueError("serial number must not be negative")
    digits = f"{serial % 100_000_000:08d}"
    pairs = (digits[i : i + 2] for i in range(0, 8, 2))
    return bytes(int(pair[0]) << 4 | int(pair[1]) for pair in pairs) + b"\x01"


def pretty_address(address: bytes) -> str:
    """Return the first five address bytes as colon-separated hex."""
    if len(address) < ADDRESS_WIDTH:
        raise ValueError(f"address must have at least {ADDRESS_WIDTH} bytes")
    return ":".join(f"{b:02x}" for b in address[:ADDRESS_WIDTH])


def serial_matches(serial: int, four_bytes: bytes) -> bool:
    """Return True when ``four_bytes`` equals the serial's low four bytes, most significant first."""
    if len(four_bytes) < 4:
        return False
    return bytes(four_bytes[:4]) == (serial & 0xFFFFFFFF).to_bytes(4, "big")