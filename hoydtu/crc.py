"""Checksums used on the Hoymiles radio link."""

from __future__ import annotations

CRC8_INIT = 0x00
CRC8_POLY = 0x01
CRC16_MODBUS_POLY = 0xA001
CRC16_NRF24_POLY = 0x1021


def crc8(data: bytes) -> int:
    """Return the 8-bit checksum that closes every radio frame."""
    crc = CRC8_INIT
    for byte in data:
        crc ^= byte
        for _ in range(8):
            crc = ((crc << 1) & 0xFF) ^ (CRC8_POLY if crc & 0x80 else 0x00)
    return crc


def crc16_modbus(data: bytes) -> int:
    """Return the Modbus CRC-16 (reflected, poly 0xA001, init 0xFFFF)."""
    crc = 0xFFFF
    for byte in data:
        crc ^= byte
        for _ in range(8):
            lsb = crc & 0x0001
            crc >>= 1
            if lsb:
                crc ^= CRC16_MODBUS_POLY
    return crc


def crc16_nrf24(data: bytes, start_crc: int, start_bit: int, len_bits: int) -> int:
    """Return the NRF24 CRC-16 (poly 0x1021) over ``len_bits`` bits.

    The bits are taken most significant first, beginning at bit offset
    ``start_bit`` of ``data``. The length need not be a whole number of
    bytes. When ``len_bits`` is zero or longer than ``data``, ``start_crc``
    is returned unchanged.
    """
    crc = start_crc & 0xFFFF
    if not 0 < len_bits <= len(data) * 8:
        return crc
    for bitoffs in range(start_bit, start_bit + len_bits):
        index = bitoffs >> 3
        byte = data[index] if index < len(data) else 0
        bit = (byte << (bitoffs & 7)) & 0x80
        crc ^= bit << 8
        if crc & 0x8000:
            crc = ((crc << 1) ^ CRC16_NRF24_POLY) & 0xFFFF
        else:
            crc = (crc << 1) & 0xFFFF
    return crc