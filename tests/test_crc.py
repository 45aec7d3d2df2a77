import pytest

from hoydtu.crc import crc8, crc16_modbus, crc16_nrf24

CHECK = b"123456789"


def test_crc8_empty_is_init():
    assert crc8(b"") == 0x00


def test_crc8_single_byte():
    assert crc8(bytes([0x5A])) == 0x5A


@pytest.mark.parametrize("data", [b"\x00", b"hello", bytes(range(40)), CHECK])
def test_crc8_residue_is_zero(data):
    assert crc8(data + bytes([crc8(data)])) == 0


def test_crc8_detects_change():
    assert crc8(b"\x01\x02\x03") != crc8(b"\x01\x02\x07")


def test_crc16_modbus_check_value():
    assert crc16_modbus(CHECK) == 0x4B37


def test_crc16_modbus_empty_is_init():
    assert crc16_modbus(b"") == 0xFFFF


@pytest.mark.parametrize("data", [b"\x0b\x00", b"abc", bytes(range(14)), CHECK])
def test_crc16_modbus_residue_is_zero(data):
    crc = crc16_modbus(data)
    assert crc16_modbus(data + crc.to_bytes(2, "little")) == 0


def test_crc16_nrf24_check_value():
    assert crc16_nrf24(CHECK, 0xFFFF, 0, len(CHECK) * 8) == 0x29B1


def test_crc16_nrf24_zero_length_returns_start():
    assert crc16_nrf24(CHECK, 0x1234, 0, 0) == 0x1234


def test_crc16_nrf24_too_long_returns_start():
    assert crc16_nrf24(b"\x01\x02", 0xFFFF, 0, 17) == 0xFFFF


@pytest.mark.parametrize("split", [1, 5, 8, 13, 40, 71])
def test_crc16_nrf24_can_be_continued(split):
    total = len(CHECK) * 8
    head = crc16_nrf24(CHECK, 0xFFFF, 0, split)
    assert crc16_nrf24(CHECK, head, split, total - split) == crc16_nrf24(
        CHECK, 0xFFFF, 0, total
    )


@pytest.mark.parametrize("data", [b"\x00\x01", b"abcdef", CHECK])
def test_crc16_nrf24_residue_is_zero(data):
    crc = crc16_nrf24(data, 0xFFFF, 0, len(data) * 8)
    framed = data + crc.to_bytes(2, "big")
    assert crc16_nrf24(framed, 0xFFFF, 0, len(framed) * 8) == 0