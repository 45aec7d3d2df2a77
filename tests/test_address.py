import pytest

from hoydtu.address import (
    format_serial,
    pretty_address,
    serial_matches,
    serial_to_radio_id,
    serial_to_shockburst_address,
)

SERIAL = 0x114100001234


def test_radio_id_ends_with_one():
    assert serial_to_radio_id(SERIAL) & 0xFF == 0x01


def test_radio_id_reverses_low_bytes():
    rid = serial_to_radio_id(SERIAL)
    assert (rid >> 8).to_bytes(4, "big") == (SERIAL & 0xFFFFFFFF).to_bytes(4, "little")
    assert rid < (1 << 40)


def test_format_serial_round_trip():
    text = format_serial(SERIAL)
    assert text == "114100001234"
    assert int(text, 16) == SERIAL


def test_format_serial_pads_low_word():
    assert format_serial(0x100000001) == "100000001"
    assert int(format_serial(0x100000001), 16) == 0x100000001


def test_shockburst_address_bcd():
    assert serial_to_shockburst_address(999912345678) == b"\x12\x34\x56\x78\x01"


def test_shockburst_address_uses_last_eight_digits():
    assert serial_to_shockburst_address(999912345678) == serial_to_shockburst_address(12345678)
    assert len(serial_to_shockburst_address(5)) == 5


def test_shockburst_address_negative_rejected():
    with pytest.raises(ValueError):
        serial_to_shockburst_address(-1)


def test_pretty_address():
    assert pretty_address(serial_to_shockburst_address(999912345678)) == "12:34:56:78:01"


def test_pretty_address_too_short():
    with pytest.raises(ValueError):
        pretty_address(b"\x01\x02")


def test_serial_matches():
    four = (SERIAL & 0xFFFFFFFF).to_bytes(4, "big")
    assert serial_matches(SERIAL, four) is True
    assert serial_matches(SERIAL, four[::-1]) is False
    assert serial_matches(SERIAL + 1, four) is False


def test_serial_matches_short_input():
    assert serial_matches(SERIAL, b"\x00\x00") is False