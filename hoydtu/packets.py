"""Building of request frames that a DTU sends to an inverter."""

from __future__ import annotations

from hoydtu.crc import crc8, crc16_modbus

FRAME_SIZE = 32
TIME_PACKET_MID = 0x15
TIME_PACKET_LEN = 27
CMD_PACKET_LEN = 11


def _addr_bytes(addr: int) -> bytes:
    return (addr & 0xFFFFFFFF).to_bytes(4, "little")


class PacketBuilder:
    """Builds time and command frames, carrying the current Unix timestamp."""

    def __init__(self, timestamp: int = 0) -> None:
        self.timestamp = timestamp & 0xFFFFFFFF

    def tick(self) -> None:
        """Advance the timestamp by one second."""
        self.timestamp = (self.timestamp + 1) & 0xFFFFFFFF

    def time_packet(self, inverter_addr: int, dtu_addr: int) -> bytes:
        """Return the 27-byte frame that sets the inverter's clock."""
        buf = bytearray(FRAME_SIZE)
        buf[0] = TIME_PACKET_MID
        buf[1:5] = _addr_bytes(inverter_addr)
        buf[5:9] = _addr_bytes(dtu_addr)
        buf[9] = 0x80
        buf[10] = 0x0B
        buf[11] = 0x00
        buf[12:16] = self.timestamp.to_bytes(4, "big")
        buf[19] = 0x05
        buf[24:26] = crc16_modbus(bytes(buf[10:24])).to_bytes(2, "big")
        buf[26] = crc8(bytes(buf[:26]))
        return bytes(buf[:TIME_PACKET_LEN])

    def cmd_packet(self, inverter_addr: int, dtu_addr: int, mid: int, cmd: int) -> bytes:
        """Return the 11-byte frame for message id ``mid`` and command ``cmd``."""
        buf = bytearray(CMD_PACKET_LEN)
        buf[0] = mid & 0xFF
        buf[1:5] = _addr_bytes(inverter_addr)
        buf[5:9] = _addr_bytes(dtu_addr)
        buf[9] = cmd & 0xFF
        buf[10] = crc8(bytes(buf[:10]))
        return bytes(buf)