"""Framing of DTU requests and channel hopping for the 2.4 GHz radio link."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from hoydtu.crc import crc8, crc16_modbus
from hoydtu.ringbuffer import CircularBuffer
from hoydtu.settings import DTU_RADIO_ID, MAX_RF_PAYLOAD_SIZE, DevControlCmd, InfoCmd

log = logging.getLogger(__name__)

DEFAULT_RECV_CHANNEL = 3
DUMMY_RADIO_ID = 0xDEADBEEF01
RF_CHANNELS = (3, 23, 40, 61, 75)
RF_LOOP_CNT = 300

TX_REQ_INFO = 0x15
TX_REQ_DEVCONTROL = 0x51
ALL_FRAMES = 0x80
SINGLE_FRAME = 0x81

RF24_AMP_POWER_NAMES = ("MIN", "LOW", "HIGH", "MAX")

_DEFAULT_TX_INDEX = 2
_DEFAULT_RX_INDEX = 0


class Transport(Protocol):
    """Something that puts a frame on air for a given address and channel."""

    def send(self, address: int, channel: int, data: bytes) -> None:
        """Transmit ``data`` to radio ``address`` on ``channel``."""


@dataclass(frozen=True)
class Packet:
    """A received frame and the channel it arrived on."""

    rx_ch: int
    data: bytes


def _addr_bytes(radio_id: int) -> bytes:
    return ((radio_id >> 8) & 0xFFFFFFFF).to_bytes(4, "little")


class HmRadio:
    """Builds request frames, hands them to a transport and tracks the hopping channels."""

    def __init__(self, transport: Transport, dtu_id: int = DTU_RADIO_ID) -> None:
        self.transport = transport
        self.dtu_id = dtu_id
        self.send_count = 0
        self.serial_debug = False
        self.rx_loop_count = RF_LOOP_CNT
        self._tx_index = _DEFAULT_TX_INDEX
        self._rx_index = _DEFAULT_RX_INDEX
        self.tx_channel = self.set_default_channels()

    @property
    def rx_channel(self) -> int:
        """Channel currently listened on."""
        return RF_CHANNELS[self._rx_index]

    @property
    def next_tx_channel(self) -> int:
        """Channel the next frame will be sent on."""
        return RF_CHANNELS[self._tx_index]

    def set_default_channels(self) -> int:
        """Reset the hopping sequence and return the first transmit channel."""
        self._tx_index = _DEFAULT_TX_INDEX
        self._rx_index = _DEFAULT_RX_INDEX
        return RF_CHANNELS[self._tx_index]

    def cmd_packet(self, inverter_id: int, mid: int, pid: int) -> bytearray:
        """Return a zeroed 32-byte frame holding message id, both addresses and packet id."""
        buf = bytearray(MAX_RF_PAYLOAD_SIZE)
        buf[0] = mid & 0xFF
        buf[1:5] = _addr_bytes(inverter_id)
        buf[5:9] = _addr_bytes(self.dtu_id)
        buf[9] = pid & 0xFF
        return buf

    def send_cmd_packet(self, inverter_id: int, mid: int, pid: int) -> bytes:
        """Send the 11-byte command frame and return it."""
        buf = self.cmd_packet(inverter_id, mid, pid)
        buf[10] = crc8(bytes(buf[:10]))
        return self._send(inverter_id, bytes(buf[:11]), clear=False)

    def send_time_packet(
        self, inverter_id: int, cmd: int, timestamp: int, alarm_mes_id: int = 0
    ) -> bytes:
        """Send an info request carrying the current time and return the frame."""
        buf = self.cmd_packet(inverter_id, TX_REQ_INFO, ALL_FRAMES)
        buf[10] = cmd & 0xFF
        buf[11] = 0x00
        buf[12:16] = (timestamp & 0xFFFFFFFF).to_bytes(4, "big")
        if cmd in (InfoCmd.REAL_TIME_RUN_DATA_DEBUG, InfoCmd.ALARM_DATA):
            buf[18:20] = (alarm_mes_id & 0xFFFF).to_bytes(2, "big")
        buf[24:26] = crc16_modbus(bytes(buf[10:24])).to_bytes(2, "big")
        buf[26] = crc8(bytes(buf[:26]))
        return self._send(inverter_id, bytes(buf[:27]), clear=True)

    def send_control_packet(
        self, inverter_id: int, cmd: int, data: Sequence[int] = ()
    ) -> bytes:
        """Send a device control frame and return it.

        For the power and power-factor commands ``data`` holds the limit and
        the limit control mode.
        """
        buf = self.cmd_packet(inverter_id, TX_REQ_DEVCONTROL, ALL_FRAMES)
        body = bytearray([cmd & 0xFF, 0x00])
        if DevControlCmd.ACTIVE_POWER_CONTR <= cmd <= DevControlCmd.PF_SET:
            if len(data) < 2:
                raise ValueError("power control commands need a limit and a control mode")
            body += ((data[0] * 10) & 0xFFFF).to_bytes(2, "big")
            body += (data[1] & 0xFFFF).to_bytes(2, "big")
        body += crc16_modbus(bytes(body)).to_bytes(2, "big")
        end = 10 + len(body)
        buf[10:end] = body
        buf[end] = crc8(bytes(buf[:end]))
        return self._send(inverter_id, bytes(buf[: end + 1]), clear=True)

    def switch_rx_channel(self, add_loop: int = 0) -> bool:
        """Hop to the next receive channel; return True once the receive window is used up."""
        self.rx_loop_count += add_loop
        if self.rx_loop_count:
            self.rx_loop_count -= 1
            self._rx_index = (self._rx_index + 1) % len(RF_CHANNELS)
        return self.rx_loop_count == 0

    def receive(
        self, channel: int | None, packet: bytes, buffer: CircularBuffer[Packet]
    ) -> bool:
        """Store a received frame in ``buffer``; return False when it is full and the frame is dropped."""
        if buffer.full():
            return False
        rx_ch = self.rx_channel if channel is None else channel
        buffer.push(Packet(rx_ch, bytes(packet[:MAX_RF_PAYLOAD_SIZE])))
        return True

    def _send(self, inverter_id: int, data: bytes, clear: bool) -> bytes:
        channel = RF_CHANNELS[self._tx_index]
        if self.serial_debug:
            log.info("%s", dump_buffer(data, f"TX {len(data)}B Ch{channel} | "))
        if clear:
            self.rx_loop_count = RF_LOOP_CNT
        self.transport.send(inverter_id, channel, data)
        self._tx_index = (self._tx_index + 1) % len(RF_CHANNELS)
        self.tx_channel = RF_CHANNELS[self._tx_index]
        self._rx_index = _DEFAULT_RX_INDEX
        self.send_count += 1
        return data


def check_packet_crc(buf: bytes) -> tuple[bytes, bool]:
    """Undo the one-bit shift of a raw frame and check its trailing CRC-8.

    Returns the realigned payload, whose length comes from the top six bits
    of the first byte, and whether its last byte matches the checksum.
    """
    length = min(buf[0] >> 2, MAX_RF_PAYLOAD_SIZE - 2) if buf else 0
    if length < 1:
        return b"", False

    def at(i: int) -> int:
        return buf[i] if i < len(buf) else 0

    payload = bytes(
        ((at(i) << 1) | (at(i + 1) >> 7)) & 0xFF for i in range(1, length + 1)
    )
    return payload, crc8(payload[:-1]) == payload[-1]


def dump_buffer(data: bytes, info: str | None = None) -> str:
    """Return ``info`` followed by the bytes as upper-case hex, each followed by a space."""
    return (info or "") + "".join(f"{b:02X} " for b in data)