"""Configuration defaults, command codes and the stored configuration records."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

VERSION_MAJOR = 0
VERSION_MINOR = 5
VERSION_PATCH = 17

# Fallback station WiFi
FB_WIFI_SSID = "MY_SSID"
FB_WIFI_PWD = "password"

# Access point used when no station can be reached
WIFI_AP_SSID = "AHOY-DTU"
WIFI_AP_PWD = "password"

WIFI_TRY_CONNECT_TIME = 30
WIFI_AP_ACTIVE_TIME = 60

DEF_DEVICE_NAME = "AHOY-DTU"

DEF_RF24_CS_PIN = 15
DEF_RF24_CE_PIN = 2
DEF_RF24_IRQ_PIN = 0

DTU_RADIO_ID = 0x1234567801

DEF_AMPLIFIERPOWER = 2
PACKET_BUFFER_SIZE = 30
MAX_NUM_INVERTERS = 1
SERIAL_INTERVAL = 5
SEND_INTERVAL = 30
MAX_NAME_LENGTH = 16
MAX_RF_PAYLOAD_SIZE = 32
MAX_PAYLOAD_ENTRIES = 10
DEF_MAX_RETRANS_PER_PYLD = 5
INACT_THRES_SEC = 300
INACT_PWR_THRESH = 3

DEF_NTP_SERVER_NAME = "pool.ntp.org"
DEF_NTP_PORT = 123
NTP_REFRESH_INTERVAL = 12 * 3600 * 1000

MQTT_INTERVAL = 60
DEF_MQTT_BROKER = ""
DEF_MQTT_PORT = 1883
DEF_MQTT_USER = ""
DEF_MQTT_PWD = ""
DEF_MQTT_TOPIC = "inverter"

MIN_SERIAL_INTERVAL = 5
MIN_SEND_INTERVAL = 15
MIN_MQTT_INTERVAL = 60

# Stored field sizes
SSID_LEN = 32
PWD_LEN = 64
DEVNAME_LEN = 16
CRC_LEN = 2

NTP_ADDR_LEN = 32
NTP_PORT_LEN = 2

MQTT_ADDR_LEN = 32
MQTT_USER_LEN = 16
MQTT_PWD_LEN = 32
MQTT_TOPIC_LEN = 32
MQTT_INTERVAL_LEN = 2
MQTT_PORT_LEN = 2
MQTT_DISCOVERY_PREFIX = "homeassistant"
MQTT_MAX_PACKET_SIZE = 384
MQTT_RECONNECT_DELAY = 5000

SER_ENABLE_LEN = 1
SER_DEBUG_LEN = 1
SER_INTERVAL_LEN = 2

CFG_MQTT_LEN = MQTT_ADDR_LEN + 2 + MQTT_USER_LEN + MQTT_PWD_LEN + MQTT_TOPIC_LEN
CFG_SYS_LEN = DEVNAME_LEN + SSID_LEN + PWD_LEN + 1
CFG_LEN = 7 + NTP_ADDR_LEN + 2 + CFG_MQTT_LEN + 4

EEPROM_SIZE = 4096

# Per-inverter sizes of the stored inverter settings
_INV_ADDR_LEN = 8
_INV_NAME_LEN = MAX_NAME_LENGTH
_INV_CH_PWR_LEN = 2 * 4
_INV_CH_NAME_LEN = MAX_NAME_LENGTH * 4
_INV_INTERVAL_LEN = 2
_INV_MAX_RTRY_LEN = 1
_INV_PWR_LIM_LEN = 2


class InfoCmd(IntEnum):
    INVERTER_DEV_INFORM_SIMPLE = 0x00
    INVERTER_DEV_INFORM_ALL = 0x01
    GRID_ON_PRO_FILE_PARA = 0x02
    HARDWARE_CONFIG = 0x03
    SIMPLE_CALIBRATION_PARA = 0x04
    SYSTEM_CONFIG_PARA = 0x05
    REAL_TIME_RUN_DATA_DEBUG = 0x0B
    REAL_TIME_RUN_DATA_REALITY = 0x0C
    REAL_TIME_RUN_DATA_A_PHASE = 0x0D
    REAL_TIME_RUN_DATA_B_PHASE = 0x0E
    REAL_TIME_RUN_DATA_C_PHASE = 0x0F
    ALARM_DATA = 0x11
    ALARM_UPDATE = 0x12
    RECORD_DATA = 0x13
    INTERNAL_DATA = 0x14
    GET_LOSS_RATE = 0x15
    GET_SELF_CHECK_STATE = 0x1E
    INIT_DATA_STATE = 0xFF


class DevControlCmd(IntEnum):
    TURN_ON = 0x00
    TURN_OFF = 0x01
    RESTART = 0x02
    LOCK = 0x03
    UNLOCK = 0x04
    ACTIVE_POWER_CONTR = 0x0B
    REACTIVE_POWER_CONTR = 0x0C
    PF_SET = 0x0D
    CLEAN_STATE_LOCK_AND_ALARM = 0x14
    SELF_INSPECTION = 0x28
    INIT = 0xFF


class PowerLimitControl(IntEnum):
    NO_POWER_LIMIT = 0xFFFF
    ABSOLUT_NON_PERSISTENT = 0x0000
    RELATIV_NON_PERSISTENT = 0x0001
    ABSOLUT_PERSISTENT = 0x0100
    RELATIV_PERSISTENT = 0x0101


def _encode(text: str, length: int, name: str) -> bytes:
    raw = text.encode("utf-8")
    if len(raw) > length:
        raise ValueError(f"{name} is longer than {length} bytes")
    return raw.ljust(length, b"\x00")


def _decode(raw: bytes) -> str:
    return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


def _pack(fmt: struct.Struct, *values: object) -> bytes:
    try:
        return fmt.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from None


def _check_size(data: bytes, size: int, what: str) -> None:
    if len(data) != size:
        raise ValueError(f"{what} record must be {size} bytes, got {len(data)}")


_MQTT_STRUCT = struct.Struct(f"<{MQTT_ADDR_LEN}sH{MQTT_USER_LEN}s{MQTT_PWD_LEN}s{MQTT_TOPIC_LEN}s")
_SYS_STRUCT = struct.Struct(f"<{DEVNAME_LEN}s{SSID_LEN}s{PWD_LEN}s")
_CFG_HEAD = struct.Struct(f"<HBBBBB{NTP_ADDR_LEN}sH")
_CFG_TAIL = struct.Struct("<H??")


@dataclass
class MqttConfig:
    """Broker connection settings, stored as a packed little-endian record."""

    broker: str = DEF_MQTT_BROKER
    port: int = DEF_MQTT_PORT
    user: str = DEF_MQTT_USER
    pwd: str = DEF_MQTT_PWD
    topic: str = DEF_MQTT_TOPIC

    def pack(self) -> bytes:
        return _pack(
            _MQTT_STRUCT,
            _encode(self.broker, MQTT_ADDR_LEN, "broker"),
            self.port,
            _encode(self.user, MQTT_USER_LEN, "user"),
            _encode(self.pwd, MQTT_PWD_LEN, "pwd"),
            _encode(self.topic, MQTT_TOPIC_LEN, "topic"),
        )

    @classmethod
    def unpack(cls, data: bytes) -> MqttConfig:
        _check_size(data, _MQTT_STRUCT.size, "MQTT")
        broker, port, user, pwd, topic = _MQTT_STRUCT.unpack(data)
        return cls(_decode(broker), port, _decode(user), _decode(pwd), _decode(topic))


@dataclass
class SysConfig:
    """Device name and station WiFi credentials."""

    device_name: str = DEF_DEVICE_NAME
    station_ssid: str = ""
    station_pwd: str = ""

    def pack(self) -> bytes:
        return _pack(
            _SYS_STRUCT,
            _encode(self.device_name, DEVNAME_LEN, "device_name"),
            _encode(self.station_ssid, SSID_LEN, "station_ssid"),
            _encode(self.station_pwd, PWD_LEN, "station_pwd"),
        )

    @classmethod
    def unpack(cls, data: bytes) -> SysConfig:
        _check_size(data, _SYS_STRUCT.size, "system")
        name, ssid, pwd = _SYS_STRUCT.unpack(data)
        return cls(_decode(name), _decode(ssid), _decode(pwd))


@dataclass
class Config:
    """Radio, NTP, MQTT and serial settings, stored as a packed little-endian record."""

    send_interval: int = SEND_INTERVAL
    max_retrans_per_payload: int = DEF_MAX_RETRANS_PER_PYLD
    pin_cs: int = DEF_RF24_CS_PIN
    pin_ce: int = DEF_RF24_CE_PIN
    pin_irq: int = DEF_RF24_IRQ_PIN
    amplifier_power: int = DEF_AMPLIFIERPOWER
    ntp_addr: str = DEF_NTP_SERVER_NAME
    ntp_port: int = DEF_NTP_PORT
    mqtt: MqttConfig = field(default_factory=MqttConfig)
    serial_interval: int = SERIAL_INTERVAL
    serial_show_iv: bool = False
    serial_debug: bool = False

    def pack(self) -> bytes:
        head = _pack(
            _CFG_HEAD,
            self.send_interval,
            self.max_retrans_per_payload,
            self.pin_cs,
            self.pin_ce,
            self.pin_irq,
            self.amplifier_power,
            _encode(self.ntp_addr, NTP_ADDR_LEN, "ntp_addr"),
            self.ntp_port,
        )
        tail = _pack(_CFG_TAIL, self.serial_interval, self.serial_show_iv, self.serial_debug)
        return head + self.mqtt.pack() + tail

    @classmethod
    def unpack(cls, data: bytes) -> Config:
        _check_size(data, CFG_LEN, "configuration")
        head_end = _CFG_HEAD.size
        mqtt_end = head_end + _MQTT_STRUCT.size
        (send, retrans, cs, ce, irq, amp, ntp_addr, ntp_port) = _CFG_HEAD.unpack(data[:head_end])
        mqtt = MqttConfig.unpack(data[head_end:mqtt_end])
        serial_interval, show_iv, debug = _CFG_TAIL.unpack(data[mqtt_end:])
        return cls(
            send, retrans, cs, ce, irq, amp, _decode(ntp_addr), ntp_port,
            mqtt, serial_interval, show_iv, debug,
        )


class EepromLayout:
    """Addresses of the stored settings for a given number of inverters."""

    def __init__(self, max_inverters: int = MAX_NUM_INVERTERS) -> None:
        if max_inverters < 0:
            raise ValueError("number of inverters must not be negative")
        n = max_inverters
        self.max_inverters = n
        self.cfg_sys = 0
        self.wifi_crc = self.cfg_sys + CFG_SYS_LEN
        self.start_settings = self.wifi_crc + CRC_LEN
        self.cfg = self.start_settings
        self.cfg_inverter = self.cfg + CFG_LEN
        self.inv_addr = self.cfg_inverter
        self.inv_name = self.inv_addr + n * _INV_ADDR_LEN
        self.inv_ch_pwr = self.inv_name + n * _INV_NAME_LEN
        self.inv_ch_name = self.inv_ch_pwr + n * _INV_CH_PWR_LEN
        self.inv_interval = self.inv_ch_name + n * _INV_CH_NAME_LEN
        self.inv_max_rtry = self.inv_interval + _INV_INTERVAL_LEN
        self.inv_pwr_lim = self.inv_max_rtry + _INV_MAX_RTRY_LEN
        self.inv_pwr_lim_con = self.inv_pwr_lim + n * _INV_PWR_LIM_LEN
        self.next = self.inv_pwr_lim_con + n * _INV_PWR_LIM_LEN
        self.settings_crc = self.next + 2
        if self.settings_crc >= EEPROM_SIZE - CRC_LEN:
            raise ValueError(
                f"EEPROM size exceeded for {n} inverters "
                f"(settings CRC at {self.settings_crc})"
            )

    def __repr__(self) -> str:
        return f"EepromLayout(max_inverters={self.max_inverters})"


def version_string() -> str:
    """Return the firmware version as major.minor.patch."""
    return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"