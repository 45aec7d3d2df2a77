# hoydtu

Building blocks for talking to Hoymiles micro-inverters the way a DTU does:
checksums, request frames, radio addresses, the byte layouts of the
inverters' payloads, stored configuration records, alarm texts and clock
helpers.

The package does not drive radio hardware itself. Frames are handed to a
`Transport` object that you provide, so the protocol logic can be used with
any NRF24 bridge, a simulator, or in tests.

## Installation

```
pip install hoydtu
```

For running the test suite:

```
pip install "hoydtu[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `hoydtu.crc` | `crc8`, `crc16_modbus` and the bit-wise NRF24 `crc16_nrf24` |
| `hoydtu.ringbuffer` | fixed-size `CircularBuffer` with `BufferFullError` / `BufferEmptyError` |
| `hoydtu.packets` | `PacketBuilder` for time and command request frames |
| `hoydtu.address` | serial number to radio id and ShockBurst address, `pretty_address`, `serial_matches` |
| `hoydtu.fields` | `Unit`, `Field`, `InverterType`, `ByteAssign` and the layouts of 1-, 2- and 4-channel inverters |
| `hoydtu.settings` | `InfoCmd`, `DevControlCmd`, `PowerLimitControl`, `Config` / `SysConfig` / `MqttConfig` with binary `pack` / `unpack`, `EepromLayout`, `version_string` |
| `hoydtu.alarms` | `alarm_message` for inverter alarm codes |
| `hoydtu.eeprom` | `Eeprom`, an optionally file-backed byte store with typed big-endian accessors |
| `hoydtu.radio` | `HmRadio` channel hopping and frame building over a `Transport`, `check_packet_crc`, `dump_buffer` |
| `hoydtu.clock` | NTP request/response handling, central European daylight saving rules, time formatting |

## Examples

Checksums:

```python
from hoydtu.crc import crc8, crc16_modbus

crc16_modbus(b"123456789")   # 0x4B37
crc8(bytes(10))
```

Building a time request:

```python
from hoydtu.packets import PacketBuilder

builder = PacketBuilder(1_700_000_000)
frame = builder.time_packet(0x12345678, 0x87654321)   # 27 bytes
builder.tick()   # advance the embedded timestamp by one second
```

Radio addresses (the serial numbers are made up):

```python
from hoydtu.address import (
    format_serial, pretty_address, serial_to_radio_id, serial_to_shockburst_address,
)

serial_to_radio_id(0x116112345678)                          # 0x7856341201
format_serial(0x116112345678)                               # "116112345678"
pretty_address(serial_to_shockburst_address(112345678901))  # "45:67:89:01:01"
```

Sending requests through your own transport:

```python
from hoydtu.radio import HmRadio
from hoydtu.settings import InfoCmd

class PrintTransport:
    def send(self, address, channel, data):
        print(hex(address), channel, data.hex())

radio = HmRadio(PrintTransport())
radio.send_time_packet(0x7856341201, InfoCmd.REAL_TIME_RUN_DATA_DEBUG, 1_700_000_000)
```

Each frame goes out on the next channel of the hopping list
`3, 23, 40, 61, 75`, starting at 40.

Payload layouts:

```python
from hoydtu.fields import InverterType, assignment_for_type, field_name, unit_symbol

for entry in assignment_for_type(InverterType.TWO_CHANNELS):
    if not entry.is_calculated():
        print(entry.ch, field_name(entry.field), unit_symbol(entry.unit), entry.start, entry.num)
```

Configuration records and storage:

```python
from hoydtu.eeprom import Eeprom
from hoydtu.settings import Config, EepromLayout

layout = EepromLayout(1)
with Eeprom("settings.bin") as store:
    store.write_bytes(layout.cfg, Config().pack())
config = Config.unpack(Eeprom("settings.bin").read_bytes(layout.cfg, len(Config().pack())))
```

Time:

```python
from hoydtu.clock import fetch_ntp_time, format_datetime

format_datetime(fetch_ntp_time("pool.ntp.org"))
```

## What the package does not do

- It has no command-line program and no web server; it is a library only.
- It does not publish readings to an MQTT broker. `MqttConfig` describes
  broker settings as a stored record, nothing more.
- It does not keep per-inverter state such as a command queue or decoded
  values. `hoydtu.fields` gives the byte layouts and `hoydtu.alarms` the alarm
  texts, and decoding a payload with them is left to the caller.
- It talks to no radio chip; sending is up to the `Transport` you pass in.