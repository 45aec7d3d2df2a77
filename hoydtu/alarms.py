"""Texts for the alarm codes an inverter reports."""

from __future__ import annotations

UNKNOWN_ALARM = "Unknown"

_ALARM_MESSAGES: dict[int, str] = {
    1: "Inverter start",
    2: "DTU command failed",
    121: "Over temperature protection",
    125: "Grid configuration parameter error",
    126: "Software error code 126",
    127: "Firmware error",
    128: "Software error code 128",
    129: "Software error code 129",
    130: "Offline",
    141: "Grid overvoltage",
    142: "Average grid overvoltage",
    143: "Grid undervoltage",
    144: "Grid overfrequency",
    145: "Grid underfrequency",
    146: "Rapid grid frequency change",
    147: "Power grid outage",
    148: "Grid disconnection",
    149: "Island detected",
    205: "Input port 1 & 2 overvoltage",
    206: "Input port 3 & 4 overvoltage",
    207: "Input port 1 & 2 undervoltage",
    208: "Input port 3 & 4 undervoltage",
    209: "Port 1 no input",
    210: "Port 2 no input",
    211: "Port 3 no input",
    212: "Port 4 no input",
    213: "PV-1 & PV-2 abnormal wiring",
    214: "PV-3 & PV-4 abnormal wiring",
    215: "PV-1 Input overvoltage",
    216: "PV-1 Input undervoltage",
    217: "PV-2 Input overvoltage",
    218: "PV-2 Input undervoltage",
    219: "PV-3 Input overvoltage",
    220: "PV-3 Input undervoltage",
    221: "PV-4 Input overvoltage",
    222: "PV-4 Input undervoltage",
    **{code: f"Hardware error code {code}" for code in range(301, 315)},
    5041: "Error code-04 Port 1",
    5042: "Error code-04 Port 2",
    5043: "Error code-04 Port 3",
    5044: "Error code-04 Port 4",
    5051: "PV Input 1 Overvoltage/Undervoltage",
    5052: "PV Input 2 Overvoltage/Undervoltage",
    5053: "PV Input 3 Overvoltage/Undervoltage",
    5054: "PV Input 4 Overvoltage/Undervoltage",
    5060: "Abnormal bias",
    5070: "Over temperature protection",
    5080: "Grid Overvoltage/Undervoltage",
    5090: "Grid Overfrequency/Underfrequency",
    5100: "Island detected",
    5120: "EEPROM reading and writing error",
    5150: "10 min value grid overvoltage",
    5200: "Firmware error",
    8310: "Shut down",
    9000: "Microinverter is suspected of being stolen",
}


def alarm_message(code: int) -> str:
    """Return the text for an alarm code, or "Unknown" for codes without one."""
    return _ALARM_MESSAGES.get(int(code), UNKNOWN_ALARM)