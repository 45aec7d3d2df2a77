"""Measurement fields, units and the payload layouts of the inverter families."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

CMD_CALC = 0xFFFF


class Unit(IntEnum):
    V = 0
    A = 1
    W = 2
    WH = 3
    KWH = 4
    HZ = 5
    C = 6
    PCT = 7
    VA = 8
    NONE = 9


_UNIT_SYMBOLS = ("V", "A", "W", "Wh", "kWh", "Hz", "°C", "%", "VAr", "")


class Field(IntEnum):
    UDC = 0
    IDC = 1
    PDC = 2
    YD = 3
    YW = 4
    YT = 5
    UAC = 6
    IAC = 7
    PAC = 8
    F = 9
    T = 10
    PCT = 11
    EFF = 12
    IRR = 13
    PRA = 14
    ALARM_MES_ID = 15
    FW_VERSION = 16
    FW_BUILD_YEAR = 17
    FW_BUILD_MONTH_DAY = 18
    HW_ID = 19
    ACT_PWR_LIMIT = 20
    LAST_ALARM_CODE = 21


_FIELD_NAMES = (
    "U_DC", "I_DC", "P_DC", "YieldDay", "YieldWeek", "YieldTotal",
    "U_AC", "I_AC", "P_AC", "Freq", "Temp", "Pct", "Efficiency", "Irradiation", "P_ACr",
    "ALARM_MES_ID", "FWVersion", "FWBuildYear", "FWBuildMonthDay", "HWPartId",
    "PowerLimit", "LastAlarmCode",
)


class DeviceClass(IntEnum):
    """Device class used for MQTT discovery."""

    NONE = 0
    CURRENT = 1
    ENERGY = 2
    PWR = 3
    VOLTAGE = 4
    FREQ = 5
    TEMP = 6

    @property
    def label(self) -> str | None:
        return _DEVICE_CLASS_LABELS[self]


_DEVICE_CLASS_LABELS = (None, "current", "energy", "power", "voltage", "frequency", "temperature")


class StateClass(IntEnum):
    """State class used for MQTT discovery."""

    NONE = 0
    MEASUREMENT = 1
    TOTAL_INCREASING = 2

    @property
    def label(self) -> str | None:
        return _STATE_CLASS_LABELS[self]


_STATE_CLASS_LABELS = (None, "measurement", "total_increasing")


_DEVICE_FIELD_ASSIGNMENT: dict[Field, tuple[DeviceClass, StateClass]] = {
    Field.UDC: (DeviceClass.VOLTAGE, StateClass.MEASUREMENT),
    Field.IDC: (DeviceClass.CURRENT, StateClass.MEASUREMENT),
    Field.PDC: (DeviceClass.PWR, StateClass.MEASUREMENT),
    Field.YD: (DeviceClass.ENERGY, StateClass.TOTAL_INCREASING),
    Field.YW: (DeviceClass.ENERGY, StateClass.TOTAL_INCREASING),
    Field.YT: (DeviceClass.ENERGY, StateClass.TOTAL_INCREASING),
    Field.UAC: (DeviceClass.VOLTAGE, StateClass.MEASUREMENT),
    Field.IAC: (DeviceClass.CURRENT, StateClass.MEASUREMENT),
    Field.PAC: (DeviceClass.PWR, StateClass.MEASUREMENT),
    Field.F: (DeviceClass.FREQ, StateClass.NONE),
    Field.T: (DeviceClass.TEMP, StateClass.MEASUREMENT),
    Field.PCT: (DeviceClass.NONE, StateClass.NONE),
    Field.EFF: (DeviceClass.NONE, StateClass.NONE),
    Field.IRR: (DeviceClass.NONE, StateClass.NONE),
}


class CalcFunc(IntEnum):
    """Index of the function that derives a calculated value."""

    YT_CH0 = 0
    YD_CH0 = 1
    UDC_CH = 2
    PDC_CH0 = 3
    EFF_CH0 = 4
    IRR_CH = 5


class InverterType(IntEnum):
    ONE_CHANNEL = 0
    TWO_CHANNELS = 1
    FOUR_CHANNELS = 2

    @property
    def channels(self) -> int:
        return (1, 2, 4)[self]


@dataclass(frozen=True)
class ByteAssign:
    """Where a field sits in a payload, or how it is calculated.

    For a calculated entry ``div`` is CMD_CALC, ``start`` holds the CalcFunc
    index and ``num`` the argument passed to it.
    """

    field: Field
    unit: Unit
    ch: int
    start: int
    num: int
    div: int

    def is_calculated(self) -> bool:
        return self.div == CMD_CALC


def _a(field: Field, unit: Unit, ch: int, start: int, num: int, div: int) -> ByteAssign:
    return ByteAssign(field, unit, ch, start, num, div)


def _calc(field: Field, unit: Unit, ch: int, func: CalcFunc, arg: int) -> ByteAssign:
    return ByteAssign(field, unit, ch, int(func), arg, CMD_CALC)


F, U, C = Field, Unit, CalcFunc

INFO_ASSIGNMENT: tuple[ByteAssign, ...] = (
    _a(F.FW_VERSION, U.NONE, 0, 0, 2, 1),
    _a(F.FW_BUILD_YEAR, U.NONE, 0, 2, 2, 1),
    _a(F.FW_BUILD_MONTH_DAY, U.NONE, 0, 4, 2, 1),
    _a(F.HW_ID, U.NONE, 0, 8, 2, 1),
)

SYSTEM_CONFIG_ASSIGNMENT: tuple[ByteAssign, ...] = (
    _a(F.ACT_PWR_LIMIT, U.PCT, 0, 2, 2, 10),
)

ALARM_DATA_ASSIGNMENT: tuple[ByteAssign, ...] = (
    _a(F.LAST_ALARM_CODE, U.NONE, 0, 0, 2, 1),
)

_CH0_CALCS = (
    _calc(F.YD, U.WH, 0, C.YD_CH0, 0),
    _calc(F.YT, U.KWH, 0, C.YT_CH0, 0),
    _calc(F.PDC, U.W, 0, C.PDC_CH0, 0),
    _calc(F.EFF, U.PCT, 0, C.EFF_CH0, 0),
)

HM1CH_ASSIGNMENT: tuple[ByteAssign, ...] = (
    _a(F.UDC, U.V, 1, 2, 2, 10),
    _a(F.IDC, U.A, 1, 4, 2, 100),
    _a(F.PDC, U.W, 1, 6, 2, 10),
    _a(F.YD, U.WH, 1, 12, 2, 1),
    _a(F.YT, U.KWH, 1, 8, 4, 1000),
    _calc(F.IRR, U.PCT, 1, C.IRR_CH, 1),
    _a(F.UAC, U.V, 0, 14, 2, 10),
    _a(F.IAC, U.A, 0, 22, 2, 100),
    _a(F.PAC, U.W, 0, 18, 2, 10),
    _a(F.PRA, U.VA, 0, 20, 2, 10),
    _a(F.F, U.HZ, 0, 16, 2, 100),
    _a(F.T, U.C, 0, 26, 2, 10),
    _a(F.ALARM_MES_ID, U.NONE, 0, 24, 2, 1),
) + _CH0_CALCS

HM2CH_ASSIGNMENT: tuple[ByteAssign, ...] = (
    _a(F.UDC, U.V, 1, 2, 2, 10),
    _a(F.IDC, U.A, 1, 4, 2, 100),
    _a(F.PDC, U.W, 1, 6, 2, 10),
    _a(F.YD, U.WH, 1, 22, 2, 1),
    _a(F.YT, U.KWH, 1, 14, 4, 1000),
    _calc(F.IRR, U.PCT, 1, C.IRR_CH, 1),
    _a(F.UDC, U.V, 2, 8, 2, 10),
    _a(F.IDC, U.A, 2, 10, 2, 100),
    _a(F.PDC, U.W, 2, 12, 2, 10),
    _a(F.YD, U.WH, 2, 24, 2, 1),
    _a(F.YT, U.KWH, 2, 18, 4, 1000),
    _calc(F.IRR, U.PCT, 2, C.IRR_CH, 2),
    _a(F.UAC, U.V, 0, 26, 2, 10),
    _a(F.IAC, U.A, 0, 34, 2, 100),
    _a(F.PAC, U.W, 0, 30, 2, 10),
    _a(F.PRA, U.VA, 0, 32, 2, 10),
    _a(F.F, U.HZ, 0, 28, 2, 100),
    _a(F.T, U.C, 0, 38, 2, 10),
    _a(F.ALARM_MES_ID, U.NONE, 0, 40, 2, 1),
) + _CH0_CALCS

HM4CH_ASSIGNMENT: tuple[ByteAssign, ...] = (
    _a(F.UDC, U.V, 1, 2, 2, 10),
    _a(F.IDC, U.A, 1, 4, 2, 100),
    _a(F.PDC, U.W, 1, 8, 2, 10),
    _a(F.YD, U.WH, 1, 20, 2, 1),
    _a(F.YT, U.KWH, 1, 12, 4, 1000),
    _calc(F.IRR, U.PCT, 1, C.IRR_CH, 1),
    _calc(F.UDC, U.V, 2, C.UDC_CH, 1),
    _a(F.IDC, U.A, 2, 6, 2, 100),
    _a(F.PDC, U.W, 2, 10, 2, 10),
    _a(F.YD, U.WH, 2, 22, 2, 1),
    _a(F.YT, U.KWH, 2, 16, 4, 1000),
    _calc(F.IRR, U.PCT, 2, C.IRR_CH, 2),
    _a(F.UDC, U.V, 3, 24, 2, 10),
    _a(F.IDC, U.A, 3, 26, 2, 100),
    _a(F.PDC, U.W, 3, 30, 2, 10),
    _a(F.YD, U.WH, 3, 42, 2, 1),
    _a(F.YT, U.KWH, 3, 34, 4, 1000),
    _calc(F.IRR, U.PCT, 3, C.IRR_CH, 3),
    _calc(F.UDC, U.V, 4, C.UDC_CH, 3),
    _a(F.IDC, U.A, 4, 28, 2, 100),
    _a(F.PDC, U.W, 4, 32, 2, 10),
    _a(F.YD, U.WH, 4, 44, 2, 1),
    _a(F.YT, U.KWH, 4, 38, 4, 1000),
    _calc(F.IRR, U.PCT, 4, C.IRR_CH, 4),
    _a(F.UAC, U.V, 0, 46, 2, 10),
    _a(F.IAC, U.A, 0, 54, 2, 100),
    _a(F.PAC, U.W, 0, 50, 2, 10),
    _a(F.PRA, U.VA, 0, 52, 2, 10),
    _a(F.F, U.HZ, 0, 48, 2, 100),
    _a(F.PCT, U.PCT, 0, 56, 2, 10),
    _a(F.T, U.C, 0, 58, 2, 10),
    _a(F.ALARM_MES_ID, U.NONE, 0, 60, 2, 1),
) + _CH0_CALCS

del F, U, C

_TYPE_ASSIGNMENTS = {
    InverterType.ONE_CHANNEL: HM1CH_ASSIGNMENT,
    InverterType.TWO_CHANNELS: HM2CH_ASSIGNMENT,
    InverterType.FOUR_CHANNELS: HM4CH_ASSIGNMENT,
}


def unit_symbol(unit: Unit | int) -> str:
    """Return the printable symbol of a unit."""
    return _UNIT_SYMBOLS[Unit(unit)]


def field_name(field: Field | int) -> str:
    """Return the name under which a field is published."""
    return _FIELD_NAMES[Field(field)]


def device_class_for(field: Field | int) -> tuple[DeviceClass, StateClass] | None:
    """Return the discovery device and state class of a field, or None if it has none."""
    return _DEVICE_FIELD_ASSIGNMENT.get(Field(field))


def assignment_for_type(inverter_type: InverterType | int) -> tuple[ByteAssign, ...]:
    """Return the real-time data layout of an inverter family."""
    try:
        kind = InverterType(inverter_type)
    except ValueError:
        raise ValueError(f"unknown inverter type: {inverter_type!r}") from None
    return _TYPE_ASSIGNMENTS[kind]