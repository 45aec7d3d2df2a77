import pytest

from hoydtu.fields import (
    ALARM_DATA_ASSIGNMENT,
    CMD_CALC,
    INFO_ASSIGNMENT,
    SYSTEM_CONFIG_ASSIGNMENT,
    ByteAssign,
    CalcFunc,
    DeviceClass,
    Field,
    InverterType,
    StateClass,
    Unit,
    assignment_for_type,
    device_class_for,
    field_name,
    unit_symbol,
)


def test_unit_symbols_from_table():
    assert unit_symbol(Unit.KWH) == "kWh"
    assert unit_symbol(Unit.C) == "°C"
    assert unit_symbol(Unit.NONE) == ""


def test_field_names_from_table():
    assert field_name(Field.YD) == "YieldDay"
    assert field_name(Field.ACT_PWR_LIMIT) == "PowerLimit"
    assert field_name(int(Field.LAST_ALARM_CODE)) == "LastAlarmCode"


def test_every_field_and_unit_has_a_name():
    assert all(field_name(f) for f in Field)
    assert len({field_name(f) for f in Field}) == len(Field)
    assert len({unit_symbol(u) for u in Unit}) == len(Unit)


def test_unknown_field_raises():
    with pytest.raises(ValueError):
        field_name(len(Field))


def test_device_class_assignment():
    assert device_class_for(Field.YD) == (DeviceClass.ENERGY, StateClass.TOTAL_INCREASING)
    assert device_class_for(Field.F) == (DeviceClass.FREQ, StateClass.NONE)
    assert device_class_for(Field.FW_VERSION) is None


def test_class_labels():
    energy_device, energy_state = device_class_for(Field.YD)
    assert energy_device.label == "energy"
    assert energy_state.label == "total_increasing"
    pct_device, pct_state = device_class_for(Field.PCT)
    assert pct_device.label is None
    assert pct_state.label is None


def test_is_calculated():
    calc = ByteAssign(Field.EFF, Unit.PCT, 0, CalcFunc.EFF_CH0, 0, CMD_CALC)
    plain = ByteAssign(Field.UAC, Unit.V, 0, 14, 2, 10)
    assert calc.is_calculated()
    assert not plain.is_calculated()


@pytest.mark.parametrize("kind", list(InverterType))
def test_layout_channels_match_type(kind):
    layout = assignment_for_type(kind)
    channels = {entry.ch for entry in layout}
    assert channels == set(range(kind.channels + 1))


@pytest.mark.parametrize("kind", list(InverterType))
def test_layout_entries_are_consistent(kind):
    for entry in assignment_for_type(kind):
        if entry.is_calculated():
            assert entry.start in set(CalcFunc)
        else:
            assert entry.num in (2, 4)
            assert entry.div in (1, 10, 100, 1000)


@pytest.mark.parametrize("kind", list(InverterType))
def test_each_channel_field_pair_is_unique(kind):
    pairs = [(e.ch, e.field) for e in assignment_for_type(kind)]
    assert len(pairs) == len(set(pairs))


@pytest.mark.parametrize("kind", list(InverterType))
def test_first_channel_voltage_is_at_payload_start(kind):
    first = assignment_for_type(kind)[0]
    assert (first.field, first.ch, first.start, first.div) == (Field.UDC, 1, 2, 10)


def test_layouts_differ_per_type():
    one = assignment_for_type(InverterType.ONE_CHANNEL)
    four = assignment_for_type(InverterType.FOUR_CHANNELS)
    assert len(four) > len(one)
    assert assignment_for_type(int(InverterType.TWO_CHANNELS)) is assignment_for_type(
        InverterType.TWO_CHANNELS
    )


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        assignment_for_type(len(InverterType))


def test_auxiliary_layouts():
    assert field_name(INFO_ASSIGNMENT[0].field) == "FWVersion"
    assert field_name(SYSTEM_CONFIG_ASSIGNMENT[0].field) == "PowerLimit"
    assert field_name(ALARM_DATA_ASSIGNMENT[0].field) == "LastAlarmCode"
    assert unit_symbol(SYSTEM_CONFIG_ASSIGNMENT[0].unit) == "%"
    assert [e.is_calculated() for e in INFO_ASSIGNMENT] == [False] * len(INFO_ASSIGNMENT)