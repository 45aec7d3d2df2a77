import calendar
import socket
import threading

import pytest

from hoydtu.clock import (
    NTP_EPOCH_OFFSET,
    NTP_PACKET_SIZE,
    SECS_PER_DAY,
    SECS_PER_HOUR,
    dst_offset,
    fetch_ntp_time,
    format_date,
    format_datetime,
    format_time,
    is_dst_change_day,
    is_valid_datetime,
    ntp_request,
    parse_ntp_response,
    sync_interval,
)


def ts(*parts):
    return calendar.timegm(tuple(parts) + (0,) * (9 - len(parts)))


def last_sunday(year, month):
    weeks = calendar.monthcalendar(year, month)
    return max(week[calendar.SUNDAY] for week in weeks)


def ntp_reply(utc):
    reply = bytearray(NTP_PACKET_SIZE)
    reply[40:44] = (utc + NTP_EPOCH_OFFSET).to_bytes(4, "big")
    return bytes(reply)


def test_valid_datetime_range():
    assert is_valid_datetime(ts(2021, 1, 1))
    assert is_valid_datetime(ts(2037, 12, 31))
    assert not is_valid_datetime(ts(2020, 12, 31))
    assert not is_valid_datetime(0)


@pytest.mark.parametrize("year", range(2021, 2038))
def test_change_days_are_last_sundays(year):
    march = last_sunday(year, 3)
    october = last_sunday(year, 10)
    assert is_dst_change_day(ts(year, 3, march, 12))
    assert is_dst_change_day(ts(year, 10, october, 12))
    assert not is_dst_change_day(ts(year, 3, march - 1, 12))
    assert not is_dst_change_day(ts(year, 10, october - 1, 12))


def test_dst_offset_outside_and_inside_summer():
    assert dst_offset(ts(2022, 1, 15, 12)) == 0
    assert dst_offset(ts(2022, 12, 1, 12)) == 0
    assert dst_offset(ts(2022, 7, 1, 12)) == 1
    assert dst_offset(ts(2022, 4, 1, 0)) == 1


def test_dst_offset_switches_on_change_days():
    march = last_sunday(2022, 3)
    october = last_sunday(2022, 10)
    assert dst_offset(ts(2022, 3, march, 1)) == 0
    assert dst_offset(ts(2022, 3, march, 2)) == 1
    assert dst_offset(ts(2022, 10, october, 1)) == 1
    assert dst_offset(ts(2022, 10, october, 2)) == 0


def test_ntp_request_layout():
    request = ntp_request()
    assert len(request) == NTP_PACKET_SIZE
    assert request[:4] == b"\xe3\x00\x06\xec"
    assert request[12:16] == b"1N14"
    assert request[4:12] == bytes(8)


def test_parse_ntp_response_winter_and_summer():
    winter = ts(2023, 1, 15, 12)
    summer = ts(2023, 7, 15, 12)
    assert parse_ntp_response(ntp_reply(winter)) == winter + SECS_PER_HOUR
    assert parse_ntp_response(ntp_reply(summer)) == summer + 2 * SECS_PER_HOUR
    assert parse_ntp_response(ntp_reply(winter), timezone_hours=0) == winter


def test_parse_ntp_response_too_short():
    with pytest.raises(ValueError):
        parse_ntp_response(bytes(NTP_PACKET_SIZE - 1))


def test_sync_interval():
    march = last_sunday(2022, 3)
    assert sync_interval(ts(2022, 3, march, 3)) == SECS_PER_HOUR
    assert sync_interval(ts(2022, 3, march, 5)) == SECS_PER_DAY // 2
    assert sync_interval(ts(2022, 6, 1, 3)) == SECS_PER_DAY // 2


def test_formatting():
    moment = ts(2022, 5, 6, 7, 8, 9)
    assert format_time(moment) == "07:08:09"
    assert format_date(moment) == "2022-05-06"
    assert format_datetime(moment) == format_date(moment) + "+" + format_time(moment)


def test_fetch_ntp_time_from_local_server():
    utc = ts(2023, 1, 15, 12)
    server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    server.bind(("127.0.0.1", 0))
    server.settimeout(5)
    received = []

    def serve():
        data, addr = server.recvfrom(512)
        received.append(data)
        server.sendto(ntp_reply(utc), addr)

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        result = fetch_ntp_time("127.0.0.1", server.getsockname()[1], timeout=3)
    finally:
        thread.join(5)
        server.close()
    assert result == utc + SECS_PER_HOUR
    assert received == [ntp_request()]


def test_fetch_ntp_time_times_out():
    silent = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    silent.bind(("127.0.0.1", 0))
    try:
        with pytest.raises(TimeoutError):
            fetch_ntp_time("127.0.0.1", silent.getsockname()[1], timeout=0.2)
    finally:
        silent.close()