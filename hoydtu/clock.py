"""Clock helpers: NTP queries, Central European daylight saving rules and time formatting."""

from __future__ import annotations

import socket
import time
from datetime import datetime, timezone

NTP_PORT = 123
NTP_PACKET_SIZE = 48
NTP_EPOCH_OFFSET = 2208988800
SECS_PER_HOUR = 3600
SECS_PER_DAY = 86400
TIME_ZONE = 1
DEFAULT_TIMEOUT = 1.5


def _moment(timestamp: int | float) -> datetime:
    return datetime.fromtimestamp(timestamp, timezone.utc)


def _change_days(year: int) -> tuple[int, int]:
    """Return the March and October days on which daylight saving time changes."""
    march = 31 - (5 * year // 4 + 4) % 7
    october = 31 - (5 * year // 4 + 1) % 7
    return march, october


def is_valid_datetime(timestamp: int | float) -> bool:
    """Return True when the timestamp falls after 2020 and before 2038."""
    year = _moment(timestamp).year
    return 2020 < year < 2038


def is_dst_change_day(timestamp: int | float) -> bool:
    """Return True on the days daylight saving time starts or ends."""
    moment = _moment(timestamp)
    march, october = _change_days(moment.year)
    return (moment.month == 3 and moment.day == march) or (
        moment.month == 10 and moment.day == october
    )


def dst_offset(timestamp: int | float, timezone_hours: int = TIME_ZONE) -> int:
    """Return 1 while Central European summer time applies at a UTC timestamp, else 0."""
    moment = _moment(timestamp)
    month = moment.month
    if month < 3 or month > 10:
        return 0
    if 3 < month < 10:
        return 1
    march, october = _change_days(moment.year)
    hours_until_today = moment.hour + 24 * moment.day
    if month == 3 and hours_until_today >= 1 + timezone_hours + 24 * march:
        return 1
    if month == 10 and hours_until_today < 1 + timezone_hours + 24 * october:
        return 1
    return 0


def ntp_request() -> bytes:
    """Return the 48-byte NTP client request."""
    packet = bytearray(NTP_PACKET_SIZE)
    packet[0] = 0b11100011  # leap indicator, version, mode
    packet[1] = 0  # stratum
    packet[2] = 6  # polling interval
    packet[3] = 0xEC  # clock precision
    packet[12:16] = bytes((49, 0x4E, 49, 52))
    return bytes(packet)


def parse_ntp_response(data: bytes, timezone_hours: int = TIME_ZONE) -> int:
    """Return the local time, daylight saving included, carried by an NTP reply."""
    if len(data) < NTP_PACKET_SIZE:
        raise ValueError(f"NTP reply must be at least {NTP_PACKET_SIZE} bytes, got {len(data)}")
    secs_since_1900 = int.from_bytes(bytes(data[40:44]), "big")
    utc = secs_since_1900 - NTP_EPOCH_OFFSET
    return utc + (timezone_hours + dst_offset(utc, timezone_hours)) * SECS_PER_HOUR


def sync_interval(utc: int | float) -> int:
    """Return seconds until the next time sync: hourly early on change days, else twice a day."""
    if is_dst_change_day(utc) and _moment(utc).hour <= 4:
        return SECS_PER_HOUR
    return SECS_PER_DAY // 2


def fetch_ntp_time(server: str, port: int = NTP_PORT, timeout: float = DEFAULT_TIMEOUT) -> int:
    """Ask an NTP server for the time and return it as local time.

    Raises TimeoutError when no usable reply arrives within ``timeout`` seconds.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(ntp_request(), (server, port))
        deadline = time.monotonic() + timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise TimeoutError(f"no NTP reply from {server}:{port}")
            sock.settimeout(remaining)
            try:
                data, _ = sock.recvfrom(512)
            except socket.timeout:
                raise TimeoutError(f"no NTP reply from {server}:{port}") from None
            if len(data) >= NTP_PACKET_SIZE:
                return parse_ntp_response(data)


def format_time(timestamp: int | float) -> str:
    """Return HH:MM:SS."""
    return _moment(timestamp).strftime("%H:%M:%S")


def format_datetime(timestamp: int | float) -> str:
    """Return YYYY-MM-DD+HH:MM:SS."""
    moment = _moment(timestamp)
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}+{format_time(timestamp)}"


def format_date(timestamp: int | float) -> str:
    """Return YYYY-MM-DD."""
    moment = _moment(timestamp)
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"