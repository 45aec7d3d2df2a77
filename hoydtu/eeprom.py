"""Byte-addressed persistent storage with typed big-endian accessors."""

from __future__ import annotations

import struct
from os import PathLike
from pathlib import Path
from types import TracebackType

from hoydtu.settings import EEPROM_SIZE

ERASED = 0xFF

_FLOAT = struct.Struct("<f")


class Eeprom:
    """Fixed-size storage image, optionally backed by a file.

    Integers are stored most significant byte first; floats in the
    little-endian memory order of the device. Changes reach the file
    only on :meth:`commit` or when leaving a ``with`` block without error.
    """

    def __init__(self, path: str | PathLike[str] | None = None, size: int = EEPROM_SIZE) -> None:
        if size <= 0:
            raise ValueError("EEPROM size must be positive")
        self.size = size
        self.path = Path(path) if path is not None else None
        data = bytearray([ERASED] * size)
        if self.path is not None and self.path.exists():
            stored = self.path.read_bytes()[:size]
            data[: len(stored)] = stored
        self._data = data

    # --- helpers -------------------------------------------------------

    def _check(self, addr: int, length: int) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        if addr < 0 or addr + length > self.size:
            raise IndexError(
                f"access of {length} bytes at {addr} is outside the {self.size}-byte EEPROM"
            )

    def _read_int(self, addr: int, width: int) -> int:
        return int.from_bytes(self.read_bytes(addr, width), "big")

    def _write_int(self, addr: int, value: int, width: int) -> None:
        try:
            raw = int(value).to_bytes(width, "big")
        except OverflowError:
            raise ValueError(f"{value} does not fit in {width} bytes") from None
        self.write_bytes(addr, raw)

    # --- reading -------------------------------------------------------

    def read_bytes(self, addr: int, length: int) -> bytes:
        self._check(addr, length)
        return bytes(self._data[addr : addr + length])

    def read_str(self, addr: int, length: int) -> str:
        """Return the text stored in a ``length``-byte field, up to the first NUL."""
        raw = self.read_bytes(addr, length)
        return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")

    def read_bool(self, addr: int) -> bool:
        return self.read_u8(addr) == 0x01

    def read_u8(self, addr: int) -> int:
        return self._read_int(addr, 1)

    def read_u16(self, addr: int) -> int:
        return self._read_int(addr, 2)

    def read_u16_array(self, addr: int, length: int) -> list[int]:
        raw = self.read_bytes(addr, 2 * length)
        return [int.from_bytes(raw[i : i + 2], "big") for i in range(0, len(raw), 2)]

    def read_u32(self, addr: int) -> int:
        return self._read_int(addr, 4)

    def read_u64(self, addr: int) -> int:
        return self._read_int(addr, 8)

    def read_float(self, addr: int) -> float:
        return _FLOAT.unpack(self.read_bytes(addr, 4))[0]

    # --- writing -------------------------------------------------------

    def write_bytes(self, addr: int, data: bytes) -> None:
        self._check(addr, len(data))
        self._data[addr : addr + len(data)] = data

    def write_str(self, addr: int, text: str, length: int) -> None:
        """Store ``text`` in a ``length``-byte field, cut or padded with NULs."""
        raw = text.encode("utf-8")[:length]
        self.write_bytes(addr, raw.ljust(length, b"\x00"))

    def write_bool(self, addr: int, value: bool) -> None:
        self.write_u8(addr, 0x01 if value else 0x00)

    def write_u8(self, addr: int, value: int) -> None:
        self._write_int(addr, value, 1)

    def write_u16(self, addr: int, value: int) -> None:
        self._write_int(addr, value, 2)

    def write_u16_array(self, addr: int, values: list[int] | tuple[int, ...]) -> None:
        for offset, value in enumerate(values):
            self.write_u16(addr + 2 * offset, value)

    def write_u32(self, addr: int, value: int) -> None:
        self._write_int(addr, value, 4)

    def write_u64(self, addr: int, value: int) -> None:
        self._write_int(addr, value, 8)

    def write_float(self, addr: int, value: float) -> None:
        self.write_bytes(addr, _FLOAT.pack(value))

    # --- persistence ---------------------------------------------------

    def commit(self) -> None:
        """Write the image to the backing file, if there is one."""
        if self.path is not None:
            self.path.write_bytes(bytes(self._data))

    def __enter__(self) -> Eeprom:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.commit()