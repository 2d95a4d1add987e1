"""Page-oriented EEPROM simulated in memory."""

from __future__ import annotations

from collections.abc import Iterator

from .errors import InvalidAddressError
from .layout import DATABASE_SIZE

PAGE_COUNT = 64
PAGE_SIZE = 32


class Eeprom:
    """An EEPROM device backed by a byte array, accessed in pages."""

    def __init__(self) -> None:
        self._memory = bytearray(PAGE_SIZE * PAGE_COUNT)

    @staticmethod
    def _check_range(address: int, size: int) -> None:
        if address < 0 or size < 0 or address + size > DATABASE_SIZE:
            raise InvalidAddressError(
                f"range {address}+{size} outside database of {DATABASE_SIZE} bytes"
            )

    @staticmethod
    def _check_page(address: int) -> None:
        if address > DATABASE_SIZE - PAGE_SIZE:
            raise InvalidAddressError(f"page access at {address} beyond last page")

    @staticmethod
    def _fits_one_page(address: int, size: int) -> bool:
        return address % PAGE_SIZE + size < PAGE_SIZE

    @staticmethod
    def _chunks(address: int, size: int) -> Iterator[tuple[int, int]]:
        position = address % PAGE_SIZE
        remaining = size
        while remaining > 0:
            count = PAGE_SIZE - position if remaining > PAGE_SIZE else remaining
            yield address, count
            address += count
            remaining -= count
            position = 0

    def _read_page(self, address: int, size: int) -> bytes:
        self._check_page(address)
        return bytes(self._memory[address:address + size])

    def _write_page(self, address: int, data: bytes) -> None:
        self._check_page(address)
        self._memory[address:address + len(data)] = data

    def read(self, address: int, size: int) -> bytes:
        """Read ``size`` bytes starting at ``address``."""
        self._check_range(address, size)
        if self._fits_one_page(address, size):
            return self._read_page(address, size)
        return b"".join(
            self._read_page(start, count) for start, count in self._chunks(address, size)
        )

    def write(self, address: int, data: bytes) -> None:
        """Write ``data`` starting at ``address``."""
        data = bytes(data)
        self._check_range(address, len(data))
        if self._fits_one_page(address, len(data)):
            self._write_page(address, data)
            return
        offset = 0
        for start, count in self._chunks(address, len(data)):
            self._write_page(start, data[offset:offset + count])
            offset += count