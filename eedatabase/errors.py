"""Exceptions raised by EEPROM database operations."""

from __future__ import annotations

from typing import ClassVar


class EepromError(Exception):
    """Base class for every failed EEPROM or database operation."""

    code: ClassVar[int | None] = None


class InvalidSourceError(EepromError):
    """The record handed in for a read or write is missing."""

    code = 1


class InvalidAddressError(EepromError):
    """The requested address range lies outside the database."""

    code = 2


class InvalidDataError(EepromError):
    """An argument such as a sensor index is out of range."""

    code = 3


class ReadError(EepromError):
    """The device failed to read."""

    code = 5


class WriteError(EepromError):
    """The device failed to write."""

    code = 6