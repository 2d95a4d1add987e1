"""Factory default contents of the EEPROM database."""

from __future__ import annotations

import struct

from .eeprom import Eeprom
from .layout import (
    DATABASE_SIGNATURE,
    DATETIME_FIELD_OFFSETS,
    MFG_DATE_OFFSET,
    MODEL_STRING_OFFSET,
    MODEL_STRING_SIZE,
    NAME_STRING_OFFSET,
    NAME_STRING_SIZE,
    PRODUCT_DATA_OFFSET,
    PRODUCT_STRING_OFFSET,
    PRODUCT_STRING_SIZE,
    SIGNATURE_OFFSET,
)

DEFAULT_MODEL = "Model String ....."
DEFAULT_NAME = "Device Name ....."
DEFAULT_PRODUCT = "Product Description....."

# Product code bytes pc0..pc3, in storage order.
DEFAULT_PRODUCT_CODE = (0x00, 0x01, 0x02, 0x03)

# Manufacturing date fields, written in this order.
DEFAULT_MFG_DATE = {
    "second": 0,
    "minute": 10,
    "hour": 10,
    "mday": 1,
    "month": 1,
    "year": 1,
    "wday": 1,
    "yday": 1,
    "isdst": 0,
}


def _padded(text: str, size: int) -> bytes:
    return text.encode("latin-1")[:size].ljust(size, b"\0")


def _reset_product_code(eeprom: Eeprom) -> None:
    for index, code in enumerate(DEFAULT_PRODUCT_CODE):
        eeprom.write(PRODUCT_DATA_OFFSET + index, bytes([code]))


def _reset_product_strings(eeprom: Eeprom) -> None:
    entries = (
        (MODEL_STRING_OFFSET, DEFAULT_MODEL, MODEL_STRING_SIZE),
        (NAME_STRING_OFFSET, DEFAULT_NAME, NAME_STRING_SIZE),
        (PRODUCT_STRING_OFFSET, DEFAULT_PRODUCT, PRODUCT_STRING_SIZE),
    )
    for offset, text, size in entries:
        eeprom.write(PRODUCT_DATA_OFFSET + offset, _padded(text, size))


def _reset_mfg_date(eeprom: Eeprom) -> None:
    base = PRODUCT_DATA_OFFSET + MFG_DATE_OFFSET
    for name, value in DEFAULT_MFG_DATE.items():
        eeprom.write(base + DATETIME_FIELD_OFFSETS[name], struct.pack("<i", value))


def reinit_factory_settings(eeprom: Eeprom) -> None:
    """Write the factory product data and then mark the database valid.

    Any EEPROM error stops the sequence and propagates.
    """
    _reset_product_code(eeprom)
    _reset_product_strings(eeprom)
    _reset_mfg_date(eeprom)
    eeprom.write(SIGNATURE_OFFSET, struct.pack("<I", DATABASE_SIGNATURE))