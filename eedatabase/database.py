"""Typed access to the records of the EEPROM database."""

from __future__ import annotations

import struct

from .eeprom import PAGE_SIZE, Eeprom
from .errors import EepromError, InvalidSourceError
from .factory import reinit_factory_settings
from .layout import (
    APP_INFO_OFFSET,
    BOOT_INFO_OFFSET,
    DATABASE_SIGNATURE,
    DATABASE_SIZE,
    PRODUCT_DATA_OFFSET,
    SIGNATURE_OFFSET,
    BootAppInfo,
    ProductData,
)
from .sensors import SensorData, sensor_offset

_SIGNATURE = struct.Struct("<I")


def _require(record: object, what: str) -> None:
    if record is None:
        raise InvalidSourceError(f"no {what} given")


class Database:
    """The structured database stored on an EEPROM device."""

    def __init__(self, eeprom: Eeprom) -> None:
        self.eeprom = eeprom

    def zero_fill(self) -> None:
        """Overwrite the database with zeros, one page at a time.

        Stops at the first page that cannot be written and raises its error.
        """
        zeros = bytes(PAGE_SIZE)
        for address in range(0, DATABASE_SIZE, PAGE_SIZE):
            self.eeprom.write(address, zeros)

    def initialize(self) -> None:
        """Restore factory settings unless the database signature is valid."""
        if self.read_signature() == DATABASE_SIGNATURE:
            return
        # Failures while restoring defaults are deliberately not reported.
        try:
            self.zero_fill()
        except EepromError:
            pass
        try:
            reinit_factory_settings(self.eeprom)
        except EepromError:
            pass

    def read_boot_info(self) -> BootAppInfo:
        return BootAppInfo.unpack(self.eeprom.read(BOOT_INFO_OFFSET, BootAppInfo.SIZE))

    def write_boot_info(self, info: BootAppInfo) -> None:
        _require(info, "boot information")
        self.eeprom.write(BOOT_INFO_OFFSET, info.pack())

    def read_app_info(self) -> BootAppInfo:
        return BootAppInfo.unpack(self.eeprom.read(APP_INFO_OFFSET, BootAppInfo.SIZE))

    def write_app_info(self, info: BootAppInfo) -> None:
        _require(info, "application information")
        self.eeprom.write(APP_INFO_OFFSET, info.pack())

    def read_product_info(self) -> ProductData:
        return ProductData.unpack(self.eeprom.read(PRODUCT_DATA_OFFSET, ProductData.SIZE))

    def write_product_info(self, info: ProductData) -> None:
        _require(info, "product information")
        self.eeprom.write(PRODUCT_DATA_OFFSET, info.pack())

    def read_signature(self) -> int:
        (signature,) = _SIGNATURE.unpack(self.eeprom.read(SIGNATURE_OFFSET, _SIGNATURE.size))
        return signature

    def write_signature(self, signature: int) -> None:
        _require(signature, "signature")
        try:
            raw = _SIGNATURE.pack(signature)
        except struct.error as exc:
            raise ValueError(str(exc)) from exc
        self.eeprom.write(SIGNATURE_OFFSET, raw)

    def read_sensor(self, index: int) -> SensorData:
        return SensorData.unpack(self.eeprom.read(sensor_offset(index), SensorData.SIZE))

    def write_sensor(self, index: int, sensor: SensorData) -> None:
        _require(sensor, "sensor record")
        self.eeprom.write(sensor_offset(index), sensor.pack())