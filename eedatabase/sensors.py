"""Sensor records stored in the EEPROM database."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

from .errors import InvalidDataError
from .layout import NUM_SENSORS, SENSOR_DATA_OFFSET, SENSOR_RECORD_SIZE


def _pack(layout: struct.Struct, *values: object) -> bytes:
    try:
        return layout.pack(*values)
    except (struct.error, OverflowError) as exc:
        raise ValueError(str(exc)) from exc


def _exact(data: bytes, size: int, name: str) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"{name} needs {size} bytes, got {len(data)}")
    return data


@dataclass
class SensorValue:
    """A sensor reading and the time it was taken."""

    timestamp: int = 0
    value: float = 0.0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<If")
    SIZE: ClassVar[int] = 8

    def pack(self) -> bytes:
        return _pack(self._STRUCT, self.timestamp, self.value)

    @classmethod
    def unpack(cls, data: bytes) -> SensorValue:
        timestamp, value = cls._STRUCT.unpack(_exact(data, cls.SIZE, cls.__name__))
        return cls(timestamp=timestamp, value=value)


@dataclass
class SensorData:
    """Bus address, detection flag and latest reading of one sensor."""

    address: int = 0
    detected: bool = False
    data: SensorValue = field(default_factory=SensorValue)

    # Address byte, padding to the 4-byte aligned detection flag.
    _HEAD: ClassVar[struct.Struct] = struct.Struct("<B3xi")
    SIZE: ClassVar[int] = SENSOR_RECORD_SIZE

    def pack(self) -> bytes:
        head = _pack(self._HEAD, self.address, int(bool(self.detected)))
        return head + self.data.pack()

    @classmethod
    def unpack(cls, data: bytes) -> SensorData:
        data = _exact(data, cls.SIZE, cls.__name__)
        head_size = cls._HEAD.size
        address, detected = cls._HEAD.unpack(data[:head_size])
        return cls(
            address=address,
            detected=bool(detected),
            data=SensorValue.unpack(data[head_size:]),
        )


def sensor_offset(index: int) -> int:
    """Return the database address of the sensor record at ``index``."""
    if not 0 <= index < NUM_SENSORS:
        raise InvalidDataError(f"sensor index {index} out of range 0..{NUM_SENSORS - 1}")
    return SENSOR_DATA_OFFSET + index * SensorData.SIZE