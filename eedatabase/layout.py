"""Binary layout of the records stored in the EEPROM database.

Records are stored little-endian with natural field alignment.
"""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass, field, fields
from typing import ClassVar

RESERVED_FILLER_SIZE = 16
MODEL_STRING_SIZE = 64
NAME_STRING_SIZE = 64
PRODUCT_STRING_SIZE = 64
NUM_SENSORS = 10
DATABASE_SIGNATURE = 0xAABBCCDD

# Bit masks of the boot-mode switches SW0..SW7.
SWITCH_MASKS = (0x80, 0x40, 0x20, 0x10, 0x08, 0x04, 0x02, 0x01)


def _align(offset: int, alignment: int = 4) -> int:
    return (offset + alignment - 1) // alignment * alignment


def _pack(fmt: str, *values: object) -> bytes:
    try:
        return struct.pack(fmt, *values)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


def _exact(data: bytes, size: int, name: str) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"{name} needs {size} bytes, got {len(data)}")
    return data


def _encode_string(text: str, size: int) -> bytes:
    raw = text.encode("latin-1")
    if len(raw) > size:
        raise ValueError(f"string of {len(raw)} bytes does not fit in {size}")
    return raw.ljust(size, b"\0")


def _decode_string(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


@dataclass
class DateTimeStamp:
    """Calendar time stored as eleven signed 32-bit fields."""

    second: int = 0
    minute: int = 0
    hour: int = 0
    mday: int = 0
    month: int = 0
    year: int = 0
    wday: int = 0
    yday: int = 0
    isdst: int = 0
    extra_1: int = 0
    extra_2: int = 0

    _FORMAT: ClassVar[str] = "<11i"
    SIZE: ClassVar[int] = struct.calcsize("<11i")

    def pack(self) -> bytes:
        return _pack(self._FORMAT, *astuple(self))

    @classmethod
    def unpack(cls, data: bytes) -> DateTimeStamp:
        return cls(*struct.unpack(cls._FORMAT, _exact(data, cls.SIZE, cls.__name__)))


DATETIME_FIELD_OFFSETS = {f.name: index * 4 for index, f in enumerate(fields(DateTimeStamp))}


@dataclass
class Version:
    """Four-part binary revision."""

    major_ver: int = 0
    major_rev: int = 0
    minor_ver: int = 0
    minor_rev: int = 0

    _FORMAT: ClassVar[str] = "<4B"
    SIZE: ClassVar[int] = 4

    def pack(self) -> bytes:
        return _pack(self._FORMAT, *astuple(self))

    @classmethod
    def unpack(cls, data: bytes) -> Version:
        return cls(*struct.unpack(cls._FORMAT, _exact(data, cls.SIZE, cls.__name__)))


@dataclass
class ProductCode:
    """Four-byte device identifier."""

    pc0: int = 0
    pc1: int = 0
    pc2: int = 0
    pc3: int = 0

    _FORMAT: ClassVar[str] = "<4B"
    SIZE: ClassVar[int] = 4

    def pack(self) -> bytes:
        return _pack(self._FORMAT, *astuple(self))

    @classmethod
    def unpack(cls, data: bytes) -> ProductCode:
        return cls(*struct.unpack(cls._FORMAT, _exact(data, cls.SIZE, cls.__name__)))


MODEL_STRING_OFFSET = ProductCode.SIZE
NAME_STRING_OFFSET = MODEL_STRING_OFFSET + MODEL_STRING_SIZE
PRODUCT_STRING_OFFSET = NAME_STRING_OFFSET + NAME_STRING_SIZE
MFG_DATE_OFFSET = _align(PRODUCT_STRING_OFFSET + PRODUCT_STRING_SIZE)


@dataclass
class ProductData:
    """Product identification written once during production."""

    dev_id: ProductCode = field(default_factory=ProductCode)
    model: str = ""
    name: str = ""
    product: str = ""
    mfg_date: DateTimeStamp = field(default_factory=DateTimeStamp)

    SIZE: ClassVar[int] = _align(MFG_DATE_OFFSET + DateTimeStamp.SIZE)

    def pack(self) -> bytes:
        body = b"".join(
            (
                self.dev_id.pack(),
                _encode_string(self.model, MODEL_STRING_SIZE),
                _encode_string(self.name, NAME_STRING_SIZE),
                _encode_string(self.product, PRODUCT_STRING_SIZE),
            )
        ).ljust(MFG_DATE_OFFSET, b"\0")
        return (body + self.mfg_date.pack()).ljust(self.SIZE, b"\0")

    @classmethod
    def unpack(cls, data: bytes) -> ProductData:
        data = _exact(data, cls.SIZE, cls.__name__)
        return cls(
            dev_id=ProductCode.unpack(data[:MODEL_STRING_OFFSET]),
            model=_decode_string(data[MODEL_STRING_OFFSET:NAME_STRING_OFFSET]),
            name=_decode_string(data[NAME_STRING_OFFSET:PRODUCT_STRING_OFFSET]),
            product=_decode_string(
                data[PRODUCT_STRING_OFFSET:PRODUCT_STRING_OFFSET + PRODUCT_STRING_SIZE]
            ),
            mfg_date=DateTimeStamp.unpack(
                data[MFG_DATE_OFFSET:MFG_DATE_OFFSET + DateTimeStamp.SIZE]
            ),
        )


@dataclass
class BootModeSwitch:
    """Eight boot-mode configuration switches packed into one byte."""

    sw0: bool = False
    sw1: bool = False
    sw2: bool = False
    sw3: bool = False
    sw4: bool = False
    sw5: bool = False
    sw6: bool = False
    sw7: bool = False

    SIZE: ClassVar[int] = 1

    def pack(self) -> bytes:
        value = 0
        for switch, mask in zip(astuple(self), SWITCH_MASKS):
            if switch:
                value |= mask
        return bytes([value])

    @classmethod
    def unpack(cls, data: bytes) -> BootModeSwitch:
        (value,) = _exact(data, cls.SIZE, cls.__name__)
        return cls(*(bool(value & mask) for mask in SWITCH_MASKS))


_BOOT_APP_BODY = struct.Struct("<iiIIII")
_BOOT_APP_DATE_OFFSET = Version.SIZE + _BOOT_APP_BODY.size
_BOOT_APP_CHECKSUM_OFFSET = _BOOT_APP_DATE_OFFSET + DateTimeStamp.SIZE


@dataclass
class BootAppInfo:
    """Information shared by the boot loader and the application image."""

    rev: Version = field(default_factory=Version)
    forced_initiated: bool = False
    must_self_check: bool = False
    signature: int = 0
    signature_address: int = 0
    start_address: int = 0
    alt_start_address: int = 0
    install_date: DateTimeStamp = field(default_factory=DateTimeStamp)
    checksum: int = 0

    SIZE: ClassVar[int] = _BOOT_APP_CHECKSUM_OFFSET + 4

    def pack(self) -> bytes:
        try:
            body = _BOOT_APP_BODY.pack(
                int(bool(self.forced_initiated)),
                int(bool(self.must_self_check)),
                self.signature,
                self.signature_address,
                self.start_address,
                self.alt_start_address,
            )
        except struct.error as exc:
            raise ValueError(str(exc)) from exc
        return b"".join(
            (self.rev.pack(), body, self.install_date.pack(), _pack("<I", self.checksum))
        )

    @classmethod
    def unpack(cls, data: bytes) -> BootAppInfo:
        data = _exact(data, cls.SIZE, cls.__name__)
        forced, self_check, signature, sig_addr, start, alt = _BOOT_APP_BODY.unpack(
            data[Version.SIZE:_BOOT_APP_DATE_OFFSET]
        )
        (checksum,) = struct.unpack("<I", data[_BOOT_APP_CHECKSUM_OFFSET:])
        return cls(
            rev=Version.unpack(data[:Version.SIZE]),
            forced_initiated=bool(forced),
            must_self_check=bool(self_check),
            signature=signature,
            signature_address=sig_addr,
            start_address=start,
            alt_start_address=alt,
            install_date=DateTimeStamp.unpack(
                data[_BOOT_APP_DATE_OFFSET:_BOOT_APP_CHECKSUM_OFFSET]
            ),
            checksum=checksum,
        )


@dataclass
class SharedData:
    """Boot mode plus boot and application information."""

    boot_mode: BootModeSwitch = field(default_factory=BootModeSwitch)
    boot: BootAppInfo = field(default_factory=BootAppInfo)
    app: BootAppInfo = field(default_factory=BootAppInfo)

    BOOT_OFFSET: ClassVar[int] = _align(BootModeSwitch.SIZE)
    APP_OFFSET: ClassVar[int] = BOOT_OFFSET + BootAppInfo.SIZE
    SIZE: ClassVar[int] = APP_OFFSET + BootAppInfo.SIZE

    def pack(self) -> bytes:
        head = self.boot_mode.pack().ljust(self.BOOT_OFFSET, b"\0")
        return head + self.boot.pack() + self.app.pack()

    @classmethod
    def unpack(cls, data: bytes) -> SharedData:
        data = _exact(data, cls.SIZE, cls.__name__)
        return cls(
            boot_mode=BootModeSwitch.unpack(data[:BootModeSwitch.SIZE]),
            boot=BootAppInfo.unpack(data[cls.BOOT_OFFSET:cls.APP_OFFSET]),
            app=BootAppInfo.unpack(data[cls.APP_OFFSET:]),
        )


# Absolute addresses within the database image.
PRODUCT_DATA_OFFSET = 0
SHARED_DATA_OFFSET = _align(PRODUCT_DATA_OFFSET + ProductData.SIZE + RESERVED_FILLER_SIZE)
BOOT_INFO_OFFSET = SHARED_DATA_OFFSET + SharedData.BOOT_OFFSET
APP_INFO_OFFSET = SHARED_DATA_OFFSET + SharedData.APP_OFFSET
SIGNATURE_OFFSET = _align(SHARED_DATA_OFFSET + SharedData.SIZE + RESERVED_FILLER_SIZE)
SENSOR_DATA_OFFSET = SIGNATURE_OFFSET + 4
SENSOR_RECORD_SIZE = 16
DATABASE_SIZE = SENSOR_DATA_OFFSET + NUM_SENSORS * SENSOR_RECORD_SIZE