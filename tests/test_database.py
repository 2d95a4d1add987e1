import pytest

from eedatabase.database import Database
from eedatabase.eeprom import Eeprom
from eedatabase.errors import InvalidAddressError, InvalidDataError, InvalidSourceError
from eedatabase.layout import (
    DATABASE_SIGNATURE,
    BootAppInfo,
    DateTimeStamp,
    ProductCode,
    ProductData,
    Version,
)
from eedatabase.sensors import SensorData, SensorValue


@pytest.fixture
def db():
    return Database(Eeprom())


def _app_info():
    return BootAppInfo(
        rev=Version(major_ver=0, major_rev=1, minor_ver=4, minor_rev=0),
        start_address=0x80000000,
        alt_start_address=0x8C000000,
        signature=0xA1B2C3D4,
        signature_address=0x8000000C,
        install_date=DateTimeStamp(
            second=0, minute=10, hour=10, mday=11, month=5, year=2016, wday=2, yday=132
        ),
    )


def test_initialize_blank_restores_factory(db):
    db.initialize()
    assert db.read_signature() == DATABASE_SIGNATURE
    product = db.read_product_info()
    assert product.model == "Model String ....."
    assert product.dev_id == ProductCode(0, 1, 2, 3)


def test_initialize_keeps_valid_database(db):
    custom = ProductData(dev_id=ProductCode(3, 0, 5, 0), model="custom")
    db.write_product_info(custom)
    db.write_signature(DATABASE_SIGNATURE)
    db.initialize()
    assert db.read_product_info() == custom


def test_initialize_with_bad_signature_resets(db):
    db.write_product_info(ProductData(model="custom"))
    db.write_signature(0x12345678)
    db.initialize()
    assert db.read_product_info().model == "Model String ....."
    assert db.read_signature() == DATABASE_SIGNATURE


def test_initialize_clears_app_info_when_invalid(db):
    db.write_app_info(_app_info())
    db.initialize()
    assert db.read_app_info() == BootAppInfo()


def test_zero_fill_stops_at_last_page(db):
    db.write_product_info(ProductData(model="custom"))
    db.write_app_info(_app_info())
    with pytest.raises(InvalidAddressError):
        db.zero_fill()
    assert db.read_product_info() == ProductData()
    assert db.read_app_info() == BootAppInfo()


def test_app_info_round_trip(db):
    info = _app_info()
    db.write_app_info(info)
    assert db.read_app_info() == info


def test_boot_and_app_info_are_independent(db):
    boot = BootAppInfo(signature=0xA1B2C3D4, forced_initiated=True, checksum=7)
    app = _app_info()
    db.write_boot_info(boot)
    db.write_app_info(app)
    assert db.read_boot_info() == boot
    assert db.read_app_info() == app


def test_product_info_round_trip(db):
    product = db.read_product_info()
    product.dev_id.pc0 = 0x03
    product.dev_id.pc2 = 0x05
    product.mfg_date.mday = 21
    product.mfg_date.month = 5
    product.mfg_date.year = 2016
    db.write_product_info(product)
    assert db.read_product_info() == product


def test_signature_round_trip(db):
    db.write_signature(0xA1B2C3D4)
    assert db.read_signature() == 0xA1B2C3D4


def test_signature_out_of_range(db):
    with pytest.raises(ValueError):
        db.write_signature(-1)


def test_sensor_round_trip(db):
    first = SensorData(address=0x01, detected=True, data=SensorValue(1462939739, 55.45))
    second = SensorData(address=0x03, detected=True, data=SensorValue(1462939739, 14.33))
    db.write_sensor(0, first)
    db.write_sensor(2, second)
    got = db.read_sensor(0)
    assert got.address == 0x01
    assert got.detected is True
    assert got.data.timestamp == 1462939739
    assert got.data.value == pytest.approx(55.45, rel=1e-6)
    assert db.read_sensor(2).data.value == pytest.approx(14.33, rel=1e-6)
    assert db.read_sensor(1) == SensorData()


def test_sensor_does_not_disturb_signature(db):
    db.write_signature(DATABASE_SIGNATURE)
    db.write_sensor(0, SensorData(address=0x02, detected=False))
    assert db.read_signature() == DATABASE_SIGNATURE


@pytest.mark.parametrize("index", [-1, 10, 255])
def test_sensor_index_out_of_range(db, index):
    with pytest.raises(InvalidDataError):
        db.read_sensor(index)
    with pytest.raises(InvalidDataError):
        db.write_sensor(index, SensorData())


@pytest.mark.parametrize(
    "write",
    [
        lambda database: database.write_boot_info(None),
        lambda database: database.write_app_info(None),
        lambda database: database.write_product_info(None),
        lambda database: database.write_signature(None),
    ],
)
def test_missing_record_raises(db, write):
    with pytest.raises(InvalidSourceError) as info:
        write(db)
    assert info.value.code == 1
    assert db.read_signature() == 0
    assert db.read_app_info() == BootAppInfo()


def test_missing_sensor_raises_before_index_check(db):
    with pytest.raises(InvalidSourceError):
        db.write_sensor(99, None)