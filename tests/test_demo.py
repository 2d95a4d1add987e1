import struct

import pytest

from eedatabase.database import Database
from eedatabase.demo import (
    check_max_page_access,
    main,
    update_application_information,
    update_product_details,
    update_sensor_data,
)
from eedatabase.eeprom import PAGE_SIZE, Eeprom
from eedatabase.layout import DATABASE_SIZE, NUM_SENSORS, ProductCode, Version
from eedatabase.sensors import SensorData


@pytest.fixture
def eeprom():
    return Eeprom()


@pytest.fixture
def database(eeprom):
    db = Database(eeprom)
    db.initialize()
    return db


def _float32(value):
    return struct.unpack("<f", struct.pack("<f", value))[0]


def test_product_details_keep_factory_codes(database):
    product = update_product_details(database)
    assert product.dev_id == ProductCode(0x03, 0x01, 0x05, 0x03)
    assert (product.mfg_date.mday, product.mfg_date.month, product.mfg_date.year) == (
        21,
        5,
        2016,
    )


def test_product_details_preserve_strings(database):
    product = update_product_details(database)
    assert product.model == "Model String ....."
    assert product.name == "Device Name ....."
    assert product == database.read_product_info()


def test_product_details_on_blank_device(eeprom):
    product = update_product_details(Database(eeprom))
    assert product.dev_id == ProductCode(0x03, 0, 0x05, 0)
    assert product.model == ""


def test_product_details_output(database, capsys):
    update_product_details(database)
    out = capsys.readouterr().out
    assert "Product Details:-" in out
    assert "\tIdentifier :  3  1  5  3\n" in out
    assert "\tMfg Date   : 21/5/2016\n" in out


def test_application_information_values(database):
    info = update_application_information(database)
    assert info.start_address == 0x80000000
    assert info.alt_start_address == 0x8C000000
    assert info.signature == 0xA1B2C3D4
    assert info.signature_address == 0x8000000C
    assert info.rev == Version(major_ver=0, major_rev=1, minor_ver=4, minor_rev=0)
    assert info.install_date.yday == 132
    assert info.forced_initiated is False


def test_application_information_preserves_checksum(database):
    stored = database.read_app_info()
    stored.checksum = 1234
    database.write_app_info(stored)
    info = update_application_information(database)
    assert info.checksum == 1234
    assert database.read_app_info() == info


def test_application_information_leaves_boot_info(database):
    before = database.read_boot_info()
    update_application_information(database)
    assert database.read_boot_info() == before


def test_application_information_output(database, capsys):
    update_application_information(database)
    out = capsys.readouterr().out
    assert "\tStart Address     : 0x80000000\n" in out
    assert "\tSignature         : 0xa1b2c3d4\n" in out
    assert "\tRevision          : 1.0.0.4\n" in out
    assert "\tInstallation Date : 11/5/2016\n" in out


def test_sensor_data_records(database):
    sensors = update_sensor_data(database)
    assert [s.address for s in sensors] == [1, 2, 3, 4]
    assert [s.detected for s in sensors] == [True, False, True, False]
    assert [s.data.value for s in sensors] == [
        _float32(55.45),
        0.0,
        _float32(14.33),
        0.0,
    ]
    assert all(s.data.timestamp == 1462939739 for s in sensors)


def test_sensor_data_output(database, capsys):
    update_sensor_data(database)
    out = capsys.readouterr().out
    assert out.startswith("Sensor Data:-\n")
    assert "\tAddress           : 0x01 \n" in out
    assert "\tValue             : 55.45 \n" in out
    assert "\tValue             : 14.33 \n" in out
    assert out.count("Detection Status  : Found\n") == 2
    assert out.count("Detection Status  : Not found\n") == 2


def test_max_page_access_returns_pattern(eeprom):
    readback = check_max_page_access(eeprom)
    assert readback == bytes(range(PAGE_SIZE))
    assert eeprom.read(DATABASE_SIZE - PAGE_SIZE, PAGE_SIZE) == readback


def test_max_page_access_output(eeprom, capsys):
    check_max_page_access(eeprom)
    assert capsys.readouterr().out == "Max page access succeeded\n\n"


def test_main_runs_all_steps(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    sections = [
        "Product Details:-",
        "Application Details:-",
        "Sensor Data:-",
        "Max page access succeeded",
    ]
    positions = [out.index(section) for section in sections]
    assert positions == sorted(positions)


def test_main_rejects_unknown_arguments():
    with pytest.raises(SystemExit) as excinfo:
        main(["--bogus"])
    assert excinfo.value.code == 2