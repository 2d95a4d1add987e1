"""Command that fills a fresh database with sample records and prints them back."""

from __future__ import annotations

import argparse

from .database import Database
from .eeprom import PAGE_SIZE, Eeprom
from .errors import ReadError
from .layout import DATABASE_SIZE, BootAppInfo, ProductData
from .sensors import SensorData, SensorValue

SAMPLE_TIMESTAMP = 1462939739

# (index, bus address, value, detected) of the sample sensor records.
SAMPLE_SENSORS = (
    (0, 0x01, 55.45, True),
    (1, 0x02, 0.0, False),
    (2, 0x03, 14.33, True),
    (3, 0x04, 0.0, False),
)


def update_product_details(database: Database) -> ProductData:
    """Change part of the product record, read it back and print it."""
    product = database.read_product_info()

    product.dev_id.pc0 = 0x03
    product.dev_id.pc2 = 0x05
    product.mfg_date.mday = 21
    product.mfg_date.month = 5
    product.mfg_date.year = 2016

    database.write_product_info(product)
    product = database.read_product_info()

    code = product.dev_id
    date = product.mfg_date
    print("Product Details:-")
    print(f"\tIdentifier : {code.pc0:2d} {code.pc1:2d} {code.pc2:2d} {code.pc3:2d}")
    print(f"\tMfg Date   : {date.mday}/{date.month}/{date.year}\n")
    return product


def update_application_information(database: Database) -> BootAppInfo:
    """Store sample application information, read it back and print it."""
    info = database.read_app_info()

    info.start_address = 0x80000000
    info.alt_start_address = 0x8C000000
    info.forced_initiated = False
    info.must_self_check = False
    info.signature = 0xA1B2C3D4
    info.signature_address = 0x8000000C

    info.rev.major_rev = 1
    info.rev.major_ver = 0
    info.rev.minor_rev = 0
    info.rev.minor_ver = 4

    date = info.install_date
    date.hour = 10
    date.minute = 10
    date.second = 0
    date.mday = 11
    date.month = 5
    date.wday = 2
    date.yday = 132
    date.year = 2016
    date.isdst = 0

    database.write_app_info(info)
    info = database.read_app_info()

    rev = info.rev
    date = info.install_date
    print("Application Details:-")
    print(f"\tStart Address     : 0x{info.start_address:08x}")
    print(f"\tAlt. Start Address: 0x{info.alt_start_address:08x}")
    print(f"\tSignature Address : 0x{info.signature_address:08x}")
    print(f"\tSignature         : 0x{info.signature:08x}")
    print(
        f"\tRevision          : "
        f"{rev.major_rev}.{rev.major_ver}.{rev.minor_rev}.{rev.minor_ver}"
    )
    print(f"\tInstallation Date : {date.mday}/{date.month}/{date.year}\n")
    return info


def update_sensor_data(database: Database) -> list[SensorData]:
    """Store the sample sensor records, read them back and print them."""
    for index, address, value, detected in SAMPLE_SENSORS:
        database.write_sensor(
            index,
            SensorData(
                address=address,
                detected=detected,
                data=SensorValue(timestamp=SAMPLE_TIMESTAMP, value=value),
            ),
        )

    print("Sensor Data:-")
    sensors = []
    for index, *_ in SAMPLE_SENSORS:
        sensor = database.read_sensor(index)
        sensors.append(sensor)
        print(f"\tAddress           : 0x{sensor.address:02x} ")
        print(f"\tDetection Status  : {'Found' if sensor.detected else 'Not found'}")
        print(f"\tValue             : {sensor.data.value:0.2f} ")
        print(f"\tTimestamp         : {sensor.data.timestamp}\n")
    return sensors


def check_max_page_access(eeprom: Eeprom) -> bytes:
    """Write a pattern to the last full page of the database and verify it."""
    address = DATABASE_SIZE - PAGE_SIZE
    pattern = bytes(range(PAGE_SIZE))

    eeprom.write(address, pattern)
    readback = eeprom.read(address, PAGE_SIZE)
    if readback != pattern:
        raise ReadError(f"last page at {address} read back differently")

    print("Max page access succeeded\n")
    return readback


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="eedatabase",
        description="Initialise an in-memory EEPROM database and exercise its records.",
    )
    parser.parse_args(argv)

    eeprom = Eeprom()
    database = Database(eeprom)
    database.initialize()

    update_product_details(database)
    update_application_information(database)
    update_sensor_data(database)
    check_max_page_access(eeprom)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())