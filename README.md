# eedatabase

A small device database kept in a simulated EEPROM of 64 pages of 32 bytes.
The memory holds a fixed binary layout: product information, boot and
application records shared between a bootloader and an application, a
database signature and a table of ten sensor records.

## Install

```
pip install .
```

## Using it

```python
from eedatabase.eeprom import Eeprom
from eedatabase.database import Database

eeprom = Eeprom()
db = Database(eeprom)
db.initialize()  # zero-fills and writes factory defaults if the signature is not valid

product = db.read_product_info()
print(product.dev_id, product.model, product.name, product.product)

app = db.read_app_info()
app.start_address = 0x80000000
db.write_app_info(app)

sensor = db.read_sensor(0)
sensor.address = 0x01
sensor.detected = True
sensor.data.value = 21.5
db.write_sensor(0, sensor)
```

`Database` offers `read_`/`write_` pairs for `boot_info`, `app_info`,
`product_info`, `signature` and `sensor` (by index 0 to 9), plus
`zero_fill()` and `initialize()`. Passing `None` to a write method raises
`InvalidSourceError`.

## Records

Records are plain dataclasses with `pack()` and a `unpack(data)` class
method, converting to and from their fixed little-endian byte layout:

- in `eedatabase.layout`: `ProductData`, `ProductCode`, `DateTimeStamp`,
  `Version`, `BootAppInfo`, `BootModeSwitch`, `SharedData`;
- in `eedatabase.sensors`: `SensorData`, `SensorValue`, and
  `sensor_offset(index)`, which gives the address of a sensor record.

`unpack` raises `ValueError` when given the wrong number of bytes, and
`pack` raises `ValueError` for values that do not fit their fields (for
example a product string longer than 64 bytes).

## Raw access

`Eeprom.read(address, size)` and `Eeprom.write(address, data)` give raw,
page-wise access to the memory. Accesses that run outside the database
area, or that touch a page starting past the last full page of it, raise
`InvalidAddressError`; a sensor index out of range raises
`InvalidDataError`. All errors derive from `EepromError` in
`eedatabase.errors`.

`eedatabase.factory.reinit_factory_settings(eeprom)` rewrites the product
code, product strings, manufacturing date and the database signature with
their factory values.

## Demo

```
eedatabase-demo
```

Initializes a fresh database, updates the product details, application
information and sensor table, reads each back and prints it, then checks
access to the last page of the database.

## What it does not do

The EEPROM exists only in memory: nothing is saved to a file or talks to a
real device, so every `Eeprom` starts out blank and its contents are lost
when it goes away.

## Tests

```
pip install .[test]
pytest
```