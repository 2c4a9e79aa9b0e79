# vicblue

Decrypt and decode the encrypted manufacturer data that solar charge
controllers and battery monitors (shunts) broadcast in their Bluetooth
Low Energy advertisements.

An advertisement's manufacturer data (up to 26 bytes) carries a 16-byte
block encrypted with AES-128 in counter mode. Bytes 7 and 8 of the data
form the start of the initialisation vector and bytes 10 to 25 are the
encrypted block. Once decrypted with the device's 16-byte key, the block
is decoded into a reading:

- **Battery monitor**: time to go (in days), battery voltage, alarm
  state, auxiliary input (aux voltage, mid-point voltage or temperature
  in Kelvin), battery current, consumed amp-hours and state of charge.
- **Solar controller**: device state, controller error, battery voltage,
  battery current, today's yield, PV power and load current.

Fields that the device marks as unavailable are decoded as `None` and
shown as `n/a-` in reports.

## Installation

```
pip install .
```

## Command line

```
vicblue --help
```

The `vicblue` command takes manufacturer data as hex, decrypts it and
prints one report line per advertisement.

```
vicblue --device battery --key <32 hex digits> <manufacturer data as hex> ...
vicblue --device solar --keys keys.json --name <device name> < adverts.txt
```

Options:

- `--device {battery,solar}` (required): which decoder to use.
- `--key HEX`: the 16-byte key as hex.
- `--keys FILE` with `--name NAME`: a JSON file mapping device names to
  hex keys, and the name whose key to use. Exactly one of `--key` and
  `--keys` must be given.
- `-v`, `--verbose`: before each report, print the raw data, key,
  salt (initialisation vector) and cipher block as hex.
- Positional arguments: manufacturer data as hex. When none are given,
  lines are read from standard input.

Hex may contain `:`, `-`, spaces or tabs between digits. Empty lines are
skipped. A line of a single character is treated as a console command:
`v` or `V` toggles verbose output. Data that is not valid hex or is
longer than 26 bytes is reported on standard error and makes the exit
status 1; a missing or malformed key also exits with status 1.

## Library use

```python
from vicblue.advert import Advertisement
from vicblue.battery_monitor import decode_battery
from vicblue.solar_controller import decode_solar

advert = Advertisement.from_bytes(raw_manufacturer_data)
block = advert.decrypt(key)          # key is 16 bytes, block is 16 bytes

reading = decode_battery(block)
print(reading.report())

solar = decode_solar(block)
print(solar.report())
```

Other pieces:

- `vicblue.advert`: `Advertisement` (with `iv` and `cipher` properties),
  `decrypt_block(key, iv, cipher)`, `lookup_key(name, keys)` which raises
  `KeyNotSetError` for an unknown name, and the dump helpers
  `format_raw`, `format_block` and `format_bins`.
- `vicblue.battery_monitor`: `BatteryReading`, `AuxKind` and
  `alarm_label(bits)`.
- `vicblue.solar_controller`: `SolarReading`, `device_state_label(code)`
  and `controller_error_label(code)`.
- `vicblue.console.Console`: holds the verbose flag and toggles it on
  the single-character command `v` or `V`.

## What this package does not do

It does not scan for or listen to Bluetooth devices. You capture the
manufacturer data yourself and pass it in as bytes or hex.

## Running the tests

```
pip install .[test]
pytest
```