"""Decoding and reporting of solar charge controller advertisements."""

from __future__ import annotations

from dataclasses import dataclass

BLOCK_SIZE = 16

_DEVICE_STATES = ("_OFF_", "Low_P", "Fault", "Bulk ", "Absor", "Float", "Store", "Equal")
_CONTROLLER_ERRORS = (
    "no_err",
    "BATHOT",
    "VOLTHI",
    "REMC_A",
    "REMC_B",
    "REMC_C",
    "REMB_A",
    "REMB_B",
    "REMB_C",
)


def _label(labels: tuple[str, ...], code: int) -> str:
    if 0 <= code < len(labels):
        return labels[code]
    return f"*{code:02X}*"


def device_state_label(code: int) -> str:
    """Label for the charger's device state byte."""
    return _label(_DEVICE_STATES, code)


def controller_error_label(code: int) -> str:
    """Label for the charger's error byte."""
    return _label(_CONTROLLER_ERRORS, code)


@dataclass(frozen=True)
class SolarReading:
    """Values decoded from one decrypted solar controller block.

    ``None`` marks a value the device reports as not available.
    """

    device_state: int
    error_code: int
    battery_volts: float | None
    battery_amps: float | None
    yield_today_kwh: float | None
    pv_power_w: float | None
    load_amps: float | None

    def report(self) -> str:
        """One line summarising the reading."""
        return (
            f"{device_state_label(self.device_state)} "
            f"{controller_error_label(self.error_code)} "
            f"{_fmt(self.battery_volts, 2)}V "
            f"{_fmt(self.battery_amps, 1)}A| "
            f"{_fmt(self.yield_today_kwh, 2)}kWh "
            f"{_fmt(self.pv_power_w, 0)}W "
            f"{_fmt(self.load_amps, 1)}A\n"
        )


def _fmt(value: float | None, digits: int) -> str:
    return "n/a-" if value is None else f"{value:.{digits}f}"


def _signed16(low: int, high: int) -> int | None:
    magnitude = ((high & 0x7F) << 8) | low
    if magnitude == 0x7FFF:
        return None
    return magnitude - 0x8000 if high & 0x80 else magnitude


def _unsigned16(low: int, high: int) -> int | None:
    value = (high << 8) | low
    return None if value == 0xFFFF else value


def _scaled(raw: int | None, divisor: float) -> float | None:
    return None if raw is None else raw / divisor


def _load_amps(block: bytes) -> float | None:
    raw = ((block[11] & 0x01) << 8) | block[10]
    return None if raw == 0x1FF else raw / 10


def decode_solar(block: bytes) -> SolarReading:
    """Decode a decrypted 16-byte solar controller block."""
    block = bytes(block)
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")
    return SolarReading(
        device_state=block[0],
        error_code=block[1],
        battery_volts=_scaled(_signed16(block[2], block[3]), 100),
        battery_amps=_scaled(_signed16(block[4], block[5]), 10),
        yield_today_kwh=_scaled(_unsigned16(block[6], block[7]), 100),
        pv_power_w=_scaled(_unsigned16(block[8], block[9]), 1),
        load_amps=_load_amps(block),
    )