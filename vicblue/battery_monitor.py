"""Decoding and reporting of battery monitor advertisements."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

BLOCK_SIZE = 16
AUX_NONE_VALUE = 999.99
SOC_ERROR_RAW = 9999

_ALARM_LABELS = {
    0x0001: "lo_V",
    0x0002: "hi_V",
    0x0004: "socL",
    0x0008: "lo_S",
    0x0010: "hi_S",
    0x0020: "lo_C",
    0x0040: "hi_C",
    0x0080: "midV",
    0x0100: "OVRL",
    0x0200: "DCrp",
    0x0400: "loAC",
    0x0800: "hiAC",
    0x1000: "Shrt",
    0x2000: "Lock",
}


class AuxKind(IntEnum):
    """What the auxiliary input of the monitor measures."""

    AUX_VOLTS = 0
    MID_VOLTS = 1
    KELVIN = 2
    NONE = 3

    @property
    def unit(self) -> str:
        """Unit suffix shown after the auxiliary value."""
        if self is AuxKind.KELVIN:
            return "K"
        if self is AuxKind.NONE:
            return "X"
        return "V"


@dataclass(frozen=True)
class BatteryReading:
    """Values decoded from one decrypted battery monitor block.

    ``None`` marks a value the device reports as not available;
    an infinite ``time_to_go_days`` means the battery is not discharging.
    """

    time_to_go_days: float
    battery_volts: float | None
    alarm_bits: int
    aux_kind: AuxKind
    aux_value: float | None
    battery_amps: float | None
    consumed_ah: float | None
    state_of_charge: float | None

    @property
    def alarm(self) -> str:
        """Short label for the alarm state."""
        return alarm_label(self.alarm_bits)

    def report(self) -> str:
        """One line summarising the reading."""
        ttg = "inf_" if math.isinf(self.time_to_go_days) else f"{self.time_to_go_days:.1f}"
        return (
            f"{ttg}d "
            f"{_fmt(self.battery_volts, 2)}V "
            f"{self.alarm} "
            f"{_fmt(self.aux_value, 2)}{self.aux_kind.unit}| "
            f"{int(self.aux_kind)} "
            f"{_fmt(self.battery_amps, 3)}A "
            f"{_fmt(self.consumed_ah, 1)}Ah "
            f"{_fmt(self.state_of_charge, 1)}%\n"
        )


def _fmt(value: float | None, digits: int) -> str:
    return "n/a-" if value is None else f"{value:.{digits}f}"


def _signed16(low: int, high: int) -> int | None:
    """Sign-and-magnitude-checked 16-bit two's complement; None when not available."""
    magnitude = ((high & 0x7F) << 8) | low
    if magnitude == 0x7FFF:
        return None
    return magnitude - 0x8000 if high & 0x80 else magnitude


def _unsigned16(low: int, high: int) -> int | None:
    value = (high << 8) | low
    return None if value == 0xFFFF else value


def _scaled(raw: int | None, divisor: float) -> float | None:
    return None if raw is None else raw / divisor


def alarm_label(bits: int) -> str:
    """Label for the alarm bits: a single known alarm, "Mult" or "none"."""
    if bits.bit_count() if hasattr(bits, "bit_count") else bin(bits).count("1") == 1:
        return _ALARM_LABELS.get(bits, "none")
    return "Mult" if bits > 0 else "none"


def _time_to_go(block: bytes) -> float:
    minutes = int.from_bytes(block[0:2], "little")
    if minutes == 0xFFFF:
        return math.inf
    return minutes / 60 / 24


def _aux_value(kind: AuxKind, low: int, high: int) -> float | None:
    if kind is AuxKind.AUX_VOLTS:
        return _scaled(_signed16(low, high), 100)
    if kind in (AuxKind.MID_VOLTS, AuxKind.KELVIN):
        return _scaled(_unsigned16(low, high), 100)
    return AUX_NONE_VALUE


def _battery_amps(block: bytes) -> float | None:
    word = int.from_bytes(block[8:11], "little") >> 2
    magnitude = word & 0x1FFFFF
    if magnitude == 0x1FFFFF:
        return None
    milliamps = magnitude - 0x200000 if word & 0x200000 else magnitude
    return milliamps / 1000


def _consumed_ah(block: bytes) -> float | None:
    raw = int.from_bytes(block[11:13], "little") | ((block[13] & 0x0F) << 16)
    return None if raw == 0xFFFFF else raw / 10


def _state_of_charge(block: bytes) -> float | None:
    raw = (block[13] >> 4) | ((block[14] & 0x3F) << 4)
    if raw == 0x3FF:
        return None
    if raw > 1000:
        raw = SOC_ERROR_RAW
    return raw / 10


def decode_battery(block: bytes) -> BatteryReading:
    """Decode a decrypted 16-byte battery monitor block."""
    block = bytes(block)
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")
    kind = AuxKind(block[8] & 0x03)
    return BatteryReading(
        time_to_go_days=_time_to_go(block),
        battery_volts=_scaled(_signed16(block[2], block[3]), 100),
        alarm_bits=int.from_bytes(block[4:6], "little"),
        aux_kind=kind,
        aux_value=_aux_value(kind, block[6], block[7]),
        battery_amps=_battery_amps(block),
        consumed_ah=_consumed_ah(block),
        state_of_charge=_state_of_charge(block),
    )