import pytest

from vicblue.solar_controller import controller_error_label, decode_solar, device_state_label


def make_block(state=0, error=0, volts=0, amps=0, kwh=0, pv=0, load=0, byte11_high=0):
    block = bytearray(16)
    block[0] = state
    block[1] = error
    block[2:4] = (volts & 0xFFFF).to_bytes(2, "little")
    block[4:6] = (amps & 0xFFFF).to_bytes(2, "little")
    block[6:8] = kwh.to_bytes(2, "little")
    block[8:10] = pv.to_bytes(2, "little")
    block[10] = load & 0xFF
    block[11] = ((load >> 8) & 0x01) | (byte11_high & 0xFE)
    return bytes(block)


@pytest.mark.parametrize(
    "code, label",
    [
        (0, "_OFF_"),
        (1, "Low_P"),
        (2, "Fault"),
        (3, "Bulk "),
        (4, "Absor"),
        (5, "Float"),
        (6, "Store"),
        (7, "Equal"),
    ],
)
def test_device_state_labels(code, label):
    assert device_state_label(code) == label


@pytest.mark.parametrize(
    "code, label",
    [
        (0, "no_err"),
        (1, "BATHOT"),
        (2, "VOLTHI"),
        (3, "REMC_A"),
        (4, "REMC_B"),
        (5, "REMC_C"),
        (6, "REMB_A"),
        (7, "REMB_B"),
        (8, "REMB_C"),
    ],
)
def test_controller_error_labels(code, label):
    assert controller_error_label(code) == label


def test_unknown_codes_shown_as_hex():
    assert device_state_label(0x2A) == "*2A*"
    assert controller_error_label(9) == "*09*"


def test_all_ones_block_is_not_available():
    reading = decode_solar(b"\xff" * 16)
    assert reading.battery_volts is None
    assert reading.battery_amps is None
    assert reading.yield_today_kwh is None
    assert reading.pv_power_w is None
    assert reading.load_amps is None
    assert reading.report() == "*FF* *FF* n/a-V n/a-A| n/a-kWh n/a-W n/a-A\n"


def test_zero_block_report():
    assert decode_solar(bytes(16)).report() == "_OFF_ no_err 0.00V 0.0A| 0.00kWh 0W 0.0A\n"


def test_battery_volts_limits():
    assert decode_solar(make_block(volts=-32768)).battery_volts == pytest.approx(-327.68)
    assert decode_solar(make_block(volts=0x7FFE)).battery_volts == pytest.approx(327.66)


def test_battery_amps_limits():
    assert decode_solar(make_block(amps=-32768)).battery_amps == pytest.approx(-3276.8)
    assert decode_solar(make_block(amps=0x7FFE)).battery_amps == pytest.approx(3276.6)
    assert decode_solar(make_block(amps=0x7FFF)).battery_amps is None


@pytest.mark.parametrize("raw", [1, 77, 3000])
def test_battery_amps_sign_symmetry(raw):
    up = decode_solar(make_block(amps=raw)).battery_amps
    down = decode_solar(make_block(amps=-raw)).battery_amps
    assert up > 0
    assert down == pytest.approx(-up)


def test_yield_and_pv_power_limits():
    reading = decode_solar(make_block(kwh=0xFFFE, pv=0xFFFE))
    assert reading.yield_today_kwh == pytest.approx(655.34)
    assert reading.pv_power_w == pytest.approx(65534)
    assert "65534W" in reading.report()


def test_load_amps():
    assert decode_solar(make_block(load=510)).load_amps == pytest.approx(51.0)
    assert decode_solar(make_block(load=0x1FF)).load_amps is None


def test_load_amps_ignores_upper_bits_of_byte_eleven():
    plain = decode_solar(make_block(load=300)).load_amps
    noisy = decode_solar(make_block(load=300, byte11_high=0xFE)).load_amps
    assert noisy == plain


def test_state_and_error_in_report():
    report = decode_solar(make_block(state=5, error=1)).report()
    assert report.startswith("Float BATHOT ")


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        decode_solar(bytes(17))