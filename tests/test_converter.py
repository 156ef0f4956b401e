import random
import sys

import pytest

from modules.custom_digits.core.converter import RadixConverter
from modules.custom_digits.core.digit_sets import (
    DIGITS_10_ARABIC_EAST,
    DIGITS_51_READABLE,
    DIGITS_70,
    DIGITS_BASE64,
)
from modules.custom_digits.core.errors import (
    DuplicateDigitError,
    MalformedNumberError,
    RadixRangeError,
    UnknownDigitError,
)

ROMAN = ["0", "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X"]


def test_readable_alphabet_scenario(backend_name):
    conv = RadixConverter(DIGITS_51_READABLE, backend=backend_name)
    assert conv.custom_from_decimal(0x4597F740) == "3GmYeH"
    assert conv.custom_from_hex("4597f740") == "3GmYeH"
    assert conv.decimal_from_custom("3GmYeH") == "1167587136"
    assert conv.hex_from_custom("3GmYeH") == "4597f740"


def test_roman_numeral_digits(backend_name):
    conv = RadixConverter(ROMAN, backend=backend_name)
    rendered = [conv.custom_from_decimal(value) for value in range(1, 11)]
    assert rendered == ROMAN[1:]


def test_eastern_arabic_digits(backend_name):
    conv = RadixConverter(DIGITS_10_ARABIC_EAST, backend=backend_name)
    assert conv.decimal_from_custom("١٠١") == "101"
    assert conv.custom_from_decimal("2024") == "٢٠٢٤"


def test_example_four_symbol_alphabet():
    conv = RadixConverter("XYZT")
    assert conv.custom_from_decimal(105) == "YZZY"


def test_default_alphabet_matches_python_int_up_to_36(backend_name):
    conv = RadixConverter(DIGITS_70, 36, backend=backend_name)
    rng = random.Random(11)
    for _ in range(30):
        number = rng.randrange(1 << 50)
        custom = conv.custom_from_decimal(number)
        assert int(custom, 36) == number


def test_custom_round_trip(backend_name):
    conv = RadixConverter(backend=backend_name)
    rng = random.Random(3)
    for _ in range(40):
        length = rng.randint(1, 8)
        text = "".join(rng.choice(DIGITS_70) for _ in range(length))
        back = conv.custom_from_decimal(conv.decimal_from_custom(text))
        assert back == (text.lstrip("0") or "0")


def test_large_custom_round_trip(unbounded_backend_name):
    conv = RadixConverter(backend=unbounded_backend_name)
    number = 7**150 + 1
    custom = conv.custom_from_decimal(str(number))
    assert conv.decimal_from_custom(custom) == str(number)
    assert len(custom) == len(conv.custom_from_hex(format(number, "x")))


def test_backends_agree_within_fixed_range():
    converters = [RadixConverter(backend=name) for name in ("int", "gmp", "bc")]
    rng = random.Random(5)
    for _ in range(40):
        decimal = str(rng.randrange(converters[0].maximum_value))
        results = {conv.custom_from_decimal(decimal) for conv in converters}
        assert len(results) == 1


def test_min_digits_pads_with_zero_symbol(backend_name):
    conv = RadixConverter("abc", backend=backend_name)
    assert conv.custom_from_decimal(0) == "a"
    assert conv.custom_from_decimal(0, min_digits=4) == "aaaa"
    assert conv.custom_from_decimal(5, min_digits=4) == "aabc"
    assert conv.custom_from_decimal(5, min_digits=0) == "bc"
    assert conv.custom_from_decimal(0, min_digits=0) == ""


def test_min_digits_never_truncates():
    conv = RadixConverter("01")
    assert conv.custom_from_decimal(255, min_digits=2) == "11111111"


def test_validate_custom_number():
    conv = RadixConverter("0123456789")
    conv.validate_custom_number("0123")
    conv.validate_custom_digit("9")
    with pytest.raises(UnknownDigitError):
        conv.validate_custom_number("0x99")
    with pytest.raises(UnknownDigitError) as excinfo:
        conv.validate_custom_number("10AB")
    assert excinfo.value.digit == "A"


def test_unknown_symbol_fails_conversion():
    conv = RadixConverter("0123456789")
    with pytest.raises(UnknownDigitError):
        conv.decimal_from_custom("12a")


def test_radix_one_renders_only_zero():
    conv = RadixConverter("z", 1)
    assert conv.custom_from_decimal(0) == "z"
    assert conv.custom_from_decimal(0, min_digits=3) == "zzz"
    with pytest.raises(RadixRangeError):
        conv.custom_from_decimal(1)
    assert conv.decimal_from_custom("zzz") == "0"


def test_init_replaces_alphabet_and_clears_caches():
    conv = RadixConverter("0123456789", backend="gmp")
    conv.range_for_digit_count(3)
    conv.init("01", use_unicode=True)
    assert conv.radix == 2
    assert conv.custom_from_decimal(5) == "101"
    assert conv.decimal_from_bin("101") == "5"
    assert int(conv.range_for_digit_count(3)) == 8


def test_failed_init_keeps_previous_state():
    conv = RadixConverter("0123456789")
    with pytest.raises(DuplicateDigitError):
        conv.init("0011")
    with pytest.raises(RadixRangeError):
        conv.init("01", 5)
    assert conv.radix == 10
    assert conv.custom_from_decimal(42) == "42"


def test_alphabet_independent_conversions(backend_name):
    conv = RadixConverter(backend=backend_name)
    assert conv.hex_from_decimal("255") == "ff"
    assert conv.decimal_from_hex("ff") == "255"
    assert conv.bin_from_decimal("10") == "1010"
    assert conv.decimal_from_bin("1010") == "10"
    assert RadixConverter.hex_from_bin("11111111") == "ff"
    assert RadixConverter.bin_from_hex("a") == "1010"


def test_code_point_mode_splits_combining_marks():
    accented = "e\u0301"
    conv = RadixConverter(["0", "e", "\u0301"], use_unicode=False)
    assert conv.decimal_from_custom(accented) == str(1 * 3 + 2)


def test_constructor_reads_settings(monkeypatch):
    from modules.radix_core.core.settings import get_settings

    monkeypatch.setenv("CUSTOM_DIGITS_BACKEND", "bc")
    get_settings.cache_clear()
    conv = RadixConverter("01")
    assert conv.backend.name == "bc"
    assert RadixConverter("01", backend="int").backend.name == "int"


def test_base64_raw_round_trip(unbounded_backend_name):
    conv = RadixConverter(DIGITS_BASE64, backend=unbounded_backend_name)
    assert conv.custom_from_raw(b"Odd") == "T2Rk"
    assert conv.custom_from_raw(b"Oddity") == "T2RkaXR5"
    assert conv.raw_from_custom("T2RkaXR5") == b"Oddity"
    assert conv.raw_from_custom("T2Rk") == b"Odd"


def test_raw_keeps_leading_zero_bytes(unbounded_backend_name):
    conv = RadixConverter(DIGITS_BASE64, backend=unbounded_backend_name)
    data = b"\x00\x00\x01"
    custom = conv.custom_from_raw(data)
    assert custom == "AAAB"
    assert conv.raw_from_custom(custom) == data


def test_raw_edge_cases():
    conv = RadixConverter("0123456789")
    assert conv.custom_from_raw(b"") == ""
    assert conv.custom_from_raw(b"\xff") == "255"
    assert conv.raw_from_custom("255") == b"\xff"
    with pytest.raises(RadixRangeError):
        RadixConverter("0", 1).custom_from_raw(b"x")


def test_fixed_width_accepts_long_decimal_input():
    conv = RadixConverter("0123456789", backend="int")
    expected = 0
    for _ in range(5000):
        expected = (expected * 10 + 1) % (sys.maxsize + 1)
    assert conv.custom_from_decimal("1" * 5000) == str(expected)


def test_huge_int_renders_on_unbounded_backends(unbounded_backend_name):
    conv = RadixConverter("0123456789", backend=unbounded_backend_name)
    assert conv.custom_from_decimal(10**5000) == "1" + "0" * 5000


def test_failed_calls_leave_memo_tables_alone(monkeypatch):
    conv = RadixConverter("0123456789", backend="gmp")
    conv.range_for_digit_count(2)
    conv.bits_for_range(conv.range_for_digit_count(2))
    ranges_before = [(key, conv._range_for_digits.get(key)) for key in conv._range_for_digits]
    bits_before = [(key, conv._bits_for_range.get(key)) for key in conv._bits_for_range]

    def fail(*args, **kwargs):
        raise MalformedNumberError("broken", "decimal")

    monkeypatch.setattr(conv.backend, "bounded_power", fail)
    monkeypatch.setattr(conv.backend, "bit_length", fail)
    with pytest.raises(MalformedNumberError):
        conv.range_for_digit_count(5)
    with pytest.raises(MalformedNumberError):
        conv.bits_for_range(conv.internal_from_decimal("1000"))
    with pytest.raises(MalformedNumberError):
        conv.custom_random_digits(7)

    assert [(key, conv._range_for_digits.get(key)) for key in conv._range_for_digits] == ranges_before
    assert [(key, conv._bits_for_range.get(key)) for key in conv._bits_for_range] == bits_before
