"""Tests for NMEA field decoding."""

import pytest

from navsense.nmea.fields import (
    LATITUDE_DEGREE_DIGITS,
    LONGITUDE_DEGREE_DIGITS,
    decode_coordinate,
    decode_fixed_point,
    decode_small_int,
    decode_utc_time,
    optional,
)


class TestDecodeFixedPoint:
    @pytest.mark.parametrize(
        ("field", "expected"),
        [
            (b"012.345", 12.345),
            (b"1.2", 1.2),
            (b"12.3", 12.3),
            (b"123.4", 123.4),
            (b"545.4", 545.4),
            (b"0.0", 0.0),
            (b"005.5", 5.5),
        ],
    )
    def test_integer_part_widths(self, field, expected):
        assert decode_fixed_point(field, 3) == pytest.approx(expected, rel=1e-3)

    def test_exact_for_narrow_integer_part(self):
        assert decode_fixed_point(b"1.2", 3) == 1.2

    def test_integer_without_decimal_point(self):
        assert decode_fixed_point(b"42", 3) == 42.0

    def test_trailing_decimal_point(self):
        assert decode_fixed_point(b"7.", 3) == 7.0

    def test_integer_part_wider_than_assumed(self):
        assert decode_fixed_point(b"1545.4", 3) == pytest.approx(1545.4)

    def test_negative_value(self):
        assert decode_fixed_point(b"-30.0", 3) == pytest.approx(-30.0)

    def test_many_fraction_digits(self):
        assert decode_fixed_point(b"07.03812345", 2) == pytest.approx(7.03812345)

    @pytest.mark.parametrize("field", [b"", b".", b"-", b"1.2.3", b"12a.4", b"1,2", b" 12"])
    def test_malformed_fields_raise(self, field):
        with pytest.raises(ValueError):
            decode_fixed_point(field, 3)


class TestDecodeUtcTime:
    def test_time_with_milliseconds(self):
        assert decode_utc_time(b"123519.487") == pytest.approx(123519.487)

    def test_time_without_fraction(self):
        assert decode_utc_time(b"123519") == 123519.0

    def test_two_fraction_digits(self):
        assert decode_utc_time(b"123519.00") == 123519.0

    def test_fraction_beyond_milliseconds_is_dropped(self):
        assert decode_utc_time(b"000001.123456") == pytest.approx(1.123)

    @pytest.mark.parametrize("field", [b"12351", b"12:519", b"1235190", b"123519.4x"])
    def test_malformed_time_raises(self, field):
        with pytest.raises(ValueError):
            decode_utc_time(field)


class TestDecodeSmallInt:
    def test_two_digits(self):
        assert decode_small_int(b"08", 2) == 8

    def test_single_digit(self):
        assert decode_small_int(b"7", 2) == 7

    @pytest.mark.parametrize("field", [b"", b"108", b"1a"])
    def test_malformed_raises(self, field):
        with pytest.raises(ValueError):
            decode_small_int(field, 2)


class TestDecodeCoordinate:
    def test_north_latitude(self):
        result = decode_coordinate(b"4807.038", b"N", LATITUDE_DEGREE_DIGITS)
        assert result == pytest.approx(48.1173, rel=1e-5)

    def test_west_longitude(self):
        result = decode_coordinate(b"01131.000", b"W", LONGITUDE_DEGREE_DIGITS)
        assert result == pytest.approx(-11.5166667, rel=1e-5)

    def test_south_latitude(self):
        result = decode_coordinate(b"3356.123", b"S", LATITUDE_DEGREE_DIGITS)
        assert result == pytest.approx(-33.93538333, rel=1e-6)

    def test_high_precision_minutes(self):
        result = decode_coordinate(b"01131.00098765", b"E", LONGITUDE_DEGREE_DIGITS)
        assert result == pytest.approx(11.51668313, rel=1e-8)

    def test_hemisphere_must_match_axis(self):
        with pytest.raises(ValueError):
            decode_coordinate(b"4807.038", b"E", LATITUDE_DEGREE_DIGITS)

    def test_missing_hemisphere(self):
        with pytest.raises(ValueError):
            decode_coordinate(b"4807.038", b"", LATITUDE_DEGREE_DIGITS)

    def test_degrees_only(self):
        with pytest.raises(ValueError):
            decode_coordinate(b"48", b"N", LATITUDE_DEGREE_DIGITS)

    def test_out_of_range_latitude(self):
        with pytest.raises(ValueError):
            decode_coordinate(b"9530.000", b"N", LATITUDE_DEGREE_DIGITS)

    def test_negative_minutes(self):
        with pytest.raises(ValueError):
            decode_coordinate(b"48-7.038", b"N", LATITUDE_DEGREE_DIGITS)

    def test_minutes_of_sixty_or_more(self):
        with pytest.raises(ValueError):
            decode_coordinate(b"4875.000", b"N", LATITUDE_DEGREE_DIGITS)
        with pytest.raises(ValueError):
            decode_coordinate(b"01160.000", b"E", LONGITUDE_DEGREE_DIGITS)

    def test_minutes_just_below_sixty(self):
        value = decode_coordinate(b"4859.999", b"N", LATITUDE_DEGREE_DIGITS)
        assert value == pytest.approx(48.99998, rel=1e-6)


class TestOptional:
    def test_empty_field_is_none(self):
        assert optional(decode_small_int, b"", 2) is None

    def test_present_field_is_decoded(self):
        assert optional(decode_small_int, b"12", 2) == 12
