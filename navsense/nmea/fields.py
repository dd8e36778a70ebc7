"""NMEA field decoding utilities.

This module turns individual comma-separated NMEA fields into numbers. Fields
arrive as raw ASCII bytes straight from the staging buffer, so every decoder
walks the bytes itself and raises ``ValueError`` on anything that is not part
of the expected format. Sentence decoders catch that error and reject the
whole sentence.

Empty fields (consecutive commas) are "no data", not zero. Use ``optional``
to map them to None before calling a decoder.
"""

from collections.abc import Callable
from typing import TypeVar

_T = TypeVar("_T")

# Supported NMEA talker IDs for multi-constellation GNSS receivers.
# Each 2-character prefix identifies the satellite system:
#   GP = GPS (USA)
#   GN = Multi-GNSS (combined solution)
#   GL = GLONASS (Russia)
#   GA = Galileo (Europe)
#   GB = BeiDou (China)
#   GQ = QZSS (Japan)
VALID_TALKER_IDS = (b"GP", b"GN", b"GL", b"GA", b"GB", b"GQ")

_ZERO = ord("0")
_NINE = ord("9")
_DECIMAL_POINT = ord(".")
_MINUS = ord("-")

# UTC time is always HHMMSS followed by an optional fraction; only
# millisecond resolution is kept.
_TIME_INTEGER_DIGITS = 6
_TIME_FRACTION_DIGITS = 3

# Minutes in DDMM.MMMM / DDDMM.MMMM always have two integer digits.
_MINUTE_DIGITS = 2
_MINUTES_PER_DEGREE = 60.0

LATITUDE_DEGREE_DIGITS = 2
LONGITUDE_DEGREE_DIGITS = 3

_HEMISPHERES = {
    LATITUDE_DEGREE_DIGITS: {b"N": 1.0, b"S": -1.0},
    LONGITUDE_DEGREE_DIGITS: {b"E": 1.0, b"W": -1.0},
}

_COORDINATE_LIMITS = {
    LATITUDE_DEGREE_DIGITS: 90.0,
    LONGITUDE_DEGREE_DIGITS: 180.0,
}


def _digit(byte: int) -> int:
    if not _ZERO <= byte <= _NINE:
        raise ValueError(f"unexpected byte {byte!r} in numeric field")
    return byte - _ZERO


def optional(decoder: Callable[..., _T], field: bytes, *args: object) -> _T | None:
    """Decode a field, returning None if it is empty.

    Example:
        >>> optional(decode_small_int, b"08", 2)
        8
        >>> optional(decode_small_int, b"", 2)  # empty field
        None
    """
    if not field:
        return None
    return decoder(field, *args)


def decode_fixed_point(field: bytes, integer_width: int) -> float:
    """Decode a decimal field whose integer-part width is not known up front.

    The field is walked once, left to right. Each digit is folded into an
    integer mantissa while a scale exponent, starting at ``integer_width``,
    drops by one. That yields a provisional value as if the decimal point sat
    after ``integer_width`` digits. The index where the decimal point really
    appeared is recorded along the way, and the difference between the two
    positions is applied as a power-of-ten correction once the walk is done.
    The single division happens in that final step.

    Args:
        field: ASCII digits with at most one '.', optionally led by '-'
        integer_width: Widest integer part the field format allows

    Returns:
        The decoded value

    Raises:
        ValueError: If the field is empty, has no digits, has more than one
            decimal point, or contains any other byte

    Example:
        >>> decode_fixed_point(b"545.4", 3)
        545.4
        >>> decode_fixed_point(b"1.2", 3)  # provisional 120.0, corrected by 10**-2
        1.2
    """
    sign = 1
    start = 0
    if field and field[0] == _MINUS:
        sign = -1
        start = 1

    mantissa = 0
    scale = integer_width
    digit_count = 0
    point_index: int | None = None

    for index in range(start, len(field)):
        byte = field[index]
        if byte == _DECIMAL_POINT:
            if point_index is not None:
                raise ValueError("more than one decimal point in field")
            point_index = index - start
            continue
        mantissa = mantissa * 10 + _digit(byte)
        scale -= 1
        digit_count += 1

    if digit_count == 0:
        raise ValueError("numeric field holds no digits")

    if point_index is None:
        point_index = digit_count

    exponent = scale + point_index - integer_width
    if exponent >= 0:
        return float(sign * mantissa * 10**exponent)
    return sign * mantissa / 10**-exponent


def decode_utc_time(field: bytes) -> float:
    """Decode an HHMMSS[.sss] time field into a single HHMMSS.sss number.

    The width is fixed, so each digit carries a fixed weight and no general
    fixed-point decoding is needed. Fraction digits beyond milliseconds are
    checked but dropped.

    Example:
        >>> decode_utc_time(b"123519.487")
        123519.487
        >>> decode_utc_time(b"123519")
        123519.0
    """
    if len(field) < _TIME_INTEGER_DIGITS:
        raise ValueError("time field shorter than HHMMSS")

    milliseconds = 0
    for byte in field[:_TIME_INTEGER_DIGITS]:
        milliseconds = milliseconds * 10 + _digit(byte)
    milliseconds *= 10**_TIME_FRACTION_DIGITS

    fraction = field[_TIME_INTEGER_DIGITS:]
    if fraction:
        if fraction[0] != _DECIMAL_POINT:
            raise ValueError("time field has more than six integer digits")
        weight = 10**_TIME_FRACTION_DIGITS
        for byte in fraction[1:]:
            value = _digit(byte)
            weight //= 10
            milliseconds += value * weight

    return milliseconds / 10**_TIME_FRACTION_DIGITS


def decode_small_int(field: bytes, max_digits: int) -> int:
    """Decode a short unsigned integer such as the satellite count.

    Example:
        >>> decode_small_int(b"08", 2)
        8
    """
    if not field or len(field) > max_digits:
        raise ValueError(f"expected 1 to {max_digits} digits, got {field!r}")
    value = 0
    for byte in field:
        value = value * 10 + _digit(byte)
    return value


def decode_coordinate(value: bytes, direction: bytes, degree_digits: int) -> float:
    """Convert an NMEA coordinate (DDMM.MMMM or DDDMM.MMMM) to decimal degrees.

    The leading ``degree_digits`` bytes are whole degrees; the rest is decimal
    minutes, decoded with ``decode_fixed_point``. The sign convention is:
    - North/East = positive
    - South/West = negative

    The conversion formula is:
        decimal_degrees = degrees + (minutes / 60)

    Args:
        value: Coordinate field (e.g. b"4807.038")
        direction: Hemisphere indicator matching the axis (b"N"/b"S" for
            latitude, b"E"/b"W" for longitude)
        degree_digits: 2 for latitude, 3 for longitude

    Raises:
        ValueError: If the field is too short, not numeric, the minutes
            are 60 or more, or the hemisphere indicator does not belong to
            the axis

    Example:
        >>> decode_coordinate(b"4807.038", b"N", LATITUDE_DEGREE_DIGITS)
        48.1173  # 48 + 7.038/60
        >>> decode_coordinate(b"01131.000", b"W", LONGITUDE_DEGREE_DIGITS)
        -11.5166667  # negative for West
    """
    sign = _HEMISPHERES[degree_digits].get(direction)
    if sign is None:
        raise ValueError(f"invalid hemisphere indicator {direction!r}")
    if len(value) <= degree_digits:
        raise ValueError("coordinate field has no minutes")

    degrees = 0
    for byte in value[:degree_digits]:
        degrees = degrees * 10 + _digit(byte)

    minutes_field = value[degree_digits:]
    if minutes_field[0] == _MINUS:
        raise ValueError("coordinate minutes cannot be negative")
    minutes = decode_fixed_point(minutes_field, _MINUTE_DIGITS)
    if minutes >= _MINUTES_PER_DEGREE:
        raise ValueError(f"coordinate minutes out of range in {value!r}")

    decimal_degrees = degrees + minutes / _MINUTES_PER_DEGREE
    if decimal_degrees > _COORDINATE_LIMITS[degree_digits]:
        raise ValueError(f"coordinate {value!r} out of range")

    return sign * decimal_degrees
