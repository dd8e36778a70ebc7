"""GGA sentence decoder.

GGA (Global Positioning System Fix Data) provides position fix information
including time, coordinates, altitude, fix quality and satellite count.

GGA Sentence Format:
    $GNGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*59
           |      |        | |         | | |  |   |     | |     |
           |      |        | |         | | |  |   |     | |     +-- DGPS info (skipped)
           |      |        | |         | | |  |   |     | +-- Geoid height (skipped)
           |      |        | |         | | |  |   +-----+-- Altitude above MSL
           |      |        | |         | | |  +-- HDOP (skipped)
           |      |        | |         | | +-- Number of satellites
           |      |        | |         | +-- Fix quality (not validated)
           |      |        | +---------+-- Longitude DDDMM.MMMM + E/W
           |      +--------+-- Latitude DDMM.MMMM + N/S
           +-- UTC time (HHMMSS[.sss])

Decode policy is all-or-nothing: a malformed field rejects the whole
sentence so the published record never mixes old and half-decoded values.
Empty fields are reported as None and leave the published value untouched.
"""

import logging

from navsense.nmea.fields import (
    LATITUDE_DEGREE_DIGITS,
    LONGITUDE_DEGREE_DIGITS,
    VALID_TALKER_IDS,
    decode_coordinate,
    decode_fixed_point,
    decode_small_int,
    decode_utc_time,
    optional,
)
from navsense.nmea.types import PositionFix

logger = logging.getLogger(__name__)

# Fields up to and including the altitude (index 9) must be present
_MINIMUM_FIELD_COUNT = 10

# Widest integer part an altitude field takes in practice (e.g. "545.4")
_ALTITUDE_INTEGER_WIDTH = 3
_SATELLITE_DIGITS = 2
_FIX_QUALITY_DIGITS = 1


def _extract_fields(body: bytes) -> list[bytes] | None:
    """Split a checksum-validated body into its comma-separated fields.

    Everything from the '*' separator onwards is dropped.

    Example:
        Input: b"GNGGA,123519,4807.038,N,...*59"
        Output: [b"GNGGA", b"123519", b"4807.038", b"N", ...]
    """
    separator = body.find(b"*")
    content = body if separator < 0 else body[:separator]
    fields = content.split(b",")

    if len(fields) < _MINIMUM_FIELD_COUNT:
        return None

    return fields


def _validate_message_type(fields: list[bytes]) -> bool:
    """Check the first field is GGA from a supported constellation.

    Example:
        fields[0] = b"GNGGA" -> talker=b"GN", sentence=b"GGA" -> True
        fields[0] = b"XXGGA" -> talker=b"XX" (unsupported) -> False
    """
    message_type = fields[0]
    return message_type[:2] in VALID_TALKER_IDS and message_type[2:] == b"GGA"


def _decode_position(value: bytes, direction: bytes, degree_digits: int) -> float | None:
    # A coordinate and its hemisphere are one unit: both empty or both set
    if not value and not direction:
        return None
    return decode_coordinate(value, direction, degree_digits)


def _decode_altitude(field: bytes) -> int:
    return int(decode_fixed_point(field, _ALTITUDE_INTEGER_WIDTH))


def _build_position_fix(fields: list[bytes]) -> PositionFix:
    """Construct a PositionFix from GGA fields.

    Maps NMEA field indices to PositionFix attributes:
        fields[1]  -> utc_time (HHMMSS.sss)
        fields[2]  -> latitude (DDMM.MMMM)
        fields[3]  -> latitude direction (N/S)
        fields[4]  -> longitude (DDDMM.MMMM)
        fields[5]  -> longitude direction (E/W)
        fields[6]  -> fix_quality
        fields[7]  -> num_satellites
        fields[9]  -> altitude above MSL (metres, truncated)

    Raises:
        ValueError: If any of the mapped fields is malformed
    """
    return PositionFix(
        utc_time=optional(decode_utc_time, fields[1]),
        latitude=_decode_position(fields[2], fields[3], LATITUDE_DEGREE_DIGITS),
        longitude=_decode_position(fields[4], fields[5], LONGITUDE_DEGREE_DIGITS),
        fix_quality=optional(decode_small_int, fields[6], _FIX_QUALITY_DIGITS),
        num_satellites=optional(decode_small_int, fields[7], _SATELLITE_DIGITS),
        altitude=optional(_decode_altitude, fields[9]),
    )


def decode_gga(body: bytes) -> PositionFix | None:
    """Decode a GGA sentence body into a PositionFix.

    The body must already have passed checksum validation. It starts right
    after '$' and may still carry its '*' checksum suffix.

    Args:
        body: Staged GGA sentence bytes

    Returns:
        PositionFix if decoding succeeds, or None if:
        - The sentence has too few fields
        - The message type is not GGA from a supported constellation
        - Any mapped field is malformed

    Example:
        >>> fix = decode_gga(b"GNGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*59")
        >>> fix.num_satellites
        8
    """
    fields = _extract_fields(body)
    if fields is None or not _validate_message_type(fields):
        return None

    try:
        return _build_position_fix(fields)
    except (ValueError, IndexError) as e:
        logger.debug(f"Rejected GGA sentence {body!r}: {e}")
        return None
