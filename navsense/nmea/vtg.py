"""VTG sentence decoder.

VTG (Track Made Good and Ground Speed) provides velocity information from GNSS.

VTG Sentence Format:
    $GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B
           |     | |     | |     | |     | |
           |     | |     | |     | |     | +-- Mode indicator (skipped)
           |     | |     | |     | +-----+-- Speed in km/h -> ground_speed
           |     | |     | +-----+-- Speed in knots (skipped)
           |     | +-----+-- Track, magnetic north (skipped)
           +-----+-- Track, true north -> heading

Note: When stationary, the track angle may be empty (no heading when not moving).
"""

import logging

from navsense.nmea.fields import VALID_TALKER_IDS, decode_fixed_point, optional
from navsense.nmea.types import VelocityFix

logger = logging.getLogger(__name__)

# Fields up to and including the km/h speed (index 7) must be present
_MINIMUM_FIELD_COUNT = 8

_HEADING_INTEGER_WIDTH = 3
_SPEED_INTEGER_WIDTH = 3
_DEGREES_PER_TURN = 360


def _extract_fields(body: bytes) -> list[bytes] | None:
    """Split a checksum-validated body into its comma-separated fields.

    Example:
        Input: b"GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B"
        Output: [b"GNVTG", b"054.7", b"T", b"034.4", b"M", b"005.5", b"N", b"010.2", b"K", b"A"]
    """
    separator = body.find(b"*")
    content = body if separator < 0 else body[:separator]
    fields = content.split(b",")

    if len(fields) < _MINIMUM_FIELD_COUNT:
        return None

    return fields


def _validate_message_type(fields: list[bytes]) -> bool:
    message_type = fields[0]
    return message_type[:2] in VALID_TALKER_IDS and message_type[2:] == b"VTG"


def _decode_heading(field: bytes) -> int:
    heading = decode_fixed_point(field, _HEADING_INTEGER_WIDTH)
    if heading < 0:
        raise ValueError("heading cannot be negative")
    # Truncate to whole degrees; a receiver reporting 360.0 means north
    return int(heading) % _DEGREES_PER_TURN


def _decode_speed(field: bytes) -> float:
    speed = decode_fixed_point(field, _SPEED_INTEGER_WIDTH)
    if speed < 0:
        raise ValueError("ground speed cannot be negative")
    return speed


def decode_vtg(body: bytes) -> VelocityFix | None:
    """Decode a VTG sentence body into a VelocityFix.

    Maps NMEA field indices to VelocityFix attributes:
        fields[1] -> heading (true track, truncated to whole degrees)
        fields[7] -> ground_speed (km/h)

    Args:
        body: Checksum-validated VTG sentence bytes, starting after '$'

    Returns:
        VelocityFix if decoding succeeds, or None if:
        - The sentence has too few fields
        - The message type is not VTG from a supported constellation
        - The heading or speed field is malformed

    Example:
        >>> fix = decode_vtg(b"GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B")
        >>> fix.heading, fix.ground_speed
        (54, 10.2)
    """
    fields = _extract_fields(body)
    if fields is None or not _validate_message_type(fields):
        return None

    try:
        return VelocityFix(
            heading=optional(_decode_heading, fields[1]),
            ground_speed=optional(_decode_speed, fields[7]),
        )
    except ValueError as e:
        logger.debug(f"Rejected VTG sentence {body!r}: {e}")
        return None
