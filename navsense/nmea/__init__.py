"""NMEA 0183 framing, validation and decoding for GGA and VTG sentences."""

from navsense.nmea.checksum import calculate_checksum, validate_checksum
from navsense.nmea.fields import decode_coordinate, decode_fixed_point
from navsense.nmea.framing import FrameExtractor
from navsense.nmea.gga import decode_gga
from navsense.nmea.types import Diagnostic, PositionFix, SentenceType, VelocityFix
from navsense.nmea.vtg import decode_vtg

__all__ = [
    "Diagnostic",
    "FrameExtractor",
    "PositionFix",
    "SentenceType",
    "VelocityFix",
    "calculate_checksum",
    "decode_coordinate",
    "decode_fixed_point",
    "decode_gga",
    "decode_vtg",
    "validate_checksum",
]
