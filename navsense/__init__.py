"""Navsense package for decoding NMEA 0183 navigation data."""

from navsense.gnss import (
    GNSSReceiver,
    NavigationPipeline,
    NavigationRecord,
    NavigationStore,
)
from navsense.nmea import (
    Diagnostic,
    FrameExtractor,
    PositionFix,
    VelocityFix,
    decode_fixed_point,
    decode_gga,
    decode_vtg,
    validate_checksum,
)

__all__ = [
    "Diagnostic",
    "FrameExtractor",
    "GNSSReceiver",
    "NavigationPipeline",
    "NavigationRecord",
    "NavigationStore",
    "PositionFix",
    "VelocityFix",
    "decode_fixed_point",
    "decode_gga",
    "decode_vtg",
    "validate_checksum",
]
