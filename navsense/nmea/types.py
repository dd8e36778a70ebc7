"""NMEA data types for decoded sentences.

This module defines the per-sentence decode results and the diagnostics the
framing and decoding stages report.

Design Decisions:
    1. Optional fields (float | None): NMEA fields may be empty, indicated by
       consecutive commas. A None value means "no update for this field" and
       never overwrites a previously published value with zero.

    2. Fixed-point results: altitude and heading are truncated to whole
       units, matching the integer fields of the published record. Ground
       speed keeps its fractional part.
"""

from dataclasses import dataclass
from enum import Enum


class SentenceType(str, Enum):
    """Sentence categories the frame extractor routes to a decoder."""

    POSITION = "GGA"
    VELOCITY = "VTG"


class Diagnostic(str, Enum):
    """Non-fatal conditions reported through the diagnostic hook.

    FRAME_OVERFLOW: a sentence body outgrew the accumulation buffer and was
        dropped.
    CHECKSUM_MISMATCH: a staged sentence failed XOR checksum validation.
    DECODE_FAILURE: a sentence passed the checksum but held a malformed field.
    """

    FRAME_OVERFLOW = "frame_overflow"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    DECODE_FAILURE = "decode_failure"


@dataclass(frozen=True)
class PositionFix:
    """Decoded GGA (Global Positioning System Fix Data) sentence.

    Attributes:
        utc_time: UTC time of the fix as a single HHMMSS.sss number
            (e.g. 123519.487). None if the field was empty.

        latitude: Latitude in decimal degrees, positive=North.
            Range: -90.0 to +90.0. None if the field was empty.

        longitude: Longitude in decimal degrees, positive=East.
            Range: -180.0 to +180.0. None if the field was empty.

        fix_quality: Fix quality digit as sent by the receiver. Any value is
            accepted (0=invalid, 1=GPS, 2=DGPS, 4=RTK fixed, ...).

        num_satellites: Satellites used in the solution, 0-99.

        altitude: Whole metres above mean sea level, truncated toward zero.

    Example:
        >>> fix = decode_gga(b"GNGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*59")
        >>> fix.latitude
        48.1173
        >>> fix.altitude
        545
    """

    utc_time: float | None
    latitude: float | None
    longitude: float | None
    fix_quality: int | None
    num_satellites: int | None
    altitude: int | None


@dataclass(frozen=True)
class VelocityFix:
    """Decoded VTG (Track Made Good and Ground Speed) sentence.

    Attributes:
        heading: True course over ground in whole degrees, 0-359.
            None when the receiver leaves the track empty (stationary).

        ground_speed: Ground speed in km/h. None if the field was empty.
    """

    heading: int | None
    ground_speed: float | None
