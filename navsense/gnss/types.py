"""GNSS data types for the published navigation state."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NavigationRecord:
    """The latest navigation state assembled from GGA and VTG sentences.

    ``NavigationStore`` publishes one immutable ``NavigationRecord`` at a
    time. Position fields come from the last accepted GGA sentence, velocity
    fields from the last accepted VTG sentence; the two groups update
    independently. A field is ``None`` until a sentence has supplied it.

    Attributes:
        utc_time: UTC time of the position fix as HHMMSS.sss
            (e.g. 123519.487 for 12:35:19.487).
        latitude: Decimal degrees, positive=North, [-90, 90].
        longitude: Decimal degrees, positive=East, [-180, 180].
        altitude: Whole metres above mean sea level.
        num_satellites: Satellites used in the fix, 0-99.
        fix_quality: GGA fix quality digit (0 means no fix).
        heading: True course over ground in whole degrees, 0-359.
        ground_speed: Speed over ground in km/h.

    Example:
        >>> with GNSSReceiver() as receiver:
        ...     record = receiver.read()
        >>> record.latitude
        48.1173
        >>> record.ground_speed
        10.2
    """

    utc_time: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    altitude: int | None = None
    num_satellites: int | None = None
    fix_quality: int | None = None
    heading: int | None = None
    ground_speed: float | None = None
