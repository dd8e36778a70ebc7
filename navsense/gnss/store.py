"""NavigationStore: owner of the published navigation record.

The store is the only place the published record changes. Each accepted
sentence replaces its whole field group (position or velocity) in a single
step under a lock, so a reader never sees a position from one fix paired with
a half-written update from the next. Readers get the record by value; since
``NavigationRecord`` is frozen, a snapshot can be kept and passed around
freely.
"""

import dataclasses
import threading

from navsense.gnss.types import NavigationRecord
from navsense.nmea.types import PositionFix, VelocityFix

__all__ = ["NavigationStore"]


def _present(**fields: object) -> dict[str, object]:
    # Empty sentence fields mean "no update": keep the published value
    return {name: value for name, value in fields.items() if value is not None}


class NavigationStore:
    """Thread-safe holder of the latest ``NavigationRecord`` and its freshness flag.

    Example::

        store = NavigationStore()
        store.apply_position(fix)
        if store.consume_new_data():
            record = store.snapshot()
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._record = NavigationRecord()
        self._data_available = False

    def snapshot(self) -> NavigationRecord:
        """Return the current record by value."""
        with self._lock:
            return self._record

    def consume_new_data(self) -> bool:
        """Test and clear the freshness flag.

        Returns:
            True if the record changed since the previous call.
        """
        with self._lock:
            available = self._data_available
            self._data_available = False
            return available

    def apply_position(self, fix: PositionFix) -> bool:
        """Publish the position group of a decoded GGA sentence.

        Returns:
            True if the record changed and the freshness flag was set.
        """
        return self._publish(
            _present(
                utc_time=fix.utc_time,
                latitude=fix.latitude,
                longitude=fix.longitude,
                altitude=fix.altitude,
                num_satellites=fix.num_satellites,
                fix_quality=fix.fix_quality,
            )
        )

    def apply_velocity(self, fix: VelocityFix) -> bool:
        """Publish the velocity group of a decoded VTG sentence.

        Returns:
            True if the record changed and the freshness flag was set.
        """
        return self._publish(
            _present(heading=fix.heading, ground_speed=fix.ground_speed)
        )

    def clear(self) -> None:
        """Forget every published value and the freshness flag."""
        with self._lock:
            self._record = NavigationRecord()
            self._data_available = False

    def _publish(self, changes: dict[str, object]) -> bool:
        with self._lock:
            record = dataclasses.replace(self._record, **changes)
            if record == self._record:
                return False
            self._record = record
            self._data_available = True
            return True
