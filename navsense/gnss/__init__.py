"""GNSS module for reading navigation records from an NMEA serial receiver."""

from navsense.gnss.pipeline import NavigationPipeline
from navsense.gnss.receiver import GNSSReceiver
from navsense.gnss.store import NavigationStore
from navsense.gnss.types import NavigationRecord

__all__ = [
    "GNSSReceiver",
    "NavigationPipeline",
    "NavigationRecord",
    "NavigationStore",
]
