"""JSON formatting utilities for navigation records."""

import json

from navsense.gnss import NavigationRecord

__all__ = ["format_navigation_message"]


def format_navigation_message(record: NavigationRecord) -> str:
    """Serialize a navigation record into a JSON string for WebSocket transmission."""
    return json.dumps({
        "type": "navigation",
        "utc_time": record.utc_time,
        "lat": record.latitude,
        "lon": record.longitude,
        "alt": record.altitude,
        "num_satellites": record.num_satellites,
        "fix_quality": record.fix_quality,
        "heading_degrees": record.heading,
        "ground_speed_kmh": record.ground_speed,
    })
