"""Helper factories for server tests."""

from navsense.gnss import NavigationRecord


def make_record(with_velocity: bool = True) -> NavigationRecord:
    return NavigationRecord(
        utc_time=120000.0,
        latitude=45.0,
        longitude=9.0,
        altitude=100,
        num_satellites=8,
        fix_quality=1,
        heading=12 if with_velocity else None,
        ground_speed=8.3 if with_velocity else None,
    )
