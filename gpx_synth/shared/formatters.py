"""
Formatting and unit conversion utilities for display.

Used by the generation service and the CLI.
"""

import re


def pace_to_speed(pace_min_km: float) -> float:
    """Convert pace (min/km) to speed (km/h)."""
    return 60 / pace_min_km


def speed_to_pace(speed_kmh: float) -> float:
    """Convert speed (km/h) to pace (min/km)."""
    return 60 / speed_kmh


def format_pace(pace_min_km: float | None) -> str:
    """
    Format pace as 'M:SS min/km'.

    Args:
        pace_min_km: Pace in minutes per km

    Returns:
        Formatted string (e.g., '5:30 min/km')
    """
    if pace_min_km is None:
        return "—"

    minutes = int(pace_min_km)
    seconds = round((pace_min_km - minutes) * 60)
    if seconds == 60:
        minutes += 1
        seconds = 0

    return f"{minutes}:{seconds:02d} min/km"


def format_duration(total_seconds: float) -> str:
    """
    Format seconds as 'H:MM:SS', or 'M:SS' under an hour.

    Examples:
        3661 -> '1:01:01'
        125  -> '2:05'
    """
    total = round(total_seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_distance_km(km: float) -> str:
    """
    Format distance.

    Returns:
        Formatted string (e.g., '12.5 km' or '850 m')
    """
    if km < 1:
        return f"{int(km * 1000)} m"
    return f"{km:.1f} km"


def suggested_filename(name: str) -> str:
    """
    File name for a generated track.

    Lowercases the name and replaces every non-alphanumeric
    character with an underscore: 'Morning Run!' -> 'morning_run_.gpx'
    """
    return re.sub(r"[^a-z0-9]", "_", name.lower()) + ".gpx"
