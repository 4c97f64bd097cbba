"""Display strings for route duration and distance."""

import math

METERS_TO_MILES = 0.000621371


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as 'M min S sec'."""
    minutes = int(seconds // 60)
    remaining_seconds = int(math.floor(seconds - minutes * 60 + 0.5))
    if remaining_seconds == 60:
        minutes += 1
        remaining_seconds = 0
    return f"{minutes} min {remaining_seconds} sec"


def format_distance(meters: float) -> str:
    """Format a distance in meters as miles with one decimal."""
    return f"{meters * METERS_TO_MILES:.1f} mi"
