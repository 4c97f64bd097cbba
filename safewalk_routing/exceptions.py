"""
Error taxonomy for route planning.

All errors are terminal for a single planning attempt; the caller decides
whether to ask the user to try again.
"""


class RoutePlanningError(Exception):
    """Base class for every route planning failure."""


class InvalidInputError(RoutePlanningError, ValueError):
    """Malformed candidate set, path or incident record."""


class NoRouteAvailableError(InvalidInputError):
    """The routing engine returned zero paths for a valid start/end pair."""

    def __init__(self, message: str = "No routes returned."):
        super().__init__(message)


class MissingDestinationError(RoutePlanningError):
    """Geocoding produced zero results for the start or the end location."""

    def __init__(self, message: str = "Could not find one of the locations."):
        super().__init__(message)
