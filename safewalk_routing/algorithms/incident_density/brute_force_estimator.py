"""
Reference incident density: a full scan of the incident set per query.
"""

import logging
from typing import Optional, Sequence, Tuple

from .base_estimator import BaseDensityEstimator
from .weights import incident_weight
from ...config.routing_config import RoutingConfig
from ...data.distance_utils import planar_degree_distance
from ...data.models import IncidentPoint, as_float
from ...exceptions import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_DENSITY_RADIUS = 0.003  # degrees


def calculate_incident_density(point: Tuple[float, float],
                               incidents: Sequence[IncidentPoint],
                               radius: float = DEFAULT_DENSITY_RADIUS) -> float:
    """
    Weighted count of incidents within `radius` degrees of a point.

    Incidents strictly farther than `radius` are excluded. Each remaining
    incident contributes its category weight (8, 5 or 1).

    Args:
        point: (lat, lon)
        incidents: Incident points
        radius: Radius in degrees

    Returns:
        Density value, 0.0 for an empty incident set
    """
    try:
        lat, lon = point
    except (TypeError, ValueError):
        raise InvalidInputError(f"Query point must be a (lat, lon) pair, got {point!r}")
    lat, lon = as_float(lat, 'latitude'), as_float(lon, 'longitude')
    total = 0
    for incident in incidents:
        distance = planar_degree_distance(lat, lon, incident.latitude, incident.longitude)
        if distance > radius:
            continue
        total += incident_weight(incident.category)
    return float(total)


class BruteForceDensityEstimator(BaseDensityEstimator):
    """
    Rescans every incident for each query point.

    Cost is O(incidents) per query; suitable for the few-hundred-row samples
    the open-data endpoints return by default.
    """

    def __init__(self, config: Optional[RoutingConfig] = None,
                 radius: Optional[float] = None):
        super().__init__(config, radius)
        self.incidents: Tuple[IncidentPoint, ...] = ()

    def fit(self, incidents: Sequence[IncidentPoint]) -> None:
        self.incidents = tuple(incidents)
        self.incident_count = len(self.incidents)
        self.is_fitted = True
        logger.debug(f"BruteForceDensityEstimator fitted to {self.incident_count} incidents")

    def density(self, lat: float, lon: float) -> float:
        self.validate_fitted()
        return calculate_incident_density((lat, lon), self.incidents, self.radius)
