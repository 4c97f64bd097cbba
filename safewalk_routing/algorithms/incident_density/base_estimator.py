"""
Base abstract class for incident density estimators.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...config.routing_config import RoutingConfig
from ...data.models import IncidentPoint


class BaseDensityEstimator(ABC):
    """
    Abstract base class for incident density estimators.

    An estimator is fitted once to the incident set of a planning session and
    then answers density queries for arbitrary points. Every implementation
    must return exactly the brute-force weighted count.
    """

    def __init__(self, config: Optional[RoutingConfig] = None,
                 radius: Optional[float] = None):
        """
        Initialize the density estimator.

        Args:
            config: Routing configuration parameters
            radius: Density radius in degrees (if None, uses config)
        """
        self.config = config or RoutingConfig()
        self.radius = radius if radius is not None else self.config.density_radius
        self.is_fitted = False
        self.incident_count = 0

    @abstractmethod
    def fit(self, incidents: Sequence[IncidentPoint]) -> None:
        """
        Fit the estimator to an incident set.

        Args:
            incidents: Incident points; the sequence is read, never modified
        """
        pass

    @abstractmethod
    def density(self, lat: float, lon: float) -> float:
        """
        Weighted count of incidents within the radius of a point.

        Args:
            lat: Latitude
            lon: Longitude

        Returns:
            Sum of incident weights (0.0 when nothing is nearby)
        """
        pass

    def validate_fitted(self) -> None:
        """Check if the estimator has been fitted to data."""
        if not self.is_fitted:
            raise RuntimeError("Density estimator must be fitted to incidents before use")
