"""
Risk scoring for candidate paths based on proximity-weighted incident density.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from ..incident_density.base_estimator import BaseDensityEstimator
from ..incident_density.estimator_factory import create_fitted_estimator
from ...config.routing_config import RoutingConfig
from ...data.models import CandidatePath, IncidentPoint, RouteScoreBreakdown, ScoredPath

logger = logging.getLogger(__name__)


class ScoringMode(Enum):
    """How the average density term is normalised."""
    REFERENCE = "reference"              # sampled exposure / all points
    SAMPLED_AVERAGE = "sampled_average"  # sampled exposure / sampled points


class RouteScorer:
    """
    Scores candidate paths; lower scores are safer.

    score = crime_exposure
            + max_density * max_density_weight
            + avg_density * avg_density_weight
            + distance * distance_penalty_factor

    crime_exposure sums density ** exposure_exponent over every
    `sample_stride`-th point (indices 0, 2, 4, ... by default), skipping
    points with zero density. max_density is taken over all points. In the
    reference mode avg_density divides the sampled exposure by the full point
    count; that mismatch is part of the ranking and is kept as is.
    """

    def __init__(self, estimator: BaseDensityEstimator,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize route scorer.

        Args:
            estimator: Density estimator already fitted to the session's incidents
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()
        self.config.validate()
        self.estimator = estimator
        self.mode = ScoringMode(self.config.scoring_mode)

    def score(self, path: CandidatePath) -> RouteScoreBreakdown:
        """
        Compute the risk score of one path.

        Args:
            path: Candidate path with at least 2 points

        Returns:
            RouteScoreBreakdown with every additive term and the total

        Raises:
            InvalidInputError: If the path is malformed
        """
        path.validate()

        densities = [self.estimator.density(float(lat), float(lon)) for lat, lon in path.points]
        sampled = densities[::self.config.sample_stride]

        crime_exposure = 0.0
        for density in sampled:
            if density > 0:
                crime_exposure += density ** self.config.exposure_exponent

        max_density = max(densities)

        if self.mode is ScoringMode.SAMPLED_AVERAGE:
            avg_density = crime_exposure / len(sampled)
        else:
            avg_density = crime_exposure / len(densities)

        distance_penalty = float(path.distance) * self.config.distance_penalty_factor

        total = (crime_exposure
                 + max_density * self.config.max_density_weight
                 + avg_density * self.config.avg_density_weight
                 + distance_penalty)

        return RouteScoreBreakdown(
            crime_exposure=crime_exposure,
            max_density=max_density,
            avg_density=avg_density,
            distance_penalty=distance_penalty,
            total=total
        )

    def score_paths(self, paths: Sequence[CandidatePath]) -> List[ScoredPath]:
        """Score every path, preserving input order."""
        scored = []
        for i, path in enumerate(paths):
            breakdown = self.score(path)
            logger.debug(f"Candidate {i}: score={breakdown.total:.4f} "
                         f"(exposure={breakdown.crime_exposure:.2f}, max={breakdown.max_density:.0f}, "
                         f"distance={path.distance:.0f}m)")
            scored.append(ScoredPath(path=path, breakdown=breakdown))
        return scored


def score_path(path: CandidatePath, incidents: Sequence[IncidentPoint],
               config: Optional[RoutingConfig] = None) -> float:
    """
    Convenience function returning the total score of one path.

    Args:
        path: Candidate path
        incidents: Incident points for the planning session
        config: Routing configuration

    Returns:
        Non-negative score (lower is safer)
    """
    config = config or RoutingConfig()
    scorer = RouteScorer(create_fitted_estimator(incidents, config), config)
    return scorer.score(path).total
