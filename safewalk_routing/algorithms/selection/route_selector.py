"""
Route selection between candidate paths for a fastest or safest preference.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence, TypeVar, Union

from ..incident_density.estimator_factory import create_fitted_estimator
from ..scoring.route_scorer import RouteScorer
from ...config.routing_config import RoutingConfig
from ...data.models import CandidatePath, IncidentPoint, RouteSelection, RoutingPreference
from ...exceptions import MissingDestinationError, NoRouteAvailableError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RouteSelector:
    """
    Chooses exactly one candidate path.

    - Fastest, or a single candidate: minimum distance, incidents ignored.
    - Safest with two or more candidates: minimum risk score.

    Ties go to the first candidate in input order. Each call is
    self-contained and never mutates its inputs.
    """

    def __init__(self, config: Optional[RoutingConfig] = None):
        """
        Initialize route selector.

        Args:
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()
        self.config.validate()

    def select(self, candidates: Iterable[CandidatePath],
               preference: Union[RoutingPreference, str],
               incidents: Sequence[IncidentPoint]) -> RouteSelection:
        """
        Select one candidate path.

        Args:
            candidates: Paths between the same start/end in the same travel mode
            preference: RoutingPreference or its string value
            incidents: Incident points for the area; only read under the
                safest preference with two or more candidates

        Returns:
            RouteSelection; `scoring_applied` tells whether risk scores decided

        Raises:
            NoRouteAvailableError: If there are no candidates
            InvalidInputError: If a candidate is malformed or the preference unknown
        """
        preference = RoutingPreference.parse(preference)
        candidates = list(candidates)

        if not candidates:
            raise NoRouteAvailableError()
        for candidate in candidates:
            candidate.validate()

        if preference is RoutingPreference.SAFEST and len(candidates) > 1:
            return self._select_safest(candidates, incidents)

        if preference is RoutingPreference.SAFEST:
            logger.info("Only one candidate path available - safety scoring skipped")
        return self._select_shortest(candidates, preference)

    def _select_shortest(self, candidates: List[CandidatePath],
                         preference: RoutingPreference) -> RouteSelection:
        """Pick the minimum-distance candidate."""
        best_index = 0
        for i in range(1, len(candidates)):
            if float(candidates[i].distance) < float(candidates[best_index].distance):
                best_index = i

        chosen = candidates[best_index]
        logger.info(f"Selected candidate {best_index} of {len(candidates)} by distance "
                    f"({float(chosen.distance):.0f}m)")
        return RouteSelection(
            path=chosen,
            index=best_index,
            preference=preference,
            scoring_applied=False
        )

    def _select_safest(self, candidates: List[CandidatePath],
                       incidents: Sequence[IncidentPoint]) -> RouteSelection:
        """Score every candidate and pick the strictly lowest score."""
        estimator = create_fitted_estimator(incidents, self.config)
        scorer = RouteScorer(estimator, self.config)
        scored = scorer.score_paths(candidates)

        best_index = 0
        for i in range(1, len(scored)):
            if scored[i].score < scored[best_index].score:
                best_index = i

        chosen = scored[best_index]
        logger.info(f"Selected candidate {best_index} of {len(candidates)} by risk score "
                    f"({chosen.score:.4f}, {float(chosen.distance):.0f}m)")
        return RouteSelection(
            path=chosen.path,
            index=best_index,
            preference=RoutingPreference.SAFEST,
            scoring_applied=True,
            score=chosen.score,
            scored_paths=scored
        )


def select_route(candidates: Iterable[CandidatePath],
                 preference: Union[RoutingPreference, str],
                 incidents: Sequence[IncidentPoint],
                 config: Optional[RoutingConfig] = None) -> RouteSelection:
    """Convenience function wrapping RouteSelector.select."""
    return RouteSelector(config).select(candidates, preference, incidents)


def resolve_endpoint(matches: Optional[Sequence[T]], label: str = "location") -> T:
    """
    Take the first geocoding match for a start or end location.

    Args:
        matches: Results returned by the geocoding collaborator
        label: Name of the endpoint, for logging

    Returns:
        The first match

    Raises:
        MissingDestinationError: If geocoding returned nothing
    """
    if not matches:
        logger.warning(f"Geocoding returned no results for {label}")
        raise MissingDestinationError()
    return matches[0]
