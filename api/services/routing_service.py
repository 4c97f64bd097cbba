"""
Service layer for the safety-aware routing API.
"""

import logging
from typing import List, Optional, Sequence

import geojson

from safewalk_routing import __version__
from safewalk_routing.algorithms.incident_density.estimator_factory import create_fitted_estimator
from safewalk_routing.algorithms.scoring.route_scorer import RouteScorer
from safewalk_routing.algorithms.selection.route_selector import RouteSelector, resolve_endpoint
from safewalk_routing.config.routing_config import RoutingConfig
from safewalk_routing.data.data_loader import filter_incidents_to_bounds
from safewalk_routing.data.distance_utils import get_points_bounds
from safewalk_routing.data.models import (
    CandidatePath,
    IncidentPoint,
    RouteSelection,
    RoutingPreference,
    ScoredPath,
)
from safewalk_routing.exceptions import InvalidInputError, NoRouteAvailableError
from safewalk_routing.formatting import format_distance, format_duration
from safewalk_routing.history.route_history import RouteHistoryStore, SavedRoute
from api.schemas.routing import (
    CandidatePathRequest,
    CandidateScore,
    HealthResponse,
    HistoryResponse,
    IncidentRequest,
    LocationRequest,
    RouteResponse,
    RouteSelectionRequest,
    RouteStats,
    SavedRouteResponse,
    ScoreRequest,
    ScoreResponse,
)

logger = logging.getLogger(__name__)


class SafeRoutingService:
    """
    Service class that provides route selection, scoring and history for the API.

    Requests carry already-fetched candidates and incidents; the service
    converts them to domain records, delegates to the core and shapes the
    result as GeoJSON.
    """

    def __init__(self, config: Optional[RoutingConfig] = None,
                 history_db_path: Optional[str] = None):
        """
        Initialize the routing service.

        Args:
            config: Routing configuration parameters
            history_db_path: Route history database (if None, uses config)
        """
        self.config = config or RoutingConfig()
        self.config.validate()
        self.selector = RouteSelector(self.config)
        self._history_db_path = history_db_path
        self._history: Optional[RouteHistoryStore] = None

    @property
    def history(self) -> RouteHistoryStore:
        """Route history store, opened on first use."""
        if self._history is None:
            self._history = RouteHistoryStore(self._history_db_path, self.config)
        return self._history

    def get_health_status(self) -> HealthResponse:
        """Get the health status of the routing service."""
        try:
            history_entries = len(self.history.list_routes())
            history_available = True
        except Exception as e:
            logger.error(f"Route history unavailable: {e}")
            history_entries = 0
            history_available = False

        return HealthResponse(
            status="healthy" if history_available else "degraded",
            version=__version__,
            density_method=self.config.density_method,
            history_available=history_available,
            history_entries=history_entries
        )

    def select_route(self, request: RouteSelectionRequest) -> RouteResponse:
        """
        Select one route among the request's candidates.

        Args:
            request: Route selection request

        Returns:
            RouteResponse with route GeoJSON and statistics

        Raises:
            MissingDestinationError: If the start or destination was not geocoded
            NoRouteAvailableError: If the request carries no candidates
            InvalidInputError: If a candidate or incident is malformed
        """
        start = resolve_endpoint([request.start] if request.start else [], "start")
        destination = resolve_endpoint([request.destination] if request.destination else [], "destination")

        candidates = self._to_candidate_paths(request.candidates)
        incidents = self._to_incidents(request.incidents)

        logger.info(f"Selecting {request.preference.value} {request.travel_mode.value} route "
                    f"among {len(candidates)} candidates with {len(incidents)} incidents")

        if request.preference is RoutingPreference.SAFEST and len(candidates) > 1:
            incidents = self._incidents_near(candidates, incidents)

        selection = self.selector.select(candidates, request.preference, incidents)

        saved = False
        if request.save_to_history:
            saved = self.history.save(SavedRoute(
                start_location=request.start_label or self._location_label(start),
                end_location=request.end_label or self._location_label(destination),
                travel_mode=request.travel_mode,
                preference=request.preference
            ))

        return RouteResponse(
            success=True,
            message=self._selection_message(selection),
            route_geojson=self._route_to_geojson(selection, start, destination, request),
            route_stats=self._calculate_route_stats(selection, len(candidates)),
            candidate_scores=(self._to_candidate_scores(selection.scored_paths)
                              if selection.scoring_applied else None),
            saved_to_history=saved
        )

    def score_candidates(self, request: ScoreRequest) -> ScoreResponse:
        """
        Score every candidate without selecting.

        Raises:
            NoRouteAvailableError: If the request carries no candidates
            InvalidInputError: If a candidate or incident is malformed
        """
        candidates = self._to_candidate_paths(request.candidates)
        if not candidates:
            raise NoRouteAvailableError()

        incidents = self._to_incidents(request.incidents)
        scorer = RouteScorer(create_fitted_estimator(incidents, self.config), self.config)
        scores = self._to_candidate_scores(scorer.score_paths(candidates))

        safest_index = 0
        for entry in scores[1:]:
            if entry.score < scores[safest_index].score:
                safest_index = entry.index

        return ScoreResponse(success=True, scores=scores, safest_index=safest_index)

    def list_history(self) -> HistoryResponse:
        """Get saved routes, newest first."""
        return HistoryResponse(routes=[
            SavedRouteResponse(
                start_location=entry.start_location,
                end_location=entry.end_location,
                travel_mode=entry.travel_mode,
                preference=entry.preference,
                timestamp=entry.timestamp
            )
            for entry in self.history.list_routes()
        ])

    def delete_history_entry(self, timestamp: int) -> int:
        """Delete saved routes with the given timestamp."""
        return self.history.delete(timestamp)

    def clear_history(self) -> None:
        """Remove every saved route."""
        self.history.clear()

    def _to_candidate_paths(self, candidates: Sequence[CandidatePathRequest]) -> List[CandidatePath]:
        """Convert request candidates ([lon, lat] order) to domain paths."""
        paths = []
        for i, candidate in enumerate(candidates):
            for coord in candidate.coordinates:
                if len(coord) < 2:
                    raise InvalidInputError(f"Candidate {i} has a coordinate without [lon, lat]: {coord}")
            paths.append(CandidatePath.from_geojson_coordinates(
                candidate.coordinates,
                duration=candidate.duration,
                distance=candidate.distance
            ))
        return paths

    def _to_incidents(self, incidents: Sequence[IncidentRequest]) -> List[IncidentPoint]:
        """Convert request incidents to domain records."""
        return [
            IncidentPoint(
                latitude=incident.latitude,
                longitude=incident.longitude,
                category=incident.category
            )
            for incident in incidents
        ]

    def _incidents_near(self, candidates: List[CandidatePath],
                        incidents: List[IncidentPoint]) -> List[IncidentPoint]:
        """Drop incidents that cannot fall within the density radius of any candidate."""
        for candidate in candidates:
            candidate.validate()

        bounds = get_points_bounds(point for candidate in candidates for point in candidate.points)
        nearby = filter_incidents_to_bounds(
            incidents, buffer=2 * self.config.density_radius, **bounds
        )
        logger.debug(f"Kept {len(nearby)} of {len(incidents)} incidents near the candidates")
        return nearby

    def _selection_message(self, selection: RouteSelection) -> str:
        if selection.scoring_applied:
            return "Safest route selected"
        if selection.preference is RoutingPreference.SAFEST:
            return "Only one route available - safety comparison not possible"
        return "Fastest route selected"

    def _location_label(self, location: LocationRequest) -> str:
        return f"{location.latitude:.6f}, {location.longitude:.6f}"

    def _route_to_geojson(self, selection: RouteSelection, start: LocationRequest,
                          destination: LocationRequest,
                          request: RouteSelectionRequest) -> dict:
        """
        Convert the selected route to GeoJSON format.

        Args:
            selection: Selected route
            start: Geocoded start
            destination: Geocoded destination
            request: Original request

        Returns:
            GeoJSON FeatureCollection with the route line and both endpoints
        """
        geojson_coords = [[float(lon), float(lat)] for lat, lon in selection.points]

        line_feature = geojson.Feature(
            geometry=geojson.LineString(geojson_coords),
            properties={
                "preference": selection.preference.value,
                "travel_mode": request.travel_mode.value,
                "total_distance_m": float(selection.distance),
                "duration_s": float(selection.duration),
                "scoring_applied": selection.scoring_applied,
                "score": selection.score,
                "point_count": len(selection.points)
            }
        )

        start_feature = geojson.Feature(
            geometry=geojson.Point([start.longitude, start.latitude]),
            properties={"type": "start", "name": request.start_label or "Start Point"}
        )

        end_feature = geojson.Feature(
            geometry=geojson.Point([destination.longitude, destination.latitude]),
            properties={"type": "end", "name": request.end_label or "End Point"}
        )

        return geojson.FeatureCollection([line_feature, start_feature, end_feature])

    def _calculate_route_stats(self, selection: RouteSelection, candidate_count: int) -> RouteStats:
        """Calculate statistics for the selected route."""
        distance_m = float(selection.distance)
        time_s = float(selection.duration)

        return RouteStats(
            total_distance_m=round(distance_m, 1),
            total_time_s=round(time_s, 0),
            distance_display=format_distance(distance_m),
            duration_display=format_duration(time_s),
            chosen_index=selection.index,
            candidate_count=candidate_count,
            scoring_applied=selection.scoring_applied,
            score=selection.score
        )

    def _to_candidate_scores(self, scored_paths: Sequence[ScoredPath]) -> List[CandidateScore]:
        return [
            CandidateScore(
                index=i,
                distance_m=float(scored.distance),
                crime_exposure=scored.breakdown.crime_exposure,
                max_density=scored.breakdown.max_density,
                avg_density=scored.breakdown.avg_density,
                distance_penalty=scored.breakdown.distance_penalty,
                score=scored.score
            )
            for i, scored in enumerate(scored_paths)
        ]


# Global service instance
routing_service = SafeRoutingService()


def get_routing_service() -> SafeRoutingService:
    """FastAPI dependency returning the shared service."""
    return routing_service
