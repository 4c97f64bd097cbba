"""
Pydantic schemas for the safety-aware routing API.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from safewalk_routing.data.models import RoutingPreference, TravelMode


class LocationRequest(BaseModel):
    """A geocoded location."""
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")


class IncidentRequest(BaseModel):
    """A historical incident supplied by the incident-data collaborator."""
    latitude: float = Field(..., description="Latitude (numeric strings are accepted)")
    longitude: float = Field(..., description="Longitude (numeric strings are accepted)")
    category: Optional[str] = Field(default="", description="Free-text offense description, e.g. 'FELONY ASSAULT'")


class CandidatePathRequest(BaseModel):
    """One alternative returned by the routing engine."""
    coordinates: List[List[float]] = Field(..., description="GeoJSON LineString coordinates, [lon, lat] order")
    duration: float = Field(..., ge=0.0, description="Travel time in seconds")
    distance: float = Field(..., ge=0.0, description="Route length in meters")


class RouteSelectionRequest(BaseModel):
    """Request model for route selection."""
    start: Optional[LocationRequest] = Field(default=None, description="Geocoded start; null when geocoding found nothing")
    destination: Optional[LocationRequest] = Field(default=None, description="Geocoded destination; null when geocoding found nothing")
    start_label: Optional[str] = Field(default=None, description="Start text as typed by the user")
    end_label: Optional[str] = Field(default=None, description="Destination text as typed by the user")
    travel_mode: TravelMode = Field(default=TravelMode.WALKING, description="'walking', 'cycling' or 'driving'")
    preference: RoutingPreference = Field(default=RoutingPreference.FASTEST, description="'fastest' or 'safest'")
    candidates: List[CandidatePathRequest] = Field(default_factory=list, description="Alternatives from the routing engine")
    incidents: List[IncidentRequest] = Field(default_factory=list, description="Incidents covering the route area")
    save_to_history: bool = Field(default=False, description="Record this search in the route history")


class ScoreRequest(BaseModel):
    """Request model for scoring candidates without selecting."""
    candidates: List[CandidatePathRequest] = Field(..., description="Paths to score")
    incidents: List[IncidentRequest] = Field(default_factory=list, description="Incidents covering the route area")


class CandidateScore(BaseModel):
    """Score breakdown for one candidate."""
    index: int = Field(..., description="Position of the candidate in the request")
    distance_m: float = Field(..., description="Candidate distance in meters")
    crime_exposure: float = Field(..., ge=0.0)
    max_density: float = Field(..., ge=0.0)
    avg_density: float = Field(..., ge=0.0)
    distance_penalty: float = Field(..., ge=0.0)
    score: float = Field(..., ge=0.0, description="Total risk score (lower = safer)")


class RouteStats(BaseModel):
    """Statistics about the selected route."""
    total_distance_m: float = Field(..., description="Total route distance in meters")
    total_time_s: float = Field(..., description="Travel time in seconds from the routing engine")
    distance_display: str = Field(..., description="Distance in miles, e.g. '1.2 mi'")
    duration_display: str = Field(..., description="Duration, e.g. '15 min 0 sec'")
    chosen_index: int = Field(..., description="Position of the chosen candidate in the request")
    candidate_count: int = Field(..., description="Number of candidates considered")
    scoring_applied: bool = Field(..., description="Whether incident scoring decided the choice")
    score: Optional[float] = Field(default=None, description="Risk score of the chosen route, when scored")


class RouteResponse(BaseModel):
    """Response model for route selection."""
    success: bool = Field(..., description="Whether the route selection was successful")
    message: str = Field(..., description="Status message")
    route_geojson: Optional[Dict[str, Any]] = Field(default=None, description="Route as GeoJSON FeatureCollection")
    route_stats: Optional[RouteStats] = Field(default=None, description="Route statistics")
    candidate_scores: Optional[List[CandidateScore]] = Field(default=None, description="Scores of every candidate, when scored")
    saved_to_history: bool = Field(default=False, description="Whether the search was added to the history")


class ScoreResponse(BaseModel):
    """Response model for candidate scoring."""
    success: bool = Field(..., description="Whether scoring succeeded")
    scores: List[CandidateScore] = Field(..., description="One entry per candidate, in request order")
    safest_index: int = Field(..., description="Index of the lowest-scoring candidate")


class SavedRouteResponse(BaseModel):
    """One route history entry."""
    start_location: str
    end_location: str
    travel_mode: TravelMode
    preference: RoutingPreference
    timestamp: int = Field(..., description="Milliseconds since the epoch")


class HistoryResponse(BaseModel):
    """Route history, newest first."""
    routes: List[SavedRouteResponse]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    density_method: str = Field(..., description="Configured density estimator")
    history_available: bool = Field(..., description="Whether the route history store is usable")
    history_entries: int = Field(..., description="Number of saved routes")


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = Field(False, description="Always false for error responses")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Detailed error message")
    details: Optional[Any] = Field(None, description="Additional error details")
