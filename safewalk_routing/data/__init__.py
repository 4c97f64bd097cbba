"""
Data records and utilities for safety-aware routing.

This module contains:
- Domain models (incidents, candidate paths, selections)
- Incident data loading and filtering
- Degree-space distance helpers
"""

from .models import (
    IncidentPoint,
    CandidatePath,
    ScoredPath,
    RouteScoreBreakdown,
    RouteSelection,
    RoutingPreference,
    TravelMode,
)
from .data_loader import (
    load_incident_data,
    load_candidate_paths,
    parse_incident_records,
    parse_osrm_routes,
    filter_incidents_to_bounds
)
from .distance_utils import planar_degree_distance, get_points_bounds

__all__ = [
    'IncidentPoint',
    'CandidatePath',
    'ScoredPath',
    'RouteScoreBreakdown',
    'RouteSelection',
    'RoutingPreference',
    'TravelMode',
    'load_incident_data',
    'load_candidate_paths',
    'parse_osrm_routes',
    'parse_incident_records',
    'filter_incidents_to_bounds',
    'planar_degree_distance',
    'get_points_bounds'
]
