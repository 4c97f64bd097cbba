"""
Loaders for incident data (open-data rows, GeoJSON) and routing engine responses.
"""

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Mapping

from .models import CandidatePath, IncidentPoint
from ..exceptions import NoRouteAvailableError

logger = logging.getLogger(__name__)

CATEGORY_PROPERTY_KEYS = ('ofns_desc', 'category', 'offense')


def load_incident_data(data_path: str) -> List[IncidentPoint]:
    """
    Load incident points from a JSON file.

    Two shapes are accepted: a list of open-data rows carrying 'latitude',
    'longitude' and 'ofns_desc' (coordinates usually as strings), or a
    GeoJSON FeatureCollection of Point features.

    Args:
        data_path: Path to the JSON or GeoJSON file

    Returns:
        List of incident points

    Raises:
        FileNotFoundError: If the data file does not exist
        ValueError: If the file is not valid JSON or has an unknown shape
        InvalidInputError: If a row carries a non-numeric coordinate
    """
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Incident data file not found: {data_path}")

    logger.info(f"Loading incident data from: {data_path}")

    try:
        with open(data_path, 'r') as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in incident data file: {e}")

    if isinstance(raw, list):
        incidents = parse_incident_records(raw)
    elif isinstance(raw, dict) and 'features' in raw:
        incidents = parse_geojson_features(raw['features'])
    else:
        raise ValueError("Incident data must be a list of rows or a GeoJSON FeatureCollection")

    logger.info(f"Loaded {len(incidents)} incidents")
    return incidents


def parse_incident_records(records: Iterable[Mapping[str, Any]]) -> List[IncidentPoint]:
    """
    Convert open-data rows to incident points.

    Rows without coordinates are skipped; the public datasets contain
    incidents with redacted locations.
    """
    incidents = []
    skipped = 0

    for record in records:
        if record.get('latitude') in (None, '') or record.get('longitude') in (None, ''):
            skipped += 1
            continue
        incidents.append(IncidentPoint.from_record(record))

    if skipped:
        logger.warning(f"Skipped {skipped} incident rows without coordinates")
    return incidents


def parse_geojson_features(features: Iterable[Dict[str, Any]]) -> List[IncidentPoint]:
    """Convert GeoJSON Point features ([lon, lat] order) to incident points."""
    incidents = []

    for feature in features:
        geometry = feature.get('geometry') or {}
        if geometry.get('type') != 'Point':
            continue
        coords = geometry.get('coordinates') or []
        if len(coords) < 2:
            logger.debug(f"Skipping point feature with coordinates {coords!r}")
            continue

        properties = feature.get('properties') or {}
        category = next(
            (properties[key] for key in CATEGORY_PROPERTY_KEYS if properties.get(key)),
            ""
        )
        incidents.append(IncidentPoint(
            latitude=coords[1],
            longitude=coords[0],
            category=str(category),
        ))

    return incidents


def parse_osrm_routes(response: Mapping[str, Any]) -> List[CandidatePath]:
    """
    Convert an OSRM route response (geometries=geojson) to candidate paths.

    Args:
        response: Decoded JSON body with a 'routes' list

    Returns:
        Candidate paths in the engine's order

    Raises:
        NoRouteAvailableError: If the response holds no routes
    """
    routes = response.get('routes') or []
    if not routes:
        raise NoRouteAvailableError()

    return [
        CandidatePath.from_geojson_coordinates(
            route['geometry']['coordinates'],
            duration=route['duration'],
            distance=route['distance']
        )
        for route in routes
    ]


def load_candidate_paths(data_path: str) -> List[CandidatePath]:
    """Load candidate paths from a saved OSRM route response."""
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Route response file not found: {data_path}")

    try:
        with open(data_path, 'r') as f:
            response = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in route response file: {e}")

    paths = parse_osrm_routes(response)
    logger.info(f"Loaded {len(paths)} candidate paths from {data_path}")
    return paths


def filter_incidents_to_bounds(incidents: Iterable[IncidentPoint],
                               lat_min: float, lat_max: float,
                               lon_min: float, lon_max: float,
                               buffer: float = 0.002) -> List[IncidentPoint]:
    """
    Filter incidents to a geographic bounding box with buffer.

    Args:
        incidents: Incident points
        lat_min, lat_max: Latitude bounds
        lon_min, lon_max: Longitude bounds
        buffer: Buffer distance in degrees

    Returns:
        Incidents inside the buffered bounds, in their original order
    """
    lat_min_buf = lat_min - buffer
    lat_max_buf = lat_max + buffer
    lon_min_buf = lon_min - buffer
    lon_max_buf = lon_max + buffer

    filtered = [
        incident for incident in incidents
        if (lat_min_buf <= incident.latitude <= lat_max_buf and
            lon_min_buf <= incident.longitude <= lon_max_buf)
    ]

    logger.debug(f"Filtered to {len(filtered)} incidents within bounds")
    return filtered
