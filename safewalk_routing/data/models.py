"""
Domain records shared by the density estimator, scorer and selector.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import InvalidInputError

Coordinate = Tuple[float, float]  # (lat, lon)


class RoutingPreference(Enum):
    """User-selected optimization goal."""
    FASTEST = "fastest"
    SAFEST = "safest"

    @classmethod
    def parse(cls, value) -> 'RoutingPreference':
        """Accept an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            available = [p.value for p in cls]
            raise InvalidInputError(f"Unknown routing preference '{value}'. Available: {available}")


class TravelMode(Enum):
    """Travel mode used when requesting paths; does not affect scoring."""
    WALKING = "walking"
    CYCLING = "cycling"
    DRIVING = "driving"


def as_float(value: Any, name: str) -> float:
    """Convert a numeric or numeric-string value, rejecting anything non-finite."""
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be numeric, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be numeric, got {value!r}")
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class IncidentPoint:
    """A historical incident at a location, tagged with a free-text category."""
    latitude: float
    longitude: float
    category: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'latitude', as_float(self.latitude, 'latitude'))
        object.__setattr__(self, 'longitude', as_float(self.longitude, 'longitude'))
        if self.category is None:
            object.__setattr__(self, 'category', "")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'IncidentPoint':
        """
        Build an incident from an open-data row.

        Args:
            record: Mapping with 'latitude', 'longitude' and an optional
                'ofns_desc' or 'category' key. Coordinates may be strings.

        Returns:
            IncidentPoint

        Raises:
            InvalidInputError: If a coordinate is missing or not numeric
        """
        category = record.get('ofns_desc', record.get('category'))
        return cls(
            latitude=record.get('latitude'),
            longitude=record.get('longitude'),
            category=str(category) if category is not None else "",
        )


@dataclass(frozen=True)
class CandidatePath:
    """One complete point-to-point route alternative from the routing engine."""
    points: Tuple[Coordinate, ...]
    duration: float  # seconds
    distance: float  # meters

    def __post_init__(self):
        try:
            points = tuple(
                tuple(p) if isinstance(p, (list, tuple)) else p for p in self.points
            )
        except TypeError:
            raise InvalidInputError(f"Candidate path points must be a sequence, got {self.points!r}")
        object.__setattr__(self, 'points', points)

    @classmethod
    def from_geojson_coordinates(cls, coordinates: Sequence[Sequence[float]],
                                 duration: float, distance: float) -> 'CandidatePath':
        """
        Build a path from GeoJSON [lon, lat] pairs as returned by OSRM-style engines.
        """
        return cls(
            points=tuple((coord[1], coord[0]) for coord in coordinates),
            duration=duration,
            distance=distance,
        )

    def validate(self) -> None:
        """
        Check the path is well formed.

        Raises:
            InvalidInputError: If the path has fewer than 2 points or any
                number is non-numeric, non-finite or negative
        """
        if len(self.points) < 2:
            raise InvalidInputError(
                f"Candidate path needs at least 2 points, got {len(self.points)}"
            )
        for i, point in enumerate(self.points):
            if not isinstance(point, tuple) or len(point) != 2:
                raise InvalidInputError(f"Point {i} must be a (lat, lon) pair, got {point!r}")
            as_float(point[0], f"points[{i}].latitude")
            as_float(point[1], f"points[{i}].longitude")
        if as_float(self.distance, 'distance') < 0:
            raise InvalidInputError("distance must be non-negative")
        if as_float(self.duration, 'duration') < 0:
            raise InvalidInputError("duration must be non-negative")

    @property
    def start(self) -> Coordinate:
        return self.points[0]

    @property
    def end(self) -> Coordinate:
        return self.points[-1]


@dataclass(frozen=True)
class RouteScoreBreakdown:
    """Additive terms of a route's risk score (lower total = safer)."""
    crime_exposure: float
    max_density: float
    avg_density: float
    distance_penalty: float
    total: float


@dataclass(frozen=True)
class ScoredPath:
    """A candidate path together with its computed risk score."""
    path: CandidatePath
    breakdown: RouteScoreBreakdown

    @property
    def score(self) -> float:
        return self.breakdown.total

    @property
    def points(self) -> Tuple[Coordinate, ...]:
        return self.path.points

    @property
    def duration(self) -> float:
        return self.path.duration

    @property
    def distance(self) -> float:
        return self.path.distance


@dataclass(frozen=True)
class RouteSelection:
    """Outcome of one selection call."""
    path: CandidatePath
    index: int
    preference: RoutingPreference
    scoring_applied: bool
    score: Optional[float] = None
    scored_paths: List[ScoredPath] = field(default_factory=list)

    @property
    def duration(self) -> float:
        return self.path.duration

    @property
    def distance(self) -> float:
        return self.path.distance

    @property
    def points(self) -> Tuple[Coordinate, ...]:
        return self.path.points

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the chosen route."""
        return {
            'preference': self.preference.value,
            'chosen_index': self.index,
            'scoring_applied': self.scoring_applied,
            'score': round(self.score, 4) if self.score is not None else None,
            'distance_m': round(self.distance, 1),
            'duration_s': round(self.duration, 1),
            'point_count': len(self.points),
        }
