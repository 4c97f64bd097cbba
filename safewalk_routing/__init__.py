"""
SafeWalk Routing - safety-aware route selection.

Chooses between alternative paths returned by a routing engine, either by
distance (fastest) or by proximity-weighted historical incident density
(safest). The core is a pure computation over already-fetched data: it makes
no network calls and keeps no state between calls.

## Quick Start

```python
from safewalk_routing import CandidatePath, IncidentPoint, RouteSelector

incidents = [IncidentPoint(40.7505, -73.9934, "FELONY ASSAULT")]
candidates = [
    CandidatePath(points=[(40.7505, -73.9934), (40.7527, -73.9772)], duration=900, distance=1000),
    CandidatePath(points=[(40.7480, -73.9900), (40.7527, -73.9772)], duration=1200, distance=1400),
]

selection = RouteSelector().select(candidates, "safest", incidents)
print(selection.index, selection.score, selection.scoring_applied)
```

## Main Components

- **RouteSelector**: fastest / safest selection between candidates
- **RouteScorer**: risk score of a single path
- **BruteForceDensityEstimator / KDTreeDensityEstimator**: incident density
- **RoutingConfig**: configuration management
- **RouteHistoryStore**: recent searches, persisted in SQLite

## Architecture

- `algorithms/`: density estimation, scoring and selection
- `data/`: domain models, incident loading, distance helpers
- `history/`: route history persistence
- `config/`: configuration management
"""

from .algorithms import (
    RouteSelector,
    RouteScorer,
    ScoringMode,
    BruteForceDensityEstimator,
    KDTreeDensityEstimator,
    calculate_incident_density,
    classify_incident_category,
    score_path,
    select_route,
    resolve_endpoint
)
from .config import RoutingConfig
from .data import (
    IncidentPoint,
    CandidatePath,
    ScoredPath,
    RouteSelection,
    RoutingPreference,
    TravelMode,
    load_incident_data,
    load_candidate_paths
)
from .exceptions import (
    RoutePlanningError,
    InvalidInputError,
    NoRouteAvailableError,
    MissingDestinationError
)
from .history import RouteHistoryStore, SavedRoute

# Version information
__version__ = "1.0.0"

# Public API
__all__ = [
    # Main interfaces
    'RouteSelector',
    'RouteScorer',
    'ScoringMode',
    'RoutingConfig',
    'RouteHistoryStore',
    'SavedRoute',

    # Density estimation
    'BruteForceDensityEstimator',
    'KDTreeDensityEstimator',
    'calculate_incident_density',
    'classify_incident_category',

    # Functional shortcuts
    'score_path',
    'select_route',
    'resolve_endpoint',

    # Data model
    'IncidentPoint',
    'CandidatePath',
    'ScoredPath',
    'RouteSelection',
    'RoutingPreference',
    'TravelMode',
    'load_incident_data',
    'load_candidate_paths',

    # Errors
    'RoutePlanningError',
    'InvalidInputError',
    'NoRouteAvailableError',
    'MissingDestinationError',

    # Metadata
    '__version__'
]
