"""
Route scoring and selection algorithms.

This module contains:
- Incident density estimation (reference scan and spatial index)
- Route risk scoring
- Fastest / safest route selection
"""

from .incident_density import (
    BaseDensityEstimator,
    BruteForceDensityEstimator,
    KDTreeDensityEstimator,
    DensityMethod,
    calculate_incident_density,
    classify_incident_category
)
from .scoring import RouteScorer, ScoringMode, score_path
from .selection import RouteSelector, select_route, resolve_endpoint

__all__ = [
    'BaseDensityEstimator',
    'BruteForceDensityEstimator',
    'KDTreeDensityEstimator',
    'DensityMethod',
    'calculate_incident_density',
    'classify_incident_category',
    'RouteScorer',
    'ScoringMode',
    'score_path',
    'RouteSelector',
    'select_route',
    'resolve_endpoint'
]
