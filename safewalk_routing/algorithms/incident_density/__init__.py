"""
Incident density estimators for route scoring.
"""

from .weights import IncidentWeight, classify_incident_category, incident_weight
from .base_estimator import BaseDensityEstimator
from .brute_force_estimator import BruteForceDensityEstimator, calculate_incident_density
from .kd_tree_estimator import KDTreeDensityEstimator
from .estimator_factory import (
    DensityMethod,
    DensityEstimatorFactory,
    create_estimator_from_string,
    create_fitted_estimator
)

__all__ = [
    'IncidentWeight',
    'classify_incident_category',
    'incident_weight',
    'BaseDensityEstimator',
    'BruteForceDensityEstimator',
    'KDTreeDensityEstimator',
    'calculate_incident_density',
    'DensityMethod',
    'DensityEstimatorFactory',
    'create_estimator_from_string',
    'create_fitted_estimator'
]
