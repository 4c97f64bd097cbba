"""
Factory for creating incident density estimators.

This makes it easy to switch between the reference scan and the spatial
index through configuration rather than code changes.
"""

from enum import Enum
from typing import Dict, Optional, Sequence

from .base_estimator import BaseDensityEstimator
from .brute_force_estimator import BruteForceDensityEstimator
from .kd_tree_estimator import KDTreeDensityEstimator
from ...config.routing_config import RoutingConfig
from ...data.models import IncidentPoint


class DensityMethod(Enum):
    """Available density estimation methods."""
    BRUTE_FORCE = "brute_force"
    KD_TREE = "kd_tree"


class DensityEstimatorFactory:
    """
    Factory for creating density estimators.

    Both methods produce identical densities; they differ only in how the
    incidents near a point are found.
    """

    _ESTIMATORS = {
        DensityMethod.BRUTE_FORCE: BruteForceDensityEstimator,
        DensityMethod.KD_TREE: KDTreeDensityEstimator,
    }

    @staticmethod
    def create_estimator(method: DensityMethod,
                         config: Optional[RoutingConfig] = None,
                         radius: Optional[float] = None) -> BaseDensityEstimator:
        """
        Create a density estimator using the specified method.

        Args:
            method: Density method to use
            config: Routing configuration
            radius: Radius override in degrees

        Returns:
            Unfitted density estimator

        Raises:
            ValueError: If method is not supported
        """
        if config is None:
            config = RoutingConfig()

        estimator_cls = DensityEstimatorFactory._ESTIMATORS.get(method)
        if estimator_cls is None:
            raise ValueError(f"Unsupported density method: {method}")
        return estimator_cls(config=config, radius=radius)

    @staticmethod
    def get_available_methods() -> Dict[str, str]:
        """
        Get available density methods with descriptions.

        Returns:
            Dictionary mapping method names to descriptions
        """
        return {
            DensityMethod.BRUTE_FORCE.value: "Full scan of every incident per query point",
            DensityMethod.KD_TREE.value: "KD-tree over incidents, same results with fewer comparisons"
        }


def create_estimator_from_string(method_name: str,
                                 config: Optional[RoutingConfig] = None,
                                 radius: Optional[float] = None) -> BaseDensityEstimator:
    """
    Create estimator from string name.

    Args:
        method_name: Name of the method ('brute_force' or 'kd_tree')
        config: Routing configuration
        radius: Radius override in degrees

    Returns:
        Unfitted density estimator
    """
    try:
        method = DensityMethod(method_name.lower())
    except ValueError:
        available = list(DensityEstimatorFactory.get_available_methods().keys())
        raise ValueError(f"Unknown method '{method_name}'. Available: {available}")
    return DensityEstimatorFactory.create_estimator(method, config, radius)


def create_fitted_estimator(incidents: Sequence[IncidentPoint],
                            config: Optional[RoutingConfig] = None) -> BaseDensityEstimator:
    """Create the configured estimator and fit it to an incident set."""
    config = config or RoutingConfig()
    estimator = create_estimator_from_string(config.density_method, config)
    estimator.fit(incidents)
    return estimator
