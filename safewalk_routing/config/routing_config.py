"""
Configuration management for route scoring and selection parameters.
"""

import os
from dataclasses import dataclass, field


@dataclass
class RoutingConfig:
    """Configuration parameters for safety-aware route selection."""

    # Incident Density
    density_radius: float = 0.003  # degrees - planar radius around a path point
    density_method: str = 'brute_force'  # 'brute_force' or 'kd_tree'

    # Route Scoring
    exposure_exponent: float = 2.5  # superlinear penalty on dense clusters
    max_density_weight: float = 15.0
    avg_density_weight: float = 8.0
    distance_penalty_factor: float = 0.0001  # per meter, tie-breaker for shorter paths
    sample_stride: int = 2  # every other point contributes to crime exposure
    scoring_mode: str = 'reference'  # 'reference' or 'sampled_average'

    # Route History
    history_limit: int = 10
    history_db_path: str = field(
        default_factory=lambda: os.environ.get('SAFEWALK_HISTORY_DB', 'route_history.db')
    )

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.density_radius <= 0:
            raise ValueError("density_radius must be positive")
        if self.exposure_exponent <= 0:
            raise ValueError("exposure_exponent must be positive")
        if self.max_density_weight < 0 or self.avg_density_weight < 0:
            raise ValueError("density weights must be non-negative")
        if self.distance_penalty_factor < 0:
            raise ValueError("distance_penalty_factor must be non-negative")
        if self.sample_stride < 1:
            raise ValueError("sample_stride must be >= 1")
        if self.scoring_mode not in ('reference', 'sampled_average'):
            raise ValueError("scoring_mode must be 'reference' or 'sampled_average'")
        if self.density_method not in ('brute_force', 'kd_tree'):
            raise ValueError("density_method must be 'brute_force' or 'kd_tree'")
        if self.history_limit < 1:
            raise ValueError("history_limit must be >= 1")

    @classmethod
    def create_reference_config(cls) -> 'RoutingConfig':
        """Create the default configuration (brute-force density, reference scoring)."""
        return cls()

    @classmethod
    def create_indexed_config(cls) -> 'RoutingConfig':
        """
        Create configuration that uses a spatial index over incidents.

        Produces the same scores as the reference configuration; only the
        density lookup changes, which pays off for large incident sets.
        """
        return cls(density_method='kd_tree')

    @classmethod
    def create_sampled_average_config(cls) -> 'RoutingConfig':
        """
        Create configuration that averages crime exposure over sampled points only.

        The reference scoring divides the sampled exposure by the full point
        count; this mode divides by the number of sampled points instead and
        therefore ranks routes differently.
        """
        return cls(scoring_mode='sampled_average')
