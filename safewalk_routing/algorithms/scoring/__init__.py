"""
Route risk scoring.
"""

from .route_scorer import RouteScorer, ScoringMode, score_path

__all__ = ['RouteScorer', 'ScoringMode', 'score_path']
