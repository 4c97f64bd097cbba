"""
Route history persistence.
"""

from .route_history import RouteHistoryStore, SavedRoute

__all__ = ['RouteHistoryStore', 'SavedRoute']
