"""
Route selection.
"""

from .route_selector import RouteSelector, select_route, resolve_endpoint

__all__ = ['RouteSelector', 'select_route', 'resolve_endpoint']
