"""
Configuration management for safety-aware routing.
"""

from .routing_config import RoutingConfig

__all__ = ['RoutingConfig']
