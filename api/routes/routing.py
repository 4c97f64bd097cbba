"""
FastAPI routes for safety-aware routing endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status
import logging

from api.schemas.routing import (
    RouteSelectionRequest,
    RouteResponse,
    ScoreRequest,
    ScoreResponse,
    HealthResponse,
    HistoryResponse
)
from api.services.routing_service import SafeRoutingService, get_routing_service
from safewalk_routing import __version__
from safewalk_routing.data.models import RoutingPreference

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/routing", tags=["routing"])


@router.get("/health", response_model=HealthResponse, summary="Health Check")
async def health_check(service: SafeRoutingService = Depends(get_routing_service)):
    """
    Check the health status of the routing service.

    Returns:
        HealthResponse: Service health information
    """
    try:
        return service.get_health_status()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Health check failed"
        )


@router.post("/select", response_model=RouteResponse, summary="Select Route")
async def select_route(request: RouteSelectionRequest,
                       service: SafeRoutingService = Depends(get_routing_service)):
    """
    Select one route among the alternatives returned by a routing engine.

    With the 'fastest' preference the shortest candidate wins. With 'safest'
    and at least two candidates, each candidate is scored against the
    supplied incidents and the lowest score wins.

    Example:
        ```json
        {
            "start": {"latitude": 40.7505, "longitude": -73.9934},
            "destination": {"latitude": 40.7527, "longitude": -73.9772},
            "preference": "safest",
            "travel_mode": "walking",
            "candidates": [
                {"coordinates": [[-73.9934, 40.7505], [-73.9772, 40.7527]],
                 "duration": 900, "distance": 1000}
            ],
            "incidents": [
                {"latitude": "40.7506", "longitude": "-73.9933", "category": "ROBBERY"}
            ]
        }
        ```
    """
    logger.info(f"Route selection request: {request.preference.value} with "
                f"{len(request.candidates)} candidates")
    return service.select_route(request)


@router.post("/fastest", response_model=RouteResponse, summary="Select Fastest Route")
async def select_fastest_route(request: RouteSelectionRequest,
                               service: SafeRoutingService = Depends(get_routing_service)):
    """
    Select the shortest candidate, ignoring incident data.
    """
    request = request.model_copy(update={"preference": RoutingPreference.FASTEST})
    return service.select_route(request)


@router.post("/safest", response_model=RouteResponse, summary="Select Safest Route")
async def select_safest_route(request: RouteSelectionRequest,
                              service: SafeRoutingService = Depends(get_routing_service)):
    """
    Select the candidate with the lowest incident risk score.
    """
    request = request.model_copy(update={"preference": RoutingPreference.SAFEST})
    return service.select_route(request)


@router.post("/score", response_model=ScoreResponse, summary="Score Candidates")
async def score_candidates(request: ScoreRequest,
                           service: SafeRoutingService = Depends(get_routing_service)):
    """
    Score every candidate and report the breakdown of each risk score.
    """
    return service.score_candidates(request)


@router.get("/history", response_model=HistoryResponse, summary="Route History")
async def get_history(service: SafeRoutingService = Depends(get_routing_service)):
    """
    Get the most recent searches, newest first.
    """
    return service.list_history()


@router.delete("/history/{timestamp}", summary="Delete History Entry")
async def delete_history_entry(timestamp: int,
                               service: SafeRoutingService = Depends(get_routing_service)):
    """
    Delete the saved route with the given timestamp.
    """
    removed = service.delete_history_entry(timestamp)
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No saved route with timestamp {timestamp}"
        )
    return {"success": True, "removed": removed}


@router.delete("/history", summary="Clear History")
async def clear_history(service: SafeRoutingService = Depends(get_routing_service)):
    """
    Remove every saved route.
    """
    service.clear_history()
    return {"success": True}


@router.get("/", summary="API Information")
async def get_api_info():
    """
    Get information about the SafeWalk Routing API.

    Returns:
        dict: API information and available endpoints
    """
    return {
        "api": "SafeWalk Routing API",
        "version": __version__,
        "description": "Choose the fastest or safest of several candidate routes",
        "endpoints": {
            "POST /api/routing/select": "Select a route using the request's preference",
            "POST /api/routing/fastest": "Select the shortest route",
            "POST /api/routing/safest": "Select the route with the lowest incident risk",
            "POST /api/routing/score": "Score every candidate route",
            "GET /api/routing/history": "List recent searches",
            "DELETE /api/routing/history/{timestamp}": "Delete one search",
            "DELETE /api/routing/history": "Clear all searches",
            "GET /api/routing/health": "Check service health status",
            "GET /api/routing/": "This information endpoint"
        },
        "preferences": [p.value for p in RoutingPreference]
    }
