import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.services.routing_service import SafeRoutingService, get_routing_service
from safewalk_routing import __version__


@pytest.fixture
def service(tmp_path):
    return SafeRoutingService(history_db_path=str(tmp_path / "routes.db"))


@pytest.fixture
def client(service):
    app.dependency_overrides[get_routing_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _candidate(lat, distance, duration):
    # [lon, lat] pairs, as returned by the routing engine
    return {
        "coordinates": [[0.0, lat], [0.01, lat]],
        "duration": duration,
        "distance": distance,
    }


def _request(preference="safest", **overrides):
    body = {
        "start": {"latitude": 0.0, "longitude": 0.0},
        "destination": {"latitude": 0.0, "longitude": 0.01},
        "start_label": "Penn Station",
        "end_label": "Times Square",
        "travel_mode": "walking",
        "preference": preference,
        "candidates": [_candidate(0.0, 1000, 720), _candidate(0.05, 1400, 1000)],
        "incidents": [
            {"latitude": "0.0", "longitude": "0.0", "category": "FELONY ASSAULT"}
            for _ in range(3)
        ],
    }
    body.update(overrides)
    return body


# ------------------ SELECTION ------------------


def test_safest_selection(client):
    resp = client.post("/api/routing/select", json=_request("safest"))
    assert resp.status_code == 200

    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "Safest route selected"
    assert data["route_stats"]["chosen_index"] == 1
    assert data["route_stats"]["scoring_applied"] is True
    assert len(data["candidate_scores"]) == 2

    features = data["route_geojson"]["features"]
    assert features[0]["geometry"]["type"] == "LineString"
    assert features[0]["geometry"]["coordinates"][0] == [0.0, 0.05]
    assert [f["properties"]["type"] for f in features[1:]] == ["start", "end"]


def test_fastest_selection(client):
    resp = client.post("/api/routing/select", json=_request("fastest"))
    assert resp.status_code == 200
    data = resp.json()
    assert data["route_stats"]["chosen_index"] == 0
    assert data["route_stats"]["distance_display"] == "0.6 mi"
    assert data["route_stats"]["duration_display"] == "12 min 0 sec"
    assert data["candidate_scores"] is None


def test_preference_endpoints_override_body(client):
    resp = client.post("/api/routing/fastest", json=_request("safest"))
    assert resp.json()["route_stats"]["chosen_index"] == 0

    resp = client.post("/api/routing/safest", json=_request("fastest"))
    assert resp.json()["route_stats"]["chosen_index"] == 1


def test_single_candidate_under_safest(client):
    body = _request("safest", candidates=[_candidate(0.0, 1000, 720)])
    data = client.post("/api/routing/select", json=body).json()
    assert data["route_stats"]["scoring_applied"] is False
    assert data["message"] == "Only one route available - safety comparison not possible"


# ------------------ ERRORS ------------------


def test_missing_destination(client):
    resp = client.post("/api/routing/select", json=_request(destination=None))
    assert resp.status_code == 404
    assert resp.json() == {
        "success": False,
        "error": "missing_destination",
        "message": "Could not find one of the locations.",
        "details": None,
    }


def test_no_candidates(client):
    resp = client.post("/api/routing/select", json=_request(candidates=[]))
    assert resp.status_code == 404
    assert resp.json()["error"] == "no_route_available"


def test_one_point_candidate(client):
    broken = {"coordinates": [[0.0, 0.0]], "duration": 10, "distance": 10}
    resp = client.post("/api/routing/select", json=_request(candidates=[broken, broken]))
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_input"


def test_request_validation(client):
    resp = client.post("/api/routing/select", json=_request(preference="scenic"))
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


# ------------------ SCORING ------------------


def test_score_endpoint(client):
    body = _request()
    resp = client.post("/api/routing/score",
                       json={"candidates": body["candidates"], "incidents": body["incidents"]})
    assert resp.status_code == 200

    data = resp.json()
    assert data["safest_index"] == 1
    assert data["scores"][0]["max_density"] == 24.0
    assert data["scores"][1]["score"] == pytest.approx(0.14)


# ------------------ HISTORY ------------------


def test_history_round_trip(client):
    client.post("/api/routing/select", json=_request(save_to_history=True))
    resp = client.post("/api/routing/select", json=_request(save_to_history=True))
    assert resp.json()["saved_to_history"] is False

    routes = client.get("/api/routing/history").json()["routes"]
    assert len(routes) == 1
    assert routes[0]["start_location"] == "Penn Station"
    assert routes[0]["preference"] == "safest"

    resp = client.delete(f"/api/routing/history/{routes[0]['timestamp']}")
    assert resp.status_code == 200
    assert client.get("/api/routing/history").json()["routes"] == []


def test_delete_unknown_history_entry(client):
    assert client.delete("/api/routing/history/42").status_code == 404


def test_clear_history(client):
    client.post("/api/routing/select", json=_request(save_to_history=True))
    assert client.delete("/api/routing/history").status_code == 200
    assert client.get("/api/routing/history").json()["routes"] == []


# ------------------ GENERAL ------------------


def test_health(client):
    resp = client.get("/api/routing/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["history_entries"] == 0

    assert client.get("/health").json()["service_status"] == "healthy"


def test_root(client):
    assert client.get("/").json()["status"] == "operational"


def test_info_reports_package_version(client):
    assert client.get("/api/routing/").json()["version"] == __version__
