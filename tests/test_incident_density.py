import pytest

from safewalk_routing.algorithms.incident_density import (
    BruteForceDensityEstimator,
    KDTreeDensityEstimator,
    IncidentWeight,
    calculate_incident_density,
    classify_incident_category,
    create_estimator_from_string,
)
from safewalk_routing.config import RoutingConfig
from safewalk_routing.data.models import IncidentPoint
from safewalk_routing.exceptions import InvalidInputError


# ------------------ CATEGORY WEIGHTS ------------------


@pytest.mark.parametrize(
    "category, expected",
    [
        ("FELONY ASSAULT", IncidentWeight.HIGH),
        ("ROBBERY", IncidentWeight.HIGH),
        ("BURGLARY", IncidentWeight.MEDIUM),
        ("PETIT LARCENY THEFT", IncidentWeight.MEDIUM),
        ("HARRASSMENT 2", IncidentWeight.LOW),
        ("", IncidentWeight.LOW),
        (None, IncidentWeight.LOW),
    ],
)
def test_category_tiers(category, expected):
    assert classify_incident_category(category) is expected


def test_category_match_is_case_insensitive():
    assert classify_incident_category("assault 3 & related offenses") is IncidentWeight.HIGH
    assert classify_incident_category("Grand Theft Auto") is IncidentWeight.MEDIUM


def test_high_tier_wins_when_both_keywords_present():
    assert classify_incident_category("ROBBERY / BURGLARY") is IncidentWeight.HIGH


# ------------------ DENSITY ------------------


def test_empty_incident_set_gives_zero():
    assert calculate_incident_density((40.75, -73.99), []) == 0.0


def test_weights_add_up_inside_radius():
    incidents = [
        IncidentPoint(0.0, 0.0, "FELONY ASSAULT"),
        IncidentPoint(0.001, 0.0, "BURGLARY"),
        IncidentPoint(0.0, 0.001, "CRIMINAL MISCHIEF"),
    ]
    assert calculate_incident_density((0.0, 0.0), incidents) == 14.0


def test_incident_exactly_on_radius_is_included():
    on_edge = [IncidentPoint(0.0, 0.003, "FELONY ASSAULT")]
    assert calculate_incident_density((0.0, 0.0), on_edge) == 8.0


def test_incident_just_outside_radius_is_excluded():
    outside = [IncidentPoint(0.0, 0.0031, "FELONY ASSAULT")]
    assert calculate_incident_density((0.0, 0.0), outside) == 0.0


def test_distance_is_planar_in_degrees():
    # dLat = dLon = 0.0022 -> sqrt(2) * 0.0022 ~= 0.00311 > 0.003
    incidents = [IncidentPoint(0.0022, 0.0022, "ROBBERY")]
    assert calculate_incident_density((0.0, 0.0), incidents) == 0.0
    assert calculate_incident_density((0.0, 0.0), incidents, radius=0.0032) == 8.0


def test_string_coordinates_are_coerced():
    incident = IncidentPoint.from_record(
        {"latitude": "40.7505", "longitude": "-73.9934", "ofns_desc": "ROBBERY"}
    )
    assert incident.latitude == pytest.approx(40.7505)
    assert calculate_incident_density((40.7505, -73.9934), [incident]) == 8.0


def test_non_numeric_coordinate_is_rejected():
    with pytest.raises(InvalidInputError):
        IncidentPoint.from_record({"latitude": "north", "longitude": "-73.99"})


def test_missing_category_counts_as_low():
    incident = IncidentPoint.from_record({"latitude": 1.0, "longitude": 1.0})
    assert incident.category == ""
    assert calculate_incident_density((1.0, 1.0), [incident]) == 1.0


# ------------------ ESTIMATORS ------------------


def _incident_lattice():
    categories = ["FELONY ASSAULT", "BURGLARY", "HARRASSMENT 2", "ROBBERY", "PETIT LARCENY"]
    incidents = []
    for i in range(12):
        for j in range(12):
            incidents.append(IncidentPoint(
                40.74 + i * 0.0011,
                -74.00 + j * 0.0013,
                categories[(i * 7 + j) % len(categories)],
            ))
    return incidents


def test_kd_tree_matches_brute_force():
    incidents = _incident_lattice()
    brute = BruteForceDensityEstimator(radius=0.003)
    tree = KDTreeDensityEstimator(radius=0.003)
    brute.fit(incidents)
    tree.fit(incidents)

    for k in range(40):
        lat = 40.738 + k * 0.00037
        lon = -74.002 + k * 0.00041
        assert tree.density(lat, lon) == brute.density(lat, lon)


def test_kd_tree_keeps_radius_boundary():
    tree = KDTreeDensityEstimator(radius=0.003)
    tree.fit([IncidentPoint(0.0, 0.003, "ROBBERY"), IncidentPoint(0.0, -0.0031, "ROBBERY")])
    assert tree.density(0.0, 0.0) == 8.0


def test_kd_tree_with_no_incidents():
    tree = KDTreeDensityEstimator()
    tree.fit([])
    assert tree.density(40.75, -73.99) == 0.0


def test_estimator_must_be_fitted():
    with pytest.raises(RuntimeError):
        BruteForceDensityEstimator().density(0.0, 0.0)


def test_radius_comes_from_config():
    estimator = create_estimator_from_string("kd_tree", RoutingConfig(density_radius=0.01))
    assert isinstance(estimator, KDTreeDensityEstimator)
    assert estimator.radius == 0.01


def test_unknown_estimator_name():
    with pytest.raises(ValueError):
        create_estimator_from_string("kde")


# ------------------ MALFORMED QUERY POINTS ------------------


@pytest.mark.parametrize("point", [("north", -73.99), (None, -73.99), None, (40.75,)])
def test_malformed_query_point_is_invalid_input(point):
    incidents = [IncidentPoint(40.75, -73.99, "ROBBERY")]
    with pytest.raises(InvalidInputError):
        calculate_incident_density(point, incidents)


@pytest.mark.parametrize("estimator_cls", [BruteForceDensityEstimator, KDTreeDensityEstimator])
@pytest.mark.parametrize("lat, lon", [(None, -73.99), ("north", -73.99), (40.75, float("nan"))])
def test_estimators_reject_malformed_query(estimator_cls, lat, lon):
    estimator = estimator_cls()
    estimator.fit([IncidentPoint(40.75, -73.99, "ROBBERY")])
    with pytest.raises(InvalidInputError):
        estimator.density(lat, lon)


@pytest.mark.parametrize("estimator_cls", [BruteForceDensityEstimator, KDTreeDensityEstimator])
def test_estimators_accept_incident_generators(estimator_cls):
    estimator = estimator_cls()
    estimator.fit(IncidentPoint(0.0, 0.001 * i, "BURGLARY") for i in range(3))
    assert estimator.incident_count == 3
    assert estimator.density(0.0, 0.0) == 15.0
