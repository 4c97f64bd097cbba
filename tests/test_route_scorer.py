import pytest

from safewalk_routing.algorithms.incident_density import create_fitted_estimator
from safewalk_routing.algorithms.scoring import RouteScorer, ScoringMode, score_path
from safewalk_routing.config import RoutingConfig
from safewalk_routing.data.models import CandidatePath, IncidentPoint
from safewalk_routing.exceptions import InvalidInputError

# Three points far enough apart that each incident touches only one of them.
THREE_POINTS = [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)]


def _scorer(incidents, config=None):
    config = config or RoutingConfig()
    return RouteScorer(create_fitted_estimator(incidents, config), config)


# ------------------ BASIC TERMS ------------------


def test_no_incidents_scores_only_distance_penalty():
    path = CandidatePath(points=THREE_POINTS, duration=600, distance=1000)
    breakdown = _scorer([]).score(path)

    assert breakdown.crime_exposure == 0.0
    assert breakdown.max_density == 0.0
    assert breakdown.avg_density == 0.0
    assert breakdown.total == pytest.approx(0.1)


def test_longer_path_scores_higher_with_same_exposure():
    scorer = _scorer([])
    short = CandidatePath(points=THREE_POINTS, duration=600, distance=1000)
    long = CandidatePath(points=THREE_POINTS, duration=600, distance=1001)
    assert scorer.score(long).total > scorer.score(short).total


def test_reference_score_terms():
    incidents = [IncidentPoint(0.0, 0.0, "FELONY ASSAULT")]
    path = CandidatePath(points=THREE_POINTS, duration=600, distance=500)
    breakdown = _scorer(incidents).score(path)

    exposure = 8 ** 2.5
    assert breakdown.crime_exposure == pytest.approx(exposure)
    assert breakdown.max_density == 8.0
    # Sampled exposure divided by every point, not just the sampled ones
    assert breakdown.avg_density == pytest.approx(exposure / 3)
    assert breakdown.total == pytest.approx(exposure + 8 * 15 + exposure / 3 * 8 + 0.05)


def test_odd_index_density_counts_for_max_only():
    incidents = [IncidentPoint(1.0, 1.0, "ROBBERY")]
    path = CandidatePath(points=THREE_POINTS, duration=600, distance=1000)
    breakdown = _scorer(incidents).score(path)

    assert breakdown.crime_exposure == 0.0
    assert breakdown.avg_density == 0.0
    assert breakdown.max_density == 8.0
    assert breakdown.total == pytest.approx(8 * 15 + 0.1)


def test_sampled_average_mode_divides_by_sampled_points():
    incidents = [IncidentPoint(0.0, 0.0, "FELONY ASSAULT")]
    path = CandidatePath(points=THREE_POINTS, duration=600, distance=500)
    config = RoutingConfig.create_sampled_average_config()
    scorer = _scorer(incidents, config)

    assert scorer.mode is ScoringMode.SAMPLED_AVERAGE
    assert scorer.score(path).avg_density == pytest.approx(8 ** 2.5 / 2)


def test_kd_tree_scores_identically():
    incidents = [
        IncidentPoint(0.0, 0.0, "FELONY ASSAULT"),
        IncidentPoint(0.0005, 0.0005, "BURGLARY"),
        IncidentPoint(2.0, 2.002, "HARRASSMENT 2"),
    ]
    path = CandidatePath(points=THREE_POINTS, duration=600, distance=1234)

    reference = _scorer(incidents).score(path)
    indexed = _scorer(incidents, RoutingConfig.create_indexed_config()).score(path)
    assert indexed == reference


# ------------------ INPUT HANDLING ------------------


def test_single_point_path_is_rejected():
    path = CandidatePath(points=[(0.0, 0.0)], duration=10, distance=10)
    with pytest.raises(InvalidInputError):
        _scorer([]).score(path)


def test_negative_distance_is_rejected():
    path = CandidatePath(points=THREE_POINTS, duration=10, distance=-1)
    with pytest.raises(InvalidInputError):
        _scorer([]).score(path)


def test_score_path_shortcut():
    incidents = [IncidentPoint(0.0, 0.0, "BURGLARY")]
    path = CandidatePath(points=THREE_POINTS, duration=600, distance=0)
    exposure = 5 ** 2.5
    assert score_path(path, incidents) == pytest.approx(exposure + 5 * 15 + exposure / 3 * 8)


def test_score_paths_preserves_order():
    scorer = _scorer([IncidentPoint(0.0, 0.0, "ROBBERY")])
    risky = CandidatePath(points=THREE_POINTS, duration=600, distance=1000)
    clean = CandidatePath(points=[(5.0, 5.0), (6.0, 6.0)], duration=600, distance=1000)

    scored = scorer.score_paths([risky, clean])
    assert [s.path for s in scored] == [risky, clean]
    assert scored[0].score > scored[1].score
