import math

import pytest

from beacon.services.geo_scoring import distance_km, distance_score


def test_distance_one_degree_longitude_at_equator() -> None:
    assert distance_km(0, 0, 0, 1) == pytest.approx(111.19, abs=0.01)


def test_distance_same_point_is_zero() -> None:
    assert distance_km(51.5, -0.1, 51.5, -0.1) == 0


@pytest.mark.parametrize(
    "coords",
    [
        (None, -0.1, 51.5, -0.1),
        (51.5, None, 51.5, -0.1),
        (51.5, -0.1, math.nan, -0.1),
        (51.5, -0.1, 51.5, math.inf),
        (51.5, -0.1, "51.5", -0.1),
    ],
)
def test_distance_unknown_when_any_coordinate_missing(coords) -> None:
    assert distance_km(*coords) is None


def test_distance_and_score_are_symmetric() -> None:
    pairs = [((51.5, -0.1), (51.51, -0.12)), ((40.7, -74.0), (34.05, -118.2)), ((-33.9, 151.2), (-33.8, 151.0))]
    for a, b in pairs:
        assert distance_km(*a, *b) == pytest.approx(distance_km(*b, *a))
        assert distance_score(distance_km(*a, *b)) == distance_score(distance_km(*b, *a))


@pytest.mark.parametrize(
    "km, expected",
    [
        (0, 30),
        (0.9, 30),
        (1.0, 27),
        (2.9, 27),
        (3.0, 25),
        (4.99, 25),
        (5.0, 22),
        (10.0, 18),
        (24.9, 18),
        (25.0, 14),
        (50.0, 10),
        (99.9, 10),
        (100.0, 5),
        (5000.0, 5),
    ],
)
def test_distance_score_buckets(km, expected) -> None:
    assert distance_score(km) == expected


def test_unknown_distance_scores_neutral_not_zero() -> None:
    assert distance_score(None) == 10


def test_distance_score_never_increases_with_distance() -> None:
    distances = [0, 0.5, 1, 2, 3, 4, 5, 8, 10, 20, 25, 40, 50, 75, 100, 250, 1000]
    scores = [distance_score(d) for d in distances]
    assert scores == sorted(scores, reverse=True)


def test_london_pair_scores_short_ride_bucket() -> None:
    km = distance_km(51.5, -0.1, 51.51, -0.12)
    assert 1 < km < 3
    assert distance_score(km) == 27
