from datetime import datetime, timedelta, timezone

import pytest

from beacon.services.attribute_scoring import (
    activity_score,
    compatibility_score,
    completeness_score,
    interest_score,
    round_half_up,
)
from fakes import make_profile

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


# --- interest_score ---

@pytest.mark.parametrize("viewer, candidate", [([], ["music"]), (["music"], []), (None, ["music"]), (["music"], None)])
def test_interest_defaults_to_neutral_when_either_side_empty(viewer, candidate) -> None:
    assert interest_score(viewer, candidate) == 12


def test_interest_full_match_when_viewer_tags_are_subset() -> None:
    assert interest_score({"music", "art"}, {"music", "art", "hiking", "food"}) == 25


def test_interest_half_overlap_rounds_half_up() -> None:
    assert interest_score({"music", "fitness"}, {"music", "smoker"}) == 13


def test_interest_is_normalized_by_viewer_not_union() -> None:
    assert interest_score({"a"}, {"a", "b", "c", "d"}) == 25
    assert interest_score({"a", "b", "c", "d"}, {"a"}) == 6


def test_interest_ignores_case() -> None:
    assert interest_score({"Music"}, {"music"}) == 25


def test_interest_no_overlap_is_zero() -> None:
    assert interest_score({"music"}, {"sports"}) == 0


def test_round_half_up() -> None:
    assert round_half_up(12.5) == 13
    assert round_half_up(8.333) == 8
    assert round_half_up(0.5) == 1


# --- activity_score ---

def test_activity_missing_last_seen() -> None:
    assert activity_score(None, NOW) == 5


@pytest.mark.parametrize(
    "minutes_ago, expected",
    [
        (1, 15),
        (5, 14),
        (10, 14),
        (15, 12),
        (30, 12),
        (60, 10),
        (120, 10),
        (360, 7),
        (720, 7),
        (1440, 4),
        (3 * 1440, 4),
        (10080, 2),
        (30 * 1440, 2),
    ],
)
def test_activity_buckets(minutes_ago, expected) -> None:
    assert activity_score(NOW - timedelta(minutes=minutes_ago), NOW) == expected


def test_activity_treats_naive_timestamp_as_utc() -> None:
    last_seen = (NOW - timedelta(minutes=2)).replace(tzinfo=None)
    assert activity_score(last_seen, NOW) == 15


# --- completeness_score ---

def test_completeness_empty_profile() -> None:
    assert completeness_score(make_profile("c@x")) == 0


def test_completeness_all_fields_is_capped_at_ten() -> None:
    profile = make_profile(
        "c@x",
        photos=["1.jpg", "2.jpg", "3.jpg", "4.jpg", "5.jpg"],
        bio="A bio that is definitely longer than twenty characters.",
        tags=["music"],
        looking_for=["friends"],
        city="London",
        verified=True,
        verified_seller=True,
        verified_organizer=True,
    )
    assert completeness_score(profile) == 10


def test_completeness_photo_bonuses_are_cumulative() -> None:
    assert completeness_score(make_profile("c@x", photos=["1.jpg"])) == 3
    assert completeness_score(make_profile("c@x", photos=["1.jpg", "2.jpg"])) == 3
    assert completeness_score(make_profile("c@x", photos=["1.jpg", "2.jpg", "3.jpg"])) == 4


def test_completeness_short_bio_earns_nothing() -> None:
    assert completeness_score(make_profile("c@x", bio="x" * 20)) == 0
    assert completeness_score(make_profile("c@x", bio="x" * 21)) == 2


def test_completeness_any_verification_flag_counts_once() -> None:
    assert completeness_score(make_profile("c@x", verified_organizer=True)) == 1


# --- compatibility_score ---

def test_compatibility_base_without_rules() -> None:
    assert compatibility_score(make_profile("v@x"), make_profile("c@x", tags=["music"])) == 10


def test_compatibility_clamps_many_essentials_at_twenty() -> None:
    essentials = ["a", "b", "c", "d", "e"]
    viewer = make_profile("v@x", essentials=essentials)
    candidate = make_profile("c@x", tags=essentials)
    assert compatibility_score(viewer, candidate) == 20


def test_compatibility_essential_matches_looking_for() -> None:
    viewer = make_profile("v@x", essentials=["friends"])
    candidate = make_profile("c@x", looking_for=["friends"])
    assert compatibility_score(viewer, candidate) == 13


def test_compatibility_dealbreaker_only_checked_against_tags() -> None:
    viewer = make_profile("v@x", dealbreakers=["smoker"])
    assert compatibility_score(viewer, make_profile("c@x", looking_for=["smoker"])) == 10
    assert compatibility_score(viewer, make_profile("c@x", tags=["smoker"])) == 0


def test_compatibility_essential_and_dealbreaker() -> None:
    viewer = make_profile("v@x", essentials=["verified"], dealbreakers=["smoker"])
    candidate = make_profile("c@x", tags=["music", "smoker", "verified"])
    assert compatibility_score(viewer, candidate) == 3


def test_compatibility_dealbreakers_stack_before_floor() -> None:
    viewer = make_profile("v@x", essentials=["a", "b", "c"], dealbreakers=["x", "y"])
    candidate = make_profile("c@x", tags=["a", "b", "c", "x", "y"])
    # 10 + 9 - 20 = -1, floored at 0
    assert compatibility_score(viewer, candidate) == 0


def test_compatibility_essentials_do_not_fully_offset_a_dealbreaker() -> None:
    viewer = make_profile("v@x", essentials=["a", "b", "c"], dealbreakers=["x"])
    candidate = make_profile("c@x", tags=["a", "b", "c", "x"])
    assert compatibility_score(viewer, candidate) == 9
