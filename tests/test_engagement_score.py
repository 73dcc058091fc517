"""
Tests for engagement scoring
"""

from eventra.services.analytics_service import (
    build_detailed_metrics,
    calculate_engagement_score,
    round_half_up,
)

def test_round_half_up():
    """Halves round away from zero like a spreadsheet would"""
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(4.49) == 4
    assert round_half_up(0) == 0

def test_weighted_score():
    """50% attendance, 45 minutes and one interaction each"""
    # 0.3 * 50 + 0.4 * 75 + 0.3 * 20
    assert calculate_engagement_score(10, 5, 45, 5) == 51

def test_weights_per_component():
    # attendance only
    assert calculate_engagement_score(10, 10, 0, 0) == 30
    # time only, nobody attended so no interaction term
    assert calculate_engagement_score(1, 0, 60, 0) == 40
    # interaction dominated, attendance negligible
    assert calculate_engagement_score(1000, 1, 0, 5) == 30

def test_zero_attendees_does_not_divide_by_zero():
    assert calculate_engagement_score(100, 0, 0, 0) == 0
    assert calculate_engagement_score(100, 0, 30, 5) == 20

def test_terms_are_clamped():
    """Overshooting every ratio still caps the score at 100"""
    assert calculate_engagement_score(10, 1000, 600, 100000) == 100

def test_missing_estimate_counts_as_one_guest():
    assert calculate_engagement_score(None, 1, 60, 5) == 100
    assert calculate_engagement_score(0, 1, 0, 0) == calculate_engagement_score(1, 1, 0, 0)

def test_monotonic_in_attendance():
    scores = [calculate_engagement_score(100, attendees, 30, 50) for attendees in range(0, 201, 5)]
    assert scores == sorted(scores)
    assert all(0 <= score <= 100 for score in scores)

def test_monotonic_in_time_spent():
    scores = [calculate_engagement_score(100, 40, minutes, 10) for minutes in range(0, 121, 3)]
    assert scores == sorted(scores)

def test_detailed_metrics():
    metrics = build_detailed_metrics(100, 50, 30, 100)

    assert metrics["attendee_percentage"] == 50
    assert metrics["interaction_rate"] == 2
    assert metrics["avg_time_percentage"] == 50

def test_detailed_metrics_are_not_clamped():
    metrics = build_detailed_metrics(10, 20, 90, 0)

    assert metrics["attendee_percentage"] == 200
    assert metrics["avg_time_percentage"] == 150
    assert metrics["interaction_rate"] == 0

def test_detailed_metrics_without_attendees():
    metrics = build_detailed_metrics(None, 0, 0, 0)

    assert metrics["interaction_rate"] == 0
    assert metrics["attendee_percentage"] == 0
