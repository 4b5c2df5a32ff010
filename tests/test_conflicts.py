"""
Tests for conflict detection over a finished fixture list.
"""

import sys
import os
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fixture_scheduler.models import (
    Team, Venue, TournamentConfig, ScheduledMatch, ConflictType, ConflictSeverity
)
from fixture_scheduler.services.conflicts import ConflictDetector, detect_conflicts

NAIROBI = Venue(id="V1", name="Nyayo Stadium", county="Nairobi", pitch_count=2)
KISUMU = Venue(id="V2", name="Moi Stadium Kisumu", county="Kisumu", pitch_count=2)

A = Team(id="A", name="Gor Mahia", county="Nairobi")
B = Team(id="B", name="AFC Leopards", county="Nairobi")
C = Team(id="C", name="Tusker", county="Nairobi")
D = Team(id="D", name="Mathare United", county="Nairobi")


def fixture(match_id, home, away, venue=None, kickoff=None):
    return ScheduledMatch(id=match_id, round=1, home_team=home, away_team=away, venue=venue, kickoff=kickoff)


def config(**overrides):
    values = dict(match_duration=90, buffer_time=15, rest_period=24)
    values.update(overrides)
    return TournamentConfig(**values)


def test_clean_schedule_has_no_conflicts():
    matches = [
        fixture("m1", A, B, NAIROBI, datetime(2026, 10, 19, 10, 0)),
        fixture("m2", C, D, NAIROBI, datetime(2026, 10, 19, 14, 0)),
        fixture("m3", A, C, NAIROBI, datetime(2026, 10, 20, 10, 0)),
    ]

    assert detect_conflicts(matches, config()) == []


def test_rest_period_violation():
    matches = [
        fixture("m1", A, B, NAIROBI, datetime(2026, 10, 19, 10, 0)),
        fixture("m2", A, C, KISUMU, datetime(2026, 10, 19, 20, 0)),
    ]

    conflicts = [c for c in detect_conflicts(matches, config()) if c.type == ConflictType.REST_PERIOD]

    assert len(conflicts) == 1
    assert conflicts[0].severity == ConflictSeverity.HIGH
    assert conflicts[0].fixture_id == "m2"
    assert conflicts[0].message == "Insufficient rest period for Gor Mahia (10 hours)"


def test_exactly_rest_period_apart_is_allowed():
    matches = [
        fixture("m1", A, B, NAIROBI, datetime(2026, 10, 19, 10, 0)),
        fixture("m2", B, A, NAIROBI, datetime(2026, 10, 20, 10, 0)),
    ]

    assert detect_conflicts(matches, config()) == []


def test_rest_period_names_both_shared_teams():
    matches = [
        fixture("m1", A, B, NAIROBI, datetime(2026, 10, 19, 10, 0)),
        fixture("m2", B, A, KISUMU, datetime(2026, 10, 19, 16, 30)),
    ]

    conflicts = ConflictDetector(config()).detect_conflicts(matches)
    rest = [c for c in conflicts if c.type == ConflictType.REST_PERIOD]

    assert len(rest) == 1
    assert "AFC Leopards, Gor Mahia" in rest[0].message
    assert "6.5 hours" in rest[0].message


def test_overlapping_occupancy_is_double_booking():
    """90 minutes + 15 buffer: 10:00 occupies the venue until 11:45."""
    matches = [
        fixture("m1", A, B, NAIROBI, datetime(2026, 10, 19, 10, 0)),
        fixture("m2", C, D, NAIROBI, datetime(2026, 10, 19, 11, 30)),
    ]

    conflicts = detect_conflicts(matches, config())

    assert len(conflicts) == 1
    assert conflicts[0].type == ConflictType.DOUBLE_BOOKING
    assert conflicts[0].severity == ConflictSeverity.CRITICAL
    assert conflicts[0].fixture_id == "m2"
    assert "m1" in conflicts[0].message


def test_back_to_back_after_buffer_is_allowed():
    matches = [
        fixture("m1", A, B, NAIROBI, datetime(2026, 10, 19, 10, 0)),
        fixture("m2", C, D, NAIROBI, datetime(2026, 10, 19, 11, 45)),
    ]

    assert detect_conflicts(matches, config()) == []


def test_same_time_different_venues_is_not_double_booking():
    matches = [
        fixture("m1", A, B, NAIROBI, datetime(2026, 10, 19, 10, 0)),
        fixture("m2", C, D, KISUMU, datetime(2026, 10, 19, 10, 0)),
    ]

    conflicts = detect_conflicts(matches, config())

    assert all(c.type != ConflictType.DOUBLE_BOOKING for c in conflicts)


def test_travel_burden_per_travelling_team():
    kisumu_team = Team(id="K", name="Kisumu All Stars", county="Kisumu")
    matches = [fixture("m1", A, kisumu_team, NAIROBI, datetime(2026, 10, 19, 10, 0))]

    conflicts = detect_conflicts(matches, config())

    assert len(conflicts) == 1
    assert conflicts[0].type == ConflictType.TRAVEL_BURDEN
    assert conflicts[0].severity == ConflictSeverity.LOW
    assert conflicts[0].message == "Kisumu All Stars traveling from Kisumu to Nairobi"


def test_team_without_county_has_no_travel_burden():
    unknown = Team(id="U", name="Walk-in FC")
    matches = [fixture("m1", A, unknown, NAIROBI, datetime(2026, 10, 19, 10, 0))]

    assert detect_conflicts(matches, config()) == []


def test_unscheduled_matches_are_ignored():
    matches = [
        fixture("m1", A, B, NAIROBI, datetime(2026, 10, 19, 10, 0)),
        fixture("m2", A, C),
        fixture("m3", A, D, NAIROBI, None),
    ]

    assert detect_conflicts(matches, config()) == []


def test_earlier_match_is_not_reflagged():
    """Each pair is reported once, on the later match in list order."""
    matches = [
        fixture("m1", A, B, NAIROBI, datetime(2026, 10, 19, 10, 0)),
        fixture("m2", A, C, NAIROBI, datetime(2026, 10, 19, 11, 0)),
    ]

    conflicts = detect_conflicts(matches, config())

    assert {c.fixture_id for c in conflicts} == {"m2"}
    assert sorted(c.type.value for c in conflicts) == ["DOUBLE_BOOKING", "REST_PERIOD"]
