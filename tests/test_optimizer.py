"""
Tests for the CP-SAT assignment stage.
"""

import sys
import os
from datetime import date, datetime, timedelta

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fixture_scheduler import generate_fixtures
from fixture_scheduler.models import Team, Venue, TimeSlot, TournamentConfig, ScheduledMatch, ConflictType
from fixture_scheduler.services.optimizer import CpSatFixtureOptimizer

MONDAY = date(2026, 10, 19)


def make_config(days=1, **overrides):
    values = dict(
        format="round_robin",
        venues=[Venue(id="V1", name="Nyayo Stadium", county="Nairobi", pitch_count=2)],
        time_slots=[TimeSlot(id="S1", time="10:00"), TimeSlot(id="S2", time="14:00")],
        start_date=MONDAY,
        end_date=MONDAY + timedelta(days=days - 1),
        rest_period=24,
        solver="cp_sat",
        solver_time_limit=10,
    )
    values.update(overrides)
    return TournamentConfig(**values)


def teams(*names, county="Nairobi"):
    return [Team(id=name, name=name, county=county) for name in names]


def test_single_day_capacity_is_respected():
    result = generate_fixtures(teams("A", "B", "C", "D"), make_config())

    assert len(result.fixtures) == 6
    assert len(result.scheduled_fixtures) == 2
    assert len(result.conflicts_of_type(ConflictType.VENUE_CLASH)) == 4

    # nobody plays twice on the day
    playing = [t for m in result.scheduled_fixtures for t in m.team_ids()]
    assert len(playing) == len(set(playing))


def test_three_teams_over_three_days_all_scheduled():
    result = generate_fixtures(teams("A", "B", "C"), make_config(days=3))
    scheduled = result.scheduled_fixtures

    assert len(scheduled) == 3
    for i, first in enumerate(scheduled):
        for second in scheduled[i + 1:]:
            if first.shares_team_with(second):
                assert abs(first.kickoff - second.kickoff) >= timedelta(hours=24)
    assert result.conflicts_of_type(ConflictType.REST_PERIOD) == []


def test_no_venue_hosts_two_matches_at_once():
    config = make_config(
        days=6,
        venues=[
            Venue(id="V1", name="Nyayo Stadium", county="Nairobi", pitch_count=2),
            Venue(id="V2", name="Kasarani", county="Nairobi", pitch_count=3),
        ]
    )

    result = generate_fixtures(teams("A", "B", "C", "D", "E", "F"), config)

    bookings = [(m.venue.id, m.kickoff) for m in result.scheduled_fixtures]
    assert len(bookings) == len(set(bookings))
    assert len(result.fixtures) == 15


def test_cheapest_venue_is_chosen():
    kisumu = Team(id="K", name="Kisumu FC", county="Kisumu")
    nakuru = Team(id="N", name="Nakuru FC", county="Nakuru")
    config = make_config(
        time_slots=[TimeSlot(id="S1", time="10:00")],
        venues=[
            Venue(id="V1", name="Nyayo Stadium", county="Nairobi", pitch_count=4),
            Venue(id="V2", name="Afraha Stadium", county="Nakuru", pitch_count=2),
        ]
    )

    result = generate_fixtures([kisumu, nakuru], config)

    assert result.fixtures[0].venue.id == "V2"
    assert result.fixtures[0].cost == 3
    assert result.fixtures[0].kickoff == datetime(2026, 10, 19, 10, 0)


def test_no_kickoffs_marks_every_match_unscheduled():
    config = make_config(start_date=date(2026, 10, 18), end_date=date(2026, 10, 18))
    matches = [
        ScheduledMatch(id="m1", round=1, home_team=Team(id="A", name="A"), away_team=Team(id="B", name="B"))
    ]

    ordered, conflicts = CpSatFixtureOptimizer(config).schedule(matches)

    assert ordered == matches
    assert matches[0].kickoff is None
    assert [c.type for c in conflicts] == [ConflictType.VENUE_CLASH]
