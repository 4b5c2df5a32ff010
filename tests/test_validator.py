"""
Tests for tournament configuration validation.
"""

import sys
import os
from datetime import date

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fixture_scheduler import generate_fixtures, FixtureConfigurationError
from fixture_scheduler.models import Team, Venue, TimeSlot, Group, TournamentConfig
from fixture_scheduler.services.validator import validate_configuration


def make_teams(count):
    return [Team(id=f"T{i}", name=f"Team {i}", county="Nairobi") for i in range(1, count + 1)]


def make_config(**overrides):
    values = dict(
        format="round_robin",
        venues=[Venue(id="V1", name="Nyayo Stadium", county="Nairobi", pitch_count=2)],
        time_slots=[TimeSlot(id="S1", time="10:00", label="Morning")],
        start_date=date(2026, 10, 19),
        end_date=date(2026, 10, 24),
    )
    values.update(overrides)
    return TournamentConfig(**values)


def test_valid_configuration():
    """A complete round robin configuration has no errors."""
    result = validate_configuration(make_teams(4), make_config())

    assert result.is_valid
    assert result.errors == []


def test_all_errors_are_collected_in_order():
    """Checks do not stop at the first failure."""
    config = make_config(venues=[], time_slots=[], start_date=None, end_date=None)

    result = validate_configuration(make_teams(1), config)

    assert not result.is_valid
    assert result.errors == [
        "At least 2 teams are required for a tournament",
        "Tournament dates must be specified",
        "At least one venue must be specified",
        "At least one time slot must be specified",
    ]


def test_missing_end_date_only():
    result = validate_configuration(make_teams(2), make_config(end_date=None))

    assert result.errors == ["Tournament dates must be specified"]


def test_group_knockout_team_count_mismatch():
    """group_knockout needs exactly group_count x teams_per_group teams."""
    config = make_config(format="group_knockout", group_count=2, teams_per_group=4)

    result = validate_configuration(make_teams(6), config)

    assert not result.is_valid
    assert len(result.errors) == 1
    assert "exactly 8 teams" in result.errors[0]


def test_group_knockout_missing_sizes_expect_zero_teams():
    config = make_config(format="group_knockout")

    result = validate_configuration(make_teams(4), config)

    assert not result.is_valid
    assert "exactly 0 teams" in result.errors[0]


def test_group_knockout_exact_count_is_valid():
    config = make_config(format="group_knockout", group_count=2, teams_per_group=3)

    assert validate_configuration(make_teams(6), config).is_valid


def test_generate_fixtures_raises_with_joined_errors():
    """The pipeline aborts before grouping when validation fails."""
    config = make_config(format="group_knockout", group_count=2, teams_per_group=4, venues=[])

    with pytest.raises(FixtureConfigurationError) as exc_info:
        generate_fixtures(make_teams(6), config)

    error = exc_info.value
    assert len(error.errors) == 2
    assert str(error) == ", ".join(error.errors)
    assert "At least one venue must be specified" in str(error)
    assert "exactly 8 teams" in str(error)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        generate_fixtures(make_teams(1), make_config())


def knockout_config(groups, **overrides):
    return make_config(format="group_knockout", group_count=2, teams_per_group=2, groups=groups, **overrides)


def test_pre_built_groups_must_cover_every_team():
    teams = make_teams(4)
    groups = [
        Group(id="g1", name="East", teams=teams[:2]),
        Group(id="g2", name="West", teams=[teams[2]]),
    ]

    result = validate_configuration(teams, knockout_config(groups))

    assert not result.is_valid
    assert result.errors == [
        "West needs at least 2 teams",
        "Team Team 4 is not in any group",
    ]
    with pytest.raises(FixtureConfigurationError):
        generate_fixtures(teams, knockout_config(groups))


def test_pre_built_groups_reject_shared_and_unknown_teams():
    teams = make_teams(4)
    stranger = Team(id="X", name="Stranger FC", county="Nairobi")
    groups = [
        Group(id="g1", name="East", teams=teams[:3]),
        Group(id="g2", name="West", teams=[teams[2], teams[3], stranger]),
    ]

    result = validate_configuration(teams, knockout_config(groups))

    assert result.errors == [
        "West references unknown teams: X",
        "Team Team 3 is in 2 groups",
    ]


def test_pre_built_groups_that_split_the_field_are_valid():
    teams = make_teams(4)
    groups = [
        Group(id="g1", name="East", teams=[teams[0], teams[3]]),
        Group(id="g2", name="West", teams=[teams[1], teams[2]]),
    ]

    assert validate_configuration(teams, knockout_config(groups)).is_valid

    result = generate_fixtures(teams, knockout_config(groups))
    assert [g.id for g in result.groups] == ["g1", "g2"]
    assert len(result.fixtures) == 2


def test_duplicate_team_ids_are_rejected():
    teams = make_teams(3) + [Team(id="T1", name="Team 1 again", county="Nairobi")]

    result = validate_configuration(teams, make_config())

    assert result.errors == ["Team id 'T1' is entered 2 times"]


def test_unparseable_dates_are_configuration_errors():
    config = make_config(start_date="19/10/2026", end_date="2026-10-24")

    result = validate_configuration(make_teams(4), config)
    assert result.errors == ["Invalid start date '19/10/2026' (expected YYYY-MM-DD)"]

    with pytest.raises(FixtureConfigurationError) as exc_info:
        generate_fixtures(make_teams(4), config)
    assert type(exc_info.value) is FixtureConfigurationError


def test_iso_string_dates_are_accepted():
    config = make_config(start_date="2026-10-19", end_date="2026-10-24")

    assert validate_configuration(make_teams(4), config).is_valid


def test_start_after_end_is_rejected():
    config = make_config(start_date=date(2026, 10, 24), end_date=date(2026, 10, 19))

    result = validate_configuration(make_teams(4), config)

    assert result.errors == ["Start date 2026-10-24 is after end date 2026-10-19"]


def test_malformed_time_slots_are_rejected():
    config = make_config(time_slots=[
        TimeSlot(id="S1", time="10:00"),
        TimeSlot(id="S2", time="10am"),
        TimeSlot(id="S3", time="25:00"),
    ])

    result = validate_configuration(make_teams(4), config)

    assert result.errors == [
        "Invalid time slot '10am' (expected HH:MM)",
        "Invalid time slot '25:00' (expected HH:MM)",
    ]
    with pytest.raises(FixtureConfigurationError):
        generate_fixtures(make_teams(4), config)
