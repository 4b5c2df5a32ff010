"""
Round robin pairing generation using the circle method.
"""

from dataclasses import replace
from typing import List

from fixture_scheduler.models import Team, Group, ScheduledMatch, MatchStatus
from fixture_scheduler.core.config import BYE_TEAM_ID, BYE_TEAM_NAME
from fixture_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)

BYE_TEAM = Team(id=BYE_TEAM_ID, name=BYE_TEAM_NAME, county="N/A")


def generate_round_robin(group: Group, legs: int = 1) -> List[ScheduledMatch]:
    """
    Generate the round robin for a single group.

    Team 0 stays fixed while the others rotate one position per round; in
    each round the lineup is folded in half so position i meets position
    n-1-i. With an odd field a BYE team is added and its matches dropped.
    Leg 2 (and every even leg) replays leg 1 with home and away swapped.

    Args:
        group: The group to pair
        legs: Number of complete passes (1 = single, 2 = home and away)

    Returns:
        Matches without venue or kickoff, ordered by leg, round, pairing
    """
    teams = list(group.teams)
    if len(teams) < 2:
        return []

    if len(teams) % 2 == 1:
        teams.append(BYE_TEAM)

    total_teams = len(teams)
    total_rounds = total_teams - 1

    first_leg: List[ScheduledMatch] = []
    for round_number in range(1, total_rounds + 1):
        first_leg.extend(_generate_round(teams, round_number, group.id))

    first_leg = [
        match for match in first_leg
        if match.home_team.id != BYE_TEAM_ID and match.away_team.id != BYE_TEAM_ID
    ]

    matches = list(first_leg)
    for leg in range(2, max(1, legs) + 1):
        round_offset = (leg - 1) * total_rounds
        for match in first_leg:
            home, away = match.home_team, match.away_team
            if leg % 2 == 0:
                home, away = away, home
            round_number = match.round + round_offset
            pair_number = match.id.rsplit("_m", 1)[1]
            matches.append(replace(
                match,
                id=f"{group.id}_r{round_number}_m{pair_number}",
                round=round_number,
                leg=leg,
                home_team=home,
                away_team=away
            ))

    return matches


def _generate_round(teams: List[Team], round_number: int, group_id: str) -> List[ScheduledMatch]:
    total_teams = len(teams)
    rotating = teams[1:]
    offset = (round_number - 1) % len(rotating)
    lineup = [teams[0]] + rotating[offset:] + rotating[:offset]

    matches = []
    for i in range(total_teams // 2):
        home_team = lineup[i]
        away_team = lineup[total_teams - 1 - i]

        # Fixed team alternates home and away
        if i == 0 and round_number % 2 == 0:
            home_team, away_team = away_team, home_team

        matches.append(ScheduledMatch(
            id=f"{group_id}_r{round_number}_m{i + 1}",
            round=round_number,
            leg=1,
            home_team=home_team,
            away_team=away_team,
            status=MatchStatus.SCHEDULED,
            group_id=group_id
        ))

    return matches


def attach_matches(groups: List[Group], legs: int = 1) -> List[Group]:
    """Return copies of the groups with their round robin matches filled in."""
    paired = []
    for group in groups:
        matches = generate_round_robin(group, legs)
        logger.info("%s: %d teams, %d matches", group.name, len(group.teams), len(matches))
        paired.append(replace(group, teams=list(group.teams), matches=matches))
    return paired


def generate_matches(groups: List[Group], legs: int = 1) -> List[ScheduledMatch]:
    """Flat list of every group's matches, group by group."""
    all_matches: List[ScheduledMatch] = []
    for group in groups:
        all_matches.extend(generate_round_robin(group, legs))
    return all_matches
