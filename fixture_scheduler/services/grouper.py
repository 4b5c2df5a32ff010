"""
Team grouping for the Fixture Scheduling Engine.
Splits the entered teams into the groups that will each play a round robin.
"""

from collections import OrderedDict
from typing import Dict, List, Optional

from fixture_scheduler.models import Team, Group, TournamentConfig
from fixture_scheduler.core.config import (
    FORMAT_ROUND_ROBIN, FORMAT_GROUP_KNOCKOUT,
    DEFAULT_GROUP_COUNT, UNKNOWN_COUNTY
)
from fixture_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)


def create_groups(teams: List[Team], config: TournamentConfig) -> List[Group]:
    """
    Build the groups for a tournament format.

    Team order is part of the input contract: the grouping depends on it
    and nothing is re-sorted here.

    Args:
        teams: Teams in caller-defined order
        config: Tournament configuration

    Returns:
        Ordered list of groups (matches not yet generated)
    """
    if config.format == FORMAT_ROUND_ROBIN:
        return [Group(id="main", name="Main Group", teams=list(teams))]

    if config.format == FORMAT_GROUP_KNOCKOUT:
        if config.groups:
            logger.info("Using %d pre-built groups", len(config.groups))
            return [Group(id=g.id, name=g.name, teams=list(g.teams)) for g in config.groups]
        return create_geographical_groups(teams, config.group_count)

    # Elimination brackets are not generated; the field plays as one pool.
    return [Group(id="bracket", name="Tournament Bracket", teams=list(teams))]


def create_geographical_groups(teams: List[Team], group_count: Optional[int] = None) -> List[Group]:
    """
    Spread teams across groups so that teams from the same county land in
    different groups wherever possible.

    Teams are bucketed by county (first-seen order), then dealt out one at a
    time to the groups in rotation.
    """
    group_count = group_count or DEFAULT_GROUP_COUNT

    teams_by_county: Dict[str, List[Team]] = OrderedDict()
    for team in teams:
        county = team.county or UNKNOWN_COUNTY
        teams_by_county.setdefault(county, []).append(team)

    groups = [
        Group(id=f"group_{i + 1}", name=f"Group {_group_letter(i)}")
        for i in range(group_count)
    ]

    group_index = 0
    for county, county_teams in teams_by_county.items():
        for team in county_teams:
            groups[group_index].teams.append(team)
            group_index = (group_index + 1) % group_count

    logger.info(
        "Created %d groups from %d teams across %d counties",
        group_count, len(teams), len(teams_by_county)
    )
    return groups


def _group_letter(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA"""
    letters = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters
