"""
Plain-text fixture reports.
"""

from collections import Counter, defaultdict
from typing import List

from fixture_scheduler.models import Team, ScheduledMatch, FixtureResult, TeamFixtureStats


def get_team_stats(team: Team, fixtures: List[ScheduledMatch]) -> TeamFixtureStats:
    """
    Calculate statistics for a team's fixtures.

    Args:
        team: The team to analyze
        fixtures: The complete fixture list

    Returns:
        TeamFixtureStats with all statistics
    """
    stats = TeamFixtureStats(team=team)

    for match in fixtures:
        if not match.involves_team(team):
            continue

        stats.total_matches += 1
        if match.is_home_game(team):
            stats.home_matches += 1
        else:
            stats.away_matches += 1

        if match.is_scheduled:
            stats.scheduled_matches += 1
            if team.county and match.venue.county != team.county:
                stats.away_from_county += 1

        opponent = match.get_opponent(team)
        if opponent:
            stats.opponents.append(opponent)

    return stats


def generate_fixture_report(result: FixtureResult) -> str:
    """
    Generate a comprehensive report of a fixture run.

    Args:
        result: Output of generate_fixtures

    Returns:
        Formatted report string
    """
    report = []
    report.append("=" * 80)
    report.append("FIXTURE REPORT")
    report.append("=" * 80)
    report.append(f"Total Fixtures: {len(result.fixtures)}")
    report.append(f"Scheduled: {len(result.scheduled_fixtures)}")
    report.append(f"Unscheduled: {len(result.unscheduled_fixtures)}")
    report.append("")

    report.append("Fixtures by Group:")
    for group in result.groups:
        team_names = ", ".join(team.name for team in group.teams)
        report.append(f"  {group.name}: {len(group.matches)} fixtures ({team_names})")
    report.append("")

    report.append("Fixtures by Date:")
    fixtures_by_date = defaultdict(list)
    for match in result.scheduled_fixtures:
        fixtures_by_date[match.kickoff.date()].append(match)

    for match_date in sorted(fixtures_by_date.keys()):
        report.append(f"  {match_date} ({match_date:%A}):")
        for match in sorted(fixtures_by_date[match_date], key=lambda m: (m.kickoff, m.venue.name)):
            report.append(f"    {match.kickoff:%H:%M}  {match.home_team.name} vs {match.away_team.name}  @ {match.venue.name}")
    report.append("")

    report.append("Team Statistics:")
    teams = {}
    for match in result.fixtures:
        teams[match.home_team.id] = match.home_team
        teams[match.away_team.id] = match.away_team

    for team in sorted(teams.values(), key=lambda t: t.id):
        stats = get_team_stats(team, result.fixtures)
        report.append(
            f"  {team.name}: {stats.scheduled_matches}/{stats.total_matches} scheduled, "
            f"Home: {stats.home_matches}, Away: {stats.away_matches} (imbalance {stats.calculate_balance_score():g}), "
            f"Outside {team.county or 'home county'}: {stats.away_from_county}"
        )
    report.append("")

    report.append("Conflicts:")
    if not result.conflicts:
        report.append("  None")
    counts = Counter((c.type.value, c.severity.value) for c in result.conflicts)
    for (conflict_type, severity), count in sorted(counts.items()):
        report.append(f"  {conflict_type} [{severity}]: {count}")

    report.append("=" * 80)

    return "\n".join(report)
