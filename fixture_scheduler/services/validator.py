"""
Configuration validation for the Fixture Scheduling Engine.
Checks that the teams and tournament configuration are consistent
before any grouping or scheduling work starts.
"""

from collections import Counter
from typing import List

from fixture_scheduler.models import Team, TournamentConfig, ValidationResult
from fixture_scheduler.core.config import FORMAT_GROUP_KNOCKOUT
from fixture_scheduler.core.logging_config import get_logger
from fixture_scheduler.services.scheduler import parse_date, parse_time

logger = get_logger(__name__)


class ConfigurationValidator:
    """
    Validates a tournament configuration against the submitted teams.
    Every check runs; all applicable errors are collected.
    """

    def validate_configuration(self, teams: List[Team], config: TournamentConfig) -> ValidationResult:
        """
        Validate teams and configuration.

        Args:
            teams: Teams entered in the tournament
            config: Tournament configuration

        Returns:
            ValidationResult with every error found (never raises)
        """
        errors: List[str] = []

        self._check_team_count(teams, errors)
        self._check_duplicate_teams(teams, errors)
        self._check_dates(config, errors)
        self._check_venues(config, errors)
        self._check_time_slots(config, errors)
        self._check_format_sizing(teams, config, errors)
        self._check_prebuilt_groups(teams, config, errors)

        if errors:
            logger.warning("Configuration invalid: %s", "; ".join(errors))

        return ValidationResult(is_valid=not errors, errors=errors)

    def _check_team_count(self, teams: List[Team], errors: List[str]):
        if len(teams) < 2:
            errors.append("At least 2 teams are required for a tournament")

    def _check_duplicate_teams(self, teams: List[Team], errors: List[str]):
        counts = Counter(team.id for team in teams)
        for team_id, count in counts.items():
            if count > 1:
                errors.append(f"Team id '{team_id}' is entered {count} times")

    def _check_dates(self, config: TournamentConfig, errors: List[str]):
        if not config.start_date or not config.end_date:
            errors.append("Tournament dates must be specified")
            return

        parsed = {}
        for label, value in (("start", config.start_date), ("end", config.end_date)):
            try:
                parsed[label] = parse_date(value)
            except ValueError:
                errors.append(f"Invalid {label} date '{value}' (expected YYYY-MM-DD)")

        if len(parsed) == 2 and parsed["start"] > parsed["end"]:
            errors.append(f"Start date {parsed['start']} is after end date {parsed['end']}")

    def _check_venues(self, config: TournamentConfig, errors: List[str]):
        if not config.venues:
            errors.append("At least one venue must be specified")

    def _check_time_slots(self, config: TournamentConfig, errors: List[str]):
        if not config.time_slots:
            errors.append("At least one time slot must be specified")
            return

        for slot in config.time_slots:
            try:
                parse_time(slot.time)
            except ValueError:
                errors.append(f"Invalid time slot '{slot.time}' (expected HH:MM)")

    def _check_format_sizing(self, teams: List[Team], config: TournamentConfig, errors: List[str]):
        """Group knockout needs exactly group_count x teams_per_group teams."""
        if config.format != FORMAT_GROUP_KNOCKOUT:
            return

        group_count = config.group_count or 0
        teams_per_group = config.teams_per_group or 0
        expected_teams = group_count * teams_per_group

        if len(teams) != expected_teams:
            errors.append(
                f"Group knockout format requires exactly {expected_teams} teams "
                f"({group_count} groups x {teams_per_group} teams)"
            )

    def _check_prebuilt_groups(self, teams: List[Team], config: TournamentConfig, errors: List[str]):
        """Pre-built groups must split the entered teams, each team exactly once."""
        if config.format != FORMAT_GROUP_KNOCKOUT or not config.groups:
            return

        entered_ids = {team.id for team in teams}
        placements = Counter()

        for group in config.groups:
            if len(group.teams) < 2:
                errors.append(f"{group.name} needs at least 2 teams")

            unknown = [team.id for team in group.teams if team.id not in entered_ids]
            if unknown:
                errors.append(f"{group.name} references unknown teams: {', '.join(unknown)}")

            placements.update(team.id for team in group.teams if team.id in entered_ids)

        unique_teams = {team.id: team for team in teams}
        for team in unique_teams.values():
            count = placements.get(team.id, 0)
            if count == 0:
                errors.append(f"Team {team.name} is not in any group")
            elif count > 1:
                errors.append(f"Team {team.name} is in {count} groups")


def validate_configuration(teams: List[Team], config: TournamentConfig) -> ValidationResult:
    return ConfigurationValidator().validate_configuration(teams, config)
