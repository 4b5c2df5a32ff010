"""
Conflict detection over a finished fixture list.

Runs independently of the scheduler's own checks so that anything the greedy
search let through (overlapping occupancy windows, short rest) is reported.
"""

from datetime import timedelta
from typing import List

from fixture_scheduler.models import (
    ScheduledMatch, TournamentConfig, FixtureConflict,
    ConflictType, ConflictSeverity
)
from fixture_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)


class ConflictDetector:
    """
    Compares every scheduled match with the scheduled matches before it in
    the list. Matches without a venue or kickoff are ignored.
    """

    def __init__(self, config: TournamentConfig):
        self.config = config
        self.rest_period = timedelta(hours=config.rest_period)

    def detect_conflicts(self, matches: List[ScheduledMatch]) -> List[FixtureConflict]:
        """
        Args:
            matches: Final fixture list, in scheduling order

        Returns:
            REST_PERIOD, DOUBLE_BOOKING and TRAVEL_BURDEN conflicts
        """
        conflicts: List[FixtureConflict] = []
        previous: List[ScheduledMatch] = []

        for match in matches:
            if not match.is_scheduled:
                continue

            conflicts.extend(self._check_rest_period_conflicts(match, previous))
            conflicts.extend(self._check_venue_conflicts(match, previous))
            conflicts.extend(self._check_travel_burden(match))

            previous.append(match)

        if conflicts:
            logger.info("Detected %d conflicts in %d scheduled matches", len(conflicts), len(previous))

        return conflicts

    def _check_rest_period_conflicts(self, match: ScheduledMatch,
                                     previous_matches: List[ScheduledMatch]) -> List[FixtureConflict]:
        conflicts = []

        for prev_match in previous_matches:
            if not match.shares_team_with(prev_match):
                continue

            time_diff = abs(match.kickoff - prev_match.kickoff)
            if time_diff < self.rest_period:
                shared = [t.name for t in (match.home_team, match.away_team) if prev_match.involves_team(t)]
                hours = time_diff.total_seconds() / 3600
                conflicts.append(FixtureConflict(
                    type=ConflictType.REST_PERIOD,
                    severity=ConflictSeverity.HIGH,
                    message=f"Insufficient rest period for {', '.join(shared)} ({hours:g} hours)",
                    fixture_id=match.id
                ))

        return conflicts

    def _check_venue_conflicts(self, match: ScheduledMatch,
                               previous_matches: List[ScheduledMatch]) -> List[FixtureConflict]:
        """Occupancy windows [kickoff, kickoff + duration + buffer] must not overlap."""
        conflicts = []
        duration, buffer_time = self.config.match_duration, self.config.buffer_time
        match_end = match.occupancy_end(duration, buffer_time)

        for prev_match in previous_matches:
            if prev_match.venue.id != match.venue.id:
                continue

            prev_end = prev_match.occupancy_end(duration, buffer_time)
            if match.kickoff < prev_end and match_end > prev_match.kickoff:
                conflicts.append(FixtureConflict(
                    type=ConflictType.DOUBLE_BOOKING,
                    severity=ConflictSeverity.CRITICAL,
                    message=f"Venue {match.venue.name} double-booked (overlaps {prev_match.id})",
                    fixture_id=match.id
                ))

        return conflicts

    def _check_travel_burden(self, match: ScheduledMatch) -> List[FixtureConflict]:
        conflicts = []

        for team in (match.home_team, match.away_team):
            if team.county and match.venue.county != team.county:
                conflicts.append(FixtureConflict(
                    type=ConflictType.TRAVEL_BURDEN,
                    severity=ConflictSeverity.LOW,
                    message=f"{team.name} traveling from {team.county} to {match.venue.county}",
                    fixture_id=match.id
                ))

        return conflicts


def detect_conflicts(matches: List[ScheduledMatch], config: TournamentConfig) -> List[FixtureConflict]:
    return ConflictDetector(config).detect_conflicts(matches)
