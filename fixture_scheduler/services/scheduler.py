"""
Venue and kickoff assignment for generated matches.

Greedy first-fit search: matches are ordered by geographic priority, then
each one takes the first free (venue, day, slot) in venue-cost order. There
is no backtracking, so an early assignment can leave a later match with no
feasible slot; that match is reported as a VENUE_CLASH instead.

Worst case per match is len(venues) x days x len(time_slots) feasibility
checks, with no time bound.
"""

from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Set, Tuple

from fixture_scheduler.models import (
    ScheduledMatch, Venue, TournamentConfig, FixtureConflict,
    ConflictType, ConflictSeverity
)
from fixture_scheduler.core.config import (
    NO_MATCHES_ON_SUNDAY, LOCAL_VENUE_COST, DISTANT_VENUE_COST,
    PITCH_CAPACITY_BASELINE, SAME_COUNTY_PRIORITY, CROSS_COUNTY_PRIORITY
)
from fixture_scheduler.services.conflicts import detect_conflicts
from fixture_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)


def parse_date(date_input) -> Optional[date]:
    """Parse a date from an ISO string, date or datetime."""
    if date_input is None or date_input == "":
        return None
    if isinstance(date_input, datetime):
        return date_input.date()
    if isinstance(date_input, date):
        return date_input
    return datetime.strptime(str(date_input)[:10], "%Y-%m-%d").date()


def parse_time(time_string: str) -> time:
    """Parse "HH:MM"; raises ValueError for anything else."""
    parts = str(time_string).split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time '{time_string}'")
    return time(int(parts[0]), int(parts[1]))


def create_datetime(game_date: date, time_string: str) -> datetime:
    return datetime.combine(game_date, parse_time(time_string))


def should_skip_date(game_date: date) -> bool:
    """No matches are played on Sundays."""
    return NO_MATCHES_ON_SUNDAY and game_date.weekday() == 6


def tournament_days(config: TournamentConfig) -> List[date]:
    """Playable days from start_date to end_date inclusive."""
    start = parse_date(config.start_date)
    end = parse_date(config.end_date)
    if start is None or end is None:
        return []

    days = []
    current = start
    while current <= end:
        if not should_skip_date(current):
            days.append(current)
        current += timedelta(days=1)
    return days


def candidate_kickoffs(config: TournamentConfig) -> List[datetime]:
    """Every kickoff the tournament offers, day order then slot order."""
    return [
        create_datetime(day, slot.time)
        for day in tournament_days(config)
        for slot in config.time_slots
    ]


def calculate_geographical_priority(match: ScheduledMatch) -> int:
    """Local derbies (same county) are placed before cross-county matches."""
    if match.home_team.county == match.away_team.county:
        return SAME_COUNTY_PRIORITY
    return CROSS_COUNTY_PRIORITY


def calculate_venue_cost(match: ScheduledMatch, venue: Venue) -> int:
    """
    Travel and capacity cost of playing a match at a venue (lower is better).

    A venue in either team's county costs LOCAL_VENUE_COST, anywhere else
    DISTANT_VENUE_COST. Venues with fewer pitches add up to
    PITCH_CAPACITY_BASELINE - 1, never less than 1.
    """
    cost = 0

    if venue.county == match.home_team.county or venue.county == match.away_team.county:
        cost += LOCAL_VENUE_COST
    else:
        cost += DISTANT_VENUE_COST

    cost += max(1, PITCH_CAPACITY_BASELINE - venue.pitch_count)

    return cost


def venue_clash(match: ScheduledMatch) -> FixtureConflict:
    return FixtureConflict(
        type=ConflictType.VENUE_CLASH,
        severity=ConflictSeverity.CRITICAL,
        message=f"Could not find suitable venue/time for {match.home_team.name} vs {match.away_team.name}",
        fixture_id=match.id
    )


class FixtureScheduler:
    """
    Assigns a venue and kickoff to each match with a greedy first-fit search.
    Booking state lives only for the duration of one schedule() call.
    """

    def __init__(self, config: TournamentConfig):
        """
        Args:
            config: Tournament configuration (venues, slots, window, rest period)
        """
        self.config = config
        self.days = tournament_days(config)
        self.rest_period = timedelta(hours=config.rest_period)

    def schedule(self, matches: List[ScheduledMatch]) -> Tuple[List[ScheduledMatch], List[FixtureConflict]]:
        """
        Assign venues and kickoffs to matches.

        Matches are updated in place (venue, kickoff, cost). Unassignable
        matches keep venue/kickoff unset and produce a VENUE_CLASH conflict.

        Args:
            matches: Matches from the pairing stage

        Returns:
            (all matches in processing order, VENUE_CLASH conflicts)
        """
        # sorted() is stable, so equal priorities keep pairing order
        ordered = sorted(matches, key=calculate_geographical_priority)

        venue_bookings: Dict[str, Set[str]] = defaultdict(set)
        team_kickoffs: Dict[str, List[datetime]] = defaultdict(list)
        conflicts: List[FixtureConflict] = []

        search_bound = len(self.config.venues) * len(self.days) * len(self.config.time_slots)
        logger.info(
            "Scheduling %d matches over %d days (up to %d candidates per match)",
            len(ordered), len(self.days), search_bound
        )

        for match in ordered:
            venue, kickoff, cost = self._find_optimal_venue_and_time(match, venue_bookings, team_kickoffs)

            if venue is None:
                conflicts.append(venue_clash(match))
                continue

            match.venue = venue
            match.kickoff = kickoff
            match.cost = cost

            venue_bookings[venue.id].add(kickoff.isoformat())
            for team_id in match.team_ids():
                team_kickoffs[team_id].append(kickoff)

        scheduled = sum(1 for match in ordered if match.is_scheduled)
        logger.info("Scheduled %d of %d matches", scheduled, len(ordered))

        return ordered, conflicts

    def _find_optimal_venue_and_time(
        self,
        match: ScheduledMatch,
        venue_bookings: Dict[str, Set[str]],
        team_kickoffs: Dict[str, List[datetime]]
    ) -> Tuple[Optional[Venue], Optional[datetime], Optional[int]]:
        """First feasible (venue, day, slot) scanning venues cheapest first."""
        ranked_venues = sorted(
            self.config.venues,
            key=lambda venue: calculate_venue_cost(match, venue)
        )

        for venue in ranked_venues:
            cost = calculate_venue_cost(match, venue)
            for day in self.days:
                for slot in self.config.time_slots:
                    kickoff = create_datetime(day, slot.time)

                    if (self._is_time_slot_available(venue, kickoff, venue_bookings) and
                            self._meets_rest_period_requirement(match, kickoff, team_kickoffs)):
                        return venue, kickoff, cost

        return None, None, None

    def _is_time_slot_available(self, venue: Venue, kickoff: datetime,
                                venue_bookings: Dict[str, Set[str]]) -> bool:
        return kickoff.isoformat() not in venue_bookings.get(venue.id, ())

    def _meets_rest_period_requirement(self, match: ScheduledMatch, kickoff: datetime,
                                       team_kickoffs: Dict[str, List[datetime]]) -> bool:
        for team_id in match.team_ids():
            for other_kickoff in team_kickoffs.get(team_id, ()):
                if abs(kickoff - other_kickoff) < self.rest_period:
                    return False
        return True


def assign_venues_and_times(matches: List[ScheduledMatch],
                            config: TournamentConfig) -> Tuple[List[ScheduledMatch], List[FixtureConflict]]:
    """
    Greedy assignment followed by a conflict re-scan of the result.

    Returns:
        (all matches in processing order, VENUE_CLASH conflicts + detected conflicts)
    """
    scheduled_matches, conflicts = FixtureScheduler(config).schedule(matches)
    conflicts.extend(detect_conflicts(scheduled_matches, config))
    return scheduled_matches, conflicts
