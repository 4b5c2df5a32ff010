"""
Data models for the Fixture Scheduling Engine.
Defines all data structures passed between the pipeline stages.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple, Union
from enum import Enum

from fixture_scheduler.core.config import (
    FORMAT_ROUND_ROBIN, GROUPING_STRATEGY_GEOGRAPHIC,
    DEFAULT_MATCH_DURATION_MINUTES, DEFAULT_BUFFER_MINUTES,
    DEFAULT_REST_PERIOD_HOURS, SOLVER_GREEDY, SOLVER_TIME_LIMIT_SECONDS
)


class MatchStatus(Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ConflictType(Enum):
    REST_PERIOD = "REST_PERIOD"
    DOUBLE_BOOKING = "DOUBLE_BOOKING"
    TRAVEL_BURDEN = "TRAVEL_BURDEN"
    VENUE_CLASH = "VENUE_CLASH"


class ConflictSeverity(Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    county: Optional[str] = None
    constituency: Optional[str] = None
    org_id: Optional[str] = None


@dataclass(frozen=True)
class Venue:
    id: str
    name: str
    location: str = ""
    county: Optional[str] = None
    constituency: Optional[str] = None
    pitch_count: int = 1
    coordinates: Optional[Tuple[float, float]] = None  # (lat, lng)

    def __str__(self):
        return f"{self.name} ({self.county})" if self.county else self.name


@dataclass(frozen=True)
class TimeSlot:
    id: str
    time: str  # "HH:MM"
    label: str = ""

    def __str__(self):
        return f"{self.label} {self.time}".strip()


@dataclass
class ScheduledMatch:
    id: str
    round: int
    home_team: Team
    away_team: Team
    leg: int = 1
    venue: Optional[Venue] = None
    kickoff: Optional[datetime] = None
    status: MatchStatus = MatchStatus.SCHEDULED
    cost: Optional[int] = None
    group_id: Optional[str] = None

    def __str__(self):
        where = f" at {self.venue.name}" if self.venue else ""
        when = f" on {self.kickoff:%Y-%m-%d %H:%M}" if self.kickoff else ""
        return f"{self.home_team.name} vs {self.away_team.name}{where}{when}"

    @property
    def is_scheduled(self) -> bool:
        return self.venue is not None and self.kickoff is not None

    def team_ids(self) -> Tuple[str, str]:
        return self.home_team.id, self.away_team.id

    def involves_team(self, team: Team) -> bool:
        return team.id in self.team_ids()

    def shares_team_with(self, other: 'ScheduledMatch') -> bool:
        return bool(set(self.team_ids()) & set(other.team_ids()))

    def is_home_game(self, team: Team) -> bool:
        return self.home_team.id == team.id

    def get_opponent(self, team: Team) -> Optional[Team]:
        if self.home_team.id == team.id:
            return self.away_team
        elif self.away_team.id == team.id:
            return self.home_team
        return None

    def occupancy_end(self, match_duration: int, buffer_time: int) -> Optional[datetime]:
        """End of the venue occupancy window (kickoff + duration + buffer)."""
        if self.kickoff is None:
            return None
        return self.kickoff + timedelta(minutes=match_duration + buffer_time)


@dataclass
class Group:
    id: str
    name: str
    teams: List[Team] = field(default_factory=list)
    matches: List[ScheduledMatch] = field(default_factory=list)


@dataclass
class TournamentConfig:
    format: str = FORMAT_ROUND_ROBIN
    venues: List[Venue] = field(default_factory=list)
    time_slots: List[TimeSlot] = field(default_factory=list)
    start_date: Union[date, str, None] = None
    end_date: Union[date, str, None] = None
    grouping_strategy: str = GROUPING_STRATEGY_GEOGRAPHIC
    match_duration: int = DEFAULT_MATCH_DURATION_MINUTES
    buffer_time: int = DEFAULT_BUFFER_MINUTES
    rest_period: float = DEFAULT_REST_PERIOD_HOURS
    group_count: Optional[int] = None
    teams_per_group: Optional[int] = None
    legs: int = 1
    groups: List[Group] = field(default_factory=list)  # pre-built groups for group_knockout
    solver: str = SOLVER_GREEDY
    solver_time_limit: float = SOLVER_TIME_LIMIT_SECONDS


@dataclass
class FixtureConflict:
    type: ConflictType
    severity: ConflictSeverity
    message: str
    fixture_id: str

    def __str__(self):
        return f"[{self.severity.value}] {self.type.value} ({self.fixture_id}): {self.message}"


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class FixtureResult:
    fixtures: List[ScheduledMatch] = field(default_factory=list)
    conflicts: List[FixtureConflict] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)

    @property
    def scheduled_fixtures(self) -> List[ScheduledMatch]:
        return [match for match in self.fixtures if match.is_scheduled]

    @property
    def unscheduled_fixtures(self) -> List[ScheduledMatch]:
        return [match for match in self.fixtures if not match.is_scheduled]

    def conflicts_of_type(self, conflict_type: ConflictType) -> List[FixtureConflict]:
        return [conflict for conflict in self.conflicts if conflict.type == conflict_type]

    def has_critical_conflicts(self) -> bool:
        return any(c.severity == ConflictSeverity.CRITICAL for c in self.conflicts)


@dataclass(frozen=True)
class FixtureContext:
    """
    Immutable record handed from one pipeline stage to the next.
    Each stage returns a copy with its own output filled in.
    """
    teams: List[Team]
    config: TournamentConfig
    validation: Optional[ValidationResult] = None
    groups: List[Group] = field(default_factory=list)
    matches: List[ScheduledMatch] = field(default_factory=list)
    fixtures: List[ScheduledMatch] = field(default_factory=list)
    conflicts: List[FixtureConflict] = field(default_factory=list)

    def to_result(self) -> FixtureResult:
        return FixtureResult(
            fixtures=list(self.fixtures),
            conflicts=list(self.conflicts),
            groups=list(self.groups)
        )


@dataclass
class TeamFixtureStats:
    team: Team
    total_matches: int = 0
    scheduled_matches: int = 0
    home_matches: int = 0
    away_matches: int = 0
    away_from_county: int = 0
    opponents: List[Team] = field(default_factory=list)

    def calculate_balance_score(self) -> float:
        if self.total_matches == 0:
            return 0.0
        ideal_split = self.total_matches / 2.0
        return abs(self.home_matches - ideal_split) + abs(self.away_matches - ideal_split)
