"""
Request and response models for the fixture API.
Field names are camelCase on the wire to match the web client.
"""

from datetime import date, datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fixture_scheduler.models import (
    Team, Venue, TimeSlot, Group, TournamentConfig,
    ScheduledMatch, FixtureConflict, FixtureResult
)
from fixture_scheduler.core.config import (
    FORMAT_ROUND_ROBIN, GROUPING_STRATEGY_GEOGRAPHIC,
    DEFAULT_MATCH_DURATION_MINUTES, DEFAULT_BUFFER_MINUTES,
    DEFAULT_REST_PERIOD_HOURS, MAX_LEGS, SOLVER_GREEDY, SOLVER_TIME_LIMIT_SECONDS
)
from fixture_scheduler.core.exceptions import FixtureConfigurationError


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(CamelModel):
    lat: float
    lng: float


class TeamSchema(CamelModel):
    """A tournament entrant."""
    id: str
    name: str
    county: Optional[str] = None
    constituency: Optional[str] = None
    org_id: Optional[str] = None

    def to_domain(self) -> Team:
        return Team(
            id=self.id,
            name=self.name,
            county=self.county,
            constituency=self.constituency,
            org_id=self.org_id
        )

    @classmethod
    def from_domain(cls, team: Team) -> "TeamSchema":
        return cls(
            id=team.id,
            name=team.name,
            county=team.county,
            constituency=team.constituency,
            org_id=team.org_id
        )


class VenueSchema(CamelModel):
    """A playing venue."""
    id: str
    name: str
    location: str = ""
    county: Optional[str] = None
    constituency: Optional[str] = None
    pitch_count: int = Field(default=1, ge=0)
    coordinates: Optional[Coordinates] = None

    def to_domain(self) -> Venue:
        coordinates: Optional[Tuple[float, float]] = None
        if self.coordinates:
            coordinates = (self.coordinates.lat, self.coordinates.lng)
        return Venue(
            id=self.id,
            name=self.name,
            location=self.location,
            county=self.county,
            constituency=self.constituency,
            pitch_count=self.pitch_count,
            coordinates=coordinates
        )

    @classmethod
    def from_domain(cls, venue: Venue) -> "VenueSchema":
        coordinates = None
        if venue.coordinates:
            coordinates = Coordinates(lat=venue.coordinates[0], lng=venue.coordinates[1])
        return cls(
            id=venue.id,
            name=venue.name,
            location=venue.location,
            county=venue.county,
            constituency=venue.constituency,
            pitch_count=venue.pitch_count,
            coordinates=coordinates
        )


class TimeSlotSchema(CamelModel):
    id: str
    time: str = Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    label: str = ""

    def to_domain(self) -> TimeSlot:
        return TimeSlot(id=self.id, time=self.time, label=self.label)


class GroupSchema(CamelModel):
    """Pre-built group supplied by the caller."""
    id: str
    name: str
    team_ids: List[str] = Field(default_factory=list)


class TournamentConfigSchema(CamelModel):
    format: str = FORMAT_ROUND_ROBIN
    venues: List[VenueSchema] = Field(default_factory=list)
    time_slots: List[TimeSlotSchema] = Field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    grouping_strategy: str = GROUPING_STRATEGY_GEOGRAPHIC
    match_duration: int = Field(default=DEFAULT_MATCH_DURATION_MINUTES, ge=0)
    buffer_time: int = Field(default=DEFAULT_BUFFER_MINUTES, ge=0)
    rest_period: float = Field(default=DEFAULT_REST_PERIOD_HOURS, ge=0)
    group_count: Optional[int] = Field(default=None, ge=1)
    teams_per_group: Optional[int] = Field(default=None, ge=1)
    legs: int = Field(default=1, ge=1, le=MAX_LEGS)
    groups: List[GroupSchema] = Field(default_factory=list)
    solver: str = SOLVER_GREEDY
    solver_time_limit: float = Field(default=SOLVER_TIME_LIMIT_SECONDS, gt=0)


class FixtureRequest(CamelModel):
    """Request model for fixture generation."""
    teams: List[TeamSchema] = Field(default_factory=list)
    config: TournamentConfigSchema

    def to_domain(self) -> Tuple[List[Team], TournamentConfig]:
        """
        Convert to engine inputs.

        Raises:
            FixtureConfigurationError: a pre-built group names an unknown team
        """
        teams = [team.to_domain() for team in self.teams]
        teams_by_id = {team.id: team for team in teams}

        errors = []
        groups = []
        for group in self.config.groups:
            unknown = [team_id for team_id in group.team_ids if team_id not in teams_by_id]
            if unknown:
                errors.append(f"{group.name} references unknown teams: {', '.join(unknown)}")
                continue
            groups.append(Group(
                id=group.id,
                name=group.name,
                teams=[teams_by_id[team_id] for team_id in group.team_ids]
            ))
        if errors:
            raise FixtureConfigurationError(errors)

        config = TournamentConfig(
            format=self.config.format,
            venues=[venue.to_domain() for venue in self.config.venues],
            time_slots=[slot.to_domain() for slot in self.config.time_slots],
            start_date=self.config.start_date,
            end_date=self.config.end_date,
            grouping_strategy=self.config.grouping_strategy,
            match_duration=self.config.match_duration,
            buffer_time=self.config.buffer_time,
            rest_period=self.config.rest_period,
            group_count=self.config.group_count,
            teams_per_group=self.config.teams_per_group,
            legs=self.config.legs,
            groups=groups,
            solver=self.config.solver,
            solver_time_limit=self.config.solver_time_limit
        )
        return teams, config


class MatchResponse(CamelModel):
    """Response model for a single fixture."""
    id: str
    round: int
    leg: int
    home_team: TeamSchema
    away_team: TeamSchema
    venue: Optional[VenueSchema] = None
    kickoff: Optional[datetime] = None
    status: str
    cost: Optional[int] = None
    group_id: Optional[str] = None

    @classmethod
    def from_domain(cls, match: ScheduledMatch) -> "MatchResponse":
        return cls(
            id=match.id,
            round=match.round,
            leg=match.leg,
            home_team=TeamSchema.from_domain(match.home_team),
            away_team=TeamSchema.from_domain(match.away_team),
            venue=VenueSchema.from_domain(match.venue) if match.venue else None,
            kickoff=match.kickoff,
            status=match.status.value,
            cost=match.cost,
            group_id=match.group_id
        )


class ConflictResponse(CamelModel):
    type: str
    severity: str
    message: str
    fixture_id: str

    @classmethod
    def from_domain(cls, conflict: FixtureConflict) -> "ConflictResponse":
        return cls(
            type=conflict.type.value,
            severity=conflict.severity.value,
            message=conflict.message,
            fixture_id=conflict.fixture_id
        )


class GroupResponse(CamelModel):
    id: str
    name: str
    team_ids: List[str]
    match_ids: List[str]


class FixtureResponse(CamelModel):
    """Response model for fixture generation."""
    success: bool
    message: str
    total_fixtures: int
    scheduled_fixtures: int
    fixtures: List[MatchResponse]
    conflicts: List[ConflictResponse]
    groups: List[GroupResponse]
    generation_time: float

    @classmethod
    def from_result(cls, result: FixtureResult, generation_time: float) -> "FixtureResponse":
        scheduled = len(result.scheduled_fixtures)
        return cls(
            success=True,
            message=f"Generated {len(result.fixtures)} fixtures ({scheduled} scheduled)",
            total_fixtures=len(result.fixtures),
            scheduled_fixtures=scheduled,
            fixtures=[MatchResponse.from_domain(match) for match in result.fixtures],
            conflicts=[ConflictResponse.from_domain(conflict) for conflict in result.conflicts],
            groups=[
                GroupResponse(
                    id=group.id,
                    name=group.name,
                    team_ids=[team.id for team in group.teams],
                    match_ids=[match.id for match in group.matches]
                )
                for group in result.groups
            ],
            generation_time=generation_time
        )


class ValidationResponse(CamelModel):
    is_valid: bool
    errors: List[str]
