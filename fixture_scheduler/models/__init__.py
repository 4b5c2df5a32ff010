"""
Data models for the fixture scheduling engine.
"""

from .models import (
    MatchStatus,
    ConflictType,
    ConflictSeverity,
    Team,
    Venue,
    TimeSlot,
    ScheduledMatch,
    Group,
    TournamentConfig,
    FixtureConflict,
    ValidationResult,
    FixtureResult,
    FixtureContext,
    TeamFixtureStats
)

__all__ = [
    "MatchStatus",
    "ConflictType",
    "ConflictSeverity",
    "Team",
    "Venue",
    "TimeSlot",
    "ScheduledMatch",
    "Group",
    "TournamentConfig",
    "FixtureConflict",
    "ValidationResult",
    "FixtureResult",
    "FixtureContext",
    "TeamFixtureStats"
]
