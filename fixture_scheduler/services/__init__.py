"""
Services for validation, grouping, pairing, scheduling and conflict detection.
"""

from .validator import ConfigurationValidator, validate_configuration
from .grouper import create_groups, create_geographical_groups
from .pairing import generate_round_robin, generate_matches
from .scheduler import FixtureScheduler, assign_venues_and_times
from .optimizer import CpSatFixtureOptimizer
from .conflicts import ConflictDetector, detect_conflicts
from .engine import generate_fixtures
from .report import get_team_stats, generate_fixture_report

__all__ = [
    "ConfigurationValidator",
    "validate_configuration",
    "create_groups",
    "create_geographical_groups",
    "generate_round_robin",
    "generate_matches",
    "FixtureScheduler",
    "assign_venues_and_times",
    "CpSatFixtureOptimizer",
    "ConflictDetector",
    "detect_conflicts",
    "generate_fixtures",
    "get_team_stats",
    "generate_fixture_report"
]
