"""
Fixture scheduling engine: groups teams, generates round robin pairings and
assigns venues and kickoffs while tracking scheduling conflicts.
"""

from fixture_scheduler.services.engine import generate_fixtures
from fixture_scheduler.core.exceptions import FixtureConfigurationError

__all__ = ["generate_fixtures", "FixtureConfigurationError"]
