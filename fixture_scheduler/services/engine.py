"""
Fixture generation pipeline.

Validator -> Grouper -> Pairing Generator -> Scheduler -> Conflict Detector.
Each stage takes a FixtureContext and returns a new one; no state survives
between calls, so concurrent generate_fixtures() calls are independent.
"""

from dataclasses import replace
from typing import Callable, Dict, List

from fixture_scheduler.models import Team, TournamentConfig, FixtureContext, FixtureResult
from fixture_scheduler.services.validator import validate_configuration
from fixture_scheduler.services.grouper import create_groups
from fixture_scheduler.services.pairing import attach_matches
from fixture_scheduler.services.scheduler import FixtureScheduler
from fixture_scheduler.services.optimizer import CpSatFixtureOptimizer
from fixture_scheduler.services.conflicts import detect_conflicts
from fixture_scheduler.core.config import SOLVER_GREEDY, SOLVER_CP_SAT
from fixture_scheduler.core.exceptions import FixtureConfigurationError, SolverUnavailableError
from fixture_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)

SOLVERS: Dict[str, Callable] = {
    SOLVER_GREEDY: FixtureScheduler,
    SOLVER_CP_SAT: CpSatFixtureOptimizer,
}


def check_solver(config: TournamentConfig):
    """Raise SolverUnavailableError unless config.solver is registered."""
    if config.solver not in SOLVERS:
        raise SolverUnavailableError(f"Unknown solver '{config.solver}'")


def validate_stage(context: FixtureContext) -> FixtureContext:
    validation = validate_configuration(context.teams, context.config)
    if not validation.is_valid:
        raise FixtureConfigurationError(validation.errors)
    check_solver(context.config)
    return replace(context, validation=validation)


def grouping_stage(context: FixtureContext) -> FixtureContext:
    return replace(context, groups=create_groups(context.teams, context.config))


def pairing_stage(context: FixtureContext) -> FixtureContext:
    groups = attach_matches(context.groups, context.config.legs)
    matches = [match for group in groups for match in group.matches]
    return replace(context, groups=groups, matches=matches)


def scheduling_stage(context: FixtureContext) -> FixtureContext:
    solver_class = SOLVERS[context.config.solver]
    fixtures, conflicts = solver_class(context.config).schedule(context.matches)
    return replace(context, fixtures=fixtures, conflicts=conflicts)


def conflict_stage(context: FixtureContext) -> FixtureContext:
    detected = detect_conflicts(context.fixtures, context.config)
    return replace(context, conflicts=list(context.conflicts) + detected)


PIPELINE: List[Callable[[FixtureContext], FixtureContext]] = [
    validate_stage,
    grouping_stage,
    pairing_stage,
    scheduling_stage,
    conflict_stage,
]


def generate_fixtures(teams: List[Team], config: TournamentConfig) -> FixtureResult:
    """
    Generate a complete fixture list for a tournament.

    Args:
        teams: Entered teams, in a stable caller-defined order
        config: Tournament configuration

    Returns:
        FixtureResult with every match (scheduled or not), all conflicts
        and the groups

    Raises:
        FixtureConfigurationError: validation failed; nothing was scheduled
        SolverUnavailableError: config.solver is not a known solver
    """
    logger.info(
        "Generating %s fixtures for %d teams (solver: %s)",
        config.format, len(teams), config.solver
    )

    context = FixtureContext(teams=list(teams), config=config)
    for stage in PIPELINE:
        context = stage(context)

    result = context.to_result()
    logger.info(
        "Generated %d fixtures (%d scheduled) with %d conflicts across %d groups",
        len(result.fixtures), len(result.scheduled_fixtures),
        len(result.conflicts), len(result.groups)
    )
    return result
