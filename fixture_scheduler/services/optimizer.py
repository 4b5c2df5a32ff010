"""
Optional exact assignment stage using Google OR-Tools CP-SAT.

Solves the same venue/kickoff assignment as the greedy scheduler but over all
matches at once, so it can place matches the first-fit search gives up on.
Falls back to the greedy scheduler when no solution is found in time.
"""

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Tuple

from ortools.sat.python import cp_model

from fixture_scheduler.models import ScheduledMatch, TournamentConfig, FixtureConflict
from fixture_scheduler.services.scheduler import (
    FixtureScheduler, candidate_kickoffs, calculate_geographical_priority,
    calculate_venue_cost, venue_clash
)
from fixture_scheduler.core.config import SOLVER_NUM_WORKERS
from fixture_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)


class CpSatFixtureOptimizer:
    """
    Assigns venues and kickoffs with a CP-SAT model.

    One boolean per (match, venue, kickoff). Each match takes at most one
    slot, each venue hosts at most one match per kickoff, and a team cannot
    play twice inside any rest-period window. The objective schedules as many
    matches as possible, then minimizes venue cost.
    """

    def __init__(self, config: TournamentConfig):
        self.config = config
        self.kickoffs = sorted(set(candidate_kickoffs(config)))
        self.rest_period = timedelta(hours=config.rest_period)

    def schedule(self, matches: List[ScheduledMatch]) -> Tuple[List[ScheduledMatch], List[FixtureConflict]]:
        """
        Args:
            matches: Matches from the pairing stage

        Returns:
            (all matches in geographic priority order, VENUE_CLASH conflicts)
        """
        ordered = sorted(matches, key=calculate_geographical_priority)
        venues = self.config.venues

        if not ordered or not venues or not self.kickoffs:
            return ordered, [venue_clash(match) for match in ordered]

        model = cp_model.CpModel()

        # match_vars[(m, v, k)] = BoolVar
        match_vars = {}
        costs: Dict[Tuple[int, int], int] = {}
        for m, match in enumerate(ordered):
            for v, venue in enumerate(venues):
                costs[(m, v)] = calculate_venue_cost(match, venue)
                for k in range(len(self.kickoffs)):
                    match_vars[(m, v, k)] = model.NewBoolVar(f"match_{m}_venue_{v}_kickoff_{k}")

        # CONSTRAINT 1: each match is played at most once
        for m in range(len(ordered)):
            model.Add(sum(match_vars[(m, v, k)]
                          for v in range(len(venues))
                          for k in range(len(self.kickoffs))) <= 1)

        # CONSTRAINT 2: one match per venue per kickoff
        for v in range(len(venues)):
            for k in range(len(self.kickoffs)):
                model.Add(sum(match_vars[(m, v, k)] for m in range(len(ordered))) <= 1)

        # CONSTRAINT 3: at most one match per team inside any rest-period window
        team_matches: Dict[str, List[int]] = defaultdict(list)
        for m, match in enumerate(ordered):
            for team_id in match.team_ids():
                team_matches[team_id].append(m)

        for team_id, match_indices in team_matches.items():
            for k_start in range(len(self.kickoffs)):
                window = self._rest_window(k_start)
                if len(window) < 2 and self.rest_period <= timedelta(0):
                    continue
                model.Add(sum(match_vars[(m, v, k)]
                              for m in match_indices
                              for v in range(len(venues))
                              for k in window) <= 1)

        # OBJECTIVE: schedule as many matches as possible, cheapest venues first
        max_cost = max(costs.values())
        schedule_weight = (max_cost + 1) * len(ordered) + 1
        model.Maximize(sum(
            var * (schedule_weight - costs[(m, v)])
            for (m, v, k), var in match_vars.items()
        ))

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = float(self.config.solver_time_limit)
        solver.parameters.num_workers = SOLVER_NUM_WORKERS
        solver.parameters.log_search_progress = False

        logger.info(
            "Solving CP-SAT model: %d matches, %d venues, %d kickoffs (%.0fs limit)",
            len(ordered), len(venues), len(self.kickoffs), self.config.solver_time_limit
        )
        status = solver.Solve(model)

        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            logger.warning("No CP-SAT solution (status: %s), falling back to greedy", solver.StatusName(status))
            return FixtureScheduler(self.config).schedule(matches)

        logger.info("CP-SAT solution found (status: %s)", solver.StatusName(status))

        conflicts: List[FixtureConflict] = []
        for m, match in enumerate(ordered):
            assignment = self._extract_assignment(solver, match_vars, m)
            if assignment is None:
                conflicts.append(venue_clash(match))
                continue

            v, k = assignment
            match.venue = venues[v]
            match.kickoff = self.kickoffs[k]
            match.cost = costs[(m, v)]

        return ordered, conflicts

    def _rest_window(self, k_start: int) -> List[int]:
        """Kickoff indices from k_start that fall within one rest period of it."""
        start: datetime = self.kickoffs[k_start]
        window = [k_start]
        for k in range(k_start + 1, len(self.kickoffs)):
            if self.kickoffs[k] - start >= self.rest_period:
                break
            window.append(k)
        return window

    def _extract_assignment(self, solver, match_vars, m: int):
        for v in range(len(self.config.venues)):
            for k in range(len(self.kickoffs)):
                if solver.Value(match_vars[(m, v, k)]):
                    return v, k
        return None
