"""
Stochastic Optimizer - Searches for the most evenly matched split

Each attempt runs the three position passes (defenders, attackers,
midfielders), assigns slots, places leftovers and scores the result. The
working pool is reshuffled periodically so that ties in the selection sort
resolve differently across attempts. The best attempt wins; the search
stops early once a near-perfect score is found.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from analyzers.balance_scorer import BalanceScorer
from analyzers.leftover_distributor import LeftoverDistributor
from analyzers.position_selector import PositionSelector
from analyzers.slot_assigner import SlotAssigner
from models.balance import Player, PositionTemplate, SlotAssignment, WeightTable
from models.constants import (
    DEFAULT_EARLY_EXIT_THRESHOLD,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RESHUFFLE_INTERVAL,
    MIN_POOL_SIZE,
    SELECTION_ORDER,
    Team,
)
from models.errors import BalanceValidationError

logger = logging.getLogger(__name__)


@dataclass
class AttemptResult:
    """Slot assignments and score produced by one attempt."""
    assignments: List[SlotAssignment]
    score: float
    quota_shortfall: int = 0
    leftover_count: int = 0
    overflow_count: int = 0


@dataclass
class OptimizationOutcome:
    """
    Best split found by the search.

    Attributes:
        assignments: Winning slot assignments (one per player)
        score: Winning balance score
        attempts_used: Attempts actually run
        early_exit: True if the threshold stopped the search
        timed_out: True if the wall-clock limit stopped the search
        history: Best score after each attempt (non-increasing)
    """
    assignments: List[SlotAssignment]
    score: float
    attempts_used: int
    early_exit: bool = False
    timed_out: bool = False
    history: List[float] = field(default_factory=list)
    quota_shortfall: int = 0
    leftover_count: int = 0
    overflow_count: int = 0


class StochasticOptimizer:
    """Repeated-restart greedy search over tie-breaking orders."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        reshuffle_interval: int = DEFAULT_RESHUFFLE_INTERVAL,
        timeout_seconds: Optional[float] = None,
        selector: Optional[PositionSelector] = None,
        scorer: Optional[BalanceScorer] = None
    ):
        if reshuffle_interval < 1:
            raise ValueError("reshuffle_interval must be at least 1")
        self.rng = rng or random.Random()
        self.reshuffle_interval = reshuffle_interval
        self.timeout_seconds = timeout_seconds
        self.selector = selector or PositionSelector()
        self.scorer = scorer or BalanceScorer()
        self.distributor = LeftoverDistributor(self.rng)

    def optimize(
        self,
        pool: Sequence[Player],
        team_size: int,
        template: PositionTemplate,
        weights: WeightTable,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        early_exit_threshold: float = DEFAULT_EARLY_EXIT_THRESHOLD
    ) -> OptimizationOutcome:
        """
        Run the search and return the best split found.

        Args:
            pool: Players to split (at least two)
            team_size: Players per side
            template: Per-team position counts
            weights: Balance weight lookup
            max_attempts: Attempt budget
            early_exit_threshold: Stop once the best score drops below this

        Raises:
            BalanceValidationError: If the pool or team size is unusable
        """
        if len(pool) < MIN_POOL_SIZE:
            raise BalanceValidationError(
                f"At least {MIN_POOL_SIZE} players are required to balance teams, got {len(pool)}"
            )
        if team_size <= 0:
            raise BalanceValidationError(f"Team size must be positive, got {team_size}")
        if template.team_size != team_size:
            raise BalanceValidationError(
                f"Template {template.defenders}/{template.midfielders}/{template.attackers} "
                f"does not fill a team of {team_size}"
            )
        if max_attempts < 1:
            raise BalanceValidationError(f"max_attempts must be at least 1, got {max_attempts}")

        players_by_id: Dict[int, Player] = {p.player_id: p for p in pool}
        working_pool = list(pool)

        best: Optional[AttemptResult] = None
        best_score = float('inf')
        history: List[float] = []
        early_exit = False
        timed_out = False
        deadline = time.monotonic() + self.timeout_seconds if self.timeout_seconds is not None else None

        attempt = 0
        while attempt < max_attempts:
            if deadline is not None and attempt > 0 and time.monotonic() >= deadline:
                timed_out = True
                logger.warning(f"Balance search timed out after {attempt} attempts")
                break

            if attempt % self.reshuffle_interval == 0:
                self.rng.shuffle(working_pool)

            result = self._run_attempt(working_pool, players_by_id, team_size, template, weights)
            attempt += 1

            if result.score < best_score:
                best_score = result.score
                best = result
                logger.debug(f"New best score {best_score:.4f} on attempt {attempt}")

            history.append(best_score)

            if best_score < early_exit_threshold:
                early_exit = True
                break

        assignments = best.assignments
        if self.rng.random() < 0.5:
            assignments = [a.mirrored(team_size) for a in assignments]

        logger.info(
            f"Best balance score {best_score:.4f} after {attempt} attempts "
            f"({len(assignments)} players assigned)"
        )

        return OptimizationOutcome(
            assignments=sorted(assignments, key=lambda a: a.slot_number),
            score=best_score,
            attempts_used=attempt,
            early_exit=early_exit,
            timed_out=timed_out,
            history=history,
            quota_shortfall=best.quota_shortfall,
            leftover_count=best.leftover_count,
            overflow_count=best.overflow_count
        )

    def _run_attempt(
        self,
        working_pool: Sequence[Player],
        players_by_id: Dict[int, Player],
        team_size: int,
        template: PositionTemplate,
        weights: WeightTable
    ) -> AttemptResult:
        """Select, assign, distribute leftovers and score one candidate split."""
        remaining: List[Player] = list(working_pool)
        assignments: List[SlotAssignment] = []
        quota_shortfall = 0

        for position in SELECTION_ORDER:
            quota = template.count_for(position) * 2
            selected, remaining = self.selector.select_for(remaining, position, quota)
            quota_shortfall += quota - len(selected)
            assignments.extend(SlotAssigner.assign(
                selected,
                position,
                template.slot_offset(position, Team.A, team_size),
                template.slot_offset(position, Team.B, team_size)
            ))

        used = {a.slot_number for a in assignments}
        open_a = [s for s in range(1, team_size + 1) if s not in used]
        open_b = [s for s in range(team_size + 1, 2 * team_size + 1) if s not in used]

        leftovers = self.distributor.distribute(remaining, open_a, open_b, overflow_start=2 * team_size + 1)
        assignments.extend(leftovers)

        team_a = [(players_by_id[a.player_id], a.position) for a in assignments if a.team is Team.A]
        team_b = [(players_by_id[a.player_id], a.position) for a in assignments if a.team is Team.B]

        return AttemptResult(
            assignments=assignments,
            score=self.scorer.score(team_a, team_b, weights),
            quota_shortfall=quota_shortfall,
            leftover_count=len(leftovers),
            overflow_count=sum(1 for a in leftovers if a.slot_number > 2 * team_size)
        )
