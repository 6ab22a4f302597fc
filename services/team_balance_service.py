"""
Team Balance Service - Handles rating-based team balancing

This service is the boundary of the balancing engine: it validates the
roster, resolves the position template and weights, runs the stochastic
search and packages the winning split with its score, quality label and
diagnostics.
"""

import logging
import random
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from analyzers.balance_scorer import BalanceScorer
from analyzers.team_optimizer import StochasticOptimizer
from models.balance import (
    BalanceDiagnostics,
    BalanceResult,
    BalanceWeight,
    Player,
    WeightTable,
)
from models.constants import (
    BALANCE_QUALITY_THRESHOLDS,
    DEFAULT_EARLY_EXIT_THRESHOLD,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RESHUFFLE_INTERVAL,
    MIN_POOL_SIZE,
    Team,
)
from models.errors import BalanceValidationError
from services.position_template_service import PositionTemplateService, TemplateLike

logger = logging.getLogger(__name__)

PlayerLike = Union[Player, Mapping]
WeightLike = Union[BalanceWeight, Mapping]


class TeamBalanceService:
    """Service for splitting a roster into two evenly matched teams."""

    def __init__(
        self,
        templates: Optional[Mapping[int, TemplateLike]] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        early_exit_threshold: float = DEFAULT_EARLY_EXIT_THRESHOLD,
        reshuffle_interval: int = DEFAULT_RESHUFFLE_INTERVAL,
        timeout_seconds: Optional[float] = None
    ):
        self.template_service = PositionTemplateService(templates)
        self.max_attempts = max_attempts
        self.early_exit_threshold = early_exit_threshold
        self.reshuffle_interval = reshuffle_interval
        self.timeout_seconds = timeout_seconds
        self.scorer = BalanceScorer()

    @classmethod
    def from_config(cls, config: Mapping) -> "TeamBalanceService":
        """Build a service from a Flask config mapping."""
        return cls(
            templates=config.get('TEAM_TEMPLATES'),
            max_attempts=config.get('BALANCE_MAX_ATTEMPTS', DEFAULT_MAX_ATTEMPTS),
            early_exit_threshold=config.get('BALANCE_EARLY_EXIT_THRESHOLD', DEFAULT_EARLY_EXIT_THRESHOLD),
            reshuffle_interval=config.get('BALANCE_RESHUFFLE_INTERVAL', DEFAULT_RESHUFFLE_INTERVAL),
            timeout_seconds=config.get('BALANCE_TIMEOUT_SECONDS')
        )

    def balance(
        self,
        roster: Sequence[PlayerLike],
        team_size: int,
        template: Optional[TemplateLike] = None,
        weights: Optional[Iterable[WeightLike]] = None,
        max_attempts: Optional[int] = None,
        early_exit_threshold: Optional[float] = None,
        seed: Optional[Union[int, str]] = None,
        timeout_seconds: Optional[float] = None
    ) -> BalanceResult:
        """
        Split ``roster`` into Team A and Team B.

        Args:
            roster: Players (Player objects or dicts with player_id and ratings)
            team_size: Players per side
            template: Per-team position counts; resolved from configuration
                or the fallback heuristic when omitted
            weights: Balance weights; every missing weight counts as 1.0
            max_attempts: Attempt budget (defaults to the service setting)
            early_exit_threshold: Early exit score (defaults to the service setting)
            seed: Random seed for reproducible runs
            timeout_seconds: Optional wall-clock limit for the search

        Returns:
            BalanceResult with one slot assignment per roster player

        Raises:
            BalanceValidationError: If the roster or team size is invalid
        """
        players = self._coerce_roster(roster)
        self.validate(players, team_size)

        resolved_template, template_source = self.template_service.resolve(team_size, template)
        weight_table = self.build_weight_table(weights)

        optimizer = StochasticOptimizer(
            rng=random.Random(seed),
            reshuffle_interval=self.reshuffle_interval,
            timeout_seconds=timeout_seconds if timeout_seconds is not None else self.timeout_seconds
        )
        outcome = optimizer.optimize(
            players,
            team_size,
            resolved_template,
            weight_table,
            max_attempts=max_attempts if max_attempts is not None else self.max_attempts,
            early_exit_threshold=(
                early_exit_threshold if early_exit_threshold is not None else self.early_exit_threshold
            )
        )

        diagnostics = BalanceDiagnostics(
            pool_size=len(players),
            expected_pool_size=2 * team_size,
            template=resolved_template,
            template_source=template_source,
            quota_shortfall=outcome.quota_shortfall,
            leftover_count=outcome.leftover_count,
            overflow_count=outcome.overflow_count
        )
        if diagnostics.is_degraded:
            logger.warning(
                f"Degraded balance: {len(players)} players for {team_size}v{team_size} "
                f"(mismatch {diagnostics.size_mismatch:+d}, "
                f"{diagnostics.quota_shortfall} empty slots, {diagnostics.overflow_count} overflow)"
            )

        players_by_id = {p.player_id: p for p in players}
        breakdown = self.scorer.breakdown(
            [(players_by_id[a.player_id], a.position) for a in outcome.assignments if a.team is Team.A],
            [(players_by_id[a.player_id], a.position) for a in outcome.assignments if a.team is Team.B],
            weight_table
        )

        return BalanceResult(
            assignments=outcome.assignments,
            balance_score=outcome.score,
            balance_percentage=self.balance_percentage(outcome.score),
            quality=self.quality_label(outcome.score),
            team_size=team_size,
            attempts_used=outcome.attempts_used,
            early_exit=outcome.early_exit,
            timed_out=outcome.timed_out,
            diagnostics=diagnostics,
            breakdown=breakdown
        )

    @staticmethod
    def validate(players: Sequence[Player], team_size: int) -> None:
        """
        Reject inputs the search cannot work with.

        Raises:
            BalanceValidationError: On a pool smaller than two, a
                non-positive team size or duplicate player ids
        """
        if team_size is None or team_size <= 0:
            raise BalanceValidationError(f"Team size must be positive, got {team_size}")
        if len(players) < MIN_POOL_SIZE:
            raise BalanceValidationError(
                f"At least {MIN_POOL_SIZE} players are required in the player pool to balance teams"
            )
        seen = set()
        duplicates = set()
        for player in players:
            if player.player_id in seen:
                duplicates.add(player.player_id)
            seen.add(player.player_id)
        if duplicates:
            raise BalanceValidationError(f"Duplicate player ids in roster: {sorted(duplicates)}")

    @staticmethod
    def build_weight_table(weights: Optional[Iterable[WeightLike]]) -> WeightTable:
        """Build a WeightTable from BalanceWeight objects or plain dicts."""
        entries = []
        for w in weights or []:
            if isinstance(w, BalanceWeight):
                entries.append(w)
                continue
            try:
                entries.append(BalanceWeight(
                    position_group=w['position_group'],
                    attribute=w['attribute'],
                    weight=float(w['weight'])
                ))
            except (KeyError, ValueError) as e:
                raise BalanceValidationError(f"Invalid balance weight {dict(w)}: {e}")
        return WeightTable(entries)

    @staticmethod
    def balance_percentage(score: float) -> int:
        """Display percentage (higher is better), clamped to 0-100."""
        return int(min(100, max(0, round(100 - score * 100))))

    @staticmethod
    def quality_label(score: float) -> str:
        """Map a balance score to a human-readable quality label."""
        for label, upper in BALANCE_QUALITY_THRESHOLDS.items():
            if score <= upper:
                return label
        return 'poor'

    @staticmethod
    def _coerce_roster(roster: Sequence[PlayerLike]) -> List[Player]:
        players = []
        for entry in roster or []:
            if isinstance(entry, Player):
                players.append(entry)
            elif isinstance(entry, Mapping) and 'player_id' in entry:
                players.append(Player.from_dict(entry))
            else:
                raise BalanceValidationError(f"Roster entry has no player_id: {entry!r}")
        return players
