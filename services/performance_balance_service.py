"""
Performance Balance Service - Splits players by past-performance rating

Alternative to rating-based balancing: players are ranked by their
aggregated power rating and dealt to the teams alternately.
"""

from typing import Iterable, List, Tuple

from models.balance import SlotAssignment
from models.constants import Position, Team
from models.errors import BalanceValidationError


class PerformanceBalanceService:
    """Service for balancing teams from aggregated performance ratings."""

    @staticmethod
    def balance(ratings: Iterable[Tuple[int, float]], team_size: int) -> List[SlotAssignment]:
        """
        Deal players to Team A and Team B in rating order.

        Args:
            ratings: (player_id, rating) pairs
            team_size: Players per side

        Returns:
            Slot assignments; Team A from slot 1, Team B from team_size + 1

        Raises:
            BalanceValidationError: If fewer than 2 * team_size players are rated
        """
        if team_size <= 0:
            raise BalanceValidationError(f"Team size must be positive, got {team_size}")

        rated = list(ratings)
        required = team_size * 2
        if len(rated) < required:
            raise BalanceValidationError(f"Not enough players. Expected {required}, got {len(rated)}.")

        ranked = sorted(rated, key=lambda pair: pair[1], reverse=True)

        assignments = []
        counts = {Team.A: 0, Team.B: 0}
        for index, (player_id, _) in enumerate(ranked):
            team = Team.A if index % 2 == 0 else Team.B
            if index < required:
                base = 1 if team is Team.A else team_size + 1
                slot = base + counts[team]
                counts[team] += 1
            else:
                # Extra players sit beyond both teams' ranges
                slot = index + 1
            assignments.append(SlotAssignment(
                player_id=player_id,
                team=team,
                slot_number=slot,
                position=Position.FLEX
            ))

        return assignments
