"""
Random Balance Service - Splits the pool by a (seedable) shuffle.
"""

import random
from typing import List, Optional, Sequence, Union

from models.balance import SlotAssignment
from models.constants import Position, Team
from models.errors import BalanceValidationError


class RandomBalanceService:
    """Service for random team splits with reproducible seeds."""

    def __init__(self, min_players: int = 2, max_players: int = 40):
        self.min_players = min_players
        self.max_players = max_players

    @staticmethod
    def shuffle(player_ids: Sequence[int], seed: Optional[Union[int, str]] = None) -> List[int]:
        """Fisher-Yates shuffle; the same seed always gives the same order."""
        rng = random.Random(seed)
        shuffled = list(player_ids)
        for i in range(len(shuffled) - 1, 0, -1):
            j = rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def balance(
        self,
        player_ids: Sequence[int],
        team_size: int,
        size_a: Optional[int] = None,
        size_b: Optional[int] = None,
        seed: Optional[Union[int, str]] = None
    ) -> List[SlotAssignment]:
        """
        Shuffle the pool and cut it into Team A and Team B.

        Args:
            player_ids: Pool of player ids
            team_size: Nominal players per side (sets Team B's slot offset)
            size_a: Players for Team A (defaults to half the pool, rounded up)
            size_b: Players for Team B (defaults to the rest)
            seed: Optional seed for a reproducible split

        Raises:
            BalanceValidationError: On an out-of-range pool or sizes that do
                not add up to the pool
        """
        pool_size = len(player_ids)
        if pool_size < self.min_players or pool_size > self.max_players:
            raise BalanceValidationError(
                f"Invalid player count. Expected {self.min_players}-{self.max_players}, got {pool_size}."
            )
        if len(set(player_ids)) != pool_size:
            raise BalanceValidationError("Duplicate player ids in pool")

        if size_a is None:
            size_a = (pool_size + 1) // 2
        if size_b is None:
            size_b = pool_size - size_a
        if size_a + size_b != pool_size:
            raise BalanceValidationError(
                f"Size mismatch. Expected {size_a}+{size_b}={size_a + size_b}, got {pool_size}."
            )
        if size_a > team_size or size_b > team_size:
            raise BalanceValidationError(f"Team sizes {size_a}/{size_b} exceed {team_size} per side")

        shuffled = self.shuffle(player_ids, seed)

        assignments = [
            SlotAssignment(player_id=pid, team=Team.A, slot_number=index + 1, position=Position.FLEX)
            for index, pid in enumerate(shuffled[:size_a])
        ]
        assignments.extend(
            SlotAssignment(player_id=pid, team=Team.B, slot_number=team_size + index + 1, position=Position.FLEX)
            for index, pid in enumerate(shuffled[size_a:])
        )
        return assignments
