"""
Position Selector - Picks the best-suited players for a position

Sorts the pool by the position's primary rating, breaking near-ties with
the secondary and tertiary ratings, and takes the top N for both teams.
"""

from functools import cmp_to_key
from typing import List, Sequence, Tuple

from models.balance import Player
from models.constants import POSITION_SORT_KEYS, Position, TIE_EPSILON


class PositionSelector:
    """Selects players for a position pass without mutating the pool."""

    def __init__(self, epsilon: float = TIE_EPSILON):
        self.epsilon = epsilon

    def select(
        self,
        pool: Sequence[Player],
        quota: int,
        primary: str,
        secondary: str,
        tertiary: str
    ) -> Tuple[List[Player], List[Player]]:
        """
        Select the top ``quota`` players by the given ratings.

        Args:
            pool: Players still available for selection
            quota: Number of players wanted across both teams
            primary: Rating that decides the order
            secondary: Rating used when primary values are within epsilon
            tertiary: Rating used when secondary values are within epsilon

        Returns:
            Tuple of (selected, remaining)
            - selected: up to ``quota`` players, best first
            - remaining: the rest of the pool in its original order
        """
        if quota <= 0 or not pool:
            return [], list(pool)

        keys = (primary, secondary, tertiary)

        def compare(a: Player, b: Player) -> int:
            for key in keys:
                diff = b.attr(key) - a.attr(key)
                if abs(diff) >= self.epsilon:
                    return 1 if diff > 0 else -1
            # Still tied: keep the raw primary order
            diff = b.attr(primary) - a.attr(primary)
            if diff > 0:
                return 1
            if diff < 0:
                return -1
            return 0

        ranked = sorted(pool, key=cmp_to_key(compare))
        selected = ranked[:quota]
        chosen = {id(p) for p in selected}
        remaining = [p for p in pool if id(p) not in chosen]
        return selected, remaining

    def select_for(self, pool: Sequence[Player], position: Position, quota: int) -> Tuple[List[Player], List[Player]]:
        """Select using the configured sort keys for ``position``."""
        primary, secondary, tertiary = POSITION_SORT_KEYS[position]
        return self.select(pool, quota, primary, secondary, tertiary)
