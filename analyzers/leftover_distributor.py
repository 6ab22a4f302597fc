"""
Leftover Distributor - Places players that no position pass selected.

Template quotas can miss players (odd pools, more players than slots) or
leave slots empty (fewer players than slots). Every leftover player still
gets exactly one slot.
"""

import random
from typing import List, Optional, Sequence

from models.balance import Player, SlotAssignment
from models.constants import Position, Team


class LeftoverDistributor:
    """Shuffles leftover players into the remaining open slots."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def distribute(
        self,
        unassigned: Sequence[Player],
        open_slots_a: Sequence[int],
        open_slots_b: Sequence[int],
        overflow_start: int
    ) -> List[SlotAssignment]:
        """
        Assign leftover players to open slots, alternating teams.

        Args:
            unassigned: Players without a slot after the position passes
            open_slots_a: Free slot numbers on Team A
            open_slots_b: Free slot numbers on Team B
            overflow_start: First slot number used once both teams are full

        Returns:
            One SlotAssignment per leftover player, all with Position.FLEX
        """
        players = list(unassigned)
        # Fisher-Yates
        for i in range(len(players) - 1, 0, -1):
            j = self.rng.randint(0, i)
            players[i], players[j] = players[j], players[i]

        free = {
            Team.A: sorted(open_slots_a),
            Team.B: sorted(open_slots_b),
        }
        next_overflow = overflow_start
        assignments = []

        for index, player in enumerate(players):
            team = Team.A if index % 2 == 0 else Team.B
            if not free[team] and free[team.other]:
                team = team.other

            if free[team]:
                slot = free[team].pop(0)
            else:
                slot = next_overflow
                next_overflow += 1

            assignments.append(SlotAssignment(
                player_id=player.player_id,
                team=team,
                slot_number=slot,
                position=Position.FLEX
            ))

        return assignments
