"""
Slot Assigner - Turns a position's selected players into team slots.
"""

from typing import List, Sequence

from models.balance import Player, SlotAssignment
from models.constants import Position, Team


class SlotAssigner:
    """Alternates selected players between the teams."""

    @staticmethod
    def assign(
        selected: Sequence[Player],
        position: Position,
        base_slot_a: int,
        base_slot_b: int
    ) -> List[SlotAssignment]:
        """
        Assign slots for one position.

        Even indices go to Team A and odd indices to Team B, so the best
        player for the position lands on A, the second best on B, and so on.
        The k-th player a team receives here takes ``base_slot + k``.

        Args:
            selected: Players in selection order (best first)
            position: Position these players fill
            base_slot_a: First slot number of this position on Team A
            base_slot_b: First slot number of this position on Team B

        Returns:
            List of SlotAssignment in selection order
        """
        assignments = []
        for index, player in enumerate(selected):
            team = Team.A if index % 2 == 0 else Team.B
            base = base_slot_a if team is Team.A else base_slot_b
            assignments.append(SlotAssignment(
                player_id=player.player_id,
                team=team,
                slot_number=base + index // 2,
                position=position
            ))
        return assignments
