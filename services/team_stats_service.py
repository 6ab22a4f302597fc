"""
Team Stats Service - Side-by-side statistics for an existing split

Used to show how two already-picked teams compare attribute by attribute,
for example after an admin has moved players between slots by hand.
"""

from typing import Dict, Iterable, Mapping, Optional, Sequence

from models.balance import Player
from models.constants import ATTRIBUTES


class TeamStatsService:
    """Service for comparing two teams' average ratings."""

    @staticmethod
    def calculate_team_stats(team: Sequence[Player]) -> Optional[Dict]:
        """
        Average every rating over the team.

        Returns:
            Dict of attribute averages plus ``player_count``, or None for an
            empty team
        """
        if not team:
            return None
        stats = {
            attr: sum(p.attr(attr) for p in team) / len(team)
            for attr in ATTRIBUTES
        }
        stats['player_count'] = len(team)
        return stats

    @classmethod
    def calculate_comparative_stats(cls, team_a: Sequence[Player], team_b: Sequence[Player]) -> Optional[Dict]:
        """
        Compare two teams.

        The balance score here is the plain average of the six attribute
        differences, not the position-aware engine score.

        Returns:
            Dict with per-team stats, per-attribute ``diffs``,
            ``balance_score`` and ``balance_percentage``; None if either team
            is empty
        """
        stats_a = cls.calculate_team_stats(team_a)
        stats_b = cls.calculate_team_stats(team_b)
        if not stats_a or not stats_b:
            return None

        diffs = {attr: abs(stats_a[attr] - stats_b[attr]) for attr in ATTRIBUTES}
        balance_score = sum(diffs.values()) / len(ATTRIBUTES)
        balance_percentage = int(min(100, max(0, round(100 - balance_score * 100))))

        return {
            'team_a': stats_a,
            'team_b': stats_b,
            'diffs': diffs,
            'balance_score': balance_score,
            'balance_percentage': balance_percentage,
        }

    @classmethod
    def compare_assignments(cls, players: Iterable[Player], assignments: Iterable[Mapping]) -> Optional[Dict]:
        """
        Compare teams described by slot assignment dicts.

        Args:
            players: Every player referenced by the assignments
            assignments: Dicts with ``player_id`` and ``team`` ('A' or 'B')
        """
        by_id = {p.player_id: p for p in players}
        team_a, team_b = [], []
        for slot in assignments:
            player = by_id.get(slot['player_id'])
            if player is None:
                continue
            if str(slot['team']).upper() == 'A':
                team_a.append(player)
            else:
                team_b.append(player)
        return cls.calculate_comparative_stats(team_a, team_b)
