"""
Balance Scorer - Measures how evenly two teams are matched

Compares the teams position group by position group (defense, midfield,
attack) using weighted mean absolute differences of the group averages,
then adds the weighted team-wide resilience and teamwork differences.
A score of 0 is a perfect mirror; lower is better.
"""

from typing import Dict, Iterable, List, Sequence, Tuple

from models.balance import Player, TeamStats, WeightTable
from models.constants import (
    DEFAULT_ATTRIBUTE_VALUE,
    GROUP_ATTRIBUTES,
    POSITION_GROUPS,
    Position,
    PositionGroup,
)

# A team member is a player together with the position they fill
TeamMember = Tuple[Player, Position]

SCORED_GROUPS = (PositionGroup.DEFENSE, PositionGroup.MIDFIELD, PositionGroup.ATTACK)


def _average(players: Sequence[Player], attribute: str) -> float:
    if not players:
        return DEFAULT_ATTRIBUTE_VALUE
    return sum(p.attr(attribute) for p in players) / len(players)


class BalanceScorer:
    """Scores a candidate split of the pool into two teams."""

    @staticmethod
    def calculate_team_stats(team: Iterable[TeamMember]) -> TeamStats:
        """
        Average every rating per position group and across the whole team.

        Groups are formed from the position recorded for each member; flex
        players count only towards the team-wide averages. Empty groups
        average to the neutral default.
        """
        members = list(team)
        by_group: Dict[PositionGroup, List[Player]] = {group: [] for group in SCORED_GROUPS}
        for player, position in members:
            group = POSITION_GROUPS.get(position)
            if group is not None:
                by_group[group].append(player)

        def group_stats(group: PositionGroup) -> Dict[str, float]:
            return {attr: _average(by_group[group], attr) for attr in GROUP_ATTRIBUTES}

        everyone = [player for player, _ in members]
        return TeamStats(
            defense=group_stats(PositionGroup.DEFENSE),
            midfield=group_stats(PositionGroup.MIDFIELD),
            attack=group_stats(PositionGroup.ATTACK),
            resilience=_average(everyone, 'resilience'),
            teamwork=_average(everyone, 'teamwork'),
            player_count=len(everyone)
        )

    @staticmethod
    def group_difference(stats_a: TeamStats, stats_b: TeamStats, group: PositionGroup, weights: WeightTable) -> float:
        """
        Weighted mean absolute difference for one position group.

        Dividing by the weights used keeps groups with many tracked
        attributes from dominating the total.
        """
        group_a = stats_a.group(group)
        group_b = stats_b.group(group)

        total_difference = 0.0
        total_weight = 0.0
        for attribute, value_a in group_a.items():
            weight = weights.weight(group, attribute)
            total_difference += abs(value_a - group_b[attribute]) * weight
            total_weight += weight

        return total_difference / total_weight if total_weight > 0 else 0.0

    def breakdown(
        self,
        team_a: Iterable[TeamMember],
        team_b: Iterable[TeamMember],
        weights: WeightTable
    ) -> Dict[str, float]:
        """Return the five score components keyed by name."""
        stats_a = self.calculate_team_stats(team_a)
        stats_b = self.calculate_team_stats(team_b)

        components = {
            group.value: self.group_difference(stats_a, stats_b, group, weights)
            for group in SCORED_GROUPS
        }
        components['resilience'] = abs(stats_a.resilience - stats_b.resilience) * \
            weights.weight(PositionGroup.TEAM, 'resilience')
        components['teamwork'] = abs(stats_a.teamwork - stats_b.teamwork) * \
            weights.weight(PositionGroup.TEAM, 'teamwork')
        return components

    def score(self, team_a: Iterable[TeamMember], team_b: Iterable[TeamMember], weights: WeightTable) -> float:
        """
        Total imbalance between two teams.

        Returns:
            Plain sum of the defense, midfield, attack, resilience and
            teamwork components (>= 0)
        """
        return sum(self.breakdown(team_a, team_b, weights).values())
