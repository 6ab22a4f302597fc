"""
Unit Tests for Balancing Data Models

Tests the Player accessor, PositionTemplate slot layout and fallback,
balance weights and slot assignment helpers.
"""

from dataclasses import FrozenInstanceError

import pytest
from models.balance import (
    BalanceDiagnostics,
    BalanceWeight,
    Player,
    PositionTemplate,
    SlotAssignment,
    WeightTable,
)
from models.constants import Position, PositionGroup, Team


class TestPlayer:
    """Test the single rating accessor."""

    def test_missing_rating_defaults_to_three(self):
        """Test: An unrated attribute reads as 3."""
        assert Player(player_id=1).attr('control') == 3.0

    def test_custom_default(self):
        """Test: Callers can supply their own default."""
        assert Player(player_id=1).attr('control', default=0) == 0

    def test_zero_is_not_missing(self):
        """Test: A rating of 0 is kept, not replaced by the default."""
        assert Player(player_id=1, defending=0).attr('defending') == 0

    def test_unknown_attribute_raises(self):
        """Test: Reading an untracked attribute is an error."""
        with pytest.raises(KeyError):
            Player(player_id=1).attr('heading')

    def test_from_dict_ignores_unknown_keys(self):
        """Test: Extra keys in the source mapping are dropped."""
        player = Player.from_dict({'player_id': 7, 'name': 'Sam', 'goalscoring': 4, 'shirt': 10})

        assert player.player_id == 7
        assert player.attr('goalscoring') == 4
        assert player.ratings()['teamwork'] == 3.0

    def test_players_are_read_only(self):
        """Test: Ratings cannot be changed after construction."""
        player = Player(player_id=1, defending=4)
        with pytest.raises(FrozenInstanceError):
            player.defending = 1


class TestPositionTemplate:
    """Test template sizes, slot offsets and the fallback heuristic."""

    def test_slot_offsets_nine_a_side(self):
        """Test: 3/4/2 lays out defenders, midfielders then attackers per team."""
        template = PositionTemplate(defenders=3, midfielders=4, attackers=2)

        assert template.slot_offset(Position.DEFENDER, Team.A, 9) == 1
        assert template.slot_offset(Position.MIDFIELDER, Team.A, 9) == 4
        assert template.slot_offset(Position.ATTACKER, Team.A, 9) == 8
        assert template.slot_offset(Position.DEFENDER, Team.B, 9) == 10
        assert template.slot_offset(Position.MIDFIELDER, Team.B, 9) == 13
        assert template.slot_offset(Position.ATTACKER, Team.B, 9) == 17

    def test_flex_has_no_slot_range(self):
        """Test: Flex players are placed by the leftover pass, not by offset."""
        with pytest.raises(ValueError):
            PositionTemplate(2, 2, 1).slot_offset(Position.FLEX, Team.A, 5)

    @pytest.mark.parametrize('team_size,expected', [
        (1, (1, 0, 0)),
        (2, (1, 0, 1)),
        (5, (1, 3, 1)),
        (9, (3, 3, 3)),
        (10, (3, 4, 3)),
    ])
    def test_fallback(self, team_size, expected):
        """Test: Fallback gives a third to defence and attack and fills the team."""
        template = PositionTemplate.fallback(team_size)

        assert (template.defenders, template.midfielders, template.attackers) == expected
        assert template.team_size == team_size

    def test_negative_count_rejected(self):
        """Test: Negative position counts are invalid."""
        with pytest.raises(ValueError):
            PositionTemplate(defenders=-1, midfielders=3, attackers=1)


class TestWeights:
    """Test BalanceWeight validation and WeightTable lookups."""

    def test_group_string_coerced(self):
        """Test: Position groups may be given as strings."""
        weight = BalanceWeight('Defense', 'defending', 2.0)
        assert weight.position_group is PositionGroup.DEFENSE

    def test_unknown_attribute_rejected(self):
        """Test: Weights must target a tracked attribute."""
        with pytest.raises(ValueError):
            BalanceWeight(PositionGroup.ATTACK, 'heading', 1.0)

    def test_non_positive_weight_rejected(self):
        """Test: Weights must be positive."""
        with pytest.raises(ValueError):
            BalanceWeight(PositionGroup.ATTACK, 'goalscoring', 0)

    def test_missing_weight_defaults_to_one(self):
        """Test: Unconfigured pairs weigh 1.0."""
        table = WeightTable([BalanceWeight(PositionGroup.ATTACK, 'goalscoring', 2.5)])

        assert table.weight(PositionGroup.ATTACK, 'goalscoring') == 2.5
        assert table.weight(PositionGroup.ATTACK, 'control') == 1.0
        assert table.weight(PositionGroup.DEFENSE, 'goalscoring') == 1.0
        assert len(table) == 1


class TestSlotAssignment:
    """Test mirroring of assignments between teams."""

    def test_mirror_team_a_slot(self):
        """Test: Team A slot 3 mirrors to Team B slot 12 in 9v9."""
        mirrored = SlotAssignment(1, Team.A, 3, Position.DEFENDER).mirrored(9)

        assert mirrored.team is Team.B
        assert mirrored.slot_number == 12
        assert mirrored.position is Position.DEFENDER

    def test_mirror_team_b_slot(self):
        """Test: Team B slot 17 mirrors to Team A slot 8 in 9v9."""
        mirrored = SlotAssignment(1, Team.B, 17, Position.ATTACKER).mirrored(9)
        assert (mirrored.team, mirrored.slot_number) == (Team.A, 8)

    def test_overflow_slot_kept(self):
        """Test: Slots beyond both teams keep their number."""
        mirrored = SlotAssignment(1, Team.A, 19, Position.FLEX).mirrored(9)
        assert mirrored.slot_number == 19

    def test_to_dict(self):
        """Test: Serialised assignment uses plain values."""
        data = SlotAssignment(4, Team.B, 6, Position.FLEX).to_dict()
        assert data == {'player_id': 4, 'team': 'B', 'slot_number': 6, 'position': 'flex'}


class TestDiagnostics:
    """Test degraded-run detection."""

    def test_exact_pool_not_degraded(self):
        """Test: A full pool with no shortfall is a clean run."""
        diagnostics = BalanceDiagnostics(10, 10, PositionTemplate(2, 2, 1), 'configured')
        assert diagnostics.is_degraded is False
        assert diagnostics.size_mismatch == 0

    def test_short_pool_degraded(self):
        """Test: Fewer players than slots is flagged."""
        diagnostics = BalanceDiagnostics(8, 10, PositionTemplate(2, 2, 1), 'configured', quota_shortfall=2)

        assert diagnostics.is_degraded is True
        assert diagnostics.to_dict()['size_mismatch'] == -2
