"""
Unit Tests for Balance Validation Schemas

Tests the Pydantic models that guard the balancing API.
"""

import pytest
from pydantic import ValidationError
from schemas import (
    BalanceRequestSchema,
    MatchBalanceRequestSchema,
    PlayerRatingSchema,
    RandomBalanceRequestSchema,
    TemplateCreateSchema,
    WeightSchema,
)


class TestPlayerRatingSchema:
    """Test player rating validation."""

    def test_ratings_optional(self):
        """Test: Only player_id is required."""
        player = PlayerRatingSchema(player_id=3)
        assert player.defending is None

    def test_rating_out_of_range(self):
        """Test: Ratings above 10 are rejected."""
        with pytest.raises(ValidationError):
            PlayerRatingSchema(player_id=3, control=11)

    def test_name_stripped(self):
        """Test: Names are trimmed."""
        assert PlayerRatingSchema(player_id=1, name='  Alex ').name == 'Alex'


class TestWeightSchema:
    """Test balance weight validation."""

    def test_normalizes_case(self):
        """Test: Group and attribute are lower-cased."""
        weight = WeightSchema(position_group='Attack', attribute='Goalscoring', weight=2)

        assert weight.position_group.value == 'attack'
        assert weight.attribute == 'goalscoring'

    def test_unknown_attribute(self):
        """Test: Unknown attributes are rejected."""
        with pytest.raises(ValidationError):
            WeightSchema(position_group='attack', attribute='heading', weight=1)

    def test_weight_must_be_positive(self):
        """Test: Zero weight is rejected."""
        with pytest.raises(ValidationError):
            WeightSchema(position_group='attack', attribute='goalscoring', weight=0)


class TestBalanceRequestSchema:
    """Test the stateless balance request."""

    def test_valid_request(self):
        """Test: A minimal request validates."""
        request = BalanceRequestSchema(players=[{'player_id': 1}, {'player_id': 2}], team_size=1)
        assert request.weights == []
        assert request.template is None

    def test_needs_two_players(self):
        """Test: A single player is rejected."""
        with pytest.raises(ValidationError):
            BalanceRequestSchema(players=[{'player_id': 1}], team_size=1)

    def test_duplicate_players(self):
        """Test: Duplicate ids are rejected."""
        with pytest.raises(ValidationError):
            BalanceRequestSchema(players=[{'player_id': 1}, {'player_id': 1}], team_size=1)

    def test_team_size_positive(self):
        """Test: Team size 0 is rejected."""
        with pytest.raises(ValidationError):
            BalanceRequestSchema(players=[{'player_id': 1}, {'player_id': 2}], team_size=0)


class TestOtherRequests:
    """Test random, match and template schemas."""

    def test_random_request_needs_two_ids(self):
        """Test: Random split needs at least two ids."""
        with pytest.raises(ValidationError):
            RandomBalanceRequestSchema(player_ids=[1], team_size=5)

    def test_match_mode_normalized(self):
        """Test: Mode is case-insensitive and defaults to rating."""
        assert MatchBalanceRequestSchema().mode.value == 'rating'
        assert MatchBalanceRequestSchema(mode=' Random ').mode.value == 'random'

    def test_match_mode_unknown(self):
        """Test: Unknown modes are rejected."""
        with pytest.raises(ValidationError):
            MatchBalanceRequestSchema(mode='alphabetical')

    def test_template_must_sum_to_team_size(self):
        """Test: Position counts must fill the team."""
        with pytest.raises(ValidationError):
            TemplateCreateSchema(team_size=9, defenders=3, midfielders=3, attackers=2)

    def test_template_valid(self):
        """Test: A matching template validates."""
        template = TemplateCreateSchema(team_size=9, defenders=3, midfielders=4, attackers=2)
        assert template.is_default is True
