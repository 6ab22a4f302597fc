"""
Unit Tests for the Balancing Services

Tests template resolution, the rating-based TeamBalanceService boundary,
and the stats, performance and random alternatives.
"""

import pytest
from models.balance import PositionTemplate
from models.constants import Position, Team
from models.errors import BalanceValidationError
from services import (
    PerformanceBalanceService,
    PositionTemplateService,
    RandomBalanceService,
    TeamBalanceService,
    TeamStatsService,
)

TEMPLATES = {
    5: {'defenders': 2, 'midfielders': 2, 'attackers': 1},
    9: {'defenders': 3, 'midfielders': 4, 'attackers': 2},
}


@pytest.fixture
def balance_service():
    return TeamBalanceService(templates=TEMPLATES, max_attempts=200)


class TestPositionTemplateService:
    """Test template resolution and fallback."""

    def test_configured_template(self):
        """Test: A configured team size uses its template."""
        template, source = PositionTemplateService(TEMPLATES).resolve(9)

        assert template == PositionTemplate(3, 4, 2)
        assert source == 'configured'

    def test_missing_template_falls_back(self):
        """Test: An unknown team size uses the fallback heuristic."""
        template, source = PositionTemplateService(TEMPLATES).resolve(7)

        assert template == PositionTemplate.fallback(7)
        assert source == 'fallback'

    def test_mismatched_template_falls_back(self):
        """Test: An explicit template that does not fill the team is ignored."""
        template, source = PositionTemplateService(TEMPLATES).resolve(5, {'defenders': 3, 'midfielders': 3, 'attackers': 1})

        assert template == PositionTemplate.fallback(5)
        assert source == 'fallback'

    def test_explicit_template_wins(self):
        """Test: A valid explicit template overrides the configured one."""
        template, _ = PositionTemplateService(TEMPLATES).resolve(5, PositionTemplate(1, 2, 2))
        assert template == PositionTemplate(1, 2, 2)


class TestTeamBalanceService:
    """Test the rating-based balancing boundary."""

    def test_balance_returns_full_result(self, balance_service, varied_roster):
        """Test: Every player is assigned and the result carries a score and label."""
        result = balance_service.balance(varied_roster, 5, seed=3)

        assert len(result.assignments) == 10
        assert result.balance_score >= 0
        assert 0 <= result.balance_percentage <= 100
        assert result.quality in ('excellent', 'good', 'not great', 'poor')
        assert result.diagnostics.template_source == 'configured'
        assert set(result.breakdown) == {'defense', 'midfield', 'attack', 'resilience', 'teamwork'}
        assert sum(result.breakdown.values()) == pytest.approx(result.balance_score)

    def test_seeded_runs_match(self, balance_service, varied_roster):
        """Test: The same seed reproduces the same split."""
        first = balance_service.balance(varied_roster, 5, seed='match-42')
        second = balance_service.balance(varied_roster, 5, seed='match-42')

        assert first.assignments == second.assignments

    def test_accepts_dict_roster(self, balance_service):
        """Test: Plain dict players are accepted and missing ratings default."""
        roster = [{'player_id': i, 'name': f'P{i}'} for i in range(1, 11)]

        result = balance_service.balance(roster, 5, seed=1)

        assert result.balance_score == 0
        assert result.early_exit is True

    def test_weights_from_dicts(self, balance_service, varied_roster):
        """Test: Weight dicts are turned into a weight table."""
        weights = [{'position_group': 'attack', 'attribute': 'goalscoring', 'weight': 2}]

        result = balance_service.balance(varied_roster, 5, weights=weights, seed=1)

        assert len(result.assignments) == 10

    def test_invalid_weight_rejected(self, balance_service, varied_roster):
        """Test: A weight for an unknown attribute is a validation error."""
        with pytest.raises(BalanceValidationError):
            balance_service.balance(varied_roster, 5, weights=[{'position_group': 'attack', 'attribute': 'heading', 'weight': 1}])

    def test_single_player_rejected(self, balance_service, player_factory):
        """Test: One player cannot be balanced."""
        with pytest.raises(BalanceValidationError):
            balance_service.balance([player_factory(1)], 5)

    def test_duplicate_ids_rejected(self, balance_service, player_factory):
        """Test: The same player id twice is rejected."""
        with pytest.raises(BalanceValidationError):
            balance_service.balance([player_factory(1), player_factory(1)], 5)

    def test_roster_entry_without_id_rejected(self, balance_service):
        """Test: Entries without a player_id are rejected."""
        with pytest.raises(BalanceValidationError):
            balance_service.balance([{'name': 'No Id'}, {'player_id': 2}], 5)

    def test_excess_player_flagged_degraded(self, balance_service, nine_a_side_roster, player_factory):
        """Test: 19 players for 9v9 succeeds with degraded diagnostics."""
        result = balance_service.balance(nine_a_side_roster + [player_factory(100)], 9, max_attempts=20, seed=2)

        assert len(result.assignments) == 19
        assert result.diagnostics.is_degraded is True
        assert result.diagnostics.size_mismatch == 1
        assert result.diagnostics.overflow_count == 1

    def test_from_config(self):
        """Test: Service settings are read from a config mapping."""
        service = TeamBalanceService.from_config({
            'TEAM_TEMPLATES': TEMPLATES,
            'BALANCE_MAX_ATTEMPTS': 123,
            'BALANCE_EARLY_EXIT_THRESHOLD': 0.01,
            'BALANCE_RESHUFFLE_INTERVAL': 10,
            'BALANCE_TIMEOUT_SECONDS': 2.5,
        })

        assert service.max_attempts == 123
        assert service.early_exit_threshold == 0.01
        assert service.reshuffle_interval == 10
        assert service.timeout_seconds == 2.5
        assert 9 in service.template_service.templates

    @pytest.mark.parametrize('score,label', [
        (0.0, 'excellent'),
        (0.2, 'excellent'),
        (0.25, 'good'),
        (0.35, 'not great'),
        (0.8, 'poor'),
    ])
    def test_quality_label(self, score, label):
        """Test: Scores map onto quality bands."""
        assert TeamBalanceService.quality_label(score) == label

    def test_balance_percentage_clamped(self):
        """Test: Percentage is 100 minus score x 100, clamped to 0-100."""
        assert TeamBalanceService.balance_percentage(0) == 100
        assert TeamBalanceService.balance_percentage(0.25) == 75
        assert TeamBalanceService.balance_percentage(3.0) == 0


class TestTeamStatsService:
    """Test side-by-side team statistics."""

    def test_comparative_stats(self, player_factory):
        """Test: Diffs and score come from plain attribute averages."""
        team_a = [player_factory(1, rating=4), player_factory(2, rating=4)]
        team_b = [player_factory(3, rating=3), player_factory(4, rating=3)]

        stats = TeamStatsService.calculate_comparative_stats(team_a, team_b)

        assert stats['team_a']['control'] == 4
        assert stats['diffs']['control'] == 1
        assert stats['balance_score'] == pytest.approx(1.0)
        assert stats['balance_percentage'] == 0
        assert stats['team_a']['player_count'] == 2

    def test_empty_team_returns_none(self, player_factory):
        """Test: An empty side has no stats."""
        assert TeamStatsService.calculate_comparative_stats([], [player_factory(1)]) is None

    def test_compare_assignments(self, varied_roster):
        """Test: Slot assignment dicts are grouped by team."""
        assignments = [{'player_id': p.player_id, 'team': 'A' if p.player_id <= 5 else 'B'} for p in varied_roster]

        stats = TeamStatsService.compare_assignments(varied_roster, assignments)

        assert stats['team_a']['player_count'] == 5
        assert stats['team_b']['player_count'] == 5


class TestPerformanceBalanceService:
    """Test balancing by past-performance rating."""

    def test_alternates_by_rating(self):
        """Test: Highest rated goes to A, next to B, and so on."""
        assignments = PerformanceBalanceService.balance([(1, 9.0), (2, 8.0), (3, 7.0), (4, 6.0)], 2)

        placed = {a.player_id: (a.team, a.slot_number) for a in assignments}
        assert placed == {1: (Team.A, 1), 2: (Team.B, 3), 3: (Team.A, 2), 4: (Team.B, 4)}
        assert all(a.position is Position.FLEX for a in assignments)

    def test_too_few_players(self):
        """Test: Fewer than two full teams is rejected."""
        with pytest.raises(BalanceValidationError):
            PerformanceBalanceService.balance([(1, 9.0), (2, 8.0), (3, 7.0)], 2)

    def test_extra_players_get_unique_slots(self):
        """Test: Players beyond two full teams get slots past both ranges."""
        assignments = PerformanceBalanceService.balance([(i, 10.0 - i) for i in range(1, 6)], 2)

        slots = [a.slot_number for a in assignments]
        assert len(set(slots)) == 5
        assert max(slots) == 5


class TestRandomBalanceService:
    """Test random team splits."""

    def test_same_seed_same_split(self):
        """Test: A seed makes the split reproducible."""
        service = RandomBalanceService()
        ids = list(range(1, 11))

        assert service.balance(ids, 5, seed=99) == service.balance(ids, 5, seed=99)

    def test_default_sizes(self):
        """Test: An odd pool gives Team A the extra player."""
        assignments = RandomBalanceService().balance(list(range(1, 10)), 5, seed=1)

        team_a = [a for a in assignments if a.team is Team.A]
        team_b = [a for a in assignments if a.team is Team.B]
        assert len(team_a) == 5
        assert len(team_b) == 4
        assert [a.slot_number for a in team_b] == [6, 7, 8, 9]

    def test_sizes_must_match_pool(self):
        """Test: Explicit sizes must add up to the pool."""
        with pytest.raises(BalanceValidationError):
            RandomBalanceService().balance(list(range(1, 11)), 5, size_a=5, size_b=4)

    def test_team_size_exceeded(self):
        """Test: A side larger than the team size is rejected."""
        with pytest.raises(BalanceValidationError):
            RandomBalanceService().balance(list(range(1, 13)), 5)

    def test_pool_limits(self):
        """Test: Pools outside the configured range are rejected."""
        with pytest.raises(BalanceValidationError):
            RandomBalanceService(min_players=4).balance([1, 2, 3], 5)

    def test_shuffle_keeps_every_id(self):
        """Test: Shuffling is a permutation."""
        shuffled = RandomBalanceService.shuffle(list(range(20)), seed=5)
        assert sorted(shuffled) == list(range(20))
