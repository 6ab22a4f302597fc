"""
Match Balance Manager.

Orchestrates balancing for a stored upcoming match:
1. Load the match and its confirmed player pool
2. Load the team size template and balance weights
3. Run the requested balancing mode (rating, performance or random)
4. Replace the match's slot assignments in a single transaction
5. Mark the match as balanced and bump its state version

Handles transaction management and optimistic concurrency.
"""
from typing import Dict, List, Optional, Union
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models.balance import PositionTemplate, SlotAssignment
from models.errors import BalanceValidationError, ConcurrencyConflict, MatchNotFoundError
from models.league import (
    MatchPoolEntry,
    MatchSlot,
    PlayerPowerRating,
    TeamBalanceWeight,
    TeamSizeTemplate,
    UpcomingMatch,
)
from services.performance_balance_service import PerformanceBalanceService
from services.random_balance_service import RandomBalanceService
from services.team_balance_service import TeamBalanceService

BALANCE_MODES = ('rating', 'performance', 'random')


class MatchBalanceManager:
    """
    Match balancing orchestrator.

    Coordinates the balancing services with the league tables so that
    route handlers only deal with HTTP concerns.
    """

    def __init__(
        self,
        balance_service: Optional[TeamBalanceService] = None,
        random_service: Optional[RandomBalanceService] = None
    ):
        self.balance_service = balance_service or TeamBalanceService()
        self.performance_service = PerformanceBalanceService()
        self.random_service = random_service or RandomBalanceService()

    def balance_match(
        self,
        match_id: int,
        mode: str = 'rating',
        seed: Optional[Union[int, str]] = None,
        state_version: Optional[int] = None
    ) -> Dict:
        """
        Balance a stored match and persist the new slot assignments.

        Args:
            match_id: Upcoming match id
            mode: 'rating', 'performance' or 'random'
            seed: Optional seed for reproducible rating/random balancing
            state_version: Version the caller last saw; the write is refused
                if the match has changed since

        Returns:
            Dict with the persisted slots, score (rating mode only) and the
            match's new state version

        Raises:
            MatchNotFoundError: If the match does not exist
            BalanceValidationError: If the pool or mode is invalid
            ConcurrencyConflict: If ``state_version`` is stale
        """
        if mode not in BALANCE_MODES:
            raise BalanceValidationError(f"Unknown balance mode '{mode}'. Expected one of {', '.join(BALANCE_MODES)}")

        match = db.session.get(UpcomingMatch, match_id)
        if match is None:
            raise MatchNotFoundError(f"Match with ID {match_id} not found.")

        pool = self.get_confirmed_pool(match_id)
        current_app.logger.info(f"Balancing match {match_id} ({mode}) with {len(pool)} players from the pool")

        result = None
        if mode == 'rating':
            result = self.balance_service.balance(
                [entry.player.to_engine_player() for entry in pool],
                match.team_size,
                template=self.get_template(match.team_size),
                weights=self.get_weights(),
                seed=seed
            )
            assignments = result.assignments
            score = result.balance_score
        elif mode == 'performance':
            pool_ids = [entry.player_id for entry in pool]
            ratings = self.get_power_ratings(pool_ids)
            rated_ids = {player_id for player_id, _ in ratings}
            unrated = [player_id for player_id in pool_ids if player_id not in rated_ids]
            if unrated:
                raise BalanceValidationError(
                    f"Players without a power rating: {', '.join(str(p) for p in unrated)}"
                )
            assignments = self.performance_service.balance(ratings, match.team_size)
            score = None
        else:
            assignments = self.random_service.balance(
                [entry.player_id for entry in pool],
                match.team_size,
                seed=seed
            )
            score = None

        new_version = self._persist(match, assignments, mode, score, state_version)
        current_app.logger.info(f"Match {match_id} balanced: {len(assignments)} slots, version {new_version}")

        response = {
            'match_id': match_id,
            'balance_type': mode,
            'state_version': new_version,
            'slots': [a.to_dict() for a in sorted(assignments, key=lambda a: a.slot_number)],
        }
        if result is not None:
            response.update(result.to_dict())
        return response

    def get_confirmed_pool(self, match_id: int) -> List[MatchPoolEntry]:
        """Pool entries whose players answered IN."""
        return (
            db.session.query(MatchPoolEntry)
            .filter_by(upcoming_match_id=match_id, response_status='IN')
            .order_by(MatchPoolEntry.pool_id)
            .all()
        )

    def get_template(self, team_size: int) -> Optional[PositionTemplate]:
        """Default template row for the team size, if one exists."""
        row = (
            db.session.query(TeamSizeTemplate)
            .filter_by(team_size=team_size)
            .order_by(TeamSizeTemplate.is_default.desc(), TeamSizeTemplate.template_id)
            .first()
        )
        return row.to_template() if row else None

    def get_weights(self):
        return [row.to_weight() for row in db.session.query(TeamBalanceWeight).all()]

    def get_power_ratings(self, player_ids: List[int]):
        rows = db.session.query(PlayerPowerRating).filter(PlayerPowerRating.player_id.in_(player_ids)).all()
        return [(row.player_id, row.rating) for row in rows]

    def get_slots(self, match_id: int) -> List[MatchSlot]:
        return (
            db.session.query(MatchSlot)
            .filter_by(upcoming_match_id=match_id)
            .order_by(MatchSlot.slot_number)
            .all()
        )

    def _persist(
        self,
        match: UpcomingMatch,
        assignments: List[SlotAssignment],
        balance_type: str,
        score: Optional[float],
        state_version: Optional[int]
    ) -> int:
        """Replace the match's slots atomically and return the new state version."""
        match_id = match.upcoming_match_id
        try:
            query = db.session.query(UpcomingMatch).filter(UpcomingMatch.upcoming_match_id == match_id)
            if state_version is not None:
                query = query.filter(UpcomingMatch.state_version == state_version)

            updated = query.update(
                {
                    UpcomingMatch.is_balanced: True,
                    UpcomingMatch.balance_type: balance_type,
                    UpcomingMatch.balance_score: score,
                    UpcomingMatch.state_version: UpcomingMatch.state_version + 1,
                },
                synchronize_session=False
            )
            if updated == 0:
                db.session.rollback()
                raise ConcurrencyConflict(
                    f"Match {match_id} was modified by another request (expected version {state_version})"
                )

            db.session.query(MatchSlot).filter(MatchSlot.upcoming_match_id == match_id).delete(
                synchronize_session=False
            )
            db.session.add_all([
                MatchSlot(
                    upcoming_match_id=match_id,
                    player_id=a.player_id,
                    team=a.team.value,
                    slot_number=a.slot_number,
                    position=a.position.value
                )
                for a in assignments
            ])
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Error saving balanced teams for match {match_id}: {e}", exc_info=True)
            raise

        db.session.refresh(match)
        return match.state_version
