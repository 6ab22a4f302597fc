"""
Balance API Routes Blueprint

JSON endpoints for splitting a player pool into two balanced teams,
comparing an existing split and managing team size templates.
"""

from flask import Blueprint, request, jsonify, current_app
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from extensions import csrf, db, limiter
from models.balance import Player
from models.errors import BalanceError
from models.league import TeamSizeTemplate
from schemas.balance import (
    BalanceRequestSchema,
    MatchBalanceRequestSchema,
    RandomBalanceRequestSchema,
    StatsRequestSchema,
    TemplateCreateSchema,
)
from services import RandomBalanceService, TeamBalanceService, TeamStatsService
from services.balance_manager import MatchBalanceManager

balance_bp = Blueprint('balance', __name__, url_prefix='/api/balance')

# JSON API: clients send no form token
csrf.exempt(balance_bp)


def _rate_limit():
    return current_app.config.get('BALANCE_RATE_LIMIT', '30 per minute')


def _error(message, status_code):
    return jsonify({'success': False, 'error': message}), status_code


def _validation_error(e: ValidationError):
    details = [
        {'field': '.'.join(str(part) for part in err['loc']), 'message': err['msg']}
        for err in e.errors()
    ]
    return jsonify({'success': False, 'error': 'Invalid request', 'details': details}), 400


def _json_body():
    return request.get_json(silent=True) or {}


@balance_bp.errorhandler(BalanceError)
def handle_balance_error(e: BalanceError):
    """Map balancing errors to their HTTP status."""
    if e.status_code >= 500:
        current_app.logger.error(f"Balancing failed: {e}", exc_info=True)
    else:
        current_app.logger.warning(f"Balancing request rejected: {e}")
    return _error(str(e), e.status_code)


@balance_bp.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    current_app.logger.warning(f"Invalid balance request: {e.error_count()} error(s)")
    return _validation_error(e)


@balance_bp.route('/teams', methods=['POST'])
@limiter.limit(_rate_limit)
def balance_teams():
    """
    Balance a roster sent in the request body.

    Nothing is persisted; the caller receives the slot assignments, score
    and diagnostics.
    """
    payload = BalanceRequestSchema.model_validate(_json_body())
    service = TeamBalanceService.from_config(current_app.config)

    result = service.balance(
        [Player.from_dict(p.model_dump()) for p in payload.players],
        payload.team_size,
        template=payload.template.model_dump() if payload.template else None,
        weights=[w.model_dump(mode='json') for w in payload.weights],
        max_attempts=payload.max_attempts,
        early_exit_threshold=payload.early_exit_threshold,
        seed=payload.seed
    )
    current_app.logger.info(
        f"Balanced {len(payload.players)} players: score {result.balance_score:.4f} ({result.quality})"
    )
    return jsonify({'success': True, **result.to_dict()})


@balance_bp.route('/random', methods=['POST'])
@limiter.limit(_rate_limit)
def balance_random():
    """Split a list of player ids at random."""
    payload = RandomBalanceRequestSchema.model_validate(_json_body())
    service = RandomBalanceService(
        min_players=current_app.config.get('MIN_POOL_PLAYERS', 2),
        max_players=current_app.config.get('MAX_POOL_PLAYERS', 40)
    )
    assignments = service.balance(
        payload.player_ids,
        payload.team_size,
        size_a=payload.size_a,
        size_b=payload.size_b,
        seed=payload.seed
    )
    return jsonify({'success': True, 'slot_assignments': [a.to_dict() for a in assignments]})


@balance_bp.route('/stats', methods=['POST'])
def team_stats():
    """Compare two already-picked teams attribute by attribute."""
    payload = StatsRequestSchema.model_validate(_json_body())
    stats = TeamStatsService.calculate_comparative_stats(
        [Player.from_dict(p.model_dump()) for p in payload.team_a],
        [Player.from_dict(p.model_dump()) for p in payload.team_b]
    )
    return jsonify({'success': True, **stats})


@balance_bp.route('/matches/<int:match_id>', methods=['POST'])
@limiter.limit(_rate_limit)
def balance_match(match_id):
    """Balance a stored match and replace its slot assignments."""
    payload = MatchBalanceRequestSchema.model_validate(_json_body())
    manager = MatchBalanceManager(
        balance_service=TeamBalanceService.from_config(current_app.config),
        random_service=RandomBalanceService(
            min_players=current_app.config.get('MIN_POOL_PLAYERS', 2),
            max_players=current_app.config.get('MAX_POOL_PLAYERS', 40)
        )
    )
    result = manager.balance_match(
        match_id,
        mode=payload.mode.value,
        seed=payload.seed,
        state_version=payload.state_version
    )
    return jsonify({'success': True, **result})


@balance_bp.route('/templates/<int:team_size>', methods=['GET'])
def get_template(team_size):
    """Template the engine would use for ``team_size``."""
    if team_size <= 0:
        return _error(f"Team size must be positive, got {team_size}", 400)

    stored = MatchBalanceManager().get_template(team_size)
    service = TeamBalanceService.from_config(current_app.config)
    template, source = service.template_service.resolve(team_size, stored)
    return jsonify({
        'success': True,
        'team_size': team_size,
        'source': 'database' if stored is not None and source == 'configured' else source,
        **template.to_dict(),
    })


@balance_bp.route('/templates', methods=['POST'])
def save_template():
    """Create or update the default template for a team size."""
    payload = TemplateCreateSchema.model_validate(_json_body())

    try:
        row = TeamSizeTemplate.query.filter_by(team_size=payload.team_size, is_default=True).first()
        created = row is None
        if created:
            row = TeamSizeTemplate(team_size=payload.team_size)
            db.session.add(row)

        row.name = payload.name or f"{payload.team_size}v{payload.team_size}"
        row.defenders = payload.defenders
        row.midfielders = payload.midfielders
        row.attackers = payload.attackers
        row.is_default = payload.is_default
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error saving template for team size {payload.team_size}: {e}", exc_info=True)
        return _error('Could not save template', 500)

    current_app.logger.info(
        f"{'Created' if created else 'Updated'} template {row.name}: "
        f"{row.defenders}/{row.midfielders}/{row.attackers}"
    )
    return jsonify({
        'success': True,
        'template_id': row.template_id,
        'team_size': row.team_size,
        'name': row.name,
        **row.to_template().to_dict(),
    }), 201 if created else 200
