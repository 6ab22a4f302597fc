"""
Main Routes Blueprint

Handles the service index and health check.
"""

from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from extensions import db

main_bp = Blueprint('main', __name__)


@main_bp.route("/")
def home():
    """Service index listing the balancing endpoints."""
    return jsonify({
        'name': 'Matchday Balancer',
        'endpoints': {
            'balance_teams': '/api/balance/teams',
            'balance_random': '/api/balance/random',
            'team_stats': '/api/balance/stats',
            'balance_match': '/api/balance/matches/<match_id>',
            'templates': '/api/balance/templates',
        },
    })


@main_bp.route("/health")
def health():
    """Liveness check including database connectivity."""
    try:
        db.session.execute(text('SELECT 1'))
        database = 'ok'
    except SQLAlchemyError as e:
        current_app.logger.error(f"Health check database error: {e}")
        database = 'unavailable'

    status_code = 200 if database == 'ok' else 503
    return jsonify({'status': 'ok' if status_code == 200 else 'degraded', 'database': database}), status_code
