"""
Matchday Balancer - Splits a club's player pool into two even teams
"""
from flask import Flask, jsonify, request
import click
import os
from config import get_config
from extensions import csrf, db, limiter
from models.constants import ATTRIBUTES, DEFAULT_TEAM_TEMPLATES, PositionGroup
from utils.logger import setup_logger


def set_security_headers(response):
    """Apply security headers to all responses."""
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-Frame-Options'] = 'SAMEORIGIN'
    response.headers['X-XSS-Protection'] = '1; mode=block'

    if request.is_secure:
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

    response.headers['Content-Security-Policy'] = (
        "default-src 'self'; "
        "frame-ancestors 'self'; "
        "base-uri 'self'; "
        "form-action 'self'"
    )

    response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
    response.headers['Permissions-Policy'] = 'geolocation=(), microphone=(), camera=()'

    return response


def seed_balance_config():
    """
    Insert the default team size templates and a unit weight table.

    Existing rows are left untouched. Returns (templates_added, weights_added).
    """
    from models.league import TeamBalanceWeight, TeamSizeTemplate

    templates_added = 0
    for team_size, counts in DEFAULT_TEAM_TEMPLATES.items():
        if TeamSizeTemplate.query.filter_by(team_size=team_size, is_default=True).first():
            continue
        db.session.add(TeamSizeTemplate(
            team_size=team_size,
            name=f"{team_size}v{team_size}",
            is_default=True,
            **counts
        ))
        templates_added += 1

    weights_added = 0
    for group in PositionGroup:
        for attribute in ATTRIBUTES:
            if TeamBalanceWeight.query.filter_by(position_group=group.value, attribute=attribute).first():
                continue
            db.session.add(TeamBalanceWeight(position_group=group.value, attribute=attribute, weight=1.0))
            weights_added += 1

    db.session.commit()
    return templates_added, weights_added


def create_app(config_class=None):
    """
    Application factory.

    Args:
        config_class: Config class to load; defaults to the one selected by
            FLASK_ENV

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    app.config.from_object(config_class or get_config())

    setup_logger(app)
    app.after_request(set_security_headers)

    csrf.init_app(app)
    limiter.init_app(app)
    db.init_app(app)

    from routes import main_bp, balance_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(balance_bp)

    with app.app_context():
        import models.league  # noqa: F401  register tables
        db.create_all()

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'success': False, 'error': 'Not found'}), 404

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({'success': False, 'error': f'Rate limit exceeded: {e.description}'}), 429

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.error(f"Unhandled error on {request.method} {request.path}: {e}", exc_info=True)
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    @app.cli.command('seed-balance-config')
    def seed_balance_config_command():
        """Insert default team size templates and balance weights."""
        templates_added, weights_added = seed_balance_config()
        app.logger.info(f"Seeded {templates_added} templates and {weights_added} weights")
        click.echo(f"Added {templates_added} templates and {weights_added} weights")

    return app


if __name__ == "__main__":
    app = create_app()

    debug_mode = app.config.get('DEBUG', False)
    env_name = os.environ.get('FLASK_ENV', 'development')

    print("=" * 60)
    print("Matchday Balancer Starting")
    print(f"Environment: {env_name}")
    print(f"Debug Mode: {debug_mode}")
    print("=" * 60)

    if debug_mode and env_name == 'production':
        print("\nWARNING: Debug mode enabled in production!")
        print("This is a security risk. Set FLASK_DEBUG=false\n")

    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', 5000))

    app.run(host=host, port=port, debug=debug_mode)
