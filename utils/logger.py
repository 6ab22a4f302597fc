"""
Logging Setup

Configures the Flask application logger and the balancing engine's module
loggers with a shared stdout handler and request tracking.
"""

import logging
import sys
from flask import request, has_request_context

# Module loggers created with logging.getLogger(__name__) in the engine
ENGINE_LOGGERS = ('analyzers', 'services')

# One handler per process; create_app may run many times (tests)
_handler = logging.StreamHandler(sys.stdout)
_handler.setFormatter(logging.Formatter(
    '[%(asctime)s] %(levelname)s in %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
))


def _attach(logger, level):
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    logger.setLevel(level)


def setup_logger(app):
    """
    Configure logging for the Flask application.

    Sets up:
    - Timestamped log format
    - Console output to stdout
    - The same handler and level on the engine's module loggers
    - Request and response logging for all HTTP requests

    Args:
        app: Flask application instance
    """
    level = logging.DEBUG if app.debug else logging.INFO

    _attach(app.logger, level)
    app.logger.propagate = False

    for name in ENGINE_LOGGERS:
        _attach(logging.getLogger(name), level)

    @app.before_request
    def log_request_info():
        """Log incoming request details."""
        if has_request_context():
            app.logger.info(
                f"Request: {request.method} {request.path} "
                f"from {request.remote_addr}"
            )

    @app.after_request
    def log_response_info(response):
        """Log response status."""
        if has_request_context():
            app.logger.info(
                f"Response: {response.status_code} for "
                f"{request.method} {request.path}"
            )
        return response

    app.logger.info(f"Logging configured - Level: {logging.getLevelName(level)}")

    return app
