"""
Pytest Configuration and Fixtures

Provides shared fixtures for testing the Flask application using the
application factory pattern with clean, isolated test instances, plus
rosters for exercising the balancing engine directly.
"""

import os
import random

import pytest

# config.py refuses to import without a secret key
os.environ.setdefault('SECRET_KEY', 'test-secret-key-for-pytest')
os.environ['FLASK_ENV'] = 'testing'


@pytest.fixture(scope='session')
def test_config():
    """Test configuration class."""
    from config import TestingConfig
    return TestingConfig


@pytest.fixture
def app(test_config):
    """
    Create and configure a Flask application instance for testing.

    Uses the application factory pattern to create a clean instance
    (with a fresh in-memory database) for each test function.
    """
    from app import create_app
    from extensions import db

    app = create_app(test_config)

    # Push application context
    ctx = app.app_context()
    ctx.push()

    yield app

    # Clean up
    db.session.remove()
    db.drop_all()
    ctx.pop()


@pytest.fixture
def client(app):
    """Flask test client for making HTTP requests."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Flask CLI test runner."""
    return app.test_cli_runner()


def make_player(player_id, rating=3.0, **overrides):
    """Player with every rating set to ``rating`` unless overridden."""
    from models.balance import Player

    ratings = {
        'defending': rating,
        'goalscoring': rating,
        'stamina_pace': rating,
        'control': rating,
        'teamwork': rating,
        'resilience': rating,
    }
    ratings.update(overrides)
    return Player(player_id=player_id, name=f"Player {player_id}", **ratings)


@pytest.fixture
def player_factory():
    """Factory for engine players (see make_player)."""
    return make_player


@pytest.fixture
def identical_roster():
    """Ten players with identical ratings."""
    return [make_player(i) for i in range(1, 11)]


@pytest.fixture
def varied_roster():
    """Ten players with seeded random ratings between 1 and 5."""
    rng = random.Random(1234)
    return [
        make_player(
            i,
            defending=rng.randint(1, 5),
            goalscoring=rng.randint(1, 5),
            stamina_pace=rng.randint(1, 5),
            control=rng.randint(1, 5),
            teamwork=rng.randint(1, 5),
            resilience=rng.randint(1, 5),
        )
        for i in range(1, 11)
    ]


@pytest.fixture
def nine_a_side_roster():
    """
    Seventeen average players plus one standout goalscorer (id 99).

    Eighteen players in all, enough for a 9v9 match.
    """
    roster = [make_player(i) for i in range(1, 18)]
    roster.append(make_player(99, goalscoring=5.0))
    return roster


@pytest.fixture
def nine_a_side_template():
    from models.balance import PositionTemplate
    return PositionTemplate(defenders=3, midfielders=4, attackers=2)


@pytest.fixture
def unit_weights():
    from models.balance import WeightTable
    return WeightTable()
