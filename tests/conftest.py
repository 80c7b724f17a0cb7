"""Shared fixtures for the Neon Grid test suite."""
import pytest

from neon_grid.app import create_app
from neon_grid.game_data_loader import BuildingDefinition
from neon_grid.game_engine import GameEngine
from neon_grid.models import db


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def controller(app):
    return app.extensions['neon_grid']


@pytest.fixture
def client(app, controller):
    controller.start()
    return app.test_client()


@pytest.fixture
def engine():
    return GameEngine()


@pytest.fixture
def solar_only_catalog():
    return {
        'SOLAR_FARM': BuildingDefinition.from_dict('SOLAR_FARM', {
            'name': 'Neon Solar Array',
            'base_cost': [{'resource': 'DATA', 'amount': 10}],
            'base_production': {'ENERGY': 5},
            'base_consumption': {},
            'cost_multiplier': 1.5,
        }),
    }
