"""Flask application entry point."""
from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
import os

from neon_grid.config import config
from neon_grid.controller import GameController
from neon_grid.models import db
from neon_grid.game_data_loader import get_game_data_loader

def create_app(config_name=None):
    """Create and configure Flask application."""
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')
    app.config.from_object(config[config_name])

    # Initialize extensions
    db.init_app(app)
    CORS(app)
    Migrate(app, db)

    # Validate the building catalog
    data_loader = get_game_data_loader()
    errors = data_loader.validate_data()
    if errors:
        app.logger.warning(f"Game data validation warnings: {errors}")

    # The controller is started by the caller once the tables exist
    app.extensions['neon_grid'] = GameController(app)

    # Register blueprints
    from neon_grid.api import game_bp
    app.register_blueprint(game_bp, url_prefix='/api/game')

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return {'error': 'Internal server error'}, 500

    return app
