"""API blueprints for Neon Grid."""
from neon_grid.api.game import game_bp

__all__ = ['game_bp']
