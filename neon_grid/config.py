"""Configuration settings for the Flask application."""
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        os.environ.get('SQLALCHEMY_DATABASE_URI') or \
        'sqlite:///neon_grid.db'  # Use SQLite for development

    # Game loop timing (milliseconds)
    TICK_RATE_MS = 1000  # 1 second ticks
    AUTO_SAVE_INTERVAL_MS = 30000  # 30 seconds
    GAME_LOOP_ENABLED = True

    # Gaps at or below this many seconds restore the save without offline gains
    OFFLINE_GRACE_SECONDS = 5

    # Log terminal keeps only the newest entries
    LOG_LIMIT = 50

    # Single key the snapshot is stored under
    SAVE_KEY = os.environ.get('SAVE_KEY') or 'neon_grid_save_v1'

    # Safety-net income granted by the manual gather action
    MANUAL_CLICK_REWARD = {
        'ENERGY': 10,
        'DATA': 1,
        'MATS': 0,
        'CREDITS': 0,
    }

    # Flavor text generation (Gemini REST API)
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY') or os.environ.get('API_KEY') or ''
    GEMINI_MODEL = os.environ.get('GEMINI_MODEL') or 'gemini-2.5-flash'
    GEMINI_BASE_URL = 'https://generativelanguage.googleapis.com/v1beta'
    AI_TIMEOUT_SECONDS = 10

class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True

class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False

class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    GAME_LOOP_ENABLED = False
    GEMINI_API_KEY = ''

config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
