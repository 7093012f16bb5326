import os

class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'sacred_geometry_secret_change_in_production'

    # Engine settings
    CANVAS_WIDTH = int(os.environ.get('CANVAS_WIDTH', 1280))
    CANVAS_HEIGHT = int(os.environ.get('CANVAS_HEIGHT', 720))
    TARGET_FPS = int(os.environ.get('TARGET_FPS', 30))
    ANIMATION_DURATION_MS = int(os.environ.get('ANIMATION_DURATION_MS', 500))
    AUTO_REGEN_INTERVAL_MS = int(os.environ.get('AUTO_REGEN_INTERVAL_MS', 2000))
    DEFAULT_SKETCH = os.environ.get('DEFAULT_SKETCH', 'Monochromatic')
    SEED = os.environ.get('SEED')  # int or any string; unset = random
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')

class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    def __init__(self):
        if not os.environ.get('SECRET_KEY'):
            raise ValueError("SECRET_KEY environment variable must be set in production")
        self.SECRET_KEY = os.environ.get('SECRET_KEY')

class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = True
    SEED = 'testing'

config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def parse_seed(value):
    """SEED may be an integer or an arbitrary string"""
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return str(value)
