import os
import secrets
from dotenv import load_dotenv
from typing import Optional

# Find the absolute path of the root directory
basedir = os.path.abspath(os.path.dirname(__file__))

# Load the .env file from the root directory
load_dotenv(os.path.join(basedir, '.env'))


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid"""
    pass


class Config:
    """
    Base configuration class. Contains default configuration settings
    and settings applicable to all environments.
    """
    # Flask settings - generate a random key if none is provided
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)
    FLASK_ENV = os.environ.get('FLASK_ENV')

    # Logging
    APP_NAME = 'demand-signals'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Error tracking (production only)
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    # Calculation defaults
    DEFAULT_PLATFORM_FEE = float(os.environ.get('DEFAULT_PLATFORM_FEE') or 0.05)
    MAX_PRICE_CEILINGS = int(os.environ.get('MAX_PRICE_CEILINGS') or 10000)

    # Application settings
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024  # 2MB max request body
    JSON_SORT_KEYS = False

    @classmethod
    def validate_required_config(cls) -> None:
        """Validate that all required configuration is present"""
        # Skip validation in testing environment
        if os.environ.get('FLASK_ENV') == 'testing' or os.environ.get('SKIP_ENV_VALIDATION'):
            return

        required_vars = ['SECRET_KEY']

        missing_vars = []
        for var in required_vars:
            if not os.environ.get(var):
                missing_vars.append(var)

        if missing_vars:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing_vars)}"
            )

    @classmethod
    def init_app(cls, app):
        """Initialize application with this config"""
        pass


class DevelopmentConfig(Config):
    """Development environment configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    """Testing environment configuration"""
    TESTING = True
    DEBUG = True
    LOG_LEVEL = 'WARNING'

    # Fixed defaults so tests never depend on the local environment
    DEFAULT_PLATFORM_FEE = 0.05
    MAX_PRICE_CEILINGS = 500


class ProductionConfig(Config):
    """Production environment configuration"""
    DEBUG = False
    TESTING = False

    @classmethod
    def init_app(cls, app):
        """Production-specific initialization"""
        Config.init_app(app)

        # Validate all required config
        cls.validate_required_config()

        # Log to syslog in production
        import logging
        from logging.handlers import SysLogHandler
        syslog_handler = SysLogHandler()
        syslog_handler.setLevel(logging.WARNING)
        app.logger.addHandler(syslog_handler)


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config(config_name: Optional[str] = None) -> type[Config]:
    """Get configuration class based on environment"""
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    return config.get(config_name, DevelopmentConfig)
