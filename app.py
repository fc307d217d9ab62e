# app.py

from flask import Flask, g, jsonify, request
import uuid
from werkzeug.exceptions import HTTPException
from config import get_config
from logging_config import setup_logging, get_logger
from services.registry import ServiceRegistry

logger = get_logger(__name__)


def init_sentry(app):
    """Initialize Sentry error tracking in production."""
    sentry_dsn = app.config.get('SENTRY_DSN')
    if not sentry_dsn or app.config.get('FLASK_ENV') != 'production':
        return False

    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration

    sentry_sdk.init(
        dsn=sentry_dsn,
        integrations=[
            FlaskIntegration(
                transaction_style='endpoint'
            )
        ],
        traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
        environment=app.config.get('FLASK_ENV', 'development')
    )
    logger.info("Sentry error tracking initialized")
    return True


def create_service_registry(app) -> ServiceRegistry:
    """Register the calculation services, configured from the app config"""
    from services.business_case_service import BusinessCaseService
    from services.cost_estimation_service import CostEstimationService

    registry = ServiceRegistry()
    registry.register_factory(
        'business_case',
        lambda: BusinessCaseService(max_price_ceilings=app.config['MAX_PRICE_CEILINGS'])
    )
    registry.register_factory(
        'cost_estimation',
        lambda: CostEstimationService(default_platform_fee=app.config['DEFAULT_PLATFORM_FEE'])
    )
    return registry


def create_app(config_name=None, test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__)

    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize app with config
    config_class.init_app(app)

    if test_config:
        app.config.update(test_config)

    # Flask only reads key sorting from the JSON provider
    app.json.sort_keys = app.config['JSON_SORT_KEYS']

    setup_logging(app_name=app.config['APP_NAME'], log_level=app.config['LOG_LEVEL'])
    init_sentry(app)

    # Attach registry to app
    app.services = create_service_registry(app)
    logger.debug("Registered services", services=app.services.list_services())

    # Add request tracking middleware
    @app.before_request
    def before_request():
        g.request_id = str(uuid.uuid4())
        logger.info("Request started",
                    request_id=g.request_id,
                    method=request.method,
                    path=request.path)

    @app.after_request
    def after_request(response):
        logger.info("Request completed",
                    request_id=getattr(g, 'request_id', None),
                    status_code=response.status_code)
        return response

    # Global error handlers
    @app.errorhandler(HTTPException)
    def http_error(error):
        logger.warning("HTTP error",
                       request_id=getattr(g, 'request_id', None),
                       status_code=error.code,
                       path=request.path)
        return jsonify({'error': error.description, 'code': error.name.upper().replace(' ', '_')}), error.code

    @app.errorhandler(Exception)
    def unhandled_error(error):
        logger.error("Internal server error",
                     request_id=getattr(g, 'request_id', None),
                     error=str(error),
                     exc_info=True)
        return jsonify({'error': 'Internal server error', 'code': 'INTERNAL_ERROR'}), 500

    @app.route('/health')
    def health_check():
        """Health check endpoint for monitoring"""
        return jsonify({
            'status': 'healthy',
            'service': app.config['APP_NAME'],
            'services': app.services.list_services()
        }), 200

    # Register blueprints for routes
    from routes.business_case_routes import business_case_bp
    from routes.cost_routes import cost_bp

    app.register_blueprint(business_case_bp, url_prefix='/api')
    app.register_blueprint(cost_bp, url_prefix='/api/costs')

    # Register CLI commands
    from scripts import commands
    commands.init_app(app)

    return app
