"""
Bonus Points Plugin
Flask application factory
"""
import os
import logging
from flask import Flask
from flask_cors import CORS

from .extensions import db, migrate
from .config import get_config, validate_config
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config_name: str = None) -> Flask:
    """
    Application factory for creating Flask app instances.

    Args:
        config_name: Configuration environment (development, production, testing)

    Returns:
        Configured Flask application
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    config = get_config(config_name)

    # Setup logging before anything else
    setup_logging(config.LOG_LEVEL)

    validate_config(config_name)

    app = Flask(__name__)
    app.config.from_object(config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Storefront JavaScript may read the catalog from another origin
    CORS(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})

    # Template fragments spliced into host pages
    from .overrides import init_app as init_overrides
    init_overrides(app)

    register_blueprints(app)

    # Register CLI commands
    from .commands import init_app as init_commands
    init_commands(app)

    register_error_handlers(app)

    @app.route('/health')
    def health_check():
        return {'status': 'healthy', 'service': 'bonus_points'}

    logger.info(f'Bonus points app created (config={config_name})')
    return app


def register_blueprints(app: Flask) -> None:
    """Register all blueprints."""
    from .api.bonuses import bonus_pages_bp, bonuses_bp
    from .api.orders import orders_bp
    from .api.products import products_bp
    from .api.account import account_bp

    # Storefront pages
    app.register_blueprint(bonus_pages_bp, url_prefix='/bonuses')

    # JSON API
    app.register_blueprint(bonuses_bp, url_prefix='/api/bonuses')
    app.register_blueprint(orders_bp, url_prefix='/api/orders')
    app.register_blueprint(products_bp, url_prefix='/api/products')
    app.register_blueprint(account_bp, url_prefix='/api/account')


def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from .utils.errors import exception_response
    from .utils.exceptions import BonusPointsError

    @app.errorhandler(BonusPointsError)
    def domain_error(error):
        return exception_response(error)

    @app.errorhandler(400)
    def bad_request(error):
        return {'error': {'message': str(error), 'code': 'INVALID_REQUEST'}}, 400

    @app.errorhandler(404)
    def not_found(error):
        return {'error': {'message': str(error), 'code': 'NOT_FOUND'}}, 404

    @app.errorhandler(500)
    def internal_error(error):
        return {'error': {'message': str(error), 'code': 'INTERNAL_ERROR'}}, 500
