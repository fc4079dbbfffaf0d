from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import logging
from logging.handlers import RotatingFileHandler
import os

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per day", "200 per hour"]
)


def create_app(config_name='development'):
    """Application factory function"""
    app = Flask(__name__)

    # Load configuration
    from config import config
    app.config.from_object(config[config_name])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # Configure logging
    configure_logging(app)

    # Make sure the file store exists
    os.makedirs(app.config['STORAGE_PATH'], exist_ok=True)

    # Register template context processors
    register_template_context_processors(app)

    # Register template filters
    register_template_filters(app)

    # Register middleware
    register_middleware(app)

    # Register blueprints/routes
    register_routes(app)

    return app


def configure_logging(app):
    """Configure logging for the application"""
    logs_dir = os.path.join(app.instance_path, 'logs')
    os.makedirs(logs_dir, exist_ok=True)

    # Always log to file (even in debug mode)
    app_log_path = os.path.join(logs_dir, 'app.log')
    file_handler = RotatingFileHandler(app_log_path, maxBytes=10240, backupCount=10)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)

    if app.debug:
        app.logger.setLevel(logging.DEBUG)
    else:
        app.logger.setLevel(logging.INFO)

    app.logger.info('Dugout application startup')


def register_template_context_processors(app):
    """Register template context processors"""

    @app.context_processor
    def inject_team_settings():
        """Make team-wide settings available to all templates"""
        return dict(
            team_name=app.config['TEAM_NAME'],
            jersey_types=app.config['JERSEY_TYPES'],
            jersey_sizes=app.config['JERSEY_SIZES'],
        )


def register_template_filters(app):
    """Register custom template filters"""
    from dugout.utils import format_date, format_phone, get_status_color, format_money, get_jersey_type

    app.add_template_filter(format_date, 'format_date')
    app.add_template_filter(format_phone, 'format_phone')
    app.add_template_filter(get_status_color, 'status_color')
    app.add_template_filter(format_money, 'money')
    app.add_template_filter(get_jersey_type, 'jersey_type')


def register_middleware(app):
    """Register middleware functions"""

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "connect-src 'self';"
        )
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response


def register_routes(app):
    """Register application routes via blueprints"""
    from dugout.main import bp as main_bp
    from dugout.players import bp as players_bp
    from dugout.parks import bp as parks_bp
    from dugout.tournaments import bp as tournaments_bp
    from dugout.public import bp as public_bp
    from dugout.api import bp as api_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(players_bp)
    app.register_blueprint(parks_bp)
    app.register_blueprint(tournaments_bp)
    app.register_blueprint(public_bp)
    app.register_blueprint(api_bp)

    # Register error handlers
    from dugout.errors import register_error_handlers
    register_error_handlers(app)

    # Import models to ensure they're loaded
    from dugout import models
