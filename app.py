import os
import time
import logging
import click
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from flask import Flask, g, jsonify, request
from config import config
from extensions import db, migrate, login_manager, csrf, limiter
from utils.errors import error_response, register_error_handlers


def configure_logging(app):
    """Configure application logging"""
    if not app.debug and not app.testing:
        log_dir = app.config['LOG_DIR']
        os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'expensetracker.log'),
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s '
            '[in %(pathname)s:%(lineno)d]'
        ))
        level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(level)
        app.logger.info(f"{app.config['APP_NAME']} startup")
    else:
        # Development logging to console
        app.logger.setLevel(logging.DEBUG)
        app.logger.info(f"{app.config['APP_NAME']} startup (DEBUG mode)")


def _ensure_database_dir(app):
    uri = app.config['SQLALCHEMY_DATABASE_URI']
    if uri.startswith('sqlite:///') and ':memory:' not in uri:
        os.makedirs(os.path.dirname(os.path.abspath(uri[len('sqlite:///'):])), exist_ok=True)


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)
    app.config['ENVIRONMENT'] = config_name

    configure_logging(app)
    _ensure_database_dir(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_slow_requests(response):
        started = g.get('request_started')
        if started is not None:
            elapsed = time.perf_counter() - started
            if elapsed > app.config.get('SLOW_REQUEST_SECONDS', 2.0):
                app.logger.warning(
                    f'Slow request: {request.method} {request.path} '
                    f'took {elapsed:.2f}s ({response.status_code})'
                )
        return response

    # Add security headers
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        headers = app.config.get('SECURITY_HEADERS', {})
        for header, value in headers.items():
            response.headers[header] = value
        return response

    # User loader callback for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from models.users import User
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return error_response('Authentication required', 401)

    # Import models to ensure they're registered with SQLAlchemy
    with app.app_context():
        import models

    register_blueprints(app)
    register_core_routes(app)
    register_error_handlers(app)
    register_commands(app)

    # Create database tables and the first-run data
    with app.app_context():
        db.create_all()
        seed_initial_data()

    return app


def register_blueprints(app):
    from blueprints.auth import auth_bp
    from blueprints.expenses import expenses_bp
    from blueprints.categories import categories_bp
    from blueprints.budgets import budgets_bp
    from blueprints.analytics import analytics_bp
    from blueprints.settings import settings_bp
    from blueprints.backup import backup_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(expenses_bp, url_prefix='/api/expenses')
    app.register_blueprint(categories_bp, url_prefix='/api/categories')
    app.register_blueprint(budgets_bp, url_prefix='/api/budgets')
    app.register_blueprint(analytics_bp, url_prefix='/api/analytics')
    app.register_blueprint(settings_bp, url_prefix='/api/settings')
    app.register_blueprint(backup_bp, url_prefix='/api/backup')

    # The desktop shell calls the JSON API directly, without form tokens
    for blueprint in (auth_bp, expenses_bp, categories_bp, budgets_bp,
                      analytics_bp, settings_bp, backup_bp):
        csrf.exempt(blueprint)


def register_core_routes(app):

    @app.route('/health')
    def health():
        """Liveness probe polled by the desktop shell before showing the UI"""
        return jsonify({
            'success': True,
            'message': f"{app.config['APP_NAME']} API is running",
            'version': app.config['APP_VERSION'],
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'environment': app.config['ENVIRONMENT'],
        })

    @app.route('/api')
    def api_index():
        return jsonify({
            'success': True,
            'message': f"{app.config['APP_NAME']} API",
            'version': app.config['APP_VERSION'],
            'endpoints': {
                'health': '/health',
                'auth': '/api/auth',
                'expenses': '/api/expenses',
                'categories': '/api/categories',
                'budgets': '/api/budgets',
                'analytics': '/api/analytics',
                'settings': '/api/settings',
                'backup': '/api/backup',
            },
        })


def seed_initial_data():
    """Default profile and categories; safe to run on every start"""
    from services.auth_service import AuthService
    from services.category_service import CategoryService

    AuthService.ensure_default_user()
    CategoryService.seed_default_categories()


def register_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('seed-categories')
    def seed_categories():
        """Insert any missing default categories."""
        from services.category_service import CategoryService
        created = CategoryService.seed_default_categories()
        click.echo(f'SUCCESS: {created} default categories created.')

    @app.cli.command('create-backup')
    def create_backup():
        """Copy the database file into BACKUP_DIR."""
        from services.backup_service import BackupService
        from utils.errors import APIError
        try:
            backup = BackupService.create_backup()
        except APIError as e:
            click.echo(f'ERROR: {e}', err=True)
            return
        click.echo(f'SUCCESS: {backup["filename"]} ({backup["size"]} bytes, encrypted={backup["encrypted"]})')


if __name__ == '__main__':
    app = create_app()
    # SECURITY: Only bind to localhost; the desktop shell talks to this process locally
    app.run(host='127.0.0.1', port=int(os.environ.get('PORT', 5000)), debug=app.config.get('DEBUG', False))
