"""
QR Mapper Flask application
Badge redirect, staff password gate and the staff scanner API.
"""

import logging
import os
import click
from flask import Flask
from flasgger import Swagger
from qr_mapper.config import load_config
from qr_mapper.extensions import db
from qr_mapper.scanner.registry import SessionRegistry
from qr_mapper.services import linking_service

logger = logging.getLogger(__name__)


def make_linker(app):
    """Bind linking_service.link to the app; sessions outlive the request that opened them."""
    def linker(badge_code, ticket_url):
        with app.app_context():
            linking_service.link(badge_code, ticket_url)
    return linker


def create_app(test_config=None):
    app = Flask(__name__)

    # Configuration
    app.config.update(load_config())
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize Extensions
    if app.config.get('SQLALCHEMY_DATABASE_URI'):
        db.init_app(app)
    else:
        logger.warning("STORE_URL/STORE_KEY not set; store access will fail")

    app.extensions['scan_sessions'] = SessionRegistry(
        make_linker(app),
        ttl=app.config['SCAN_SESSION_TTL'],
        ticket_marker=app.config['TICKET_DOMAIN_MARKER'],
        badge_ack_delay=app.config['BADGE_ACK_DELAY'],
        success_reset_delay=app.config['SUCCESS_RESET_DELAY'],
        **app.config.get('SCAN_SESSION_OPTIONS', {}),
    )

    # Initialize Swagger
    swagger_config = {
        "headers": [],
        "specs": [
            {
                "endpoint": 'apispec_1',
                "route": '/apispec_1.json',
                "rule_filter": lambda rule: True,  # all in
                "model_filter": lambda tag: True,  # all in
            }
        ],
        "static_url_path": "/flasgger_static",
        "swagger_ui": True,
        "specs_route": "/apidocs/"
    }
    Swagger(app, config=swagger_config)

    # Register Blueprints
    from qr_mapper.routes.pages import pages_bp
    app.register_blueprint(pages_bp)

    from qr_mapper.routes.badge import badge_bp
    app.register_blueprint(badge_bp)

    from qr_mapper.routes.staff import staff_bp
    app.register_blueprint(staff_bp, url_prefix='/api')

    from qr_mapper.routes.scanner import scanner_bp
    app.register_blueprint(scanner_bp, url_prefix='/api/scanner')

    @app.route('/health')
    def health():
        """
        Health check endpoint
        ---
        tags:
          - Health
        responses:
          200:
            description: Service is healthy
          503:
            description: Service is unhealthy (store unreachable or not configured)
        """
        try:
            linking_service.require_store()
            db.session.execute(db.text('SELECT 1'))
            return {"service": "qr-mapper", "status": "healthy"}, 200
        except Exception as e:
            return {"service": "qr-mapper", "status": "unhealthy", "error": str(e)}, 503

    @app.cli.command('init-db')
    @click.option('--staff-password', default=None, help='Set the shared staff password.')
    def init_db(staff_password):
        """Create the badge tables and optionally set the staff password."""
        linking_service.require_store()
        db.create_all()
        click.echo("Created badge_mappings and staff_settings")
        if staff_password:
            linking_service.set_staff_password(staff_password)
            click.echo("Staff password updated")

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
