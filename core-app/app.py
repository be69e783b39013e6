import click
from flask import Flask, jsonify, Blueprint, current_app
from flask.cli import with_appcontext
from werkzeug.middleware.proxy_fix import ProxyFix
from config import get_config
from extensions import db, migrate, csrf
from utils.error_handlers import register_error_handlers
from utils.logging_config import configure_logging

# Import models to ensure they are registered with SQLAlchemy
from models.inventory import Asset, Staff, Assignment, Repair
from models.accessories import Accessory, AccessoryLog
from models.cctv import CCTVCamera, CCTVRepair, Premise, Floor


def create_app(config_name=None):
    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # Load config
    config = get_config(config_name)
    app.config.from_object(config)
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    # Register Blueprints
    from modules.dashboard import dashboard_bp
    from modules.assets import assets_bp
    from modules.staff import staff_bp
    from modules.repairs import repairs_bp
    from modules.accessories import accessories_bp
    from modules.cctv import cctv_bp
    for bp in (dashboard_bp, assets_bp, staff_bp, repairs_bp, accessories_bp, cctv_bp):
        # JSON API, no session cookie to protect
        csrf.exempt(bp)
        app.register_blueprint(bp)

    main_bp = Blueprint('main', __name__)

    @main_bp.route('/')
    def index():
        return jsonify({
            'name': current_app.config['APP_NAME'],
            'version': current_app.config['APP_VERSION'],
        })

    app.register_blueprint(main_bp)
    register_error_handlers(app)
    register_commands(app)

    # Health check
    @app.route('/health')
    def health():
        return jsonify({'status': 'healthy'})

    return app


def seed_lookups():
    """Insert the default premise and floors when absent. Returns what was added."""
    added = []
    premise = current_app.config.get('DEFAULT_PREMISE', 'Main Premise')
    if Premise.query.filter_by(name=premise).first() is None:
        db.session.add(Premise(name=premise, sort_order=0))
        added.append(premise)
    for order, name in enumerate(current_app.config.get('DEFAULT_FLOORS', [])):
        if Floor.query.filter_by(name=name).first() is None:
            db.session.add(Floor(name=name, sort_order=order))
            added.append(name)
    db.session.commit()
    return added


def register_commands(app):

    @app.cli.command("init-db")
    @with_appcontext
    def init_db_command():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("seed-lookups")
    @with_appcontext
    def seed_lookups_command():
        """Insert a default premise and floors."""
        added = seed_lookups()
        if added:
            click.echo(f"Added: {', '.join(added)}")
        else:
            click.echo("Lookups already present.")
