import logging
import os

from flask import Flask
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .extensions import db, jwt, migrate
from .cli import register_cli
from .errors import register_error_handlers
from .routes.auth import bp as auth_bp
from .routes.users import bp as users_bp
from .routes.properties import bp as properties_bp
from .routes.units import bp as units_bp
from .routes.tenants import bp as tenants_bp
from .routes.payments import bp as payments_bp
from .routes.maintenance import bp as maintenance_bp
from .utils.request_logging import init_request_logging
from config import config


def create_app(config_name=None):
    app = Flask(__name__)

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "default")
    config_class = config.get(config_name, config["default"])
    if hasattr(config_class, "validate"):
        config_class.validate()
    app.config.from_object(config_class)

    app.logger.setLevel(getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO))

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(properties_bp)
    app.register_blueprint(units_bp)
    app.register_blueprint(tenants_bp)
    app.register_blueprint(payments_bp)
    app.register_blueprint(maintenance_bp)

    register_error_handlers(app)
    init_request_logging(app)
    register_cli(app)

    @app.get("/health")
    def health():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            app.logger.exception("health check failed")
            return {"ok": False, "error": "db"}, 500
        return {"ok": True}

    return app
