from flask import Flask, jsonify
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from .extensions import db, login_manager, rq

migrate = Migrate()


def create_app(config_object="config.Config"):
    """Application factory. Tests pass ``config.TestingConfig``."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db, directory="alembic")
    login_manager.init_app(app)
    rq.init_app(app)

    from . import models  # noqa: F401  register tables on the metadata

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(models.User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"errors": [{"field": "Main", "message": "Login required"}], "warnings": []}), 401

    @app.errorhandler(HTTPException)
    def http_error(exc):
        return jsonify({"errors": [{"field": "Main", "message": exc.description}], "warnings": []}), exc.code

    from .blueprints.auth import bp as auth_bp
    from .blueprints.candidates import bp as candidates_bp
    from .blueprints.drives import bp as drives_bp
    from .blueprints.users import bp as users_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(candidates_bp, url_prefix="/candidates")
    app.register_blueprint(drives_bp, url_prefix="/drives")
    app.register_blueprint(users_bp, url_prefix="/users")

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    return app
