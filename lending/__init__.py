from flask import Flask, jsonify
from lending.config import Config
from lending.extensions import db, migrate
from lending.errors import LendingError

from lending.controllers.catalog_controller import catalog_bp
from lending.controllers.fine_controller import fine_bp
from lending.controllers.loan_controller import loan_bp
from lending.controllers.member_controller import member_bp
from lending.db_objects_mssql import ensure_db_objects_mssql
from lending.cli import init_db_command, seed_demo_command

# register every table on db.metadata
from lending.models import item_type, item, copy, member, loan, reservation, fine, transaction  # noqa: F401


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # 1) db init first (db.engine / db.session need it)
    db.init_app(app)

    # 2) SQL Server-only objects (filtered indexes); no-op on other engines
    ensure_db_objects_mssql(app)

    # 3) other extensions
    migrate.init_app(app, db)

    # 4) API blueprints
    app.register_blueprint(catalog_bp, url_prefix="/catalog")
    app.register_blueprint(member_bp, url_prefix="/members")
    app.register_blueprint(loan_bp, url_prefix="/loans")
    app.register_blueprint(fine_bp, url_prefix="/fines")

    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_demo_command)

    @app.errorhandler(LendingError)
    def handle_lending_error(e: LendingError):
        return jsonify({"success": False, "error": type(e).__name__, "message": e.message}), e.status_code

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    return app
