"""Routes package - Blueprint registration."""
from design_tracker.routes.main import main_bp
from design_tracker.routes.auth import auth_bp
from design_tracker.routes.requests import requests_bp
from design_tracker.routes.admin import admin_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(requests_bp)
    app.register_blueprint(admin_bp)
