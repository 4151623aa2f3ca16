"""
Design Request Tracker - Application Factory
"""
import logging
import os

import click
from flask import Flask, current_app, jsonify, request
from flask_babel import gettext as _
from dotenv import load_dotenv
from werkzeug.exceptions import RequestEntityTooLarge

from design_tracker.extensions import db, babel
from design_tracker.routes import register_blueprints
from design_tracker.services.errors import TrackerError
from config.settings import config


def get_locale():
    """Determine the best locale for the user."""
    lang = request.cookies.get('babel_translation')
    if lang in current_app.config['LANGUAGES']:
        return lang
    return request.accept_languages.best_match(current_app.config['LANGUAGES'])


def create_app(config_name=None):
    """Application Factory."""
    load_dotenv()

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    babel.init_app(app, locale_selector=get_locale)

    # Register blueprints
    register_blueprints(app)

    register_error_handlers(app)

    # CLI Commands
    register_cli_commands(app)

    return app


def configure_logging(app):
    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logging.getLogger('design_tracker').setLevel(app.config['LOG_LEVEL'])


def register_error_handlers(app):
    """Render tracker errors as JSON with a matching status code."""

    @app.errorhandler(TrackerError)
    def handle_tracker_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        return jsonify(error='payload_too_large', message=_('File too large (max 15MB).')), 413


def register_cli_commands(app):
    """Register CLI commands."""

    @app.cli.command("init-db")
    def init_db_command():
        """Creates database tables and the seed admin account."""
        from design_tracker.services.store import init_schema
        init_schema()
        print("Initialized the database.")

    @app.cli.command("create-user")
    @click.argument("username")
    @click.argument("password")
    @click.option("--role", default="User", type=click.Choice(['Admin', 'Designer', 'User']))
    @click.option("--name", default=None, help="Display name, defaults to the username.")
    def create_user_command(username, password, role, name):
        """Creates a user account."""
        from design_tracker.services.store import create_user
        create_user(username, password, role, name or username)
        print(f"Created {role} {username}.")
