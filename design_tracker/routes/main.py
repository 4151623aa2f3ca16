"""Main routes - Index, language switching."""
from flask import Blueprint, current_app, jsonify, make_response, redirect, request

from design_tracker.routes.auth import current_actor
from design_tracker.services import store, views

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    actor = current_actor()
    if actor is None:
        return jsonify(user=None)

    stats = views.status_counts(store.list_requests(), actor)
    return jsonify(user=actor._asdict(), stats=stats)


@main_bp.route('/set_language/<lang>')
def set_language(lang):
    if lang not in current_app.config['LANGUAGES']:
        lang = current_app.config['BABEL_DEFAULT_LOCALE']
    resp = make_response(redirect(request.referrer or '/'))
    resp.set_cookie('babel_translation', lang)
    return resp
