"""Authentication routes and the session-backed actor."""
from functools import wraps

from flask import Blueprint, jsonify, request, session
from flask_babel import gettext as _

from design_tracker.services import accounts, store
from design_tracker.services.lifecycle import Actor

auth_bp = Blueprint('auth', __name__)


def current_actor():
    """Build the Actor for the logged-in user from the stored account, or None."""
    if 'username' not in session:
        return None
    user = store.get_user(session['username'])
    if user is None:
        # Account was deleted while the session was still open
        session.clear()
        return None
    return Actor.from_user(user)


# ==================== Decorators ====================

def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_actor() is None:
            return jsonify(error='unauthorized', message=_('Please log in first.')), 401
        return f(*args, **kwargs)
    return decorated_function


# ==================== Routes ====================

@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or request.form
    username = data.get('username')
    username = username.strip() if isinstance(username, str) else ''
    password = data.get('password')
    password = password if isinstance(password, str) else ''

    actor = accounts.authenticate(username, password)
    if actor is None:
        return jsonify(error='unauthorized', message=_('Invalid username or password.')), 401

    session.clear()
    session['username'] = actor.username
    session['user_role'] = actor.role
    session['user_name'] = actor.name
    return jsonify(user=actor._asdict())


@auth_bp.route('/logout', methods=['POST'])
def logout():
    session.clear()
    return jsonify(message=_('Logged out.'))


@auth_bp.route('/me')
@login_required
def me():
    return jsonify(user=current_actor()._asdict())
