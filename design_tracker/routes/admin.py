"""Admin routes - user management."""
from flask import Blueprint, jsonify, request
from flask_babel import gettext as _

from design_tracker.models.user import VALID_ROLES
from design_tracker.routes.auth import current_actor, login_required
from design_tracker.services import accounts

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


@admin_bp.route('/users')
@login_required
def users_list():
    """List all users for admin management."""
    users = accounts.list_users(current_actor())
    return jsonify(users=[u.to_dict() for u in users], valid_roles=VALID_ROLES)


@admin_bp.route('/users', methods=['POST'])
@login_required
def create_user():
    """Create a new user from the admin panel."""
    data = request.get_json(silent=True) or request.form
    user = accounts.create_user(
        current_actor(),
        username=data.get('username'),
        password=data.get('password'),
        role=data.get('role', 'User'),
        name=data.get('name'),
    )
    return jsonify(user=user.to_dict(), message=_('User added successfully.')), 201


@admin_bp.route('/users/<username>', methods=['DELETE'])
@login_required
def delete_user(username):
    accounts.delete_user(current_actor(), username)
    return jsonify(message=_('User %(username)s deleted.', username=username))
