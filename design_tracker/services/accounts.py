"""Login and admin-only account management."""
import logging

from design_tracker.models.user import ROLE_ADMIN, VALID_ROLES
from design_tracker.services import store
from design_tracker.services.errors import Forbidden, NotFound, ValidationError
from design_tracker.services.lifecycle import Actor, clean_text

logger = logging.getLogger(__name__)


def authenticate(username, password):
    """Return an Actor for valid credentials, else None."""
    if not username or not password:
        return None
    user = store.find_user(username, password)
    if user is None:
        logger.info("Failed login for %s", username)
        return None
    return Actor.from_user(user)


def _require_admin(actor):
    if actor.role != ROLE_ADMIN:
        raise Forbidden('Only admins can manage users.')


def list_users(actor):
    _require_admin(actor)
    return store.list_users()


def create_user(actor, username, password, role, name):
    _require_admin(actor)

    username = clean_text(username, 'username')
    name = clean_text(name, 'name')
    if password is not None and not isinstance(password, str):
        raise ValidationError('Password must be text.')
    if not username or not password or not name:
        raise ValidationError('Please fill all fields.')
    if role not in VALID_ROLES:
        raise ValidationError(f'Unknown role: {role}.')

    user = store.create_user(username, password, role, name)
    logger.info("User %s (%s) created by %s", username, role, actor.username)
    return user


def delete_user(actor, username):
    _require_admin(actor)
    if username == actor.username:
        raise Forbidden('You cannot delete your own account.')
    if not store.delete_user(username):
        raise NotFound(f'User {username} not found.')
    logger.info("User %s deleted by %s", username, actor.username)
