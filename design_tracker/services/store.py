"""Persistence gateway - CRUD over the design_requests and users tables.

Every function commits its own change. SQLAlchemy failures are rolled back
and re-raised as StoreError so callers only deal with tracker errors.
"""
import logging
from functools import wraps

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from design_tracker.models import db, DesignRequest, User
from design_tracker.models.design_request import (
    STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_DONE, CONTENT_FIELDS,
)
from design_tracker.models.user import ROLE_ADMIN
from design_tracker.services.errors import StoreError

logger = logging.getLogger(__name__)


def guarded(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception("Store operation %s failed", f.__name__)
            raise StoreError(f"Database error: {getattr(e, 'orig', None) or e}")
    return decorated_function


# ==================== Schema ====================

@guarded
def init_schema():
    """Create missing tables and make sure the seed admin exists."""
    db.create_all()

    username = current_app.config['ADMIN_USERNAME']
    if User.query.filter_by(username=username).first() is None:
        admin = User(
            username=username,
            password_hash=generate_password_hash(current_app.config['ADMIN_PASSWORD']),
            role=ROLE_ADMIN,
            name=current_app.config['ADMIN_NAME'],
        )
        db.session.add(admin)
        db.session.commit()
        logger.info("Seeded admin account %s", username)


# ==================== Design requests ====================

@guarded
def list_requests():
    """All requests, newest-created first."""
    return DesignRequest.query.order_by(DesignRequest.created_at.desc()).all()


@guarded
def get_request(request_id):
    return DesignRequest.query.filter_by(id=request_id).first()


@guarded
def insert_request(request):
    db.session.add(request)
    db.session.commit()
    return request


@guarded
def update_request_content(request_id, fields):
    """
    Overwrite descriptive fields of a pending request.

    Returns:
        False if the id is unknown or the request is no longer pending.
    """
    values = {k: v for k, v in fields.items() if k in CONTENT_FIELDS}
    if not values:
        request = get_request(request_id)
        return request is not None and request.status == STATUS_PENDING
    updated = DesignRequest.query.filter_by(id=request_id, status=STATUS_PENDING).update(values)
    db.session.commit()
    return updated == 1


@guarded
def delete_request(request_id):
    deleted = DesignRequest.query.filter_by(id=request_id).delete()
    db.session.commit()
    return deleted == 1


@guarded
def set_in_progress(request_id, designer_name):
    """
    Claim a pending request.

    The status check is part of the UPDATE predicate, so of several concurrent
    claims at most one changes a row.

    Returns:
        True if this call claimed the request, False otherwise.
    """
    updated = DesignRequest.query.filter_by(id=request_id, status=STATUS_PENDING).update(
        {'status': STATUS_IN_PROGRESS, 'designer_name': designer_name}
    )
    db.session.commit()
    return updated == 1


@guarded
def set_done(request_id, designer_name, result_file_name, result_file_url):
    """Attach the result to a request still held by designer_name."""
    updated = DesignRequest.query.filter_by(
        id=request_id, status=STATUS_IN_PROGRESS, designer_name=designer_name
    ).update({
        'status': STATUS_DONE,
        'result_file_name': result_file_name,
        'result_file_url': result_file_url,
    })
    db.session.commit()
    return updated == 1


@guarded
def set_status(request_id, status):
    updated = DesignRequest.query.filter_by(id=request_id).update({'status': status})
    db.session.commit()
    return updated == 1


# ==================== Users ====================

@guarded
def find_user(username, password):
    """Return the user if the credentials match, else None."""
    user = User.query.filter_by(username=username).first()
    if user is None or not check_password_hash(user.password_hash, password):
        return None
    return user


@guarded
def get_user(username):
    return User.query.filter_by(username=username).first()


@guarded
def list_users():
    return User.query.order_by(User.name.asc()).all()


@guarded
def create_user(username, password, role, name):
    user = User(
        username=username,
        password_hash=generate_password_hash(password),
        role=role,
        name=name,
    )
    db.session.add(user)
    db.session.commit()
    return user


@guarded
def delete_user(username):
    deleted = User.query.filter_by(username=username).delete()
    db.session.commit()
    return deleted == 1
