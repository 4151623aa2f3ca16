"""Request lifecycle and authorization engine.

Pending --claim (Designer)--> In Progress --submit_result (assigned Designer)--> Done
Admins may force any status with admin_override_status.

Every operation takes the acting user explicitly as an Actor and resolves the
request through the visibility rule before checking anything else.
"""
import logging
import uuid
from collections import namedtuple
from datetime import datetime

from design_tracker.models import DesignRequest
from design_tracker.models.design_request import (
    STATUS_PENDING, STATUS_IN_PROGRESS, VALID_STATUSES,
    DESIGN_TYPES, CONTENT_FIELDS, REQUIRED_FIELDS, EXTERNAL_LINK_NAME,
)
from design_tracker.models.user import ROLE_ADMIN, ROLE_DESIGNER, ROLE_USER
from design_tracker.services import store
from design_tracker.services.blobs import encode_blob
from design_tracker.services.errors import Forbidden, InvalidState, NotFound, ValidationError

logger = logging.getLogger(__name__)


class Actor(namedtuple('Actor', ['username', 'role', 'name'])):
    """The user performing an operation."""

    __slots__ = ()

    @property
    def display_name(self):
        return self.name or self.username

    @classmethod
    def from_user(cls, user):
        return cls(username=user.username, role=user.role, name=user.name)


# ==================== Visibility ====================

def can_see(actor, request):
    if actor.role == ROLE_USER:
        return request.requestor_username == actor.username
    return actor.role in (ROLE_ADMIN, ROLE_DESIGNER)


def visible_requests(requests, actor):
    return [r for r in requests if can_see(actor, r)]


def list_visible(actor):
    return visible_requests(store.list_requests(), actor)


def get_request(request_id, actor):
    """Fetch a request the actor may see, or raise NotFound."""
    request = store.get_request(request_id)
    if request is None or not can_see(actor, request):
        raise NotFound(f'Request {request_id} not found.')
    return request


# ==================== Content ====================

def clean_text(value, field):
    """Strip a text input; None stays None, anything else is rejected."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{field.replace("_", " ").capitalize()} must be text.')
    return value.strip()


def _resolve_reference(link=None, upload=None, required=False):
    """Turn exactly one of link/upload into the stored reference string."""
    link = clean_text(link, 'link') or ''
    if link and upload is not None:
        raise ValidationError('Provide either a link or a file, not both.')
    if upload is not None:
        return upload.filename, encode_blob(upload.data, upload.filename)
    if link:
        return EXTERNAL_LINK_NAME, link
    if required:
        raise ValidationError('Please enter a link or upload a file.')
    return None, None


def _clean_fields(fields, partial=False):
    unknown = set(fields) - set(CONTENT_FIELDS)
    if unknown:
        raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}.")

    cleaned = {}
    for key, value in fields.items():
        cleaned[key] = clean_text(value, key)

    for key in REQUIRED_FIELDS:
        if (key in cleaned or not partial) and not cleaned.get(key):
            raise ValidationError(f'{key.replace("_", " ").capitalize()} is required.')

    if 'design_type' in cleaned and cleaned['design_type'] not in DESIGN_TYPES:
        raise ValidationError(f"Unknown design type: {cleaned['design_type']}.")
    return cleaned


def create_request(actor, fields, reference_upload=None):
    """
    Submit a new design request.

    Args:
        actor: requesting Actor, role User or Admin
        fields: descriptive fields; ``reference_url`` may hold a link
        reference_upload: optional Upload used instead of a link

    Returns:
        the stored DesignRequest, status Pending
    """
    if actor.role not in (ROLE_USER, ROLE_ADMIN):
        raise Forbidden('Only users and admins can submit requests.')

    fields = dict(fields)
    link = fields.pop('reference_url', None)
    cleaned = _clean_fields(fields)
    _, reference_url = _resolve_reference(link, reference_upload)

    request = DesignRequest(
        id=f'req_{uuid.uuid4().hex}',
        outlet_name=cleaned['outlet_name'],
        design_type=cleaned['design_type'],
        dimensions=cleaned['dimensions'],
        elements=cleaned.get('elements') or '',
        reference_url=reference_url,
        status=STATUS_PENDING,
        requestor_username=actor.username,
        created_at=datetime.utcnow(),
    )
    store.insert_request(request)
    logger.info("Request %s created by %s", request.id, actor.username)
    return request


def edit_content(request_id, actor, fields, reference_upload=None):
    """Change descriptive fields of a pending request."""
    request = get_request(request_id, actor)

    if request.status != STATUS_PENDING:
        raise InvalidState('Only pending requests can be edited.')
    is_owner = actor.role == ROLE_USER and actor.username == request.requestor_username
    if actor.role != ROLE_ADMIN and not is_owner:
        raise Forbidden('You cannot edit this request.')

    fields = dict(fields)
    link = fields.pop('reference_url', None)
    cleaned = _clean_fields(fields, partial=True)
    if link is not None or reference_upload is not None:
        _, cleaned['reference_url'] = _resolve_reference(link, reference_upload)

    if not store.update_request_content(request_id, cleaned):
        if store.get_request(request_id) is None:
            raise NotFound(f'Request {request_id} not found.')
        # Claimed between our read and the update
        raise InvalidState('Only pending requests can be edited.')
    logger.info("Request %s edited by %s", request_id, actor.username)
    return store.get_request(request_id)


def delete_request(request_id, actor):
    get_request(request_id, actor)
    if actor.role != ROLE_ADMIN:
        raise Forbidden('Only admins can delete requests.')
    if not store.delete_request(request_id):
        raise NotFound(f'Request {request_id} not found.')
    logger.info("Request %s deleted by %s", request_id, actor.username)


# ==================== Transitions ====================

def claim(request_id, actor):
    """Take ownership of a pending request as a designer."""
    request = get_request(request_id, actor)

    if actor.role != ROLE_DESIGNER:
        raise Forbidden('Only designers can claim requests.')
    if request.status != STATUS_PENDING:
        raise InvalidState('Request has already been claimed.')

    if not store.set_in_progress(request_id, actor.display_name):
        # Another designer got there between our read and the update
        raise InvalidState('Request has already been claimed.')

    logger.info("Request %s claimed by %s", request_id, actor.display_name)
    return store.get_request(request_id)


def submit_result(request_id, actor, link=None, upload=None):
    """
    Deliver the finished design and close the request.

    Exactly one of ``link`` or ``upload`` must be given. The upload is encoded
    before anything is written, so an oversized or unreadable file leaves the
    request untouched.
    """
    request = get_request(request_id, actor)

    if actor.role != ROLE_DESIGNER:
        raise Forbidden('Only designers can submit results.')
    if request.status != STATUS_IN_PROGRESS:
        raise InvalidState('Only requests in progress can be completed.')
    if request.designer_name != actor.display_name:
        raise Forbidden('This request is assigned to another designer.')

    file_name, file_url = _resolve_reference(link, upload, required=True)

    if not store.set_done(request_id, actor.display_name, file_name, file_url):
        raise InvalidState('Request is no longer in progress.')

    logger.info("Request %s completed by %s", request_id, actor.display_name)
    return store.get_request(request_id)


def admin_override_status(request_id, actor, new_status):
    """Force a status. Designer and result fields are left as they are."""
    get_request(request_id, actor)

    if actor.role != ROLE_ADMIN:
        raise Forbidden('Only admins can change the status directly.')
    if new_status not in VALID_STATUSES:
        raise ValidationError(f'Unknown status: {new_status}.')

    if not store.set_status(request_id, new_status):
        raise NotFound(f'Request {request_id} not found.')

    logger.info("Request %s forced to %s by %s", request_id, new_status, actor.username)
    return store.get_request(request_id)
